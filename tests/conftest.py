import time

import pytest

from compdb_reconcile.database import Command


@pytest.fixture
def now():
    return time.time()


@pytest.fixture
def project(tmp_path):
    """A project directory with a handful of sources and headers on disk."""
    root = tmp_path / "project"
    root.mkdir()
    for name in ("a.c", "a.h", "b.cpp", "c.c", "c.h", "d.cpp", "d.hpp", "old.c", "old.h"):
        (root / name).write_text("")
    return root


@pytest.fixture
def make_command(project, now):
    def make(file, arguments=None, created=None, directory=None):
        if arguments is None:
            arguments = ["cc", "-c", file, "-o", file.rsplit(".", 1)[0] + ".o"]
        return Command(
            arguments=tuple(arguments),
            directory=str(project if directory is None else directory),
            file=file,
            created=now if created is None else created,
        )
    return make
