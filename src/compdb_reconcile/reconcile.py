"""Prune stale compile commands and infer entries for headers.

Headers never show up in a compilation database because nothing compiles
them directly. Tools that want flags for ``foo.h`` can borrow them from
``foo.c``, so every source entry proposes ``foo.h`` and ``foo.hpp``
siblings, kept only when that header exists and has no entry of its own.
"""

import os
from dataclasses import dataclass, field, replace

RETENTION_SECONDS = 30 * 24 * 3600
SOURCE_SUFFIXES = (".c", ".cpp")
HEADER_SUFFIXES = (".h", ".hpp")


@dataclass
class ReconcileStats:
    loaded: int = 0
    expired: int = 0
    inferred: int = 0
    missing: int = 0
    written: int = 0
    headers: list = field(default_factory=list)


def full_path(command):
    try:
        return os.path.realpath(
            os.path.join(command.directory, command.file), strict=True)
    except OSError:
        return None


def expire(commands, now, retention=RETENTION_SECONDS):
    cutoff = now - retention
    return [c for c in commands if c.created >= cutoff]


def build_index(commands):
    index = set()
    for command in commands:
        path = full_path(command)
        if path is not None:
            index.add(path)
    return index


def swap_suffix(name, suffix):
    for src_suffix in SOURCE_SUFFIXES:
        if name.endswith(src_suffix):
            return name[: -len(src_suffix)] + suffix
    return None


def infer_headers(command):
    """Yield header siblings of ``command``, ``.h`` before ``.hpp``.

    Arguments naming the source file exactly are renamed along with it.
    """
    old = command.file
    for suffix in HEADER_SUFFIXES:
        new = swap_suffix(old, suffix)
        if new is None:
            return
        arguments = tuple(new if arg == old else arg for arg in command.arguments)
        yield replace(command, file=new, arguments=arguments)


def reconcile_with_stats(commands, now, retention=RETENTION_SECONDS):
    stats = ReconcileStats(loaded=len(commands))

    alive = expire(commands, now, retention)
    stats.expired = len(commands) - len(alive)

    index = build_index(alive)
    inferred = []
    for command in alive:
        for header in infer_headers(command):
            path = full_path(header)
            if path is None or path in index:
                continue
            index.add(path)
            inferred.append(header)
            stats.headers.append(path)
    stats.inferred = len(inferred)

    merged = alive + inferred
    result = [c for c in merged if full_path(c) is not None]
    stats.missing = len(merged) - len(result)
    stats.written = len(result)
    return result, stats


def reconcile(commands, now, retention=RETENTION_SECONDS):
    return reconcile_with_stats(commands, now, retention)[0]
