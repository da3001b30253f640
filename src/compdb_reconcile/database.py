"""Reading and atomically rewriting compile_commands.json."""

import json
import os
import shlex
import time
from dataclasses import dataclass, field

TMP_SUFFIX = ".tmp"


class DatabaseFormatError(ValueError):
    pass


@dataclass(frozen=True)
class Command:
    arguments: tuple
    directory: str
    file: str
    # Never serialized; only lives for the duration of a run.
    created: float = field(default_factory=time.time)

    def to_json(self):
        return {
            "arguments": list(self.arguments),
            "directory": self.directory,
            "file": self.file,
        }


def parse_created(value, now):
    if value is None:
        return now
    if isinstance(value, bool):
        raise DatabaseFormatError(f"invalid created timestamp: {value!r}")
    try:
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, dict):
            secs = value.get("secs_since_epoch")
            nanos = value.get("nanos_since_epoch", 0)
            if isinstance(secs, int) and isinstance(nanos, int) \
                    and not isinstance(secs, bool) and not isinstance(nanos, bool):
                return secs + nanos / 1e9
    except OverflowError as e:
        raise DatabaseFormatError(f"invalid created timestamp: {e}") from e
    raise DatabaseFormatError(f"invalid created timestamp: {value!r}")


def normalize_arguments(entry):
    if "arguments" in entry:
        args = entry["arguments"]
        if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
            raise DatabaseFormatError("'arguments' must be a list of strings")
        return tuple(args)
    if "command" in entry:
        if not isinstance(entry["command"], str):
            raise DatabaseFormatError("'command' must be a string")
        try:
            return tuple(shlex.split(entry["command"]))
        except ValueError as e:
            raise DatabaseFormatError(f"unparsable 'command': {e}") from e
    raise DatabaseFormatError("missing 'arguments'")


def parse_entry(entry, now):
    if not isinstance(entry, dict):
        raise DatabaseFormatError("entry is not an object")
    for key in ("directory", "file"):
        if not isinstance(entry.get(key), str):
            raise DatabaseFormatError(f"'{key}' must be a string")
    return Command(
        arguments=normalize_arguments(entry),
        directory=entry["directory"],
        file=entry["file"],
        created=parse_created(entry.get("created"), now),
    )


def read(path, now=None):
    """Load every command in the database at ``path``.

    Entries without a ``created`` timestamp are stamped with ``now``
    (the current time when not given).
    """
    if now is None:
        now = time.time()
    with open(path, "r", encoding="utf-8") as f:
        try:
            db = json.load(f)
        except ValueError as e:
            # Covers JSONDecodeError and UnicodeDecodeError.
            raise DatabaseFormatError(f"{path}: {e}") from e

    if not isinstance(db, list):
        raise DatabaseFormatError(f"{path}: expected a JSON array of commands")

    commands = []
    for idx, entry in enumerate(db):
        try:
            commands.append(parse_entry(entry, now))
        except DatabaseFormatError as e:
            raise DatabaseFormatError(f"{path}: entry {idx}: {e}") from e
    return commands


def write(path, commands):
    """Replace the database at ``path`` with ``commands``.

    The content goes to a sibling temporary file first and is renamed over
    ``path`` only once it is complete.
    """
    tmp = os.fspath(path) + TMP_SUFFIX
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump([c.to_json() for c in commands], f, indent=2)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise
