"""
Append-only student log.

Every admitted student is written as one line ``usn|name|email|skills``
in UTF-8.  The file is never rewritten: on startup it is replayed in
file order to rebuild the in-memory store.

Field values are escaped so that a ``|`` or a line break inside a name
or a skills list cannot split a record: backslash, ``|``, CR and LF are
written as ``\\\\``, ``\\|``, ``\\r`` and ``\\n``.  Logs written before
escaping was introduced read back unchanged unless a value contains a
backslash.
"""

from __future__ import annotations

import logging
import os
from typing import Iterator, List, Optional

from pace_registry_api.app.core.errors import PersistenceError
from pace_registry_api.app.schemas.student import StudentRecord

logger = logging.getLogger(__name__)

DELIMITER = "|"
FIELD_COUNT = 4

_ESCAPES = {"\\": "\\\\", "|": "\\|", "\n": "\\n", "\r": "\\r"}
_UNESCAPES = {"\\": "\\", "|": "|", "n": "\n", "r": "\r"}


def escape_field(value: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in value)


def encode_record(record: StudentRecord) -> str:
    """Serialize a record as a single log line without the newline."""
    return DELIMITER.join(
        escape_field(value) for value in (record.usn, record.name, record.email, record.skills)
    )


def split_line(line: str) -> List[str]:
    """Split a log line on unescaped delimiters and unescape each field.

    An unknown escape sequence or a trailing lone backslash is kept
    literally.
    """
    fields: List[str] = []
    current: List[str] = []
    chars = iter(line)
    for ch in chars:
        if ch == "\\":
            nxt = next(chars, None)
            if nxt is None:
                current.append(ch)
            elif nxt in _UNESCAPES:
                current.append(_UNESCAPES[nxt])
            else:
                current.append(ch)
                current.append(nxt)
        elif ch == DELIMITER:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
    fields.append("".join(current))
    return fields


def decode_record(line: str) -> Optional[StudentRecord]:
    """Parse one log line; return ``None`` if it is malformed."""
    fields = split_line(line)
    if len(fields) != FIELD_COUNT:
        return None
    usn, name, email, skills = fields
    return StudentRecord(usn=usn, name=name, email=email, skills=skills)


class StudentLog:
    """Durable, append-only record of every admitted student.

    Parameters
    ----------
    path : str
        Location of the log file.  A missing file is an empty log; it
        is created by the first append.
    fsync : bool
        Force each append to stable storage before returning.
    """

    def __init__(self, path: str, fsync: bool = True) -> None:
        self.path = path
        self.fsync = fsync
        # Number of malformed lines seen by the last replay.
        self.skipped = 0

    def append(self, record: StudentRecord) -> None:
        """Append one record and make it durable.

        Raises ``PersistenceError`` if the record cannot be encoded or
        the line could not be written.  A partially written line is
        truncated away.  If the file does not end with a newline (a torn
        tail left by a crash or a failed truncate) the new line starts on
        a fresh line, so the torn fragment is skipped on replay instead
        of swallowing this record.
        """
        try:
            data = (encode_record(record) + "\n").encode("utf-8")
        except UnicodeEncodeError as exc:
            logger.error("Cannot encode student %r for %s: %s", record.usn, self.path, exc)
            raise PersistenceError("Could not save the registration: text is not valid UTF-8") from exc
        try:
            with open(self.path, "a+b", buffering=0) as f:
                offset = f.seek(0, os.SEEK_END)
                if offset and not self._ends_with_newline(f, offset):
                    logger.warning("%s does not end with a newline; starting a new line", self.path)
                    data = b"\n" + data
                try:
                    view = memoryview(data)
                    while view:
                        written = f.write(view)
                        view = view[written:]
                    if self.fsync:
                        os.fsync(f.fileno())
                except OSError:
                    self._rollback(f, offset)
                    raise
        except OSError as exc:
            logger.error("Error writing to %s: %s", self.path, exc)
            raise PersistenceError(f"Could not save the registration: {exc.strerror or exc}") from exc

    @staticmethod
    def _ends_with_newline(f, offset: int) -> bool:
        f.seek(offset - 1)
        return f.read(1) == b"\n"

    def _rollback(self, f, offset: int) -> None:
        try:
            f.truncate(offset)
        except OSError as exc:
            logger.error("Could not truncate %s back to %d bytes: %s", self.path, offset, exc)

    def replay(self) -> Iterator[StudentRecord]:
        """Yield the logged records in file order.

        Blank lines are ignored and lines that do not hold exactly four
        fields are skipped.  Replaying never writes to the log.
        """
        self.skipped = 0
        if not os.path.exists(self.path):
            return
        with open(self.path, "r", encoding="utf-8", errors="replace", newline="\n") as f:
            for lineno, line in enumerate(f, start=1):
                line = line.rstrip("\r\n")
                if not line.strip():
                    continue
                record = decode_record(line)
                if record is None:
                    self.skipped += 1
                    logger.warning("Skipping malformed line %d in %s", lineno, self.path)
                    continue
                yield record
