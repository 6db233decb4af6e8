"""Reading the client's lockfile with its port and secret."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

_EXPECTED_FIELDS = 5
_CLIENT_NAME, _PROCESS, _PORT, _SECRET, _PROTOCOL = range(_EXPECTED_FIELDS)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


@dataclass(frozen=True)
class LockFile:
    """The colon-separated fields of a lockfile."""

    values: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return len(self.values) == _EXPECTED_FIELDS

    @property
    def port(self) -> int:
        if not self.is_valid:
            return 0
        return _atoi(self.values[_PORT]) & 0xFFFF

    @property
    def secret(self) -> str:
        return self.values[_SECRET] if self.is_valid else ""


def parse_lockfile(content: str) -> LockFile:
    """Split lockfile content into its fields; content ends at its first NUL."""
    text = content.split("\0", 1)[0]
    return LockFile(tuple(text.split(":")))


def read_lockfile(directory: str | PathLike[str]) -> LockFile:
    """Read ``lockfile`` from a client directory; an unreadable file gives an invalid LockFile."""
    try:
        data = (Path(directory) / "lockfile").read_bytes()
    except OSError:
        return LockFile()
    return parse_lockfile(data.decode("utf-8", errors="replace"))