"""A time zone database built from a zoneinfo directory tree."""

from __future__ import annotations

import os
import stat
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from zonetime.tzfile import ErrorCode, TzFileError, TzInfo, parse_tzdata

__all__ = ["ZoneInfoDb", "load_zoneinfo"]

_EXCLUDED_NAMES = frozenset({".", "..", "posix", "posixrules", "right", "localtime"})
_MIN_TZFILE_SIZE = 20


def _case_key(identifier: str) -> str:
    return identifier.lower()


def _index_filter(name: str) -> bool:
    """Skip non-tzdata files and the posix/right copies of the database."""
    return name not in _EXCLUDED_NAMES and ".list" not in name and ".tab" not in name


def _read_tzfile(directory: str, timezone: str) -> bytes | None:
    """Return the contents of a plausible TZif file, or None."""
    if not timezone or ".." in timezone:
        return None

    path = os.path.join(directory, timezone)
    try:
        with open(path, "rb") as handle:
            info = os.fstat(handle.fileno())
            if not stat.S_ISREG(info.st_mode) or info.st_size <= _MIN_TZFILE_SIZE:
                return None
            data = handle.read()
    except OSError:
        return None

    if len(data) != info.st_size or data[:4] != b"TZif":
        return None
    return data


@dataclass
class ZoneInfoDb:
    """Zone identifiers mapped to their raw TZif data, looked up case-insensitively."""

    entries: Mapping[str, bytes] = field(default_factory=dict)
    version: str = "0.system"
    _lookup: dict[str, tuple[str, bytes]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.entries = dict(self.entries)
        self._lookup = {
            _case_key(identifier): (identifier, data)
            for identifier, data in self.entries.items()
        }

    def __len__(self) -> int:
        return len(self._lookup)

    def __contains__(self, timezone: object) -> bool:
        return isinstance(timezone, str) and self.is_valid(timezone)

    def identifiers(self) -> list[str]:
        """All zone identifiers, sorted case-insensitively."""
        return sorted((ident for ident, _ in self._lookup.values()), key=_case_key)

    def is_valid(self, timezone: str) -> bool:
        """True if ``timezone`` names a zone in this database."""
        return _case_key(timezone) in self._lookup

    def parse_tzfile(self, timezone: str) -> TzInfo:
        """Parse the zone ``timezone``; raise TzFileError if missing or corrupt."""
        found = self._lookup.get(_case_key(timezone))
        if found is None:
            raise TzFileError(ErrorCode.NO_SUCH_TIMEZONE, f"no such timezone: {timezone!r}")
        return parse_tzdata(timezone, found[1])


def _scan(directory: str) -> Iterable[tuple[str, bytes]]:
    stack = [""]
    while stack:
        top = stack.pop()
        dirpath = os.path.join(directory, top) if top else directory
        names = sorted(name for name in os.listdir(dirpath) if _index_filter(name))

        for leaf in reversed(names):
            try:
                info = os.stat(os.path.join(dirpath, leaf))
            except OSError:
                continue

            name = f"{top}/{leaf}" if top else leaf
            if stat.S_ISDIR(info.st_mode):
                stack.append(name)
                continue

            data = _read_tzfile(directory, name)
            if data is not None:
                yield name, data


def load_zoneinfo(directory: str | os.PathLike[str]) -> ZoneInfoDb:
    """Build a database by walking a zoneinfo directory; OSError if it cannot be read."""
    return ZoneInfoDb(dict(_scan(os.fspath(directory))))