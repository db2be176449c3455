"""Reading of TZif (and PHP-flavoured TZif) time zone data and offset lookup."""

from __future__ import annotations

import bisect
import enum
import struct
from dataclasses import dataclass, field
from typing import NamedTuple

from zonetime.posix import PosixParseError, PosixTz, parse_posix_str

__all__ = [
    "ErrorCode",
    "TzFileError",
    "TimeType",
    "LeapSecond",
    "Location",
    "TimeOffset",
    "TzInfo",
    "parse_tzdata",
    "INT64_MIN",
]

INT64_MIN = -(2**63)

_PREAMBLE_SIZE = 20
_HEADER = struct.Struct(">6L")
_TRANSITION = struct.Struct(">q")
_TYPE = struct.Struct(">lBB")
_LEAP = struct.Struct(">qi")
_LOCATION = struct.Struct(">3L")


class ErrorCode(enum.IntEnum):
    """Reasons why time zone data could not be read, or was read with a caveat."""

    NO_ERROR = 0x00
    CANNOT_ALLOCATE = 0x01
    CORRUPT_TRANSITIONS_DONT_INCREASE = 0x02
    CORRUPT_NO_64BIT_PREAMBLE = 0x03
    CORRUPT_NO_ABBREVIATION = 0x04
    UNSUPPORTED_VERSION = 0x05
    NO_SUCH_TIMEZONE = 0x06
    SLIM_FILE = 0x07
    CORRUPT_POSIX_STRING = 0x08
    EMPTY_POSIX_STRING = 0x09
    TRUNCATED_DATA = 0x10


class TzFileError(Exception):
    """Raised when time zone data cannot be parsed."""

    def __init__(self, code: ErrorCode, message: str | None = None) -> None:
        super().__init__(message or code.name.lower().replace("_", " "))
        self.code = code


@dataclass
class TimeType:
    """A local time type: UTC offset, DST flag and abbreviation index."""

    offset: int
    isdst: bool
    abbr_idx: int
    isstdcnt: int = 0
    isgmtcnt: int = 0


@dataclass(frozen=True)
class LeapSecond:
    """A leap second record: the moment it applies and the total correction."""

    trans: int
    offset: int


@dataclass
class Location:
    """Geographical information attached to a zone."""

    country_code: str = "??"
    latitude: float = 0.0
    longitude: float = 0.0
    comments: str = "?"


@dataclass(frozen=True)
class TimeOffset:
    """The offset information in effect at one moment."""

    offset: int
    leap_secs: int
    is_dst: bool
    transition_time: int
    abbr: str


class _Counts(NamedTuple):
    ttisgmtcnt: int = 0
    ttisstdcnt: int = 0
    leapcnt: int = 0
    timecnt: int = 0
    typecnt: int = 0
    charcnt: int = 0


@dataclass
class TzInfo:
    """A parsed time zone."""

    name: str
    bc: bool = False
    location: Location = field(default_factory=Location)
    counts32: _Counts = field(default_factory=_Counts)
    counts64: _Counts = field(default_factory=_Counts)
    trans: list[int] = field(default_factory=list)
    trans_idx: list[int] = field(default_factory=list)
    types: list[TimeType] = field(default_factory=list)
    timezone_abbr: str = ""
    leap_times: list[LeapSecond] = field(default_factory=list)
    posix_string: str | None = None
    posix_info: PosixTz | None = None
    error_code: ErrorCode = ErrorCode.NO_ERROR

    def abbreviation(self, time_type: TimeType) -> str:
        """The abbreviation belonging to ``time_type``."""
        return self._abbr_at(time_type.abbr_idx)

    def _abbr_at(self, index: int) -> str:
        end = self.timezone_abbr.find("\0", index)
        return self.timezone_abbr[index:] if end == -1 else self.timezone_abbr[index:end]

    def is_slim(self) -> bool:
        """True if the legacy 32-bit block is the minimal one of a slim file."""
        return self.counts32 == _Counts(0, 0, 0, 0, 1, 1)

    def fetch_timezone_offset(self, ts: int) -> tuple[TimeType, int] | None:
        """Return ``(time_type, transition_time)`` in effect at ``ts``, or None."""
        if not self.trans:
            if self.posix_info is not None:
                found = self.posix_info.fetch(ts)
                if found is None:
                    return None
                return self.types[found[0]], INT64_MIN
            if len(self.types) == 1:
                return self.types[0], INT64_MIN
            return None

        if ts < self.trans[0]:
            return self.types[0], INT64_MIN

        if ts >= self.trans[-1]:
            if self.posix_info is not None:
                found = self.posix_info.fetch(ts)
                if found is None:
                    return None
                index, transition_time = found
                if transition_time is None:
                    transition_time = self.trans[-1]
                return self.types[index], transition_time
            return self.types[self.trans_idx[-1]], self.trans[-1]

        left = bisect.bisect_right(self.trans, ts) - 1
        return self.types[self.trans_idx[left]], self.trans[left]

    def _leap_time_offset(self, ts: int) -> LeapSecond | None:
        # The first record is never considered, as in the reference algorithm.
        for leap in reversed(self.leap_times[1:]):
            if ts > leap.trans:
                return leap
        return None

    def get_time_zone_info(self, ts: int) -> TimeOffset:
        """Offset, DST flag, abbreviation and leap seconds in effect at ``ts``."""
        found = self.fetch_timezone_offset(ts)
        if found is not None:
            time_type, transition_time = found
            offset = time_type.offset
            abbr = self.abbreviation(time_type)
            is_dst = bool(time_type.isdst)
        else:
            offset = 0
            abbr = self._abbr_at(0) if self.timezone_abbr else "GMT"
            is_dst = False
            transition_time = 0

        leap = self._leap_time_offset(ts)
        leap_secs = -leap.offset if leap is not None else 0

        return TimeOffset(
            offset=offset,
            leap_secs=leap_secs,
            is_dst=is_dst,
            transition_time=transition_time,
            abbr=abbr,
        )

    def timestamp_is_in_dst(self, ts: int) -> bool | None:
        """Whether DST is in effect at ``ts``; None if no time type applies."""
        found = self.fetch_timezone_offset(ts)
        if found is None:
            return None
        return bool(found[0].isdst)

    def _find_type(self, offset: int, isdst: bool, abbr: str) -> int | None:
        for index, time_type in enumerate(self.types):
            if (
                time_type.offset == offset
                and bool(time_type.isdst) == isdst
                and self.abbreviation(time_type) == abbr
            ):
                return index
        return None

    def _add_type(self, offset: int, isdst: bool, abbr: str) -> int:
        abbr_idx = len(self.timezone_abbr)
        self.timezone_abbr += abbr + "\0"
        self.types.append(TimeType(offset=offset, isdst=isdst, abbr_idx=abbr_idx))
        self.counts64 = self.counts64._replace(
            typecnt=len(self.types), charcnt=len(self.timezone_abbr)
        )
        return len(self.types) - 1

    def _integrate_posix_string(self) -> None:
        assert self.posix_string is not None
        try:
            info = parse_posix_str(self.posix_string)
        except PosixParseError as exc:
            raise TzFileError(ErrorCode.CORRUPT_POSIX_STRING, str(exc)) from exc
        self.posix_info = info

        std_index = self._find_type(info.std_offset, False, info.std)
        if std_index is None:
            info.type_index_std_type = self._add_type(info.std_offset, False, info.std)
            return
        info.type_index_std_type = std_index

        if info.dst is None:
            return

        dst_index = self._find_type(info.dst_offset, True, info.dst)
        if dst_index is None:
            dst_index = self._add_type(info.dst_offset, True, info.dst)
        info.type_index_dst_type = dst_index


class _Cursor:
    """Sequential reader over a byte string."""

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.pos = 0

    def take(self, size: int, code: ErrorCode = ErrorCode.TRUNCATED_DATA) -> bytes:
        if self.pos + size > len(self.data):
            raise TzFileError(code, f"data ends before offset {self.pos + size}")
        chunk = self.data[self.pos : self.pos + size]
        self.pos += size
        return chunk

    def skip(self, size: int) -> None:
        self.take(size)

    def unpack(self, fmt: struct.Struct) -> tuple:
        return fmt.unpack(self.take(fmt.size))

    def peek(self, size: int) -> bytes:
        return self.data[self.pos : self.pos + size]


def _read_preamble(cursor: _Cursor, tz: TzInfo) -> tuple[int, bool]:
    """Return ``(version, is_php)``; raise for unknown markers."""
    head = cursor.peek(_PREAMBLE_SIZE)
    if len(head) < _PREAMBLE_SIZE:
        raise TzFileError(ErrorCode.UNSUPPORTED_VERSION, "data too short for a preamble")

    if head[:3] == b"PHP":
        version = head[3] - ord("0")
        tz.bc = head[4] == 1
        tz.location.country_code = head[5:7].decode("latin-1")
        cursor.skip(_PREAMBLE_SIZE)
        return version, True

    if head[:4] == b"TZif":
        versions = {0: 0, ord("2"): 2, ord("3"): 3, ord("4"): 4}
        if head[4] not in versions:
            raise TzFileError(ErrorCode.UNSUPPORTED_VERSION)
        tz.bc = False
        tz.location.country_code = "??"
        cursor.skip(_PREAMBLE_SIZE)
        return versions[head[4]], False

    raise TzFileError(ErrorCode.UNSUPPORTED_VERSION, "unknown file marker")


def _skip_32bit_data(cursor: _Cursor, counts: _Counts) -> None:
    cursor.skip(counts.timecnt * 5)
    cursor.skip(counts.typecnt * 6)
    cursor.skip(counts.charcnt)
    cursor.skip(counts.leapcnt * 8)
    cursor.skip(counts.ttisstdcnt)
    cursor.skip(counts.ttisgmtcnt)


def _read_64bit_transitions(cursor: _Cursor, tz: TzInfo) -> None:
    count = tz.counts64.timecnt
    trans = [cursor.unpack(_TRANSITION)[0] for _ in range(count)]
    for previous, current in zip(trans, trans[1:]):
        if not current > previous:
            raise TzFileError(ErrorCode.CORRUPT_TRANSITIONS_DONT_INCREASE)
    tz.trans = trans
    tz.trans_idx = list(cursor.take(count))


def _read_64bit_types(cursor: _Cursor, tz: TzInfo) -> None:
    counts = tz.counts64
    tz.types = [
        TimeType(offset=offset, isdst=bool(isdst), abbr_idx=abbr_idx)
        for offset, isdst, abbr_idx in (cursor.unpack(_TYPE) for _ in range(counts.typecnt))
    ]
    tz.timezone_abbr = cursor.take(counts.charcnt, ErrorCode.CORRUPT_NO_ABBREVIATION).decode(
        "latin-1"
    )
    tz.leap_times = [
        LeapSecond(trans, offset)
        for trans, offset in (cursor.unpack(_LEAP) for _ in range(counts.leapcnt))
    ]
    for time_type, flag in zip(tz.types, cursor.take(counts.ttisstdcnt)):
        time_type.isstdcnt = flag
    for time_type, flag in zip(tz.types, cursor.take(counts.ttisgmtcnt)):
        time_type.isgmtcnt = flag


def _read_posix_string(cursor: _Cursor) -> str:
    cursor.skip(1)
    end = cursor.data.find(b"\n", cursor.pos)
    if end == -1:
        raise TzFileError(ErrorCode.TRUNCATED_DATA, "unterminated POSIX string")
    text = cursor.take(end - cursor.pos).decode("latin-1")
    cursor.skip(1)
    return text


def _read_location(cursor: _Cursor, tz: TzInfo) -> None:
    latitude, longitude, comments_len = cursor.unpack(_LOCATION)
    tz.location.latitude = latitude / 100000 - 90
    tz.location.longitude = longitude / 100000 - 180
    tz.location.comments = cursor.take(comments_len).decode("utf-8", errors="replace")


def parse_tzdata(name: str, data: bytes) -> TzInfo:
    """Parse the binary data of zone ``name``; raise TzFileError on failure.

    An empty POSIX footer is not fatal: the zone is returned with
    ``error_code`` set to ``ErrorCode.EMPTY_POSIX_STRING``.
    """
    tz = TzInfo(name=name)
    cursor = _Cursor(data)

    version, is_php = _read_preamble(cursor, tz)
    if version < 2 or version > 4:
        raise TzFileError(ErrorCode.UNSUPPORTED_VERSION, f"unsupported version {version}")

    tz.counts32 = _Counts(*cursor.unpack(_HEADER))
    _skip_32bit_data(cursor, tz.counts32)

    if cursor.peek(5) not in (b"TZif2", b"TZif3", b"TZif4"):
        raise TzFileError(ErrorCode.CORRUPT_NO_64BIT_PREAMBLE)
    cursor.skip(_PREAMBLE_SIZE)

    tz.counts64 = _Counts(*cursor.unpack(_HEADER))
    _read_64bit_transitions(cursor, tz)
    _read_64bit_types(cursor, tz)

    tz.posix_string = _read_posix_string(cursor)
    if tz.posix_string == "":
        tz.error_code = ErrorCode.EMPTY_POSIX_STRING
    else:
        tz._integrate_posix_string()

    if is_php:
        _read_location(cursor, tz)
    else:
        tz.location.latitude = 0.0
        tz.location.longitude = 0.0
        tz.location.comments = "?"

    return tz