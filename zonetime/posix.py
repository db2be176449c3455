"""Parsing and evaluation of POSIX TZ rule strings such as ``EST5EDT,M3.2.0,M11.1.0``."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from zonetime.calendar import date_from_epoch_days, is_leap

__all__ = [
    "PosixParseError",
    "TransType",
    "TransitionSpec",
    "PosixTz",
    "parse_posix_str",
    "ts_at_start_of_year",
]

SECS_PER_DAY = 86400
SECS_PER_HOUR = 3600
DAYS_PER_WEEK = 7
DAYS_PER_YEAR = 365

_MONTH_LENGTHS = (
    (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31),
    (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31),
)


def _tdiv(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _tmod(a: int, b: int) -> int:
    return a - b * _tdiv(a, b)


class PosixParseError(ValueError):
    """Raised when a POSIX TZ string cannot be parsed."""


class TransType(enum.Enum):
    """The three ways a POSIX string can name a transition day."""

    JULIAN_NO_FEB29 = "J"
    JULIAN_FEB29 = "n"
    MWD = "M"


@dataclass
class TransitionSpec:
    """One ``start[/time]`` or ``end[/time]`` rule of a POSIX string."""

    type: TransType = TransType.JULIAN_FEB29
    days: int = 0
    month: int = 0
    week: int = 0
    dow: int = 0
    hour: int = 2 * SECS_PER_HOUR

    def offset_in_year(self, year: int) -> int:
        """Seconds from the start of ``year`` to the transition day (time excluded)."""
        leap = int(is_leap(year))

        if self.type is TransType.JULIAN_NO_FEB29:
            value = self.days - 1
            if leap and self.days >= 60:
                value += 1
            return value * SECS_PER_DAY

        if self.type is TransType.JULIAN_FEB29:
            return self.days * SECS_PER_DAY

        # Zeller's congruence for the weekday of the first of the month.
        m1 = (self.month + 9) % 12 + 1
        yy0 = year - 1 if self.month <= 2 else year
        yy1 = _tdiv(yy0, 100)
        yy2 = _tmod(yy0, 100)
        dow = _tmod(
            (26 * m1 - 2) // 10 + 1 + yy2 + _tdiv(yy2, 4) + _tdiv(yy1, 4) - 2 * yy1, 7
        )
        if dow < 0:
            dow += DAYS_PER_WEEK

        month_lengths = _MONTH_LENGTHS[leap]
        d = self.dow - dow
        if d < 0:
            d += DAYS_PER_WEEK
        for _ in range(1, self.week):
            if d + DAYS_PER_WEEK >= month_lengths[self.month - 1]:
                break
            d += DAYS_PER_WEEK

        return (d + sum(month_lengths[: self.month - 1])) * SECS_PER_DAY


@dataclass
class PosixTz:
    """A parsed POSIX TZ string, with indices into a zone's list of time types."""

    std: str
    std_offset: int
    dst: str | None = None
    dst_offset: int = 0
    dst_begin: TransitionSpec | None = None
    dst_end: TransitionSpec | None = None
    type_index_std_type: int = 0
    type_index_dst_type: int = 0

    def transitions_for_year(self, year: int) -> list[tuple[int, int]]:
        """The two ``(timestamp, type_index)`` transitions of ``year``, in time order."""
        if self.dst_begin is None or self.dst_end is None:
            raise ValueError("zone has no daylight saving transition rules")

        year_begin_ts = ts_at_start_of_year(year)
        trans_begin = (
            year_begin_ts
            + self.dst_begin.offset_in_year(year)
            + self.dst_begin.hour
            - self.std_offset
        )
        trans_end = (
            year_begin_ts
            + self.dst_end.offset_in_year(year)
            + self.dst_end.hour
            - self.dst_offset
        )

        begin = (trans_begin, self.type_index_dst_type)
        end = (trans_end, self.type_index_std_type)
        return [begin, end] if trans_begin < trans_end else [end, begin]

    def fetch(self, ts: int) -> tuple[int, int | None] | None:
        """Return ``(type_index, transition_time)`` in effect at ``ts``.

        ``transition_time`` is None when the string has no DST rules, as the
        standard type then applies all year. Returns None if ``ts`` falls
        outside the computed transitions.
        """
        if self.dst_end is None:
            return self.type_index_std_type, None

        year = date_from_epoch_days(ts // SECS_PER_DAY)[0]
        transitions = [
            *self.transitions_for_year(year - 1),
            *self.transitions_for_year(year),
            *self.transitions_for_year(year + 1),
        ]
        for (prev_time, prev_type), (time, _) in zip(transitions, transitions[1:]):
            if ts < time:
                return prev_type, prev_time
        return None


class _Reader:
    """Cursor over a POSIX TZ string."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    @property
    def current(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def expect(self, char: str) -> None:
        if self.current != char:
            raise PosixParseError(
                f"expected {char!r} at position {self.pos} in {self.text!r}"
            )
        self.pos += 1

    def description(self) -> str:
        if self.current == "<":
            self.pos += 1
            begin = self.pos
            end = self.text.find(">", begin)
            if end == -1:
                raise PosixParseError(f"unterminated '<' abbreviation in {self.text!r}")
            self.pos = end + 1
            if end == begin:
                raise PosixParseError(f"empty abbreviation in {self.text!r}")
            return self.text[begin:end]

        begin = self.pos
        while self.current and self.current.isascii() and self.current.isalpha():
            self.pos += 1
        if self.pos == begin:
            raise PosixParseError(f"missing abbreviation at position {begin} in {self.text!r}")
        return self.text[begin:self.pos]

    def sign(self) -> int:
        if self.current == "+":
            self.pos += 1
        elif self.current == "-":
            self.pos += 1
            return -1
        return 1

    def number(self) -> int:
        begin = self.pos
        while self.current and "0" <= self.current <= "9":
            self.pos += 1
        if self.pos == begin:
            raise PosixParseError(f"expected a number at position {begin} in {self.text!r}")
        return int(self.text[begin:self.pos])

    def offset(self) -> int:
        """Read ``[+-]hh[:mm[:ss]]``; the result is negated as POSIX counts westwards."""
        bias = self.sign()
        hours = self.number()
        minutes = seconds = 0
        if self.current == ":":
            self.pos += 1
            minutes = self.number()
        if self.current == ":":
            self.pos += 1
            seconds = self.number()
        return -1 * bias * (hours * 3600 + minutes * 60 + seconds)

    def transition_spec(self) -> TransitionSpec:
        spec = TransitionSpec()
        if self.current == "M":
            self.pos += 1
            spec.type = TransType.MWD
            spec.month = self.number()
            self.expect(".")
            spec.week = self.number()
            self.expect(".")
            spec.dow = self.number()
        else:
            if self.current == "J":
                spec.type = TransType.JULIAN_NO_FEB29
                self.pos += 1
            spec.days = self.number()

        if self.current == "/":
            self.pos += 1
            spec.hour = -self.offset()
        return spec


def parse_posix_str(posix: str) -> PosixTz:
    """Parse a POSIX TZ string, raising PosixParseError if it is malformed."""
    reader = _Reader(posix)

    std = reader.description()
    std_offset = reader.offset()
    result = PosixTz(std=std, std_offset=std_offset)
    if reader.at_end:
        return result

    result.dst_offset = std_offset + SECS_PER_HOUR
    result.dst = reader.description()

    if reader.current not in (",", ""):
        result.dst_offset = reader.offset()

    reader.expect(",")
    result.dst_begin = reader.transition_spec()
    reader.expect(",")
    result.dst_end = reader.transition_spec()

    if not reader.at_end:
        raise PosixParseError(f"trailing data at position {reader.pos} in {posix!r}")
    return result


def _count_leap_years(y: int) -> int:
    y -= 1
    return _tdiv(y, 4) - _tdiv(y, 100) + _tdiv(y, 400)


def ts_at_start_of_year(year: int) -> int:
    """Unix timestamp of 1 January 00:00 UTC of ``year``."""
    return SECS_PER_DAY * (
        (year - 1970) * DAYS_PER_YEAR + _count_leap_years(year) - _count_leap_years(1970)
    )