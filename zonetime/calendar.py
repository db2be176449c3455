"""Proleptic Gregorian calendar arithmetic: weekdays, ISO weeks and day counts."""

from __future__ import annotations

__all__ = [
    "is_leap",
    "day_of_week",
    "iso_day_of_week",
    "day_of_year",
    "days_in_month",
    "isoweek_from_date",
    "isodate_from_date",
    "daynr_from_weeknr",
    "date_from_isodate",
    "valid_time",
    "valid_date",
    "epoch_days",
    "date_from_epoch_days",
]

_M_TABLE_COMMON = (-1, 0, 3, 3, 6, 1, 4, 6, 2, 5, 0, 3, 5)
_M_TABLE_LEAP = (-1, 6, 2, 3, 6, 1, 4, 6, 2, 5, 0, 3, 5)

_D_TABLE_COMMON = (0, 0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)
_D_TABLE_LEAP = (0, 0, 31, 60, 91, 121, 152, 182, 213, 244, 274, 305, 335)
_ML_TABLE_COMMON = (0, 31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
_ML_TABLE_LEAP = (0, 31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating towards zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def is_leap(y: int) -> bool:
    """Return True if ``y`` is a Gregorian leap year."""
    return y % 4 == 0 and (y % 100 != 0 or y % 400 == 0)


def _century_value(j: int) -> int:
    return 6 - (j % 4) * 2


def _day_of_week_ex(y: int, m: int, d: int, iso: bool) -> int:
    c1 = _century_value(_tdiv(y, 100))
    y1 = y % 100
    m1 = _M_TABLE_LEAP[m] if is_leap(y) else _M_TABLE_COMMON[m]
    dow = (c1 + y1 + m1 + y1 // 4 + d) % 7
    if iso and dow == 0:
        dow = 7
    return dow


def day_of_week(y: int, m: int, d: int) -> int:
    """Day of the week, 0 (Sunday) to 6 (Saturday)."""
    return _day_of_week_ex(y, m, d, False)


def iso_day_of_week(y: int, m: int, d: int) -> int:
    """ISO day of the week, 1 (Monday) to 7 (Sunday)."""
    return _day_of_week_ex(y, m, d, True)


def day_of_year(y: int, m: int, d: int) -> int:
    """Zero-based day of the year."""
    table = _D_TABLE_LEAP if is_leap(y) else _D_TABLE_COMMON
    return table[m] + d - 1


def days_in_month(y: int, m: int) -> int:
    """Number of days in month ``m`` of year ``y``."""
    table = _ML_TABLE_LEAP if is_leap(y) else _ML_TABLE_COMMON
    return table[m]


def isoweek_from_date(y: int, m: int, d: int) -> tuple[int, int]:
    """Return ``(iso_year, iso_week)`` for the given date."""
    y_leap = is_leap(y)
    prev_y_leap = is_leap(y - 1)
    doy = day_of_year(y, m, d) + 1
    if y_leap and m > 2:
        doy += 1
    jan1weekday = day_of_week(y, 1, 1) or 7
    weekday = day_of_week(y, m, d) or 7

    iw = 0
    if doy <= (8 - jan1weekday) and jan1weekday > 4:
        iy = y - 1
        if jan1weekday == 5 or (jan1weekday == 6 and prev_y_leap):
            iw = 53
        else:
            iw = 52
    else:
        iy = y

    if iy == y:
        days = 366 if y_leap else 365
        if days - (doy - int(y_leap)) < 4 - weekday:
            return y + 1, 1

    if iy == y:
        j = doy + (7 - weekday) + (jan1weekday - 1)
        iw = j // 7
        if jan1weekday > 4:
            iw -= 1

    return iy, iw


def isodate_from_date(y: int, m: int, d: int) -> tuple[int, int, int]:
    """Return ``(iso_year, iso_week, iso_day)`` for the given date."""
    iy, iw = isoweek_from_date(y, m, d)
    return iy, iw, _day_of_week_ex(y, m, d, True)


def daynr_from_weeknr(iy: int, iw: int, id: int) -> int:
    """Day number relative to 1 January of ``iy`` for an ISO week date."""
    dow = day_of_week(iy, 1, 1)
    day = 0 - (dow - 7 if dow > 4 else dow)
    return day + (iw - 1) * 7 + id


def date_from_isodate(iy: int, iw: int, id: int) -> tuple[int, int, int]:
    """Return ``(year, month, day)`` for an ISO week date."""
    daynr = daynr_from_weeknr(iy, iw, id) + 1
    y = iy
    leap = is_leap(y)

    while daynr <= 0:
        y -= 1
        leap = is_leap(y)
        daynr += 366 if leap else 365

    while daynr > (366 if leap else 365):
        daynr -= 366 if leap else 365
        y += 1
        leap = is_leap(y)

    table = _ML_TABLE_LEAP if leap else _ML_TABLE_COMMON
    m = 1
    while daynr > table[m]:
        daynr -= table[m]
        m += 1

    return y, m, daynr


def valid_time(h: int, i: int, s: int) -> bool:
    """True if hour, minute and second are in range."""
    return 0 <= h <= 23 and 0 <= i <= 59 and 0 <= s <= 59


def valid_date(y: int, m: int, d: int) -> bool:
    """True if the date exists in the proleptic Gregorian calendar."""
    if m < 1 or m > 12:
        return False
    return 1 <= d <= days_in_month(y, m)


def epoch_days(y: int, m: int, d: int) -> int:
    """Days since 1970-01-01 for the given date."""
    y -= 1 if m <= 2 else 0
    era = y // 400
    yoe = y - era * 400
    mp = m - 3 if m > 2 else m + 9
    doy = (153 * mp + 2) // 5 + d - 1
    doe = yoe * 365 + yoe // 4 - yoe // 100 + doy
    return era * 146097 + doe - 719468


def date_from_epoch_days(days: int) -> tuple[int, int, int]:
    """Return ``(year, month, day)`` for a count of days since 1970-01-01."""
    z = days + 719468
    era = z // 146097
    doe = z - era * 146097
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365
    y = yoe + era * 400
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    d = doy - (153 * mp + 2) // 5 + 1
    m = mp + 3 if mp < 10 else mp - 9
    return (y + 1 if m <= 2 else y), m, d