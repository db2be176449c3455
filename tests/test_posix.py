import pytest

from zonetime import calendar
from zonetime.posix import (
    PosixParseError,
    PosixTz,
    TransitionSpec,
    TransType,
    parse_posix_str,
    ts_at_start_of_year,
)


def new_york():
    tz = parse_posix_str("EST5EDT,M3.2.0,M11.1.0")
    tz.type_index_std_type = 0
    tz.type_index_dst_type = 1
    return tz


def test_parse_new_york():
    tz = parse_posix_str("EST5EDT,M3.2.0,M11.1.0")
    assert tz.std == "EST"
    assert tz.std_offset == -18000
    assert tz.dst == "EDT"
    assert tz.dst_offset == -14400
    assert tz.dst_begin == TransitionSpec(type=TransType.MWD, month=3, week=2, dow=0, hour=7200)
    assert tz.dst_end == TransitionSpec(type=TransType.MWD, month=11, week=1, dow=0, hour=7200)


def test_parse_std_only():
    tz = parse_posix_str("UTC0")
    assert tz.std == "UTC"
    assert tz.std_offset == 0
    assert tz.dst is None
    assert tz.dst_end is None


def test_parse_samoa():
    tz = parse_posix_str("SST11")
    assert tz.std == "SST"
    assert tz.std_offset == -11 * 3600


def test_parse_numeric_abbreviation():
    tz = parse_posix_str("<-03>3")
    assert tz.std == "-03"
    assert tz.std_offset == -3 * 3600


def test_parse_explicit_dst_offset_and_times():
    tz = parse_posix_str("AAA-1BBB-2:30,J60/1:30,100/-1")
    assert tz.std_offset == 3600
    assert tz.dst_offset == 2 * 3600 + 30 * 60
    assert tz.dst_begin.type is TransType.JULIAN_NO_FEB29
    assert tz.dst_begin.days == 60
    assert tz.dst_begin.hour == 3600 + 30 * 60
    assert tz.dst_end.type is TransType.JULIAN_FEB29
    assert tz.dst_end.days == 100
    assert tz.dst_end.hour == -3600


@pytest.mark.parametrize(
    "text",
    [
        "",
        "EST",
        "5",
        "<>5",
        "<-03",
        "EST5EDT",
        "EST5EDT4",
        "EST5EDT,M3.2.0",
        "EST5EDT,M3.2.0,M11.1.0x",
        "EST5EDT,M3.2,M11.1.0",
        "EST5EDT,M3.2.0,J",
        "EST5EDT,M3.2.0,M11.1.0/",
        "EST5:",
    ],
)
def test_parse_errors(text):
    with pytest.raises(PosixParseError):
        parse_posix_str(text)


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_posix_str("EST5EDT,")


def test_ts_at_start_of_year_epoch():
    assert ts_at_start_of_year(1970) == 0


@pytest.mark.parametrize("year", [1, 1600, 1900, 1969, 2000, 2010, 2100, 3000])
def test_ts_at_start_of_year_matches_calendar(year):
    assert ts_at_start_of_year(year) == calendar.epoch_days(year, 1, 1) * 86400


def test_julian_no_feb29_skips_leap_day():
    j60 = TransitionSpec(type=TransType.JULIAN_NO_FEB29, days=60)
    zero_based_60 = TransitionSpec(type=TransType.JULIAN_FEB29, days=60)
    zero_based_59 = TransitionSpec(type=TransType.JULIAN_FEB29, days=59)
    assert j60.offset_in_year(2020) == zero_based_60.offset_in_year(2020)
    assert j60.offset_in_year(2019) == zero_based_59.offset_in_year(2019)


@pytest.mark.parametrize("year", [1999, 2010, 2020, 2021, 2024])
@pytest.mark.parametrize("month,week,dow", [(3, 2, 0), (11, 1, 0), (10, 5, 0), (2, 5, 3)])
def test_mwd_lands_on_requested_weekday(year, month, week, dow):
    spec = TransitionSpec(type=TransType.MWD, month=month, week=week, dow=dow)
    day_offset = spec.offset_in_year(year) // 86400
    y, m, d = calendar.date_from_epoch_days(calendar.epoch_days(year, 1, 1) + day_offset)
    assert (y, m) == (year, month)
    assert calendar.day_of_week(y, m, d) == dow
    if week < 5:
        assert (d - 1) // 7 == week - 1
    else:
        assert d + 7 > calendar.days_in_month(y, m)


def test_transitions_for_year_new_york():
    tz = new_york()
    (begin, begin_type), (end, end_type) = tz.transitions_for_year(2010)
    assert end == 1289109600
    assert (begin_type, end_type) == (1, 0)
    y, m, d = calendar.date_from_epoch_days(begin // 86400)
    assert (y, m) == (2010, 3)
    assert calendar.day_of_week(y, m, d) == 0
    assert begin % 86400 == 7200 + 18000


def test_transitions_for_year_southern_order():
    tz = parse_posix_str("AEST-10AEDT,M10.1.0,M4.1.0/3")
    tz.type_index_std_type = 0
    tz.type_index_dst_type = 1
    transitions = tz.transitions_for_year(2020)
    assert transitions[0][0] < transitions[1][0]
    assert [kind for _, kind in transitions] == [0, 1]


def test_transitions_for_year_requires_rules():
    with pytest.raises(ValueError):
        parse_posix_str("UTC0").transitions_for_year(2020)


def test_fetch_around_fall_back():
    tz = new_york()
    (begin, _), (end, _) = tz.transitions_for_year(2010)
    assert tz.fetch(1289109599) == (1, begin)
    assert tz.fetch(1289109600) == (0, 1289109600)
    assert tz.fetch(end + 86400 * 30) == (0, end)


def test_fetch_before_spring_forward_uses_previous_year():
    tz = new_york()
    (_, _), (prev_end, _) = tz.transitions_for_year(2009)
    (begin, _), (_, _) = tz.transitions_for_year(2010)
    assert tz.fetch(begin - 1) == (0, prev_end)
    assert tz.fetch(begin) == (1, begin)


def test_fetch_without_rules():
    tz = PosixTz(std="UTC", std_offset=0, type_index_std_type=3)
    assert tz.fetch(1289109600) == (3, None)