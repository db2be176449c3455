import pytest

from zonetime.astro import (
    RiseSet,
    rise_set_altitude,
    sun_rise_set,
    ts_to_j2000,
    ts_to_julianday,
)


def test_php_sun_info_001():
    r = rise_set_altitude(2006, 12, 12, 31.7667, 35.2333, -35.0 / 60.0, True)
    assert r.status == 0
    assert r.h_rise == pytest.approx(4.86, abs=0.01)
    assert r.h_set == pytest.approx(14.69, abs=0.01)
    assert r.ts_rise == 1165899111
    assert r.ts_set == 1165934475
    assert r.ts_transit == (1165899111 + 1165934475) // 2


def test_php_sun_info_002():
    r = rise_set_altitude(2007, 4, 13, 9.61, 59.21, -35.0 / 60.0, True)
    assert r.status == 0
    assert r.h_rise == pytest.approx(4.23, abs=0.01)
    assert r.h_set == pytest.approx(18.51, abs=0.01)
    assert r.ts_rise == 1176437611
    assert r.ts_set == 1176489051
    assert r.ts_transit == (1176489051 + 1176437611) // 2


def test_sun_rise_set_matches_explicit_altitude():
    assert sun_rise_set(2006, 12, 12, 31.7667, 35.2333) == rise_set_altitude(
        2006, 12, 12, 31.7667, 35.2333, -35.0 / 60.0, True
    )


def test_twilight_is_wider_than_day():
    day = sun_rise_set(2007, 4, 13, 9.61, 50.0)
    civil = rise_set_altitude(2007, 4, 13, 9.61, 50.0, -6.0, False)
    assert civil.ts_rise < day.ts_rise
    assert civil.ts_set > day.ts_set


def test_polar_night_always_below():
    r = sun_rise_set(2006, 12, 21, 15.0, 80.0)
    assert r.status == -1
    assert r.always_below
    assert r.ts_rise == r.ts_set == r.ts_transit
    assert r.h_rise is None and r.h_set is None


def test_midnight_sun_always_above():
    r = sun_rise_set(2006, 6, 21, 15.0, 80.0, utc_offset=3600)
    assert r.status == 1
    assert r.always_above
    # local noon of 2006-06-21 at UTC+1 is 11:00 UTC
    noon = 1150848000 + 11 * 3600
    assert r.ts_rise == noon - 12 * 3600
    assert r.ts_set == noon + 12 * 3600
    assert r.ts_set - r.ts_rise == 86400


def test_riseset_flags():
    r = RiseSet(0, 1, 2, 3, 1.0, 2.0)
    assert not r.always_above
    assert not r.always_below


def test_j2000_epoch():
    assert ts_to_j2000(946728000) == pytest.approx(0, abs=1e-7)


def test_j2000_august_2017():
    assert ts_to_j2000(1502755200) == pytest.approx(6435.5, abs=1e-7)


def test_julian_day_epoch():
    assert ts_to_julianday(-210866760000) == pytest.approx(0, abs=1e-7)


def test_julian_date_example():
    assert ts_to_julianday(1357000200) == pytest.approx(2456293.520833, abs=1e-6)


def test_julian_day_august_2017():
    assert ts_to_julianday(1502755200) == pytest.approx(2457980.5, abs=1e-7)