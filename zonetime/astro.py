"""Sunrise, sunset and twilight times, after Paul Schlyter's public domain algorithms."""

from __future__ import annotations

import math
from dataclasses import dataclass

from zonetime.calendar import epoch_days

__all__ = [
    "RiseSet",
    "rise_set_altitude",
    "sun_rise_set",
    "ts_to_julianday",
    "ts_to_j2000",
]

SECS_PER_DAY = 86400
SECS_PER_HOUR = 3600

#: Altitude of the upper limb at rise/set, allowing for refraction.
SUNRISE_ALTITUDE = -35.0 / 60.0

_RADEG = 180.0 / math.pi


def _sind(x: float) -> float:
    return math.sin(math.radians(x))


def _cosd(x: float) -> float:
    return math.cos(math.radians(x))


def _atan2d(y: float, x: float) -> float:
    return _RADEG * math.atan2(y, x)


def _acosd(x: float) -> float:
    return _RADEG * math.acos(x)


def _revolution(x: float) -> float:
    """Reduce an angle to 0..360 degrees."""
    return x - 360.0 * math.floor(x / 360.0)


def _rev180(x: float) -> float:
    """Reduce an angle to -180..+180 degrees."""
    return x - 360.0 * math.floor(x / 360.0 + 0.5)


def _gmst0(d: float) -> float:
    """Greenwich mean sidereal time at 0h UT, in degrees."""
    return _revolution((180.0 + 356.0470 + 282.9404) + (0.9856002585 + 4.70935e-5) * d)


def _sunpos(d: float) -> tuple[float, float]:
    """Sun's ecliptic longitude and distance at ``d`` days since 2000 Jan 0.0."""
    mean_anomaly = _revolution(356.0470 + 0.9856002585 * d)
    perihelion = 282.9404 + 4.70935e-5 * d
    ecc = 0.016709 - 1.151e-9 * d

    ecc_anomaly = mean_anomaly + ecc * _RADEG * _sind(mean_anomaly) * (
        1.0 + ecc * _cosd(mean_anomaly)
    )
    x = _cosd(ecc_anomaly) - ecc
    y = math.sqrt(1.0 - ecc * ecc) * _sind(ecc_anomaly)
    r = math.sqrt(x * x + y * y)
    lon = _atan2d(y, x) + perihelion
    if lon >= 360.0:
        lon -= 360.0
    return lon, r


def _sun_ra_dec(d: float) -> tuple[float, float, float]:
    """Sun's right ascension, declination and distance."""
    lon, r = _sunpos(d)
    x = r * _cosd(lon)
    y = r * _sind(lon)
    obl_ecl = 23.4393 - 3.563e-7 * d
    z = y * _sind(obl_ecl)
    y = y * _cosd(obl_ecl)
    return _atan2d(y, x), _atan2d(z, math.sqrt(x * x + y * y)), r


@dataclass(frozen=True)
class RiseSet:
    """Result of a rise/set computation.

    ``status`` is 0 when the Sun crosses the altitude that day, +1 when it
    stays above it all day and -1 when it stays below it all day. The decimal
    hours ``h_rise`` and ``h_set`` (UT) are only known when ``status`` is 0.
    """

    status: int
    ts_rise: int
    ts_set: int
    ts_transit: int
    h_rise: float | None = None
    h_set: float | None = None

    @property
    def always_above(self) -> bool:
        return self.status == 1

    @property
    def always_below(self) -> bool:
        return self.status == -1


def rise_set_altitude(
    year: int,
    month: int,
    day: int,
    lon: float,
    lat: float,
    altitude: float,
    upper_limb: bool,
    utc_offset: int = 0,
) -> RiseSet:
    """Times at which the Sun crosses ``altitude`` degrees on the given day.

    Eastern longitude and northern latitude are positive. ``upper_limb``
    selects the Sun's upper limb rather than its centre. ``utc_offset`` is the
    local offset from UTC in seconds, used to place local noon.
    """
    t_utc = epoch_days(year, month, day) * SECS_PER_DAY
    t_loc = t_utc + 12 * SECS_PER_HOUR - utc_offset

    d = ts_to_j2000(t_utc) + 2 - lon / 360.0
    sidtime = _revolution(_gmst0(d) + 180.0 + lon)
    s_ra, s_dec, s_r = _sun_ra_dec(d)
    tsouth = 12.0 - _rev180(sidtime - s_ra) / 15.0
    sradius = 0.2666 / s_r

    if upper_limb:
        altitude -= sradius

    cost = (_sind(altitude) - _sind(lat) * _sind(s_dec)) / (_cosd(lat) * _cosd(s_dec))
    ts_transit = int(t_utc + tsouth * 3600)

    if cost >= 1.0:
        return RiseSet(-1, ts_transit, ts_transit, ts_transit)
    if cost <= -1.0:
        return RiseSet(
            1,
            t_loc - 12 * SECS_PER_HOUR,
            t_loc + 12 * SECS_PER_HOUR,
            ts_transit,
        )

    arc = _acosd(cost) / 15.0
    return RiseSet(
        0,
        int((tsouth - arc) * 3600 + t_utc),
        int((tsouth + arc) * 3600 + t_utc),
        ts_transit,
        tsouth - arc,
        tsouth + arc,
    )


def sun_rise_set(
    year: int, month: int, day: int, lon: float, lat: float, utc_offset: int = 0
) -> RiseSet:
    """Sunrise and sunset: upper limb 35 arc minutes below the horizon."""
    return rise_set_altitude(year, month, day, lon, lat, SUNRISE_ALTITUDE, True, utc_offset)


def ts_to_julianday(ts: float) -> float:
    """Julian day for a Unix timestamp."""
    return float(ts) / SECS_PER_DAY + 2440587.5


def ts_to_j2000(ts: float) -> float:
    """Days since the J2000 epoch for a Unix timestamp."""
    return ts_to_julianday(ts) - 2451545