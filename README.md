# zonetime

A small, dependency-free library for working with dates and time zones:

- **Calendar arithmetic** (`zonetime.calendar`): leap years, day of week,
  day of year, days in a month, ISO 8601 week dates in both directions,
  validation of dates and times, and conversion between calendar dates
  and days since the Unix epoch (`epoch_days`, `date_from_epoch_days`).
- **POSIX TZ strings** (`zonetime.posix`): `parse_posix_str` reads strings
  such as `EST5EDT,M3.2.0,M11.1.0` into a `PosixTz`, which computes the
  yearly DST transitions (`transitions_for_year`) and the rule in force at
  a timestamp (`fetch`).
- **TZif zone files** (`zonetime.tzfile`): `parse_tzdata` reads compiled
  zone data (TZif versions 2 to 4, and the variant that carries a country
  code and location) into a `TzInfo`, which looks up the UTC offset,
  abbreviation, DST flag and leap-second correction in force at any Unix
  timestamp.
- **Zone databases** (`zonetime.zonedb`): `load_zoneinfo` indexes a
  zoneinfo directory, such as `/usr/share/zoneinfo`, into a `ZoneInfoDb`;
  zone names are matched case-insensitively.
- **Sun position** (`zonetime.astro`): sunrise, sunset and twilight
  times for a day and place, and Julian day conversions.
- **Dumps** (`zonetime.dump`): `format_tzinfo` describes a parsed zone as
  text, and the `zonetime-show-tzinfo` command prints it.

## Installation

```
pip install zonetime
```

## Examples

```python
from zonetime.calendar import day_of_week, isodate_from_date, date_from_isodate

day_of_week(1978, 12, 22)        # 5 (Friday; Sunday is 0)
isodate_from_date(2017, 6, 6)    # (2017, 23, 2)
date_from_isodate(2017, 23, 2)   # (2017, 6, 6)
```

```python
from zonetime.posix import parse_posix_str

tz = parse_posix_str("EST5EDT,M3.2.0,M11.1.0")
tz.std, tz.std_offset            # ("EST", -18000)
tz.transitions_for_year(2021)    # [(start_ts, dst_index), (end_ts, std_index)]
```

```python
from zonetime.zonedb import load_zoneinfo

db = load_zoneinfo("/usr/share/zoneinfo")
london = db.parse_tzfile("Europe/London")
info = london.get_time_zone_info(1501074654)
info.offset, info.abbr, info.is_dst   # (3600, "BST", True)
```

```python
from zonetime.astro import rise_set_altitude, sun_rise_set

result = sun_rise_set(2006, 12, 12, 31.7667, 35.2333, 0)
result.ts_rise, result.ts_set, result.h_rise, result.h_set

# Civil twilight: the Sun's centre 6 degrees below the horizon.
twilight = rise_set_altitude(2006, 12, 12, 31.7667, 35.2333, -6.0, False, 0)
```

A `RiseSet` has `status` 0 when the Sun crosses the altitude that day,
+1 when it stays above it (`always_above`) and -1 when it stays below it
(`always_below`); `h_rise` and `h_set` are only set when `status` is 0.

Errors are raised as exceptions: `PosixParseError` (a `ValueError`) for a
malformed POSIX string, and `TzFileError`, whose `code` is an `ErrorCode`,
for a zone that cannot be found or read. A zone whose POSIX footer is
empty is still returned, with `error_code` set to
`ErrorCode.EMPTY_POSIX_STRING`.

## Command line

To print the contents of a zone file:

```
zonetime-show-tzinfo Europe/London /usr/share/zoneinfo
```

This prints the location, the header counts, every transition with its
offset type, any leap seconds, and the POSIX string that covers times
after the last transition. Without the directory argument,
`/usr/share/zoneinfo` is read. The exit status is 2 if the directory
cannot be read, 3 or 4 if the zone cannot be read from it, and 1 on
wrong usage.

## What it does not do

- It ships no zone data of its own; zones come from a zoneinfo directory
  on disk or from bytes handed to `parse_tzdata`.
- It does not parse date/time strings, and does not add or subtract
  intervals or compute differences between times.
- Apart from offset lookup, it does not convert timestamps to local
  calendar fields for a zone.

## Running the tests

```
pip install -e ".[test]"
pytest
```