"""Human-readable dumps of parsed time zones, and the ``show-tzinfo`` command."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from zonetime.calendar import date_from_epoch_days
from zonetime.tzfile import TzFileError, TzInfo
from zonetime.zonedb import load_zoneinfo

__all__ = ["format_tzinfo", "main", "DEFAULT_ZONEINFO_DIR"]

#: Directory read when no database directory is given on the command line.
DEFAULT_ZONEINFO_DIR = "/usr/share/zoneinfo"

_INDENT = " " * 43


def _format_ut_time(ts: int) -> str:
    days, secs = divmod(ts, 86400)
    y, m, d = date_from_epoch_days(days)
    h, rem = divmod(secs, 3600)
    i, s = divmod(rem, 60)
    return f"{y:04d}-{m:02d}-{d:02d} {h:02d}:{i:02d}:{s:02d} UT"


def _format_offset_type(tz: TzInfo, index: int) -> str:
    t = tz.types[index]
    return (
        f"{index:3d} [{t.offset:6d} {int(t.isdst):1d} {t.abbr_idx:3d} "
        f"'{tz.abbreviation(t)}' ({t.isstdcnt},{t.isgmtcnt})]"
    )


def format_tzinfo(tz: TzInfo) -> str:
    """Describe ``tz``: location, counts, transitions, leap seconds and POSIX rule."""
    counts = tz.counts64
    lines = [
        f"Country Code:      {tz.location.country_code}",
        f"Geo Location:      {tz.location.latitude:f},{tz.location.longitude:f}",
        "Comments:",
        tz.location.comments,
        f"BC:                {'no' if tz.bc else 'yes'}",
        f"Slim File:         {'yes' if tz.is_slim() else 'no'}",
        "",
        "64-bit:",
        f"UTC/Local count:   {counts.ttisgmtcnt}",
        f"Std/Wall count:    {counts.ttisstdcnt}",
        f"Leap.sec. count:   {counts.leapcnt}",
        f"Trans. count:      {counts.timecnt}",
        f"Local types count: {counts.typecnt}",
        f"Zone Abbr. count:  {counts.charcnt}",
    ]

    if tz.types:
        lines.append(f"{'':22} ({'':20}) = {_format_offset_type(tz, 0)}")

    for ts, index in zip(tz.trans, tz.trans_idx):
        lines.append(f"{_format_ut_time(ts)} ({ts:20d}) = {_format_offset_type(tz, index)}")

    for leap in tz.leap_times:
        lines.append(f"{_format_ut_time(leap.trans)} ({leap.trans:20d}) = {leap.offset}")

    if tz.posix_string is None:
        lines += ["", f"{_INDENT}No POSIX string"]
    elif tz.posix_string == "":
        lines += ["", f"{_INDENT}Empty POSIX string"]
    else:
        lines += ["", f"{_INDENT}POSIX string: {tz.posix_string}"]
        info = tz.posix_info
        if info is not None and info.std:
            lines.append(f"{_INDENT}std: {_format_offset_type(tz, info.type_index_std_type)}")
            if info.dst:
                lines.append(
                    f"{_INDENT}dst: {_format_offset_type(tz, info.type_index_dst_type)}"
                )

    return "\n".join(lines) + "\n"


def main(argv: Sequence[str] | None = None) -> int:
    """Print a dump of one zone: ``show-tzinfo identifier [zoneinfo-directory]``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) not in (1, 2):
        print("Usage: show-tzinfo identifier [zoneinfo-directory]", file=sys.stderr)
        return 1

    identifier = args[0]
    if len(args) == 2:
        directory = args[1]
        try:
            db = load_zoneinfo(directory)
        except OSError:
            print(f"Can not read timezone database in '{directory}'.", file=sys.stderr)
            return 2
        try:
            tz = db.parse_tzfile(identifier)
        except TzFileError:
            print(
                f"Can not read timezone identifier '{identifier}' "
                f"from database in '{directory}'.",
                file=sys.stderr,
            )
            return 3
    else:
        try:
            tz = load_zoneinfo(DEFAULT_ZONEINFO_DIR).parse_tzfile(identifier)
        except (OSError, TzFileError):
            print(
                f"Can not read timezone identifier '{identifier}' from system database.",
                file=sys.stderr,
            )
            return 4

    sys.stdout.write(format_tzinfo(tz))
    return 0


if __name__ == "__main__":
    sys.exit(main())