import struct

import pytest

from zonetime.dump import format_tzinfo, main
from zonetime.tzfile import parse_tzdata

NEW_YORK_RULE = "EST5EDT,M3.2.0,M11.1.0"


def _tzif(transitions, indices, types, abbrs, footer):
    slim32 = b"TZif2" + b"\0" * 15 + struct.pack(">6L", 0, 0, 0, 0, 1, 1)
    slim32 += struct.pack(">lBB", 0, 0, 0) + b"\0"
    body = b"TZif2" + b"\0" * 15
    body += struct.pack(">6L", 0, 0, 0, len(transitions), len(types), len(abbrs))
    body += b"".join(struct.pack(">q", t) for t in transitions)
    body += bytes(indices)
    body += b"".join(struct.pack(">lBB", *t) for t in types)
    body += abbrs
    body += b"\n" + footer.encode("ascii") + b"\n"
    return slim32 + body


def _eastern():
    return _tzif(
        [0, 86400],
        [1, 0],
        [(-18000, 0, 0), (-14400, 1, 4)],
        b"EST\0EDT\0",
        NEW_YORK_RULE,
    )


def test_header_lines_and_counts():
    tz = parse_tzdata("Test/Eastern", _eastern())
    lines = format_tzinfo(tz).splitlines()
    assert lines[0] == "Country Code:      ??"
    assert "BC:                yes" in lines
    assert "Slim File:         yes" in lines
    assert f"Trans. count:      {len(tz.trans)}" in lines
    assert f"Local types count: {len(tz.types)}" in lines
    assert f"Zone Abbr. count:  {len(tz.timezone_abbr)}" in lines


def test_transition_lines():
    tz = parse_tzdata("Test/Eastern", _eastern())
    text = format_tzinfo(tz)
    assert "  0 [-18000 0   0 'EST' (0,0)]" in text
    first = [line for line in text.splitlines() if line.startswith("1970-01-01 00:00:00 UT")]
    assert len(first) == 1
    assert first[0].endswith("'EDT' (0,0)]")
    assert f"({0:20d})" in first[0]


def test_posix_section_names_std_and_dst():
    tz = parse_tzdata("Test/Eastern", _eastern())
    lines = format_tzinfo(tz).splitlines()
    assert " " * 43 + "POSIX string: " + NEW_YORK_RULE in lines
    std = [line for line in lines if line.strip().startswith("std:")]
    dst = [line for line in lines if line.strip().startswith("dst:")]
    assert len(std) == 1 and "'EST'" in std[0]
    assert len(dst) == 1 and "'EDT'" in dst[0]


def test_zone_without_dst_has_no_dst_line():
    tz = parse_tzdata("Test/UTC", _tzif([], [], [(0, 0, 0)], b"UTC\0", "UTC0"))
    text = format_tzinfo(tz)
    assert "POSIX string: UTC0" in text
    assert "std:" in text
    assert "dst:" not in text


def test_empty_posix_string():
    tz = parse_tzdata("Test/Empty", _tzif([], [], [(0, 0, 0)], b"UTC\0", ""))
    assert "Empty POSIX string" in format_tzinfo(tz)
    assert format_tzinfo(tz).endswith("\n")


def test_main_with_directory(tmp_path, capsys):
    zone_dir = tmp_path / "Test"
    zone_dir.mkdir()
    (zone_dir / "Eastern").write_bytes(_eastern())
    assert main(["Test/Eastern", str(tmp_path)]) == 0
    out = capsys.readouterr().out
    assert out == format_tzinfo(parse_tzdata("Test/Eastern", _eastern()))


def test_main_missing_zone(tmp_path, capsys):
    (tmp_path / "Other").write_bytes(_eastern())
    assert main(["Nowhere/Zone", str(tmp_path)]) == 3
    assert "Nowhere/Zone" in capsys.readouterr().err


def test_main_missing_directory(tmp_path, capsys):
    missing = tmp_path / "absent"
    assert main(["Test/Eastern", str(missing)]) == 2
    assert str(missing) in capsys.readouterr().err


@pytest.mark.parametrize("argv", [[], ["a", "b", "c"]])
def test_main_usage(argv, capsys):
    assert main(argv) == 1
    assert "Usage" in capsys.readouterr().err