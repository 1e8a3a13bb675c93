from datetime import datetime, timedelta, timezone
from unittest import mock

import pytest

from distrike.units import (
    format_size,
    normalize_path,
    parse_date_shortcut,
    parse_duration,
    parse_size,
)


# ── parse_size ────────────────────────────────────────────────────────────────


def test_parse_size_kilobyte_is_1024():
    assert parse_size("1KB") == 1024


def test_parse_size_plain_integer():
    assert parse_size("100") == 100


def test_parse_size_units_are_binary_multiples():
    assert parse_size("1GB") == parse_size("1024MB")
    assert parse_size("1TB") == parse_size("1024GB")
    assert parse_size("1MB") == parse_size("1024KB")


def test_parse_size_case_and_whitespace_insensitive():
    assert parse_size(" 5mb ") == parse_size("5MB")
    assert parse_size("7kb") == parse_size("7KB")


def test_parse_size_fraction_truncates():
    assert parse_size("1.5KB") == parse_size("1536B")


@pytest.mark.parametrize("bad", ["abc", "GB", "", "1.2.3MB", "12XB", "20 GB"])
def test_parse_size_invalid(bad):
    with pytest.raises(ValueError):
        parse_size(bad)


# ── format_size ───────────────────────────────────────────────────────────────


def test_format_size_small_values_in_bytes():
    assert format_size(512) == "512 B"


def test_format_size_fractional_one_decimal():
    assert format_size(parse_size("1.5GB")) == "1.5 GB"


@pytest.mark.parametrize("text", ["1KB", "3MB", "20GB", "2TB"])
def test_format_parse_round_trip(text):
    formatted = format_size(parse_size(text))
    assert parse_size(formatted.replace(" ", "")) == parse_size(text)


def test_format_size_caps_at_petabytes():
    assert format_size(parse_size("1TB") * 1024 * 5000).endswith(" PB")


# ── normalize_path ────────────────────────────────────────────────────────────


def test_normalize_path_posix_cleans():
    with mock.patch("sys.platform", "linux"):
        assert normalize_path("  /a//b/./c/../d/ ") == "/a/b/d"
        assert normalize_path("//x") == "/x"
        assert normalize_path("") == "."


def test_normalize_path_windows_drive_letters():
    with mock.patch("sys.platform", "win32"):
        assert normalize_path("D:") == "D:\\"
        assert normalize_path("D:/") == "D:\\"
        assert normalize_path("D:/foo/../bar") == "D:\\bar"


# ── parse_date_shortcut ───────────────────────────────────────────────────────


def test_today_is_midnight():
    today = parse_date_shortcut("td")
    assert (today.hour, today.minute, today.second) == (0, 0, 0)
    assert today == parse_date_shortcut("TODAY")


def test_yesterday_before_today():
    assert parse_date_shortcut("td").date() - parse_date_shortcut("yd").date() == timedelta(days=1)


def test_this_week_starts_monday_and_last_week_precedes():
    this_week = parse_date_shortcut("tw")
    last_week = parse_date_shortcut("lastweek")
    assert this_week.weekday() == 0
    assert this_week <= parse_date_shortcut("td")
    assert this_week.date() - last_week.date() == timedelta(days=7)


def test_month_and_year_starts():
    this_month = parse_date_shortcut("tm")
    last_month = parse_date_shortcut("lm")
    this_year = parse_date_shortcut("ty")
    last_year = parse_date_shortcut("ly")
    assert this_month.day == 1 and last_month.day == 1
    assert last_month < this_month
    assert 28 <= (this_month.date() - last_month.date()).days <= 31
    assert (this_year.month, this_year.day) == (1, 1)
    assert last_year.year == this_year.year - 1


def test_relative_offsets():
    before = datetime.now().astimezone()
    three_days = parse_date_shortcut("3d")
    after = datetime.now().astimezone()
    assert before - timedelta(days=3) <= three_days <= after - timedelta(days=3)
    two_weeks = parse_date_shortcut("2w")
    assert abs((datetime.now().astimezone() - two_weeks) - timedelta(weeks=2)) < timedelta(seconds=5)
    six_hours = parse_date_shortcut("6h")
    assert abs((datetime.now().astimezone() - six_hours) - timedelta(hours=6)) < timedelta(seconds=5)


def test_unix_timestamp():
    assert parse_date_shortcut("@1700000000").timestamp() == 1700000000


@pytest.mark.parametrize("text", ["2024-01-15", "2024/01/15", "20240115"])
def test_exact_dates(text):
    assert parse_date_shortcut(text) == datetime(2024, 1, 15, tzinfo=timezone.utc)


def test_exact_datetime():
    assert parse_date_shortcut("2024-01-15 10:30:00") == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)


@pytest.mark.parametrize("bad", ["nonsense", "2024-1-5", "@abc", "3x", ""])
def test_invalid_dates(bad):
    with pytest.raises(ValueError, match="cannot parse date"):
        parse_date_shortcut(bad)


# ── parse_duration ────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "text, expected",
    [
        ("30m", timedelta(minutes=30)),
        ("1h", timedelta(hours=1)),
        ("24h", timedelta(hours=24)),
        ("7d", timedelta(days=7)),
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("-1h", -timedelta(hours=1)),
        ("0", timedelta(0)),
    ],
)
def test_parse_duration(text, expected):
    assert parse_duration(text) == expected


def test_parse_duration_fractional_days():
    assert parse_duration("1.5d") == parse_duration("36h")


@pytest.mark.parametrize("bad", ["", "   ", "abc", "5x", "d", "1", "h"])
def test_parse_duration_invalid(bad):
    with pytest.raises(ValueError):
        parse_duration(bad)