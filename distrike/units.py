"""Parsing and formatting of sizes, paths, dates and durations."""

from __future__ import annotations

import calendar
import math
import ntpath
import posixpath
import re
import sys
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MAX = 2**63 - 1
_INT64_MIN = -(2**63)

_SIZE_SUFFIXES = (
    ("TB", 1024**4),
    ("GB", 1024**3),
    ("MB", 1024**2),
    ("KB", 1024),
    ("B", 1),
)

_SIZE_UNITS = ("KB", "MB", "GB", "TB", "PB")


def _parse_float(text: str) -> float:
    """Strict float parsing: no surrounding blanks, underscores or non-finite values."""
    if not text or text != text.strip() or "_" in text:
        raise ValueError(f"invalid number {text!r}")
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"invalid number {text!r}")
    return value


def parse_size(s: str) -> int:
    """Parse sizes like "20GB", "100MB" or "1TB" (binary units) into bytes."""
    text = s.strip().upper()
    for suffix, mult in _SIZE_SUFFIXES:
        if text.endswith(suffix):
            number = text[: -len(suffix)]
            try:
                return int(_parse_float(number) * mult)
            except ValueError as exc:
                raise ValueError(f"invalid size {text!r}: {exc}") from exc
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid size {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"invalid size {text!r}: value out of range")
    return value


def format_size(num_bytes: int) -> str:
    """Format a byte count as a human-readable string."""
    if num_bytes < 1024:
        return f"{num_bytes} B"
    size = float(num_bytes)
    for unit in _SIZE_UNITS:
        size /= 1024
        if size < 1024 or unit == "PB":
            if size == math.trunc(size):
                return f"{size:.0f} {unit}"
            return f"{size:.1f} {unit}"
    return f"{size:.1f} PB"


def _clean_posix(path: str) -> str:
    cleaned = posixpath.normpath(path)
    if cleaned.startswith("//") and not cleaned.startswith("///"):
        cleaned = cleaned[1:]
    return cleaned


def normalize_path(path: str) -> str:
    """Tidy a path; on Windows also fixes bare drive letters and forward slashes."""
    path = path.strip()
    if sys.platform == "win32":
        path = path.replace("/", "\\")
        if len(path) == 2 and path[1] == ":":
            path += "\\"
        if len(path) == 3 and path[1] == ":" and path[2] == "\\":
            return path
        return ntpath.normpath(path) if path else "."
    return _clean_posix(path)


def _local_midnight(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day).astimezone()


_DATE_LAYOUTS = (
    (re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}"), "%Y-%m-%d"),
    (re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}"), "%Y-%m-%d %H:%M:%S"),
    (re.compile(r"[0-9]{4}/[0-9]{2}/[0-9]{2}"), "%Y/%m/%d"),
    (re.compile(r"[0-9]{8}"), "%Y%m%d"),
)


def parse_date_shortcut(s: str) -> datetime:
    """Parse a time-filter shortcut into a timezone-aware datetime.

    Accepts td/today, yd/yesterday, tw/thisweek, lw/lastweek, tm/thismonth,
    lm/lastmonth, ty/thisyear, ly/lastyear, Nd/Nh/Nw offsets, @unix-timestamp
    and explicit dates (YYYY-MM-DD, YYYY-MM-DD HH:MM:SS, YYYY/MM/DD, YYYYMMDD).
    """
    text = s.strip().lower()
    now = datetime.now().astimezone()
    today = now.date()
    today_start = _local_midnight(today.year, today.month, today.day)
    week_start_date = today - timedelta(days=today.weekday())
    week_start = _local_midnight(week_start_date.year, week_start_date.month, week_start_date.day)
    last_week_date = week_start_date - timedelta(days=7)
    yesterday_date = today - timedelta(days=1)

    shortcuts = {
        ("td", "today"): today_start,
        ("yd", "yesterday"): _local_midnight(yesterday_date.year, yesterday_date.month, yesterday_date.day),
        ("tw", "thisweek"): week_start,
        ("lw", "lastweek"): _local_midnight(last_week_date.year, last_week_date.month, last_week_date.day),
        ("tm", "thismonth"): _local_midnight(today.year, today.month, 1),
        ("ty", "thisyear"): _local_midnight(today.year, 1, 1),
        ("ly", "lastyear"): _local_midnight(today.year - 1, 1, 1),
    }
    for names, moment in shortcuts.items():
        if text in names:
            return moment

    if text in ("lm", "lastmonth"):
        year, month = (today.year - 1, 12) if today.month == 1 else (today.year, today.month - 1)
        return _local_midnight(year, month, 1)

    if len(text) >= 2:
        suffix, number = text[-1], text[:-1]
        unit = {"d": timedelta(days=1), "h": timedelta(hours=1), "w": timedelta(weeks=1)}.get(suffix)
        if unit is not None and _INT_RE.fullmatch(number):
            try:
                return now - unit * int(number)
            except OverflowError as exc:
                raise ValueError(f"cannot parse date: {text!r}: offset out of range") from exc

    if text.startswith("@") and _INT_RE.fullmatch(text[1:]):
        try:
            return datetime.fromtimestamp(int(text[1:]), tz=timezone.utc).astimezone()
        except (OverflowError, OSError, ValueError):
            pass

    for pattern, layout in _DATE_LAYOUTS:
        if pattern.fullmatch(text):
            try:
                return datetime.strptime(text, layout).replace(tzinfo=timezone.utc)
            except ValueError:
                continue

    raise ValueError(
        f"cannot parse date: {text!r} (use td/yd/3d/7d/tw/lw/tm/lm/ty/ly/@timestamp/YYYY-MM-DD)"
    )


_DURATION_UNITS_NS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_DURATION_PIECE = re.compile(r"([0-9]*(?:\.[0-9]*)?)([a-zµμ]+)")
_NS_PER_DAY = 24 * 3600 * 1_000_000_000


def _ns_to_timedelta(total_ns: Decimal, original: str) -> timedelta:
    if abs(total_ns) > _INT64_MAX:
        raise ValueError(f"invalid duration {original!r}: out of range")
    return timedelta(microseconds=int(int(total_ns) / 1000) if False else int(total_ns / 1000))


def _parse_go_duration(text: str) -> Decimal:
    body = text
    sign = 1
    if body[:1] in "+-" and body:
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if body == "0":
        return Decimal(0)
    if not body:
        raise ValueError("missing value")
    total = Decimal(0)
    pos = 0
    while pos < len(body):
        match = _DURATION_PIECE.match(body, pos)
        if not match:
            raise ValueError("malformed duration")
        number, unit = match.groups()
        if number in ("", "."):
            raise ValueError("missing number")
        if unit not in _DURATION_UNITS_NS:
            raise ValueError(f"unknown unit {unit!r}")
        try:
            total += Decimal(number) * _DURATION_UNITS_NS[unit]
        except InvalidOperation as exc:
            raise ValueError("malformed number") from exc
        pos = match.end()
    return sign * total


def parse_duration(s: str) -> timedelta:
    """Parse durations like "30m", "1h30m" or "7d" (a "d" suffix means days)."""
    text = s.strip()
    if not text:
        raise ValueError("empty duration string")

    if text.endswith("d"):
        try:
            days = _parse_float(text[:-1])
        except ValueError as exc:
            raise ValueError(f"invalid duration {text!r}: {exc}") from exc
        return _ns_to_timedelta(Decimal(repr(days)) * _NS_PER_DAY, text)

    try:
        total_ns = _parse_go_duration(text)
    except ValueError as exc:
        raise ValueError(f"invalid duration {text!r}: {exc}") from exc
    return _ns_to_timedelta(total_ns, text)


def _days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]