"""Matching of scanned directory entries against prey rules."""

from __future__ import annotations

import os
import re
import stat
from dataclasses import dataclass, field
from datetime import datetime
from functools import lru_cache
from typing import Iterable, Sequence

from .prey import Prey, Rule

_RUNTIME_DETECT_PREFIX = "__runtime_detect__"
_GLOB_META = "*?["
_BACKSLASH_ESCAPES = os.sep == "/"


@dataclass
class DirEntry:
    """One scanned file or directory."""

    path: str
    size_bytes: int = 0
    is_dir: bool = False
    last_modified: datetime | None = None


def _to_slash(path: str) -> str:
    return path.replace(os.sep, "/") if os.sep != "/" else path


def _base(path: str) -> str:
    """Last element of a slash-separated path."""
    if not path:
        return "."
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    return stripped.rsplit("/", 1)[-1]


def _class_char(pattern: str, pos: int) -> tuple[str, int]:
    if pos >= len(pattern) or pattern[pos] in "-]":
        raise ValueError("bad pattern")
    char = pattern[pos]
    if char == "\\" and _BACKSLASH_ESCAPES:
        pos += 1
        if pos >= len(pattern):
            raise ValueError("bad pattern")
        char = pattern[pos]
    return char, pos + 1


def _glob_to_regex(pattern: str) -> str:
    parts: list[str] = []
    pos = 0
    length = len(pattern)
    while pos < length:
        char = pattern[pos]
        if char == "*":
            parts.append("[^/]*")
            pos += 1
        elif char == "?":
            parts.append("[^/]")
            pos += 1
        elif char == "\\" and _BACKSLASH_ESCAPES:
            if pos + 1 >= length:
                raise ValueError("bad pattern")
            parts.append(re.escape(pattern[pos + 1]))
            pos += 2
        elif char == "[":
            pos += 1
            negate = pos < length and pattern[pos] == "^"
            if negate:
                pos += 1
            items: list[str] = []
            while True:
                if pos >= length:
                    raise ValueError("bad pattern")
                if pattern[pos] == "]" and items:
                    pos += 1
                    break
                low, pos = _class_char(pattern, pos)
                if pos < length and pattern[pos] == "-":
                    high, pos = _class_char(pattern, pos + 1)
                    if low > high:
                        raise ValueError("bad pattern")
                    items.append(f"{re.escape(low)}-{re.escape(high)}")
                else:
                    items.append(re.escape(low))
            body = "".join(items)
            parts.append(f"[^{body}]" if negate else f"[{body}]")
        else:
            parts.append(re.escape(char))
            pos += 1
    return "(?s:" + "".join(parts) + r")\Z"


@lru_cache(maxsize=512)
def _compile_glob(pattern: str) -> re.Pattern[str] | None:
    try:
        return re.compile(_glob_to_regex(pattern))
    except (ValueError, re.error):
        return None


def _glob_match(pattern: str, name: str) -> bool:
    """Shell-style match where ``*`` and ``?`` never cross a ``/``; bad patterns never match."""
    regex = _compile_glob(pattern)
    return regex is not None and regex.match(name) is not None


def _tails(path: str) -> Iterable[str]:
    """Every suffix of ``path`` that starts at a ``/``."""
    tail = path
    while "/" in tail:
        idx = tail.index("/")
        yield tail[idx:]
        tail = tail[idx + 1 :]


def match_pattern(path: str, pattern: str) -> bool:
    """Whether a slash-separated path matches a rule pattern.

    Supports ``*.ext`` extension patterns, ``*/some/path`` suffix patterns
    (optionally with wildcards), and plain glob or absolute patterns.
    """
    pattern = _to_slash(pattern)

    if pattern.startswith(_RUNTIME_DETECT_PREFIX):
        return False

    if pattern.startswith("*.") and "/" not in pattern[2:]:
        return path.lower().endswith(pattern[1:].lower())

    if pattern.startswith("*/"):
        suffix = pattern[1:]
        if not any(ch in suffix for ch in _GLOB_META):
            return path.endswith(suffix) or (suffix + "/") in path
        return any(
            _glob_match(suffix, candidate) or _glob_match(suffix, candidate.rstrip("/"))
            for candidate in _tails(path)
        )

    if _glob_match(pattern, path) or _glob_match(pattern, _base(path)):
        return True

    if "*" not in pattern:
        return path.endswith(pattern) or path == pattern
    return False


def measure_dir_size(path: str) -> int:
    """Total size of the non-directory entries under ``path``; unreadable parts are skipped."""
    try:
        info = os.lstat(path)
    except OSError:
        return 0
    if not stat.S_ISDIR(info.st_mode):
        return info.st_size

    total = 0
    pending = [path]
    while pending:
        current = pending.pop()
        try:
            with os.scandir(current) as it:
                entries = list(it)
        except OSError:
            continue
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    pending.append(entry.path)
                else:
                    total += entry.stat(follow_symlinks=False).st_size
            except OSError:
                continue
    return total


@dataclass
class Matcher:
    """Evaluates directory entries against rules to identify prey."""

    rules: Sequence[Rule]
    whitelist: Sequence[str] = field(default_factory=tuple)
    min_size: int = 0

    def match(self, entries: Iterable[DirEntry]) -> list[Prey]:
        """Return prey for matching entries, parents before children, largest first."""
        found: list[Prey] = []
        seen: set[str] = set()

        for entry in entries:
            if entry.path in seen or self.is_whitelisted(entry.path):
                continue
            rule = self.match_rule(entry.path)
            if rule is None:
                continue
            seen.add(entry.path)
            size = entry.size_bytes
            if size == 0 and entry.is_dir:
                size = measure_dir_size(entry.path)
            if size < self.min_size:
                continue
            found.append(
                Prey(
                    path=entry.path,
                    size_bytes=size,
                    kind=rule.kind,
                    risk=rule.risk,
                    platform=rule.platform,
                    description=rule.description,
                    action=rule.action,
                    last_access=entry.last_modified,
                    cosmetic=rule.cosmetic,
                )
            )

        # When a parent and a child both match, only the parent is kept.
        kept: list[Prey] = []
        for prey in sorted(found, key=lambda p: len(p.path)):
            child = _to_slash(prey.path)
            if not any(child.startswith(_to_slash(parent.path) + "/") for parent in kept):
                kept.append(prey)

        return sorted(kept, key=lambda p: p.size_bytes, reverse=True)

    def match_rule(self, path: str) -> Rule | None:
        """The first rule whose pattern matches ``path``, or None."""
        normalized = _to_slash(path)
        return next((rule for rule in self.rules if match_pattern(normalized, rule.pattern)), None)

    def is_whitelisted(self, path: str) -> bool:
        """Whether ``path`` is protected by any whitelist entry."""
        normalized = _to_slash(path)
        for raw in self.whitelist:
            entry = _to_slash(raw)
            if entry.startswith("*/"):
                suffix = entry[1:]
                if not any(ch in suffix for ch in _GLOB_META):
                    if normalized.endswith(suffix) or (suffix + "/") in normalized:
                        return True
                elif any(_glob_match(suffix, candidate) for candidate in _tails(normalized)):
                    return True
                continue
            if (
                normalized == entry
                or normalized.endswith(entry)
                or _glob_match(entry, normalized)
                or normalized.startswith(entry + "/")
            ):
                return True
        return False