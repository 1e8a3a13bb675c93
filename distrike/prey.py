"""Data model for cleanable items ("prey") and the rules that identify them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

_ZERO_TIME = "0001-01-01T00:00:00Z"


class PreyKind(str, Enum):
    """Classification of a cleanable item."""

    CACHE = "cache"
    TEMP = "temp"
    VDISK = "vdisk"
    BACKUP = "backup"
    DOWNLOAD = "download"
    ORPHAN = "orphan"
    LOG = "log"
    MODEL = "model"  # large model weight files (.safetensors, .gguf, .pt, ...)


class Risk(str, Enum):
    """How safe it is to clean an item."""

    SAFE = "safe"  # auto-cleanable
    CAUTION = "caution"  # needs confirmation
    DANGER = "danger"  # manual only


@dataclass
class Action:
    """How to clean an item: run a command, or follow a manual hint."""

    type: str
    command: str = ""
    shell: str = ""
    hint: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialisable form; empty optional fields are left out."""
        data: dict[str, Any] = {"type": self.type}
        for key in ("command", "shell", "hint"):
            value = getattr(self, key)
            if value:
                data[key] = value
        return data


def _format_time(moment: datetime | None) -> str:
    if moment is None:
        return _ZERO_TIME
    text = moment.isoformat()
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


@dataclass
class Prey:
    """An identified cleanable item."""

    path: str
    size_bytes: int
    kind: PreyKind
    risk: Risk
    platform: str  # "windows", "darwin", "linux" or "all"
    description: str
    action: Action
    last_access: datetime | None = None
    # Items that are tiny or regenerate immediately; cleaning them barely matters.
    cosmetic: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialisable form matching the report layout."""
        data: dict[str, Any] = {
            "path": self.path,
            "size_bytes": self.size_bytes,
            "kind": PreyKind(self.kind).value,
            "risk": Risk(self.risk).value,
            "platform": self.platform,
            "description": self.description,
            "action": self.action.to_dict(),
            "last_access": _format_time(self.last_access),
        }
        if self.cosmetic:
            data["cosmetic"] = True
        return data


@dataclass
class Rule:
    """A path pattern that identifies prey."""

    pattern: str
    kind: PreyKind
    risk: Risk
    platform: str
    description: str
    action: Action = field(default_factory=lambda: Action(type="manual"))
    cosmetic: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialisable form; ``cosmetic`` is only present when set."""
        data: dict[str, Any] = {
            "pattern": self.pattern,
            "kind": PreyKind(self.kind).value,
            "risk": Risk(self.risk).value,
            "platform": self.platform,
            "description": self.description,
            "action": self.action.to_dict(),
        }
        if self.cosmetic:
            data["cosmetic"] = True
        return data