"""Enumeration of mounted drives and partitions with space information."""

from __future__ import annotations

import os
import re
import sys
from dataclasses import dataclass
from typing import Any

import psutil

# Filesystem types that are never real storage.
PSEUDO_FS = frozenset(
    {
        "proc",
        "sysfs",
        "devfs",
        "devtmpfs",
        "securityfs",
        "cgroup",
        "cgroup2",
        "pstore",
        "debugfs",
        "tracefs",
        "hugetlbfs",
        "mqueue",
        "binfmt_misc",
        "configfs",
        "fusectl",
        "autofs",
        "efivarfs",
        "bpf",
        "nsfs",
        "rpc_pipefs",
        "nfsd",
        "devpts",
        "rootfs",  # WSL/initrd initial root namespace
    }
)

# Mount path prefixes that are always system-internal, whatever the filesystem.
SYSTEM_MOUNT_PREFIXES = (
    "/run",
    "/dev",
    "/sys",
    "/proc",
    "/tmp",
    "/snap",
    "/mnt/wslg",
    "/mnt/wsl",
    "/usr/lib/wsl",
)

_DRIVE_ROOT = re.compile(r"[A-Za-z]:\\")


@dataclass
class DriveInfo:
    """A drive or mount point with its capacity figures."""

    path: str
    fs_type: str
    total_bytes: int
    free_bytes: int
    used_bytes: int
    label: str = ""
    removable: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialisable form; the label is left out when empty."""
        data: dict[str, Any] = {"path": self.path}
        if self.label:
            data["label"] = self.label
        data.update(
            fs_type=self.fs_type,
            total_bytes=self.total_bytes,
            free_bytes=self.free_bytes,
            used_bytes=self.used_bytes,
            removable=self.removable,
        )
        return data


def is_system_mount(mountpoint: str, fstype: str) -> bool:
    """Whether a mount is system-internal and should be hidden from the user."""
    if fstype in PSEUDO_FS or fstype == "squashfs":
        return True
    if any(mountpoint == prefix or mountpoint.startswith(prefix + "/") for prefix in SYSTEM_MOUNT_PREFIXES):
        return True
    # overlay outside /mnt/ is Docker layers, WSL overlays and the like
    return fstype == "overlay" and not mountpoint.startswith("/mnt/")


def is_user_visible(mountpoint: str, fstype: str) -> bool:
    """Whether a mount was explicitly created by the user under /mnt/."""
    return mountpoint.startswith("/mnt/") and not is_system_mount(mountpoint, fstype)


def _list_partitions():
    try:
        return psutil.disk_partitions(all=True)
    except (OSError, RuntimeError) as exc:
        raise OSError(f"listing partitions: {exc}") from exc


def _enumerate_unix() -> list[DriveInfo]:
    drives: list[DriveInfo] = []
    seen_mounts: set[str] = set()
    seen_devices: set[str] = set()

    for part in _list_partitions():
        mountpoint, fstype, device = part.mountpoint, part.fstype, part.device
        if is_system_mount(mountpoint, fstype) or mountpoint in seen_mounts:
            continue
        # File-level bind mounts are not storage.
        if not os.path.isdir(mountpoint):
            continue
        # The same device is shown once, unless a later mount is user-created.
        if device and device in seen_devices and not is_user_visible(mountpoint, fstype):
            continue
        try:
            usage = psutil.disk_usage(mountpoint)
        except OSError:
            continue
        if usage.total == 0:
            continue

        seen_mounts.add(mountpoint)
        if device:
            seen_devices.add(device)
        drives.append(
            DriveInfo(
                path=mountpoint,
                fs_type=fstype,
                total_bytes=int(usage.total),
                free_bytes=int(usage.free),
                used_bytes=int(usage.used),
            )
        )
    return drives


def _enumerate_windows() -> list[DriveInfo]:
    drives: list[DriveInfo] = []
    seen: set[str] = set()
    for part in _list_partitions():
        root = part.mountpoint or part.device
        if not _DRIVE_ROOT.fullmatch(root):
            continue
        root = root[0].upper() + root[1:]
        if root in seen:
            continue
        opts = {opt.strip() for opt in part.opts.split(",")}
        try:
            usage = psutil.disk_usage(root)
        except OSError:
            # No media or no space information (e.g. empty card reader).
            continue
        if "cdrom" in opts and usage.total == 0:
            continue
        seen.add(root)
        total = int(usage.total)
        free = int(usage.free)
        drives.append(
            DriveInfo(
                path=root,
                fs_type=part.fstype,
                total_bytes=total,
                free_bytes=free,
                used_bytes=total - free,
                removable="removable" in opts,
            )
        )
    drives.sort(key=lambda drive: drive.path)
    return drives


def enumerate_drives() -> list[DriveInfo]:
    """Return all mounted drives or partitions that hold real storage."""
    if sys.platform == "win32":
        return _enumerate_windows()
    return _enumerate_unix()