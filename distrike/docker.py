"""Detection of reclaimable Docker resources."""

from __future__ import annotations

import json
import re
import shutil
import subprocess
import sys
from dataclasses import dataclass
from typing import Any

from .prey import Action, Prey, PreyKind, Risk

_FLOAT_PREFIX = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_SIZE_MULTIPLIERS = (
    ("TB", 1e12),
    ("GB", 1e9),
    ("MB", 1e6),
    ("kB", 1e3),
    ("B", 1),
)

_DF_FIELDS = {"Type": str, "TotalCount": int, "Active": int, "Size": str, "Reclaimable": str}
_CONTAINER_FIELDS = {"ID": str, "Names": str, "Image": str, "Status": str, "Size": str, "State": str}


@dataclass
class DockerStatus:
    """Docker disk usage summary."""

    available: bool = False
    dangling_images: int = 0
    stopped_containers: int = 0
    unused_volumes: int = 0
    build_cache_bytes: int = 0
    reclaimable_bytes: int = 0


def parse_size_string(s: str) -> int:
    """Approximate bytes for Docker sizes like "2.5GB", "100MB" or "1.2kB"; 0 if unparsable."""
    idx = s.find("(")
    if idx > 0:
        s = s[:idx].strip()
    s = s.strip()
    if s in ("", "0B", "0"):
        return 0
    for suffix, mult in _SIZE_MULTIPLIERS:
        if s.endswith(suffix):
            match = _FLOAT_PREFIX.match(s[: -len(suffix)].strip())
            if match:
                return int(float(match.group()) * mult)
    return 0


def _decode(line: str, fields: dict[str, type]) -> dict[str, Any] | None:
    """Decode one JSON object into the given typed fields; None when it does not fit."""
    try:
        raw = json.loads(line)
    except ValueError:
        return None
    result: dict[str, Any] = {name: kind() for name, kind in fields.items()}
    if raw is None:
        return result
    if not isinstance(raw, dict):
        return None
    for key, value in raw.items():
        name = key if key in fields else next((f for f in fields if f.lower() == key.lower()), None)
        if name is None or value is None:
            continue
        kind = fields[name]
        if kind is int and (isinstance(value, bool) or not isinstance(value, int)):
            return None
        if kind is str and not isinstance(value, str):
            return None
        result[name] = value
    return result


def _lines(output: bytes) -> list[str]:
    text = output.decode("utf-8", errors="replace").strip()
    return [line.strip() for line in text.split("\n") if line.strip()]


@dataclass
class DockerDetector:
    """Finds cleanable Docker images, volumes, build cache and stopped containers."""

    executable: str = ""

    def detect(self) -> tuple[list[Prey], DockerStatus]:
        """Check Docker and return cleanable items with a usage summary."""
        docker = self.find_docker()
        if not docker:
            return [], DockerStatus(available=False)
        self.executable = docker

        try:
            subprocess.run(
                [docker, "info"],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=True,
            )
        except (OSError, subprocess.SubprocessError):
            return [], DockerStatus(available=False)

        status = DockerStatus(available=True)
        preys: list[Prey] = []
        for step in (self.parse_disk_usage, self.parse_stopped_containers):
            try:
                preys.extend(step(status))
            except RuntimeError:
                continue
        return preys, status

    def find_docker(self) -> str:
        """Path of the docker executable, or an empty string when none is found."""
        if self.executable:
            return self.executable
        found = shutil.which("docker")
        if found:
            return found

        if sys.platform == "win32":
            candidates = [
                r"C:\Program Files\Docker\Docker\resources\bin\docker.exe",
                r"C:\ProgramData\DockerDesktop\version-bin\docker.exe",
            ]
        elif sys.platform == "darwin":
            candidates = ["/usr/local/bin/docker", "/opt/homebrew/bin/docker"]
        else:
            candidates = ["/usr/bin/docker", "/usr/local/bin/docker", "/snap/bin/docker"]
        return next((c for c in candidates if shutil.which(c)), "")

    def _output(self, args: list[str], what: str) -> bytes:
        try:
            completed = subprocess.run(
                [self.executable, *args],
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=True,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            raise RuntimeError(f"{what}: {exc}") from exc
        return completed.stdout or b""

    def parse_disk_usage(self, status: DockerStatus) -> list[Prey]:
        """Run ``docker system df`` and turn reclaimable space into prey."""
        output = self._output(["system", "df", "--format", "{{json .}}"], "docker system df")
        preys: list[Prey] = []
        for line in _lines(output):
            entry = _decode(line, _DF_FIELDS)
            if entry is None:
                continue
            reclaimable = parse_size_string(entry["Reclaimable"])
            status.reclaimable_bytes += reclaimable
            kind = entry["Type"]
            inactive = entry["TotalCount"] - entry["Active"]

            if kind == "Images" and inactive > 0:
                status.dangling_images = inactive
                if reclaimable > 0:
                    preys.append(
                        Prey(
                            path="docker:images",
                            size_bytes=reclaimable,
                            kind=PreyKind.CACHE,
                            risk=Risk.SAFE,
                            platform="all",
                            description=f"Docker dangling/unused images ({inactive} inactive)",
                            action=Action(type="command", command="docker image prune -a"),
                        )
                    )
            elif kind == "Local Volumes" and inactive > 0:
                status.unused_volumes = inactive
                if reclaimable > 0:
                    preys.append(
                        Prey(
                            path="docker:volumes",
                            size_bytes=reclaimable,
                            kind=PreyKind.ORPHAN,
                            risk=Risk.CAUTION,
                            platform="all",
                            description=f"Docker unused volumes ({inactive})",
                            action=Action(type="command", command="docker volume prune"),
                        )
                    )
            elif kind == "Build Cache":
                status.build_cache_bytes = parse_size_string(entry["Size"])
                if reclaimable > 0:
                    preys.append(
                        Prey(
                            path="docker:buildcache",
                            size_bytes=reclaimable,
                            kind=PreyKind.CACHE,
                            risk=Risk.SAFE,
                            platform="all",
                            description="Docker build cache",
                            action=Action(type="command", command="docker builder prune"),
                        )
                    )
        return preys

    def parse_stopped_containers(self, status: DockerStatus) -> list[Prey]:
        """List exited containers as prey."""
        output = self._output(
            ["ps", "-a", "--filter", "status=exited", "--format", "{{json .}}"],
            "docker ps",
        )
        preys: list[Prey] = []
        for line in _lines(output):
            container = _decode(line, _CONTAINER_FIELDS)
            if container is None:
                continue
            status.stopped_containers += 1
            size = parse_size_string(container["Size"])
            status.reclaimable_bytes += size
            ident = container["ID"]
            name = container["Names"] or ident
            preys.append(
                Prey(
                    path=f"docker:container/{ident}",
                    size_bytes=size,
                    kind=PreyKind.ORPHAN,
                    risk=Risk.SAFE,
                    platform="all",
                    description=f"Stopped container: {name} ({container['Image']})",
                    action=Action(type="command", command=f"docker rm {ident}"),
                )
            )
        return preys