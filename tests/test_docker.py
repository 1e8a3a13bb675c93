import json
import subprocess
from unittest.mock import patch

import pytest

from distrike.docker import DockerDetector, DockerStatus, parse_size_string
from distrike.prey import PreyKind, Risk

DF_LINES = [
    {"Type": "Images", "TotalCount": 5, "Active": 2, "Size": "3GB", "Reclaimable": "1GB (33%)"},
    {"Type": "Containers", "TotalCount": 2, "Active": 1, "Size": "10MB", "Reclaimable": "0B (0%)"},
    {"Type": "Local Volumes", "TotalCount": 3, "Active": 3, "Size": "1GB", "Reclaimable": "0B"},
    {"Type": "Build Cache", "TotalCount": 4, "Active": 0, "Size": "2GB", "Reclaimable": "2GB"},
]
PS_LINES = [
    {"ID": "abc123", "Names": "web", "Image": "nginx", "Status": "Exited (0)",
     "Size": "5MB (virtual 100MB)", "State": "exited"},
]


def _jsonl(rows):
    return "\n".join(json.dumps(row) for row in rows)


def _fake_run(df="", ps="", info_ok=True):
    def run(args, **kwargs):
        sub = list(args[1:])
        if sub == ["info"]:
            if not info_ok:
                raise subprocess.CalledProcessError(1, args)
            return subprocess.CompletedProcess(args, 0, b"", b"")
        if sub[:2] == ["system", "df"]:
            return subprocess.CompletedProcess(args, 0, df.encode(), b"")
        if sub[:2] == ["ps", "-a"]:
            return subprocess.CompletedProcess(args, 0, ps.encode(), b"")
        raise AssertionError(f"unexpected command {args}")

    return run


def test_parse_size_string_units():
    assert parse_size_string("1kB") == 1000
    assert parse_size_string("1GB") == 1000 * parse_size_string("1MB")
    assert parse_size_string("1TB") == 1000 * parse_size_string("1GB")
    assert parse_size_string("2.5GB (50%)") == parse_size_string("2.5GB")


@pytest.mark.parametrize("text", ["", "0B", "0", "junk", "GB"])
def test_parse_size_string_zero(text):
    assert parse_size_string(text) == 0


def test_detect_full():
    detector = DockerDetector(executable="/fake/docker")
    fake = _fake_run(df=_jsonl(DF_LINES), ps=_jsonl(PS_LINES))
    with patch("distrike.docker.subprocess.run", side_effect=fake):
        preys, status = detector.detect()

    by_path = {p.path: p for p in preys}
    assert set(by_path) == {"docker:images", "docker:buildcache", "docker:container/abc123"}
    assert status.available is True
    assert status.dangling_images == 3
    assert status.unused_volumes == 0
    assert status.stopped_containers == 1
    assert status.build_cache_bytes == parse_size_string("2GB")
    assert status.reclaimable_bytes == sum(
        parse_size_string(s) for s in ("1GB", "0B", "0B", "2GB", "5MB")
    )

    container = by_path["docker:container/abc123"]
    assert container.description == "Stopped container: web (nginx)"
    assert container.action.command == "docker rm abc123"
    assert container.kind is PreyKind.ORPHAN
    assert by_path["docker:images"].action.command == "docker image prune -a"
    assert by_path["docker:buildcache"].risk is Risk.SAFE


def test_detect_without_docker():
    detector = DockerDetector()
    with patch("distrike.docker.shutil.which", return_value=None):
        preys, status = detector.detect()
    assert preys == []
    assert status == DockerStatus(available=False)


def test_detect_daemon_not_running():
    detector = DockerDetector(executable="/fake/docker")
    with patch("distrike.docker.subprocess.run", side_effect=_fake_run(info_ok=False)):
        preys, status = detector.detect()
    assert preys == []
    assert status.available is False


def test_find_docker_prefers_configured_path():
    assert DockerDetector(executable="/opt/x/docker").find_docker() == "/opt/x/docker"


def test_find_docker_uses_path_lookup():
    with patch("distrike.docker.shutil.which", return_value="/usr/bin/docker"):
        assert DockerDetector().find_docker() == "/usr/bin/docker"


def test_parse_disk_usage_skips_malformed_lines():
    rows = "not json\n" + json.dumps(
        {"Type": "Images", "TotalCount": "5", "Active": 2, "Reclaimable": "1GB"}
    )
    detector = DockerDetector(executable="/fake/docker")
    status = DockerStatus(available=True)
    with patch("distrike.docker.subprocess.run", side_effect=_fake_run(df=rows)):
        preys = detector.parse_disk_usage(status)
    assert preys == []
    assert status.reclaimable_bytes == 0


def test_parse_disk_usage_volumes():
    rows = _jsonl([{"Type": "Local Volumes", "TotalCount": 4, "Active": 1, "Size": "3GB", "Reclaimable": "2GB"}])
    detector = DockerDetector(executable="/fake/docker")
    status = DockerStatus(available=True)
    with patch("distrike.docker.subprocess.run", side_effect=_fake_run(df=rows)):
        preys = detector.parse_disk_usage(status)
    assert [p.path for p in preys] == ["docker:volumes"]
    assert preys[0].risk is Risk.CAUTION
    assert preys[0].size_bytes == parse_size_string("2GB")
    assert status.unused_volumes == 3


def test_parse_stopped_containers_name_falls_back_to_id():
    rows = _jsonl([{"ID": "def456", "Names": "", "Image": "redis", "Size": "0B"}])
    detector = DockerDetector(executable="/fake/docker")
    status = DockerStatus(available=True)
    with patch("distrike.docker.subprocess.run", side_effect=_fake_run(ps=rows)):
        preys = detector.parse_stopped_containers(status)
    assert preys[0].description == "Stopped container: def456 (redis)"
    assert preys[0].size_bytes == 0
    assert status.stopped_containers == 1


def test_parse_disk_usage_command_failure_raises():
    def failing(args, **kwargs):
        raise subprocess.CalledProcessError(1, args)

    detector = DockerDetector(executable="/fake/docker")
    with patch("distrike.docker.subprocess.run", side_effect=failing):
        with pytest.raises(RuntimeError, match="docker system df"):
            detector.parse_disk_usage(DockerStatus())