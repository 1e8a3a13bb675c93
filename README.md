# distrike

A library for finding reclaimable disk space. It lists mounted drives, matches
scanned paths against known cache, temp, log and build-output rules, and
reports what Docker could free.

## Installation

```
pip install distrike
```

Add the `test` extra (`pip install distrike[test]`) to run the test suite.

## Drives

```python
from distrike.drives import enumerate_drives
from distrike.units import format_size

for drive in enumerate_drives():
    print(drive.path, drive.fs_type, format_size(drive.free_bytes), "free")
```

Each result is a `DriveInfo` with `path`, `fs_type`, `total_bytes`,
`free_bytes`, `used_bytes`, `label` and `removable`; `to_dict()` gives a
serialisable form.

On Linux and macOS, pseudo filesystems, squashfs mounts, overlay mounts outside
`/mnt/`, and system paths such as `/proc`, `/run`, `/tmp`, `/snap` or
`/mnt/wsl` are left out, as are mounts with zero capacity and mounts that are
not directories. A device already listed is shown again only under a
user-created `/mnt/` path. The filters are available as `is_system_mount` and
`is_user_visible`. On Windows, drive roots such as `C:\` are listed.

## Matching paths against rules

```python
from distrike.matcher import DirEntry, Matcher
from distrike.rules import builtin_rules

matcher = Matcher(builtin_rules("linux"), whitelist=["*/.cache/JetBrains"], min_size=0)
found = matcher.match([
    DirEntry(path="/home/me/.cache/pip", size_bytes=512 * 1024 * 1024, is_dir=True),
])
for prey in found:
    print(prey.path, prey.kind.value, prey.risk.value, prey.description)
```

Rules are tried in order and the first match wins. A directory entry with size
0 is measured on disk. Entries smaller than `min_size` or covered by the
whitelist are dropped. When a parent and a child both match, only the parent
is kept. Results are sorted largest first.

Patterns may be `*.ext` (extension, case-insensitive), `*/some/path` (suffix
anywhere in the path, wildcards allowed), or a plain glob or absolute path.
`match_pattern(path, pattern)` and `measure_dir_size(path)` can be used on
their own.

Rule sets, in `distrike.rules`:

- `common_cache_rules()`: package manager and build caches on every platform
- `platform_rules(platform)`: rules for `"linux"` or `"darwin"` (defaults to the running system; other platforms get none)
- `model_weight_rules()`: large ML model files (`*.safetensors`, `*.gguf`, and so on); not part of the built-in set
- `discovered_rules()`: currently always empty
- `builtin_rules(platform)`: common rules, then platform rules, then discovered rules

The Linux and macOS lists themselves are `linux_rules()` in
`distrike.rules_linux` and `darwin_rules()` in `distrike.rules_darwin`.
`Rule`, `Prey`, `Action`, `PreyKind` and `Risk` live in `distrike.prey`.

## Docker

```python
from distrike.docker import DockerDetector

preys, status = DockerDetector().detect()
print(status.available, status.reclaimable_bytes)
```

The detector runs `docker info`, `docker system df` and `docker ps` to report
unused images, unused volumes, build cache and stopped containers. If Docker is
not installed or its daemon is not running, `status.available` is `False` and
no items are returned. `parse_size_string` reads Docker's decimal size strings
such as `"2.5GB"`.

## Units

```python
from distrike.units import parse_size, format_size, parse_duration, parse_date_shortcut

parse_size("20GB")          # 21474836480
format_size(1536)           # "1.5 KB"
parse_duration("7d")        # timedelta(days=7)
parse_date_shortcut("lw")   # Monday of last week, 00:00 local time
```

`normalize_path` tidies a path; on Windows it also turns `D:` into `D:\` and
forward slashes into backslashes. The parsers raise `ValueError` on bad input.

## What it does not do

This is a library only: it installs no command. It does not delete anything;
rules and found items carry a suggested command or hint, and running it is left
to the caller. It does not scan the filesystem to produce directory entries,
does not look for applications installed in unusual places, does not read the
Windows registry of cleanup handlers, has no Windows-specific rule list, and
does not send desktop notifications.