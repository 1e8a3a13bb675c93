"""Hand-curated prey rules for macOS."""

from __future__ import annotations

from .prey import Action, PreyKind, Risk, Rule

_PLATFORM = "darwin"


def _command(pattern: str, kind: PreyKind, risk: Risk, description: str, command: str) -> Rule:
    return Rule(
        pattern=pattern,
        kind=kind,
        risk=risk,
        platform=_PLATFORM,
        description=description,
        action=Action(type="command", command=command),
    )


def _manual(pattern: str, kind: PreyKind, risk: Risk, description: str, hint: str) -> Rule:
    return Rule(
        pattern=pattern,
        kind=kind,
        risk=risk,
        platform=_PLATFORM,
        description=description,
        action=Action(type="manual", hint=hint),
    )


def darwin_rules() -> list[Rule]:
    """Return the macOS-specific rules, in match-priority order."""
    C, B, V = PreyKind.CACHE, PreyKind.BACKUP, PreyKind.VDISK
    SAFE, CAUTION, DANGER = Risk.SAFE, Risk.CAUTION, Risk.DANGER
    return [
        # Xcode
        _command("*/Library/Developer/Xcode/DerivedData", C, SAFE,
                 "Xcode build cache (often 80-200+ GB)",
                 "rm -rf ~/Library/Developer/Xcode/DerivedData/*"),
        _manual("*/Library/Developer/Xcode/iOS DeviceSupport", C, SAFE,
                "iOS device support files (~2.5 GB per version)",
                "Delete old iOS versions, Xcode re-downloads on demand"),
        # Homebrew
        _command("*/Library/Caches/Homebrew", C, SAFE, "Homebrew download cache",
                 "brew cleanup --prune=all"),
        # Simulators
        _command("*/Library/Developer/CoreSimulator", C, CAUTION,
                 "iOS/watchOS/tvOS simulator runtimes", "xcrun simctl delete unavailable"),
        # iPhone backup
        _manual("*/Library/Application Support/MobileSync/Backup", B, DANGER,
                "iPhone/iPad backup", "Verify backups are current before deleting"),
        # General caches
        _manual("*/Library/Caches", C, CAUTION, "Application caches",
                "Selectively delete per-app cache folders"),
        # Browser caches
        _manual("*/Google/Chrome/Default/Cache", C, SAFE, "Google Chrome cache",
                "Delete cache or chrome://settings/clearBrowserData"),
        _manual("*/Google/Chrome/Default/Service Worker/CacheStorage", C, SAFE,
                "Chrome Service Worker cache", "Delete cache storage"),
        _manual("*/Firefox/Profiles/*/cache2", C, SAFE, "Firefox disk cache", "Delete cache2 contents"),
        # Electron apps
        _manual("*/discord/Cache", C, SAFE, "Discord cache", "Delete cache contents"),
        _manual("*/Slack/Cache", C, SAFE, "Slack cache", "Delete cache contents"),
        _manual("*/Code/Cache", C, SAFE, "VS Code cache", "Delete cache contents"),
        _manual("*/Code/CachedData", C, SAFE, "VS Code cached data", "Delete cached data"),
        _manual("*/GPUCache", C, SAFE, "GPU shader cache (Electron/Chromium)", "Delete GPU cache"),
        # Docker
        _command("*/Docker/Data/vms/0/data/Docker.raw", V, CAUTION, "Docker Desktop disk image",
                 "docker system prune -af"),
        # Adobe
        _manual("*/Adobe/Common/Media Cache Files", C, SAFE, "Adobe Media Cache",
                "Purge from Premiere Pro preferences"),
        # Python
        _manual("*/__pycache__", C, SAFE, "Python bytecode cache", "Delete __pycache__ directories"),
        # Spotify
        _manual("*/Spotify/PersistentCache", C, SAFE, "Spotify offline cache",
                "Clear in Spotify settings"),
        # CocoaPods
        _command("*/Library/Caches/CocoaPods", C, SAFE, "CocoaPods spec and download cache",
                 "pod cache clean --all"),
    ]