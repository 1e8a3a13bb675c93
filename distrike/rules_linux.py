"""Hand-curated prey rules for Linux."""

from __future__ import annotations

from .prey import Action, PreyKind, Risk, Rule

_PLATFORM = "linux"


def _command(pattern: str, kind: PreyKind, risk: Risk, description: str, command: str,
             cosmetic: bool = False) -> Rule:
    return Rule(
        pattern=pattern,
        kind=kind,
        risk=risk,
        platform=_PLATFORM,
        description=description,
        action=Action(type="command", command=command, shell="bash"),
        cosmetic=cosmetic,
    )


def _manual(pattern: str, kind: PreyKind, risk: Risk, description: str, hint: str,
            cosmetic: bool = False) -> Rule:
    return Rule(
        pattern=pattern,
        kind=kind,
        risk=risk,
        platform=_PLATFORM,
        description=description,
        action=Action(type="manual", hint=hint),
        cosmetic=cosmetic,
    )


def linux_rules() -> list[Rule]:
    """Return the Linux-specific rules, in match-priority order."""
    C, T, L, O = PreyKind.CACHE, PreyKind.TEMP, PreyKind.LOG, PreyKind.ORPHAN
    SAFE, CAUTION = Risk.SAFE, Risk.CAUTION
    return [
        # Package managers
        _command("/var/cache/apt", C, SAFE, "APT package cache", "sudo apt clean"),
        _command("/var/cache/dnf", C, SAFE, "DNF/YUM package cache", "sudo dnf clean all"),
        _command("/var/cache/yum", C, SAFE, "YUM package cache", "sudo yum clean all"),
        _command("/var/cache/pacman/pkg", C, SAFE, "Pacman downloaded package cache",
                 "sudo pacman -Scc --noconfirm"),
        _manual("/var/lib/snapd", C, CAUTION, "Snap package data",
                "sudo snap remove --purge <unused-snap>"),
        _command("__runtime_detect__orphan_packages", O, SAFE, "Orphaned packages",
                 "sudo apt autoremove -y"),
        # Python
        _manual("*/__pycache__", C, SAFE, "Python bytecode cache (auto-regenerates on import)",
                "find . -type d -name __pycache__ -exec rm -rf {} +", cosmetic=True),
        _manual("**/*.pyc", C, SAFE, "Compiled Python bytecode files",
                "find . -name '*.pyc' -delete", cosmetic=True),
        _command("*/.cache/pip", C, SAFE, "pip wheel/package download cache", "pip cache purge"),
        _manual("*/.cache/pipenv", C, SAFE, "pipenv package cache", "rm -rf ~/.cache/pipenv"),
        _command("*/.conda/pkgs", C, SAFE, "Conda downloaded package tarballs (~500MB–5GB)",
                 "conda clean --all -y"),
        _command("*/anaconda3/pkgs", C, SAFE, "Anaconda3 package cache", "conda clean --all -y"),
        _command("*/miniconda3/pkgs", C, SAFE, "Miniconda3 package cache", "conda clean --all -y"),
        _manual("*/.ipynb_checkpoints", C, SAFE, "Jupyter notebook auto-checkpoint files",
                "find ~ -type d -name .ipynb_checkpoints -exec rm -rf {} +", cosmetic=True),
        # AI / ML
        _manual("*/.cache/huggingface/hub", C, SAFE, "Hugging Face model hub cache (can be 100+ GB)",
                "rm -rf ~/.cache/huggingface/hub"),
        _manual("*/.cache/huggingface/datasets", C, SAFE, "Hugging Face datasets cache",
                "rm -rf ~/.cache/huggingface/datasets"),
        _manual("*/.cache/torch/hub", C, SAFE, "PyTorch hub model cache (~500MB–50GB)",
                "rm -rf ~/.cache/torch/hub"),
        _manual("*/.torch", C, SAFE, "PyTorch legacy model cache", "rm -rf ~/.torch"),
        _manual("*/.nv", C, SAFE,
                "NVIDIA CUDA compiled kernel/shader cache (regenerates automatically)",
                "rm -rf ~/.nv", cosmetic=True),
        _manual("*/.cache/cuda", C, SAFE, "CUDA runtime cache", "rm -rf ~/.cache/cuda", cosmetic=True),
        # JS / Node
        _command("*/.cache/npm", C, SAFE, "npm package download cache", "npm cache clean --force"),
        _command("*/.npm", C, SAFE, "npm legacy cache directory", "npm cache clean --force"),
        _command("*/.cache/yarn", C, SAFE, "Yarn package cache (~300MB–1.5GB)", "yarn cache clean"),
        # Compiled languages
        _manual("*/.cargo/registry", C, SAFE, "Cargo crate registry cache (~200MB–2GB)",
                "rm -rf ~/.cargo/registry"),
        _manual("*/.cargo/git", C, SAFE, "Cargo git-source cache", "rm -rf ~/.cargo/git"),
        _command("*/go/pkg/mod", C, SAFE, "Go module download cache (~500MB–5GB)",
                 "go clean -modcache"),
        _command("*/.ccache", C, SAFE,
                 "ccache compiler output cache (safe to purge, rebuilds on next compile)",
                 "ccache --clear", cosmetic=True),
        _manual("**/CMakeFiles", C, SAFE, "CMake generated build files",
                "find . -type d -name CMakeFiles -exec rm -rf {} +"),
        # JVM
        _manual("*/.m2/repository", C, SAFE, "Maven local dependency repository (~1GB–10GB)",
                "rm -rf ~/.m2/repository"),
        _manual("*/.gradle/caches", C, CAUTION,
                "Gradle build cache (~2GB–35GB); check for API keys in gradle.properties first",
                "rm -rf ~/.gradle/caches ~/.gradle/.tmp"),
        _manual("*/.cache/coursier", C, SAFE, "Coursier/SBT artifact cache", "rm -rf ~/.cache/coursier"),
        # IDEs and editors
        _manual("*/.cache/JetBrains", C, SAFE,
                "JetBrains IDE cache (old versions accumulate after updates, ~1GB–30GB)",
                "rm -rf ~/.cache/JetBrains", cosmetic=True),
        _manual("*/.vim/.swp", T, SAFE, "Vim swap files", "rm -rf ~/.vim/.swp/*", cosmetic=True),
        _manual("*/.vim/.backup", T, SAFE, "Vim backup files", "rm -rf ~/.vim/.backup/*", cosmetic=True),
        _manual("*/.vim/.undo", T, SAFE, "Vim persistent undo history", "rm -rf ~/.vim/.undo/*",
                cosmetic=True),
        _manual("*/.emacs.d/auto-save-list", T, SAFE, "Emacs auto-save session records",
                "rm -rf ~/.emacs.d/auto-save-list/*", cosmetic=True),
        _manual("*/.emacs.d/backups", T, SAFE, "Emacs file backups (tilde files)",
                "rm -rf ~/.emacs.d/backups/*", cosmetic=True),
        # Browsers
        _manual("*/.cache/google-chrome/Default/Cache", C, SAFE, "Google Chrome cache",
                "Delete cache contents"),
        _manual("*/.cache/chromium/Default/Cache", C, SAFE, "Chromium cache", "Delete cache contents"),
        _manual("*/.config/BraveSoftware/Brave-Browser/*/Cache", C, SAFE, "Brave browser cache",
                "Delete cache contents"),
        _manual("*/.mozilla/firefox/*/cache2", C, SAFE, "Firefox disk cache", "Delete cache2 contents"),
        _manual("*/.cache/firefox", C, SAFE, "Firefox cache (snap/flatpak layout)",
                "rm -rf ~/.cache/firefox"),
        # App caches
        _manual("*/.config/discord/Cache", C, SAFE, "Discord cache", "Delete cache contents"),
        _manual("*/.config/Code/Cache", C, SAFE, "VS Code cache", "Delete cache contents"),
        _manual("*/.config/Code/CachedData", C, SAFE, "VS Code cached data", "Delete cached data"),
        _manual("*/.cache/fontconfig", C, SAFE, "Font index cache (regenerates on next GUI app launch)",
                "rm -rf ~/.cache/fontconfig/*", cosmetic=True),
        _manual("*/.cache/R", C, SAFE, "R package/data cache", "rm -rf ~/.cache/R/*"),
        _manual("*/.wine/drive_c/users/*/AppData/Local/Temp", T, SAFE, "Wine Windows temp folder",
                "rm -rf ~/.wine/drive_c/users/*/AppData/Local/Temp/*"),
        # Containers
        _command("/var/lib/docker/overlay2", C, CAUTION,
                 "Docker image layers (run 'docker system df' first)", "docker system prune -af"),
        _command("*/.local/share/containers/storage", C, CAUTION,
                 "Podman rootless container/image storage (~500MB–50GB)",
                 "podman system prune --all -f"),
        _command("*/.apptainer/cache", C, SAFE,
                 "Apptainer/Singularity image layer cache (~500MB–20GB, common on HPC)",
                 "apptainer cache clean --force"),
        _command("*/.singularity/cache", C, SAFE, "Singularity image layer cache (legacy path)",
                 "singularity cache clean --force"),
        _manual("/var/tmp/flatpak-cache*", C, SAFE, "Flatpak temporary cache", "Delete flatpak cache"),
        _manual("*/.cache/flatpak", C, SAFE, "Flatpak user cache", "rm -rf ~/.cache/flatpak"),
        # Logs
        _command("/var/log", L, SAFE, "System logs (journalctl)", "sudo journalctl --vacuum-time=7d"),
        _command("/var/log/*.gz", L, SAFE, "Compressed rotated log files",
                 "sudo find /var/log -name '*.gz' -delete"),
        _manual("*/.local/share/*/logs", L, SAFE, "Application log files (Discord, Slack, etc.)",
                "find ~/.local/share -name '*.log' -mtime +30 -delete"),
        # Misc
        _manual("*/.local/share/Trash", T, SAFE, "User trash (deleted files)", "Empty trash"),
        _manual("*/.cache/thumbnails", C, SAFE, "Image thumbnail cache (regenerates on folder browse)",
                "Delete thumbnails, will regenerate", cosmetic=True),
        _command("/var/crash", T, SAFE, "Crash reports", "sudo rm -f /var/crash/*"),
        _command("/var/lib/apport/coredump", T, SAFE, "Apport core dump archives",
                 "sudo rm -f /var/lib/apport/coredump/*"),
    ]