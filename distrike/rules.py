"""Built-in prey rules and the order in which they are consulted."""

from __future__ import annotations

import sys

from .prey import Action, PreyKind, Risk, Rule
from .rules_darwin import darwin_rules
from .rules_linux import linux_rules

_ALL = "all"


def _command(pattern: str, kind: PreyKind, risk: Risk, description: str, command: str) -> Rule:
    return Rule(
        pattern=pattern,
        kind=kind,
        risk=risk,
        platform=_ALL,
        description=description,
        action=Action(type="command", command=command),
    )


def _manual(pattern: str, kind: PreyKind, risk: Risk, description: str, hint: str) -> Rule:
    return Rule(
        pattern=pattern,
        kind=kind,
        risk=risk,
        platform=_ALL,
        description=description,
        action=Action(type="manual", hint=hint),
    )


_VERIFY_HINT = "Verify model is no longer needed before deleting"
_CHECKPOINT_HINT = "Check if this is a training checkpoint or final weights"


def model_weight_rules() -> list[Rule]:
    """Rules for large model weight files; not part of :func:`builtin_rules`."""
    M, CAUTION = PreyKind.MODEL, Risk.CAUTION
    return [
        # File-extension rules
        _manual("*.safetensors", M, CAUTION, "HuggingFace safetensors model weight file", _VERIFY_HINT),
        _manual("*.gguf", M, CAUTION, "llama.cpp GGUF quantized model weight file", _VERIFY_HINT),
        _manual("*.ggml", M, CAUTION, "llama.cpp GGML model weight file (legacy format)", _VERIFY_HINT),
        _manual("*.pt", M, CAUTION, "PyTorch model weight or checkpoint file", _CHECKPOINT_HINT),
        _manual("*.pth", M, CAUTION, "PyTorch model state dict file", _CHECKPOINT_HINT),
        _manual("*.ckpt", M, CAUTION, "TensorFlow/PyTorch Lightning checkpoint file",
                "Keep latest checkpoint; remove older ones if training is done"),
        _manual("*.h5", M, CAUTION, "Keras/HDF5 model weight file", _VERIFY_HINT),
        _manual("*.hdf5", M, CAUTION, "HDF5 model weight file", _VERIFY_HINT),
        _manual("*.onnx", M, CAUTION, "ONNX exported model file", _VERIFY_HINT),
        _manual("*.pb", M, CAUTION, "TensorFlow SavedModel / protobuf model file", _VERIFY_HINT),
        # Directory-level rules
        _manual("*/snapshots", M, CAUTION,
                "HuggingFace hub model version snapshots (old versions safe to remove)",
                "huggingface-cli delete-cache to remove unused revisions"),
        _manual("*/checkpoints", M, CAUTION,
                "Training checkpoint directory (verify training is complete before deleting)",
                "Keep latest checkpoint; remove older step checkpoints"),
        _manual("*/weights", M, CAUTION, "Model weights directory", _VERIFY_HINT),
    ]


def common_cache_rules() -> list[Rule]:
    """Cross-platform rules for package managers, build outputs and tool caches."""
    C, SAFE, CAUTION = PreyKind.CACHE, Risk.SAFE, Risk.CAUTION
    return [
        _command("*/pip/cache", C, SAFE, "Python pip package cache", "pip cache purge"),
        _command("*/npm-cache", C, SAFE, "npm package cache", "npm cache clean --force"),
        _command("*/yarn/cache", C, SAFE, "Yarn package cache", "yarn cache clean"),
        _command("*/.cache/go-build", C, SAFE, "Go build cache", "go clean -cache"),
        _manual("*/.cargo/registry", C, SAFE,
                "Rust crate cache (skip: distrike config whitelist add ~/.cargo/registry)",
                "Delete registry/cache contents, cargo will re-download on demand"),
        _manual("*/.gradle/caches", C, SAFE, "Gradle build cache", "Delete contents of .gradle/caches/"),
        _command("*/conda/pkgs", C, SAFE, "Conda package cache", "conda clean --all -y"),
        _command("*/huggingface/hub", C, CAUTION, "HuggingFace model cache", "huggingface-cli delete-cache"),
        _manual("*/torch/hub", C, CAUTION, "PyTorch model cache", "Delete contents of torch/hub/"),
        # Node.js
        _manual("*/node_modules", C, CAUTION,
                "Node.js dependencies (can be reinstalled with npm/yarn install)",
                "Delete and run npm install to restore"),
        _manual("*/.next/cache", C, SAFE, "Next.js build cache", "Delete .next/cache"),
        # Python; a bare */dist is deliberately absent, it is far too broad.
        _manual("*/.tox", C, SAFE, "tox virtualenv cache", "Delete .tox directory"),
        _manual("*/.venv", C, CAUTION, "Python virtual environment",
                "Delete and recreate with python -m venv .venv"),
        # .NET
        _command("*/.nuget/packages", C, SAFE, "NuGet package cache", "dotnet nuget locals all --clear"),
        _manual("*/bin/Debug", C, SAFE, ".NET debug build output", "Delete bin/Debug, rebuild when needed"),
        _manual("*/bin/Release", C, CAUTION, ".NET release build output", "Delete bin/Release if not deployed"),
        # Maven
        _manual("*/.m2/repository", C, SAFE, "Maven local repository cache",
                "Delete and Maven will re-download dependencies"),
    ]


def _current_platform() -> str:
    if sys.platform.startswith("linux"):
        return "linux"
    if sys.platform == "darwin":
        return "darwin"
    if sys.platform == "win32":
        return "windows"
    return sys.platform


def platform_rules(platform: str | None = None) -> list[Rule]:
    """Hand-curated rules for ``platform`` (defaults to the running system)."""
    name = platform or _current_platform()
    if name == "linux":
        return linux_rules()
    if name == "darwin":
        return darwin_rules()
    return []


def discovered_rules() -> list[Rule]:
    """Rules discovered at runtime from the system's registry of cleanup handlers.

    No such registry is consulted here; plain-file cleanup configuration is
    already covered by the static platform rules.
    """
    return []


def builtin_rules(platform: str | None = None) -> list[Rule]:
    """All built-in rules in match-priority order.

    Common rules come first, then hand-curated platform rules, then
    runtime-discovered ones, so curated rules win on overlap.
    """
    return [*common_cache_rules(), *platform_rules(platform), *discovered_rules()]