"""Find reclaimable disk space: drives, cache and temp rules, path matching and Docker leftovers."""

__version__ = "0.1.0"

__all__ = [
    "docker",
    "drives",
    "matcher",
    "prey",
    "rules",
    "rules_darwin",
    "rules_linux",
    "units",
]