"""Directory names the entity scan never descends into.

HARDCODED_DIRS are VCS internals and are always pruned.
DEFAULT_PRUNABLE_DIRS are dependency and cache directories. They may hold
vendored schema copies, so they are only pruned when
``tags.prune_default_dirs`` is set. Users add more via ``tags.extra_prune_dirs``.
"""

from __future__ import annotations

from collections.abc import Iterable

HARDCODED_DIRS: frozenset[str] = frozenset(
    (
        ".git",
        ".svn",
        ".hg",
        ".bzr",
        # gqltags data
        ".gqltags",
    )
)

DEFAULT_PRUNABLE_DIRS: frozenset[str] = frozenset(
    (
        # JavaScript/Node.js ecosystem
        "node_modules",
        ".npm",
        ".yarn",
        ".pnpm-store",
        ".next",
        ".turbo",
        # Python ecosystem
        ".venv",
        "venv",
        "__pycache__",
        ".pytest_cache",
        ".mypy_cache",
        ".tox",
        # JVM / general build outputs
        ".gradle",
        ".idea",
    )
)

PRUNABLE_DIRS: frozenset[str] = HARDCODED_DIRS | DEFAULT_PRUNABLE_DIRS


def prune_set(extra: Iterable[str] = (), *, include_defaults: bool = False) -> frozenset[str]:
    """VCS internals, optionally the dependency tier, plus user-supplied names."""
    base = PRUNABLE_DIRS if include_defaults else HARDCODED_DIRS
    return base | frozenset(extra)
