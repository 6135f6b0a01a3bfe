"""Search root resolution.

Precedence, first match wins:
1. ``search_paths`` entry keyed by the workspace's VC root (verbatim)
2. the VC root itself
3. the current file's directory
4. TagIndexError.no_resolvable_root
"""

from __future__ import annotations

from pathlib import Path

import structlog

from gqltags.config.models import TagsConfig
from gqltags.core.errors import TagIndexError
from gqltags.index.models import Workspace

logger = structlog.get_logger()


def _base_directory(workspace: Workspace) -> Path:
    directory = workspace.vc_root or workspace.file_directory
    if directory is None:
        path = workspace.current_file_path
        raise TagIndexError.no_resolvable_root(str(path) if path else None)
    return directory


def resolve_search_roots(workspace: Workspace, config: TagsConfig) -> list[Path]:
    """Ordered, de-duplicated list of directories to scan for ``workspace``."""
    if workspace.vc_root is not None:
        configured = config.search_paths.get(str(workspace.vc_root.resolve()))
        if configured is not None:
            roots = list(dict.fromkeys(Path(r) for r in configured))
            logger.debug(
                "search_roots_configured",
                vc_root=str(workspace.vc_root),
                roots=[str(r) for r in roots],
            )
            return roots
    return [_base_directory(workspace)]


def resolve_tag_file_path(workspace: Workspace, config: TagsConfig) -> Path:
    """Where the tag file for ``workspace`` lives: its VC root, else its directory."""
    return _base_directory(workspace) / config.tag_file_name
