"""Tag index construction: resolve roots, scan, sort."""

from __future__ import annotations

import time

import structlog

from gqltags.config.models import TagsConfig
from gqltags.index.models import BuildResult, TagIndex, Workspace
from gqltags.index.resolver import resolve_search_roots
from gqltags.index.scanner import EntityScanner

logger = structlog.get_logger()


class TagIndexBuilder:
    """Builds a fresh :class:`TagIndex` for a workspace.

    Raises TagIndexError.no_resolvable_root unchanged from the resolver. An
    empty scan is a valid, empty index.
    """

    def __init__(self, config: TagsConfig) -> None:
        self.config = config

    def build(self, workspace: Workspace) -> BuildResult:
        start = time.monotonic()
        roots = resolve_search_roots(workspace, self.config)

        scanner = EntityScanner.from_config(self.config)
        index = TagIndex.from_declarations(scanner.scan(roots))
        duration = time.monotonic() - start

        logger.info(
            "tag_index_built",
            roots=[str(r) for r in roots],
            files=scanner.files_scanned,
            declarations=len(index),
            warnings=len(scanner.warnings),
            duration_seconds=round(duration, 3),
        )
        return BuildResult(
            index=index,
            roots=tuple(roots),
            warnings=tuple(scanner.warnings),
            files_scanned=scanner.files_scanned,
            duration_seconds=duration,
        )
