"""Filesystem walk that yields schema entity declarations."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from pathlib import Path

import structlog

from gqltags.config.models import TagsConfig
from gqltags.core.excludes import prune_set
from gqltags.index.models import EntityDeclaration, ScanWarning
from gqltags.index.patterns import match_declaration

logger = structlog.get_logger()


class EntityScanner:
    """Walks search roots and matches declaration lines in schema files.

    Each :meth:`scan` call performs a fresh walk. Unreadable directories and
    files are recorded in :attr:`warnings` and skipped.
    """

    def __init__(
        self,
        extensions: Iterable[str],
        prune_dirs: Iterable[str] = (),
        *,
        prune_default_dirs: bool = False,
    ) -> None:
        self.extensions = tuple(extensions)
        self.prune_dirs = prune_set(prune_dirs, include_defaults=prune_default_dirs)
        self.warnings: list[ScanWarning] = []
        self.files_scanned = 0

    @classmethod
    def from_config(cls, config: TagsConfig) -> EntityScanner:
        return cls(
            config.extensions,
            config.extra_prune_dirs,
            prune_default_dirs=config.prune_default_dirs,
        )

    def scan(self, roots: Iterable[Path]) -> Iterator[EntityDeclaration]:
        self.warnings = []
        self.files_scanned = 0
        for root in roots:
            if not root.is_dir():
                self._warn(root, "search root is not a directory")
                continue
            for path in self._walk(root):
                yield from self.scan_file(path)

    def _walk(self, root: Path) -> Iterator[Path]:
        def on_error(err: OSError) -> None:
            self._warn(Path(err.filename or root), err.strerror or str(err))

        for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
            dirnames[:] = [d for d in dirnames if d not in self.prune_dirs]
            for filename in filenames:
                if filename.endswith(self.extensions):
                    path = Path(dirpath) / filename
                    if path.is_file():
                        yield path

    def scan_file(self, path: Path) -> list[EntityDeclaration]:
        """Declarations in one file; empty (with a warning) if it cannot be read."""
        try:
            raw = path.read_bytes()
        except OSError as e:
            self._warn(path, e.strerror or str(e))
            return []
        self.files_scanned += 1

        found: list[EntityDeclaration] = []
        offset = 0
        for lineno, raw_line in enumerate(raw.splitlines(keepends=True), start=1):
            line = raw_line.decode("utf-8", errors="replace").rstrip("\r\n")
            match = match_declaration(line)
            if match is not None:
                kind, name, end = match
                found.append(
                    EntityDeclaration(
                        name=name,
                        kind=kind,
                        file=path,
                        line=lineno,
                        pattern=line[:end],
                        offset=offset,
                    )
                )
            offset += len(raw_line)
        if found:
            logger.debug("schema_file_scanned", path=str(path), declarations=len(found))
        return found

    def _warn(self, path: Path, reason: str) -> None:
        self.warnings.append(ScanWarning(path=path, reason=reason))
        logger.warning("scan_path_unreadable", path=str(path), reason=reason)
