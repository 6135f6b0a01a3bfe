"""Schema entity tag index: resolution, scanning, building and persistence."""

from gqltags.index.builder import TagIndexBuilder
from gqltags.index.models import (
    BuildResult,
    EntityDeclaration,
    ScanWarning,
    TagIndex,
    Workspace,
)
from gqltags.index.patterns import EntityKind, match_declaration
from gqltags.index.resolver import resolve_search_roots, resolve_tag_file_path
from gqltags.index.scanner import EntityScanner
from gqltags.index.tagfile import TagFileContents, read_tag_file, write_tag_file

__all__ = [
    "BuildResult",
    "EntityDeclaration",
    "EntityKind",
    "EntityScanner",
    "ScanWarning",
    "TagFileContents",
    "TagIndex",
    "TagIndexBuilder",
    "Workspace",
    "match_declaration",
    "read_tag_file",
    "resolve_search_roots",
    "resolve_tag_file_path",
    "write_tag_file",
]
