"""Value types for the tag index.

Every type here is immutable. A rebuild produces new instances; nothing is
patched in place.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from gqltags.index.patterns import EntityKind


@dataclass(frozen=True, slots=True)
class EntityDeclaration:
    """One declared schema entity.

    Identity is ``(name, kind, file, line)``. ``pattern`` (the source line up
    to and including the name) and ``offset`` (byte offset of the line start)
    only feed the tag file and do not take part in equality.
    """

    name: str
    kind: EntityKind
    file: Path
    line: int
    pattern: str = field(default="", compare=False)
    offset: int = field(default=0, compare=False)

    def __post_init__(self) -> None:
        if self.line < 1:
            raise ValueError(f"line must be >= 1, got {self.line}")

    @property
    def sort_key(self) -> tuple[str, str, int, str]:
        return (self.name, self.file.as_posix(), self.line, self.kind.value)


@dataclass(frozen=True)
class TagIndex:
    """Immutable snapshot of every declaration found by one build.

    Use :meth:`from_declarations` to get sorted, de-duplicated contents.
    """

    declarations: tuple[EntityDeclaration, ...] = ()
    _by_name: Mapping[str, tuple[EntityDeclaration, ...]] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        grouped: dict[str, list[EntityDeclaration]] = defaultdict(list)
        for decl in self.declarations:
            grouped[decl.name].append(decl)
        object.__setattr__(
            self,
            "_by_name",
            MappingProxyType({name: tuple(decls) for name, decls in grouped.items()}),
        )

    @classmethod
    def from_declarations(cls, declarations: Iterable[EntityDeclaration]) -> TagIndex:
        """Collapse exact duplicates and sort by name, file, then line."""
        unique = set(declarations)
        return cls(declarations=tuple(sorted(unique, key=lambda d: d.sort_key)))

    def lookup(self, name: str) -> list[EntityDeclaration]:
        return list(self._by_name.get(name, ()))

    def all(self) -> tuple[EntityDeclaration, ...]:
        return self.declarations

    def names(self) -> list[str]:
        return list(self._by_name)

    def by_kind(self) -> dict[EntityKind, list[EntityDeclaration]]:
        """Group declarations by kind, in EntityKind order, omitting empty kinds."""
        groups: dict[EntityKind, list[EntityDeclaration]] = {kind: [] for kind in EntityKind}
        for decl in self.declarations:
            groups[decl.kind].append(decl)
        return {kind: decls for kind, decls in groups.items() if decls}

    def files(self) -> list[Path]:
        return sorted({d.file for d in self.declarations}, key=Path.as_posix)

    def __len__(self) -> int:
        return len(self.declarations)

    def __iter__(self) -> Iterator[EntityDeclaration]:
        return iter(self.declarations)


@dataclass(frozen=True, slots=True)
class Workspace:
    """Where a resolution starts: the file being edited and its VC root."""

    current_file_path: Path | None = None
    vc_root: Path | None = None

    @property
    def file_directory(self) -> Path | None:
        if self.current_file_path is None:
            return None
        if self.current_file_path.is_dir():
            return self.current_file_path
        return self.current_file_path.parent

    @classmethod
    def for_path(
        cls,
        path: Path,
        vc_lookup: Callable[[Path], Path | None] | None = None,
    ) -> Workspace:
        """Snapshot the workspace for ``path``, looking up its VC root."""
        if vc_lookup is None:
            from gqltags.git import find_vc_root

            vc_lookup = find_vc_root
        resolved = path.expanduser().resolve()
        return cls(current_file_path=resolved, vc_root=vc_lookup(resolved))


@dataclass(frozen=True, slots=True)
class ScanWarning:
    """A path the scan could not read."""

    path: Path
    reason: str


@dataclass(frozen=True)
class BuildResult:
    """Statistics and output of one index build."""

    index: TagIndex
    roots: tuple[Path, ...]
    warnings: tuple[ScanWarning, ...] = ()
    files_scanned: int = 0
    duration_seconds: float = 0.0
