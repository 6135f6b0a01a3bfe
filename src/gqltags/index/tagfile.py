"""Tag file persistence in etags layout.

Each file section is::

    \\x0c
    <path relative to the tag file>,<byte length of the section body>
    <pattern>\\x7f<name>\\x01<line>,<byte offset>

``pattern`` is the source line up to and including the name, which is
what etags-aware navigation tools search for when line numbers drift.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path

import structlog

from gqltags.core.errors import TagIndexError
from gqltags.index.models import EntityDeclaration, TagIndex
from gqltags.index.patterns import is_valid_name, match_declaration

logger = structlog.get_logger()

SECTION_MARK = "\x0c"
PATTERN_END = "\x7f"
NAME_END = "\x01"


@dataclass(frozen=True)
class TagFileContents:
    """Result of reading a tag file."""

    index: TagIndex
    skipped_lines: int = 0


def _relative_name(file: Path, base: Path) -> str:
    return Path(os.path.relpath(file, base)).as_posix()


def render_tag_file(index: TagIndex, base_dir: Path) -> bytes:
    """Serialize ``index`` with paths relative to ``base_dir``."""
    by_file: dict[Path, list[EntityDeclaration]] = defaultdict(list)
    for decl in index:
        by_file[decl.file].append(decl)

    out: list[bytes] = []
    for file in sorted(by_file, key=Path.as_posix):
        body = b"".join(
            f"{d.pattern or d.name}{PATTERN_END}{d.name}{NAME_END}{d.line},{d.offset}\n".encode()
            for d in sorted(by_file[file], key=lambda d: (d.line, d.name, d.kind.value))
        )
        header = f"{SECTION_MARK}\n{_relative_name(file, base_dir)},{len(body)}\n".encode()
        out.append(header + body)
    return b"".join(out)


def write_tag_file(index: TagIndex, destination: Path) -> None:
    """Atomically replace ``destination`` with the serialized index.

    Raises:
        TagIndexError: write_failed if the directory is missing or not writable.
    """
    payload = render_tag_file(index, destination.parent)
    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="wb",
            dir=destination.parent,
            prefix=f"{destination.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(payload)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, destination)
    except OSError as e:
        if tmp_name is not None:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
        raise TagIndexError.write_failed(str(destination), e.strerror or str(e)) from e

    logger.info(
        "tag_file_written",
        path=str(destination),
        declarations=len(index),
        bytes=len(payload),
    )


def _parse_entry(line: str, file: Path) -> EntityDeclaration | None:
    pattern, sep, position = line.partition(PATTERN_END)
    if not sep:
        return None
    name, sep, numbers = position.partition(NAME_END)
    if not sep:
        # Implicit tag name: the name is whatever the pattern declares
        numbers, name = position, ""
    lineno, _, offset = numbers.partition(",")
    try:
        line_number = int(lineno)
        byte_offset = int(offset) if offset else 0
    except ValueError:
        return None

    match = match_declaration(pattern)
    if match is None or line_number < 1:
        return None
    kind, declared, _ = match
    name = name or declared
    if name != declared or not is_valid_name(name):
        return None
    return EntityDeclaration(
        name=name,
        kind=kind,
        file=file,
        line=line_number,
        pattern=pattern,
        offset=byte_offset,
    )


def read_tag_file(path: Path) -> TagFileContents:
    """Load a tag file written by :func:`write_tag_file` (or etags).

    Malformed lines are skipped and counted rather than failing the read.

    Raises:
        TagIndexError: read_failed if the file cannot be read.
    """
    try:
        text = path.read_bytes().decode("utf-8", errors="replace")
    except OSError as e:
        raise TagIndexError.read_failed(str(path), e.strerror or str(e)) from e

    base_dir = path.parent
    declarations: list[EntityDeclaration] = []
    skipped = 0
    current: Path | None = None
    expect_header = False

    for line in text.split("\n"):
        if line == SECTION_MARK:
            expect_header = True
            current = None
            continue
        if expect_header:
            expect_header = False
            name, sep, size = line.rpartition(",")
            if not sep or not name or not size.isdigit():
                skipped += 1
                continue
            current = (base_dir / name).resolve()
            continue
        if not line:
            continue
        decl = _parse_entry(line, current) if current is not None else None
        if decl is None:
            skipped += 1
            continue
        declarations.append(decl)

    if skipped:
        logger.warning("tag_file_lines_skipped", path=str(path), skipped=skipped)
    return TagFileContents(index=TagIndex.from_declarations(declarations), skipped_lines=skipped)
