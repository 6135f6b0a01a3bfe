"""Declaration keywords and the line-anchored rule for each.

A declaration line is, after leading whitespace, a keyword, at least one
whitespace character, and an identifier. Headers split across lines are
not recognized.
"""

from __future__ import annotations

import re
from enum import Enum


class EntityKind(Enum):
    """Schema entity kinds, valued by their declaration keyword."""

    OBJECT_TYPE = "type"
    INTERFACE = "interface"
    UNION = "union"
    INPUT = "input"
    ENUM = "enum"
    SCALAR = "scalar"
    DIRECTIVE = "directive"
    FRAGMENT = "fragment"

    @property
    def keyword(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        """Human-readable group heading, e.g. 'Object Type'."""
        return self.name.replace("_", " ").title()


IDENTIFIER = r"[A-Za-z_][A-Za-z0-9_@]*"
IDENTIFIER_RE = re.compile(rf"{IDENTIFIER}\Z")
# Any whitespace except line breaks
_BLANK = r"[^\S\r\n]"


def _rule(kind: EntityKind) -> re.Pattern[str]:
    # Directive names are written with a leading '@' that is not part of the name
    prefix = "@?" if kind is EntityKind.DIRECTIVE else ""
    return re.compile(rf"^{_BLANK}*({kind.keyword}){_BLANK}+{prefix}({IDENTIFIER})")


PATTERNS: dict[EntityKind, re.Pattern[str]] = {kind: _rule(kind) for kind in EntityKind}


def match_declaration(line: str) -> tuple[EntityKind, str, int] | None:
    """Match one source line against every declaration rule.

    Returns:
        ``(kind, name, end)`` where ``end`` is the index just past the name,
        or None when the line declares nothing.
    """
    for kind, pattern in PATTERNS.items():
        m = pattern.match(line)
        if m is not None:
            return kind, m.group(2), m.end(2)
    return None


def is_valid_name(name: str) -> bool:
    return IDENTIFIER_RE.match(name) is not None
