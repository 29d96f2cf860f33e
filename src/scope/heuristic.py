"""Backward textual scan for the nearest enclosing function name.

This is a best-effort fallback for sources without a syntax tree. It prefers
returning ``""`` over returning a wrong name: control-flow and declaration
keywords that the patterns would otherwise capture are discarded, and plain
variable assignments only count when a function or arrow is assigned.
"""

from __future__ import annotations

import re

_IDENT = r"[A-Za-z_$][A-Za-z0-9_$]*"

# Fixed priority order; the closest match across all patterns wins.
_PATTERNS: tuple[re.Pattern[str], ...] = (
    # function foo(
    re.compile(rf"\bfunction\b\s*\*?\s*({_IDENT})\s*\("),
    # const foo = function / async (...) => / x =>
    re.compile(
        rf"(?:const|let|var)\s+({_IDENT})\s*=\s*(?:async\s+)?"
        rf"(?:function\b|\([^)]*\)\s*(?::[^=]*)?=>|{_IDENT}\s*=>)"
    ),
    # foo() { / async foo(a, b) {
    re.compile(rf"(?:async\s+)?({_IDENT})\s*\([^)]*\)\s*\{{"),
    # foo: function / foo: async function
    re.compile(rf"({_IDENT})\s*:\s*(?:async\s+)?function\b"),
)

RESERVED_NAMES = frozenset(
    {
        "if",
        "for",
        "while",
        "switch",
        "catch",
        "return",
        "import",
        "export",
        "from",
        "new",
        "typeof",
        "instanceof",
        "void",
        "delete",
        "throw",
        "case",
        "else",
        "in",
        "of",
        "do",
        "try",
        "class",
        "super",
        "this",
        "with",
        "yield",
        "await",
        "debugger",
        "default",
        "function",
    }
)


class HeuristicResolver:
    """Resolve enclosing function names by scanning text before a position."""

    def __init__(self, source: str) -> None:
        self._source = source

    def resolve(self, position: int, *, floor: int = 0) -> str:
        """Return the closest function-like name in ``source[floor:position]``."""
        closest_name = ""
        closest_pos = -1
        for pattern in _PATTERNS:
            for match in pattern.finditer(self._source, floor, position):
                name = match.group(1)
                if name in RESERVED_NAMES:
                    continue
                if match.start() > closest_pos:
                    closest_pos = match.start()
                    closest_name = name
        return closest_name


__all__ = ["RESERVED_NAMES", "HeuristicResolver"]
