"""Balanced delimiter matching that ignores literal and comment content."""

from __future__ import annotations

from lex.skipper import skip_literal

_OPENERS = frozenset("([{")
_CLOSERS = frozenset(")]}")


def match_paren(source: str, open_pos: int) -> int | None:
    """Find the end of the delimited group opened at ``open_pos``.

    Any of ``( [ {`` nest; the opener's own kind is not checked against the
    closer. Returns the index immediately after the closing delimiter, or
    ``None`` when the buffer ends first.
    """
    length = len(source)
    depth = 1
    j = open_pos + 1
    while j < length:
        skipped = skip_literal(source, j)
        if skipped != j:
            j = skipped
            continue

        ch = source[j]
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth -= 1
            if depth == 0:
                return j + 1
        j += 1
    return None


__all__ = ["match_paren"]
