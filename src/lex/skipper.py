"""Lexical skipping of string, template-literal and comment content."""

from __future__ import annotations

_QUOTES = frozenset("'\"")


def _skip_line_comment(source: str, pos: int) -> int:
    end = source.find("\n", pos)
    return len(source) if end == -1 else end + 1


def _skip_block_comment(source: str, pos: int) -> int:
    end = source.find("*/", pos + 2)
    return len(source) if end == -1 else end + 2


def _skip_quoted(source: str, pos: int) -> int:
    quote = source[pos]
    length = len(source)
    i = pos + 1
    while i < length:
        ch = source[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        i += 1
    return length


def _skip_template(source: str, pos: int) -> int:
    length = len(source)
    depth = 0
    i = pos + 1
    while i < length:
        ch = source[i]
        if depth > 0:
            # inside ${...}: nested literals and object braces
            skipped = skip_literal(source, i)
            if skipped != i:
                i = skipped
                continue
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
            i += 1
            continue
        if ch == "\\":
            i += 2
            continue
        if ch == "$" and source.startswith("{", i + 1):
            depth = 1
            i += 2
            continue
        if ch == "`":
            return i + 1
        i += 1
    return length


def skip_literal(source: str, pos: int) -> int:
    """Return the position just past the literal or comment starting at ``pos``.

    Returns ``pos`` itself when nothing skippable starts there. Unterminated
    literals and comments run to the end of the buffer.
    """
    if pos >= len(source):
        return pos

    ch = source[pos]
    if ch == "/":
        nxt = source[pos + 1 : pos + 2]
        if nxt == "/":
            return _skip_line_comment(source, pos)
        if nxt == "*":
            return _skip_block_comment(source, pos)
        return pos
    if ch in _QUOTES:
        return _skip_quoted(source, pos)
    if ch == "`":
        return _skip_template(source, pos)
    return pos


__all__ = ["skip_literal"]
