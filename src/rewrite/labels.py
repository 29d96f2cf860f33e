"""String-literal escaping and label template variables."""

from __future__ import annotations

import re
from dataclasses import dataclass

from contract.artifacts import TEMPLATE_VARIABLES

_TEMPLATE_VAR_RE = re.compile(r"\$(" + "|".join(TEMPLATE_VARIABLES) + ")")

_CODE_POINT_ESCAPE_RE = re.compile(
    r"x([0-9A-Fa-f]{2})|u([0-9A-Fa-f]{4})|u\{([0-9A-Fa-f]{1,6})\}"
)
_LOW_SURROGATE_RE = re.compile(r"\\u([dD][c-fC-F][0-9A-Fa-f]{2})")

_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


@dataclass(frozen=True)
class LabelContext:
    """Values available to a label's template variables."""

    namespace: str
    function_name: str
    short_path: str
    line: int
    col: int

    def value_of(self, variable: str) -> str:
        return {
            "NS": self.namespace,
            "FN": self.function_name,
            "FILE": self.short_path,
            "LINE": str(self.line),
            "COL": str(self.col),
        }[variable]


def build_namespace(short_path: str, function_name: str) -> str:
    """``path@fn`` inside a named function, plain ``path`` at top level."""
    if function_name:
        return f"{short_path}@{function_name}"
    return short_path


def substitute_template_variables(label: str, context: LabelContext) -> str:
    """Expand ``$NS $FN $FILE $LINE $COL`` in one left-to-right pass.

    Substituted values are never rescanned; unknown ``$NAMES`` stay as written.
    """
    return _TEMPLATE_VAR_RE.sub(lambda m: context.value_of(m.group(1)), label)


def escape_for_string(value: str) -> str:
    """Escape a value for a single-quoted JavaScript string literal."""
    return (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )


def _decode_code_point(raw: str, pos: int) -> tuple[str, int] | None:
    """Decode a ``\\x``/``\\u`` escape whose letter sits at ``pos``.

    Returns the character and the position after the escape, or ``None``
    when the escape is malformed or names a lone surrogate.
    """
    match = _CODE_POINT_ESCAPE_RE.match(raw, pos)
    if match is None:
        return None
    code = int(next(group for group in match.groups() if group), 16)
    end = match.end()
    if 0xD800 <= code <= 0xDBFF:
        low = _LOW_SURROGATE_RE.match(raw, end)
        if low is None:
            return None
        code = 0x10000 + ((code - 0xD800) << 10) + (int(low.group(1), 16) - 0xDC00)
        end = low.end()
    elif 0xDC00 <= code <= 0xDFFF or code > 0x10FFFF:
        return None
    return chr(code), end


def unescape_string_body(raw: str) -> str:
    """Decode the escapes of a quoted literal's body as written in source.

    Malformed ``\\x``/``\\u`` escapes are kept verbatim.
    """
    if "\\" not in raw:
        return raw

    out: list[str] = []
    i = 0
    while i < len(raw):
        ch = raw[i]
        if ch != "\\" or i + 1 >= len(raw):
            out.append(ch)
            i += 1
            continue
        nxt = raw[i + 1]
        if nxt == "\n":
            # line continuation
            i += 2
            continue
        if nxt == "\r":
            i += 3 if raw.startswith("\n", i + 2) else 2
            continue
        if nxt in "xu":
            decoded = _decode_code_point(raw, i + 1)
            if decoded is None:
                out.append(raw[i : i + 2])
                i += 2
            else:
                out.append(decoded[0])
                i = decoded[1]
            continue
        out.append(_SIMPLE_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(out)


__all__ = [
    "LabelContext",
    "build_namespace",
    "escape_for_string",
    "substitute_template_variables",
    "unescape_string_body",
]
