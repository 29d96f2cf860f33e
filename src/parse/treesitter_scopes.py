"""Tree-sitter based function-scope extraction for JavaScript and TypeScript."""

from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import Literal

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from contract.models import FunctionScope, SourceSpan

logger = logging.getLogger(__name__)

Dialect = Literal["javascript", "typescript", "tsx"]

_PARSERS: dict[str, Parser] = {}

_DIALECT_BY_SUFFIX: dict[str, Dialect] = {
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}

# Nodes that own a body and may carry a name of their own.
_DECLARATION_TYPES = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        "method_definition",
    }
)

# Function values whose name usually comes from where they are assigned.
_EXPRESSION_TYPES = frozenset(
    {
        "function_expression",
        "function",
        "generator_function",
        "arrow_function",
    }
)

_TRANSPARENT_PARENTS = frozenset(
    {
        "parenthesized_expression",
        "as_expression",
        "satisfies_expression",
        "non_null_expression",
    }
)

_NAME_NODE_TYPES = frozenset(
    {
        "identifier",
        "property_identifier",
        "private_property_identifier",
        "shorthand_property_identifier",
        "type_identifier",
    }
)


def _get_parser(dialect: Dialect) -> Parser:
    """Initialize and return the Tree-sitter parser for a dialect."""
    parser = _PARSERS.get(dialect)
    if parser is None:
        if dialect == "javascript":
            lang = Language(tree_sitter_javascript.language())
        elif dialect == "typescript":
            lang = Language(tree_sitter_typescript.language_typescript())
        else:
            lang = Language(tree_sitter_typescript.language_tsx())
        parser = Parser(lang)
        _PARSERS[dialect] = parser
    return parser


def dialect_for_path(path: str) -> Dialect | None:
    """Map a module id (query suffix allowed) to a grammar."""
    suffix = PurePosixPath(path.split("?", 1)[0]).suffix.lower()
    return _DIALECT_BY_SUFFIX.get(suffix)


def _byte_to_char_offsets(source: str, source_bytes: bytes) -> list[int] | None:
    """Byte offset -> str index table; ``None`` when the source is ASCII."""
    if len(source_bytes) == len(source):
        return None
    offsets: list[int] = []
    for index, ch in enumerate(source):
        offsets.extend([index] * len(ch.encode("utf8")))
    offsets.append(len(source))
    return offsets


def _node_text(source_bytes: bytes, node: Node) -> str:
    return source_bytes[node.start_byte : node.end_byte].decode("utf8", errors="ignore")


def _simple_name(source_bytes: bytes, node: Node | None) -> str:
    if node is None:
        return ""
    if node.type in _NAME_NODE_TYPES:
        return _node_text(source_bytes, node)
    if node.type == "member_expression":
        return _simple_name(source_bytes, node.child_by_field_name("property"))
    if node.type == "string":
        return _node_text(source_bytes, node)[1:-1]
    return ""


def _assigned_name(source_bytes: bytes, node: Node) -> str:
    """Name a function value from the binding it is assigned to."""
    parent = node.parent
    while parent is not None and parent.type in _TRANSPARENT_PARENTS:
        parent = parent.parent
    if parent is None:
        return ""

    if parent.type == "variable_declarator":
        return _simple_name(source_bytes, parent.child_by_field_name("name"))
    if parent.type in ("assignment_expression", "augmented_assignment_expression"):
        return _simple_name(source_bytes, parent.child_by_field_name("left"))
    if parent.type == "pair":
        return _simple_name(source_bytes, parent.child_by_field_name("key"))
    if parent.type in ("field_definition", "public_field_definition"):
        return _simple_name(
            source_bytes,
            parent.child_by_field_name("property") or parent.child_by_field_name("name"),
        )
    return ""


def _function_name(source_bytes: bytes, node: Node) -> str:
    if node.type in _DECLARATION_TYPES:
        return _simple_name(source_bytes, node.child_by_field_name("name"))

    own_name = _simple_name(source_bytes, node.child_by_field_name("name"))
    return own_name or _assigned_name(source_bytes, node)


def extract_function_scopes(
    source: str,
    dialect: Dialect = "javascript",
    *,
    offset: int = 0,
) -> list[FunctionScope]:
    """Collect the spans of all named functions in ``source``.

    Anonymous functions are skipped so a call inside an inline callback
    resolves to the nearest named function around it.

    Args:
        source: JavaScript or TypeScript source.
        dialect: Grammar to parse with.
        offset: Added to every span, for code embedded in a larger document.

    Returns:
        Scopes sorted by start offset, as ``str`` indices.
    """
    scopes, _ = _parse_scopes(source, dialect, offset)
    return scopes


def collect_function_scopes(
    source: str,
    dialect: Dialect = "javascript",
) -> list[FunctionScope] | None:
    """Scope map for a plain module, or ``None`` when the parse has errors."""
    scopes, has_error = _parse_scopes(source, dialect, 0)
    if has_error:
        logger.debug("syntax errors in %s source; using heuristic scopes", dialect)
        return None
    return scopes


def _parse_scopes(
    source: str,
    dialect: Dialect,
    offset: int,
) -> tuple[list[FunctionScope], bool]:
    parser = _get_parser(dialect)
    source_bytes = source.encode("utf8")
    char_offsets = _byte_to_char_offsets(source, source_bytes)
    tree = parser.parse(source_bytes)

    def to_char(byte_offset: int) -> int:
        if char_offsets is None:
            return byte_offset + offset
        return char_offsets[byte_offset] + offset

    scopes: list[FunctionScope] = []
    stack = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.type in _DECLARATION_TYPES or node.type in _EXPRESSION_TYPES:
            name = _function_name(source_bytes, node)
            if name:
                scopes.append(
                    FunctionScope(
                        span=SourceSpan(to_char(node.start_byte), to_char(node.end_byte)),
                        name=name,
                    )
                )
        stack.extend(reversed(node.children))

    scopes.sort(key=lambda scope: (scope.span.start, -scope.span.end))
    return scopes, tree.root_node.has_error


__all__ = [
    "Dialect",
    "collect_function_scopes",
    "dialect_for_path",
    "extract_function_scopes",
]
