"""Syntax-tree collaborators that feed the rewriter."""

from parse.svelte_regions import collect_code_info
from parse.treesitter_scopes import (
    collect_function_scopes,
    dialect_for_path,
    extract_function_scopes,
)

__all__ = [
    "collect_code_info",
    "collect_function_scopes",
    "dialect_for_path",
    "extract_function_scopes",
]
