"""Lexical helpers for scanning JavaScript-family source text."""

from lex.delimiters import match_paren
from lex.skipper import skip_literal

__all__ = ["match_paren", "skip_literal"]
