"""Enclosing-function resolution strategies."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from scope.heuristic import HeuristicResolver
from scope.scope_map import ScopeMapResolver

if TYPE_CHECKING:
    from collections.abc import Iterable

    from contract.models import FunctionScope


class ScopeResolver(Protocol):
    """Resolve the name of the function enclosing a source position.

    ``floor`` is the lowest offset a strategy may read from; exact strategies
    are free to ignore it. An empty string means top level.
    """

    def resolve(self, position: int, *, floor: int = 0) -> str: ...


def make_resolver(
    source: str,
    function_scopes: Iterable[FunctionScope] | None,
) -> ScopeResolver:
    """Prefer the exact scope map whenever scopes were supplied."""
    if function_scopes is not None:
        return ScopeMapResolver(function_scopes)
    return HeuristicResolver(source)


__all__ = [
    "HeuristicResolver",
    "ScopeMapResolver",
    "ScopeResolver",
    "make_resolver",
]
