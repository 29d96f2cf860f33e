"""Exact enclosing-function lookup over precomputed function scopes."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from contract.models import FunctionScope


class ScopeMapResolver:
    """Pick the innermost (narrowest) scope containing a position."""

    def __init__(self, scopes: Iterable[FunctionScope]) -> None:
        self._scopes = sorted(scopes, key=lambda scope: scope.span.start)

    @property
    def scopes(self) -> tuple[FunctionScope, ...]:
        return tuple(self._scopes)

    def resolve(self, position: int, *, floor: int = 0) -> str:
        """Return the innermost enclosing name; ``floor`` is not used here."""
        best: FunctionScope | None = None
        for scope in self._scopes:
            if scope.span.start > position:
                break
            if not scope.span.contains(position):
                continue
            if best is None or scope.span.width < best.span.width:
                best = scope
        return best.name if best is not None else ""


__all__ = ["ScopeMapResolver"]
