"""Classify buffer positions into code regions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from contract.models import CodeRegion, RegionContext, SourceSpan

if TYPE_CHECKING:
    from collections.abc import Iterable


class RegionClassifier(Protocol):
    def region_at(self, position: int) -> CodeRegion | None: ...


class WholeBufferClassifier:
    """Plain code documents: every position is script code."""

    def __init__(self, length: int) -> None:
        self._region = CodeRegion(SourceSpan(0, length), RegionContext.SCRIPT)

    def region_at(self, position: int) -> CodeRegion | None:
        return self._region


class RegionListClassifier:
    """Hybrid documents: only supplied regions are code; the rest is prose."""

    def __init__(self, regions: Iterable[CodeRegion]) -> None:
        self._regions = tuple(regions)

    def region_at(self, position: int) -> CodeRegion | None:
        for region in self._regions:
            if region.span.contains(position):
                return region
        return None


def make_classifier(
    source: str,
    code_regions: Iterable[CodeRegion] | None,
) -> RegionClassifier:
    if code_regions is None:
        return WholeBufferClassifier(len(source))
    return RegionListClassifier(code_regions)


__all__ = [
    "RegionClassifier",
    "RegionListClassifier",
    "WholeBufferClassifier",
    "make_classifier",
]
