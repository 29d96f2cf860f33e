"""Data model shared by the rewriter core and its collaborators."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class RegionContext(str, Enum):
    """Syntactic context of a code region."""

    SCRIPT = "script"
    EMBEDDED = "embedded"


@dataclass(frozen=True)
class SourceSpan:
    """Half-open ``[start, end)`` offset range into a source buffer."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            msg = f"span start {self.start} is after end {self.end}"
            raise ValueError(msg)

    @property
    def width(self) -> int:
        return self.end - self.start

    def contains(self, position: int) -> bool:
        return self.start <= position < self.end


@dataclass(frozen=True)
class CodeRegion:
    """A span of a document that holds rewritable code."""

    span: SourceSpan
    context: RegionContext = RegionContext.SCRIPT


@dataclass(frozen=True)
class FunctionScope:
    """A span paired with the name of the function that lexically encloses it."""

    span: SourceSpan
    name: str


@dataclass(frozen=True)
class CodeInfo:
    """Regions and scopes collected from a hybrid document."""

    regions: tuple[CodeRegion, ...] = ()
    scopes: tuple[FunctionScope, ...] = ()


@dataclass(frozen=True)
class CallSiteMetadata:
    """Provenance injected into one rewritten call."""

    namespace: str
    file: str
    line: int
    col: int
    source_text: str | None = None
    function_name: str = ""
    context: RegionContext = RegionContext.SCRIPT
    labeled: bool = False


@dataclass(frozen=True)
class RewriteResult:
    """Rewritten buffer plus the call sites that were annotated."""

    code: str
    changed: bool = True
    call_sites: tuple[CallSiteMetadata, ...] = field(default_factory=tuple)


__all__ = [
    "CallSiteMetadata",
    "CodeInfo",
    "CodeRegion",
    "FunctionScope",
    "RegionContext",
    "RewriteResult",
    "SourceSpan",
]
