"""Stable rewriter↔runtime contract surface for ggtag."""

from contract.artifacts import (
    ARTIFACT_SCHEMA_VERSION,
    CALLSITES_JSONL,
    DEFAULT_IDENTIFIER,
    EMIT_ACCESSOR,
    LABEL_ACCESSOR,
    POSITIONAL_ACCESSOR,
    RUNTIME_PAYLOAD,
    TEMPLATE_VARIABLES,
    build_callsite_id,
)
from contract.models import (
    CallSiteMetadata,
    CodeInfo,
    CodeRegion,
    FunctionScope,
    RegionContext,
    RewriteResult,
    SourceSpan,
)

__all__ = [
    "ARTIFACT_SCHEMA_VERSION",
    "CALLSITES_JSONL",
    "DEFAULT_IDENTIFIER",
    "EMIT_ACCESSOR",
    "LABEL_ACCESSOR",
    "POSITIONAL_ACCESSOR",
    "RUNTIME_PAYLOAD",
    "TEMPLATE_VARIABLES",
    "CallSiteMetadata",
    "CodeInfo",
    "CodeRegion",
    "FunctionScope",
    "RegionContext",
    "RewriteResult",
    "SourceSpan",
    "build_callsite_id",
]
