"""Call-site contract definitions.

This module defines the stable rewriter↔runtime boundary: the accessor names
the rewriter emits, the payload keys the runtime reads back, and the manifest
artifact written by the batch driver.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Artifact schema version for the call-site manifest.
ARTIFACT_SCHEMA_VERSION = 1

# Manifest filename (stable contract identifier).
CALLSITES_JSONL = "callsites.jsonl"

DEFAULT_IDENTIFIER = "gg"

# Accessor rewritten as a labeled call: gg.ns('label', ...).
LABEL_ACCESSOR = "ns"

# Accessors emitted by the rewriter. Neither is in the match grammar, so a
# second pass over rewritten output finds nothing to do.
EMIT_ACCESSOR = "_ns"
POSITIONAL_ACCESSOR = "_o"

TEMPLATE_VARIABLES = ("NS", "FN", "FILE", "LINE", "COL")


@dataclass(frozen=True)
class RuntimePayloadSpec:
    """Shape both emitted forms deserialize into at call time."""

    required: tuple[str, ...]
    optional: tuple[str, ...]

    @property
    def positional_order(self) -> tuple[str, ...]:
        return (*self.required, *self.optional)


RUNTIME_PAYLOAD = RuntimePayloadSpec(
    required=("ns",),
    optional=("file", "line", "col", "src"),
)

# ---------------------------------------------------------------------------
# Deterministic callsite_id
# ---------------------------------------------------------------------------
# Canonical format: callsite:{path}@L{line}:C{col}:{namespace}

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_namespace(raw_namespace: str) -> str:
    """Collapse whitespace runs so ids stay single-line."""
    return _WHITESPACE_RUN.sub(" ", raw_namespace.strip())


def build_callsite_id(path: str, line: int, col: int, namespace: str) -> str:
    """Build a deterministic callsite_id.

    Format: ``callsite:{path}@L{line}:C{col}:{normalized_namespace}``
    """
    return f"callsite:{path}@L{line}:C{col}:{normalize_namespace(namespace)}"
