"""Replacement text for rewritten calls."""

from __future__ import annotations

from contract.artifacts import EMIT_ACCESSOR, POSITIONAL_ACCESSOR, RUNTIME_PAYLOAD
from contract.models import CallSiteMetadata, RegionContext
from rewrite.labels import escape_for_string


def _payload_values(metadata: CallSiteMetadata) -> dict[str, str]:
    values = {
        "ns": f"'{escape_for_string(metadata.namespace)}'",
        "file": f"'{escape_for_string(metadata.file)}'",
        "line": str(metadata.line),
        "col": str(metadata.col),
    }
    if metadata.source_text:
        values["src"] = f"'{escape_for_string(metadata.source_text)}'"
    return values


def build_options(metadata: CallSiteMetadata, identifier: str) -> str:
    """Render call-site metadata for the region's syntax.

    Script code gets an object literal. Embedded template expressions cannot
    hold a bare ``{...}``, so they get a positional ``gg._o(...)`` call that the
    runtime turns into the same object.
    """
    values = _payload_values(metadata)
    ordered = [
        (key, values[key]) for key in RUNTIME_PAYLOAD.positional_order if key in values
    ]
    if metadata.context is RegionContext.SCRIPT:
        return "{" + ",".join(f"{key}:{value}" for key, value in ordered) + "}"
    positional = ",".join(value for _, value in ordered)
    return f"{identifier}.{POSITIONAL_ACCESSOR}({positional})"


def build_call_head(metadata: CallSiteMetadata, identifier: str, *, has_args: bool) -> str:
    """Opening of the rewritten call; original arguments follow when present."""
    options = build_options(metadata, identifier)
    if has_args:
        return f"{identifier}.{EMIT_ACCESSOR}({options},"
    return f"{identifier}.{EMIT_ACCESSOR}({options})"


__all__ = ["build_call_head", "build_options"]
