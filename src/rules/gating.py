"""Per-module predicate deciding whether the rewriter runs at all."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from contract.artifacts import LABEL_ACCESSOR

if TYPE_CHECKING:
    from rules.config import GgTagConfig


def strip_query(module_id: str) -> str:
    """Drop a bundler query suffix such as ``?svelte&type=style``."""
    return module_id.split("?", 1)[0]


def has_allowed_extension(module_id: str, extensions: list[str]) -> bool:
    suffix = PurePosixPath(strip_query(module_id)).suffix.lower()
    return suffix in extensions


def is_excluded_path(module_id: str, exclude_paths: list[str]) -> bool:
    return any(fragment in module_id for fragment in exclude_paths)


def mentions_target_call(source: str, identifier: str) -> bool:
    """Cheap substring pre-check before any scanning."""
    return f"{identifier}(" in source or f"{identifier}.{LABEL_ACCESSOR}(" in source


def is_hybrid_document(module_id: str) -> bool:
    return strip_query(module_id).lower().endswith(".svelte")


def should_transform(module_id: str, source: str, config: GgTagConfig) -> bool:
    """Return True when ``module_id`` is worth handing to the rewriter."""
    if not has_allowed_extension(module_id, config.extensions):
        return False
    if not mentions_target_call(source, config.identifier):
        return False
    return not is_excluded_path(module_id, config.exclude_paths)


__all__ = [
    "has_allowed_extension",
    "is_excluded_path",
    "is_hybrid_document",
    "mentions_target_call",
    "should_transform",
    "strip_query",
]
