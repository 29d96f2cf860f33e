"""Build-hook entry point: one module id and its source in, rewrite out."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from parse.svelte_regions import collect_code_info
from parse.treesitter_scopes import collect_function_scopes, dialect_for_path
from rewrite.emitter import transform
from rules.config import GgTagConfig
from rules.gating import is_hybrid_document, should_transform
from utils import split_module_id

if TYPE_CHECKING:
    from contract.models import RewriteResult

logger = logging.getLogger(__name__)


def transform_module(
    source: str,
    module_id: str,
    config: GgTagConfig | None = None,
) -> RewriteResult | None:
    """Gate, gather regions/scopes for ``module_id``, then rewrite.

    Components get AST-derived code regions and function scopes; a component
    with no code regions is left alone. Plain modules get a tree-sitter scope
    map when they parse cleanly and the heuristic resolver otherwise.
    """
    if config is None:
        config = GgTagConfig()

    if not should_transform(module_id, source, config):
        return None

    short_path, file_path = split_module_id(module_id, config.src_root_pattern)

    if is_hybrid_document(module_id):
        info = collect_code_info(source)
        if not info.regions:
            logger.debug("no code regions in %s", module_id)
            return None
        return transform(
            source,
            short_path,
            file_path,
            info.regions,
            info.scopes,
            identifier=config.identifier,
        )

    dialect = dialect_for_path(module_id)
    scopes = collect_function_scopes(source, dialect) if dialect is not None else None
    return transform(
        source,
        short_path,
        file_path,
        None,
        scopes,
        identifier=config.identifier,
    )


__all__ = ["transform_module"]
