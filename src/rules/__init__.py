"""Configuration and gating rules for ggtag."""

from rules.config import (
    ConfigError,
    GgTagConfig,
    load_config,
    resolve_output_dir,
)
from rules.gating import is_hybrid_document, should_transform

__all__ = [
    "ConfigError",
    "GgTagConfig",
    "is_hybrid_document",
    "load_config",
    "resolve_output_dir",
    "should_transform",
]
