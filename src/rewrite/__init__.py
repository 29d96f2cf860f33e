"""Call-site rewriting for gg() logging calls."""

from rewrite.emitter import transform
from rewrite.hook import transform_module
from rewrite.labels import build_namespace, escape_for_string

__all__ = ["build_namespace", "escape_for_string", "transform", "transform_module"]
