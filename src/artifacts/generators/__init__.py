"""Artifact generators for ggtag."""

from artifacts.generators.rewrite import RewriteGenerator

__all__ = ["RewriteGenerator"]
