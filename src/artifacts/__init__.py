"""Artifact generation entry points."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from rules.config import GgTagConfig


def rewrite_tree(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: GgTagConfig | None = None,
    in_place: bool = False,
) -> dict[str, object]:
    """Rewrite a project tree via lazy import to avoid package import cycles."""
    from artifacts.write import rewrite_tree as _rewrite_tree

    return _rewrite_tree(root=root, out_dir=out_dir, config=config, in_place=in_place)


__all__ = ["rewrite_tree"]
