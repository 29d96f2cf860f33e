from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from artifacts.generators import RewriteGenerator
from artifacts.utils import _get_output_dir_name, _write_jsonl
from contract.artifacts import CALLSITES_JSONL
from rules.config import load_config, resolve_output_dir

if TYPE_CHECKING:
    from pathlib import Path

    from rules.config import GgTagConfig

logger = logging.getLogger(__name__)


def rewrite_tree(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: GgTagConfig | None = None,
    in_place: bool = False,
) -> dict[str, object]:
    """Rewrite gg() call sites for every eligible file in a project.

    Args:
        root: Root directory of the project
        out_dir: Optional output directory for rewritten files and the manifest
        config: Optional configuration (default: loaded from ggtag.toml)
        in_place: Overwrite source files instead of mirroring them

    Returns:
        Dictionary with counts and the output directory.
    """
    if config is None:
        config = load_config(root)

    if out_dir is None:
        out_dir = resolve_output_dir(root, config.output_dir)

    out_dir.mkdir(parents=True, exist_ok=True)
    records, summary = RewriteGenerator().generate(
        root,
        out_dir,
        config,
        output_dir_name=_get_output_dir_name(out_dir.resolve(), root.resolve()),
        in_place=in_place,
    )

    if config.manifest:
        _write_jsonl(out_dir / CALLSITES_JSONL, records)

    logger.info(
        "rewrote %d call site(s) in %d file(s)",
        summary["call_sites"],
        summary["files_rewritten"],
    )
    return {**summary, "out_dir": str(out_dir)}


def scan_tree(
    *,
    root: Path,
    config: GgTagConfig | None = None,
) -> list[dict[str, object]]:
    """Collect call-site records without writing anything."""
    if config is None:
        config = load_config(root)

    output_dir_name = _get_output_dir_name(
        resolve_output_dir(root, config.output_dir), root.resolve()
    )
    records, _ = RewriteGenerator().generate(
        root,
        None,
        config,
        output_dir_name=output_dir_name,
    )
    return records
