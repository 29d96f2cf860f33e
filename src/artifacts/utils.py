"""Helpers shared by the rewrite driver."""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from pathlib import Path


def _write_jsonl(path: Path, records: Iterable[Mapping[str, object]]) -> None:
    """Write one sorted-key JSON object per line."""
    with path.open("wb") as f:
        for record in records:
            f.write(
                orjson.dumps(
                    record, option=orjson.OPT_SORT_KEYS | orjson.OPT_APPEND_NEWLINE
                )
            )


def _get_output_dir_name(out_dir: Path, root: Path) -> str:
    """Top-level directory of ``out_dir`` inside ``root``, or ``""`` outside it."""
    if not out_dir.is_relative_to(root):
        return ""
    parts = out_dir.relative_to(root).parts
    return parts[0] if parts else ""
