"""Rewritten-source generator."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from artifacts.models.artifacts.callsites import CallSiteRecord
from contract.artifacts import build_callsite_id
from rewrite.hook import transform_module
from scan.files import find_source_files

if TYPE_CHECKING:
    from pathlib import Path

    from contract.models import CallSiteMetadata
    from rules.config import GgTagConfig

logger = logging.getLogger(__name__)


def _to_record(rel_path: str, call_site: CallSiteMetadata) -> CallSiteRecord:
    return CallSiteRecord(
        callsite_id=build_callsite_id(
            rel_path, call_site.line, call_site.col, call_site.namespace
        ),
        path=rel_path,
        namespace=call_site.namespace,
        file=call_site.file,
        line=call_site.line,
        col=call_site.col,
        function_name=call_site.function_name,
        src=call_site.source_text,
        context=call_site.context.value,
        shape="labeled" if call_site.labeled else "bare",
    )


class RewriteGenerator:
    """Rewrites gg() call sites across a project tree."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "rewrite"

    def generate(
        self,
        root: Path,
        out_dir: Path | None,
        config: GgTagConfig,
        *,
        output_dir_name: str = "",
        in_place: bool = False,
    ) -> tuple[list[dict[str, Any]], dict[str, Any]]:
        """Rewrite every eligible file under ``root``.

        Rewritten files are mirrored under ``out_dir`` (or overwritten when
        ``in_place``); ``out_dir=None`` with ``in_place=False`` is a dry run.

        Returns:
            Call-site record dicts and a summary of the run.
        """
        records: list[CallSiteRecord] = []
        files_scanned = 0
        files_rewritten = 0
        files_skipped = 0

        for file_path in find_source_files(
            root,
            extensions=config.extensions,
            output_dir=output_dir_name,
            include_patterns=config.include,
            exclude_patterns=config.exclude,
            nested_gitignore=config.nested_gitignore,
        ):
            files_scanned += 1
            rel_path = file_path.relative_to(root).as_posix()
            try:
                source = file_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("skipping %s: %s", rel_path, exc)
                files_skipped += 1
                continue

            result = transform_module(source, f"/{rel_path}", config)
            if result is None:
                continue

            files_rewritten += 1
            records.extend(_to_record(rel_path, site) for site in result.call_sites)
            logger.debug("%s: %d call site(s)", rel_path, len(result.call_sites))

            if in_place:
                file_path.write_text(result.code, encoding="utf-8")
            elif out_dir is not None:
                target = out_dir / rel_path
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(result.code, encoding="utf-8")

        records.sort(key=lambda record: (record.path, record.line, record.col))

        summary = {
            "files_scanned": files_scanned,
            "files_rewritten": files_rewritten,
            "files_skipped": files_skipped,
            "call_sites": len(records),
        }
        return [record.model_dump() for record in records], summary


__all__ = ["RewriteGenerator"]
