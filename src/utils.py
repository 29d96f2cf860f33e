"""Shared path and position helpers."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

DEFAULT_SRC_ROOT_PATTERN = r".*?(/(?:src|chunks)/)"


@lru_cache(maxsize=32)
def _compile_src_root(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


def to_module_id(file_path: str | Path) -> str:
    """Normalize a file path to the forward-slash id a build hook sees."""
    path_str = file_path.as_posix() if isinstance(file_path, Path) else str(file_path)
    return path_str.replace("\\", "/")


def split_module_id(
    module_id: str,
    src_root_pattern: str = DEFAULT_SRC_ROOT_PATTERN,
) -> tuple[str, str]:
    """Derive the display path and the editor path for a module id.

    Args:
        module_id: Absolute or project-relative path, forward slashes.
        src_root_pattern: Regex matching up to and including the source root
            folder; group 1, when present, is kept in the editor path.

    Returns:
        ``(short_path, file_path)``

    Examples:
        >>> split_module_id("/Users/me/app/src/routes/+page.svelte")
        ('routes/+page.svelte', 'src/routes/+page.svelte')
        >>> split_module_id("/lib/util.ts")
        ('/lib/util.ts', 'lib/util.ts')
    """
    regex = _compile_src_root(src_root_pattern)
    short_path = regex.sub("", module_id, count=1)

    def _keep_root(match: re.Match[str]) -> str:
        return (match.group(1) or "") if regex.groups else ""

    file_path = regex.sub(_keep_root, module_id, count=1).removeprefix("/")
    return short_path, file_path


def line_col(source: str, offset: int) -> tuple[int, int]:
    """1-based line and column of ``offset``."""
    line = source.count("\n", 0, offset) + 1
    col = offset - source.rfind("\n", 0, offset)
    return line, col
