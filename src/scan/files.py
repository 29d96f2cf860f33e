"""Source file discovery for batch rewriting."""

from __future__ import annotations

from fnmatch import fnmatch
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator
    from pathlib import Path

# Never descended into, whatever .gitignore says.
_SKIPPED_DIRS = frozenset({".git", "node_modules", ".svelte-kit"})


def _is_within_root(path: Path, root: Path) -> bool:
    """Return True when the resolved path stays within the resolved root."""
    try:
        path.resolve().relative_to(root.resolve())
    except (OSError, ValueError):
        return False
    return True


def _should_include_file(
    path: Path,
    directory: Path,
    *,
    extensions: frozenset[str],
    output_dir: str,
    gitignore_matches: Callable[[str], bool] | None,
    include_patterns: list[str] | None,
    exclude_patterns: list[str] | None,
) -> bool:
    """Check if a file should be included based on all filtering rules."""
    if path.suffix.lower() not in extensions:
        return False

    if not path.is_file() or path.is_symlink():
        return False

    if not _is_within_root(path, directory):
        return False

    rel_path = path.relative_to(directory)
    if any(part in _SKIPPED_DIRS for part in rel_path.parts[:-1]):
        return False

    if output_dir and rel_path.parts and rel_path.parts[0] == output_dir:
        return False

    if gitignore_matches is not None and gitignore_matches(str(path)):
        return False

    rel_path_str = rel_path.as_posix()
    if include_patterns and not any(
        fnmatch(rel_path_str, pat) for pat in include_patterns
    ):
        return False

    return not (
        exclude_patterns and any(fnmatch(rel_path_str, pat) for pat in exclude_patterns)
    )


def _build_gitignore_matcher(
    root: Path,
    *,
    nested_gitignore: bool,
) -> Callable[[str], bool] | None:
    if not nested_gitignore:
        gitignore_path = root / ".gitignore"
        if gitignore_path.is_file():
            return cast("Callable[[str], bool]", parse_gitignore(gitignore_path))
        return None

    gitignore_paths = sorted(
        {
            path
            for path in [root / ".gitignore", *root.rglob(".gitignore")]
            if path.is_file() and not path.is_symlink()
        },
        key=lambda p: p.relative_to(root).as_posix(),
    )
    if not gitignore_paths:
        return None

    matchers = [parse_gitignore(path) for path in gitignore_paths]

    def matches(path_str: str) -> bool:
        for matcher in matchers:
            try:
                if matcher(path_str):
                    return True
            except ValueError:
                continue
        return False

    return matches


def find_source_files(
    directory: Path,
    *,
    extensions: Iterable[str],
    output_dir: str = ".ggtag",
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
    nested_gitignore: bool = False,
) -> Iterator[Path]:
    """Find rewritable source files in a directory, respecting .gitignore.

    Args:
        directory: Project root to search
        extensions: Allowed suffixes, e.g. ``.ts`` or ``.svelte``
        output_dir: Directory name to skip (default ".ggtag")
        include_patterns: Optional fnmatch patterns; if provided, files must
            match at least one pattern to be included
        exclude_patterns: Optional fnmatch patterns; files matching any
            pattern are excluded

    Yields:
        Paths sorted lexicographically by relative path.
    """
    gitignore_matches = _build_gitignore_matcher(
        directory,
        nested_gitignore=nested_gitignore,
    )
    allowed = frozenset(ext.lower() for ext in extensions)

    matched_files = [
        path
        for path in directory.rglob("*")
        if _should_include_file(
            path,
            directory,
            extensions=allowed,
            output_dir=output_dir,
            gitignore_matches=gitignore_matches,
            include_patterns=include_patterns,
            exclude_patterns=exclude_patterns,
        )
    ]

    matched_files.sort(key=lambda p: p.relative_to(directory).as_posix())

    yield from matched_files


__all__ = ["find_source_files"]
