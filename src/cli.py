"""Command-line interface for ggtag."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from artifacts.write import rewrite_tree, scan_tree
from rewrite.hook import transform_module
from rules.config import ConfigError, load_config
from utils import to_module_id


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Project root (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ggtag")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    rewrite_parser = subparsers.add_parser(
        "rewrite", help="Rewrite gg() call sites in a project"
    )
    _add_common_paths(rewrite_parser)
    rewrite_parser.add_argument(
        "--out-dir",
        default=None,
        help="Output directory for rewritten files (default: config output dir)",
    )
    rewrite_parser.add_argument(
        "--in-place",
        action="store_true",
        help="Overwrite source files instead of mirroring them into the output dir",
    )

    scan_parser = subparsers.add_parser(
        "scan", help="List gg() call sites without writing anything"
    )
    _add_common_paths(scan_parser)

    transform_parser = subparsers.add_parser(
        "transform", help="Print one rewritten file to stdout"
    )
    transform_parser.add_argument("file", help="Source file to rewrite")
    transform_parser.add_argument(
        "--module-id",
        default=None,
        help="Module id used for paths and gating (default: the file path)",
    )

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _resolve_output_dir(out_dir: str | None) -> Path | None:
    if out_dir is None:
        return None
    return Path(out_dir).expanduser().resolve()


def _handle_rewrite(root: Path, out_dir: str | None, in_place: bool) -> int:
    summary = rewrite_tree(
        root=root,
        out_dir=_resolve_output_dir(out_dir),
        in_place=in_place,
    )
    sys.stdout.write(
        f"rewrote {summary['call_sites']} call site(s) "
        f"in {summary['files_rewritten']} file(s)\n"
    )
    return 0


def _handle_scan(root: Path) -> int:
    for record in scan_tree(root=root):
        sys.stdout.write(
            f"{record['path']}:{record['line']}:{record['col']}\t{record['namespace']}\n"
        )
    return 0


def _handle_transform(file: str, module_id: str | None) -> int:
    path = Path(file).expanduser().resolve()
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        sys.stderr.write(f"error: cannot read {path}: {exc}\n")
        return 2

    config = load_config(Path.cwd())
    result = transform_module(source, module_id or to_module_id(path), config)
    sys.stdout.write(result.code if result is not None else source)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        if args.command == "transform":
            return _handle_transform(args.file, args.module_id)

        root = Path(args.root).expanduser().resolve()

        if args.command == "rewrite":
            return _handle_rewrite(root, args.out_dir, args.in_place)

        if args.command == "scan":
            return _handle_scan(root)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
