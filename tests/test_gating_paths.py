from __future__ import annotations

from pathlib import Path

import pytest

from rules.config import GgTagConfig
from rules.gating import (
    has_allowed_extension,
    is_excluded_path,
    is_hybrid_document,
    mentions_target_call,
    should_transform,
    strip_query,
)
from utils import line_col, split_module_id, to_module_id


@pytest.mark.parametrize(
    ("module_id", "expected"),
    [
        (
            "/Users/me/app/src/routes/+page.svelte",
            ("routes/+page.svelte", "src/routes/+page.svelte"),
        ),
        ("/lib/util.ts", ("/lib/util.ts", "lib/util.ts")),
        ("/app/SRC/a.ts", ("a.ts", "SRC/a.ts")),
        (
            "/app/.svelte-kit/output/chunks/x.js",
            ("x.js", "chunks/x.js"),
        ),
        ("/a/src/b/src/c.ts", ("b/src/c.ts", "src/b/src/c.ts")),
    ],
)
def test_split_module_id(module_id: str, expected: tuple[str, str]) -> None:
    assert split_module_id(module_id) == expected


def test_split_module_id_pattern_without_group() -> None:
    assert split_module_id("/x/app/a.ts", r".*?/app/") == ("a.ts", "a.ts")


@pytest.mark.parametrize(
    ("offset", "expected"),
    [(0, (1, 1)), (2, (1, 3)), (3, (2, 1)), (4, (2, 2))],
)
def test_line_col(offset: int, expected: tuple[int, int]) -> None:
    assert line_col("ab\ncd", offset) == expected


def test_to_module_id_uses_forward_slashes() -> None:
    assert to_module_id(Path("src") / "a.ts") == "src/a.ts"
    assert to_module_id("src\\lib\\a.ts") == "src/lib/a.ts"


def test_strip_query() -> None:
    assert strip_query("/a.svelte?svelte&type=style") == "/a.svelte"
    assert strip_query("/a.ts") == "/a.ts"


@pytest.mark.parametrize(
    ("module_id", "expected"),
    [
        ("/src/a.js", True),
        ("/src/a.ts", True),
        ("/src/a.svelte", True),
        ("/src/a.jsx", True),
        ("/src/a.tsx", True),
        ("/src/a.mjs", True),
        ("/src/a.mts", True),
        ("/src/A.TS", True),
        ("/src/a.svelte?svelte&type=script", True),
        ("/src/a.css", False),
        ("/src/a.cjs", False),
        ("/src/a.json", False),
    ],
)
def test_has_allowed_extension(module_id: str, expected: bool) -> None:
    assert has_allowed_extension(module_id, GgTagConfig().extensions) is expected


@pytest.mark.parametrize(
    ("module_id", "expected"),
    [
        ("/app/src/lib/gg.ts", True),
        ("/app/src/lib/debug/index.ts", True),
        ("/app/node_modules/pkg/index.js", True),
        ("/app/src/lib/ggplot.ts", False),
        ("/app/src/routes/+page.svelte", False),
    ],
)
def test_is_excluded_path(module_id: str, expected: bool) -> None:
    assert is_excluded_path(module_id, GgTagConfig().exclude_paths) is expected


def test_mentions_target_call() -> None:
    assert mentions_target_call("gg(1)", "gg")
    assert mentions_target_call("gg.ns('x')", "gg")
    assert not mentions_target_call("gg.enable('x')", "gg")
    assert not mentions_target_call("gg(1)", "log")


def test_is_hybrid_document() -> None:
    assert is_hybrid_document("/src/App.svelte")
    assert is_hybrid_document("/src/App.svelte?svelte&type=script")
    assert not is_hybrid_document("/src/app.ts")


def test_should_transform() -> None:
    config = GgTagConfig()

    assert should_transform("/app/src/a.ts", "gg(1)", config)
    assert not should_transform("/app/src/a.ts", "const x = 1", config)
    assert not should_transform("/app/src/a.css", "gg(1)", config)
    assert not should_transform("/app/src/lib/gg.ts", "gg(1)", config)
