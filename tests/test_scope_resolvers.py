from __future__ import annotations

import pytest

from contract.models import FunctionScope, SourceSpan
from scope import HeuristicResolver, ScopeMapResolver, make_resolver


def _resolve_at_marker(source: str, marker: str = "gg(", *, floor: int = 0) -> str:
    return HeuristicResolver(source).resolve(source.index(marker), floor=floor)


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("function handleClick() { gg() }", "handleClick"),
        ("function* walk() { gg() }", "walk"),
        ("const load = async () => { gg() }", "load"),
        ("let onInput = (e: Event): void => { gg(e) }", "onInput"),
        ("var each = item => gg(item)", "each"),
        ("const run = function () { gg() }", "run"),
        ("class A { async save(a, b) { gg(a) } }", "save"),
        ("const obj = { load: function () { gg() } }", "load"),
        ("const obj = { load: async function () { gg() } }", "load"),
        ("function a() {}\nfunction b() { gg() }", "b"),
    ],
)
def test_heuristic_finds_closest_function_name(source: str, expected: str) -> None:
    assert _resolve_at_marker(source) == expected


@pytest.mark.parametrize(
    "source",
    [
        "gg()",
        "const count = 1;\ngg(count)",
        "if (ready) { gg() }",
        "for (const x of xs) { gg(x) }",
        "while (true) { gg() }",
        "switch (k) { default: gg() }",
    ],
)
def test_heuristic_returns_empty_for_top_level_and_keywords(source: str) -> None:
    assert _resolve_at_marker(source) == ""


def test_heuristic_is_textual_not_scope_aware() -> None:
    source = "function done() {}\ngg()"

    assert _resolve_at_marker(source) == "done"


def test_heuristic_never_reads_below_floor() -> None:
    source = "function outer() {}\n<p>{gg(x)}</p>"

    assert _resolve_at_marker(source, floor=source.index("{gg")) == ""


def test_heuristic_ignores_matches_after_position() -> None:
    source = "gg()\nfunction later() {}"

    assert _resolve_at_marker(source) == ""


def _scope(start: int, end: int, name: str) -> FunctionScope:
    return FunctionScope(span=SourceSpan(start, end), name=name)


def test_scope_map_picks_innermost_scope() -> None:
    resolver = ScopeMapResolver([_scope(0, 100, "outer"), _scope(10, 50, "inner")])

    assert resolver.resolve(20) == "inner"
    assert resolver.resolve(60) == "outer"
    assert resolver.resolve(5) == "outer"


def test_scope_map_spans_are_half_open() -> None:
    resolver = ScopeMapResolver([_scope(0, 100, "outer"), _scope(10, 50, "inner")])

    assert resolver.resolve(10) == "inner"
    assert resolver.resolve(50) == "outer"
    assert resolver.resolve(100) == ""


def test_scope_map_tie_keeps_first_scope() -> None:
    resolver = ScopeMapResolver([_scope(10, 20, "first"), _scope(10, 20, "second")])

    assert resolver.resolve(15) == "first"


def test_scope_map_sorts_unordered_input() -> None:
    resolver = ScopeMapResolver([_scope(30, 40, "b"), _scope(0, 10, "a")])

    assert [scope.name for scope in resolver.scopes] == ["a", "b"]
    assert resolver.resolve(35) == "b"
    assert resolver.resolve(20) == ""


def test_scope_map_ignores_floor() -> None:
    resolver = ScopeMapResolver([_scope(0, 100, "outer")])

    assert resolver.resolve(50, floor=40) == "outer"


def test_make_resolver_prefers_supplied_scopes() -> None:
    assert isinstance(make_resolver("gg()", []), ScopeMapResolver)
    assert isinstance(make_resolver("gg()", None), HeuristicResolver)


def test_empty_scope_map_does_not_fall_back_to_heuristic() -> None:
    source = "function named() { gg() }"

    resolver = make_resolver(source, [])

    assert resolver.resolve(source.index("gg(")) == ""
