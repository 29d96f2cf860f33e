from __future__ import annotations

import pytest

from lex.skipper import skip_literal


@pytest.mark.parametrize(
    ("source", "pos", "expected"),
    [
        ("abc", 0, 0),
        ("a / b", 2, 2),
        ("// hi\nx", 0, 6),
        ("// hi", 0, 5),
        ("/* a */x", 0, 7),
        ("/* a", 0, 4),
        ("'a\\'b'x", 0, 6),
        ('"a\\\\"x', 0, 5),
        ("'abc", 0, 4),
        ("'abc\\", 0, 5),
        ("`a${b}c`x", 0, 8),
        ("`a${`b`}c`x", 0, 10),
        ("`${'}'}`x", 0, 8),
        ("`${ {a: 1} }`x", 0, 13),
        ("`a\\`b`x", 0, 6),
        ("`open ${x", 0, 9),
    ],
)
def test_skip_literal_positions(source: str, pos: int, expected: int) -> None:
    assert skip_literal(source, pos) == expected


def test_skip_literal_past_end_is_noop() -> None:
    assert skip_literal("abc", 3) == 3


def test_quote_inside_block_comment_does_not_open_string() -> None:
    source = "/* don't */gg()"

    assert skip_literal(source, 0) == source.index("gg")


def test_template_brace_without_interpolation_is_plain_text() -> None:
    source = "`{ }`;"

    assert skip_literal(source, 0) == 5
