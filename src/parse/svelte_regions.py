"""Code regions and function scopes of Svelte components.

A component mixes three kinds of content:

- ``<script>`` blocks (instance and ``module``) hold plain script code.
- ``{...}`` tags in the markup (expression tags, attribute values,
  directives, ``{#if}``/``{#each}``/``{#await}``/``{#key}`` blocks,
  ``{@html}``, ``{@const}``, spreads) hold embedded expressions.
- Everything else is markup or prose: text nodes, ``<style>`` blocks and
  HTML comments.

Only the first two are reported as code regions, so ``gg()`` written in a
paragraph of text is never rewritten.
"""

from __future__ import annotations

import logging
import re

from contract.models import (
    CodeInfo,
    CodeRegion,
    FunctionScope,
    RegionContext,
    SourceSpan,
)
from lex.delimiters import match_paren
from parse.treesitter_scopes import extract_function_scopes

logger = logging.getLogger(__name__)

# Quoted attribute values may hold ">", e.g. generics="T extends Map<K, V>".
_TAG_ATTRS = r"""(?:"[^"]*"|'[^']*'|[^>"'])*"""
_SCRIPT_OPEN_RE = re.compile(rf"<script(?=[\s>/])({_TAG_ATTRS})>", re.IGNORECASE)
_SCRIPT_CLOSE_RE = re.compile(r"</script\s*>", re.IGNORECASE)
_STYLE_OPEN_RE = re.compile(rf"<style(?=[\s>/]){_TAG_ATTRS}>", re.IGNORECASE)
_STYLE_CLOSE_RE = re.compile(r"</style\s*>", re.IGNORECASE)
_LANG_TS_RE = re.compile(r"""\blang\s*=\s*["']?(?:ts|typescript)\b""", re.IGNORECASE)


class MarkupError(ValueError):
    """Raised internally when a component cannot be split into regions."""


def _find_block_end(
    source: str,
    content_start: int,
    close_re: re.Pattern[str],
    tag: str,
) -> re.Match[str]:
    close = close_re.search(source, content_start)
    if close is None:
        msg = f"unterminated <{tag}> at offset {content_start}"
        raise MarkupError(msg)
    return close


def _split_blocks(
    source: str,
) -> tuple[list[tuple[SourceSpan, str]], list[SourceSpan]]:
    """Return script contents (with attributes) and all non-markup spans."""
    scripts: list[tuple[SourceSpan, str]] = []
    excluded: list[SourceSpan] = []
    pos = 0
    length = len(source)
    while pos < length:
        lt = source.find("<", pos)
        if lt == -1:
            break

        if source.startswith("<!--", lt):
            end = source.find("-->", lt + 4)
            if end == -1:
                msg = f"unterminated HTML comment at offset {lt}"
                raise MarkupError(msg)
            excluded.append(SourceSpan(lt, end + 3))
            pos = end + 3
            continue

        script_open = _SCRIPT_OPEN_RE.match(source, lt)
        if script_open is not None:
            close = _find_block_end(source, script_open.end(), _SCRIPT_CLOSE_RE, "script")
            scripts.append(
                (SourceSpan(script_open.end(), close.start()), script_open.group(1))
            )
            excluded.append(SourceSpan(lt, close.end()))
            pos = close.end()
            continue

        style_open = _STYLE_OPEN_RE.match(source, lt)
        if style_open is not None:
            close = _find_block_end(source, style_open.end(), _STYLE_CLOSE_RE, "style")
            excluded.append(SourceSpan(lt, close.end()))
            pos = close.end()
            continue

        pos = lt + 1

    return scripts, excluded


def _markup_expression_regions(
    source: str,
    excluded: list[SourceSpan],
) -> list[CodeRegion]:
    regions: list[CodeRegion] = []
    bounds = [SourceSpan(0, 0), *excluded, SourceSpan(len(source), len(source))]
    for before, after in zip(bounds, bounds[1:]):
        pos = before.end
        while pos < after.start:
            brace = source.find("{", pos, after.start)
            if brace == -1:
                break
            end = match_paren(source, brace)
            if end is None or end > after.start:
                msg = f"unbalanced '{{' at offset {brace}"
                raise MarkupError(msg)
            regions.append(CodeRegion(SourceSpan(brace, end), RegionContext.EMBEDDED))
            pos = end
    return regions


def _script_scopes(source: str, span: SourceSpan, attrs: str) -> list[FunctionScope]:
    dialect = "typescript" if _LANG_TS_RE.search(attrs) else "javascript"
    return extract_function_scopes(
        source[span.start : span.end],
        dialect,
        offset=span.start,
    )


def collect_code_info(source: str) -> CodeInfo:
    """Collect code regions and function scopes for a Svelte component.

    Never raises: a component that cannot be split yields an empty
    ``CodeInfo``, which means no call in it gets rewritten.
    """
    try:
        scripts, excluded = _split_blocks(source)
        template_regions = _markup_expression_regions(source, excluded)
    except MarkupError as exc:
        logger.debug("skipping component regions: %s", exc)
        return CodeInfo()

    regions = [CodeRegion(span, RegionContext.SCRIPT) for span, _ in scripts]
    regions.extend(template_regions)
    regions.sort(key=lambda region: region.span.start)

    scopes: list[FunctionScope] = []
    for span, attrs in scripts:
        scopes.extend(_script_scopes(source, span, attrs))
    scopes.sort(key=lambda scope: (scope.span.start, -scope.span.end))

    return CodeInfo(regions=tuple(regions), scopes=tuple(scopes))


__all__ = ["MarkupError", "collect_code_info"]
