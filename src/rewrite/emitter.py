"""Single-pass rewriter for ``gg(...)`` and ``gg.ns('label', ...)`` calls."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from contract.artifacts import DEFAULT_IDENTIFIER, LABEL_ACCESSOR
from contract.models import CallSiteMetadata, RegionContext, RewriteResult
from lex.delimiters import match_paren
from lex.skipper import skip_literal
from rewrite.forms import build_call_head
from rewrite.labels import (
    LabelContext,
    build_namespace,
    substitute_template_variables,
    unescape_string_body,
)
from rewrite.regions import make_classifier
from scope import make_resolver
from utils import line_col

if TYPE_CHECKING:
    from collections.abc import Iterable

    from contract.models import CodeRegion, FunctionScope
    from rewrite.regions import RegionClassifier
    from scope import ScopeResolver

logger = logging.getLogger(__name__)

_QUOTES = frozenset("'\"")


def _is_identifier_char(ch: str) -> bool:
    """True for anything that may continue a JavaScript identifier."""
    return ch == "$" or f"_{ch}".isidentifier()


def _skip_whitespace(source: str, pos: int, limit: int) -> int:
    while pos < limit and source[pos].isspace():
        pos += 1
    return pos


class _CallRewriter:
    """Scanner state for one source unit."""

    def __init__(
        self,
        source: str,
        short_path: str,
        file_path: str,
        classifier: RegionClassifier,
        resolver: ScopeResolver,
        identifier: str,
    ) -> None:
        self.source = source
        self.short_path = short_path
        self.file_path = file_path
        self.classifier = classifier
        self.resolver = resolver
        self.identifier = identifier
        self.labeled_prefix = f"{identifier}.{LABEL_ACCESSOR}("
        self.pieces: list[str] = []
        self.last_index = 0
        self.call_sites: list[CallSiteMetadata] = []

    def run(self) -> RewriteResult | None:
        source = self.source
        length = len(source)
        i = 0
        while i < length:
            region = self.classifier.region_at(i)
            if region is None:
                # Prose: no literal skipping, an apostrophe is just text.
                i += 1
                continue

            skipped = skip_literal(source, i)
            if skipped != i:
                i = skipped
                continue

            if not self._is_candidate(i):
                i += 1
                continue

            i = self._rewrite_candidate(i, region)

        if not self.call_sites:
            return None

        self.pieces.append(source[self.last_index :])
        return RewriteResult(
            code="".join(self.pieces),
            changed=True,
            call_sites=tuple(self.call_sites),
        )

    def _is_candidate(self, pos: int) -> bool:
        if not self.source.startswith(self.identifier, pos):
            return False
        if pos == 0:
            return True
        prev = self.source[pos - 1]
        return prev != "." and not _is_identifier_char(prev)

    def _rewrite_candidate(self, start: int, region: CodeRegion) -> int:
        """Rewrite the call at ``start`` if it has a recognized shape.

        Returns the position to resume scanning from.
        """
        after = start + len(self.identifier)
        if self.source.startswith(self.labeled_prefix, start):
            return self._rewrite_labeled(start, after + len(LABEL_ACCESSOR) + 1, region)
        if self.source.startswith(".", after):
            # enable/disable/_ns/_o and friends are never rewritten
            return after + 1
        if self.source.startswith("(", after):
            return self._rewrite_bare(start, after, region)
        return after

    def _metadata(
        self,
        start: int,
        region: CodeRegion,
    ) -> tuple[int, int, str]:
        line, col = line_col(self.source, start)
        function_name = self.resolver.resolve(start, floor=region.span.start)
        return line, col, function_name

    def _rewrite_bare(self, start: int, open_pos: int, region: CodeRegion) -> int:
        close_end = match_paren(self.source, open_pos)
        if close_end is None:
            logger.debug("unterminated call at offset %d in %s", start, self.short_path)
            return open_pos + 1

        line, col, function_name = self._metadata(start, region)
        args_text = self.source[open_pos + 1 : close_end - 1].strip()
        metadata = CallSiteMetadata(
            namespace=build_namespace(self.short_path, function_name),
            file=self.file_path,
            line=line,
            col=col,
            source_text=args_text or None,
            function_name=function_name,
            context=region.context,
        )

        self.pieces.append(self.source[self.last_index : start])
        if args_text:
            self.pieces.append(build_call_head(metadata, self.identifier, has_args=True))
            self.pieces.append(" ")
            self.last_index = open_pos + 1
        else:
            self.pieces.append(build_call_head(metadata, self.identifier, has_args=False))
            self.last_index = close_end
        self.call_sites.append(metadata)
        return close_end

    def _rewrite_labeled(self, start: int, open_pos: int, region: CodeRegion) -> int:
        source = self.source
        close_end = match_paren(source, open_pos)
        if close_end is None:
            logger.debug("unterminated call at offset %d in %s", start, self.short_path)
            return open_pos + 1

        close_pos = close_end - 1
        quote_pos = _skip_whitespace(source, open_pos + 1, close_pos)
        if quote_pos >= close_pos or source[quote_pos] not in _QUOTES:
            # Label is not a literal; nothing to bake in at build time.
            return open_pos + 1

        label_end = skip_literal(source, quote_pos)
        next_pos = _skip_whitespace(source, label_end, close_pos + 1)
        if next_pos > close_pos or source[next_pos] not in ",)":
            return open_pos + 1

        line, col, function_name = self._metadata(start, region)
        label = unescape_string_body(source[quote_pos + 1 : label_end - 1])
        namespace = substitute_template_variables(
            label,
            LabelContext(
                namespace=build_namespace(self.short_path, function_name),
                function_name=function_name,
                short_path=self.short_path,
                line=line,
                col=col,
            ),
        )

        has_args = source[next_pos] == ","
        args_text = source[next_pos + 1 : close_pos].strip() if has_args else ""
        metadata = CallSiteMetadata(
            namespace=namespace,
            file=self.file_path,
            line=line,
            col=col,
            source_text=args_text or None,
            function_name=function_name,
            context=region.context,
            labeled=True,
        )

        self.pieces.append(source[self.last_index : start])
        self.pieces.append(build_call_head(metadata, self.identifier, has_args=has_args))
        self.last_index = next_pos + 1 if has_args else close_end
        self.call_sites.append(metadata)
        return close_end


def transform(
    source: str,
    short_path: str,
    file_path: str,
    code_regions: Iterable[CodeRegion] | None = None,
    function_scopes: Iterable[FunctionScope] | None = None,
    *,
    identifier: str = DEFAULT_IDENTIFIER,
) -> RewriteResult | None:
    """Rewrite target calls in ``source`` to carry call-site metadata.

    Args:
        source: Source text of one compilation unit; never mutated.
        short_path: Display path with the source root stripped
            (e.g. ``routes/+page.svelte``).
        file_path: Path keeping the source-root folder
            (e.g. ``src/routes/+page.svelte``).
        code_regions: Code regions of a hybrid document. ``None`` treats the
            whole buffer as script code.
        function_scopes: Named function spans from a syntax tree. ``None``
            falls back to the backward heuristic.
        identifier: Name of the logging function.

    Returns:
        ``None`` when no call was rewritten, else the rewritten buffer.
    """
    if code_regions is not None:
        code_regions = list(code_regions)
    rewriter = _CallRewriter(
        source,
        short_path,
        file_path,
        make_classifier(source, code_regions),
        make_resolver(source, function_scopes),
        identifier,
    )
    result = rewriter.run()
    if result is not None:
        logger.debug("rewrote %d call(s) in %s", len(result.call_sites), short_path)
    return result


__all__ = ["transform"]
