"""Core Fluent FTL parser implementation.

This module provides the FluentParser class that drives parsing of FTL
source into AST structures defined in :mod:`fluentsyntax.syntax.ast`.

Architecture:
    The parser walks a :class:`~fluentsyntax.syntax.stream.FluentParserStream`
    with the grammar rules in :mod:`~fluentsyntax.syntax.parser.rules`.
    Rules raise :class:`~fluentsyntax.diagnostics.ParseError`; the parser
    catches it at the entry boundary only, so one malformed entry becomes a
    single Junk node and parsing resumes at the next line that looks like an
    entry start.

AST Types:
    The parser produces a :class:`~fluentsyntax.syntax.ast.Resource` whose
    body holds:

    - :class:`~fluentsyntax.syntax.ast.Message` - messages with optional attributes
    - :class:`~fluentsyntax.syntax.ast.Term` - terms (referenced with ``-term`` syntax)
    - :class:`~fluentsyntax.syntax.ast.Comment` and its group/resource variants
    - :class:`~fluentsyntax.syntax.ast.Whitespace` - blank lines between entries
    - :class:`~fluentsyntax.syntax.ast.Junk` - unparseable content

Security:
    Includes configurable input size and placeable nesting limits.
"""

import logging
from dataclasses import replace

from fluentsyntax.constants import MAX_DEPTH, MAX_SOURCE_SIZE
from fluentsyntax.core.depth_guard import depth_clamp
from fluentsyntax.diagnostics.errors import ParseError
from fluentsyntax.syntax.ast import (
    Annotation,
    Comment,
    Junk,
    Message,
    Resource,
    Span,
    Term,
    TopLevel,
    Whitespace,
)
from fluentsyntax.syntax.parser.context import ParseContext
from fluentsyntax.syntax.parser.rules import get_entry
from fluentsyntax.syntax.stream import EOF, FluentParserStream

__all__ = ["FluentParser"]

logger = logging.getLogger(__name__)


def _attach_comment[E: (Message, Term)](entry: E, comment: Comment) -> E:
    """Return entry with comment attached, widening its span to cover it."""
    span = entry.span
    if span is not None and comment.span is not None:
        span = Span(comment.span.start, span.end)
    return replace(entry, comment=comment, span=span)


class FluentParser:
    """Fluent FTL parser with per-entry error recovery.

    parse() is total: any string yields a Resource. Malformed entries are
    returned as Junk carrying an Annotation with the error code.

    Security:
    - Configurable max_source_size prevents DoS via large inputs
    - Configurable max_nesting_depth prevents stack exhaustion from deeply
      nested placeables; deeper nesting becomes Junk (E0030)

    Attributes:
        with_spans: Attach source spans to every node
        max_source_size: Maximum allowed source length (default: 10M chars)
        max_nesting_depth: Maximum allowed placeable nesting depth (default: 100)
    """

    __slots__ = ("_max_nesting_depth", "_max_source_size", "_with_spans")

    def __init__(
        self,
        *,
        with_spans: bool = False,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
    ) -> None:
        """Initialize parser.

        Args:
            with_spans: Track source positions on every node (default: False).
            max_source_size: Maximum source length (default: 10M characters).
                            Set to 0 to disable the size limit.
            max_nesting_depth: Maximum placeable nesting depth (default: 100).
                              Clamped to what the interpreter's recursion
                              limit can support.
        """
        self._with_spans = with_spans
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )
        self._max_nesting_depth = depth_clamp(
            max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH
        )

    @property
    def with_spans(self) -> bool:
        """Whether nodes carry source spans."""
        return self._with_spans

    @property
    def max_source_size(self) -> int:
        """Maximum allowed source length in characters."""
        return self._max_source_size

    @property
    def max_nesting_depth(self) -> int:
        """Maximum allowed placeable nesting depth."""
        return self._max_nesting_depth

    def check_source_size(self, source: str) -> None:
        """Reject sources longer than max_source_size.

        Raises:
            ValueError: If source exceeds max_source_size
        """
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            msg = (
                f"Source size ({len(source):,} characters) exceeds maximum "
                f"({self._max_source_size:,}). "
                "Configure max_source_size in FluentParser constructor to increase limit."
            )
            raise ValueError(msg)

    def parse(self, source: str) -> Resource:
        """Parse FTL source into AST Resource.

        A single-hash Comment directly followed by a Message or Term (no
        blank line between) is attached to it. Blank lines between entries
        are kept as Whitespace entries; blank lines before the first entry
        are dropped.

        Args:
            source: FTL file content

        Returns:
            Resource with the top-level items in source order

        Raises:
            ValueError: If source exceeds max_source_size

        Example:
            >>> resource = FluentParser().parse("hello = World\\n")
            >>> resource.body[0].id.name
            'hello'
        """
        self.check_source_size(source)

        ps = FluentParserStream(source)
        ctx = ParseContext(
            with_spans=self._with_spans,
            max_nesting_depth=self._max_nesting_depth,
        )
        ps.skip_blank_block()

        body: list[TopLevel] = []
        pending_comment: Comment | None = None

        while ps.current_char is not EOF:
            entry = self._get_entry_or_junk(ps, ctx)
            blank_start = ps.index
            blank_lines = ps.skip_blank_block()

            # A comment directly followed by another entry may belong to it;
            # hold it until that entry is parsed.
            if isinstance(entry, Comment) and not blank_lines and ps.current_char is not EOF:
                pending_comment = entry
                continue

            if pending_comment is not None:
                if isinstance(entry, (Message, Term)):
                    entry = _attach_comment(entry, pending_comment)
                else:
                    body.append(pending_comment)
                pending_comment = None

            body.append(entry)
            if ps.index > blank_start:
                whitespace = Whitespace(source[blank_start : ps.index])
                body.append(ctx.finish(whitespace, blank_start, ps.index))

        return ctx.finish(Resource(tuple(body)), 0, ps.index)

    def _get_entry_or_junk(self, ps: FluentParserStream, ctx: ParseContext) -> TopLevel:
        """Parse one entry and its line end, or recover with Junk."""
        entry_start = ps.index
        try:
            entry = get_entry(ps, ctx)
            ps.expect_line_end()
            return entry
        except ParseError as err:
            error_index = ps.index
            ps.skip_to_next_entry_start(entry_start)
            next_entry_start = ps.index
            error_index = min(error_index, next_entry_start)

            logger.debug(
                "Junk at offset %d (error %s at %d): %s",
                entry_start,
                err.code,
                error_index,
                err.message,
            )

            annotation = Annotation(
                code=err.code.value,
                message=err.message,
                arguments=err.arguments,
                span=Span(error_index, error_index),
            )
            junk = Junk(ps.string[entry_start:next_entry_start], (annotation,))
            return ctx.finish(junk, entry_start, next_entry_start)
