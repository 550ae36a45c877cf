"""Explicit parse context threaded through the grammar rules.

Python 3.13+.
"""

from dataclasses import dataclass, replace

from fluentsyntax.constants import MAX_DEPTH
from fluentsyntax.syntax.ast import Span

__all__ = ["ParseContext"]


@dataclass(frozen=True, slots=True)
class ParseContext:
    """Per-parse settings and nesting state.

    Replaces parser instance state with explicit parameter passing, so
    rule functions stay free of globals and one parser can serve several
    threads.

    Attributes:
        with_spans: Attach a Span to every node
        max_nesting_depth: Maximum allowed nesting depth for placeables
        current_depth: Current nesting depth (0 = top level)
    """

    with_spans: bool = False
    max_nesting_depth: int = MAX_DEPTH
    current_depth: int = 0

    def is_depth_exceeded(self) -> bool:
        """Check if maximum nesting depth has been reached."""
        return self.current_depth >= self.max_nesting_depth

    def enter_placeable(self) -> "ParseContext":
        """Create new context with incremented depth for a placeable or argument list."""
        return replace(self, current_depth=self.current_depth + 1)

    def finish[N](self, node: N, start: int, end: int) -> N:
        """Attach Span(start, end) to node when span tracking is on."""
        if not self.with_spans:
            return node
        return replace(node, span=Span(start, end))  # type: ignore[type-var]
