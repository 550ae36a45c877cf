"""Recursion limiting for the serializer and visitor.

Nested placeables and call arguments map to nested Python calls. A
DepthGuard counts those levels and raises DepthLimitExceededError before
the interpreter would raise RecursionError, so hand-built or adversarial
ASTs fail with a FluentError instead of crashing.

Each guarded level costs a walker several interpreter frames (a visitor
spends more per level than the serializer). When the outermost level is
entered the guard makes sure the recursion limit leaves room for
``max_depth`` levels at the walker's ``frames_per_level``, so anything
the parser accepts can be walked again.

Python 3.13+.
"""

from __future__ import annotations

import inspect
import logging
import sys
from dataclasses import dataclass, field

from fluentsyntax.constants import MAX_DEPTH
from fluentsyntax.diagnostics.errors import DepthLimitExceededError

__all__ = ["DepthGuard", "depth_clamp"]

logger = logging.getLogger(__name__)

# Interpreter frames spent per guarded level (placeable -> select ->
# variant -> pattern -> element -> expression), plus headroom.
_FRAMES_PER_LEVEL = 8

# Frames kept free above a guarded walk for logging and error handling.
_RESERVE_FRAMES = 50


def _stack_depth() -> int:
    depth = 0
    frame = inspect.currentframe()
    while frame is not None:
        depth += 1
        frame = frame.f_back
    return depth


@dataclass(slots=True)
class DepthGuard:
    """Counts nesting levels entered through ``with guard:``.

    One instance is shared by one recursive walk; it is mutable and not
    meant to be shared between threads. While the walk is inside its
    outermost level the interpreter recursion limit may be raised; it is
    restored when that level exits.

    Example:
        >>> guard = DepthGuard(max_depth=2)
        >>> with guard, guard:
        ...     guard.depth
        2
    """

    max_depth: int = MAX_DEPTH
    frames_per_level: int = _FRAMES_PER_LEVEL
    current_depth: int = field(default=0, init=False)
    _saved_limit: int | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        # Check first: __exit__ never runs when __enter__ raises.
        self.check()
        if self.current_depth == 0:
            self._reserve_stack()
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.current_depth -= 1
        if self.current_depth == 0 and self._saved_limit is not None:
            sys.setrecursionlimit(self._saved_limit)
            self._saved_limit = None

    @property
    def depth(self) -> int:
        return self.current_depth

    def is_exceeded(self) -> bool:
        """True once another level would go past max_depth."""
        return self.current_depth >= self.max_depth

    def check(self) -> None:
        """Raise DepthLimitExceededError if no further level is allowed."""
        if self.is_exceeded():
            raise DepthLimitExceededError(self.max_depth)

    def _reserve_stack(self) -> None:
        """Raise the recursion limit so max_depth levels fit above the caller."""
        limit = sys.getrecursionlimit()
        needed = _stack_depth() + self.max_depth * self.frames_per_level + _RESERVE_FRAMES
        if needed <= limit:
            return
        logger.debug("Raising recursion limit from %d to %d for a guarded walk", limit, needed)
        self._saved_limit = limit
        sys.setrecursionlimit(needed)


def depth_clamp(requested_depth: int, reserve_frames: int = _RESERVE_FRAMES) -> int:
    """Lower requested_depth to what the interpreter stack can hold.

    The ceiling is ``(sys.getrecursionlimit() - reserve_frames) //
    _FRAMES_PER_LEVEL``. A warning is logged when the request is lowered.

    Example:
        >>> sys.setrecursionlimit(1000)
        >>> depth_clamp(100), depth_clamp(5000)
        (100, 118)
    """
    limit = sys.getrecursionlimit()
    ceiling = (limit - reserve_frames) // _FRAMES_PER_LEVEL
    if requested_depth <= ceiling:
        return requested_depth
    logger.warning(
        "Clamping nesting depth %d to %d (recursion limit %d)",
        requested_depth,
        ceiling,
        limit,
    )
    return ceiling
