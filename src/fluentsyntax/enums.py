"""Enumerations for fluentsyntax type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class CommentType(StrEnum):
    """Level of an FTL comment.

    StrEnum provides automatic string conversion: str(CommentType.COMMENT) == "comment"
    """

    COMMENT = "comment"
    """Standalone or attached comment: # This is a comment"""

    GROUP = "group"
    """Group comment: ## Group Title"""

    RESOURCE = "resource"
    """Resource comment: ### Resource Description"""

    @property
    def sigil(self) -> str:
        """Line prefix used in FTL source for this comment level."""
        return "#" * (_LEVELS.index(self) + 1)


_LEVELS: tuple[CommentType, ...] = (
    CommentType.COMMENT,
    CommentType.GROUP,
    CommentType.RESOURCE,
)


__all__ = [
    "CommentType",
]
