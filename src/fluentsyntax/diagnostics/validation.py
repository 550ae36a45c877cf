"""Result types returned by validate_resource.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fluentsyntax.syntax.ast import Annotation

__all__ = [
    "ValidationError",
    "ValidationResult",
]

_CONTENT_PREVIEW = 100


@dataclass(frozen=True, slots=True)
class ValidationError:
    """A syntax error located in the source, built from one Junk annotation.

    ``line`` and ``column`` are 1-based and None when the position is
    unknown (for example, a source rejected before parsing).

    ``content`` is the raw Junk text. Pass ``sanitize=True`` to format()
    before writing it to shared logs.
    """

    code: str
    message: str
    content: str
    line: int | None = None
    column: int | None = None

    def format(self, *, sanitize: bool = False, redact_content: bool = False) -> str:
        """One-line description.

        With ``sanitize`` the content is cut to 100 characters, or hidden
        entirely when ``redact_content`` is also set.

            >>> ValidationError("E0002", "Expected an entry start", "%%%", 2, 1).format()
            "[E0002] at line 2, column 1: Expected an entry start (content: '%%%')"
        """
        content = self.content
        if sanitize and redact_content:
            content = "[content redacted]"
        elif sanitize and len(content) > _CONTENT_PREVIEW:
            content = f"{content[:_CONTENT_PREVIEW]}..."

        where = ""
        if self.line is not None:
            where = f" at line {self.line}"
            if self.column is not None:
                where = f"{where}, column {self.column}"

        return f"[{self.code}]{where}: {self.message} (content: {content!r})"


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Errors found in one resource, in source order.

    ``annotations`` holds the Junk annotations the errors were built from.
    """

    errors: tuple[ValidationError, ...]
    annotations: tuple[Annotation, ...]

    @property
    def is_valid(self) -> bool:
        return not self.errors and not self.annotations

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @staticmethod
    def valid() -> ValidationResult:
        """The empty result."""
        return ValidationResult(errors=(), annotations=())
