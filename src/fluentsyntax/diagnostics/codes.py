"""Diagnostic codes and data structures.

Defines syntax error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import StrEnum

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(StrEnum):
    """Syntax error codes reported in Junk annotations.

    Values are the stable ``E00NN`` identifiers shared with other Fluent
    tooling, so ``annotation.code == DiagnosticCode.EXPECTED_TOKEN`` works
    on plain strings.

    Organized by grammar area:
        E0001-E0004: Generic and token-level errors
        E0005-E0006: Entry shape errors
        E0008-E0009, E0014, E0021-E0022: Calls and arguments
        E0010-E0013, E0015: Select expressions and variants
        E0016-E0019, E0029: Selector and placeable restrictions
        E0020, E0025-E0026: String literals and escapes
        E0027-E0028: Patterns and inline expressions
        E0030: Resource limits
    """

    GENERIC = "E0001"
    EXPECTED_ENTRY = "E0002"
    EXPECTED_TOKEN = "E0003"
    EXPECTED_CHAR_RANGE = "E0004"
    MESSAGE_NO_VALUE = "E0005"
    TERM_NO_VALUE = "E0006"
    KEYWORD_TRAILING_WHITESPACE = "E0007"
    INVALID_CALLEE = "E0008"
    INVALID_ARGUMENT_NAME = "E0009"
    MISSING_DEFAULT_VARIANT = "E0010"
    MISSING_VARIANTS = "E0011"
    EXPECTED_VALUE = "E0012"
    EXPECTED_VARIANT_KEY = "E0013"
    EXPECTED_LITERAL = "E0014"
    MULTIPLE_DEFAULT_VARIANTS = "E0015"
    MESSAGE_AS_SELECTOR = "E0016"
    TERM_AS_SELECTOR = "E0017"
    MESSAGE_ATTRIBUTE_AS_SELECTOR = "E0018"
    TERM_ATTRIBUTE_AS_PLACEABLE = "E0019"
    UNTERMINATED_STRING = "E0020"
    POSITIONAL_AFTER_NAMED = "E0021"
    DUPLICATE_NAMED_ARGUMENT = "E0022"
    MESSAGE_VARIANT_ACCESS = "E0024"
    UNKNOWN_ESCAPE = "E0025"
    INVALID_UNICODE_ESCAPE = "E0026"
    UNBALANCED_CLOSING_BRACE = "E0027"
    EXPECTED_INLINE_EXPRESSION = "E0028"
    EXPECTED_SIMPLE_SELECTOR = "E0029"
    NESTING_DEPTH_EXCEEDED = "E0030"


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Note:
        Python strings measure positions in characters (Unicode code points),
        not bytes. For multi-byte UTF-8 characters, character offset differs
        from byte offset.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or
                line/column are less than 1 (both are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Provides rich error information for both humans and tools (IDEs, LSP
    servers, CI annotations).

    Attributes:
        code: Error code (E00NN)
        message: Human-readable message
        span: Location in source (optional)
        arguments: Arguments the message was rendered from
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    arguments: tuple[str, ...] = ()

    def format_error(self) -> str:
        """Format diagnostic as a single line.

        Example:
            >>> Diagnostic(DiagnosticCode.EXPECTED_ENTRY, "Expected an entry start").format_error()
            'E0002: Expected an entry start'
            >>> span = SourceSpan(start=10, end=10, line=2, column=1)
            >>> Diagnostic(DiagnosticCode.EXPECTED_ENTRY, "Expected an entry start", span).format_error()
            'E0002 at 2:1: Expected an entry start'
        """
        if self.span is None:
            return f"{self.code}: {self.message}"
        return f"{self.code} at {self.span.line}:{self.span.column}: {self.message}"
