"""Render parse diagnostics and validation results as text.

Three layouts: compiler-style blocks for terminals, one-liners for logs
and JSON objects for editors and CI annotations.

Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic, SourceSpan
from .validation import ValidationResult

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]

_RED_BOLD = "\033[1;31m"
_RESET = "\033[0m"


class OutputFormat(StrEnum):
    """Layout produced by DiagnosticFormatter."""

    RUST = "rust"
    SIMPLE = "simple"
    JSON = "json"


def _where(span: SourceSpan | None) -> str:
    return "" if span is None else f"line {span.line}, column {span.column}"


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Turns Diagnostics into strings.

    Attributes:
        output_format: Layout to produce
        sanitize: Cut messages longer than max_content_length
        color: Highlight the severity with ANSI escapes (RUST only)
        max_content_length: Message length kept when sanitizing

    Example:
        >>> diagnostic = ErrorTemplate.diagnostic(DiagnosticCode.EXPECTED_TOKEN, ("=",))
        >>> print(DiagnosticFormatter().format(diagnostic))
        error[E0003]: Expected token: "="
        >>> print(DiagnosticFormatter(output_format=OutputFormat.SIMPLE).format(diagnostic))
        E0003: Expected token: "="
    """

    output_format: OutputFormat = OutputFormat.RUST
    sanitize: bool = False
    color: bool = False
    max_content_length: int = 100

    def format(self, diagnostic: Diagnostic) -> str:
        """Render one diagnostic in the configured layout."""
        message = self._clip(diagnostic.message)
        match self.output_format:
            case OutputFormat.SIMPLE:
                return f"{diagnostic.code}: {message}"
            case OutputFormat.JSON:
                return json.dumps(self._as_record(diagnostic, message), ensure_ascii=False)
            case OutputFormat.RUST:
                label = f"{_RED_BOLD}error{_RESET}" if self.color else "error"
                head = f"{label}[{diagnostic.code}]: {message}"
                if diagnostic.span is None:
                    return head
                return f"{head}\n  --> {_where(diagnostic.span)}"

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Render several diagnostics with a blank line between them."""
        return "\n\n".join(map(self.format, diagnostics))

    def format_validation_result(self, result: ValidationResult) -> str:
        """Summary line followed by one indented line per error."""
        if result.is_valid:
            return "Validation passed"

        lines = [f"Validation failed: {result.error_count} error(s)"]
        for error in result.errors:
            at = ""
            if error.line is not None and error.column is not None:
                at = f" at line {error.line}, column {error.column}"
            lines.append(f"  [{error.code}]{at}: {self._clip(error.message)}")
        return "\n".join(lines)

    @staticmethod
    def _as_record(diagnostic: Diagnostic, message: str) -> dict[str, str | int | list[str]]:
        record: dict[str, str | int | list[str]] = {
            "code": diagnostic.code.value,
            "name": diagnostic.code.name,
            "message": message,
            "arguments": list(diagnostic.arguments),
        }
        span = diagnostic.span
        if span is not None:
            record.update(line=span.line, column=span.column, start=span.start, end=span.end)
        return record

    def _clip(self, text: str) -> str:
        limit = self.max_content_length
        if not self.sanitize or len(text) <= limit:
            return text
        return f"{text[:limit]}..."
