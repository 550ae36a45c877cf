"""Diagnostic system for Fluent syntax errors.

Provides error codes, message templates, the exception hierarchy,
validation results and formatting.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    DepthLimitExceededError,
    FluentError,
    FluentSyntaxError,
    ParseError,
    SerializationError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate
from .validation import ValidationError, ValidationResult

__all__ = [
    "DepthLimitExceededError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "FluentError",
    "FluentSyntaxError",
    "OutputFormat",
    "ParseError",
    "SerializationError",
    "SourceSpan",
    "ValidationError",
    "ValidationResult",
]
