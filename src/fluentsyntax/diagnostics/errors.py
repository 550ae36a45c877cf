"""Fluent exception hierarchy with structured diagnostics.

All exceptions accept either a plain message or a Diagnostic object.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .templates import ErrorTemplate


class FluentError(Exception):
    """Base exception for all Fluent errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize FluentError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class FluentSyntaxError(FluentError):
    """FTL syntax error during parsing.

    Parser continues after syntax errors (robustness principle).
    Errors become Junk entries in AST.
    """


class ParseError(FluentSyntaxError):
    """Grammar error raised inside a single entry.

    Raised by the stream and grammar rules, caught by the parser at the
    entry boundary and turned into a Junk annotation. Never escapes
    FluentParser.parse().

    Attributes:
        code: Diagnostic code (E00NN)
        arguments: Arguments for the message template
        message: Rendered human-readable message

    Example:
        >>> err = ParseError(DiagnosticCode.EXPECTED_TOKEN, "=")
        >>> err.message
        'Expected token: "="'
    """

    def __init__(self, code: DiagnosticCode, *args: str) -> None:
        self.code = code
        self.arguments: tuple[str, ...] = args
        self.message = ErrorTemplate.message(code, args)
        super().__init__(ErrorTemplate.diagnostic(code, args))

    def __reduce__(self) -> tuple[type["ParseError"], tuple[str, ...]]:
        return (type(self), (self.code, *self.arguments))


class SerializationError(FluentError):
    """Raised when the serializer is given a node it cannot render.

    Only reachable with programmatically constructed trees: every node the
    parser produces has a canonical rendering.
    """


class DepthLimitExceededError(FluentError):
    """Raised when maximum nesting depth is exceeded.

    This error indicates either:
    - Programmatic AST construction that nests beyond the limit
    - A recursion limit lowered below what the configured depth needs
    """

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(f"Maximum nesting depth ({max_depth}) exceeded")

    def __reduce__(self) -> tuple[type["DepthLimitExceededError"], tuple[int]]:
        return (type(self), (self.max_depth,))
