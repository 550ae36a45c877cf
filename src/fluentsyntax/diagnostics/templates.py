"""Message templates for syntax diagnostics.

Centralizes the human-readable text for every DiagnosticCode so the
parser only deals with codes and arguments.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan

__all__ = ["ErrorTemplate"]


_TEMPLATES: dict[DiagnosticCode, str] = {
    DiagnosticCode.GENERIC: "Generic error",
    DiagnosticCode.EXPECTED_ENTRY: "Expected an entry start",
    DiagnosticCode.EXPECTED_TOKEN: 'Expected token: "{0}"',
    DiagnosticCode.EXPECTED_CHAR_RANGE: 'Expected a character from range: "{0}"',
    DiagnosticCode.MESSAGE_NO_VALUE: 'Expected message "{0}" to have a value or attributes',
    DiagnosticCode.TERM_NO_VALUE: 'Expected term "-{0}" to have a value',
    DiagnosticCode.KEYWORD_TRAILING_WHITESPACE: "Keyword cannot end with a whitespace",
    DiagnosticCode.INVALID_CALLEE: "The callee has to be an upper-case identifier or a term",
    DiagnosticCode.INVALID_ARGUMENT_NAME: "The argument name has to be a simple identifier",
    DiagnosticCode.MISSING_DEFAULT_VARIANT: (
        "Expected one of the variants to be marked as default (*)"
    ),
    DiagnosticCode.MISSING_VARIANTS: 'Expected at least one variant after "->"',
    DiagnosticCode.EXPECTED_VALUE: "Expected value",
    DiagnosticCode.EXPECTED_VARIANT_KEY: "Expected variant key",
    DiagnosticCode.EXPECTED_LITERAL: "Expected literal",
    DiagnosticCode.MULTIPLE_DEFAULT_VARIANTS: "Only one variant can be marked as default (*)",
    DiagnosticCode.MESSAGE_AS_SELECTOR: "Message references cannot be used as selectors",
    DiagnosticCode.TERM_AS_SELECTOR: "Terms cannot be used as selectors",
    DiagnosticCode.MESSAGE_ATTRIBUTE_AS_SELECTOR: (
        "Attributes of messages cannot be used as selectors"
    ),
    DiagnosticCode.TERM_ATTRIBUTE_AS_PLACEABLE: "Attributes of terms cannot be used as placeables",
    DiagnosticCode.UNTERMINATED_STRING: "Unterminated string expression",
    DiagnosticCode.POSITIONAL_AFTER_NAMED: "Positional arguments must not follow named arguments",
    DiagnosticCode.DUPLICATE_NAMED_ARGUMENT: "Named arguments must be unique",
    DiagnosticCode.MESSAGE_VARIANT_ACCESS: "Cannot access variants of a message.",
    DiagnosticCode.UNKNOWN_ESCAPE: "Unknown escape sequence: \\{0}.",
    DiagnosticCode.INVALID_UNICODE_ESCAPE: "Invalid Unicode escape sequence: {0}.",
    DiagnosticCode.UNBALANCED_CLOSING_BRACE: "Unbalanced closing brace in TextElement.",
    DiagnosticCode.EXPECTED_INLINE_EXPRESSION: "Expected an inline expression",
    DiagnosticCode.EXPECTED_SIMPLE_SELECTOR: "Expected simple expression as selector",
    DiagnosticCode.NESTING_DEPTH_EXCEEDED: "Placeables nested too deeply (limit: {0})",
}


class ErrorTemplate:
    """Renders diagnostic messages from codes and arguments.

    Example:
        >>> ErrorTemplate.message(DiagnosticCode.EXPECTED_TOKEN, ("=",))
        'Expected token: "="'
    """

    @staticmethod
    def message(code: DiagnosticCode | str, args: tuple[str, ...] = ()) -> str:
        """Render the message for a code.

        Unknown codes render as the code itself. Missing arguments render
        as an empty string rather than failing, since messages are built
        while recovering from errors.

        Args:
            code: Diagnostic code (enum member or E00NN string)
            args: Positional arguments referenced by the template

        Returns:
            Human-readable message
        """
        try:
            template = _TEMPLATES[DiagnosticCode(code)]
        except ValueError:
            return str(code)
        padded = (*args, *("",) * (template.count("{") - len(args)))
        return template.format(*padded)

    @staticmethod
    def diagnostic(
        code: DiagnosticCode | str,
        args: tuple[str, ...] = (),
        span: SourceSpan | None = None,
    ) -> Diagnostic:
        """Build a Diagnostic for a code and its arguments."""
        return Diagnostic(
            code=DiagnosticCode(code),
            message=ErrorTemplate.message(code, args),
            span=span,
            arguments=args,
        )
