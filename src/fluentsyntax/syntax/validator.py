"""Syntax validation of FTL sources.

Parses a source and reports every Junk annotation as a ValidationError
with a 1-based line and column, for CI checks and editor tooling.

Python 3.13+.
"""

import logging

from fluentsyntax.diagnostics.validation import ValidationError, ValidationResult
from fluentsyntax.syntax.ast import Annotation, Junk, Resource
from fluentsyntax.syntax.parser import FluentParser
from fluentsyntax.syntax.position import column_offset, line_offset

__all__ = ["validate_resource"]

logger = logging.getLogger(__name__)


def _extract_syntax_errors(
    resource: Resource, source: str
) -> tuple[list[ValidationError], list[Annotation]]:
    errors: list[ValidationError] = []
    annotations: list[Annotation] = []

    for entry in resource.body:
        if not isinstance(entry, Junk):
            continue
        for annotation in entry.annotations:
            line: int | None = None
            column: int | None = None
            if annotation.span is not None:
                line = line_offset(source, annotation.span.start) + 1
                column = column_offset(source, annotation.span.start) + 1
            errors.append(
                ValidationError(
                    code=annotation.code,
                    message=annotation.message,
                    content=entry.content,
                    line=line,
                    column=column,
                )
            )
            annotations.append(annotation)

    return errors, annotations


def validate_resource(source: str, *, parser: FluentParser | None = None) -> ValidationResult:
    """Validate FTL syntax without keeping the AST.

    Args:
        source: FTL file content
        parser: Optional parser instance (a default one is created if omitted)

    Returns:
        ValidationResult with one error per Junk annotation. A source over
        the parser's size limit yields a single "source-too-large" error.

    Example:
        >>> result = validate_resource("hello = World\\n")
        >>> result.is_valid
        True
        >>> validate_resource("hello =\\n").errors[0].code
        'E0005'
    """
    if parser is None:
        parser = FluentParser()

    try:
        parser.check_source_size(source)
    except ValueError as e:
        logger.error("Validation aborted: %s", e)
        error = ValidationError(code="source-too-large", message=str(e), content="")
        return ValidationResult(errors=(error,), annotations=())

    resource = parser.parse(source)
    errors, annotations = _extract_syntax_errors(resource, source)
    logger.debug("Validated resource: %d errors", len(errors))
    return ValidationResult(errors=tuple(errors), annotations=tuple(annotations))
