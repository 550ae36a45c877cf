"""fluentsyntax - Fluent (FTL) syntax parser and serializer.

Parses Fluent localization files into an immutable AST, recovering from
errors entry by entry, and serializes the AST back to canonical FTL.

Public API:
    parse - Parse FTL source to AST
    serialize - Serialize AST to FTL source
    validate_resource - Report syntax errors with line and column

Exceptions:
    FluentError - Base exception class
    FluentSyntaxError - Parse errors
    SerializationError - AST that cannot be written as FTL
    DepthLimitExceededError - Nesting beyond the configured depth

Submodules:
    fluentsyntax.syntax.ast - AST node types (Resource, Message, Term, Pattern, etc.)
    fluentsyntax.syntax.stream - Character stream with lookahead
    fluentsyntax.diagnostics - Error codes, error types and formatting
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .diagnostics import (
    DepthLimitExceededError,
    FluentError,
    FluentSyntaxError,
    SerializationError,
)
from .syntax import parse, serialize, validate_resource

try:
    __version__ = _get_version("fluentsyntax")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__fluent_spec_version__ = "1.0"

__all__ = [
    "DepthLimitExceededError",
    "FluentError",
    "FluentSyntaxError",
    "SerializationError",
    "__fluent_spec_version__",
    "__version__",
    "parse",
    "serialize",
    "validate_resource",
]
