"""Fluent syntax package.

Provides the parser stream, AST definitions, parser, serializer, visitor
and syntax validation. Nothing here resolves or formats messages.

Python 3.13+.
"""

from .ast import (
    Annotation,
    Attribute,
    BaseComment,
    BaseNode,
    CallArguments,
    Comment,
    Entry,
    EqualityOptions,
    Expression,
    FunctionReference,
    GroupComment,
    Identifier,
    InlineExpression,
    Junk,
    Message,
    MessageReference,
    NamedArgument,
    NumberLiteral,
    Pattern,
    PatternElement,
    Placeable,
    Resource,
    ResourceComment,
    SelectExpression,
    Span,
    StringLiteral,
    Term,
    TermReference,
    TextElement,
    TopLevel,
    VariableReference,
    Variant,
    VariantKey,
    Whitespace,
    equals,
)
from .parser import FluentParser
from .serializer import FluentSerializer, serialize, serialize_expression, serialize_variant_key
from .stream import FluentParserStream
from .validator import validate_resource
from .visitor import ASTVisitor

__all__ = [
    "ASTVisitor",
    "Annotation",
    "Attribute",
    "BaseComment",
    "BaseNode",
    "CallArguments",
    "Comment",
    "Entry",
    "EqualityOptions",
    "Expression",
    "FluentParser",
    "FluentParserStream",
    "FluentSerializer",
    "FunctionReference",
    "GroupComment",
    "Identifier",
    "InlineExpression",
    "Junk",
    "Message",
    "MessageReference",
    "NamedArgument",
    "NumberLiteral",
    "Pattern",
    "PatternElement",
    "Placeable",
    "Resource",
    "ResourceComment",
    "SelectExpression",
    "Span",
    "StringLiteral",
    "Term",
    "TermReference",
    "TextElement",
    "TopLevel",
    "VariableReference",
    "Variant",
    "VariantKey",
    "Whitespace",
    "equals",
    "parse",
    "serialize",
    "serialize_expression",
    "serialize_variant_key",
    "validate_resource",
]


def parse(source: str, *, with_spans: bool = False) -> Resource:
    """Parse FTL source into AST.

    Convenience function for FluentParser.parse().

    Example:
        >>> from fluentsyntax.syntax import parse
        >>> resource = parse("hello = Hello, world!")
        >>> resource.body[0].id.name
        'hello'
    """
    return FluentParser(with_spans=with_spans).parse(source)
