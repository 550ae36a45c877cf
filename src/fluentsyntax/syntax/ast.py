"""Fluent AST (Abstract Syntax Tree) node definitions.

Complete implementation of the Fluent 1.0 syntax tree, extended with
Whitespace entries so blank-line runs survive a parse/serialize round trip.

Every node exposes its fields through children(), a hand-written list of
(name, value) pairs in declaration order. Values are a node, a tuple of
nodes, or a scalar (str, bool, None). Structural comparison and the
visitor are built on that contract.

Python 3.13+. Zero external dependencies.
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import ClassVar, TypeIs

from fluentsyntax.enums import CommentType

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Base types
    "BaseNode",
    "Span",
    "Annotation",
    "Identifier",
    # Resource structure
    "Resource",
    "Message",
    "Term",
    "Attribute",
    "BaseComment",
    "Comment",
    "GroupComment",
    "ResourceComment",
    "Junk",
    "Whitespace",
    # Pattern elements
    "Pattern",
    "TextElement",
    "Placeable",
    # Expressions
    "SelectExpression",
    "Variant",
    "StringLiteral",
    "NumberLiteral",
    "VariableReference",
    "MessageReference",
    "TermReference",
    "FunctionReference",
    "CallArguments",
    "NamedArgument",
    # Equality
    "EqualityOptions",
    "equals",
    # Type aliases
    "Entry",
    "TopLevel",
    "PatternElement",
    "InlineExpression",
    "Expression",
    "VariantKey",
    "SyntaxNode",
    "Child",
]

# ============================================================================
# BASE TYPES
# ============================================================================


class BaseNode:
    """Common behavior of all syntax nodes.

    Concrete nodes are frozen, slotted dataclasses. They list their fields
    in children() and get structural comparison through equals().
    """

    __slots__ = ()

    def children(self) -> tuple[tuple[str, "Child"], ...]:
        """Return (field name, value) pairs in declaration order."""
        raise NotImplementedError

    def equals(self, other: object, options: "EqualityOptions | None" = None) -> bool:
        """Compare structurally with another node.

        Spans are ignored unless options say otherwise; see EqualityOptions.
        """
        return equals(self, other, options if options is not None else _DEFAULT_OPTIONS)


@dataclass(frozen=True, slots=True)
class Span(BaseNode):
    """Half-open source range [start, end).

    Offsets are character positions in the parsed source string.

    Example:
        Source: "hello = world"
        Message span: Span(start=0, end=13)
        Identifier "hello" span: Span(start=0, end=5)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate span invariants."""
        if self.start < 0:
            msg = f"Span start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"Span end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)

    def children(self) -> tuple[tuple[str, "Child"], ...]:
        return (("start", self.start), ("end", self.end))


@dataclass(frozen=True, slots=True)
class Annotation(BaseNode):
    """Parse error annotation attached to Junk.

    Attributes:
        code: Error code (E00NN)
        message: Human-readable error message
        arguments: Arguments the message was rendered from
        span: Zero-width location of the error (when spans are enabled)

    Example:
        Annotation(
            code="E0003",
            message='Expected token: "="',
            arguments=("=",),
            span=Span(start=4, end=4),
        )
    """

    code: str
    message: str
    arguments: tuple[str, ...] = ()
    span: Span | None = field(default=None, compare=False, kw_only=True)

    def children(self) -> tuple[tuple[str, "Child"], ...]:
        return (
            ("code", self.code),
            ("message", self.message),
            ("arguments", self.arguments),
            ("span", self.span),
        )


@dataclass(frozen=True, slots=True)
class Identifier(BaseNode):
    """Identifier: [a-zA-Z][a-zA-Z0-9_-]*"""

    name: str
    span: Span | None = field(default=None, compare=False, kw_only=True)

    @staticmethod
    def guard(key: object) -> TypeIs["Identifier"]:
        """Type guard for Identifier (used in variant keys)."""
        return isinstance(key, Identifier)

    def children(self) -> tuple[tuple[str, "Child"], ...]:
        return (("name", self.name), ("span", self.span))


# ============================================================================
# TOP-LEVEL ENTRIES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Resource(BaseNode):
    """Root AST node: ordered top-level items of one source file."""

    body: tuple["TopLevel", ...] = ()
    span: Span | None = field(default=None, compare=False, kw_only=True)

    def children(self) -> tuple[tuple[str, "Child"], ...]:
        return (("body", self.body), ("span", self.span))


@dataclass(frozen=True, slots=True)
class Message(BaseNode):
    """Message definition.

    A message must have a value, at least one attribute, or both.

    Attributes:
        id: Message identifier
        value: Message pattern (None for attribute-only messages)
        attributes: Message attributes, in declaration order
        comment: Single-hash comment directly preceding the message
    """

    id: Identifier
    value: "Pattern | None" = None
    attributes: tuple["Attribute", ...] = ()
    comment: "Comment | None" = None
    span: Span | None = field(default=None, compare=False, kw_only=True)

    @staticmethod
    def guard(entry: object) -> TypeIs["Message"]:
        """Type guard for Message."""
        return isinstance(entry, Message)

    def children(self) -> tuple[tuple[str, "Child"], ...]:
        return (
            ("id", self.id),
            ("value", self.value),
            ("attributes", self.attributes),
            ("comment", self.comment),
            ("span", self.span),
        )


@dataclass(frozen=True, slots=True)
class Term(BaseNode):
    """Term definition: -brand = Firefox

    The identifier is stored without the leading '-'. Terms always have a
    value.
    """

    id: Identifier
    value: "Pattern"
    attributes: tuple["Attribute", ...] = ()
    comment: "Comment | None" = None
    span: Span | None = field(default=None, compare=False, kw_only=True)

    @staticmethod
    def guard(entry: object) -> TypeIs["Term"]:
        """Type guard for Term."""
        return isinstance(entry, Term)

    def children(self) -> tuple[tuple[str, "Child"], ...]:
        return (
            ("id", self.id),
            ("value", self.value),
            ("attributes", self.attributes),
            ("comment", self.comment),
            ("span", self.span),
        )


@dataclass(frozen=True, slots=True)
class Attribute(BaseNode):
    """Attribute of a message or term: .tooltip = Click me"""

    id: Identifier
    value: "Pattern"
    span: Span | None = field(default=None, compare=False, kw_only=True)

    def children(self) -> tuple[tuple[str, "Child"], ...]:
        return (("id", self.id), ("value", self.value), ("span", self.span))


@dataclass(frozen=True, slots=True)
class BaseComment(BaseNode):
    """Shared shape of the three comment levels.

    Content lines are joined with "\\n" and exclude the '#' prefix and the
    single separating space.
    """

    content: str
    span: Span | None = field(default=None, compare=False, kw_only=True)

    type: ClassVar[CommentType]

    def children(self) -> tuple[tuple[str, "Child"], ...]:
        return (("content", self.content), ("span", self.span))


@dataclass(frozen=True, slots=True)
class Comment(BaseComment):
    """Comment: # text

    Attaches to a directly following Message or Term.
    """

    type: ClassVar[CommentType] = CommentType.COMMENT

    @staticmethod
    def guard(entry: object) -> TypeIs["Comment"]:
        """Type guard for Comment."""
        return isinstance(entry, Comment)


@dataclass(frozen=True, slots=True)
class GroupComment(BaseComment):
    """Group comment: ## Section title"""

    type: ClassVar[CommentType] = CommentType.GROUP


@dataclass(frozen=True, slots=True)
class ResourceComment(BaseComment):
    """Resource comment: ### About this file"""

    type: ClassVar[CommentType] = CommentType.RESOURCE


@dataclass(frozen=True, slots=True)
class Junk(BaseNode):
    """Unparseable source retained verbatim.

    Produced when an entry fails to parse. content is the raw slice from
    the start of the failed entry up to the next plausible entry start;
    annotations explain what went wrong.

    Example:
        Junk(
            content="%%%\\n",
            annotations=(Annotation(code="E0002", message="Expected an entry start"),),
        )
    """

    content: str
    annotations: tuple[Annotation, ...] = ()
    span: Span | None = field(default=None, compare=False, kw_only=True)

    @staticmethod
    def guard(entry: object) -> TypeIs["Junk"]:
        """Type guard for Junk."""
        return isinstance(entry, Junk)

    def children(self) -> tuple[tuple[str, "Child"], ...]:
        return (
            ("content", self.content),
            ("annotations", self.annotations),
            ("span", self.span),
        )


@dataclass(frozen=True, slots=True)
class Whitespace(BaseNode):
    """Verbatim blank-line run between entries."""

    content: str
    span: Span | None = field(default=None, compare=False, kw_only=True)

    def children(self) -> tuple[tuple[str, "Child"], ...]:
        return (("content", self.content), ("span", self.span))


# ============================================================================
# PATTERNS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Pattern(BaseNode):
    """Value of a message, term, attribute or variant.

    Adjacent text is always merged into a single TextElement by the parser.
    """

    elements: tuple["PatternElement", ...]
    span: Span | None = field(default=None, compare=False, kw_only=True)

    def children(self) -> tuple[tuple[str, "Child"], ...]:
        return (("elements", self.elements), ("span", self.span))


@dataclass(frozen=True, slots=True)
class TextElement(BaseNode):
    """Literal text inside a pattern."""

    value: str
    span: Span | None = field(default=None, compare=False, kw_only=True)

    @staticmethod
    def guard(elem: object) -> TypeIs["TextElement"]:
        """Type guard for TextElement."""
        return isinstance(elem, TextElement)

    def children(self) -> tuple[tuple[str, "Child"], ...]:
        return (("value", self.value), ("span", self.span))


@dataclass(frozen=True, slots=True)
class Placeable(BaseNode):
    """Expression embedded in a pattern: { $var }

    May wrap another Placeable: {{ "literal braces" }}
    """

    expression: "Expression"
    span: Span | None = field(default=None, compare=False, kw_only=True)

    @staticmethod
    def guard(elem: object) -> TypeIs["Placeable"]:
        """Type guard for Placeable."""
        return isinstance(elem, Placeable)

    def children(self) -> tuple[tuple[str, "Child"], ...]:
        return (("expression", self.expression), ("span", self.span))


# ============================================================================
# EXPRESSIONS
# ============================================================================


@dataclass(frozen=True, slots=True)
class SelectExpression(BaseNode):
    """Select expression: { $count -> [one] item *[other] items }

    Exactly one variant is the default.
    """

    selector: "InlineExpression"
    variants: tuple["Variant", ...]
    span: Span | None = field(default=None, compare=False, kw_only=True)

    @staticmethod
    def guard(expr: object) -> TypeIs["SelectExpression"]:
        """Type guard for SelectExpression."""
        return isinstance(expr, SelectExpression)

    def children(self) -> tuple[tuple[str, "Child"], ...]:
        return (("selector", self.selector), ("variants", self.variants), ("span", self.span))


@dataclass(frozen=True, slots=True)
class Variant(BaseNode):
    """One alternative of a select expression: [one] item"""

    key: "VariantKey"
    value: Pattern
    default: bool = False
    span: Span | None = field(default=None, compare=False, kw_only=True)

    def children(self) -> tuple[tuple[str, "Child"], ...]:
        return (
            ("key", self.key),
            ("value", self.value),
            ("default", self.default),
            ("span", self.span),
        )


_ESCAPE_SEQUENCE = re.compile(
    r"\\(?:(?P<char>[\\\"])|u(?P<u4>[0-9a-fA-F]{4})|U(?P<u6>[0-9a-fA-F]{6}))"
)


def _decode_escape(match: re.Match[str]) -> str:
    if char := match.group("char"):
        return char
    codepoint = int(match.group("u4") or match.group("u6"), 16)
    # Surrogates and out-of-range code points are well-formed escapes but
    # not valid characters.
    if codepoint <= 0xD7FF or 0xE000 <= codepoint <= 0x10FFFF:
        return chr(codepoint)
    return "\ufffd"


@dataclass(frozen=True, slots=True)
class StringLiteral(BaseNode):
    """String literal: "text"

    value holds the text between the quotes exactly as written, escape
    sequences included, so serialization reproduces the source. Use
    parse() for the decoded string.

    Example:
        >>> StringLiteral(value="\\\\u0065").parse()
        'e'
    """

    value: str
    span: Span | None = field(default=None, compare=False, kw_only=True)

    def parse(self) -> str:
        """Decode \\\\, \\", \\uXXXX and \\UXXXXXX escapes."""
        return _ESCAPE_SEQUENCE.sub(_decode_escape, self.value)

    def children(self) -> tuple[tuple[str, "Child"], ...]:
        return (("value", self.value), ("span", self.span))


@dataclass(frozen=True, slots=True)
class NumberLiteral(BaseNode):
    """Number literal: 42, -3.14, 0.50

    value is the source text (sign, leading zeros and trailing fractional
    zeros preserved). parse() converts it without losing precision.
    """

    value: str
    span: Span | None = field(default=None, compare=False, kw_only=True)

    @staticmethod
    def guard(key: object) -> TypeIs["NumberLiteral"]:
        """Type guard for NumberLiteral (used in variant keys)."""
        return isinstance(key, NumberLiteral)

    @property
    def precision(self) -> int:
        """Number of digits after the decimal point."""
        _, _, fraction = self.value.partition(".")
        return len(fraction)

    def parse(self) -> Decimal:
        """Return the literal as a Decimal.

        Example:
            >>> NumberLiteral(value="-0.50").parse()
            Decimal('-0.50')
        """
        return Decimal(self.value)

    def children(self) -> tuple[tuple[str, "Child"], ...]:
        return (("value", self.value), ("span", self.span))


@dataclass(frozen=True, slots=True)
class VariableReference(BaseNode):
    """Variable reference: $name"""

    id: Identifier
    span: Span | None = field(default=None, compare=False, kw_only=True)

    @staticmethod
    def guard(expr: object) -> TypeIs["VariableReference"]:
        """Type guard for VariableReference."""
        return isinstance(expr, VariableReference)

    def children(self) -> tuple[tuple[str, "Child"], ...]:
        return (("id", self.id), ("span", self.span))


@dataclass(frozen=True, slots=True)
class MessageReference(BaseNode):
    """Message reference: msg or msg.attr"""

    id: Identifier
    attribute: Identifier | None = None
    span: Span | None = field(default=None, compare=False, kw_only=True)

    @staticmethod
    def guard(expr: object) -> TypeIs["MessageReference"]:
        """Type guard for MessageReference."""
        return isinstance(expr, MessageReference)

    def children(self) -> tuple[tuple[str, "Child"], ...]:
        return (("id", self.id), ("attribute", self.attribute), ("span", self.span))


@dataclass(frozen=True, slots=True)
class TermReference(BaseNode):
    """Term reference: -brand, -brand.gender, -brand(case: "nominative")"""

    id: Identifier
    attribute: Identifier | None = None
    arguments: "CallArguments | None" = None
    span: Span | None = field(default=None, compare=False, kw_only=True)

    @staticmethod
    def guard(expr: object) -> TypeIs["TermReference"]:
        """Type guard for TermReference."""
        return isinstance(expr, TermReference)

    def children(self) -> tuple[tuple[str, "Child"], ...]:
        return (
            ("id", self.id),
            ("attribute", self.attribute),
            ("arguments", self.arguments),
            ("span", self.span),
        )


@dataclass(frozen=True, slots=True)
class FunctionReference(BaseNode):
    """Function call: NUMBER($count, minimumFractionDigits: 2)"""

    id: Identifier
    arguments: "CallArguments"
    span: Span | None = field(default=None, compare=False, kw_only=True)

    @staticmethod
    def guard(expr: object) -> TypeIs["FunctionReference"]:
        """Type guard for FunctionReference."""
        return isinstance(expr, FunctionReference)

    def children(self) -> tuple[tuple[str, "Child"], ...]:
        return (("id", self.id), ("arguments", self.arguments), ("span", self.span))


@dataclass(frozen=True, slots=True)
class CallArguments(BaseNode):
    """Arguments of a function or term call.

    Positional arguments always precede named ones; named argument names
    are unique.
    """

    positional: tuple["InlineExpression", ...] = ()
    named: tuple["NamedArgument", ...] = ()
    span: Span | None = field(default=None, compare=False, kw_only=True)

    def children(self) -> tuple[tuple[str, "Child"], ...]:
        return (("positional", self.positional), ("named", self.named), ("span", self.span))


@dataclass(frozen=True, slots=True)
class NamedArgument(BaseNode):
    """Named argument: name: "value" or name: 42"""

    name: Identifier
    value: StringLiteral | NumberLiteral
    span: Span | None = field(default=None, compare=False, kw_only=True)

    def children(self) -> tuple[tuple[str, "Child"], ...]:
        return (("name", self.name), ("value", self.value), ("span", self.span))


# ============================================================================
# STRUCTURAL EQUALITY
# ============================================================================


@dataclass(frozen=True, slots=True)
class EqualityOptions:
    """Options for equals().

    Attributes:
        ignore_span: Skip every span field (default True)
        ignore_order_for: Tuple fields compared as multisets, typically
            "variants" and/or "attributes"
        ignored_fields: Fields skipped entirely

    Example:
        >>> EqualityOptions(ignore_order_for=frozenset({"variants"}))
    """

    ignore_span: bool = True
    ignore_order_for: frozenset[str] = frozenset()
    ignored_fields: frozenset[str] = frozenset()


_DEFAULT_OPTIONS = EqualityOptions()


def equals(left: object, right: object, options: EqualityOptions = _DEFAULT_OPTIONS) -> bool:
    """Compare two values structurally.

    Nodes of different concrete types are never equal. Tuple fields are
    compared element-wise in order unless listed in
    options.ignore_order_for.

    Args:
        left: Node or scalar
        right: Node or scalar
        options: What to ignore

    Returns:
        True if both trees have the same shape and values
    """
    if not isinstance(left, BaseNode) or not isinstance(right, BaseNode):
        return left == right
    if type(left) is not type(right):
        return False

    for (name, left_value), (_, right_value) in zip(
        left.children(), right.children(), strict=True
    ):
        if name in options.ignored_fields:
            continue
        if name == "span" and options.ignore_span:
            continue
        if isinstance(left_value, tuple) and isinstance(right_value, tuple):
            if not _tuples_equal(name, left_value, right_value, options):
                return False
        elif not equals(left_value, right_value, options):
            return False
    return True


def _tuples_equal(
    name: str,
    left: tuple[object, ...],
    right: tuple[object, ...],
    options: EqualityOptions,
) -> bool:
    if len(left) != len(right):
        return False
    if name not in options.ignore_order_for:
        return all(equals(a, b, options) for a, b in zip(left, right, strict=True))

    unmatched = list(right)
    for item in left:
        for index, candidate in enumerate(unmatched):
            if equals(item, candidate, options):
                del unmatched[index]
                break
        else:
            return False
    return True


# ============================================================================
# TYPE ALIASES
# ============================================================================

type Entry = Message | Term | Comment | GroupComment | ResourceComment
type TopLevel = Entry | Junk | Whitespace
type PatternElement = TextElement | Placeable
type InlineExpression = (
    StringLiteral
    | NumberLiteral
    | FunctionReference
    | MessageReference
    | TermReference
    | VariableReference
    | Placeable
)
type Expression = InlineExpression | SelectExpression
type VariantKey = Identifier | NumberLiteral

# Closed union of every node kind.
type SyntaxNode = (
    Resource
    | Message
    | Term
    | Attribute
    | Comment
    | GroupComment
    | ResourceComment
    | Junk
    | Whitespace
    | Pattern
    | TextElement
    | Placeable
    | SelectExpression
    | Variant
    | StringLiteral
    | NumberLiteral
    | VariableReference
    | MessageReference
    | TermReference
    | FunctionReference
    | CallArguments
    | NamedArgument
    | Identifier
    | Annotation
    | Span
)

type Child = BaseNode | tuple[BaseNode, ...] | tuple[str, ...] | str | int | bool | None
