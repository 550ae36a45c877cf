"""Serialize Fluent AST back to FTL syntax.

Converts AST nodes to canonical FTL source. Useful for:
- Formatters
- Code generators
- Property-based testing (roundtrip: parse -> serialize -> parse)

Canonical layout:
- continuation lines, attributes and variants are indented 4 spaces
- the default variant marker takes one of those 4 columns
- a pattern starts on its own line when it spans several lines or holds
  a select expression, unless its first character would then be read
  as an attribute, variant key or default marker

Python 3.13+.
"""

from collections.abc import Callable

from fluentsyntax.constants import INDENT, MAX_DEPTH
from fluentsyntax.core.depth_guard import DepthGuard
from fluentsyntax.diagnostics.errors import SerializationError

from .ast import (
    Attribute,
    BaseComment,
    BaseNode,
    CallArguments,
    Expression,
    FunctionReference,
    Identifier,
    Junk,
    Message,
    MessageReference,
    NamedArgument,
    NumberLiteral,
    Pattern,
    PatternElement,
    Placeable,
    Resource,
    SelectExpression,
    StringLiteral,
    Term,
    TermReference,
    TextElement,
    TopLevel,
    VariableReference,
    Variant,
    VariantKey,
    Whitespace,
)

__all__ = [
    "FluentSerializer",
    "serialize",
    "serialize_expression",
    "serialize_variant_key",
]

type Sink = Callable[[str], object]

# First characters that would change meaning at the start of a line.
_RESERVED_LINE_START = ("[", ".", "*")


def _indent_lines(content: str) -> str:
    """Indent every line but the first."""
    return content.replace("\n", "\n" + INDENT)


def _includes_new_line(element: PatternElement) -> bool:
    return TextElement.guard(element) and "\n" in element.value


def _is_select_expression(element: PatternElement) -> bool:
    return Placeable.guard(element) and SelectExpression.guard(element.expression)


def _should_start_on_new_line(pattern: Pattern) -> bool:
    is_multiline = any(_is_select_expression(e) for e in pattern.elements) or any(
        _includes_new_line(e) for e in pattern.elements
    )
    if not is_multiline:
        return False

    first = pattern.elements[0]
    return not (TextElement.guard(first) and first.value.startswith(_RESERVED_LINE_START))


class FluentSerializer:
    """Converts AST back to FTL source string.

    Thread-safe serializer with no mutable instance state.
    All serialization state is local to the serialize() call.

    Usage:
        >>> from fluentsyntax.syntax import FluentParser, FluentSerializer
        >>> resource = FluentParser().parse("hello = Hello, world!\\n")
        >>> FluentSerializer().serialize(resource)
        'hello = Hello, world!\\n'
    """

    __slots__ = ("_max_depth", "_with_junk")

    def __init__(self, *, with_junk: bool = False, max_depth: int | None = None) -> None:
        """Initialize serializer.

        Args:
            with_junk: Re-emit Junk entries of a Resource verbatim (default: False,
                      Junk is dropped)
            max_depth: Maximum placeable nesting depth (default: MAX_DEPTH)
        """
        self._with_junk = with_junk
        self._max_depth = max_depth if max_depth is not None else MAX_DEPTH

    @property
    def with_junk(self) -> bool:
        """Whether Junk entries of a Resource are emitted."""
        return self._with_junk

    def serialize(self, node: BaseNode) -> str:
        """Serialize a node to FTL text.

        Accepts a Resource, a single top-level entry, a Pattern, an
        expression or a variant key.

        Raises:
            SerializationError: For node kinds with no FTL rendering
            DepthLimitExceededError: If placeables nest deeper than max_depth
        """
        output: list[str] = []
        self.write(node, output.append)
        return "".join(output)

    def write(self, node: BaseNode, sink: Sink) -> None:
        """Stream the serialization of node into sink.

        A Resource is written one chunk per top-level entry; any other
        node is written as a single chunk.

        Example:
            >>> import sys
            >>> FluentSerializer().write(resource, sys.stdout.write)
        """
        guard = DepthGuard(max_depth=self._max_depth)
        match node:
            case Resource():
                for entry in node.body:
                    if Junk.guard(entry) and not self._with_junk:
                        continue
                    sink(self._serialize_entry(entry, guard))
            case Message() | Term() | BaseComment() | Junk() | Whitespace():
                sink(self._serialize_entry(node, guard))
            case Pattern():
                sink(self._serialize_pattern(node, guard))
            case Identifier():
                sink(serialize_variant_key(node))
            case _:
                sink(self._serialize_expression(node, guard))  # type: ignore[arg-type]

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    def _serialize_entry(self, entry: TopLevel, guard: DepthGuard) -> str:
        match entry:
            case Message():
                return self._serialize_message(entry, guard)
            case Term():
                return self._serialize_term(entry, guard)
            case BaseComment():
                return self._serialize_comment(entry)
            case Junk():
                return entry.content
            case Whitespace():
                return entry.content
            case _:
                msg = f"Unknown entry type: {type(entry).__name__}"
                raise SerializationError(msg)

    def _serialize_comment(self, comment: BaseComment) -> str:
        """Prefix every content line; empty lines get the bare sigil."""
        prefix = comment.type.sigil
        lines = (
            prefix if not line else f"{prefix} {line}" for line in comment.content.split("\n")
        )
        return "\n".join(lines) + "\n"

    def _serialize_message(self, message: Message, guard: DepthGuard) -> str:
        parts: list[str] = []
        if message.comment is not None:
            parts.append(self._serialize_comment(message.comment))
        parts.append(f"{message.id.name} =")
        if message.value is not None:
            parts.append(self._serialize_pattern(message.value, guard))
        parts.extend(self._serialize_attribute(attr, guard) for attr in message.attributes)
        parts.append("\n")
        return "".join(parts)

    def _serialize_term(self, term: Term, guard: DepthGuard) -> str:
        parts: list[str] = []
        if term.comment is not None:
            parts.append(self._serialize_comment(term.comment))
        parts.append(f"-{term.id.name} =")
        parts.append(self._serialize_pattern(term.value, guard))
        parts.extend(self._serialize_attribute(attr, guard) for attr in term.attributes)
        parts.append("\n")
        return "".join(parts)

    def _serialize_attribute(self, attribute: Attribute, guard: DepthGuard) -> str:
        value = _indent_lines(self._serialize_pattern(attribute.value, guard))
        return f"\n{INDENT}.{attribute.id.name} ={value}"

    # ------------------------------------------------------------------
    # Patterns
    # ------------------------------------------------------------------

    def _serialize_pattern(self, pattern: Pattern, guard: DepthGuard) -> str:
        content = "".join(self._serialize_element(e, guard) for e in pattern.elements)
        content = _indent_lines(content)
        if _should_start_on_new_line(pattern):
            return f"\n{INDENT}{content}"
        return f" {content}"

    def _serialize_element(self, element: PatternElement, guard: DepthGuard) -> str:
        match element:
            case TextElement():
                return element.value
            case Placeable():
                return self._serialize_placeable(element, guard)
            case _:
                msg = f"Unknown pattern element type: {type(element).__name__}"
                raise SerializationError(msg)

    def _serialize_placeable(self, placeable: Placeable, guard: DepthGuard) -> str:
        with guard:
            expression = placeable.expression
            match expression:
                case Placeable():
                    return f"{{{self._serialize_placeable(expression, guard)}}}"
                case SelectExpression():
                    # The select expression already ends with a newline.
                    return f"{{ {self._serialize_expression(expression, guard)}}}"
                case _:
                    return f"{{ {self._serialize_expression(expression, guard)} }}"

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _serialize_expression(self, expression: Expression, guard: DepthGuard) -> str:
        match expression:
            case StringLiteral():
                return f'"{expression.value}"'
            case NumberLiteral():
                return expression.value
            case VariableReference():
                return f"${expression.id.name}"
            case TermReference():
                out = f"-{expression.id.name}"
                if expression.attribute is not None:
                    out += f".{expression.attribute.name}"
                if expression.arguments is not None:
                    out += self._serialize_call_arguments(expression.arguments, guard)
                return out
            case MessageReference():
                out = expression.id.name
                if expression.attribute is not None:
                    out += f".{expression.attribute.name}"
                return out
            case FunctionReference():
                args = self._serialize_call_arguments(expression.arguments, guard)
                return f"{expression.id.name}{args}"
            case SelectExpression():
                out = f"{self._serialize_expression(expression.selector, guard)} ->"
                for variant in expression.variants:
                    out += self._serialize_variant(variant, guard)
                return f"{out}\n"
            case Placeable():
                return self._serialize_placeable(expression, guard)
            case _:
                msg = f"Unknown expression type: {type(expression).__name__}"
                raise SerializationError(msg)

    def _serialize_call_arguments(self, arguments: CallArguments, guard: DepthGuard) -> str:
        with guard:
            positional = [self._serialize_expression(arg, guard) for arg in arguments.positional]
            named = [self._serialize_named_argument(arg, guard) for arg in arguments.named]
        return f"({', '.join(positional + named)})"

    def _serialize_named_argument(self, argument: NamedArgument, guard: DepthGuard) -> str:
        value = self._serialize_expression(argument.value, guard)
        return f"{argument.name.name}: {value}"

    def _serialize_variant(self, variant: Variant, guard: DepthGuard) -> str:
        key = serialize_variant_key(variant.key)
        value = _indent_lines(self._serialize_pattern(variant.value, guard))
        if variant.default:
            return f"\n{INDENT[:-1]}*[{key}]{value}"
        return f"\n{INDENT}[{key}]{value}"


def serialize(node: BaseNode, *, with_junk: bool = False) -> str:
    """Serialize a node to FTL source.

    Convenience function wrapping FluentSerializer.

    Args:
        node: Resource, entry, Pattern, expression or variant key
        with_junk: Re-emit Junk entries verbatim (default: drop them)

    Returns:
        FTL source code

    Example:
        >>> from fluentsyntax.syntax import parse
        >>> serialize(parse("hello   =   World\\n"))
        'hello = World\\n'
    """
    return FluentSerializer(with_junk=with_junk).serialize(node)


def serialize_expression(expression: Expression) -> str:
    """Serialize a single expression, e.g. a select expression's selector."""
    return FluentSerializer()._serialize_expression(  # noqa: SLF001
        expression, DepthGuard(max_depth=MAX_DEPTH)
    )


def serialize_variant_key(key: VariantKey) -> str:
    """Serialize a variant key (identifier or number literal).

    Raises:
        SerializationError: For any other node type
    """
    match key:
        case Identifier():
            return key.name
        case NumberLiteral():
            return key.value
        case _:
            msg = f"Unknown variant key type: {type(key).__name__}"
            raise SerializationError(msg)
