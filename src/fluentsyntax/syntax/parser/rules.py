"""Grammar rules for FTL entries, patterns and expressions.

Recursive descent over a FluentParserStream. Each rule consumes its
production and returns an AST node, or raises ParseError. Errors are
caught once, at the entry boundary in FluentParser, where the failed
entry becomes Junk.

Python 3.13+.
"""

import re
from dataclasses import dataclass

from fluentsyntax.diagnostics.codes import DiagnosticCode
from fluentsyntax.diagnostics.errors import ParseError
from fluentsyntax.syntax.ast import (
    Attribute,
    BaseComment,
    CallArguments,
    Comment,
    FunctionReference,
    GroupComment,
    InlineExpression,
    Message,
    MessageReference,
    NamedArgument,
    NumberLiteral,
    Pattern,
    PatternElement,
    Placeable,
    ResourceComment,
    SelectExpression,
    Span,
    StringLiteral,
    Term,
    TermReference,
    TextElement,
    VariableReference,
    Variant,
    VariantKey,
)
from fluentsyntax.syntax.parser.context import ParseContext
from fluentsyntax.syntax.parser.primitives import get_identifier, get_number, get_string
from fluentsyntax.syntax.stream import EOF, EOL, FluentParserStream, is_char_digit

__all__ = [
    "dedent",
    "get_attribute",
    "get_attributes",
    "get_call_argument",
    "get_call_arguments",
    "get_comment",
    "get_entry",
    "get_expression",
    "get_inline_expression",
    "get_literal",
    "get_message",
    "get_pattern",
    "get_placeable",
    "get_term",
    "get_text_element",
    "get_variant",
    "get_variant_key",
    "get_variants",
    "maybe_get_pattern",
]

_FUNCTION_NAME = re.compile(r"^[A-Z][A-Z0-9_-]*$")

# Indexed by comment level: number of '#' minus one.
_COMMENT_KINDS: tuple[type[BaseComment], ...] = (Comment, GroupComment, ResourceComment)

# Sentinel common indent for patterns without any continuation line.
_NO_INDENT = 2**63


@dataclass(slots=True)
class _Indent:
    """Blank lines plus indentation preceding a continuation line.

    Only lives between collection and dedent(); never reaches the AST.
    """

    value: str
    start: int
    end: int


# =============================================================================
# Entries
# =============================================================================


def get_entry(
    ps: FluentParserStream, ctx: ParseContext
) -> Message | Term | BaseComment:
    """Dispatch on the first character of an entry.

    Raises:
        ParseError: E0002 if no entry can start here
    """
    if ps.current_char == "#":
        return get_comment(ps, ctx)
    if ps.current_char == "-":
        return get_term(ps, ctx)
    if ps.is_identifier_start():
        return get_message(ps, ctx)
    raise ParseError(DiagnosticCode.EXPECTED_ENTRY)


def get_comment(ps: FluentParserStream, ctx: ParseContext) -> BaseComment:
    """Parse consecutive comment lines of the same level.

    The level (#, ## or ###) is fixed by the first line; following lines
    join the comment only if they use exactly the same sigil.
    """
    start = ps.index
    level = -1
    content = ""

    while True:
        i = -1
        while ps.current_char == "#" and i < (2 if level == -1 else level):
            ps.next()
            i += 1

        if level == -1:
            level = i

        if ps.current_char not in (EOL, EOF):
            ps.expect_char(" ")
            while (ch := ps.take_char(lambda x: x != EOL)) is not None:
                content += ch

        if ps.is_next_line_comment(level=level):
            content += EOL
            ps.next()
        else:
            break

    return ctx.finish(_COMMENT_KINDS[level](content), start, ps.index)


def get_message(ps: FluentParserStream, ctx: ParseContext) -> Message:
    """Parse message: id = pattern? attribute*

    Raises:
        ParseError: E0005 if there is neither a value nor an attribute
    """
    start = ps.index
    identifier = get_identifier(ps, ctx)
    ps.skip_blank_inline()
    ps.expect_char("=")

    value = maybe_get_pattern(ps, ctx)
    attributes = get_attributes(ps, ctx)

    if value is None and not attributes:
        raise ParseError(DiagnosticCode.MESSAGE_NO_VALUE, identifier.name)

    return ctx.finish(Message(identifier, value, attributes), start, ps.index)


def get_term(ps: FluentParserStream, ctx: ParseContext) -> Term:
    """Parse term: -id = pattern attribute*

    Raises:
        ParseError: E0006 if the term has no value
    """
    start = ps.index
    ps.expect_char("-")
    identifier = get_identifier(ps, ctx)
    ps.skip_blank_inline()
    ps.expect_char("=")

    value = maybe_get_pattern(ps, ctx)
    if value is None:
        raise ParseError(DiagnosticCode.TERM_NO_VALUE, identifier.name)

    attributes = get_attributes(ps, ctx)
    return ctx.finish(Term(identifier, value, attributes), start, ps.index)


def get_attribute(ps: FluentParserStream, ctx: ParseContext) -> Attribute:
    """Parse attribute: .id = pattern

    Raises:
        ParseError: E0012 if the attribute has no value
    """
    start = ps.index
    ps.expect_char(".")
    key = get_identifier(ps, ctx)
    ps.skip_blank_inline()
    ps.expect_char("=")

    value = maybe_get_pattern(ps, ctx)
    if value is None:
        raise ParseError(DiagnosticCode.EXPECTED_VALUE)

    return ctx.finish(Attribute(key, value), start, ps.index)


def get_attributes(ps: FluentParserStream, ctx: ParseContext) -> tuple[Attribute, ...]:
    """Parse attributes on the lines following a message or term.

    Blank lines between attributes are allowed.
    """
    attributes: list[Attribute] = []
    ps.peek_blank()
    while ps.is_attribute_start():
        ps.skip_to_peek()
        attributes.append(get_attribute(ps, ctx))
        ps.peek_blank()
    return tuple(attributes)


# =============================================================================
# Patterns
# =============================================================================


def maybe_get_pattern(ps: FluentParserStream, ctx: ParseContext) -> Pattern | None:
    """Parse an inline or block pattern if one follows.

    An inline pattern starts on the current line. A block pattern starts on
    a following line that is a valid continuation (indented, or starting
    with '{').

    Returns:
        The pattern, or None if there is no value. Text that trims away
        entirely (a lone carriage return) is no value either. The peek
        cursor is left where the lookahead stopped.
    """
    ps.peek_blank_inline()
    if ps.is_value_start():
        ps.skip_to_peek()
        pattern = get_pattern(ps, ctx, is_block=False)
    else:
        ps.peek_blank_block()
        if not ps.is_value_continuation():
            return None
        ps.skip_to_peek()
        pattern = get_pattern(ps, ctx, is_block=True)

    return pattern if pattern.elements else None


def get_pattern(ps: FluentParserStream, ctx: ParseContext, *, is_block: bool) -> Pattern:
    """Collect pattern elements across continuation lines, then dedent.

    The common indent is only known after every continuation line has been
    seen, so indentation is first collected as _Indent tokens and stripped
    afterwards by dedent().

    Raises:
        ParseError: E0027 for a '}' outside a placeable
    """
    start = ps.index
    elements: list[PatternElement | _Indent] = []

    if is_block:
        # Measure the indent of the first line for the dedentation logic.
        blank_start = ps.index
        first_indent = ps.skip_blank_inline()
        elements.append(_Indent(first_indent, blank_start, ps.index))
        common_indent = len(first_indent)
    else:
        common_indent = _NO_INDENT

    while (ch := ps.current_char) is not EOF:
        if ch == EOL:
            blank_start = ps.index
            blank_lines = ps.peek_blank_block()
            if ps.is_value_continuation():
                ps.skip_to_peek()
                indent = ps.skip_blank_inline()
                common_indent = min(common_indent, len(indent))
                elements.append(_Indent(blank_lines + indent, blank_start, ps.index))
                continue

            # A line end not followed by a continuation ends the pattern.
            ps.reset_peek()
            break

        if ch == "}":
            raise ParseError(DiagnosticCode.UNBALANCED_CLOSING_BRACE)

        if ch == "{":
            elements.append(get_placeable(ps, ctx))
        else:
            elements.append(get_text_element(ps, ctx))

    return ctx.finish(Pattern(dedent(elements, common_indent, ctx)), start, ps.index)


def dedent(
    elements: list[PatternElement | _Indent],
    common_indent: int,
    ctx: ParseContext,
) -> tuple[PatternElement, ...]:
    """Strip the common indent and normalize text elements.

    - every _Indent loses common_indent columns of indentation
    - empty _Indents are dropped
    - an _Indent or TextElement following a TextElement is merged into it
    - remaining _Indents become TextElements
    - trailing spaces and line ends are trimmed from the last TextElement,
      which is dropped if that leaves it empty; tabs are text and stay
    """
    trimmed: list[PatternElement] = []

    for element in elements:
        if isinstance(element, Placeable):
            trimmed.append(element)
            continue

        if isinstance(element, _Indent):
            # The indentation is the tail of the token, after any blank lines.
            element.value = element.value[: len(element.value) - common_indent]
            if not element.value:
                continue

        prev = trimmed[-1] if trimmed else None
        if isinstance(prev, TextElement):
            span = None
            if ctx.with_spans and prev.span is not None:
                span = Span(prev.span.start, _end_of(element))
            trimmed[-1] = TextElement(prev.value + element.value, span=span)
            continue

        if isinstance(element, _Indent):
            text = TextElement(element.value)
            element = ctx.finish(text, element.start, element.end)

        trimmed.append(element)

    last = trimmed[-1] if trimmed else None
    if isinstance(last, TextElement):
        value = last.value.rstrip(" \n\r")
        if value:
            trimmed[-1] = TextElement(value, span=last.span)
        else:
            trimmed.pop()

    return tuple(trimmed)


def _end_of(element: TextElement | _Indent) -> int:
    if isinstance(element, _Indent):
        return element.end
    return element.span.end if element.span is not None else 0


def get_text_element(ps: FluentParserStream, ctx: ParseContext) -> TextElement:
    """Consume text up to a brace or line end."""
    start = ps.index
    buffer = ""
    while (ch := ps.current_char) is not EOF:
        if ch in ("{", "}", EOL):
            break
        buffer += ch
        ps.next()
    return ctx.finish(TextElement(buffer), start, ps.index)


# =============================================================================
# Placeables and Expressions
# =============================================================================


def get_placeable(ps: FluentParserStream, ctx: ParseContext) -> Placeable:
    """Parse placeable: { expression }

    Raises:
        ParseError: E0030 if nesting exceeds ctx.max_nesting_depth
    """
    if ctx.is_depth_exceeded():
        raise ParseError(DiagnosticCode.NESTING_DEPTH_EXCEEDED, str(ctx.max_nesting_depth))

    start = ps.index
    ps.expect_char("{")
    ps.skip_blank()
    expression = get_expression(ps, ctx.enter_placeable())
    ps.expect_char("}")
    return ctx.finish(Placeable(expression), start, ps.index)


def get_expression(
    ps: FluentParserStream, ctx: ParseContext
) -> InlineExpression | SelectExpression:
    """Parse an inline expression, optionally followed by "->" and variants.

    Raises:
        ParseError: E0016/E0017/E0018/E0029 for invalid selectors,
            E0019 for a term attribute outside a selector
    """
    start = ps.index
    selector = get_inline_expression(ps, ctx)
    ps.skip_blank()

    if ps.current_char == "-":
        if ps.peek() != ">":
            ps.reset_peek()
            return selector

        match selector:
            case MessageReference(attribute=None):
                raise ParseError(DiagnosticCode.MESSAGE_AS_SELECTOR)
            case MessageReference():
                raise ParseError(DiagnosticCode.MESSAGE_ATTRIBUTE_AS_SELECTOR)
            case TermReference(attribute=None):
                raise ParseError(DiagnosticCode.TERM_AS_SELECTOR)
            case Placeable():
                raise ParseError(DiagnosticCode.EXPECTED_SIMPLE_SELECTOR)

        ps.next()
        ps.next()
        ps.skip_blank_inline()

        ps.expect_line_end()

        variants = get_variants(ps, ctx)
        return ctx.finish(SelectExpression(selector, variants), start, ps.index)

    if isinstance(selector, TermReference) and selector.attribute is not None:
        raise ParseError(DiagnosticCode.TERM_ATTRIBUTE_AS_PLACEABLE)

    return selector


def get_inline_expression(ps: FluentParserStream, ctx: ParseContext) -> InlineExpression:
    """Parse an inline expression.

    Recognized, in order: nested placeable, number, string, $variable,
    -term[.attr][(args)], FUNCTION(args), message[.attr].

    Raises:
        ParseError: E0008 for a lower-case callee, E0028 if nothing matches
    """
    if ps.current_char == "{":
        return get_placeable(ps, ctx)

    if ps.is_number_start():
        return get_number(ps, ctx)

    if ps.current_char == '"':
        return get_string(ps, ctx)

    start = ps.index

    if ps.current_char == "$":
        ps.next()
        identifier = get_identifier(ps, ctx)
        return ctx.finish(VariableReference(identifier), start, ps.index)

    if ps.current_char == "-":
        ps.next()
        identifier = get_identifier(ps, ctx)

        attribute = None
        if ps.current_char == ".":
            ps.next()
            attribute = get_identifier(ps, ctx)

        arguments = None
        ps.peek_blank()
        if ps.current_peek == "(":
            ps.skip_to_peek()
            arguments = get_call_arguments(ps, ctx)

        return ctx.finish(TermReference(identifier, attribute, arguments), start, ps.index)

    if ps.is_identifier_start():
        identifier = get_identifier(ps, ctx)
        ps.peek_blank()

        if ps.current_peek == "(":
            if not _FUNCTION_NAME.match(identifier.name):
                raise ParseError(DiagnosticCode.INVALID_CALLEE)
            ps.skip_to_peek()
            arguments = get_call_arguments(ps, ctx)
            return ctx.finish(FunctionReference(identifier, arguments), start, ps.index)

        attribute = None
        if ps.current_char == ".":
            ps.next()
            attribute = get_identifier(ps, ctx)

        return ctx.finish(MessageReference(identifier, attribute), start, ps.index)

    raise ParseError(DiagnosticCode.EXPECTED_INLINE_EXPRESSION)


def get_call_argument(
    ps: FluentParserStream, ctx: ParseContext
) -> InlineExpression | NamedArgument:
    """Parse a positional argument or a named argument (name: literal).

    Raises:
        ParseError: E0009 if the name is not a plain identifier
    """
    start = ps.index
    expression = get_inline_expression(ps, ctx)
    ps.skip_blank()

    if ps.current_char != ":":
        return expression

    if isinstance(expression, MessageReference) and expression.attribute is None:
        ps.next()
        ps.skip_blank()
        value = get_literal(ps, ctx)
        return ctx.finish(NamedArgument(expression.id, value), start, ps.index)

    raise ParseError(DiagnosticCode.INVALID_ARGUMENT_NAME)


def get_call_arguments(ps: FluentParserStream, ctx: ParseContext) -> CallArguments:
    """Parse call arguments: ( positional*, named* )

    Argument lists count towards the nesting depth like placeables.

    Raises:
        ParseError: E0021 for a positional argument after a named one,
            E0022 for a repeated argument name, E0030 if nested too deeply
    """
    if ctx.is_depth_exceeded():
        raise ParseError(DiagnosticCode.NESTING_DEPTH_EXCEEDED, str(ctx.max_nesting_depth))

    ctx = ctx.enter_placeable()
    start = ps.index
    positional: list[InlineExpression] = []
    named: list[NamedArgument] = []
    argument_names: set[str] = set()

    ps.expect_char("(")
    ps.skip_blank()

    while ps.current_char != ")":
        argument = get_call_argument(ps, ctx)
        if isinstance(argument, NamedArgument):
            if argument.name.name in argument_names:
                raise ParseError(DiagnosticCode.DUPLICATE_NAMED_ARGUMENT)
            named.append(argument)
            argument_names.add(argument.name.name)
        elif argument_names:
            raise ParseError(DiagnosticCode.POSITIONAL_AFTER_NAMED)
        else:
            positional.append(argument)

        ps.skip_blank()

        if ps.current_char != ",":
            break
        ps.next()
        ps.skip_blank()

    ps.expect_char(")")
    return ctx.finish(CallArguments(tuple(positional), tuple(named)), start, ps.index)


def get_literal(ps: FluentParserStream, ctx: ParseContext) -> StringLiteral | NumberLiteral:
    """Parse a number or string literal.

    Raises:
        ParseError: E0014 if neither follows
    """
    if ps.is_number_start():
        return get_number(ps, ctx)
    if ps.current_char == '"':
        return get_string(ps, ctx)
    raise ParseError(DiagnosticCode.EXPECTED_LITERAL)


# =============================================================================
# Variants
# =============================================================================


def get_variant_key(ps: FluentParserStream, ctx: ParseContext) -> VariantKey:
    """Parse variant key: identifier or number.

    Raises:
        ParseError: E0013 at EOF
    """
    ch = ps.current_char
    if ch is EOF:
        raise ParseError(DiagnosticCode.EXPECTED_VARIANT_KEY)
    if is_char_digit(ch) or ch == "-":
        return get_number(ps, ctx)
    return get_identifier(ps, ctx)


def get_variant(
    ps: FluentParserStream,
    ctx: ParseContext,
    *,
    has_default: bool,
) -> Variant:
    """Parse variant: *?[key] pattern

    Raises:
        ParseError: E0015 for a second default, E0012 for a missing value
    """
    start = ps.index
    default = False
    if ps.current_char == "*":
        if has_default:
            raise ParseError(DiagnosticCode.MULTIPLE_DEFAULT_VARIANTS)
        ps.next()
        default = True

    ps.expect_char("[")
    ps.skip_blank()
    key = get_variant_key(ps, ctx)
    ps.skip_blank()
    ps.expect_char("]")

    value = maybe_get_pattern(ps, ctx)
    if value is None:
        raise ParseError(DiagnosticCode.EXPECTED_VALUE)

    return ctx.finish(Variant(key, value, default), start, ps.index)


def get_variants(ps: FluentParserStream, ctx: ParseContext) -> tuple[Variant, ...]:
    """Parse the variant list of a select expression, one variant per line.

    Raises:
        ParseError: E0011 if there are no variants, E0010 if none is default
    """
    variants: list[Variant] = []
    has_default = False

    ps.skip_blank()
    while ps.is_variant_start():
        variant = get_variant(ps, ctx, has_default=has_default)
        has_default = has_default or variant.default
        variants.append(variant)
        ps.expect_line_end()
        ps.skip_blank()

    if not variants:
        raise ParseError(DiagnosticCode.MISSING_VARIANTS)

    if not has_default:
        raise ParseError(DiagnosticCode.MISSING_DEFAULT_VARIANT)

    return tuple(variants)
