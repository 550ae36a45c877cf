"""Tests for FluentParser entry parsing: messages, terms, attributes, expressions."""

from decimal import Decimal

import pytest

from fluentsyntax import parse
from fluentsyntax.syntax.ast import (
    Attribute,
    CallArguments,
    FunctionReference,
    Identifier,
    Junk,
    Message,
    MessageReference,
    NamedArgument,
    NumberLiteral,
    Pattern,
    Placeable,
    Resource,
    StringLiteral,
    Term,
    TermReference,
    TextElement,
    VariableReference,
    Whitespace,
)
from fluentsyntax.syntax.parser import FluentParser


def _message_value(source: str) -> Pattern:
    entry = parse(source).body[0]
    assert isinstance(entry, Message), entry
    assert entry.value is not None
    return entry.value


def _placeable_expression(source: str) -> object:
    value = _message_value(source)
    placeable = value.elements[0]
    assert isinstance(placeable, Placeable)
    return placeable.expression


class TestMessages:
    """Message entries."""

    def test_simple_message(self, parser: FluentParser) -> None:
        """id = text"""
        resource = parser.parse("hello = Hello, world!")
        assert resource == Resource(
            (Message(Identifier("hello"), Pattern((TextElement("Hello, world!"),))),)
        )

    def test_spaces_around_equals_are_optional(self, parser: FluentParser) -> None:
        """Blank before and after '=' is not part of the message."""
        resource = parser.parse("hello=World")
        message = resource.body[0]
        assert isinstance(message, Message)
        assert message.value == Pattern((TextElement("World"),))

    def test_identifier_characters(self, parser: FluentParser) -> None:
        """Identifiers may contain digits, '-' and '_' after the first letter."""
        message = parser.parse("Key_1-a = x").body[0]
        assert isinstance(message, Message)
        assert message.id == Identifier("Key_1-a")

    def test_attributes_only(self, parser: FluentParser) -> None:
        """A message may have attributes and no value."""
        message = parser.parse("login =\n    .placeholder = Email").body[0]
        assert isinstance(message, Message)
        assert message.value is None
        assert message.attributes == (
            Attribute(Identifier("placeholder"), Pattern((TextElement("Email"),))),
        )

    def test_value_and_attributes(self, parser: FluentParser) -> None:
        """Attributes follow the value on indented lines."""
        source = "login = Log in\n    .title = Title\n    .aria-label = Label\n"
        message = parser.parse(source).body[0]
        assert isinstance(message, Message)
        assert message.value == Pattern((TextElement("Log in"),))
        assert [a.id.name for a in message.attributes] == ["title", "aria-label"]

    def test_blank_lines_between_attributes(self, parser: FluentParser) -> None:
        """Blank lines do not end the attribute list."""
        message = parser.parse("key = v\n\n    .a = A\n\n    .b = B\n").body[0]
        assert isinstance(message, Message)
        assert len(message.attributes) == 2

    def test_multiple_messages(self, parser: FluentParser) -> None:
        """Consecutive messages without blank lines."""
        resource = parser.parse("a = A\nb = B\nc = C\n")
        assert [e.id.name for e in resource.body if isinstance(e, Message)] == ["a", "b", "c"]
        assert not any(isinstance(e, Whitespace) for e in resource.body)


class TestTerms:
    """Term entries."""

    def test_simple_term(self, parser: FluentParser) -> None:
        """-id = text"""
        term = parser.parse("-brand = Firefox").body[0]
        assert term == Term(Identifier("brand"), Pattern((TextElement("Firefox"),)))

    def test_term_attributes(self, parser: FluentParser) -> None:
        """Terms carry attributes like messages."""
        term = parser.parse("-brand = Firefox\n    .gender = masculine").body[0]
        assert isinstance(term, Term)
        assert term.attributes[0].id.name == "gender"


class TestInlineExpressions:
    """Expressions inside placeables."""

    def test_variable_reference(self) -> None:
        """$name"""
        assert _placeable_expression("k = { $name }") == VariableReference(Identifier("name"))

    def test_message_reference_with_attribute(self) -> None:
        """msg.attr"""
        assert _placeable_expression("k = { other.title }") == MessageReference(
            Identifier("other"), Identifier("title")
        )

    def test_term_reference_with_arguments(self) -> None:
        """-term(name: literal)"""
        assert _placeable_expression('k = { -brand(case: "nom") }') == TermReference(
            Identifier("brand"),
            None,
            CallArguments((), (NamedArgument(Identifier("case"), StringLiteral("nom")),)),
        )

    def test_term_reference_arguments_after_blank(self) -> None:
        """Arguments may follow the term name after blank."""
        expression = _placeable_expression("k = { -brand () }")
        assert isinstance(expression, TermReference)
        assert expression.arguments == CallArguments()

    def test_function_reference(self) -> None:
        """FUNCTION(positional, named: literal)"""
        expression = _placeable_expression("k = { NUMBER($n, minimumFractionDigits: 2) }")
        assert expression == FunctionReference(
            Identifier("NUMBER"),
            CallArguments(
                (VariableReference(Identifier("n")),),
                (NamedArgument(Identifier("minimumFractionDigits"), NumberLiteral("2")),),
            ),
        )

    def test_function_arguments_across_lines(self) -> None:
        """Call arguments may span lines."""
        expression = _placeable_expression("k = { FUN(\n    1,\n    a: 2\n) }")
        assert isinstance(expression, FunctionReference)
        assert len(expression.arguments.positional) == 1
        assert len(expression.arguments.named) == 1

    def test_nested_placeable(self) -> None:
        """{ { expression } }"""
        assert _placeable_expression('k = { { "x" } }') == Placeable(StringLiteral("x"))

    @pytest.mark.parametrize("raw", ["0", "-1", "3.14", "-01.50"])
    def test_number_literal_keeps_source_text(self, raw: str) -> None:
        """Numbers are stored as written."""
        assert _placeable_expression(f"k = {{ {raw} }}") == NumberLiteral(raw)

    def test_number_literal_parse(self) -> None:
        """NumberLiteral.parse() gives a Decimal with the written precision."""
        literal = NumberLiteral("-01.50")
        assert literal.parse() == Decimal("-1.50")
        assert literal.precision == 2
        assert NumberLiteral("7").precision == 0

    @pytest.mark.parametrize(
        ("raw", "decoded"),
        [
            ("plain", "plain"),
            ('a\\"b', 'a"b'),
            ("back\\\\slash", "back\\slash"),
            ("\\u0065", "e"),
            ("\\U01F602", "\U0001f602"),
            ("\\UFFFFFF", "\ufffd"),
            ("\\uD800", "\ufffd"),
        ],
    )
    def test_string_literal_keeps_escapes(self, raw: str, decoded: str) -> None:
        """The AST keeps escapes raw; parse() decodes them."""
        literal = _placeable_expression(f'k = {{ "{raw}" }}')
        assert literal == StringLiteral(raw)
        assert isinstance(literal, StringLiteral)
        assert literal.parse() == decoded


class TestResourceShape:
    """Whitespace, EOF and line endings at the resource level."""

    def test_empty_source(self, parser: FluentParser) -> None:
        """Empty input gives an empty resource."""
        assert parser.parse("") == Resource(())

    def test_blank_only_source(self, parser: FluentParser) -> None:
        """Leading blank lines are dropped."""
        assert parser.parse("\n\n   \n") == Resource(())

    def test_blank_lines_become_whitespace(self, parser: FluentParser) -> None:
        """Blank runs between entries are kept verbatim."""
        resource = parser.parse("a = A\n\n  \nb = B\n")
        assert resource.body[1] == Whitespace("\n  \n")

    def test_trailing_blank_lines(self, parser: FluentParser) -> None:
        """Blank lines at the end are kept too."""
        resource = parser.parse("a = A\n\n\n")
        assert resource.body[-1] == Whitespace("\n\n")

    def test_crlf_source(self, parser: FluentParser) -> None:
        """CRLF line ends parse like LF."""
        resource = parser.parse("a = A\r\n    .b = B\r\nc = C\r\n")
        assert [type(e) for e in resource.body] == [Message, Message]
        first = resource.body[0]
        assert isinstance(first, Message)
        assert first.attributes[0].value == Pattern((TextElement("B"),))

    def test_crlf_multiline_text_normalized(self, parser: FluentParser) -> None:
        """Line breaks inside text are LF."""
        message = parser.parse("a =\r\n    one\r\n    two\r\n").body[0]
        assert isinstance(message, Message)
        assert message.value == Pattern((TextElement("one\ntwo"),))

    def test_parse_is_total_on_garbage(self, parser: FluentParser) -> None:
        """Malformed input yields Junk instead of raising."""
        resource = parser.parse("}{][*.#$\n=")
        assert all(isinstance(e, Junk) for e in resource.body)


class TestParserConfiguration:
    """Constructor options."""

    def test_defaults(self) -> None:
        """Default limits come from constants."""
        parser = FluentParser()
        assert parser.with_spans is False
        assert parser.max_source_size == 10 * 1024 * 1024
        assert parser.max_nesting_depth == 100

    def test_source_size_limit(self) -> None:
        """Oversized sources are rejected before parsing."""
        parser = FluentParser(max_source_size=10)
        with pytest.raises(ValueError, match="exceeds maximum"):
            parser.parse("k = " + "x" * 10)

    def test_check_source_size(self) -> None:
        """The size check runs on its own, counting characters."""
        parser = FluentParser(max_source_size=10)
        parser.check_source_size("x" * 10)
        with pytest.raises(ValueError, match=r"Source size \(11 characters\)"):
            parser.check_source_size("x" * 11)

    def test_source_size_limit_disabled(self) -> None:
        """max_source_size=0 disables the check."""
        parser = FluentParser(max_source_size=0)
        assert len(parser.parse("k = " + "x" * 100).body) == 1
