"""Primitive parsers for identifiers, numbers and string literals.

Every function takes the shared stream and parse context, consumes input
on success and raises ParseError on failure. Callers never need to
restore the stream: a failure abandons the whole entry.

Python 3.13+.
"""

from fluentsyntax.diagnostics.codes import DiagnosticCode
from fluentsyntax.diagnostics.errors import ParseError
from fluentsyntax.syntax.ast import Identifier, NumberLiteral, StringLiteral
from fluentsyntax.syntax.parser.context import ParseContext
from fluentsyntax.syntax.stream import EOF, EOL, FluentParserStream

__all__ = [
    "get_digits",
    "get_escape_sequence",
    "get_identifier",
    "get_number",
    "get_string",
    "get_unicode_escape_sequence",
]


def get_identifier(ps: FluentParserStream, ctx: ParseContext) -> Identifier:
    """Parse identifier: [a-zA-Z][a-zA-Z0-9_-]*

    Raises:
        ParseError: E0004 if the first character is not a letter
    """
    start = ps.index
    name = ps.take_id_start()
    while (ch := ps.take_id_char()) is not None:
        name += ch
    return ctx.finish(Identifier(name), start, ps.index)


def get_digits(ps: FluentParserStream) -> str:
    """Parse one or more decimal digits.

    Raises:
        ParseError: E0004 "0-9" if no digit is present
    """
    digits = ""
    while (ch := ps.take_digit()) is not None:
        digits += ch
    if not digits:
        raise ParseError(DiagnosticCode.EXPECTED_CHAR_RANGE, "0-9")
    return digits


def get_number(ps: FluentParserStream, ctx: ParseContext) -> NumberLiteral:
    """Parse number literal: -?[0-9]+(.[0-9]+)?

    The source text is kept verbatim, so "-01.50" stays "-01.50".
    """
    start = ps.index
    value = ""
    if ps.current_char == "-":
        ps.next()
        value += "-"
    value += get_digits(ps)
    if ps.current_char == ".":
        ps.next()
        value += "." + get_digits(ps)
    return ctx.finish(NumberLiteral(value), start, ps.index)


def get_string(ps: FluentParserStream, ctx: ParseContext) -> StringLiteral:
    """Parse string literal: "text with \\"escapes\\""

    The literal keeps escape sequences as written; see StringLiteral.parse().

    Raises:
        ParseError: E0020 on a line end before the closing quote,
            E0003 at EOF, E0025/E0026 for bad escapes
    """
    start = ps.index
    ps.expect_char('"')
    value = ""
    while (ch := ps.take_char(lambda x: x not in ('"', EOL))) is not None:
        if ch == "\\":
            value += get_escape_sequence(ps)
        else:
            value += ch

    if ps.current_char == EOL:
        raise ParseError(DiagnosticCode.UNTERMINATED_STRING)

    ps.expect_char('"')
    return ctx.finish(StringLiteral(value), start, ps.index)


def get_escape_sequence(ps: FluentParserStream) -> str:
    """Parse the part of an escape after the backslash.

    Returns:
        The full escape as written, including the backslash

    Raises:
        ParseError: E0025 for an unknown escape character
    """
    ch = ps.current_char
    if ch in ("\\", '"'):
        ps.next()
        return f"\\{ch}"
    if ch == "u":
        return get_unicode_escape_sequence(ps, ch, 4)
    if ch == "U":
        return get_unicode_escape_sequence(ps, ch, 6)
    raise ParseError(DiagnosticCode.UNKNOWN_ESCAPE, "EOF" if ch is EOF else ch)


def get_unicode_escape_sequence(ps: FluentParserStream, u: str, digits: int) -> str:
    """Parse \\uXXXX (4 hex digits) or \\UXXXXXX (6 hex digits).

    Raises:
        ParseError: E0026 with the malformed sequence seen so far
    """
    ps.expect_char(u)
    sequence = ""
    for _ in range(digits):
        ch = ps.take_hex_digit()
        if ch is None:
            current = ps.current_char
            raise ParseError(
                DiagnosticCode.INVALID_UNICODE_ESCAPE,
                f"\\{u}{sequence}{'' if current is EOF else current}",
            )
        sequence += ch
    return f"\\{u}{sequence}"
