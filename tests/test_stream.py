"""Tests for FluentParserStream cursor, lookahead and recovery."""

import pytest

from fluentsyntax.diagnostics import DiagnosticCode, ParseError
from fluentsyntax.syntax.stream import (
    EOF,
    EOL,
    FluentParserStream,
    is_char_digit,
    is_char_hex_digit,
    is_char_id_char,
    is_char_id_start,
    is_char_pattern_continuation,
)


class TestCursor:
    """Index and peek cursor movement over "abcd"."""

    def test_next(self) -> None:
        """next() advances index and returns the new current character."""
        ps = FluentParserStream("abcd")
        assert ps.current_char == "a"
        assert ps.index == 0

        for expected, index in (("b", 1), ("c", 2), ("d", 3)):
            assert ps.next() == expected
            assert ps.current_char == expected
            assert ps.index == index

        assert ps.next() is EOF
        assert ps.current_char is EOF
        assert ps.index == 4

    def test_peek(self) -> None:
        """peek() advances only the peek cursor."""
        ps = FluentParserStream("abcd")
        assert ps.current_peek == "a"
        assert ps.peek_offset == 0

        for expected, offset in (("b", 1), ("c", 2), ("d", 3)):
            assert ps.peek() == expected
            assert ps.current_peek == expected
            assert ps.peek_offset == offset

        assert ps.peek() is EOF
        assert ps.current_peek is EOF
        assert ps.peek_offset == 4
        assert ps.index == 0

    def test_peek_and_next(self) -> None:
        """next() resets the peek cursor."""
        ps = FluentParserStream("abcd")

        assert ps.peek() == "b"
        assert (ps.peek_offset, ps.index) == (1, 0)

        assert ps.next() == "b"
        assert (ps.peek_offset, ps.index) == (0, 1)

        assert ps.peek() == "c"
        assert (ps.peek_offset, ps.index) == (1, 1)

        assert ps.next() == "c"
        assert (ps.peek_offset, ps.index) == (0, 2)
        assert ps.current_char == "c"
        assert ps.current_peek == "c"

        assert ps.peek() == "d"
        assert ps.next() == "d"
        assert (ps.peek_offset, ps.index) == (0, 3)

        assert ps.peek() is EOF
        assert (ps.peek_offset, ps.index) == (1, 3)
        assert ps.current_char == "d"
        assert ps.current_peek is EOF

        assert ps.peek() is EOF
        assert (ps.peek_offset, ps.index) == (2, 3)

        assert ps.next() is EOF
        assert (ps.peek_offset, ps.index) == (0, 4)

    def test_skip_to_peek(self) -> None:
        """skip_to_peek() commits the lookahead."""
        ps = FluentParserStream("abcd")
        ps.peek()
        ps.peek()
        ps.skip_to_peek()

        assert ps.current_char == "c"
        assert ps.current_peek == "c"
        assert (ps.peek_offset, ps.index) == (0, 2)

        ps.peek()
        assert ps.current_char == "c"
        assert ps.current_peek == "d"
        assert (ps.peek_offset, ps.index) == (1, 2)

        ps.next()
        assert ps.current_char == "d"
        assert ps.current_peek == "d"
        assert (ps.peek_offset, ps.index) == (0, 3)

    def test_reset_peek(self) -> None:
        """reset_peek() discards the lookahead."""
        ps = FluentParserStream("abcd")
        ps.next()
        ps.peek()
        ps.peek()
        ps.reset_peek()

        assert ps.current_char == "b"
        assert ps.current_peek == "b"
        assert (ps.peek_offset, ps.index) == (0, 1)

        ps.peek()
        assert ps.current_peek == "c"
        assert (ps.peek_offset, ps.index) == (1, 1)

        ps.peek()
        ps.peek()
        ps.peek()
        ps.reset_peek()
        assert ps.current_peek == "b"
        assert (ps.peek_offset, ps.index) == (0, 1)

        assert ps.peek() == "c"
        assert ps.peek() == "d"
        assert ps.peek() is EOF

    def test_reset_peek_to_offset(self) -> None:
        """reset_peek(offset) moves the peek cursor relative to index."""
        ps = FluentParserStream("abcd")
        ps.peek()
        ps.peek()
        ps.peek()
        ps.reset_peek(1)
        assert ps.current_peek == "b"


class TestLineEndings:
    """CRLF pairs behave as a single line end."""

    def test_crlf_reads_as_eol(self) -> None:
        """The CR of a CRLF pair is reported as EOL."""
        ps = FluentParserStream("a\r\nb")
        assert ps.next() == EOL
        assert ps.index == 1
        assert ps.next() == "b"
        assert ps.index == 3

    def test_crlf_peek_skips_pair(self) -> None:
        """peek() steps over both characters of a CRLF pair."""
        ps = FluentParserStream("\r\nx")
        assert ps.current_peek == EOL
        assert ps.peek() == "x"
        assert ps.peek_offset == 2

    def test_lone_cr_is_plain_character(self) -> None:
        """A CR without LF is ordinary text."""
        ps = FluentParserStream("a\rb")
        assert ps.next() == "\r"

    def test_char_at(self) -> None:
        """char_at() maps absolute offsets, including past the end."""
        ps = FluentParserStream("x\r\n")
        assert ps.char_at(0) == "x"
        assert ps.char_at(1) == EOL
        assert ps.char_at(2) == EOL
        assert ps.char_at(3) is EOF


class TestBlankScanning:
    """Inline and block blank scanning."""

    def test_skip_blank_inline(self) -> None:
        """Only spaces are inline blank."""
        ps = FluentParserStream("   \tx")
        assert ps.skip_blank_inline() == "   "
        assert ps.current_char == "\t"

    def test_peek_blank_inline_keeps_index(self) -> None:
        """Peeking leaves the committed index in place."""
        ps = FluentParserStream("  x")
        assert ps.peek_blank_inline() == "  "
        assert ps.index == 0
        assert ps.current_peek == "x"

    def test_skip_blank_block_counts_blank_lines(self) -> None:
        """Each blank line contributes one EOL; indentation of content stays."""
        ps = FluentParserStream("\n   \n\n  x")
        assert ps.skip_blank_block() == "\n\n\n"
        assert ps.index == 6
        assert ps.current_char == " "

    def test_skip_blank_block_normalizes_crlf(self) -> None:
        """CRLF blank lines are reported as EOL."""
        ps = FluentParserStream("\r\n\r\nx")
        assert ps.skip_blank_block() == "\n\n"
        assert ps.current_char == "x"

    def test_skip_blank_block_consumes_trailing_spaces_at_eof(self) -> None:
        """Spaces before EOF are consumed."""
        ps = FluentParserStream("\n   ")
        assert ps.skip_blank_block() == "\n"
        assert ps.current_char is EOF

    def test_skip_blank_block_without_blank_lines(self) -> None:
        """Content on the first line means no blank block."""
        ps = FluentParserStream("  x")
        assert ps.skip_blank_block() == ""
        assert ps.index == 0

    def test_skip_blank(self) -> None:
        """skip_blank() consumes spaces and line ends together."""
        ps = FluentParserStream(" \n \n x")
        ps.skip_blank()
        assert ps.current_char == "x"


class TestExpectAndTake:
    """Consuming expected characters."""

    def test_expect_char(self) -> None:
        """A matching character is consumed."""
        ps = FluentParserStream("=x")
        ps.expect_char("=")
        assert ps.current_char == "x"

    def test_expect_char_mismatch(self) -> None:
        """A mismatch raises E0003 naming the expected token."""
        ps = FluentParserStream("x")
        with pytest.raises(ParseError) as exc_info:
            ps.expect_char("=")
        assert exc_info.value.code == DiagnosticCode.EXPECTED_TOKEN
        assert exc_info.value.arguments == ("=",)
        assert ps.index == 0

    def test_expect_line_end_accepts_eof(self) -> None:
        """EOF is a valid line end."""
        ps = FluentParserStream("")
        ps.expect_line_end()
        assert ps.index == 0

    def test_expect_line_end_consumes_crlf(self) -> None:
        """A CRLF line end is consumed whole."""
        ps = FluentParserStream("\r\nx")
        ps.expect_line_end()
        assert ps.current_char == "x"

    def test_expect_line_end_reports_newline_symbol(self) -> None:
        """Other characters raise E0003 with the newline symbol."""
        ps = FluentParserStream("x")
        with pytest.raises(ParseError) as exc_info:
            ps.expect_line_end()
        assert exc_info.value.arguments == ("␤",)

    def test_take_char(self) -> None:
        """take_char() returns None instead of raising."""
        ps = FluentParserStream("ab")
        assert ps.take_char(lambda ch: ch == "a") == "a"
        assert ps.take_char(lambda ch: ch == "a") is None
        assert ps.index == 1

    def test_take_char_at_eof(self) -> None:
        """Nothing can be taken at EOF."""
        ps = FluentParserStream("")
        assert ps.take_char(lambda ch: True) is None

    def test_take_id_start(self) -> None:
        """Identifier start must be an ASCII letter."""
        assert FluentParserStream("k").take_id_start() == "k"
        with pytest.raises(ParseError) as exc_info:
            FluentParserStream("1").take_id_start()
        assert exc_info.value.code == DiagnosticCode.EXPECTED_CHAR_RANGE
        assert exc_info.value.arguments == ("a-zA-Z",)

    def test_take_digits_and_hex(self) -> None:
        """Digit takers stop at the first non-matching character."""
        ps = FluentParserStream("7fz")
        assert ps.take_digit() == "7"
        assert ps.take_digit() is None
        assert ps.take_hex_digit() == "f"
        assert ps.take_hex_digit() is None
        assert ps.take_id_char() == "z"


class TestPredicates:
    """Lookahead predicates."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [("1", True), ("-1", True), ("-a", False), ("-", False), ("a", False)],
    )
    def test_is_number_start(self, source: str, expected: bool) -> None:
        """A number starts with a digit, optionally after a minus sign."""
        ps = FluentParserStream(source)
        assert ps.is_number_start() is expected
        assert ps.peek_offset == 0

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("    text", True),
            ("    {", True),
            ("{", True),
            ("text", False),
            ("    }", False),
            ("    .attr", False),
            ("    [key]", False),
            ("    *[key]", False),
        ],
    )
    def test_is_value_continuation(self, source: str, expected: bool) -> None:
        """Indented lines continue a pattern unless they start specially."""
        ps = FluentParserStream(source)
        assert ps.is_value_continuation() is expected

    def test_is_value_continuation_resets_to_column_one(self) -> None:
        """On success the peek cursor is back at the line start."""
        ps = FluentParserStream("  text")
        assert ps.is_value_continuation()
        assert ps.peek_offset == 0

    @pytest.mark.parametrize(
        ("source", "level", "expected"),
        [
            ("\n# next", 0, True),
            ("\n#\n", 0, True),
            ("\n#", 0, True),
            ("\n## next", 0, False),
            ("\n## next", 1, True),
            ("\n# next", 1, False),
            ("\n#next", 0, False),
            ("\nkey", -1, False),
            ("\n### any", -1, True),
            ("x", 0, False),
        ],
    )
    def test_is_next_line_comment(self, source: str, level: int, expected: bool) -> None:
        """The next line must use the same sigil followed by space or line end."""
        ps = FluentParserStream(source)
        assert ps.is_next_line_comment(level=level) is expected
        assert ps.peek_offset == 0

    @pytest.mark.parametrize(
        ("source", "expected"),
        [("[one]", True), ("*[other]", True), ("[[x]]", False), ("*x", False), ("x", False)],
    )
    def test_is_variant_start(self, source: str, expected: bool) -> None:
        """Variants start with '[' or '*['."""
        ps = FluentParserStream(source)
        assert ps.is_variant_start() is expected
        assert ps.peek_offset == 0

    def test_is_attribute_start(self) -> None:
        """Attributes start with '.'."""
        assert FluentParserStream(".attr").is_attribute_start()
        assert not FluentParserStream("attr").is_attribute_start()


class TestSkipToNextEntryStart:
    """Error recovery scanning."""

    def test_skips_to_identifier_line(self) -> None:
        """Recovery stops at a line starting with an identifier character."""
        source = "!!!\n  indented\nkey = value"
        ps = FluentParserStream(source)
        ps.skip_to_next_entry_start(0)
        assert ps.index == source.index("key")

    @pytest.mark.parametrize("start", ["-term", "# comment", "Key"])
    def test_entry_start_characters(self, start: str) -> None:
        """Terms, comments and identifiers start entries."""
        source = f"!!!\n{start}"
        ps = FluentParserStream(source)
        ps.skip_to_next_entry_start(0)
        assert ps.index == 4

    def test_rewinds_to_last_line_start(self) -> None:
        """An error on a later line rewinds to that line's start before scanning."""
        source = "key = {\nnext = ok"
        ps = FluentParserStream(source)
        ps.index = len(source)
        ps.skip_to_next_entry_start(0)
        assert ps.index == source.index("next")

    def test_reaches_eof(self) -> None:
        """Without another entry, recovery stops at EOF."""
        ps = FluentParserStream("!!!\n   \n}")
        ps.skip_to_next_entry_start(0)
        assert ps.current_char is EOF


class TestCharacterClasses:
    """Module-level character classifiers."""

    def test_id_start_is_ascii_only(self) -> None:
        """Unicode letters are not identifier starts."""
        assert is_char_id_start("a")
        assert is_char_id_start("Z")
        assert not is_char_id_start("é")
        assert not is_char_id_start(None)

    def test_id_char(self) -> None:
        """Digits, '-' and '_' continue identifiers."""
        assert all(is_char_id_char(ch) for ch in "aZ09-_")
        assert not is_char_id_char(".")

    def test_digits(self) -> None:
        """Decimal and hex digit classes."""
        assert is_char_digit("5")
        assert not is_char_digit("a")
        assert is_char_hex_digit("F")
        assert not is_char_hex_digit("g")

    def test_pattern_continuation(self) -> None:
        """Special line-start characters cannot continue a pattern."""
        assert is_char_pattern_continuation("a")
        assert not any(is_char_pattern_continuation(ch) for ch in "}.[*")
        assert not is_char_pattern_continuation(None)
