"""Character stream with transactional lookahead for the FTL parser.

The stream keeps two cursors: ``index`` (committed position) and
``peek_offset`` (speculative lookahead relative to ``index``). Grammar rules
peek ahead to decide what comes next and then either commit the scan with
skip_to_peek() or discard it with reset_peek().

Line endings:
    A CRLF pair is reported as a single "\\n" at the position of the CR.
    Moving over it with next() or peek() advances two source positions at
    once, so the parser never sees a bare CR of a CRLF pair.

EOF is represented by None.

Python 3.13+.
"""

from collections.abc import Callable

from fluentsyntax.diagnostics.codes import DiagnosticCode
from fluentsyntax.diagnostics.errors import ParseError

__all__ = [
    "EOF",
    "EOL",
    "FluentParserStream",
    "SPECIAL_LINE_START_CHARS",
    "is_char_digit",
    "is_char_hex_digit",
    "is_char_id_char",
    "is_char_id_start",
    "is_char_pattern_continuation",
]

EOL = "\n"
EOF = None

# Characters that cannot start a pattern continuation line; they introduce
# closing braces, attributes, variant keys and default variants instead.
SPECIAL_LINE_START_CHARS = frozenset("}.[*")


# ============================================================================
# CHARACTER CLASSIFICATION
# ============================================================================


def is_char_id_start(ch: str | None) -> bool:
    """Check if character can start an identifier: [a-zA-Z]

    ASCII only. Unicode letters are not valid in FTL identifiers.
    """
    return ch is not None and ("a" <= ch <= "z" or "A" <= ch <= "Z")


def is_char_id_char(ch: str | None) -> bool:
    """Check if character can continue an identifier: [a-zA-Z0-9_-]"""
    return ch is not None and (is_char_id_start(ch) or "0" <= ch <= "9" or ch in "_-")


def is_char_digit(ch: str | None) -> bool:
    """Check if character is an ASCII digit: [0-9]"""
    return ch is not None and "0" <= ch <= "9"


def is_char_hex_digit(ch: str | None) -> bool:
    """Check if character is an ASCII hex digit: [0-9a-fA-F]"""
    return ch is not None and ("0" <= ch <= "9" or "a" <= ch <= "f" or "A" <= ch <= "F")


def is_char_pattern_continuation(ch: str | None) -> bool:
    """Check if character may start an indented pattern continuation line."""
    return ch is not None and ch not in SPECIAL_LINE_START_CHARS


# ============================================================================
# STREAM
# ============================================================================


class FluentParserStream:
    """Cursor over FTL source with a separate peek cursor.

    Not thread-safe: one stream belongs to one parse() call.

    Attributes:
        string: Source text
        index: Committed position
        peek_offset: Lookahead distance from index

    Example:
        >>> ps = FluentParserStream("abcd")
        >>> ps.peek()
        'b'
        >>> ps.current_char, ps.current_peek
        ('a', 'b')
        >>> ps.skip_to_peek()
        >>> ps.index, ps.current_char
        (1, 'b')
    """

    __slots__ = ("index", "peek_offset", "string")

    def __init__(self, string: str) -> None:
        self.string = string
        self.index = 0
        self.peek_offset = 0

    # ------------------------------------------------------------------
    # Cursor primitives
    # ------------------------------------------------------------------

    def _get(self, offset: int) -> str | None:
        if offset < len(self.string):
            return self.string[offset]
        return EOF

    def _is_crlf(self, offset: int) -> bool:
        return self._get(offset) == "\r" and self._get(offset + 1) == EOL

    def char_at(self, offset: int) -> str | None:
        """Character at an absolute offset, with CRLF reported as EOL."""
        if self._is_crlf(offset):
            return EOL
        return self._get(offset)

    @property
    def current_char(self) -> str | None:
        """Character at index."""
        return self.char_at(self.index)

    @property
    def current_peek(self) -> str | None:
        """Character at index + peek_offset."""
        return self.char_at(self.index + self.peek_offset)

    def next(self) -> str | None:
        """Advance index by one character, resetting the peek cursor.

        Returns:
            The new current character
        """
        self.peek_offset = 0
        if self._is_crlf(self.index):
            self.index += 1
        self.index += 1
        return self.char_at(self.index)

    def peek(self) -> str | None:
        """Advance the peek cursor by one character.

        Returns:
            The new current peek character
        """
        if self._is_crlf(self.index + self.peek_offset):
            self.peek_offset += 1
        self.peek_offset += 1
        return self.char_at(self.index + self.peek_offset)

    def reset_peek(self, offset: int = 0) -> None:
        """Move the peek cursor back to index + offset."""
        self.peek_offset = offset

    def skip_to_peek(self) -> None:
        """Commit the lookahead: move index to the peek cursor."""
        self.index += self.peek_offset
        self.peek_offset = 0

    # ------------------------------------------------------------------
    # Blank scanning
    # ------------------------------------------------------------------

    def peek_blank_inline(self) -> str:
        """Peek over spaces on the current line.

        Returns:
            The spaces peeked over
        """
        start = self.index + self.peek_offset
        while self.current_peek == " ":
            self.peek()
        return self.string[start : self.index + self.peek_offset]

    def skip_blank_inline(self) -> str:
        """Consume spaces on the current line."""
        blank = self.peek_blank_inline()
        self.skip_to_peek()
        return blank

    def peek_blank_block(self) -> str:
        """Peek over blank lines.

        Stops at column 1 of the first line holding non-blank content, or
        at EOF. Trailing spaces at EOF are peeked over.

        Returns:
            One EOL per blank line peeked over (CRLF normalized)
        """
        blank = ""
        while True:
            line_start = self.peek_offset
            self.peek_blank_inline()
            if self.current_peek == EOL:
                blank += EOL
                self.peek()
                continue
            if self.current_peek is EOF:
                return blank
            self.reset_peek(line_start)
            return blank

    def skip_blank_block(self) -> str:
        """Consume blank lines; see peek_blank_block()."""
        blank = self.peek_blank_block()
        self.skip_to_peek()
        return blank

    def peek_blank(self) -> None:
        """Peek over any run of spaces and line ends."""
        while self.current_peek in (" ", EOL):
            self.peek()

    def skip_blank(self) -> None:
        """Consume any run of spaces and line ends."""
        self.peek_blank()
        self.skip_to_peek()

    # ------------------------------------------------------------------
    # Expectations
    # ------------------------------------------------------------------

    def expect_char(self, ch: str) -> None:
        """Consume ch or raise E0003."""
        if self.current_char == ch:
            self.next()
            return
        raise ParseError(DiagnosticCode.EXPECTED_TOKEN, ch)

    def expect_line_end(self) -> None:
        """Consume a line end. EOF counts as a line end.

        Raises:
            ParseError: E0003 with U+2424 SYMBOL FOR NEWLINE
        """
        if self.current_char is EOF:
            return
        if self.current_char == EOL:
            self.next()
            return
        raise ParseError(DiagnosticCode.EXPECTED_TOKEN, "␤")

    def take_char(self, predicate: Callable[[str], bool]) -> str | None:
        """Consume and return the current character if it satisfies predicate.

        Returns:
            The character, or None at EOF or when predicate rejects it
        """
        ch = self.current_char
        if ch is EOF or not predicate(ch):
            return None
        self.next()
        return ch

    def take_id_start(self) -> str:
        """Consume an identifier start character or raise E0004."""
        ch = self.current_char
        if is_char_id_start(ch):
            self.next()
            return ch  # type: ignore[return-value]  # narrowed by is_char_id_start
        raise ParseError(DiagnosticCode.EXPECTED_CHAR_RANGE, "a-zA-Z")

    def take_id_char(self) -> str | None:
        """Consume an identifier continuation character if present."""
        return self.take_char(is_char_id_char)

    def take_digit(self) -> str | None:
        """Consume a decimal digit if present."""
        return self.take_char(is_char_digit)

    def take_hex_digit(self) -> str | None:
        """Consume a hexadecimal digit if present."""
        return self.take_char(is_char_hex_digit)

    # ------------------------------------------------------------------
    # Lookahead predicates
    # ------------------------------------------------------------------

    def is_identifier_start(self) -> bool:
        """Check if the peek cursor is at an identifier start."""
        return is_char_id_start(self.current_peek)

    def is_number_start(self) -> bool:
        """Check for an optional '-' followed by a digit. Resets peek."""
        ch = self.peek() if self.current_char == "-" else self.current_char
        self.reset_peek()
        return is_char_digit(ch)

    def is_value_start(self) -> bool:
        """Inline patterns may start with any character but a line end."""
        return self.current_peek not in (EOL, EOF)

    def is_value_continuation(self) -> bool:
        """Check if the line at the peek cursor continues a pattern.

        A continuation line is indented and does not start with one of
        SPECIAL_LINE_START_CHARS, or starts with '{' at any indent. On
        success the peek cursor is left at column 1 of the line.
        """
        column1 = self.peek_offset
        self.peek_blank_inline()

        if self.current_peek == "{":
            self.reset_peek(column1)
            return True

        if self.peek_offset - column1 == 0:
            return False

        if is_char_pattern_continuation(self.current_peek):
            self.reset_peek(column1)
            return True

        return False

    def is_next_line_comment(self, level: int = -1) -> bool:
        """Check if the next line continues a comment.

        Args:
            level: Zero-based level to match (0 = #, 1 = ##, 2 = ###);
                -1 accepts any level

        Must be called at a line end; always resets peek.
        """
        if self.current_char != EOL:
            return False

        i = 0
        while i <= level or (level == -1 and i < 3):
            if self.peek() != "#":
                if i <= level and level != -1:
                    self.reset_peek()
                    return False
                break
            i += 1

        # The character after the sigil must end it.
        result = self.peek() in (" ", EOL, EOF)
        self.reset_peek()
        return result

    def is_variant_start(self) -> bool:
        """Check for '[' or '*[' at the peek cursor. Peek position is kept."""
        current_peek_offset = self.peek_offset
        if self.current_peek == "*":
            self.peek()
        result = self.current_peek == "[" and self.peek() != "["
        self.reset_peek(current_peek_offset)
        return result

    def is_attribute_start(self) -> bool:
        """Check for '.' at the peek cursor."""
        return self.current_peek == "."

    # ------------------------------------------------------------------
    # Error recovery
    # ------------------------------------------------------------------

    def skip_to_next_entry_start(self, junk_start: int) -> None:
        """Advance to the start of the next line that looks like an entry.

        A line looks like an entry start when it begins with an identifier
        start character, '-' or '#'.

        Args:
            junk_start: Position where the failed entry began
        """
        last_newline = self.string.rfind(EOL, 0, self.index)
        if junk_start < last_newline:
            # The newline belongs to the failed entry; rewinding to it cannot
            # resume at the same broken entry start.
            self.index = last_newline

        while self.current_char is not EOF:
            if self.current_char != EOL:
                self.next()
                continue

            first = self.next()
            if is_char_id_start(first) or first in ("-", "#"):
                break
        self.peek_offset = 0
