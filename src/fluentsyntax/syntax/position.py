"""Offset to line/column conversion for error reporting.

Spans and annotations carry character offsets into the parsed source.
These helpers turn them into the line and column numbers people read.
Line ends are LF; a CR before LF counts as part of the previous line.
"""

__all__ = [
    "column_offset",
    "format_position",
    "get_error_context",
    "get_line_content",
    "line_offset",
]


def _clamp(source: str, pos: int) -> int:
    if pos < 0:
        msg = f"Position must be >= 0, got {pos}"
        raise ValueError(msg)
    return min(pos, len(source))


def line_offset(source: str, pos: int) -> int:
    """Get 0-based line number of a character offset.

    Offsets past the end are clamped to len(source).

    Example:
        >>> line_offset("one\\ntwo\\nthree", 4)
        1

    Raises:
        ValueError: If pos is negative
    """
    return source.count("\n", 0, _clamp(source, pos))


def column_offset(source: str, pos: int) -> int:
    """Get 0-based column of a character offset.

    Example:
        >>> column_offset("hello\\nworld", 10)
        4

    Raises:
        ValueError: If pos is negative
    """
    pos = _clamp(source, pos)
    return pos - (source.rfind("\n", 0, pos) + 1)


def format_position(source: str, pos: int, *, zero_based: bool = False) -> str:
    """Format an offset as "line:column".

    Example:
        >>> format_position("hello\\nworld", 6)
        '2:1'
        >>> format_position("hello\\nworld", 6, zero_based=True)
        '1:0'
    """
    line = line_offset(source, pos)
    column = column_offset(source, pos)
    if not zero_based:
        line += 1
        column += 1
    return f"{line}:{column}"


def get_line_content(source: str, line_number: int, *, zero_based: bool = True) -> str:
    """Return one line of source without its line end.

    Raises:
        ValueError: If the line does not exist
    """
    if not zero_based:
        line_number -= 1
    if line_number < 0:
        msg = f"Line number must be >= 0, got {line_number}"
        raise ValueError(msg)

    lines = source.split("\n")
    if line_number >= len(lines):
        msg = f"Line {line_number} out of range (source has {len(lines)} lines)"
        raise ValueError(msg)
    return lines[line_number].removesuffix("\r")


def get_error_context(source: str, pos: int, context_lines: int = 2, marker: str = "^") -> str:
    """Show the lines around an offset with a marker under it.

    Example:
        >>> source = "line1\\nline2\\nerror here\\nline4\\nline5"
        >>> print(get_error_context(source, 12, context_lines=1))
        line2
        error here
        ^
        line4
    """
    line_number = line_offset(source, pos)
    column = column_offset(source, pos)
    lines = [line.removesuffix("\r") for line in source.split("\n")]

    first = max(0, line_number - context_lines)
    last = min(len(lines), line_number + context_lines + 1)

    context: list[str] = []
    for index in range(first, last):
        context.append(lines[index])
        if index == line_number:
            context.append(" " * column + marker)
    return "\n".join(context)
