"""Primitive parsing utilities for the catalog parser.

Low-level parsers for identifiers, numbers and string literals.
Each returns ParseResult on success or None when the input does not match.
"""

from ludusavi_lang.syntax.ast import NumberLiteral
from ludusavi_lang.syntax.cursor import Cursor, ParseResult

__all__ = [
    "is_identifier_char",
    "is_identifier_start",
    "parse_identifier",
    "parse_number",
    "parse_string_literal",
]

# \uXXXX = 4 hex digits (BMP), \UXXXXXX = 6 hex digits (full range)
_UNICODE_ESCAPE_LEN_SHORT: int = 4
_UNICODE_ESCAPE_LEN_LONG: int = 6

_MAX_UNICODE_CODE_POINT: int = 0x10FFFF
_SURROGATE_RANGE_START: int = 0xD800
_SURROGATE_RANGE_END: int = 0xDFFF

_HEX_DIGITS: str = "0123456789abcdefABCDEF"

# ASCII digits only - str.isdigit() accepts Unicode digits that int() rejects.
_ASCII_DIGITS: str = "0123456789"


def is_identifier_start(ch: str) -> bool:
    """ASCII letter: the only valid first character of an identifier."""
    return ch.isascii() and ch.isalpha()


def is_identifier_char(ch: str) -> bool:
    """ASCII letter, digit, hyphen or underscore."""
    return (ch.isascii() and ch.isalnum()) or ch in ("-", "_")


def parse_identifier(cursor: Cursor) -> ParseResult[str] | None:
    """Parse identifier: [a-zA-Z][a-zA-Z0-9_-]*

    Examples:
        button-backup -> "button-backup"
        total_games -> "total_games"
    """
    if cursor.is_eof or not is_identifier_start(cursor.current):
        return None

    start_pos = cursor.pos
    cursor = cursor.advance()
    while not cursor.is_eof and is_identifier_char(cursor.current):
        cursor = cursor.advance()

    identifier = Cursor(cursor.source, start_pos).slice_to(cursor.pos)
    return ParseResult(identifier, cursor)


def parse_number(cursor: Cursor) -> ParseResult[NumberLiteral] | None:
    """Parse number literal: -?[0-9]+(.[0-9]+)?

    Examples:
        42 -> NumberLiteral(42, "42")
        -3.14 -> NumberLiteral(-3.14, "-3.14")
    """
    start_pos = cursor.pos

    if not cursor.is_eof and cursor.current == "-":
        cursor = cursor.advance()

    if cursor.is_eof or cursor.current not in _ASCII_DIGITS:
        return None

    while not cursor.is_eof and cursor.current in _ASCII_DIGITS:
        cursor = cursor.advance()

    if not cursor.is_eof and cursor.current == ".":
        cursor = cursor.advance()
        if cursor.is_eof or cursor.current not in _ASCII_DIGITS:
            return None
        while not cursor.is_eof and cursor.current in _ASCII_DIGITS:
            cursor = cursor.advance()

    raw = Cursor(cursor.source, start_pos).slice_to(cursor.pos)
    value: int | float = float(raw) if "." in raw else int(raw)
    return ParseResult(NumberLiteral(value=value, raw=raw), cursor)


def _parse_unicode_escape(cursor: Cursor, length: int) -> tuple[str, Cursor] | None:
    """Parse the hex digits of a \\u or \\U escape."""
    hex_digits = cursor.source[cursor.pos : cursor.pos + length]
    if len(hex_digits) < length or not all(c in _HEX_DIGITS for c in hex_digits):
        return None
    code_point = int(hex_digits, 16)
    if code_point > _MAX_UNICODE_CODE_POINT:
        return None
    if _SURROGATE_RANGE_START <= code_point <= _SURROGATE_RANGE_END:
        return None
    return (chr(code_point), cursor.advance(length))


def parse_string_literal(cursor: Cursor) -> ParseResult[str] | None:
    """Parse string literal: "text"

    Supports escape sequences:
        \\" -> "
        \\\\ -> \\
        \\uXXXX -> Unicode character (4 hex digits)
        \\UXXXXXX -> Unicode character (6 hex digits)

    String literals cannot span lines.
    """
    if cursor.is_eof or cursor.current != '"':
        return None

    cursor = cursor.advance()  # Skip opening "
    chars: list[str] = []
    while not cursor.is_eof:
        ch = cursor.current

        if ch == '"':
            return ParseResult("".join(chars), cursor.advance())

        if ch == "\n":
            return None

        if ch == "\\":
            cursor = cursor.advance()
            if cursor.is_eof:
                return None
            escape_ch = cursor.current
            if escape_ch in ('"', "\\"):
                chars.append(escape_ch)
                cursor = cursor.advance()
                continue
            if escape_ch in ("u", "U"):
                length = _UNICODE_ESCAPE_LEN_SHORT if escape_ch == "u" else _UNICODE_ESCAPE_LEN_LONG
                escaped = _parse_unicode_escape(cursor.advance(), length)
                if escaped is None:
                    return None
                char, cursor = escaped
                chars.append(char)
                continue
            return None

        chars.append(ch)
        cursor = cursor.advance()

    # EOF without closing quote
    return None
