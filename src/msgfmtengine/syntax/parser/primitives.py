"""Primitive parsers: identifiers, case keys, numeric literals.

Python 3.13+. Zero external dependencies.
"""

import re
from decimal import Decimal, InvalidOperation

from msgfmtengine.syntax.cursor import Cursor, ParseResult

__all__ = [
    "is_identifier_char",
    "is_tag_start",
    "parse_decimal_literal",
    "parse_identifier",
    "parse_select_key",
    "scan_style",
]

_DECIMAL_LITERAL_RE = re.compile(r"-?\d+(?:\.\d+)?")


def is_identifier_char(ch: str) -> bool:
    """Check if character may appear in an argument, formatter or tag name.

    Names use letters, digits, '_', '-' and '.' (Unicode letters and digits
    included), so {0}, {user_name} and {user.name} are all valid.
    """
    return ch.isalnum() or ch in "_-."


def is_tag_start(cursor: Cursor) -> bool:
    """Check if '<' at cursor opens or closes a tag.

    '<' starts a tag only when immediately followed by a letter, or by '/'
    and a letter. Anything else ("a < b", "<3") is literal text.

    Example:
        >>> is_tag_start(Cursor("<b>", 0))
        True
        >>> is_tag_start(Cursor("</b>", 0))
        True
        >>> is_tag_start(Cursor("< b", 0))
        False
    """
    if cursor.peek() != "<":
        return False
    nxt = cursor.peek(1)
    if nxt == "/":
        nxt = cursor.peek(2)
    return nxt is not None and nxt.isalpha()


def parse_identifier(cursor: Cursor) -> ParseResult[str] | None:
    """Parse a run of identifier characters.

    Returns:
        ParseResult with the name, or None if no identifier starts here
    """
    start = cursor.pos
    while not cursor.is_eof and is_identifier_char(cursor.current):
        cursor = cursor.advance()
    if cursor.pos == start:
        return None
    return ParseResult(cursor.source[start : cursor.pos], cursor)


def parse_select_key(cursor: Cursor) -> ParseResult[str] | None:
    """Parse a select key: any run of non-whitespace, non-brace characters.

    Example:
        >>> parse_select_key(Cursor("female {", 0)).value
        'female'
    """
    start = cursor.pos
    while not cursor.is_eof and not cursor.current.isspace() and cursor.current not in "{}":
        cursor = cursor.advance()
    if cursor.pos == start:
        return None
    return ParseResult(cursor.source[start : cursor.pos], cursor)


def parse_decimal_literal(cursor: Cursor) -> ParseResult[Decimal] | None:
    """Parse an optionally signed integer or decimal literal.

    Example:
        >>> parse_decimal_literal(Cursor("=1.50 {", 1)).value
        Decimal('1.50')
        >>> parse_decimal_literal(Cursor("x", 0)) is None
        True
    """
    match = _DECIMAL_LITERAL_RE.match(cursor.source, cursor.pos)
    if match is None:
        return None
    try:
        value = Decimal(match.group())
    except InvalidOperation:  # pragma: no cover - regex admits only valid literals
        return None
    return ParseResult(value, cursor.advance(len(match.group())))


def scan_style(cursor: Cursor) -> int | None:
    """Find the '}' that closes a formatter style argument.

    Quoted text ('...') and balanced nested braces are skipped, so CLDR date
    patterns such as "d 'de' MMMM" and styles containing '{' survive intact.

    Returns:
        Position of the closing '}', or None if input ends first
    """
    depth = 0
    in_quote = False
    pos = cursor.pos
    source = cursor.source
    while pos < len(source):
        ch = source[pos]
        if ch == "'":
            if pos + 1 < len(source) and source[pos + 1] == "'":
                pos += 2
                continue
            in_quote = not in_quote
        elif not in_quote:
            if ch == "{":
                depth += 1
            elif ch == "}":
                if depth == 0:
                    return pos
                depth -= 1
        pos += 1
    return None
