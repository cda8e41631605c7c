"""MessageFormat syntax package.

Provides the parser, AST definitions and number skeleton parsing.
Separate from runtime so patterns can be validated without locale data.

Python 3.13+.
"""

from .ast import (
    FormatterCall,
    Hash,
    Literal,
    Message,
    Node,
    Plural,
    PluralCase,
    Select,
    SelectCase,
    Tag,
    Variable,
)
from .cursor import Cursor, ParseResult
from .parser import MessageParser
from .skeleton import NumberFormatSpec, PrecisionSource, parse_skeleton

__all__ = [
    "Cursor",
    "FormatterCall",
    "Hash",
    "Literal",
    "Message",
    "MessageParser",
    "Node",
    "NumberFormatSpec",
    "ParseResult",
    "Plural",
    "PluralCase",
    "PrecisionSource",
    "Select",
    "SelectCase",
    "Tag",
    "Variable",
    "parse",
    "parse_skeleton",
]


def parse(pattern: str, *, ignore_tag: bool = False) -> Message:
    """Parse a pattern with default limits.

    Convenience wrapper around MessageParser.

    Raises:
        PatternSyntaxError: If the pattern is malformed
    """
    return MessageParser(ignore_tag=ignore_tag).parse(pattern)
