"""Core MessageFormat pattern parser.

This module provides the MessageParser class that turns a pattern string
into the AST defined in :mod:`msgfmtengine.syntax.ast`.

Architecture:
    The parser uses an immutable cursor (:class:`~msgfmtengine.syntax.cursor.Cursor`)
    to traverse the pattern. Each grammar rule in
    :mod:`~msgfmtengine.syntax.parser.rules` returns a
    :class:`~msgfmtengine.syntax.cursor.ParseResult` with the parsed node and
    the advanced cursor, or raises
    :class:`~msgfmtengine.diagnostics.PatternSyntaxError`.

Security:
    Includes configurable input size and nesting depth limits so untrusted
    patterns cannot cause unbounded memory use or stack exhaustion.

See Also:
    - :mod:`msgfmtengine.syntax.ast` - AST node definitions
    - :mod:`msgfmtengine.syntax.parser.rules` - Grammar rules
"""

import logging

from msgfmtengine.constants import MAX_DEPTH, MAX_SOURCE_SIZE
from msgfmtengine.syntax.ast import Message
from msgfmtengine.syntax.cursor import Cursor
from msgfmtengine.syntax.parser.rules import ParseContext, parse_nodes

__all__ = ["MessageParser"]

logger = logging.getLogger(__name__)


class MessageParser:
    """ICU MessageFormat parser using the immutable cursor pattern.

    Parsing is all-or-nothing: the first malformed construct raises
    PatternSyntaxError with line and column of the offending position.

    Security:
    - Configurable max_source_size rejects oversized patterns (default: 10 MiB)
    - Configurable max_nesting_depth bounds placeholder/tag nesting (default: 100)

    Attributes:
        max_source_size: Maximum pattern length in characters
        max_nesting_depth: Maximum nesting of placeholders and tags
        ignore_tag: When True, '<' is plain text and no tags are recognized
    """

    __slots__ = ("_ignore_tag", "_max_nesting_depth", "_max_source_size")

    def __init__(
        self,
        *,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
        ignore_tag: bool = False,
    ) -> None:
        """Initialize parser with optional limits.

        Args:
            max_source_size: Maximum pattern length (default: 10 MiB).
                            Set to 0 to disable the limit.
            max_nesting_depth: Maximum nesting depth (default: 100).
            ignore_tag: Treat '<' as literal text.
        """
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )
        self._max_nesting_depth = (
            max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH
        )
        self._ignore_tag = ignore_tag

    @property
    def max_source_size(self) -> int:
        """Maximum pattern length in characters."""
        return self._max_source_size

    @property
    def max_nesting_depth(self) -> int:
        """Maximum nesting of placeholders and tags."""
        return self._max_nesting_depth

    @property
    def ignore_tag(self) -> bool:
        """Whether tag syntax is disabled."""
        return self._ignore_tag

    def parse(self, pattern: str) -> Message:
        """Parse a pattern into a Message AST.

        Args:
            pattern: MessageFormat pattern text

        Returns:
            Message whose body is the tuple of top-level nodes

        Raises:
            ValueError: If pattern exceeds max_source_size
            PatternSyntaxError: If the pattern is malformed

        Example:
            >>> parser = MessageParser()
            >>> parser.parse("Hello, {name}!").body[1]
            Variable(name='name')
        """
        if self._max_source_size > 0 and len(pattern) > self._max_source_size:
            msg = (
                f"Pattern size ({len(pattern):,} characters) exceeds maximum "
                f"({self._max_source_size:,} characters). "
                "Configure max_source_size in MessageParser constructor to increase limit."
            )
            raise ValueError(msg)

        context = ParseContext(
            max_nesting_depth=self._max_nesting_depth,
            ignore_tag=self._ignore_tag,
        )
        result = parse_nodes(Cursor(pattern, 0), context)
        logger.debug("Parsed pattern into %d top-level nodes", len(result.value))
        return Message(body=result.value)
