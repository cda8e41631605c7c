"""MessageFormat pattern parser module.

Module Organization:
- core.py: Main MessageParser class
- primitives.py: Basic parsers (identifiers, select keys, numeric literals)
- rules.py: All grammar rules (text, placeholders, cases, tags)

Public API:
    MessageParser: Main parser class
    ParseContext: Parse context for depth tracking (advanced usage)
"""

from msgfmtengine.syntax.parser.core import MessageParser
from msgfmtengine.syntax.parser.rules import ParseContext

__all__ = ["MessageParser", "ParseContext"]
