"""HTML escaping for format_html_message.

Argument values are entity-escaped before evaluation so markup in user data
cannot reach the output. Escaping first unescapes, so a value that already
contains entities ("Tom &amp; Jerry") is not escaped twice.

Only text is escaped. Numbers, dates and other typed values keep their type
so the formatters still see them; their rendered forms contain no markup
characters.

Python 3.13+. Zero external dependencies.
"""

import html
from collections.abc import Mapping
from datetime import date, time, timedelta
from decimal import Decimal

__all__ = ["escape_arguments", "safe_escape"]


def safe_escape(text: str) -> str:
    """Escape &, <, >, " and ' without double-escaping existing entities.

    Example:
        >>> safe_escape("<b>Tom & Jerry</b>")
        '&lt;b&gt;Tom &amp; Jerry&lt;/b&gt;'
        >>> safe_escape("Tom &amp; Jerry")
        'Tom &amp; Jerry'
    """
    if not text:
        return text
    return html.escape(html.unescape(text), quote=True)


def _escape_value(value: object) -> object:
    match value:
        case None | bool() | int() | float() | Decimal() | date() | time() | timedelta():
            return value
        case str():
            return safe_escape(value)
        case list() | tuple():
            return [_escape_value(item) for item in value]
    # Arbitrary objects render via str(); escape that text instead.
    return safe_escape(str(value))


def escape_arguments(arguments: Mapping[str, object]) -> dict[str, object]:
    """Copy of arguments with every string value (and list item) escaped.

    Example:
        >>> escape_arguments({"name": "<i>x</i>", "n": 3})
        {'name': '&lt;i&gt;x&lt;/i&gt;', 'n': 3}
    """
    return {name: _escape_value(value) for name, value in arguments.items()}
