"""Core value types for the MessageFormat runtime.

Defines the types shared by the evaluator and the formatter boundary:
    - ArgumentValue: Union of argument value types the built-ins understand
    - CustomFormatter: Protocol for host-registered formatter functions
    - TagHandler: Callable that wraps the evaluated content of a tag
    - plain_string / select_key: Canonical string forms of argument values

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Protocol

__all__ = [
    "ArgumentValue",
    "Arguments",
    "CustomFormatter",
    "TagHandler",
    "plain_string",
    "select_key",
]

# Arbitrary objects are accepted too; they render via str().
type ArgumentValue = (
    str
    | int
    | float
    | bool
    | Decimal
    | datetime
    | date
    | time
    | timedelta
    | None
    | Sequence["ArgumentValue"]
    | Mapping[str, "ArgumentValue"]
)

type Arguments = Mapping[str, object]

type TagHandler = Callable[[str], str]


class CustomFormatter(Protocol):
    """Protocol for host-registered formatters.

    Called as ``formatter(value, style, locale)`` where style is the raw text
    after the placeholder's second comma (None if absent) and locale is the
    formatter's requested locale identifier.
    """

    def __call__(self, value: object, style: str | None, locale: str, /) -> str:
        ...  # pragma: no cover  # Protocol stub - not executable


def plain_string(value: object) -> str:
    """Plain string form: "" for None, "true"/"false" for booleans.

    Example:
        >>> plain_string(None), plain_string(True), plain_string(3)
        ('', 'true', '3')
    """
    match value:
        case None:
            return ""
        case bool():
            return "true" if value else "false"
    return str(value)


def select_key(value: object) -> str:
    """Key a select argument matches: "null" for None, "true"/"false" for booleans.

    Example:
        >>> select_key(None), select_key(False), select_key("male")
        ('null', 'false', 'male')
    """
    if value is None:
        return "null"
    return plain_string(value)
