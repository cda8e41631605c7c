"""Nested argument flattening for format_complex_message.

Converts nested argument structures into the flat name -> value mapping the
evaluator reads, joining keys with a separator:

    {"user": {"name": "Ann", "address": {"city": "Riga"}}}
    -> {"user__name": "Ann", "user__address__city": "Riga"}

Nested Mappings are flattened, as are plain objects (public instance
attributes) and dataclass instances. Lists and tuples stay values because
they are arguments to the list formatter. Scalars (str, numbers, dates,
None) stay values.

Flattening walks an explicit worklist, so arbitrarily deep input cannot
exhaust the interpreter stack. Self-referencing structures are cut at the
repeated object.

Python 3.13+. Zero external dependencies.
"""

import dataclasses
from collections.abc import Mapping
from datetime import date, time, timedelta
from decimal import Decimal
from enum import Enum

from msgfmtengine.constants import DEFAULT_NESTED_SEPARATOR

__all__ = ["flatten_arguments", "to_mapping"]

_SCALARS = (str, bytes, int, float, Decimal, date, time, timedelta, Enum, list, tuple, set, frozenset)


def to_mapping(value: object) -> Mapping[str, object] | None:
    """View value as a name -> value mapping, or None if it is a leaf.

    Example:
        >>> from dataclasses import dataclass
        >>> @dataclass
        ... class User:
        ...     name: str
        >>> dict(to_mapping(User("Ann")))
        {'name': 'Ann'}
        >>> to_mapping(42) is None
        True
    """
    if value is None or isinstance(value, _SCALARS):
        return None
    if isinstance(value, Mapping):
        return value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    attributes = getattr(value, "__dict__", None)
    if isinstance(attributes, dict) and not isinstance(value, type):
        return {name: item for name, item in attributes.items() if not name.startswith("_")}
    return None


def flatten_arguments(
    arguments: object, separator: str = DEFAULT_NESTED_SEPARATOR
) -> dict[str, object]:
    """Flatten nested arguments into one level.

    Args:
        arguments: Mapping, dataclass instance or plain object (None = no arguments)
        separator: Joins parent and child keys

    Returns:
        Flat mapping; non-string keys are converted with str()

    Example:
        >>> flatten_arguments({"user": {"name": "Ann"}, "n": 2})
        {'n': 2, 'user__name': 'Ann'}
        >>> flatten_arguments({"a": {"b": {"c": 1}}}, separator=".")
        {'a.b.c': 1}
    """
    root = to_mapping(arguments)
    if root is None:
        return {}

    result: dict[str, object] = {}
    # (key prefix, mapping, ids of mappings on the path to it)
    worklist: list[tuple[str | None, Mapping[str, object], frozenset[int]]] = [
        (None, root, frozenset({id(arguments)}))
    ]
    while worklist:
        prefix, mapping, path = worklist.pop()
        for raw_key, value in mapping.items():
            key = str(raw_key) if prefix is None else f"{prefix}{separator}{raw_key}"
            nested = to_mapping(value)
            if nested is None or id(value) in path:
                result[key] = value
            else:
                worklist.append((key, nested, path | {id(value)}))
    return result
