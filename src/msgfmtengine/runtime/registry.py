"""Case-insensitive, read-only registries for host extensions.

Two registries back the extension points of the evaluator:
    - FormatterRegistry: {value, name, style} -> custom formatter
    - TagRegistry: <name>content</name> -> tag handler

Both are built once from a mapping (FormatterOptions.custom_formatters /
tag_handlers). Names are lower-cased on construction so every lookup is a
single dict access. Nothing can be added or removed afterwards, so concurrent
format calls read them without locking.

Supports dict-like introspection:
    - __iter__: Iterate over registered names (lower-cased)
    - __len__: Count registered entries
    - __contains__: Case-insensitive membership ('in' operator)
    - get(name): Case-insensitive lookup, None if absent

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType

from msgfmtengine.runtime.value_types import CustomFormatter, TagHandler

__all__ = ["FormatterRegistry", "TagRegistry"]


class _NameRegistry[T: Callable[..., str]]:
    """Frozen name -> callable map keyed by lower-cased name."""

    __slots__ = ("_entries",)

    _entries: Mapping[str, T]

    def __init__(self, entries: Mapping[str, T] | None = None) -> None:
        """Build the registry; later duplicates (by case-folded name) win.

        Raises:
            TypeError: If a name is not a string or an entry is not callable
        """
        normalized: dict[str, T] = {}
        for name, handler in (entries or {}).items():
            if not isinstance(name, str) or not name:
                msg = f"Registry names must be non-empty strings, got {name!r}"
                raise TypeError(msg)
            if not callable(handler):
                msg = f"Registry entry '{name}' is not callable: {type(handler).__name__}"
                raise TypeError(msg)
            normalized[name.lower()] = handler
        self._entries = MappingProxyType(normalized)

    def get(self, name: str) -> T | None:
        """Case-insensitive lookup."""
        return self._entries.get(name.lower())

    def as_mapping(self) -> Mapping[str, T]:
        """Read-only view of the lower-cased entries."""
        return self._entries

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(entries={len(self._entries)})"


class FormatterRegistry(_NameRegistry[CustomFormatter]):
    """Custom formatters, looked up when a placeholder names no built-in.

    Example:
        >>> registry = FormatterRegistry({"Upper": lambda v, s, l: str(v).upper()})
        >>> "UPPER" in registry
        True
        >>> registry.get("upper")("abc", None, "en")
        'ABC'
        >>> len(registry)
        1
    """

    __slots__ = ()


class TagRegistry(_NameRegistry[TagHandler]):
    """Tag handlers, called with the evaluated content of a tag.

    Example:
        >>> registry = TagRegistry({"b": lambda content: f"**{content}**"})
        >>> registry.get("B")("bold")
        '**bold**'
        >>> "i" in registry
        False
    """

    __slots__ = ()
