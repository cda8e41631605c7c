"""Shared test doubles.

FakeLocaleData is an in-memory LocaleDataProvider: each locale declares the
data kinds it carries, and every lookup answers with a recognizable marker
so tests can tell which chain entry served it.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from msgfmtengine.enums import DataKind, DateTimeKind, ListType, ListWidth, UnitWidth
from msgfmtengine.runtime.locale_data import ListPatterns, NumberRenderOptions, NumberSymbols
from msgfmtengine.runtime.plural_operands import PluralOperands

ALL_KINDS = frozenset(DataKind)


@dataclass
class FakeLocaleData:
    """In-memory locale data.

    Attributes:
        kinds: locale id -> data kinds it carries
        calls: (method, locale id) pairs, in call order
    """

    kinds: Mapping[str, Iterable[DataKind]] = field(default_factory=dict)
    calls: list[tuple[str, str]] = field(default_factory=list)

    def has_data(self, locale_id: str, kind: DataKind) -> bool:
        return kind in set(self.kinds.get(locale_id, ()))

    def available_locales(self) -> tuple[str, ...]:
        return tuple(self.kinds)

    def plural_category(
        self, locale_id: str, operands: PluralOperands, *, ordinal: bool
    ) -> str:
        self.calls.append(("plural_category", locale_id))
        if ordinal:
            return "one" if operands.i % 10 == 1 and operands.v == 0 else "other"
        return "one" if operands.i == 1 and operands.v == 0 else "other"

    def numbering_digits(self, locale_id: str) -> str:
        return "0123456789"

    def number_symbols(self, locale_id: str) -> NumberSymbols:
        return NumberSymbols()

    def ordinal_suffix(self, locale_id: str, category: str) -> str | None:
        return None

    def format_number(
        self, locale_id: str, value: Decimal, options: NumberRenderOptions
    ) -> str:
        self.calls.append(("format_number", locale_id))
        return f"{value}@{locale_id}"

    def default_currency(self, locale_id: str) -> str | None:
        return None

    def format_unit(
        self,
        locale_id: str,
        value: Decimal,
        unit: str,
        width: UnitWidth,
        options: NumberRenderOptions,
    ) -> str | None:
        return None

    def date_pattern(self, locale_id: str, kind: DateTimeKind, style: str) -> str:
        return "yyyy-MM-dd"

    def date_skeleton_pattern(self, locale_id: str, skeleton: str) -> str | None:
        return None

    def format_datetime(self, locale_id: str, value: datetime, pattern: str) -> str:
        self.calls.append(("format_datetime", locale_id))
        return f"{value.date().isoformat()}@{locale_id}"

    def interval_fallback(self, locale_id: str) -> str:
        return "{0} ~ {1}"

    def format_date_interval(
        self, locale_id: str, start: datetime, end: datetime, skeleton: str
    ) -> str:
        return f"{start.date()}..{end.date()}"

    def list_patterns(
        self, locale_id: str, list_type: ListType, width: ListWidth
    ) -> ListPatterns | None:
        self.calls.append(("list_patterns", locale_id))
        return ListPatterns(start="{0}; {1}", middle="{0}; {1}", end="{0} + {1}", pair="{0} + {1}")

    def format_relative_time(
        self, locale_id: str, field: str, value: Decimal, width: ListWidth
    ) -> str | None:
        return None

    def served_by(self, method: str) -> list[str]:
        """Locale ids that answered calls to method."""
        return [locale_id for name, locale_id in self.calls if name == method]
