"""Locale context for one formatter.

Binds a LocaleResolver to the locale-data backend so formatting code asks
for "the number locale" or "the plural category" without repeating chain
resolution. Immutable and shared by every format call of a formatter.

Python 3.13+.
"""

from dataclasses import dataclass

from msgfmtengine.constants import LATIN_DIGITS
from msgfmtengine.enums import DataKind, PluralCategory
from msgfmtengine.runtime.locale_data import LocaleDataProvider, NumberSymbols
from msgfmtengine.runtime.locale_resolver import LocaleResolver
from msgfmtengine.runtime.plural_rules import select_plural_category

__all__ = ["LocaleContext"]


@dataclass(frozen=True, slots=True)
class LocaleContext:
    """Resolved locale view handed to formatter functions.

    Attributes:
        resolver: Per-kind fallback resolution for the requested locale
        data: Locale-data backend
    """

    resolver: LocaleResolver
    data: LocaleDataProvider

    @property
    def requested(self) -> str:
        """Locale identifier as requested by the host."""
        return self.resolver.requested

    def locale_for(self, kind: DataKind) -> str | None:
        """Resolved locale for a data kind, None if the chain has none."""
        return self.resolver.resolve(kind)

    def plural_category(self, value: object, *, ordinal: bool = False) -> PluralCategory:
        """CLDR category of value; "other" when no rules are available."""
        locale_id = self.locale_for(DataKind.ORDINAL if ordinal else DataKind.PLURAL)
        if locale_id is None:
            return PluralCategory.OTHER
        return select_plural_category(locale_id, value, self.data, ordinal=ordinal)

    def number_symbols(self) -> NumberSymbols:
        """Sign and exponent symbols of the number locale."""
        locale_id = self.locale_for(DataKind.NUMBER)
        if locale_id is None:
            return NumberSymbols()
        return self.data.number_symbols(locale_id)

    def transliterate(self, text: str) -> str:
        """Replace Latin digits with the locale's default numbering digits."""
        locale_id = self.locale_for(DataKind.NUMBER)
        if locale_id is None:
            return text
        digits = self.data.numbering_digits(locale_id)
        if digits == LATIN_DIGITS or len(digits) != len(LATIN_DIGITS):
            return text
        return text.translate(str.maketrans(LATIN_DIGITS, digits))
