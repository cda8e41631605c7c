"""CLDR plural category selection.

Delegates the rule formulas to the locale-data backend (Babel's CLDR
plural_form and ordinal_form by default) and guarantees a valid category
name back.

Python 3.13+.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html
"""

from msgfmtengine.enums import PluralCategory
from msgfmtengine.runtime.locale_data import LocaleDataProvider
from msgfmtengine.runtime.plural_operands import PluralOperands, operands_of

__all__ = ["select_plural_category"]

_CATEGORIES = frozenset(PluralCategory)


def select_plural_category(
    locale_id: str,
    value: PluralOperands | object,
    locale_data: LocaleDataProvider,
    *,
    ordinal: bool = False,
) -> PluralCategory:
    """Select the CLDR plural category of a value.

    Args:
        locale_id: Resolved locale identifier
        value: PluralOperands, or a raw argument value to derive them from
        locale_data: Backend supplying the rule formulas
        ordinal: Use ordinal rules (selectordinal) instead of cardinal

    Returns:
        zero, one, two, few, many or other. Anything else the backend
        returns is treated as "other".

    Examples:
        >>> from msgfmtengine.runtime.locale_data import BabelLocaleData
        >>> data = BabelLocaleData()
        >>> select_plural_category("en", 1, data)
        <PluralCategory.ONE: 'one'>
        >>> select_plural_category("en", "1.0", data)
        <PluralCategory.OTHER: 'other'>
        >>> select_plural_category("en", 2, data, ordinal=True)
        <PluralCategory.TWO: 'two'>
        >>> select_plural_category("ru", 5, data)
        <PluralCategory.MANY: 'many'>
    """
    operands = value if isinstance(value, PluralOperands) else operands_of(value)
    category = locale_data.plural_category(locale_id, operands, ordinal=ordinal)
    if category in _CATEGORIES:
        return PluralCategory(category)
    return PluralCategory.OTHER
