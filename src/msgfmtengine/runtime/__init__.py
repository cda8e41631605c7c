"""MessageFormat runtime package.

Provides locale resolution, plural selection, built-in formatters, message
evaluation and the MessageFormatter API. Depends on the syntax package for
parsing.

Python 3.13+.
"""

from .cache import PatternCache
from .flatten import flatten_arguments, to_mapping
from .formatter import MessageFormatter
from .locale_context import LocaleContext
from .locale_data import BabelLocaleData, LocaleDataProvider
from .locale_resolver import LocaleResolver, build_locale_chain, resolve_locale
from .options import FormatterOptions
from .plural_operands import PluralOperands, operands_of
from .plural_rules import select_plural_category
from .provider import MessageFormatterProvider
from .registry import FormatterRegistry, TagRegistry
from .resolver import MessageResolver, ResolutionContext

__all__ = [
    "BabelLocaleData",
    "FormatterOptions",
    "FormatterRegistry",
    "LocaleContext",
    "LocaleDataProvider",
    "LocaleResolver",
    "MessageFormatter",
    "MessageFormatterProvider",
    "MessageResolver",
    "PatternCache",
    "PluralOperands",
    "ResolutionContext",
    "TagRegistry",
    "build_locale_chain",
    "flatten_arguments",
    "operands_of",
    "resolve_locale",
    "select_plural_category",
    "to_mapping",
]
