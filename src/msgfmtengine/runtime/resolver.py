"""Message resolver - evaluates a parsed pattern to a string.

Walks the AST once, depth first, appending each node's output:

    Literal        verbatim text
    Variable       argument in its plain rendering
    FormatterCall  built-in formatter, else registered custom formatter,
                   else the argument's plain string form
    Plural         exact match on the raw value, then CLDR category of
                   (value - offset), then 'other'
    Select         exact key match, then 'other'
    Hash           (value - offset) of the nearest enclosing plural
    Tag            handler(content) if registered, else the content (plain
                   mode) or the re-emitted markup (HTML mode)

Python 3.13+. Indirect dependency: Babel (via LocaleContext).

Thread Safety:
    Resolution state is passed explicitly via ResolutionContext, making the
    resolver fully reentrant. Each resolve() call creates its own context;
    the resolver itself and the AST are never mutated.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal

from msgfmtengine.constants import MAX_DEPTH
from msgfmtengine.core.depth_guard import DepthGuard
from msgfmtengine.diagnostics import (
    ErrorTemplate,
    MissingOptionError,
    MissingVariableError,
)
from msgfmtengine.runtime.functions import BUILTIN_FORMATTERS, format_plain_value
from msgfmtengine.runtime.locale_context import LocaleContext
from msgfmtengine.runtime.number_format import format_plain_number
from msgfmtengine.runtime.plural_operands import to_decimal
from msgfmtengine.runtime.registry import FormatterRegistry, TagRegistry
from msgfmtengine.runtime.value_types import plain_string, select_key
from msgfmtengine.syntax.ast import (
    FormatterCall,
    Hash,
    Literal,
    Message,
    Node,
    Plural,
    PluralCase,
    Select,
    SelectCase,
    Tag,
    Variable,
)

__all__ = ["MessageResolver", "ResolutionContext"]

_OTHER = "other"


@dataclass(slots=True)
class ResolutionContext:
    """Explicit per-call state for one resolve() call.

    Attributes:
        arguments: Argument values by name
        html: Re-emit unhandled tags as markup
        guard: Depth guard for case bodies and tag children
        hash_values: Stack of (value - offset) for enclosing plurals;
            the last entry is what '#' renders
    """

    arguments: Mapping[str, object]
    html: bool = False
    guard: DepthGuard = field(default_factory=DepthGuard)
    hash_values: list[object] = field(default_factory=list)


class MessageResolver:
    """Evaluates Message trees against arguments for one locale.

    Errors are raised, never embedded in output: a failed resolve() call
    produces no partial string.
    """

    __slots__ = ("_formatters", "_locale", "_max_depth", "_require_all_variables", "_tags")

    def __init__(
        self,
        locale: LocaleContext,
        *,
        formatters: FormatterRegistry | None = None,
        tags: TagRegistry | None = None,
        require_all_variables: bool = False,
        max_depth: int = MAX_DEPTH,
    ) -> None:
        """Initialize resolver.

        Args:
            locale: Resolved locale view of the formatter
            formatters: Custom formatters (keyword-only)
            tags: Tag handlers (keyword-only)
            require_all_variables: Missing arguments raise (keyword-only)
            max_depth: Evaluation nesting limit (keyword-only)
        """
        self._locale = locale
        self._formatters = formatters if formatters is not None else FormatterRegistry()
        self._tags = tags if tags is not None else TagRegistry()
        self._require_all_variables = require_all_variables
        self._max_depth = max_depth

    @property
    def locale(self) -> LocaleContext:
        """Locale context used for plural rules and formatting."""
        return self._locale

    def resolve(
        self,
        message: Message,
        arguments: Mapping[str, object] | None = None,
        *,
        html: bool = False,
    ) -> str:
        """Evaluate message to its final string.

        Args:
            message: Parsed pattern
            arguments: Argument values by name
            html: Keep unhandled tags as markup (keyword-only)

        Returns:
            Formatted string

        Raises:
            MissingOptionError: No case matched and there is no 'other' case
            MissingVariableError: Argument absent under require_all_variables
            DepthLimitExceededError: AST nests deeper than max_depth
        """
        context = ResolutionContext(
            arguments=arguments or {},
            html=html,
            guard=DepthGuard(max_depth=self._max_depth),
        )
        return self._resolve_nodes(message.body, context)

    def _resolve_nodes(self, nodes: Sequence[Node], context: ResolutionContext) -> str:
        """Resolve a node sequence by walking elements."""
        return "".join(self._resolve_node(node, context) for node in nodes)

    def _resolve_node(self, node: Node, context: ResolutionContext) -> str:
        """Resolve one node.

        Uses pattern matching (PEP 636); each case delegates to a specialized
        resolver method.
        """
        match node:
            case Literal(text=text):
                return text
            case Variable(name=name):
                return format_plain_value(self._lookup(name, context), self._locale)
            case FormatterCall():
                return self._resolve_formatter_call(node, context)
            case Plural():
                return self._resolve_plural(node, context)
            case Select():
                return self._resolve_select(node, context)
            case Hash():
                return self._resolve_hash(context)
            case Tag():
                return self._resolve_tag(node, context)
        msg = f"Unknown AST node: {type(node).__name__}"
        raise TypeError(msg)

    def _lookup(self, name: str, context: ResolutionContext) -> object:
        """Argument value; None if absent or null (raises under require_all_variables)."""
        value = context.arguments.get(name)
        if value is None and self._require_all_variables:
            raise MissingVariableError(ErrorTemplate.missing_variable(name))
        return value

    def _resolve_formatter_call(self, call: FormatterCall, context: ResolutionContext) -> str:
        value = self._lookup(call.argument, context)
        if call.end_argument is not None:
            value = (value, self._lookup(call.end_argument, context))

        builtin = BUILTIN_FORMATTERS.get(call.key)
        if builtin is not None:
            return builtin(value, call, self._locale)

        custom = self._formatters.get(call.name)
        if custom is not None:
            return custom(value, call.style, self._locale.requested)
        return plain_string(value)

    def _find_plural_case(
        self, node: Plural, number: Decimal, subject: object
    ) -> PluralCase | None:
        """Select a case: exact on the raw value, then category, then other."""
        for plural_case in node.cases:
            if plural_case.exact is not None and plural_case.exact == number:
                return plural_case

        category = self._locale.plural_category(subject, ordinal=node.ordinal)
        fallback = None
        for plural_case in node.cases:
            if plural_case.exact is not None:
                continue
            if plural_case.key == category:
                return plural_case
            if plural_case.key == _OTHER:
                fallback = plural_case
        return fallback

    def _resolve_plural(self, node: Plural, context: ResolutionContext) -> str:
        value = self._lookup(node.argument, context)
        number = to_decimal(value)
        if number is None:
            # Non-numeric arguments count as zero.
            number = Decimal(0)
            subject: object = number - node.offset
        elif node.offset:
            subject = number - node.offset
        else:
            # Keep the original value so "1.50" keeps its visible fraction digits.
            subject = value

        selected = self._find_plural_case(node, number, subject)
        if selected is None:
            raise MissingOptionError(ErrorTemplate.other_option_not_found(node.construct))

        context.hash_values.append(subject)
        try:
            with context.guard:
                return self._resolve_nodes(selected.body, context)
        finally:
            context.hash_values.pop()

    def _resolve_select(self, node: Select, context: ResolutionContext) -> str:
        key = select_key(self._lookup(node.argument, context))

        selected: SelectCase | None = None
        for select_case in node.cases:
            if select_case.key == key:
                selected = select_case
                break
            if select_case.key == _OTHER and selected is None:
                selected = select_case
        if selected is None:
            raise MissingOptionError(ErrorTemplate.other_option_not_found(node.construct))

        with context.guard:
            return self._resolve_nodes(selected.body, context)

    def _resolve_hash(self, context: ResolutionContext) -> str:
        if not context.hash_values:
            # Only reachable from hand-built trees; the parser emits Hash
            # inside plural bodies only.
            return "#"
        return format_plain_number(context.hash_values[-1], self._locale)

    def _resolve_tag(self, node: Tag, context: ResolutionContext) -> str:
        handler = self._tags.get(node.name)
        with context.guard:
            content = self._resolve_nodes(node.children, context)

        if handler is not None:
            return handler(content)
        if not context.html:
            return content

        opening = f"{node.name} {node.attributes}" if node.attributes else node.name
        if node.self_closing:
            return f"<{opening}/>"
        return f"<{opening}>{content}</{node.name}>"
