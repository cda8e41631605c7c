"""MessageFormat AST (Abstract Syntax Tree) node definitions.

A parsed pattern is a Message whose body is a tuple of nodes. Case bodies
and tag children are tuples of nodes too, so patterns nest freely:

    "You have {n, plural, =0 {no <b>items</b>} other {# items}}."

    Message(body=(
        Literal("You have "),
        Plural(argument="n", offset=0, ordinal=False, cases=(
            PluralCase(key="=0", exact=Decimal(0), body=(
                Literal("no "), Tag(name="b", children=(Literal("items"),)),
            )),
            PluralCase(key="other", exact=None, body=(Hash(), Literal(" items"))),
        )),
        Literal("."),
    ))

All nodes are frozen: evaluation never mutates the tree, so one AST can be
evaluated concurrently with different arguments.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import TypeIs

from msgfmtengine.syntax.skeleton import NumberFormatSpec

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Leaves
    "Literal",
    "Variable",
    "Hash",
    "FormatterCall",
    # Selection
    "Plural",
    "PluralCase",
    "Select",
    "SelectCase",
    # Markup
    "Tag",
    # Root
    "Message",
    # Type aliases
    "Node",
]


@dataclass(frozen=True, slots=True)
class Literal:
    """Verbatim text, escapes already applied."""

    text: str


@dataclass(frozen=True, slots=True)
class Variable:
    """Plain argument reference: {name}"""

    name: str


@dataclass(frozen=True, slots=True)
class Hash:
    """``#`` inside a plural or selectordinal case body.

    Renders the nearest enclosing plural's value minus its offset.
    """


@dataclass(frozen=True, slots=True)
class FormatterCall:
    """Typed placeholder: {argument, name[, style]}

    Attributes:
        name: Formatter name as written (dispatch is case-insensitive)
        argument: Argument name
        style: Raw style text after the second comma, stripped (None if absent)
        skeleton: Parsed number skeleton for number-like formatters whose
            style starts with ``::``
        end_argument: Second argument of range formatters
            ({start, numberRange, end[, ::skeleton]})
    """

    name: str
    argument: str
    style: str | None = None
    skeleton: NumberFormatSpec | None = None
    end_argument: str | None = None

    @property
    def key(self) -> str:
        """Lower-cased formatter name used for dispatch."""
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class PluralCase:
    """One ``matcher {body}`` pair of a plural or selectordinal.

    Attributes:
        key: Matcher as written: "=1", "one", "other"
        exact: Numeric value of an ``=N`` matcher, None for category matchers
        body: Case body
    """

    key: str
    exact: Decimal | None
    body: tuple["Node", ...]

    @property
    def is_exact(self) -> bool:
        """True for ``=N`` matchers."""
        return self.exact is not None


@dataclass(frozen=True, slots=True)
class Plural:
    """{argument, plural|selectordinal, [offset:N] cases...}"""

    argument: str
    offset: Decimal
    ordinal: bool
    cases: tuple[PluralCase, ...]

    @property
    def construct(self) -> str:
        """Pattern keyword, used in error messages."""
        return "selectordinal" if self.ordinal else "plural"

    @staticmethod
    def guard(node: object) -> TypeIs["Plural"]:
        """Type guard for Plural nodes."""
        return isinstance(node, Plural)


@dataclass(frozen=True, slots=True)
class SelectCase:
    """One ``key {body}`` pair of a select. Keys are case-sensitive."""

    key: str
    body: tuple["Node", ...]


@dataclass(frozen=True, slots=True)
class Select:
    """{argument, select, cases...}"""

    argument: str
    cases: tuple[SelectCase, ...]

    @property
    def construct(self) -> str:
        """Pattern keyword, used in error messages."""
        return "select"


@dataclass(frozen=True, slots=True)
class Tag:
    """Rich-text tag: <name attributes>children</name> or <name/>

    Attributes:
        name: Tag name as written (handler lookup is case-insensitive)
        children: Tag content
        attributes: Raw text between the name and '>', kept for HTML output
        self_closing: True for <name/>
    """

    name: str
    children: tuple["Node", ...] = ()
    attributes: str = ""
    self_closing: bool = False

    @staticmethod
    def guard(node: object) -> TypeIs["Tag"]:
        """Type guard for Tag nodes."""
        return isinstance(node, Tag)


@dataclass(frozen=True, slots=True)
class Message:
    """Root of a parsed pattern."""

    body: tuple["Node", ...]

    def argument_names(self) -> frozenset[str]:
        """Collect every argument name the pattern references.

        Walks the tree with an explicit stack.

        Example:
            >>> from msgfmtengine.syntax import parse
            >>> sorted(parse("{a} {n, plural, other {{b}}}").argument_names())
            ['a', 'b', 'n']
        """
        names: set[str] = set()
        stack: list[Node] = list(self.body)
        while stack:
            node = stack.pop()
            match node:
                case Variable(name=name):
                    names.add(name)
                case FormatterCall(argument=argument, end_argument=end_argument):
                    names.add(argument)
                    if end_argument is not None:
                        names.add(end_argument)
                case Plural(argument=argument, cases=cases):
                    names.add(argument)
                    for plural_case in cases:
                        stack.extend(plural_case.body)
                case Select(argument=argument, cases=select_cases):
                    names.add(argument)
                    for select_case in select_cases:
                        stack.extend(select_case.body)
                case Tag(children=children):
                    stack.extend(children)
        return frozenset(names)


type Node = Literal | Variable | Hash | FormatterCall | Plural | Select | Tag
