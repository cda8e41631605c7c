"""Grammar rules for the MessageFormat pattern parser.

This module provides all parsing rules for pattern constructs:
- Text (literal runs, quote escaping)
- Placeholders (variables, typed formatters, range formatters)
- Selection (plural, selectordinal, select and their cases)
- Markup (rich-text tags)

All grammar rules are co-located in a single module because placeholders,
case bodies and tags recurse into each other.

Lookahead Patterns:
    - `{` starts a placeholder
    - `}` ends a case body (literal at top level)
    - `<` followed by a letter starts a tag, `</` + letter closes one
    - `#` inside a plural or selectordinal body is a substitution point
    - `'` followed by `{`, `}`, `#`, `<` opens a quoted literal; `''` is a quote

Every rule takes an immutable Cursor and returns a ParseResult, or raises
PatternSyntaxError. There is no error recovery: a malformed pattern is
rejected as a whole.

Security:
    Placeholder and tag nesting is bounded by ParseContext.max_nesting_depth
    so adversarial input cannot exhaust the interpreter stack.
"""

from dataclasses import dataclass
from decimal import Decimal

from msgfmtengine.constants import MAX_DEPTH
from msgfmtengine.diagnostics import ErrorTemplate, PatternSyntaxError
from msgfmtengine.syntax.ast import (
    FormatterCall,
    Hash,
    Literal,
    Node,
    Plural,
    PluralCase,
    Select,
    SelectCase,
    Tag,
    Variable,
)
from msgfmtengine.syntax.cursor import Cursor, ParseResult
from msgfmtengine.syntax.parser.primitives import (
    is_tag_start,
    parse_decimal_literal,
    parse_identifier,
    parse_select_key,
    scan_style,
)
from msgfmtengine.syntax.skeleton import parse_skeleton

__all__ = ["ParseContext", "parse_nodes"]

_QUOTABLE = "{}#<"
_OFFSET_KEYWORD = "offset:"
_SKELETON_FORMATTERS = frozenset({"number", "numberrange"})


@dataclass(slots=True)
class ParseContext:
    """Explicit context for parsing operations.

    Attributes:
        max_nesting_depth: Maximum allowed nesting of placeholders and tags
        current_depth: Current nesting depth (0 = top level)
        in_body: Inside a case body, where '}' terminates text
        in_plural: Inside a plural/selectordinal body, where '#' substitutes
        ignore_tag: Treat '<' as plain text
    """

    max_nesting_depth: int = MAX_DEPTH
    current_depth: int = 0
    in_body: bool = False
    in_plural: bool = False
    ignore_tag: bool = False

    def is_depth_exceeded(self) -> bool:
        """Check if maximum nesting depth has been reached."""
        return self.current_depth >= self.max_nesting_depth

    def enter_body(self, *, plural: bool) -> "ParseContext":
        """Create context for a case body.

        A select body keeps the enclosing plural scope, so '#' inside
        {n, plural, other {{g, select, other {#}}}} still refers to n.
        """
        return ParseContext(
            max_nesting_depth=self.max_nesting_depth,
            current_depth=self.current_depth + 1,
            in_body=True,
            in_plural=plural or self.in_plural,
            ignore_tag=self.ignore_tag,
        )

    def enter_tag(self) -> "ParseContext":
        """Create context for tag children."""
        return ParseContext(
            max_nesting_depth=self.max_nesting_depth,
            current_depth=self.current_depth + 1,
            in_body=self.in_body,
            in_plural=self.in_plural,
            ignore_tag=self.ignore_tag,
        )


# =============================================================================
# Node Sequences
# =============================================================================


def parse_nodes(
    cursor: Cursor,
    context: ParseContext,
    open_tag: str | None = None,
) -> ParseResult[tuple[Node, ...]]:
    """Parse a node sequence: top-level pattern, case body, or tag content.

    Stops at end of input, at '}' inside a case body, or at a closing tag
    when inside a tag. The caller decides whether the stop is legal.

    Args:
        cursor: Current position in source
        context: Parse context for depth tracking and lexical mode
        open_tag: Name of the innermost open tag, if any

    Returns:
        ParseResult with the nodes, cursor at the stop position

    Raises:
        PatternSyntaxError: On any malformed construct
    """
    nodes: list[Node] = []
    text: list[str] = []

    def flush() -> None:
        if text:
            nodes.append(Literal("".join(text)))
            text.clear()

    while not cursor.is_eof:
        ch = cursor.current

        if ch == "{":
            flush()
            placeholder = parse_placeholder(cursor, context)
            nodes.append(placeholder.value)
            cursor = placeholder.cursor
            continue

        if ch == "}" and context.in_body:
            break

        if ch == "<" and not context.ignore_tag and is_tag_start(cursor):
            if cursor.peek(1) == "/":
                if open_tag is None:
                    name = parse_identifier(cursor.advance(2))
                    tag_name = name.value if name else ""
                    raise PatternSyntaxError(
                        ErrorTemplate.unexpected_closing_tag(tag_name, cursor.span())
                    )
                break
            flush()
            tag = parse_tag(cursor, context)
            nodes.append(tag.value)
            cursor = tag.cursor
            continue

        if ch == "#" and context.in_plural:
            flush()
            nodes.append(Hash())
            cursor = cursor.advance()
            continue

        literal = parse_literal(cursor, context)
        text.append(literal.value)
        cursor = literal.cursor

    flush()
    return ParseResult(tuple(nodes), cursor)


# =============================================================================
# Text
# =============================================================================


def _is_text_stop(cursor: Cursor, context: ParseContext) -> bool:
    ch = cursor.current
    if ch == "{":
        return True
    if ch == "}":
        return context.in_body
    if ch == "#":
        return context.in_plural
    if ch == "<":
        return not context.ignore_tag and is_tag_start(cursor)
    return False


def parse_literal(cursor: Cursor, context: ParseContext) -> ParseResult[str]:
    """Parse literal text up to the next structural character.

    Quote rules:
        ''          -> '
        '{...'      -> {... verbatim (likewise for '}', '#', '<')
        ' + other   -> ' (a lone apostrophe is just text)

    Inside a quoted region '' is a literal quote and a lone ' closes it.
    An unterminated region runs to end of input.
    """
    parts: list[str] = []
    while not cursor.is_eof:
        ch = cursor.current
        if ch == "'":
            quoted = _parse_quote(cursor)
            parts.append(quoted.value)
            cursor = quoted.cursor
            continue
        if _is_text_stop(cursor, context):
            break
        parts.append(ch)
        cursor = cursor.advance()
    return ParseResult("".join(parts), cursor)


def _parse_quote(cursor: Cursor) -> ParseResult[str]:
    nxt = cursor.peek(1)
    if nxt == "'":
        return ParseResult("'", cursor.advance(2))
    if nxt is None or nxt not in _QUOTABLE:
        return ParseResult("'", cursor.advance())

    parts: list[str] = []
    cursor = cursor.advance()
    while not cursor.is_eof:
        ch = cursor.current
        if ch == "'":
            if cursor.peek(1) == "'":
                parts.append("'")
                cursor = cursor.advance(2)
                continue
            return ParseResult("".join(parts), cursor.advance())
        parts.append(ch)
        cursor = cursor.advance()
    return ParseResult("".join(parts), cursor)


# =============================================================================
# Placeholders
# =============================================================================


def parse_placeholder(cursor: Cursor, context: ParseContext) -> ParseResult[Node]:
    """Parse placeholder: { name [, type [, style]] }

    Examples:
        {name}                        -> Variable
        {n, number, ::percent}        -> FormatterCall with skeleton
        {n, plural, one {#} other {}} -> Plural
        {a, numberRange, b}           -> FormatterCall with end_argument

    Args:
        cursor: Position of '{'
        context: Parse context for depth tracking
    """
    origin = cursor
    if context.is_depth_exceeded():
        raise PatternSyntaxError(
            ErrorTemplate.nesting_depth_exceeded(context.max_nesting_depth, origin.span())
        )

    cursor = cursor.advance().skip_whitespace()
    argument = parse_identifier(cursor)
    if argument is None:
        raise PatternSyntaxError(ErrorTemplate.expected_argument_name(cursor.span()))
    cursor = argument.cursor.skip_whitespace()

    if (closed := cursor.expect("}")) is not None:
        return ParseResult(Variable(argument.value), closed)
    if cursor.expect(",") is None:
        raise PatternSyntaxError(ErrorTemplate.expected_closing_brace(origin.span()))

    cursor = cursor.advance().skip_whitespace()
    formatter = parse_identifier(cursor)
    if formatter is None:
        raise PatternSyntaxError(ErrorTemplate.expected_formatter_name(cursor.span()))
    cursor = formatter.cursor.skip_whitespace()

    node: ParseResult[Node]
    match formatter.value.lower():
        case "plural":
            node = parse_plural(cursor, argument.value, context, origin, ordinal=False)
        case "selectordinal":
            node = parse_plural(cursor, argument.value, context, origin, ordinal=True)
        case "select":
            node = parse_select(cursor, argument.value, context, origin)
        case "numberrange" | "daterange":
            node = parse_range_call(cursor, argument.value, formatter.value, origin)
        case _:
            node = parse_formatter_call(cursor, argument.value, formatter.value, origin)

    closed = node.cursor.skip_whitespace().expect("}")
    if closed is None:
        raise PatternSyntaxError(ErrorTemplate.expected_closing_brace(origin.span()))
    return ParseResult(node.value, closed)


def _parse_style(cursor: Cursor, origin: Cursor) -> ParseResult[str | None]:
    """Parse ', style' up to (not including) the closing brace."""
    after_comma = cursor.expect(",")
    if after_comma is None:
        return ParseResult(None, cursor)
    end = scan_style(after_comma)
    if end is None:
        raise PatternSyntaxError(ErrorTemplate.expected_closing_brace(origin.span()))
    style = after_comma.slice_to(end).strip()
    return ParseResult(style or None, Cursor(cursor.source, end))


def parse_formatter_call(
    cursor: Cursor, argument: str, name: str, origin: Cursor
) -> ParseResult[Node]:
    """Parse the style slot of a typed placeholder.

    Number styles beginning with '::' are parsed as skeletons here; date and
    time skeletons stay raw and are resolved against locale data when the
    placeholder is evaluated.
    """
    style = _parse_style(cursor, origin)
    skeleton = None
    if style.value is not None and style.value.startswith("::"):
        if name.lower() in _SKELETON_FORMATTERS:
            skeleton = parse_skeleton(style.value)
    call = FormatterCall(name=name, argument=argument, style=style.value, skeleton=skeleton)
    return ParseResult(call, style.cursor)


def parse_range_call(
    cursor: Cursor, argument: str, name: str, origin: Cursor
) -> ParseResult[Node]:
    """Parse {start, numberRange|dateRange, end[, style]}."""
    after_comma = cursor.expect(",")
    if after_comma is None:
        raise PatternSyntaxError(ErrorTemplate.expected_range_end(name, cursor.span()))
    cursor = after_comma.skip_whitespace()
    end_argument = parse_identifier(cursor)
    if end_argument is None:
        raise PatternSyntaxError(ErrorTemplate.expected_range_end(name, cursor.span()))
    style = _parse_style(end_argument.cursor.skip_whitespace(), origin)
    skeleton = None
    if style.value is not None and style.value.startswith("::"):
        if name.lower() in _SKELETON_FORMATTERS:
            skeleton = parse_skeleton(style.value)
    call = FormatterCall(
        name=name,
        argument=argument,
        style=style.value,
        skeleton=skeleton,
        end_argument=end_argument.value,
    )
    return ParseResult(call, style.cursor)


# =============================================================================
# Selection
# =============================================================================


def _expect_cases_start(cursor: Cursor, construct: str, origin: Cursor) -> Cursor:
    """Consume the ',' that introduces a case list."""
    after_comma = cursor.expect(",")
    if after_comma is not None:
        return after_comma.skip_whitespace()
    if not cursor.is_eof and cursor.current == "}":
        raise PatternSyntaxError(ErrorTemplate.empty_cases(construct, origin.span()))
    raise PatternSyntaxError(ErrorTemplate.expected_closing_brace(origin.span()))


def _parse_case_body(
    cursor: Cursor, key: str, context: ParseContext, *, plural: bool
) -> ParseResult[tuple[Node, ...]]:
    """Parse '{' body '}' following a case key."""
    cursor = cursor.skip_whitespace()
    body_open = cursor
    after_brace = cursor.expect("{")
    if after_brace is None:
        raise PatternSyntaxError(ErrorTemplate.expected_case_body(key, cursor.span()))
    if context.is_depth_exceeded():
        raise PatternSyntaxError(
            ErrorTemplate.nesting_depth_exceeded(context.max_nesting_depth, body_open.span())
        )
    body = parse_nodes(after_brace, context.enter_body(plural=plural))
    closed = body.cursor.expect("}")
    if closed is None:
        raise PatternSyntaxError(ErrorTemplate.expected_closing_brace(body_open.span()))
    return ParseResult(body.value, closed)


def parse_plural(
    cursor: Cursor,
    argument: str,
    context: ParseContext,
    origin: Cursor,
    *,
    ordinal: bool,
) -> ParseResult[Node]:
    """Parse plural/selectordinal cases: [offset:N] (=N|category) {body} ...

    Examples:
        {n, plural, =0 {none} one {# item} other {# items}}
        {n, plural, offset:1 =0 {nobody} =1 {{who}} other {{who} and # others}}
        {place, selectordinal, one {#st} two {#nd} few {#rd} other {#th}}
    """
    construct = "selectordinal" if ordinal else "plural"
    cursor = _expect_cases_start(cursor, construct, origin)

    offset_value = Decimal(0)
    if cursor.source.startswith(_OFFSET_KEYWORD, cursor.pos):
        offset_cursor = cursor.advance(len(_OFFSET_KEYWORD)).skip_whitespace()
        offset = parse_decimal_literal(offset_cursor)
        if offset is None:
            bad = parse_select_key(offset_cursor)
            raise PatternSyntaxError(
                ErrorTemplate.invalid_offset(bad.value if bad else "", offset_cursor.span())
            )
        offset_value = offset.value
        cursor = offset.cursor.skip_whitespace()

    cases: list[PluralCase] = []
    while not cursor.is_eof and cursor.current != "}":
        key_cursor = cursor
        if cursor.current == "=":
            literal = parse_decimal_literal(cursor.advance())
            if literal is None:
                raise PatternSyntaxError(ErrorTemplate.expected_case_key(construct, cursor.span()))
            key = key_cursor.slice_to(literal.cursor.pos)
            exact = literal.value
            cursor = literal.cursor
        else:
            category = parse_identifier(cursor)
            if category is None:
                raise PatternSyntaxError(ErrorTemplate.expected_case_key(construct, cursor.span()))
            key = category.value
            exact = None
            cursor = category.cursor

        body = _parse_case_body(cursor, key, context, plural=True)
        cases.append(PluralCase(key=key, exact=exact, body=body.value))
        cursor = body.cursor.skip_whitespace()

    if not cases:
        raise PatternSyntaxError(ErrorTemplate.empty_cases(construct, origin.span()))

    node = Plural(argument=argument, offset=offset_value, ordinal=ordinal, cases=tuple(cases))
    return ParseResult(node, cursor)


def parse_select(
    cursor: Cursor, argument: str, context: ParseContext, origin: Cursor
) -> ParseResult[Node]:
    """Parse select cases: key {body} ...

    Keys are case-sensitive runs of non-whitespace, non-brace characters.
    """
    cursor = _expect_cases_start(cursor, "select", origin)

    cases: list[SelectCase] = []
    while not cursor.is_eof and cursor.current != "}":
        key = parse_select_key(cursor)
        if key is None:
            raise PatternSyntaxError(ErrorTemplate.expected_case_key("select", cursor.span()))
        body = _parse_case_body(key.cursor, key.value, context, plural=False)
        cases.append(SelectCase(key=key.value, body=body.value))
        cursor = body.cursor.skip_whitespace()

    if not cases:
        raise PatternSyntaxError(ErrorTemplate.empty_cases("select", origin.span()))

    return ParseResult(Select(argument=argument, cases=tuple(cases)), cursor)


# =============================================================================
# Markup
# =============================================================================


def _scan_attributes(cursor: Cursor) -> Cursor:
    """Advance over raw tag attributes up to '>' or '/>'; quoted values may hold either."""
    quote: str | None = None
    while not cursor.is_eof:
        ch = cursor.current
        if quote is not None:
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch == ">" or (ch == "/" and cursor.peek(1) == ">"):
            break
        cursor = cursor.advance()
    return cursor


def parse_tag(cursor: Cursor, context: ParseContext) -> ParseResult[Node]:
    """Parse a tag: <name [attributes]>children</name> or <name [attributes]/>

    Closing tags match case-insensitively against the innermost open tag.

    Args:
        cursor: Position of '<'
        context: Parse context for depth tracking
    """
    origin = cursor
    if context.is_depth_exceeded():
        raise PatternSyntaxError(
            ErrorTemplate.nesting_depth_exceeded(context.max_nesting_depth, origin.span())
        )

    name_result = parse_identifier(cursor.advance())
    if name_result is None:  # pragma: no cover - is_tag_start guarantees a letter
        raise PatternSyntaxError(ErrorTemplate.expected_tag_name(cursor.advance().span()))
    name = name_result.value
    cursor = name_result.cursor

    attributes = ""
    if not cursor.is_eof and cursor.current.isspace():
        attributes_end = _scan_attributes(cursor)
        attributes = cursor.slice_to(attributes_end.pos).strip()
        cursor = attributes_end

    if cursor.peek() == "/" and cursor.peek(1) == ">":
        tag = Tag(name=name, attributes=attributes, self_closing=True)
        return ParseResult(tag, cursor.advance(2))

    after_open = cursor.expect(">")
    if after_open is None:
        raise PatternSyntaxError(ErrorTemplate.expected_tag_end(name, cursor.span()))

    children = parse_nodes(after_open, context.enter_tag(), open_tag=name)
    cursor = children.cursor
    if cursor.is_eof or cursor.current != "<":
        raise PatternSyntaxError(ErrorTemplate.unclosed_tag(name, origin.span()))

    close_origin = cursor
    close_name = parse_identifier(cursor.advance(2))
    if close_name is None:
        raise PatternSyntaxError(ErrorTemplate.expected_tag_name(cursor.advance(2).span()))
    if close_name.value.lower() != name.lower():
        raise PatternSyntaxError(
            ErrorTemplate.mismatched_tag(name, close_name.value, close_origin.span())
        )

    cursor = close_name.cursor.skip_whitespace()
    after_close = cursor.expect(">")
    if after_close is None:
        raise PatternSyntaxError(ErrorTemplate.expected_tag_end(close_name.value, cursor.span()))

    tag = Tag(name=name, children=children.value, attributes=attributes)
    return ParseResult(tag, after_close)
