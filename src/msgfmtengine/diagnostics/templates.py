"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable

from .codes import Diagnostic, DiagnosticCode, SourceSpan

__all__ = ["ErrorTemplate"]

_MAX_LISTED_LOCALES = 20


def _at(line: int, column: int) -> str:
    return f"at line {line}, column {column}"


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    Parser templates take the span of the offending position so the message
    and the structured location can never disagree.
    """

    # Syntax errors

    @staticmethod
    def expected_closing_brace(span: SourceSpan) -> Diagnostic:
        """Placeholder or case body reached junk or end of input before '}'.

        Args:
            span: Location of the '{' that was never closed

        Returns:
            Diagnostic for EXPECTED_CLOSING_BRACE
        """
        msg = f"Expected closing brace for '{{' {_at(span.line, span.column)}"
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_CLOSING_BRACE,
            message=msg,
            span=span,
            hint="Close the placeholder with '}' or escape a literal brace as '{'",
        )

    @staticmethod
    def expected_argument_name(span: SourceSpan) -> Diagnostic:
        """Placeholder has no argument name after '{'."""
        msg = f"Expected argument name {_at(span.line, span.column)}"
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_ARGUMENT_NAME,
            message=msg,
            span=span,
            hint="Argument names use letters, digits, '_', '-' and '.'",
        )

    @staticmethod
    def expected_formatter_name(span: SourceSpan) -> Diagnostic:
        """Placeholder has a ',' that is not followed by a formatter name."""
        msg = f"Expected formatter name {_at(span.line, span.column)}"
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_FORMATTER_NAME,
            message=msg,
            span=span,
            hint="Use e.g. {count, number} or {count, plural, ...}",
        )

    @staticmethod
    def expected_case_body(key: str, span: SourceSpan) -> Diagnostic:
        """Case key not immediately followed by '{'.

        Args:
            key: The case key that lacks a body
            span: Location where '{' was expected

        Returns:
            Diagnostic for EXPECTED_CASE_BODY
        """
        msg = f"Expected '{{' after key '{key}' {_at(span.line, span.column)}"
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_CASE_BODY,
            message=msg,
            span=span,
            hint=f"Write the case as {key} {{...}}",
        )

    @staticmethod
    def expected_case_key(construct: str, span: SourceSpan) -> Diagnostic:
        """Something other than a case key appeared inside a case list."""
        msg = f"Expected case key in {construct} {_at(span.line, span.column)}"
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_CASE_KEY,
            message=msg,
            span=span,
            construct=construct,
        )

    @staticmethod
    def empty_cases(construct: str, span: SourceSpan) -> Diagnostic:
        """Plural/select/selectordinal with no cases at all."""
        msg = f"'{construct}' element requires cases {_at(span.line, span.column)}"
        return Diagnostic(
            code=DiagnosticCode.EMPTY_CASES,
            message=msg,
            span=span,
            hint="Add at least an 'other {...}' case",
            construct=construct,
        )

    @staticmethod
    def invalid_offset(text: str, span: SourceSpan) -> Diagnostic:
        """'offset:' not followed by an integer."""
        msg = f"Invalid plural offset '{text}' {_at(span.line, span.column)}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_OFFSET,
            message=msg,
            span=span,
            hint="Offsets are integers, e.g. offset:1",
            construct="plural",
        )

    @staticmethod
    def expected_range_end(formatter: str, span: SourceSpan) -> Diagnostic:
        """Range formatter without its end argument."""
        msg = f"Expected end argument for {formatter} {_at(span.line, span.column)}"
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_RANGE_END,
            message=msg,
            span=span,
            hint=f"Use {{start, {formatter}, end}}",
        )

    @staticmethod
    def expected_tag_name(span: SourceSpan) -> Diagnostic:
        """'<' or '</' not followed by a tag name."""
        msg = f"Expected tag name {_at(span.line, span.column)}"
        return Diagnostic(code=DiagnosticCode.EXPECTED_TAG_NAME, message=msg, span=span)

    @staticmethod
    def expected_tag_end(tag_name: str, span: SourceSpan) -> Diagnostic:
        """Tag name not followed by '>'."""
        msg = f"Expected '>' after tag name '{tag_name}' {_at(span.line, span.column)}"
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_TAG_END,
            message=msg,
            span=span,
            tag_name=tag_name,
        )

    @staticmethod
    def unclosed_tag(tag_name: str, span: SourceSpan) -> Diagnostic:
        """End of input (or of the enclosing body) reached inside an open tag.

        Args:
            tag_name: Name of the open tag
            span: Location of the opening tag

        Returns:
            Diagnostic for UNCLOSED_TAG
        """
        msg = f"Unclosed tag '<{tag_name}>' starting {_at(span.line, span.column)}"
        return Diagnostic(
            code=DiagnosticCode.UNCLOSED_TAG,
            message=msg,
            span=span,
            hint=f"Add a matching '</{tag_name}>'",
            tag_name=tag_name,
        )

    @staticmethod
    def mismatched_tag(expected: str, found: str, span: SourceSpan) -> Diagnostic:
        """Closing tag does not match the innermost open tag."""
        msg = (
            f"Mismatched closing tag '</{found}>' {_at(span.line, span.column)}, "
            f"expected '</{expected}>'"
        )
        return Diagnostic(
            code=DiagnosticCode.MISMATCHED_TAG,
            message=msg,
            span=span,
            hint="Close tags in the reverse order they were opened",
            tag_name=found,
        )

    @staticmethod
    def unexpected_closing_tag(tag_name: str, span: SourceSpan) -> Diagnostic:
        """Closing tag with no open tag."""
        msg = f"Unexpected closing tag '</{tag_name}>' {_at(span.line, span.column)}"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_CLOSING_TAG,
            message=msg,
            span=span,
            tag_name=tag_name,
        )

    @staticmethod
    def nesting_depth_exceeded(max_depth: int, span: SourceSpan) -> Diagnostic:
        """Pattern nests placeholders or tags deeper than the configured limit."""
        msg = f"Nesting depth limit ({max_depth}) exceeded {_at(span.line, span.column)}"
        return Diagnostic(
            code=DiagnosticCode.NESTING_DEPTH_EXCEEDED,
            message=msg,
            span=span,
            hint="Flatten the pattern or raise max_nesting_depth",
        )

    # Resolution errors

    @staticmethod
    def other_option_not_found(construct: str) -> Diagnostic:
        """No case matched and the construct has no 'other' case.

        Args:
            construct: plural, select or selectordinal

        Returns:
            Diagnostic for OTHER_OPTION_NOT_FOUND
        """
        msg = f"'other' option not found in {construct} pattern."
        return Diagnostic(
            code=DiagnosticCode.OTHER_OPTION_NOT_FOUND,
            message=msg,
            hint="Add an 'other {...}' case",
            construct=construct,
        )

    @staticmethod
    def missing_variable(variable_name: str) -> Diagnostic:
        """Strict mode: argument absent from the mapping or None."""
        msg = f"Missing required variable '{variable_name}'."
        return Diagnostic(
            code=DiagnosticCode.MISSING_VARIABLE,
            message=msg,
            hint=f"Pass '{variable_name}' in the arguments mapping",
            variable_name=variable_name,
        )

    @staticmethod
    def max_depth_exceeded(max_depth: int) -> Diagnostic:
        """Evaluation recursed deeper than the configured limit."""
        msg = f"Maximum evaluation depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=msg,
            hint="The AST nests deeper than the formatter allows",
        )

    # Locale errors

    @staticmethod
    def unsupported_locale(locale: str, available: Iterable[str]) -> Diagnostic:
        """No locale in the fallback chain has data.

        Args:
            locale: Requested locale
            available: Locales the backend reports (may be empty)

        Returns:
            Diagnostic for UNSUPPORTED_LOCALE
        """
        names = sorted(available)
        listing = ", ".join(names[:_MAX_LISTED_LOCALES]) or "none"
        if len(names) > _MAX_LISTED_LOCALES:
            listing += f", ... ({len(names)} total)"
        msg = f"The locale '{locale}' is not supported. Available locales: {listing}"
        return Diagnostic(
            code=DiagnosticCode.UNSUPPORTED_LOCALE,
            message=msg,
            hint="Configure a fallback locale the locale data backend provides",
            locale=locale,
        )
