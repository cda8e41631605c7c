"""Tests for diagnostics: codes, spans, templates, formatter and error types."""

from __future__ import annotations

import json
import sys

import pytest

from msgfmtengine import (
    InvalidLocaleError,
    MessageFormatError,
    MissingVariableError,
    PatternResolutionError,
    PatternSyntaxError,
    parse_pattern,
)
from msgfmtengine.core.depth_guard import DepthGuard, DepthLimitExceededError, depth_clamp
from msgfmtengine.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    ErrorCategory,
    ErrorTemplate,
    OutputFormat,
    SourceSpan,
)


class TestDiagnosticCodes:
    """Code numbering and categories."""

    def test_categories(self) -> None:
        """Pattern codes and locale codes are told apart."""
        assert DiagnosticCode.UNCLOSED_TAG.category is ErrorCategory.PATTERN
        assert DiagnosticCode.MISSING_VARIABLE.category is ErrorCategory.PATTERN
        assert DiagnosticCode.UNSUPPORTED_LOCALE.category is ErrorCategory.LOCALE

    def test_codes_unique(self) -> None:
        """Every code has its own number."""
        values = [code.value for code in DiagnosticCode]
        assert len(values) == len(set(values))


class TestSourceSpan:
    """Span validation."""

    @pytest.mark.parametrize(
        ("start", "end", "line", "column"),
        [(-1, 0, 1, 1), (5, 4, 1, 1), (0, 0, 0, 1), (0, 0, 1, 0)],
    )
    def test_invalid_spans(self, start: int, end: int, line: int, column: int) -> None:
        """Offsets are non-negative and ordered; lines and columns start at 1."""
        with pytest.raises(ValueError, match="SourceSpan"):
            SourceSpan(start=start, end=end, line=line, column=column)


class TestDiagnosticFormatter:
    """Rust, simple and JSON renderings."""

    @pytest.fixture
    def diagnostic(self) -> Diagnostic:
        return ErrorTemplate.unclosed_tag("b", SourceSpan(start=4, end=7, line=2, column=3))

    def test_rust_style(self, diagnostic: Diagnostic) -> None:
        """Header, location, tag and help lines."""
        lines = DiagnosticFormatter().format(diagnostic).splitlines()
        assert lines[0].startswith("error[UNCLOSED_TAG]: ")
        assert "  --> line 2, column 3" in lines
        assert "  = tag: b" in lines
        assert any(line.startswith("  = help: ") for line in lines)

    def test_simple(self, diagnostic: Diagnostic) -> None:
        """One line: code and message."""
        text = DiagnosticFormatter(output_format=OutputFormat.SIMPLE).format(diagnostic)
        assert text == f"UNCLOSED_TAG: {diagnostic.message}"

    def test_json(self, diagnostic: Diagnostic) -> None:
        """JSON carries code, category, location and context."""
        text = DiagnosticFormatter(output_format=OutputFormat.JSON).format(diagnostic)
        data = json.loads(text)
        assert data["code"] == "UNCLOSED_TAG"
        assert data["code_value"] == DiagnosticCode.UNCLOSED_TAG.value
        assert data["category"] == "pattern"
        assert (data["line"], data["column"]) == (2, 3)
        assert data["tag_name"] == "b"

    def test_sanitize_truncates(self) -> None:
        """Long messages are cut when sanitizing."""
        diagnostic = ErrorTemplate.missing_variable("x" * 300)
        formatter = DiagnosticFormatter(
            output_format=OutputFormat.SIMPLE, sanitize=True, max_content_length=20
        )
        text = formatter.format(diagnostic)
        assert text.endswith("...")
        assert len(text) == len("MISSING_VARIABLE: ") + 23

    def test_format_all(self, diagnostic: Diagnostic) -> None:
        """Diagnostics are separated by a blank line."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        assert formatter.format_all([diagnostic, diagnostic]).count("\n\n") == 1


class TestErrors:
    """Exception hierarchy and payloads."""

    def test_hierarchy(self) -> None:
        """Pattern and locale errors share the library base class."""
        assert issubclass(PatternSyntaxError, MessageFormatError)
        assert issubclass(MissingVariableError, PatternResolutionError)
        assert issubclass(DepthLimitExceededError, PatternResolutionError)
        assert issubclass(InvalidLocaleError, MessageFormatError)

    def test_syntax_error_payload(self) -> None:
        """Syntax errors expose their position and render the diagnostic."""
        with pytest.raises(PatternSyntaxError) as exc_info:
            parse_pattern("ok\n{n, plural, one {x}")
        error = exc_info.value
        assert error.line == 2
        assert error.column >= 1
        assert str(error).startswith("error[EXPECTED_CLOSING_BRACE]")
        assert f"--> line {error.line}, column {error.column}" in str(error)

    def test_plain_message(self) -> None:
        """Errors can be raised with plain text."""
        error = MessageFormatError("plain")
        assert str(error) == "plain"
        assert error.diagnostic is None

    def test_missing_variable_payload(self) -> None:
        """The variable name is attached."""
        error = MissingVariableError(ErrorTemplate.missing_variable("count"))
        assert error.variable_name == "count"
        assert "count" in str(error)


class TestDepthGuard:
    """Recursion guard used by the evaluator."""

    def test_limit(self) -> None:
        """Entering beyond max_depth raises; depth is restored on exit."""
        guard = DepthGuard(max_depth=2)
        with guard, guard:
            assert guard.depth == 2
            assert guard.is_exceeded()
            with pytest.raises(DepthLimitExceededError), guard:
                pass
            assert guard.depth == 2
        assert guard.depth == 0

    def test_depth_restored_after_error(self) -> None:
        """An exception inside the guarded block still decrements."""
        guard = DepthGuard(max_depth=3)
        with pytest.raises(KeyError), guard:
            raise KeyError("x")
        assert guard.depth == 0

    def test_clamp_to_recursion_limit(self, caplog: pytest.LogCaptureFixture) -> None:
        """Depths the interpreter stack cannot hold are clamped with a warning."""
        limit = sys.getrecursionlimit()
        assert depth_clamp(10) == 10
        clamped = depth_clamp(limit * 10)
        assert clamped == (limit - 50) // 4
        assert "Clamping" in caplog.text
