"""Tests for reporters/plain_text.py."""

import io

import pytest

from policyspec.application.reporters.plain_text import PlainTextReporter
from policyspec.application.services import check_text
from tests.factories import SAMPLE_DOCUMENT, SCENARIO_PRACTICE


def _render(text: str, source: str | None = "policy.spec") -> str:
    output = io.StringIO()
    PlainTextReporter(output).report(check_text(text, source=source))
    return output.getvalue()


class TestPlainTextReporter:
    """Tests for PlainTextReporter."""

    def test_reports_passed_result(self) -> None:
        """Reports PASSED with document summary."""
        text = _render(SAMPLE_DOCUMENT)
        assert "Policy Document Check: policy.spec" in text
        assert "Sections: 4" in text
        assert "Blocks: 6" in text
        assert "Errors: 0" in text
        assert "Status: PASS" in text
        assert "Result: PASSED" in text

    def test_reports_failed_result(self) -> None:
        """Reports FAILED with every validation error."""
        text = _render(SCENARIO_PRACTICE.replace("mandatory", "urgent"))
        assert "Errors: 1" in text
        assert "invalid-choice: 1" in text
        assert "Validation errors (1):" in text
        assert "1. [invalid-choice] DEFINE_PRACTICE(x).manifest.enforcement" in text
        assert "'urgent' is not one of: mandatory, recommended, warning" in text
        assert "at policy.spec:1:" in text
        assert "Result: FAILED" in text

    def test_reports_fatal_error(self) -> None:
        """Reports lex errors with their location."""
        text = _render('DEFINE_PRACTICE(x) {\n  rule: "unterminated\n}')
        assert "LexError: unterminated string literal" in text
        assert "at policy.spec:2:9" in text
        assert "Validation errors" not in text
        assert "Result: FAILED" in text

    def test_anonymous_source(self) -> None:
        assert "Policy Document Check: <string>" in _render(SCENARIO_PRACTICE, source=None)

    def test_defaults_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        PlainTextReporter().report(check_text(SCENARIO_PRACTICE))
        assert "Result: PASSED" in capsys.readouterr().out
