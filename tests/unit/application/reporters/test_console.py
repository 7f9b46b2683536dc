"""Tests for reporters/console.py."""

import io

import pytest

from policyspec.application.reporters.console import ConsoleConfig, ConsoleReporter
from policyspec.application.services import check_text
from tests.factories import SAMPLE_DOCUMENT, SCENARIO_PRACTICE

PLAIN = ConsoleConfig(width=200, color=False)

TWO_ERRORS = """\
DEFINE_STAGE(a) {
    [manifest] { scope = "repo", enforcement = "mandatory" }
    order = -1
}
DEFINE_PRACTICE(b) {
    [manifest] { scope = "repo", enforcement = "urgent" }
}
"""


class TestConsoleConfig:
    """Tests for ConsoleConfig FAIL-FIRST validation."""

    def test_defaults(self) -> None:
        config = ConsoleConfig()
        assert config.width == 120
        assert config.color is True
        assert config.max_errors is None

    def test_narrow_width_raises(self) -> None:
        with pytest.raises(ValueError, match="width must be >= 40"):
            ConsoleConfig(width=20)

    def test_max_errors_positive(self) -> None:
        with pytest.raises(ValueError, match="max_errors must be >= 1"):
            ConsoleConfig(max_errors=0)


class TestConsoleReporterRender:
    """Tests for ConsoleReporter.render()."""

    def test_passed_document(self) -> None:
        text = ConsoleReporter(config=PLAIN).render(check_text(SAMPLE_DOCUMENT, source="sample.spec"))
        assert "sample.spec" in text
        assert "Sections: 4  Blocks: 6" in text
        assert "Enforcement levels" in text
        assert "mandatory" in text
        assert "DEFINE_STAGE(lint)" in text
        assert "Result: PASSED" in text

    def test_enforcement_table_optional(self) -> None:
        config = ConsoleConfig(width=200, color=False, show_enforcement=False)
        text = ConsoleReporter(config=config).render(check_text(SAMPLE_DOCUMENT))
        assert "Enforcement levels" not in text

    def test_validation_errors(self) -> None:
        text = ConsoleReporter(config=PLAIN).render(check_text(TWO_ERRORS))
        assert "Validation errors (2)" in text
        assert "negative-value" in text
        assert "invalid-choice" in text
        assert "DEFINE_PRACTICE(b).manifest.enforcement" in text
        assert "3:13" in text
        assert "Result: FAILED" in text

    def test_max_errors(self) -> None:
        config = ConsoleConfig(width=200, color=False, max_errors=1)
        text = ConsoleReporter(config=config).render(check_text(TWO_ERRORS))
        assert "Validation errors (2)" in text
        assert "invalid-choice" not in text
        assert "1 more error(s) not shown" in text

    def test_fatal_error(self) -> None:
        text = ConsoleReporter(config=PLAIN).render(check_text('rule: "open', source="bad.spec"))
        assert "LexError at bad.spec:1:7" in text
        assert "unterminated string literal" in text
        assert "Result: FAILED" in text

    def test_markup_in_values_not_interpreted(self) -> None:
        text = ConsoleReporter(config=PLAIN).render(check_text("DEFINE_PRACTICE([bold]x) {}"))
        assert "section header [bold]" in text
        assert "Result: FAILED" in text

    def test_no_ansi_without_color(self) -> None:
        text = ConsoleReporter(config=PLAIN).render(check_text(SCENARIO_PRACTICE))
        assert "\x1b[" not in text

    def test_ansi_with_color(self) -> None:
        text = ConsoleReporter(config=ConsoleConfig(width=200)).render(check_text(SCENARIO_PRACTICE))
        assert "\x1b[" in text


class TestConsoleReporterReport:
    """Tests for ConsoleReporter.report()."""

    def test_writes_rendered_text(self) -> None:
        output = io.StringIO()
        reporter = ConsoleReporter(output, PLAIN)
        report = check_text(SCENARIO_PRACTICE)
        reporter.report(report)
        assert output.getvalue() == reporter.render(report)
