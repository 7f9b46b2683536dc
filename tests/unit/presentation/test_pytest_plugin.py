"""Tests for presentation/pytest_plugin."""

from __future__ import annotations

import pytest

from policyspec.presentation import pytest_plugin
from policyspec.presentation.pytest_plugin.fixtures import DEFAULT_DOCUMENT
from tests.factories import SAMPLE_DOCUMENT, SCENARIO_PRACTICE


class _RecordingParser:
    def __init__(self) -> None:
        self.ini: dict[str, dict[str, object]] = {}

    def addini(self, name: str, **kwargs: object) -> None:
        self.ini[name] = kwargs


class _RecordingConfig:
    def __init__(self) -> None:
        self.lines: list[tuple[str, str]] = []

    def addinivalue_line(self, name: str, line: str) -> None:
        self.lines.append((name, line))


class TestHooks:
    """Tests for plugin hook registration."""

    def test_default_document_name(self) -> None:
        assert DEFAULT_DOCUMENT == "POLICY.spec"

    def test_registers_ini_option(self) -> None:
        parser = _RecordingParser()
        pytest_plugin.pytest_addoption(parser)  # type: ignore[arg-type]
        assert parser.ini["policy_document"]["default"] == "POLICY.spec"

    def test_registers_marker(self) -> None:
        config = _RecordingConfig()
        pytest_plugin.pytest_configure(config)  # type: ignore[arg-type]
        assert config.lines == [("markers", "policy: mark test as policy document test")]

    def test_exports_fixtures(self) -> None:
        assert set(pytest_plugin.__all__) == {"policy_config", "policy_document", "policy_report"}


class TestFixtures:
    """Tests for the fixtures inside a real pytest run."""

    def test_policy_document_loads(self, pytester: pytest.Pytester) -> None:
        pytester.makefile(".spec", POLICY=SAMPLE_DOCUMENT)
        pytester.makepyfile(
            """
            from policyspec.domain.model.enums import BlockKind, Enforcement

            def test_stage_is_mandatory(policy_document):
                assert policy_document.enforcement_of(BlockKind.STAGE, "lint") is Enforcement.MANDATORY
            """
        )
        result = pytester.runpytest("-q")
        result.assert_outcomes(passed=1)

    def test_invalid_document_fails_fixture(self, pytester: pytest.Pytester) -> None:
        pytester.makefile(".spec", POLICY=SCENARIO_PRACTICE.replace("mandatory", "urgent"))
        pytester.makepyfile(
            """
            def test_report(policy_report):
                assert [e.code for e in policy_report.errors] == ["invalid-choice"]

            def test_document(policy_document):
                pass
            """
        )
        result = pytester.runpytest("-q")
        result.assert_outcomes(passed=1, errors=1)
        result.stdout.fnmatch_lines(["*DocumentValidationError*"])

    def test_missing_document(self, pytester: pytest.Pytester) -> None:
        pytester.makepyfile(
            """
            def test_document(policy_document):
                pass
            """
        )
        result = pytester.runpytest("-q")
        result.assert_outcomes(errors=1)
        result.stdout.fnmatch_lines(["*policy_document*does not exist*"])

    def test_ini_option_selects_document(self, pytester: pytest.Pytester) -> None:
        pytester.makeini("[pytest]\npolicy_document = docs/team.spec\n")
        pytester.mkdir("docs")
        (pytester.path / "docs" / "team.spec").write_text(SCENARIO_PRACTICE, encoding="utf-8")
        pytester.makepyfile(
            """
            def test_document(policy_document):
                assert len(policy_document) == 1
            """
        )
        result = pytester.runpytest("-q")
        result.assert_outcomes(passed=1)

    def test_policy_config_override(self, pytester: pytest.Pytester) -> None:
        pytester.makefile(".spec", POLICY=SCENARIO_PRACTICE.replace("} }", "} colour = 1 }"))
        pytester.makeconftest(
            """
            import pytest

            from policyspec.domain.model.configuration import PolicySpecConfig

            @pytest.fixture(scope="session")
            def policy_config():
                return PolicySpecConfig(strict_keys=True)
            """
        )
        pytester.makepyfile(
            """
            def test_report(policy_report):
                assert [e.code for e in policy_report.errors] == ["unknown-key"]
            """
        )
        result = pytester.runpytest("-q")
        result.assert_outcomes(passed=1)
