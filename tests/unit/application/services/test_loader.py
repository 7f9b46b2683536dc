"""Tests for application/services/loader.py."""

from pathlib import Path

import pytest

from policyspec.application.services import check_path, check_text, load_path, load_text
from policyspec.domain.exceptions import DocumentValidationError, LexError, ParseError
from policyspec.domain.model.configuration import PolicySpecConfig
from policyspec.domain.model.enums import BlockKind, DuplicateSectionPolicy, Enforcement
from tests.factories import SAMPLE_DOCUMENT, SCENARIO_PRACTICE


class TestLoadText:
    """Tests for load_text()."""

    def test_single_practice(self) -> None:
        document = load_text(SCENARIO_PRACTICE)
        assert len(document) == 1
        assert document.block(BlockKind.PRACTICE, "x").name == "x"
        assert document.enforcement_of(BlockKind.PRACTICE, "x") is Enforcement.MANDATORY

    def test_invalid_enforcement(self) -> None:
        with pytest.raises(DocumentValidationError) as exc_info:
            load_text(SCENARIO_PRACTICE.replace("mandatory", "urgent"))
        errors = exc_info.value.errors
        assert len(errors) == 1
        assert errors[0].code == "invalid-choice"

    def test_all_errors_reported(self) -> None:
        text = 'DEFINE_PRACTICE(a) {}\nDEFINE_PRACTICE(b) { [manifest] { scope = 1, enforcement = "x" } }'
        with pytest.raises(DocumentValidationError) as exc_info:
            load_text(text)
        assert [e.code for e in exc_info.value.errors] == ["missing-manifest", "wrong-kind", "invalid-choice"]

    def test_lex_error(self) -> None:
        with pytest.raises(LexError) as exc_info:
            load_text('DEFINE_PRACTICE(x) {\n  rule: "unterminated\n}')
        assert exc_info.value.line == 2

    def test_parse_error(self) -> None:
        with pytest.raises(ParseError, match="unbalanced"):
            load_text("DEFINE_PRACTICE(x) {")

    def test_config_applies(self) -> None:
        text = SCENARIO_PRACTICE.replace("x", "a") + "\n[s]\n" + SCENARIO_PRACTICE.replace("x", "b")
        text = f"[s]\n{text}"
        with pytest.raises(ParseError, match="already declared"):
            load_text(text)
        config = PolicySpecConfig(duplicate_sections=DuplicateSectionPolicy.MERGE)
        assert load_text(text, config=config).section("s") == ("a", "b")

    def test_source_recorded(self) -> None:
        assert load_text(SCENARIO_PRACTICE, source="team.spec").source == "team.spec"


class TestCheckText:
    """Tests for check_text()."""

    def test_passed(self) -> None:
        report = check_text(SAMPLE_DOCUMENT, source="sample.spec")
        assert report.passed
        assert report.document is not None
        assert report.source == "sample.spec"

    def test_validation_errors(self) -> None:
        report = check_text(SCENARIO_PRACTICE.replace("mandatory", "urgent"))
        assert not report.passed
        assert report.document is None
        assert report.exit_code == 1

    def test_fatal_never_raises(self) -> None:
        report = check_text("DEFINE_PRACTICE(x) { a = [1 }")
        assert isinstance(report.fatal, ParseError)
        assert report.errors == ()
        assert report.exit_code == 2

    def test_explicit_validators(self) -> None:
        report = check_text(SCENARIO_PRACTICE.replace('["function"]', "1"), validators=())
        assert report.passed

    def test_explicit_validators_keep_enforcement_invariant(self) -> None:
        report = check_text(SCENARIO_PRACTICE.replace("mandatory", "urgent"), validators=())
        assert not report.passed
        assert report.document is None
        assert [e.code for e in report.errors] == ["invalid-choice"]

    def test_model_never_built_without_enforcement(self) -> None:
        with pytest.raises(DocumentValidationError) as exc_info:
            load_text("DEFINE_PRACTICE(x) { rule = 1 }", validators=())
        assert [e.code for e in exc_info.value.errors] == ["missing-manifest"]


class TestPathLoading:
    """Tests for check_path() and load_path()."""

    def test_load_path(self, tmp_path: Path) -> None:
        path = tmp_path / "POLICY.spec"
        path.write_text(SAMPLE_DOCUMENT, encoding="utf-8")
        document = load_path(path)
        assert document.source == str(path)
        assert len(document.blocks_of(BlockKind.PRINCIPLE)) == 2

    def test_check_path_accepts_str(self, tmp_path: Path) -> None:
        path = tmp_path / "POLICY.spec"
        path.write_text(SCENARIO_PRACTICE, encoding="utf-8")
        assert check_path(str(path)).passed

    def test_error_locations_carry_path(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.spec"
        path.write_text('rule: "open', encoding="utf-8")
        with pytest.raises(LexError) as exc_info:
            load_path(path)
        assert exc_info.value.location.source == str(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            check_path(tmp_path / "absent.spec")
