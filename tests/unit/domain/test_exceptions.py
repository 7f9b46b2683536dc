"""Tests for domain/exceptions.py."""

import pytest

from policyspec.domain.exceptions import (
    ConfigError,
    DocumentValidationError,
    LexError,
    NotFoundError,
    ParseError,
    PolicySpecError,
    ValidationError,
)
from policyspec.domain.model.location import SourceLocation


def _error(code: str = "invalid-choice", line: int = 3) -> ValidationError:
    return ValidationError(
        location=SourceLocation(line, 5, "policy.spec"),
        code=code,
        subject="DEFINE_PRACTICE(x)",
        path="manifest.enforcement",
        message="'urgent' is not one of: mandatory, recommended, warning",
    )


class TestLexError:
    """Tests for LexError exception."""

    def test_is_policyspec_error(self) -> None:
        assert issubclass(LexError, PolicySpecError)

    def test_is_value_error(self) -> None:
        assert issubclass(LexError, ValueError)

    def test_has_location_and_reason(self) -> None:
        loc = SourceLocation(2, 9, "a.spec")
        err = LexError(loc, "unterminated string literal")
        assert err.location == loc
        assert err.reason == "unterminated string literal"
        assert err.line == 2

    def test_message_format(self) -> None:
        err = LexError(SourceLocation(2, 9, "a.spec"), "unterminated string literal")
        assert str(err) == "a.spec:2:9: unterminated string literal"

    def test_empty_reason_raises(self) -> None:
        with pytest.raises(ValueError, match="reason must be non-empty"):
            LexError(SourceLocation(1, 1), "")


class TestParseError:
    """Tests for ParseError exception."""

    def test_is_policyspec_error(self) -> None:
        assert issubclass(ParseError, PolicySpecError)

    def test_anonymous_source_in_message(self) -> None:
        err = ParseError(SourceLocation(4, 1), "unexpected '}'")
        assert str(err) == "<string>:4:1: unexpected '}'"
        assert err.line == 4

    def test_can_catch_as_policyspec_error(self) -> None:
        with pytest.raises(PolicySpecError) as exc_info:
            raise ParseError(SourceLocation(1, 1), "error")
        assert isinstance(exc_info.value, ParseError)


class TestValidationError:
    """Tests for ValidationError."""

    def test_attributes(self) -> None:
        err = _error()
        assert err.code == "invalid-choice"
        assert err.subject == "DEFINE_PRACTICE(x)"
        assert err.path == "manifest.enforcement"
        assert err.location.line == 3

    def test_message_includes_path(self) -> None:
        text = str(_error())
        assert text.startswith("policy.spec:3:5: [invalid-choice] DEFINE_PRACTICE(x).manifest.enforcement:")
        assert "'urgent'" in text

    def test_message_without_path(self) -> None:
        err = ValidationError(
            location=SourceLocation(1, 1),
            code="missing-manifest",
            subject="DEFINE_STAGE(lint)",
            message="block declares no manifest",
        )
        assert "] DEFINE_STAGE(lint): block declares no manifest" in str(err)

    def test_value_equality(self) -> None:
        assert _error() == _error()
        assert _error() != _error(code="wrong-kind")
        assert len({_error(), _error()}) == 1

    @pytest.mark.parametrize("field", ["code", "subject", "message"])
    def test_empty_field_raises(self, field: str) -> None:
        kwargs = {
            "location": SourceLocation(1, 1),
            "code": "c",
            "subject": "s",
            "message": "m",
        }
        kwargs[field] = ""
        with pytest.raises(ValueError, match=f"{field} must not be empty"):
            ValidationError(**kwargs)  # type: ignore[arg-type]


class TestDocumentValidationError:
    """Tests for DocumentValidationError."""

    def test_carries_all_errors(self) -> None:
        errors = (_error(line=1), _error(code="wrong-kind", line=2))
        err = DocumentValidationError(errors)
        assert err.errors == errors

    def test_message_lists_errors(self) -> None:
        err = DocumentValidationError((_error(line=1), _error(line=2)))
        lines = str(err).splitlines()
        assert lines[0] == "Found 2 validation error(s):"
        assert len(lines) == 3

    def test_requires_errors(self) -> None:
        with pytest.raises(ValueError, match="at least one error"):
            DocumentValidationError(())


class TestNotFoundError:
    """Tests for NotFoundError."""

    def test_is_key_error(self) -> None:
        assert issubclass(NotFoundError, KeyError)

    def test_message(self) -> None:
        err = NotFoundError("DEFINE_PRACTICE(nope)")
        assert err.what == "DEFINE_PRACTICE(nope)"
        assert str(err) == "not found: DEFINE_PRACTICE(nope)"


class TestConfigError:
    """Tests for ConfigError."""

    def test_message(self) -> None:
        err = ConfigError("strict_keys", "expected boolean, got str")
        assert err.option == "strict_keys"
        assert str(err) == "Invalid option 'strict_keys': expected boolean, got str"

    def test_is_value_error(self) -> None:
        assert issubclass(ConfigError, ValueError)
        assert issubclass(ConfigError, PolicySpecError)
