"""Tests for the candidate schema validator."""

import pytest

from logger_dashboard.validator import CandidateValidator


@pytest.fixture
def validator():
    return CandidateValidator()


class TestCandidateValidator:
    def test_valid_candidate(self, validator):
        is_valid, errors = validator.validate(
            {"service": "user-service", "level": "info", "message": "hello"}
        )
        assert is_valid is True
        assert errors == []

    def test_unknown_service(self, validator):
        is_valid, errors = validator.validate(
            {"service": "bogus", "level": "info", "message": "hello"}
        )
        assert is_valid is False
        assert len(errors) > 0

    def test_unknown_level(self, validator):
        is_valid, _ = validator.validate(
            {"service": "user-service", "level": "INFO", "message": "hello"}
        )
        assert is_valid is False

    def test_empty_message(self, validator):
        is_valid, _ = validator.validate(
            {"service": "user-service", "level": "info", "message": ""}
        )
        assert is_valid is False

    def test_missing_fields(self, validator):
        is_valid, errors = validator.validate({"service": "user-service"})
        assert is_valid is False
        error_text = " ".join(errors).lower()
        assert "level" in error_text or "message" in error_text

    def test_null_fields_rejected(self, validator):
        is_valid, _ = validator.validate({"service": None, "level": None, "message": None})
        assert is_valid is False

    def test_errors_name_the_field(self, validator):
        is_valid, errors = validator.validate(
            {"service": "bogus", "level": "info", "message": ""}
        )
        assert is_valid is False
        assert len(errors) == 2
        assert errors[0].startswith("message: ")
        assert errors[1].startswith("service: ")
