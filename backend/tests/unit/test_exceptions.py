"""
Unit tests for custom exception classes.

Tests exception initialization and error messages.
"""

import pytest
from domain.exceptions import (
    ConfigurationError,
    DateParseError,
    ImportValidationError,
    PinError,
    RecordNotFound,
    StorageUnavailable,
    UnreadableRecord,
)


class TestStorageExceptions:
    """Tests for store-related exceptions."""

    @pytest.mark.unit
    def test_storage_unavailable(self):
        cause = OSError("disk full")
        error = StorageUnavailable("write failed", cause)

        assert "Storage unavailable" in str(error)
        assert "write failed" in str(error)
        assert error.cause is cause

    @pytest.mark.unit
    def test_record_not_found(self):
        """Test RecordNotFound exception."""
        error = RecordNotFound("plans", "abc")

        assert error.collection == "plans"
        assert error.record_id == "abc"
        assert "not found" in str(error)
        assert isinstance(error, LookupError)

    @pytest.mark.unit
    def test_unreadable_record(self):
        error = UnreadableRecord("memories", "m1", [{"loc": ["date"], "msg": "Field required"}])

        assert error.collection == "memories"
        assert error.record_id == "m1"
        assert "'m1'" in str(error)
        assert error.errors[0]["loc"] == ["date"]
        assert isinstance(error, ValueError)


class TestValidationExceptions:
    """Tests for input validation exceptions."""

    @pytest.mark.unit
    def test_import_validation_error_defaults(self):
        error = ImportValidationError("missing 'data' section")

        assert "Invalid backup snapshot" in str(error)
        assert error.errors == []

    @pytest.mark.unit
    def test_date_parse_error(self):
        error = DateParseError("yesterday")

        assert error.value == "yesterday"
        assert "'yesterday'" in str(error)

    @pytest.mark.unit
    def test_pin_error(self):
        assert PinError("bad").mismatch is False
        assert PinError("bad", mismatch=True).mismatch is True

    @pytest.mark.unit
    def test_configuration_error(self):
        """Test ConfigurationError exception."""
        error = ConfigurationError("Invalid config")

        assert "Configuration error" in str(error)
        assert "Invalid config" in str(error)
        assert isinstance(error, ValueError)
