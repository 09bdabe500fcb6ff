"""
Custom exception classes for the lovesync backend.

These exceptions are raised by the store, the backup codec and the record
workflows. They are plain exceptions so the core stays usable without the
HTTP layer; core/app_factory.py maps each one to a status code.
"""

from typing import Optional


class StorageUnavailable(RuntimeError):
    """Raised when the storage medium cannot be opened, read or written."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"Storage unavailable: {message}")
        self.cause = cause


class RecordNotFound(LookupError):
    """Raised when an operation requires a record that does not exist."""

    def __init__(self, collection: str, record_id: str):
        super().__init__(f"{collection} record with id {record_id!r} not found")
        self.collection = collection
        self.record_id = record_id


class ImportValidationError(ValueError):
    """Raised when a backup snapshot is malformed. Nothing has been mutated."""

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(f"Invalid backup snapshot: {message}")
        self.errors = errors or []


class UnreadableRecord(ValueError):
    """Raised by strict reads when a stored document no longer validates."""

    def __init__(self, collection: str, record_id: Optional[str], errors: Optional[list] = None):
        super().__init__(f"Stored {collection} document {record_id!r} does not validate")
        self.collection = collection
        self.record_id = record_id
        self.errors = errors or []


class DateParseError(ValueError):
    """Raised by the calendar helpers for unparseable input.

    The counter, milestone and zodiac calculations catch it and fall back to
    their zero/default value.
    """

    def __init__(self, value):
        super().__init__(f"Cannot parse date value: {value!r}")
        self.value = value


class PinError(ValueError):
    """Raised when setting up, verifying or disabling the security PIN fails."""

    def __init__(self, message: str, mismatch: bool = False):
        super().__init__(message)
        self.mismatch = mismatch


class ConfigurationError(ValueError):
    """Raised when there's an error in configuration parsing or validation."""

    def __init__(self, message: str):
        super().__init__(f"Configuration error: {message}")
