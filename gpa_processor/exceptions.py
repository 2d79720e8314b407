"""Custom exceptions for GPA Processor."""

from typing import Any, Optional


class GPAProcessorError(Exception):
    """Base exception for all GPA Processor errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ScoreRangeError(GPAProcessorError, ValueError):
    """Raised when a score falls outside the gradable range."""
    pass


class ValidationError(GPAProcessorError):
    """Raised when record data fails validation."""
    pass


class RecordNotFoundError(GPAProcessorError):
    """Raised when a referenced record does not exist."""
    pass


class DuplicateRecordError(GPAProcessorError):
    """Raised when attempting to create a duplicate record."""
    pass
