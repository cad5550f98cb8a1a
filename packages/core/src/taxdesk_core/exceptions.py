"""Exceptions raised by the portal services.

The classification and summary functions never raise these for bad input
data: an unrecognized filename falls back to ``other`` and an unparseable
amount is skipped. They are raised around the core, where a missing record
or an empty upload is a caller error.
"""

from typing import Any, Optional


class TaxDeskError(Exception):
    """Base exception for all TaxDesk errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(TaxDeskError):
    """Request data a caller must correct, such as an upload without a filename."""

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.field = field
        self.value = value
        self.constraint = constraint


class RecordNotFoundError(TaxDeskError):
    """A document or field row does not exist."""

    def __init__(
        self,
        message: str,
        *,
        record_type: Optional[str] = None,
        record_id: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.record_type = record_type
        self.record_id = record_id


class ConfigurationError(TaxDeskError):
    """A setting holds a value the portal cannot use.

    Attributes:
        config_key: Environment variable of the offending setting
        expected: Description of the accepted values
        actual: The value found
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.config_key = config_key
        self.expected = expected
        self.actual = actual


__all__ = [
    "TaxDeskError",
    "ValidationError",
    "RecordNotFoundError",
    "ConfigurationError",
]
