"""Domain exceptions for the timestamp conversion engine."""

from __future__ import annotations

__all__ = [
    "BatchRequestError",
    "ConversionError",
    "InvalidDateFormatError",
    "InvalidFormatError",
    "InvalidInputError",
    "InvalidTimezoneError",
    "OutOfRangeError",
]


class ConversionError(ValueError):
    """Base class for expected, user-facing conversion failures.

    ``reason`` is safe to echo back to callers verbatim.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class InvalidInputError(ConversionError):
    """Raised when a raw value is empty, non-numeric, or has the wrong length."""


class OutOfRangeError(ConversionError):
    """Raised when an instant falls outside the supported 1970-2100 window."""


class InvalidDateFormatError(ConversionError):
    """Raised when a calendar string cannot be parsed."""


class InvalidTimezoneError(ConversionError):
    """Raised when a zone identifier is not in the zone database."""


class InvalidFormatError(ConversionError):
    """Raised when a custom format pattern contains unsupported tokens."""


class BatchRequestError(ValueError):
    """Raised when a batch request is structurally invalid as a whole."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
