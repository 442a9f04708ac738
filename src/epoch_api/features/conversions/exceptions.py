"""Domain exceptions for the conversions feature."""

from __future__ import annotations

__all__ = ["ConversionRequestError"]


class ConversionRequestError(ValueError):
    """Raised when a request is missing parameters or has the wrong shape."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
