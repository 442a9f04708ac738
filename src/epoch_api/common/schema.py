"""Base model shared by every request and response body."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Strict by default: unknown fields are rejected and aliases are honoured."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid", use_enum_values=True)

    def model_dump(self, **kwargs: Any) -> dict[str, Any]:  # type: ignore[override]
        # Optional fields such as ``error`` are omitted rather than sent as null.
        kwargs.setdefault("exclude_none", True)
        kwargs.setdefault("by_alias", True)
        return super().model_dump(**kwargs)


class ErrorMessage(BaseSchema):
    """Error envelope returned by every endpoint: ``{"error": "..."}``."""

    error: str


__all__ = ["BaseSchema", "ErrorMessage"]
