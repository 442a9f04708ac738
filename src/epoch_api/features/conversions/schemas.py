"""Pydantic schemas for the conversions module."""

from __future__ import annotations

from enum import StrEnum

from pydantic import ConfigDict, Field, StrictFloat, StrictInt, StrictStr

from epoch_api.common.schema import BaseSchema
from epoch_api.engine import Direction

BatchValue = StrictStr | StrictInt | StrictFloat


class BatchType(StrEnum):
    UNIX_TO_DATE = "unix-to-date"
    DATE_TO_UNIX = "date-to-unix"

    @property
    def direction(self) -> Direction:
        if self is BatchType.UNIX_TO_DATE:
            return Direction.TO_DATE
        return Direction.TO_TIMESTAMP


class UnixToDateResponse(BaseSchema):
    """Payload returned by ``GET /api/unix-to-date``."""

    timestamp: int = Field(..., description="Normalized epoch seconds.")
    date: str = Field(..., description="ISO-8601 string in the requested zone.")
    formatted: str = Field(..., description="Rendering in the requested format.")
    timezone: str


class DateToUnixResponse(BaseSchema):
    """Payload returned by ``GET /api/date-to-unix``."""

    date: str = Field(..., description="UTC ISO-8601 string with milliseconds.")
    timestamp: int = Field(..., description="Epoch seconds.")
    milliseconds: int = Field(..., description="Epoch milliseconds.")
    timezone: str


class BatchConvertRequest(BaseSchema):
    """Body accepted by ``POST /api/batch-convert``.

    ``type`` is kept as a plain string so that an unknown value yields a
    specific error message instead of a generic validation failure.
    """

    model_config = ConfigDict(extra="ignore")

    type: str
    values: list[BatchValue]
    timezone: str | None = None
    format_spec: str | None = Field(default=None, alias="format")


class BatchConvertResult(BaseSchema):
    input: BatchValue
    output: str
    error: str | None = None


class BatchConvertResponse(BaseSchema):
    results: list[BatchConvertResult]
