"""Service layer for the conversions module.

Every method is a thin adapter: it turns a transport-shaped request into
calls on :mod:`epoch_api.engine` and the engine results back into schemas.
"""

from __future__ import annotations

import logging

from epoch_api.common.logging import log_context
from epoch_api.engine import (
    ConversionResult,
    date_to_timestamp,
    instant_from_query,
    run_batch,
    timestamp_to_date,
)
from epoch_api.settings import Settings

from .exceptions import ConversionRequestError
from .schemas import (
    BatchConvertRequest,
    BatchConvertResponse,
    BatchConvertResult,
    BatchType,
    DateToUnixResponse,
    UnixToDateResponse,
)

logger = logging.getLogger(__name__)

INVALID_TYPE_MESSAGE = 'Invalid type. Must be "unix-to-date" or "date-to-unix"'


class ConversionService:
    """Convert single values and batches using configured defaults."""

    def __init__(self, *, settings: Settings) -> None:
        self._settings = settings

    def unix_to_date(
        self,
        timestamp: str | None,
        *,
        timezone: str | None = None,
        format_spec: str | None = None,
    ) -> UnixToDateResponse:
        if not timestamp:
            raise ConversionRequestError("Missing required parameter: timestamp")
        zone = timezone or self._settings.default_timezone
        style = format_spec or self._settings.default_format

        conversion = timestamp_to_date(instant_from_query(timestamp), zone, style)
        logger.info(
            "conversion.to_date.success",
            extra=log_context(timezone=zone, format_spec=style, timestamp=conversion.timestamp),
        )
        return UnixToDateResponse(
            timestamp=conversion.timestamp,
            date=conversion.date,
            formatted=conversion.formatted,
            timezone=conversion.timezone,
        )

    def date_to_unix(self, date: str | None, *, timezone: str | None = None) -> DateToUnixResponse:
        if not date:
            raise ConversionRequestError("Missing required parameter: date")
        zone = timezone or self._settings.default_timezone

        conversion = date_to_timestamp(date, zone)
        logger.info(
            "conversion.to_timestamp.success",
            extra=log_context(timezone=zone, timestamp=conversion.timestamp),
        )
        return DateToUnixResponse(
            date=conversion.date,
            timestamp=conversion.timestamp,
            milliseconds=conversion.milliseconds,
            timezone=conversion.timezone,
        )

    def batch_convert(self, payload: BatchConvertRequest) -> BatchConvertResponse:
        try:
            batch_type = BatchType(payload.type)
        except ValueError as exc:
            raise ConversionRequestError(INVALID_TYPE_MESSAGE) from exc
        zone = payload.timezone or self._settings.default_timezone
        style = payload.format_spec or self._settings.default_format

        results = run_batch(
            batch_type.direction,
            payload.values,
            zone,
            style,
            max_values=self._settings.batch_max_values,
            workers=self._settings.batch_workers,
        )
        failed = sum(1 for result in results if not result.ok)
        logger.info(
            "conversion.batch.complete",
            extra=log_context(
                direction=str(batch_type.direction),
                timezone=zone,
                format_spec=style,
                total=len(results),
                failed=failed,
            ),
        )
        return BatchConvertResponse(results=[_to_schema(result) for result in results])


def _to_schema(result: ConversionResult) -> BatchConvertResult:
    return BatchConvertResult(input=result.input, output=result.output, error=result.error)


__all__ = ["ConversionService", "INVALID_TYPE_MESSAGE"]
