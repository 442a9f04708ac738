"""API routes for the conversions module."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from starlette.concurrency import run_in_threadpool

from epoch_api.common.schema import ErrorMessage

from .dependencies import get_conversion_service
from .schemas import BatchConvertRequest, BatchConvertResponse, DateToUnixResponse, UnixToDateResponse
from .service import ConversionService

router = APIRouter(tags=["conversions"])

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorMessage},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorMessage},
}


@router.get(
    "/unix-to-date",
    response_model=UnixToDateResponse,
    summary="Convert an epoch timestamp to a date",
    responses=_ERROR_RESPONSES,
)
async def unix_to_date(
    service: Annotated[ConversionService, Depends(get_conversion_service)],
    timestamp: Annotated[str | None, Query(description="Epoch seconds or milliseconds.")] = None,
    timezone: Annotated[str | None, Query(description="Zone name, default UTC.")] = None,
    format_spec: Annotated[
        str | None,
        Query(alias="format", description="iso, us, uk, long, or a custom pattern."),
    ] = None,
) -> UnixToDateResponse:
    return service.unix_to_date(timestamp, timezone=timezone, format_spec=format_spec)


@router.get(
    "/date-to-unix",
    response_model=DateToUnixResponse,
    summary="Convert a date string to an epoch timestamp",
    responses=_ERROR_RESPONSES,
)
async def date_to_unix(
    service: Annotated[ConversionService, Depends(get_conversion_service)],
    date: Annotated[str | None, Query(description="ISO-8601 or general date string.")] = None,
    timezone: Annotated[str | None, Query(description="Zone for naive input, default UTC.")] = None,
) -> DateToUnixResponse:
    return service.date_to_unix(date, timezone=timezone)


@router.post(
    "/batch-convert",
    response_model=BatchConvertResponse,
    response_model_exclude_none=True,
    summary="Convert up to 1000 values in one request",
    responses=_ERROR_RESPONSES,
)
async def batch_convert(
    payload: BatchConvertRequest,
    service: Annotated[ConversionService, Depends(get_conversion_service)],
) -> BatchConvertResponse:
    return await run_in_threadpool(service.batch_convert, payload)


@router.options("/unix-to-date", include_in_schema=False)
@router.options("/date-to-unix", include_in_schema=False)
@router.options("/batch-convert", include_in_schema=False)
async def preflight() -> Response:
    """Answer CORS preflight requests; the middleware adds the headers."""
    return Response(status_code=status.HTTP_200_OK)


__all__ = ["router"]
