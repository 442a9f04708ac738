"""epoch: command-line access to the conversion engine and the API server."""

from __future__ import annotations

import json
from typing import Annotated, Any, NoReturn

import typer

from epoch_api.engine import (
    BatchRequestError,
    ConversionError,
    Direction,
    date_to_timestamp,
    instant_from_query,
    run_batch,
    timestamp_to_date,
)
from epoch_api.settings import get_settings

app = typer.Typer(
    add_completion=False,
    help="Convert between Unix timestamps and dates, or run the HTTP API.",
)

_BATCH_TYPES = {
    "unix-to-date": Direction.TO_DATE,
    "date-to-unix": Direction.TO_TIMESTAMP,
}

TimezoneOption = Annotated[
    str | None,
    typer.Option("--timezone", "-z", help="Zone name (default: EPOCH_DEFAULT_TIMEZONE or UTC)."),
]
FormatOption = Annotated[
    str | None,
    typer.Option("--format", "-f", help="iso, us, uk, long, or a custom pattern."),
]


def _emit(payload: dict[str, Any]) -> None:
    typer.echo(json.dumps(payload, indent=2))


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


@app.command("to-date")
def to_date(
    timestamp: Annotated[str, typer.Argument(help="Epoch seconds or milliseconds.")],
    timezone: TimezoneOption = None,
    format_spec: FormatOption = None,
) -> None:
    """Convert an epoch timestamp to a date."""

    settings = get_settings()
    zone = timezone or settings.default_timezone
    try:
        conversion = timestamp_to_date(
            instant_from_query(timestamp),
            zone,
            format_spec or settings.default_format,
        )
    except ConversionError as exc:
        _fail(exc.reason)
    _emit(
        {
            "timestamp": conversion.timestamp,
            "date": conversion.date,
            "formatted": conversion.formatted,
            "timezone": conversion.timezone,
        }
    )


@app.command("to-timestamp")
def to_timestamp(
    date: Annotated[str, typer.Argument(help="ISO-8601 or general date string.")],
    timezone: TimezoneOption = None,
) -> None:
    """Convert a date string to an epoch timestamp."""

    zone = timezone or get_settings().default_timezone
    try:
        conversion = date_to_timestamp(date, zone)
    except ConversionError as exc:
        _fail(exc.reason)
    _emit(
        {
            "date": conversion.date,
            "timestamp": conversion.timestamp,
            "milliseconds": conversion.milliseconds,
            "timezone": conversion.timezone,
        }
    )


@app.command("batch")
def batch(
    values: Annotated[list[str], typer.Argument(help="Values to convert, in order.")],
    batch_type: Annotated[
        str,
        typer.Option("--type", "-t", help="unix-to-date or date-to-unix."),
    ] = "unix-to-date",
    timezone: TimezoneOption = None,
    format_spec: FormatOption = None,
) -> None:
    """Convert several values; failures are reported per value."""

    direction = _BATCH_TYPES.get(batch_type)
    if direction is None:
        _fail('Invalid type. Must be "unix-to-date" or "date-to-unix"')
    settings = get_settings()
    try:
        results = run_batch(
            direction,
            values,
            timezone or settings.default_timezone,
            format_spec or settings.default_format,
            max_values=settings.batch_max_values,
            workers=settings.batch_workers,
        )
    except BatchRequestError as exc:
        _fail(exc.reason)
    payload = []
    for result in results:
        entry: dict[str, Any] = {"input": result.input, "output": result.output}
        if result.error is not None:
            entry["error"] = result.error
        payload.append(entry)
    _emit({"results": payload})


@app.command("serve")
def serve(
    host: Annotated[str | None, typer.Option(help="Interface to bind (default: EPOCH_SERVER_HOST).")] = None,
    port: Annotated[int | None, typer.Option(help="Port to bind (default: EPOCH_SERVER_PORT).")] = None,
    reload: Annotated[bool, typer.Option(help="Reload on code changes.")] = False,
) -> None:
    """Run the HTTP API with uvicorn."""

    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "epoch_api.main:create_app",
        factory=True,
        host=host or settings.server_host,
        port=port or settings.server_port,
        reload=reload,
        log_config=None,
    )


if __name__ == "__main__":
    app()
