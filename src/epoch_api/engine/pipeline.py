"""The single-value conversion pipeline shared by every entry point."""

from __future__ import annotations

from dataclasses import dataclass

from .bounds import (
    REASON_EMPTY,
    REASON_NOT_DIGITS,
    REASON_OUT_OF_RANGE,
    Direction,
    Verdict,
    check_instant,
    validate_for_direction,
    validate_magnitude,
)
from .errors import ConversionError, InvalidDateFormatError, InvalidInputError, OutOfRangeError
from .formats import DEFAULT_STYLE, iso_utc, render, zone_local_iso
from .instants import MAX_EPOCH_MILLIS, Instant, to_epoch_millis, to_epoch_seconds, to_instant
from .precision import classify, guess_precision
from .zones import UTC_NAME, resolve, resolve_zone

__all__ = [
    "ConversionResult",
    "DateConversion",
    "RawValue",
    "TimestampConversion",
    "convert_single",
    "date_to_timestamp",
    "instant_from_digits",
    "instant_from_number",
    "instant_from_query",
    "timestamp_to_date",
]

RawValue = str | int | float

_MAX_QUERY_DIGITS = len(str(MAX_EPOCH_MILLIS))


@dataclass(frozen=True, slots=True)
class ConversionResult:
    """Outcome of one pipeline run; ``output`` is empty whenever ``error`` is set."""

    input: RawValue
    output: str
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class DateConversion:
    instant: Instant
    timezone: str
    date: str
    formatted: str

    @property
    def timestamp(self) -> int:
        return to_epoch_seconds(self.instant)


@dataclass(frozen=True, slots=True)
class TimestampConversion:
    instant: Instant
    timezone: str

    @property
    def date(self) -> str:
        return iso_utc(self.instant)

    @property
    def timestamp(self) -> int:
        return to_epoch_seconds(self.instant)

    @property
    def milliseconds(self) -> int:
        return to_epoch_millis(self.instant)


def _raise_for(verdict: Verdict, error_cls: type[ConversionError]) -> None:
    if not verdict.ok:
        raise error_cls(verdict.reason or "invalid input")


def instant_from_digits(raw: str) -> Instant:
    """Digit-string path: precision comes from the digit count."""

    verdict = validate_for_direction(raw, Direction.TO_DATE)
    if verdict.reason == REASON_OUT_OF_RANGE:
        raise OutOfRangeError(verdict.reason)
    _raise_for(verdict, InvalidInputError)
    text = raw.strip()
    return to_instant(int(text), classify(text))


def instant_from_number(value: int) -> Instant:
    """Bare-number path: precision comes from the magnitude."""

    _raise_for(validate_magnitude(value), OutOfRangeError)
    return to_instant(value, guess_precision(value))


def instant_from_query(raw: str) -> Instant:
    """Digit string read with the magnitude rule, as the single-value endpoint does."""

    text = raw.strip()
    if not text:
        raise InvalidInputError(REASON_EMPTY)
    if not text.isascii() or not text.isdigit():
        raise InvalidInputError(REASON_NOT_DIGITS)
    significant = text.lstrip("0") or "0"
    # Longer than any in-range millisecond count; also keeps int() under its digit limit.
    if len(significant) > _MAX_QUERY_DIGITS:
        raise OutOfRangeError(REASON_OUT_OF_RANGE)
    return instant_from_number(int(significant))


def timestamp_to_date(
    instant: Instant,
    timezone: str = UTC_NAME,
    format_spec: str | None = DEFAULT_STYLE,
) -> DateConversion:
    resolve_zone(timezone)
    return DateConversion(
        instant=instant,
        timezone=timezone,
        date=zone_local_iso(instant, timezone),
        formatted=render(instant, timezone, format_spec),
    )


def date_to_timestamp(raw: str, timezone: str = UTC_NAME) -> TimestampConversion:
    _raise_for(validate_for_direction(raw, Direction.TO_TIMESTAMP), InvalidDateFormatError)
    resolve_zone(timezone)
    instant = resolve(raw, timezone)
    _raise_for(check_instant(instant), OutOfRangeError)
    return TimestampConversion(instant=instant, timezone=timezone)


def _instant_from_raw(value: RawValue) -> Instant:
    if isinstance(value, bool):
        raise InvalidInputError(REASON_NOT_DIGITS)
    if isinstance(value, int):
        return instant_from_number(value)
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidInputError(REASON_NOT_DIGITS)
        return instant_from_number(int(value))
    return instant_from_digits(value)


def convert_single(
    direction: Direction,
    value: RawValue,
    *,
    timezone: str = UTC_NAME,
    format_spec: str | None = DEFAULT_STYLE,
) -> ConversionResult:
    """Run one value through the pipeline; expected failures become results."""

    try:
        if direction is Direction.TO_DATE:
            conversion = timestamp_to_date(_instant_from_raw(value), timezone, format_spec)
            return ConversionResult(input=value, output=conversion.formatted)
        converted = date_to_timestamp(str(value), timezone)
        return ConversionResult(input=value, output=str(converted.timestamp))
    except ConversionError as exc:
        return ConversionResult(input=value, output="", error=exc.reason)
