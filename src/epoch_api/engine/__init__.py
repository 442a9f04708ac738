"""Stateless timestamp conversion engine.

The public surface is re-exported here so callers can write
``from epoch_api.engine import run_batch``.
"""

from .batch import MAX_BATCH_VALUES, run_batch
from .bounds import Direction, Verdict, check_instant, validate_for_direction, validate_magnitude
from .errors import (
    BatchRequestError,
    ConversionError,
    InvalidDateFormatError,
    InvalidFormatError,
    InvalidInputError,
    InvalidTimezoneError,
    OutOfRangeError,
)
from .formats import DEFAULT_STYLE, NAMED_STYLES, format_pattern, iso_utc, render, zone_local_iso
from .instants import Instant, to_epoch_millis, to_epoch_seconds, to_instant
from .pipeline import (
    ConversionResult,
    DateConversion,
    TimestampConversion,
    convert_single,
    date_to_timestamp,
    instant_from_digits,
    instant_from_number,
    instant_from_query,
    timestamp_to_date,
)
from .precision import Precision, classify, guess_precision
from .zones import UTC_NAME, parse_calendar, project, resolve, resolve_zone

__all__ = [
    "BatchRequestError",
    "ConversionError",
    "ConversionResult",
    "DEFAULT_STYLE",
    "DateConversion",
    "Direction",
    "Instant",
    "InvalidDateFormatError",
    "InvalidFormatError",
    "InvalidInputError",
    "InvalidTimezoneError",
    "MAX_BATCH_VALUES",
    "NAMED_STYLES",
    "OutOfRangeError",
    "Precision",
    "TimestampConversion",
    "UTC_NAME",
    "Verdict",
    "check_instant",
    "classify",
    "convert_single",
    "date_to_timestamp",
    "format_pattern",
    "guess_precision",
    "instant_from_digits",
    "instant_from_number",
    "instant_from_query",
    "iso_utc",
    "parse_calendar",
    "project",
    "render",
    "resolve",
    "resolve_zone",
    "run_batch",
    "timestamp_to_date",
    "to_epoch_millis",
    "to_epoch_seconds",
    "to_instant",
    "validate_for_direction",
    "validate_magnitude",
    "zone_local_iso",
]
