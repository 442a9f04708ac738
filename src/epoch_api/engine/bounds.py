"""Reject malformed or out-of-range inputs before (or after) conversion.

Numeric timestamps are range-checked before any parsing since their bounds
are known from the digits alone. Calendar strings only have a range once they
resolve to an instant, so that direction is checked with ``check_instant``
after parsing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from .instants import MAX_EPOCH_MILLIS, MAX_EPOCH_SECONDS, MIN_EPOCH_SECONDS, Instant
from .precision import Precision, classify, digits_of, guess_precision

__all__ = [
    "Direction",
    "REASON_EMPTY",
    "REASON_INVALID_DATE",
    "REASON_INVALID_LENGTH",
    "REASON_NOT_DIGITS",
    "REASON_OUT_OF_RANGE",
    "REASON_TOO_LONG",
    "Verdict",
    "check_instant",
    "upper_bound_for",
    "validate_for_direction",
    "validate_magnitude",
]

REASON_EMPTY = "empty input"
REASON_NOT_DIGITS = "only digits allowed"
REASON_TOO_LONG = "value too long, likely pasted the wrong precision"
REASON_INVALID_LENGTH = "invalid length, expected 10 (seconds) or 13 (milliseconds) digits"
REASON_OUT_OF_RANGE = "out of supported range (1970-2100)"
REASON_INVALID_DATE = "invalid date format"


class Direction(StrEnum):
    TO_DATE = "to_date"
    TO_TIMESTAMP = "to_timestamp"


@dataclass(frozen=True, slots=True)
class Verdict:
    ok: bool
    reason: str | None = None

    @classmethod
    def accept(cls) -> Verdict:
        return cls(ok=True)

    @classmethod
    def reject(cls, reason: str) -> Verdict:
        return cls(ok=False, reason=reason)


def upper_bound_for(precision: Precision) -> int:
    if precision is Precision.MILLISECONDS:
        return MAX_EPOCH_MILLIS
    return MAX_EPOCH_SECONDS


def validate_for_direction(raw: str, direction: Direction) -> Verdict:
    """Validate a raw string for the requested conversion direction."""

    text = raw.strip()
    if not text:
        return Verdict.reject(REASON_EMPTY)
    if direction is Direction.TO_TIMESTAMP:
        # Calendar strings are range-checked after parsing.
        return Verdict.accept()

    if not text.isascii() or not text.isdigit():
        return Verdict.reject(REASON_NOT_DIGITS)

    precision = classify(text)
    if precision is Precision.UNKNOWN:
        if len(digits_of(text)) > 13:
            return Verdict.reject(REASON_TOO_LONG)
        return Verdict.reject(REASON_INVALID_LENGTH)

    value = int(text)
    if not MIN_EPOCH_SECONDS <= value <= upper_bound_for(precision):
        return Verdict.reject(REASON_OUT_OF_RANGE)
    return Verdict.accept()


def validate_magnitude(value: int) -> Verdict:
    """Range check for bare numbers whose precision comes from their magnitude."""

    if not MIN_EPOCH_SECONDS <= value <= upper_bound_for(guess_precision(value)):
        return Verdict.reject(REASON_OUT_OF_RANGE)
    return Verdict.accept()


def check_instant(instant: Instant) -> Verdict:
    """Post-parse range check for the calendar-string direction."""

    if not MIN_EPOCH_SECONDS * 1000 <= instant.millis <= MAX_EPOCH_MILLIS:
        return Verdict.reject(REASON_OUT_OF_RANGE)
    return Verdict.accept()
