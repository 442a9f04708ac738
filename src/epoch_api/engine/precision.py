"""Decide whether a raw epoch value counts seconds or milliseconds."""

from __future__ import annotations

import re
from enum import StrEnum

__all__ = [
    "MAX_SECONDS_MAGNITUDE",
    "Precision",
    "classify",
    "digits_of",
    "guess_precision",
]

# Anything larger would be a seconds count past the year 2286.
MAX_SECONDS_MAGNITUDE = 9_999_999_999

_NON_DIGITS = re.compile(r"\D")


class Precision(StrEnum):
    SECONDS = "seconds"
    MILLISECONDS = "milliseconds"
    UNKNOWN = "unknown"


def digits_of(raw: str) -> str:
    """Return ``raw`` with every non-digit character removed."""

    return _NON_DIGITS.sub("", raw)


def classify(raw: str) -> Precision:
    """Classify a numeric-looking string purely by its digit count.

    The numeric value is never inspected: ``"9999999999"`` is still
    ``SECONDS`` even though it lies past 2100.
    """

    count = len(digits_of(raw))
    if count == 10:
        return Precision.SECONDS
    if count == 13:
        return Precision.MILLISECONDS
    return Precision.UNKNOWN


def guess_precision(value: int) -> Precision:
    """Magnitude fallback for bare numbers that never went through ``classify``."""

    if value > MAX_SECONDS_MAGNITUDE:
        return Precision.MILLISECONDS
    return Precision.SECONDS
