"""Exact conversions between epoch counts and absolute instants."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from .errors import InvalidInputError
from .precision import Precision

__all__ = [
    "EPOCH",
    "MAX_EPOCH_MILLIS",
    "MAX_EPOCH_SECONDS",
    "MIN_EPOCH_SECONDS",
    "Instant",
    "to_epoch_millis",
    "to_epoch_seconds",
    "to_instant",
]

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

MIN_EPOCH_SECONDS = 0
MAX_EPOCH_SECONDS = 4_102_444_800  # 2100-01-01T00:00:00Z
MAX_EPOCH_MILLIS = MAX_EPOCH_SECONDS * 1000

_ONE_MS = timedelta(milliseconds=1)


@dataclass(frozen=True, slots=True, order=True)
class Instant:
    """Absolute point in time as whole milliseconds since the epoch."""

    millis: int

    @classmethod
    def from_datetime(cls, value: datetime) -> Instant:
        if value.tzinfo is None:
            raise ValueError("Instant.from_datetime requires an aware datetime")
        # timedelta floor division keeps this in integer arithmetic.
        return cls((value - EPOCH) // _ONE_MS)

    def to_datetime(self) -> datetime:
        """Return the instant as an aware UTC datetime."""

        return EPOCH + timedelta(milliseconds=self.millis)

    @property
    def seconds(self) -> int:
        return to_epoch_seconds(self)


def to_instant(value: int, precision: Precision) -> Instant:
    """Build an ``Instant`` from an epoch count of the given precision."""

    if precision is Precision.SECONDS:
        return Instant(value * 1000)
    if precision is Precision.MILLISECONDS:
        return Instant(value)
    raise InvalidInputError(
        "invalid length, expected 10 (seconds) or 13 (milliseconds) digits"
    )


def to_epoch_seconds(instant: Instant) -> int:
    return instant.millis // 1000


def to_epoch_millis(instant: Instant) -> int:
    return instant.millis
