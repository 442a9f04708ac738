from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from epoch_api.engine.errors import InvalidInputError
from epoch_api.engine.instants import Instant, to_epoch_millis, to_epoch_seconds, to_instant
from epoch_api.engine.precision import Precision


def test_to_instant_scales_seconds_exactly() -> None:
    assert to_instant(1_640_995_200, Precision.SECONDS) == Instant(1_640_995_200_000)
    assert to_instant(1_640_995_200_123, Precision.MILLISECONDS) == Instant(1_640_995_200_123)


def test_to_instant_refuses_unknown_precision() -> None:
    with pytest.raises(InvalidInputError):
        to_instant(123, Precision.UNKNOWN)


def test_epoch_seconds_truncate_milliseconds() -> None:
    instant = Instant(1_640_995_200_999)

    assert to_epoch_seconds(instant) == 1_640_995_200
    assert to_epoch_millis(instant) == 1_640_995_200_999
    assert instant.seconds == 1_640_995_200


def test_datetime_conversion_is_exact() -> None:
    moment = datetime(2022, 1, 1, 0, 0, 0, 123000, tzinfo=UTC)

    assert Instant.from_datetime(moment) == Instant(1_640_995_200_123)
    assert Instant(1_640_995_200_123).to_datetime() == moment


def test_from_datetime_honours_offsets() -> None:
    moment = datetime(2022, 1, 1, 5, 30, tzinfo=timezone(timedelta(hours=5, minutes=30)))

    assert Instant.from_datetime(moment) == Instant(1_640_995_200_000)


def test_from_datetime_requires_aware_value() -> None:
    with pytest.raises(ValueError):
        Instant.from_datetime(datetime(2022, 1, 1))
