"""Tests for digit-count and magnitude precision detection."""

from __future__ import annotations

import pytest

from epoch_api.engine.precision import Precision, classify, guess_precision


@pytest.mark.parametrize("length", range(0, 21))
def test_classify_depends_only_on_digit_count(length: int) -> None:
    expected = {10: Precision.SECONDS, 13: Precision.MILLISECONDS}.get(length, Precision.UNKNOWN)
    assert classify("7" * length) is expected


def test_classify_detects_common_timestamps() -> None:
    assert classify("1640995200") is Precision.SECONDS
    assert classify("0000000000") is Precision.SECONDS
    assert classify("1640995200000") is Precision.MILLISECONDS


def test_classify_ignores_value_plausibility() -> None:
    # Past 2100, but still ten digits.
    assert classify("9999999999") is Precision.SECONDS


def test_classify_filters_non_digit_characters() -> None:
    assert classify("1,640,995,200") is Precision.SECONDS
    assert classify("1640995200abc") is Precision.SECONDS
    assert classify("") is Precision.UNKNOWN


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, Precision.SECONDS),
        (1_640_995_200, Precision.SECONDS),
        (9_999_999_999, Precision.SECONDS),
        (10_000_000_000, Precision.MILLISECONDS),
        (1_640_995_200_000, Precision.MILLISECONDS),
    ],
)
def test_guess_precision_uses_magnitude(value: int, expected: Precision) -> None:
    assert guess_precision(value) is expected
