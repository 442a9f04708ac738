"""Run the single-value pipeline over an ordered list of inputs."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from functools import partial

from .bounds import Direction
from .errors import BatchRequestError
from .formats import DEFAULT_STYLE
from .pipeline import ConversionResult, RawValue, convert_single
from .zones import UTC_NAME

__all__ = [
    "MAX_BATCH_VALUES",
    "REASON_EMPTY_BATCH",
    "run_batch",
]

logger = logging.getLogger(__name__)

MAX_BATCH_VALUES = 1000
REASON_EMPTY_BATCH = "values array cannot be empty"
UNEXPECTED_ELEMENT_ERROR = "conversion failed"


def run_batch(
    direction: Direction,
    values: Sequence[RawValue],
    timezone: str = UTC_NAME,
    format_spec: str | None = DEFAULT_STYLE,
    *,
    max_values: int = MAX_BATCH_VALUES,
    workers: int = 1,
) -> list[ConversionResult]:
    """Convert every value independently, preserving input order.

    The whole batch is refused only for size violations. Per-element failures
    are reported inline and never affect their siblings.
    """

    if not values:
        raise BatchRequestError(REASON_EMPTY_BATCH)
    if len(values) > max_values:
        raise BatchRequestError(f"batch too large, maximum {max_values} values")

    convert = partial(_convert_isolated, direction, timezone=timezone, format_spec=format_spec)
    if workers <= 1 or len(values) == 1:
        return [convert(value) for value in values]

    with ThreadPoolExecutor(
        max_workers=min(workers, len(values)),
        thread_name_prefix="epoch-batch",
    ) as pool:
        # map() yields in submission order regardless of completion order.
        return list(pool.map(convert, values))


def _convert_isolated(
    direction: Direction,
    value: RawValue,
    *,
    timezone: str,
    format_spec: str | None,
) -> ConversionResult:
    try:
        return convert_single(direction, value, timezone=timezone, format_spec=format_spec)
    except Exception:
        logger.exception(
            "conversion.batch.element_failed",
            extra={"direction": str(direction), "value_type": type(value).__name__},
        )
        return ConversionResult(input=value, output="", error=UNEXPECTED_ELEMENT_ERROR)
