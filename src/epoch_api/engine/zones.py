"""Project instants into named zones and resolve calendar strings back.

``UTC`` is handled without touching the zone database. Every other name goes
through :mod:`zoneinfo`, so daylight-saving rules are applied for the specific
instant rather than a fixed offset.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime, tzinfo
from email.utils import parsedate_to_datetime
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .bounds import REASON_INVALID_DATE
from .errors import InvalidDateFormatError, InvalidTimezoneError
from .instants import Instant

__all__ = [
    "UTC_NAME",
    "parse_calendar",
    "project",
    "resolve",
    "resolve_zone",
    "zone_abbreviation",
]

UTC_NAME = "UTC"

_ISO_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")
_TRAILING_UTC = re.compile(r"\s*(?:UTC|GMT|Z)$", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")

# Non-ISO shapes accepted for calendar input, tried in order.
_GENERAL_FORMATS = (
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %I:%M %p",
    "%m/%d/%Y %I:%M:%S %p",
    "%B %d, %Y",
    "%B %d %Y",
    "%B %d, %Y %H:%M",
    "%B %d, %Y %H:%M:%S",
    "%B %d, %Y %I:%M %p",
    "%B %d, %Y %I:%M:%S %p",
    "%b %d, %Y",
    "%b %d %Y",
    "%b %d, %Y %H:%M:%S",
    "%b %d %Y %H:%M:%S",
    "%d %B %Y",
    "%d %b %Y",
    "%d %B %Y %H:%M:%S",
    "%d %b %Y %H:%M:%S",
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%a %b %d %Y",
    "%a %b %d %Y %H:%M:%S",
)


@lru_cache(maxsize=256)
def resolve_zone(name: str) -> tzinfo:
    """Return the tzinfo for ``name`` or raise ``InvalidTimezoneError``."""

    if name == UTC_NAME:
        return UTC
    if not name or not name.strip():
        raise InvalidTimezoneError(f"invalid timezone: {name}")
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise InvalidTimezoneError(f"invalid timezone: {name}") from exc


def project(instant: Instant, zone: str) -> datetime:
    """Render ``instant`` as an aware wall-clock datetime in ``zone``."""

    return instant.to_datetime().astimezone(resolve_zone(zone))


def zone_abbreviation(moment: datetime) -> str:
    """Short zone name in effect at ``moment`` (``EST``, ``CEST``, ...)."""

    return moment.tzname() or UTC_NAME


def resolve(civil: str, zone: str) -> Instant:
    """Interpret ``civil`` as local time in ``zone`` and return the instant.

    An explicit offset in the string wins over ``zone``. Wall times inside a
    spring-forward gap take the offset in effect before the transition;
    ambiguous wall times resolve to their first occurrence.
    """

    tz = resolve_zone(zone)
    parsed = parse_calendar(civil)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz, fold=0)
    return Instant.from_datetime(parsed)


def parse_calendar(value: str) -> datetime:
    """Parse an ISO-8601 or general calendar string.

    Returns a naive datetime unless the string carried its own offset.
    """

    text = _WHITESPACE.sub(" ", value.strip())
    if not text:
        raise InvalidDateFormatError(REASON_INVALID_DATE)

    if "T" in text or _ISO_PREFIX.match(text):
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            pass

    parsed = _parse_rfc2822(text)
    if parsed is not None:
        return parsed

    explicit_utc = False
    match = _TRAILING_UTC.search(text)
    if match and match.start() > 0:
        text = text[: match.start()]
        explicit_utc = True

    for pattern in _GENERAL_FORMATS:
        try:
            parsed = datetime.strptime(text, pattern)
        except ValueError:
            continue
        return parsed.replace(tzinfo=UTC) if explicit_utc else parsed

    raise InvalidDateFormatError(REASON_INVALID_DATE)


def _parse_rfc2822(text: str) -> datetime | None:
    if "," not in text or ":" not in text:
        return None
    try:
        parsed = parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        return None
    return parsed
