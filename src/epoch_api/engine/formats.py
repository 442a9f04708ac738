"""Render instants as strings.

Four named styles are recognized case-insensitively (``iso``, ``us``, ``uk``,
``long``). Anything else is a date-fns style pattern: runs of the same latin
letter form a token (``yyyy``, ``MMM``, ``hh``), text inside single quotes is
literal (``''`` is an escaped quote), and every other character is copied as
is. Unknown letters are rejected rather than silently echoed, as are ``Y``
(week-numbering year) and ``D``/``DD`` (day of year), which are nearly always
typos for ``y`` and ``d``. A letter followed by ``o`` renders as an ordinal
(``do`` -> ``1st``) for the numeric fields that support it.

Weeks for ``w``/``e``/``c`` start on Sunday with week 1 holding January 1st;
``I``/``i``/``R`` follow ISO-8601. ``zzzz`` uses English long names for common
zones and falls back to a long GMT offset (``GMT+05:45``) for the rest.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import date, datetime, timedelta

from .errors import InvalidFormatError
from .instants import Instant
from .zones import UTC_NAME, project, resolve_zone, zone_abbreviation

__all__ = [
    "DEFAULT_STYLE",
    "NAMED_STYLES",
    "format_pattern",
    "iso_utc",
    "render",
    "zone_local_iso",
]

DEFAULT_STYLE = "iso"

NAMED_STYLES: dict[str, str] = {
    "us": "MM/dd/yyyy hh:mm:ss a",
    "uk": "dd/MM/yyyy HH:mm:ss",
    "long": "MMMM dd, yyyy hh:mm:ss a",
}

ZONE_LOCAL_PATTERN = "yyyy-MM-dd'T'HH:mm:ssXXX"

_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_ORDINAL_SUFFIXES = {1: "st", 2: "nd", 3: "rd"}


class PatternError(ValueError):
    """Raised by ``format_pattern`` for tokens it cannot render."""


def iso_utc(instant: Instant) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""

    moment = instant.to_datetime()
    return f"{moment:%Y-%m-%dT%H:%M:%S}.{instant.millis % 1000:03d}Z"


def zone_local_iso(instant: Instant, zone: str) -> str:
    """ISO string for the wall time in ``zone``.

    ``UTC`` keeps millisecond precision; other zones render whole seconds with
    a ``+HH:MM`` offset (``Z`` when the offset is zero).
    """

    if zone == UTC_NAME:
        return iso_utc(instant)
    return format_pattern(project(instant, zone), ZONE_LOCAL_PATTERN)


def render(instant: Instant, zone: str, spec: str | None = DEFAULT_STYLE) -> str:
    """Render ``instant`` in ``zone`` using a named style or a custom pattern."""

    resolve_zone(zone)
    style = spec or DEFAULT_STYLE
    key = style.lower()
    if key == DEFAULT_STYLE:
        return iso_utc(instant)

    moment = project(instant, zone)
    named = NAMED_STYLES.get(key)
    if named is not None:
        suffix = UTC_NAME if zone == UTC_NAME else zone_abbreviation(moment)
        return f"{format_pattern(moment, named)} {suffix}"

    try:
        return format_pattern(moment, style)
    except PatternError as exc:
        raise InvalidFormatError(f"invalid format parameter: {style}") from exc


def format_pattern(moment: datetime, pattern: str) -> str:
    """Apply a date-fns style ``pattern`` to an aware datetime."""

    parts: list[str] = []
    for kind, value, count in _tokenize(pattern):
        if kind == "literal":
            parts.append(value)
        elif kind == "ordinal":
            parts.append(_ordinal(_ORDINAL_SOURCES[value](moment)))
        else:
            field = _FIELDS.get(value)
            if field is None:
                raise PatternError(f"unsupported token {value * count!r}")
            parts.append(field(moment, count))
    return "".join(parts)


def _tokenize(pattern: str) -> Iterator[tuple[str, str, int]]:
    index = 0
    length = len(pattern)
    while index < length:
        char = pattern[index]
        if char == "'":
            if pattern.startswith("''", index):
                yield "literal", "'", 1
                index += 2
                continue
            text, index = _read_quoted(pattern, index + 1)
            yield "literal", text, 1
            continue
        if char.isascii() and char.isalpha():
            end = index
            while end < length and pattern[end] == char:
                end += 1
            count = end - index
            if count == 1 and char in _ORDINAL_SOURCES and pattern.startswith("o", end):
                yield "ordinal", char, 1
                index = end + 1
                continue
            yield "field", char, count
            index = end
            continue
        yield "literal", char, 1
        index += 1


def _read_quoted(pattern: str, index: int) -> tuple[str, int]:
    chunk: list[str] = []
    length = len(pattern)
    while index < length:
        if pattern[index] == "'":
            if pattern.startswith("''", index):
                chunk.append("'")
                index += 2
                continue
            return "".join(chunk), index + 1
        chunk.append(pattern[index])
        index += 1
    # Unterminated quote runs to the end of the pattern.
    return "".join(chunk), index


# ---------------------------------------------------------------------------
# Calendar helpers
# ---------------------------------------------------------------------------


def _sunday_week_start(day: date) -> date:
    return day - timedelta(days=(day.weekday() + 1) % 7)


def _local_week(moment: datetime) -> int:
    """Week of year with Sunday-start weeks; week 1 holds January 1st."""

    day = moment.date()
    start = _sunday_week_start(day)
    if start >= _sunday_week_start(date(day.year + 1, 1, 1)):
        return 1
    return (start - _sunday_week_start(date(day.year, 1, 1))).days // 7 + 1


def _local_weekday(moment: datetime) -> int:
    # Sunday is 1, Saturday is 7.
    return (moment.weekday() + 1) % 7 + 1


def _day_of_year(moment: datetime) -> int:
    return moment.timetuple().tm_yday


def _quarter_of(moment: datetime) -> int:
    return (moment.month - 1) // 3 + 1


def _hour_of_12(moment: datetime) -> int:
    return moment.hour % 12 or 12


# ---------------------------------------------------------------------------
# Field renderers
# ---------------------------------------------------------------------------


def _pad(value: int, count: int) -> str:
    return str(value).zfill(count)


def _limit(count: int, maximum: int) -> None:
    if count > maximum:
        raise PatternError(f"token too long ({count} > {maximum})")


def _ordinal(number: int) -> str:
    if 11 <= number % 100 <= 13:
        return f"{number}th"
    return f"{number}{_ORDINAL_SUFFIXES.get(number % 10, 'th')}"


def _era(moment: datetime, count: int) -> str:
    _limit(count, 5)
    return {4: "Anno Domini", 5: "A"}.get(count, "AD")


def _year(moment: datetime, count: int) -> str:
    if count == 2:
        return _pad(moment.year % 100, 2)
    return _pad(moment.year, count)


def _padded_year(moment: datetime, count: int) -> str:
    return _pad(moment.year, count)


def _iso_year(moment: datetime, count: int) -> str:
    return _pad(moment.isocalendar().year, count)


def _quarter(moment: datetime, count: int) -> str:
    _limit(count, 5)
    quarter = _quarter_of(moment)
    if count == 3:
        return f"Q{quarter}"
    if count == 4:
        return f"{_ordinal(quarter)} quarter"
    if count == 5:
        return str(quarter)
    return _pad(quarter, count)


def _month(moment: datetime, count: int) -> str:
    _limit(count, 5)
    name = _MONTHS[moment.month - 1]
    if count == 3:
        return name[:3]
    if count == 4:
        return name
    if count == 5:
        return name[0]
    return _pad(moment.month, count)


def _local_week_field(moment: datetime, count: int) -> str:
    _limit(count, 2)
    return _pad(_local_week(moment), count)


def _iso_week_field(moment: datetime, count: int) -> str:
    _limit(count, 2)
    return _pad(moment.isocalendar().week, count)


def _day(moment: datetime, count: int) -> str:
    _limit(count, 2)
    return _pad(moment.day, count)


def _day_of_year_field(moment: datetime, count: int) -> str:
    if count < 3:
        raise PatternError("use d or dd for the day of month")
    return _pad(_day_of_year(moment), count)


def _weekday_name(moment: datetime, count: int) -> str:
    name = _WEEKDAYS[moment.weekday()]
    if count == 4:
        return name
    if count == 5:
        return name[0]
    if count == 6:
        return name[:2]
    return name[:3]


def _weekday(moment: datetime, count: int) -> str:
    _limit(count, 6)
    return _weekday_name(moment, count)


def _local_weekday_field(moment: datetime, count: int) -> str:
    _limit(count, 6)
    if count <= 2:
        return _pad(_local_weekday(moment), count)
    return _weekday_name(moment, count)


def _iso_weekday_field(moment: datetime, count: int) -> str:
    _limit(count, 6)
    if count <= 2:
        return _pad(moment.isoweekday(), count)
    return _weekday_name(moment, count)


def _meridiem(moment: datetime, count: int) -> str:
    _limit(count, 5)
    is_pm = moment.hour >= 12
    if count == 3:
        return "pm" if is_pm else "am"
    if count == 4:
        return "p.m." if is_pm else "a.m."
    if count == 5:
        return "p" if is_pm else "a"
    return "PM" if is_pm else "AM"


def _day_period(moment: datetime, count: int) -> str:
    _limit(count, 5)
    if moment.hour == 12:
        return "n" if count == 5 else "noon"
    if moment.hour == 0:
        return "mi" if count == 5 else "midnight"
    return _meridiem(moment, count)


def _flexible_day_period(moment: datetime, count: int) -> str:
    _limit(count, 5)
    if moment.hour >= 17:
        return "in the evening"
    if moment.hour >= 12:
        return "in the afternoon"
    if moment.hour >= 4:
        return "in the morning"
    return "at night"


def _hour_12(moment: datetime, count: int) -> str:
    _limit(count, 2)
    return _pad(_hour_of_12(moment), count)


def _hour_23(moment: datetime, count: int) -> str:
    _limit(count, 2)
    return _pad(moment.hour, count)


def _hour_11(moment: datetime, count: int) -> str:
    _limit(count, 2)
    return _pad(moment.hour % 12, count)


def _hour_24(moment: datetime, count: int) -> str:
    _limit(count, 2)
    return _pad(moment.hour or 24, count)


def _minute(moment: datetime, count: int) -> str:
    _limit(count, 2)
    return _pad(moment.minute, count)


def _second(moment: datetime, count: int) -> str:
    _limit(count, 2)
    return _pad(moment.second, count)


def _fraction(moment: datetime, count: int) -> str:
    digits = f"{moment.microsecond // 1000:03d}"
    if count <= 3:
        return digits[:count]
    return digits + "0" * (count - 3)


def _offset_minutes(moment: datetime) -> int:
    delta = moment.utcoffset() or timedelta(0)
    return int(delta.total_seconds()) // 60


def _gmt_offset(moment: datetime, *, long: bool) -> str:
    total_minutes = _offset_minutes(moment)
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)
    if long:
        return f"GMT{sign}{hours:02d}:{minutes:02d}"
    return f"GMT{sign}{hours}" + (f":{minutes:02d}" if minutes else "")


def _zone_name(moment: datetime, count: int) -> str:
    _limit(count, 4)
    if count < 4:
        return zone_abbreviation(moment)
    names = _LONG_ZONE_NAMES.get(getattr(moment.tzinfo, "key", None) or UTC_NAME)
    if names is None:
        return _gmt_offset(moment, long=True)
    standard, daylight = names
    return daylight if moment.dst() else standard


def _localized_offset(moment: datetime, count: int) -> str:
    _limit(count, 4)
    return _gmt_offset(moment, long=count == 4)


def _offset(moment: datetime, count: int, *, zulu: bool) -> str:
    _limit(count, 5)
    total_minutes = _offset_minutes(moment)
    if zulu and total_minutes == 0:
        return "Z"
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)
    if count == 1:
        return f"{sign}{hours:02d}" + (f"{minutes:02d}" if minutes else "")
    if count in (3, 5):
        return f"{sign}{hours:02d}:{minutes:02d}"
    return f"{sign}{hours:02d}{minutes:02d}"


def _epoch_seconds(moment: datetime, count: int) -> str:
    return str(Instant.from_datetime(moment).millis // 1000)


def _epoch_millis(moment: datetime, count: int) -> str:
    return str(Instant.from_datetime(moment).millis)


_LONG_DATES = {
    1: "MM/dd/yyyy",
    2: "MMM d, yyyy",
    3: "MMMM do, yyyy",
    4: "EEEE, MMMM do, yyyy",
}
_LONG_TIMES = {
    1: "h:mm a",
    2: "h:mm:ss a",
}


def _long_date(moment: datetime, count: int) -> str:
    _limit(count, 4)
    return format_pattern(moment, _LONG_DATES[count])


def _long_time(moment: datetime, count: int) -> str:
    _limit(count, 2)
    return format_pattern(moment, _LONG_TIMES[count])


_EASTERN = ("Eastern Standard Time", "Eastern Daylight Time")
_CENTRAL = ("Central Standard Time", "Central Daylight Time")
_MOUNTAIN = ("Mountain Standard Time", "Mountain Daylight Time")
_PACIFIC = ("Pacific Standard Time", "Pacific Daylight Time")
_CENTRAL_EUROPEAN = ("Central European Standard Time", "Central European Summer Time")
_EASTERN_EUROPEAN = ("Eastern European Standard Time", "Eastern European Summer Time")
_AUSTRALIAN_EASTERN = ("Australian Eastern Standard Time", "Australian Eastern Daylight Time")


def _single(name: str) -> tuple[str, str]:
    return name, name


# ``zzzz`` names for common zones, (standard, daylight). Other zones render
# as a long GMT offset.
_LONG_ZONE_NAMES: dict[str, tuple[str, str]] = {
    "UTC": _single("Coordinated Universal Time"),
    "Etc/UTC": _single("Coordinated Universal Time"),
    "America/New_York": _EASTERN,
    "America/Detroit": _EASTERN,
    "America/Toronto": _EASTERN,
    "America/Chicago": _CENTRAL,
    "America/Winnipeg": _CENTRAL,
    "America/Denver": _MOUNTAIN,
    "America/Edmonton": _MOUNTAIN,
    "America/Phoenix": _single("Mountain Standard Time"),
    "America/Los_Angeles": _PACIFIC,
    "America/Vancouver": _PACIFIC,
    "America/Anchorage": ("Alaska Standard Time", "Alaska Daylight Time"),
    "Pacific/Honolulu": _single("Hawaii-Aleutian Standard Time"),
    "Europe/London": ("Greenwich Mean Time", "British Summer Time"),
    "Europe/Paris": _CENTRAL_EUROPEAN,
    "Europe/Berlin": _CENTRAL_EUROPEAN,
    "Europe/Madrid": _CENTRAL_EUROPEAN,
    "Europe/Rome": _CENTRAL_EUROPEAN,
    "Europe/Amsterdam": _CENTRAL_EUROPEAN,
    "Europe/Brussels": _CENTRAL_EUROPEAN,
    "Europe/Vienna": _CENTRAL_EUROPEAN,
    "Europe/Stockholm": _CENTRAL_EUROPEAN,
    "Europe/Warsaw": _CENTRAL_EUROPEAN,
    "Europe/Athens": _EASTERN_EUROPEAN,
    "Europe/Helsinki": _EASTERN_EUROPEAN,
    "Asia/Tokyo": _single("Japan Standard Time"),
    "Asia/Seoul": _single("Korean Standard Time"),
    "Asia/Shanghai": _single("China Standard Time"),
    "Asia/Singapore": _single("Singapore Standard Time"),
    "Asia/Kolkata": _single("India Standard Time"),
    "Asia/Dubai": _single("Gulf Standard Time"),
    "Australia/Sydney": _AUSTRALIAN_EASTERN,
    "Australia/Melbourne": _AUSTRALIAN_EASTERN,
    "Australia/Brisbane": _single("Australian Eastern Standard Time"),
    "Pacific/Auckland": ("New Zealand Standard Time", "New Zealand Daylight Time"),
}

_FIELDS: dict[str, Callable[[datetime, int], str]] = {
    "G": _era,
    "y": _year,
    "u": _padded_year,
    "R": _iso_year,
    "Q": _quarter,
    "q": _quarter,
    "M": _month,
    "L": _month,
    "w": _local_week_field,
    "I": _iso_week_field,
    "d": _day,
    "D": _day_of_year_field,
    "E": _weekday,
    "e": _local_weekday_field,
    "c": _local_weekday_field,
    "i": _iso_weekday_field,
    "a": _meridiem,
    "b": _day_period,
    "B": _flexible_day_period,
    "h": _hour_12,
    "H": _hour_23,
    "K": _hour_11,
    "k": _hour_24,
    "m": _minute,
    "s": _second,
    "S": _fraction,
    "z": _zone_name,
    "O": _localized_offset,
    "X": lambda moment, count: _offset(moment, count, zulu=True),
    "x": lambda moment, count: _offset(moment, count, zulu=False),
    "t": _epoch_seconds,
    "T": _epoch_millis,
    "P": _long_date,
    "p": _long_time,
}

_ORDINAL_SOURCES: dict[str, Callable[[datetime], int]] = {
    "y": lambda moment: moment.year,
    "Q": _quarter_of,
    "q": _quarter_of,
    "M": lambda moment: moment.month,
    "L": lambda moment: moment.month,
    "w": _local_week,
    "I": lambda moment: moment.isocalendar().week,
    "d": lambda moment: moment.day,
    "D": _day_of_year,
    "e": _local_weekday,
    "c": _local_weekday,
    "i": lambda moment: moment.isoweekday(),
    "h": _hour_of_12,
    "H": lambda moment: moment.hour,
    "K": lambda moment: moment.hour % 12,
    "k": lambda moment: moment.hour or 24,
    "m": lambda moment: moment.minute,
    "s": lambda moment: moment.second,
}
