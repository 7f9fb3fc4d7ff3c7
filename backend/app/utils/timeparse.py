"""Wall-clock parsing and formatting helpers.

Two time notations reach this service:

- "HH:MM" wall-clock strings (plan times, quiet hours), colon separated.
- "HHMM" digit strings from venue hours payloads, e.g. "0830" or "2200".

All helpers work on naive values; nothing here consults a timezone.
"""

import re
from datetime import date

MINUTES_IN_DAY = 1440

_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")


def parse_clock(value: str) -> tuple[int, int]:
    """Parse an "HH:MM" (or "HH:MM:SS") string into (hour, minute).

    Raises:
        ValueError: If the string is not a valid wall-clock time.
    """
    match = _CLOCK_RE.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise ValueError(f"invalid time {value!r}, expected HH:MM")

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"time out of range: {value!r}")
    return hour, minute


def clock_to_minutes(value: str) -> int:
    """Convert "HH:MM" to minutes since midnight."""
    hour, minute = parse_clock(value)
    return hour * 60 + minute


def hhmm_to_minutes(value: str | int) -> int:
    """Convert a venue-hours "HHMM" value to minutes since midnight.

    Hours are floor(value / 100) and minutes value % 100, so "2200" -> 1320.

    Raises:
        ValueError: If the value is not made of digits.
    """
    text = str(value).strip()
    if not text.isdigit():
        raise ValueError(f"invalid venue time {value!r}, expected HHMM digits")

    number = int(text)
    return (number // 100) * 60 + number % 100


def minutes_to_clock(minutes: int) -> str:
    """Render minutes since midnight as "HH:MM" (wrapped into one day)."""
    normalized = minutes % MINUTES_IN_DAY
    return f"{normalized // 60:02d}:{normalized % 60:02d}"


def format_minutes(minutes: int) -> str:
    """Render minutes since midnight for people, e.g. 1140 -> "7:00 PM"."""
    normalized = minutes % MINUTES_IN_DAY
    hour, minute = divmod(normalized, 60)
    period = "PM" if hour >= 12 else "AM"
    display_hour = 12 if hour == 0 else hour - 12 if hour > 12 else hour
    return f"{display_hour}:{minute:02d} {period}"


def sunday_weekday(day: date) -> int:
    """Weekday index with Sunday = 0, as used by venue hours payloads."""
    return (day.weekday() + 1) % 7


def is_quiet_hour(hour: int, quiet_start: int, quiet_end: int) -> bool:
    """Whether an hour of day falls inside the quiet window [start, end).

    The window wraps midnight when start > end (e.g. 22 -> 8).
    A window with start == end is empty.
    """
    if quiet_start > quiet_end:
        return hour >= quiet_start or hour < quiet_end
    return quiet_start <= hour < quiet_end
