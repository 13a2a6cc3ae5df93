"""
Parsing of HH:MM strings into TimeOfDay.
"""

import re

from .types import TimeOfDay


_TIME_RE = re.compile(r"^\s*(\d{1,3}):(\d{2})\s*$")


class InvalidTimeError(ValueError):
    """Raised for a malformed or out-of-range time string."""
    pass


def parse_time_of_day(value: str, allow_extended: bool = False) -> TimeOfDay:
    """
    Parse "H:MM" / "HH:MM".

    With allow_extended, hours past 23 are accepted and mean the time falls
    on a following day (e.g. "30:00" is 06:00 the next day).
    """
    if not isinstance(value, str):
        raise InvalidTimeError(f"Time must be a string, got {type(value).__name__}")

    match = _TIME_RE.match(value)
    if not match:
        raise InvalidTimeError(f"Invalid time '{value}', expected HH:MM")

    hour = int(match.group(1))
    minute = int(match.group(2))

    if minute > 59:
        raise InvalidTimeError(f"Invalid minute in '{value}'")
    if hour > 23 and not allow_extended:
        raise InvalidTimeError(f"Invalid hour in '{value}'")

    return TimeOfDay(hour=hour, minute=minute)
