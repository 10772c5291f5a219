"""Time and duration helpers for schedule cells."""

import re
from datetime import date, datetime
from zoneinfo import ZoneInfo

# "14:30", "9:05", "14h30", "14H30"
_SHOW_TIME_RE = re.compile(r"(?<![\d:.])(\d{1,2})[:hH](\d{2})(?![\d:])")


def time_to_float(time_str: str) -> float | None:
    """
    Convert an ``HH:MM`` (or ``HH:MM:SS``) string to decimal hours.

    Examples:
        "14:30" -> 14.5
        "9:00"  -> 9.0

    Returns:
        Decimal hours, or None if the string is not a valid time of day
    """
    if not time_str:
        return None

    cleaned = re.sub(r"\s+", "", time_str)
    match = re.fullmatch(r"(\d{1,2}):(\d{2})(?::(\d{2}))?", cleaned)
    if not match:
        return None

    hours = int(match.group(1))
    minutes = int(match.group(2))
    if hours > 23 or minutes > 59:
        return None

    return hours + minutes / 60

def parse_duration_to_minutes(duration: str) -> int | None:
    """
    Parse a free-text running time into minutes.

    Supported forms:
        "162'", "162′", "162 min", "162min.", "162 minutes" -> 162
        "2:42"                                              -> 162
        "2h 42m", "2h42", "2 h"                             -> 162 / 120
        "162"                                               -> 162

    Returns:
        Minutes, or None when the text is not a duration
    """
    if not duration:
        return None

    cleaned = duration.strip()

    match = re.fullmatch(r"(\d+)\s*['′]?\s*(?:min(?:ute)?s?\.?)?", cleaned, re.IGNORECASE)
    if match:
        return int(match.group(1))

    match = re.fullmatch(r"(\d+):(\d{2})", cleaned)
    if match:
        return int(match.group(1)) * 60 + int(match.group(2))

    match = re.fullmatch(
        r"(\d+)\s*h(?:ours?)?\s*(?:(\d+)\s*(?:m(?:in(?:ute)?s?)?)?)?", cleaned, re.IGNORECASE
    )
    if match:
        return int(match.group(1)) * 60 + int(match.group(2) or 0)

    return None

def parse_show_times(cell_value: str | None) -> list[str]:
    """
    Extract every show time from a single weekday cell.

    A cell can hold one time or several separated by newlines, commas or
    spaces ("14:00\\n19:00", "14:00, 19:00", "14h00 19h00"). Each is returned
    as a zero-padded ``HH:MM`` string in cell order; anything that is not a
    valid time of day is ignored.
    """
    if not cell_value:
        return []

    times: list[str] = []
    for match in _SHOW_TIME_RE.finditer(str(cell_value)):
        hours, minutes = int(match.group(1)), int(match.group(2))
        if hours > 23 or minutes > 59:
            continue
        times.append(f"{hours:02d}:{minutes:02d}")
    return times


def combine_date_and_time(day: date, time_str: str, timezone: str) -> datetime:
    """
    Build a timezone-aware datetime from a date and an ``HH:MM`` string.

    Raises:
        ValueError: If ``time_str`` is not a valid time of day
    """
    value = time_to_float(time_str)
    if value is None:
        raise ValueError(f"Invalid time format: {time_str!r}")

    hours, minutes = (int(part) for part in time_str.strip().split(":")[:2])
    return datetime(day.year, day.month, day.day, hours, minutes, tzinfo=ZoneInfo(timezone))
