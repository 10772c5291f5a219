"""Date helpers for weekly cinema schedules."""

import re
from datetime import date, timedelta

from cinegrid.lexicon import LOCALES, Weekday, month_number

_WORD = r"[^\W\d_]+\.?"


def expand_year(value: str | int | None, default: int) -> int:
    """
    Expand a year token.

    Two-digit years are taken as 20YY; a missing year falls back to ``default``.
    """
    if value is None or value == "":
        return default
    year = int(value)
    return 2000 + year if year < 100 else year


def parse_flexible_date(
    text: str, default_year: int | None = None, locales: tuple[str, ...] = LOCALES
) -> date | None:
    """
    Parse a date written in one of the layouts found in schedule headers.

    Supports:
        "2025-06-04", "04.06.25", "04.06.2025", "04/06/2025",
        "4 juin 2025", "4. Juni", "June 4, 2025", "4 June"

    Args:
        text: Date text
        default_year: Year used when the text carries none (defaults to this year)
        locales: Month-name tables to consult

    Returns:
        The date, or None if the text is not a recognised date
    """
    if not text:
        return None

    cleaned = text.strip()
    year = default_year or date.today().year

    try:
        match = re.fullmatch(r"(\d{4})-(\d{2})-(\d{2})", cleaned)
        if match:
            return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))

        match = re.fullmatch(r"(\d{1,2})\.(\d{1,2})\.(\d{2,4})?", cleaned)
        if match:
            return date(expand_year(match.group(3), year), int(match.group(2)), int(match.group(1)))

        match = re.fullmatch(r"(\d{1,2})/(\d{1,2})/(\d{2,4})", cleaned)
        if match:
            return date(expand_year(match.group(3), year), int(match.group(2)), int(match.group(1)))

        # "4 juin 2025", "04. Juni", "4 June, 2025"
        match = re.fullmatch(rf"(\d{{1,2}})\.?\s+({_WORD}),?\s*(\d{{4}})?", cleaned)
        if match:
            month = month_number(match.group(2), locales)
            if month:
                return date(expand_year(match.group(3), year), month, int(match.group(1)))

        # "June 4, 2025", "June 04"
        match = re.fullmatch(rf"({_WORD})\s+(\d{{1,2}}),?\s*(\d{{4}})?", cleaned)
        if match:
            month = month_number(match.group(1), locales)
            if month:
                return date(expand_year(match.group(3), year), month, int(match.group(2)))
    except ValueError:
        # Day/month out of range, e.g. "31/02/2025"
        return None

    return None


def generate_date_range(start: date, end: date) -> list[tuple[date, Weekday]]:
    """All dates from ``start`` to ``end`` inclusive, paired with their weekday."""
    days: list[tuple[date, Weekday]] = []
    current = start
    while current <= end:
        days.append((current, Weekday.from_date(current)))
        current += timedelta(days=1)
    return days


def get_week_start_date(day: date, week_start_day: int = 3) -> date:
    """
    First day of the programming week containing ``day``.

    Args:
        day: Any date in the week
        week_start_day: 0=Sunday, 1=Monday, ... 3=Wednesday (default)
    """
    sunday_index = Weekday.from_date(day).sunday_index
    return day - timedelta(days=(sunday_index - week_start_day) % 7)
