"""
Programming-week date detection.

A sheet announces its week either as an explicit range somewhere in the first
rows ("04/06 - 10/06", "Du 04/06 au 10/06", "vom 04.06. bis 10.06."), as a
single start date ("Semaine du 4 juin 2025"), or only through dated weekday
headers ("Mer 04/06"). Dialects choose which range patterns apply and in
what order.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Sequence

from cinegrid.lexicon import LOCALES, Weekday, leading_weekday
from cinegrid.parsers.models import DateRange
from cinegrid.utils.cells import Row, cell_to_string, row_text
from cinegrid.utils.dates import expand_year, generate_date_range, parse_flexible_date

logger = logging.getLogger(__name__)

_DM = r"(?P<{d}>\d{{1,2}})[/.](?P<{m}>\d{{1,2}})(?:[/.](?P<{y}>\d{{2,4}}))?"
_START = _DM.format(d="sd", m="sm", y="sy")
_END = _DM.format(d="ed", m="em", y="ey")


@dataclass(frozen=True)
class DateRangePattern:
    """
    One way of writing the programming week.

    Range patterns capture ``sd``/``sm``/``sy`` and ``ed``/``em``/``ey``
    (start/end day, month, optional year). Single-date patterns capture
    ``d``/``m``/``y`` and span ``span_days`` days from that date; ``m`` may be
    a month name.
    """

    name: str
    regex: re.Pattern[str]
    span_days: int = 7


# "04/06 - 10/06", "04.06.25 – 10.06.25"
NUMERIC_RANGE = DateRangePattern(
    "numeric-range", re.compile(_START + r"\.?\s*[-–—]\s*" + _END)
)
# "Du 04/06 au 10/06"
FRENCH_RANGE = DateRangePattern(
    "french-range", re.compile(r"\bdu\s*" + _START + r"\s*au\s*" + _END, re.IGNORECASE)
)
# "vom 04.06. bis 10.06.", "04.06. bis 10.06.2025"
GERMAN_RANGE = DateRangePattern(
    "german-range",
    re.compile(r"(?:\bvom\s*)?" + _START + r"\.?\s*(?:[-–—]|\bbis\b)\s*" + _END, re.IGNORECASE),
)
# "Semaine du 4 juin 2025", "semaine du 04/06"
FRENCH_WEEK_OF = DateRangePattern(
    "french-week-of",
    re.compile(
        r"\bsemaine\s+du\s+(?P<d>\d{1,2})(?:\s+|[/.])(?P<m>[^\W\d_]+\.?|\d{1,2})(?:[\s/.]+(?P<y>\d{2,4}))?",
        re.IGNORECASE,
    ),
)
# "Programme semaine 23 | 04/06", "Week 23 - 04.06"
WEEK_NUMBER_THEN_DATE = DateRangePattern(
    "week-number",
    re.compile(
        r"\b(?:semaine|week|woche)\s*\d+\b.*?(?P<d>\d{1,2})[/.](?P<m>\d{1,2})(?:[/.](?P<y>\d{2,4}))?",
        re.IGNORECASE,
    ),
)
# "Wednesday 4 June 2025", "Mercredi 4 juin"
WEDNESDAY_DATE = DateRangePattern(
    "wednesday-date",
    re.compile(
        r"\b(?:mer|wed|mercredi|wednesday|mittwoch)\b\D*?(?P<d>\d{1,2})\.?\s+(?P<m>[^\W\d_]+)(?:\s+(?P<y>\d{4}))?",
        re.IGNORECASE,
    ),
)


def _range_from_match(
    match: re.Match[str], pattern: DateRangePattern, reference_year: int, locales: tuple[str, ...]
) -> DateRange | None:
    groups = match.groupdict()
    try:
        if "sd" in groups:
            start_month = int(groups["sm"])
            end_month = int(groups["em"])
            if groups["sy"]:
                start_year = expand_year(groups["sy"], reference_year)
            elif groups["ey"]:
                end_year_hint = expand_year(groups["ey"], reference_year)
                start_year = end_year_hint - 1 if end_month < start_month else end_year_hint
            else:
                start_year = reference_year

            if groups["ey"]:
                end_year = expand_year(groups["ey"], reference_year)
            else:
                # Week crossing New Year: "29/12 - 04/01"
                end_year = start_year + 1 if end_month < start_month else start_year

            start = date(start_year, start_month, int(groups["sd"]))
            end = date(end_year, end_month, int(groups["ed"]))
        else:
            month = groups["m"].rstrip(".")
            year = expand_year(groups["y"], reference_year)
            text = f"{groups['d']}.{month}.{year}" if month.isdigit() else f"{groups['d']} {month} {year}"
            start = parse_flexible_date(text, reference_year, locales)
            if start is None:
                return None
            end = start + timedelta(days=pattern.span_days - 1)
    except ValueError:
        return None

    if end < start:
        return None
    return DateRange(start=start, end=end)


def detect_date_range(
    rows: Sequence[Row],
    patterns: Sequence[DateRangePattern],
    reference_year: int,
    scan_rows: int = 5,
    locales: tuple[str, ...] = LOCALES,
) -> DateRange | None:
    """
    Find the programming week in the first ``scan_rows`` rows.

    Each cell is tried against the patterns in order, then the whole row
    joined together (for layouts that spread "Semaine 23" and "04/06" over
    two cells). The first match wins.
    """
    for row_index, row in enumerate(rows[:scan_rows]):
        candidates = [cell_to_string(cell) for cell in row]
        candidates.append(row_text(row))
        for text in candidates:
            if not text:
                continue
            for pattern in patterns:
                match = pattern.regex.search(text)
                if not match:
                    continue
                found = _range_from_match(match, pattern, reference_year, locales)
                if found:
                    logger.debug(f"Date range {found} from row {row_index + 1} via {pattern.name}")
                    return found
    return None


def extract_header_dates(
    header_row: Row, reference_year: int, locales: tuple[str, ...] = LOCALES
) -> dict[Weekday, date]:
    """
    Dates printed next to weekday names in header cells ("Mer 04/06", "Mi. 04.06.24").

    Dates without a year take ``reference_year``; a header that runs from
    December into January moves the January columns into the next year.
    """
    found: list[tuple[Weekday, int, int, str | None]] = []
    for cell in header_row:
        text = cell_to_string(cell)
        weekday = leading_weekday(text, locales)
        if weekday is None:
            continue
        match = re.search(r"(\d{1,2})[/.](\d{1,2})(?:[/.](\d{2,4}))?", text)
        if match:
            found.append((weekday, int(match.group(1)), int(match.group(2)), match.group(3)))

    dates: dict[Weekday, date] = {}
    if not found:
        return dates

    first_month = found[0][2]
    for weekday, day, month, year_token in found:
        if year_token:
            year = expand_year(year_token, reference_year)
        else:
            year = reference_year + 1 if month < first_month else reference_year
        try:
            dates.setdefault(weekday, date(year, month, day))
        except ValueError:
            logger.debug(f"Ignoring invalid header date {day}/{month}/{year}")
    return dates


def build_weekday_dates(date_range: DateRange | None) -> dict[Weekday, date]:
    """Map each weekday to its first date inside the range."""
    mapping: dict[Weekday, date] = {}
    if date_range is None:
        return mapping
    for day, weekday in generate_date_range(date_range.start, date_range.end):
        mapping.setdefault(weekday, day)
    return mapping
