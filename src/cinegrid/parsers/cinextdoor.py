"""
Cinextdoor programme sheets.

Title-dense layout: every per-film field lives in the title cell, e.g.
``"Dune (Denis Villeneuve, 2024) - 155' - VO st FR&NL (12)"``, followed by
one column per weekday. The header row tends to sit below a few banner rows.
"""

from cinegrid.parsers.base import DialectConfig, ExtractionMode, ScheduleParser
from cinegrid.parsers.dates import FRENCH_RANGE, NUMERIC_RANGE
from cinegrid.parsers.models import ParserIdentity
from cinegrid.parsers.title import FRENCH_TITLE_GRAMMAR

CINEXTDOOR = DialectConfig(
    slug="cinextdoor",
    name="Cinextdoor",
    locales=("fr", "en"),
    mode=ExtractionMode.TITLE,
    title_grammar=FRENCH_TITLE_GRAMMAR,
    optional_columns=frozenset(),
    header_scan_rows=15,
    date_range_patterns=(NUMERIC_RANGE, FRENCH_RANGE),
    min_column_count=2,
    min_title_length=4,
    skip_keywords=("cinextdoor",),
)


class CinextdoorParser(ScheduleParser):
    """Title-dense sheet parsed with the French title grammar."""

    def __init__(self, config: DialectConfig = CINEXTDOOR, identity: ParserIdentity | None = None) -> None:
        super().__init__(config, identity)
