"""Kinepolis weekly schedule sheets (Luxembourg/Belgium layout)."""

from cinegrid.parsers.base import ColumnRole, DialectConfig, ExtractionMode, ScheduleParser
from cinegrid.parsers.dates import NUMERIC_RANGE, WEDNESDAY_DATE, WEEK_NUMBER_THEN_DATE
from cinegrid.parsers.models import ParserIdentity
from cinegrid.parsers.title import RATING_ONLY_GRAMMAR

# Film | Durée | Version | Mer | Jeu | Ven | Sam | Dim | Lun | Mar
# Headers mix English, French and German depending on the site.
KINEPOLIS = DialectConfig(
    slug="kinepolis",
    name="Kinepolis",
    locales=("en", "fr", "de"),
    mode=ExtractionMode.COLUMNS,
    title_grammar=RATING_ONLY_GRAMMAR,
    optional_columns=frozenset({ColumnRole.DURATION, ColumnRole.VERSION}),
    date_range_patterns=(NUMERIC_RANGE, WEEK_NUMBER_THEN_DATE, WEDNESDAY_DATE),
    min_column_count=3,
)


class KinepolisParser(ScheduleParser):
    """Column-dense Kinepolis sheet: one film per row, one column per weekday."""

    def __init__(self, config: DialectConfig = KINEPOLIS, identity: ParserIdentity | None = None) -> None:
        super().__init__(config, identity)
