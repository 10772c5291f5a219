"""
Kinepolis France sites.

Same column-dense grid as the Luxembourg sheets, but with French range
headers ("Du 04/06 au 10/06") and a few per-site extra columns.
"""

from dataclasses import replace

from cinegrid.parsers.base import ColumnRole, DialectConfig
from cinegrid.parsers.dates import FRENCH_RANGE, FRENCH_WEEK_OF, NUMERIC_RANGE
from cinegrid.parsers.kinepolis import KINEPOLIS, KinepolisParser
from cinegrid.parsers.models import ParserIdentity

_FRENCH = replace(
    KINEPOLIS,
    locales=("fr", "en"),
    date_range_patterns=(FRENCH_RANGE, NUMERIC_RANGE),
)

LONGWY_THIONVILLE = replace(
    _FRENCH,
    slug="kinepolis-fr-longwy-thionville",
    name="Kinepolis France (Longwy/Thionville)",
)

# Film | Réalisateur | Genre | Durée | Version | Mer ...
# Metz repeats weekday names in its banner rows, so the header must also
# carry a title column.
METZ_AMPHITHEATRE = replace(
    _FRENCH,
    slug="kinepolis-fr-metz-amphitheatre",
    name="Kinepolis France (Metz Amphithéâtre)",
    optional_columns=frozenset(
        {ColumnRole.DURATION, ColumnRole.VERSION, ColumnRole.DIRECTOR, ColumnRole.GENRE}
    ),
    header_requires_title=True,
    date_range_patterns=(FRENCH_RANGE, NUMERIC_RANGE, FRENCH_WEEK_OF),
)

# Film | Salle | Durée | Version | Mer ...
WAVES = replace(
    _FRENCH,
    slug="kinepolis-fr-waves",
    name="Kinepolis France (Waves)",
    optional_columns=frozenset({ColumnRole.DURATION, ColumnRole.VERSION, ColumnRole.SCREEN}),
    skip_keywords=("waves",),
)


class KinepolisLongwyThionvilleParser(KinepolisParser):
    def __init__(self, config: DialectConfig = LONGWY_THIONVILLE, identity: ParserIdentity | None = None) -> None:
        super().__init__(config, identity)


class KinepolisMetzAmphitheatreParser(KinepolisParser):
    def __init__(self, config: DialectConfig = METZ_AMPHITHEATRE, identity: ParserIdentity | None = None) -> None:
        super().__init__(config, identity)


class KinepolisWavesParser(KinepolisParser):
    def __init__(self, config: DialectConfig = WAVES, identity: ParserIdentity | None = None) -> None:
        super().__init__(config, identity)
