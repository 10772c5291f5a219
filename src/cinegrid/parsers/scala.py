"""Scala (Cinextdoor group) sheets: the title-dense layout in German."""

from dataclasses import replace

from cinegrid.parsers.base import DialectConfig
from cinegrid.parsers.cinextdoor import CINEXTDOOR, CinextdoorParser
from cinegrid.parsers.dates import GERMAN_RANGE, NUMERIC_RANGE
from cinegrid.parsers.models import ParserIdentity
from cinegrid.parsers.title import GERMAN_TITLE_GRAMMAR

# "Mi 04.06." headers, "vom 04.06. bis 10.06." ranges, FSK ratings and
# OmU/OV/DF version markers.
SCALA_CINEXTDOOR = replace(
    CINEXTDOOR,
    slug="scala-cinextdoor",
    name="Scala (Cinextdoor)",
    locales=("de", "en"),
    title_grammar=GERMAN_TITLE_GRAMMAR,
    date_range_patterns=(GERMAN_RANGE, NUMERIC_RANGE),
    skip_keywords=("cinextdoor", "scala"),
)


class ScalaCinextdoorParser(CinextdoorParser):
    def __init__(self, config: DialectConfig = SCALA_CINEXTDOOR, identity: ParserIdentity | None = None) -> None:
        super().__init__(config, identity)
