"""Tests for the German Scala dialect."""

from datetime import date

import pytest

from cinegrid.parsers.models import Language, ParserContext
from cinegrid.parsers.scala import ScalaCinextdoorParser

HEADER = ["Film", "Mi 04.06.", "Do 05.06.", "Fr 06.06.", "Sa 07.06.", "So 08.06.", "Mo 09.06.", "Di 10.06."]


@pytest.fixture
def german_context(languages: list[Language]) -> ParserContext:
    return ParserContext(languages=languages, reference_date=date(2025, 5, 1))


class TestScalaParser:
    def setup_method(self) -> None:
        self.parser = ScalaCinextdoorParser()

    def test_german_sheet(self, german_context: ParserContext) -> None:
        rows = [
            ["Scala Programm vom 04.06. bis 10.06.2025"],
            HEADER,
            ["Das Lehrerzimmer FSK 12 - 98 min - OmU", "", "", "20:15", "", "", "", ""],
            ["Oppenheimer (Christopher Nolan, 2023) - 180' - DF", "19:00", "", "", "", "16:00", "", ""],
        ]

        result = self.parser.parse_rows(rows, german_context)
        sheet = result.sheets[0]

        assert sheet.date_range.start == date(2025, 6, 4)
        assert sheet.date_range.end == date(2025, 6, 10)

        lehrerzimmer, oppenheimer = sheet.films
        assert lehrerzimmer.movie_name == "Das Lehrerzimmer"
        assert lehrerzimmer.age_rating == "FSK 12"
        assert lehrerzimmer.duration_minutes == 98
        assert lehrerzimmer.subtitle_language_codes == ["de"]
        assert lehrerzimmer.language is None
        assert lehrerzimmer.screening_shows[0].date == date(2025, 6, 6)

        assert oppenheimer.language_code == "de"
        assert oppenheimer.language == "Deutsch"
        assert oppenheimer.director == "Christopher Nolan"
        assert [show.date for show in oppenheimer.screening_shows] == [date(2025, 6, 4), date(2025, 6, 8)]

    def test_french_headers_are_not_recognised(self, german_context: ParserContext) -> None:
        rows = [["Film", "Mer", "Jeu", "Ven", "Sam", "Dim", "Lun", "Mar"], ["Dune - OV", "14:00"]]

        result = self.parser.parse_rows(rows, german_context)

        assert result.total_films == 0
        assert result.errors[0].startswith("[Sheet1] Could not find a header row")

    def test_banner_with_cinema_name_is_skipped(self, german_context: ParserContext) -> None:
        rows = [
            HEADER,
            ["Scala Sommerkino", "", "", "", "", "", "", ""],
            ["Past Lives - OV ut DE", "", "", "", "", "", "", "21:00"],
        ]

        films = self.parser.parse_rows(rows, german_context).sheets[0].films

        assert [film.movie_name for film in films] == ["Past Lives"]
        assert films[0].subtitle_language_codes == ["de"]
