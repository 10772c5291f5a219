"""Tests for the Kinepolis France dialects."""

from datetime import date

from cinegrid.lexicon import Weekday
from cinegrid.parsers.kinepolis_france import (
    KinepolisLongwyThionvilleParser,
    KinepolisMetzAmphitheatreParser,
    KinepolisWavesParser,
)
from cinegrid.parsers.models import ParserContext

DAYS = ["Mer", "Jeu", "Ven", "Sam", "Dim", "Lun", "Mar"]
EMPTY_WEEK = [""] * 7


# ---------------------------------------------------------------------------
# Longwy / Thionville
# ---------------------------------------------------------------------------


class TestLongwyThionville:
    def setup_method(self) -> None:
        self.parser = KinepolisLongwyThionvilleParser()

    def test_french_range_header(self, context: ParserContext) -> None:
        rows = [
            ["Kinepolis Thionville", "Du 04/06 au 10/06"],
            ["Film", "Durée", "Version", *DAYS],
            ["Le Comte de Monte-Cristo (12)", "178'", "VF", "14:00\n20:00", "", "17:30", "", "", "", ""],
        ]

        sheet = self.parser.parse_rows(rows, context).sheets[0]

        assert sheet.date_range.start == date(2025, 6, 4)
        assert sheet.date_range.end == date(2025, 6, 10)
        film = sheet.films[0]
        assert film.movie_name == "Le Comte de Monte-Cristo"
        assert film.language_code == "fr"
        assert [show.date for show in film.screening_shows] == [
            date(2025, 6, 4),
            date(2025, 6, 4),
            date(2025, 6, 6),
        ]

    def test_french_range_across_new_year(self) -> None:
        context = ParserContext(reference_date=date(2025, 12, 1))
        rows = [
            ["Du 31/12 au 06/01"],
            ["Film", "Durée", "Version", *DAYS],
            ["Vaiana 2 (TP)", "100'", "VF", "", "14:00", *[""] * 5],
        ]

        sheet = self.parser.parse_rows(rows, context).sheets[0]

        assert sheet.date_range.end == date(2026, 1, 6)
        assert sheet.films[0].screening_shows[0].date == date(2026, 1, 1)

    def test_numeric_range_still_accepted(self, context: ParserContext) -> None:
        rows = [["04/06/2025 - 10/06/2025"], ["Film", *DAYS], ["Vaiana 2", "14:00", *[""] * 6]]

        sheet = self.parser.parse_rows(rows, context).sheets[0]

        assert sheet.date_range.start == date(2025, 6, 4)

    def test_identity(self) -> None:
        assert self.parser.slug == "kinepolis-fr-longwy-thionville"


# ---------------------------------------------------------------------------
# Metz / Amphithéâtre
# ---------------------------------------------------------------------------


class TestMetzAmphitheatre:
    def setup_method(self) -> None:
        self.parser = KinepolisMetzAmphitheatreParser()

    def rows(self, banner: str) -> list[list[str]]:
        return [
            ["Kinepolis Metz Amphithéâtre", banner],
            DAYS,
            ["Film", "Réalisateur", "Genre", "Durée", "Version", *DAYS],
            [
                "Le Comte de Monte-Cristo (12)",
                "Matthieu Delaporte",
                "Aventure, Drame",
                "178'",
                "VF",
                "14:00\n20:00",
                "",
                "17:30",
                "",
                "",
                "",
                "",
            ],
        ]

    def test_weekday_banner_is_not_the_header(self) -> None:
        assert self.parser.find_header_row(self.rows("")) == 2

    def test_director_and_genre_columns(self, context: ParserContext) -> None:
        film = self.parser.parse_rows(self.rows("Du 25/06 au 01/07"), context).sheets[0].films[0]

        assert film.director == "Matthieu Delaporte"
        assert film.tags == ["Aventure", "Drame"]
        assert film.duration_minutes == 178
        assert film.age_rating == "12"

    def test_french_range(self, context: ParserContext) -> None:
        sheet = self.parser.parse_rows(self.rows("Du 25/06 au 01/07"), context).sheets[0]

        assert sheet.date_range.start == date(2025, 6, 25)
        assert sheet.date_range.end == date(2025, 7, 1)
        friday = [s.date for s in sheet.films[0].screening_shows if s.weekday == Weekday.FRI]
        assert friday == [date(2025, 6, 27)]

    def test_week_of_banner(self, context: ParserContext) -> None:
        sheet = self.parser.parse_rows(self.rows("Semaine du 25 juin 2025"), context).sheets[0]

        assert sheet.date_range.start == date(2025, 6, 25)
        assert sheet.date_range.end == date(2025, 7, 1)


# ---------------------------------------------------------------------------
# Waves
# ---------------------------------------------------------------------------


class TestWaves:
    def setup_method(self) -> None:
        self.parser = KinepolisWavesParser()

    def test_screen_column_becomes_tag(self, context: ParserContext) -> None:
        rows = [
            ["Film", "Salle", "Durée", "Version", *DAYS],
            ["Wicked (10)", "Salle 5", "160'", "VOSTFR", "", "21:00", *[""] * 5],
        ]

        film = self.parser.parse_rows(rows, context).sheets[0].films[0]

        assert film.tags == ["Screen: Salle 5"]
        assert film.subtitle_language_codes == ["fr"]
        assert film.movie_name == "Wicked"

    def test_site_banner_rows_are_skipped(self, context: ParserContext) -> None:
        rows = [
            ["Film", "Salle", "Durée", "Version", *DAYS],
            ["Kinepolis Waves Actisud", "", "", "", *EMPTY_WEEK],
            ["Wicked (10)", "Salle 5", "160'", "VOSTFR", "", "21:00", *[""] * 5],
        ]

        result = self.parser.parse_rows(rows, context)

        assert result.total_films == 1
        assert result.warnings == []

    def test_screen_column_ignored_by_other_sites(self, context: ParserContext) -> None:
        rows = [
            ["Film", "Salle", "Durée", "Version", *DAYS],
            ["Wicked (10)", "Salle 5", "160'", "VOSTFR", "", "21:00", *[""] * 5],
        ]

        film = KinepolisLongwyThionvilleParser().parse_rows(rows, context).sheets[0].films[0]

        assert film.tags == []
