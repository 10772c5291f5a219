"""Data models for schedule parsers."""

from dataclasses import dataclass, field
import datetime as dt
from typing import Any, Sequence

from cinegrid.config import settings
from cinegrid.lexicon import Weekday

# ---------------------------------------------------------------------------
# Reference data (supplied by the caller, never mutated during a parse)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Language:
    id: str
    code: str  # e.g. "fr", "de", "en"
    name: str


@dataclass(frozen=True)
class Format:
    id: str
    code: str  # e.g. "3D"
    name: str


@dataclass(frozen=True)
class Technology:
    id: str
    code: str  # e.g. "IMAX", "4DX"
    name: str


@dataclass(frozen=True)
class LanguageMappingLine:
    """Exact version string -> languages override maintained by operators."""

    version_string: str
    spoken_language_id: str | None = None
    subtitle_language_ids: tuple[str, ...] = ()
    notes: str | None = None


@dataclass(frozen=True)
class LanguageMappingConfig:
    id: str
    name: str
    is_default: bool = False
    lines: tuple[LanguageMappingLine, ...] = ()


@dataclass(frozen=True)
class Country:
    code: str
    week_start_day: int | None = None  # 0=Sunday ... 6=Saturday


@dataclass(frozen=True)
class CinemaGroup:
    id: str
    name: str
    parser_slug: str | None = None
    language_mapping_id: str | None = None
    country: Country | None = None


@dataclass(frozen=True)
class Cinema:
    id: str
    name: str
    parser_slug: str | None = None
    country: Country | None = None
    week_start_day_override: int | None = None
    timezone: str | None = None


@dataclass(frozen=True)
class ParserIdentity:
    """Which dialect produced a result."""

    id: str
    slug: str
    name: str


@dataclass
class ParserContext:
    """
    Everything a parse needs besides the rows themselves.

    ``reference_date`` supplies the year for sheets that print day/month only;
    it defaults to today.
    """

    languages: Sequence[Language] = ()
    formats: Sequence[Format] = ()
    technologies: Sequence[Technology] = ()
    language_mapping: LanguageMappingConfig | None = None
    week_start_day: int = field(default_factory=lambda: settings.default_week_start_day)
    timezone: str = field(default_factory=lambda: settings.default_timezone)
    reference_date: dt.date | None = None

    @property
    def reference_year(self) -> int:
        return (self.reference_date or dt.date.today()).year


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------


@dataclass
class SheetRows:
    """One decoded worksheet: a name and its rows of raw cell values."""

    name: str
    rows: list[Sequence[Any]]


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DateRange:
    start: dt.date
    end: dt.date


@dataclass
class ScreeningShow:
    """
    One showing of a film.

    ``date`` and ``datetime`` are None when the sheet gave no way to resolve
    the weekday column to a calendar date.
    """

    time: str  # "HH:MM"
    time_float: float  # 14.5 for "14:30"
    weekday: Weekday | None = None  # weekday column the time was read from
    date: dt.date | None = None
    datetime: dt.datetime | None = None

    def __post_init__(self) -> None:
        """Validate that a resolved datetime is timezone-aware."""
        if self.datetime is not None and self.datetime.tzinfo is None:
            raise ValueError("datetime must be timezone-aware")


@dataclass
class ParsedFilm:
    """A film row normalized out of a schedule sheet."""

    import_title: str  # Title cell exactly as it appears in the sheet
    movie_name: str  # Title with rating/version/duration/format stripped
    movie_edition: str | None = None  # Format/technology name embedded in the title
    language: str | None = None
    language_code: str | None = None
    subtitle_language_codes: list[str] = field(default_factory=list)
    format_code: str | None = None
    format: Format | None = None
    technology: Technology | None = None
    duration: str | None = None
    duration_minutes: int | None = None
    age_rating: str | None = None
    director: str | None = None
    production_year: int | None = None
    version_string: str | None = None
    tags: list[str] = field(default_factory=list)
    start_week_date: dt.date | None = None
    screening_shows: list[ScreeningShow] = field(default_factory=list)

    @property
    def show_count(self) -> int:
        return len(self.screening_shows)


@dataclass
class ParsedSheet:
    sheet_name: str
    films: list[ParsedFilm] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    date_range: DateRange | None = None

    @property
    def film_count(self) -> int:
        return len(self.films)

    @property
    def showing_count(self) -> int:
        return sum(film.show_count for film in self.films)


@dataclass
class ParserResult:
    """The engine's only return value."""

    success: bool
    parser: ParserIdentity
    sheets: list[ParsedSheet] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def total_films(self) -> int:
        return sum(sheet.film_count for sheet in self.sheets)

    @property
    def total_showings(self) -> int:
        return sum(sheet.showing_count for sheet in self.sheets)

    @property
    def summary(self) -> dict[str, int]:
        return {
            "total_sheets": len(self.sheets),
            "total_films": self.total_films,
            "total_showings": self.total_showings,
        }
