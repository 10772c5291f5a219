"""Pydantic schemas for schedule import requests and results."""

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cinegrid.parsers.models import (
    Cinema,
    CinemaGroup,
    Country,
    Format,
    Language,
    LanguageMappingConfig,
    LanguageMappingLine,
    ParsedFilm,
    ParsedSheet,
    ParserResult,
    SheetRows,
    Technology,
)


class CamelModel(BaseModel):
    """Serializes to camelCase, accepts either spelling on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------


class ReferenceItem(CamelModel):
    id: str
    code: str
    name: str


class LanguageMappingLineIn(CamelModel):
    version_string: str
    spoken_language_id: str | None = None
    subtitle_language_ids: list[str] = Field(default_factory=list)
    notes: str | None = None


class LanguageMappingIn(CamelModel):
    id: str
    name: str
    is_default: bool = False
    lines: list[LanguageMappingLineIn] = Field(default_factory=list)

    def to_config(self) -> LanguageMappingConfig:
        return LanguageMappingConfig(
            id=self.id,
            name=self.name,
            is_default=self.is_default,
            lines=tuple(
                LanguageMappingLine(
                    version_string=line.version_string,
                    spoken_language_id=line.spoken_language_id,
                    subtitle_language_ids=tuple(line.subtitle_language_ids),
                    notes=line.notes,
                )
                for line in self.lines
            ),
        )


class CountryIn(CamelModel):
    code: str
    week_start_day: int | None = Field(default=None, ge=0, le=6)

    def to_country(self) -> Country:
        return Country(code=self.code, week_start_day=self.week_start_day)


class CinemaGroupIn(CamelModel):
    id: str
    name: str
    parser_slug: str | None = None
    language_mapping_id: str | None = None
    country: CountryIn | None = None

    def to_group(self) -> CinemaGroup:
        return CinemaGroup(
            id=self.id,
            name=self.name,
            parser_slug=self.parser_slug,
            language_mapping_id=self.language_mapping_id,
            country=self.country.to_country() if self.country else None,
        )


class CinemaIn(CamelModel):
    id: str
    name: str
    parser_slug: str | None = None
    country: CountryIn | None = None
    week_start_day_override: int | None = Field(default=None, ge=0, le=6)
    timezone: str | None = None

    def to_cinema(self) -> Cinema:
        return Cinema(
            id=self.id,
            name=self.name,
            parser_slug=self.parser_slug,
            country=self.country.to_country() if self.country else None,
            week_start_day_override=self.week_start_day_override,
            timezone=self.timezone,
        )


class SheetIn(CamelModel):
    name: str
    rows: list[list[Any]] = Field(default_factory=list)

    def to_sheet(self) -> SheetRows:
        return SheetRows(name=self.name, rows=[list(row) for row in self.rows])


class ImportParseRequest(CamelModel):
    """
    A decoded workbook plus the reference data to parse it with.

    Either ``parser_slug`` or ``cinema`` must be given. With a cinema, the
    parser comes from the cinema or its group, and the week start, timezone
    and language mapping follow the cinema's configuration.
    """

    parser_slug: str | None = None
    cinema: CinemaIn | None = None
    cinema_group: CinemaGroupIn | None = None
    sheets: list[SheetIn]
    languages: list[ReferenceItem] = Field(default_factory=list)
    formats: list[ReferenceItem] = Field(default_factory=list)
    technologies: list[ReferenceItem] = Field(default_factory=list)
    language_mappings: list[LanguageMappingIn] = Field(default_factory=list)
    reference_date: dt.date | None = None

    def reference_data(self) -> dict[str, Any]:
        return {
            "languages": [Language(id=i.id, code=i.code, name=i.name) for i in self.languages],
            "formats": [Format(id=i.id, code=i.code, name=i.name) for i in self.formats],
            "technologies": [Technology(id=i.id, code=i.code, name=i.name) for i in self.technologies],
            "language_mappings": [mapping.to_config() for mapping in self.language_mappings],
            "reference_date": self.reference_date,
        }


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------


class ScreeningShowResponse(CamelModel):
    date: dt.date | None = None
    time: str
    time_float: float
    weekday: str | None = None
    datetime: dt.datetime | None = None


class ParsedFilmResponse(CamelModel):
    import_title: str
    movie_name: str
    movie_edition: str | None = None
    language: str | None = None
    language_code: str | None = None
    subtitle_language_codes: list[str]
    format_code: str | None = None
    format_id: str | None = None
    technology_id: str | None = None
    duration: str | None = None
    duration_minutes: int | None = None
    age_rating: str | None = None
    director: str | None = None
    production_year: int | None = None
    version_string: str | None = None
    tags: list[str]
    start_week_date: dt.date | None = None
    show_count: int
    screening_shows: list[ScreeningShowResponse]

    @classmethod
    def from_film(cls, film: ParsedFilm) -> "ParsedFilmResponse":
        return cls(
            import_title=film.import_title,
            movie_name=film.movie_name,
            movie_edition=film.movie_edition,
            language=film.language,
            language_code=film.language_code,
            subtitle_language_codes=film.subtitle_language_codes,
            format_code=film.format_code,
            format_id=film.format.id if film.format else None,
            technology_id=film.technology.id if film.technology else None,
            duration=film.duration,
            duration_minutes=film.duration_minutes,
            age_rating=film.age_rating,
            director=film.director,
            production_year=film.production_year,
            version_string=film.version_string,
            tags=film.tags,
            start_week_date=film.start_week_date,
            show_count=film.show_count,
            screening_shows=[
                ScreeningShowResponse(
                    date=show.date,
                    time=show.time,
                    time_float=show.time_float,
                    weekday=show.weekday.value if show.weekday else None,
                    datetime=show.datetime,
                )
                for show in film.screening_shows
            ],
        )


class DateRangeResponse(CamelModel):
    start: dt.date
    end: dt.date


class ParsedSheetResponse(CamelModel):
    sheet_name: str
    film_count: int
    date_range: DateRangeResponse | None = None
    films: list[ParsedFilmResponse]
    errors: list[str]

    @classmethod
    def from_sheet(cls, sheet: ParsedSheet) -> "ParsedSheetResponse":
        return cls(
            sheet_name=sheet.sheet_name,
            film_count=sheet.film_count,
            date_range=(
                DateRangeResponse(start=sheet.date_range.start, end=sheet.date_range.end)
                if sheet.date_range
                else None
            ),
            films=[ParsedFilmResponse.from_film(film) for film in sheet.films],
            errors=sheet.errors,
        )


class ParserInfo(CamelModel):
    id: str
    slug: str
    name: str


class ResultSummary(CamelModel):
    total_sheets: int
    total_films: int
    total_showings: int


class ParserResultResponse(CamelModel):
    """Wire form of a parse result."""

    success: bool
    parser: ParserInfo
    summary: ResultSummary
    sheets: list[ParsedSheetResponse]
    errors: list[str]
    warnings: list[str]

    @classmethod
    def from_result(cls, result: ParserResult) -> "ParserResultResponse":
        return cls(
            success=result.success,
            parser=ParserInfo(id=result.parser.id, slug=result.parser.slug, name=result.parser.name),
            summary=ResultSummary(**result.summary),
            sheets=[ParsedSheetResponse.from_sheet(sheet) for sheet in result.sheets],
            errors=result.errors,
            warnings=result.warnings,
        )


class ParserListItem(CamelModel):
    slug: str
    name: str
    locales: list[str]
    mode: str
