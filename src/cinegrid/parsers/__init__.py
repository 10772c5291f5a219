"""Parser registry for mapping parser slugs to schedule dialects."""

import logging
from datetime import date
from typing import Sequence, Type

from cinegrid.config import settings
from cinegrid.parsers.base import DialectConfig, ScheduleParser
from cinegrid.parsers.cinextdoor import CinextdoorParser
from cinegrid.parsers.exceptions import (
    ParserConfigurationError,
    ParserNotConfiguredError,
    UnknownParserError,
)
from cinegrid.parsers.kinepolis import KinepolisParser
from cinegrid.parsers.kinepolis_france import (
    KinepolisLongwyThionvilleParser,
    KinepolisMetzAmphitheatreParser,
    KinepolisWavesParser,
)
from cinegrid.parsers.language import select_language_mapping
from cinegrid.parsers.models import (
    Cinema,
    CinemaGroup,
    Format,
    Language,
    LanguageMappingConfig,
    ParserContext,
    ParserIdentity,
    ParserResult,
    SheetRows,
    Technology,
)
from cinegrid.parsers.scala import ScalaCinextdoorParser
from cinegrid.utils.text import slugify

logger = logging.getLogger(__name__)

# Registry mapping parser slugs to parser classes
PARSER_REGISTRY: dict[str, Type[ScheduleParser]] = {
    "kinepolis": KinepolisParser,
    "kinepolis-fr-longwy-thionville": KinepolisLongwyThionvilleParser,
    "kinepolis-fr-metz-amphitheatre": KinepolisMetzAmphitheatreParser,
    "kinepolis-fr-waves": KinepolisWavesParser,
    "cinextdoor": CinextdoorParser,
    "scala-cinextdoor": ScalaCinextdoorParser,
}


def is_parser_registered(slug: str | None) -> bool:
    return bool(slug) and slugify(slug) in PARSER_REGISTRY


def get_parser(slug: str, identity: ParserIdentity | None = None) -> ScheduleParser:
    """
    Get a fresh parser instance by slug.

    Args:
        slug: The parser slug (e.g., "kinepolis", "scala-cinextdoor")
        identity: Optional stored identity (database id, display name) to
            report in results instead of the built-in one

    Returns:
        Parser instance; a new one per call so concurrent parses never share state

    Raises:
        UnknownParserError: If no parser is registered under the slug
    """
    parser_class = PARSER_REGISTRY.get(slugify(slug or ""))
    if parser_class is None:
        raise UnknownParserError(slug)
    return parser_class(identity=identity)


def list_parsers() -> list[DialectConfig]:
    """Configurations of every registered dialect, in registry order."""
    return [parser_class().config for parser_class in PARSER_REGISTRY.values()]


def resolve_parser_slug(cinema: Cinema, cinema_group: CinemaGroup | None = None) -> str:
    """
    Pick the parser for a cinema.

    The cinema's own parser wins over its group's.

    Raises:
        ParserNotConfiguredError: If neither names a parser
    """
    if cinema.parser_slug:
        return cinema.parser_slug
    if cinema_group and cinema_group.parser_slug:
        return cinema_group.parser_slug
    raise ParserNotConfiguredError(cinema.name)


def resolve_week_start_day(cinema: Cinema, cinema_group: CinemaGroup | None = None) -> int:
    """
    Week start for a cinema (0=Sunday).

    Priority: cinema override, group country, cinema country, global default.
    """
    if cinema.week_start_day_override is not None:
        return cinema.week_start_day_override
    if cinema_group and cinema_group.country and cinema_group.country.week_start_day is not None:
        return cinema_group.country.week_start_day
    if cinema.country and cinema.country.week_start_day is not None:
        return cinema.country.week_start_day
    return settings.default_week_start_day


def build_context(
    cinema: Cinema | None = None,
    cinema_group: CinemaGroup | None = None,
    languages: Sequence[Language] = (),
    formats: Sequence[Format] = (),
    technologies: Sequence[Technology] = (),
    language_mappings: Sequence[LanguageMappingConfig] = (),
    reference_date: date | None = None,
) -> ParserContext:
    """
    Assemble the parse context for a cinema from its reference data.

    Without a cinema the global week start and timezone apply.
    """
    return ParserContext(
        languages=languages,
        formats=formats,
        technologies=technologies,
        language_mapping=select_language_mapping(language_mappings, cinema_group),
        week_start_day=(
            resolve_week_start_day(cinema, cinema_group) if cinema else settings.default_week_start_day
        ),
        timezone=(cinema.timezone if cinema else None) or settings.default_timezone,
        reference_date=reference_date,
    )


def parse_for_cinema(
    sheets: Sequence[SheetRows],
    cinema: Cinema,
    cinema_group: CinemaGroup | None = None,
    **reference_data,
) -> ParserResult:
    """
    Select the cinema's dialect and parse a decoded workbook with it.

    ``reference_data`` is passed to ``build_context`` (languages, formats,
    technologies, language_mappings, reference_date).

    Raises:
        ParserConfigurationError: If no dialect can be selected; nothing is parsed
    """
    slug = resolve_parser_slug(cinema, cinema_group)
    parser = get_parser(slug)
    context = build_context(cinema, cinema_group, **reference_data)
    logger.info(f"Parsing {len(sheets)} sheet(s) for '{cinema.name}' with {parser.name}")
    return parser.parse(sheets, context)


__all__ = [
    "PARSER_REGISTRY",
    "get_parser",
    "list_parsers",
    "is_parser_registered",
    "resolve_parser_slug",
    "resolve_week_start_day",
    "build_context",
    "parse_for_cinema",
    "ScheduleParser",
    "DialectConfig",
    "ParserConfigurationError",
    "ParserNotConfiguredError",
    "UnknownParserError",
    "KinepolisParser",
    "KinepolisLongwyThionvilleParser",
    "KinepolisMetzAmphitheatreParser",
    "KinepolisWavesParser",
    "CinextdoorParser",
    "ScalaCinextdoorParser",
]
