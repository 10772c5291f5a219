"""Generic schedule extraction engine shared by every dialect."""

import logging
import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum, IntEnum
from typing import Mapping, Sequence

from cinegrid.config import settings
from cinegrid.lexicon import (
    LOCALES,
    Weekday,
    header_keywords,
    leading_weekday,
    navigation_keywords,
)
from cinegrid.parsers.dates import (
    NUMERIC_RANGE,
    DateRangePattern,
    build_weekday_dates,
    detect_date_range,
    extract_header_dates,
)
from cinegrid.parsers.language import LanguageResolver
from cinegrid.parsers.models import (
    DateRange,
    Format,
    ParsedFilm,
    ParsedSheet,
    ParserContext,
    ParserIdentity,
    ParserResult,
    ScreeningShow,
    SheetRows,
    Technology,
)
from cinegrid.parsers.title import RATING_ONLY_GRAMMAR, TitleGrammar, decompose_title
from cinegrid.utils.cells import Row, cell_to_string, get_cell, is_row_empty
from cinegrid.utils.dates import get_week_start_date
from cinegrid.utils.text import find_keywords, remove_keywords
from cinegrid.utils.timefmt import (
    combine_date_and_time,
    parse_duration_to_minutes,
    parse_show_times,
    time_to_float,
)

logger = logging.getLogger(__name__)


class ExtractionMode(str, Enum):
    """Where per-film metadata lives in a layout."""

    COLUMNS = "columns"  # duration/version/director have their own columns
    TITLE = "title"  # everything is packed into the title cell


class ColumnRole(str, Enum):
    TITLE = "title"
    DURATION = "duration"
    VERSION = "version"
    DIRECTOR = "director"
    GENRE = "genre"
    SCREEN = "screen"


class ParseStage(IntEnum):
    """Progress of one sheet through the pipeline. Stages only move forward."""

    UNCONFIGURED = 0
    HEADER_LOCATED = 1
    COLUMNS_MAPPED = 2
    DATE_RANGE_RESOLVED = 3
    STREAMING = 4
    DONE = 5


@dataclass(frozen=True)
class DialectConfig:
    """
    Everything that distinguishes one cinema chain's spreadsheet layout.

    Scan limits left as None fall back to the global settings.
    """

    slug: str
    name: str
    locales: tuple[str, ...] = LOCALES
    mode: ExtractionMode = ExtractionMode.COLUMNS
    title_grammar: TitleGrammar = RATING_ONLY_GRAMMAR
    optional_columns: frozenset[ColumnRole] = frozenset({ColumnRole.DURATION, ColumnRole.VERSION})
    extra_header_keywords: Mapping[ColumnRole, tuple[str, ...]] = field(default_factory=dict)
    header_scan_rows: int | None = None
    min_weekday_tokens: int | None = None
    header_requires_title: bool = False
    default_header_row: int | None = None
    date_range_patterns: tuple[DateRangePattern, ...] = (NUMERIC_RANGE,)
    date_range_scan_rows: int | None = None
    min_column_count: int = 3
    min_title_length: int = 2
    skip_keywords: tuple[str, ...] = ()


@dataclass
class SheetLayout:
    """Column roles detected from the header row. Absent optional columns are None."""

    header_row_index: int
    title_column: int = 0
    columns: dict[ColumnRole, int] = field(default_factory=dict)
    weekday_columns: dict[Weekday, int] = field(default_factory=dict)

    def column(self, role: ColumnRole) -> int | None:
        return self.columns.get(role)


@dataclass
class SheetState:
    """Scratch state for one sheet; created fresh for every sheet of every parse."""

    sheet_name: str
    context: ParserContext
    resolver: LanguageResolver
    stage: ParseStage = ParseStage.UNCONFIGURED
    layout: SheetLayout | None = None
    date_range: DateRange | None = None
    weekday_dates: dict[Weekday, date] = field(default_factory=dict)
    week_start: date | None = None
    warnings: list[str] = field(default_factory=list)

    def advance(self, stage: ParseStage) -> None:
        if stage < self.stage:
            raise RuntimeError(f"Cannot move sheet parse back from {self.stage.name} to {stage.name}")
        self.stage = stage


class ScheduleParser:
    """
    Extract films and show times from weekly schedule sheets.

    The pipeline per sheet is: header discovery -> column roles -> programming
    week dates -> row classification -> field extraction. Each step is a
    method so a dialect can replace one step without touching the others;
    most dialects only need a different ``DialectConfig``.

    A parser instance keeps no per-parse state, but reference data passed in
    the context must not be mutated while a parse runs.
    """

    def __init__(self, config: DialectConfig, identity: ParserIdentity | None = None) -> None:
        self.config = config
        self.identity = identity or ParserIdentity(id=config.slug, slug=config.slug, name=config.name)
        self._navigation = navigation_keywords(config.locales) + config.skip_keywords
        self._role_keywords = {
            role: header_keywords(role.value, config.locales) + tuple(config.extra_header_keywords.get(role, ()))
            for role in ColumnRole
        }

    @property
    def name(self) -> str:
        return self.identity.name

    @property
    def slug(self) -> str:
        return self.identity.slug

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def parse(self, sheets: Sequence[SheetRows], context: ParserContext) -> ParserResult:
        """
        Parse a decoded workbook.

        Never raises on malformed input. Sheet-level problems land in
        ``sheet.errors`` (and, prefixed with the sheet name, in
        ``result.errors``); skipped rows land in ``result.warnings``.
        ``success`` is False only when the workbook has no non-blank row at all.
        """
        result = ParserResult(success=False, parser=self.identity)

        if not sheets:
            result.errors.append("No sheets found in workbook")
            return result

        for sheet in sheets:
            try:
                parsed = self.parse_sheet(sheet, context, result.warnings)
            except Exception as e:
                logger.error(f"{self.name}: failed to parse sheet '{sheet.name}': {e}", exc_info=True)
                parsed = ParsedSheet(sheet_name=sheet.name, errors=[f"Failed to parse sheet: {e}"])
            result.sheets.append(parsed)
            result.errors.extend(f"[{sheet.name}] {error}" for error in parsed.errors)

        result.success = any(
            not is_row_empty(row) for sheet in sheets for row in sheet.rows
        )
        if not result.success:
            result.errors.append("Workbook contains no data")

        logger.info(
            f"{self.name}: {result.total_films} films, {result.total_showings} showings "
            f"in {len(result.sheets)} sheet(s)"
        )
        return result

    def parse_rows(
        self, rows: Sequence[Row], context: ParserContext, sheet_name: str = "Sheet1"
    ) -> ParserResult:
        """Parse a single sheet given as bare rows."""
        return self.parse([SheetRows(name=sheet_name, rows=list(rows))], context)

    def parse_sheet(
        self, sheet: SheetRows, context: ParserContext, warnings: list[str] | None = None
    ) -> ParsedSheet:
        """Run the full pipeline over one sheet."""
        rows = list(sheet.rows)
        parsed = ParsedSheet(sheet_name=sheet.name)
        state = SheetState(
            sheet_name=sheet.name,
            context=context,
            resolver=LanguageResolver(context.languages, context.language_mapping, self.config.locales),
        )

        if not rows or all(is_row_empty(row) for row in rows):
            parsed.errors.append("Sheet is empty")
            state.advance(ParseStage.DONE)
            return parsed

        # 1. Header discovery
        header_index = self.find_header_row(rows)
        if header_index is None:
            if self.config.default_header_row is None or self.config.default_header_row >= len(rows):
                parsed.errors.append(
                    f"Could not find a header row with at least {self._min_weekday_tokens} "
                    f"weekday columns in the first {self._header_scan_rows} rows"
                )
                state.advance(ParseStage.DONE)
                return parsed
            header_index = self.config.default_header_row
            logger.debug(f"{self.name}: no header found in '{sheet.name}', using row {header_index + 1}")
        state.advance(ParseStage.HEADER_LOCATED)

        # 2. Column roles
        state.layout = self.detect_columns(rows[header_index], header_index)
        if not state.layout.weekday_columns:
            parsed.errors.append(f"Header row {header_index + 1} has no weekday columns")
            state.advance(ParseStage.DONE)
            return parsed
        state.advance(ParseStage.COLUMNS_MAPPED)

        # 3. Programming week
        self.resolve_dates(rows, state)
        parsed.date_range = state.date_range
        state.advance(ParseStage.DATE_RANGE_RESOLVED)

        # 4-5. Classification and extraction
        state.advance(ParseStage.STREAMING)
        for index in range(header_index + 1, len(rows)):
            row = rows[index]
            if is_row_empty(row):
                continue
            try:
                if not self.is_film_row(row, state.layout):
                    continue
                parsed.films.append(self.extract_film(row, index, state))
            except Exception as e:
                logger.warning(f"{self.name}: skipping row {index + 1} of '{sheet.name}': {e}")
                state.warnings.append(f"Row {index + 1}: {e}")

        if not parsed.films:
            parsed.errors.append("No film rows found")

        state.advance(ParseStage.DONE)
        if warnings is not None:
            warnings.extend(f"[{sheet.name}] {warning}" for warning in state.warnings)

        logger.info(
            f"{self.name}: sheet '{sheet.name}' -> {parsed.film_count} films, "
            f"{parsed.showing_count} showings"
        )
        return parsed

    # ------------------------------------------------------------------
    # Stage 1: header discovery
    # ------------------------------------------------------------------

    @property
    def _header_scan_rows(self) -> int:
        return self.config.header_scan_rows or settings.header_scan_rows

    @property
    def _min_weekday_tokens(self) -> int:
        return self.config.min_weekday_tokens or settings.min_weekday_tokens

    def count_weekday_tokens(self, row: Row) -> int:
        return sum(
            1 for cell in row if leading_weekday(cell_to_string(cell), self.config.locales) is not None
        )

    def find_header_row(self, rows: Sequence[Row]) -> int | None:
        """
        Index of the first row naming enough weekdays to be the schedule header.

        Only the first ``header_scan_rows`` rows are examined.
        """
        for index, row in enumerate(rows[: self._header_scan_rows]):
            if self.count_weekday_tokens(row) < self._min_weekday_tokens:
                continue
            if self.config.header_requires_title and not any(
                self._matches_role(cell_to_string(cell).lower(), ColumnRole.TITLE) for cell in row
            ):
                continue
            logger.debug(f"{self.name}: header row at {index + 1}")
            return index
        return None

    # ------------------------------------------------------------------
    # Stage 2: column roles
    # ------------------------------------------------------------------

    def _matches_role(self, lowered: str, role: ColumnRole) -> bool:
        return any(keyword in lowered for keyword in self._role_keywords[role])

    def detect_columns(self, header_row: Row, header_row_index: int) -> SheetLayout:
        """
        Assign column roles from the header row.

        The title column is the first cell containing a title word, else column
        0. Optional columns are only looked for when the dialect enables them.
        Cells that are neither a weekday nor a known role are ignored.
        """
        layout = SheetLayout(header_row_index=header_row_index)
        title_column: int | None = None
        roles = [role for role in ColumnRole if role in self.config.optional_columns]

        for index, cell in enumerate(header_row):
            text = cell_to_string(cell)
            if not text:
                continue

            weekday = leading_weekday(text, self.config.locales)
            if weekday is not None:
                layout.weekday_columns.setdefault(weekday, index)
                continue

            lowered = text.lower()
            if title_column is None and self._matches_role(lowered, ColumnRole.TITLE):
                title_column = index
                continue
            for role in roles:
                if role not in layout.columns and self._matches_role(lowered, role):
                    layout.columns[role] = index
                    break

        layout.title_column = title_column if title_column is not None else 0
        if layout.weekday_columns and layout.title_column >= min(layout.weekday_columns.values()):
            layout.title_column = 0

        logger.debug(
            f"{self.name}: title column {layout.title_column}, "
            f"roles {{{', '.join(f'{r.value}: {i}' for r, i in layout.columns.items())}}}, "
            f"{len(layout.weekday_columns)} weekday columns"
        )
        return layout

    # ------------------------------------------------------------------
    # Stage 3: programming week
    # ------------------------------------------------------------------

    def resolve_dates(self, rows: Sequence[Row], state: SheetState) -> None:
        """
        Resolve the programming week and the date behind each weekday column.

        An explicit range in the first rows sets the week; dates printed in
        the header cells then override individual weekdays. Without an
        explicit range the header dates alone define the week. With neither,
        show times are kept without a date.
        """
        assert state.layout is not None
        context = state.context
        year = context.reference_year

        state.date_range = detect_date_range(
            rows,
            self.config.date_range_patterns,
            year,
            self.config.date_range_scan_rows or settings.date_range_scan_rows,
            self.config.locales,
        )
        state.weekday_dates = build_weekday_dates(state.date_range)

        header_dates = extract_header_dates(rows[state.layout.header_row_index], year, self.config.locales)
        state.weekday_dates.update(header_dates)

        if state.date_range is not None:
            state.week_start = state.date_range.start
        elif header_dates:
            ordered = sorted(header_dates.values())
            state.date_range = DateRange(start=ordered[0], end=ordered[-1])
            state.week_start = get_week_start_date(ordered[0], context.week_start_day)

        if state.date_range is None:
            logger.debug(f"{self.name}: no dates found for '{state.sheet_name}'")

    # ------------------------------------------------------------------
    # Stage 4: row classification
    # ------------------------------------------------------------------

    def _is_header_repeat(self, title: str) -> bool:
        """True for cells like "Mer", "Mer 04/06" or "Mi. 04.06." inside the data region."""
        if leading_weekday(title, self.config.locales) is None:
            return False
        remainder = re.sub(r"^\s*[^\W\d_]+\.?", "", title)
        return not re.search(r"[^\W\d_]", remainder)

    def is_film_row(self, row: Row, layout: SheetLayout) -> bool:
        """
        Decide whether a data row describes a film.

        Needs enough cells, a title long enough to be real, and no header or
        navigation keyword in the title cell. Show times are not required.
        """
        if len(row) < self.config.min_column_count:
            return False

        title = get_cell(row, layout.title_column)
        if not title or len(title) < self.config.min_title_length:
            return False

        lowered = title.lower()
        for keyword in self._navigation:
            if re.search(rf"(?<!\w){re.escape(keyword)}(?!\w)", lowered):
                logger.debug(f"{self.name}: '{title}' is a navigation row ({keyword})")
                return False

        return not self._is_header_repeat(title)

    # ------------------------------------------------------------------
    # Stage 5: field extraction
    # ------------------------------------------------------------------

    def _column_text(self, row: Row, layout: SheetLayout, role: ColumnRole) -> str | None:
        index = layout.column(role)
        if index is None:
            return None
        return get_cell(row, index) or None

    def extract_film(self, row: Row, row_index: int, state: SheetState) -> ParsedFilm:
        """
        Build a ParsedFilm from a classified row.

        Raises:
            ValueError: If no movie name survives decomposition
        """
        assert state.layout is not None
        layout = state.layout
        context = state.context

        raw_title = get_cell(row, layout.title_column)
        parts = decompose_title(raw_title, self.config.title_grammar)

        duration = parts.duration
        duration_minutes = parts.duration_minutes
        version_string = parts.version_string
        director = parts.director
        if self.config.mode is ExtractionMode.COLUMNS:
            duration_text = self._column_text(row, layout, ColumnRole.DURATION)
            if duration_text:
                duration = duration_text
                duration_minutes = parse_duration_to_minutes(duration_text)
            version_string = self._column_text(row, layout, ColumnRole.VERSION) or version_string
            director = self._column_text(row, layout, ColumnRole.DIRECTOR) or director

        format_match = match_format(raw_title, context.formats)
        technology_match = match_technology(raw_title, context.technologies)
        fallback_keywords = find_keywords(
            raw_title, [*settings.format_keywords, *settings.technology_keywords]
        )

        strip: list[str] = list(fallback_keywords)
        for item in (format_match, technology_match):
            if item is not None:
                strip.extend([item.code, item.name])
        movie_name = remove_keywords(parts.title, strip)
        if not movie_name:
            raise ValueError(f"could not extract a movie name from {raw_title!r}")

        language = state.resolver.resolve(version_string)

        edition: str | None = None
        format_code: str | None = None
        if format_match is not None:
            edition, format_code = format_match.name, format_match.code
        elif technology_match is not None:
            edition, format_code = technology_match.name, technology_match.code
        elif fallback_keywords:
            edition = format_code = fallback_keywords[0]

        film = ParsedFilm(
            import_title=raw_title,
            movie_name=movie_name,
            movie_edition=edition,
            language=language.spoken.name if language.spoken else None,
            language_code=language.spoken_code,
            subtitle_language_codes=list(language.subtitle_codes),
            format_code=format_code,
            format=format_match,
            technology=technology_match,
            duration=duration,
            duration_minutes=duration_minutes,
            age_rating=parts.age_rating,
            director=director,
            production_year=parts.year,
            version_string=version_string,
            tags=self.extract_tags(row, layout),
            start_week_date=state.week_start,
            screening_shows=self.extract_shows(row, state),
        )

        if not film.screening_shows:
            state.warnings.append(f"Row {row_index + 1}: no show times found for '{movie_name}'")
        return film

    def extract_tags(self, row: Row, layout: SheetLayout) -> list[str]:
        tags: list[str] = []
        genre = self._column_text(row, layout, ColumnRole.GENRE)
        if genre:
            tags.extend(tag.strip() for tag in re.split(r"[,/]", genre) if tag.strip())
        screen = self._column_text(row, layout, ColumnRole.SCREEN)
        if screen:
            tags.append(f"Screen: {screen}")
        return tags

    def extract_shows(self, row: Row, state: SheetState) -> list[ScreeningShow]:
        """Read every weekday column; each cell may hold several times."""
        assert state.layout is not None
        shows: list[ScreeningShow] = []
        for weekday, index in state.layout.weekday_columns.items():
            day = state.weekday_dates.get(weekday)
            for time_str in parse_show_times(get_cell(row, index)):
                time_float = time_to_float(time_str)
                if time_float is None:
                    continue
                shows.append(
                    ScreeningShow(
                        time=time_str,
                        time_float=time_float,
                        weekday=weekday,
                        date=day,
                        datetime=combine_date_and_time(day, time_str, state.context.timezone) if day else None,
                    )
                )
        return shows


def _match_reference(text: str, items: Sequence[Format] | Sequence[Technology]):
    for item in items:
        if find_keywords(text, [item.code, item.name]):
            return item
    return None


def match_format(text: str, formats: Sequence[Format]) -> Format | None:
    """First reference format whose code or name appears in the text as a whole word."""
    return _match_reference(text, formats)


def match_technology(text: str, technologies: Sequence[Technology]) -> Technology | None:
    """First reference technology whose code or name appears in the text as a whole word."""
    return _match_reference(text, technologies)
