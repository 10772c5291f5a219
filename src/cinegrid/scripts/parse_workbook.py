"""Parse a schedule workbook with a named dialect and print the result as JSON."""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

from cinegrid.config import settings
from cinegrid.loaders.workbook import WorkbookLoadError, load_workbook_rows
from cinegrid.parsers import PARSER_REGISTRY, build_context, get_parser
from cinegrid.parsers.exceptions import ParserConfigurationError
from cinegrid.parsers.models import Cinema, Country
from cinegrid.schemas.import_result import ParserResultResponse

logging.basicConfig(level=settings.log_level, format="%(levelname)s %(message)s")
logger = logging.getLogger(__name__)


def parse_workbook(
    path: Path,
    parser_slug: str,
    week_start_day: int | None = None,
    timezone: str | None = None,
    reference_date: date | None = None,
) -> ParserResultResponse:
    """Load a workbook from disk and parse it with the given dialect."""
    sheets = load_workbook_rows(path)
    parser = get_parser(parser_slug)
    cinema = Cinema(
        id=path.stem,
        name=path.stem,
        parser_slug=parser_slug,
        country=Country(code="", week_start_day=week_start_day),
        timezone=timezone,
    )
    result = parser.parse(sheets, build_context(cinema, reference_date=reference_date))
    return ParserResultResponse.from_result(result)


def main() -> None:
    parser = argparse.ArgumentParser(description="Parse a weekly cinema schedule workbook.")
    parser.add_argument("path", type=Path, help="Path to the .xlsx file")
    parser.add_argument(
        "--parser",
        dest="parser_slug",
        required=True,
        choices=sorted(PARSER_REGISTRY),
        help="Dialect to parse with",
    )
    parser.add_argument(
        "--week-start-day",
        type=int,
        choices=range(7),
        default=None,
        metavar="N",
        help=f"First day of the programming week, 0=Sunday (default: {settings.default_week_start_day})",
    )
    parser.add_argument(
        "--timezone",
        default=None,
        help=f"Timezone for show datetimes (default: {settings.default_timezone})",
    )
    parser.add_argument(
        "--reference-date",
        type=date.fromisoformat,
        default=None,
        metavar="YYYY-MM-DD",
        help="Date whose year applies to day/month-only dates (default: today)",
    )
    args = parser.parse_args()

    try:
        response = parse_workbook(
            args.path, args.parser_slug, args.week_start_day, args.timezone, args.reference_date
        )
    except (WorkbookLoadError, ParserConfigurationError) as e:
        logger.error(str(e))
        sys.exit(2)

    print(json.dumps(response.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False))

    summary = response.summary
    logger.info(
        f"{summary.total_films} films, {summary.total_showings} showings "
        f"in {summary.total_sheets} sheet(s)"
    )
    sys.exit(0 if response.success else 1)


if __name__ == "__main__":
    main()
