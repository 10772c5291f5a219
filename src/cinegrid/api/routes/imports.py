"""Schedule import endpoints."""

import logging

from fastapi import APIRouter, HTTPException

from cinegrid.parsers import build_context, get_parser, list_parsers, parse_for_cinema
from cinegrid.parsers.exceptions import ParserConfigurationError
from cinegrid.schemas.import_result import (
    ImportParseRequest,
    ParserListItem,
    ParserResultResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/import/parsers", response_model=list[ParserListItem])
async def get_parsers() -> list[ParserListItem]:
    """List the registered schedule dialects."""
    return [
        ParserListItem(slug=config.slug, name=config.name, locales=list(config.locales), mode=config.mode.value)
        for config in list_parsers()
    ]


@router.post("/import/parse", response_model=ParserResultResponse)
async def parse_schedule(request: ImportParseRequest) -> ParserResultResponse:
    """
    Parse a decoded schedule workbook.

    The dialect is taken from ``parserSlug`` when given, otherwise from the
    cinema (or its cinema group). Malformed rows never fail the request; they
    come back as warnings. Only an unusable parser selection returns 400.
    """
    sheets = [sheet.to_sheet() for sheet in request.sheets]
    reference_data = request.reference_data()

    try:
        if request.parser_slug:
            parser = get_parser(request.parser_slug)
            context = build_context(
                request.cinema.to_cinema() if request.cinema else None,
                request.cinema_group.to_group() if request.cinema_group else None,
                **reference_data,
            )
            result = parser.parse(sheets, context)
        elif request.cinema:
            result = parse_for_cinema(
                sheets,
                request.cinema.to_cinema(),
                request.cinema_group.to_group() if request.cinema_group else None,
                **reference_data,
            )
        else:
            raise HTTPException(status_code=400, detail="Either parserSlug or cinema is required")
    except ParserConfigurationError as e:
        logger.warning(f"Import rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return ParserResultResponse.from_result(result)
