"""Pydantic schemas for API requests and responses."""

from cinegrid.schemas.import_result import (
    ImportParseRequest,
    ParsedFilmResponse,
    ParsedSheetResponse,
    ParserListItem,
    ParserResultResponse,
    ScreeningShowResponse,
)

__all__ = [
    "ImportParseRequest",
    "ParsedFilmResponse",
    "ParsedSheetResponse",
    "ParserListItem",
    "ParserResultResponse",
    "ScreeningShowResponse",
]
