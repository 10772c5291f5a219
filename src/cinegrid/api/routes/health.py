"""Health check endpoint."""

from fastapi import APIRouter

from cinegrid.parsers import PARSER_REGISTRY

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check() -> dict[str, str | int]:
    """Report that the API is up and how many schedule dialects it can parse."""
    return {"status": "ok", "parsers": len(PARSER_REGISTRY)}
