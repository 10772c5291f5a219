"""Shared test fixtures."""

from datetime import date

import pytest
from fastapi import FastAPI

from cinegrid.api.routes import health, imports
from cinegrid.parsers.models import Format, Language, ParserContext, Technology

# 2025-06-04 is a Wednesday
REFERENCE_DATE = date(2025, 6, 1)


@pytest.fixture
def test_app() -> FastAPI:
    """Minimal FastAPI app with only the routers under test."""
    app = FastAPI()
    app.include_router(health.router)
    app.include_router(imports.router, prefix="/api")
    return app


@pytest.fixture
def languages() -> list[Language]:
    return [
        Language(id="lang-fr", code="fr", name="Français"),
        Language(id="lang-nl", code="nl", name="Nederlands"),
        Language(id="lang-de", code="de", name="Deutsch"),
        Language(id="lang-en", code="en", name="English"),
    ]


@pytest.fixture
def context() -> ParserContext:
    """Context with no reference data and a fixed reference year."""
    return ParserContext(reference_date=REFERENCE_DATE)


@pytest.fixture
def full_context(languages: list[Language]) -> ParserContext:
    return ParserContext(
        languages=languages,
        formats=[Format(id="fmt-3d", code="3D", name="3D")],
        technologies=[Technology(id="tech-imax", code="IMAX", name="IMAX")],
        reference_date=REFERENCE_DATE,
    )
