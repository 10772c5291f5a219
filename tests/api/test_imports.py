"""Tests for the schedule import endpoints."""

from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from cinegrid.parsers import PARSER_REGISTRY

KINEPOLIS_SHEET = {
    "name": "Semaine 23",
    "rows": [
        ["Kinepolis Kirchberg", "04/06/2025 - 10/06/2025"],
        ["Film", "Durée", "Version", "Mer", "Jeu", "Ven", "Sam", "Dim", "Lun", "Mar"],
        ["Wicked (10)", "160'", "VO st FR&NL", "14:00\n20:00", "", "", "", "", "", "21:00"],
    ],
}

LANGUAGES = [
    {"id": "lang-fr", "code": "fr", "name": "Français"},
    {"id": "lang-nl", "code": "nl", "name": "Nederlands"},
]


async def post_parse(app: FastAPI, payload: dict[str, Any]):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        return await client.post("/api/import/parse", json=payload)


class TestListParsers:
    async def test_lists_every_dialect(self, test_app: FastAPI) -> None:
        async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
            response = await client.get("/api/import/parsers")

        assert response.status_code == 200
        data = response.json()
        assert [item["slug"] for item in data] == list(PARSER_REGISTRY)
        scala = next(item for item in data if item["slug"] == "scala-cinextdoor")
        assert scala["locales"] == ["de", "en"]
        assert scala["mode"] == "title"


class TestParseWithSlug:
    async def test_parse_kinepolis_sheet(self, test_app: FastAPI) -> None:
        response = await post_parse(
            test_app,
            {"parserSlug": "kinepolis", "sheets": [KINEPOLIS_SHEET], "languages": LANGUAGES},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["parser"]["slug"] == "kinepolis"
        assert data["summary"] == {"totalSheets": 1, "totalFilms": 1, "totalShowings": 3}

        sheet = data["sheets"][0]
        assert sheet["sheetName"] == "Semaine 23"
        assert sheet["dateRange"] == {"start": "2025-06-04", "end": "2025-06-10"}

        film = sheet["films"][0]
        assert film["movieName"] == "Wicked"
        assert film["ageRating"] == "10"
        assert film["durationMinutes"] == 160
        assert film["subtitleLanguageCodes"] == ["fr", "nl"]
        assert film["showCount"] == 3
        assert film["startWeekDate"] == "2025-06-04"

        first = film["screeningShows"][0]
        assert first["date"] == "2025-06-04"
        assert first["time"] == "14:00"
        assert first["timeFloat"] == 14.0
        assert first["weekday"] == "Wed"
        assert first["datetime"].startswith("2025-06-04T14:00:00")

    async def test_bad_rows_are_warnings(self, test_app: FastAPI) -> None:
        sheet = {
            "name": "Week",
            "rows": [
                KINEPOLIS_SHEET["rows"][1],
                ["Wicked (10)", "160'", "VF", "14:00", "", "", "", "", "", ""],
                ["IMAX (12)", "", "", "14:00", "", "", "", "", "", ""],
            ],
        }

        response = await post_parse(test_app, {"parserSlug": "kinepolis", "sheets": [sheet]})

        assert response.status_code == 200
        data = response.json()
        assert data["summary"]["totalFilms"] == 1
        assert data["warnings"] == ["[Week] Row 3: could not extract a movie name from 'IMAX (12)'"]

    async def test_unknown_parser(self, test_app: FastAPI) -> None:
        response = await post_parse(test_app, {"parserSlug": "nope", "sheets": [KINEPOLIS_SHEET]})

        assert response.status_code == 400
        assert response.json()["detail"] == "Parser not found: nope"

    async def test_empty_workbook(self, test_app: FastAPI) -> None:
        response = await post_parse(test_app, {"parserSlug": "kinepolis", "sheets": []})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert data["errors"] == ["No sheets found in workbook"]


class TestParseForCinema:
    async def test_group_parser_fallback(self, test_app: FastAPI) -> None:
        payload = {
            "cinema": {"id": "c-1", "name": "Kirchberg", "timezone": "UTC"},
            "cinemaGroup": {"id": "g-1", "name": "Kinepolis", "parserSlug": "kinepolis"},
            "sheets": [KINEPOLIS_SHEET],
        }

        response = await post_parse(test_app, payload)

        assert response.status_code == 200
        show = response.json()["sheets"][0]["films"][0]["screeningShows"][0]
        assert show["datetime"] in ("2025-06-04T14:00:00Z", "2025-06-04T14:00:00+00:00")

    async def test_cinema_without_parser(self, test_app: FastAPI) -> None:
        payload = {"cinema": {"id": "c-1", "name": "Ariston"}, "sheets": [KINEPOLIS_SHEET]}

        response = await post_parse(test_app, payload)

        assert response.status_code == 400
        assert response.json()["detail"].startswith("No parser configured for cinema 'Ariston'")

    async def test_neither_parser_nor_cinema(self, test_app: FastAPI) -> None:
        response = await post_parse(test_app, {"sheets": [KINEPOLIS_SHEET]})

        assert response.status_code == 400
        assert response.json()["detail"] == "Either parserSlug or cinema is required"

    @pytest.mark.parametrize("week_start_day", [-1, 7])
    async def test_invalid_week_start_day(self, test_app: FastAPI, week_start_day: int) -> None:
        payload = {
            "cinema": {
                "id": "c-1",
                "name": "Kirchberg",
                "parserSlug": "kinepolis",
                "country": {"code": "LU", "weekStartDay": week_start_day},
            },
            "sheets": [KINEPOLIS_SHEET],
        }

        response = await post_parse(test_app, payload)

        assert response.status_code == 422
