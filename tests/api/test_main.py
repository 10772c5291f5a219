"""Tests for the application entry point."""

import pytest

from cinegrid import main
from cinegrid.config import settings


def test_app_mounts_routers() -> None:
    paths = {route.path for route in main.app.routes}

    assert "/health" in paths
    assert "/api/import/parse" in paths
    assert "/api/import/parsers" in paths


def test_run_configures_logging_then_serves(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, tuple, dict]] = []
    monkeypatch.setattr(main.logging, "basicConfig", lambda *a, **kw: calls.append(("logging", a, kw)))
    monkeypatch.setattr(main.uvicorn, "run", lambda *a, **kw: calls.append(("uvicorn", a, kw)))

    main.run()

    assert [name for name, _, _ in calls] == ["logging", "uvicorn"]
    assert calls[0][2]["level"] == settings.log_level
    assert calls[1][1] == ("cinegrid.main:app",)
    assert calls[1][2] == {"host": settings.api_host, "port": settings.api_port}
