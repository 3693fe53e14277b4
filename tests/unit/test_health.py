import sqlite3
from contextlib import contextmanager

from fastapi.testclient import TestClient

from codeguess.github.cache import ContentCache
from codeguess.main import app
from tests._fixtures.github import ScriptedProvider


def test_healthz_ok() -> None:
    client = TestClient(app)
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_readyz_reports_cache_counts(monkeypatch) -> None:
    from codeguess.routes import health as health_route

    monkeypatch.setattr(health_route, "build_judge_provider", lambda settings: ScriptedProvider())
    ContentCache().put("o", "r", "a.py", "file", "https://x/a.py", "x = 1\n")

    client = TestClient(app)
    response = client.get("/readyz")
    assert response.status_code == 200
    assert response.json() == {
        "ok": True,
        "db": True,
        "judge": True,
        "cache": {"directory": 0, "file": 1},
    }


def test_readyz_stays_ready_when_judge_is_down(monkeypatch) -> None:
    from codeguess.routes import health as health_route

    class DownProvider(ScriptedProvider):
        async def health_check(self) -> bool:
            return False

    monkeypatch.setattr(health_route, "build_judge_provider", lambda settings: DownProvider())

    response = TestClient(app).get("/readyz")
    assert response.status_code == 200
    assert response.json()["judge"] is False


def test_readyz_returns_503_when_database_unreachable(monkeypatch) -> None:
    from codeguess.routes import health as health_route

    @contextmanager
    def broken_conn():
        raise sqlite3.OperationalError("unable to open database file")
        yield

    monkeypatch.setattr(health_route, "build_judge_provider", lambda settings: ScriptedProvider())
    monkeypatch.setattr(health_route, "get_conn", broken_conn)

    response = TestClient(app).get("/readyz")
    assert response.status_code == 503
    assert response.json()["ok"] is False
