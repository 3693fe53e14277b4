from pathlib import Path

import pytest

from codeguess.config import get_settings
from codeguess.db.migrations.runner import run_migrations


@pytest.fixture(autouse=True)
def test_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("APP_DB", str(tmp_path / "test.db"))
    monkeypatch.setenv("GITHUB_TOKEN", "")
    monkeypatch.setenv("GITHUB_API_BASE_URL", "https://api.github.test")
    monkeypatch.setenv("JUDGE_BASE_URL", "http://judge.local/v1")
    monkeypatch.setenv("JUDGE_API_KEY", "")
    get_settings.cache_clear()
    run_migrations()
    yield
    get_settings.cache_clear()
