import pytest

from codeguess.config import get_settings, validate_settings_for_env
from codeguess.errors import ConfigError


def _prod_env() -> dict[str, str]:
    return {
        "APP_ENV": "prod",
        "APP_DB": "/srv/codeguess/app.db",
        "GITHUB_API_BASE_URL": "https://api.github.com",
        "GITHUB_TOKEN": "ghp_example",
        "JUDGE_BASE_URL": "https://api.openai.com/v1",
        "JUDGE_MODEL": "gpt-4o",
    }


def _settings_for(monkeypatch: pytest.MonkeyPatch, **overrides: str):
    for key, value in {**_prod_env(), **overrides}.items():
        monkeypatch.setenv(key, value)
    get_settings.cache_clear()
    return get_settings()


def test_validate_settings_prod_accepts_full_required_set(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    try:
        validate_settings_for_env(_settings_for(monkeypatch))
    finally:
        get_settings.cache_clear()


def test_validate_settings_prod_requires_absolute_db(monkeypatch: pytest.MonkeyPatch) -> None:
    try:
        settings = _settings_for(monkeypatch, APP_DB="relative/app.db")
        with pytest.raises(ValueError, match="APP_DB"):
            validate_settings_for_env(settings)
    finally:
        get_settings.cache_clear()


def test_validate_settings_prod_missing_judge_model(monkeypatch: pytest.MonkeyPatch) -> None:
    try:
        settings = _settings_for(monkeypatch, JUDGE_MODEL=" ")
        with pytest.raises(ValueError, match="JUDGE_MODEL"):
            validate_settings_for_env(settings)
    finally:
        get_settings.cache_clear()


def test_validate_settings_prod_warns_on_wildcard_bind(monkeypatch: pytest.MonkeyPatch) -> None:
    try:
        settings = _settings_for(monkeypatch, BIND_HOST="0.0.0.0")
        with pytest.warns(UserWarning, match="BIND_HOST"):
            validate_settings_for_env(settings)
    finally:
        get_settings.cache_clear()


def test_validate_settings_rejects_inverted_line_window(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROUND_MIN_LINES", "300")
    monkeypatch.setenv("ROUND_MAX_LINES", "200")
    get_settings.cache_clear()
    try:
        with pytest.raises(ValueError, match="ROUND_MIN_LINES"):
            validate_settings_for_env(get_settings())
    finally:
        get_settings.cache_clear()


def test_validate_settings_rejects_zero_call_budget(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_MAX_CALLS_PER_ATTEMPT", "0")
    get_settings.cache_clear()
    try:
        with pytest.raises(ValueError, match="GITHUB_MAX_CALLS_PER_ATTEMPT"):
            validate_settings_for_env(get_settings())
    finally:
        get_settings.cache_clear()


def test_dev_defaults_are_valid() -> None:
    settings = get_settings()
    validate_settings_for_env(settings)
    assert settings.github_max_calls_per_attempt == 3
    assert settings.round_time_base_seconds == 30
    assert settings.round_time_per_complexity_seconds == 10


def test_validation_failures_are_config_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROUND_DEFAULT_COMPLEXITY", "11")
    get_settings.cache_clear()
    try:
        with pytest.raises(ConfigError, match="ROUND_DEFAULT_COMPLEXITY"):
            validate_settings_for_env(get_settings())
    finally:
        get_settings.cache_clear()
