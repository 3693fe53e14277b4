"""Application configuration contract."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from codeguess.errors import ConfigError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = Field(alias="APP_ENV", default="dev")
    app_db: str = Field(alias="APP_DB", default="/tmp/codeguess.db")
    log_level: str = Field(alias="LOG_LEVEL", default="INFO")

    # Security: bind host defaults to loopback
    bind_host: str = Field(alias="BIND_HOST", default="127.0.0.1")
    bind_port: int = Field(alias="BIND_PORT", default=8000)

    github_api_base_url: str = Field(alias="GITHUB_API_BASE_URL", default="https://api.github.com")
    github_token: str = Field(alias="GITHUB_TOKEN", default="")
    github_timeout_seconds: int = Field(alias="GITHUB_TIMEOUT_SECONDS", default=15)
    github_max_calls_per_attempt: int = Field(alias="GITHUB_MAX_CALLS_PER_ATTEMPT", default=3)
    github_user_agent: str = Field(alias="GITHUB_USER_AGENT", default="CodeGuess-Round-Builder/1.0")
    cache_sample_limit: int = Field(alias="CACHE_SAMPLE_LIMIT", default=20)

    judge_base_url: str = Field(alias="JUDGE_BASE_URL", default="https://api.openai.com/v1")
    judge_api_key: str = Field(alias="JUDGE_API_KEY", default="")
    judge_model: str = Field(alias="JUDGE_MODEL", default="gpt-4o")
    judge_timeout_seconds: int = Field(alias="JUDGE_TIMEOUT_SECONDS", default=60)
    judge_temperature: float = Field(alias="JUDGE_TEMPERATURE", default=0.7)
    judge_max_tokens: int = Field(alias="JUDGE_MAX_TOKENS", default=300)
    judge_max_code_chars: int = Field(alias="JUDGE_MAX_CODE_CHARS", default=12000)

    round_attempts_per_repo: int = Field(alias="ROUND_ATTEMPTS_PER_REPO", default=5)
    round_min_lines: int = Field(alias="ROUND_MIN_LINES", default=10)
    round_max_lines: int = Field(alias="ROUND_MAX_LINES", default=200)
    round_last_chance_min_lines: int = Field(alias="ROUND_LAST_CHANCE_MIN_LINES", default=50)
    round_default_min_complexity: int = Field(alias="ROUND_DEFAULT_MIN_COMPLEXITY", default=4)
    round_backup_repositories: int = Field(alias="ROUND_BACKUP_REPOSITORIES", default=5)
    round_complexity_relaxation_step: int = Field(
        alias="ROUND_COMPLEXITY_RELAXATION_STEP", default=1
    )
    round_min_complexity_floor: int = Field(alias="ROUND_MIN_COMPLEXITY_FLOOR", default=1)
    round_default_complexity: int = Field(alias="ROUND_DEFAULT_COMPLEXITY", default=5)
    round_time_base_seconds: int = Field(alias="ROUND_TIME_BASE_SECONDS", default=30)
    round_time_per_complexity_seconds: int = Field(
        alias="ROUND_TIME_PER_COMPLEXITY_SECONDS", default=10
    )
    round_max_total_rounds: int = Field(alias="ROUND_MAX_TOTAL_ROUNDS", default=20)

    web_cors_origins: str = Field(alias="WEB_CORS_ORIGINS", default="http://localhost:3000")

    # Rate limiting
    rate_limit_rounds_per_minute: int = Field(alias="RATE_LIMIT_ROUNDS_PER_MINUTE", default=30)


def validate_settings_for_env(settings: Settings) -> None:
    import logging as _logging
    import warnings

    _logger = _logging.getLogger(__name__)

    # Warn if binding to 0.0.0.0 in production
    if settings.app_env == "prod" and settings.bind_host == "0.0.0.0":
        msg = (
            "SECURITY WARNING: BIND_HOST=0.0.0.0 in production. "
            "This exposes the API to all network interfaces. "
            "Set BIND_HOST=127.0.0.1 and use a reverse proxy."
        )
        _logger.warning(msg)
        warnings.warn(msg, stacklevel=2)

    invalid: list[str] = []
    if settings.github_max_calls_per_attempt < 1:
        invalid.append("GITHUB_MAX_CALLS_PER_ATTEMPT(>=1)")
    if settings.round_attempts_per_repo < 1:
        invalid.append("ROUND_ATTEMPTS_PER_REPO(>=1)")
    if not 0 < settings.round_min_lines <= settings.round_max_lines:
        invalid.append("ROUND_MIN_LINES/ROUND_MAX_LINES(0 < min <= max)")
    if not 1 <= settings.round_min_complexity_floor <= 10:
        invalid.append("ROUND_MIN_COMPLEXITY_FLOOR(1..10)")
    if not 1 <= settings.round_default_complexity <= 10:
        invalid.append("ROUND_DEFAULT_COMPLEXITY(1..10)")
    if invalid:
        keys = ", ".join(invalid)
        raise ConfigError(f"invalid configuration: {keys}")

    if settings.app_env != "prod":
        return

    missing: list[str] = []
    required_non_empty = {
        "APP_DB": settings.app_db,
        "GITHUB_API_BASE_URL": settings.github_api_base_url,
        "JUDGE_BASE_URL": settings.judge_base_url,
        "JUDGE_MODEL": settings.judge_model,
    }
    for key, value in required_non_empty.items():
        if not value.strip():
            missing.append(key)
    if not settings.github_token.strip():
        _logger.warning("GITHUB_TOKEN not set; unauthenticated GitHub quota is 60 calls/hour")
    if not settings.app_db.startswith("/"):
        missing.append("APP_DB(absolute path required)")

    if missing:
        keys = ", ".join(sorted(set(missing)))
        raise ConfigError(f"invalid production configuration: {keys}")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
