"""Provider construction helpers."""

from codeguess.config import Settings
from codeguess.providers.base import ModelProvider
from codeguess.providers.openai_compat import OpenAICompatProvider


def build_judge_provider(settings: Settings) -> ModelProvider:
    return OpenAICompatProvider(
        settings.judge_model,
        base_url=settings.judge_base_url,
        api_key=settings.judge_api_key,
        timeout_seconds=max(5, int(settings.judge_timeout_seconds)),
    )
