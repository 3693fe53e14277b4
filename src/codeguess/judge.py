"""Complexity judge: asks a chat model to describe a file and rate it 1-10."""

import json
import logging
import math
import re

from codeguess.config import get_settings
from codeguess.models import Analysis
from codeguess.providers.base import ModelProvider

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "This code implements functionality relevant to the repository."
DEFAULT_COMPLEXITY = 5
MIN_COMPLEXITY = 1
MAX_COMPLEXITY = 10

SYSTEM_PROMPT = (
    "You are an expert code analyzer. Given a code snippet, provide a concise description "
    "of what the code does and rate its complexity on a scale of 1-10, where 1 is very "
    "simple and 10 is extremely complex. Consider factors like algorithmic complexity, "
    "number of control structures, and overall cognitive load required to understand the "
    'code. Respond with a JSON object: {"description": string, "complexity": integer}.'
)

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)
_COMPLEXITY_IN_TEXT = re.compile(r"complexity.*?(\d+(?:\.\d+)?)", re.IGNORECASE | re.DOTALL)


def default_analysis(complexity: int = DEFAULT_COMPLEXITY) -> Analysis:
    return Analysis(description=DEFAULT_DESCRIPTION, complexity=complexity)


def normalize_complexity(value: object, default: int = DEFAULT_COMPLEXITY) -> int:
    """Round half up and clamp into 1..10; anything non-numeric becomes the default."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return default
    if not math.isfinite(value):
        return default
    rounded = math.floor(value + 0.5)
    return min(MAX_COMPLEXITY, max(MIN_COMPLEXITY, rounded))


def build_user_prompt(code: str, path: str, language: str, max_chars: int) -> str:
    if len(code) > max_chars:
        code = code[:max_chars] + "\n... (truncated)"
    return (
        f"Analyze this {language} code from the file {path}:\n\n{code}\n\n"
        "Provide a concise description (1-2 sentences) of what this code does and rate its "
        "complexity on a scale of 1-10. If this is a configuration file, initialization "
        "code, or extremely simple boilerplate, explicitly rate it lower than 3."
    )


def _load_object(text: str) -> dict[str, object] | None:
    candidates = [text.strip()]
    match = _JSON_OBJECT.search(text)
    if match:
        candidates.append(match.group(0))
    for candidate in candidates:
        try:
            decoded = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(decoded, dict):
            return decoded
    return None


def parse_analysis(text: str, default_complexity: int = DEFAULT_COMPLEXITY) -> Analysis:
    """Turn a model reply into an Analysis without ever raising."""
    payload = _load_object(text)
    if payload is not None:
        description = payload.get("description")
        if not isinstance(description, str) or not description.strip():
            description = DEFAULT_DESCRIPTION
        return Analysis(
            description=description.strip(),
            complexity=normalize_complexity(payload.get("complexity"), default_complexity),
        )

    stripped = text.strip()
    if not stripped:
        return default_analysis(default_complexity)
    match = _COMPLEXITY_IN_TEXT.search(stripped)
    if match is None:
        return Analysis(description=stripped, complexity=default_complexity)
    description = (stripped[: match.start()] + stripped[match.end() :]).strip()
    return Analysis(
        description=description or DEFAULT_DESCRIPTION,
        complexity=normalize_complexity(float(match.group(1)), default_complexity),
    )


class ComplexityJudge:
    def __init__(self, provider: ModelProvider) -> None:
        self.provider = provider

    async def analyze(self, code: str, path: str, language: str) -> Analysis:
        settings = get_settings()
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {
                "role": "user",
                "content": build_user_prompt(
                    code, path, language, max(1000, settings.judge_max_code_chars)
                ),
            },
        ]
        try:
            response = await self.provider.generate(
                messages,
                temperature=settings.judge_temperature,
                max_tokens=settings.judge_max_tokens,
                json_mode=True,
            )
        except Exception as exc:
            logger.warning("complexity judge failed for %s: %s: %s", path, type(exc).__name__, exc)
            return default_analysis(settings.round_default_complexity)
        analysis = parse_analysis(response.text, settings.round_default_complexity)
        logger.info("judged %s (%s) complexity=%d", path, language, analysis.complexity)
        return analysis
