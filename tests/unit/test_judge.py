import httpx
import pytest

from codeguess.errors import JudgeError
from codeguess.judge import (
    DEFAULT_COMPLEXITY,
    DEFAULT_DESCRIPTION,
    ComplexityJudge,
    normalize_complexity,
    parse_analysis,
)
from tests._fixtures.github import ScriptedProvider, judge_reply


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(15, 10), (-2, 1), (4.6, 5), (4.5, 5), (4.4, 4), (7, 7), (0, 1), (10.49, 10)],
)
def test_normalize_complexity_rounds_and_clamps(raw: float, expected: int) -> None:
    assert normalize_complexity(raw) == expected


@pytest.mark.parametrize("raw", [None, "7", True, float("nan"), [3]])
def test_non_numeric_complexity_uses_default(raw: object) -> None:
    assert normalize_complexity(raw) == DEFAULT_COMPLEXITY


def test_parse_well_formed_json() -> None:
    analysis = parse_analysis(judge_reply(8, "Parses HTTP headers."))
    assert analysis.description == "Parses HTTP headers."
    assert analysis.complexity == 8


def test_parse_json_inside_code_fence() -> None:
    text = 'Here you go:\n```json\n{"description": "Sorts items.", "complexity": 3}\n```'
    analysis = parse_analysis(text)
    assert analysis.description == "Sorts items."
    assert analysis.complexity == 3


def test_parse_missing_fields_uses_defaults() -> None:
    analysis = parse_analysis('{"summary": "nope"}')
    assert analysis.description == DEFAULT_DESCRIPTION
    assert analysis.complexity == DEFAULT_COMPLEXITY


def test_parse_free_text_with_complexity_mention() -> None:
    analysis = parse_analysis("Builds a trie of routes. Complexity: 6")
    assert analysis.complexity == 6
    assert "trie" in analysis.description
    assert "Complexity" not in analysis.description


def test_parse_free_text_without_rating() -> None:
    analysis = parse_analysis("Just some prose.")
    assert analysis.description == "Just some prose."
    assert analysis.complexity == DEFAULT_COMPLEXITY


def test_parse_empty_reply() -> None:
    analysis = parse_analysis("   ")
    assert analysis.description == DEFAULT_DESCRIPTION
    assert analysis.complexity == DEFAULT_COMPLEXITY


@pytest.mark.asyncio
async def test_analyze_sends_instruction_and_clamps() -> None:
    provider = ScriptedProvider(replies=[judge_reply(15)])
    judge = ComplexityJudge(provider)

    analysis = await judge.analyze("int main() {}", "src/main.c", "C")

    assert analysis.complexity == 10
    user_prompt = provider.prompts[0][1]["content"]
    assert "C code from the file src/main.c" in user_prompt
    assert "lower than 3" in user_prompt
    assert provider.prompts[0][0]["role"] == "system"


@pytest.mark.parametrize(
    "failure",
    [
        JudgeError("service down"),
        httpx.ReadTimeout("slow"),
        RuntimeError("unexpected"),
    ],
)
@pytest.mark.asyncio
async def test_analyze_absorbs_provider_failures(failure: Exception) -> None:
    judge = ComplexityJudge(ScriptedProvider(replies=[failure]))

    analysis = await judge.analyze("x = 1", "a.py", "Python")

    assert analysis.description == DEFAULT_DESCRIPTION
    assert analysis.complexity == DEFAULT_COMPLEXITY


@pytest.mark.asyncio
async def test_analyze_truncates_long_code(monkeypatch: pytest.MonkeyPatch) -> None:
    from codeguess.config import get_settings

    monkeypatch.setenv("JUDGE_MAX_CODE_CHARS", "1000")
    get_settings.cache_clear()
    provider = ScriptedProvider()
    judge = ComplexityJudge(provider)

    await judge.analyze("y" * 5000, "big.js", "JavaScript")

    user_prompt = provider.prompts[0][1]["content"]
    assert "(truncated)" in user_prompt
    assert "y" * 1001 not in user_prompt


@pytest.mark.asyncio
async def test_analyze_uses_configured_default_complexity(monkeypatch: pytest.MonkeyPatch) -> None:
    from codeguess.config import get_settings

    monkeypatch.setenv("ROUND_DEFAULT_COMPLEXITY", "3")
    get_settings.cache_clear()
    judge = ComplexityJudge(
        ScriptedProvider(replies=[JudgeError("down"), judge_reply("high"), "no rating here"])
    )

    failed = await judge.analyze("x = 1\n", "a.py", "Python")
    unrated = await judge.analyze("x = 1\n", "a.py", "Python")
    prose = await judge.analyze("x = 1\n", "a.py", "Python")

    assert failed.complexity == 3
    assert failed.description == DEFAULT_DESCRIPTION
    assert unrated.complexity == 3
    assert prose.complexity == 3
    assert parse_analysis("", default_complexity=8).complexity == 8
