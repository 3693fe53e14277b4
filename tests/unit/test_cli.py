import json
import random

from click.testing import CliRunner

from codeguess.cli import main as cli_main
from codeguess.github.cache import ContentCache
from codeguess.selector import RoundContentSelector
from tests._fixtures.github import (
    FakeRepoTree,
    FakeSource,
    ScriptedProvider,
    code_lines,
    judge_reply,
)


def test_migrate_reports_up_to_date() -> None:
    result = CliRunner().invoke(cli_main.cli, ["migrate"])
    assert result.exit_code == 0
    assert "database is up to date" in result.output


def test_cache_stats_counts_entries() -> None:
    cache = ContentCache()
    cache.put("o", "r", "", "directory", "https://x/", "[]")
    cache.put("o", "r", "a.py", "file", "https://x/a.py", "x = 1\n")
    cache.put("o", "r", "b.py", "file", "https://x/b.py", "y = 2\n")

    result = CliRunner().invoke(cli_main.cli, ["cache-stats"])
    assert result.exit_code == 0
    assert "directories: 1" in result.output
    assert "files:       2" in result.output


def test_pick_rejects_malformed_repo() -> None:
    result = CliRunner().invoke(cli_main.cli, ["pick", "--repo", "not-a-repo"])
    assert result.exit_code == 2
    assert "--repo" in result.output


def test_pick_prints_json(monkeypatch) -> None:
    tree = FakeRepoTree({"src/app.py": code_lines(20)})
    source = FakeSource(repos={"octo/widgets": tree})
    provider = ScriptedProvider(replies=[judge_reply(3, "Assigns numbers.")])

    def fake_selector(cache, judge, *, settings=None):
        del judge
        return RoundContentSelector(
            cache,
            cli_main.ComplexityJudge(provider),
            source_factory=lambda budget: source,
            settings=settings,
            rng=random.Random(0),
        )

    monkeypatch.setattr(cli_main, "RoundContentSelector", fake_selector)

    args = ["--log-level", "ERROR", "pick", "--repo", "octo/widgets", "--min-complexity", "2"]
    result = CliRunner().invoke(cli_main.cli, [*args, "--json"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["repository"] == "octo/widgets"
    assert payload["tier"] == "primary"
    assert payload["complexity"] == 3
    assert payload["time_limit_seconds"] == 60
    assert payload["description"] == "Assigns numbers."
