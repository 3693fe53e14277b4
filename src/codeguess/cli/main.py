"""Click CLI group: migrate, pick, cache-stats and serve commands."""

from __future__ import annotations

import asyncio
import json

import click

from codeguess.catalog import REPOSITORIES, parse_repository
from codeguess.config import get_settings
from codeguess.db.migrations.runner import run_migrations
from codeguess.errors import RoundContentUnavailable
from codeguess.github.cache import ContentCache
from codeguess.judge import ComplexityJudge
from codeguess.logging import configure_logging
from codeguess.providers.factory import build_judge_provider
from codeguess.selector import RoundContentSelector


@click.group()
@click.option("--log-level", type=str, default=None, help="Override LOG_LEVEL.")
def cli(log_level: str | None) -> None:
    """CodeGuess round content tooling."""
    configure_logging(log_level or get_settings().log_level)


@cli.command()
def migrate() -> None:
    """Apply pending SQL migrations."""
    applied = run_migrations()
    if applied:
        for name in applied:
            click.echo(f"applied {name}")
    else:
        click.echo("database is up to date")


@cli.command()
@click.option("--repo", "repo_name", type=str, default=None, help="Start from owner/name.")
@click.option("--min-complexity", type=click.IntRange(1, 10), default=None)
@click.option("--json", "json_output", is_flag=True, help="Print the full result as JSON.")
@click.option("--show-code", is_flag=True, help="Print the selected program text.")
def pick(
    repo_name: str | None,
    min_complexity: int | None,
    json_output: bool,
    show_code: bool,
) -> None:
    """Run the round content selector once and print what it picked."""
    settings = get_settings()
    run_migrations()
    try:
        primary = parse_repository(repo_name) if repo_name else None
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--repo") from exc
    selector = RoundContentSelector(
        ContentCache(),
        ComplexityJudge(build_judge_provider(settings)),
        settings=settings,
    )
    try:
        result = asyncio.run(selector.select(REPOSITORIES, min_complexity, primary=primary))
    except RoundContentUnavailable as exc:
        raise click.ClickException(str(exc)) from exc

    content = result.content
    if json_output:
        click.echo(
            json.dumps(
                {
                    "repository": result.repository.full_name,
                    "tier": result.tier,
                    "path": content.path,
                    "source_url": content.source_url,
                    "description": content.description,
                    "complexity": content.complexity,
                    "time_limit_seconds": content.time_limit_seconds,
                    "content": content.content,
                },
                indent=2,
            )
        )
        return
    click.echo(f"repository: {result.repository.full_name} ({result.tier})")
    click.echo(f"file:       {content.path}")
    click.echo(f"url:        {content.source_url}")
    click.echo(f"complexity: {content.complexity} -> {content.time_limit_seconds}s")
    click.echo(f"about:      {content.description}")
    if show_code:
        click.echo("")
        click.echo(content.content)


@cli.command("cache-stats")
def cache_stats() -> None:
    """Show how many GitHub responses the content cache holds."""
    run_migrations()
    cache = ContentCache()
    click.echo(f"directories: {cache.count('directory')}")
    click.echo(f"files:       {cache.count('file')}")


@cli.command()
@click.option("--host", type=str, default=None, help="Override BIND_HOST.")
@click.option("--port", type=int, default=None, help="Override BIND_PORT.")
def serve(host: str | None, port: int | None) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "codeguess.main:app",
        host=host or settings.bind_host,
        port=port or settings.bind_port,
        log_config=None,
    )


if __name__ == "__main__":
    cli()
