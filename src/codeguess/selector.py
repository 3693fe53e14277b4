"""Round content selection: sample, filter, judge, and fall back until a round exists.

The fallback policy is data: ``build_ladder`` returns an ordered list of
``AttemptPlan`` entries (primary repository, relaxed backups, one last-chance
repository) and ``select`` walks it with a single attempt-and-classify loop.
Each repository-level attempt gets a freshly reset ``ApiBudget``.
"""

import logging
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Literal

from codeguess.catalog import RepositoryRef
from codeguess.config import Settings, get_settings
from codeguess.errors import (
    BudgetExhausted,
    CodeGuessError,
    GatewayError,
    NoCodeFound,
    NoSuitableFile,
    RateLimited,
    RoundContentUnavailable,
)
from codeguess.github.cache import ContentCache
from codeguess.github.gateway import ContentGateway
from codeguess.judge import ComplexityJudge
from codeguess.languages import language_from_path
from codeguess.models import Analysis, ApiBudget, CodeFile, RoundContent
from codeguess.normalizer import count_code_lines, strip_comments
from codeguess.sampler import ContentSource, FileSampler

logger = logging.getLogger(__name__)

PlanTier = Literal["primary", "backup", "last_chance"]
ResultTier = Literal["primary", "backup", "cache", "last_chance"]
SourceFactory = Callable[[ApiBudget], ContentSource]


@dataclass(slots=True, frozen=True)
class AttemptPlan:
    repo: RepositoryRef
    min_complexity: int
    tier: PlanTier


@dataclass(slots=True, frozen=True)
class SkipSignal:
    """A repository attempt that produced nothing; the ladder moves on."""

    repo: str
    reason: str
    error: CodeGuessError | None = None


@dataclass(slots=True)
class SelectionResult:
    content: RoundContent
    repository: RepositoryRef
    tier: ResultTier


def time_limit_for(complexity: int, base_seconds: int = 30, per_point_seconds: int = 10) -> int:
    return base_seconds + complexity * per_point_seconds


class RoundContentSelector:
    def __init__(
        self,
        cache: ContentCache,
        judge: ComplexityJudge,
        *,
        source_factory: SourceFactory | None = None,
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.cache = cache
        self.judge = judge
        self.settings = settings or get_settings()
        self._rng = rng or random.Random()
        self._source_factory = source_factory or (
            lambda budget: ContentGateway(cache, budget)
        )

    def new_budget(self) -> ApiBudget:
        return ApiBudget(max_calls=self.settings.github_max_calls_per_attempt)

    def build_ladder(
        self,
        primary: RepositoryRef,
        pool: Sequence[RepositoryRef],
        min_complexity: int,
    ) -> list[AttemptPlan]:
        settings = self.settings
        others = [repo for repo in pool if repo.full_name != primary.full_name]
        drawn = self._rng.sample(others, k=min(len(others), settings.round_backup_repositories + 1))
        backups = drawn[: settings.round_backup_repositories]
        last_chance = drawn[len(backups)] if len(drawn) > len(backups) else primary

        plans = [AttemptPlan(primary, min_complexity, "primary")]
        for step, repo in enumerate(backups, start=1):
            relaxed = min_complexity - step * settings.round_complexity_relaxation_step
            floor = max(settings.round_min_complexity_floor, min(relaxed, min_complexity))
            plans.append(AttemptPlan(repo, floor, "backup"))
        plans.append(AttemptPlan(last_chance, settings.round_min_complexity_floor, "last_chance"))
        return plans

    async def select(
        self,
        pool: Sequence[RepositoryRef],
        min_complexity: int | None = None,
        primary: RepositoryRef | None = None,
    ) -> SelectionResult:
        if not pool and primary is None:
            raise RoundContentUnavailable("repository pool is empty")
        floor = min_complexity
        if floor is None:
            floor = self.settings.round_default_min_complexity
        first = primary or self._rng.choice(list(pool))
        skips: list[SkipSignal] = []
        for plan in self.build_ladder(first, pool, floor):
            logger.info(
                "round attempt tier=%s repo=%s min_complexity=%d",
                plan.tier,
                plan.repo.full_name,
                plan.min_complexity,
            )
            outcome = await self._run_plan(plan, self.new_budget())
            if isinstance(outcome, SkipSignal):
                logger.warning(
                    "round attempt skipped tier=%s repo=%s reason=%s",
                    plan.tier,
                    outcome.repo,
                    outcome.reason,
                )
                skips.append(outcome)
                continue
            content, tier = outcome
            logger.info(
                "round content selected tier=%s repo=%s path=%s complexity=%d",
                tier,
                plan.repo.full_name,
                content.path,
                content.complexity,
            )
            return SelectionResult(content=content, repository=plan.repo, tier=tier)
        summary = ", ".join(f"{skip.repo}:{skip.reason}" for skip in skips)
        raise RoundContentUnavailable(f"failed to produce round content ({summary})")

    async def attempt(
        self,
        repo: RepositoryRef,
        min_complexity: int,
        budget: ApiBudget | None = None,
    ) -> RoundContent | SkipSignal:
        outcome = await self._run_plan(
            AttemptPlan(repo, min_complexity, "primary"), budget or self.new_budget()
        )
        if isinstance(outcome, SkipSignal):
            return outcome
        return outcome[0]

    async def _run_plan(
        self, plan: AttemptPlan, budget: ApiBudget
    ) -> tuple[RoundContent, ResultTier] | SkipSignal:
        budget.reset()
        sampler = FileSampler(self._source_factory(budget), rng=self._rng)
        if plan.tier == "last_chance":
            return await self._last_chance(plan, sampler)
        return await self._search(plan, sampler)

    async def _search(
        self, plan: AttemptPlan, sampler: FileSampler
    ) -> tuple[RoundContent, ResultTier] | SkipSignal:
        settings = self.settings
        repo = plan.repo
        best: tuple[CodeFile, Analysis] | None = None
        for attempt_no in range(1, settings.round_attempts_per_repo + 1):
            try:
                code_file = await sampler.pick_code_file(repo.owner, repo.name)
            except (RateLimited, BudgetExhausted) as exc:
                logger.warning(
                    "%s on %s; switching to cached content", type(exc).__name__, repo.full_name
                )
                return await self._from_cache(repo, exc)
            except NoCodeFound as exc:
                return SkipSignal(repo.full_name, "no_code_found", exc)
            except GatewayError as exc:
                logger.warning("attempt %d on %s failed: %s", attempt_no, repo.full_name, exc)
                continue

            language = language_from_path(code_file.path)
            lines = count_code_lines(strip_comments(code_file.content, language))
            if lines < settings.round_min_lines:
                logger.info("skipping %s: too short (%d lines)", code_file.path, lines)
                continue
            if lines > settings.round_max_lines:
                logger.info("skipping %s: too long (%d lines)", code_file.path, lines)
                continue

            analysis = await self.judge.analyze(code_file.content, code_file.path, language)
            if analysis.complexity >= plan.min_complexity:
                return self._round_content(code_file, analysis), plan.tier
            logger.info(
                "%s complexity too low (%d < %d)",
                code_file.path,
                analysis.complexity,
                plan.min_complexity,
            )
            if best is None or analysis.complexity > best[1].complexity:
                best = (code_file, analysis)

        if best is not None:
            return self._round_content(*best), plan.tier
        return SkipSignal(
            repo.full_name,
            "no_suitable_file",
            NoSuitableFile(f"no suitable file in {repo.full_name}"),
        )

    async def _from_cache(
        self, repo: RepositoryRef, cause: CodeGuessError
    ) -> tuple[RoundContent, ResultTier] | SkipSignal:
        entry = self.cache.sample_random("file", self.settings.cache_sample_limit)
        if entry is None:
            return SkipSignal(repo.full_name, type(cause).__name__, cause)
        code_file = CodeFile(content=entry.content, path=entry.path, source_url=entry.url)
        analysis = await self.judge.analyze(
            code_file.content, code_file.path, language_from_path(code_file.path)
        )
        return self._round_content(code_file, analysis), "cache"

    async def _last_chance(
        self, plan: AttemptPlan, sampler: FileSampler
    ) -> tuple[RoundContent, ResultTier] | SkipSignal:
        settings = self.settings
        repo = plan.repo
        for attempt_no in range(1, settings.round_attempts_per_repo + 1):
            try:
                code_file = await sampler.pick_code_file(repo.owner, repo.name)
            except (NoCodeFound, RateLimited, BudgetExhausted) as exc:
                return SkipSignal(repo.full_name, type(exc).__name__, exc)
            except GatewayError as exc:
                logger.warning(
                    "last-chance attempt %d on %s failed: %s", attempt_no, repo.full_name, exc
                )
                continue

            language = language_from_path(code_file.path)
            cleaned = strip_comments(code_file.content, language)
            lines = count_code_lines(cleaned)
            if lines < settings.round_last_chance_min_lines:
                logger.info("last chance: %s too short (%d lines)", code_file.path, lines)
                continue
            analysis = await self.judge.analyze(cleaned, code_file.path, language)
            return (
                self._round_content(
                    CodeFile(content=cleaned, path=code_file.path, source_url=code_file.source_url),
                    analysis,
                ),
                "last_chance",
            )
        return SkipSignal(
            repo.full_name,
            "no_suitable_file",
            NoSuitableFile(f"no file with {settings.round_last_chance_min_lines}+ lines"),
        )

    def _round_content(self, code_file: CodeFile, analysis: Analysis) -> RoundContent:
        settings = self.settings
        return RoundContent(
            content=code_file.content,
            source_url=code_file.source_url,
            path=code_file.path,
            description=analysis.description,
            complexity=analysis.complexity,
            time_limit_seconds=time_limit_for(
                analysis.complexity,
                settings.round_time_base_seconds,
                settings.round_time_per_complexity_seconds,
            ),
        )
