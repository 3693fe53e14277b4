"""Random walk over a repository tree that lands on one plausible code file."""

import logging
import random
from typing import Protocol

from codeguess.errors import NoCodeFound
from codeguess.languages import SOURCE_DIR_NAMES, is_code_file
from codeguess.models import CodeFile, ListingEntry

logger = logging.getLogger(__name__)


class ContentSource(Protocol):
    async def list_directory(self, owner: str, repo: str, path: str = "") -> list[ListingEntry]: ...

    async def get_file(self, owner: str, repo: str, path: str) -> CodeFile: ...


def _dirs(entries: list[ListingEntry]) -> list[ListingEntry]:
    return [entry for entry in entries if entry.type == "dir"]


def _code_files(entries: list[ListingEntry]) -> list[ListingEntry]:
    return [entry for entry in entries if entry.type == "file" and is_code_file(entry.name)]


class FileSampler:
    """Picks a file by walking root -> source dir -> (nested dir), uniformly at each step.

    A walk that dead-ends restarts from the root. Restarts are capped by
    ``max_restarts``, although the gateway's call budget normally ends a
    fruitless walk long before that.
    """

    def __init__(
        self,
        source: ContentSource,
        *,
        rng: random.Random | None = None,
        max_restarts: int = 10,
    ) -> None:
        self.source = source
        self._rng = rng or random.Random()
        self._max_restarts = max_restarts

    async def pick_code_file(self, owner: str, repo: str) -> CodeFile:
        for walk in range(self._max_restarts + 1):
            picked = await self._walk(owner, repo)
            if picked is not None:
                return await self.source.get_file(owner, repo, picked.path)
            logger.debug("walk %d over %s/%s found no code file, restarting", walk + 1, owner, repo)
        raise NoCodeFound(f"no code file found in {owner}/{repo} after {walk + 1} walks")

    async def _walk(self, owner: str, repo: str) -> ListingEntry | None:
        root = await self.source.list_directory(owner, repo, "")
        root_dirs = _dirs(root)
        preferred = [entry for entry in root_dirs if entry.name.lower() in SOURCE_DIR_NAMES]
        targets = preferred or root_dirs

        if not targets:
            candidates = _code_files(root)
            if not candidates:
                raise NoCodeFound(f"no code files at the root of {owner}/{repo}")
            return self._rng.choice(candidates)

        target = self._rng.choice(targets)
        listing = await self.source.list_directory(owner, repo, target.path)
        candidates = _code_files(listing)
        if candidates:
            return self._rng.choice(candidates)

        nested_dirs = _dirs(listing)
        if not nested_dirs:
            return None
        nested = self._rng.choice(nested_dirs)
        nested_listing = await self.source.list_directory(owner, repo, nested.path)
        candidates = _code_files(nested_listing)
        if candidates:
            return self._rng.choice(candidates)
        return None
