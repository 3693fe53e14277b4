import random
from collections import Counter

import pytest

from codeguess.errors import NoCodeFound
from codeguess.models import CodeFile, ListingEntry
from codeguess.sampler import FileSampler
from tests._fixtures.github import FakeRepoTree, FakeSource


def _source(files: dict[str, str]) -> FakeSource:
    return FakeSource(repos={"acme/app": FakeRepoTree(files=files)})


@pytest.mark.asyncio
async def test_root_only_repository_never_returns_non_code_file() -> None:
    files = {"main.py": "a = 1\n", "util.go": "package x\n", "notes.txt": "hello\n"}
    picked: Counter[str] = Counter()
    for seed in range(200):
        sampler = FileSampler(_source(files), rng=random.Random(seed))
        code_file = await sampler.pick_code_file("acme", "app")
        picked[code_file.path] += 1

    assert set(picked) == {"main.py", "util.go"}
    assert picked["main.py"] > 50
    assert picked["util.go"] > 50


@pytest.mark.asyncio
async def test_root_without_code_files_raises() -> None:
    sampler = FileSampler(_source({"README.md": "x", "LICENSE": "y"}), rng=random.Random(1))
    with pytest.raises(NoCodeFound):
        await sampler.pick_code_file("acme", "app")


@pytest.mark.asyncio
async def test_prefers_conventional_source_directories() -> None:
    files = {
        "docs/conf.py": "x = 1\n",
        "scripts/build.py": "x = 2\n",
        "src/core.py": "x = 3\n",
    }
    for seed in range(30):
        sampler = FileSampler(_source(files), rng=random.Random(seed))
        code_file = await sampler.pick_code_file("acme", "app")
        assert code_file.path == "src/core.py"


@pytest.mark.asyncio
async def test_falls_back_to_any_directory_when_none_are_conventional() -> None:
    files = {"app/server.ts": "export {}\n", "README.md": "x"}
    sampler = FileSampler(_source(files), rng=random.Random(3))
    code_file = await sampler.pick_code_file("acme", "app")
    assert code_file.path == "app/server.ts"


@pytest.mark.asyncio
async def test_descends_into_nested_directory() -> None:
    files = {"lib/README.md": "x", "lib/impl/engine.rs": "fn run() {}\n"}
    sampler = FileSampler(_source(files), rng=random.Random(5))
    code_file = await sampler.pick_code_file("acme", "app")
    assert code_file.path == "lib/impl/engine.rs"


@pytest.mark.asyncio
async def test_dead_end_walk_restarts_from_root() -> None:
    class ScriptedListings:
        def __init__(self) -> None:
            self.root_listings = 0

        async def list_directory(
            self, owner: str, repo: str, path: str = ""
        ) -> list[ListingEntry]:
            if path == "":
                self.root_listings += 1
                return [ListingEntry("src", "src", "dir")]
            if path == "src" and self.root_listings == 1:
                return [ListingEntry("notes.md", "src/notes.md", "file")]
            return [ListingEntry("ok.c", "src/ok.c", "file")]

        async def get_file(self, owner: str, repo: str, path: str) -> CodeFile:
            return CodeFile(content="int x;\n", path=path, source_url=f"https://x/{path}")

    source = ScriptedListings()
    sampler = FileSampler(source, rng=random.Random(0))

    code_file = await sampler.pick_code_file("acme", "app")

    assert code_file.path == "src/ok.c"
    assert source.root_listings == 2


@pytest.mark.asyncio
async def test_restarts_are_capped() -> None:
    files = {"src/notes.md": "x", "src/more/also.md": "y"}
    source = _source(files)
    sampler = FileSampler(source, rng=random.Random(0), max_restarts=2)

    with pytest.raises(NoCodeFound):
        await sampler.pick_code_file("acme", "app")
    assert sum(1 for _, path in source.calls if path == "") == 3
