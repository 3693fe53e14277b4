"""Value types shared by the round-content pipeline."""

from dataclasses import dataclass, field
from typing import Literal

EntryType = Literal["file", "dir"]
ContentType = Literal["directory", "file"]


@dataclass(slots=True, frozen=True)
class ListingEntry:
    name: str
    path: str
    type: EntryType


@dataclass(slots=True)
class CodeFile:
    content: str
    path: str
    source_url: str


@dataclass(slots=True)
class CacheEntry:
    owner: str
    repo: str
    path: str
    content_type: ContentType
    url: str
    content: str
    last_accessed_at: str


@dataclass(slots=True, frozen=True)
class Analysis:
    description: str
    complexity: int


@dataclass(slots=True)
class RoundContent:
    content: str
    source_url: str
    path: str
    description: str
    complexity: int
    time_limit_seconds: int


@dataclass(slots=True)
class ApiBudget:
    """Outbound call counter for one repository-level attempt."""

    max_calls: int
    calls: int = field(default=0)

    @property
    def remaining(self) -> int:
        return max(0, self.max_calls - self.calls)

    @property
    def exhausted(self) -> bool:
        return self.calls >= self.max_calls

    def spend(self) -> None:
        self.calls += 1

    def reset(self) -> None:
        self.calls = 0
