"""GitHub contents API gateway with cache-first reads and a per-attempt call budget."""

import base64
import binascii
import json
import logging
import sqlite3
from typing import Any
from urllib.parse import quote

import httpx

from codeguess.config import get_settings
from codeguess.errors import BudgetExhausted, GatewayError, RateLimited
from codeguess.github.cache import ContentCache
from codeguess.models import ApiBudget, CacheEntry, CodeFile, ContentType, ListingEntry

logger = logging.getLogger(__name__)

_ENTRY_TYPES = {"file", "dir"}


def _github_headers(token: str, user_agent: str) -> dict[str, str]:
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
        "User-Agent": user_agent,
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def _is_rate_limited(response: httpx.Response) -> bool:
    if response.status_code not in {403, 429}:
        return False
    return response.headers.get("x-ratelimit-remaining", "").strip() == "0"


def _reset_epoch(response: httpx.Response) -> int | None:
    raw = response.headers.get("x-ratelimit-reset", "").strip()
    try:
        return int(raw)
    except ValueError:
        return None


def _parse_listing(payload: object) -> list[ListingEntry]:
    if not isinstance(payload, list):
        raise GatewayError("directory listing payload is not a list", retryable=False)
    entries: list[ListingEntry] = []
    for item in payload:
        if not isinstance(item, dict):
            continue
        entry_type = item.get("type")
        name = item.get("name")
        path = item.get("path")
        # symlinks and submodules are skipped
        if entry_type not in _ENTRY_TYPES:
            continue
        if not isinstance(name, str) or not isinstance(path, str):
            continue
        entries.append(ListingEntry(name=name, path=path, type=entry_type))
    return entries


def _serialize_listing(entries: list[ListingEntry]) -> str:
    return json.dumps([{"name": e.name, "path": e.path, "type": e.type} for e in entries])


def _decode_content(payload: dict[str, Any]) -> str:
    raw = payload.get("content")
    if not isinstance(raw, str) or not raw:
        raise GatewayError("no content found in file payload", retryable=False)
    encoding = str(payload.get("encoding") or "base64")
    if encoding != "base64":
        raise GatewayError(f"unsupported content encoding: {encoding}", retryable=False)
    try:
        # GitHub wraps the base64 body at 60 columns.
        data = base64.b64decode("".join(raw.split()), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise GatewayError(f"file content is not valid base64: {exc}", retryable=False) from exc
    return data.decode("utf-8", errors="replace")


class ContentGateway:
    """Reads directory listings and files through ``content_cache`` first.

    Every network call spends one unit of ``budget``; once it is spent, cache
    misses are answered with a random cached entry of the same kind.
    """

    def __init__(
        self,
        cache: ContentCache,
        budget: ApiBudget,
        *,
        token: str | None = None,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
        cache_sample_limit: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.cache = cache
        self.budget = budget
        self._token = (settings.github_token if token is None else token).strip()
        self._base_url = (base_url or settings.github_api_base_url).rstrip("/")
        self._timeout = timeout_seconds or settings.github_timeout_seconds
        self._sample_limit = cache_sample_limit or settings.cache_sample_limit
        self._user_agent = settings.github_user_agent.strip() or "CodeGuess/1.0"
        self._transport = transport

    def _contents_url(self, owner: str, repo: str, path: str) -> str:
        return f"{self._base_url}/repos/{owner}/{repo}/contents/{quote(path.strip('/'), safe='/')}"

    async def list_directory(self, owner: str, repo: str, path: str = "") -> list[ListingEntry]:
        entry = self._cached(owner, repo, path, "directory")
        if entry is not None:
            return self._listing_from_entry(entry)

        url = self._contents_url(owner, repo, path)
        payload = await self._fetch_json(url)
        entries = _parse_listing(payload)
        self._store(owner, repo, path, "directory", url, _serialize_listing(entries))
        return entries

    async def get_file(self, owner: str, repo: str, path: str) -> CodeFile:
        entry = self._cached(owner, repo, path, "file")
        if entry is not None:
            return CodeFile(content=entry.content, path=entry.path, source_url=entry.url)

        url = self._contents_url(owner, repo, path)
        payload = await self._fetch_json(url)
        if not isinstance(payload, dict):
            raise GatewayError("file payload is not an object", retryable=False)
        content = _decode_content(payload)
        html_url = str(payload.get("html_url") or url)
        file_path = str(payload.get("path") or path)
        self._store(owner, repo, path, "file", html_url, content)
        return CodeFile(content=content, path=file_path, source_url=html_url)

    def _cached(
        self, owner: str, repo: str, path: str, content_type: ContentType
    ) -> CacheEntry | None:
        entry = self.cache.get(owner, repo, path, content_type)
        if entry is not None:
            logger.debug("cache hit %s %s/%s:%s", content_type, owner, repo, path or "/")
            return entry
        if not self.budget.exhausted:
            return None
        fallback = self.cache.sample_random(content_type, self._sample_limit)
        if fallback is None:
            raise BudgetExhausted(
                f"call budget of {self.budget.max_calls} spent and no cached {content_type} entries"
            )
        logger.info(
            "call budget spent; serving cached %s %s/%s:%s for %s/%s:%s",
            content_type,
            fallback.owner,
            fallback.repo,
            fallback.path or "/",
            owner,
            repo,
            path or "/",
        )
        return fallback

    def _listing_from_entry(self, entry: CacheEntry) -> list[ListingEntry]:
        try:
            payload = json.loads(entry.content)
        except json.JSONDecodeError as exc:
            raise GatewayError(
                f"cached listing for {entry.owner}/{entry.repo}:{entry.path} is corrupt",
                retryable=False,
            ) from exc
        return _parse_listing(payload)

    async def _fetch_json(self, url: str) -> object:
        self.budget.spend()
        headers = _github_headers(self._token, self._user_agent)
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(url, headers=headers)
        except httpx.HTTPError as exc:
            raise GatewayError(f"GitHub request failed: {exc}") from exc

        if _is_rate_limited(response):
            reset_at = _reset_epoch(response)
            logger.warning("GitHub rate limit hit (reset=%s) for %s", reset_at, url)
            raise RateLimited(f"GitHub API rate limit exceeded for {url}", reset_at=reset_at)
        if response.status_code >= 400:
            raise GatewayError(
                f"GitHub API error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                retryable=response.status_code >= 500,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise GatewayError("GitHub response is not JSON", retryable=False) from exc

    def _store(
        self,
        owner: str,
        repo: str,
        path: str,
        content_type: ContentType,
        url: str,
        content: str,
    ) -> None:
        try:
            self.cache.put(owner, repo, path, content_type, url, content)
        except sqlite3.Error as exc:
            logger.warning("cache write failed for %s/%s:%s: %s", owner, repo, path, exc)
