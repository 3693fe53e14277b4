"""Durable cache of GitHub contents responses, backed by SQLite."""

import logging
import random
import sqlite3
from collections.abc import Callable
from contextlib import AbstractContextManager

from codeguess.db.connection import get_conn
from codeguess.db.queries import now_iso
from codeguess.models import CacheEntry, ContentType

logger = logging.getLogger(__name__)

ConnFactory = Callable[[], AbstractContextManager[sqlite3.Connection]]

_COLUMNS = "owner, repo, path, content_type, url, content, last_accessed_at"


def _entry(row: sqlite3.Row) -> CacheEntry:
    return CacheEntry(
        owner=str(row["owner"]),
        repo=str(row["repo"]),
        path=str(row["path"]),
        content_type=row["content_type"],
        url=str(row["url"]),
        content=str(row["content"]),
        last_accessed_at=str(row["last_accessed_at"]),
    )


class ContentCache:
    """Point reads, first-write-wins inserts and random sampling over ``content_cache``.

    Rows are never evicted; growth is bounded only by the number of distinct
    paths the gateway ever fetched.
    """

    def __init__(
        self,
        conn_factory: ConnFactory = get_conn,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self._conn_factory = conn_factory
        self._rng = rng or random.Random()

    def get(
        self, owner: str, repo: str, path: str, content_type: ContentType
    ) -> CacheEntry | None:
        with self._conn_factory() as conn:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM content_cache "
                "WHERE owner=? AND repo=? AND path=? AND content_type=? LIMIT 1",
                (owner, repo, path, content_type),
            ).fetchone()
            if row is None:
                return None
            entry = _entry(row)
            touched_at = now_iso()
            try:
                conn.execute(
                    "UPDATE content_cache SET last_accessed_at=? "
                    "WHERE owner=? AND repo=? AND path=? AND content_type=?",
                    (touched_at, owner, repo, path, content_type),
                )
                entry.last_accessed_at = touched_at
            except sqlite3.Error as exc:
                logger.warning(
                    "cache access-time update failed for %s/%s:%s: %s", owner, repo, path, exc
                )
        return entry

    def put(
        self,
        owner: str,
        repo: str,
        path: str,
        content_type: ContentType,
        url: str,
        content: str,
    ) -> None:
        now = now_iso()
        with self._conn_factory() as conn:
            conn.execute(
                "INSERT INTO content_cache("
                "owner, repo, path, content_type, url, content, created_at, last_accessed_at"
                ") VALUES(?, ?, ?, ?, ?, ?, ?, ?) "
                "ON CONFLICT(owner, repo, path, content_type) DO NOTHING",
                (owner, repo, path, content_type, url, content, now, now),
            )

    def sample_random(self, content_type: ContentType, limit: int = 20) -> CacheEntry | None:
        with self._conn_factory() as conn:
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM content_cache WHERE content_type=? "
                "ORDER BY last_accessed_at DESC, id DESC LIMIT ?",
                (content_type, max(1, limit)),
            ).fetchall()
        if not rows:
            return None
        return _entry(self._rng.choice(rows))

    def count(self, content_type: ContentType | None = None) -> int:
        with self._conn_factory() as conn:
            if content_type is None:
                row = conn.execute("SELECT COUNT(*) AS cnt FROM content_cache").fetchone()
            else:
                row = conn.execute(
                    "SELECT COUNT(*) AS cnt FROM content_cache WHERE content_type=?",
                    (content_type,),
                ).fetchone()
        return int(row["cnt"]) if row else 0
