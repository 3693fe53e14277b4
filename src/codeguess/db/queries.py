"""Core query helpers used by routes and the round service."""

import sqlite3
from datetime import UTC, datetime

from codeguess.ids import new_id, new_join_code


def now_iso() -> str:
    return datetime.now(UTC).isoformat()


def _row_dict(row: sqlite3.Row | None) -> dict[str, object] | None:
    if row is None:
        return None
    return {key: row[key] for key in row.keys()}


def insert_game(conn: sqlite3.Connection, total_rounds: int) -> dict[str, object]:
    game_id = new_id("game")
    now = now_iso()
    for _ in range(5):
        code = new_join_code()
        try:
            conn.execute(
                "INSERT INTO games(id, code, status, current_round, total_rounds, "
                "created_at, updated_at) VALUES(?, ?, 'waiting', 0, ?, ?, ?)",
                (game_id, code, total_rounds, now, now),
            )
        except sqlite3.IntegrityError:
            continue
        break
    else:
        raise RuntimeError("could not allocate a unique join code")
    game = get_game(conn, game_id)
    assert game is not None
    return game


def get_game(conn: sqlite3.Connection, game_id: str) -> dict[str, object] | None:
    row = conn.execute(
        "SELECT id, code, status, current_round, total_rounds, created_at, updated_at "
        "FROM games WHERE id=? LIMIT 1",
        (game_id,),
    ).fetchone()
    return _row_dict(row)


def set_game_round(conn: sqlite3.Connection, game_id: str, round_number: int) -> None:
    conn.execute(
        "UPDATE games SET current_round=?, status='playing', updated_at=? WHERE id=?",
        (round_number, now_iso(), game_id),
    )


def insert_round(
    conn: sqlite3.Connection,
    *,
    game_id: str,
    round_number: int,
    repo_full_name: str,
    program_url: str,
    program_code: str,
    program_description: str,
    path: str,
    complexity: int,
    time_limit: int,
    tier: str,
) -> dict[str, object]:
    round_id = new_id("rnd")
    conn.execute(
        """
        INSERT INTO rounds(
          id, game_id, round_number, repo_full_name, program_url, program_code,
          program_description, path, complexity, time_limit, tier, status, created_at
        )
        VALUES(?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, 'active', ?)
        """,
        (
            round_id,
            game_id,
            round_number,
            repo_full_name,
            program_url,
            program_code,
            program_description,
            path,
            complexity,
            time_limit,
            tier,
            now_iso(),
        ),
    )
    created = get_round(conn, game_id, round_number)
    assert created is not None
    return created


def get_round(
    conn: sqlite3.Connection, game_id: str, round_number: int
) -> dict[str, object] | None:
    row = conn.execute(
        "SELECT id, game_id, round_number, repo_full_name, program_url, program_code, "
        "program_description, path, complexity, time_limit, tier, status, created_at "
        "FROM rounds WHERE game_id=? AND round_number=? LIMIT 1",
        (game_id, round_number),
    ).fetchone()
    return _row_dict(row)


def used_repositories(conn: sqlite3.Connection, game_id: str) -> set[str]:
    rows = conn.execute(
        "SELECT repo_full_name FROM game_repo_history WHERE game_id=?",
        (game_id,),
    ).fetchall()
    return {str(row["repo_full_name"]) for row in rows}


def record_repository(conn: sqlite3.Connection, game_id: str, repo_full_name: str) -> None:
    conn.execute(
        "INSERT OR IGNORE INTO game_repo_history(game_id, repo_full_name, created_at) "
        "VALUES(?, ?, ?)",
        (game_id, repo_full_name, now_iso()),
    )


def clear_repository_history(conn: sqlite3.Connection, game_id: str) -> int:
    cur = conn.execute("DELETE FROM game_repo_history WHERE game_id=?", (game_id,))
    return int(cur.rowcount or 0)
