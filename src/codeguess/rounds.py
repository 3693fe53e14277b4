"""Round creation: pick a repository the game has not seen, select content, persist."""

import logging
import random
import sqlite3
from collections.abc import Sequence

from codeguess.catalog import REPOSITORIES, RepositoryRef, available_pool, choose_repository
from codeguess.db.connection import get_conn
from codeguess.db.queries import (
    clear_repository_history,
    get_game,
    get_round,
    insert_round,
    record_repository,
    set_game_round,
    used_repositories,
)
from codeguess.errors import GameNotFound, RoundConflict
from codeguess.logging import bind_context
from codeguess.selector import RoundContentSelector

logger = logging.getLogger(__name__)


def _check_round_slot(conn: sqlite3.Connection, game_id: str, round_number: int) -> int:
    game = get_game(conn, game_id)
    if game is None:
        raise GameNotFound(f"game {game_id} not found")
    total_rounds = int(game["total_rounds"])
    if not 1 <= round_number <= total_rounds:
        raise RoundConflict(f"round {round_number} outside 1..{total_rounds}")
    if get_round(conn, game_id, round_number) is not None:
        raise RoundConflict(f"round {round_number} already exists")
    return total_rounds


async def create_round(
    game_id: str,
    round_number: int,
    *,
    selector: RoundContentSelector,
    catalog: Sequence[RepositoryRef] = REPOSITORIES,
    min_complexity: int | None = None,
    rng: random.Random | None = None,
) -> dict[str, object]:
    """Create round ``round_number`` of ``game_id`` and return the stored row.

    The selection itself runs without a database connection held open; two
    concurrent requests for the same round race and the loser gets
    ``RoundConflict`` from the unique constraint.
    """
    bind_context(game_id=game_id, round_number=round_number)
    with get_conn() as conn:
        total_rounds = _check_round_slot(conn, game_id, round_number)
        pool = available_pool(catalog, used_repositories(conn, game_id))
        primary = choose_repository(pool, rng)
        record_repository(conn, game_id, primary.full_name)
    logger.info("round %d: selected repo %s", round_number, primary.full_name)

    result = await selector.select(pool, min_complexity, primary=primary)
    content = result.content

    with get_conn() as conn:
        record_repository(conn, game_id, result.repository.full_name)
        try:
            created = insert_round(
                conn,
                game_id=game_id,
                round_number=round_number,
                repo_full_name=result.repository.full_name,
                program_url=content.source_url,
                program_code=content.content,
                program_description=content.description,
                path=content.path,
                complexity=content.complexity,
                time_limit=content.time_limit_seconds,
                tier=result.tier,
            )
        except sqlite3.IntegrityError as exc:
            raise RoundConflict(f"round {round_number} already exists") from exc
        set_game_round(conn, game_id, round_number)
        if round_number >= total_rounds:
            cleared = clear_repository_history(conn, game_id)
            logger.info("final round created; cleared %d history rows", cleared)
    return created
