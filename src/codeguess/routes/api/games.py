"""Game and round API routes."""

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field
from slowapi import Limiter
from slowapi.util import get_remote_address

from codeguess.config import get_settings
from codeguess.db.connection import get_conn
from codeguess.db.queries import get_game, get_round, insert_game
from codeguess.errors import GameNotFound, RoundConflict, RoundContentUnavailable
from codeguess.github.cache import ContentCache
from codeguess.judge import ComplexityJudge
from codeguess.logging import clear_context
from codeguess.providers.factory import build_judge_provider
from codeguess.rounds import create_round
from codeguess.selector import RoundContentSelector

router = APIRouter(tags=["api-games"])

_limiter = Limiter(key_func=get_remote_address)


def _round_rate_limit() -> str:
    return f"{get_settings().rate_limit_rounds_per_minute}/minute"


class CreateGameBody(BaseModel):
    total_rounds: int = Field(default=5, ge=1)


class CreateRoundBody(BaseModel):
    round_number: int = Field(ge=1)


def get_selector() -> RoundContentSelector:
    settings = get_settings()
    return RoundContentSelector(
        ContentCache(),
        ComplexityJudge(build_judge_provider(settings)),
        settings=settings,
    )


@router.post("/games", status_code=201)
def create_game(body: CreateGameBody) -> dict[str, object]:
    max_rounds = get_settings().round_max_total_rounds
    if body.total_rounds > max_rounds:
        raise HTTPException(status_code=400, detail=f"total_rounds must be <= {max_rounds}")
    with get_conn() as conn:
        return insert_game(conn, body.total_rounds)


@router.get("/games/{game_id}")
def read_game(game_id: str) -> dict[str, object]:
    with get_conn() as conn:
        game = get_game(conn, game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="Game room not found")
    return game


@router.post("/games/{game_id}/rounds", status_code=201)
@_limiter.limit(_round_rate_limit)
async def post_round(
    request: Request,
    game_id: str,
    body: CreateRoundBody,
    selector: RoundContentSelector = Depends(get_selector),  # noqa: B008
) -> dict[str, object]:
    del request
    try:
        return await create_round(game_id, body.round_number, selector=selector)
    except GameNotFound as exc:
        raise HTTPException(status_code=404, detail="Game room not found") from exc
    except RoundConflict as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except RoundContentUnavailable as exc:
        raise HTTPException(
            status_code=502, detail="Failed to fetch code from any repository"
        ) from exc
    finally:
        clear_context()


@router.get("/games/{game_id}/rounds/{round_number}")
def read_round(game_id: str, round_number: int) -> dict[str, object]:
    with get_conn() as conn:
        found = get_round(conn, game_id, round_number)
    if found is None:
        raise HTTPException(status_code=404, detail="round not found")
    return found
