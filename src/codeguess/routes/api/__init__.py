"""API v1 router aggregation."""

from fastapi import APIRouter

from codeguess.routes.api import games

router = APIRouter(prefix="/api/v1", tags=["api"])
router.include_router(games.router)
