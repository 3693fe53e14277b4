"""Health and readiness routes."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from codeguess.config import get_settings
from codeguess.db.connection import get_conn
from codeguess.github.cache import ContentCache
from codeguess.providers.factory import build_judge_provider

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz() -> dict[str, bool]:
    return {"ok": True}


@router.get("/readyz")
async def readyz() -> JSONResponse:
    db_ok = True
    cache_stats: dict[str, int] = {}
    try:
        with get_conn() as conn:
            conn.execute("SELECT 1")
        cache = ContentCache()
        cache_stats = {
            "directory": cache.count("directory"),
            "file": cache.count("file"),
        }
    except Exception:
        db_ok = False

    judge_ok = await build_judge_provider(get_settings()).health_check()
    # The judge degrades to default analyses, so only the database gates readiness.
    status_code = 200 if db_ok else 503
    return JSONResponse(
        status_code=status_code,
        content={"ok": db_ok, "db": db_ok, "judge": judge_ok, "cache": cache_stats},
    )
