"""Health check endpoints.

Learn: `GET /` is the plain liveness probe ("Server is running").
`GET /api/health` also checks that the database answers and reports
whether the optional Redis connection is up.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from todogate import __version__
from todogate.cache import get_redis
from todogate.db.engine import get_db

root_router = APIRouter()
router = APIRouter()


@root_router.get("/", response_class=PlainTextResponse)
async def root():
    return "Server is running"


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """Check server health and dependency connectivity."""
    checks = {"server": "ok", "version": __version__}

    # Check database
    try:
        await db.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        checks["database"] = f"error: {e}"

    # Check Redis (optional — rate limiting only)
    try:
        r = get_redis()
    except RuntimeError:
        checks["redis"] = "disabled"
    else:
        try:
            await r.ping()
            checks["redis"] = "ok"
        except Exception as e:
            checks["redis"] = f"error: {e}"

    status = "healthy" if checks["database"] == "ok" else "degraded"
    return {"status": status, **checks}
