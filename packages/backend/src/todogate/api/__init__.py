"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: Auth is applied at the include_router level using FastAPI's
dependencies parameter. This protects all routes in the items router
without modifying individual handlers. Health and auth routers are
open (no auth required).
"""

from fastapi import APIRouter, Depends

from todogate.api.auth import router as auth_router
from todogate.api.health import root_router
from todogate.api.health import router as health_router
from todogate.api.items import router as items_router
from todogate.auth.dependencies import require_token

# All protected routers require a valid bearer token
_auth = [Depends(require_token)]

api_router = APIRouter(prefix="/api")

# Open routes — no auth required
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])

# Protected routes — require valid JWT
api_router.include_router(items_router, tags=["items"], dependencies=_auth)

__all__ = ["api_router", "root_router"]
