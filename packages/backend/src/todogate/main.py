"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. Lifespan manages startup/shutdown (tables, Redis, engine).
Middleware, CORS, and routers all registered here.

The TokenService is built here, once, from the settings' frozen
TokenConfig and parked on app.state. Route dependencies read it from
there; nothing mutates it afterwards. The database engine is built the
same way from the same Settings.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from todogate import __version__
from todogate.api import api_router, root_router
from todogate.auth.jwt import TokenService
from todogate.config import Settings, settings as default_settings
from todogate.db.engine import create_db_engine, create_session_factory, init_db

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Anything before `yield` runs at startup, after `yield` runs at shutdown.
    """
    from todogate.cache import close_redis, init_redis

    cfg: Settings = app.state.settings
    logger.info(
        "todogate.starting",
        version=__version__,
        environment=cfg.environment,
        port=cfg.port,
    )

    await init_db(app.state.engine)
    logger.info("todogate.database_ready")

    try:
        await init_redis(cfg.redis_url)
        logger.info("todogate.redis_connected", url=cfg.redis_url)
    except Exception as e:
        # Redis is optional — app works without rate limiting
        logger.warning("todogate.redis_unavailable", error=str(e))

    yield

    logger.info("todogate.shutdown")
    await close_redis()
    await app.state.engine.dispose()


def create_app(cfg: Optional[Settings] = None) -> FastAPI:
    """Build and return the FastAPI application."""
    cfg = cfg or default_settings
    docs = cfg.docs_enabled
    app = FastAPI(
        title="todogate",
        description="Task-list store behind bearer-token authentication",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if docs else None,
        redoc_url="/redoc" if docs else None,
        openapi_url="/openapi.json" if docs else None,
    )
    app.state.settings = cfg
    app.state.token_service = TokenService(cfg.token_config())
    app.state.engine = create_db_engine(cfg)
    app.state.session_factory = create_session_factory(app.state.engine)

    # ── Middleware stack ──────────────────────────────────────
    # Note: Starlette middleware executes in reverse order of registration.
    # Request flow: RequestId → Security → CORS → RateLimit → handler

    from todogate.middleware.rate_limit import RateLimitMiddleware
    from todogate.middleware.request_id import RequestIdMiddleware
    from todogate.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(
        RateLimitMiddleware,
        default_rpm=cfg.rate_limit_rpm,
        auth_rpm=cfg.rate_limit_auth_rpm,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    app.include_router(root_router, tags=["health"])
    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: todogate.main:app)
app = create_app()
