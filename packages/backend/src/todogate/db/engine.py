"""Async SQLAlchemy engine and session factory.

Learn: SQLAlchemy 2.0 async mode — create_async_engine for connection pooling,
AsyncSession for per-request database access, dependency injection via FastAPI.

create_app() builds one engine from its Settings and keeps it, with its
session factory, on app.state. get_db reads them from the request's app,
so an app built with another database_url really uses that database.
"""

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from todogate.config import Settings
from todogate.db.models import Base


def _engine_options(url: str) -> dict:
    # SQLite pools don't take size arguments
    if url.startswith("sqlite"):
        return {}
    return {"pool_size": 5, "max_overflow": 15}


def create_db_engine(cfg: Settings) -> AsyncEngine:
    """Connection pool for cfg.database_url. echo=True in debug to see SQL."""
    return create_async_engine(
        cfg.database_url,
        echo=cfg.debug,
        **_engine_options(cfg.database_url),
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(bind: AsyncEngine) -> None:
    """Create missing tables. There are no migrations; this is idempotent."""
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db(request: Request) -> AsyncSession:
    """FastAPI dependency — yields a session per request, auto-closes."""
    async with request.app.state.session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
