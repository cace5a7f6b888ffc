"""Async engine and session scopes for the assessment store."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from intake_engine.config import Settings, get_settings
from intake_engine.infrastructure.telemetry import get_logger

logger = get_logger(__name__)

# Process-wide; created on first use or by init_db
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _create_engine(settings: Settings) -> AsyncEngine:
    return create_async_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_pre_ping=True,
        echo=settings.debug,
        connect_args={"server_settings": {"application_name": settings.service_name}},
    )


def get_session_factory(settings: Settings | None = None) -> async_sessionmaker[AsyncSession]:
    """Return the session factory, building the engine on first call."""
    global _engine, _session_factory

    if _session_factory is None:
        settings = settings or get_settings()
        _engine = _create_engine(settings)
        # Entities are converted before commit; nothing reads expired attributes
        _session_factory = async_sessionmaker(
            bind=_engine,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.info(
            "Database engine created",
            extra={"pool_size": settings.db_pool_size, "max_overflow": settings.db_max_overflow},
        )

    return _session_factory


async def init_db(settings: Settings | None = None) -> None:
    """Build the engine at startup instead of on the first request."""
    get_session_factory(settings)


async def close_db() -> None:
    """Dispose of pooled connections (call on shutdown)."""
    global _engine, _session_factory

    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


@asynccontextmanager
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """One transaction: commit on success, roll back on any error."""
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency wrapping the request in a single transaction."""
    async with get_db_session() as session:
        yield session
