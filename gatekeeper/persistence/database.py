"""Account store engine and sessions.

The store is the web application's Supabase PostgreSQL database, reached
through its connection pooler. The pooler runs in transaction mode, which
does not support asyncpg's prepared statement cache.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from gatekeeper.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the account store.

    Args:
        settings: Application settings

    Returns:
        Engine with pre-ping and a per-statement timeout
    """
    database = settings.database
    return create_async_engine(
        database.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
        connect_args={
            "statement_cache_size": 0,
            "command_timeout": database.command_timeout,
        },
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory, one session per gateway event."""
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
