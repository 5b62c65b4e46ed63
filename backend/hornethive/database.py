"""
HornetHive Database Configuration
Async SQLAlchemy engine and session management.
"""

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base

from hornethive.config import settings

# SQLite pools do not take sizing arguments
_pool_options = {} if settings.is_sqlite else {
    "pool_size": settings.database_pool_size,
    "max_overflow": settings.database_max_overflow,
    "pool_recycle": 3600,  # Recycle connections every hour
}

# Create async engine
engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,    # Check connection health before use
    **_pool_options,
)


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def use_unicode_lower(async_engine):
    """
    Replace SQLite's ASCII-only lower() on every new connection so
    case-insensitive username matching folds the same way as PostgreSQL.
    """
    @event.listens_for(async_engine.sync_engine, "connect")
    def _register_lower(dbapi_connection, connection_record):
        # Must be deterministic to back the lower(username) index
        dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


if settings.is_sqlite:
    use_unicode_lower(engine)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

# Base class for all models
Base = declarative_base()


async def init_db():
    """
    Initialize database tables.
    For development/testing only - use Alembic migrations in production.
    """
    # Register models on Base.metadata
    import hornethive.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def check_db() -> bool:
    """Run a trivial query to confirm connectivity."""
    async with AsyncSessionLocal() as session:
        await session.execute(text("SELECT 1"))
    return True


async def close_db():
    """Close database connections."""
    await engine.dispose()
