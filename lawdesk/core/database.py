from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.exc import OperationalError
import logging

from lawdesk.core.config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def async_database_url(db_url: str) -> str:
    """
    Rewrite a plain database URL to its async driver form.
    """
    # If using postgresql://, convert to postgresql+asyncpg://
    if db_url.startswith('postgresql://'):
        return db_url.replace('postgresql://', 'postgresql+asyncpg://', 1)
    # If using postgres://, convert to postgresql+asyncpg://
    if db_url.startswith('postgres://'):
        return db_url.replace('postgres://', 'postgresql+asyncpg://', 1)
    # Local SQLite files go through aiosqlite
    if db_url.startswith('sqlite://'):
        return db_url.replace('sqlite://', 'sqlite+aiosqlite://', 1)
    return db_url


def create_engine_from_settings(settings: Settings, database_url: str | None = None) -> AsyncEngine:
    db_url = async_database_url(database_url or settings.DATABASE_URL)

    options = {
        "echo": settings.SQL_ECHO,  # Set to True for debugging SQL queries
        "future": True,
        "pool_pre_ping": True,  # Verify connections before using them
    }
    if db_url.startswith('postgresql+asyncpg://'):
        logger.info("Using async database connection with asyncpg")
        options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            # asyncpg-specific connect args
            connect_args={"command_timeout": settings.DB_COMMAND_TIMEOUT},
        )
    else:
        logger.info(f"Using async database connection: {db_url.split('://', 1)[0]}")

    try:
        return create_async_engine(db_url, **options)
    except OperationalError as e:
        logger.error(f"Failed to connect to database: {e}")
        raise


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        engine,
        expire_on_commit=False,  # Don't expire objects after commit
        autoflush=False,
    )


async def initialize_db(engine: AsyncEngine) -> bool:
    """
    Create missing tables and verify the connection is working.
    """
    # Register every table on Base.metadata
    import lawdesk.db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database connection initialized successfully")
    return True


async def close_db_connection(engine: AsyncEngine) -> None:
    """
    Close database connection pool.
    """
    await engine.dispose()
    logger.info("Database connection pool closed")
