"""
Database connection and session management.
Handles async database operations with SQLAlchemy for SQLite (default) and PostgreSQL.
"""

from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import text, event, DateTime, Integer, func
from student_housing.config import settings
import logging
import math
from datetime import datetime
from typing import AsyncGenerator, Callable, Optional

logger = logging.getLogger(__name__)


def _null_safe(fn: Callable[[float], float]) -> Callable[[Optional[float]], Optional[float]]:
    def wrapper(value):
        if value is None:
            return None
        return fn(float(value))
    return wrapper


# SQLite ships without trigonometric functions in most builds; PostgreSQL has them natively
SQLITE_MATH_FUNCTIONS = {
    "radians": _null_safe(math.radians),
    "sin": _null_safe(math.sin),
    "cos": _null_safe(math.cos),
    "sqrt": _null_safe(math.sqrt),
    "asin": _null_safe(lambda x: math.asin(min(1.0, max(-1.0, x)))),
}


def register_sqlite_functions(dbapi_connection, connection_record) -> None:
    """Register the math functions used by the distance expression on a SQLite connection."""
    for name, fn in SQLITE_MATH_FUNCTIONS.items():
        dbapi_connection.create_function(name, 1, fn)
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, **kwargs) -> AsyncEngine:
    """
    Create an async engine and attach dialect-specific connection hooks.

    Args:
        database_url: Async SQLAlchemy database URL
        **kwargs: Extra engine options

    Returns:
        Configured AsyncEngine
    """
    if database_url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        # Connection pool settings for server databases
        kwargs.setdefault("pool_size", 10)
        kwargs.setdefault("max_overflow", 20)
        kwargs.setdefault("pool_pre_ping", True)
        kwargs.setdefault("pool_recycle", 3600)

    async_engine = create_async_engine(database_url, echo=settings.debug, **kwargs)

    if database_url.startswith("sqlite"):
        event.listen(async_engine.sync_engine, "connect", register_sqlite_functions)

    return async_engine


engine = build_engine(settings.database_url)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all database models.
    Includes common fields: id, created_at.
    """

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True
    )

    def __repr__(self) -> str:
        """String representation of the model."""
        return f"<{self.__class__.__name__}(id={self.id})>"


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency to get database session.
    Yields an async database session and ensures it's closed after use.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def ping_database(session_factory: async_sessionmaker = AsyncSessionLocal) -> bool:
    """
    Check database connectivity.
    Returns True if connection is successful, False otherwise.
    """
    try:
        async with session_factory() as session:
            result = await session.execute(text("SELECT 1"))
            result.scalar()
            logger.info("Database connection successful")
            return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


async def create_tables(target_engine: AsyncEngine = engine):
    """
    Create all database tables.
    This will be used during application startup and seeding.
    """
    async with target_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")


async def drop_tables(target_engine: AsyncEngine = engine):
    """
    Drop all database tables.
    This should only be used in testing or development.
    """
    if not settings.is_testing and not settings.is_development:
        raise RuntimeError("Cannot drop tables in production environment")

    async with target_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        logger.info("Database tables dropped successfully")


async def close_db_connection():
    """
    Close database connection.
    This should be called during application shutdown.
    """
    await engine.dispose()
    logger.info("Database connections closed")
