"""Database configuration and session management.

Provides async SQLAlchemy engine, session factory and the connection
retry policy for transient failures.
"""

from collections.abc import AsyncGenerator

import structlog
from sqlalchemy import text
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from product_catalog.infrastructure.config import settings

logger = structlog.get_logger()

# Errors worth another attempt: the server is unreachable or dropped the connection
TRANSIENT_ERRORS = (OperationalError, InterfaceError, OSError)

# Create async engine
engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

# Session factory
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# Base class for models
Base = declarative_base()


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session.

    Commits when the caller finishes without error, rolls back otherwise.

    Yields:
        AsyncSession for database operations.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Database unavailable, retrying",
        attempt=retry_state.attempt_number,
        max_attempts=settings.db_retry_attempts,
        error=str(error),
    )


def database_retry() -> AsyncRetrying:
    """Build the retry policy for transient database failures.

    Fixed attempt count with exponential backoff capped at
    ``settings.db_retry_max_delay`` seconds. The last error is re-raised.
    """
    return AsyncRetrying(
        stop=stop_after_attempt(settings.db_retry_attempts),
        wait=wait_exponential(multiplier=0.5, max=settings.db_retry_max_delay),
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        before_sleep=_log_retry,
        reraise=True,
    )


async def wait_for_database() -> None:
    """Block until the database accepts connections or retries run out."""
    async for attempt in database_retry():
        with attempt:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
    logger.info("Database connection established")


async def check_database(session: AsyncSession) -> None:
    """Run a trivial query through the given session.

    Raises:
        SQLAlchemyError: If the database stays unreachable after retries.
    """
    async for attempt in database_retry():
        with attempt:
            await session.execute(text("SELECT 1"))


async def create_tables() -> None:
    """Create database tables if they don't exist."""
    # Models must be registered on Base.metadata before create_all
    import product_catalog.catalog.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
