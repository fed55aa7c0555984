"""
gigplatform/database/session.py

Initializes the SQLAlchemy asynchronous engine and session factory.
Provides an AsyncGenerator for database session dependency injection
and a commit helper that maps database failures to domain errors.
"""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from gigplatform.core.config import settings
from gigplatform.core.exceptions import GigPlatformError, StorageError

logger = logging.getLogger(__name__)

# -----------------------------------------------------
# SQLAlchemy Async Engine Initialization
# -----------------------------------------------------
engine = create_async_engine(
    settings.db_url,
    echo=False,  # Set to True for SQL debugging output
)

# -----------------------------------------------------
# Session Factory for Async Database Access
# -----------------------------------------------------
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False,  # Prevents auto-expiration of ORM objects after commit
)


# -----------------------------------------------------
# Dependency: Get Async DB Session
# -----------------------------------------------------
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency function for FastAPI endpoints to provide an async DB session.
    Yields a single session per request, rolls back on exceptions, and closes cleanly.
    """
    async with AsyncSessionLocal() as db:
        try:
            yield db
        except Exception:
            await db.rollback()
            raise


# -----------------------------------------------------
# Commit Helper
# -----------------------------------------------------
async def commit_or_raise(
    db: AsyncSession,
    action: str,
    integrity_error: GigPlatformError | None = None,
) -> None:
    """
    Commit the unit of work, rolling back on failure.

    Unique/foreign-key violations are re-raised as `integrity_error` when the caller
    maps them to a domain failure; every other database error becomes StorageError.
    """
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        if integrity_error is not None:
            logger.warning(f"[DB] Integrity violation during {action}: {e.orig}")
            raise integrity_error from e
        logger.error(f"[DB] Integrity violation during {action}: {e}", exc_info=True)
        raise StorageError(f"Failed to {action}.") from e
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"[DB] Error committing {action}: {e}", exc_info=True)
        raise StorageError(f"Failed to {action}.") from e
