"""Database Session Manager: async connection pools for the public and service roles.

Invariants:
    - Every session rolls back on exception (no partial commits leak)
    - Connection pools use pool_pre_ping for stale connection detection
    - storage_errors() maps every SQLAlchemy exception and network-level
      failures (OSError, timeouts) to StorageError, keeping the original message
    - The service manager exists only when a service URL is configured

Design Decisions:
    - Module-level managers initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: returned rows stay readable after commit
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from bbs.core.errors import ForbiddenError, StorageError

logger = logging.getLogger(__name__)


def _driver_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


@asynccontextmanager
async def storage_errors(operation: str) -> AsyncGenerator[None, None]:
    """Translate SQLAlchemy and network failures in the block to StorageError."""
    try:
        yield
    except IntegrityError as e:
        logger.error(f"DB integrity error during {operation}: {e}")
        raise StorageError(_driver_message(e), operation) from e
    except OperationalError as e:
        logger.error(f"DB operational error during {operation}: {e}")
        raise StorageError(_driver_message(e), operation) from e
    except DBAPIError as e:
        logger.error(f"DB driver error during {operation}: {e}")
        raise StorageError(_driver_message(e), operation) from e
    except SQLAlchemyError as e:
        logger.error(f"SQLAlchemy error during {operation}: {e}")
        raise StorageError(str(e), operation) from e
    except (OSError, asyncio.TimeoutError) as e:
        logger.error(f"DB network error during {operation}: {e}")
        raise StorageError(str(e), operation) from e


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 5, max_overflow: int = 5,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.engine.dispose()


# Initialized on startup
db_manager: DatabaseSessionManager | None = None
service_db_manager: DatabaseSessionManager | None = None


def init_db(
    database_url: str, service_url: str | None = None, **kwargs,
) -> None:
    global db_manager, service_db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    service_db_manager = (
        DatabaseSessionManager(service_url, **kwargs) if service_url else None
    )


async def close_db() -> None:
    global db_manager, service_db_manager
    for manager in (db_manager, service_db_manager):
        if manager is not None:
            await manager.close()
    db_manager = None
    service_db_manager = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for public-role database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session


async def get_service_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for elevated-privilege sessions.

    Raises ForbiddenError when no service credential is configured, so the
    admin route never reaches the store.
    """
    if not service_db_manager:
        raise ForbiddenError()
    async with service_db_manager.session() as session:
        yield session
