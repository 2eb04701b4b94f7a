"""Database connection management for projtrack.

This module provides the factory for the SQLAlchemy async engine and the
scoped transaction helper every repository operation runs inside.

Each call to ``transaction`` checks out its own connection, begins a
transaction, commits when the block finishes, and rolls back when it
raises. The connection is released on every exit path.

Example usage:
    >>> from projtrack.config import DatabaseConfig
    >>> from projtrack.database.connection import get_engine, transaction
    >>>
    >>> engine = get_engine(DatabaseConfig(url="sqlite+aiosqlite:///projects.db"))
    >>> async with transaction(engine) as conn:
    ...     await conn.execute(select(project_table))
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import structlog
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from projtrack.config import DatabaseConfig
from projtrack.database.schema import metadata
from projtrack.exceptions import DataAccessError

logger = structlog.get_logger(__name__)


def get_engine(config: DatabaseConfig) -> AsyncEngine:
    """Create an async SQLAlchemy engine from database configuration.

    Server databases get a connection pool sized from pool_size and
    max_overflow. SQLite uses the dialect's default pool and has foreign
    key enforcement switched on for every new connection.

    Args:
        config: Database configuration containing URL, pool settings,
                and SQL echo preference.

    Returns:
        Configured AsyncEngine instance.
    """
    if config.is_sqlite:
        engine = create_async_engine(config.url, echo=config.echo)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        config.url,
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
        echo=config.echo,
    )


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@asynccontextmanager
async def transaction(engine: AsyncEngine) -> AsyncIterator[AsyncConnection]:
    """Run a unit of work inside one connection and one transaction.

    Commits when the block exits normally. Any exception raised inside the
    block rolls the transaction back and is re-raised as DataAccessError
    (DataAccessError itself passes through unchanged).

    Args:
        engine: Engine to check a connection out of.

    Yields:
        AsyncConnection with an open transaction.

    Raises:
        DataAccessError: If the unit of work, the commit, or acquiring the
            connection fails.
    """
    try:
        async with engine.connect() as conn:
            await conn.begin()
            try:
                yield conn
            except Exception as e:
                await _rollback(conn, e)
                if isinstance(e, DataAccessError):
                    raise
                raise DataAccessError(str(e)) from e
            await conn.commit()
    except SQLAlchemyError as e:
        # Connection checkout or commit failures
        logger.error("transaction_failed", error=str(e))
        raise DataAccessError(str(e)) from e


async def _rollback(conn: AsyncConnection, cause: Exception) -> None:
    try:
        await conn.rollback()
    except SQLAlchemyError as e:
        logger.error("transaction_rollback_failed", error=str(e), cause=str(cause))
        return
    logger.warning(
        "transaction_rolled_back",
        error_type=type(cause).__name__,
        error=str(cause),
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create all project tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    logger.info("schema_created", tables=sorted(metadata.tables))


async def drop_schema(engine: AsyncEngine) -> None:
    """Drop all project tables."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
    logger.info("schema_dropped", tables=sorted(metadata.tables))
