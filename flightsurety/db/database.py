"""Database connection and session management."""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from flightsurety.db.no_op_session import NoOpSession

# Initialize logging
logger = logging.getLogger("database")
logging.Formatter.converter = time.gmtime

engine = None
AsyncSessionLocal = None


def configure_database(database_url: Optional[str]) -> None:
    """Create the engine for `database_url`, or run without a database when unset."""
    global engine, AsyncSessionLocal  # pylint: disable=global-statement

    if not database_url:
        logger.warning(
            "Database URL not provided. The application will run without database functionality."
        )
        engine = None
        AsyncSessionLocal = None
        return

    engine = create_async_engine(database_url)
    AsyncSessionLocal = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )


def is_database_configured():
    """Check if the database is configured by checking if an engine exists."""
    return engine is not None


async def init_db() -> None:
    """Initialize the database by creating all defined tables."""
    if not engine:
        logger.info("No database configured. Skipping database initialization.")
        return

    # Register the table models on SQLModel.metadata
    from flightsurety.db import models  # noqa: F401 pylint: disable=import-outside-toplevel,unused-import

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


@asynccontextmanager
async def get_session():
    """Provide an AsyncSession that is committed and closed on exit."""

    if not AsyncSessionLocal:
        yield NoOpSession()
        return

    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error("An error occurred during session management: %s", e)
            raise
        finally:
            await session.close()


async def close_db() -> None:
    """
    Close the database connection.
    This function should be called when the application shuts down.
    """
    global engine, AsyncSessionLocal  # pylint: disable=global-statement

    if engine is None:
        logger.info("Database engine is not initialized. No need to close connections.")
        return
    await engine.dispose()
    engine = None
    AsyncSessionLocal = None
