"""This module contains a NoOpSession class that is used when the database is not configured. """

import logging
import time

logger = logging.getLogger(__name__)
logging.Formatter.converter = time.gmtime

# Warnings already emitted by any no-op session in this process.
_LOGGED_WARNINGS: set = set()


class NoOpSession:
    """A mock class that simulates a database session object when the database is not configured."""

    def __init__(self):
        self.unique_warning_logger = UniqueWarningLogger()

    async def execute(self, *args, **kwargs):
        """A mock method that simulates a database query."""

        self.unique_warning_logger.log_warning_once(
            "Mock database operation 'execute' called on a no-op session."
        )
        return MockResult()

    def add(self, instance):
        """A mock method that simulates a database add operation."""

        self.unique_warning_logger.log_warning_once(
            "Mock database operation 'add' called on a no-op session."
        )

    async def commit(self):
        """A mock method that simulates a database commit operation."""

    async def rollback(self):
        """A mock method that simulates a database rollback operation."""

    async def close(self):
        """A mock method that simulates a database close operation."""

    async def refresh(self, instance):
        """A mock method that simulates a database refresh operation."""


class MockResult:
    """A mock class that simulates a database result object."""

    def scalar_one_or_none(self):
        """A mock method that simulates a database query result."""
        return None

    def scalar_one(self):
        """No rows are ever stored, so every count is zero."""
        return 0

    def scalars(self):
        """Return an empty scalar result."""
        return self

    def all(self):
        return []

    def first(self):
        return None


class UniqueWarningLogger:
    """Logs each unique warning only once per process."""

    def log_warning_once(self, message):
        """Log a warning message only once."""
        if message not in _LOGGED_WARNINGS:
            logger.warning(message)
            _LOGGED_WARNINGS.add(message)
