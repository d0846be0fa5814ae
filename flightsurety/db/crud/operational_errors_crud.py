"""Operational errors CRUD."""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from ..models.operational_errors import (
    OperationalError,
    OperationalErrorCreate,
    OperationalErrorUpdate,
)
from .base_crud import BaseCrud


class OperationalErrorsCrud(
    BaseCrud[OperationalError, OperationalErrorCreate, OperationalErrorUpdate]
):
    """Operational errors CRUD operations."""

    async def get_by_type(
        self, error_type: str, db_session: AsyncSession
    ) -> List[OperationalError]:
        """Errors of one exception class, e.g. `RevertError`."""
        return await self.filter_by(db_session, error_type=error_type)


operational_errors_crud = OperationalErrorsCrud(OperationalError)
