"""Oracle registrations CRUD operations."""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from ..models.oracles import (
    OracleRegistration,
    OracleRegistrationCreate,
    OracleRegistrationUpdate,
)
from .base_crud import BaseCrud


class OracleRegistrationCrud(
    BaseCrud[OracleRegistration, OracleRegistrationCreate, OracleRegistrationUpdate]
):
    """Oracle registrations CRUD operations."""

    async def get_by_account(
        self, network: str, account: str, db_session: AsyncSession
    ) -> List[OracleRegistration]:
        """Registrations recorded for one account on one network."""
        return await self.filter_by(db_session, network=network, account=account)


oracle_registration_crud = OracleRegistrationCrud(OracleRegistration)
