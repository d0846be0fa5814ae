"""Oracle responses CRUD operations."""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from ..models.oracle_responses import (
    OracleResponseRecord,
    OracleResponseRecordCreate,
    OracleResponseRecordUpdate,
)
from .base_crud import BaseCrud


class OracleResponseCrud(
    BaseCrud[OracleResponseRecord, OracleResponseRecordCreate, OracleResponseRecordUpdate]
):
    """Oracle responses CRUD operations."""

    async def get_by_flight(
        self, airline: str, flight: str, flight_timestamp: int, db_session: AsyncSession
    ) -> List[OracleResponseRecord]:
        """Responses submitted for one flight request."""
        return await self.filter_by(
            db_session, airline=airline, flight=flight, flight_timestamp=flight_timestamp
        )


oracle_response_crud = OracleResponseCrud(OracleResponseRecord)
