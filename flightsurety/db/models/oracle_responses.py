"""Model for submitOracleResponse transactions."""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from .base import BaseUUIDModel


class OracleResponseRecordBase(SQLModel):
    """Base model for all oracle response attributes."""

    network: str = Field(index=True)
    account: str = Field(index=True)
    index: int
    airline: str
    flight: str
    flight_timestamp: int
    status_code: int
    outcome: str
    tx_hash: Optional[str] = Field(default=None, nullable=True)
    error_message: Optional[str] = Field(default=None, nullable=True)
    timestamp: datetime = Field(sa_type=DateTime(timezone=True))


class OracleResponseRecord(OracleResponseRecordBase, BaseUUIDModel, table=True):
    """OracleResponseRecord model representing one submitted response."""

    pass  # pylint: disable=unnecessary-pass


class OracleResponseRecordCreate(OracleResponseRecordBase):
    """Model for creating a new oracle response record."""

    pass  # pylint: disable=unnecessary-pass


class OracleResponseRecordUpdate(OracleResponseRecordBase):
    """Model for updating an existing oracle response record."""

    pass  # pylint: disable=unnecessary-pass
