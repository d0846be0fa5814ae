"""Model for oracle registrations made by this node."""

from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from .base import BaseUUIDModel


class OracleRegistrationBase(SQLModel):
    """Base model for all oracle registration attributes."""

    network: str = Field(index=True)
    account: str = Field(index=True)
    indexes: str
    registration_fee: int
    tx_hash: str
    timestamp: datetime = Field(sa_type=DateTime(timezone=True))


class OracleRegistration(OracleRegistrationBase, BaseUUIDModel, table=True):
    """OracleRegistration model representing one registerOracle transaction."""

    pass  # pylint: disable=unnecessary-pass


class OracleRegistrationCreate(OracleRegistrationBase):
    """Model for creating a new oracle registration."""

    pass  # pylint: disable=unnecessary-pass


class OracleRegistrationUpdate(OracleRegistrationBase):
    """Model for updating an existing oracle registration."""

    pass  # pylint: disable=unnecessary-pass
