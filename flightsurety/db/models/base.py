"""Base model for all models."""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import Field
from sqlmodel import SQLModel as _SQLModel
from uuid6 import uuid7


def utc_now() -> datetime:
    """Timezone-aware current time; naive datetimes are refused on insert."""
    return datetime.now(timezone.utc)


class SQLModel(_SQLModel):
    """Base model for all models."""

    @declared_attr
    def __tablename__(cls) -> str:  # pylint: disable=no-self-argument
        return cls.__name__.lower()


class BaseUUIDModel(SQLModel):
    """Base model for all models with UUID primary key and timestamps."""

    id: UUID = Field(
        default_factory=uuid7,
        primary_key=True,
        index=True,
    )
    created_at: datetime = Field(
        default_factory=utc_now, sa_type=DateTime(timezone=True)
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"onupdate": utc_now},
    )
