"""Shared create and query helpers for the node's tables."""

from typing import Any, Generic, List, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, func, select

ModelType = TypeVar("ModelType", bound=SQLModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=SQLModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=SQLModel)


class BaseCrud(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """Insert and read rows of one table model."""

    def __init__(self, model: ModelType):
        self.model = model

    async def get_count(self, db_session: AsyncSession) -> int:
        query = select(func.count()).select_from(select(self.model).subquery())  # pylint: disable=not-callable
        result = await db_session.execute(query)
        return result.scalar_one()

    async def filter_by(self, db_session: AsyncSession, **columns: Any) -> List[ModelType]:
        """Rows whose columns equal the given values, oldest first."""
        query = select(self.model).order_by(self.model.created_at)
        for name, value in columns.items():
            query = query.where(getattr(self.model, name) == value)
        result = await db_session.execute(query)
        return list(result.scalars().all())

    async def create(
        self, *, obj_in: CreateSchemaType, db_session: AsyncSession
    ) -> ModelType:
        """Validate `obj_in` into a table row and commit it."""
        db_obj = self.model.model_validate(obj_in)
        db_session.add(db_obj)
        try:
            await db_session.commit()
            await db_session.refresh(db_obj)
        except IntegrityError:
            await db_session.rollback()
            raise
        return db_obj
