"""
Base repository class providing the statements every table repository needs.

Repositories run parameterized SQL on the session they are given and report
raw results: ORM rows for reads, affected-row counts for writes. They never
commit and never catch database errors; the transaction boundary above them
owns both.
"""

import time
import logging
from typing import TypeVar, Generic, Type, Any, Sequence

from sqlalchemy import select, insert, delete
from sqlalchemy.ext.asyncio import AsyncSession

from user_service.database.base import Base

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Args:
            model: The SQLAlchemy model class (not an instance), e.g. UserRow
            db: The async session the statements run on
        """
        self.model = model
        self.db = db

    @property
    def table(self):
        return self.model.__table__

    async def insert_values(self, **values: Any) -> int:
        """
        INSERT one row built from column values and return the affected-row count.
        """
        start = time.perf_counter()
        result = await self.db.execute(insert(self.table).values(**values))

        logger.debug(
            "repo.insert",
            extra={
                "model": self.model.__name__,
                # keys only, values may be personal data
                "columns": sorted(values.keys()),
                "rowcount": result.rowcount,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return result.rowcount

    async def select_all(self) -> Sequence[ModelType]:
        """
        SELECT every row, ordered by primary key so callers see insertion order.
        """
        query = select(self.model).order_by(*self.table.primary_key.columns)
        result = await self.db.execute(query)
        rows = result.scalars().all()

        logger.debug("repo.select_all", extra={"model": self.model.__name__, "count": len(rows)})
        return rows

    async def delete_where(self, column: str, value: Any) -> int:
        """
        DELETE the rows whose `column` equals `value` and return how many went.

        Raises:
            AttributeError: if `column` is not a column of the table
        """
        if column not in self.table.c:
            raise AttributeError(f"{self.model.__name__} has no column '{column}'")

        stmt = delete(self.table).where(self.table.c[column] == value)
        result = await self.db.execute(stmt)

        if result.rowcount:
            logger.debug("repo.delete", extra={"model": self.model.__name__, "column": column, "rowcount": result.rowcount})
        else:
            logger.debug("repo.delete.no_match", extra={"model": self.model.__name__, "column": column})
        return result.rowcount
