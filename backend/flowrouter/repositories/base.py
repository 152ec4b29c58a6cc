"""
Generic async CRUD repository.

Each operation opens its own session and runs in its own transaction,
so callers never handle sessions. SQLAlchemy failures are logged with the
operation name and re-raised as DatabaseError (500, generic message). Driver errors raised
before SQLAlchemy sees the statement (a bound integer out of SQLite range)
are wrapped the same way.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Generic, Iterable, List, Optional, Type, TypeVar

from sqlalchemy import delete, func, inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from flowrouter.database import Base, async_session_factory
from flowrouter.exceptions import DatabaseError

logger = logging.getLogger(__name__)

# aiosqlite lets sqlite3 binding errors through unwrapped
REPOSITORY_ERRORS = (SQLAlchemyError, OverflowError)

ModelT = TypeVar("ModelT", bound=Base)
IdT = TypeVar("IdT")


class CrudRepository(Generic[ModelT, IdT]):
    """
    Create/read/update/delete operations over one mapped entity.

    Subclasses set `model`:

        class BookRepository(CrudRepository[Book, int]):
            model = Book
    """

    model: Type[ModelT]

    def __init__(self, session_factory: Optional[async_sessionmaker[AsyncSession]] = None):
        self._session_factory = session_factory or async_session_factory

    @property
    def _id_column(self):
        return inspect(self.model).primary_key[0]

    @asynccontextmanager
    async def transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        """Session bound to a transaction: committed on success, rolled back on error."""
        async with self._session_factory() as session:
            try:
                async with session.begin():
                    yield session
            except REPOSITORY_ERRORS as e:
                logger.error(
                    "Database error during %s.%s: %s",
                    type(self).__name__,
                    operation,
                    str(e),
                    exc_info=True,
                )
                raise DatabaseError(
                    context={"operation": operation, "error_type": type(e).__name__},
                ) from e

    async def save(self, entity: ModelT) -> ModelT:
        """Insert (or merge pending changes of) `entity`; generated ids are populated."""
        async with self.transaction("save") as session:
            session.add(entity)
            await session.flush()
        return entity

    async def save_all(self, entities: Iterable[ModelT]) -> List[ModelT]:
        items = list(entities)
        async with self.transaction("save_all") as session:
            session.add_all(items)
            await session.flush()
        return items

    async def find_by_id(self, entity_id: IdT) -> Optional[ModelT]:
        async with self.transaction("find_by_id") as session:
            return await session.get(self.model, entity_id)

    async def exists_by_id(self, entity_id: IdT) -> bool:
        async with self.transaction("exists_by_id") as session:
            result = await session.execute(
                select(func.count()).select_from(self.model).where(self._id_column == entity_id)
            )
            return result.scalar_one() > 0

    async def find_all(self) -> List[ModelT]:
        """All rows, ordered by identifier."""
        async with self.transaction("find_all") as session:
            result = await session.execute(select(self.model).order_by(self._id_column))
            return list(result.scalars().all())

    async def count(self) -> int:
        async with self.transaction("count") as session:
            result = await session.execute(select(func.count()).select_from(self.model))
            return result.scalar_one()

    async def delete_by_id(self, entity_id: IdT) -> bool:
        """Delete one row; False when nothing had that identifier."""
        async with self.transaction("delete_by_id") as session:
            result = await session.execute(
                delete(self.model).where(self._id_column == entity_id)
            )
            return result.rowcount > 0

    async def delete_all(self) -> int:
        async with self.transaction("delete_all") as session:
            result = await session.execute(delete(self.model))
            return result.rowcount
