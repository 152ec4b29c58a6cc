"""Repository for the `book` table."""

import logging

from sqlalchemy import update as sql_update

from flowrouter.models.book import Book
from flowrouter.repositories.base import CrudRepository

logger = logging.getLogger(__name__)


class BookRepository(CrudRepository[Book, int]):
    model = Book

    async def update(self, book_id: int, title: str) -> int:
        """Set the title of one book. Returns the number of rows updated (0 or 1)."""
        async with self.transaction("update") as session:
            result = await session.execute(
                sql_update(Book).where(Book.id == book_id).values(title=title)
            )
            updated = result.rowcount
        logger.info("Book %s title update affected %d row(s)", book_id, updated)
        return updated


book_repository = BookRepository()
