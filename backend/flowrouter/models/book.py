"""
FlowRouter Backend - Book SQLAlchemy Model
==========================================

What:  ORM model representing the `book` table.
Who:   Used by BookRepository for CRUD operations and by Alembic for schema management.

Table Design:
    - id: integer primary key generated by the database (IDENTITY on
      PostgreSQL, ROWID alias on SQLite). Uniqueness is the engine's job.
    - title: required, up to 255 characters
    - first_edition: publication year of the first edition
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from flowrouter.database import Base

# Largest value the 32-bit `id` column can hold
MAX_BOOK_ID = 2**31 - 1


class Book(Base):
    """A book record: flat, one table, no relationships."""

    __tablename__ = "book"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="System-generated identifier",
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Book title",
    )

    first_edition: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Publication year of the first edition",
    )

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title='{self.title}', first_edition={self.first_edition})>"
