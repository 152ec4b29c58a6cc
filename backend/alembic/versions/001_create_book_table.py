"""Create book table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `book` table behind BookRepository.
How:   The identifier is an IDENTITY column on PostgreSQL; on SQLite the
       Identity construct is skipped and the INTEGER PRIMARY KEY aliases ROWID.

Rollback: downgrade() drops the table (all rows lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "book",
        sa.Column(
            "id",
            sa.Integer(),
            sa.Identity(always=False),
            nullable=False,
            comment="System-generated identifier",
        ),
        sa.Column(
            "title",
            sa.String(255),
            nullable=False,
            comment="Book title",
        ),
        sa.Column(
            "first_edition",
            sa.Integer(),
            nullable=False,
            comment="Publication year of the first edition",
        ),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("book")
