"""Initial schema: users, words, categories, user_categories + default categories.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19

Mirrors SchemaManager.initialize(): cascading foreign keys from words and
user_categories, the four lookup indexes, and the 15-entry category catalog.
"""
from datetime import datetime, timezone
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from lexicology.infrastructure.schema import DEFAULT_CATEGORIES

revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("birth_date", sa.String(10), nullable=False),
        sa.Column("categories", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("idx_users_email", "users", ["email"])

    op.create_table(
        "words",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=True),
        sa.Column("word", sa.String(255), nullable=False),
        sa.Column("meaning", sa.Text(), nullable=False),
        sa.Column("sentence", sa.Text(), nullable=False),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("source", sa.String(50), nullable=False, server_default="User"),
        sa.Column("creation_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_words_user_id", "words", ["user_id"])
    op.create_index("idx_words_category", "words", ["category"])
    op.create_index("idx_words_word", "words", ["word"])

    categories = op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("icon", sa.String(100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "user_categories",
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id", "category_id"),
    )

    now = datetime.now(timezone.utc)
    op.bulk_insert(
        categories,
        [{**category, "created_at": now} for category in DEFAULT_CATEGORIES],
    )


def downgrade() -> None:
    op.drop_table("user_categories")
    op.drop_table("categories")
    op.drop_index("idx_words_word", table_name="words")
    op.drop_index("idx_words_category", table_name="words")
    op.drop_index("idx_words_user_id", table_name="words")
    op.drop_table("words")
    op.drop_index("idx_users_email", table_name="users")
    op.drop_table("users")
