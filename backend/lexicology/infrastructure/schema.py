"""Schema Manager — idempotently shapes the store and seeds the category catalog.

Invariants:
    - initialize() is safe to run on every startup: create_all checks first, seeding
      is insert-if-absent per category name
    - Reseeding never overwrites an existing category's icon
    - Any failure surfaces as SchemaInitializationError (fatal for startup)

Design Decisions:
    - Seed rows sent as one executemany so column defaults (created_at) apply per row
    - ON CONFLICT DO NOTHING built with the dialect's own insert() (SQLite and
      PostgreSQL share the clause)
"""

import logging

from sqlalchemy.dialects import postgresql, sqlite

from lexicology.core.errors import SchemaInitializationError, StoreError
from lexicology.db.base import Base
from lexicology.infrastructure.database import Store
from lexicology.models import Category

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES: list[dict[str, str]] = [
    {"name": "Technical", "icon": "gear"},
    {"name": "Programming", "icon": "keyboard"},
    {"name": "Cooking", "icon": "fork.knife"},
    {"name": "Sports", "icon": "sportscourt"},
    {"name": "History", "icon": "book.closed"},
    {"name": "Science", "icon": "atom"},
    {"name": "Arts & Culture", "icon": "paintpalette"},
    {"name": "Slang", "icon": "quote.bubble"},
    {"name": "Academic", "icon": "graduationcap"},
    {"name": "Colloquial", "icon": "waveform"},
    {"name": "Finance", "icon": "dollarsign.circle"},
    {"name": "Philosophy", "icon": "brain.head.profile"},
    {"name": "Literature", "icon": "book"},
    {"name": "Medical", "icon": "stethoscope"},
    {"name": "Technology", "icon": "laptopcomputer"},
]

_DIALECT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def insert_ignoring_duplicates(dialect_name: str, model, conflict_columns: list[str]):
    """INSERT ... ON CONFLICT DO NOTHING for the given dialect."""
    try:
        dialect_insert = _DIALECT_INSERTS[dialect_name]
    except KeyError:
        raise StoreError(
            f"Unsupported dialect '{dialect_name}'", "insert",
        ) from None
    return dialect_insert(model).on_conflict_do_nothing(
        index_elements=conflict_columns,
    )


class SchemaManager:
    """Creates the four relations and seeds default categories."""

    def __init__(self, store: Store):
        self._store = store

    async def initialize(self) -> None:
        try:
            async with self._store.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
                stmt = insert_ignoring_duplicates(
                    self._store.dialect_name, Category, ["name"],
                )
                await conn.execute(stmt, DEFAULT_CATEGORIES)
        except StoreError as e:
            logger.critical(f"Schema initialization failed: {e.message}")
            raise SchemaInitializationError(e.message) from e
        logger.info(
            "Schema initialized",
            extra={"operation": "initialize"},
        )
