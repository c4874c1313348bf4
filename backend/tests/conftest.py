"""Root conftest — shared store and repository fixtures.

Invariants:
    - Every test gets a fresh SQLite file database under tmp_path, schema initialized
      and categories seeded
    - Repositories are built exactly as the app builds them (explicit Store injection)

Design Decisions:
    - File database rather than :memory:: aggregate reads open concurrent connections,
      which must all see the same data
"""

import os
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import update

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("LOG_FORMAT", "text")

from lexicology.infrastructure.database import Store  # noqa: E402
from lexicology.infrastructure.query_executor import QueryExecutor  # noqa: E402
from lexicology.infrastructure.schema import SchemaManager  # noqa: E402
from lexicology.models import Word  # noqa: E402
from lexicology.repositories.user_repository import UserRepository  # noqa: E402
from lexicology.repositories.word_repository import WordRepository  # noqa: E402
from lexicology.schemas.user import UserCreate  # noqa: E402
from lexicology.schemas.word import WordCreate  # noqa: E402


@pytest.fixture
async def store(tmp_path):
    store = Store(f"sqlite+aiosqlite:///{tmp_path / 'lexicology.db'}")
    await SchemaManager(store).initialize()
    yield store
    await store.dispose()


@pytest.fixture
def executor(store):
    return QueryExecutor(store)


@pytest.fixture
def users(executor):
    return UserRepository(executor)


@pytest.fixture
def words(executor):
    return WordRepository(executor)


@pytest.fixture
async def ann(users):
    """Ann Lee, interested in Programming."""
    return await users.create(UserCreate(
        first_name="Ann", last_name="Lee", birth_date="1990-01-01",
        email="ann@example.com", categories=["Programming"],
    ))


@pytest.fixture
async def bob(users):
    return await users.create(UserCreate(
        first_name="Bob", last_name="Stone", birth_date="1985-06-15",
    ))


@pytest.fixture
def make_word(words):
    """Factory: create a word with sensible defaults."""
    async def _make(user_id, word, meaning="a meaning", sentence="A sentence.", category=None):
        return await words.create(WordCreate(
            user_id=user_id, word=word, meaning=meaning,
            sentence=sentence, category=category,
        ))
    return _make


@pytest.fixture
def backdate(executor):
    """Move a word's creation_date into the past."""
    _words = Word.__table__

    async def _backdate(word_id, **delta):
        when = datetime.now(timezone.utc) - timedelta(**delta)
        await executor.execute(
            update(_words).where(_words.c.id == word_id).values(creation_date=when),
        )
    return _backdate
