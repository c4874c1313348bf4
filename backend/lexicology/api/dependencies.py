"""Request Dependencies — repositories built per request from the app's Store.

Invariants:
    - The Store lives on app.state.store (set by the lifespan or by tests)
    - Aggregate windows come from Settings
"""

from fastapi import Request

from lexicology.config import get_settings
from lexicology.infrastructure.database import Store
from lexicology.infrastructure.query_executor import QueryExecutor
from lexicology.repositories.user_repository import UserRepository
from lexicology.repositories.word_repository import WordRepository


def get_store(request: Request) -> Store:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Store not initialized")
    return store


def get_user_repository(request: Request) -> UserRepository:
    settings = get_settings()
    return UserRepository(
        QueryExecutor(get_store(request)),
        recent_words_days=settings.recent_words_days,
    )


def get_word_repository(request: Request) -> WordRepository:
    settings = get_settings()
    return WordRepository(
        QueryExecutor(get_store(request)),
        recent_activity_hours=settings.recent_activity_hours,
        popular_categories_limit=settings.popular_categories_limit,
    )
