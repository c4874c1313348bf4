"""User Routes — sign-up, profile, word listings and per-user stats.

Invariants:
    - Email uniqueness pre-checked here so collisions surface as 409 before the
      unique index fires
    - Missing users → ResourceNotFoundError (404)
    - Word listing: page is 1-based; sort is a preset name (newest/oldest/aToZ/zToA)
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status

from lexicology.api.dependencies import get_user_repository, get_word_repository
from lexicology.core.domain_types import SortPreset, UserId
from lexicology.core.errors import (
    EmailAlreadyRegisteredError, ErrorContext, ResourceNotFoundError,
)
from lexicology.core.word_query import page_offset, resolve_preset, total_pages
from lexicology.repositories.user_repository import UserRepository
from lexicology.repositories.word_repository import WordRepository
from lexicology.schemas.user import UserCreate, UserRecord, UserUpdate
from lexicology.schemas.word import WordQuery

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/users", tags=["users"])


async def get_user_or_404(user_id: UserId, users: UserRepository) -> UserRecord:
    """Get user or raise 404. Exported for the words routes."""
    user = await users.find_by_id(user_id)
    if user is None:
        raise ResourceNotFoundError(
            "User", user_id, ErrorContext(user_id=user_id),
        )
    return user


@router.get("/categories/all")
async def list_categories(
    words: WordRepository = Depends(get_word_repository),
):
    """Category catalog with word counts."""
    return await words.get_categories()


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    body: UserCreate, users: UserRepository = Depends(get_user_repository),
):
    """Register a new user."""
    if body.email and await users.find_by_email(body.email):
        raise EmailAlreadyRegisteredError(body.email)
    user = await users.create(body)
    return {"message": "User created successfully", "user": user}


@router.get("")
async def list_users(users: UserRepository = Depends(get_user_repository)):
    """All users, newest first (admin view)."""
    return {"users": await users.list_all()}


@router.get("/{user_id}")
async def get_user(
    user_id: str, users: UserRepository = Depends(get_user_repository),
):
    """Profile with category memberships and usage stats."""
    user = await get_user_or_404(user_id, users)
    return {
        "user": user,
        "categories": await users.get_user_categories(user_id),
        "stats": await users.get_user_stats(user_id),
    }


@router.put("/{user_id}")
async def update_user(
    user_id: str,
    body: UserUpdate,
    users: UserRepository = Depends(get_user_repository),
):
    existing = await get_user_or_404(user_id, users)
    if body.email and body.email != existing.email:
        holder = await users.find_by_email(body.email)
        if holder and holder.id != user_id:
            raise EmailAlreadyRegisteredError(
                body.email, ErrorContext(user_id=user_id),
            )
    user = await users.update(user_id, body)
    if user is None:
        raise ResourceNotFoundError("User", user_id, ErrorContext(user_id=user_id))
    return {"message": "User updated successfully", "user": user}


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str, users: UserRepository = Depends(get_user_repository),
):
    """Delete a user together with their words and memberships."""
    if not await users.delete(user_id):
        raise ResourceNotFoundError("User", user_id, ErrorContext(user_id=user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{user_id}/words")
async def list_user_words(
    user_id: str,
    search: str = "",
    sort: str = SortPreset.NEWEST.value,
    category: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1),
    words: WordRepository = Depends(get_word_repository),
):
    """One user's words with search, category filter, sort preset and paging."""
    sort_by, sort_order = resolve_preset(sort)
    items = await words.find_by_user(
        user_id,
        WordQuery(
            search=search,
            category=category or None,
            sort_by=sort_by.value,
            sort_order=sort_order.value,
            limit=limit,
            offset=page_offset(page, limit),
        ),
    )
    total = await words.get_user_word_count(user_id)
    return {
        "words": items,
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "total_pages": total_pages(total, limit),
        },
        "categories": await words.get_user_categories(user_id),
    }


@router.get("/{user_id}/stats")
async def get_user_stats(
    user_id: str,
    users: UserRepository = Depends(get_user_repository),
    words: WordRepository = Depends(get_word_repository),
):
    return {
        "stats": await users.get_user_stats(user_id),
        "categories": await words.get_user_categories(user_id),
        "recent_words": await words.get_recent_words(user_id, 5),
    }
