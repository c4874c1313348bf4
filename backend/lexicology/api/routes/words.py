"""Word Routes — word CRUD, listings, global search and overview stats.

Invariants:
    - Creating a word requires the owner to exist (404 otherwise)
    - GET /words with user_id lists that user's words; without it, it is the
      cross-user admin view backed by search_global
    - Global search term must hold at least 2 non-blank characters
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status

from lexicology.api.dependencies import get_user_repository, get_word_repository
from lexicology.api.routes.users import get_user_or_404
from lexicology.core.domain_types import SortPreset, WordId
from lexicology.core.errors import (
    ErrorContext, InvalidQueryError, ResourceNotFoundError,
)
from lexicology.core.word_query import page_offset, resolve_preset, total_pages
from lexicology.repositories.user_repository import UserRepository
from lexicology.repositories.word_repository import WordRepository
from lexicology.schemas.word import WordCreate, WordQuery, WordUpdate, WordWithOwner

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/words", tags=["words"])

MIN_SEARCH_TERM_LENGTH = 2


async def get_word_or_404(word_id: WordId, words: WordRepository) -> WordWithOwner:
    word = await words.find_by_id(word_id)
    if word is None:
        raise ResourceNotFoundError(
            "Word", word_id, ErrorContext(word_id=word_id),
        )
    return word


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_word(
    body: WordCreate,
    users: UserRepository = Depends(get_user_repository),
    words: WordRepository = Depends(get_word_repository),
):
    await get_user_or_404(body.user_id, users)
    word = await words.create(body)
    return {"message": "Word created successfully", "word": word}


@router.get("")
async def list_words(
    user_id: str | None = None,
    search: str = "",
    sort: str = SortPreset.NEWEST.value,
    category: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1),
    words: WordRepository = Depends(get_word_repository),
):
    """Per-user listing when user_id is given, otherwise all users' words."""
    offset = page_offset(page, limit)
    if user_id:
        sort_by, sort_order = resolve_preset(sort)
        items = await words.find_by_user(
            user_id,
            WordQuery(
                search=search,
                category=category or None,
                sort_by=sort_by.value,
                sort_order=sort_order.value,
                limit=limit,
                offset=offset,
            ),
        )
        total = await words.get_user_word_count(user_id)
    else:
        items = await words.search_global(search, limit=limit, offset=offset)
        # TODO: add a count query for the global view; total is the page size for now
        total = len(items)
    return {
        "words": items,
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "total_pages": total_pages(total, limit),
        },
    }


@router.get("/stats/overview")
async def stats_overview(words: WordRepository = Depends(get_word_repository)):
    return await words.get_stats()


@router.get("/categories/list")
async def list_categories(words: WordRepository = Depends(get_word_repository)):
    return await words.get_categories()


@router.get("/search/global")
async def search_global(
    q: str = "",
    limit: int = Query(20, ge=1),
    words: WordRepository = Depends(get_word_repository),
):
    """Cross-user substring search over word and meaning."""
    term = q.strip()
    if len(term) < MIN_SEARCH_TERM_LENGTH:
        raise InvalidQueryError(
            f"Search term must be at least {MIN_SEARCH_TERM_LENGTH} characters", "q",
        )
    return await words.search_global(term, limit=limit)


@router.get("/{word_id}")
async def get_word(
    word_id: str, words: WordRepository = Depends(get_word_repository),
):
    return await get_word_or_404(word_id, words)


@router.put("/{word_id}")
async def update_word(
    word_id: str,
    body: WordUpdate,
    words: WordRepository = Depends(get_word_repository),
):
    await get_word_or_404(word_id, words)
    word = await words.update(word_id, body)
    if word is None:
        raise ResourceNotFoundError("Word", word_id, ErrorContext(word_id=word_id))
    return {"message": "Word updated successfully", "word": word}


@router.delete("/{word_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_word(
    word_id: str, words: WordRepository = Depends(get_word_repository),
):
    if not await words.delete(word_id):
        raise ResourceNotFoundError("Word", word_id, ErrorContext(word_id=word_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
