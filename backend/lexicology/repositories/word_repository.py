"""Word Repository — word CRUD, per-user listing and global aggregates.

Invariants:
    - create() trusts the caller that user_id names an existing user (the store's
      foreign key still rejects impossible owners)
    - update() never changes the owner; delete() performs no ownership check
    - Sort column and direction reach the statement only through the SortField/SortOrder
      lookups below; every other dynamic value is a bound parameter
    - Search is a case-insensitive literal substring match (LIKE metacharacters escaped)
    - search_global() spans all users; callers apply their own access policy
    - get_stats() issues its four reads concurrently; the result is not a single snapshot

Design Decisions:
    - Listings break sort ties on id so limit/offset slices are stable between pages
    - get_categories() counts by free-text equality with Category.name; no foreign key
      ties the two, so counts follow whatever text the words carry
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import asc, delete, desc, func, insert, or_, select, update

from lexicology.core.domain_types import SortField, SortOrder, UserId, WordId
from lexicology.core.identifiers import generate_id
from lexicology.core.word_query import LIKE_ESCAPE, like_pattern, resolve_sort
from lexicology.infrastructure.query_executor import QueryExecutor
from lexicology.models import Category, User, Word
from lexicology.schemas.stats import GlobalStats
from lexicology.schemas.word import (
    CategoryCount, CategoryUsage, WordCreate, WordQuery, WordRecord,
    WordUpdate, WordWithOwner,
)

logger = logging.getLogger(__name__)

_words = Word.__table__
_users = User.__table__
_categories = Category.__table__

_SORT_COLUMNS = {
    SortField.WORD: _words.c.word,
    SortField.CREATION_DATE: _words.c.creation_date,
    SortField.UPDATED_AT: _words.c.updated_at,
}
_SORT_DIRECTIONS = {
    SortOrder.ASC: asc,
    SortOrder.DESC: desc,
}

_with_owner = select(
    _words, _users.c.first_name, _users.c.last_name, _users.c.email,
).select_from(_words.outerjoin(_users, _words.c.user_id == _users.c.id))


def _matches(term: str, *columns):
    pattern = like_pattern(term)
    return or_(*(col.ilike(pattern, escape=LIKE_ESCAPE) for col in columns))


class WordRepository:
    """Data access for words."""

    def __init__(
        self,
        db: QueryExecutor,
        recent_activity_hours: int = 24,
        popular_categories_limit: int = 5,
    ):
        self._db = db
        self._recent_activity_hours = recent_activity_hours
        self._popular_categories_limit = popular_categories_limit

    async def create(self, data: WordCreate) -> WordWithOwner:
        word_id = WordId(generate_id())
        now = datetime.now(timezone.utc)
        await self._db.execute(
            insert(_words).values(
                id=word_id,
                user_id=data.user_id,
                word=data.word,
                meaning=data.meaning,
                sentence=data.sentence,
                category=data.category,
                source=data.source,
                creation_date=now,
                updated_at=now,
            ),
        )
        logger.info(
            "Word created", extra={"word_id": word_id, "user_id": data.user_id},
        )
        return await self.find_by_id(word_id)

    async def find_by_id(self, word_id: WordId) -> WordWithOwner | None:
        row = await self._db.fetch_one(
            _with_owner.where(_words.c.id == word_id),
        )
        return WordWithOwner.model_validate(row) if row else None

    async def find_by_user(
        self, user_id: UserId, options: WordQuery | None = None,
    ) -> list[WordRecord]:
        """One user's words, filtered, sorted and paginated."""
        options = options or WordQuery()
        stmt = select(_words).where(_words.c.user_id == user_id)
        if options.search:
            stmt = stmt.where(
                _matches(
                    options.search,
                    _words.c.word, _words.c.meaning, _words.c.sentence,
                ),
            )
        if options.category:
            stmt = stmt.where(_words.c.category == options.category)

        field, order = resolve_sort(options.sort_by, options.sort_order)
        direction = _SORT_DIRECTIONS[order]
        stmt = (
            stmt.order_by(direction(_SORT_COLUMNS[field]), direction(_words.c.id))
            .limit(options.limit)
            .offset(options.offset)
        )
        rows = await self._db.fetch_all(stmt)
        return [WordRecord.model_validate(row) for row in rows]

    async def update(self, word_id: WordId, data: WordUpdate) -> WordWithOwner | None:
        result = await self._db.execute(
            update(_words)
            .where(_words.c.id == word_id)
            .values(
                word=data.word,
                meaning=data.meaning,
                sentence=data.sentence,
                category=data.category,
                updated_at=datetime.now(timezone.utc),
            ),
        )
        if result.affected_count == 0:
            return None
        logger.info("Word updated", extra={"word_id": word_id})
        return await self.find_by_id(word_id)

    async def delete(self, word_id: WordId) -> bool:
        result = await self._db.execute(
            delete(_words).where(_words.c.id == word_id),
        )
        if result.affected_count:
            logger.info("Word deleted", extra={"word_id": word_id})
        return result.affected_count > 0

    async def get_user_word_count(self, user_id: UserId) -> int:
        row = await self._db.fetch_one(
            select(func.count().label("count"))
            .select_from(_words)
            .where(_words.c.user_id == user_id),
        )
        return (row or {}).get("count") or 0

    async def get_user_categories(self, user_id: UserId) -> list[CategoryCount]:
        """Category text → word count for one user, most used first."""
        count = func.count().label("count")
        rows = await self._db.fetch_all(
            select(_words.c.category, count)
            .where(_words.c.user_id == user_id, _words.c.category.is_not(None))
            .group_by(_words.c.category)
            .order_by(count.desc(), _words.c.category),
        )
        return [CategoryCount.model_validate(row) for row in rows]

    async def get_recent_words(self, user_id: UserId, limit: int = 10) -> list[WordRecord]:
        rows = await self._db.fetch_all(
            select(_words)
            .where(_words.c.user_id == user_id)
            .order_by(_words.c.creation_date.desc(), _words.c.id.desc())
            .limit(limit),
        )
        return [WordRecord.model_validate(row) for row in rows]

    async def search_global(
        self, term: str, limit: int = 20, offset: int = 0,
    ) -> list[WordWithOwner]:
        """Substring search over word and meaning across every user, newest first."""
        stmt = _with_owner
        if term:
            stmt = stmt.where(_matches(term, _words.c.word, _words.c.meaning))
        rows = await self._db.fetch_all(
            stmt.order_by(_words.c.creation_date.desc(), _words.c.id.desc())
            .limit(limit)
            .offset(offset),
        )
        return [WordWithOwner.model_validate(row) for row in rows]

    async def get_categories(self) -> list[CategoryUsage]:
        word_count = (
            select(func.count())
            .select_from(_words)
            .where(_words.c.category == _categories.c.name)
            .correlate(_categories)
            .scalar_subquery()
            .label("word_count")
        )
        rows = await self._db.fetch_all(
            select(_categories.c.name, _categories.c.icon, word_count)
            .order_by(_categories.c.name),
        )
        return [CategoryUsage.model_validate(row) for row in rows]

    async def get_stats(self) -> GlobalStats:
        since = datetime.now(timezone.utc) - timedelta(hours=self._recent_activity_hours)
        count = func.count().label("count")
        total_words, total_users, recent, popular = await asyncio.gather(
            self._db.fetch_one(
                select(func.count().label("total")).select_from(_words),
            ),
            self._db.fetch_one(
                select(func.count().label("total")).select_from(_users),
            ),
            self._db.fetch_one(
                select(func.count().label("recent"))
                .select_from(_words)
                .where(_words.c.creation_date >= since),
            ),
            self._db.fetch_all(
                select(_words.c.category, count)
                .where(_words.c.category.is_not(None))
                .group_by(_words.c.category)
                .order_by(count.desc(), _words.c.category)
                .limit(self._popular_categories_limit),
            ),
        )
        return GlobalStats(
            total_words=(total_words or {}).get("total") or 0,
            total_users=(total_users or {}).get("total") or 0,
            recent_activity=(recent or {}).get("recent") or 0,
            popular_categories=[CategoryCount.model_validate(row) for row in popular],
        )
