"""User Repository — user CRUD, category membership and per-user usage statistics.

Invariants:
    - Ids are generated here, never accepted from the caller
    - Category names that match no catalog entry are dropped, never created
    - update() replaces membership wholesale (delete all, then relink)
    - create() and update() are atomic: the row write and the relinking share one
      transaction
    - Lookups return None for missing rows; constraint failures propagate unmodified
    - get_user_stats() issues its three reads concurrently; the result is not a single
      snapshot

Design Decisions:
    - Does not pre-check email uniqueness: the unique index raises
      ConstraintViolationError and callers wanting a friendlier outcome check first
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, distinct, func, insert, select, update

from lexicology.core.domain_types import CategoryId, UserId
from lexicology.core.identifiers import generate_id
from lexicology.infrastructure.query_executor import QueryExecutor
from lexicology.models import Category, User, UserCategory, Word
from lexicology.schemas.stats import UserStats
from lexicology.schemas.user import (
    UserCategoryRecord, UserCreate, UserRecord, UserUpdate,
)

logger = logging.getLogger(__name__)

_users = User.__table__
_words = Word.__table__
_categories = Category.__table__
_links = UserCategory.__table__


class UserRepository:
    """Data access for users and their category memberships."""

    def __init__(self, db: QueryExecutor, recent_words_days: int = 7):
        self._db = db
        self._recent_words_days = recent_words_days

    async def create(self, data: UserCreate) -> UserRecord:
        user_id = UserId(generate_id())
        now = datetime.now(timezone.utc)
        async with self._db.transaction() as tx:
            await tx.execute(
                insert(_users).values(
                    id=user_id,
                    first_name=data.first_name,
                    last_name=data.last_name,
                    email=data.email,
                    birth_date=data.birth_date,
                    categories=data.categories,
                    created_at=now,
                    updated_at=now,
                ),
            )
            if data.categories:
                await self._link_categories(tx, user_id, data.categories)
        logger.info("User created", extra={"user_id": user_id})
        return await self.find_by_id(user_id)

    async def find_by_id(self, user_id: UserId) -> UserRecord | None:
        row = await self._db.fetch_one(
            select(_users).where(_users.c.id == user_id),
        )
        return UserRecord.model_validate(row) if row else None

    async def find_by_email(self, email: str) -> UserRecord | None:
        row = await self._db.fetch_one(
            select(_users).where(_users.c.email == email),
        )
        return UserRecord.model_validate(row) if row else None

    async def update(self, user_id: UserId, data: UserUpdate) -> UserRecord | None:
        """Overwrite every mutable field and replace category membership.

        Returns None when no user has this id (nothing is relinked).
        """
        async with self._db.transaction() as tx:
            result = await tx.execute(
                update(_users)
                .where(_users.c.id == user_id)
                .values(
                    first_name=data.first_name,
                    last_name=data.last_name,
                    email=data.email,
                    birth_date=data.birth_date,
                    categories=data.categories,
                    updated_at=datetime.now(timezone.utc),
                ),
            )
            if result.affected_count == 0:
                return None
            await tx.execute(delete(_links).where(_links.c.user_id == user_id))
            if data.categories:
                await self._link_categories(tx, user_id, data.categories)
        logger.info("User updated", extra={"user_id": user_id})
        return await self.find_by_id(user_id)

    async def delete(self, user_id: UserId) -> bool:
        """Delete the user; the store cascades to words and memberships."""
        result = await self._db.execute(
            delete(_users).where(_users.c.id == user_id),
        )
        if result.affected_count:
            logger.info("User deleted", extra={"user_id": user_id})
        return result.affected_count > 0

    async def list_all(self) -> list[UserRecord]:
        rows = await self._db.fetch_all(
            select(_users).order_by(_users.c.created_at.desc(), _users.c.id),
        )
        return [UserRecord.model_validate(row) for row in rows]

    async def get_user_categories(self, user_id: UserId) -> list[UserCategoryRecord]:
        """Catalog categories the user is linked to, by name."""
        rows = await self._db.fetch_all(
            select(_categories.c.name, _categories.c.icon)
            .join(_links, _links.c.category_id == _categories.c.id)
            .where(_links.c.user_id == user_id)
            .order_by(_categories.c.name),
        )
        return [UserCategoryRecord.model_validate(row) for row in rows]

    async def get_user_stats(self, user_id: UserId) -> UserStats:
        since = datetime.now(timezone.utc) - timedelta(days=self._recent_words_days)
        owned = _words.c.user_id == user_id
        total, categories, recent = await asyncio.gather(
            self._db.fetch_one(
                select(func.count().label("total_words"))
                .select_from(_words)
                .where(owned),
            ),
            self._db.fetch_one(
                select(func.count(distinct(_words.c.category)).label("unique_categories"))
                .where(owned, _words.c.category.is_not(None)),
            ),
            self._db.fetch_one(
                select(func.count().label("recent_words"))
                .select_from(_words)
                .where(owned, _words.c.creation_date >= since),
            ),
        )
        return UserStats(
            total_words=(total or {}).get("total_words") or 0,
            unique_categories=(categories or {}).get("unique_categories") or 0,
            recent_words=(recent or {}).get("recent_words") or 0,
        )

    @staticmethod
    async def _link_categories(
        tx: QueryExecutor, user_id: UserId, names: list[str],
    ) -> None:
        rows = await tx.fetch_all(
            select(_categories.c.id).where(_categories.c.name.in_(names)),
        )
        category_ids = sorted({CategoryId(row["id"]) for row in rows})
        if not category_ids:
            return
        await tx.execute(
            insert(_links),
            [{"user_id": user_id, "category_id": cid} for cid in category_ids],
        )
