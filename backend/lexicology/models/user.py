"""User ORM — a registered learner and the owner of words.

Invariants:
    - id is an opaque string assigned by the repository (never by the store)
    - email, when present, is unique across users
    - categories holds the caller's ordered category list as JSON

Design Decisions:
    - categories is a denormalized cache rewritten on every create/update; the
      user_categories relation is the normalized membership
    - birth_date kept as ISO text: no timezone or arithmetic is ever applied to it
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column

from lexicology.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """Registered user."""
    __tablename__ = "users"
    __table_args__ = (
        Index("idx_users_email", "email"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(
        String(255), unique=True, nullable=True,
    )
    birth_date: Mapped[str] = mapped_column(String(10), nullable=False)
    categories: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
