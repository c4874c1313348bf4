"""Word ORM — one vocabulary entry recorded by a user.

Invariants:
    - user_id references users.id with ON DELETE CASCADE
    - user_id is nullable only to tolerate orphaned legacy rows
    - category is loose text; it may or may not match a Category name
    - source defaults to "User"
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column

from lexicology.core.domain_types import DEFAULT_WORD_SOURCE
from lexicology.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Word(Base):
    """Vocabulary entry."""
    __tablename__ = "words"
    __table_args__ = (
        Index("idx_words_user_id", "user_id"),
        Index("idx_words_category", "category"),
        Index("idx_words_word", "word"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True,
    )
    word: Mapped[str] = mapped_column(String(255), nullable=False)
    meaning: Mapped[str] = mapped_column(Text, nullable=False)
    sentence: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    source: Mapped[str] = mapped_column(
        String(50), nullable=False, default=DEFAULT_WORD_SOURCE,
        server_default=DEFAULT_WORD_SOURCE,
    )
    creation_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
