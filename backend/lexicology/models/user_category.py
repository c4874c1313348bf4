"""UserCategory ORM — "user is interested in category" join rows.

Invariants:
    - Composite primary key (user_id, category_id): at most one row per pair
    - Both halves cascade on delete of their parent
    - Membership is replaced wholesale on user update, never diffed
"""

from sqlalchemy import Integer, String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from lexicology.db.base import Base


class UserCategory(Base):
    """Join row between users and categories."""
    __tablename__ = "user_categories"

    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("categories.id", ondelete="CASCADE"),
        primary_key=True,
    )
