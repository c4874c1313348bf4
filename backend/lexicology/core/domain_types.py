"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, WordId wrap opaque strings — never parse or derive meaning from them
    - CategoryId is the store-assigned sequential integer
    - Every valid sort column/direction is an Enum member — no raw string reaches SQL

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
WordId = NewType("WordId", str)
CategoryId = NewType("CategoryId", int)


# ─── Enums ───────────────────────────────────────────────────────

class SortField(str, Enum):
    """Columns a word listing may be ordered by."""
    WORD = "word"
    CREATION_DATE = "creation_date"
    UPDATED_AT = "updated_at"


class SortOrder(str, Enum):
    """Ordering directions."""
    ASC = "ASC"
    DESC = "DESC"


class SortPreset(str, Enum):
    """Named orderings offered to clients of the words listing."""
    NEWEST = "newest"
    OLDEST = "oldest"
    A_TO_Z = "aToZ"
    Z_TO_A = "zToA"


DEFAULT_WORD_SOURCE = "User"
