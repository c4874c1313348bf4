"""Word Schemas — inputs, listing options and records.

Invariants:
    - word, meaning, sentence: stripped, non-empty
    - source defaults to "User"
    - WordQuery.limit/offset are non-negative; no upper bound on limit
    - WordQuery.sort_by/sort_order are free text; the repository maps them onto the
      whitelist (unknown values fall back, never fail)
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from lexicology.core.domain_types import DEFAULT_WORD_SOURCE, SortField, SortOrder


class _WordFields(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    word: str = Field(min_length=1, max_length=255)
    meaning: str = Field(min_length=1)
    sentence: str = Field(min_length=1)
    category: str | None = Field(None, max_length=100)

    @field_validator("word", "meaning", "sentence")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty or whitespace")
        return v

    @field_validator("category")
    @classmethod
    def normalize_category(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


class WordCreate(_WordFields):
    """New word for an existing user."""
    user_id: str = Field(min_length=1)
    source: str = Field(DEFAULT_WORD_SOURCE, min_length=1, max_length=50)


class WordUpdate(_WordFields):
    """Overwrite of a word's editable fields (owner is not movable)."""


class WordQuery(BaseModel):
    """Options for listing one user's words."""
    search: str = ""
    category: str | None = None
    sort_by: str = SortField.CREATION_DATE.value
    sort_order: str = SortOrder.DESC.value
    limit: int = Field(50, ge=0)
    offset: int = Field(0, ge=0)


class WordRecord(BaseModel):
    """Word row."""
    id: str
    user_id: str | None = None
    word: str
    meaning: str
    sentence: str
    category: str | None = None
    source: str = DEFAULT_WORD_SOURCE
    creation_date: datetime
    updated_at: datetime


class WordWithOwner(WordRecord):
    """Word row plus the owning user's name and email (null for orphans)."""
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None


class CategoryCount(BaseModel):
    """Number of words tagged with one free-text category."""
    category: str
    count: int


class CategoryUsage(BaseModel):
    """Catalog category with the number of words whose category text matches its name."""
    name: str
    icon: str | None = None
    word_count: int = 0
