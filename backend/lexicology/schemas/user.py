"""User Schemas — create/update inputs and the user record returned by the repository.

Invariants:
    - first_name, last_name: stripped, non-empty
    - birth_date: ISO calendar date (YYYY-MM-DD), kept as text
    - email: stripped; empty string normalized to None
    - categories: ordered list of names, order preserved as given
    - Inputs accept camelCase (firstName) or snake_case; records always serialize
      snake_case, matching the word and stats payloads
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class UserInput(BaseModel):
    """Fields shared by create and update — every mutable user field."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str | None = Field(None, max_length=255)
    birth_date: str
    categories: list[str] = Field(default_factory=list)

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("birth_date")
    @classmethod
    def check_birth_date(cls, v: str) -> str:
        v = v.strip()
        try:
            date.fromisoformat(v)
        except ValueError:
            raise ValueError("birth_date must be an ISO date (YYYY-MM-DD)") from None
        return v


class UserCreate(UserInput):
    """Sign-up payload."""


class UserUpdate(UserInput):
    """Full overwrite of a user's mutable fields."""


class UserRecord(BaseModel):
    """User row with categories deserialized into an ordered list."""
    id: str
    first_name: str
    last_name: str
    email: str | None = None
    birth_date: str
    categories: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @field_validator("categories", mode="before")
    @classmethod
    def default_categories(cls, v):
        return v or []


class UserCategoryRecord(BaseModel):
    """A category the user declared interest in."""
    name: str
    icon: str | None = None
