"""Pydantic schemas for aggregate statistics."""

from pydantic import BaseModel, Field

from lexicology.schemas.word import CategoryCount


class UserStats(BaseModel):
    total_words: int = 0
    unique_categories: int = 0
    recent_words: int = 0


class GlobalStats(BaseModel):
    total_words: int = 0
    total_users: int = 0
    recent_activity: int = 0
    popular_categories: list[CategoryCount] = Field(default_factory=list)
