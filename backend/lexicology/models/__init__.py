"""ORM Models — SQLAlchemy declarative models for the four relations.

Invariants:
    - All models inherit from Base (db/base.py)
    - User owns its Words and UserCategory rows (ON DELETE CASCADE)
    - Category is reference data; Word.category is free text, not a foreign key

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all/Alembic
"""

from lexicology.models.user import User  # noqa: F401
from lexicology.models.word import Word  # noqa: F401
from lexicology.models.category import Category  # noqa: F401
from lexicology.models.user_category import UserCategory  # noqa: F401
