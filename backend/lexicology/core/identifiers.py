"""Identifier Generator — opaque primary keys for users and words."""

import uuid


def generate_id() -> str:
    """Return a new globally-unique opaque identifier (UUID4 text)."""
    return str(uuid.uuid4())
