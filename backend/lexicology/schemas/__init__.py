"""Pydantic Schemas — repository inputs/outputs and API contracts.

Invariants:
    - Inputs validate at the boundary (HTTP body or direct repository call)
    - Records are plain data; no ORM objects leave the repositories

Design Decisions:
    - Input models accept camelCase aliases as well as field names (clients of the
      original service send firstName/birthDate)
"""
