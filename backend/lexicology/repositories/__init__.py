"""Repositories — the data-access contract exposed to callers.

Invariants:
    - Each repository receives its QueryExecutor at construction (no global store)
    - Repositories never call each other; cross-entity checks belong to the caller
"""
