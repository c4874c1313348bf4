"""Lexicology Application Package — personal vocabulary tracking service.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
