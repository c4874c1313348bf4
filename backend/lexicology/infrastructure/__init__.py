"""Infrastructure Layer — store, statement execution, schema and logging.

Invariants:
    - Infrastructure never imports from repositories/ or api/
    - All driver failures leave this layer as StoreError / ConstraintViolationError
"""
