"""Infrastructure Layer: database ownership, the user store, connection supervision, logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All database errors leave this layer as StorageFailureError
"""
