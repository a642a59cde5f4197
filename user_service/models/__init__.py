"""ORM Models: SQLAlchemy declarative models for the directory.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata is complete before create_all runs
"""

from user_service.models.user import User  # noqa: F401
