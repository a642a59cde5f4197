"""Database Metadata: SQLAlchemy declarative base shared by models and schema bootstrap."""
