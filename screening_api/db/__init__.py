"""Database package — async SQLAlchemy engine, session factory, Base."""
from screening_api.db.base import Base, async_session_factory, create_tables, engine, get_db

__all__ = ["Base", "async_session_factory", "create_tables", "engine", "get_db"]
