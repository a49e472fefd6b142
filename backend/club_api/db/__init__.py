"""Database package: shared engine and session factory."""

from club_api.db.base import Base, close_db, get_session_factory, init_db, new_id

__all__ = [
    "Base",
    "close_db",
    "get_session_factory",
    "init_db",
    "new_id",
]
