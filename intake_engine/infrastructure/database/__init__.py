"""Database infrastructure - connection, models, and session management."""

from intake_engine.infrastructure.database.connection import (
    close_db,
    get_db,
    get_db_session,
    init_db,
)

__all__ = ["init_db", "close_db", "get_db", "get_db_session"]
