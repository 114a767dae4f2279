"""Database infrastructure helpers (engine, sessions, migrations)."""

from .base import Base
from .session import get_session, init_db

__all__ = ["Base", "get_session", "init_db"]
