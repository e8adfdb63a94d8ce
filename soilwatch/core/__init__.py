"""Core modules - config, database"""

from .config import settings, get_settings
from .database import engine, AsyncSessionLocal, Base, get_db, init_db, close_db

__all__ = [
    "settings",
    "get_settings",
    "engine",
    "AsyncSessionLocal",
    "Base",
    "get_db",
    "init_db",
    "close_db",
]
