"""Record store protocols and the SQLite implementation"""

from .base import ExifStore, ExifTransaction
from .sqlite import SqliteStore, SqliteTransaction

__all__ = ["ExifStore", "ExifTransaction", "SqliteStore", "SqliteTransaction"]
