"""
media-exif - EXIF extraction and storage for media libraries

This library provides:
- EXIF extraction through exiftool, with a Pillow-based fallback
- Sanitization of non-finite numeric values before storage
- At-most-once EXIF storage per media item
- A SQLite-backed record store

Example:
    >>> from media_exif import initialize_exif_parser, save_exif, SqliteStore
    >>>
    >>> service = initialize_exif_parser()
    >>> store = SqliteStore("media.db")
    >>> with store.transaction() as tx:
    ...     exif = save_exif(tx, media, service)
    ...     if exif:
    ...         print(f"Taken at: {exif.date_shot}")
"""

from .version import __version__

# Errors
from .errors import (
    DateShotUpdateError,
    ExifError,
    ExifParserError,
    ExifSaveError,
    ExiftoolUnavailableError,
    ParseError,
    ParserNotInitializedError,
    StoreReadError,
    StoreWriteError,
)

# Configuration
from .config import ExifSettings, JsonSettings, load_settings
from .logging import init_logging

# Metadata extraction
from .metadata import (
    ExifParser,
    ExiftoolParser,
    ExtractionService,
    InternalExifParser,
    initialize_exif_parser,
    sanitize_exif,
    sanitize_float,
)

# Models
from .models import ExifRecord, MediaRecord, SaveResult

# Stores
from .store import ExifStore, ExifTransaction, SqliteStore

# High-level API
from .api import batch_save_exif, save_exif

__all__ = [
    # Version
    "__version__",
    # Errors
    "ExifError",
    "ParserNotInitializedError",
    "StoreReadError",
    "ParseError",
    "StoreWriteError",
    "ExifSaveError",
    "DateShotUpdateError",
    "ExifParserError",
    "ExiftoolUnavailableError",
    # Configuration
    "ExifSettings",
    "JsonSettings",
    "load_settings",
    "init_logging",
    # Metadata
    "ExifParser",
    "ExiftoolParser",
    "InternalExifParser",
    "ExtractionService",
    "initialize_exif_parser",
    "sanitize_exif",
    "sanitize_float",
    # Models
    "ExifRecord",
    "MediaRecord",
    "SaveResult",
    # Stores
    "ExifStore",
    "ExifTransaction",
    "SqliteStore",
    # High-level API
    "save_exif",
    "batch_save_exif",
]
