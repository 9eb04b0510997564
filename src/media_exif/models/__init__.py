"""Data models for media-exif"""

from .media import NUMERIC_FIELDS, ExifRecord, MediaRecord
from .save_result import SaveResult

__all__ = ["ExifRecord", "MediaRecord", "NUMERIC_FIELDS", "SaveResult"]
