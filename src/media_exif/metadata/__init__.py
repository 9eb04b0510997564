"""Metadata extraction module"""

from .exiftool_parser import ExiftoolParser
from .internal_parser import InternalExifParser
from .parser import ExifParser, parse_exif_datetime
from .sanitize import sanitize_exif, sanitize_float
from .selector import ExtractionService, initialize_exif_parser

__all__ = [
    "ExifParser",
    "ExiftoolParser",
    "InternalExifParser",
    "ExtractionService",
    "initialize_exif_parser",
    "parse_exif_datetime",
    "sanitize_exif",
    "sanitize_float",
]
