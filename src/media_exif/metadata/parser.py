"""
EXIF Parser Contract

Defines the capability both parser variants implement, plus value
coercion helpers shared between them.
"""

import math
from datetime import datetime
from numbers import Number
from pathlib import Path
from typing import Any, Optional, Protocol, Union

from ..models.media import ExifRecord


PathLike = Union[str, Path]


class ExifParser(Protocol):
    """
    Extracts an ExifRecord from a media file.

    Implementations return None when the file holds no extractable
    metadata and raise when the file cannot be read or the backend fails.
    They keep no per-call state, so one instance may serve concurrent
    callers working on distinct paths.
    """

    def parse(self, path: PathLike) -> Optional[ExifRecord]:
        ...


# Date formats written by cameras and tools, tried in order
_DATETIME_FORMATS = [
    "%Y:%m:%d %H:%M:%S",        # Standard EXIF
    "%Y:%m:%d %H:%M:%S%z",      # EXIF with offset (XMP, exiftool composites)
    "%Y:%m:%d %H:%M:%S.%f",     # EXIF with subseconds
    "%Y:%m:%d %H:%M:%S.%f%z",
    "%Y-%m-%d %H:%M:%S",        # ISO with space
    "%Y-%m-%dT%H:%M:%S",        # ISO 8601
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y:%m:%d",                 # Date only EXIF
    "%Y-%m-%d",                 # Date only ISO
]


def parse_exif_datetime(value: Any) -> Optional[datetime]:
    """
    Convert an EXIF date string to a datetime.

    Handles multiple datetime formats from different cameras. Returns None
    for empty values, the all-zero placeholder some cameras write, and
    strings no known format matches.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, bytes):
        value = value.decode("ascii", errors="ignore")
    if not isinstance(value, str):
        return None

    value = value.strip().rstrip("\x00")
    if not value or value.startswith("0000"):
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"

    for fmt in _DATETIME_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None


def to_float(value: Any) -> Optional[float]:
    """
    Coerce an EXIF numeric value to float.

    Accepts numbers (including Pillow's IFDRational), (numerator, denominator)
    tuples and numeric strings. Non-finite results are kept as-is; they are
    clamped later by the sanitizer.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, tuple) and len(value) == 2:
        num, den = value
        if den == 0:
            return math.copysign(math.inf, num) if num else math.nan
        return num / den
    if isinstance(value, Number):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def to_int(value: Any) -> Optional[int]:
    """Coerce an EXIF integer value, ignoring anything non-numeric"""
    number = to_float(value)
    if number is None or not math.isfinite(number):
        return None
    return int(number)


def to_text(value: Any) -> Optional[str]:
    """Coerce an EXIF string value, dropping padding and empty strings"""
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    if value is None:
        return None
    text = str(value).strip().rstrip("\x00").strip()
    return text or None
