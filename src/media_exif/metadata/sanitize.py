"""
Float Sanitization

EXIF rationals with a zero denominator (shutter speed markers, broken GPS
tags) surface as +inf, -inf or NaN. Most numeric storage rejects these, so
every float field is clamped to a finite value before it is persisted.
"""

import math
import sys
from dataclasses import replace
from typing import Optional

from ..models.media import NUMERIC_FIELDS, ExifRecord


def sanitize_float(value: Optional[float]) -> Optional[float]:
    """
    Return a finite replacement for +inf, -inf and NaN.

    Args:
        value: Float value, or None for an absent field

    Returns:
        sys.float_info.max for +inf, its negation for -inf, 0.0 for NaN,
        otherwise the value unchanged
    """
    if value is None:
        return None
    if math.isinf(value):
        return sys.float_info.max if value > 0 else -sys.float_info.max
    if math.isnan(value):
        return 0.0
    return value


def sanitize_exif(exif: ExifRecord) -> ExifRecord:
    """Return a copy of `exif` with every numeric field sanitized"""
    return replace(
        exif,
        **{name: sanitize_float(getattr(exif, name)) for name in NUMERIC_FIELDS}
    )
