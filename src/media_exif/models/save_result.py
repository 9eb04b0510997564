"""
Save Result Model

Represents the outcome of extracting and saving EXIF data for one media item.
"""

from dataclasses import dataclass
from typing import Optional

from .media import ExifRecord, MediaRecord


@dataclass
class SaveResult:
    """
    Result from saving EXIF data for a single media item.

    A successful result may still carry no EXIF record when the file
    holds no metadata.
    """
    media: MediaRecord
    success: bool
    exif: Optional[ExifRecord] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    @property
    def failed(self) -> bool:
        """Check if saving failed"""
        return not self.success

    @property
    def has_exif(self) -> bool:
        """Check if an EXIF record was found or created"""
        return self.exif is not None
