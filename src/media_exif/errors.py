"""
Error types for EXIF extraction and storage

Every failure raised by save_exif() is an ExifError. Wrapping errors carry a
short description of the failed operation and chain the original exception.
"""

from typing import Optional


class ExifError(Exception):
    """Base class for all media-exif errors"""


class ParserNotInitializedError(ExifError):
    """No EXIF parser has been bound when a save is attempted"""


class StoreReadError(ExifError):
    """Loading an already linked EXIF record from the store failed"""


class ParseError(ExifError):
    """The active parser failed irrecoverably on a media file"""


class StoreWriteError(ExifError):
    """Persisting EXIF data or the media record failed"""


class ExifSaveError(StoreWriteError):
    """Saving the EXIF record or linking it to its media failed"""


class DateShotUpdateError(StoreWriteError):
    """
    The EXIF record was saved, but updating the media capture date failed.
    
    The saved record is available as `exif` so the caller can retry only
    the remaining step.
    """
    
    def __init__(self, message: str, exif=None):
        super().__init__(message)
        self.exif = exif


class ExifParserError(ExifError):
    """Backend-level failure inside a parser variant"""
    
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ExiftoolUnavailableError(ExifParserError):
    """The exiftool executable could not be located or version-probed"""
