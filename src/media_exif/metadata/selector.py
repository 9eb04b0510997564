"""
Parser Selection

Chooses the EXIF parser once at startup. The result is an immutable
ExtractionService that callers pass to save_exif(); nothing is stored in
module state, and a service never switches parsers after it is built.
"""

from dataclasses import dataclass
from typing import Optional

from loguru import logger

from ..config import ExifSettings
from ..errors import ExiftoolUnavailableError
from ..models.media import ExifRecord
from .exiftool_parser import ExiftoolParser
from .internal_parser import InternalExifParser
from .parser import ExifParser, PathLike


@dataclass(frozen=True)
class ExtractionService:
    """
    The EXIF parser bound for the lifetime of a process.

    Attributes:
        parser: Parser used by every save_exif() call
        variant: Name of the bound parser ("exiftool", "internal", ...)
    """
    parser: Optional[ExifParser]
    variant: str

    def parse(self, path: PathLike) -> Optional[ExifRecord]:
        """Parse `path` with the bound parser"""
        return self.parser.parse(path)


def initialize_exif_parser(settings: Optional[ExifSettings] = None) -> ExtractionService:
    """
    Decide between the exiftool and internal EXIF parsers.

    Exiftool is preferred. If it is disabled or cannot be located and
    version-probed, the internal parser is bound instead.

    Args:
        settings: Extraction settings (defaults to ExifSettings())

    Returns:
        ExtractionService holding the chosen parser
    """
    if settings is None:
        settings = ExifSettings()

    if not settings.use_exiftool:
        logger.info("exiftool disabled by configuration, using internal exif parser")
        return ExtractionService(parser=InternalExifParser(), variant=InternalExifParser.variant)

    try:
        parser = ExiftoolParser(settings.exiftool_path)
    except ExiftoolUnavailableError as e:
        logger.warning("Failed to get exiftool, using internal exif parser instead: {}", e)
        return ExtractionService(parser=InternalExifParser(), variant=InternalExifParser.variant)

    logger.info("Found exiftool {} at {}", parser.version, parser.executable)
    return ExtractionService(parser=parser, variant=ExiftoolParser.variant)
