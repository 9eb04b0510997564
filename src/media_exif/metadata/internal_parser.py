"""
Internal EXIF Parser

Pillow-based fallback used when exiftool is not available. Covers the
base IFD, the EXIF sub-IFD and the GPS IFD of image formats Pillow can
open; video containers and maker notes are out of reach.
"""

from pathlib import Path
from typing import Optional

from loguru import logger
from PIL import Image, UnidentifiedImageError

from ..errors import ExifParserError
from ..models.media import ExifRecord
from .parser import PathLike, parse_exif_datetime, to_float, to_int, to_text


# IFD pointers
EXIF_IFD = 0x8769
GPS_IFD = 0x8825

# Base IFD tags
TAG_DESCRIPTION = 270
TAG_MAKE = 271
TAG_MODEL = 272
TAG_ORIENTATION = 274
TAG_DATETIME = 306

# EXIF IFD tags
TAG_EXPOSURE_TIME = 33434
TAG_FNUMBER = 33437
TAG_EXPOSURE_PROGRAM = 34850
TAG_ISO = 34855
TAG_DATETIME_ORIGINAL = 36867
TAG_DATETIME_DIGITIZED = 36868
TAG_FLASH = 37385
TAG_FOCAL_LENGTH = 37386
TAG_LENS_MODEL = 42036

# GPS IFD tags
GPS_LATITUDE_REF = 1
GPS_LATITUDE = 2
GPS_LONGITUDE_REF = 3
GPS_LONGITUDE = 4


class InternalExifParser:
    """Extracts EXIF metadata in-process with Pillow"""

    variant = "internal"

    def parse(self, path: PathLike) -> Optional[ExifRecord]:
        """
        Extract EXIF metadata from an image file.

        Args:
            path: Path to image file

        Returns:
            ExifRecord, or None if the image carries no usable EXIF

        Raises:
            FileNotFoundError: If the file does not exist
            ExifParserError: If Pillow cannot read the file
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            with Image.open(path) as img:
                exif = img.getexif()
                if not exif:
                    logger.debug("No EXIF data in {}", path)
                    return None
                record = self._build_record(exif)
        except UnidentifiedImageError as e:
            raise ExifParserError(f"cannot identify image file: {path}", str(path)) from e
        except OSError as e:
            raise ExifParserError(f"cannot read image file {path}: {e}", str(path)) from e

        if record.is_empty():
            logger.debug("EXIF data in {} holds no supported tags", path)
            return None
        return record

    def _build_record(self, exif: Image.Exif) -> ExifRecord:
        # Merge the EXIF IFD into the base tags (most camera settings are here)
        tags = dict(exif.items())
        try:
            for tag_id, value in exif.get_ifd(EXIF_IFD).items():
                tags.setdefault(tag_id, value)
        except KeyError:
            pass

        date_shot = None
        for tag_id in (TAG_DATETIME_ORIGINAL, TAG_DATETIME_DIGITIZED, TAG_DATETIME):
            date_shot = parse_exif_datetime(tags.get(tag_id))
            if date_shot:
                break

        latitude, longitude = self._extract_gps(exif)

        return ExifRecord(
            exposure=to_float(tags.get(TAG_EXPOSURE_TIME)),
            aperture=to_float(tags.get(TAG_FNUMBER)),
            focal_length=to_float(tags.get(TAG_FOCAL_LENGTH)),
            gps_latitude=latitude,
            gps_longitude=longitude,
            date_shot=date_shot,
            camera=to_text(tags.get(TAG_MODEL)),
            maker=to_text(tags.get(TAG_MAKE)),
            lens=to_text(tags.get(TAG_LENS_MODEL)),
            description=to_text(tags.get(TAG_DESCRIPTION)),
            iso=to_int(_first(tags.get(TAG_ISO))),
            flash=to_int(tags.get(TAG_FLASH)),
            orientation=to_int(tags.get(TAG_ORIENTATION)),
            exposure_program=to_int(tags.get(TAG_EXPOSURE_PROGRAM)),
        )

    @staticmethod
    def _extract_gps(exif: Image.Exif):
        """Return (latitude, longitude) in decimal degrees, or (None, None)"""
        try:
            gps_ifd = exif.get_ifd(GPS_IFD)
        except KeyError:
            return None, None
        if not gps_ifd:
            return None, None

        lat = _dms_to_decimal(gps_ifd.get(GPS_LATITUDE), gps_ifd.get(GPS_LATITUDE_REF))
        lon = _dms_to_decimal(gps_ifd.get(GPS_LONGITUDE), gps_ifd.get(GPS_LONGITUDE_REF))
        if lat is None or lon is None:
            return None, None
        return lat, lon


def _first(value):
    # ISOSpeedRatings may be stored as a sequence
    if isinstance(value, (tuple, list)) and value:
        return value[0]
    return value


def _dms_to_decimal(coord, ref) -> Optional[float]:
    """
    Convert a GPS coordinate to signed decimal degrees.

    Supports DMS, DM, and single decimal values.
    """
    if coord is None or (isinstance(coord, (tuple, list)) and not coord):
        return None
    if not isinstance(coord, (tuple, list)):
        coord = (coord,)

    parts = [to_float(part) for part in coord[:3]]
    if any(part is None for part in parts):
        return None

    decimal = parts[0]
    if len(parts) >= 2:
        decimal += parts[1] / 60.0
    if len(parts) >= 3:
        decimal += parts[2] / 3600.0

    ref = to_text(ref)
    if ref in ("S", "W"):
        decimal = -decimal
    return decimal
