"""
Exiftool EXIF Parser

Wraps the exiftool command-line utility. Exiftool must be installed
separately: https://exiftool.org/

Each parse() call runs one exiftool process with `-json -n`, so numeric
tags arrive unformatted and GPS coordinates arrive as signed decimals.
"""

import json
import shutil
import subprocess
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

from ..errors import ExifParserError, ExiftoolUnavailableError
from ..models.media import ExifRecord
from .parser import PathLike, parse_exif_datetime, to_float, to_int, to_text


# Capture date tags, most specific first
DATE_TAGS = ("DateTimeOriginal", "CreateDate", "ModifyDate")


class ExiftoolParser:
    """Extracts EXIF metadata by invoking exiftool"""

    variant = "exiftool"

    def __init__(self, executable: str = "exiftool"):
        """
        Locate exiftool and probe its version.

        Args:
            executable: Command name or path of the exiftool binary

        Raises:
            ExiftoolUnavailableError: If exiftool is missing or unusable
        """
        resolved = shutil.which(executable)
        if resolved is None:
            raise ExiftoolUnavailableError(f"{executable} not found in PATH")

        try:
            result = subprocess.run(
                [resolved, "-ver"],
                check=True,
                capture_output=True,
                text=True,
            )
        except (OSError, subprocess.CalledProcessError) as e:
            raise ExiftoolUnavailableError(f"could not run {resolved} -ver: {e}") from e

        version = result.stdout.strip()
        if not version:
            raise ExiftoolUnavailableError(f"{resolved} -ver returned no version")

        self.executable = resolved
        self.version = version

    def parse(self, path: PathLike) -> Optional[ExifRecord]:
        """
        Extract EXIF metadata from a media file.

        Args:
            path: Path to media file

        Returns:
            ExifRecord, or None if exiftool found none of the mapped tags

        Raises:
            FileNotFoundError: If the file does not exist
            ExifParserError: If exiftool fails or its output cannot be decoded
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")

        tags = self._read_tags(path)
        record = self._build_record(tags)
        if record.is_empty():
            logger.debug("exiftool found no EXIF data in {}", path)
            return None
        return record

    def _read_tags(self, path: Path) -> Dict[str, Any]:
        try:
            result = subprocess.run(
                [self.executable, "-json", "-n", "--", str(path)],
                capture_output=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            raise ExifParserError(f"could not run exiftool: {e}", str(path)) from e

        try:
            parsed = json.loads(result.stdout) if result.stdout.strip() else []
        except json.JSONDecodeError as e:
            raise ExifParserError(f"invalid exiftool output for {path}: {e}", str(path)) from e

        tags = parsed[0] if isinstance(parsed, list) and parsed else {}
        if not isinstance(tags, dict):
            raise ExifParserError(f"unexpected exiftool output for {path}", str(path))

        # Unreadable or unsupported files are reported in an "Error" tag
        if "Error" in tags:
            raise ExifParserError(f"exiftool: {tags['Error']}", str(path))
        if result.returncode != 0:
            stderr = result.stderr.strip() or f"exit status {result.returncode}"
            raise ExifParserError(f"exiftool failed for {path}: {stderr}", str(path))

        return tags

    @staticmethod
    def _build_record(tags: Dict[str, Any]) -> ExifRecord:
        date_shot = None
        for tag in DATE_TAGS:
            date_shot = parse_exif_datetime(tags.get(tag))
            if date_shot:
                break

        return ExifRecord(
            exposure=to_float(tags.get("ExposureTime")),
            aperture=to_float(tags.get("FNumber")),
            focal_length=to_float(tags.get("FocalLength")),
            gps_latitude=to_float(tags.get("GPSLatitude")),
            gps_longitude=to_float(tags.get("GPSLongitude")),
            date_shot=date_shot,
            camera=to_text(tags.get("Model")),
            maker=to_text(tags.get("Make")),
            lens=to_text(tags.get("LensModel") or tags.get("Lens")),
            description=to_text(tags.get("ImageDescription")),
            iso=to_int(tags.get("ISO")),
            flash=to_int(tags.get("Flash")),
            orientation=to_int(tags.get("Orientation")),
            exposure_program=to_int(tags.get("ExposureProgram")),
        )
