"""
Configuration

Settings come from built-in defaults, an optional JSON settings file and
environment variables, in that order of precedence (last wins).

Example settings.json:

    {
        "exif": {"use_exiftool": true, "exiftool_path": "/usr/bin/exiftool"},
        "logging": {"level": "DEBUG", "dir": "/var/log/media-exif"}
    }
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union


ENV_DISABLE_EXIFTOOL = "MEDIA_EXIF_DISABLE_EXIFTOOL"
ENV_EXIFTOOL_PATH = "MEDIA_EXIF_EXIFTOOL_PATH"
ENV_LOG_LEVEL = "MEDIA_EXIF_LOG_LEVEL"
ENV_LOG_DIR = "MEDIA_EXIF_LOG_DIR"

_TRUTHY = {"1", "true", "yes", "on"}


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access."""

    def __init__(self, settings_path: Union[str, Path]):
        self._path = Path(settings_path)
        if not self._path.exists():
            raise FileNotFoundError(f"settings file not found: {self._path}")
        with self._path.open("r", encoding="utf-8") as f:
            self._data = json.load(f)

    def get(self, key: str, default: Any = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        node: Any = self._data
        for part in key.split("."):
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node


@dataclass(frozen=True)
class ExifSettings:
    """
    Resolved settings for EXIF extraction.

    Attributes:
        use_exiftool: Try exiftool before falling back to the internal parser
        exiftool_path: Command name or path of the exiftool binary
        log_level: loguru level name
        log_dir: Directory for rotating log files, None for stderr only
    """
    use_exiftool: bool = True
    exiftool_path: str = "exiftool"
    log_level: str = "INFO"
    log_dir: Optional[str] = None


def load_settings(
    path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ExifSettings:
    """
    Build ExifSettings from defaults, a JSON file and the environment.

    Args:
        path: Optional JSON settings file
        environ: Environment mapping (defaults to os.environ)

    Returns:
        ExifSettings

    Raises:
        FileNotFoundError: If `path` is given but does not exist
    """
    if environ is None:
        environ = os.environ

    defaults = ExifSettings()
    use_exiftool = defaults.use_exiftool
    exiftool_path = defaults.exiftool_path
    log_level = defaults.log_level
    log_dir = defaults.log_dir

    if path is not None:
        settings = JsonSettings(path)
        use_exiftool = _as_bool(settings.get("exif.use_exiftool", use_exiftool))
        exiftool_path = settings.get("exif.exiftool_path", exiftool_path)
        log_level = settings.get("logging.level", log_level)
        log_dir = settings.get("logging.dir", log_dir)

    if environ.get(ENV_DISABLE_EXIFTOOL, "").strip().lower() in _TRUTHY:
        use_exiftool = False
    exiftool_path = environ.get(ENV_EXIFTOOL_PATH) or exiftool_path
    log_level = environ.get(ENV_LOG_LEVEL) or log_level
    log_dir = environ.get(ENV_LOG_DIR) or log_dir

    return ExifSettings(
        use_exiftool=use_exiftool,
        exiftool_path=exiftool_path,
        log_level=log_level.upper(),
        log_dir=log_dir,
    )


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)
