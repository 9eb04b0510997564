"""
Tests for settings loading and logging setup
"""

import json

import pytest
from loguru import logger
from media_exif.config import ExifSettings, JsonSettings, load_settings
from media_exif.logging import init_logging


@pytest.fixture
def settings_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({
        "exif": {"use_exiftool": False, "exiftool_path": "/opt/bin/exiftool"},
        "logging": {"level": "debug", "dir": "/var/log/media-exif"},
    }))
    return path


class TestJsonSettings:
    """Test dotted-key access"""

    def test_dotted_get(self, settings_file):
        settings = JsonSettings(settings_file)
        assert settings.get("exif.exiftool_path") == "/opt/bin/exiftool"
        assert settings.get("exif") == {"use_exiftool": False, "exiftool_path": "/opt/bin/exiftool"}

    def test_missing_key_returns_default(self, settings_file):
        settings = JsonSettings(settings_file)
        assert settings.get("exif.timeout") is None
        assert settings.get("nope.deeper", 5) == 5

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            JsonSettings(tmp_path / "missing.json")


class TestLoadSettings:
    """Test defaults, file and environment precedence"""

    def test_defaults(self):
        """Should use defaults with no file and an empty environment"""
        assert load_settings(environ={}) == ExifSettings()

    def test_file_values(self, settings_file):
        settings = load_settings(settings_file, environ={})

        assert settings.use_exiftool is False
        assert settings.exiftool_path == "/opt/bin/exiftool"
        assert settings.log_level == "DEBUG"
        assert settings.log_dir == "/var/log/media-exif"

    def test_environment_overrides_file(self, settings_file):
        environ = {
            "MEDIA_EXIF_EXIFTOOL_PATH": "/usr/local/bin/exiftool",
            "MEDIA_EXIF_LOG_LEVEL": "warning",
        }
        settings = load_settings(settings_file, environ=environ)

        assert settings.exiftool_path == "/usr/local/bin/exiftool"
        assert settings.log_level == "WARNING"

    @pytest.mark.parametrize("value", ["1", "true", "YES", "on"])
    def test_disable_exiftool_from_environment(self, value):
        settings = load_settings(environ={"MEDIA_EXIF_DISABLE_EXIFTOOL": value})
        assert settings.use_exiftool is False

    @pytest.mark.parametrize("value", ["", "0", "false"])
    def test_falsy_disable_flag_keeps_exiftool(self, value):
        settings = load_settings(environ={"MEDIA_EXIF_DISABLE_EXIFTOOL": value})
        assert settings.use_exiftool is True

    def test_missing_settings_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "missing.json", environ={})


class TestInitLogging:
    """Test loguru sink setup"""

    def test_writes_log_file(self, tmp_path):
        """Should create the directory and write a dated log file"""
        log_dir = tmp_path / "logs"
        try:
            init_logging("INFO", log_dir)
            logger.info("Found exiftool")
            logger.complete()
        finally:
            logger.remove()

        log_files = list(log_dir.glob("exif_*.log"))
        assert len(log_files) == 1
        assert "Found exiftool" in log_files[0].read_text()

    def test_level_filters_messages(self, tmp_path):
        log_dir = tmp_path / "logs"
        try:
            init_logging("WARNING", log_dir)
            logger.info("hidden")
            logger.warning("shown")
            logger.complete()
        finally:
            logger.remove()

        text = next(log_dir.glob("exif_*.log")).read_text()
        assert "shown" in text
        assert "hidden" not in text


class TestJsonBooleans:
    """Test string booleans in the settings file"""

    @pytest.mark.parametrize("value,expected", [
        ("false", False), ("0", False), ("no", False),
        ("true", True), ("Yes", True), (False, False), (True, True),
    ])
    def test_use_exiftool_values(self, tmp_path, value, expected):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"exif": {"use_exiftool": value}}))

        assert load_settings(path, environ={}).use_exiftool is expected
