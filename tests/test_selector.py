"""
Tests for parser selection

initialize_exif_parser() prefers exiftool and falls back to the internal
parser. The chosen parser never changes for the service's lifetime.
"""

import dataclasses
import subprocess

import pytest
from media_exif.config import ExifSettings
from media_exif.metadata import exiftool_parser
from media_exif.metadata.exiftool_parser import ExiftoolParser
from media_exif.metadata.internal_parser import InternalExifParser
from media_exif.metadata.selector import ExtractionService, initialize_exif_parser


def _install_exiftool(monkeypatch):
    def fake_run(args, **kwargs):
        return subprocess.CompletedProcess(args, 0, stdout="12.76\n", stderr="")

    monkeypatch.setattr(exiftool_parser.shutil, "which", lambda name: "/usr/bin/exiftool")
    monkeypatch.setattr(exiftool_parser.subprocess, "run", fake_run)


def _remove_exiftool(monkeypatch):
    monkeypatch.setattr(exiftool_parser.shutil, "which", lambda name: None)


class TestParserSelection:
    """Test which parser variant gets bound"""

    def test_binds_exiftool_when_available(self, monkeypatch, log_messages):
        """Should bind exiftool and log that it was found"""
        _install_exiftool(monkeypatch)
        service = initialize_exif_parser()

        assert service.variant == "exiftool"
        assert isinstance(service.parser, ExiftoolParser)
        assert any("Found exiftool" in m["message"] for m in log_messages)

    def test_falls_back_when_missing(self, monkeypatch, log_messages):
        """Should bind the internal parser and log the reason"""
        _remove_exiftool(monkeypatch)
        service = initialize_exif_parser()

        assert service.variant == "internal"
        assert isinstance(service.parser, InternalExifParser)

        warnings = [m for m in log_messages if m["level"].name == "WARNING"]
        assert len(warnings) == 1
        assert "using internal exif parser" in warnings[0]["message"]
        assert "not found in PATH" in warnings[0]["message"]

    def test_disabled_by_configuration(self, monkeypatch, log_messages):
        """Should skip exiftool entirely when disabled"""
        looked_up = []
        monkeypatch.setattr(exiftool_parser.shutil, "which", lambda name: looked_up.append(name))

        service = initialize_exif_parser(ExifSettings(use_exiftool=False))

        assert service.variant == "internal"
        assert looked_up == []
        assert any("disabled by configuration" in m["message"] for m in log_messages)

    def test_uses_configured_path(self, monkeypatch):
        """Should probe the configured executable"""
        looked_up = []
        monkeypatch.setattr(exiftool_parser.shutil, "which", lambda name: looked_up.append(name))

        initialize_exif_parser(ExifSettings(exiftool_path="/opt/bin/exiftool"))
        assert looked_up == ["/opt/bin/exiftool"]


class TestBindingLifetime:
    """Test that a bound service never changes"""

    def test_fallback_persists_after_tool_appears(self, monkeypatch):
        """Should keep the internal parser even if exiftool is installed later"""
        _remove_exiftool(monkeypatch)
        service = initialize_exif_parser()
        parser = service.parser

        _install_exiftool(monkeypatch)

        assert service.variant == "internal"
        assert service.parser is parser
        assert isinstance(service.parser, InternalExifParser)

    def test_service_is_immutable(self, monkeypatch):
        """Should refuse reassignment of the bound parser"""
        _remove_exiftool(monkeypatch)
        service = initialize_exif_parser()

        with pytest.raises(dataclasses.FrozenInstanceError):
            service.parser = InternalExifParser()

    def test_parse_delegates_to_parser(self, stub_service):
        """Should forward parse() to the bound parser"""
        service = stub_service(result=None)
        assert service.parse("photo.jpg") is None
        assert service.parser.calls == ["photo.jpg"]

    def test_accepts_test_double(self):
        """Should accept any object with a parse() method"""
        class Double:
            def parse(self, path):
                return None

        service = ExtractionService(parser=Double(), variant="double")
        assert service.parse("x.jpg") is None
