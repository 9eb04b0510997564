"""
Shared fixtures for media-exif tests

Test images are generated with Pillow into a temporary directory, with
EXIF written through Image.Exif.
"""

from dataclasses import replace
from pathlib import Path

import pytest
from loguru import logger
from PIL import Image
from PIL.TiffImagePlugin import IFDRational

from media_exif.metadata.selector import ExtractionService


EXIF_IFD = 0x8769
GPS_IFD = 0x8825


def build_exif(
    taken_at="2023:12:25 10:15:30",
    camera_make="Canon",
    camera_model="EOS R5",
    exposure=(1, 250),
    aperture=(28, 10),
    focal_length=(50, 1),
    iso=400,
    gps=None,
):
    """Build an Image.Exif with base, EXIF and optional GPS tags"""
    exif = Image.Exif()
    if camera_make:
        exif[271] = camera_make
    if camera_model:
        exif[272] = camera_model
    if taken_at:
        exif[306] = taken_at

    exif_ifd = {}
    if taken_at:
        exif_ifd[36867] = taken_at
    if exposure:
        exif_ifd[33434] = IFDRational(*exposure)
    if aperture:
        exif_ifd[33437] = IFDRational(*aperture)
    if focal_length:
        exif_ifd[37386] = IFDRational(*focal_length)
    if iso:
        exif_ifd[34855] = iso
    if exif_ifd:
        exif[EXIF_IFD] = exif_ifd

    if gps:
        lat, lon = gps
        exif[GPS_IFD] = {
            1: "N" if lat >= 0 else "S",
            2: _to_dms(abs(lat)),
            3: "E" if lon >= 0 else "W",
            4: _to_dms(abs(lon)),
        }
    return exif


def _to_dms(value):
    degrees = int(value)
    minutes = int((value - degrees) * 60)
    seconds = round(((value - degrees) * 60 - minutes) * 60 * 100)
    return (IFDRational(degrees, 1), IFDRational(minutes, 1), IFDRational(seconds, 100))


@pytest.fixture
def make_image(tmp_path):
    """Factory writing a small JPEG, with EXIF if given"""
    def _make(name="photo.jpg", exif=None, size=(64, 48)):
        path = tmp_path / name
        img = Image.new("RGB", size, (70, 130, 180))
        if exif is not None:
            img.save(path, exif=exif)
        else:
            img.save(path)
        return path
    return _make


class StubParser:
    """Parser double returning a fixed result or raising a fixed error"""

    variant = "stub"

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def parse(self, path):
        self.calls.append(str(path))
        if self.error is not None:
            raise self.error
        return self.result


class RecordingTransaction:
    """In-memory transaction that records successful writes"""

    def __init__(self, records=None, fail_on=()):
        self.records = dict(records or {})
        self.fail_on = set(fail_on)
        self.writes = []
        self._next_id = max(self.records, default=0) + 1

    def get_exif(self, exif_id):
        if "get_exif" in self.fail_on:
            raise RuntimeError("database is locked")
        return self.records[exif_id]

    def replace_exif(self, media, exif):
        if "replace_exif" in self.fail_on:
            raise RuntimeError("disk I/O error")
        stored = replace(exif, id=self._next_id)
        self._next_id += 1
        self.records[stored.id] = stored
        media.exif_id = stored.id
        self.writes.append(("replace_exif", media.path, stored))
        return stored

    def save_media(self, media):
        if "save_media" in self.fail_on:
            raise RuntimeError("disk I/O error")
        self.writes.append(("save_media", media.path, media.date_shot))


@pytest.fixture
def tx():
    return RecordingTransaction()


@pytest.fixture
def make_tx():
    """Factory for transactions with preloaded records or failing steps"""
    def _make(records=None, fail_on=()):
        return RecordingTransaction(records, fail_on)
    return _make


@pytest.fixture
def stub_service():
    """Factory building an ExtractionService around a StubParser"""
    def _make(result=None, error=None):
        return ExtractionService(parser=StubParser(result, error), variant="stub")
    return _make


@pytest.fixture
def log_messages():
    """Capture loguru messages emitted during a test"""
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record), level="DEBUG")
    yield messages
    logger.remove(handler_id)
