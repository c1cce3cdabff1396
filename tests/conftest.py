"""Shared fixtures for chronotaxis tests.

Photos are written as minimal JPEGs carrying a real EXIF APP1 segment so
that exifread parses them exactly as it would a camera file.
"""

import datetime
import os
import pathlib
import struct
from typing import Dict, Optional

import pytest

from file_timestamps import TimestampRewriter
from photo_metadata import PRIMARY_DATE_TAG, SECONDARY_DATE_TAG, MetadataResolver

UTC = datetime.timezone.utc

DATE_TIME_ORIGINAL = 0x9003
DATE_TIME_DIGITIZED = 0x9004
EXIF_IFD_POINTER = 0x8769


def build_exif_jpeg(original: Optional[str] = None, digitized: Optional[str] = None) -> bytes:
    """Build a big-endian JPEG with DateTimeOriginal/DateTimeDigitized in its Exif sub-IFD"""
    entries = []
    if original is not None:
        entries.append((DATE_TIME_ORIGINAL, original))
    if digitized is not None:
        entries.append((DATE_TIME_DIGITIZED, digitized))

    tiff = bytearray(b"MM\x00\x2a" + struct.pack(">I", 8))

    # IFD0 holds only the pointer to the Exif sub-IFD
    sub_ifd_offset = 8 + 2 + 12 + 4
    tiff += struct.pack(">H", 1)
    tiff += struct.pack(">HHII", EXIF_IFD_POINTER, 4, 1, sub_ifd_offset)
    tiff += struct.pack(">I", 0)

    data_offset = sub_ifd_offset + 2 + 12 * len(entries) + 4
    values = b""
    tiff += struct.pack(">H", len(entries))
    for tag, value in entries:
        encoded = value.encode("ascii") + b"\x00"
        tiff += struct.pack(">HHII", tag, 2, len(encoded), data_offset + len(values))
        values += encoded
    tiff += struct.pack(">I", 0)
    tiff += values

    app1 = b"Exif\x00\x00" + bytes(tiff)
    return b"\xff\xd8\xff\xe1" + struct.pack(">H", len(app1) + 2) + app1 + b"\xff\xd9"


def set_mtime(file_path: pathlib.Path, year: int, month: int, day: int):
    """Pin a file's on-disk date at noon UTC"""
    timestamp = datetime.datetime(year, month, day, 12, tzinfo=UTC).timestamp()
    os.utime(file_path, (timestamp, timestamp))


def disk_date(file_path: pathlib.Path) -> datetime.date:
    return datetime.datetime.fromtimestamp(file_path.stat().st_mtime, UTC).date()


class FakeExif:
    """Stand-in for the EXIF decoder, keyed by file name"""

    def __init__(self):
        self.dates: Dict[str, Dict[str, datetime.datetime]] = {}
        self.broken = set()
        self.calls = []

    def set(self, name: str, original=None, digitized=None):
        tags = {}
        if original is not None:
            tags[PRIMARY_DATE_TAG] = original
        if digitized is not None:
            tags[SECONDARY_DATE_TAG] = digitized
        self.dates[name] = tags

    def __call__(self, file_path: pathlib.Path, tag: str) -> Optional[datetime.datetime]:
        self.calls.append((file_path, tag))
        if file_path.name in self.broken:
            raise OSError(f"cannot parse {file_path}")
        return self.dates.get(file_path.name, {}).get(tag)


@pytest.fixture
def fake_exif() -> FakeExif:
    return FakeExif()


@pytest.fixture
def resolver(fake_exif) -> MetadataResolver:
    return MetadataResolver(date_reader=fake_exif)


@pytest.fixture
def rewriter() -> TimestampRewriter:
    return TimestampRewriter(timezone=UTC)


@pytest.fixture
def photo_dir(tmp_path) -> pathlib.Path:
    directory = tmp_path / "photos"
    directory.mkdir()
    return directory


@pytest.fixture
def write_photo():
    """Write a JPEG with optional EXIF dates ('YYYY:MM:DD HH:MM:SS' strings)"""

    def _write(file_path: pathlib.Path, original=None, digitized=None) -> pathlib.Path:
        file_path.write_bytes(build_exif_jpeg(original, digitized))
        return file_path

    return _write
