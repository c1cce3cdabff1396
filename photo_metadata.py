#!/usr/bin/env python3
"""
Photo Metadata Module

Resolves the capture date of a photo from its embedded EXIF data and
lists the photo files of a directory.

Date resolution falls back in tiers:
1. EXIF DateTimeOriginal (when the shutter fired)
2. EXIF DateTimeDigitized (when the image was stored)

A file whose tags are missing, zeroed or unreadable resolves to an
unprocessable record instead of raising.
"""

import datetime
import pathlib
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

# Third-party imports
import exifread

PHOTO_PATTERNS = ("*.jpg", "*.jpeg")

PRIMARY_DATE_TAG = "EXIF DateTimeOriginal"
SECONDARY_DATE_TAG = "EXIF DateTimeDigitized"

EXIF_DATE_FORMAT = "%Y:%m:%d %H:%M:%S"

# Sentinel for "tag present but carries no usable date"
ZERO_DATE = datetime.datetime.min

DateReader = Callable[[pathlib.Path, str], Optional[datetime.datetime]]


@dataclass
class PhotoRecord:
    """Capture date information for a single photo"""

    path: pathlib.Path
    captured_at: Optional[datetime.datetime] = None

    @property
    def processable(self) -> bool:
        return self.captured_at is not None and self.captured_at != ZERO_DATE


def read_exif_tags(file_path: pathlib.Path) -> Dict[str, Any]:
    """Parse the EXIF block of a file into exifread's tag dictionary.

    Raises:
        OSError: if the file cannot be opened
    """
    with open(file_path, "rb") as f:
        return exifread.process_file(f, details=False)


def parse_exif_date(tags: Dict[str, Any], tag: str) -> Optional[datetime.datetime]:
    """Parse one date tag out of an exifread tag dictionary.

    Returns:
        The parsed date, or None if the tag is absent, blank or zeroed
        ('0000:00:00 00:00:00' is what cameras write when the clock was never set)
    """
    if tag not in tags:
        return None

    date_str = str(tags[tag]).strip().rstrip("\x00")
    if not date_str:
        return None

    try:
        return datetime.datetime.strptime(date_str, EXIF_DATE_FORMAT)
    except ValueError:
        return None


def try_read_date(file_path: pathlib.Path, tag: str) -> Optional[datetime.datetime]:
    """Read a single EXIF date tag from a file.

    Args:
        file_path: Image file to read
        tag: exifread tag key, e.g. 'EXIF DateTimeOriginal'

    Returns:
        The parsed date, or None if the tag is absent, blank or zeroed

    Raises:
        OSError: if the file cannot be opened
    """
    return parse_exif_date(read_exif_tags(file_path), tag)


def cached_date_reader() -> DateReader:
    """Build a date reader that parses each file's EXIF block only once"""
    tags_by_path: Dict[pathlib.Path, Dict[str, Any]] = {}

    def read(file_path: pathlib.Path, tag: str) -> Optional[datetime.datetime]:
        if file_path not in tags_by_path:
            tags_by_path[file_path] = read_exif_tags(file_path)
        return parse_exif_date(tags_by_path[file_path], tag)

    return read


class MetadataResolver:
    """Builds PhotoRecords from EXIF capture dates"""

    def __init__(self, date_reader: Optional[DateReader] = None):
        """Initialize resolver with an optional replacement for the EXIF decoder"""
        self.date_reader = date_reader

    def resolve(self, file_path: pathlib.Path) -> PhotoRecord:
        """Resolve the capture date of a file, never raising"""
        record = PhotoRecord(path=file_path)
        # Tags are parsed once per call and shared by both tiers
        read_date = self.date_reader or cached_date_reader()

        try:
            self._try_tag(record, PRIMARY_DATE_TAG, read_date)

            if not record.processable:
                # Original date unusable, go for the digitized date
                self._try_tag(record, SECONDARY_DATE_TAG, read_date)
        except Exception:
            # Corrupt or unsupported file
            record.captured_at = None

        return record

    def _try_tag(self, record: PhotoRecord, tag: str, read_date: DateReader):
        date = read_date(record.path, tag)
        record.captured_at = date if date is not None else ZERO_DATE


def is_photo_file(file_path: pathlib.Path) -> bool:
    """Check if a path belongs to the supported photo extension family"""
    return any(file_path.match(pattern) for pattern in PHOTO_PATTERNS)


def list_photo_files(directory: pathlib.Path) -> List[pathlib.Path]:
    """List photo files directly inside a directory.

    The listing is flat: subdirectories (including the ones this tool
    creates) are never descended into.
    """
    files = []
    seen = set()

    for pattern in PHOTO_PATTERNS:
        for file_path in sorted(directory.glob(pattern)):
            if file_path.is_file() and file_path not in seen:
                seen.add(file_path)
                files.append(file_path)

    return files
