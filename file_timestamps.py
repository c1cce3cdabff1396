#!/usr/bin/env python3
"""
File Timestamp Module

Reads and rewrites filesystem timestamps so that a photo's creation and
modification times match its capture date.

Only Windows with pywin32 can write the birth time. Everywhere else the
modification time is the creation timestamp of record, both for reading
and for writing.
"""

import datetime
import os
import pathlib
import sys
from typing import Optional

# Third-party imports
from tzlocal import get_localzone

from photo_metadata import ZERO_DATE, PhotoRecord

# Windows-specific imports for creation time
try:
    import pywintypes
    import win32con
    import win32file
    WINDOWS_FILETIMES = True
except ImportError:
    WINDOWS_FILETIMES = False


# Birth time is only the creation timestamp of record where set_file_times can write it
BIRTHTIME_WRITABLE = sys.platform == "win32" and WINDOWS_FILETIMES


def creation_timestamp(stat: os.stat_result) -> float:
    """Pick the creation timestamp from a stat result"""
    if BIRTHTIME_WRITABLE:
        return getattr(stat, "st_birthtime", stat.st_ctime)
    return stat.st_mtime


def read_creation_date(file_path: pathlib.Path, timezone=None) -> datetime.date:
    """Get the on-disk creation date of a file (date component only)"""
    timestamp = creation_timestamp(file_path.stat())
    return datetime.datetime.fromtimestamp(timestamp, timezone or get_localzone()).date()


def set_file_times(file_path: pathlib.Path, when: datetime.datetime):
    """Set creation (where supported), access and modification time"""
    timestamp = when.timestamp()
    os.utime(file_path, (timestamp, timestamp))

    if WINDOWS_FILETIMES:
        handle = win32file.CreateFile(
            str(file_path),
            win32con.GENERIC_WRITE,
            win32con.FILE_SHARE_READ | win32con.FILE_SHARE_WRITE,
            None,
            win32con.OPEN_EXISTING,
            win32con.FILE_ATTRIBUTE_NORMAL,
            None,
        )
        try:
            win32file.SetFileTime(handle, pywintypes.Time(when), None, None)
        finally:
            handle.Close()


class TimestampRewriter:
    """Applies resolved capture dates to filesystem timestamps"""

    def __init__(self, timezone=None):
        """Initialize rewriter with optional timezone for naive capture dates"""
        self.timezone = timezone or get_localzone()

    def creation_date(self, file_path: pathlib.Path) -> datetime.date:
        return read_creation_date(file_path, self.timezone)

    def apply(self, record: PhotoRecord) -> bool:
        """Re-date a processable record's file.

        Returns:
            bool: True if timestamps were written, False if the on-disk
            creation date already matched

        Raises:
            ValueError: if the record is not processable
        """
        if not record.processable or record.captured_at is None:
            raise ValueError(f"Record has no usable capture date: {record.path}")
        if not record.path or pathlib.Path(record.path) == pathlib.Path():
            raise ValueError("Record has no path")

        if self.creation_date(record.path) == record.captured_at.date():
            return False

        return self.apply_date(record.path, record.captured_at)

    def apply_date(self, file_path: pathlib.Path, date: Optional[datetime.datetime]) -> bool:
        """Set a file's timestamps to a date, silently skipping missing files and empty dates"""
        if not file_path.exists() or date is None or date == ZERO_DATE:
            return False

        set_file_times(file_path, self._localize(date))
        return True

    def _localize(self, date: datetime.datetime) -> datetime.datetime:
        if date.tzinfo is None:
            return date.replace(tzinfo=self.timezone)
        return date
