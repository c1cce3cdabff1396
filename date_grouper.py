#!/usr/bin/env python3
"""
Date Grouper Module

Buckets photos by their on-disk creation date and moves each bucket into
Organized/<yyyy MM dd>. Sibling files sharing a photo's base name (the
.mov half of a live photo, an .aae edit sidecar) follow the photo into
its folder and receive the photo's capture date.
"""

import datetime
import os
import pathlib
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

from file_operations import FileOperations
from file_timestamps import TimestampRewriter
from photo_metadata import MetadataResolver

ORGANIZED_FOLDER = "Organized"
FOLDER_DATE_FORMAT = "%Y %m %d"


@dataclass
class GroupingResult:
    """Outcome of the grouping pass over a directory"""

    organized_dir: Optional[pathlib.Path] = None
    buckets: Dict[pathlib.Path, List[pathlib.Path]] = field(default_factory=dict)
    related_moves: Dict[pathlib.Path, List[pathlib.Path]] = field(default_factory=dict)

    @property
    def moved_count(self) -> int:
        return sum(len(files) for files in self.buckets.values()) + sum(
            len(files) for files in self.related_moves.values()
        )


class DateGrouper:
    """Moves photos and their siblings into per-day folders"""

    def __init__(
        self,
        resolver: Optional[MetadataResolver] = None,
        rewriter: Optional[TimestampRewriter] = None,
        file_operations: Optional[FileOperations] = None,
        folder_name: str = ORGANIZED_FOLDER,
        date_format: str = FOLDER_DATE_FORMAT,
        progress_callback: Optional[Callable[[str], None]] = None,
    ):
        self.resolver = resolver or MetadataResolver()
        self.rewriter = rewriter or TimestampRewriter()
        self.file_operations = file_operations or FileOperations()
        self.folder_name = folder_name
        self.date_format = date_format
        self.progress_callback = progress_callback

    def bucket_by_creation_date(self, files: Iterable[pathlib.Path]) -> Dict[datetime.date, List[pathlib.Path]]:
        """Group files by on-disk creation date (not by metadata)"""
        buckets = defaultdict(list)
        for file_path in files:
            buckets[self.rewriter.creation_date(file_path)].append(file_path)
        return dict(buckets)

    def organize(self, directory: pathlib.Path, files: Iterable[pathlib.Path]) -> GroupingResult:
        result = GroupingResult()

        buckets = self.bucket_by_creation_date(files)
        if not buckets:
            return result

        result.organized_dir = directory / self.folder_name
        result.organized_dir.mkdir(exist_ok=True)

        for date in sorted(buckets):
            target_dir = result.organized_dir / date.strftime(self.date_format)
            target_dir.mkdir(exist_ok=True)

            moved = []
            for file_path in buckets[date]:
                if self.progress_callback:
                    self.progress_callback(file_path.name)

                destination = self.file_operations.move_into(file_path, target_dir)
                moved.append(destination)

                related = self.move_related_files(file_path, destination, target_dir)
                if related:
                    result.related_moves[destination] = related

            result.buckets[target_dir] = moved

        return result

    def find_related_files(self, file_path: pathlib.Path) -> List[pathlib.Path]:
        """Find files in file_path's original folder that share its base name"""
        source_dir = file_path.parent
        if source_dir == pathlib.Path():
            # Bare file name, the original folder is unknown
            return []

        # Case folding follows the host filesystem
        stem = os.path.normcase(file_path.stem)
        return [
            candidate
            for candidate in sorted(source_dir.iterdir())
            if candidate.is_file() and os.path.normcase(candidate.stem) == stem
        ]

    def move_related_files(
        self, file_path: pathlib.Path, destination: pathlib.Path, target_dir: pathlib.Path
    ) -> List[pathlib.Path]:
        """Re-date and move the siblings of an already moved photo"""
        related_files = self.find_related_files(file_path)
        if not related_files:
            return []

        # Siblings inherit the capture date of the photo they belong to
        record = self.resolver.resolve(destination)

        moved = []
        for related in related_files:
            self.rewriter.apply_date(related, record.captured_at)
            moved.append(self.file_operations.move_into(related, target_dir))

        return moved
