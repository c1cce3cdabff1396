#!/usr/bin/env python3
"""
Collision Resolver Module

Makes photo base names unique within a directory before any grouping.

Two photos can share a base name and differ only by extension
(IMG_0001.jpg and IMG_0001.jpeg). Later stages key on the base name, so
every photo whose name contains another photo's base name is renamed to
New<stem><counter><ext>, leaving the first one seen untouched.
"""

import pathlib
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from file_operations import FileOperations
from photo_metadata import is_photo_file

DEFAULT_COUNTER_START = 10000


@dataclass
class RenameRecord:
    """A rename performed to break a name collision"""

    source: pathlib.Path
    target: pathlib.Path


class CollisionResolver:
    """Renames photos that share a base name with another photo"""

    def __init__(
        self,
        counter_start: int = DEFAULT_COUNTER_START,
        file_operations: Optional[FileOperations] = None,
        progress_callback: Optional[Callable[[str], None]] = None,
    ):
        self.counter_start = counter_start
        self.file_operations = file_operations or FileOperations()
        self.progress_callback = progress_callback

    def deduplicate(self, files: Iterable[pathlib.Path]) -> List[RenameRecord]:
        """Rename colliding photos in place and return what was renamed"""
        counter = self.counter_start
        renames = []

        for file_path in files:
            if self.progress_callback:
                self.progress_callback(file_path.name)

            if not file_path.exists():
                # Already renamed away by an earlier collision group
                continue

            same_name = self.find_same_name_files(file_path)
            if len(same_name) <= 1:
                continue

            for other in same_name:
                if other == file_path:
                    continue

                new_name = f"New{other.stem}{counter}{file_path.suffix}"
                counter += 1

                target = self.file_operations.move_file(other, other.parent / new_name)
                renames.append(RenameRecord(source=other, target=target))

        return renames

    def find_same_name_files(self, file_path: pathlib.Path) -> List[pathlib.Path]:
        """Find photos next to file_path whose name contains its base name (file_path included)"""
        stem = file_path.stem
        return [
            candidate
            for candidate in sorted(file_path.parent.iterdir())
            if candidate.is_file() and stem in candidate.name and is_photo_file(candidate)
        ]
