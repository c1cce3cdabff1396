#!/usr/bin/env python3
"""
Partitioner Module

Splits photos into processable ones, which are re-dated in place, and
unprocessed ones, which are moved together into a quarantine folder.
"""

import pathlib
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from file_operations import FileOperations
from file_timestamps import TimestampRewriter
from photo_metadata import MetadataResolver

NOT_PROCESSED_FOLDER = "Not Processed"


@dataclass
class PartitionResult:
    """Outcome of the re-dating pass over a directory"""

    processed: List[pathlib.Path] = field(default_factory=list)
    redated: List[pathlib.Path] = field(default_factory=list)
    unprocessed: List[pathlib.Path] = field(default_factory=list)
    quarantine_dir: Optional[pathlib.Path] = None


class Partitioner:
    """Re-dates processable photos and quarantines the rest"""

    def __init__(
        self,
        resolver: Optional[MetadataResolver] = None,
        rewriter: Optional[TimestampRewriter] = None,
        file_operations: Optional[FileOperations] = None,
        folder_name: str = NOT_PROCESSED_FOLDER,
        progress_callback: Optional[Callable[[str], None]] = None,
    ):
        self.resolver = resolver or MetadataResolver()
        self.rewriter = rewriter or TimestampRewriter()
        self.file_operations = file_operations or FileOperations()
        self.folder_name = folder_name
        self.progress_callback = progress_callback

    def partition(self, directory: pathlib.Path, files: Iterable[pathlib.Path]) -> PartitionResult:
        result = PartitionResult()

        for file_path in files:
            if self.progress_callback:
                self.progress_callback(file_path.name)

            record = self.resolver.resolve(file_path)
            if not record.processable:
                result.unprocessed.append(file_path)
                continue

            result.processed.append(file_path)
            if self.rewriter.apply(record):
                result.redated.append(file_path)

        if result.unprocessed:
            result.quarantine_dir = self.quarantine(directory, result.unprocessed)

        return result

    def quarantine(self, directory: pathlib.Path, files: List[pathlib.Path]) -> pathlib.Path:
        """Move files as one batch into the not-processed folder"""
        quarantine_dir = directory / self.folder_name
        quarantine_dir.mkdir(exist_ok=True)

        operations = self.file_operations.plan_batch_operations(
            {file_path: quarantine_dir / file_path.name for file_path in files}
        )
        self.file_operations.execute_batch_operations(operations)

        return quarantine_dir
