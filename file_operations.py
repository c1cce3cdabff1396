#!/usr/bin/env python3
"""
File Operations Module

Moves and renames files for the organization pipeline, with cross-drive
support. Failures propagate to the caller: a move that cannot be
completed stops the run instead of being skipped.
"""

import errno
import pathlib
import shutil
from dataclasses import dataclass
from typing import Dict, List


@dataclass
class FileOperation:
    """Represents a planned move"""

    source_path: pathlib.Path
    target_path: pathlib.Path


class FileOperations:
    """File move handler with cross-drive support"""

    def execute_operation(self, operation: FileOperation) -> pathlib.Path:
        """Execute a single move and return the target path

        Raises:
            FileExistsError: if the target already exists
            OSError: if the move itself fails
        """
        if operation.target_path.exists():
            raise FileExistsError(
                errno.EEXIST, "Target already exists", str(operation.target_path)
            )

        # Create target directory if it doesn't exist
        operation.target_path.parent.mkdir(parents=True, exist_ok=True)

        # Try rename first, fallback to copy+delete for cross-drive
        try:
            operation.source_path.rename(operation.target_path)
        except OSError as rename_error:
            if not self._is_cross_drive_error(rename_error):
                raise
            shutil.copy2(operation.source_path, operation.target_path)
            operation.source_path.unlink()  # Delete original after successful copy

        return operation.target_path

    def execute_batch_operations(self, operations: List[FileOperation]) -> List[pathlib.Path]:
        """Execute multiple moves in order and return the target paths"""
        return [self.execute_operation(operation) for operation in operations]

    def plan_batch_operations(self, file_mappings: Dict[pathlib.Path, pathlib.Path]) -> List[FileOperation]:
        """Create multiple planned moves from source->target mappings"""
        return [FileOperation(source_path=source, target_path=target) for source, target in file_mappings.items()]

    def move_file(self, source_path: pathlib.Path, target_path: pathlib.Path) -> pathlib.Path:
        """Move a single file, raising on failure"""
        return self.execute_operation(FileOperation(source_path=source_path, target_path=target_path))

    def move_into(self, source_path: pathlib.Path, target_dir: pathlib.Path) -> pathlib.Path:
        """Move a file into a directory, keeping its name"""
        return self.move_file(source_path, target_dir / source_path.name)

    def _is_cross_drive_error(self, error: OSError) -> bool:
        """Check if the error indicates a cross-drive operation"""
        error_str = str(error).lower()
        return (
            "different disk drive" in error_str
            or error.errno == errno.EXDEV  # Cross-device link error
            or "cross-device link" in error_str
        )
