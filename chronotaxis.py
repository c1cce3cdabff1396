#!/usr/bin/env python3
"""
Chronotaxis - Ancient Greek χρόνος + τάξις (ordering by time)

Re-dates and organizes a folder of photos by their EXIF capture date.

Workflow (one directory, flat, in this order):
1. Rename photos whose base names collide
2. Re-date every photo's file timestamps to its capture date
3. Move photos without a capture date to 'Not Processed'
4. Move the rest into 'Organized/yyyy MM dd', together with any sibling
   files sharing their base name (e.g. the .mov of a live photo)

The directory is listed again after every step that changes it.
"""

import argparse
import pathlib
import sys
from dataclasses import dataclass, field
from typing import Callable, List, Optional

# Local imports
from auxiliary import format_path_for_display
from chronotaxis_config import ChronotaxisConfig, ConfigManager
from collision_resolver import CollisionResolver, RenameRecord
from console_ui import ConsoleUI
from date_grouper import DateGrouper, GroupingResult
from file_operations import FileOperations
from file_timestamps import WINDOWS_FILETIMES, TimestampRewriter
from partitioner import PartitionResult, Partitioner
from photo_metadata import MetadataResolver, list_photo_files

# Fix Windows console encoding for Unicode characters
if sys.platform == "win32":
    import io
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')


@dataclass
class RunSummary:
    """Everything one run did to a directory"""

    directory: pathlib.Path
    renamed: List[RenameRecord] = field(default_factory=list)
    partition: PartitionResult = field(default_factory=PartitionResult)
    grouping: GroupingResult = field(default_factory=GroupingResult)


class Chronotaxis:
    """Main application class running the re-date and organize pipeline"""

    def __init__(
        self,
        config: Optional[ChronotaxisConfig] = None,
        ui: Optional[ConsoleUI] = None,
        resolver: Optional[MetadataResolver] = None,
        rewriter: Optional[TimestampRewriter] = None,
    ):
        self.config = config or ChronotaxisConfig()
        self.ui = ui

        self.resolver = resolver or MetadataResolver()
        self.rewriter = rewriter or TimestampRewriter()
        self.file_operations = FileOperations()

        self.collision_resolver = CollisionResolver(
            counter_start=self.config.collision_counter_start,
            file_operations=self.file_operations,
        )
        self.partitioner = Partitioner(
            resolver=self.resolver,
            rewriter=self.rewriter,
            file_operations=self.file_operations,
            folder_name=self.config.not_processed_folder,
        )
        self.date_grouper = DateGrouper(
            resolver=self.resolver,
            rewriter=self.rewriter,
            file_operations=self.file_operations,
            folder_name=self.config.organized_folder,
            date_format=self.config.folder_date_format,
        )

    def run(self, directory: pathlib.Path) -> RunSummary:
        """Run every phase over one directory"""
        summary = RunSummary(directory=directory)

        # Sometimes there are files with the same name, just different extensions
        files = list_photo_files(directory)
        with self._phase("Resolving name collisions...", len(files)) as advance:
            self.collision_resolver.progress_callback = advance
            summary.renamed = self.collision_resolver.deduplicate(files)

        files = list_photo_files(directory)
        with self._phase("Re-dating photos...", len(files)) as advance:
            self.partitioner.progress_callback = advance
            summary.partition = self.partitioner.partition(directory, files)

        files = list_photo_files(directory)
        with self._phase("Organizing by date...", len(files)) as advance:
            self.date_grouper.progress_callback = advance
            summary.grouping = self.date_grouper.organize(directory, files)

        return summary

    def _phase(self, description: str, total: int) -> "_PhaseProgress":
        return _PhaseProgress(self.ui, description, total)

    def show_configuration(self, directory: pathlib.Path):
        """Show current configuration using Rich"""
        config = {
            "Directory": format_path_for_display(str(directory)),
            "Not processed folder": self.config.not_processed_folder,
            "Organized folder": self.config.organized_folder,
            "Folder date format": self.config.folder_date_format,
        }

        if not WINDOWS_FILETIMES:
            config["Creation time"] = "Modification time only (Windows file API not available)"

        self.ui.show_configuration(config)

    def show_summary(self, summary: RunSummary):
        """Show what the run did"""
        self.ui.show_renames(summary.renamed)

        if summary.partition.processed:
            self.ui.print_success(
                f"Re-dated {len(summary.partition.redated)} of {len(summary.partition.processed)} photos"
            )
        self.ui.show_unprocessed(summary.partition.unprocessed, summary.partition.quarantine_dir)

        related_count = sum(len(files) for files in summary.grouping.related_moves.values())
        self.ui.show_buckets(summary.grouping.buckets, related_count)


class _PhaseProgress:
    """Progress bar for one phase, or a no-op when running without a UI"""

    def __init__(self, ui: Optional[ConsoleUI], description: str, total: int):
        self.ui = ui
        self.description = description
        self.total = total
        self._progress = None

    def __enter__(self) -> Optional[Callable[[str], None]]:
        if self.ui is None or self.total == 0:
            return None

        self._progress = self.ui.create_progress()
        self._progress.start()
        task = self._progress.add_task(self.description, total=self.total)

        def advance(message: str):
            self._progress.update(task, advance=1)

        return advance

    def __exit__(self, exc_type, exc, tb):
        if self._progress is not None:
            self._progress.stop()
        return False


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = argparse.ArgumentParser(
        prog="chronotaxis",
        description="Chronotaxis - Re-date photos from EXIF and organize them by day",
        epilog="Creates 'Organized/yyyy MM dd' folders and a 'Not Processed' folder inside the directory",
    )

    parser.add_argument(
        'paths',
        type=pathlib.Path,
        nargs='*',
        help='Directory to process'
    )

    parser.add_argument(
        '--no-pause',
        action='store_true',
        help='Do not wait for a key press when done'
    )

    parser.add_argument(
        '--config-dir',
        type=pathlib.Path,
        help='Configuration directory (default: ~/.chronotaxis)'
    )

    args = parser.parse_args(argv)
    ui = ConsoleUI()

    if len(args.paths) != 1:
        ui.print_plain("Arguments: ")
        ui.print_plain("1: Directory to process")
        return 0

    directory = args.paths[0]
    if not directory.is_dir():
        ui.print_error(f"The specified directory {directory} does not exist")
        return 0

    config = ConfigManager(args.config_dir).load()
    app = Chronotaxis(config=config, ui=ui)

    ui.print_info(f"Processing directory {directory}")
    app.show_configuration(directory)

    summary = app.run(directory)
    app.show_summary(summary)

    if config.pause_on_exit and not args.no_pause:
        ui.pause()
    else:
        ui.print_success("All done")

    return 0


if __name__ == "__main__":
    sys.exit(main())
