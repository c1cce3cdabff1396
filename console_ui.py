#!/usr/bin/env python3
"""
Console UI Module using Rich

Styled messages, progress bars and summary tables for chronotaxis.
"""

from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from auxiliary import format_path_for_display, pluralize


class ConsoleUI:
    """Console UI handler using Rich"""

    def __init__(self, force_terminal: Optional[bool] = None, console: Optional[Console] = None):
        """Initialize console with optional terminal forcing"""
        self.console = console or Console(force_terminal=force_terminal, highlight=False, markup=False)

    # Basic styled output methods
    def print_success(self, message: str):
        """Print success message in green"""
        self.console.print(message, style="green")

    def print_error(self, message: str):
        """Print error message in red"""
        self.console.print(message, style="red bold")

    def print_warning(self, message: str):
        """Print warning message in yellow"""
        self.console.print(message, style="yellow")

    def print_info(self, message: str):
        """Print info message in cyan"""
        self.console.print(message, style="cyan")

    def print_plain(self, message: str):
        """Print message in plain white"""
        self.console.print(message, style="white")

    def show_configuration(self, config: Dict[str, Any]):
        """Display configuration in a formatted table"""
        table = Table(show_header=False, box=box.SIMPLE)
        table.add_column("Setting", style="cyan dim", min_width=20, justify="right")
        table.add_column("Value", style="cyan", min_width=30)

        for key, value in config.items():
            table.add_row(key, str(value))

        self.console.print(table)

    def create_progress(self) -> Progress:
        """Create a Rich progress context manager for one pipeline phase"""
        return Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TextColumn("({task.completed}/{task.total})"),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        )

    def show_renames(self, renames: List[Any]):
        """Show collision renames as source → target"""
        if not renames:
            return

        self.print_warning(f"Renamed {pluralize(len(renames), 'file')} to avoid name collisions:")
        for rename in renames:
            self.console.print(f"  {rename.source.name} → {rename.target.name}", style="white dim")

    def show_unprocessed(self, files: List[Any], folder: Any):
        """Show files that had no usable capture date"""
        if not files:
            return

        self.print_warning(
            f"{pluralize(len(files), 'file')} without a capture date moved to "
            f"{format_path_for_display(str(folder))}:"
        )
        show_limit = 5
        for file_path in files[:show_limit]:
            self.console.print(f"    • {file_path.name}", style="yellow dim")
        if len(files) > show_limit:
            self.console.print(f"    • ... and {len(files) - show_limit} more", style="yellow dim")

    def show_buckets(self, buckets: Dict[Any, List[Any]], related_count: int):
        """Show the per-day folders that were filled"""
        if not buckets:
            self.print_info("No files left to organize")
            return

        table = Table(box=box.SIMPLE, show_header=True)
        table.add_column("Folder", style="cyan")
        table.add_column("Photos", justify="right")

        for folder, files in sorted(buckets.items()):
            table.add_row(folder.name, str(len(files)))

        self.console.print(table)
        if related_count:
            self.print_info(f"{pluralize(related_count, 'related file')} moved along with their photos")

    def pause(self, message: str = "All done, press any key to continue"):
        """Pause execution until Enter is pressed"""
        self.console.print(message)
        input()
