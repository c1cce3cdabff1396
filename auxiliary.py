#!/usr/bin/env python3
"""
Auxiliary utility functions for chronotaxis

Display helpers shared by the console output and the driver.
"""

import pathlib
from typing import Optional


def format_path_for_display(path: str, home_path: Optional[str] = None) -> str:
    """Format file path for display by replacing home directory with ~

    Args:
        path: File path to format
        home_path: Home directory path (defaults to platform home)

    Returns:
        Path with home directory replaced by ~ if applicable
    """
    if home_path is None:
        home_path = str(pathlib.Path.home())

    home = home_path.rstrip("/\\")
    if path == home:
        return "~"

    # Only replace whole leading components, /home/al must not match /home/alice
    for separator in ("/", "\\"):
        if path.startswith(home + separator):
            return "~" + path[len(home):]

    return path


def pluralize(count: int, noun: str) -> str:
    """Format a count with a naively pluralized noun, e.g. '1 file', '3 files'"""
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"
