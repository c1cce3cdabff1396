#!/usr/bin/env python3
"""
Chronotaxis Configuration Manager

Persistent settings for chronotaxis, stored as JSON in a .chronotaxis
directory. A missing or corrupted file falls back to the defaults.
"""

import json
import pathlib
from dataclasses import asdict, dataclass
from typing import Optional

from collision_resolver import DEFAULT_COUNTER_START
from date_grouper import FOLDER_DATE_FORMAT, ORGANIZED_FOLDER
from partitioner import NOT_PROCESSED_FOLDER


@dataclass
class ChronotaxisConfig:
    """Configuration for chronotaxis"""

    version: str = "1.0"
    not_processed_folder: str = NOT_PROCESSED_FOLDER
    organized_folder: str = ORGANIZED_FOLDER
    folder_date_format: str = FOLDER_DATE_FORMAT
    collision_counter_start: int = DEFAULT_COUNTER_START
    pause_on_exit: bool = True

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "ChronotaxisConfig":
        """Create from dictionary, keeping defaults for missing keys"""
        defaults = cls()
        return cls(
            version=data.get("version", defaults.version),
            not_processed_folder=data.get("not_processed_folder", defaults.not_processed_folder),
            organized_folder=data.get("organized_folder", defaults.organized_folder),
            folder_date_format=data.get("folder_date_format", defaults.folder_date_format),
            collision_counter_start=int(data.get("collision_counter_start", defaults.collision_counter_start)),
            pause_on_exit=bool(data.get("pause_on_exit", defaults.pause_on_exit)),
        )


class ConfigManager:
    """Manages loading and saving configuration"""

    def __init__(self, config_dir: Optional[pathlib.Path] = None):
        """Initialize configuration manager

        Args:
            config_dir: Override default .chronotaxis directory location
        """
        self.config_dir = config_dir or pathlib.Path.home() / ".chronotaxis"
        self.config_file = self.config_dir / "config.json"

    def load(self) -> ChronotaxisConfig:
        """Load configuration from file"""
        if self.config_file.exists():
            try:
                with self.config_file.open() as f:
                    return ChronotaxisConfig.from_dict(json.load(f))
            except (json.JSONDecodeError, AttributeError, TypeError, ValueError):
                # If config is corrupted, return default
                return ChronotaxisConfig()
        return ChronotaxisConfig()

    def save(self, config: ChronotaxisConfig):
        """Save configuration to file"""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with self.config_file.open("w") as f:
            json.dump(config.to_dict(), f, indent=2)
