"""Configuration management for syndbind."""

import json
import os
from dataclasses import dataclass
from pathlib import Path

from .wire_feed import FEED_TYPES, RSS_20

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


@dataclass
class InputConfig:
    """Configuration for reading feeds."""

    preserve_wire_feed: bool = False


@dataclass
class OutputConfig:
    """Configuration for writing feeds."""

    pretty_print: bool = False
    encoding: str = "utf-8"
    default_feed_type: str = RSS_20


class Config:
    """Main configuration manager."""

    # Default settings file path
    SETTINGS_FILE = "syndbind.json"

    def __init__(self, settings_file: str | Path | None = None):
        """Initialize configuration from environment variables.

        Args:
            settings_file: JSON settings file, defaults to ``SETTINGS_FILE``
                in the current directory
        """
        self.settings_file = Path(settings_file or self.SETTINGS_FILE)
        self.log_level = os.getenv("SYNDBIND_LOG_LEVEL", "INFO")
        self.preserve_wire_feed = _env_flag("SYNDBIND_PRESERVE_WIRE_FEED")
        self.pretty_print = _env_flag("SYNDBIND_PRETTY_PRINT")
        self.default_feed_type = os.getenv("SYNDBIND_DEFAULT_FEED_TYPE", RSS_20)
        self.encoding = os.getenv("SYNDBIND_ENCODING", "utf-8")

    def get_feed_types(self) -> list[str]:
        """Get the enabled feed types.

        Without a settings file every known feed type is enabled. The file
        lists feed types with an optional ``enabled`` flag::

            {"feed_types": [{"type": "rss_0.9", "enabled": false}]}

        Types missing from the file stay enabled.

        Raises:
            ValueError: If the settings file is not valid or names an unknown
                feed type
        """
        if not self.settings_file.exists():
            return list(FEED_TYPES)

        try:
            with open(self.settings_file, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in settings file: {e}") from e

        disabled = set()
        for entry in data.get("feed_types", []):
            feed_type = entry.get("type")
            if feed_type not in FEED_TYPES:
                raise ValueError(f"Unknown feed type in settings file: {feed_type!r}")
            if not entry.get("enabled", True):
                disabled.add(feed_type)

        enabled = [feed_type for feed_type in FEED_TYPES if feed_type not in disabled]
        if not enabled:
            raise ValueError("No enabled feed types found in settings file")
        return enabled

    def get_input_config(self) -> InputConfig:
        """Get feed input configuration."""
        return InputConfig(preserve_wire_feed=self.preserve_wire_feed)

    def get_output_config(self) -> OutputConfig:
        """Get feed output configuration."""
        if self.default_feed_type not in FEED_TYPES:
            raise ValueError(f"Unknown default feed type: {self.default_feed_type!r}")
        return OutputConfig(
            pretty_print=self.pretty_print,
            encoding=self.encoding,
            default_feed_type=self.default_feed_type,
        )
