"""
NetPerfCompare - Configuration Management

This module handles loading configuration from environment variables
and .env files.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv


DEVELOPMENT_ENV = "development"


@dataclass
class SelectionConfig:
    """Configuration for facet/filter selection handling."""
    # Log catalog fallbacks (unknown metric / facet type) as warnings
    development: bool = False

    # Number of candidates kept per top filter list
    top_filter_limit: int = 20

    # Longest date span (days) that defaults to hourly aggregation
    hourly_max_days: int = 2


@dataclass
class Config:
    """
    Main configuration class that aggregates all configuration sections.

    Loads configuration from environment variables with .env file support.
    """
    selection: SelectionConfig = field(default_factory=SelectionConfig)
    log_level: int = logging.INFO

    # Paths
    data_dir: Path = field(default_factory=lambda: Path("data"))
    log_dir: Path = field(default_factory=lambda: Path("data/logs"))

    def __post_init__(self):
        """Load configuration from environment after initialization."""
        # Load .env file if it exists
        env_file = Path(".env")
        if env_file.exists():
            load_dotenv(env_file)

        self.selection = SelectionConfig(
            development=os.getenv("NETPERF_ENV", "production").lower() == DEVELOPMENT_ENV,
            top_filter_limit=self._get_int_env("TOP_FILTER_LIMIT", self.selection.top_filter_limit),
            hourly_max_days=self._get_int_env("HOURLY_MAX_DAYS", self.selection.hourly_max_days)
        )

        level_name = os.getenv("LOG_LEVEL", logging.getLevelName(self.log_level)).upper()
        self.log_level = getattr(logging, level_name, logging.INFO)

        self.data_dir = Path(os.getenv("NETPERF_DATA_DIR", str(self.data_dir)))
        self.log_dir = Path(os.getenv("NETPERF_LOG_DIR", str(self.data_dir / "logs")))

    def _get_int_env(self, key: str, default: int) -> int:
        """
        Get an integer environment variable.

        Args:
            key: Environment variable name
            default: Value used when the variable is unset

        Returns:
            Parsed integer value

        Raises:
            ValueError: If the variable is set but is not an integer
        """
        value = os.getenv(key)
        if value is None or value == "":
            return default
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"Environment variable {key} must be an integer, got {value!r}")
