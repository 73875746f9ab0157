import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

import yaml

from .services.message_service import DEFAULT_HOST, DEFAULT_PORT
from .sources.archive import DEFAULT_CACHE_DIR

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def parse_log_level(level_str: str) -> int:
    """Convert string log level to logging constant."""
    level_str = level_str.upper()
    if level_str not in LOG_LEVELS:
        raise ValueError(
            f"Invalid log level: {level_str}. Must be one of {', '.join(LOG_LEVELS.keys())}"
        )
    return LOG_LEVELS[level_str]


def load_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from YAML file."""
    with open(config_path, "r") as f:
        config = yaml.safe_load(f)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"Configuration file {config_path} must contain a mapping")
    return config


@dataclass
class ReplayOptions:
    """All settings for one replay run"""

    file: Optional[str] = None
    date: Optional[str] = None  # YYYY-MM-DD, downloaded from ais.dk
    mmsi: Optional[int] = None
    speed: int = 1
    gps: bool = False  # GPRMC instead of AIVDM
    skip_moored: bool = False
    purge_cache: bool = False
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    loglevel: str = "INFO"
    cache_dir: str = DEFAULT_CACHE_DIR

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "ReplayOptions":
        """Build options from a configuration mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(config) - known
        if unknown:
            logging.warning(f"Ignoring unknown configuration keys: {', '.join(sorted(unknown))}")
        return cls(**{key: value for key, value in config.items() if key in known})

    def validate(self):
        """
        Raises:
            ValueError: If the options cannot describe a valid run
        """
        if self.purge_cache:
            return
        if not self.file and not self.date:
            raise ValueError("--file or --date is required")
        if isinstance(self.speed, bool) or not isinstance(self.speed, int) or self.speed < 1:
            raise ValueError(f"Speed must be a positive integer, got: {self.speed!r}")
        if self.mmsi is not None and (not isinstance(self.mmsi, int) or self.mmsi < 0):
            raise ValueError(f"Invalid MMSI: {self.mmsi!r}")
        if not isinstance(self.port, int) or not 0 < self.port < 65536:
            raise ValueError(f"Invalid port: {self.port!r}. Must be between 1 and 65535")
        parse_log_level(self.loglevel)
