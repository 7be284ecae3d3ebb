"""Configuration management for the Bob CLI application."""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "~/.bob/config.yaml"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ConfigModel:
    """Global configuration model for Bob CLI."""

    # Where the task list lives
    data_file: str = "data/bob.txt"

    # Deadlines due within this many days are listed as urgent
    urgent_days: int = 3
    show_urgent: bool = True

    log_level: str = "WARNING"

    def __post_init__(self):
        """Post-initialization setup."""
        self.data_file = os.path.expanduser(self.data_file)
        if self.urgent_days < 0:
            raise ValueError(f"urgent_days must not be negative, got {self.urgent_days}")
        if not isinstance(self.log_level, str) or self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}")
        self.log_level = self.log_level.upper()

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        data = {
            "data_file": self.data_file,
            "urgent_days": self.urgent_days,
            "show_urgent": self.show_urgent,
            "log_level": self.log_level,
        }
        return yaml.dump(data, default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConfigModel":
        """Deserialize config from YAML, ignoring unknown keys."""
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("config file must contain a mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(unknown)}")

        return cls(**{k: v for k, v in data.items() if k in known})

    def get_data_path(self) -> Path:
        """Get the task file path."""
        return Path(self.data_file)


def get_config_path() -> Path:
    """Get the default config file path."""
    return Path(os.path.expanduser(DEFAULT_CONFIG_PATH))


def load_config(config_path: Optional[Path] = None) -> ConfigModel:
    """Load configuration from file, falling back to defaults."""
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        logger.debug(f"No config at {config_path}, using defaults")
        return ConfigModel()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = ConfigModel.from_yaml(f.read())
        logger.debug(f"Loaded configuration from {config_path}")
        return config
    except (OSError, yaml.YAMLError, TypeError, ValueError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}. Using default configuration.")
        return ConfigModel()


def save_config(config: ConfigModel, config_path: Optional[Path] = None) -> None:
    """Save configuration to file."""
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        f.write(config.to_yaml())
    logger.debug(f"Configuration saved to {config_path}")
