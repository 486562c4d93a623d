"""
Configuration management using Pydantic models loaded from YAML.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Optional

import pendulum
import yaml
from pendulum import Date
from pydantic import BaseModel, field_validator

from .domain.period import as_pendulum_date


class HubConfig(BaseModel):
    """Application configuration."""
    data_file: Path = Path("roster.json")
    today: Optional[date] = None  # Fixed "today" for reproducible runs
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Ensure the level is one the logging module knows."""
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    def resolve_today(self) -> Date:
        """Return the configured date, or the current local date."""
        if self.today is not None:
            return as_pendulum_date(self.today)
        return pendulum.today().date()

    def resolve_data_file(self, config_path: Optional[Path] = None) -> Path:
        """
        Resolve ``data_file`` relative to the config file it came from.
        """
        if self.data_file.is_absolute() or config_path is None:
            return self.data_file
        return config_path.parent / self.data_file

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "HubConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            HubConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a hub.yaml file. See hub.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)

    @classmethod
    def load_or_default(cls, config_path: Optional[Path]) -> "HubConfig":
        """
        Load an explicitly given config file, or the default one when present.

        Without an explicit path and without a default file, defaults are used.
        """
        if config_path is not None:
            return cls.load_from_yaml(config_path)

        default_path = get_default_config_path()
        if default_path.exists():
            return cls.load_from_yaml(default_path)
        return cls()


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for hub.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "hub.yaml"

    if not config_path.exists():
        # Try in the project root (parent of housekeepinghub/)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "hub.yaml"

    return config_path
