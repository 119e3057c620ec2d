"""Configuration module for viewboxpath.

This module handles loading and validating configuration from YAML files.
"""

import copy
import logging
import math
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .errors import ConfigError

# Set up logging
logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config:
    """Configuration handler for viewboxpath."""

    # Default configuration values
    DEFAULT_CONFIG = {
        "parser": {
            "compact_arc_flags": True,  # Read arc flags as single digits
        },
        "interpreter": {
            "max_arc_span_degrees": None,  # None draws each arc as one curve
        },
        "render": {
            "precision": 3,  # Decimal places in written path data
            "curve_resolution": 20,  # Segments per curve when flattening
            "width": None,  # Target size, None keeps viewbox units
            "height": None,
        },
        "logging": {
            "level": "INFO",
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        },
    }

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """Initialize configuration.

        Args:
            config_file: Path to YAML configuration file (optional)
        """
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)

        if config_file:
            self.load_config(config_file)

    def load_config(self, config_file: Union[str, Path]) -> bool:
        """Load configuration from YAML file.

        Args:
            config_file: Path to YAML configuration file

        Returns:
            True if config was loaded successfully, False otherwise
        """
        config_path = Path(config_file)

        if not config_path.exists():
            logger.error(f"Configuration file not found: {config_path}")
            return False

        try:
            with open(config_path, "r") as f:
                user_config = yaml.safe_load(f)

            if not user_config:
                logger.warning(f"Empty configuration file: {config_path}")
                return False

            if not isinstance(user_config, dict):
                logger.error(f"Configuration must be a mapping: {config_path}")
                return False

            self._merge_config(self.config, user_config)
            logger.info(f"Loaded configuration from {config_path}")
            return True

        except yaml.YAMLError as e:
            logger.error(f"Error parsing YAML configuration: {e}")
            return False
        except OSError as e:
            logger.error(f"Error loading configuration: {e}")
            return False

    def _merge_config(self, target: Dict, source: Dict) -> None:
        """Recursively merge source dict into target dict.

        Args:
            target: Target dictionary to merge into
            source: Source dictionary to merge from
        """
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._merge_config(target[key], value)
            else:
                target[key] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation path.

        Args:
            path: Configuration path (e.g., "render.precision")
            default: Default value if path not found

        Returns:
            Configuration value or default
        """
        value = self.config

        try:
            for part in path.split("."):
                value = value[part]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, path: str, value: Any) -> None:
        """Set configuration value using dot notation path.

        Args:
            path: Configuration path (e.g., "render.precision")
            value: Value to set
        """
        parts = path.split(".")
        config = self.config

        # Navigate to the parent of the target
        for part in parts[:-1]:
            if part not in config or not isinstance(config[part], dict):
                config[part] = {}
            config = config[part]

        config[parts[-1]] = value

    def save(self, config_file: Union[str, Path]) -> bool:
        """Save configuration to YAML file.

        Args:
            config_file: Path to YAML configuration file

        Returns:
            True if config was saved successfully, False otherwise
        """
        config_path = Path(config_file)

        try:
            os.makedirs(config_path.parent, exist_ok=True)

            with open(config_path, "w") as f:
                yaml.dump(self.config, f, default_flow_style=False, sort_keys=False)

            logger.info(f"Saved configuration to {config_path}")
            return True

        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Error saving configuration: {e}")
            return False

    def validate(self) -> bool:
        """Validate configuration.

        Returns:
            True if configuration is valid, False otherwise
        """
        for section in self.DEFAULT_CONFIG:
            if not isinstance(self.config.get(section), dict):
                logger.error(f"Missing required configuration section: {section}")
                return False

        if not isinstance(self.get("parser.compact_arc_flags"), bool):
            logger.error("parser.compact_arc_flags must be true or false")
            return False

        span = self.get("interpreter.max_arc_span_degrees")
        if span is not None and (not isinstance(span, (int, float)) or span <= 0):
            logger.error(f"interpreter.max_arc_span_degrees must be positive, got {span}")
            return False

        precision = self.get("render.precision")
        if not isinstance(precision, int) or isinstance(precision, bool) or precision < 0:
            logger.error(f"render.precision must be a non-negative integer, got {precision}")
            return False

        resolution = self.get("render.curve_resolution")
        if not isinstance(resolution, int) or isinstance(resolution, bool) or resolution < 1:
            logger.error(f"render.curve_resolution must be a positive integer, got {resolution}")
            return False

        for key in ("render.width", "render.height"):
            size = self.get(key)
            if size is not None and (not isinstance(size, (int, float)) or size <= 0):
                logger.error(f"{key} must be positive, got {size}")
                return False

        if str(self.get("logging.level", "")).upper() not in LOG_LEVELS:
            logger.error(f"Unknown logging level: {self.get('logging.level')}")
            return False

        return True

    def check(self) -> None:
        """Raise ConfigError unless the configuration is valid."""
        if not self.validate():
            raise ConfigError("Invalid configuration, see log for details")

    @property
    def max_arc_span(self) -> Optional[float]:
        """Configured arc span limit in radians, or None."""
        span = self.get("interpreter.max_arc_span_degrees")
        return math.radians(span) if span else None


def load_config(config_file: Optional[Union[str, Path]] = None) -> Config:
    """Load configuration from file.

    Args:
        config_file: Path to YAML configuration file (optional)

    Returns:
        Config object
    """
    return Config(config_file)
