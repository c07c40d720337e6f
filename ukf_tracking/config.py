"""
Configuration manager for the UKF tracker.
"""

import copy
import json
import logging
import os
from typing import Dict, Any, Optional

from .math.constants import (
    STD_A, STD_YAWDD, STD_LASPX, STD_LASPY, STD_RADR, STD_RADPHI, STD_RADRD
)

logger = logging.getLogger(__name__)


class Config:
    """Configuration manager for the tracking filter."""

    DEFAULT_CONFIG = {
        # Sensor switches
        "use_lidar": True,
        "use_radar": True,

        # UKF process noise parameters (tunable)
        "process_noise": {
            "std_a": STD_A,
            "std_yawdd": STD_YAWDD
        },

        # UKF measurement noise parameters (manufacturer values)
        "measurement_noise": {
            "std_laspx": STD_LASPX,
            "std_laspy": STD_LASPY,
            "std_radr": STD_RADR,
            "std_radphi": STD_RADPHI,
            "std_radrd": STD_RADRD
        },

        # Logging
        "log_level": "INFO",
        "log_file": None
    }

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Optional path to a JSON configuration file
        """
        self.config_file = config_file
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)

        # Load configuration from file if it exists
        if config_file is not None:
            if os.path.exists(config_file):
                self.load_config()
            else:
                logger.info("Config file %s not found, using defaults", config_file)

    def load_config(self) -> bool:
        """
        Load configuration from file.

        Returns:
            True if loaded successfully
        """
        try:
            with open(self.config_file, 'r') as f:
                file_config = json.load(f)
        except (OSError, ValueError) as e:
            logger.error("Failed to load config %s: %s", self.config_file, e)
            return False

        # Merge with defaults (file config overrides defaults)
        self._merge_config(self.config, file_config)

        logger.info("Configuration loaded from %s", self.config_file)
        return True

    def save_config(self, config_file: Optional[str] = None) -> bool:
        """
        Save current configuration to file.

        Args:
            config_file: Destination; defaults to the file this config was loaded from

        Returns:
            True if saved successfully
        """
        path = config_file or self.config_file
        if path is None:
            raise ValueError("No configuration file path given")

        try:
            with open(path, 'w') as f:
                json.dump(self.config, f, indent=2)
        except OSError as e:
            logger.error("Failed to save config %s: %s", path, e)
            return False

        logger.info("Configuration saved to %s", path)
        return True

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]):
        """Recursively merge configuration dictionaries."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default=None):
        """Get configuration value with optional default."""
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """Set configuration value."""
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    # Property accessors for common configuration values
    @property
    def use_lidar(self) -> bool:
        return self.config["use_lidar"]

    @property
    def use_radar(self) -> bool:
        return self.config["use_radar"]

    @property
    def process_noise(self) -> Dict[str, float]:
        return self.config["process_noise"]

    @property
    def measurement_noise(self) -> Dict[str, float]:
        return self.config["measurement_noise"]

    @property
    def log_level(self) -> str:
        return self.config["log_level"]

    @property
    def log_file(self) -> Optional[str]:
        return self.config["log_file"]

    def print_config(self):
        """Print current configuration."""
        print("=== UKF Tracker Configuration ===")
        print(json.dumps(self.config, indent=2))


def setup_logging(config: Config):
    """
    Configure the root logger from the configuration.

    Args:
        config: Configuration providing log_level and log_file
    """
    level = getattr(logging, str(config.log_level).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        filename=config.log_file,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
