"""Configuration management with JSON file persistence."""

import json
import os
from dataclasses import asdict, fields
from typing import Optional, Dict, Any, Callable, List

from .config.defaults import DEFAULT_PATHS, VALID_IMAGE_SERVICES, VALID_LOG_LEVELS
from .exceptions import ConfigurationError
from .logging_config import get_logger
from .models.config import SecurityConfig
from .models.security import AlarmStatus, ArmingStatus

logger = get_logger("config_manager")


class ConfigManager:
    """Manages security configuration with file persistence and change callbacks."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or DEFAULT_PATHS["config_file"]
        self._config: Optional[SecurityConfig] = None
        self._config_change_callbacks: List[Callable[[SecurityConfig], None]] = []

        self.load_config()

    def load_config(self) -> SecurityConfig:
        """Load configuration from file or create default.

        Raises:
            ConfigurationError: the file exists but is not a valid configuration
        """
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r') as f:
                    config_dict = json.load(f)
                loaded = self._from_dict(config_dict)
            except (json.JSONDecodeError, TypeError, ValueError) as e:
                raise ConfigurationError(f"Invalid config file {self.config_path}: {e}") from e

            old_config = self._config
            self._config = loaded
            if not self.validate_config():
                self._config = old_config
                raise ConfigurationError(f"Invalid config values in {self.config_path}")
            logger.info(f"Loaded configuration from {self.config_path}")
        else:
            self._config = SecurityConfig()
            self.save_config()
            logger.info(f"Created default configuration at {self.config_path}")

        return self._config

    def save_config(self) -> None:
        """Save current configuration to file."""
        if self._config is None:
            return

        directory = os.path.dirname(self.config_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(self.config_path, 'w') as f:
            json.dump(self.export_config(), f, indent=2)

    def get_config(self) -> SecurityConfig:
        """Get current configuration."""
        if self._config is None:
            return self.load_config()
        return self._config

    def update_config(self, **kwargs) -> None:
        """Update configuration with new values; unknown keys are ignored."""
        if self._config is None:
            self.load_config()

        for key, value in kwargs.items():
            if hasattr(self._config, key):
                setattr(self._config, key, value)
            else:
                logger.warning(f"Ignoring unknown config key: {key}")

        self.save_config()
        self._notify_callbacks()

    def validate_config(self) -> bool:
        """Validate current configuration; values of the wrong type are invalid."""
        if self._config is None:
            return False

        try:
            return self._check_values()
        except (TypeError, AttributeError):
            return False

    def _check_values(self) -> bool:
        if isinstance(self._config.cat_confidence_threshold, bool):
            return False

        if not 0.0 <= self._config.cat_confidence_threshold <= 100.0:
            return False

        if (self._config.initial_alarm_status not in AlarmStatus.__members__ or
                self._config.initial_arming_status not in ArmingStatus.__members__):
            return False

        if self._config.image_service not in VALID_IMAGE_SERVICES:
            return False

        if self._config.scale_factor <= 1.0 or self._config.min_neighbors < 0:
            return False

        size = self._config.min_detection_size
        if len(size) != 2 or size[0] <= 0 or size[1] <= 0:
            return False

        if self._config.log_level.upper() not in VALID_LOG_LEVELS:
            return False

        return True

    def register_change_callback(self, callback: Callable[[SecurityConfig], None]) -> None:
        """Register a callback to be called when config changes."""
        if callback not in self._config_change_callbacks:
            self._config_change_callbacks.append(callback)

    def unregister_change_callback(self, callback: Callable[[SecurityConfig], None]) -> None:
        """Unregister a config change callback."""
        if callback in self._config_change_callbacks:
            self._config_change_callbacks.remove(callback)

    def reset_to_defaults(self) -> None:
        """Reset configuration to default values."""
        self._config = SecurityConfig()
        self.save_config()
        self._notify_callbacks()

    def export_config(self) -> Dict[str, Any]:
        """Export current configuration as a JSON-ready dictionary."""
        if not self._config:
            return {}

        config_dict = asdict(self._config)
        config_dict['min_detection_size'] = list(self._config.min_detection_size)
        return config_dict

    def import_config(self, config_dict: Dict[str, Any]) -> bool:
        """
        Import configuration from a dictionary.

        Args:
            config_dict: Dictionary containing configuration values

        Returns:
            True if import was successful, False otherwise
        """
        try:
            temp_config = self._from_dict(config_dict)
        except (TypeError, ValueError) as e:
            logger.warning(f"Error importing config: {e}")
            return False

        old_config = self._config
        self._config = temp_config

        if not self.validate_config():
            self._config = old_config
            return False

        self.save_config()
        self._notify_callbacks()
        return True

    def _notify_callbacks(self) -> None:
        for callback in list(self._config_change_callbacks):
            callback(self._config)

    @staticmethod
    def _from_dict(config_dict: Dict[str, Any]) -> SecurityConfig:
        known = {f.name for f in fields(SecurityConfig)}
        unknown = set(config_dict) - known
        if unknown:
            raise TypeError(f"Unknown config keys: {sorted(unknown)}")

        values = dict(config_dict)
        if 'min_detection_size' in values:
            values['min_detection_size'] = tuple(values['min_detection_size'])
        return SecurityConfig(**values)
