"""
Configuration loader for hostdash
"""

import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml

from ..utils.errors import ConfigurationError
from ..widgets.base import WidgetSpec

logger = logging.getLogger(__name__)

# Maximum config file size (1MB should be plenty for YAML configs)
MAX_CONFIG_SIZE = 1024 * 1024

DEFAULT_REFRESH = 60
DEFAULT_TIMEOUT = 10


class ConfigLoader:
    """Loads and validates YAML dashboard configurations"""

    def load(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            Validated configuration dictionary with defaults applied

        Raises:
            ConfigurationError: If the file is missing, unreadable, too large or invalid
        """
        resolved_path = Path(config_path).expanduser().resolve()

        self._validate_config_path(resolved_path)

        if not resolved_path.exists():
            raise ConfigurationError(f"Configuration file not found: {resolved_path}")

        file_size = resolved_path.stat().st_size
        if file_size > MAX_CONFIG_SIZE:
            raise ConfigurationError(
                f"Configuration file too large: {file_size} bytes "
                f"(maximum {MAX_CONFIG_SIZE} bytes)"
            )

        try:
            with open(resolved_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file: {e}") from e

        self.validate(config)
        config = self._apply_defaults(config)

        logger.info(f"Loaded configuration from {resolved_path}")
        return config

    def _validate_config_path(self, config_path: Path) -> None:
        """
        Validate that the configuration file path is safe to load.

        Raises:
            ConfigurationError: If path is a directory
        """
        if config_path.is_dir():
            raise ConfigurationError(f"Path is a directory, not a file: {config_path}")

        if config_path.suffix.lower() not in [".yaml", ".yml"]:
            logger.warning(
                f"Configuration file has unexpected extension: {config_path.suffix}. "
                f"Expected .yaml or .yml"
            )

        logger.debug(f"Configuration path validated: {config_path}")

    def validate(self, config: Any) -> None:
        """Validate configuration structure"""
        if not isinstance(config, dict):
            raise ConfigurationError("Configuration must be a dictionary")

        for section in ("general", "host", "style"):
            if section in config and not isinstance(config[section] or {}, dict):
                raise ConfigurationError(f"'{section}' must be a dictionary")

        address = (config.get("host") or {}).get("address") or ""
        if not isinstance(address, str):
            raise ConfigurationError(f"Invalid host address: {address!r} (must be a string)")
        if address and not address.partition(":")[0]:
            raise ConfigurationError(f"Invalid host address: {address!r} (missing host name)")

        refresh = (config.get("general") or {}).get("refresh", DEFAULT_REFRESH)
        if isinstance(refresh, bool) or not isinstance(refresh, (int, float)) or refresh <= 0:
            raise ConfigurationError(f"Invalid refresh value: {refresh!r} (must be > 0)")

        timeout = (config.get("host") or {}).get("timeout", DEFAULT_TIMEOUT)
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigurationError(f"Invalid timeout value: {timeout!r} (must be > 0)")

        if "widgets" not in config:
            raise ConfigurationError("Configuration must have 'widgets' section")

        widgets = config["widgets"]
        if not isinstance(widgets, list) or not widgets:
            raise ConfigurationError("'widgets' must be a non-empty list")

        for index, widget in enumerate(widgets, start=1):
            if not isinstance(widget, dict):
                raise ConfigurationError(f"Widget {index} must be a dictionary")

            name = widget.get("name")
            if not isinstance(name, str) or not name:
                raise ConfigurationError(f"Widget {index} must have a 'name'")

            options = widget.get("options")
            if options is not None and not isinstance(options, dict):
                raise ConfigurationError(f"Options of widget {index} ({name}) must be a dictionary")

    def _apply_defaults(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply default values to configuration"""
        config["general"] = config.get("general") or {}
        config["general"].setdefault("refresh", DEFAULT_REFRESH)

        config["host"] = config.get("host") or {}
        config["host"].setdefault("address", "")
        config["host"].setdefault("username", "")
        config["host"].setdefault("timeout", DEFAULT_TIMEOUT)

        config["style"] = config.get("style") or {}

        return config


def _option_value(value: Any) -> str:
    """YAML turns true into a bool and 10 into an int; options are strings."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def widget_specs(config: Dict[str, Any]) -> List[WidgetSpec]:
    """
    Build the widget specs of a loaded configuration, in order.

    Args:
        config: Configuration returned by ConfigLoader.load()

    Returns:
        One WidgetSpec per configured widget
    """
    specs = []
    for widget in config["widgets"]:
        options = {
            str(key): _option_value(value) for key, value in (widget.get("options") or {}).items()
        }
        specs.append(WidgetSpec(kind=widget["name"], options=options))
    return specs
