"""Configuration loader for jsonclient.

This module loads the client configuration file and provides a singleton
config object for easy access throughout the package.
"""

import os
from pathlib import Path
from typing import Any, cast

import yaml

from ..exceptions import ConfigurationError
from ..logging_config import get_module_logger

logger = get_module_logger("config")

CONFIG_DIR_ENV = "JSONCLIENT_CONFIG_DIR"
CONFIG_FILENAME = "client_config.yaml"


class Config:
    """Configuration manager that loads and provides access to client settings."""

    def __init__(self, config_dict: dict[str, Any] | None = None, config_dir: Path | None = None):
        """
        Initialize the configuration manager.

        Args:
            config_dict: Optional dictionary of config values for testing.
                        If provided, config files won't be loaded from disk.
            config_dir: Directory holding client_config.yaml. Defaults to
                        $JSONCLIENT_CONFIG_DIR, then the bundled defaults.
        """
        self._configs: dict[str, Any]
        self._config_dir: Path | None

        if config_dict is not None:
            # Testing mode: use provided config
            self._configs = dict(config_dict)
            self._config_dir = None
        else:
            self._configs = {}
            self._config_dir = config_dir or self._find_config_dir()
            self._load_all_configs()

    def _find_config_dir(self) -> Path:
        """Find the config directory: environment override first, then package defaults."""
        env_dir = os.environ.get(CONFIG_DIR_ENV)
        if env_dir:
            config_dir = Path(env_dir)
            if not config_dir.is_dir():
                raise ConfigurationError(
                    f"directory {config_dir} does not exist", config_key=CONFIG_DIR_ENV
                )
            return config_dir

        return Path(__file__).resolve().parent

    def _load_all_configs(self):
        """Load the YAML configuration file from the config directory."""
        if self._config_dir is None:
            return

        config_path = self._config_dir / CONFIG_FILENAME
        if not config_path.exists():
            logger.warning(f"Config file {CONFIG_FILENAME} not found at {config_path}")
            return

        with open(config_path, encoding="utf-8") as f:
            loaded_config = yaml.safe_load(f)

        # Empty file is allowed, anything else must be a mapping
        if loaded_config is None:
            return
        if not isinstance(loaded_config, dict):
            raise ConfigurationError(
                f"{config_path} must contain a mapping, got {type(loaded_config).__name__}"
            )

        for key, section in loaded_config.items():
            if not isinstance(section, dict):
                logger.warning(
                    f"Config section '{key}' must be a dictionary, "
                    f"got {type(section).__name__}. Using empty section."
                )
                section = {}
            self._configs[key] = section

    def get(self, path: str, default: Any = None) -> Any:
        """Get a configuration value using dot notation.

        Args:
            path: Dot-separated path to the config value (e.g., "client.base_url")
            default: Default value to return if path is not found

        Returns:
            The configuration value or default if not found

        Example:
            >>> config.get("client.token_env")
            'JSONCLIENT_TOKEN'
        """
        parts = path.split(".")
        value = self._configs

        for part in parts:
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default

        return value

    def get_required(self, path: str) -> Any:
        """Get a configuration value that must be present and non-null.

        Raises:
            ConfigurationError: If the value is missing or null
        """
        value = self.get(path)
        if value is None:
            raise ConfigurationError("required value is missing", config_key=path)
        return value

    @property
    def client(self) -> dict[str, Any]:
        """Get client configuration."""
        return cast(dict[str, Any], self._configs.get("client", {}))

    @property
    def logging(self) -> dict[str, Any]:
        """Get logging configuration."""
        return cast(dict[str, Any], self._configs.get("logging", {}))

    def reload(self):
        """Reload the configuration file (injected configs are left as they are)."""
        if self._config_dir is None:
            return
        self._configs.clear()
        self._load_all_configs()


# Create a singleton instance
config = Config()
