"""
Configuration utility for dom-document.
"""

import copy
import json
import logging
import os
import threading
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Environment variable naming a JSON file to load for get_config()
CONFIG_ENV_VAR = "DOM_DOCUMENT_CONFIG"

DEFAULTS: Dict[str, Any] = {
    "parser": {
        # Prefix sources lacking a doctype with <!DOCTYPE html>
        "add_doctype": True,
        # Log html5lib parse errors as warnings
        "report_errors": True,
        # Re-parse with BeautifulSoup when html5lib raises
        "fallback": True
    },
    "query": {
        "sort": True
    },
    "serializer": {
        "omit_optional_tags": False,
        "quote_attr_values": "always",
        "minimize_boolean_attributes": True,
        "use_trailing_solidus": False,
        "alphabetical_attributes": False
    },
    "logging": {
        "console_level": "WARNING"
    }
}


class Config:
    """Configuration store for documents and the command line."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to a JSON config file, or None for defaults only
        """
        self.config_path = config_path
        self.config: Dict[str, Any] = {}
        self._lock = threading.Lock()

        self.load()

        logger.debug(f"Configuration initialized (config_path: {config_path})")

    def load(self) -> None:
        """Load configuration from file, layered over the defaults."""
        self._set_defaults()

        if not self.config_path:
            return

        if not os.path.exists(self.config_path):
            logger.debug(f"Configuration file not found at {self.config_path}, using defaults")
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Error loading configuration: {e}")
            return

        if not isinstance(loaded, dict):
            logger.error(f"Configuration in {self.config_path} must be a JSON object")
            return

        with self._lock:
            _merge(self.config, loaded)
        logger.debug(f"Configuration loaded from {self.config_path}")

    def save(self) -> None:
        """Save configuration to file."""
        if not self.config_path:
            raise ValueError("Configuration has no file path to save to")

        with self._lock:
            config_copy = copy.deepcopy(self.config)

        directory = os.path.dirname(self.config_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(config_copy, f, indent=4)

        logger.debug(f"Configuration saved to {self.config_path}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Configuration key (can be nested using dots, e.g. 'parser.add_doctype')
            default: Default value if key doesn't exist

        Returns:
            Any: Configuration value or default
        """
        with self._lock:
            config = self.config
            parts = key.split('.')

            for part in parts[:-1]:
                if part not in config or not isinstance(config[part], dict):
                    return default
                config = config[part]

            return config.get(parts[-1], default)

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            key: Configuration key (can be nested using dots)
            value: Configuration value
        """
        with self._lock:
            config = self.config
            parts = key.split('.')

            for part in parts[:-1]:
                if not isinstance(config.get(part), dict):
                    config[part] = {}
                config = config[part]

            config[parts[-1]] = value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get a copy of a top level section.

        Args:
            section: Section name, e.g. 'serializer'

        Returns:
            Dict[str, Any]: Copy of the section, empty if missing
        """
        with self._lock:
            value = self.config.get(section, {})
            return dict(value) if isinstance(value, dict) else {}

    def _set_defaults(self) -> None:
        """Set default configuration values."""
        with self._lock:
            self.config = copy.deepcopy(DEFAULTS)


def _merge(target: Dict[str, Any], source: Dict[str, Any]) -> None:
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _merge(target[key], value)
        else:
            target[key] = value


_default_config: Optional[Config] = None
_default_lock = threading.Lock()


def get_config() -> Config:
    """
    Get the shared configuration, loading DOM_DOCUMENT_CONFIG on first use.

    Returns:
        Config: The process wide configuration
    """
    global _default_config

    with _default_lock:
        if _default_config is None:
            _default_config = Config(os.environ.get(CONFIG_ENV_VAR))
        return _default_config
