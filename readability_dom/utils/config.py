"""
Configuration utility for readability_dom.
"""

import copy
import json
import logging
import os
import threading
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "parser": {
        # "html5lib" or "html.parser" (BeautifulSoup with the stdlib backend)
        "backend": "html5lib",
        "strict": False,
    },
    "builder": {
        "truncate_after_html_end": True,
        "retry_without_scripts": True,
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


class Config:
    """Configuration manager backed by an optional JSON file."""

    def __init__(self, config_path: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to a JSON config file; None keeps everything in memory
            overrides: Values merged over the defaults and the file contents
        """
        self.config_path = config_path
        self.config: Dict[str, Any] = {}
        self._lock = threading.Lock()

        self.load()

        if overrides:
            with self._lock:
                _merge(self.config, overrides)

        logger.debug(f"Configuration initialized (config_path: {config_path})")

    def load(self) -> None:
        """Load configuration from file, falling back to defaults."""
        with self._lock:
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
            logger.error(f"Configuration in {self.config_path} is not a JSON object, using defaults")
            return

        with self._lock:
            _merge(self.config, loaded)
        logger.debug(f"Configuration loaded from {self.config_path}")

    def save(self) -> None:
        """Save configuration to file."""
        if not self.config_path:
            raise ValueError("No config_path set, nothing to save to")

        with self._lock:
            config_copy = copy.deepcopy(self.config)

        config_dir = os.path.dirname(self.config_path)
        if config_dir:
            os.makedirs(config_dir, exist_ok=True)

        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(config_copy, f, indent=4)

        logger.debug(f"Configuration saved to {self.config_path}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Configuration key (can be nested using dots, e.g. 'parser.backend')
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
            key: Configuration key (can be nested using dots, e.g. 'parser.strict')
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

    def _set_defaults(self) -> None:
        self.config = copy.deepcopy(DEFAULT_CONFIG)
