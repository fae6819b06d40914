"""
Config Module - Black Box Interface

Purpose: Server configuration management
Interface: get_config(), ConfigModule.get(), get_prompt()
Hidden: Config sources, validation logic, environment parsing
"""

import os
from typing import Any, Dict


# Configuration Contract: Required and Optional Keys
# This defines the black box interface - what the config module guarantees to provide

REQUIRED_CONFIG_KEYS = {
    "host": "API server bind address",
    "port": "API server port",
    "log_level": "Logging level (DEBUG, INFO, WARNING, ERROR)",
    "session_lifetime_hours": "Session lifetime in hours (fixed window, never extended)",
    "session_sweep_interval": "Seconds between sweeps of expired sessions (0 disables)",
    "search_max_results": "Maximum expert links returned per search (capped at 10)",
    "http_timeout": "Timeout in seconds for outbound LLM and search calls",
}

OPTIONAL_CONFIG_KEYS = {
    "debug": {
        "description": "Enable debug mode",
        "default": False,
    },
    "environment": {
        "description": "Deployment environment name",
        "default": "development",
    },
}


class ConfigModule:
    """Configuration management module."""

    def __init__(self):
        """Initialize with environment variables."""
        self._config = self._load_from_env()
        self._validate_required_keys()

    def _validate_required_keys(self) -> None:
        """
        Validate that all required configuration keys are present.

        Raises:
            ValueError: If required keys are missing
        """
        missing_keys = []
        for key in REQUIRED_CONFIG_KEYS:
            if key not in self._config or self._config[key] is None:
                missing_keys.append(key)

        if missing_keys:
            raise ValueError(
                f"Missing required configuration keys: {', '.join(missing_keys)}. "
                f"Check environment variables and deployment configuration."
            )

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment."""
        return {
            # API settings
            "host": os.getenv("API_HOST", "0.0.0.0"),
            "port": int(os.getenv("API_PORT", "8080")),
            "log_level": os.getenv("LOG_LEVEL", "INFO"),
            "debug": os.getenv("DEBUG", "false").lower() == "true",
            "environment": os.getenv("APP_ENV", "development"),
            # Session settings
            "session_lifetime_hours": float(os.getenv("SESSION_LIFETIME_HOURS", "4")),
            "session_sweep_interval": int(os.getenv("SESSION_SWEEP_INTERVAL", "600")),
            # Upstream settings
            "search_max_results": int(os.getenv("SEARCH_MAX_RESULTS", "8")),
            "http_timeout": float(os.getenv("HTTP_TIMEOUT", "30")),
        }

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        return self._config.get(key, default)

    @staticmethod
    def get_config_schema() -> Dict[str, Any]:
        """
        Get the configuration schema (contract) for this module.

        Returns:
            Dictionary with 'required' and 'optional' key specifications

        Example:
            >>> schema = ConfigModule.get_config_schema()
            >>> print(schema['required']['port'])
            'API server port'
        """
        return {
            "required": REQUIRED_CONFIG_KEYS.copy(),
            "optional": OPTIONAL_CONFIG_KEYS.copy(),
        }


# Singleton instance
_instance = None


def get_config() -> ConfigModule:
    """Get the configuration module singleton."""
    global _instance
    if _instance is None:
        _instance = ConfigModule()
    return _instance


# Public prompt loader interface
from .prompts import get_prompt

__all__ = ["get_config", "ConfigModule", "get_prompt"]
