# Path: provisioner/core/config_loader.py
"""
Provisioner Configuration Loader

Centralized configuration management for the provisioner.
Loads environment variables (and an optional .env file) with type
safety and defaults.

Architecture:
- Singleton pattern for global configuration
- Type-safe access with validation
- Sensible defaults for every key
- reset() for tests that change the environment
"""

import os
from typing import Any, Optional
from pathlib import Path
from dotenv import find_dotenv, load_dotenv

from provisioner.constants import (
    ENV_INSTALL_DIR,
    ENV_PROXY_INDEX,
    ENV_PROBE_TIMEOUT,
    ENV_CONNECT_TIMEOUT,
    ENV_READ_TIMEOUT,
    ENV_CHUNK_SIZE,
    ENV_USER_AGENT,
    ENV_MAX_ARCHIVE_SIZE,
    ENV_SHOW_PROGRESS,
    ENV_LOG_LEVEL,
    ENV_LOG_CONSOLE,
    ENV_LOG_DIR,
    DEFAULT_PROBE_TIMEOUT,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_USER_AGENT,
    DEFAULT_MAX_ARCHIVE_SIZE,
)


class ConfigLoader:
    """
    Singleton configuration loader.

    Loads configuration from environment variables with validation,
    type conversion, and sensible defaults.

    Example:
        config = ConfigLoader()
        chunk_size = config.get('chunk_size')
        probe_timeout = config['probe_timeout']
    """

    _instance: Optional['ConfigLoader'] = None
    _initialized: bool = False

    def __new__(cls) -> 'ConfigLoader':
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """
        Initialize configuration loader.

        Only runs once due to singleton pattern.
        """
        if ConfigLoader._initialized:
            return

        # .env is searched upwards from the working directory, not the package
        env_path = find_dotenv(usecwd=True)
        if env_path:
            load_dotenv(dotenv_path=env_path, interpolate=True)

        self._config = self._load_configuration()
        ConfigLoader._initialized = True

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton so the next ConfigLoader() re-reads the environment."""
        cls._instance = None
        cls._initialized = False

    def _load_configuration(self) -> dict[str, Any]:
        """
        Load and validate all configuration from environment.

        Returns:
            Dictionary of validated configuration values
        """
        config = {
            # ================================================================
            # INSTALLATION
            # ================================================================
            'install_dir': self._get_path(ENV_INSTALL_DIR),
            'proxy_index': self._get_optional_int(ENV_PROXY_INDEX),

            # ================================================================
            # NETWORK
            # ================================================================
            'probe_timeout': self._get_float(ENV_PROBE_TIMEOUT, DEFAULT_PROBE_TIMEOUT),
            'connect_timeout': self._get_int(ENV_CONNECT_TIMEOUT, DEFAULT_CONNECT_TIMEOUT),
            'read_timeout': self._get_int(ENV_READ_TIMEOUT, DEFAULT_READ_TIMEOUT),
            'chunk_size': self._get_int(ENV_CHUNK_SIZE, DEFAULT_CHUNK_SIZE),
            'user_agent': self._get_env(ENV_USER_AGENT, DEFAULT_USER_AGENT),

            # ================================================================
            # EXTRACTION
            # ================================================================
            'max_archive_size': self._get_int(ENV_MAX_ARCHIVE_SIZE, DEFAULT_MAX_ARCHIVE_SIZE),

            # ================================================================
            # DISPLAY & LOGGING
            # ================================================================
            'show_progress': self._get_bool(ENV_SHOW_PROGRESS, True),
            'log_level': self._get_env(ENV_LOG_LEVEL, 'INFO'),
            'log_console': self._get_bool(ENV_LOG_CONSOLE, True),
            'log_dir': self._get_path(ENV_LOG_DIR),
        }

        return config

    def _get_env(self, key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
        """
        Get string environment variable.

        Args:
            key: Environment variable name
            default: Default value if not found
            required: If True, raises ValueError when missing

        Returns:
            Environment variable value or default

        Raises:
            ValueError: If required and not found
        """
        value = os.getenv(key)

        if value is None:
            if required:
                raise ValueError(f"Required environment variable not set: {key}")
            return default

        return value.strip()

    def _get_bool(self, key: str, default: bool) -> bool:
        """Get boolean environment variable."""
        value = os.getenv(key)
        if value is None:
            return default

        return value.strip().lower() in ('true', '1', 'yes', 'on')

    def _get_int(self, key: str, default: int) -> int:
        """
        Get integer environment variable.

        Args:
            key: Environment variable name
            default: Default value if not found or invalid

        Returns:
            Integer value
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value.strip())
        except ValueError:
            return default

    def _get_optional_int(self, key: str) -> Optional[int]:
        """
        Get integer environment variable that may be absent.

        Empty or unparseable values are treated as absent.
        """
        value = os.getenv(key)
        if value is None or not value.strip():
            return None

        try:
            return int(value.strip())
        except ValueError:
            return None

    def _get_float(self, key: str, default: float) -> float:
        """Get float environment variable."""
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return float(value.strip())
        except ValueError:
            return default

    def _get_path(self, key: str, required: bool = False) -> Optional[Path]:
        """
        Get path environment variable.

        Args:
            key: Environment variable name
            required: If True, raises ValueError when missing

        Returns:
            Path object or None

        Raises:
            ValueError: If required and not found
        """
        value = os.getenv(key)

        if value is None or not value.strip():
            if required:
                raise ValueError(f"Required environment variable not set: {key}")
            return None

        return Path(value.strip()).expanduser()

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value.

        Args:
            key: Configuration key
            default: Default value if not found or None

        Returns:
            Configuration value or default
        """
        value = self._config.get(key)
        return default if value is None else value

    def __getitem__(self, key: str) -> Any:
        """Dictionary-style access to configuration."""
        return self._config[key]

    def __contains__(self, key: str) -> bool:
        """Check if configuration key exists."""
        return key in self._config


__all__ = ['ConfigLoader']
