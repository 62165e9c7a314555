# Path: provisioner/core/logger.py
"""
Provisioner Logger

Centralized logging configuration for the provisioner.

Architecture:
- Component-based logging (core, engine, cli, extraction)
- Rich console output and optional log files
- Configurable log levels
- IPO (Input-Process-Output) structured logging
"""

import logging
from typing import Optional

from rich.logging import RichHandler

from provisioner.core.config_loader import ConfigLoader
from provisioner.core.display import console
from provisioner.constants import (
    LOG_FORMAT,
    LOG_DATE_FORMAT,
    LOG_FILE_ACTIVITY,
    LOG_FILE_ERRORS,
    LOGGER_ROOT,
    LOGGER_CORE,
    LOGGER_ENGINE,
    LOGGER_CLI,
    LOGGER_EXTRACTION,
)

COMPONENT_LOGGERS = {
    'core': LOGGER_CORE,
    'engine': LOGGER_ENGINE,
    'cli': LOGGER_CLI,
    'extraction': LOGGER_EXTRACTION,
}


class ProvisionerLogger:
    """
    Centralized logger for the provisioner.

    Provides component-specific loggers with unified configuration.

    Example:
        logger = get_logger(__name__, 'engine')
        logger.info("[INPUT] Downloading ffmpeg-master-latest-linux64-gpl.tar.xz")
        logger.info("[PROCESS] Streaming to temp-1700000000000.tar.xz")
        logger.info("[OUTPUT] Download complete: 80MB in 12.4s")
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize provisioner logger.

        Args:
            config: Optional ConfigLoader instance
        """
        self.config = config if config else ConfigLoader()
        self._configured = False

    def configure(self) -> None:
        """Configure logging system for the provisioner."""
        if self._configured:
            return

        log_dir = self.config.get('log_dir')
        log_level = getattr(logging, str(self.config.get('log_level', 'INFO')).upper(), logging.INFO)
        console_output = self.config.get('log_console', True)

        logger = logging.getLogger(LOGGER_ROOT)
        logger.setLevel(log_level)
        logger.handlers.clear()

        if log_dir:
            log_dir.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_dir / LOG_FILE_ACTIVITY)
            file_handler.setLevel(log_level)
            file_handler.setFormatter(
                logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
            )
            logger.addHandler(file_handler)

            error_handler = logging.FileHandler(log_dir / LOG_FILE_ERRORS)
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(
                logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
            )
            logger.addHandler(error_handler)

        if console_output:
            console_handler = RichHandler(console=console, show_path=False)
            console_handler.setLevel(log_level)
            console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
            logger.addHandler(console_handler)

        self._configured = True

    def get_logger(self, name: str, component: str = 'core') -> logging.Logger:
        """
        Get logger for specific component.

        Args:
            name: Module name (typically __name__)
            component: Component type ('core', 'engine', 'cli', 'extraction')

        Returns:
            Configured logger instance
        """
        if not self._configured:
            self.configure()

        prefix = COMPONENT_LOGGERS.get(component, LOGGER_ROOT)
        return logging.getLogger(f"{prefix}.{name}")


_provisioner_logger = ProvisionerLogger()


def get_logger(name: str, component: str = 'core') -> logging.Logger:
    """
    Get logger for a provisioner component.

    Args:
        name: Module name (typically __name__)
        component: Component type ('core', 'engine', 'cli', 'extraction')

    Returns:
        Configured logger instance

    Example:
        from provisioner.core.logger import get_logger

        logger = get_logger(__name__, 'engine')
        logger.info("[PROCESS] Probing 12 sources")
    """
    return _provisioner_logger.get_logger(name, component)


def configure_logging(config: Optional[ConfigLoader] = None) -> None:
    """
    Configure provisioner logging system.

    Args:
        config: Optional ConfigLoader instance; reconfigures when given
    """
    global _provisioner_logger

    if config:
        _provisioner_logger = ProvisionerLogger(config)

    _provisioner_logger.configure()


__all__ = ['get_logger', 'configure_logging', 'ProvisionerLogger']
