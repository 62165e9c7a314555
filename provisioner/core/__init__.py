# Path: provisioner/core/__init__.py
"""
Provisioner Core Module

Core utilities: configuration, logging, data model, errors,
system identity and the installed-paths cache.
"""

from .config_loader import ConfigLoader
from .logger import get_logger, configure_logging
from .models import Architecture, Platform, Source, SystemIdentity, ToolPaths
from .exceptions import (
    ProvisionerError,
    ProbeFailure,
    UnsupportedPlatformError,
    DownloadError,
    ExtractError,
    AllSourcesExhaustedError,
)
from .system_info import (
    get_system_identity,
    remote_archive_name,
    tool_paths,
    file_exists,
    resolve_existing_paths,
    get_storage_dir,
)
from .path_cache import ToolPathsCache

__all__ = [
    'ConfigLoader',
    'get_logger',
    'configure_logging',
    'Architecture',
    'Platform',
    'Source',
    'SystemIdentity',
    'ToolPaths',
    'ProvisionerError',
    'ProbeFailure',
    'UnsupportedPlatformError',
    'DownloadError',
    'ExtractError',
    'AllSourcesExhaustedError',
    'get_system_identity',
    'remote_archive_name',
    'tool_paths',
    'file_exists',
    'resolve_existing_paths',
    'get_storage_dir',
    'ToolPathsCache',
]
