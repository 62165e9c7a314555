# Path: provisioner/__init__.py
"""
FFmpeg Provisioner

Installs prebuilt FFmpeg executables (ffmpeg, ffprobe, ffplay) from
BtbN/FFmpeg-Builds, picking the fastest of the GitHub origin and its
mirrors.

Example:
    from provisioner import acquire, get_system_identity, get_storage_dir

    paths = asyncio.run(acquire(get_system_identity(), get_storage_dir()))
    print(paths.ffmpeg_path)
"""

from provisioner.core import (
    ToolPaths,
    ToolPathsCache,
    SystemIdentity,
    get_system_identity,
    get_storage_dir,
    resolve_existing_paths,
    ProvisionerError,
    UnsupportedPlatformError,
    AllSourcesExhaustedError,
)
from provisioner.engine import AcquisitionCoordinator, acquire

__version__ = '1.0.0'

# Default cache over the standard install directory
tools = ToolPathsCache()

__all__ = [
    'acquire',
    'AcquisitionCoordinator',
    'get_system_identity',
    'get_storage_dir',
    'resolve_existing_paths',
    'ToolPaths',
    'ToolPathsCache',
    'SystemIdentity',
    'ProvisionerError',
    'UnsupportedPlatformError',
    'AllSourcesExhaustedError',
    'tools',
    '__version__',
]
