# Path: provisioner/core/system_info.py
"""
System Identity and Tool Locations

Maps the host platform to the release naming scheme and
computes where the FFmpeg executables live on disk.

Nothing here touches the network.
"""

import platform
import sys
from pathlib import Path
from typing import Optional

from provisioner.core.config_loader import ConfigLoader
from provisioner.core.exceptions import UnsupportedPlatformError
from provisioner.core.models import Architecture, Platform, SystemIdentity, ToolPaths
from provisioner.constants import (
    ARCHIVE_PREFIX,
    ARCHIVE_SUFFIX,
    DEFAULT_STORAGE_DIRNAME,
    EXECUTABLE_SUFFIX_WINDOWS,
    TAR_XZ_EXTENSION,
    TOOL_FFMPEG,
    TOOL_FFPLAY,
    TOOL_FFPROBE,
    ZIP_EXTENSION,
)

SYSTEM_MAP = {
    'windows': Platform.WINDOWS,
    'linux': Platform.LINUX,
    'darwin': Platform.MACOS,
}

MACHINE_MAP = {
    'x86_64': Architecture.X64,
    'amd64': Architecture.X64,
    'x64': Architecture.X64,
    'aarch64': Architecture.ARM64,
    'arm64': Architecture.ARM64,
    'i386': Architecture.X86,
    'i686': Architecture.X86,
    'x86': Architecture.X86,
}

# Release platform tags per (platform, architecture)
WINDOWS_ARCH_TAGS = {Architecture.X64: 'win64'}
WINDOWS_DEFAULT_TAG = 'win32'
LINUX_ARCH_TAGS = {
    Architecture.X64: 'linux64',
    Architecture.ARM64: 'linuxarm64',
    Architecture.X86: 'linuxi686',
}


def get_system_identity(
    system: Optional[str] = None,
    machine: Optional[str] = None
) -> SystemIdentity:
    """
    Derive the system identity from the host (or explicit overrides).

    Args:
        system: platform.system() value, detected when None
        machine: platform.machine() value, detected when None

    Returns:
        SystemIdentity for the host

    Raises:
        UnsupportedPlatformError: If the OS or CPU is not recognized
    """
    system_name = (system if system is not None else platform.system()).lower()
    machine_name = (machine if machine is not None else platform.machine()).lower()

    host_platform = SYSTEM_MAP.get(system_name)
    if host_platform is None:
        raise UnsupportedPlatformError(system_name, machine_name)

    architecture = MACHINE_MAP.get(machine_name)
    if architecture is None:
        raise UnsupportedPlatformError(system_name, machine_name)

    suffix = EXECUTABLE_SUFFIX_WINDOWS if host_platform is Platform.WINDOWS else ''
    return SystemIdentity(host_platform, architecture, suffix)


def remote_archive_name(identity: SystemIdentity) -> Optional[str]:
    """
    Name of the BtbN/FFmpeg-Builds archive for a system.

    Returns:
        File name such as 'ffmpeg-master-latest-linux64-gpl.tar.xz',
        or None when no build is published (macOS).
    """
    if identity.platform is Platform.WINDOWS:
        tag = WINDOWS_ARCH_TAGS.get(identity.architecture, WINDOWS_DEFAULT_TAG)
        return f"{ARCHIVE_PREFIX}{tag}{ARCHIVE_SUFFIX}{ZIP_EXTENSION}"

    if identity.platform is Platform.LINUX:
        tag = LINUX_ARCH_TAGS[identity.architecture]
        return f"{ARCHIVE_PREFIX}{tag}{ARCHIVE_SUFFIX}{TAR_XZ_EXTENSION}"

    return None


def tool_paths(directory: Path, identity: SystemIdentity) -> ToolPaths:
    """Expected locations of the three executables, present or not."""
    directory = Path(directory)
    suffix = identity.executable_suffix
    return ToolPaths(
        ffmpeg_path=directory / f"{TOOL_FFMPEG}{suffix}",
        ffprobe_path=directory / f"{TOOL_FFPROBE}{suffix}",
        ffplay_path=directory / f"{TOOL_FFPLAY}{suffix}",
    )


def file_exists(path: Path) -> bool:
    """True if path is a regular file with size > 0."""
    try:
        return path.is_file() and path.stat().st_size > 0
    except OSError:
        return False


def resolve_existing_paths(directory: Path, identity: SystemIdentity) -> ToolPaths:
    """
    Resolve which executables are installed.

    Existence check only; zero-byte files count as absent.
    """
    expected = tool_paths(directory, identity)
    return ToolPaths(
        ffmpeg_path=expected.ffmpeg_path if file_exists(expected.ffmpeg_path) else None,
        ffprobe_path=expected.ffprobe_path if file_exists(expected.ffprobe_path) else None,
        ffplay_path=expected.ffplay_path if file_exists(expected.ffplay_path) else None,
    )


def get_storage_dir(config: Optional[ConfigLoader] = None) -> Path:
    """
    Directory the executables are installed into.

    FFMPEG_INSTALL_DIR when set, otherwise '.ffmpeg' under the active
    Python environment prefix. Created if missing.
    """
    config = config if config else ConfigLoader()
    storage_dir = config.get('install_dir') or Path(sys.prefix) / DEFAULT_STORAGE_DIRNAME
    storage_dir.mkdir(parents=True, exist_ok=True)
    return storage_dir


__all__ = [
    'get_system_identity',
    'remote_archive_name',
    'tool_paths',
    'file_exists',
    'resolve_existing_paths',
    'get_storage_dir',
]
