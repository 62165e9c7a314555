# Path: provisioner/core/models.py
"""
Provisioner Data Model

Immutable descriptions of download sources, the host system,
and the resolved tool locations.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from provisioner.constants import DIRECT_ORIGIN


class Platform(str, Enum):
    """Host operating system family."""
    WINDOWS = 'windows'
    LINUX = 'linux'
    MACOS = 'macos'


class Architecture(str, Enum):
    """Host CPU architecture."""
    X64 = 'x64'
    ARM64 = 'arm64'
    X86 = 'x86'


@dataclass(frozen=True)
class Source:
    """
    A download origin for release archives.

    Attributes:
        name: Display label, unique within the configured list
        base_url: URL prefix the archive file name is appended to.
            Mirrors embed the authoritative origin after their own host.
    """
    name: str
    base_url: str

    @property
    def is_direct(self) -> bool:
        """True for the authoritative, non-proxied origin."""
        return self.base_url.startswith(DIRECT_ORIGIN)


@dataclass(frozen=True)
class SystemIdentity:
    """
    Host platform as seen by the provisioner.

    Attributes:
        platform: Operating system family
        architecture: CPU architecture
        executable_suffix: '.exe' on Windows, empty elsewhere
    """
    platform: Platform
    architecture: Architecture
    executable_suffix: str = ''

    @property
    def is_windows(self) -> bool:
        return self.platform is Platform.WINDOWS


@dataclass
class ToolPaths:
    """
    Locations of the three FFmpeg executables.

    None means "not present on disk", not "download failed".
    """
    ffmpeg_path: Optional[Path] = None
    ffprobe_path: Optional[Path] = None
    ffplay_path: Optional[Path] = None

    @property
    def is_complete(self) -> bool:
        """True when both required tools are present."""
        return self.ffmpeg_path is not None and self.ffprobe_path is not None

    def to_dict(self) -> dict[str, Optional[str]]:
        """Convert to dictionary for logging/display."""
        return {
            'ffmpeg_path': str(self.ffmpeg_path) if self.ffmpeg_path else None,
            'ffprobe_path': str(self.ffprobe_path) if self.ffprobe_path else None,
            'ffplay_path': str(self.ffplay_path) if self.ffplay_path else None,
        }


__all__ = [
    'Platform',
    'Architecture',
    'Source',
    'SystemIdentity',
    'ToolPaths',
]
