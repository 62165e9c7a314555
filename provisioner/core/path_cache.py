# Path: provisioner/core/path_cache.py
"""
Tool Paths Cache

Explicit cache of the installed FFmpeg executable locations.
Resolves lazily on first access; refresh() and invalidate()
control when the snapshot is recomputed.
"""

import asyncio
from pathlib import Path
from typing import Optional

from provisioner.core.logger import get_logger
from provisioner.core.models import SystemIdentity, ToolPaths
from provisioner.core.system_info import (
    get_storage_dir,
    get_system_identity,
    resolve_existing_paths,
)

logger = get_logger(__name__, 'core')


class ToolPathsCache:
    """
    Cached snapshot of installed tool paths.

    Example:
        cache = ToolPathsCache()
        if cache.ffmpeg_path is None:
            ...  # not installed yet
        paths = await cache.ready()  # re-resolve after an install
    """

    def __init__(
        self,
        directory: Optional[Path] = None,
        identity: Optional[SystemIdentity] = None
    ):
        """
        Initialize cache.

        Args:
            directory: Install directory (default: get_storage_dir())
            identity: System identity (default: detected host)
        """
        self._directory = Path(directory) if directory else None
        self._identity = identity
        self._paths: Optional[ToolPaths] = None

    @property
    def ffmpeg_path(self) -> Optional[Path]:
        return self.paths.ffmpeg_path

    @property
    def ffprobe_path(self) -> Optional[Path]:
        return self.paths.ffprobe_path

    @property
    def ffplay_path(self) -> Optional[Path]:
        return self.paths.ffplay_path

    @property
    def paths(self) -> ToolPaths:
        """Current snapshot, resolved on first access."""
        if self._paths is None:
            self._paths = self._resolve()
        return self._paths

    def refresh(self) -> ToolPaths:
        """Re-resolve from disk and return the new snapshot."""
        self._paths = self._resolve()
        return self._paths

    def invalidate(self) -> None:
        """Drop the snapshot; the next access re-resolves."""
        self._paths = None

    async def ready(self) -> ToolPaths:
        """Re-resolve in a worker thread."""
        self._paths = await asyncio.to_thread(self._resolve)
        return self._paths

    def _resolve(self) -> ToolPaths:
        try:
            identity = self._identity or get_system_identity()
            directory = self._directory or get_storage_dir()
            return resolve_existing_paths(directory, identity)
        except Exception as e:
            logger.error(f"Failed to resolve FFmpeg paths: {e}")
            return ToolPaths()


__all__ = ['ToolPathsCache']
