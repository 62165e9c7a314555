# Path: provisioner/engine/coordinator.py
"""
Acquisition Coordinator

Main workflow orchestrator for installing FFmpeg.
Coordinates: short-circuit check -> candidate planning ->
download -> extract -> cleanup -> permissions -> verification.

Architecture:
- Existing install returns without touching the network
- Sources are tried one at a time, never in parallel
- Per-source failures are logged and the next source is tried
- Only an unsupported platform or total exhaustion reach the caller
- IPO logging throughout
"""

import asyncio
import time
from pathlib import Path
from typing import Optional, Sequence

from provisioner.core.logger import get_logger
from provisioner.core.config_loader import ConfigLoader
from provisioner.core.exceptions import (
    AllSourcesExhaustedError,
    ExtractError,
    UnsupportedPlatformError,
)
from provisioner.core.models import Source, SystemIdentity, ToolPaths
from provisioner.core.system_info import (
    file_exists,
    remote_archive_name,
    resolve_existing_paths,
    tool_paths,
)
from provisioner.engine.protocol_handlers import HTTPHandler
from provisioner.engine.speed_prober import SpeedProber
from provisioner.engine.source_selector import SourceSelector
from provisioner.engine.archive_downloader import ArchiveDownloader
from provisioner.engine.extraction import ArchiveHandler
from provisioner.engine.candidates import CandidatePlanner
from provisioner.engine.constants import DOWNLOAD_SOURCES
from provisioner.constants import (
    EXECUTABLE_MODE,
    LOG_INPUT,
    LOG_PROCESS,
    LOG_OUTPUT,
)

logger = get_logger(__name__, 'engine')


class AcquisitionCoordinator:
    """
    Coordinates a complete FFmpeg acquisition.

    Workflow:
    1. Return at once if ffmpeg and ffprobe are already installed
    2. Resolve the release archive name for the platform
    3. Order the candidate sources (explicit index or speed test)
    4. For each candidate: download, extract, delete the archive,
       set permissions, verify; first success wins
    5. Raise AllSourcesExhaustedError when every candidate failed

    Example:
        async with HTTPHandler() as http:
            coordinator = AcquisitionCoordinator(http_handler=http)
            paths = await coordinator.acquire(get_system_identity(), get_storage_dir())
    """

    def __init__(
        self,
        http_handler: Optional[HTTPHandler] = None,
        selector: Optional[SourceSelector] = None,
        downloader: Optional[ArchiveDownloader] = None,
        extractor: Optional[ArchiveHandler] = None,
        sources: Sequence[Source] = DOWNLOAD_SOURCES,
        config: Optional[ConfigLoader] = None,
        show_progress: Optional[bool] = None
    ):
        """
        Initialize acquisition coordinator.

        Args:
            http_handler: Shared HTTP transport (created if omitted)
            selector: Source selector (built on http_handler if omitted)
            downloader: Archive downloader (built on http_handler if omitted)
            extractor: Archive handler
            sources: Configured sources, direct origin first
            config: Optional ConfigLoader instance
            show_progress: Render progress bars and reports
        """
        self.config = config if config else ConfigLoader()
        self.http_handler = http_handler if http_handler else HTTPHandler(self.config)

        self.selector = selector if selector else SourceSelector(
            SpeedProber(self.http_handler, self.config),
            config=self.config,
            show_progress=show_progress
        )
        self.downloader = downloader if downloader else ArchiveDownloader(
            self.http_handler,
            config=self.config,
            show_progress=show_progress
        )
        self.extractor = extractor if extractor else ArchiveHandler(self.config)

        self.sources = list(sources)
        self.planner = CandidatePlanner(self.sources, self.selector)

    async def acquire(
        self,
        identity: SystemIdentity,
        target_dir: Path,
        source_index: Optional[int] = None
    ) -> ToolPaths:
        """
        Make sure the FFmpeg executables exist in target_dir.

        Args:
            identity: Host system identity
            target_dir: Install directory
            source_index: 0 for direct only, 1..N for a specific source,
                None (or out of range) for automatic selection

        Returns:
            ToolPaths of the installed executables

        Raises:
            UnsupportedPlatformError: No release archive for this platform
            AllSourcesExhaustedError: Every candidate source failed
        """
        target_dir = Path(target_dir)
        expected = tool_paths(target_dir, identity)

        logger.info(f"{LOG_INPUT} Acquiring FFmpeg into {target_dir}")

        if self._is_installed(expected):
            logger.info(f"{LOG_OUTPUT} FFmpeg already installed, skipping download")
            return resolve_existing_paths(target_dir, identity)

        remote_file_name = remote_archive_name(identity)
        if remote_file_name is None:
            raise UnsupportedPlatformError(identity.platform.value, identity.architecture.value)

        target_dir.mkdir(parents=True, exist_ok=True)
        candidates = await self.planner.plan(source_index)
        logger.info(f"{LOG_PROCESS} {len(candidates)} candidate sources for {remote_file_name}")

        attempted = []
        for source in candidates:
            attempted.append(source.name)
            start_time = time.time()
            try:
                paths = await self._attempt(source, remote_file_name, identity, target_dir)
            except Exception as e:
                logger.error(f"{LOG_OUTPUT} {source.name} failed: {e}")
                self._discard_outputs(expected)
                continue

            logger.info(
                f"{LOG_OUTPUT} FFmpeg installed from {source.name} "
                f"in {time.time() - start_time:.1f}s"
            )
            logger.debug(f"Installed paths: {paths.to_dict()}")
            return paths

        raise AllSourcesExhaustedError(attempted)

    async def _attempt(
        self,
        source: Source,
        remote_file_name: str,
        identity: SystemIdentity,
        target_dir: Path
    ) -> ToolPaths:
        """Download, extract and verify from one source."""
        archive_path = await self.downloader.download_archive(source, remote_file_name, target_dir)

        try:
            await asyncio.to_thread(self.extractor.extract, archive_path, target_dir, identity)
        finally:
            self._remove_archive(archive_path)

        expected = tool_paths(target_dir, identity)
        if not identity.is_windows:
            self._make_executable(expected)

        if not self._is_installed(expected):
            raise ExtractError("Archive did not provide ffmpeg and ffprobe")

        return resolve_existing_paths(target_dir, identity)

    @staticmethod
    def _is_installed(expected: ToolPaths) -> bool:
        return file_exists(expected.ffmpeg_path) and file_exists(expected.ffprobe_path)

    @staticmethod
    def _make_executable(expected: ToolPaths) -> None:
        for path in (expected.ffmpeg_path, expected.ffprobe_path):
            if path.exists():
                path.chmod(EXECUTABLE_MODE)

    @staticmethod
    def _remove_archive(archive_path: Path) -> None:
        try:
            archive_path.unlink(missing_ok=True)
            logger.info(f"{LOG_PROCESS} Deleted archive: {archive_path.name}")
        except OSError as e:
            logger.warning(f"Cannot delete archive {archive_path}: {e}")

    @staticmethod
    def _discard_outputs(expected: ToolPaths) -> None:
        """Best-effort removal of partially placed executables."""
        for path in (expected.ffmpeg_path, expected.ffprobe_path, expected.ffplay_path):
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning(f"Cannot delete {path}: {e}")

    async def close(self):
        """Close the HTTP transport."""
        await self.http_handler.close()


async def acquire(
    identity: SystemIdentity,
    target_dir: Path,
    source_index: Optional[int] = None,
    config: Optional[ConfigLoader] = None
) -> ToolPaths:
    """
    Acquire FFmpeg with a short-lived HTTP session.

    Args:
        identity: Host system identity
        target_dir: Install directory
        source_index: Explicit source choice (see AcquisitionCoordinator.acquire)
        config: Optional ConfigLoader instance

    Returns:
        ToolPaths of the installed executables
    """
    async with HTTPHandler(config) as http_handler:
        coordinator = AcquisitionCoordinator(http_handler=http_handler, config=config)
        return await coordinator.acquire(identity, target_dir, source_index)


__all__ = ['AcquisitionCoordinator', 'acquire']
