# Path: provisioner/engine/archive_downloader.py
"""
Archive Downloader

Downloads a release archive from one source into a temporary file
in the install directory, reporting live progress.

A failed download never leaves its temporary file behind.
"""

import asyncio
import time
from contextlib import contextmanager, nullcontext
from pathlib import Path
from typing import Iterator, Optional

import aiohttp
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn

from provisioner.core.logger import get_logger
from provisioner.core.config_loader import ConfigLoader
from provisioner.core.display import console, format_size, format_speed
from provisioner.core.exceptions import DownloadError
from provisioner.core.models import Source
from provisioner.engine.protocol_handlers import HTTPHandler
from provisioner.engine.stream_handler import ProgressCallback, StreamHandler
from provisioner.engine.result import DownloadProgress, DownloadResult
from provisioner.engine.constants import (
    HEADER_CONTENT_LENGTH,
    TEMP_ARCHIVE_PREFIX,
    is_success_status,
)
from provisioner.constants import (
    DEFAULT_CHUNK_SIZE,
    TAR_XZ_EXTENSION,
    ZIP_EXTENSION,
    LOG_INPUT,
    LOG_PROCESS,
    LOG_OUTPUT,
)

logger = get_logger(__name__, 'engine')


def parse_content_length(value: Optional[str]) -> int:
    """Content-Length as int; 0 when absent or unparseable."""
    if not value:
        return 0
    try:
        return max(int(value.strip()), 0)
    except ValueError:
        return 0


def temp_archive_path(target_dir: Path, remote_file_name: str) -> Path:
    """Timestamped temporary file with the archive's extension."""
    extension = ZIP_EXTENSION if remote_file_name.endswith(ZIP_EXTENSION) else TAR_XZ_EXTENSION
    return target_dir / f"{TEMP_ARCHIVE_PREFIX}{int(time.time() * 1000)}{extension}"


@contextmanager
def rich_progress(total_size: int) -> Iterator[ProgressCallback]:
    """Progress bar fed by DownloadProgress updates."""
    with Progress(
        TextColumn("[cyan]Downloading"),
        BarColumn(),
        TaskProgressColumn(),
        TextColumn("{task.fields[downloaded]}/{task.fields[size]}"),
        TextColumn("{task.fields[speed]}"),
        TextColumn("ETA: {task.fields[eta]}s"),
        console=console,
    ) as progress:
        task = progress.add_task(
            "download",
            total=total_size,
            downloaded=format_size(0),
            size=format_size(total_size),
            speed=format_speed(0),
            eta='-',
        )

        def update(snapshot: DownloadProgress) -> None:
            progress.update(
                task,
                completed=snapshot.downloaded_size,
                downloaded=format_size(snapshot.downloaded_size),
                speed=format_speed(snapshot.speed),
                eta=f"{snapshot.eta_seconds:.0f}",
            )

        yield update


class ArchiveDownloader:
    """
    Streams a release archive from one source to a temporary file.

    Example:
        downloader = ArchiveDownloader(http_handler)
        archive = await downloader.download_archive(
            source, 'ffmpeg-master-latest-linux64-gpl.tar.xz', Path('/opt/.ffmpeg')
        )
    """

    def __init__(
        self,
        http_handler: HTTPHandler,
        config: Optional[ConfigLoader] = None,
        on_progress: Optional[ProgressCallback] = None,
        show_progress: Optional[bool] = None
    ):
        """
        Initialize archive downloader.

        Args:
            http_handler: HTTP transport
            config: Optional ConfigLoader instance
            on_progress: Progress callback; replaces the rich progress bar
            show_progress: Render the rich progress bar (default from config)
        """
        self.http_handler = http_handler
        self.config = config if config else ConfigLoader()
        self.chunk_size = self.config.get('chunk_size', DEFAULT_CHUNK_SIZE)
        self.on_progress = on_progress
        self.show_progress = show_progress if show_progress is not None else \
            self.config.get('show_progress', True)
        self.last_result: Optional[DownloadResult] = None

    async def download_archive(
        self,
        source: Source,
        remote_file_name: str,
        target_dir: Path
    ) -> Path:
        """
        Download an archive to a temporary file.

        Args:
            source: Source to download from
            remote_file_name: Archive name appended to the source base URL
            target_dir: Directory the temporary file is created in

        Returns:
            Path to the temporary archive

        Raises:
            DownloadError: Non-2xx status, missing body, or stream failure
        """
        url = f"{source.base_url}{remote_file_name}"
        logger.info(f"{LOG_INPUT} Downloading from {source.name}: {url}")

        target_dir = Path(target_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        temp_path: Optional[Path] = None
        start_time = time.monotonic()

        try:
            async with self.http_handler.get(url, timeout=self.http_handler.download_timeout()) as response:
                if not is_success_status(response.status):
                    reason = getattr(response, 'reason', None) or ''
                    raise DownloadError(
                        f"Download failed: HTTP {response.status} {reason}".strip(),
                        url=url,
                        status_code=response.status
                    )

                if response.content is None:
                    raise DownloadError("Response body is empty", url=url, status_code=response.status)

                total_size = parse_content_length(response.headers.get(HEADER_CONTENT_LENGTH))
                if total_size:
                    logger.info(f"{LOG_PROCESS} Archive size: {format_size(total_size)}")
                else:
                    logger.info(f"{LOG_PROCESS} Archive size unknown, progress is indeterminate")

                temp_path = temp_archive_path(target_dir, remote_file_name)
                stream_handler = StreamHandler()

                with self._progress_callback(total_size) as callback:
                    bytes_written = await stream_handler.stream_to_file(
                        response_stream=response.content.iter_chunked(self.chunk_size),
                        output_path=temp_path,
                        total_size=total_size,
                        on_progress=callback
                    )

        except DownloadError:
            self._discard(temp_path)
            raise

        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            self._discard(temp_path)
            raise DownloadError(f"{type(e).__name__}: {e}", url=url) from e

        result = DownloadResult(
            source=source,
            url=url,
            file_path=temp_path,
            file_size=bytes_written,
            total_size=total_size,
            duration=time.monotonic() - start_time
        )
        self.last_result = result

        logger.info(
            f"{LOG_OUTPUT} Download complete: {format_size(result.file_size)} "
            f"in {result.duration:.1f}s, average {format_speed(result.average_speed)}"
        )

        return temp_path

    def _progress_callback(self, total_size: int):
        """Context yielding the per-chunk progress callback (or None)."""
        if self.on_progress is not None:
            return nullcontext(self.on_progress)
        if self.show_progress and total_size > 0:
            return rich_progress(total_size)
        return nullcontext(None)

    @staticmethod
    def _discard(temp_path: Optional[Path]) -> None:
        """Remove a partial archive."""
        if temp_path is None:
            return
        try:
            temp_path.unlink(missing_ok=True)
            logger.debug(f"{LOG_PROCESS} Removed partial archive: {temp_path.name}")
        except OSError as e:
            logger.warning(f"Cannot delete partial archive {temp_path}: {e}")


__all__ = ['ArchiveDownloader', 'parse_content_length', 'temp_archive_path']
