# Path: provisioner/engine/stream_handler.py
"""
Stream Handler

Memory-efficient streaming of a response body to disk.
Each chunk is written as it arrives; the body is never buffered whole.

Architecture:
- Chunk-based streaming
- Async file I/O (aiofiles)
- Per-chunk progress callback
"""

import time
from pathlib import Path
from typing import AsyncIterator, Callable, Optional

import aiofiles

from provisioner.core.logger import get_logger
from provisioner.engine.result import DownloadProgress
from provisioner.constants import LOG_PROCESS

logger = get_logger(__name__, 'engine')

ProgressCallback = Callable[[DownloadProgress], None]


class StreamHandler:
    """
    Streams byte chunks into a file.

    Example:
        handler = StreamHandler()
        written = await handler.stream_to_file(
            response.content.iter_chunked(65536),
            Path('temp-1700000000000.tar.xz'),
            total_size=80_000_000,
            on_progress=print
        )
    """

    def __init__(self):
        self.bytes_written = 0
        self.chunks_written = 0
        self.start_time = 0.0

    async def stream_to_file(
        self,
        response_stream: AsyncIterator[bytes],
        output_path: Path,
        total_size: int = 0,
        on_progress: Optional[ProgressCallback] = None
    ) -> int:
        """
        Stream response to file.

        Args:
            response_stream: Async iterator of byte chunks
            output_path: Path where file will be written
            total_size: Expected size; progress is only emitted when > 0
            on_progress: Called after every chunk with a DownloadProgress

        Returns:
            Total bytes written

        Raises:
            Whatever the stream or the file raises; the caller owns cleanup
        """
        logger.info(f"{LOG_PROCESS} Streaming to: {output_path.name}")

        self.reset()
        self.start_time = time.monotonic()

        async with aiofiles.open(output_path, 'wb') as f:
            async for chunk in response_stream:
                if not chunk:
                    continue
                await f.write(chunk)
                self.bytes_written += len(chunk)
                self.chunks_written += 1

                if total_size > 0 and on_progress is not None:
                    on_progress(self.get_progress(total_size))

        logger.info(
            f"{LOG_PROCESS} Stream complete: {self.bytes_written} bytes "
            f"in {self.chunks_written} chunks"
        )

        return self.bytes_written

    @property
    def elapsed(self) -> float:
        return max(time.monotonic() - self.start_time, 1e-6)

    def get_progress(self, total_size: int) -> DownloadProgress:
        """Snapshot of the current transfer."""
        speed = self.bytes_written / self.elapsed
        remaining = max(total_size - self.bytes_written, 0)
        eta = remaining / speed if speed > 0 else 0.0
        return DownloadProgress(
            downloaded_size=self.bytes_written,
            total_size=total_size,
            speed=speed,
            eta_seconds=eta
        )

    def reset(self):
        """Reset progress counters."""
        self.bytes_written = 0
        self.chunks_written = 0


__all__ = ['StreamHandler', 'ProgressCallback']
