# Path: provisioner/engine/result.py
"""
Acquisition Result Objects

Structured results for probe, download and extraction steps.

Architecture:
- ProbeResult: Single speed probe against one source
- DownloadProgress: Progress update emitted per streamed chunk
- DownloadResult: Completed archive download
- ExtractionResult: Completed archive extraction
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from provisioner.core.models import Source


@dataclass
class ProbeResult:
    """
    Result of a speed probe.

    Attributes:
        source: Source that was probed
        throughput: Observed bytes per second (0 on failure)
        succeeded: Whether the probe completed with a 2xx response
    """
    source: Source
    throughput: float = 0.0
    succeeded: bool = False

    @property
    def usable(self) -> bool:
        """Succeeded with measurable throughput."""
        return self.succeeded and self.throughput > 0


@dataclass
class DownloadProgress:
    """
    Progress of an in-flight download.

    Attributes:
        downloaded_size: Bytes received so far
        total_size: Expected bytes (Content-Length)
        speed: Average bytes/second since the download started
        eta_seconds: Estimated seconds remaining
    """
    downloaded_size: int
    total_size: int
    speed: float
    eta_seconds: float

    @property
    def percentage(self) -> float:
        if self.total_size <= 0:
            return 0.0
        return min(100.0, self.downloaded_size * 100.0 / self.total_size)


@dataclass
class DownloadResult:
    """
    Result of a completed archive download.

    Attributes:
        source: Source the archive came from
        url: Full archive URL
        file_path: Temporary archive on disk
        file_size: Bytes written
        total_size: Content-Length reported by the server (0 if unknown)
        duration: Download duration in seconds
    """
    source: Source
    url: str
    file_path: Path
    file_size: int = 0
    total_size: int = 0
    duration: float = 0.0
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def average_speed(self) -> float:
        """Average bytes per second."""
        if self.duration > 0:
            return self.file_size / self.duration
        return 0.0


@dataclass
class ExtractionResult:
    """
    Result of archive extraction.

    Attributes:
        archive_path: Archive that was extracted
        extract_directory: Directory binaries were placed in
        files_extracted: Final paths of placed binaries
        layout: Name of the extraction layout used
        duration: Extraction duration in seconds
    """
    archive_path: Path
    extract_directory: Path
    files_extracted: list[Path] = field(default_factory=list)
    layout: Optional[str] = None
    duration: float = 0.0
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for logging."""
        return {
            'archive_path': str(self.archive_path),
            'extract_directory': str(self.extract_directory),
            'files_extracted': [str(p) for p in self.files_extracted],
            'layout': self.layout,
            'duration': self.duration,
            'timestamp': self.timestamp.isoformat(),
        }


__all__ = [
    'ProbeResult',
    'DownloadProgress',
    'DownloadResult',
    'ExtractionResult',
]
