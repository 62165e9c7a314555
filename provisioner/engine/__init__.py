# Path: provisioner/engine/__init__.py
"""
Provisioner Engine Module

Acquisition components: probing, source selection, download,
extraction and the orchestrating coordinator.

Architecture:
- AcquisitionCoordinator: Main orchestrator
- CandidatePlanner: Orders sources for an attempt
- SourceSelector / SpeedProber: Pick the fastest source
- ArchiveDownloader: Streams the release archive to disk
- ArchiveHandler: Extracts the executables
"""

from provisioner.engine.coordinator import AcquisitionCoordinator, acquire
from provisioner.engine.candidates import CandidatePlanner
from provisioner.engine.source_selector import SourceSelector, choose_best
from provisioner.engine.speed_prober import SpeedProber, build_test_url
from provisioner.engine.archive_downloader import ArchiveDownloader
from provisioner.engine.extraction import ArchiveHandler
from provisioner.engine.protocol_handlers import HTTPHandler
from provisioner.engine.stream_handler import StreamHandler
from provisioner.engine.constants import DOWNLOAD_SOURCES
from provisioner.engine.result import (
    ProbeResult,
    DownloadProgress,
    DownloadResult,
    ExtractionResult,
)

__all__ = [
    # Main coordinator
    'AcquisitionCoordinator',
    'acquire',
    'CandidatePlanner',

    # Source selection
    'SourceSelector',
    'SpeedProber',
    'choose_best',
    'build_test_url',
    'DOWNLOAD_SOURCES',

    # Download and extraction
    'ArchiveDownloader',
    'ArchiveHandler',
    'HTTPHandler',
    'StreamHandler',

    # Result objects
    'ProbeResult',
    'DownloadProgress',
    'DownloadResult',
    'ExtractionResult',
]
