# Path: provisioner/engine/extraction/__init__.py
"""
Extraction Module

Pulls the FFmpeg executables out of release archives.

Use ArchiveHandler for .zip and .tar.xz archives.
"""

from provisioner.engine.extraction.archive_handler import (
    ArchiveHandler,
    ZipExtractor,
    TarExtractor,
    BaseExtractor,
)
from provisioner.engine.extraction.constants import (
    ExtractionLayout,
    ZIP_LAYOUT,
    TAR_LAYOUT,
)

__all__ = [
    'ArchiveHandler',
    'ZipExtractor',
    'TarExtractor',
    'BaseExtractor',
    'ExtractionLayout',
    'ZIP_LAYOUT',
    'TAR_LAYOUT',
]
