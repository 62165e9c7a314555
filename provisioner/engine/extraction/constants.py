# Path: provisioner/engine/extraction/constants.py
"""
Extraction Module Constants

Archive read modes, safety limits and the two release layouts.
Layouts are data; the extractors hold no archive-specific paths.
"""

import re
from dataclasses import dataclass
from typing import Optional, Pattern

from provisioner.constants import TAR_XZ_EXTENSION, ZIP_EXTENSION

# ============================================================================
# ARCHIVE EXTRACTION
# ============================================================================

ZIP_READ_MODE = 'r'
TAR_XZ_MODE = 'r:xz'

# Deepest member path accepted from a zip
MAX_EXTRACTION_DEPTH = 10

# Staging directory for zip trees, created under the install directory
STAGING_DIR_PREFIX = '.extract-'

# Sibling temp name used while a tar member is written
PARTIAL_SUFFIX = '.part'


# ============================================================================
# LAYOUTS
# ============================================================================

@dataclass(frozen=True)
class ExtractionLayout:
    """
    Where the executables sit inside a release archive.

    Attributes:
        name: Layout name for logs and results
        archive_suffix: File extension that selects this layout
        match_pattern: Pattern a member path must match to be kept
        strip_depth: Leading components removed from kept tar members
            (None: flatten to the base name)
    """
    name: str
    archive_suffix: str
    match_pattern: Pattern[str]
    strip_depth: Optional[int] = None


# <root>/bin/ffmpeg.exe etc.; any separator, any case
ZIP_LAYOUT = ExtractionLayout(
    name='zip',
    archive_suffix=ZIP_EXTENSION,
    match_pattern=re.compile(r'bin[/\\](ffmpeg|ffprobe|ffplay)\.exe$', re.IGNORECASE),
)

# <root>/bin/ffmpeg and <root>/bin/ffprobe; ffplay is not shipped for Linux
TAR_LAYOUT = ExtractionLayout(
    name='tar.xz',
    archive_suffix=TAR_XZ_EXTENSION,
    match_pattern=re.compile(r'/bin/(ffmpeg|ffprobe)'),
    strip_depth=2,
)
