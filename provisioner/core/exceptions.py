# Path: provisioner/core/exceptions.py
"""
Provisioner Exceptions

ProbeFailure never leaves the speed prober. DownloadError and
ExtractError are per-source and recovered by trying the next source.
UnsupportedPlatformError and AllSourcesExhaustedError are fatal.
"""

from typing import Optional, Sequence


class ProvisionerError(Exception):
    """Base class for all provisioner errors."""


class ProbeFailure(ProvisionerError):
    """Speed probe against one source failed."""


class UnsupportedPlatformError(ProvisionerError):
    """No release archive exists for this platform/architecture."""

    def __init__(self, platform: str, architecture: Optional[str] = None):
        self.platform = platform
        self.architecture = architecture
        target = f"{platform}/{architecture}" if architecture else platform
        super().__init__(f"Unsupported platform: {target}")


class DownloadError(ProvisionerError):
    """Archive could not be fetched from a source."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class ExtractError(ProvisionerError):
    """Archive is malformed or does not contain the expected binaries."""


class AllSourcesExhaustedError(ProvisionerError):
    """Every candidate source was tried without success."""

    def __init__(self, attempted: Sequence[str]):
        self.attempted = list(attempted)
        super().__init__(
            f"All sources failed to provide FFmpeg ({len(self.attempted)} tried: "
            f"{', '.join(self.attempted)})"
        )


__all__ = [
    'ProvisionerError',
    'ProbeFailure',
    'UnsupportedPlatformError',
    'DownloadError',
    'ExtractError',
    'AllSourcesExhaustedError',
]
