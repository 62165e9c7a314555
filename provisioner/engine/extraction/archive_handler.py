# Path: provisioner/engine/extraction/archive_handler.py
"""
Archive Handler Factory

Pulls the FFmpeg executables out of a release archive and places
them flat in the install directory.

Architecture:
- Factory keyed on file extension
- One extractor class per archive format
- Layout records (ExtractionLayout) describe where binaries live
- Common result (ExtractionResult); failures raise ExtractError

Only the executables are kept; everything else in the archive is
discarded.
"""

import lzma
import os
import shutil
import tarfile
import time
import zipfile
import zlib
from pathlib import Path, PurePosixPath
from typing import Optional, Type

from provisioner.core.logger import get_logger
from provisioner.core.config_loader import ConfigLoader
from provisioner.core.exceptions import ExtractError
from provisioner.core.models import SystemIdentity
from provisioner.engine.result import ExtractionResult
from provisioner.constants import (
    DEFAULT_MAX_ARCHIVE_SIZE,
    LOG_INPUT,
    LOG_PROCESS,
    LOG_OUTPUT,
)
from provisioner.engine.extraction.constants import (
    ExtractionLayout,
    MAX_EXTRACTION_DEPTH,
    PARTIAL_SUFFIX,
    STAGING_DIR_PREFIX,
    TAR_LAYOUT,
    TAR_XZ_MODE,
    ZIP_LAYOUT,
    ZIP_READ_MODE,
)

logger = get_logger(__name__, 'extraction')


class BaseExtractor:
    """
    Base class for archive extractors.

    Provides the common interface and path validation.
    """

    layout: ExtractionLayout

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize base extractor.

        Args:
            config: Optional ConfigLoader instance
        """
        self.config = config if config else ConfigLoader()
        self.max_extraction_size = self.config.get(
            'max_archive_size',
            DEFAULT_MAX_ARCHIVE_SIZE
        )

    def extract(self, archive_path: Path, target_dir: Path) -> list[Path]:
        """
        Place the archive's executables in target_dir.

        Must be implemented by subclasses.

        Returns:
            Final paths of the placed executables

        Raises:
            ExtractError: Malformed or unsafe archive, or no executables found
        """
        raise NotImplementedError("Subclasses must implement extract()")

    def _validate_depth(self, member_path: str) -> bool:
        """
        Validate path depth to prevent archive bombs.

        Args:
            member_path: Relative path within archive

        Returns:
            True if depth is acceptable
        """
        depth = len(Path(member_path).parts)
        if depth > MAX_EXTRACTION_DEPTH:
            logger.error(f"Path too deep: {member_path} (depth={depth})")
            return False
        return True

    def _validate_path_traversal(self, member_path: Path, target_dir: Path) -> bool:
        """
        Validate path doesn't escape target directory.

        Args:
            member_path: Full member path
            target_dir: Target extraction directory

        Returns:
            True if path is safe
        """
        try:
            member_path.resolve().relative_to(target_dir.resolve())
            return True
        except ValueError:
            logger.error(f"Unsafe path detected: {member_path}")
            return False

    def _check_size(self, total_size: int) -> None:
        if total_size > self.max_extraction_size:
            raise ExtractError(
                f"Archive too large: {total_size} bytes "
                f"(limit {self.max_extraction_size})"
            )


class ZipExtractor(BaseExtractor):
    """
    ZIP extractor (Windows builds).

    Extracts the whole tree into a staging directory, moves every
    bin/<tool>.exe up to the install directory, then drops the rest.
    """

    layout = ZIP_LAYOUT

    def extract(self, archive_path: Path, target_dir: Path) -> list[Path]:
        logger.info(f"{LOG_INPUT} Extracting ZIP: {archive_path.name}")

        staging_dir = target_dir / f"{STAGING_DIR_PREFIX}{int(time.time() * 1000)}"

        try:
            with zipfile.ZipFile(archive_path, ZIP_READ_MODE) as zf:
                if not self._validate_zip_safe(zf, staging_dir):
                    raise ExtractError("ZIP contains unsafe paths")

                self._check_size(sum(info.file_size for info in zf.infolist()))

                logger.info(f"{LOG_PROCESS} Extracting {len(zf.namelist())} entries to staging")
                staging_dir.mkdir(parents=True, exist_ok=True)
                zf.extractall(staging_dir)

            placed = self._promote_binaries(staging_dir, target_dir)

        except zipfile.BadZipFile as e:
            raise ExtractError(f"Invalid ZIP file: {e}") from e

        except (OSError, EOFError, zlib.error, RuntimeError, NotImplementedError) as e:
            raise ExtractError(f"ZIP extraction failed: {type(e).__name__}: {e}") from e

        finally:
            shutil.rmtree(staging_dir, ignore_errors=True)

        if not placed:
            raise ExtractError("No FFmpeg executables found in ZIP archive")

        return placed

    def _promote_binaries(self, staging_dir: Path, target_dir: Path) -> list[Path]:
        """Move matching executables to target_dir, overwriting."""
        placed = []
        for path in sorted(staging_dir.rglob('*')):
            if not path.is_file():
                continue
            relative = path.relative_to(staging_dir).as_posix()
            if not self.layout.match_pattern.search(relative):
                continue

            destination = target_dir / path.name
            os.replace(path, destination)
            placed.append(destination)
            logger.debug(f"{LOG_PROCESS} Placed {destination.name}")

        return placed

    def _validate_zip_safe(self, zip_file: zipfile.ZipFile, target_dir: Path) -> bool:
        """Validate ZIP for path traversal attacks."""
        for member in zip_file.namelist():
            if not self._validate_path_traversal(target_dir / member, target_dir):
                return False
            if not self._validate_depth(member):
                return False
        return True


class TarExtractor(BaseExtractor):
    """
    TAR.XZ extractor (Linux builds).

    Keeps regular files under <root>/bin/, strips the two leading
    components and writes each one directly into the install directory.
    Members that do not land exactly one level deep are skipped.
    """

    layout = TAR_LAYOUT

    def extract(self, archive_path: Path, target_dir: Path) -> list[Path]:
        logger.info(f"{LOG_INPUT} Extracting TAR: {archive_path.name}")

        placed = []
        try:
            with tarfile.open(archive_path, TAR_XZ_MODE) as tf:
                members = [m for m in tf.getmembers() if self._is_wanted(m)]
                self._check_size(sum(m.size for m in members))

                for member in members:
                    name = self._stripped_name(member.name)
                    if name is None:
                        logger.debug(f"Skipping {member.name}: unexpected depth")
                        continue

                    destination = target_dir / name
                    self._write_member(tf, member, destination)
                    placed.append(destination)

        except tarfile.TarError as e:
            raise ExtractError(f"Invalid TAR file: {e}") from e

        except (OSError, EOFError, lzma.LZMAError) as e:
            raise ExtractError(f"TAR extraction failed: {e}") from e

        if not placed:
            raise ExtractError("No FFmpeg executables found at the expected archive depth")

        return placed

    def _is_wanted(self, member: tarfile.TarInfo) -> bool:
        return member.isfile() and bool(self.layout.match_pattern.search(member.name))

    def _stripped_name(self, member_name: str) -> Optional[str]:
        """Single remaining component after stripping, or None."""
        parts = PurePosixPath(member_name).parts[self.layout.strip_depth:]
        if len(parts) != 1 or parts[0] in ('.', '..'):
            return None
        return parts[0]

    def _write_member(self, tar_file: tarfile.TarFile, member: tarfile.TarInfo, destination: Path) -> None:
        """Write a member beside its destination, then move it into place."""
        source = tar_file.extractfile(member)
        if source is None:
            raise ExtractError(f"Cannot read archive member: {member.name}")

        partial = destination.with_name(destination.name + PARTIAL_SUFFIX)
        try:
            with source, open(partial, 'wb') as out:
                shutil.copyfileobj(source, out)
            os.replace(partial, destination)
        finally:
            partial.unlink(missing_ok=True)

        logger.debug(f"{LOG_PROCESS} Placed {destination.name}")


class ArchiveHandler:
    """
    Archive handler factory.

    Detects the archive format from its extension and delegates to
    the matching extractor.

    Supported formats:
    - .zip
    - .tar.xz

    Example:
        handler = ArchiveHandler()
        result = handler.extract(
            archive_path=Path('/opt/.ffmpeg/temp-1700000000000.tar.xz'),
            target_dir=Path('/opt/.ffmpeg'),
            identity=get_system_identity()
        )
    """

    EXTRACTOR_MAP = {
        ZIP_LAYOUT.archive_suffix: ZipExtractor,
        TAR_LAYOUT.archive_suffix: TarExtractor,
    }

    def __init__(self, config: Optional[ConfigLoader] = None):
        self.config = config if config else ConfigLoader()

    def extract(
        self,
        archive_path: Path,
        target_dir: Path,
        identity: Optional[SystemIdentity] = None
    ) -> ExtractionResult:
        """
        Extract the executables from an archive.

        Args:
            archive_path: Downloaded archive
            target_dir: Install directory
            identity: Host identity, used for diagnostics

        Returns:
            ExtractionResult listing the placed executables

        Raises:
            ExtractError: Unsupported format, malformed archive or no executables
        """
        archive_path = Path(archive_path)
        target_dir = Path(target_dir)
        logger.info(f"{LOG_INPUT} Processing archive: {archive_path.name}")

        extractor_class = self._detect_format(archive_path)
        if extractor_class is None:
            raise ExtractError(f"Unsupported archive format: {archive_path.name}")

        if not archive_path.exists():
            raise ExtractError(f"Archive not found: {archive_path}")

        if identity is not None:
            logger.debug(f"Extracting for {identity.platform.value}/{identity.architecture.value}")

        logger.info(f"{LOG_PROCESS} Using {extractor_class.__name__}")
        target_dir.mkdir(parents=True, exist_ok=True)

        start_time = time.time()
        extractor = extractor_class(config=self.config)
        placed = extractor.extract(archive_path, target_dir)

        result = ExtractionResult(
            archive_path=archive_path,
            extract_directory=target_dir,
            files_extracted=placed,
            layout=extractor.layout.name,
            duration=time.time() - start_time
        )

        logger.info(
            f"{LOG_OUTPUT} Extraction complete: {len(placed)} executables "
            f"in {result.duration:.2f}s"
        )
        logger.debug(f"Extraction result: {result.to_dict()}")
        return result

    def _detect_format(self, archive_path: Path) -> Optional[Type[BaseExtractor]]:
        """Extractor class for the archive's extension, or None."""
        name_lower = archive_path.name.lower()
        for suffix, extractor_class in self.EXTRACTOR_MAP.items():
            if name_lower.endswith(suffix):
                return extractor_class

        logger.warning(f"Unknown format: {archive_path.name}")
        return None

    def is_supported(self, archive_path: Path) -> bool:
        return self._detect_format(Path(archive_path)) is not None

    @classmethod
    def get_supported_formats(cls) -> list[str]:
        return list(cls.EXTRACTOR_MAP.keys())


__all__ = [
    'ArchiveHandler',
    'BaseExtractor',
    'ZipExtractor',
    'TarExtractor',
]
