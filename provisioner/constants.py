# Path: provisioner/constants.py
"""
Provisioner Module Constants

Module-wide constants for FFmpeg provisioning.
Engine-specific constants live in engine/constants.py,
extraction layouts in engine/extraction/constants.py.
"""

# ============================================================================
# TOOLS
# ============================================================================
TOOL_FFMPEG: str = 'ffmpeg'
TOOL_FFPROBE: str = 'ffprobe'
TOOL_FFPLAY: str = 'ffplay'

EXECUTABLE_SUFFIX_WINDOWS: str = '.exe'
EXECUTABLE_MODE: int = 0o755

# ============================================================================
# DOWNLOAD SOURCES (BtbN/FFmpeg-Builds)
# ============================================================================
DIRECT_ORIGIN: str = 'https://github.com/'
RELEASE_PATH: str = 'https://github.com/BtbN/FFmpeg-Builds/releases/download/latest/'
RELEASE_PATH_SUFFIX: str = '/releases/download/latest/'

# Small reference resource used for speed probes
SPEED_TEST_URL: str = 'https://raw.githubusercontent.com/BtbN/FFmpeg-Builds/master/README.md'

# ============================================================================
# REMOTE ARCHIVE NAMING
# ============================================================================
ARCHIVE_PREFIX: str = 'ffmpeg-master-latest-'
ARCHIVE_SUFFIX: str = '-gpl'
ZIP_EXTENSION: str = '.zip'
TAR_XZ_EXTENSION: str = '.tar.xz'

# ============================================================================
# DEFAULTS
# ============================================================================
DEFAULT_PROBE_TIMEOUT: float = 10.0  # seconds per speed probe
DEFAULT_CONNECT_TIMEOUT: int = 30  # seconds to establish a download connection
DEFAULT_READ_TIMEOUT: int = 60  # seconds without data before a download is abandoned
DEFAULT_CHUNK_SIZE: int = 65536  # 64KB chunks for streaming
DEFAULT_USER_AGENT: str = 'ffmpeg-provisioner/1.0.0'
DEFAULT_MAX_ARCHIVE_SIZE: int = 2 * 1024 * 1024 * 1024  # 2GB uncompressed
DEFAULT_STORAGE_DIRNAME: str = '.ffmpeg'

# ============================================================================
# IPO LOGGING PREFIXES
# ============================================================================
LOG_INPUT: str = '[INPUT]'
LOG_PROCESS: str = '[PROCESS]'
LOG_OUTPUT: str = '[OUTPUT]'

# ============================================================================
# LOGGING COMPONENTS
# ============================================================================
LOGGER_ROOT: str = 'provisioner'
LOGGER_CORE: str = 'provisioner.core'
LOGGER_ENGINE: str = 'provisioner.engine'
LOGGER_CLI: str = 'provisioner.cli'
LOGGER_EXTRACTION: str = 'provisioner.extraction'

LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'
LOG_FILE_ACTIVITY: str = 'provisioner_activity.log'
LOG_FILE_ERRORS: str = 'errors.log'

# ============================================================================
# ENVIRONMENT VARIABLE KEYS (read by config_loader.py)
# ============================================================================
ENV_INSTALL_DIR: str = 'FFMPEG_INSTALL_DIR'
ENV_PROXY_INDEX: str = 'FFMPEG_PROXY_INDEX'
ENV_PROBE_TIMEOUT: str = 'FFMPEG_PROBE_TIMEOUT'
ENV_CONNECT_TIMEOUT: str = 'FFMPEG_CONNECT_TIMEOUT'
ENV_READ_TIMEOUT: str = 'FFMPEG_READ_TIMEOUT'
ENV_CHUNK_SIZE: str = 'FFMPEG_CHUNK_SIZE'
ENV_USER_AGENT: str = 'FFMPEG_USER_AGENT'
ENV_MAX_ARCHIVE_SIZE: str = 'FFMPEG_MAX_ARCHIVE_SIZE'
ENV_SHOW_PROGRESS: str = 'FFMPEG_SHOW_PROGRESS'
ENV_LOG_LEVEL: str = 'FFMPEG_LOG_LEVEL'
ENV_LOG_CONSOLE: str = 'FFMPEG_LOG_CONSOLE'
ENV_LOG_DIR: str = 'FFMPEG_LOG_DIR'


__all__ = [
    # Tools
    'TOOL_FFMPEG',
    'TOOL_FFPROBE',
    'TOOL_FFPLAY',
    'EXECUTABLE_SUFFIX_WINDOWS',
    'EXECUTABLE_MODE',

    # Sources
    'DIRECT_ORIGIN',
    'RELEASE_PATH',
    'RELEASE_PATH_SUFFIX',
    'SPEED_TEST_URL',

    # Archive naming
    'ARCHIVE_PREFIX',
    'ARCHIVE_SUFFIX',
    'ZIP_EXTENSION',
    'TAR_XZ_EXTENSION',

    # Defaults
    'DEFAULT_PROBE_TIMEOUT',
    'DEFAULT_CONNECT_TIMEOUT',
    'DEFAULT_READ_TIMEOUT',
    'DEFAULT_CHUNK_SIZE',
    'DEFAULT_USER_AGENT',
    'DEFAULT_MAX_ARCHIVE_SIZE',
    'DEFAULT_STORAGE_DIRNAME',

    # Logging
    'LOG_INPUT',
    'LOG_PROCESS',
    'LOG_OUTPUT',
    'LOGGER_ROOT',
    'LOGGER_CORE',
    'LOGGER_ENGINE',
    'LOGGER_CLI',
    'LOGGER_EXTRACTION',
    'LOG_FORMAT',
    'LOG_DATE_FORMAT',
    'LOG_FILE_ACTIVITY',
    'LOG_FILE_ERRORS',

    # Environment variable keys
    'ENV_INSTALL_DIR',
    'ENV_PROXY_INDEX',
    'ENV_PROBE_TIMEOUT',
    'ENV_CONNECT_TIMEOUT',
    'ENV_READ_TIMEOUT',
    'ENV_CHUNK_SIZE',
    'ENV_USER_AGENT',
    'ENV_MAX_ARCHIVE_SIZE',
    'ENV_SHOW_PROGRESS',
    'ENV_LOG_LEVEL',
    'ENV_LOG_CONSOLE',
    'ENV_LOG_DIR',
]
