# Path: provisioner/engine/constants.py
"""
Provisioner Engine Constants

Source list, HTTP headers and download bookkeeping for the
acquisition engine.
"""

from provisioner.core.models import Source
from provisioner.constants import RELEASE_PATH

# ============================================================================
# DOWNLOAD SOURCES (BtbN/FFmpeg-Builds)
# ============================================================================

# Index 0 is the direct origin; the rest are proxies in default fallback order.
# FFMPEG_PROXY_INDEX selects from this list 1-based.
DOWNLOAD_SOURCES: tuple = (
    Source('GitHub', RELEASE_PATH),
    Source('ghfast mirror', f'https://ghfast.top/{RELEASE_PATH}'),
    Source('git.yylx mirror', f'https://git.yylx.win/{RELEASE_PATH}'),
    Source('gh-proxy mirror', f'https://gh-proxy.com/{RELEASE_PATH}'),
    Source('ghfile mirror', f'https://ghfile.geekertao.top/{RELEASE_PATH}'),
    Source('gh-proxy.net mirror', f'https://gh-proxy.net/{RELEASE_PATH}'),
    Source('1win mirror', f'https://j.1win.ggff.net/{RELEASE_PATH}'),
    Source('ghm mirror', f'https://ghm.078465.xyz/{RELEASE_PATH}'),
    Source('gitproxy mirror', f'https://gitproxy.127731.xyz/{RELEASE_PATH}'),
    Source('jiashu mirror', f'https://jiashu.1win.eu.org/{RELEASE_PATH}'),
    Source('tbedu mirror', f'https://github.tbedu.top/{RELEASE_PATH}'),
    Source('ghproxy mirror', f'https://mirror.ghproxy.com/{RELEASE_PATH}'),
)

# ============================================================================
# HTTP
# ============================================================================
HEADER_USER_AGENT = 'User-Agent'
HEADER_CONTENT_LENGTH = 'Content-Length'

HTTP_SUCCESS_MIN = 200
HTTP_SUCCESS_MAX = 299

# ============================================================================
# TEMPORARY ARCHIVES
# ============================================================================
TEMP_ARCHIVE_PREFIX = 'temp-'


def is_success_status(status: int) -> bool:
    """True for 2xx responses."""
    return HTTP_SUCCESS_MIN <= status <= HTTP_SUCCESS_MAX
