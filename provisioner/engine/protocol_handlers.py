# Path: provisioner/engine/protocol_handlers.py
"""
Protocol Handlers

HTTPS transport shared by the speed prober and the archive downloader.

Architecture:
- Async HTTP client (aiohttp) with a lazily created session
- Fixed User-Agent header
- Per-request timeouts supplied by the caller
- Injectable session for tests
"""

from typing import Optional

import aiohttp

from provisioner.core.logger import get_logger
from provisioner.core.config_loader import ConfigLoader
from provisioner.constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_USER_AGENT,
)
from provisioner.engine.constants import HEADER_USER_AGENT

logger = get_logger(__name__, 'engine')


class HTTPHandler:
    """
    HTTP/HTTPS handler.

    Example:
        async with HTTPHandler() as http:
            async with http.get(url, timeout=http.download_timeout()) as response:
                async for chunk in response.content.iter_chunked(65536):
                    ...
    """

    def __init__(
        self,
        config: Optional[ConfigLoader] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize HTTP handler.

        Args:
            config: Optional ConfigLoader instance
            session: Pre-built session; not closed by this handler
        """
        self.config = config if config else ConfigLoader()

        self.user_agent = self.config.get('user_agent', DEFAULT_USER_AGENT)
        self.connect_timeout = self.config.get('connect_timeout', DEFAULT_CONNECT_TIMEOUT)
        self.read_timeout = self.config.get('read_timeout', DEFAULT_READ_TIMEOUT)

        self._session = session
        self._owns_session = session is None

    def build_headers(self, custom_headers: Optional[dict[str, str]] = None) -> dict[str, str]:
        """Build request headers."""
        headers = {HEADER_USER_AGENT: self.user_agent}
        if custom_headers:
            headers.update(custom_headers)
        return headers

    def probe_timeout(self, seconds: float) -> aiohttp.ClientTimeout:
        """Deadline covering the whole request, body included."""
        return aiohttp.ClientTimeout(total=seconds)

    def download_timeout(self) -> aiohttp.ClientTimeout:
        """
        No overall deadline for large archives; a connection that
        stalls for read_timeout seconds is abandoned.
        """
        return aiohttp.ClientTimeout(
            total=None,
            connect=self.connect_timeout,
            sock_read=self.read_timeout
        )

    def get(self, url: str, timeout: aiohttp.ClientTimeout, headers: Optional[dict[str, str]] = None):
        """
        Issue a GET request.

        Returns:
            Response context manager (use with 'async with')
        """
        logger.debug(f"GET {url}")
        session = self._get_session()
        return session.get(url, headers=self.build_headers(headers), timeout=timeout)

    def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self):
        """Close the HTTP session if this handler created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


__all__ = ['HTTPHandler']
