# Path: provisioner/engine/speed_prober.py
"""
Speed Prober

Estimates achievable throughput against one source by fetching a
small reference resource in full under a deadline.

A failed probe is a result, not an exception.
"""

import asyncio
import re
import time
from typing import Optional

import aiohttp

from provisioner.core.logger import get_logger
from provisioner.core.config_loader import ConfigLoader
from provisioner.core.exceptions import ProbeFailure
from provisioner.core.models import Source
from provisioner.engine.protocol_handlers import HTTPHandler
from provisioner.engine.result import ProbeResult
from provisioner.engine.constants import is_success_status
from provisioner.constants import (
    DEFAULT_PROBE_TIMEOUT,
    RELEASE_PATH_SUFFIX,
    SPEED_TEST_URL,
)

logger = get_logger(__name__, 'engine')

RELEASE_SUFFIX_PATTERN = re.compile(re.escape(RELEASE_PATH_SUFFIX) + '$')


def build_test_url(source: Source) -> str:
    """
    Reference resource URL for a source.

    The direct origin fetches SPEED_TEST_URL as-is; a mirror drops the
    releases suffix from its base and appends the reference URL.
    """
    if source.is_direct:
        return SPEED_TEST_URL
    base = RELEASE_SUFFIX_PATTERN.sub('', source.base_url)
    return f"{base}/{SPEED_TEST_URL}"


class SpeedProber:
    """
    Measures throughput against a single source.

    Example:
        prober = SpeedProber(http_handler)
        result = await prober.probe(source)
        if result.succeeded:
            print(result.throughput)
    """

    def __init__(
        self,
        http_handler: HTTPHandler,
        config: Optional[ConfigLoader] = None
    ):
        self.http_handler = http_handler
        self.config = config if config else ConfigLoader()
        self.default_timeout = self.config.get('probe_timeout', DEFAULT_PROBE_TIMEOUT)

    async def probe(self, source: Source, timeout: Optional[float] = None) -> ProbeResult:
        """
        Probe one source.

        Args:
            source: Source to measure
            timeout: Deadline in seconds (default from config, 10s)

        Returns:
            ProbeResult; throughput 0 and succeeded False on any failure
        """
        deadline = timeout if timeout is not None else self.default_timeout
        test_url = build_test_url(source)

        try:
            throughput = await self._measure(test_url, deadline)
        except ProbeFailure as e:
            logger.debug(f"Probe failed for {source.name}: {e}")
            return ProbeResult(source=source, throughput=0.0, succeeded=False)

        logger.debug(f"Probe {source.name}: {throughput:.0f} B/s")
        return ProbeResult(source=source, throughput=throughput, succeeded=True)

    async def _measure(self, url: str, deadline: float) -> float:
        start_time = time.monotonic()

        try:
            async with self.http_handler.get(url, timeout=self.http_handler.probe_timeout(deadline)) as response:
                if not is_success_status(response.status):
                    raise ProbeFailure(f"HTTP {response.status}")

                # Full body read: mirrors may throttle after the first bytes
                body = await response.read()

        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            raise ProbeFailure(f"{type(e).__name__}: {e}") from e

        elapsed = max(time.monotonic() - start_time, 1e-6)
        return len(body) / elapsed


__all__ = ['SpeedProber', 'build_test_url']
