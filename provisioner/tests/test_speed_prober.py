# Path: provisioner/tests/test_speed_prober.py
"""
Unit tests for SpeedProber.

Tests:
- build_test_url: direct origin and mirror forms
- probe: success, non-2xx and transport failures never raise
"""

import asyncio

import aiohttp

from provisioner.constants import SPEED_TEST_URL
from provisioner.core.models import Source
from provisioner.engine.protocol_handlers import HTTPHandler
from provisioner.engine.speed_prober import SpeedProber, build_test_url
from provisioner.tests.fixtures import FakeRoute, FakeSession

DIRECT = Source('GitHub', 'https://github.com/BtbN/FFmpeg-Builds/releases/download/latest/')
MIRROR = Source('ghfast mirror', 'https://ghfast.top/https://github.com/BtbN/FFmpeg-Builds/releases/download/latest/')
MIRROR_TEST_URL = f'https://ghfast.top/https://github.com/BtbN/FFmpeg-Builds/{SPEED_TEST_URL}'


def make_prober(routes):
    session = FakeSession(routes)
    return SpeedProber(HTTPHandler(session=session)), session


def test_direct_origin_fetches_reference_as_is():
    assert DIRECT.is_direct
    assert build_test_url(DIRECT) == SPEED_TEST_URL


def test_mirror_drops_release_suffix():
    assert not MIRROR.is_direct
    assert build_test_url(MIRROR) == MIRROR_TEST_URL


def test_successful_probe_reports_throughput():
    prober, session = make_prober({SPEED_TEST_URL: FakeRoute(body=b'x' * 4096)})

    result = asyncio.run(prober.probe(DIRECT))

    assert result.succeeded
    assert result.throughput > 0
    assert result.usable
    assert session.requests == [SPEED_TEST_URL]
    assert session.headers_seen[0]['User-Agent'] == 'ffmpeg-provisioner/1.0.0'


def test_http_error_is_a_failed_result():
    prober, _ = make_prober({MIRROR_TEST_URL: FakeRoute(status=503)})

    result = asyncio.run(prober.probe(MIRROR))

    assert not result.succeeded
    assert result.throughput == 0.0
    assert result.source is MIRROR


def test_transport_errors_are_failed_results():
    prober, _ = make_prober({
        SPEED_TEST_URL: FakeRoute(error=asyncio.TimeoutError()),
        MIRROR_TEST_URL: FakeRoute(error=aiohttp.ClientConnectionError('refused')),
    })

    direct = asyncio.run(prober.probe(DIRECT, timeout=0.5))
    mirror = asyncio.run(prober.probe(MIRROR))

    assert not direct.succeeded and direct.throughput == 0.0
    assert not mirror.succeeded and mirror.throughput == 0.0
