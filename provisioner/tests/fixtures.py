# Path: provisioner/tests/fixtures.py
"""
Test Fixtures for the Provisioner

Stand-ins for the aiohttp session and builders for release archives.

FakeSession answers GET requests from a route table keyed by URL and
records every URL it was asked for, so tests can assert which sources
were contacted.
"""

import io
import tarfile
import zipfile
from dataclasses import dataclass, field
from typing import Optional

import aiohttp

from provisioner.core.models import Architecture, Platform, Source, SystemIdentity
from provisioner.engine.result import ProbeResult

LINUX_X64 = SystemIdentity(Platform.LINUX, Architecture.X64, '')
WINDOWS_X64 = SystemIdentity(Platform.WINDOWS, Architecture.X64, '.exe')
MACOS_ARM64 = SystemIdentity(Platform.MACOS, Architecture.ARM64, '')

LINUX_ARCHIVE = 'ffmpeg-master-latest-linux64-gpl.tar.xz'
WINDOWS_ARCHIVE = 'ffmpeg-master-latest-win64-gpl.zip'

FFMPEG_BYTES = b'\x7fELF fake ffmpeg binary'
FFPROBE_BYTES = b'\x7fELF fake ffprobe binary'
FFPLAY_BYTES = b'\x7fELF fake ffplay binary'


# ============================================================================
# FAKE HTTP
# ============================================================================

@dataclass
class FakeRoute:
    """
    Canned response for one URL.

    Attributes:
        body: Response body
        status: HTTP status
        headers: Response headers (Content-Length added unless omitted)
        error: Raised when the request is opened
        stream_error: Raised after the first streamed chunk
        send_length: Whether to send Content-Length
    """
    body: bytes = b''
    status: int = 200
    headers: dict = field(default_factory=dict)
    error: Optional[Exception] = None
    stream_error: Optional[Exception] = None
    send_length: bool = True


class FakeContent:
    """Minimal aiohttp.StreamReader."""

    def __init__(self, route: FakeRoute):
        self.route = route

    async def iter_chunked(self, size: int):
        body = self.route.body
        for offset in range(0, len(body), size):
            yield body[offset:offset + size]
            if self.route.stream_error is not None:
                raise self.route.stream_error


class FakeResponse:
    """Minimal aiohttp.ClientResponse used as an async context manager."""

    def __init__(self, route: FakeRoute):
        self.route = route
        self.status = route.status
        self.reason = 'OK' if 200 <= route.status < 300 else 'Error'
        self.headers = dict(route.headers)
        if route.send_length:
            self.headers.setdefault('Content-Length', str(len(route.body)))
        self.content = FakeContent(route)

    async def read(self) -> bytes:
        return self.route.body

    async def __aenter__(self):
        if self.route.error is not None:
            raise self.route.error
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False


class FakeSession:
    """
    Minimal aiohttp.ClientSession.

    Unknown URLs fail with a connection error.
    """

    def __init__(self, routes: Optional[dict] = None):
        self.routes = routes if routes else {}
        self.requests: list[str] = []
        self.headers_seen: list[dict] = []
        self.closed = False

    def get(self, url: str, headers: Optional[dict] = None, timeout=None):
        self.requests.append(url)
        self.headers_seen.append(dict(headers or {}))
        route = self.routes.get(url)
        if route is None:
            route = FakeRoute(error=aiohttp.ClientConnectionError(f"no route to {url}"))
        return FakeResponse(route)

    async def close(self):
        self.closed = True


class FakeProber:
    """Speed prober returning fixed throughputs by source name (None = failed)."""

    def __init__(self, speeds: dict):
        self.speeds = speeds
        self.probed: list[str] = []

    async def probe(self, source: Source, timeout: Optional[float] = None) -> ProbeResult:
        self.probed.append(source.name)
        speed = self.speeds.get(source.name)
        if speed is None:
            return ProbeResult(source=source, throughput=0.0, succeeded=False)
        return ProbeResult(source=source, throughput=float(speed), succeeded=True)


# ============================================================================
# ARCHIVES
# ============================================================================

def build_tar_xz(members: dict) -> bytes:
    """tar.xz archive with the given {member name: bytes}."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode='w:xz') as tf:
        for name, data in members.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = 0o644
            tf.addfile(info, io.BytesIO(data))
    return buffer.getvalue()


def build_zip(members: dict, compression: int = zipfile.ZIP_STORED) -> bytes:
    """zip archive with the given {member name: bytes}."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w', compression=compression) as zf:
        for name, data in members.items():
            zf.writestr(name, data)
    return buffer.getvalue()


def corrupt_zip_member(data: bytes, name: str, length: int = 40) -> bytes:
    """Invert length bytes in the middle of a member's compressed data."""
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        info = zf.getinfo(name)

    header = data[info.header_offset:info.header_offset + 30]
    name_length = int.from_bytes(header[26:28], 'little')
    extra_length = int.from_bytes(header[28:30], 'little')
    start = info.header_offset + 30 + name_length + extra_length
    middle = start + info.compress_size // 2 - length // 2

    damaged = bytearray(data)
    for offset in range(middle, middle + length):
        damaged[offset] ^= 0xFF
    return bytes(damaged)


def linux_release_archive() -> bytes:
    """Release-shaped tar.xz for Linux builds."""
    root = 'ffmpeg-master-latest-linux64-gpl'
    return build_tar_xz({
        f'{root}/bin/ffmpeg': FFMPEG_BYTES,
        f'{root}/bin/ffprobe': FFPROBE_BYTES,
        f'{root}/doc/ffmpeg.html': b'<html></html>',
        f'{root}/LICENSE.txt': b'GPL',
    })


def windows_release_archive() -> bytes:
    """Release-shaped zip for Windows builds."""
    root = 'ffmpeg-master-latest-win64-gpl'
    return build_zip({
        f'{root}/bin/ffmpeg.exe': FFMPEG_BYTES,
        f'{root}/bin/ffprobe.exe': FFPROBE_BYTES,
        f'{root}/bin/ffplay.exe': FFPLAY_BYTES,
        f'{root}/doc/ffmpeg.html': b'<html></html>',
    })


def make_sources(count: int) -> list[Source]:
    """Direct origin plus count - 1 mirrors on example hosts."""
    sources = [Source('GitHub', 'https://github.com/BtbN/FFmpeg-Builds/releases/download/latest/')]
    for index in range(1, count):
        sources.append(Source(
            f'mirror-{index}',
            f'https://mirror{index}.example/https://github.com/BtbN/FFmpeg-Builds/releases/download/latest/'
        ))
    return sources


__all__ = [
    'LINUX_X64',
    'WINDOWS_X64',
    'MACOS_ARM64',
    'LINUX_ARCHIVE',
    'WINDOWS_ARCHIVE',
    'FFMPEG_BYTES',
    'FFPROBE_BYTES',
    'FFPLAY_BYTES',
    'FakeRoute',
    'FakeSession',
    'FakeProber',
    'build_tar_xz',
    'build_zip',
    'corrupt_zip_member',
    'linux_release_archive',
    'windows_release_archive',
    'make_sources',
]
