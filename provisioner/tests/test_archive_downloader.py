# Path: provisioner/tests/test_archive_downloader.py
"""
Unit tests for ArchiveDownloader.

Tests:
- Streams the body to a temp-<ms> file with the archive's extension
- Progress is reported only when Content-Length is known
- Failures raise DownloadError and leave no partial file behind
"""

import asyncio

import aiohttp
import pytest

from provisioner.core.exceptions import DownloadError
from provisioner.engine.archive_downloader import (
    ArchiveDownloader,
    parse_content_length,
    temp_archive_path,
)
from provisioner.engine.protocol_handlers import HTTPHandler
from provisioner.tests.fixtures import (
    LINUX_ARCHIVE,
    WINDOWS_ARCHIVE,
    FakeRoute,
    FakeSession,
    make_sources,
)

SOURCE = make_sources(2)[1]
URL = f"{SOURCE.base_url}{LINUX_ARCHIVE}"
BODY = bytes(range(256)) * 64


def make_downloader(route, on_progress=None):
    session = FakeSession({URL: route})
    downloader = ArchiveDownloader(HTTPHandler(session=session), on_progress=on_progress, show_progress=False)
    downloader.chunk_size = 1024
    return downloader, session


def test_parse_content_length():
    assert parse_content_length('2048') == 2048
    assert parse_content_length(None) == 0
    assert parse_content_length('') == 0
    assert parse_content_length('lots') == 0


def test_temp_archive_path_keeps_extension(tmp_path):
    assert temp_archive_path(tmp_path, WINDOWS_ARCHIVE).name.endswith('.zip')
    path = temp_archive_path(tmp_path, LINUX_ARCHIVE)
    assert path.parent == tmp_path
    assert path.name.startswith('temp-')
    assert path.name.endswith('.tar.xz')


def test_download_writes_temp_archive(tmp_path):
    snapshots = []
    downloader, session = make_downloader(FakeRoute(body=BODY), on_progress=snapshots.append)

    archive = asyncio.run(downloader.download_archive(SOURCE, LINUX_ARCHIVE, tmp_path))

    assert session.requests == [URL]
    assert archive.parent == tmp_path
    assert archive.read_bytes() == BODY
    assert len(snapshots) == len(BODY) // 1024
    assert snapshots[-1].downloaded_size == len(BODY)
    assert snapshots[-1].percentage == 100.0
    assert downloader.last_result.file_size == len(BODY)
    assert downloader.last_result.source is SOURCE


def test_unknown_length_reports_no_progress(tmp_path):
    snapshots = []
    downloader, _ = make_downloader(FakeRoute(body=BODY, send_length=False), on_progress=snapshots.append)

    archive = asyncio.run(downloader.download_archive(SOURCE, LINUX_ARCHIVE, tmp_path))

    assert archive.read_bytes() == BODY
    assert snapshots == []


def test_http_error_raises_download_error(tmp_path):
    downloader, _ = make_downloader(FakeRoute(status=404))

    with pytest.raises(DownloadError) as exc_info:
        asyncio.run(downloader.download_archive(SOURCE, LINUX_ARCHIVE, tmp_path))

    assert exc_info.value.status_code == 404
    assert exc_info.value.url == URL
    assert list(tmp_path.iterdir()) == []


def test_connection_error_raises_download_error(tmp_path):
    downloader, _ = make_downloader(FakeRoute(error=aiohttp.ClientConnectionError('reset')))

    with pytest.raises(DownloadError):
        asyncio.run(downloader.download_archive(SOURCE, LINUX_ARCHIVE, tmp_path))

    assert list(tmp_path.iterdir()) == []


def test_interrupted_stream_removes_partial_file(tmp_path):
    route = FakeRoute(body=BODY, stream_error=aiohttp.ClientPayloadError('truncated'))
    downloader, _ = make_downloader(route)

    with pytest.raises(DownloadError):
        asyncio.run(downloader.download_archive(SOURCE, LINUX_ARCHIVE, tmp_path))

    assert list(tmp_path.iterdir()) == [], "partial archive must be deleted"
