# Path: provisioner/tests/conftest.py
"""Shared pytest setup: a clean configuration for every test."""

import pytest

from provisioner.core.config_loader import ConfigLoader
from provisioner.constants import (
    ENV_INSTALL_DIR,
    ENV_PROXY_INDEX,
    ENV_PROBE_TIMEOUT,
    ENV_CHUNK_SIZE,
    ENV_SHOW_PROGRESS,
    ENV_MAX_ARCHIVE_SIZE,
)

FFMPEG_ENV_KEYS = (
    ENV_INSTALL_DIR,
    ENV_PROXY_INDEX,
    ENV_PROBE_TIMEOUT,
    ENV_CHUNK_SIZE,
    ENV_MAX_ARCHIVE_SIZE,
)


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    for key in FFMPEG_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv(ENV_SHOW_PROGRESS, 'false')
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()
