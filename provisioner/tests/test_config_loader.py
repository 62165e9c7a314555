# Path: provisioner/tests/test_config_loader.py
"""Unit tests for ConfigLoader defaults and environment parsing."""

from pathlib import Path

from provisioner.core.config_loader import ConfigLoader
from provisioner.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_PROBE_TIMEOUT,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_USER_AGENT,
)


def test_defaults():
    config = ConfigLoader()

    assert config.get('install_dir') is None
    assert config.get('proxy_index') is None
    assert config['probe_timeout'] == DEFAULT_PROBE_TIMEOUT
    assert config['connect_timeout'] == DEFAULT_CONNECT_TIMEOUT
    assert config['read_timeout'] == DEFAULT_READ_TIMEOUT
    assert config['chunk_size'] == DEFAULT_CHUNK_SIZE
    assert config['user_agent'] == DEFAULT_USER_AGENT


def test_singleton_until_reset(monkeypatch):
    first = ConfigLoader()
    assert ConfigLoader() is first

    monkeypatch.setenv('FFMPEG_CHUNK_SIZE', '1024')
    assert ConfigLoader().get('chunk_size') == DEFAULT_CHUNK_SIZE

    ConfigLoader.reset()
    assert ConfigLoader().get('chunk_size') == 1024


def test_proxy_index_parsing(monkeypatch):
    monkeypatch.setenv('FFMPEG_PROXY_INDEX', '3')
    ConfigLoader.reset()
    assert ConfigLoader().get('proxy_index') == 3

    monkeypatch.setenv('FFMPEG_PROXY_INDEX', '0')
    ConfigLoader.reset()
    assert ConfigLoader().get('proxy_index') == 0

    monkeypatch.setenv('FFMPEG_PROXY_INDEX', 'fastest')
    ConfigLoader.reset()
    assert ConfigLoader().get('proxy_index') is None, "unparseable index means automatic"


def test_invalid_numbers_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv('FFMPEG_PROBE_TIMEOUT', 'soon')
    monkeypatch.setenv('FFMPEG_READ_TIMEOUT', '')
    ConfigLoader.reset()
    config = ConfigLoader()

    assert config['probe_timeout'] == DEFAULT_PROBE_TIMEOUT
    assert config['read_timeout'] == DEFAULT_READ_TIMEOUT


def test_paths_and_flags(monkeypatch, tmp_path):
    monkeypatch.setenv('FFMPEG_INSTALL_DIR', str(tmp_path))
    monkeypatch.setenv('FFMPEG_SHOW_PROGRESS', 'yes')
    ConfigLoader.reset()
    config = ConfigLoader()

    assert config['install_dir'] == Path(tmp_path)
    assert config['show_progress'] is True
    assert 'log_level' in config
