"""Shared pytest fixtures for ffvumeter tests."""

import io
import os
from unittest.mock import MagicMock, patch

import pytest

from ffvumeter.config import DisplayConfig, LevelConfig, MeterConfig, SourceConfig
from ffvumeter.terminal import TerminalDisplay


@pytest.fixture(autouse=True)
def isolated_home(monkeypatch, tmp_path):
    """Isolate tests from a real config file and FFVUMETER_* variables."""
    monkeypatch.setenv("HOME", str(tmp_path))
    for key in list(os.environ):
        if key.startswith("FFVUMETER_"):
            monkeypatch.delenv(key)


@pytest.fixture
def level_config():
    """Dynamic range used by the worked examples: -25 dB .. -5 dB."""
    return LevelConfig(min_level=-25.0, max_level=-5.0)


@pytest.fixture
def make_config():
    """Factory for MeterConfig with display overrides."""
    def _make(min_level=-25.0, max_level=-5.0, **display):
        return MeterConfig(
            level=LevelConfig(min_level=min_level, max_level=max_level),
            display=DisplayConfig(**display),
            source=SourceConfig(),
        )
    return _make


@pytest.fixture
def output():
    """In-memory terminal output."""
    return io.StringIO()


@pytest.fixture
def display(output):
    return TerminalDisplay(output)


@pytest.fixture
def rms_line():
    """Factory for ffplay metadata lines."""
    def _line(value):
        return f"lavfi.astats.Overall.RMS_level={value}\n"
    return _line


@pytest.fixture
def mock_popen():
    """Mock subprocess.Popen as used by the level source."""
    with patch('ffvumeter.source.subprocess.Popen') as mock:
        process = MagicMock()
        process.pid = 4242
        process.poll.return_value = None
        process.returncode = 0
        process.stdout = io.StringIO("")
        mock.return_value = process
        yield mock
