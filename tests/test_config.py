"""Tests for configuration management."""

import dataclasses
import json
import os

import pytest

from ffvumeter.config import (
    CONFIG_PATH,
    LevelConfig,
    MeterConfig,
    parse_bool_env,
    parse_float_env,
    parse_int_env,
)
from ffvumeter.exceptions import ConfigurationError


@pytest.fixture
def config_file(tmp_path):
    """Write a config file under the isolated HOME."""
    def _write(data):
        path = tmp_path / CONFIG_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(data if isinstance(data, str) else json.dumps(data))
        return path
    return _write


def test_default_config():
    """Test default configuration values."""
    config = MeterConfig.load()
    assert config.level.min_level == -25.0
    assert config.level.max_level == -5.0
    assert config.level.range == 20.0
    assert config.display.width == 32
    assert config.display.smooth_window == 8
    assert config.display.peak_enabled is True
    assert config.display.peak_window == 24
    assert config.display.falloff_rate == 0.005
    assert config.source.ffplay_format == "pulse"
    assert config.source.ffplay_input == "0"
    assert config.source.ffplay_path == "ffplay"


def test_config_is_immutable():
    config = MeterConfig.load()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.display.width = 10


def test_env_override(monkeypatch):
    """Test environment variable overrides."""
    monkeypatch.setenv('FFVUMETER_MIN_LEVEL', '-40')
    monkeypatch.setenv('FFVUMETER_WIDTH', '64')
    monkeypatch.setenv('FFVUMETER_PEAK_ENABLED', 'off')
    monkeypatch.setenv('FFVUMETER_FALLOFF_RATE', '0.01')
    monkeypatch.setenv('FFVUMETER_FFPLAY_FORMAT', 'alsa')
    monkeypatch.setenv('FFVUMETER_FFPLAY_PATH', '/usr/local/bin/ffplay')

    config = MeterConfig.load()
    assert config.level.min_level == -40.0
    assert config.display.width == 64
    assert config.display.peak_enabled is False
    assert config.display.falloff_rate == 0.01
    assert config.source.ffplay_format == "alsa"
    assert config.source.ffplay_path == "/usr/local/bin/ffplay"


def test_invalid_env_value_falls_back(monkeypatch, caplog):
    monkeypatch.setenv('FFVUMETER_SMOOTH_WINDOW', 'lots')
    config = MeterConfig.load()
    assert config.display.smooth_window == 8
    assert "Invalid integer value 'lots'" in caplog.text


def test_config_file(config_file):
    config_file({"level": {"max_level": 0.0}, "display": {"width": 20, "bogus": 1}})
    config = MeterConfig.load()
    assert config.level.max_level == 0.0
    assert config.display.width == 20


def test_corrupt_config_file_uses_defaults(config_file, capsys):
    config_file("{not json")
    config = MeterConfig.load()
    assert config.display.width == 32
    assert "invalid JSON" in capsys.readouterr().err


def test_overrides_win(monkeypatch, config_file):
    config_file({"display": {"width": 20}})
    monkeypatch.setenv('FFVUMETER_WIDTH', '40')
    config = MeterConfig.load({"display": {"width": 50, "smooth_window": None}})
    assert config.display.width == 50
    assert config.display.smooth_window == 8


def test_unknown_override_section():
    with pytest.raises(ConfigurationError, match="Unknown configuration section"):
        MeterConfig.load({"colors": {"bar": "green"}})


@pytest.mark.parametrize("min_level, max_level", [(-5.0, -25.0), (-10.0, -10.0)])
def test_invalid_level_range(min_level, max_level):
    overrides = {"level": {"min_level": min_level, "max_level": max_level}}
    with pytest.raises(ConfigurationError, match="Invalid level range"):
        MeterConfig.load(overrides)


@pytest.mark.parametrize("display, message", [
    ({"width": 0}, "Invalid width"),
    ({"smooth_window": 0}, "Invalid smoothing window"),
    ({"peak_window": 0}, "Invalid peak window"),
    ({"falloff_rate": -0.1}, "Invalid falloff rate"),
])
def test_invalid_display_values(display, message):
    with pytest.raises(ConfigurationError, match=message):
        MeterConfig.load({"display": display})


def test_empty_ffplay_input():
    with pytest.raises(ConfigurationError, match="ffplay_input"):
        MeterConfig.load({"source": {"ffplay_input": " "}})


def test_level_range_property():
    assert LevelConfig(min_level=-60.0, max_level=0.0).range == 60.0


class TestEnvParsers:
    """Test parse_*_env helpers."""

    def test_missing_returns_default(self):
        assert parse_bool_env('FFVUMETER_UNSET', True) is True
        assert parse_int_env('FFVUMETER_UNSET', 3) == 3
        assert parse_float_env('FFVUMETER_UNSET', 1.5) == 1.5

    @pytest.mark.parametrize("value, expected", [
        ("true", True), ("1", True), ("YES", True), ("on", True),
        ("false", False), ("0", False), ("no", False), ("", False),
    ])
    def test_bool_values(self, monkeypatch, value, expected):
        monkeypatch.setenv('FFVUMETER_FLAG', value)
        assert parse_bool_env('FFVUMETER_FLAG', not expected) is expected

    def test_bad_values_fall_back(self, monkeypatch):
        monkeypatch.setenv('FFVUMETER_BAD', 'maybe')
        assert parse_bool_env('FFVUMETER_BAD', True) is True
        assert parse_int_env('FFVUMETER_BAD', 7) == 7
        assert parse_float_env('FFVUMETER_BAD', 0.5) == 0.5
