"""Configuration management for ffvumeter."""

import json
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(".config") / "ffvumeter" / "config.json"


def parse_bool_env(env_var: str, default: bool) -> bool:
    """Parse boolean environment variable with validation."""
    value = os.getenv(env_var)
    if value is None:
        return default

    value_lower = value.lower().strip()
    if value_lower in ('true', '1', 'yes', 'on'):
        return True
    elif value_lower in ('false', '0', 'no', 'off', ''):
        return False
    else:
        logger.warning(
            f"Invalid boolean value '{value}' for {env_var}. "
            f"Valid: true/false, 1/0, yes/no, on/off. Using default: {default}"
        )
        return default


def parse_int_env(env_var: str, default: int) -> int:
    """Parse integer environment variable with validation."""
    value = os.getenv(env_var)
    if value is None:
        return default

    try:
        return int(value)
    except ValueError:
        logger.warning(
            f"Invalid integer value '{value}' for {env_var}. "
            f"Using default: {default}"
        )
        return default


def parse_float_env(env_var: str, default: float) -> float:
    """Parse float environment variable with validation."""
    value = os.getenv(env_var)
    if value is None:
        return default

    try:
        return float(value)
    except ValueError:
        logger.warning(
            f"Invalid float value '{value}' for {env_var}. "
            f"Using default: {default}"
        )
        return default


@dataclass(frozen=True)
class LevelConfig:
    """Dynamic range of the meter, in dB."""
    min_level: float = -25.0
    max_level: float = -5.0

    @property
    def range(self) -> float:
        return self.max_level - self.min_level


@dataclass(frozen=True)
class DisplayConfig:
    """Configuration for the bar display and its filters."""
    width: int = 32                # Columns, excluding the scale marker
    smooth_window: int = 8         # Samples averaged for the bar
    peak_enabled: bool = True      # Show the peak hold marker
    peak_window: int = 24          # Samples held by the peak marker
    falloff_rate: float = 0.005    # Max peak drop per sample (fraction of range)


@dataclass(frozen=True)
class SourceConfig:
    """Configuration for the ffplay level source."""
    ffplay_format: str = "pulse"   # ffplay -f
    ffplay_input: str = "0"        # ffplay -i
    ffplay_path: str = "ffplay"


@dataclass(frozen=True)
class MeterConfig:
    """Main configuration for ffvumeter. Read-only once loaded."""
    level: LevelConfig
    display: DisplayConfig
    source: SourceConfig

    @classmethod
    def default(cls) -> 'MeterConfig':
        return cls(level=LevelConfig(), display=DisplayConfig(), source=SourceConfig())

    @classmethod
    def load(cls, overrides: Optional[Dict[str, Dict[str, Any]]] = None) -> 'MeterConfig':
        """
        Load configuration from file, environment variables and overrides.

        Args:
            overrides: Per-section values (usually from the command line) that
                win over every other source. ``None`` values are ignored.

        Returns:
            Validated MeterConfig

        Raises:
            ConfigurationError: If the resulting configuration is invalid
        """
        defaults = cls.default()
        config_dict = {
            "level": {
                "min_level": defaults.level.min_level,
                "max_level": defaults.level.max_level,
            },
            "display": {
                "width": defaults.display.width,
                "smooth_window": defaults.display.smooth_window,
                "peak_enabled": defaults.display.peak_enabled,
                "peak_window": defaults.display.peak_window,
                "falloff_rate": defaults.display.falloff_rate,
            },
            "source": {
                "ffplay_format": defaults.source.ffplay_format,
                "ffplay_input": defaults.source.ffplay_input,
                "ffplay_path": defaults.source.ffplay_path,
            },
        }

        # Load from config file if exists
        config_path = Path.home() / CONFIG_PATH
        if config_path.exists():
            try:
                with open(config_path, "r") as f:
                    file_config = json.load(f)
                logger.info(f"Loading configuration from {config_path}")

                for section, values in file_config.items():
                    if section in config_dict and isinstance(values, dict):
                        known = {k: v for k, v in values.items() if k in config_dict[section]}
                        config_dict[section].update(known)

            except json.JSONDecodeError as e:
                error_msg = (
                    f"Configuration file is corrupted or contains invalid JSON:\n"
                    f"  File: {config_path}\n"
                    f"  Error: {e}\n"
                    f"  Using default configuration instead."
                )
                logger.error(error_msg)
                print(f"WARNING: {error_msg}", file=sys.stderr)

            except OSError as e:
                logger.warning(f"Failed to load config from file: {e}")

        # Override with environment variables
        config_dict["level"]["min_level"] = parse_float_env('FFVUMETER_MIN_LEVEL', config_dict["level"]["min_level"])
        config_dict["level"]["max_level"] = parse_float_env('FFVUMETER_MAX_LEVEL', config_dict["level"]["max_level"])

        config_dict["display"]["width"] = parse_int_env('FFVUMETER_WIDTH', config_dict["display"]["width"])
        config_dict["display"]["smooth_window"] = parse_int_env('FFVUMETER_SMOOTH_WINDOW', config_dict["display"]["smooth_window"])
        config_dict["display"]["peak_enabled"] = parse_bool_env('FFVUMETER_PEAK_ENABLED', config_dict["display"]["peak_enabled"])
        config_dict["display"]["peak_window"] = parse_int_env('FFVUMETER_PEAK_WINDOW', config_dict["display"]["peak_window"])
        config_dict["display"]["falloff_rate"] = parse_float_env('FFVUMETER_FALLOFF_RATE', config_dict["display"]["falloff_rate"])

        config_dict["source"]["ffplay_format"] = os.getenv('FFVUMETER_FFPLAY_FORMAT', config_dict["source"]["ffplay_format"])
        config_dict["source"]["ffplay_input"] = os.getenv('FFVUMETER_FFPLAY_INPUT', config_dict["source"]["ffplay_input"])
        config_dict["source"]["ffplay_path"] = os.getenv('FFVUMETER_FFPLAY_PATH', config_dict["source"]["ffplay_path"])

        # Command line wins
        for section, values in (overrides or {}).items():
            if section not in config_dict:
                raise ConfigurationError(f"Unknown configuration section '{section}'")
            for key, value in values.items():
                if value is not None:
                    config_dict[section][key] = value

        config = cls(
            level=LevelConfig(**config_dict["level"]),
            display=DisplayConfig(**config_dict["display"]),
            source=SourceConfig(**config_dict["source"]),
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Validate configuration values."""
        if not self.level.range > 0:
            raise ConfigurationError(
                f"Invalid level range: min {self.level.min_level} dB must be "
                f"below max {self.level.max_level} dB"
            )

        if self.display.width < 1:
            raise ConfigurationError(
                f"Invalid width {self.display.width}. Must be at least 1 column"
            )

        if self.display.smooth_window < 1:
            raise ConfigurationError(
                f"Invalid smoothing window {self.display.smooth_window}. "
                "Must be at least 1 sample"
            )

        if self.display.peak_window < 1:
            raise ConfigurationError(
                f"Invalid peak window {self.display.peak_window}. "
                "Must be at least 1 sample"
            )

        if self.display.falloff_rate < 0:
            raise ConfigurationError(
                f"Invalid falloff rate {self.display.falloff_rate}. "
                "Must be >= 0"
            )

        for name in ("ffplay_format", "ffplay_input", "ffplay_path"):
            if not str(getattr(self.source, name)).strip():
                raise ConfigurationError(f"Invalid {name}: must not be empty")
