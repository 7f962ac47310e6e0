"""ffvumeter - Terminal VU meter fed by ffplay level metadata."""

__version__ = "0.1.0"

from .config import (
    MeterConfig,
    LevelConfig,
    DisplayConfig,
    SourceConfig,
)
from .exceptions import (
    FFVUMeterError,
    ConfigurationError,
    LevelParseError,
    SourceError,
    SourceSpawnError,
)
from .meter import (
    normalize,
    SmoothingBuffer,
    PeakTracker,
    BarRenderer,
)
from .source import LevelSource
from .terminal import TerminalMode, TerminalDisplay
from .loop import MeterLoop, MeterState, run_meter

__all__ = [
    # Configuration
    "MeterConfig",
    "LevelConfig",
    "DisplayConfig",
    "SourceConfig",
    # Exceptions
    "FFVUMeterError",
    "ConfigurationError",
    "LevelParseError",
    "SourceError",
    "SourceSpawnError",
    # Signal pipeline
    "normalize",
    "SmoothingBuffer",
    "PeakTracker",
    "BarRenderer",
    # Runtime
    "LevelSource",
    "TerminalMode",
    "TerminalDisplay",
    "MeterLoop",
    "MeterState",
    "run_meter",
]
