"""Custom exceptions for ffvumeter."""


class FFVUMeterError(Exception):
    """Base exception for all ffvumeter errors."""
    pass


class ConfigurationError(FFVUMeterError):
    """Raised when configuration is invalid."""
    pass


class LevelParseError(FFVUMeterError):
    """Raised when a level reading is not a number."""
    pass


class SourceError(FFVUMeterError):
    """Base exception for level source (ffplay) failures."""
    pass


class SourceSpawnError(SourceError):
    """Raised when the ffplay process cannot be started."""
    pass
