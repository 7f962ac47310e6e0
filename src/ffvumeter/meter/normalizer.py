"""Mapping of raw dB readings onto the meter's [0, 1] scale."""

import math

from ..config import LevelConfig
from ..exceptions import ConfigurationError, LevelParseError

NEG_INF_TOKEN = "-inf"


def clamp_fraction(value: float) -> float:
    """Clamp a level value to [0.0, 1.0]."""
    return max(0.0, min(1.0, float(value)))


def normalize(raw: str, config: LevelConfig) -> float:
    """
    Convert a raw dB reading into a fraction of the configured range.

    Args:
        raw: Reading as printed by ffplay, a decimal number or ``-inf``
        config: Dynamic range to map onto

    Returns:
        Level in [0.0, 1.0]; ``-inf`` maps to 0.0

    Raises:
        LevelParseError: If the reading is not a number
        ConfigurationError: If the range is not positive
    """
    if not config.range > 0:
        raise ConfigurationError(f"Invalid level range {config.range}")

    raw = raw.strip()
    if raw == NEG_INF_TOKEN:
        db = config.min_level
    else:
        try:
            db = float(raw)
        except ValueError:
            raise LevelParseError(f"Not a level reading: {raw!r}") from None
        if math.isnan(db):
            raise LevelParseError(f"Not a level reading: {raw!r}")

    db = max(min(db, config.max_level), config.min_level)
    return clamp_fraction((db - config.min_level) / config.range)
