"""Signal pipeline: normalize, smooth, track peaks, render."""

from .normalizer import NEG_INF_TOKEN, clamp_fraction, normalize
from .peak import PeakTracker
from .renderer import (
    EMPTY_GLYPH,
    GLYPH_RAMP,
    PEAK_GLYPH,
    SCALE_MAX_GLYPH,
    BarRenderer,
    build_glyph_ramp,
)
from .smoothing import SmoothingBuffer

__all__ = [
    "NEG_INF_TOKEN",
    "clamp_fraction",
    "normalize",
    "SmoothingBuffer",
    "PeakTracker",
    "BarRenderer",
    "build_glyph_ramp",
    "GLYPH_RAMP",
    "EMPTY_GLYPH",
    "PEAK_GLYPH",
    "SCALE_MAX_GLYPH",
]
