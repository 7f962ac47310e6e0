"""Quantization of levels into a line of block glyphs."""

from typing import Optional, Sequence, Tuple

from ..exceptions import ConfigurationError
from .normalizer import clamp_fraction

EMPTY_GLYPH = " "
PEAK_GLYPH = "\u2758"
SCALE_MAX_GLYPH = "|"


def build_glyph_ramp() -> Tuple[str, ...]:
    """
    Build the glyph ramp used for sub-column resolution.

    Returns:
        The empty glyph followed by the eight left-aligned blocks,
        thinnest (U+258F) to full (U+2588)
    """
    blocks = tuple(chr(code) for code in range(0x258F, 0x2587, -1))
    return (EMPTY_GLYPH,) + blocks


GLYPH_RAMP = build_glyph_ramp()


class BarRenderer:
    """Renders a level, and optionally a peak marker, as a fixed-width bar."""

    def __init__(self, width: int, ramp: Optional[Sequence[str]] = None):
        """
        Initialize renderer.

        Args:
            width: Number of bar columns, excluding the scale marker
            ramp: Glyphs from empty to full (defaults to GLYPH_RAMP)
        """
        if width < 1:
            raise ConfigurationError(f"Invalid width {width}")
        self.width = width
        self.ramp = tuple(ramp) if ramp is not None else GLYPH_RAMP
        if len(self.ramp) < 2:
            raise ConfigurationError("Glyph ramp needs an empty and a full glyph")

    @property
    def resolution(self) -> int:
        """Quantization units across the whole bar."""
        return len(self.ramp) * self.width

    def render(self, level: float, peak: Optional[float] = None) -> str:
        """
        Render one display line.

        Args:
            level: Smoothed level in [0.0, 1.0]
            peak: Peak level in [0.0, 1.0], or None to hide the marker

        Returns:
            Exactly ``width`` glyphs followed by the scale marker
        """
        ramp_size = len(self.ramp)
        full = self.ramp[-1]
        units = int(self.resolution * clamp_fraction(level))

        glyphs = []
        while units > ramp_size:
            glyphs.append(full)
            units -= ramp_size

        # units == ramp_size is a completely filled column
        glyphs.append(full if units == ramp_size else self.ramp[units])

        peak_column = None
        if peak is not None:
            peak_column = int(self.width * clamp_fraction(peak))

        for column in range(len(glyphs), self.width):
            glyphs.append(PEAK_GLYPH if column == peak_column else EMPTY_GLYPH)

        return "".join(glyphs) + SCALE_MAX_GLYPH
