"""Meter loop: reads ffplay output and redraws the bar for every sample."""

import logging
import signal
import sys
from contextlib import ExitStack, contextmanager
from enum import Enum
from typing import Iterable, Iterator, Optional, TextIO

from .config import MeterConfig
from .exceptions import LevelParseError
from .meter import BarRenderer, PeakTracker, SmoothingBuffer, normalize
from .source import LevelSource, extract_level_token
from .terminal import TerminalDisplay, TerminalMode

logger = logging.getLogger(__name__)

TERMINATING_SIGNALS = (signal.SIGTERM, signal.SIGHUP)


class MeterState(Enum):
    """Meter loop state machine."""
    INIT = "init"
    RUNNING = "running"
    TERMINATED = "terminated"


class MeterLoop:
    """
    Turns level lines into meter frames.

    Owns the smoothing and peak state for the lifetime of the meter; the
    configuration is shared read-only.
    """

    def __init__(self, config: MeterConfig, display: Optional[TerminalDisplay] = None):
        """
        Initialize meter loop.

        Args:
            config: Validated configuration
            display: Where frames are drawn (defaults to stdout)
        """
        config.validate()
        self.config = config
        self.display = display if display is not None else TerminalDisplay()

        self.smoothing = SmoothingBuffer(config.display.smooth_window)
        self.peak_tracker: Optional[PeakTracker] = None
        if config.display.peak_enabled:
            self.peak_tracker = PeakTracker(
                config.display.peak_window, config.display.falloff_rate
            )
        self.renderer = BarRenderer(config.display.width)

        self._state = MeterState.INIT

    @property
    def state(self) -> MeterState:
        return self._state

    def _set_state(self, new_state: MeterState) -> None:
        logger.debug(f"State: {self._state.value} -> {new_state.value}")
        self._state = new_state

    def process_level(self, level: float) -> str:
        """Smooth a normalized level, track its peak and render the frame."""
        smoothed = self.smoothing.push(level)
        peak = None
        if self.peak_tracker is not None:
            peak = self.peak_tracker.push(smoothed)
        return self.renderer.render(smoothed, peak)

    def process_line(self, line: str) -> Optional[str]:
        """
        Process one line of ffplay output.

        Returns:
            The rendered frame, or None when the line carries no usable level
        """
        token = extract_level_token(line)
        if token is None:
            return None

        try:
            level = normalize(token, self.config.level)
        except LevelParseError as e:
            logger.debug(f"Skipping sample: {e}")
            return None

        return self.process_level(level)

    def run(self, lines: Iterable[str]) -> int:
        """
        Draw a frame for every level line until the input ends.

        Returns:
            Number of frames drawn
        """
        self._set_state(MeterState.RUNNING)
        frames = 0
        try:
            for line in lines:
                frame = self.process_line(line)
                if frame is None:
                    continue
                self.display.draw(frame)
                frames += 1
        finally:
            self._set_state(MeterState.TERMINATED)
        logger.info(f"Input closed after {frames} frames")
        return frames


@contextmanager
def signals_as_exit() -> Iterator[None]:
    """Turn SIGTERM/SIGHUP into SystemExit so cleanup blocks run."""
    def handler(signum, frame):
        logger.info(f"Received signal {signum}, shutting down")
        raise SystemExit(128 + signum)

    previous = {}
    for signum in TERMINATING_SIGNALS:
        previous[signum] = signal.signal(signum, handler)
    try:
        yield
    finally:
        for signum, old_handler in previous.items():
            signal.signal(signum, old_handler)


def run_meter(
    config: MeterConfig,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    """
    Run the meter until ffplay exits.

    The terminal mode and the ffplay process are released on every exit
    path, in reverse order of acquisition.

    Returns:
        Number of frames drawn

    Raises:
        SourceSpawnError: If ffplay cannot be started
    """
    display = TerminalDisplay(stdout if stdout is not None else sys.stdout)
    meter = MeterLoop(config, display)

    with ExitStack() as stack:
        stack.enter_context(signals_as_exit())
        stack.enter_context(TerminalMode(stdin if stdin is not None else sys.stdin))
        stack.callback(display.finish)
        source = stack.enter_context(LevelSource(config.source))

        display.save_cursor()
        return meter.run(source.lines())
