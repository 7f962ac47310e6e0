"""Terminal line discipline and in-place drawing."""

import logging
import os
import sys
import termios
from typing import List, Optional, TextIO

logger = logging.getLogger(__name__)

SAVE_CURSOR = "\x1b7"
RESTORE_CURSOR = "\x1b8"
CLEAR_TO_END = "\x1b[J"

# Index of the local modes field in a termios attribute list
_LFLAG = 3
_CC = 6


class TerminalMode:
    """
    Puts a terminal into no-echo, character-at-a-time mode.

    The attributes captured on entry are restored on exit, whatever the
    reason for leaving the block. Streams that are not a tty are left alone.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdin
        self._fd: Optional[int] = None
        self._saved: Optional[List] = None

    @property
    def active(self) -> bool:
        return self._saved is not None

    def _terminal_fd(self) -> Optional[int]:
        try:
            fd = self.stream.fileno()
        except (AttributeError, ValueError, OSError):
            return None
        return fd if os.isatty(fd) else None

    def enter(self) -> None:
        """Capture current attributes and switch to cbreak without echo."""
        fd = self._terminal_fd()
        if fd is None:
            logger.debug("Input is not a terminal, leaving line discipline alone")
            return

        self._fd = fd
        self._saved = termios.tcgetattr(fd)

        attrs = termios.tcgetattr(fd)
        attrs[_LFLAG] &= ~(termios.ECHO | termios.ICANON)
        attrs[_CC][termios.VMIN] = 1
        attrs[_CC][termios.VTIME] = 0
        termios.tcsetattr(fd, termios.TCSAFLUSH, attrs)
        logger.debug("Terminal echo and canonical mode disabled")

    def restore(self) -> None:
        """Restore the captured attributes. Safe to call more than once."""
        if self._saved is None:
            return
        saved, self._saved = self._saved, None
        try:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, saved)
            logger.debug("Terminal attributes restored")
        except termios.error as e:
            logger.error(f"Failed to restore terminal attributes: {e}")

    def __enter__(self) -> 'TerminalMode':
        self.enter()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.restore()
        return False


class TerminalDisplay:
    """Redraws a single meter line in place using ANSI cursor control."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout
        self.frames = 0

    def save_cursor(self) -> None:
        """Mark the position every frame is drawn from."""
        self.stream.write(SAVE_CURSOR)
        self.stream.flush()

    def draw(self, line: str) -> None:
        """Replace the previous frame with ``line``."""
        self.stream.write(RESTORE_CURSOR + CLEAR_TO_END + line)
        self.stream.flush()
        self.frames += 1

    def finish(self) -> None:
        """Move past the meter so the shell prompt starts on a fresh line."""
        if self.frames:
            self.stream.write("\n")
            self.stream.flush()
