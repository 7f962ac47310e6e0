"""ffplay process that reports RMS levels, one metadata line per frame."""

import logging
import re
import subprocess
from typing import Iterator, List, Optional

from .config import SourceConfig
from .exceptions import SourceError, SourceSpawnError

logger = logging.getLogger(__name__)

RMS_LEVEL_KEY = "lavfi.astats.Overall.RMS_level"
FFPLAY_FILTER = f"astats=metadata=1:reset=1,ametadata=print:key={RMS_LEVEL_KEY}"
LEVEL_PATTERN = re.compile(r"(?<=Overall\.RMS_level=)[-0-9inf.]+")


def build_command(config: SourceConfig) -> List[str]:
    """Build the ffplay command line for a capture source."""
    return [
        config.ffplay_path,
        "-f", config.ffplay_format,
        "-i", config.ffplay_input,
        "-af", FFPLAY_FILTER,
        "-volume", "0",
        "-nodisp",
    ]


def extract_level_token(line: str) -> Optional[str]:
    """Return the RMS level token of a metadata line, or None."""
    match = LEVEL_PATTERN.search(line)
    if match is None:
        return None
    return match.group(0)


class LevelSource:
    """
    Spawns ffplay and exposes its output as a stream of lines.

    Use as a context manager so the process is stopped and its pipe closed
    on every exit path.
    """

    def __init__(self, config: SourceConfig, terminate_timeout: float = 2.0):
        """
        Initialize level source.

        Args:
            config: ffplay settings
            terminate_timeout: Seconds to wait after SIGTERM before killing
        """
        self.config = config
        self.terminate_timeout = terminate_timeout
        self._process: Optional[subprocess.Popen] = None

    @property
    def is_running(self) -> bool:
        return self._process is not None and self._process.poll() is None

    def start(self) -> None:
        """
        Spawn ffplay.

        Raises:
            SourceSpawnError: If ffplay is missing or cannot be started
        """
        if self._process is not None:
            raise SourceError("Level source already started")

        command = build_command(self.config)
        logger.debug(f"Spawning: {' '.join(command)}")
        try:
            # ffplay prints metadata on stderr
            self._process = subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                bufsize=1,
                errors="replace",
            )
        except FileNotFoundError:
            raise SourceSpawnError(
                f"{self.config.ffplay_path} not found. Install: sudo apt install ffmpeg"
            ) from None
        except OSError as e:
            raise SourceSpawnError(f"Failed to start {self.config.ffplay_path}: {e}") from e

        logger.info(f"ffplay started (pid {self._process.pid})")

    def lines(self) -> Iterator[str]:
        """Yield output lines until ffplay closes its output."""
        if self._process is None or self._process.stdout is None:
            raise SourceError("Level source not started")
        for line in self._process.stdout:
            yield line
        logger.info("ffplay output closed")

    def close(self) -> None:
        """Stop ffplay and close its pipe. Safe to call more than once."""
        process = self._process
        if process is None:
            return
        self._process = None

        if process.poll() is None:
            process.terminate()
            try:
                process.wait(timeout=self.terminate_timeout)
            except subprocess.TimeoutExpired:
                logger.warning(f"ffplay did not exit after {self.terminate_timeout}s, killing")
                process.kill()
                process.wait()

        if process.stdout is not None:
            process.stdout.close()
        logger.debug(f"ffplay exited with code {process.returncode}")

    def __enter__(self) -> 'LevelSource':
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False
