"""Line-oriented transport between the protocol driver and Aspell.

Public API:
    LineChannel: Protocol the driver talks to (write, flush, read)
    PipeChannel: LineChannel over a subprocess's stdin/stdout pipes
"""

import logging
import queue
import threading
from typing import IO, Protocol

from aspell_pipe.exceptions import AspellIOError, AspellTimeoutError

logger = logging.getLogger(__name__)

# Queued by the reader thread once stdout reaches EOF
_EOF = object()


class LineChannel(Protocol):
    """Two-way line transport to an Aspell engine."""

    def write_line(self, line: str) -> None: ...

    def flush(self) -> None: ...

    def read_line(self) -> str: ...


class PipeChannel:
    """LineChannel backed by the text pipes of an Aspell subprocess.

    A background thread drains stdout into a queue so that reads can
    honour an optional timeout. Without a timeout a stalled engine
    blocks the caller indefinitely.

    Example:
        >>> process = subprocess.Popen(["aspell", "-a"], stdin=PIPE, stdout=PIPE, text=True)
        >>> channel = PipeChannel(process.stdin, process.stdout, read_timeout=5.0)
        >>> banner = channel.read_line()
    """

    def __init__(self, stdin: IO[str], stdout: IO[str], read_timeout: float | None = None):
        """Initialize channel and start the stdout reader thread.

        Args:
            stdin: Writable text stream connected to Aspell's stdin
            stdout: Readable text stream connected to Aspell's stdout
            read_timeout: Seconds to wait for each line (None = no timeout)
        """
        self.stdin = stdin
        self.stdout = stdout
        self.read_timeout = read_timeout
        self._lines: queue.Queue = queue.Queue()

        self._reader = threading.Thread(target=self._drain_stdout, name="aspell-reader")
        self._reader.daemon = True
        self._reader.start()

    def _drain_stdout(self) -> None:
        """Read stdout until EOF or failure, queueing each line.

        A read failure is queued in place of the EOF marker so the caller
        sees the real cause. The reader owns stdout and closes it on exit.
        """
        end: object = _EOF
        try:
            for line in self.stdout:
                self._lines.put(line)
        except (OSError, ValueError) as e:
            logger.debug(f"Aspell stdout reader stopped: {e}")
            end = e
        finally:
            try:
                self.stdout.close()
            except (OSError, ValueError) as e:
                logger.debug(f"Failed to close Aspell stdout: {e}")
        self._lines.put(end)

    def write_line(self, line: str) -> None:
        try:
            self.stdin.write(line + "\n")
        except (OSError, ValueError) as e:
            raise AspellIOError(f"Failed to write to Aspell: {e}") from e

    def flush(self) -> None:
        try:
            self.stdin.flush()
        except (OSError, ValueError) as e:
            raise AspellIOError(f"Failed to flush Aspell input: {e}") from e

    def read_line(self) -> str:
        """Read the next line from Aspell, without its terminator.

        Raises:
            AspellTimeoutError: If no line arrives within read_timeout
            AspellIOError: If Aspell closed its output or it could not be read
        """
        try:
            line = self._lines.get(timeout=self.read_timeout)
        except queue.Empty as e:
            raise AspellTimeoutError(
                f"Aspell did not respond within {self.read_timeout} seconds"
            ) from e

        if line is _EOF:
            # Keep the marker so later reads fail the same way
            self._lines.put(_EOF)
            raise AspellIOError("Aspell closed its output")

        if isinstance(line, Exception):
            self._lines.put(line)
            raise AspellIOError(f"Failed to read Aspell output: {line}") from line

        return line.rstrip("\r\n")


__all__ = ["LineChannel", "PipeChannel"]
