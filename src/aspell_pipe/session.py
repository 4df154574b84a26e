"""Aspell session lifecycle.

Starts ``aspell -a`` as a subprocess, performs the handshake (read the
identification banner, switch on terse mode) and wraps the running
process in an Aspell handle.

Resource handling:
- No shell=True for subprocess
- stderr is discarded
- Process terminated on every exit path of the ``with`` block
- Process terminated when the handshake fails

Public API:
    Aspell: Handle to a running Aspell process
    build_command: Command line for a set of options
    start_aspell: Start Aspell and complete the handshake
    stop_aspell: Terminate a running Aspell
"""

import logging
import subprocess
from collections.abc import Iterable
from typing import Any

from aspell_pipe.channel import LineChannel, PipeChannel
from aspell_pipe.exceptions import (
    AspellIOError,
    AspellParseError,
    AspellStartError,
    SessionClosedError,
)
from aspell_pipe.models import AspellOption, AspellResponse
from aspell_pipe.protocol import check_text

logger = logging.getLogger(__name__)

DEFAULT_EXECUTABLE = "aspell"
PIPE_MODE_FLAG = "-a"
TERSE_MODE_COMMAND = "!"


class Aspell:
    """A handle to a running Aspell instance.

    A session serves one request at a time and is not safe for concurrent
    use; callers sharing one across threads must serialize access.

    Example:
        >>> with start_aspell([UseDictionary("en_US")]) as aspell:
        ...     for response in aspell.check("Helo world"):
        ...         print(response.mistakes)
    """

    def __init__(
        self,
        process: subprocess.Popen,
        channel: LineChannel,
        identification: str,
    ):
        self._process = process
        self._channel = channel
        self._identification = identification
        self._closed = False

    @property
    def identification(self) -> str:
        """Identification banner Aspell printed at startup."""
        return self._identification

    @property
    def closed(self) -> bool:
        return self._closed

    def __repr__(self) -> str:
        return f"Aspell<{self._identification}>"

    def __enter__(self) -> "Aspell":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.stop()

    def check(self, text: str) -> list[AspellResponse]:
        """Spell-check text, returning one response per line.

        A communication or parse failure stops the session, since Aspell
        may still owe replies for the failed request.

        Args:
            text: Text to check, may span several lines

        Returns:
            AllCorrect or Mistakes for every line, in input order

        Raises:
            SessionClosedError: If the session was stopped
            AspellIOError: If communication with Aspell fails
            AspellParseError: If Aspell sends an unrecognized line
        """
        if self._closed:
            raise SessionClosedError("Aspell session has been stopped")

        try:
            return check_text(self._channel, text)
        except (AspellIOError, AspellParseError):
            # Unread replies would be attributed to the next request
            self.stop()
            raise

    def stop(self, wait: float | None = None) -> None:
        """Terminate the Aspell process.

        Does not flush pending input or drain output. Stopping an already
        stopped session, or one whose process already exited, is a no-op.
        Closes stdin so the pipe is released even without waiting; stdout
        is closed by the channel reader once the process exits.

        Args:
            wait: Seconds to wait for exit before killing (None = don't wait)
        """
        if self._closed:
            return
        self._closed = True

        logger.debug(f"Terminating Aspell process {self._process.pid}")
        self._process.terminate()
        self._close_stdin()

        if wait is None:
            return
        try:
            self._process.wait(timeout=wait)
        except subprocess.TimeoutExpired:
            logger.warning(f"Force killing Aspell process {self._process.pid}")
            self._process.kill()

    def _close_stdin(self) -> None:
        if self._process.stdin is None:
            return
        try:
            self._process.stdin.close()
        except (OSError, ValueError) as e:
            # Broken pipe from an already dead process
            logger.debug(f"Failed to close Aspell stdin: {e}")


def build_command(
    options: Iterable[AspellOption] = (), executable: str = DEFAULT_EXECUTABLE
) -> list[str]:
    """Build the Aspell command line for the given options."""
    cmd = [executable, PIPE_MODE_FLAG]
    for option in options:
        cmd.extend(option.to_args())
    return cmd


def start_aspell(
    options: Iterable[AspellOption] = (),
    *,
    executable: str = DEFAULT_EXECUTABLE,
    read_timeout: float | None = None,
) -> Aspell:
    """Start Aspell in pipe mode.

    Args:
        options: Aspell options, applied in order
        executable: Aspell binary name or path
        read_timeout: Seconds to wait for each response line (None = forever)

    Returns:
        Aspell handle with terse mode enabled

    Raises:
        AspellStartError: If the process cannot be started or the handshake fails
    """
    cmd = build_command(options, executable)
    logger.debug(f"Starting Aspell: {' '.join(cmd)}")

    try:
        process = subprocess.Popen(
            cmd,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
        )
    except (OSError, ValueError) as e:
        raise AspellStartError(f"Failed to start {executable}: {e}") from e

    if process.stdin is None or process.stdout is None:
        process.terminate()
        raise AspellStartError("Aspell process was started without stdin/stdout pipes")

    channel = PipeChannel(process.stdin, process.stdout, read_timeout=read_timeout)

    try:
        identification = channel.read_line()
        channel.write_line(TERSE_MODE_COMMAND)
        channel.flush()
    except AspellIOError as e:
        process.terminate()
        raise AspellStartError(f"Aspell handshake failed: {e}") from e

    logger.info(f"Started Aspell: {identification}")
    return Aspell(process, channel, identification)


def stop_aspell(aspell: Aspell) -> None:
    """Terminate a running Aspell without waiting for it to exit."""
    aspell.stop()


__all__ = [
    "DEFAULT_EXECUTABLE",
    "Aspell",
    "build_command",
    "start_aspell",
    "stop_aspell",
]
