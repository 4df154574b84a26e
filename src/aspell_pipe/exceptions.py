"""Exceptions raised by aspell_pipe."""


class AspellError(Exception):
    """Base exception for all Aspell pipe errors."""

    pass


class AspellStartError(AspellError):
    """Aspell process could not be started or did not complete the handshake."""

    pass


class AspellIOError(AspellError):
    """Reading from or writing to the Aspell pipes failed."""

    pass


class AspellTimeoutError(AspellIOError):
    """Aspell did not answer within the configured read timeout."""

    pass


class SessionClosedError(AspellIOError):
    """Session was stopped and can no longer be used."""

    pass


class AspellParseError(AspellError):
    """Aspell emitted a response line outside the pipe protocol."""

    def __init__(self, message: str, line: str):
        super().__init__(f"{message}: {line!r}")
        self.line = line


__all__ = [
    "AspellError",
    "AspellIOError",
    "AspellParseError",
    "AspellStartError",
    "AspellTimeoutError",
    "SessionClosedError",
]
