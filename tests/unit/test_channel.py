"""Unit tests for PipeChannel."""

import io
import os
from unittest.mock import MagicMock, Mock

import pytest

from aspell_pipe.channel import PipeChannel
from aspell_pipe.exceptions import AspellIOError, AspellTimeoutError


class TestReading:
    """Test line reading from the engine's stdout."""

    def test_read_line_strips_terminator(self):
        channel = PipeChannel(io.StringIO(), io.StringIO("first\nsecond\r\n\n"))

        assert channel.read_line() == "first"
        assert channel.read_line() == "second"
        assert channel.read_line() == ""

    def test_eof_raises_io_error(self):
        channel = PipeChannel(io.StringIO(), io.StringIO("only\n"), read_timeout=1)

        channel.read_line()

        with pytest.raises(AspellIOError, match="closed its output"):
            channel.read_line()

    def test_eof_keeps_failing(self):
        channel = PipeChannel(io.StringIO(), io.StringIO(""), read_timeout=1)

        for _ in range(2):
            with pytest.raises(AspellIOError):
                channel.read_line()

    def test_reader_error_surfaces_cause(self):
        stdout = MagicMock()
        stdout.__iter__.side_effect = ValueError("I/O operation on closed file")

        channel = PipeChannel(io.StringIO(), stdout, read_timeout=1)

        with pytest.raises(AspellIOError, match="Failed to read Aspell output"):
            channel.read_line()

    def test_decode_error_is_not_reported_as_eof(self):
        stdout = io.TextIOWrapper(io.BytesIO(b"ok\ncaf\xe9\n"), encoding="utf-8")
        channel = PipeChannel(io.StringIO(), stdout, read_timeout=1)

        with pytest.raises(AspellIOError, match="Failed to read Aspell output") as exc_info:
            while True:
                channel.read_line()

        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)
        assert "closed its output" not in str(exc_info.value)

    def test_reader_closes_stdout_at_eof(self):
        stdout = io.StringIO("only\n")
        channel = PipeChannel(io.StringIO(), stdout, read_timeout=1)

        channel.read_line()
        with pytest.raises(AspellIOError):
            channel.read_line()

        assert stdout.closed is True

    def test_read_timeout(self):
        read_fd, write_fd = os.pipe()
        stdout = os.fdopen(read_fd, encoding="utf-8")
        channel = PipeChannel(io.StringIO(), stdout, read_timeout=0.05)

        try:
            with pytest.raises(AspellTimeoutError, match="did not respond"):
                channel.read_line()
        finally:
            os.close(write_fd)

    def test_timeout_is_an_io_error(self):
        assert issubclass(AspellTimeoutError, AspellIOError)


class TestWriting:
    """Test writes to the engine's stdin."""

    def test_write_line_appends_newline(self):
        stdin = io.StringIO()
        channel = PipeChannel(stdin, io.StringIO(""))

        channel.write_line("^hello")
        channel.flush()

        assert stdin.getvalue() == "^hello\n"

    def test_write_to_closed_stream_raises_io_error(self):
        stdin = io.StringIO()
        stdin.close()
        channel = PipeChannel(stdin, io.StringIO(""))

        with pytest.raises(AspellIOError, match="Failed to write"):
            channel.write_line("^hello")

    def test_broken_pipe_on_flush_raises_io_error(self):
        stdin = Mock()
        stdin.flush.side_effect = BrokenPipeError("Broken pipe")
        channel = PipeChannel(stdin, io.StringIO(""))

        with pytest.raises(AspellIOError, match="Failed to flush") as exc_info:
            channel.flush()

        assert isinstance(exc_info.value.__cause__, BrokenPipeError)
