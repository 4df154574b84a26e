"""Aspell pipe protocol driver.

Each input line is sent as ``^<line>`` so Aspell checks it literally even
when it starts with a command character. Aspell answers with zero or more
mistake lines followed by an empty line. Terse mode must already be on,
otherwise Aspell also acknowledges every correct word.

Failure policy: any IO or parse error aborts the whole call and no partial
results are returned.

Public API:
    check_line: Check one line of text
    check_text: Check multi-line text, one response per line
"""

import logging

from aspell_pipe.channel import LineChannel
from aspell_pipe.models import AllCorrect, AspellResponse, Mistakes
from aspell_pipe.parser import parse_mistake

logger = logging.getLogger(__name__)

LITERAL_LINE_PREFIX = "^"


def check_line(channel: LineChannel, line: str) -> AspellResponse:
    """Send one line to Aspell and parse its response block.

    Args:
        channel: Transport to a running Aspell in terse pipe mode
        line: Text to check, must not contain line breaks

    Returns:
        AllCorrect if Aspell reported nothing, otherwise Mistakes

    Raises:
        AspellIOError: If the channel fails
        AspellParseError: If Aspell sends an unrecognized line
    """
    channel.write_line(LITERAL_LINE_PREFIX + line)
    channel.flush()

    response_lines = _read_until_blank(channel)
    if not response_lines:
        return AllCorrect()

    return Mistakes([parse_mistake(response_line) for response_line in response_lines])


def check_text(channel: LineChannel, text: str) -> list[AspellResponse]:
    """Check every line of text.

    Lines are split with str.splitlines(), so a trailing line break does
    not produce an extra empty line.

    Returns:
        One response per input line, in input order
    """
    responses = []
    for number, line in enumerate(text.splitlines(), start=1):
        response = check_line(channel, line)
        logger.debug(f"Line {number}: {len(response.mistakes)} mistake(s)")
        responses.append(response)
    return responses


def _read_until_blank(channel: LineChannel) -> list[str]:
    lines = []
    while True:
        line = channel.read_line()
        if not line:
            return lines
        lines.append(line)


__all__ = ["LITERAL_LINE_PREFIX", "check_line", "check_text"]
