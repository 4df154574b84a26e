"""Parse Aspell pipe-mode response lines into Mistake records.

Aspell answers every misspelled word with one line in one of two forms:

    & <word> <near-miss count> <offset>: <alt1>, <alt2>, ...
    # <word> <offset>

Any other line is a protocol violation and raises AspellParseError.

Public API:
    parse_mistake: Parse one raw response line
"""

from aspell_pipe.exceptions import AspellParseError
from aspell_pipe.models import Mistake

ALTERNATIVES_SEPARATOR = ": "
ALTERNATIVE_DELIMITER = ", "


def parse_mistake(line: str) -> Mistake:
    """Parse a single Aspell response line.

    Args:
        line: Response line without its terminator

    Returns:
        Mistake described by the line

    Raises:
        AspellParseError: If the line matches neither response form

    Example:
        >>> parse_mistake("& value 2 1: valued, valuer")
        Mistake(word='value', near_misses=2, offset=0, alternatives=['valued', 'valuer'])
    """
    if line.startswith("&"):
        return _parse_with_alternatives(line)
    if line.startswith("#"):
        return _parse_without_alternatives(line)
    raise AspellParseError("Unrecognized Aspell response line", line)


def _parse_with_alternatives(line: str) -> Mistake:
    header, separator, tail = line.partition(ALTERNATIVES_SEPARATOR)
    if not separator:
        raise AspellParseError("Missing alternatives separator", line)

    tokens = header[1:].split()
    if len(tokens) != 3:
        raise AspellParseError("Expected '& word count offset' header", line)
    word, near_misses_str, offset_str = tokens

    near_misses = _parse_int(near_misses_str, line)
    offset = _parse_int(offset_str, line)

    return Mistake(
        word=word,
        near_misses=near_misses,
        # Aspell counts the "^" we prepend to every request line
        offset=offset - 1,
        alternatives=tail.split(ALTERNATIVE_DELIMITER),
    )


def _parse_without_alternatives(line: str) -> Mistake:
    tokens = line[1:].split()
    if len(tokens) != 2:
        raise AspellParseError("Expected '# word offset'", line)
    word, offset_str = tokens

    return Mistake(
        word=word,
        near_misses=0,
        offset=_parse_int(offset_str, line),
        alternatives=[],
    )


def _parse_int(value: str, line: str) -> int:
    if not value.isdecimal():
        raise AspellParseError(f"Invalid number {value!r}", line)
    return int(value)


__all__ = ["parse_mistake"]
