"""aspell-pipe - a pipe-protocol client for GNU Aspell

Drives an external ``aspell -a`` process and turns its responses into
structured spelling-mistake reports. Aspell itself does the checking;
this package only speaks its line-oriented pipe protocol.

Example:
    >>> from aspell_pipe import UseDictionary, start_aspell
    >>> with start_aspell([UseDictionary("en_US")]) as aspell:
    ...     responses = aspell.check("Helo world")
"""

from aspell_pipe.exceptions import (
    AspellError,
    AspellIOError,
    AspellParseError,
    AspellStartError,
    AspellTimeoutError,
    SessionClosedError,
)
from aspell_pipe.models import (
    AllCorrect,
    AspellOption,
    AspellResponse,
    Mistake,
    Mistakes,
    UseDictionary,
)
from aspell_pipe.session import Aspell, start_aspell, stop_aspell

__version__ = "0.1.0"
__all__ = [
    "AllCorrect",
    "Aspell",
    "AspellError",
    "AspellIOError",
    "AspellOption",
    "AspellParseError",
    "AspellResponse",
    "AspellStartError",
    "AspellTimeoutError",
    "Mistake",
    "Mistakes",
    "SessionClosedError",
    "UseDictionary",
    "__version__",
    "start_aspell",
    "stop_aspell",
]
