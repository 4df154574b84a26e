"""Data types exchanged with an Aspell session.

Public API:
    Mistake: A single misspelled word reported by Aspell
    AllCorrect: Response for a line without mistakes
    Mistakes: Response for a line with one or more mistakes
    AspellResponse: Union of the two response kinds
    UseDictionary: Option selecting the Aspell dictionary
    AspellOption: Union of all supported options
"""

from dataclasses import dataclass, field


@dataclass
class Mistake:
    """A spelling mistake.

    Attributes:
        word: The original word in misspelled form
        near_misses: Number of alternative spellings Aspell counted
        offset: Zero-based offset of the word in the caller's input line
        alternatives: Suggested spellings, in the order Aspell gave them
    """

    word: str
    near_misses: int
    offset: int
    alternatives: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class AllCorrect:
    """The input line had no spelling mistakes."""

    @property
    def is_correct(self) -> bool:
        return True

    @property
    def mistakes(self) -> list[Mistake]:
        return []


@dataclass
class Mistakes:
    """The input line had the listed mistakes."""

    mistakes: list[Mistake]

    @property
    def is_correct(self) -> bool:
        return False


AspellResponse = AllCorrect | Mistakes


@dataclass(frozen=True)
class UseDictionary:
    """Use the named dictionary (see ``aspell -d``)."""

    name: str

    def to_args(self) -> list[str]:
        return ["-d", self.name]


AspellOption = UseDictionary


__all__ = [
    "AllCorrect",
    "AspellOption",
    "AspellResponse",
    "Mistake",
    "Mistakes",
    "UseDictionary",
]
