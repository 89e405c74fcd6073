"""
Grammar Diagnostics

Source locations and the error type shared by the lexer, parser,
table builder, validators and generator.
"""

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(frozen=True)
class Loc:
    """Position inside a grammar file. Row and column are zero-based."""
    file_path: str
    row: int
    col: int

    def __str__(self) -> str:
        return f"{self.file_path}:{self.row + 1}:{self.col + 1}"


@dataclass(eq=False)
class DiagError(Exception):
    """
    Location-tagged error.

    Notes are secondary locations that help explain the error, e.g. the
    place where a redefined rule was first defined.
    """
    loc: Loc
    message: str
    notes: List[Tuple[Loc, str]] = field(default_factory=list)

    def __post_init__(self):
        super().__init__(self.message)

    def __str__(self) -> str:
        lines = [f"{self.loc}: ERROR: {self.message}"]
        for loc, note in self.notes:
            lines.append(f"{loc}: NOTE: {note}")
        return "\n".join(lines)


# Used for errors about names given on the command line rather than in a file
ENTRY_LOC = Loc("<entry>", 0, 0)
