"""
Grammar Expressions

The six expression forms a rule body is built from. Every consumer
(display, validation, generation) dispatches over exactly these classes.
"""

import unicodedata
from dataclasses import dataclass
from typing import Iterator, Tuple, Union

from .diagnostics import Loc
from .lexer import is_symbol_start


# Upper bound used when a repetition does not specify one: `{x}`, `*x`, `2*x`
MAX_UNSPECIFIED_UPPER_REPETITION_BOUND = 20


def _escape_string(text: str) -> str:
    out = []
    for ch in text:
        if ch == "\n":
            out.append("\\n")
        elif ch == "\r":
            out.append("\\r")
        elif ch == "\\":
            out.append("\\\\")
        elif ch == '"':
            out.append('\\"')
        elif unicodedata.category(ch) == "Cc":
            out.append(f"\\x{ord(ch):02x}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


@dataclass(frozen=True)
class Symbol:
    """Reference to another rule, resolved by name when it is used."""
    loc: Loc
    name: str

    def __str__(self) -> str:
        # Bare names must lex back as a single symbol token
        if self.name and is_symbol_start(self.name[0]):
            return self.name
        return f"<{self.name}>"


@dataclass(frozen=True)
class StringLiteral:
    loc: Loc
    text: str

    def __str__(self) -> str:
        return _escape_string(self.text)


@dataclass(frozen=True)
class Alternation:
    loc: Loc
    variants: Tuple["Expr", ...]

    def __str__(self) -> str:
        return " | ".join(str(variant) for variant in self.variants)


@dataclass(frozen=True)
class Concatenation:
    loc: Loc
    elements: Tuple["Expr", ...]

    def __str__(self) -> str:
        parts = []
        for element in self.elements:
            if isinstance(element, Alternation):
                parts.append(f"( {element} )")
            else:
                parts.append(str(element))
        return " ".join(parts)


@dataclass(frozen=True)
class Repetition:
    """
    Emit `body` between `lower` and `upper` times, inclusive.

    `lower > upper` is allowed here and only rejected when the
    repetition is evaluated.
    """
    loc: Loc
    body: "Expr"
    lower: int
    upper: int

    def __str__(self) -> str:
        if self.lower == 0 and self.upper == 1:
            return f"[ {self.body} ]"
        if self.lower == self.upper:
            return f"{self.lower}( {self.body} )"
        return f"{self.lower}*{self.upper}( {self.body} )"


@dataclass(frozen=True)
class CharRange:
    """One character with a code point in [lower, upper]."""
    loc: Loc
    lower: str
    upper: str

    def __str__(self) -> str:
        lo, hi = ord(self.lower), ord(self.upper)
        if lo > 0xFF or hi > 0xFF:
            # %x only carries a single byte
            return f"{_escape_string(self.lower)} ... {_escape_string(self.upper)}"
        return f"%x{lo:02X}-{hi:02X}"


Expr = Union[Symbol, StringLiteral, Alternation, Concatenation, Repetition, CharRange]


def children(expr: Expr) -> Iterator[Expr]:
    """Direct sub-expressions of `expr`. Symbols are not dereferenced."""
    if isinstance(expr, Alternation):
        yield from expr.variants
    elif isinstance(expr, Concatenation):
        yield from expr.elements
    elif isinstance(expr, Repetition):
        yield expr.body
