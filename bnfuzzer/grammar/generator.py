"""
Grammar Generator

Generates random strings from an assembled grammar.
"""

import random
import logging
from typing import Callable, List, Optional

from .diagnostics import ENTRY_LOC, DiagError
from .expr import (
    Alternation,
    CharRange,
    Concatenation,
    Expr,
    Repetition,
    StringLiteral,
    Symbol,
)
from .table import Grammar


# Returns a uniformly distributed integer in [lower, upper], both inclusive
RandomSource = Callable[[int, int], int]


class GrammarGenerator:
    """
    Generates strings from a grammar by walking rule bodies.

    Features:
    - Injectable random source for reproducible output
    - Optional ceiling on symbol expansion depth
    - Symbols are resolved by name on every expansion, so recursive
      rules work without any special handling
    """

    def __init__(self, grammar: Grammar, rng: Optional[RandomSource] = None,
                 max_depth: int = 0, seed: Optional[int] = None):
        """
        Initialize grammar generator.

        Args:
            grammar: Assembled grammar table
            rng: Random source, randint-style (inclusive bounds)
            max_depth: Maximum symbol expansion depth, 0 for unbounded
            seed: Seed for the default random source, ignored if rng is given
        """
        self.grammar = grammar
        self.rng = rng if rng is not None else random.Random(seed).randint
        self.max_depth = max_depth
        self.logger = logging.getLogger("bnfuzzer.grammar.generator")

    def generate(self, start_symbol: str) -> str:
        """
        Generate one message starting from a symbol.

        Raises:
            DiagError: Undefined symbol, inverted bounds or depth limit
        """
        rule = self.grammar.get(start_symbol)
        if rule is None:
            raise DiagError(ENTRY_LOC, f"Symbol {start_symbol} is not defined")
        return self.generate_expr(rule.body)

    def generate_expr(self, expr: Expr) -> str:
        """Generate one message from an arbitrary expression."""
        try:
            return "".join(self._expand(expr, 0))
        except RecursionError:
            raise DiagError(expr.loc, "Maximum recursion depth exceeded while generating a message")

    def generate_batch(self, count: int, start_symbol: str) -> List[str]:
        """Generate `count` messages from the same start symbol."""
        messages = [self.generate(start_symbol) for _ in range(count)]
        self.logger.debug(f"Generated {len(messages)} messages from {start_symbol}")
        return messages

    def _expand(self, expr: Expr, depth: int) -> List[str]:
        out: List[str] = []
        self._emit(expr, depth, out)
        return out

    def _emit(self, expr: Expr, depth: int, out: List[str]):
        if isinstance(expr, StringLiteral):
            out.append(expr.text)

        elif isinstance(expr, Symbol):
            rule = self.grammar.get(expr.name)
            if rule is None:
                raise DiagError(expr.loc, f"Symbol <{expr.name}> is not defined")
            if self.max_depth and depth >= self.max_depth:
                raise DiagError(
                    expr.loc,
                    f"Expansion of <{expr.name}> exceeds the maximum depth of {self.max_depth}"
                )
            self._emit(rule.body, depth + 1, out)

        elif isinstance(expr, Concatenation):
            for element in expr.elements:
                self._emit(element, depth, out)

        elif isinstance(expr, Alternation):
            i = self.rng(0, len(expr.variants) - 1)
            self._emit(expr.variants[i], depth, out)

        elif isinstance(expr, Repetition):
            if expr.lower > expr.upper:
                raise DiagError(expr.loc, "Upper bound of the repetition is lower than the lower one.")
            for _ in range(self.rng(expr.lower, expr.upper)):
                self._emit(expr.body, depth, out)

        elif isinstance(expr, CharRange):
            lower, upper = ord(expr.lower), ord(expr.upper)
            if lower > upper:
                raise DiagError(expr.loc, "Upper bound of the range is lower than the lower one.")
            out.append(chr(self.rng(lower, upper)))

        else:
            raise TypeError(f"Unknown expression type: {type(expr).__name__}")


# Convenience function
def generate_from_grammar(grammar: Grammar, start_symbol: str, count: int = 1,
                          seed: Optional[int] = None) -> List[str]:
    """
    Quick function to generate from grammar.

    Example:
        >>> result = build_grammar('digit ::= "0" ... "9"')
        >>> generate_from_grammar(result.grammar, "digit", count=3)
    """
    generator = GrammarGenerator(grammar, seed=seed)
    return generator.generate_batch(count, start_symbol)
