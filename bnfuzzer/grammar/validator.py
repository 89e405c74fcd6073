"""
Grammar Validator

Two health checks over an assembled grammar:
- every referenced symbol has a rule
- every rule is reachable from the entry symbol
"""

import logging
from dataclasses import dataclass, field
from typing import List, Set, Tuple

from .diagnostics import ENTRY_LOC, DiagError, Loc
from .expr import Expr, Symbol, children
from .table import Grammar


logger = logging.getLogger("bnfuzzer.grammar.validator")


@dataclass
class ValidationReport:
    """Offending (location, symbol name) pairs found by a check."""
    problems: List[Tuple[Loc, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.problems

    def messages(self) -> List[str]:
        return [f"{loc}: {name}" for loc, name in self.problems]


def _collect_undefined(grammar: Grammar, expr: Expr, problems: List[Tuple[Loc, str]]):
    if isinstance(expr, Symbol):
        if expr.name not in grammar:
            logger.debug(f"{expr.loc}: ERROR: Symbol {expr.name} is not defined")
            problems.append((expr.loc, expr.name))
        return

    for child in children(expr):
        _collect_undefined(grammar, child, problems)


def verify_all_symbols_defined(grammar: Grammar) -> ValidationReport:
    """
    Find every reference to a symbol that has no rule.

    The whole grammar is always walked; all offenders are reported.
    """
    report = ValidationReport()
    for rule in grammar.values():
        _collect_undefined(grammar, rule.body, report.problems)
    return report


def walk_symbols(grammar: Grammar, expr: Expr, visited: Set[str]):
    """
    Mark every symbol reachable from `expr` as visited.

    Raises:
        DiagError: A reachable symbol has no rule
    """
    stack = [expr]
    while stack:
        expr = stack.pop()
        if isinstance(expr, Symbol):
            if expr.name in visited:
                continue
            visited.add(expr.name)
            rule = grammar.get(expr.name)
            if rule is None:
                raise DiagError(expr.loc, f"Symbol <{expr.name}> is not defined")
            stack.append(rule.body)
        else:
            # Reversed so children are visited left to right
            stack.extend(reversed(list(children(expr))))


def find_unused_symbols(grammar: Grammar, entry: str) -> ValidationReport:
    """
    Report every rule that cannot be reached from `entry`.

    Problems are reported at the rule head, in grammar order.

    Raises:
        DiagError: `entry` or a symbol reachable from it is not defined
    """
    rule = grammar.get(entry)
    if rule is None:
        raise DiagError(ENTRY_LOC, f"Symbol {entry} is not defined")

    visited = {entry}
    walk_symbols(grammar, rule.body, visited)

    report = ValidationReport()
    for name, unused in grammar.items():
        if name not in visited:
            logger.debug(f"{unused.head.loc}: {name} is unused")
            report.problems.append((unused.head.loc, name))
    return report
