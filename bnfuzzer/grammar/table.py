"""
Grammar Table

Assembles per-line rule definitions into a grammar: a mapping from symbol
name to Rule.

Supported rule forms, one per line:
    head ::= body      definition
    head = body        definition
    head =/ body       incremental alternative, appends `body` as one more
                       variant of an already defined rule
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .diagnostics import DiagError, Loc
from .expr import Alternation, Expr
from .lexer import Lexer, Token, TokenKind
from .parser import expect_token, parse_expr


logger = logging.getLogger("bnfuzzer.grammar.table")


@dataclass(frozen=True)
class Rule:
    head: Token
    body: Expr

    @property
    def name(self) -> str:
        return self.head.text

    def __str__(self) -> str:
        return f"{self.head.text} ::= {self.body}"


Grammar = Dict[str, Rule]


class FoldOutcome(Enum):
    """What happened when a rule was folded into a grammar."""
    INSERTED = "inserted"
    MERGED = "merged"
    REDEFINITION = "redefinition"
    MISSING_PREDECESSOR = "missing predecessor"


@dataclass
class FoldResult:
    outcome: FoldOutcome
    rule: Optional[Rule] = None
    error: Optional[DiagError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class GrammarBuildResult:
    """Grammar assembled from a source file plus every error hit on the way."""
    grammar: Grammar = field(default_factory=dict)
    errors: List[DiagError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _check_definition(grammar: Grammar, head: Token, kind: TokenKind) -> Optional[FoldResult]:
    """Return a failed FoldResult if `head` cannot be (re)defined with `kind`."""
    existing = grammar.get(head.text)

    if kind == TokenKind.DEFINITION and existing is not None:
        return FoldResult(FoldOutcome.REDEFINITION, existing, DiagError(
            head.loc,
            f"redefinition of the rule {head.text}",
            [(existing.head.loc, "the first definition is located here")],
        ))

    if kind == TokenKind.INC_ALTERNATIVE and existing is None:
        return FoldResult(FoldOutcome.MISSING_PREDECESSOR, None, DiagError(
            head.loc,
            f"can't apply incremental alternative to a non-existing rule {head.text}. "
            f"You need to define it first."
        ))

    return None


def fold_rule(grammar: Grammar, head: Token, kind: TokenKind, body: Expr) -> FoldResult:
    """
    Fold one parsed rule into `grammar` in place.

    Args:
        grammar: Table to update
        head: Symbol token naming the rule
        kind: TokenKind.DEFINITION or TokenKind.INC_ALTERNATIVE
        body: Parsed rule body

    Returns:
        FoldResult describing the outcome; the grammar is left untouched
        when the result carries an error
    """
    failed = _check_definition(grammar, head, kind)
    if failed is not None:
        return failed

    if kind == TokenKind.DEFINITION:
        rule = Rule(head, body)
        grammar[head.text] = rule
        logger.debug(f"Defined rule {head.text} at {head.loc}")
        return FoldResult(FoldOutcome.INSERTED, rule)

    existing = grammar[head.text]
    if isinstance(existing.body, Alternation):
        merged = Alternation(existing.body.loc, existing.body.variants + (body,))
    else:
        merged = Alternation(existing.body.loc, (existing.body, body))

    rule = Rule(existing.head, merged)
    grammar[head.text] = rule
    logger.debug(f"Merged alternative into rule {head.text} at {head.loc}")
    return FoldResult(FoldOutcome.MERGED, rule)


def parse_rule_line(grammar: Grammar, lexer: Lexer) -> Optional[FoldResult]:
    """
    Parse one line of grammar source and fold it into `grammar`.

    Returns None for blank and comment-only lines. Lexical and syntax
    errors are raised as DiagError; the grammar is only changed when the
    whole line is valid.
    """
    if lexer.peek().kind == TokenKind.EOL:
        return None

    head = expect_token(lexer, TokenKind.SYMBOL)

    definition = lexer.next()
    if definition.kind not in (TokenKind.DEFINITION, TokenKind.INC_ALTERNATIVE):
        raise DiagError(
            definition.loc,
            f"Expected {TokenKind.DEFINITION.value} or {TokenKind.INC_ALTERNATIVE.value} "
            f"but got {definition.kind.value}"
        )

    failed = _check_definition(grammar, head, definition.kind)
    if failed is not None:
        return failed

    body = parse_expr(lexer)
    expect_token(lexer, TokenKind.EOL)

    return fold_rule(grammar, head, definition.kind, body)


def build_grammar(source: str, file_path: str = "<input>") -> GrammarBuildResult:
    """
    Build a grammar from the full text of a grammar file.

    Every line is processed even after an error so that all problems in
    the file are reported in one pass.

    Args:
        source: Grammar source text
        file_path: Name used in diagnostics

    Returns:
        GrammarBuildResult with the grammar and collected errors
    """
    result = GrammarBuildResult()

    for row, line in enumerate(source.split("\n")):
        lexer = Lexer(line, file_path, row)
        try:
            folded = parse_rule_line(result.grammar, lexer)
        except DiagError as e:
            logger.debug(f"{e}")
            result.errors.append(e)
            continue
        except RecursionError:
            error = DiagError(Loc(file_path, row, 0), "Maximum recursion depth exceeded while parsing the rule")
            logger.debug(f"{error}")
            result.errors.append(error)
            continue

        if folded is not None and folded.error is not None:
            logger.debug(f"{folded.error}")
            result.errors.append(folded.error)

    logger.info(f"Parsed grammar {file_path} with {len(result.grammar)} rules, {len(result.errors)} errors")
    return result
