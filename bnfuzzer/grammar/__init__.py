"""
BNFuzzer Grammar Engine

Reads BNF/ABNF-flavored grammar descriptions and generates random
messages that conform to them.

Features:
- Line-oriented lexer with escape and hex-byte decoding
- Recursive-descent parser (alternation, concatenation, repetition, ranges)
- Incremental alternatives (`=/`) merged into existing rules
- Defined-symbol and unused-symbol checks
- Random generation with an injectable random source
- Built-in grammars (JSON, URL, IPv4, etc.)
"""

from .diagnostics import DiagError, Loc
from .lexer import Lexer, Token, TokenKind
from .expr import (
    MAX_UNSPECIFIED_UPPER_REPETITION_BOUND,
    Alternation,
    CharRange,
    Concatenation,
    Expr,
    Repetition,
    StringLiteral,
    Symbol,
)
from .parser import expect_token, parse_expr
from .table import FoldOutcome, FoldResult, Grammar, GrammarBuildResult, Rule, build_grammar, fold_rule
from .validator import ValidationReport, find_unused_symbols, verify_all_symbols_defined
from .generator import GrammarGenerator, generate_from_grammar
from .builtin_grammars import BuiltinGrammars

__all__ = [
    'DiagError', 'Loc',
    'Lexer', 'Token', 'TokenKind',
    'MAX_UNSPECIFIED_UPPER_REPETITION_BOUND',
    'Alternation', 'CharRange', 'Concatenation', 'Expr', 'Repetition', 'StringLiteral', 'Symbol',
    'expect_token', 'parse_expr',
    'FoldOutcome', 'FoldResult', 'Grammar', 'GrammarBuildResult', 'Rule', 'build_grammar', 'fold_rule',
    'ValidationReport', 'find_unused_symbols', 'verify_all_symbols_defined',
    'GrammarGenerator', 'generate_from_grammar',
    'BuiltinGrammars',
]
