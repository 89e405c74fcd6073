"""
Pytest configuration and fixtures for BNFuzzer tests.
"""

import sys
import pytest
from pathlib import Path

# Add project root to path for all imports
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from bnfuzzer.grammar import Lexer, build_grammar, parse_expr


class ScriptedRandom:
    """Random source that replays a fixed list of draws, checking their bounds."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def __call__(self, lower, upper):
        self.calls.append((lower, upper))
        value = self.values.pop(0)
        assert lower <= value <= upper, f"scripted value {value} outside [{lower}, {upper}]"
        return value


@pytest.fixture
def scripted_random():
    """Factory for ScriptedRandom sources."""
    return ScriptedRandom


@pytest.fixture
def lowest_random():
    """Random source that always picks the lower bound."""
    return lambda lower, upper: lower


@pytest.fixture
def parse():
    """Parse a rule body from a string."""
    def _parse(text):
        return parse_expr(Lexer(text, "test.bnf", 0))
    return _parse


@pytest.fixture
def build():
    """Build a grammar from source text, asserting it has no errors."""
    def _build(source):
        result = build_grammar(source, "test.bnf")
        assert result.ok, [str(e) for e in result.errors]
        return result.grammar
    return _build


@pytest.fixture
def sample_grammar_text():
    """Small grammar exercising most of the syntax."""
    return "\n".join([
        "; greeting grammar",
        "greeting ::= salutation \" \" name [ \"!\" ]",
        "salutation = \"hello\" / \"hi\"",
        "salutation =/ \"hey\"",
        "<name> ::= upper 2*5 lower",
        "upper = \"A\" ... \"Z\"",
        "lower = %x61-7A",
        "",
    ])


@pytest.fixture
def bnfuzzer_home(tmp_path, monkeypatch):
    """Point ~ at a temporary directory so config files stay out of the real home."""
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path
