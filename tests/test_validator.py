"""
Tests for grammar/validator.py - defined-symbol and unused-symbol checks.
"""

import pytest

from bnfuzzer.grammar.diagnostics import DiagError, Loc
from bnfuzzer.grammar.validator import find_unused_symbols, verify_all_symbols_defined


class TestVerifyAllSymbolsDefined:
    """Tests for the defined-symbol check."""

    def test_all_defined(self, build, sample_grammar_text):
        """Test a complete grammar passes."""
        report = verify_all_symbols_defined(build(sample_grammar_text))
        assert report.ok
        assert report.problems == []

    def test_single_undefined(self, build):
        """Test A ::= B with no rule for B."""
        report = verify_all_symbols_defined(build("A ::= B"))
        assert not report.ok
        assert report.problems == [(Loc("test.bnf", 0, 6), "B")]

    def test_reports_every_reference(self, build):
        """Test that the walk does not stop at the first problem."""
        grammar = build('a = x [ y ] / 2( "q" z )\nb = { x }')
        names = sorted(name for _, name in verify_all_symbols_defined(grammar).problems)
        assert names == ["x", "x", "y", "z"]

    def test_messages(self, build):
        report = verify_all_symbols_defined(build("A ::= B"))
        assert report.messages() == ["test.bnf:1:7: B"]


class TestFindUnusedSymbols:
    """Tests for the reachability check."""

    def test_reports_unreachable(self, build):
        """Test A ::= B, B ::= "x", C ::= "y" from A."""
        grammar = build('A ::= B\nB ::= "x"\nC ::= "y"')
        report = find_unused_symbols(grammar, "A")
        assert not report.ok
        assert report.problems == [(Loc("test.bnf", 2, 0), "C")]

    def test_all_reachable(self, build, sample_grammar_text):
        """Test every rule of the sample grammar is used."""
        assert find_unused_symbols(build(sample_grammar_text), "greeting").ok

    def test_recursion_is_visited_once(self, build):
        """Test self and mutual recursion terminate."""
        grammar = build('a = "x" a / b\nb = a b / "y"\nc = c')
        report = find_unused_symbols(grammar, "a")
        assert [name for _, name in report.problems] == ["c"]

    def test_entry_counts_as_used(self, build):
        """Test the entry symbol is never reported even if nothing refers to it."""
        grammar = build('top = "x"')
        assert find_unused_symbols(grammar, "top").ok

    def test_undefined_symbol_fails_fast(self, build):
        """Test an undefined reachable symbol aborts the walk."""
        grammar = build('a = b c\nc = "x"')
        with pytest.raises(DiagError, match="Symbol <b> is not defined") as exc:
            find_unused_symbols(grammar, "a")
        assert exc.value.loc == Loc("test.bnf", 0, 4)

    def test_undefined_entry(self, build):
        """Test an unknown entry symbol."""
        with pytest.raises(DiagError, match="Symbol nope is not defined"):
            find_unused_symbols(build('a = "x"'), "nope")

    def test_long_rule_chain(self, build):
        """Test a chain of rules deeper than the interpreter stack."""
        source = "\n".join(f"r{i} = r{i + 1}" for i in range(2000)) + '\nr2000 = "x"\nunused = "y"'
        grammar = build(source)
        assert verify_all_symbols_defined(grammar).ok
        report = find_unused_symbols(grammar, "r0")
        assert [name for _, name in report.problems] == ["unused"]
