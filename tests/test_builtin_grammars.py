"""
Tests for grammar/builtin_grammars.py - bundled grammars.
"""

import ipaddress
import json
import re
from urllib.parse import urlsplit

import pytest

from bnfuzzer.grammar import (
    BuiltinGrammars,
    GrammarGenerator,
    build_grammar,
    find_unused_symbols,
    verify_all_symbols_defined,
)


def generate(name, count=50, seed=0):
    grammar = build_grammar(BuiltinGrammars.get_grammar(name), name).grammar
    generator = GrammarGenerator(grammar, seed=seed)
    return generator.generate_batch(count, BuiltinGrammars.get_entry(name))


class TestBuiltinGrammars:
    """Every bundled grammar must be healthy."""

    @pytest.mark.parametrize("name", BuiltinGrammars.list_grammars())
    def test_builds_and_validates(self, name):
        result = build_grammar(BuiltinGrammars.get_grammar(name), name)
        assert result.ok, [str(e) for e in result.errors]
        assert verify_all_symbols_defined(result.grammar).ok
        assert find_unused_symbols(result.grammar, BuiltinGrammars.get_entry(name)).ok

    def test_unknown_grammar(self):
        with pytest.raises(ValueError, match="Unknown grammar"):
            BuiltinGrammars.get_grammar("cobol")
        with pytest.raises(ValueError):
            BuiltinGrammars.get_entry("cobol")

    def test_lookup_is_case_insensitive(self):
        assert BuiltinGrammars.get_grammar("JSON") == BuiltinGrammars.get_json_grammar()


class TestGeneratedMessages:
    """Generated messages are valid instances of their format."""

    def test_json(self):
        for message in generate("json"):
            json.loads(message)

    def test_ipv4(self):
        for message in generate("ipv4"):
            assert str(ipaddress.IPv4Address(message)) == message

    def test_arithmetic(self):
        for message in generate("arithmetic"):
            assert re.fullmatch(r"[0-9+\-*/()]+", message)
            assert message.count("(") == message.count(")")

    def test_url(self):
        for message in generate("url"):
            parts = urlsplit(message)
            assert parts.scheme in ("http", "https", "ftp")
            assert parts.hostname

    def test_http_request_line(self):
        for message in generate("http"):
            assert re.fullmatch(r"[A-Z]+ /[a-z0-9\-_./]* HTTP/1\.[01]\r\n", message)
