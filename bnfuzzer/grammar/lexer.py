"""
Grammar Lexer

Splits a single line of BNF/ABNF grammar source into tokens.

The grammar format is line oriented: every rule lives on its own line,
so a Lexer is created per line and knows which row of which file it is
looking at. Tokens are produced lazily with one token of lookahead.
"""

import string
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .diagnostics import DiagError, Loc


# Largest value a number token may hold (unsigned 32-bit)
MAX_NUMBER = 0xFFFFFFFF


class TokenKind(Enum):
    """Token kinds. The value is the human readable name used in errors."""
    EOL = "end of line"
    SYMBOL = "symbol"
    DEFINITION = "definition symbol"
    ALTERNATION = "alternation symbol"
    STRING = "string literal"
    BRACKET_OPEN = "open bracket"
    BRACKET_CLOSE = "close bracket"
    CURLY_OPEN = "open curly"
    CURLY_CLOSE = "close curly"
    PAREN_OPEN = "open paren"
    PAREN_CLOSE = "close paren"
    ELLIPSIS = "ellipsis"
    NUMBER = "number"
    ASTERISK = "asterisk"
    INC_ALTERNATIVE = "incremental alternative"
    VALUE_RANGE = "value range"


# Tried in order. `::=` and `=/` must come before `=`.
LITERAL_TOKENS = (
    ("::=", TokenKind.DEFINITION),
    ("=/", TokenKind.INC_ALTERNATIVE),
    ("=", TokenKind.DEFINITION),
    ("|", TokenKind.ALTERNATION),
    ("/", TokenKind.ALTERNATION),
    ("[", TokenKind.BRACKET_OPEN),
    ("]", TokenKind.BRACKET_CLOSE),
    ("{", TokenKind.CURLY_OPEN),
    ("}", TokenKind.CURLY_CLOSE),
    ("(", TokenKind.PAREN_OPEN),
    (")", TokenKind.PAREN_CLOSE),
    ("...", TokenKind.ELLIPSIS),
    ("*", TokenKind.ASTERISK),
)

SIMPLE_ESCAPES = {
    "0": "\0",
    "n": "\n",
    "r": "\r",
    "\\": "\\",
}


@dataclass(frozen=True)
class Token:
    """
    A lexed token.

    `text` holds the decoded text: the symbol name without angle brackets,
    the string literal with escapes resolved, or the two raw characters of
    a value range. `number` is only set for NUMBER tokens.
    """
    kind: TokenKind
    text: str
    loc: Loc
    number: Optional[int] = None


def is_symbol_start(ch: str) -> bool:
    return ch.isalpha() or ch in "-_"


def is_symbol(ch: str) -> bool:
    return ch.isalnum() or ch in "-_"


class Lexer:
    """
    Tokenizer for one line of grammar source.

    Usage:
        lexer = Lexer('digit ::= "0" ... "9"', "grammar.bnf", 0)
        while lexer.peek().kind != TokenKind.EOL:
            token = lexer.next()
    """

    def __init__(self, content: str, file_path: str = "<input>", row: int = 0):
        self.content = content
        self.file_path = file_path
        self.row = row
        self.col = 0
        self.peek_buf: Optional[Token] = None

    def loc(self, col: Optional[int] = None) -> Loc:
        return Loc(self.file_path, self.row, self.col if col is None else col)

    def _at_end(self) -> bool:
        return self.col >= len(self.content)

    def _has_prefix(self, prefix: str) -> bool:
        return self.content.startswith(prefix, self.col)

    def _trim(self):
        while not self._at_end() and self.content[self.col].isspace():
            self.col += 1

    def _chop_hex_byte_value(self) -> str:
        """Decode exactly two hex digits into a character."""
        value = 0
        for i in range(2):
            if self._at_end():
                raise DiagError(
                    self.loc(),
                    f"Unfinished hexadecimal value of a byte. Expected 2 hex digits, but got {i}."
                )
            ch = self.content[self.col]
            if ch not in string.hexdigits:
                raise DiagError(self.loc(), f"Expected hex digit, but got `{ch}`")
            value = value * 0x10 + int(ch, 16)
            self.col += 1
        return chr(value)

    def _chop_str_lit(self) -> str:
        if self._at_end():
            return ""

        quote = self.content[self.col]
        self.col += 1
        begin = self.col
        lit = []

        while not self._at_end():
            ch = self.content[self.col]
            if ch == "\\":
                self.col += 1
                if self._at_end():
                    raise DiagError(self.loc(), "Unfinished escape sequence")

                esc = self.content[self.col]
                if esc in SIMPLE_ESCAPES:
                    lit.append(SIMPLE_ESCAPES[esc])
                    self.col += 1
                elif esc == "x":
                    self.col += 1
                    lit.append(self._chop_hex_byte_value())
                elif esc == quote:
                    lit.append(quote)
                    self.col += 1
                else:
                    raise DiagError(self.loc(), f"Unknown escape sequence starting with {esc}")
            elif ch == quote:
                break
            else:
                lit.append(ch)
                self.col += 1

        if self._at_end():
            raise DiagError(self.loc(begin), f"Expected '{quote}' at the end of this string literal")
        self.col += 1

        return "".join(lit)

    def _chop_number(self, token_loc: Loc) -> Token:
        begin = self.col
        while not self._at_end() and self.content[self.col] in string.digits:
            self.col += 1
        text = self.content[begin:self.col]
        number = int(text)
        if number > MAX_NUMBER:
            raise DiagError(token_loc, f"Number {text} does not fit into 32 bits")
        return Token(TokenKind.NUMBER, text, token_loc, number)

    def _chop_angle_symbol(self, token_loc: Loc) -> Token:
        self.col += 1
        begin = self.col
        while not self._at_end() and self.content[self.col] != ">":
            ch = self.content[self.col]
            if not is_symbol(ch):
                raise DiagError(self.loc(), f"Unexpected character in symbol name {ch}")
            self.col += 1
        if self._at_end():
            raise DiagError(self.loc(), "Expected '>' at the end of the symbol name")

        text = self.content[begin:self.col]
        self.col += 1
        return Token(TokenKind.SYMBOL, text, token_loc)

    def _chop_byte_value(self, token_loc: Loc) -> Token:
        self.col += 2
        text = self._chop_hex_byte_value()
        if self._has_prefix("-"):
            self.col += 1
            text += self._chop_hex_byte_value()
            return Token(TokenKind.VALUE_RANGE, text, token_loc)
        return Token(TokenKind.STRING, text, token_loc)

    def chop_token(self) -> Token:
        """Scan the next token from the current column."""
        self._trim()

        if self._has_prefix("//") or self._has_prefix(";"):
            self.col = len(self.content)

        token_loc = self.loc()

        if self._at_end():
            return Token(TokenKind.EOL, "", token_loc)

        ch = self.content[self.col]

        if ch in string.digits:
            return self._chop_number(token_loc)

        if is_symbol_start(ch):
            begin = self.col
            while not self._at_end() and is_symbol(self.content[self.col]):
                self.col += 1
            return Token(TokenKind.SYMBOL, self.content[begin:self.col], token_loc)

        if ch == "<":
            return self._chop_angle_symbol(token_loc)

        if ch in "\"'":
            return Token(TokenKind.STRING, self._chop_str_lit(), token_loc)

        if self._has_prefix("%x"):
            return self._chop_byte_value(token_loc)

        for text, kind in LITERAL_TOKENS:
            if self._has_prefix(text):
                self.col += len(text)
                return Token(kind, text, token_loc)

        raise DiagError(token_loc, "Invalid token")

    def peek(self) -> Token:
        if self.peek_buf is None:
            self.peek_buf = self.chop_token()
        return self.peek_buf

    def next(self) -> Token:
        if self.peek_buf is not None:
            token, self.peek_buf = self.peek_buf, None
            return token
        return self.chop_token()

    def __iter__(self):
        """Yield tokens up to, but not including, the end of line."""
        while True:
            token = self.next()
            if token.kind == TokenKind.EOL:
                return
            yield token
