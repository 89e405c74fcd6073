"""
Grammar Expression Parser

Recursive-descent parser for the right-hand side of a rule.

Precedence, loosest first:
    alternation   := concatenation (("|" | "/") concatenation)*
    concatenation := primary primary*
    primary       := "(" alternation ")"
                   | "{" alternation "}"          0 to 20 repetitions
                   | "[" alternation "]"          optional
                   | symbol
                   | %xHH-HH                      value range
                   | string ["..." string]        literal or character range
                   | "*" [number] primary         0 to number (or 20) repetitions
                   | number ["*" [number]] primary
"""

from .diagnostics import DiagError
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
from .lexer import Lexer, Token, TokenKind


PRIMARY_START_KINDS = frozenset({
    TokenKind.SYMBOL,
    TokenKind.STRING,
    TokenKind.BRACKET_OPEN,
    TokenKind.CURLY_OPEN,
    TokenKind.PAREN_OPEN,
    TokenKind.NUMBER,
    TokenKind.ASTERISK,
    TokenKind.VALUE_RANGE,
})


def is_primary_start(kind: TokenKind) -> bool:
    return kind in PRIMARY_START_KINDS


def expect_token(lexer: Lexer, kind: TokenKind) -> Token:
    """Consume the next token, failing unless it has the given kind."""
    token = lexer.next()
    if token.kind != kind:
        raise DiagError(token.loc, f"Expected {kind.value} but got {token.kind.value}")
    return token


def _parse_group(lexer: Lexer, close: TokenKind) -> Expr:
    body = parse_expr(lexer)
    expect_token(lexer, close)
    return body


def _parse_string_or_range(lexer: Lexer, token: Token) -> Expr:
    if lexer.peek().kind != TokenKind.ELLIPSIS:
        return StringLiteral(token.loc, token.text)

    if len(token.text) != 1:
        raise DiagError(
            token.loc,
            f"The lower boundary of the range is expected to be 1 symbol string. Got {len(token.text)} instead."
        )

    lexer.next()
    upper = expect_token(lexer, TokenKind.STRING)
    if len(upper.text) != 1:
        raise DiagError(
            upper.loc,
            f"The upper boundary of the range is expected to be 1 symbol string. Got {len(upper.text)} instead."
        )

    return CharRange(token.loc, token.text, upper.text)


def _parse_upper_bound(lexer: Lexer) -> int:
    """Consume an optional number following `*`."""
    if lexer.peek().kind != TokenKind.NUMBER:
        return MAX_UNSPECIFIED_UPPER_REPETITION_BOUND
    return lexer.next().number


def parse_primary_expr(lexer: Lexer) -> Expr:
    token = lexer.next()
    kind = token.kind

    if kind == TokenKind.PAREN_OPEN:
        return _parse_group(lexer, TokenKind.PAREN_CLOSE)

    if kind == TokenKind.CURLY_OPEN:
        body = _parse_group(lexer, TokenKind.CURLY_CLOSE)
        return Repetition(token.loc, body, 0, MAX_UNSPECIFIED_UPPER_REPETITION_BOUND)

    if kind == TokenKind.BRACKET_OPEN:
        body = _parse_group(lexer, TokenKind.BRACKET_CLOSE)
        return Repetition(token.loc, body, 0, 1)

    if kind == TokenKind.SYMBOL:
        return Symbol(token.loc, token.text)

    if kind == TokenKind.VALUE_RANGE:
        if len(token.text) != 2:
            raise DiagError(
                token.loc,
                f"Value range is expected to have 2 bounds but got {len(token.text)}"
            )
        return CharRange(token.loc, token.text[0], token.text[1])

    if kind == TokenKind.STRING:
        return _parse_string_or_range(lexer, token)

    if kind == TokenKind.ASTERISK:
        upper = _parse_upper_bound(lexer)
        body = parse_primary_expr(lexer)
        return Repetition(token.loc, body, 0, upper)

    if kind == TokenKind.NUMBER:
        lower = token.number
        if lexer.peek().kind == TokenKind.ASTERISK:
            lexer.next()
            upper = _parse_upper_bound(lexer)
        else:
            upper = lower
        body = parse_primary_expr(lexer)
        return Repetition(token.loc, body, lower, upper)

    raise DiagError(token.loc, f"Expected start of an expression, but got {kind.value}")


def parse_concat_expr(lexer: Lexer) -> Expr:
    elements = [parse_primary_expr(lexer)]
    while is_primary_start(lexer.peek().kind):
        elements.append(parse_primary_expr(lexer))

    if len(elements) == 1:
        return elements[0]
    return Concatenation(elements[0].loc, tuple(elements))


def parse_alt_expr(lexer: Lexer) -> Expr:
    variants = [parse_concat_expr(lexer)]
    while lexer.peek().kind == TokenKind.ALTERNATION:
        lexer.next()
        variants.append(parse_concat_expr(lexer))

    if len(variants) == 1:
        return variants[0]
    return Alternation(variants[0].loc, tuple(variants))


def parse_expr(lexer: Lexer) -> Expr:
    """Parse a full rule body, stopping at the first token that cannot continue it."""
    return parse_alt_expr(lexer)
