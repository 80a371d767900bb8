"""Tokenizer for gauge-field expressions.

Turns expression text into an immutable tuple of tokens. Whitespace is
skipped; every other character must belong to a number, a name, an
operator or a bracket.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from gpue.core.exceptions import ExpressionSyntaxError


class TokenType(Enum):
    NUMBER = "number"
    NAME = "name"
    OPERATOR = "operator"
    OPEN = "open"
    CLOSE = "close"
    END = "end"


@dataclass(frozen=True)
class Token:
    type: TokenType
    text: str
    position: int


OPERATORS = frozenset("+-*/")

# Opening bracket -> matching closing bracket
BRACKET_PAIRS = {"(": ")", "[": "]"}

_TOKEN_PATTERN = re.compile(
    r"""
    (?P<space>\s+)
    | (?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)
    | (?P<name>[A-Za-z_][A-Za-z0-9_]*)
    | (?P<operator>[-+*/])
    | (?P<open>[(\[])
    | (?P<close>[)\]])
    """,
    re.VERBOSE,
)

_GROUP_TYPES = {
    "number": TokenType.NUMBER,
    "name": TokenType.NAME,
    "operator": TokenType.OPERATOR,
    "open": TokenType.OPEN,
    "close": TokenType.CLOSE,
}


def tokenize(text: str) -> Tuple[Token, ...]:
    """Split ``text`` into tokens, terminated by an END token.

    Raises:
        ExpressionSyntaxError: On a character no token can start with
    """
    tokens = []
    position = 0
    while position < len(text):
        match = _TOKEN_PATTERN.match(text, position)
        if match is None:
            raise ExpressionSyntaxError(
                f"Unexpected character '{text[position]}'", text, position
            )
        kind = match.lastgroup
        if kind != "space":
            tokens.append(Token(_GROUP_TYPES[kind], match.group(), position))
        position = match.end()

    tokens.append(Token(TokenType.END, "", len(text)))
    return tuple(tokens)


__all__ = ["TokenType", "Token", "OPERATORS", "BRACKET_PAIRS", "tokenize"]
