"""Arithmetic expressions for dynamically specified gauge fields.

Usage:
    from gpue.expressions import parse_expression

    expr = parse_expression("-y*omega*omegaX")
    Ax = expr.evaluate(store, layout.mesh())
"""

from gpue.expressions.nodes import BinaryOp, Call, Number, Unary, Variable
from gpue.expressions.parser import (
    AXIS_OF,
    FUNCTIONS,
    Expression,
    evaluate_expression,
    parse_expression,
)
from gpue.expressions.tokens import Token, TokenType, tokenize

__all__ = [
    "tokenize",
    "Token",
    "TokenType",
    "Number",
    "Variable",
    "Call",
    "Unary",
    "BinaryOp",
    "Expression",
    "parse_expression",
    "evaluate_expression",
    "FUNCTIONS",
    "AXIS_OF",
]
