"""Recursive-descent parser and tree-walk evaluator for gauge expressions.

Grammar::

    expr    := ('+' | '-') expr
             | operand (OPERATOR expr)?
    operand := NUMBER | NAME | FUNCTION group | group
    group   := '(' expr ')' | '[' expr ']'

Operators carry no precedence and group to the right, so ``a op b op c``
evaluates as ``a op (b op c)``:

    "2+3*4" -> 14, "2*3+4" -> 14, "8-2-1" -> 7, "(1+2)*2" -> 6

A leading sign applies to the whole remainder (``-3+2`` is ``-(3+2)``).
Brackets group explicitly. Names resolve against the parameter store at
evaluation time: scalars by name, coordinate arrays indexed by the grid
axis they belong to.

Chains and brackets may nest at most MAX_NESTING levels; deeper input is
rejected with ExpressionSyntaxError at the first token past the limit.
"""

import functools
import logging
from typing import Optional

import numpy as np
from scipy import special

from gpue.core.exceptions import (
    ExpressionDomainError,
    ExpressionSyntaxError,
    UnresolvedVariableError,
)
from gpue.core.grid import GridIndex
from gpue.expressions.nodes import BinaryOp, Call, Node, Number, Unary, Variable, variable_names
from gpue.expressions.tokens import BRACKET_PAIRS, Token, TokenType, tokenize

logger = logging.getLogger(__name__)


def _checked_sqrt(value):
    if np.any(np.asarray(value) < 0):
        raise ExpressionDomainError(f"sqrt of a negative value ({np.min(value)})")
    return np.sqrt(value)


FUNCTIONS = {
    "sin": np.sin,
    "cos": np.cos,
    "tan": np.tan,
    "exp": np.exp,
    "erf": special.erf,
    "sqrt": _checked_sqrt,
    "sign": np.sign,
}

# Coordinate array name -> GridIndex field it is indexed by
AXIS_OF = {
    "x": "i", "xp": "i", "px": "i",
    "y": "j", "yp": "j", "py": "j",
    "z": "k", "zp": "k", "pz": "k",
}

# Operators plus open brackets allowed below one expression
MAX_NESTING = 150


# =============================================================================
# Parsing
# =============================================================================


class _Parser:

    def __init__(self, text: str):
        self.text = text
        self.tokens = tokenize(text)
        self.pos = 0
        self.depth = 0
        self.nesting = 0

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def error(self, message: str, token: Token) -> ExpressionSyntaxError:
        return ExpressionSyntaxError(message, self.text, token.position)

    def parse(self) -> Node:
        if self.peek().type is TokenType.END:
            raise self.error("Empty expression", self.peek())
        node = self.parse_expr()
        token = self.peek()
        if token.type is TokenType.CLOSE:
            raise self.error(f"Unmatched closing bracket '{token.text}'", token)
        if token.type is not TokenType.END:
            raise self.error(f"Unexpected '{token.text}'", token)
        return node

    def parse_expr(self) -> Node:
        token = self.peek()
        if self.nesting >= MAX_NESTING:
            raise self.error(f"Expression nested deeper than {MAX_NESTING} levels", token)
        self.nesting += 1
        try:
            return self._parse_chain(token)
        finally:
            self.nesting -= 1

    def _parse_chain(self, token: Token) -> Node:
        if token.type is TokenType.OPERATOR and token.text in "+-":
            self.advance()
            return Unary(token.text, self.parse_expr(), token.position)

        left = self.parse_operand()
        token = self.peek()
        if token.type is TokenType.OPERATOR:
            self.advance()
            return BinaryOp(token.text, left, self.parse_expr(), token.position)
        if token.type in (TokenType.NUMBER, TokenType.NAME, TokenType.OPEN):
            raise self.error(f"Expected an operator before '{token.text}'", token)
        return left

    def parse_operand(self) -> Node:
        token = self.peek()

        if token.type is TokenType.NUMBER:
            self.advance()
            return Number(float(token.text))

        if token.type is TokenType.NAME:
            self.advance()
            if token.text in FUNCTIONS:
                if self.peek().type is not TokenType.OPEN:
                    raise self.error(
                        f"Function '{token.text}' must be followed by a bracket", self.peek()
                    )
                return Call(token.text, self.parse_group(), token.position)
            return Variable(token.text, token.position)

        if token.type is TokenType.OPEN:
            return self.parse_group()

        if token.type is TokenType.CLOSE:
            if self.depth == 0:
                raise self.error(f"Unmatched closing bracket '{token.text}'", token)
            raise self.error("Expected an operand", token)

        if token.type is TokenType.END:
            raise self.error("Unexpected end of expression", token)

        raise self.error(f"Unexpected operator '{token.text}'", token)

    def parse_group(self) -> Node:
        opening = self.advance()
        self.depth += 1
        inner = self.parse_expr()
        self.depth -= 1

        closing = self.peek()
        expected = BRACKET_PAIRS[opening.text]
        if closing.type is TokenType.END:
            raise self.error(f"Unmatched opening bracket '{opening.text}'", opening)
        if closing.text != expected:
            raise self.error(
                f"Expected '{expected}' to close '{opening.text}', found '{closing.text}'",
                closing,
            )
        self.advance()
        return inner


class Expression:
    """A parsed expression, ready to evaluate against a parameter store."""

    def __init__(self, text: str, root: Node):
        self.text = text
        self.root = root
        self.variables = variable_names(root)

    def evaluate(self, store, index: Optional[GridIndex] = None):
        """Evaluate at one site, or at every site of an open index mesh.

        Raises:
            UnresolvedVariableError: If a name is not a scalar or array parameter
            ExpressionDomainError: On sqrt of a negative value or division by zero
        """
        return _evaluate(self.root, store, index)

    def check_variables(self, store) -> None:
        """Fail early if any referenced name is missing from ``store``."""
        for name in sorted(self.variables):
            if not (store.is_double(name) or store.is_dstar(name)):
                _report_unresolved(name, store)
                raise UnresolvedVariableError(name)

    def __repr__(self) -> str:
        return f"Expression({self.text!r})"


@functools.lru_cache(maxsize=256)
def parse_expression(text: str) -> Expression:
    """Tokenize and parse ``text``.

    Raises:
        ExpressionSyntaxError: On malformed input
    """
    return Expression(text, _Parser(text).parse())


def evaluate_expression(text: str, store, index: Optional[GridIndex] = None):
    """Parse (cached) and evaluate ``text`` in one call."""
    return parse_expression(text).evaluate(store, index)


# =============================================================================
# Evaluation
# =============================================================================


def _report_unresolved(name: str, store) -> None:
    known = store.known_keys()
    logger.error(
        "Could not find variable '%s'. Known scalars: %s. Known arrays: %s",
        name,
        ", ".join(known["double"]),
        ", ".join(known["array"]),
    )


def _resolve(node: Variable, store, index: Optional[GridIndex]):
    name = node.name
    if store.is_double(name):
        return store.dval(name)

    if store.is_dstar(name):
        axis = AXIS_OF.get(name)
        if axis is None:
            raise UnresolvedVariableError(name, "array parameter is not a grid axis")
        if index is None:
            raise UnresolvedVariableError(name, "array parameter needs a grid index")
        return store.dsval(name)[getattr(index, axis)]

    _report_unresolved(name, store)
    raise UnresolvedVariableError(name)


def _evaluate(node: Node, store, index: Optional[GridIndex]):
    if isinstance(node, Number):
        return node.value

    if isinstance(node, Variable):
        return _resolve(node, store, index)

    if isinstance(node, Call):
        return FUNCTIONS[node.function](_evaluate(node.argument, store, index))

    if isinstance(node, Unary):
        operand = _evaluate(node.operand, store, index)
        return -operand if node.operator == "-" else operand

    if isinstance(node, BinaryOp):
        left = _evaluate(node.left, store, index)
        right = _evaluate(node.right, store, index)
        if node.operator == "+":
            return left + right
        if node.operator == "-":
            return left - right
        if node.operator == "*":
            return left * right
        if np.any(np.asarray(right) == 0):
            raise ExpressionDomainError(f"division by zero at position {node.position}")
        return left / right

    raise TypeError(f"Unknown expression node {node!r}")


__all__ = [
    "FUNCTIONS",
    "AXIS_OF",
    "Expression",
    "parse_expression",
    "evaluate_expression",
]
