"""Immutable expression tree nodes."""

from dataclasses import dataclass
from typing import FrozenSet, Union


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class Variable:
    name: str
    position: int


@dataclass(frozen=True)
class Call:
    function: str
    argument: "Node"
    position: int


@dataclass(frozen=True)
class Unary:
    """Leading sign applied to everything that follows it."""

    operator: str
    operand: "Node"
    position: int


@dataclass(frozen=True)
class BinaryOp:
    operator: str
    left: "Node"
    right: "Node"
    position: int


Node = Union[Number, Variable, Call, Unary, BinaryOp]


def variable_names(node: Node) -> FrozenSet[str]:
    """Names of every variable referenced below ``node``."""
    if isinstance(node, Variable):
        return frozenset([node.name])
    if isinstance(node, Call):
        return variable_names(node.argument)
    if isinstance(node, Unary):
        return variable_names(node.operand)
    if isinstance(node, BinaryOp):
        return variable_names(node.left) | variable_names(node.right)
    return frozenset()


__all__ = ["Number", "Variable", "Call", "Unary", "BinaryOp", "Node", "variable_names"]
