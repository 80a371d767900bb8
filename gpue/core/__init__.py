"""Core data structures for the split-operator condensate solver.

This module contains the parameter store, grid layout, physics constants
and the exception hierarchy shared by all other subpackages.
"""

from gpue.core.constants import HBAR, PI, RB87_MASS, RB87_SCATTERING_LENGTH
from gpue.core.exceptions import (
    ConfigurationError,
    ExpressionDomainError,
    ExpressionError,
    ExpressionSyntaxError,
    GPUEError,
    NormalizationError,
    NumericalError,
    OperatorFileError,
    ParameterStoreFrozenError,
    UnknownOperatorError,
    UnknownParameterError,
    UnresolvedVariableError,
)
from gpue.core.grid import GridIndex, GridLayout
from gpue.core.parameters import ParameterStore

__all__ = [
    # Constants
    "HBAR",
    "PI",
    "RB87_MASS",
    "RB87_SCATTERING_LENGTH",
    # Data structures
    "GridIndex",
    "GridLayout",
    "ParameterStore",
    # Exceptions
    "GPUEError",
    "ConfigurationError",
    "UnknownParameterError",
    "ParameterStoreFrozenError",
    "UnknownOperatorError",
    "UnresolvedVariableError",
    "ExpressionError",
    "ExpressionSyntaxError",
    "ExpressionDomainError",
    "NumericalError",
    "NormalizationError",
    "OperatorFileError",
]
