"""Operator construction: evaluators, dispatch registry, file grids.

Evaluator modules:
    kinetic: momentum-space kinetic energy
    potential: trapping potentials
    gauge: synthetic vector potentials and gauge-momentum products
    wavefunction: initial-wavefunction builders
"""

from gpue.operators.context import OperatorContext, axis_value
from gpue.operators.evolution import phase_operator
from gpue.operators.file_io import read_operator_file, read_operator_files, read_wavefunction
from gpue.operators.gauge import curl2d, polar_angle, sign
from gpue.operators.registry import (
    OperatorSelection,
    OperatorSet,
    build_operators,
    materialize,
    parse_kind,
    resolve,
    vocabulary,
)

__all__ = [
    "OperatorContext",
    "axis_value",
    "OperatorSelection",
    "OperatorSet",
    "build_operators",
    "materialize",
    "parse_kind",
    "resolve",
    "vocabulary",
    "phase_operator",
    "read_operator_file",
    "read_operator_files",
    "read_wavefunction",
    "curl2d",
    "polar_angle",
    "sign",
]
