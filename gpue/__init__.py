"""Split-Operator Gross-Pitaevskii Condensate Core

Builds the energy operators of a 2D/3D condensate simulation from
configuration and applies them to the wavefunction with device kernels.

Key Principles:
- Frozen parameter store passed explicitly to every evaluator
- Closed Enum dispatch: unknown operator names fail at construction
- Operator grids built once and read-only during evolution
- Renormalization refuses zero or non-finite norms instead of emitting NaN

Version: 0.1
"""

__version__ = "0.1"

# Core data structures
from gpue.core import GridIndex, GridLayout, ParameterStore
from gpue.core.constants import HBAR

# Configuration
from gpue.config import (
    EvolutionMode,
    GaugeKind,
    KineticKind,
    OperatorSlot,
    PotentialKind,
    SimulationConfig,
    WavefunctionKind,
    create_validated_config,
)

# Kernels
from gpue.gpu import (
    cmult,
    cmult_density,
    cmult_phi,
    multipass_sum,
    renormalize,
    scalar_mult,
    wavefunction_norm,
)

# Operators
from gpue.expressions import evaluate_expression, parse_expression
from gpue.operators import (
    OperatorSelection,
    OperatorSet,
    build_operators,
    phase_operator,
    read_operator_file,
    read_wavefunction,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "HBAR",
    "GridIndex",
    "GridLayout",
    "ParameterStore",
    # Configuration
    "SimulationConfig",
    "create_validated_config",
    "OperatorSlot",
    "KineticKind",
    "PotentialKind",
    "GaugeKind",
    "WavefunctionKind",
    "EvolutionMode",
    # Kernels
    "cmult",
    "cmult_phi",
    "cmult_density",
    "scalar_mult",
    "multipass_sum",
    "wavefunction_norm",
    "renormalize",
    # Operators
    "parse_expression",
    "evaluate_expression",
    "OperatorSelection",
    "OperatorSet",
    "build_operators",
    "phase_operator",
    "read_operator_file",
    "read_wavefunction",
]
