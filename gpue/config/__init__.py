"""Configuration for GPUE runs: defaults, operator vocabularies, run dataclasses.

Defaults (read from defaults.yaml):
    from gpue.config import get_default
    omega_x = get_default('physics.omega_x')

Building a run:
    from gpue.config import SimulationConfig, create_validated_config

    config = create_validated_config(xDim=128, yDim=128, omega=0.6)
    # or: config = SimulationConfig.from_yaml("run.yaml")
    store = config.to_parameter_store()  # frozen, ready for build_operators

Import Policy:
    DO NOT use: from gpue.config import *

Submodules:
    enums: Closed operator vocabularies and the evolution mode
    yaml_loader: defaults.yaml access and run-file loading
    simulation_config: Run dataclasses and parameter-store population
    validation: Error collection and warnings for suspicious settings
"""

from gpue.config.enums import (
    EvolutionMode,
    GaugeKind,
    KineticKind,
    OperatorSlot,
    PotentialKind,
    WavefunctionKind,
)
from gpue.config.yaml_loader import get_default, get_defaults, load_yaml_file, reload_defaults
from gpue.config.simulation_config import (
    GridConfig,
    NumericsConfig,
    OperatorConfig,
    PhysicsConfig,
    SimulationConfig,
    create_default_config,
    load_gauge_config,
)
from gpue.config.validation import (
    ConfigurationWarning,
    create_validated_config,
    validate_and_warn,
    validate_config,
    warn_if_unsafe,
)


__all__ = [
    # Enums
    "OperatorSlot",
    "KineticKind",
    "PotentialKind",
    "GaugeKind",
    "WavefunctionKind",
    "EvolutionMode",
    # Config classes
    "GridConfig",
    "PhysicsConfig",
    "OperatorConfig",
    "NumericsConfig",
    "SimulationConfig",
    # Factory functions
    "create_default_config",
    "create_validated_config",
    "load_gauge_config",
    # Validation
    "ConfigurationWarning",
    "validate_config",
    "validate_and_warn",
    "warn_if_unsafe",
    # YAML defaults access
    "get_default",
    "get_defaults",
    "load_yaml_file",
    "reload_defaults",
]
