"""
Checks run on a SimulationConfig before it is turned into a parameter store.

Hard errors come from each section's ``validate()`` and are raised as
ConfigurationError. Choices that are legal but likely unintended are
reported as ConfigurationWarning through the warnings module.

Import Policy:
    from gpue.config.validation import validate_config, warn_if_unsafe

DO NOT use: from gpue.config.validation import *
"""

import warnings
from typing import Callable, Iterator, List, Tuple

from gpue.config.enums import GaugeKind, PotentialKind
from gpue.config.simulation_config import SimulationConfig, create_default_config
from gpue.core.exceptions import ConfigurationError


class ConfigurationWarning(Warning):
    """A configuration that will run but probably not as intended."""

    pass


def validate_config(config: SimulationConfig, raise_on_error: bool = True) -> Tuple[bool, List[str]]:
    """Collect the validation errors of every section.

    Args:
        config: Configuration to check
        raise_on_error: Raise instead of returning the errors

    Returns:
        (True, []) when valid, else (False, errors)

    Raises:
        ConfigurationError: If invalid and ``raise_on_error`` is set
    """
    errors = config.validate()
    if not errors:
        return True, []
    if raise_on_error:
        listing = "\n".join(f"  - {err}" for err in errors)
        raise ConfigurationError(f"{len(errors)} configuration error(s):\n{listing}")
    return False, errors


# =============================================================================
# Suspicious-but-legal checks
# =============================================================================


def _odd_dimensions(config: SimulationConfig) -> Iterator[str]:
    grid = config.grid
    sizes = {"xDim": grid.xDim, "yDim": grid.yDim}
    if grid.dimnum == 3:
        sizes["zDim"] = grid.zDim
    for name, size in sizes.items():
        if size % 2:
            yield f"{name} ({size}) is odd; the position grid is not symmetric about 0."


def _ignored_zdim(config: SimulationConfig) -> Iterator[str]:
    if config.grid.dimnum == 2 and config.grid.zDim != 1:
        yield f"zDim ({config.grid.zDim}) has no effect in 2D and is treated as 1."


def _fast_rotation(config: SimulationConfig) -> Iterator[str]:
    if abs(config.physics.omega) >= 1.0:
        yield (f"omega ({config.physics.omega}) >= 1: rotating at or above the trap "
               "frequency deconfines the condensate.")


def _idle_rotation_gauge(config: SimulationConfig) -> Iterator[str]:
    if config.operators.gauge == GaugeKind.ROTATION.value and config.physics.omega == 0:
        yield "gauge 'rotation' with omega = 0 is a zero field; 'constant' says so directly."


def _planar_torus(config: SimulationConfig) -> Iterator[str]:
    if config.operators.potential == PotentialKind.TORUS.value and config.grid.dimnum == 2:
        yield "potential 'torus' on a 2D grid keeps only its radial term."


def _fiber_gauge(config: SimulationConfig) -> Iterator[str]:
    if config.operators.gauge == GaugeKind.FIBER2D.value:
        yield "gauge 'fiber2d' is incomplete: Ax is the constant hbar and Ay is 0."


_UNSAFE_CHECKS: Tuple[Callable[[SimulationConfig], Iterator[str]], ...] = (
    _odd_dimensions,
    _ignored_zdim,
    _fast_rotation,
    _idle_rotation_gauge,
    _planar_torus,
    _fiber_gauge,
)


def warn_if_unsafe(config: SimulationConfig) -> List[str]:
    """Emit a ConfigurationWarning for each suspicious choice.

    Returns:
        The warning messages, in check order
    """
    messages = [message for check in _UNSAFE_CHECKS for message in check(config)]
    for message in messages:
        warnings.warn(message, ConfigurationWarning, stacklevel=2)
    return messages


def validate_and_warn(config: SimulationConfig) -> SimulationConfig:
    """Raise on errors, warn on suspicious choices, return ``config``."""
    validate_config(config, raise_on_error=True)
    warn_if_unsafe(config)
    return config


def create_validated_config(**overrides) -> SimulationConfig:
    """Default configuration with fields overridden by name, then checked.

    Field names are unique across sections, so ``omega=0.5`` lands in
    ``physics`` and ``gauge="ring"`` in ``operators``.

    Raises:
        ValueError: If a keyword is not a field of any section
        ConfigurationError: If the result does not validate

    Example:
        >>> config = create_validated_config(xDim=64, yDim=64, omega=0.5)
    """
    config = create_default_config()
    sections = (config.grid, config.physics, config.operators, config.numerics)

    for key, value in overrides.items():
        owner = next((s for s in sections if key in s.__dataclass_fields__), None)
        if owner is None:
            raise ValueError(f"Unknown configuration parameter: {key}")
        setattr(owner, key, value)

    return validate_and_warn(config)
