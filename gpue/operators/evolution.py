"""Split-step phase operators built from operator grids."""

from gpue.config.enums import EvolutionMode
from gpue.core.constants import HBAR
from gpue.gpu.utils import get_array_module


def phase_operator(grid, dt: float, mode, hbar: float = HBAR, half_step: bool = True):
    """Exponentiate an energy grid for one split step.

    Imaginary time gives exp(-grid * dt / hbar) and real time gives
    exp(-i * grid * dt / hbar). With ``half_step`` the exponent is halved,
    as for the operators applied on both sides of the full step.

    Args:
        grid: Real energy grid (K, V or a pA product), NumPy or CuPy
        dt: Timestep [s]
        mode: EvolutionMode, or its flag value (0 imaginary, 1 real)
        hbar: Value of hbar; 1 for dimensionless operators
        half_step: Use dt / 2

    Returns:
        complex128 operator of the grid's shape and array module
    """
    mode = EvolutionMode(mode)
    xp = get_array_module(grid)
    exponent = xp.asarray(grid, dtype=xp.float64) * (dt / hbar)
    if half_step:
        exponent = exponent * 0.5

    if mode is EvolutionMode.REAL:
        return xp.exp(-1j * exponent)
    return xp.exp(-exponent).astype(xp.complex128)


__all__ = ["phase_operator"]
