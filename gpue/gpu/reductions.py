"""Multipass tree reduction and wavefunction renormalization.

The reduction sums a field in passes. Each pass pads the live partial sums
to a whole number of blocks, then halves every block pairwise until one
value per block remains; the per-block results feed the next pass. The
final pass leaves a single value. On CuPy inputs each step is a kernel on
the default stream, so a pass always sees the completed writes of the
previous one.

Summation order depends on the block size, so results for different block
sizes agree only within floating-point tolerance.
"""

import logging

import numpy as np

from gpue.config.defaults import (
    DEFAULT_MIN_NORM,
    DEFAULT_REDUCTION_BLOCK_SIZE,
    DEFAULT_TARGET_NORM,
)
from gpue.core.exceptions import NormalizationError
from gpue.gpu.complex_ops import complex_magnitude_squared
from gpue.gpu.kernels import scalar_mult
from gpue.gpu.utils import get_array_module

logger = logging.getLogger(__name__)


def _check_block_size(block_size: int) -> None:
    if block_size < 2 or block_size & (block_size - 1):
        raise ValueError(f"block_size must be a power of two >= 2, got {block_size}")


def reduction_pass_count(n: int, block_size: int = DEFAULT_REDUCTION_BLOCK_SIZE) -> int:
    """Number of passes needed to reduce ``n`` values to one."""
    _check_block_size(block_size)
    if n < 1:
        raise ValueError(f"cannot reduce {n} values")
    passes = 0
    while True:
        n = -(-n // block_size)
        passes += 1
        if n == 1:
            return passes


def _reduction_pass(values, block_size: int, xp):
    """One pass: per-block pairwise halving, one partial sum per block."""
    n_blocks = -(-values.size // block_size)
    blocks = xp.zeros(n_blocks * block_size, dtype=values.dtype)
    blocks[:values.size] = values
    blocks = blocks.reshape(n_blocks, block_size)

    width = block_size
    while width > 1:
        width //= 2
        blocks = blocks[:, :width] + blocks[:, width:2 * width]
    return blocks[:, 0]


def multipass_sum(field, block_size: int = DEFAULT_REDUCTION_BLOCK_SIZE):
    """Sum every element of a real or complex field.

    Partial sums accumulate in float64 (complex128 for complex fields).

    Args:
        field: NumPy or CuPy array of any shape
        block_size: Values combined per block in each pass (power of two)

    Returns:
        The total as a Python float or complex
    """
    _check_block_size(block_size)
    xp = get_array_module(field)
    values = xp.ravel(xp.asarray(field))
    if values.size == 0:
        return 0.0

    values = values.astype(np.result_type(values.dtype, np.float64), copy=False)
    while True:
        values = _reduction_pass(values, block_size, xp)
        if values.size == 1:
            return values[0].item()


def wavefunction_norm(wfc, dr: float, block_size: int = DEFAULT_REDUCTION_BLOCK_SIZE) -> float:
    """Discrete norm sum(|wfc|^2) * dr."""
    return multipass_sum(complex_magnitude_squared(wfc), block_size) * dr


def renormalize(wfc, dr: float, target_norm: float = DEFAULT_TARGET_NORM,
                block_size: int = DEFAULT_REDUCTION_BLOCK_SIZE,
                min_norm: float = DEFAULT_MIN_NORM, out=None):
    """Rescale ``wfc`` so that sum(|wfc|^2) * dr equals ``target_norm``.

    Args:
        wfc: Complex field (NumPy or CuPy)
        dr: Cell volume element
        target_norm: Norm after rescaling
        block_size: Reduction block size
        min_norm: Sums at or below this value are rejected
        out: Optional output array (may be ``wfc`` itself)

    Returns:
        The rescaled field

    Raises:
        NormalizationError: If dr or target_norm is not positive, or the
            sum is non-finite or too small to divide by
    """
    if not dr > 0:
        raise NormalizationError(f"cell volume element must be > 0, got {dr}")
    if not target_norm > 0:
        raise NormalizationError(f"target norm must be > 0, got {target_norm}")

    total = multipass_sum(complex_magnitude_squared(wfc), block_size)
    if not np.isfinite(total):
        raise NormalizationError(f"wavefunction sum is not finite ({total})")
    if total <= min_norm:
        raise NormalizationError(
            f"wavefunction sum {total:.3e} is at or below the minimum {min_norm:.3e}"
        )

    factor = 1.0 / np.sqrt(total * dr / target_norm)
    if not np.isfinite(factor):
        raise NormalizationError(f"renormalization factor is not finite ({factor})")

    logger.debug("Renormalizing: sum=%.6e dr=%.3e factor=%.6e", total, dr, factor)
    return scalar_mult(wfc, factor, out=out)


__all__ = [
    "reduction_pass_count",
    "multipass_sum",
    "wavefunction_norm",
    "renormalize",
]
