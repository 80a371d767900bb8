"""Shared CUDA code snippets for GPU kernels.

This module provides the device functions used by the CuPy
ElementwiseKernels in :mod:`gpue.gpu.kernels`. It serves as the Single
Source of Truth (SSOT) for CUDA snippets so the complex helpers are
compiled identically into every kernel.

CuPy maps ``complex128`` kernel arguments to ``complex<double>``.

Import Policy:
    from gpue.gpu.cuda_common import COMPLEX_HELPERS

DO NOT use: from gpue.gpu.cuda_common import *
"""

from gpue.core.constants import HBAR, PI

# =============================================================================
# Physical constants as device literals
# =============================================================================

PHYSICS_CONSTANTS = f"""
#define GPUE_PI {PI!r}
#define GPUE_HBAR {HBAR!r}
"""

# =============================================================================
# Complex-field primitives
# =============================================================================

# Device equivalents of gpue.gpu.complex_ops
COMPLEX_HELPERS = """
__device__ double complex_magnitude(complex<double> z) {
    return sqrt(z.real() * z.real() + z.imag() * z.imag());
}

__device__ double complex_magnitude_squared(complex<double> z) {
    return z.real() * z.real() + z.imag() * z.imag();
}

__device__ complex<double> conjugate(complex<double> z) {
    return complex<double>(z.real(), -z.imag());
}

__device__ complex<double> real_comp_mult(double scalar, complex<double> z) {
    return complex<double>(scalar * z.real(), scalar * z.imag());
}
"""

# Preamble prepended to every complex kernel
KERNEL_PREAMBLE = PHYSICS_CONSTANTS + COMPLEX_HELPERS

# =============================================================================
# Module Exports
# =============================================================================

__all__ = [
    "PHYSICS_CONSTANTS",
    "COMPLEX_HELPERS",
    "KERNEL_PREAMBLE",
]
