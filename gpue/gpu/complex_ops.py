"""Complex-field kernel primitives.

Elementwise helpers on complex values. Each accepts a Python scalar, a
NumPy array or a CuPy array and returns a result of the same kind; no
site depends on any other. The CUDA equivalents compiled into the device
kernels live in :mod:`gpue.gpu.cuda_common`.
"""

from gpue.gpu.utils import get_array_module


def complex_magnitude(z):
    """|z| = sqrt(re^2 + im^2)."""
    xp = get_array_module(z)
    return xp.sqrt(complex_magnitude_squared(z))


def complex_magnitude_squared(z):
    """|z|^2 = re^2 + im^2, without the square root."""
    xp = get_array_module(z)
    re = xp.real(z)
    im = xp.imag(z)
    return re * re + im * im


def conjugate(z):
    """Negate the imaginary part only."""
    xp = get_array_module(z)
    return xp.conj(z)


def real_comp_mult(scalar, z):
    """Scale a complex value by a real scalar."""
    return scalar * z


__all__ = [
    "complex_magnitude",
    "complex_magnitude_squared",
    "conjugate",
    "real_comp_mult",
]
