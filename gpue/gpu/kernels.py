"""Elementwise multiply kernels for the split-step update.

Every kernel maps one grid site to one output site with no cross-site
dependency. On CuPy inputs the work runs as a ``cupy.ElementwiseKernel``
compiled with the helpers from :mod:`gpue.gpu.cuda_common`; on NumPy
inputs the same arithmetic runs as vectorized ufunc calls.

Kernels:
    cmult: complex x complex (e.g. kinetic phase after a transform)
    cmult_phi: complex x exp(i*phi) (phase imprint)
    cmult_density: nonlinear density step, real or imaginary time
    scalar_mult: field scaling (e.g. 1/N after an inverse transform)

All kernels take an optional ``out`` array of the input shape and return
the output field.
"""

import functools
import logging

import numpy as np

from gpue.config.enums import EvolutionMode
from gpue.core.constants import HBAR, PI, RB87_SCATTERING_LENGTH
from gpue.gpu.complex_ops import complex_magnitude_squared
from gpue.gpu.cuda_common import KERNEL_PREAMBLE
from gpue.gpu.utils import get_array_module, get_cupy

logger = logging.getLogger(__name__)

# name -> (in_params, out_params, operation)
_KERNEL_SOURCES = {
    "cmult": (
        "complex128 in1, complex128 in2",
        "complex128 out",
        "out = in1 * in2;",
    ),
    "cmult_phi": (
        "complex128 in1, float64 phi",
        "complex128 out",
        "out = in1 * complex<double>(cos(phi), sin(phi));",
    ),
    "cmult_density": (
        "complex128 op, complex128 wfc, float64 coeff, float64 dt, int32 real_time",
        "complex128 out",
        """
        double g = coeff * complex_magnitude_squared(wfc) * dt / GPUE_HBAR;
        complex<double> factor;
        if (real_time) {
            factor = complex<double>(cos(g), -sin(g));
        } else {
            factor = complex<double>(exp(-g), 0.0);
        }
        out = op * wfc * factor;
        """,
    ),
    "scalar_mult": (
        "complex128 in1, float64 factor",
        "complex128 out",
        "out = real_comp_mult(factor, in1);",
    ),
}


@functools.lru_cache(maxsize=None)
def _device_kernel(name: str):
    """Compile (once) the CuPy ElementwiseKernel called ``name``."""
    cp = get_cupy()
    in_params, out_params, operation = _KERNEL_SOURCES[name]
    logger.debug("Compiling device kernel gpue_%s", name)
    return cp.ElementwiseKernel(
        in_params,
        out_params,
        operation,
        f"gpue_{name}",
        preamble=KERNEL_PREAMBLE,
    )


def _launch(name: str, *args, out=None):
    kernel = _device_kernel(name)
    if out is None:
        return kernel(*args)
    return kernel(*args, out)


def _check_shapes(*arrays) -> None:
    shapes = {a.shape for a in arrays if a is not None}
    if len(shapes) > 1:
        raise ValueError(f"Field shapes must match, got {sorted(shapes)}")


def density_coefficient(mass: float, omega_z: float, n_atoms: int,
                        scattering_length: float = RB87_SCATTERING_LENGTH) -> float:
    """Prefactor multiplying |psi|^2 in the density term.

    g = 0.5 * N * 4 pi hbar^2 (a_s / m) * sqrt(m omega_z / (2 pi hbar))
    """
    return (
        0.5 * n_atoms * 4.0 * PI * HBAR * HBAR * (scattering_length / mass)
        * np.sqrt(mass * omega_z / (2.0 * PI * HBAR))
    )


def cmult(in1, in2, out=None):
    """Complex x complex elementwise product."""
    _check_shapes(in1, in2, out)
    xp = get_array_module(in1, in2)
    if xp is np:
        return np.multiply(in1, in2, out=out)
    return _launch("cmult", in1, in2, out=out)


def cmult_phi(in1, phi, out=None):
    """Multiply a complex field by exp(i * phi) for a real phase grid."""
    _check_shapes(in1, phi, out)
    xp = get_array_module(in1, phi)
    if xp is np:
        return np.multiply(in1, np.exp(1j * phi), out=out)
    return _launch("cmult_phi", in1, phi, out=out)


def cmult_density(op, wfc, dt: float, mass: float, omega_z: float,
                  mode, n_atoms: int,
                  scattering_length: float = RB87_SCATTERING_LENGTH, out=None):
    """Apply the operator grid together with the nonlinear density term.

    With g = density_coefficient(...) * |wfc|^2, the density factor is
    exp(-g dt / hbar) in imaginary time (amplitude damping) and
    exp(-i g dt / hbar) in real time (phase rotation). The result is
    op * wfc * factor.

    Args:
        op: Complex (or real) operator grid, e.g. the potential phase
        wfc: Complex wavefunction
        dt: Timestep [s]
        mass: Atomic mass [kg]
        omega_z: Axial trap frequency [rad/s]
        mode: EvolutionMode, or its flag value (0 imaginary, 1 real)
        n_atoms: Number of atoms
        scattering_length: s-wave scattering length [m]
        out: Optional output array

    Returns:
        Updated complex field
    """
    _check_shapes(op, wfc, out)
    mode = EvolutionMode(mode)
    coeff = density_coefficient(mass, omega_z, n_atoms, scattering_length)

    xp = get_array_module(op, wfc)
    if xp is np:
        g = coeff * complex_magnitude_squared(wfc) * dt / HBAR
        if mode is EvolutionMode.REAL:
            factor = np.exp(-1j * g)
        else:
            factor = np.exp(-g)
        return np.multiply(op * wfc, factor, out=out)

    real_time = np.int32(mode is EvolutionMode.REAL)
    op = xp.asarray(op, dtype=xp.complex128)
    return _launch("cmult_density", op, wfc, float(coeff), float(dt), real_time, out=out)


def scalar_mult(field, factor: float, out=None):
    """Scale a complex field by a real factor."""
    _check_shapes(field, out)
    xp = get_array_module(field)
    if xp is np:
        return np.multiply(field, factor, out=out)
    return _launch("scalar_mult", field, float(factor), out=out)


__all__ = [
    "density_coefficient",
    "cmult",
    "cmult_phi",
    "cmult_density",
    "scalar_mult",
]
