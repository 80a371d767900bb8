"""Device kernels: complex primitives, elementwise multiplies, reductions."""

from gpue.gpu.utils import (
    get_array_module,
    get_cupy,
    gpu_available,
    is_device_array,
    to_device,
    to_host,
)
from gpue.gpu.complex_ops import (
    complex_magnitude,
    complex_magnitude_squared,
    conjugate,
    real_comp_mult,
)
from gpue.gpu.kernels import (
    cmult,
    cmult_density,
    cmult_phi,
    density_coefficient,
    scalar_mult,
)
from gpue.gpu.reductions import (
    multipass_sum,
    reduction_pass_count,
    renormalize,
    wavefunction_norm,
)

__all__ = [
    # GPU utilities
    "get_cupy",
    "gpu_available",
    "is_device_array",
    "get_array_module",
    "to_device",
    "to_host",
    # Complex primitives
    "complex_magnitude",
    "complex_magnitude_squared",
    "conjugate",
    "real_comp_mult",
    # Multiply kernels
    "cmult",
    "cmult_phi",
    "cmult_density",
    "density_coefficient",
    "scalar_mult",
    # Reductions
    "multipass_sum",
    "reduction_pass_count",
    "wavefunction_norm",
    "renormalize",
]
