"""Physics constants for the condensate simulation.

This module is the Single Source of Truth (SSOT) for all physics constants
used by the operator evaluators and kernels. Import from here rather than
defining constants locally.

Import Policy:
    from gpue.core.constants import HBAR, RB87_MASS, RB87_SCATTERING_LENGTH

DO NOT use: from gpue.core.constants import *
"""

import math

# =============================================================================
# Fundamental Physical Constants
# =============================================================================

# Reduced Planck constant [J s]
HBAR = 1.05457180013e-34

PI = math.pi

# =============================================================================
# Species Constants - Rubidium 87 (SSOT)
# =============================================================================

# Atomic mass of 87Rb [kg]
RB87_MASS = 1.4431607e-25

# s-wave scattering length used by the density kernel [m]
RB87_SCATTERING_LENGTH = 4.67e-9

# =============================================================================
# Gauge Field Constants
# =============================================================================

# Radial scale applied inside the vortex-ring gauge profile
RING_RADIAL_SCALE = 1.0e9

# Inverse-radius prefactor and saturation value of the vortex-ring profile
RING_INVERSE_SCALE = 1.0e5
RING_SATURATION = 1.0e-3

# Spatial frequency of the "test" gauge field along y
TEST_GAUGE_WAVENUMBER = 1.0e4

__all__ = [
    "HBAR",
    "PI",
    "RB87_MASS",
    "RB87_SCATTERING_LENGTH",
    "RING_RADIAL_SCALE",
    "RING_INVERSE_SCALE",
    "RING_SATURATION",
    "TEST_GAUGE_WAVENUMBER",
]
