"""
Default Configuration Constants for GPUE Simulations

This module contains ALL default values used throughout the simulation.
This is the Single Source of Truth (SSOT) for default configuration; the
values are read from defaults.yaml, with the literals below as fallback.

IMPORTANT Import Policies:
    1. DO NOT use: from gpue.config.defaults import *
       This causes namespace pollution and makes tracking difficult.

    2. DO use explicit imports:
       from gpue.config.defaults import DEFAULT_XDIM, DEFAULT_OMEGA_X

    3. DO NOT define defaults elsewhere. All defaults must be in this file.
"""

from gpue.config.yaml_loader import get_default

# =============================================================================
# Grid Defaults
# =============================================================================

# Sites per axis. Even sizes keep the momentum grid symmetric.
DEFAULT_XDIM = int(get_default("grid.xdim", 256))
DEFAULT_YDIM = int(get_default("grid.ydim", 256))
DEFAULT_ZDIM = int(get_default("grid.zdim", 256))

# Number of spatial dimensions (2 or 3). 2D forces zDim = 1.
DEFAULT_DIMNUM = int(get_default("grid.dimnum", 2))

# Half-width of the simulation box [m]
# 0 derives the box from the Thomas-Fermi radius: xMax = 6 * Rxy * a0x
DEFAULT_BOX_SIZE = float(get_default("grid.box_size", 2.5e-5))

# =============================================================================
# Physics Defaults
# =============================================================================

# Atomic mass [kg] (87Rb)
DEFAULT_MASS = float(get_default("physics.mass", 1.4431607e-25))

# s-wave scattering length [m]
DEFAULT_SCATTERING_LENGTH = float(get_default("physics.scattering_length", 4.67e-9))

# Rotation rate as a fraction of the trap frequency
DEFAULT_OMEGA = float(get_default("physics.omega", 0.0))

# Trap frequencies [rad/s]
DEFAULT_OMEGA_X = float(get_default("physics.omega_x", 6.283))
DEFAULT_OMEGA_Y = float(get_default("physics.omega_y", 6.283))
DEFAULT_OMEGA_Z = float(get_default("physics.omega_z", 6.283))

# Trap anisotropy applied to the y and z axes
DEFAULT_GAMMA_Y = float(get_default("physics.gamma_y", 1.0))

# Atom number and interaction scaling
DEFAULT_ATOMS = int(get_default("physics.atoms", 1))
DEFAULT_INTERACTION = float(get_default("physics.interaction", 1.0))

# Toroidal trap radius scaling
DEFAULT_FUDGE = float(get_default("physics.fudge", 1.0))

# Trap centre offsets [m]
DEFAULT_X0_SHIFT = float(get_default("physics.x0_shift", 0.0))
DEFAULT_Y0_SHIFT = float(get_default("physics.y0_shift", 0.0))
DEFAULT_Z0_SHIFT = float(get_default("physics.z0_shift", 0.0))

# Real-time and imaginary-time (ground state) timesteps [s]
DEFAULT_DT = float(get_default("physics.dt", 1.0e-4))
DEFAULT_GDT = float(get_default("physics.gdt", 1.0e-4))

# Use the dimensionless kinetic/potential variants
DEFAULT_DIMENSIONLESS = bool(get_default("physics.dimensionless", False))

# =============================================================================
# Operator Selector Defaults
# =============================================================================

DEFAULT_KINETIC = str(get_default("operators.kinetic", "rotation"))
DEFAULT_POTENTIAL = str(get_default("operators.potential", "harmonic"))
DEFAULT_GAUGE = str(get_default("operators.gauge", "rotation"))
DEFAULT_WAVEFUNCTION = str(get_default("operators.wavefunction", "standard_2d"))

# =============================================================================
# Numerical Defaults
# =============================================================================

# Partial sums combined per block in each reduction pass (power of two)
DEFAULT_REDUCTION_BLOCK_SIZE = int(get_default("numerics.reduction_block_size", 256))

# Discrete norm enforced by renormalization
DEFAULT_TARGET_NORM = float(get_default("numerics.target_norm", 1.0))

# Norm below which renormalization refuses to divide
DEFAULT_MIN_NORM = float(get_default("numerics.min_norm", 1.0e-300))
