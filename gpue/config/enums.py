"""
Configuration Enums for GPUE Simulations

This module defines the closed operator vocabularies. Each enum value is
the configuration string that selects it, so ``PotentialKind("torus")``
is the whole lookup and anything outside the vocabulary fails at
construction time.

Import Policy:
    from gpue.config.enums import KineticKind, PotentialKind, GaugeKind

DO NOT use: from gpue.config.enums import *
"""

from enum import Enum


class OperatorSlot(Enum):
    """Operator slots resolved by the dispatch registry."""
    K = "K"
    V = "V"
    AX = "Ax"
    AY = "Ay"
    AZ = "Az"
    WFC = "wfc"


class KineticKind(Enum):
    """Kinetic energy operators.

    Options:
        ROTATION: (hbar^2 / 2m)(px^2 + py^2)
        ROTATION_3D: (hbar^2 / 2m)(px^2 + py^2 + pz^2)
        ROTATION_DIMENSIONLESS: (px^2 + py^2) / 2
        ROTATION_GAUGE: Rotating-frame kinetic term with the symmetric gauge folded in
    """
    ROTATION = "rotation"
    ROTATION_3D = "rotation3d"
    ROTATION_DIMENSIONLESS = "rotation_dimensionless"
    ROTATION_GAUGE = "rotation_gauge"


class PotentialKind(Enum):
    """Trapping potentials.

    Options:
        HARMONIC: 2D harmonic trap plus the gauge-field energy
        HARMONIC_3D: 3D harmonic trap plus the gauge-field energy
        HARMONIC_DIMENSIONLESS: 2D harmonic trap in oscillator units
        HARMONIC_GAUGE: 2D harmonic trap seen from the rotating frame
        TORUS: Toroidal trap with radius set by xMax and fudge
        FILE: Per-site values read once from a plain-text file
    """
    HARMONIC = "harmonic"
    HARMONIC_3D = "harmonic3d"
    HARMONIC_DIMENSIONLESS = "harmonic_dimensionless"
    HARMONIC_GAUGE = "harmonic_gauge"
    TORUS = "torus"
    FILE = "file"


class GaugeKind(Enum):
    """Synthetic vector-potential (gauge field) selections.

    One selector drives all three components Ax, Ay, Az.

    Options:
        ROTATION: Symmetric gauge for rotation about z
        RING: Vortex-ring profile (2D components, Az = 0)
        CONSTANT: Zero field
        TEST: Sinusoidal Ax for gauge tests
        FIBER2D: Optical-fiber field (BETA)
        DYNAMIC: Components given as expressions (Axstring, Aystring, Azstring)
        FILE: Components read once from plain-text files
    """
    ROTATION = "rotation"
    RING = "ring"
    CONSTANT = "constant"
    TEST = "test"
    FIBER2D = "fiber2d"
    DYNAMIC = "dynamic"
    FILE = "file"


class WavefunctionKind(Enum):
    """Initial wavefunction builders."""
    STANDARD_2D = "standard_2d"
    STANDARD_3D = "standard_3d"
    TORUS = "torus"


class EvolutionMode(Enum):
    """Time-evolution mode passed to the density kernel.

    Options:
        IMAGINARY: Imaginary-time relaxation towards the ground state (flag 0)
        REAL: Real-time propagation (flag 1)
    """
    IMAGINARY = 0
    REAL = 1


# Vocabulary enum for each operator slot
SLOT_KINDS = {
    OperatorSlot.K: KineticKind,
    OperatorSlot.V: PotentialKind,
    OperatorSlot.AX: GaugeKind,
    OperatorSlot.AY: GaugeKind,
    OperatorSlot.AZ: GaugeKind,
    OperatorSlot.WFC: WavefunctionKind,
}
