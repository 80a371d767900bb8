"""Synthetic vector-potential (gauge field) evaluators.

One selector drives all three components. Each evaluator returns a single
component at ``index``; the gauge-momentum products ``rotation_pA*`` go
through the context so they follow whichever gauge is active.
"""

import numpy as np

from gpue.core.constants import (
    HBAR,
    PI,
    RING_INVERSE_SCALE,
    RING_RADIAL_SCALE,
    RING_SATURATION,
    TEST_GAUGE_WAVENUMBER,
)
from gpue.expressions.parser import parse_expression
from gpue.operators.context import axis_value


def sign(x):
    """-1, 0 or 1 (sign(0) == 0)."""
    return np.sign(x)


def polar_angle(x, y):
    """Angle used by the ring profile: atan(x / y), plus pi where y < 0.

    On the x axis (y == 0) the angle is +-pi/2 with the sign of x, and at
    the origin it is 0. Never NaN.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    on_axis = y == 0

    angle = np.arctan(x / np.where(on_axis, 1.0, y))
    angle = np.where(on_axis, np.where(x == 0, 0.0, np.copysign(PI / 2, x)), angle)
    angle = np.where(y < 0, angle + PI, angle)
    return angle[()]


def _ring_profile(x, y, trig):
    rad = np.sqrt(RING_RADIAL_SCALE * x * x + RING_RADIAL_SCALE * y * y) * trig(polar_angle(x, y))
    magnitude = np.abs(rad) * RING_INVERSE_SCALE
    # 1 / magnitude saturates once magnitude drops below 1 / RING_SATURATION
    large = magnitude > 1.0 / RING_SATURATION
    value = np.where(large, 1.0 / np.where(large, magnitude, 1.0), RING_SATURATION)
    return value[()]


# =============================================================================
# Rotation (symmetric gauge)
# =============================================================================


def rotation_Ax(store, ctx, index):
    y = axis_value(store, "y", index)
    return -y * store.dval("omega") * store.dval("omegaX")


def rotation_Ay(store, ctx, index):
    x = axis_value(store, "x", index)
    return x * store.dval("omega") * store.dval("omegaY")


def rotation_Az(store, ctx, index):
    return 0.0


# =============================================================================
# Vortex ring
# =============================================================================


def ring_Ax(store, ctx, index):
    x = axis_value(store, "x", index)
    y = axis_value(store, "y", index)
    return _ring_profile(x, y, np.cos)


def ring_Ay(store, ctx, index):
    x = axis_value(store, "x", index)
    y = axis_value(store, "y", index)
    return _ring_profile(x, y, np.sin)


# =============================================================================
# Constant, test and fiber fields
# =============================================================================


def constant_A(store, ctx, index):
    return 0.0


def test_Ax(store, ctx, index):
    y = axis_value(store, "y", index)
    return ((np.sin(y * TEST_GAUGE_WAVENUMBER) + 1)
            * store.dval("omegaX") * store.dval("yMax") * store.dval("omega"))


def test_Ay(store, ctx, index):
    return 0.0


# BETA: only the constant part of the fiber field is modelled
def fiber2d_Ax(store, ctx, index):
    return HBAR


def fiber2d_Ay(store, ctx, index):
    return 0.0


# =============================================================================
# Dynamic (expression) and file fields
# =============================================================================


def dynamic_Ax(store, ctx, index):
    return parse_expression(store.sval("Axstring")).evaluate(store, index)


def dynamic_Ay(store, ctx, index):
    return parse_expression(store.sval("Aystring")).evaluate(store, index)


def dynamic_Az(store, ctx, index):
    """Az from Azstring; an absent or blank string means Az = 0."""
    text = store.sval("Azstring") if store.is_string("Azstring") else ""
    if not text.strip():
        return 0.0
    return parse_expression(text).evaluate(store, index)


def file_Ax(store, ctx, index):
    return ctx.file_value("Ax", index)


def file_Ay(store, ctx, index):
    return ctx.file_value("Ay", index)


def file_Az(store, ctx, index):
    """Az from its file grid; 2D runs load none and read 0."""
    return ctx.file_value("Az", index, default=0.0)


# =============================================================================
# Gauge-momentum products and curl
# =============================================================================


def rotation_pAx(store, ctx, index):
    return ctx.ax(store, index) * axis_value(store, "xp", index)


def rotation_pAy(store, ctx, index):
    return ctx.ay(store, index) * axis_value(store, "yp", index)


def rotation_pAz(store, ctx, index):
    return ctx.az(store, index) * axis_value(store, "zp", index)


def curl2d(Ax, Ay):
    """Forward-difference curl of a 2D gauge field.

    curl[i, j] = (Ay[i, j] - Ay[i+1, j]) - (Ax[i, j] - Ax[i, j+1]) for
    i < xDim-1 and j < yDim-1; the last row and column are zero.
    """
    Ax = np.asarray(Ax, dtype=np.float64)
    Ay = np.asarray(Ay, dtype=np.float64)
    if Ax.ndim != 2 or Ax.shape != Ay.shape:
        raise ValueError(f"curl2d needs two 2D grids of equal shape, got {Ax.shape} and {Ay.shape}")

    curl = np.zeros_like(Ax)
    curl[:-1, :-1] = (Ay[:-1, :-1] - Ay[1:, :-1]) - (Ax[:-1, :-1] - Ax[:-1, 1:])
    return curl


__all__ = [
    "sign",
    "polar_angle",
    "rotation_Ax",
    "rotation_Ay",
    "rotation_Az",
    "ring_Ax",
    "ring_Ay",
    "constant_A",
    "test_Ax",
    "test_Ay",
    "fiber2d_Ax",
    "fiber2d_Ay",
    "dynamic_Ax",
    "dynamic_Ay",
    "dynamic_Az",
    "file_Ax",
    "file_Ay",
    "file_Az",
    "rotation_pAx",
    "rotation_pAy",
    "rotation_pAz",
    "curl2d",
]
