"""Trapping potential evaluators (position space).

The harmonic and toroidal potentials include the gauge-field energy
0.5 m (Ax^2 + Ay^2 [+ Az^2]) of whichever vector potential is active; with
the constant gauge that term vanishes.
"""

import numpy as np

from gpue.operators.context import axis_value


def _gauge_energy_2d(store, ctx, index):
    ax = ctx.ax(store, index)
    ay = ctx.ay(store, index)
    return ax * ax + ay * ay


def _gauge_energy_3d(store, ctx, index):
    az = ctx.az(store, index)
    return _gauge_energy_2d(store, ctx, index) + az * az


def harmonic_V(store, ctx, index):
    x = axis_value(store, "x", index)
    y = axis_value(store, "y", index)
    mass = store.dval("mass")
    gammaY = store.dval("gammaY")

    V_x = store.dval("omegaX") * (x + store.dval("x0_shift"))
    V_y = gammaY * store.dval("omegaY") * (y + store.dval("y0_shift"))
    return (0.5 * mass * (V_x * V_x + V_y * V_y)
            + 0.5 * mass * _gauge_energy_2d(store, ctx, index))


def harmonic_V3d(store, ctx, index):
    x = axis_value(store, "x", index)
    y = axis_value(store, "y", index)
    z = axis_value(store, "z", index)
    mass = store.dval("mass")
    gammaY = store.dval("gammaY")

    V_x = store.dval("omegaX") * (x + store.dval("x0_shift"))
    V_y = gammaY * store.dval("omegaY") * (y + store.dval("y0_shift"))
    V_z = gammaY * store.dval("omegaZ") * (z + store.dval("z0_shift"))
    return (0.5 * mass * (V_x * V_x + V_y * V_y + V_z * V_z)
            + 0.5 * mass * _gauge_energy_3d(store, ctx, index))


def harmonic_V_dimensionless(store, ctx, index):
    x = axis_value(store, "x", index)
    y = axis_value(store, "y", index)

    V_x = store.dval("omegaX") * (x + store.dval("x0_shift"))
    V_y = store.dval("gammaY") * store.dval("omegaY") * (y + store.dval("y0_shift"))
    return 0.5 * (V_x * V_x + V_y * V_y) + 0.5 * _gauge_energy_2d(store, ctx, index)


def harmonic_gauge_V(store, ctx, index):
    """Harmonic trap seen from a frame rotating at omega * omega_{X,Y}."""
    x = axis_value(store, "x", index) + store.dval("x0_shift")
    y = axis_value(store, "y", index) + store.dval("y0_shift")
    omega = store.dval("omega")
    omegaX = store.dval("omegaX")
    omegaY = store.dval("omegaY")
    gammaY = store.dval("gammaY")

    ox = omegaX - omega * omegaX
    oy = omegaY - omega * omegaY
    v1 = ox * x * ox * x + gammaY * oy * y * gammaY * oy * y
    return 0.5 * store.dval("mass") * v1


def torus_V(store, ctx, index):
    """Toroidal trap: harmonic in the distance from a ring of radius xMax*fudge/2.

    Radial and axial confinement both use omegaR = sqrt(omegaX^2 + omegaY^2).
    """
    x = axis_value(store, "x", index)
    y = axis_value(store, "y", index)
    z = axis_value(store, "z", index)
    xOffset = store.dval("x0_shift")
    yOffset = store.dval("y0_shift")
    zOffset = store.dval("z0_shift")
    rMax = store.dval("xMax")
    omegaR = np.hypot(store.dval("omegaX"), store.dval("omegaY"))
    mass = store.dval("mass")

    rad = np.sqrt((x - xOffset) ** 2 + (y - yOffset) ** 2) - 0.5 * rMax * store.dval("fudge")
    V_r = (omegaR * rad) ** 2
    V_z = (omegaR * (z + zOffset)) ** 2
    return 0.5 * mass * (V_r + V_z) + 0.5 * mass * _gauge_energy_3d(store, ctx, index)


def file_V(store, ctx, index):
    return ctx.file_value("V", index)


__all__ = [
    "harmonic_V",
    "harmonic_V3d",
    "harmonic_V_dimensionless",
    "harmonic_gauge_V",
    "torus_V",
    "file_V",
]
