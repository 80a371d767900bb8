"""Kinetic energy evaluators (momentum space)."""

from gpue.core.constants import HBAR
from gpue.operators.context import axis_value


def rotation_K(store, ctx, index):
    """(hbar^2 / 2m)(px^2 + py^2)"""
    xp = axis_value(store, "xp", index)
    yp = axis_value(store, "yp", index)
    mass = store.dval("mass")
    return (HBAR * HBAR / (2 * mass)) * (xp * xp + yp * yp)


def rotation_K3d(store, ctx, index):
    """(hbar^2 / 2m)(px^2 + py^2 + pz^2)"""
    xp = axis_value(store, "xp", index)
    yp = axis_value(store, "yp", index)
    zp = axis_value(store, "zp", index)
    mass = store.dval("mass")
    return (HBAR * HBAR / (2 * mass)) * (xp * xp + yp * yp + zp * zp)


def rotation_K_dimensionless(store, ctx, index):
    xp = axis_value(store, "xp", index)
    yp = axis_value(store, "yp", index)
    return (xp * xp + yp * yp) * 0.5


def rotation_gauge_K(store, ctx, index):
    """Kinetic term in the rotating frame with the symmetric gauge expanded.

    (p^2 + m^2 w0^2 r^2 + 2 hbar m w0 (px y - py x)) / 2m, halved, with
    w0 = omega * omegaX.
    """
    xp = axis_value(store, "xp", index)
    yp = axis_value(store, "yp", index)
    x = axis_value(store, "x", index)
    y = axis_value(store, "y", index)
    omega_0 = store.dval("omega") * store.dval("omegaX")
    mass = store.dval("mass")

    p1 = HBAR * HBAR * (xp * xp + yp * yp)
    p2 = mass * mass * omega_0 * omega_0 * (x * x + y * y)
    p3 = 2 * HBAR * mass * omega_0 * (xp * y - yp * x)
    return (1 / (2 * mass)) * (p1 + p2 + p3) * 0.5


__all__ = ["rotation_K", "rotation_K3d", "rotation_K_dimensionless", "rotation_gauge_K"]
