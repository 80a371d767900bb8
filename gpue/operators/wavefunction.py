"""Initial-wavefunction builders.

Builders have the signature ``builder(store, phase, index)`` and return the
complex amplitude at ``index`` (one site or an open index mesh). ``phase``
may be a scalar or any array broadcastable to the grid.
"""

import numpy as np

from gpue.operators.context import axis_value


def _gaussian(*terms):
    return np.exp(-sum(t * t for t in terms))


def standard_wfc_2d(store, phase, index):
    """exp(-((x / (Rxy a0x))^2 + (y / (Rxy a0y))^2)) * (cos(phase) - i sin(phase))"""
    x = axis_value(store, "x", index)
    y = axis_value(store, "y", index)
    Rxy = store.dval("Rxy")

    amplitude = _gaussian(x / (Rxy * store.dval("a0x")), y / (Rxy * store.dval("a0y")))
    return amplitude * (np.cos(phase) - 1j * np.sin(phase))


def standard_wfc_3d(store, phase, index):
    x = axis_value(store, "x", index)
    y = axis_value(store, "y", index)
    z = axis_value(store, "z", index)
    Rxy = store.dval("Rxy")

    amplitude = _gaussian(
        x / (Rxy * store.dval("a0x")),
        y / (Rxy * store.dval("a0y")),
        z / (Rxy * store.dval("a0z")),
    )
    return amplitude * (np.cos(phase) - 1j * np.sin(phase))


def torus_wfc(store, phase, index):
    """Gaussian tube around a ring of radius 0.5 * rMax * fudge.

    rMax = sqrt(xMax^2 + yMax^2). The tube is half as wide as the standard
    cloud. The same amplitude fills the real part and the negated imaginary
    part; ``phase`` is not applied.
    """
    x = axis_value(store, "x", index)
    y = axis_value(store, "y", index)
    z = axis_value(store, "z", index)
    Rxy = store.dval("Rxy")
    rMax = np.hypot(store.dval("xMax"), store.dval("yMax"))

    rad = (np.sqrt((x - store.dval("x0_shift")) ** 2 + (y - store.dval("y0_shift")) ** 2)
           - 0.5 * rMax * store.dval("fudge"))
    amplitude = _gaussian(
        rad / (Rxy * store.dval("a0x") * 0.5),
        z / (Rxy * store.dval("a0z") * 0.5),
    )
    return amplitude * (1 - 1j)


__all__ = ["standard_wfc_2d", "standard_wfc_3d", "torus_wfc"]
