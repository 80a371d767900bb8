"""Pytest configuration and shared fixtures for GPUE tests."""

import pytest
import numpy as np

from gpue.config import GridConfig, OperatorConfig, PhysicsConfig, SimulationConfig
from gpue.core.grid import GridLayout
from gpue.core.parameters import ParameterStore
from gpue.gpu.utils import gpu_available


# Hand-built store with small round numbers, for exact operator values
SIMPLE_VALUES = {
    "xDim": 4,
    "yDim": 4,
    "zDim": 1,
    "dimnum": 2,
    "x": [-2.0, -1.0, 0.0, 1.0],
    "y": [-1.0, -0.5, 0.0, 0.5],
    "z": [0.0],
    "xp": [0.0, 1.0, -2.0, -1.0],
    "yp": [0.0, 2.0, -4.0, -2.0],
    "zp": [0.0],
    "xMax": 2.0,
    "yMax": 1.0,
    "zMax": 0.0,
    "dr": 0.5,
    "mass": 2.0,
    "omega": 0.5,
    "omegaX": 3.0,
    "omegaY": 4.0,
    "omegaZ": 5.0,
    "gammaY": 1.5,
    "fudge": 1.0,
    "x0_shift": 0.0,
    "y0_shift": 0.0,
    "z0_shift": 0.0,
    "Rxy": 1.0,
    "a0x": 1.0,
    "a0y": 1.0,
    "a0z": 1.0,
    "Kfn": "rotation",
    "Vfn": "harmonic",
    "Afn": "constant",
    "Wfcfn": "standard_2d",
    "Axstring": "x*omega",
    "Aystring": "-y",
    "Azstring": "",
    "Axfile": "",
    "Ayfile": "",
    "Azfile": "",
    "Vfile": "",
}


# Fixtures for the parameter store and layouts


@pytest.fixture
def store_factory():
    """Build a frozen copy of the simple store with some values overridden."""
    def make(**overrides):
        values = dict(SIMPLE_VALUES)
        values.update(overrides)
        return ParameterStore(values).freeze()
    return make


@pytest.fixture
def simple_store(store_factory):
    """4x4 store with constant gauge and standard operators."""
    return store_factory()


@pytest.fixture
def simple_layout():
    return GridLayout(4, 4)


@pytest.fixture
def config_2d():
    """2D configuration whose box is derived from the condensate radius."""
    return SimulationConfig(
        grid=GridConfig(xDim=64, yDim=64, dimnum=2, box_size=0.0),
        physics=PhysicsConfig(omega=0.0),
        operators=OperatorConfig(gauge="constant"),
    )


@pytest.fixture
def config_3d():
    """3D configuration whose box is derived from the condensate radius."""
    return SimulationConfig(
        grid=GridConfig(xDim=32, yDim=32, zDim=32, dimnum=3, box_size=0.0),
        physics=PhysicsConfig(omega=0.5),
        operators=OperatorConfig(gauge="rotation"),
    )


@pytest.fixture
def store_2d(config_2d):
    return config_2d.to_parameter_store()


@pytest.fixture
def store_3d(config_3d):
    return config_3d.to_parameter_store()


@pytest.fixture
def layout_2d(store_2d):
    return GridLayout.from_store(store_2d)


@pytest.fixture
def layout_3d(store_3d):
    return GridLayout.from_store(store_3d)


# Fixtures for fields


@pytest.fixture
def rng():
    """Seeded random generator so field tests are reproducible."""
    return np.random.default_rng(1234)


@pytest.fixture
def random_field(rng):
    """Random complex field of shape (16, 24)."""
    return rng.normal(size=(16, 24)) + 1j * rng.normal(size=(16, 24))


@pytest.fixture
def cupy_module():
    """CuPy module; skips the test when no GPU is usable."""
    if not gpu_available():
        pytest.skip("CuPy not available")
    from gpue.gpu.utils import get_cupy
    return get_cupy()


@pytest.fixture
def tolerance():
    """Relative tolerances used across the numerical tests."""
    return {
        "exact": 1e-12,
        "reduction": 1e-10,
        "quadrature": 1e-6,
    }
