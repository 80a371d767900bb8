"""Host/device array placement.

CuPy is optional. It is imported on first use and the result is cached, so
a host-only install never pays for the import attempt twice. Kernels in
:mod:`gpue.gpu` pick NumPy or CuPy per call with :func:`get_array_module`
and hand back arrays of the module they were given.

Import Policy:
    from gpue.gpu.utils import get_array_module, gpu_available

DO NOT use: from gpue.gpu.utils import *
"""

import functools
import logging
from typing import Any

import numpy as np

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=1)
def get_cupy() -> Any:
    """The ``cupy`` module, or None when it is not installed."""
    try:
        import cupy
    except ImportError:
        logger.debug("CuPy not installed; kernels run on NumPy arrays")
        return None
    return cupy


@functools.lru_cache(maxsize=1)
def gpu_available() -> bool:
    """True when CuPy is installed and reports a usable CUDA device.

    Example:
        >>> xp = get_cupy() if gpu_available() else np
    """
    cp = get_cupy()
    if cp is None:
        return False
    # a broken driver surfaces as a CUDA runtime error, not ImportError
    try:
        available = bool(cp.cuda.is_available())
    except cp.cuda.runtime.CUDARuntimeError:
        available = False
    logger.debug("CUDA device available: %s", available)
    return available


def is_device_array(array: Any) -> bool:
    cp = get_cupy()
    return cp is not None and isinstance(array, cp.ndarray)


def get_array_module(*arrays: Any) -> Any:
    """cupy if any argument lives on the device, numpy otherwise."""
    for array in arrays:
        if is_device_array(array):
            return get_cupy()
    return np


def to_device(array: Any) -> Any:
    """Copy to the device when one is usable; otherwise return a NumPy array."""
    if gpu_available():
        return get_cupy().asarray(array)
    return np.asarray(array)


def to_host(array: Any) -> np.ndarray:
    """NumPy copy of a device array; NumPy input passes through."""
    if is_device_array(array):
        return get_cupy().asnumpy(array)
    return np.asarray(array)


__all__ = [
    "get_cupy",
    "gpu_available",
    "is_device_array",
    "get_array_module",
    "to_device",
    "to_host",
]
