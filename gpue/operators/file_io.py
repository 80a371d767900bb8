"""Plain-text operator and wavefunction files.

Format: one real number per line, in the grid linearization order
(``i*yDim*zDim + j*zDim + k``). A file must hold exactly one value per
grid site.

Import Policy:
    from gpue.operators.file_io import read_operator_file, read_wavefunction

DO NOT use: from gpue.operators.file_io import *
"""

import logging
from pathlib import Path
from typing import Dict, Mapping

import numpy as np

from gpue.core.exceptions import OperatorFileError
from gpue.core.grid import GridLayout

logger = logging.getLogger(__name__)


def _load_values(path: Path, layout: GridLayout) -> np.ndarray:
    if not path.is_file():
        raise OperatorFileError(path, "file does not exist")

    try:
        values = np.loadtxt(path, dtype=np.float64, ndmin=1)
    except ValueError as exc:
        raise OperatorFileError(path, f"could not parse values ({exc})") from exc
    except OSError as exc:
        raise OperatorFileError(path, f"could not read file ({exc})") from exc

    if values.ndim != 1:
        raise OperatorFileError(
            path, f"expected one value per line, found {values.shape[1]} columns"
        )
    if values.size != layout.size:
        raise OperatorFileError(
            path, f"expected {layout.size} values for grid {layout.shape}, found {values.size}"
        )
    return values.reshape(layout.shape)


def read_operator_file(path, layout: GridLayout) -> np.ndarray:
    """Read a real operator grid (Ax, Ay, Az or V) once.

    Returns:
        Read-only float64 array of ``layout.shape``

    Raises:
        OperatorFileError: If the file is missing, unreadable, unparsable or the wrong length
    """
    path = Path(path)
    grid = _load_values(path, layout)
    grid.setflags(write=False)
    logger.info("Loaded operator grid %s %s from %s", grid.shape, grid.dtype, path)
    return grid


def read_operator_files(paths: Mapping[str, object], layout: GridLayout) -> Dict[str, np.ndarray]:
    """Read several operator grids, keyed like ``paths``."""
    return {name: read_operator_file(path, layout) for name, path in paths.items()}


def read_wavefunction(real_path, imag_path, layout: GridLayout) -> np.ndarray:
    """Read a complex field from separate real and imaginary part files.

    Returns:
        Writable complex128 array of ``layout.shape``
    """
    real = _load_values(Path(real_path), layout)
    imag = _load_values(Path(imag_path), layout)
    wfc = real + 1j * imag
    logger.info("Loaded wavefunction %s from %s and %s", wfc.shape, real_path, imag_path)
    return wfc


__all__ = ["read_operator_file", "read_operator_files", "read_wavefunction"]
