"""Grid layout and site indexing.

Implements the canonical field layout shared by every component:

- 3D fields are C-ordered arrays of shape (xDim, yDim, zDim), so the flat
  offset of site (i, j, k) is ``i*yDim*zDim + j*zDim + k``
- 2D fields are C-ordered arrays of shape (xDim, yDim), flat offset
  ``i*yDim + j``; the k index is unused and always 0

Every operator grid, file-derived grid and wavefunction follows this
layout. A mismatch silently corrupts results, so layout arithmetic lives
only here.
"""

from dataclasses import dataclass
from typing import Iterator, NamedTuple, Tuple

import numpy as np


class GridIndex(NamedTuple):
    """Index of one grid site (or an open mesh of sites).

    Components are either Python ints or integer arrays that broadcast
    against each other (see :meth:`GridLayout.mesh`). Evaluators index
    coordinate arrays with them directly, so the same code evaluates one
    site or the whole grid.
    """

    i: object
    j: object
    k: object = 0


@dataclass(frozen=True)
class GridLayout:
    """Memory layout of a 2D or 3D field.

    Attributes:
        xDim, yDim, zDim: Number of sites per axis (zDim is 1 in 2D)
        dimnum: Number of spatial dimensions (2 or 3)
    """

    xDim: int
    yDim: int
    zDim: int = 1
    dimnum: int = 2

    def __post_init__(self):
        if self.dimnum not in (2, 3):
            raise ValueError(f"dimnum must be 2 or 3, got {self.dimnum}")
        for name in ("xDim", "yDim", "zDim"):
            value = getattr(self, name)
            if int(value) != value or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value}")
        if self.dimnum == 2 and self.zDim != 1:
            raise ValueError(f"2D layouts require zDim == 1, got {self.zDim}")

    @classmethod
    def from_store(cls, store) -> "GridLayout":
        """Build the layout from the xDim/yDim/zDim/dimnum store entries."""
        dimnum = store.ival("dimnum")
        zDim = store.ival("zDim") if dimnum == 3 else 1
        return cls(
            xDim=store.ival("xDim"),
            yDim=store.ival("yDim"),
            zDim=zDim,
            dimnum=dimnum,
        )

    @property
    def shape(self) -> Tuple[int, ...]:
        if self.dimnum == 2:
            return (self.xDim, self.yDim)
        return (self.xDim, self.yDim, self.zDim)

    @property
    def size(self) -> int:
        return self.xDim * self.yDim * self.zDim

    @property
    def strides(self) -> Tuple[int, int, int]:
        """Element strides (stride_i, stride_j, stride_k) for C-order."""
        return (self.yDim * self.zDim, self.zDim, 1)

    def linear_index(self, i, j, k=0):
        """Flat offset of site (i, j, k)."""
        if self.dimnum == 2:
            return i * self.yDim + j
        return i * self.yDim * self.zDim + j * self.zDim + k

    def unravel(self, index: int) -> GridIndex:
        """Inverse of :meth:`linear_index`."""
        if not 0 <= index < self.size:
            raise IndexError(f"flat index {index} out of range for size {self.size}")
        i, rest = divmod(index, self.yDim * self.zDim)
        j, k = divmod(rest, self.zDim)
        return GridIndex(i, j, k)

    def mesh(self) -> GridIndex:
        """Open index mesh covering every site.

        Returns:
            GridIndex whose components broadcast to ``self.shape``
        """
        if self.dimnum == 2:
            i, j = np.ix_(np.arange(self.xDim), np.arange(self.yDim))
            return GridIndex(i, j, 0)
        i, j, k = np.ix_(np.arange(self.xDim), np.arange(self.yDim), np.arange(self.zDim))
        return GridIndex(i, j, k)

    def indices(self) -> Iterator[GridIndex]:
        """Iterate over every site in linearization order."""
        for i in range(self.xDim):
            for j in range(self.yDim):
                for k in range(self.zDim):
                    yield GridIndex(i, j, k)

    def lookup(self, grid: np.ndarray, index: GridIndex):
        """Read a grid of this layout at ``index`` (scalar or mesh)."""
        if grid.shape != self.shape:
            raise ValueError(f"grid shape {grid.shape} does not match layout {self.shape}")
        if self.dimnum == 2:
            return grid[index.i, index.j]
        return grid[index.i, index.j, index.k]


__all__ = ["GridIndex", "GridLayout"]
