"""Shared evaluation context for operator evaluators.

Every evaluator has the signature ``evaluator(store, ctx, index)``:

- ``store``: the frozen :class:`~gpue.core.parameters.ParameterStore`
- ``ctx``: an :class:`OperatorContext` giving access to the active gauge
  field (resolved evaluator or file grid) and to file-derived grids
- ``index``: a :class:`~gpue.core.grid.GridIndex` holding ints for one
  site or an open index mesh for the whole grid

Evaluators are written with NumPy ufuncs and ``np.where`` so the same code
serves both cases.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping

import numpy as np

from gpue.config.enums import GaugeKind, OperatorSlot
from gpue.core.exceptions import ConfigurationError
from gpue.core.grid import GridIndex, GridLayout
from gpue.expressions.parser import AXIS_OF

_MISSING = object()


def axis_value(store, name: str, index: GridIndex):
    """Coordinate array ``name`` read at the index component of its axis."""
    return store.dsval(name)[getattr(index, AXIS_OF[name])]


@dataclass(frozen=True)
class OperatorContext:
    """Read-only view of the gauge field and file grids during construction.

    Attributes:
        layout: Grid layout of every operator grid
        gauge_kind: Active gauge selector
        file_grids: Name -> read-only grid (Ax, Ay, Az, V) loaded in file mode
        gauge_evaluators: Resolved evaluators for the Ax, Ay, Az slots
    """

    layout: GridLayout
    gauge_kind: GaugeKind
    file_grids: Mapping[str, np.ndarray] = field(default_factory=lambda: MappingProxyType({}))
    gauge_evaluators: Mapping[OperatorSlot, Callable] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def _gauge(self, slot: OperatorSlot, store, index: GridIndex):
        try:
            evaluator = self.gauge_evaluators[slot]
        except KeyError:
            raise ConfigurationError(f"No gauge evaluator resolved for slot {slot.value}") from None
        return evaluator(store, self, index)

    def ax(self, store, index: GridIndex):
        return self._gauge(OperatorSlot.AX, store, index)

    def ay(self, store, index: GridIndex):
        return self._gauge(OperatorSlot.AY, store, index)

    def az(self, store, index: GridIndex):
        return self._gauge(OperatorSlot.AZ, store, index)

    def file_value(self, name: str, index: GridIndex, default: Any = _MISSING):
        """Value of the file-derived grid ``name`` at ``index``.

        Raises:
            ConfigurationError: If no grid was loaded under ``name`` and no
                default is given
        """
        grid = self.file_grids.get(name)
        if grid is None:
            if default is not _MISSING:
                return default
            raise ConfigurationError(
                f"No file grid loaded for '{name}'. Loaded: {', '.join(sorted(self.file_grids)) or 'none'}"
            )
        return self.layout.lookup(grid, index)


__all__ = ["OperatorContext", "axis_value"]
