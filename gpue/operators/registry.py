"""Named-operator dispatch registry and operator construction.

Each operator slot (K, V, Ax, Ay, Az and the initial wavefunction) has a
closed vocabulary given by an Enum in :mod:`gpue.config.enums`. The
registry maps every member of that Enum to exactly one evaluator; the
mapping is checked for completeness when this module is imported, so
adding a member without an evaluator fails immediately.

Usage:
    >>> from gpue.operators.registry import OperatorSelection, build_operators
    >>> store = config.to_parameter_store()
    >>> operators = build_operators(store, OperatorSelection.from_store(store))
    >>> psi = operators.initial_wavefunction(store)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Union

import numpy as np

from gpue.config.enums import (
    SLOT_KINDS,
    GaugeKind,
    KineticKind,
    OperatorSlot,
    PotentialKind,
    WavefunctionKind,
)
from gpue.core.exceptions import NumericalError, UnknownOperatorError
from gpue.core.grid import GridLayout
from gpue.expressions.parser import parse_expression
from gpue.operators import gauge, kinetic, potential, wavefunction
from gpue.operators.context import OperatorContext
from gpue.operators.file_io import read_operator_file, read_operator_files

logger = logging.getLogger(__name__)

# =============================================================================
# Registry
# =============================================================================

_REGISTRY: Dict[OperatorSlot, Dict[Enum, Callable]] = {
    OperatorSlot.K: {
        KineticKind.ROTATION: kinetic.rotation_K,
        KineticKind.ROTATION_3D: kinetic.rotation_K3d,
        KineticKind.ROTATION_DIMENSIONLESS: kinetic.rotation_K_dimensionless,
        KineticKind.ROTATION_GAUGE: kinetic.rotation_gauge_K,
    },
    OperatorSlot.V: {
        PotentialKind.HARMONIC: potential.harmonic_V,
        PotentialKind.HARMONIC_3D: potential.harmonic_V3d,
        PotentialKind.HARMONIC_DIMENSIONLESS: potential.harmonic_V_dimensionless,
        PotentialKind.HARMONIC_GAUGE: potential.harmonic_gauge_V,
        PotentialKind.TORUS: potential.torus_V,
        PotentialKind.FILE: potential.file_V,
    },
    OperatorSlot.AX: {
        GaugeKind.ROTATION: gauge.rotation_Ax,
        GaugeKind.RING: gauge.ring_Ax,
        GaugeKind.CONSTANT: gauge.constant_A,
        GaugeKind.TEST: gauge.test_Ax,
        GaugeKind.FIBER2D: gauge.fiber2d_Ax,
        GaugeKind.DYNAMIC: gauge.dynamic_Ax,
        GaugeKind.FILE: gauge.file_Ax,
    },
    OperatorSlot.AY: {
        GaugeKind.ROTATION: gauge.rotation_Ay,
        GaugeKind.RING: gauge.ring_Ay,
        GaugeKind.CONSTANT: gauge.constant_A,
        GaugeKind.TEST: gauge.test_Ay,
        GaugeKind.FIBER2D: gauge.fiber2d_Ay,
        GaugeKind.DYNAMIC: gauge.dynamic_Ay,
        GaugeKind.FILE: gauge.file_Ay,
    },
    # ring, test and fiber2d are planar fields
    OperatorSlot.AZ: {
        GaugeKind.ROTATION: gauge.rotation_Az,
        GaugeKind.RING: gauge.constant_A,
        GaugeKind.CONSTANT: gauge.constant_A,
        GaugeKind.TEST: gauge.constant_A,
        GaugeKind.FIBER2D: gauge.constant_A,
        GaugeKind.DYNAMIC: gauge.dynamic_Az,
        GaugeKind.FILE: gauge.file_Az,
    },
    OperatorSlot.WFC: {
        WavefunctionKind.STANDARD_2D: wavefunction.standard_wfc_2d,
        WavefunctionKind.STANDARD_3D: wavefunction.standard_wfc_3d,
        WavefunctionKind.TORUS: wavefunction.torus_wfc,
    },
}


def _check_exhaustive() -> None:
    for slot, kind_cls in SLOT_KINDS.items():
        entries = _REGISTRY.get(slot, {})
        missing = [kind.value for kind in kind_cls if entries.get(kind) is None]
        extra = [kind for kind in entries if not isinstance(kind, kind_cls)]
        if missing or extra:
            raise RuntimeError(
                f"Operator registry for slot {slot.value} is inconsistent: "
                f"missing {missing}, unexpected {extra}"
            )


_check_exhaustive()


def vocabulary(slot: OperatorSlot) -> List[str]:
    """Every selector string accepted by ``slot``."""
    return [kind.value for kind in SLOT_KINDS[slot]]


def parse_kind(slot: OperatorSlot, name: str) -> Enum:
    """Convert a selector string to the slot's Enum member.

    Raises:
        UnknownOperatorError: If ``name`` is not in the slot vocabulary
    """
    try:
        return SLOT_KINDS[slot](name)
    except ValueError:
        raise UnknownOperatorError(slot.value, name, vocabulary(slot)) from None


def resolve(slot: OperatorSlot, kind: Union[str, Enum]) -> Callable:
    """Evaluator for ``kind`` (Enum member or selector string) in ``slot``.

    Raises:
        UnknownOperatorError: If ``kind`` is not in the slot vocabulary, or
            is an Enum member belonging to another slot
    """
    if isinstance(kind, Enum):
        if not isinstance(kind, SLOT_KINDS[slot]):
            raise UnknownOperatorError(slot.value, str(kind), vocabulary(slot))
    else:
        kind = parse_kind(slot, kind)
    return _REGISTRY[slot][kind]


# =============================================================================
# Selection
# =============================================================================


@dataclass(frozen=True)
class OperatorSelection:
    """Resolved operator kinds, one per slot (the gauge covers Ax, Ay, Az)."""

    kinetic: KineticKind
    potential: PotentialKind
    gauge: GaugeKind
    wavefunction: WavefunctionKind = WavefunctionKind.STANDARD_2D

    @classmethod
    def from_strings(cls, kinetic: str, potential: str, gauge: str,
                     wavefunction: str = WavefunctionKind.STANDARD_2D.value) -> "OperatorSelection":
        """Parse selector strings.

        Raises:
            UnknownOperatorError: On the first string outside its vocabulary
        """
        return cls(
            kinetic=parse_kind(OperatorSlot.K, kinetic),
            potential=parse_kind(OperatorSlot.V, potential),
            gauge=parse_kind(OperatorSlot.AX, gauge),
            wavefunction=parse_kind(OperatorSlot.WFC, wavefunction),
        )

    @classmethod
    def from_store(cls, store) -> "OperatorSelection":
        """Read the Kfn, Vfn, Afn and Wfcfn selector strings from the store.

        Without Wfcfn the standard builder matching ``dimnum`` is used.
        """
        if store.is_string("Wfcfn"):
            wfc = store.sval("Wfcfn")
        elif store.ival("dimnum") == 3:
            wfc = WavefunctionKind.STANDARD_3D.value
        else:
            wfc = WavefunctionKind.STANDARD_2D.value
        return cls.from_strings(store.sval("Kfn"), store.sval("Vfn"), store.sval("Afn"), wfc)


# =============================================================================
# Construction
# =============================================================================


def materialize(evaluator: Callable, store, ctx: OperatorContext, name: str = "operator") -> np.ndarray:
    """Evaluate ``evaluator`` over every site into a read-only float64 grid.

    Raises:
        NumericalError: If any site evaluates to NaN or infinity
    """
    layout = ctx.layout
    values = np.asarray(evaluator(store, ctx, layout.mesh()), dtype=np.float64)
    grid = np.broadcast_to(values, layout.shape).copy()

    finite = np.isfinite(grid)
    if not finite.all():
        bad = int(grid.size - np.count_nonzero(finite))
        raise NumericalError(f"{name} grid has {bad} non-finite value(s)")

    grid.setflags(write=False)
    return grid


@dataclass(frozen=True)
class OperatorSet:
    """Resolved handles and dense operator grids for one run.

    Az and pAz are only built for 3D layouts. All grids are read-only.
    """

    selection: OperatorSelection
    layout: GridLayout
    context: OperatorContext
    handles: Mapping[OperatorSlot, Callable]
    K: np.ndarray
    V: np.ndarray
    Ax: np.ndarray
    Ay: np.ndarray
    pAx: np.ndarray
    pAy: np.ndarray
    Az: Optional[np.ndarray] = None
    pAz: Optional[np.ndarray] = None

    @property
    def file_grids(self) -> Mapping[str, np.ndarray]:
        return self.context.file_grids

    def grids(self) -> Dict[str, np.ndarray]:
        """Every built grid by name."""
        names = ("K", "V", "Ax", "Ay", "Az", "pAx", "pAy", "pAz")
        return {name: getattr(self, name) for name in names if getattr(self, name) is not None}

    def initial_wavefunction(self, store, phase=0.0) -> np.ndarray:
        """Build the initial complex field with the selected builder.

        Returns:
            Writable complex128 array of ``layout.shape``
        """
        builder = self.handles[OperatorSlot.WFC]
        values = np.asarray(builder(store, phase, self.layout.mesh()), dtype=np.complex128)
        return np.broadcast_to(values, self.layout.shape).copy()


def _load_file_grids(store, selection: OperatorSelection, layout: GridLayout) -> Dict[str, np.ndarray]:
    grids = {}
    if selection.gauge is GaugeKind.FILE:
        components = ["Ax", "Ay"] + (["Az"] if layout.dimnum == 3 else [])
        grids.update(read_operator_files(
            {name: store.sval(f"{name}file") for name in components}, layout
        ))
    if selection.potential is PotentialKind.FILE:
        grids["V"] = read_operator_file(store.sval("Vfile"), layout)
    return grids


def _check_dynamic_strings(store, layout: GridLayout) -> None:
    keys = ["Axstring", "Aystring"] + (["Azstring"] if layout.dimnum == 3 else [])
    for key in keys:
        text = store.sval(key)
        if key == "Azstring" and not text.strip():
            continue
        parse_expression(text).check_variables(store)


def build_operators(store, selection: Optional[OperatorSelection] = None,
                    layout: Optional[GridLayout] = None) -> OperatorSet:
    """Resolve every slot and materialize the operator grids.

    Args:
        store: Frozen parameter store
        selection: Operator kinds; read from the store when omitted
        layout: Grid layout; read from the store when omitted

    Returns:
        OperatorSet with grids K, V, Ax, Ay, pAx, pAy (plus Az, pAz in 3D)

    Raises:
        UnknownOperatorError: On a selector outside its vocabulary
        OperatorFileError: On a missing or malformed operator file
        ExpressionError: On a malformed dynamic gauge expression
        UnresolvedVariableError: On an unknown name in a gauge expression
        NumericalError: If an operator evaluates to NaN or infinity
    """
    if layout is None:
        layout = GridLayout.from_store(store)
    if selection is None:
        selection = OperatorSelection.from_store(store)

    file_grids = _load_file_grids(store, selection, layout)
    if selection.gauge is GaugeKind.DYNAMIC:
        _check_dynamic_strings(store, layout)

    handles = MappingProxyType({
        OperatorSlot.K: resolve(OperatorSlot.K, selection.kinetic),
        OperatorSlot.V: resolve(OperatorSlot.V, selection.potential),
        OperatorSlot.AX: resolve(OperatorSlot.AX, selection.gauge),
        OperatorSlot.AY: resolve(OperatorSlot.AY, selection.gauge),
        OperatorSlot.AZ: resolve(OperatorSlot.AZ, selection.gauge),
        OperatorSlot.WFC: resolve(OperatorSlot.WFC, selection.wavefunction),
    })
    ctx = OperatorContext(
        layout=layout,
        gauge_kind=selection.gauge,
        file_grids=MappingProxyType(file_grids),
        gauge_evaluators=MappingProxyType({
            slot: handles[slot] for slot in (OperatorSlot.AX, OperatorSlot.AY, OperatorSlot.AZ)
        }),
    )
    logger.info(
        "Resolved operators: K=%s V=%s A=%s wfc=%s on grid %s",
        selection.kinetic.value,
        selection.potential.value,
        selection.gauge.value,
        selection.wavefunction.value,
        layout.shape,
    )

    grids = {
        "K": materialize(handles[OperatorSlot.K], store, ctx, "K"),
        "V": materialize(handles[OperatorSlot.V], store, ctx, "V"),
        "Ax": materialize(handles[OperatorSlot.AX], store, ctx, "Ax"),
        "Ay": materialize(handles[OperatorSlot.AY], store, ctx, "Ay"),
        "pAx": materialize(gauge.rotation_pAx, store, ctx, "pAx"),
        "pAy": materialize(gauge.rotation_pAy, store, ctx, "pAy"),
    }
    if layout.dimnum == 3:
        grids["Az"] = materialize(handles[OperatorSlot.AZ], store, ctx, "Az")
        grids["pAz"] = materialize(gauge.rotation_pAz, store, ctx, "pAz")

    return OperatorSet(
        selection=selection,
        layout=layout,
        context=ctx,
        handles=handles,
        **grids,
    )


__all__ = [
    "vocabulary",
    "parse_kind",
    "resolve",
    "OperatorSelection",
    "materialize",
    "OperatorSet",
    "build_operators",
]
