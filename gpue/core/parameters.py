"""Typed parameter store.

The store maps names to typed values: integers, reals, real arrays,
booleans and strings. It is populated once (see
:meth:`gpue.config.SimulationConfig.to_parameter_store`), frozen, and
then passed explicitly to every evaluator and kernel. After
:meth:`ParameterStore.freeze` no value can change and stored arrays are
marked non-writeable.

Import Policy:
    from gpue.core.parameters import ParameterStore

DO NOT use: from gpue.core.parameters import *
"""

from typing import Any, Dict, Mapping, Optional

import numpy as np

from gpue.core.exceptions import ParameterStoreFrozenError, UnknownParameterError

_KINDS = ("int", "double", "array", "bool", "string")


class ParameterStore:
    """Heterogeneous name -> typed-value mapping.

    Runtime API:
        - store(name, value): type is inferred from value
        - ival / dval / dsval / bval / sval: typed accessors
        - is_double / is_dstar: predicates used by the expression evaluator
        - known_keys(): diagnostic listing for unresolved names

    A name holds exactly one type; storing it again with a different type
    replaces the previous entry.
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._maps: Dict[str, Dict[str, Any]] = {kind: {} for kind in _KINDS}
        self._frozen = False
        if values:
            for name, value in values.items():
                self.store(name, value)

    # -------------------------------------------------------------------------
    # Writing
    # -------------------------------------------------------------------------

    def store(self, name: str, value: Any) -> None:
        """Store a value under ``name``.

        Raises:
            ParameterStoreFrozenError: If the store has been frozen
            TypeError: If the value type is not supported
        """
        if self._frozen:
            raise ParameterStoreFrozenError(
                f"Cannot store '{name}': parameter store is frozen"
            )

        kind, converted = self._classify(name, value)
        for other in _KINDS:
            self._maps[other].pop(name, None)
        self._maps[kind][name] = converted

    @staticmethod
    def _classify(name: str, value: Any):
        # bool must be checked before int
        if isinstance(value, (bool, np.bool_)):
            return "bool", bool(value)
        if isinstance(value, (int, np.integer)):
            return "int", int(value)
        if isinstance(value, (float, np.floating)):
            return "double", float(value)
        if isinstance(value, str):
            return "string", value
        if isinstance(value, (np.ndarray, list, tuple)):
            array = np.array(value, dtype=np.float64)
            if array.ndim != 1:
                raise TypeError(f"Array parameter '{name}' must be 1-D, got shape {array.shape}")
            return "array", array
        raise TypeError(f"Unsupported type for parameter '{name}': {type(value).__name__}")

    def freeze(self) -> "ParameterStore":
        """Make the store read-only. Returns self for chaining."""
        for array in self._maps["array"].values():
            array.setflags(write=False)
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def copy(self) -> "ParameterStore":
        """Return an unfrozen deep copy."""
        clone = ParameterStore()
        for kind in _KINDS:
            for name, value in self._maps[kind].items():
                clone._maps[kind][name] = value.copy() if kind == "array" else value
        return clone

    # -------------------------------------------------------------------------
    # Typed accessors
    # -------------------------------------------------------------------------

    def _get(self, kind: str, name: str):
        try:
            return self._maps[kind][name]
        except KeyError:
            raise UnknownParameterError(name, kind, sorted(self._maps[kind])) from None

    def ival(self, name: str) -> int:
        return self._get("int", name)

    def dval(self, name: str) -> float:
        return self._get("double", name)

    def dsval(self, name: str) -> np.ndarray:
        return self._get("array", name)

    def bval(self, name: str) -> bool:
        return self._get("bool", name)

    def sval(self, name: str) -> str:
        return self._get("string", name)

    # -------------------------------------------------------------------------
    # Predicates and diagnostics
    # -------------------------------------------------------------------------

    def is_int(self, name: str) -> bool:
        return name in self._maps["int"]

    def is_double(self, name: str) -> bool:
        return name in self._maps["double"]

    def is_dstar(self, name: str) -> bool:
        return name in self._maps["array"]

    def is_bool(self, name: str) -> bool:
        return name in self._maps["bool"]

    def is_string(self, name: str) -> bool:
        return name in self._maps["string"]

    def __contains__(self, name: str) -> bool:
        return any(name in self._maps[kind] for kind in _KINDS)

    def __len__(self) -> int:
        return sum(len(m) for m in self._maps.values())

    def known_keys(self) -> Dict[str, list]:
        """Sorted parameter names grouped by type."""
        return {kind: sorted(self._maps[kind]) for kind in _KINDS}

    def describe(self) -> str:
        """Human-readable listing of every stored key and its value."""
        lines = []
        for kind in _KINDS:
            for name in sorted(self._maps[kind]):
                value = self._maps[kind][name]
                if kind == "array":
                    value = f"array[{value.size}]"
                lines.append(f"  {name} ({kind}) = {value}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "mutable"
        return f"ParameterStore({len(self)} entries, {state})"


__all__ = ["ParameterStore"]
