"""Access to the packaged defaults.yaml and to user run files.

Kept free of imports from the rest of :mod:`gpue.config` so that
:mod:`gpue.config.defaults` can read from it at import time.

Usage:
    from gpue.config.yaml_loader import get_default
    omega_x = get_default('physics.omega_x')
"""

from __future__ import annotations

import functools
import os
from pathlib import Path
from typing import Any

import yaml

DEFAULTS_ENV_VAR = "GPUE_DEFAULTS_PATH"


def defaults_path() -> Path:
    """Location of the defaults file.

    ``$GPUE_DEFAULTS_PATH`` wins when it points at an existing file;
    otherwise the defaults.yaml shipped next to this module is used.

    Raises:
        FileNotFoundError: If the packaged file has gone missing
    """
    override = os.getenv(DEFAULTS_ENV_VAR)
    if override and Path(override).is_file():
        return Path(override)

    packaged = Path(__file__).with_name("defaults.yaml")
    if not packaged.is_file():
        raise FileNotFoundError(
            f"Packaged defaults missing: {packaged}. "
            f"Point {DEFAULTS_ENV_VAR} at a defaults file."
        )
    return packaged


def _read_mapping(path: Path) -> dict[str, Any]:
    with path.open(encoding="utf-8") as stream:
        data = yaml.safe_load(stream)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be a mapping, got {type(data).__name__}")
    return data


@functools.lru_cache(maxsize=1)
def _cached_defaults() -> dict[str, Any]:
    return _read_mapping(defaults_path())


def get_defaults() -> dict[str, Any]:
    """Shallow copy of every section of the defaults file.

    Example:
        >>> get_defaults()['operators']['potential']
        'harmonic'
    """
    return dict(_cached_defaults())


def get_default(key_path: str, default: Any = None) -> Any:
    """Look up one default by dotted path, e.g. ``'grid.xdim'``.

    Missing sections, missing keys and null values all yield ``default``.

    Example:
        >>> get_default('grid.dimnum')
        2
        >>> get_default('grid.nonexistent', 0)
        0
    """
    node: Any = _cached_defaults()
    for part in key_path.split("."):
        node = node.get(part) if isinstance(node, dict) else None
        if node is None:
            return default
    return node


def reload_defaults() -> None:
    """Drop the cached defaults so the next lookup re-reads the file."""
    _cached_defaults.cache_clear()


def load_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a run configuration laid out like defaults.yaml.

    Raises:
        FileNotFoundError: If ``path`` does not exist
        ValueError: If the document is not a mapping
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    return _read_mapping(path)
