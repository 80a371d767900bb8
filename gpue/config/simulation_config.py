"""Run configuration for the condensate core.

One dataclass per concern (grid, physics, operators, numerics), gathered in
SimulationConfig. Every run parameter flows through these classes, and
:meth:`SimulationConfig.to_parameter_store` is the only place the parameter
store consumed by operators and kernels is populated.

Import Policy:
    from gpue.config.simulation_config import SimulationConfig, GridConfig, PhysicsConfig

DO NOT use: from gpue.config.simulation_config import *
"""

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

import numpy as np

from gpue.config.defaults import (
    DEFAULT_ATOMS,
    DEFAULT_BOX_SIZE,
    DEFAULT_DIMENSIONLESS,
    DEFAULT_DIMNUM,
    DEFAULT_DT,
    DEFAULT_FUDGE,
    DEFAULT_GAMMA_Y,
    DEFAULT_GAUGE,
    DEFAULT_GDT,
    DEFAULT_INTERACTION,
    DEFAULT_KINETIC,
    DEFAULT_MASS,
    DEFAULT_MIN_NORM,
    DEFAULT_OMEGA,
    DEFAULT_OMEGA_X,
    DEFAULT_OMEGA_Y,
    DEFAULT_OMEGA_Z,
    DEFAULT_POTENTIAL,
    DEFAULT_REDUCTION_BLOCK_SIZE,
    DEFAULT_SCATTERING_LENGTH,
    DEFAULT_TARGET_NORM,
    DEFAULT_WAVEFUNCTION,
    DEFAULT_X0_SHIFT,
    DEFAULT_XDIM,
    DEFAULT_Y0_SHIFT,
    DEFAULT_YDIM,
    DEFAULT_Z0_SHIFT,
    DEFAULT_ZDIM,
)
from gpue.config.enums import GaugeKind, KineticKind, PotentialKind, WavefunctionKind
from gpue.config.yaml_loader import load_yaml_file
from gpue.core.constants import HBAR
from gpue.core.exceptions import ConfigurationError
from gpue.core.parameters import ParameterStore

logger = logging.getLogger(__name__)

# Selector names that change with dimensionality or units
_NAMES_3D = {
    "rotation": "rotation3d",
    "harmonic": "harmonic3d",
    "standard_2d": "standard_3d",
}
_NAMES_DIMENSIONLESS = {
    "rotation": "rotation_dimensionless",
    "harmonic": "harmonic_dimensionless",
}

_GAUGE_KEYS = {"Ax": "Axstring", "Ay": "Aystring", "Az": "Azstring"}


@dataclass
class GridConfig:
    """Spatial grid configuration.

    Fields are C-ordered arrays of shape (xDim, yDim) in 2D or
    (xDim, yDim, zDim) in 3D. In 2D the z axis collapses to one site.

    Attributes:
        xDim, yDim, zDim: Number of sites per axis
        dimnum: Number of spatial dimensions (2 or 3)
        box_size: Half-width of the box [m]; 0 derives it from the
            Thomas-Fermi radius (xMax = 6 * Rxy * a0x)

    """

    xDim: int = DEFAULT_XDIM
    yDim: int = DEFAULT_YDIM
    zDim: int = DEFAULT_ZDIM
    dimnum: int = DEFAULT_DIMNUM
    box_size: float = DEFAULT_BOX_SIZE

    @property
    def effective_zdim(self) -> int:
        return self.zDim if self.dimnum == 3 else 1

    def validate(self) -> list[str]:
        """Validate grid configuration.

        Returns:
            List of error messages (empty if valid)

        """
        errors = []

        if self.dimnum not in (2, 3):
            errors.append(f"dimnum must be 2 or 3, got {self.dimnum}")

        if self.xDim < 2:
            errors.append(f"xDim must be >= 2, got {self.xDim}")
        if self.yDim < 2:
            errors.append(f"yDim must be >= 2, got {self.yDim}")
        if self.dimnum == 3 and self.zDim < 2:
            errors.append(f"zDim must be >= 2 in 3D, got {self.zDim}")

        if self.box_size < 0:
            errors.append(f"box_size must be >= 0, got {self.box_size}")

        return errors


@dataclass
class PhysicsConfig:
    """Physical parameters of the condensate and trap.

    Attributes:
        mass: Atomic mass [kg]
        scattering_length: s-wave scattering length a_s [m]
        omega: Rotation rate as a fraction of the trap frequency
        omegaX, omegaY, omegaZ: Trap frequencies [rad/s]
        gammaY: Trap anisotropy applied to the y and z axes
        atoms: Number of atoms
        interaction: Scaling of the interaction strength
        fudge: Toroidal radius scaling
        x0_shift, y0_shift, z0_shift: Trap centre offsets [m]
        dt, gdt: Real-time and imaginary-time steps [s]
        dimensionless: Select the dimensionless operator variants

    """

    mass: float = DEFAULT_MASS
    scattering_length: float = DEFAULT_SCATTERING_LENGTH
    omega: float = DEFAULT_OMEGA
    omegaX: float = DEFAULT_OMEGA_X
    omegaY: float = DEFAULT_OMEGA_Y
    omegaZ: float = DEFAULT_OMEGA_Z
    gammaY: float = DEFAULT_GAMMA_Y
    atoms: int = DEFAULT_ATOMS
    interaction: float = DEFAULT_INTERACTION
    fudge: float = DEFAULT_FUDGE
    x0_shift: float = DEFAULT_X0_SHIFT
    y0_shift: float = DEFAULT_Y0_SHIFT
    z0_shift: float = DEFAULT_Z0_SHIFT
    dt: float = DEFAULT_DT
    gdt: float = DEFAULT_GDT
    dimensionless: bool = DEFAULT_DIMENSIONLESS

    def validate(self) -> list[str]:
        """Validate physical parameters.

        Returns:
            List of error messages (empty if valid)

        """
        errors = []

        if self.mass <= 0:
            errors.append(f"mass must be > 0, got {self.mass}")
        if self.scattering_length < 0:
            errors.append(f"scattering_length must be >= 0, got {self.scattering_length}")

        for name in ("omegaX", "omegaY", "omegaZ"):
            value = getattr(self, name)
            if value <= 0:
                errors.append(f"{name} must be > 0, got {value}")

        if self.atoms < 1:
            errors.append(f"atoms must be >= 1, got {self.atoms}")
        if self.interaction < 0:
            errors.append(f"interaction must be >= 0, got {self.interaction}")
        if self.fudge <= 0:
            errors.append(f"fudge must be > 0, got {self.fudge}")

        if self.dt <= 0:
            errors.append(f"dt must be > 0, got {self.dt}")
        if self.gdt <= 0:
            errors.append(f"gdt must be > 0, got {self.gdt}")

        return errors


@dataclass
class OperatorConfig:
    """Operator selector strings and their auxiliary inputs.

    Selectors name the 2D dimensional variant; :meth:`resolved_names`
    maps them to the 3D or dimensionless variant where one exists.

    Attributes:
        kinetic, potential, gauge, wavefunction: Selector strings
        Axstring, Aystring, Azstring: Expressions for the dynamic gauge
        Axfile, Ayfile, Azfile, Vfile: Paths for file mode

    """

    kinetic: str = DEFAULT_KINETIC
    potential: str = DEFAULT_POTENTIAL
    gauge: str = DEFAULT_GAUGE
    wavefunction: str = DEFAULT_WAVEFUNCTION

    Axstring: str = ""
    Aystring: str = ""
    Azstring: str = ""

    Axfile: str = ""
    Ayfile: str = ""
    Azfile: str = ""
    Vfile: str = ""

    def resolved_names(self, dimnum: int, dimensionless: bool = False) -> dict[str, str]:
        """Final selector names after dimensional and unit substitution.

        Returns:
            Dict with keys Kfn, Vfn, Afn, Wfcfn
        """
        names = {
            "Kfn": self.kinetic,
            "Vfn": self.potential,
            "Afn": self.gauge,
            "Wfcfn": self.wavefunction,
        }
        if dimensionless:
            for key in ("Kfn", "Vfn"):
                names[key] = _NAMES_DIMENSIONLESS.get(names[key], names[key])
        if dimnum == 3:
            for key in ("Kfn", "Vfn", "Wfcfn"):
                names[key] = _NAMES_3D.get(names[key], names[key])
        return names

    def validate(self, dimnum: int = 2, dimensionless: bool = False) -> list[str]:
        """Validate selectors and the inputs the selected modes need.

        Returns:
            List of error messages (empty if valid)

        """
        errors = []
        if dimensionless and dimnum == 3:
            errors.append("dimensionless units are only available in 2D (dimnum=3 given)")
            return errors
        names = self.resolved_names(dimnum, dimensionless)

        for key, kind_cls in (
            ("Kfn", KineticKind),
            ("Vfn", PotentialKind),
            ("Afn", GaugeKind),
            ("Wfcfn", WavefunctionKind),
        ):
            vocabulary = [member.value for member in kind_cls]
            if names[key] not in vocabulary:
                errors.append(
                    f"{key} '{names[key]}' is not one of: {', '.join(vocabulary)}"
                )

        if self.gauge == GaugeKind.DYNAMIC.value:
            required = ["Axstring", "Aystring"] + (["Azstring"] if dimnum == 3 else [])
            for name in required:
                if not getattr(self, name).strip():
                    errors.append(f"gauge 'dynamic' requires a non-empty {name}")

        if self.gauge == GaugeKind.FILE.value:
            required = ["Axfile", "Ayfile"] + (["Azfile"] if dimnum == 3 else [])
            for name in required:
                if not getattr(self, name):
                    errors.append(f"gauge 'file' requires {name}")

        if self.potential == PotentialKind.FILE.value and not self.Vfile:
            errors.append("potential 'file' requires Vfile")

        return errors


@dataclass
class NumericsConfig:
    """Reduction and renormalization configuration.

    Attributes:
        reduction_block_size: Partial sums combined per block in each
            reduction pass. Must be a power of two >= 2.
        target_norm: Discrete norm enforced by renormalization
        min_norm: Sums at or below this value cannot be renormalized

    """

    reduction_block_size: int = DEFAULT_REDUCTION_BLOCK_SIZE
    target_norm: float = DEFAULT_TARGET_NORM
    min_norm: float = DEFAULT_MIN_NORM

    def validate(self) -> list[str]:
        """Validate numerical configuration.

        Returns:
            List of error messages (empty if valid)

        """
        errors = []

        block = self.reduction_block_size
        if block < 2 or block & (block - 1):
            errors.append(f"reduction_block_size must be a power of two >= 2, got {block}")

        if self.target_norm <= 0:
            errors.append(f"target_norm must be > 0, got {self.target_norm}")

        if self.min_norm < 0:
            errors.append(f"min_norm must be >= 0, got {self.min_norm}")

        return errors


@dataclass
class SimulationConfig:
    """Everything needed to build the operators of one run.

    The frozen parameter store handed to the operator layer is derived
    from it and from nothing else.

    Example:
        >>> config = SimulationConfig()
        >>> errors = config.validate()
        >>> if not errors:
        ...     store = config.to_parameter_store()
        ...     operators = build_operators(store, OperatorSelection.from_store(store))

    Attributes:
        grid: Grid configuration
        physics: Physical parameters
        operators: Operator selectors
        numerics: Reduction/renormalization configuration

    """

    grid: GridConfig = field(default_factory=GridConfig)
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)
    operators: OperatorConfig = field(default_factory=OperatorConfig)
    numerics: NumericsConfig = field(default_factory=NumericsConfig)

    def validate(self) -> list[str]:
        """Validate complete simulation configuration.

        Returns:
            List of error messages (empty if valid)

        """
        errors = []

        errors.extend(self.grid.validate())
        errors.extend(self.physics.validate())
        errors.extend(
            self.operators.validate(self.grid.dimnum, self.physics.dimensionless)
        )
        errors.extend(self.numerics.validate())

        return errors

    def to_dict(self) -> dict:
        """Convert configuration to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "SimulationConfig":
        """Create configuration from dictionary.

        Unknown keys inside a section raise ConfigurationError; missing
        keys take their defaults.
        """
        sections = {
            "grid": GridConfig,
            "physics": PhysicsConfig,
            "operators": OperatorConfig,
            "numerics": NumericsConfig,
        }
        unknown = set(data) - set(sections)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration section(s): {', '.join(sorted(unknown))}"
            )

        kwargs = {}
        for name, section_cls in sections.items():
            section_data = data.get(name) or {}
            allowed = section_cls.__dataclass_fields__
            bad = set(section_data) - set(allowed)
            if bad:
                raise ConfigurationError(
                    f"Unknown key(s) in '{name}': {', '.join(sorted(bad))}"
                )
            kwargs[name] = section_cls(**section_data)

        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path) -> "SimulationConfig":
        """Load a configuration file with the same layout as defaults.yaml."""
        return cls.from_dict(load_yaml_file(path))

    # -------------------------------------------------------------------------
    # Derived quantities
    # -------------------------------------------------------------------------

    def condensate_radius(self) -> float:
        """Thomas-Fermi scale Rxy (dimensionless multiple of a0)."""
        p = self.physics
        return (
            15.0 * p.atoms * p.interaction * p.scattering_length
            * np.sqrt(p.mass * p.omegaZ / HBAR)
        ) ** 0.2

    def oscillator_lengths(self) -> tuple[float, float, float]:
        """Harmonic oscillator lengths a0 = sqrt(hbar / (2 m omega)) per axis."""
        p = self.physics
        return tuple(
            float(np.sqrt(HBAR / (2.0 * p.mass * omega)))
            for omega in (p.omegaX, p.omegaY, p.omegaZ)
        )

    def to_parameter_store(self) -> ParameterStore:
        """Populate and freeze the parameter store for the operator layer.

        Position axes run from -max in steps of dx = max / (n / 2);
        momentum axes are the matching FFT frequencies (spacing pi / max).

        Raises:
            ConfigurationError: If the configuration does not validate
        """
        errors = self.validate()
        if errors:
            listing = "\n".join(f"  - {err}" for err in errors)
            raise ConfigurationError(f"Cannot build parameter store:\n{listing}")

        g, p, o = self.grid, self.physics, self.operators
        store = ParameterStore()

        zDim = g.effective_zdim
        store.store("xDim", g.xDim)
        store.store("yDim", g.yDim)
        store.store("zDim", zDim)
        store.store("dimnum", g.dimnum)
        store.store("atoms", p.atoms)

        Rxy = self.condensate_radius()
        a0x, a0y, a0z = self.oscillator_lengths()
        store.store("Rxy", float(Rxy))
        store.store("a0x", a0x)
        store.store("a0y", a0y)
        store.store("a0z", a0z)

        dr = 1.0
        for axis, n, a0 in (("x", g.xDim, a0x), ("y", g.yDim, a0y), ("z", zDim, a0z)):
            if n == 1:
                extent, step = 0.0, 1.0
                coords = np.zeros(1)
                momenta = np.zeros(1)
            else:
                extent = g.box_size if g.box_size > 0 else 6.0 * Rxy * a0
                step = extent / (n // 2)
                coords = -extent + step * np.arange(n)
                momenta = 2.0 * np.pi * np.fft.fftfreq(n, d=step)
                dr *= step
            store.store(f"{axis}Max", float(extent))
            store.store(f"d{axis}", float(step))
            store.store(axis, coords)
            store.store(f"{axis}p", momenta)
        store.store("dr", float(dr))

        for name in ("mass", "omega", "omegaX", "omegaY", "omegaZ", "gammaY",
                     "interaction", "fudge", "x0_shift", "y0_shift", "z0_shift",
                     "dt", "gdt"):
            store.store(name, float(getattr(p, name)))
        store.store("a_s", float(p.scattering_length))
        store.store("dimensionless", bool(p.dimensionless))

        for key, name in o.resolved_names(g.dimnum, p.dimensionless).items():
            store.store(key, name)
        for name in ("Axstring", "Aystring", "Azstring",
                     "Axfile", "Ayfile", "Azfile", "Vfile"):
            store.store(name, getattr(o, name))

        logger.debug("Parameter store populated:\n%s", store.describe())
        return store.freeze()


def load_gauge_config(path) -> dict[str, str]:
    """Read dynamic gauge expressions from a gauge file.

    Each non-blank line has the form ``Ax = <expression>`` (likewise Ay,
    Az). Lines starting with ``#`` are comments.

    Returns:
        Dict keyed Axstring / Aystring / Azstring, ready for OperatorConfig

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: On a malformed line or unknown component
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Gauge configuration file not found: {path}")

    strings = {}
    with open(path, encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            name, sep, expression = line.partition("=")
            name = name.strip()
            if not sep or not expression.strip():
                raise ConfigurationError(
                    f"{path}:{lineno}: expected '<component> = <expression>', got '{line}'"
                )
            if name not in _GAUGE_KEYS:
                raise ConfigurationError(
                    f"{path}:{lineno}: unknown gauge component '{name}' "
                    f"(expected one of {', '.join(_GAUGE_KEYS)})"
                )
            strings[_GAUGE_KEYS[name]] = expression.strip()

    return strings


def create_default_config() -> SimulationConfig:
    """Create a default simulation configuration.

    Returns:
        Valid SimulationConfig instance

    """
    config = SimulationConfig()
    errors = config.validate()

    if errors:
        raise ConfigurationError("Default configuration is invalid:\n" + "\n".join(errors))

    return config
