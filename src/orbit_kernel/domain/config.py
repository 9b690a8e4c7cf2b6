# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Kernel configuration.

Groups the gravity guards, the drag environment and the step-level limits
into one immutable value that callers build once and pass to every step.
"""
from dataclasses import dataclass, field
from typing import Any

from orbit_kernel.domain.atmosphere import DensityModel, default_density_model
from orbit_kernel.domain.drag import DragEnvironment
from orbit_kernel.domain.gravity import GravityConfig


_GRAVITY_KEYS = ("min_distance_sq", "max_force")
_DENSITY_KEYS = ("low_altitude_threshold_km", "low_altitude_scale")
_DRAG_KEYS = (
    "primary_radius_km",
    "rotation_rate_rad_s",
    "min_density",
    "min_relative_speed_km_s",
)
_STEP_KEYS = ("min_mass", "max_bodies")


def as_integer(value: Any, name: str) -> int:
    """Integral value as int; ``1.5`` or ``"ten"`` raise instead of truncating.

    Raises:
        ValueError: If ``value`` is not a whole number.
    """
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {value!r}") from None
    if not number.is_integer():
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return int(number)


def _as_float(value: Any, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number, got {value!r}") from None


@dataclass(frozen=True)
class KernelConfig:
    """Configuration shared by all steps.

    gravity: singularity floor and force ceiling
    drag: atmosphere, primary radius/rotation and drag thresholds
    min_mass: propagated bodies at or below this mass (kg) are not advanced
    max_bodies: attractor capacity enforced at the precision boundary
    """
    gravity: GravityConfig = field(default_factory=GravityConfig)
    drag: DragEnvironment = field(default_factory=DragEnvironment)
    min_mass: float = 1e-6
    max_bodies: int = 256

    def __post_init__(self) -> None:
        if self.min_mass < 0.0:
            raise ValueError(f"min_mass must be non-negative, got {self.min_mass}")
        if self.max_bodies < 1:
            raise ValueError(f"max_bodies must be at least 1, got {self.max_bodies}")

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> "KernelConfig":
        """Build from a flat mapping, e.g. the ``config`` block of a scenario file.

        Raises:
            ValueError: On unknown keys or invalid values.
        """
        if not isinstance(values, dict):
            raise ValueError(f"config must be an object, got {type(values).__name__}")
        known = set(_GRAVITY_KEYS + _DENSITY_KEYS + _DRAG_KEYS + _STEP_KEYS)
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")

        gravity = GravityConfig(
            **{k: _as_float(values[k], k) for k in _GRAVITY_KEYS if k in values}
        )

        density_model = default_density_model()
        density_overrides = {k: _as_float(values[k], k) for k in _DENSITY_KEYS if k in values}
        if density_overrides:
            density_model = DensityModel(table=density_model.table, **density_overrides)

        drag = DragEnvironment(
            density_model=density_model,
            **{k: _as_float(values[k], k) for k in _DRAG_KEYS if k in values},
        )

        step = {}
        if "min_mass" in values:
            step["min_mass"] = _as_float(values["min_mass"], "min_mass")
        if "max_bodies" in values:
            step["max_bodies"] = as_integer(values["max_bodies"], "max_bodies")

        return cls(gravity=gravity, drag=drag, **step)


DEFAULT_CONFIG = KernelConfig()
