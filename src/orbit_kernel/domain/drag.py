# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Atmospheric drag with a co-rotating atmosphere.

a = -0.5 * Cd * A * rho * |v_rel| * v_rel / m

where v_rel = v - omega x r is the wind relative to an atmosphere rotating
rigidly with the primary about +z. Computed in km, km/s and kg/km³, then
returned in simulation units.
"""
import math
from dataclasses import dataclass, field

import numpy as np

from orbit_kernel.domain.atmosphere import DensityModel, default_density_model
from orbit_kernel.domain.constants import SimulationConstants


@dataclass(frozen=True)
class DragEnvironment:
    """Primary-body atmosphere used by the drag model.

    density_model: altitude → density (kg/km³)
    primary_radius_km: radius subtracted to get altitude
    rotation_rate_rad_s: rigid rotation rate of the atmosphere about +z
    km_per_unit: simulation length unit in km
    min_density: densities below this produce no drag (kg/km³)
    min_relative_speed_km_s: relative winds below this produce no drag
    """
    density_model: DensityModel = field(default_factory=default_density_model)
    primary_radius_km: float = SimulationConstants.PRIMARY_RADIUS_KM
    rotation_rate_rad_s: float = SimulationConstants.PRIMARY_ROTATION_RATE
    km_per_unit: float = SimulationConstants.KM_PER_UNIT
    min_density: float = 1e-9
    min_relative_speed_km_s: float = 1e-10

    def __post_init__(self) -> None:
        if self.primary_radius_km < 0.0:
            raise ValueError(
                f"primary_radius_km must be non-negative, got {self.primary_radius_km}"
            )
        if self.km_per_unit <= 0.0:
            raise ValueError(f"km_per_unit must be positive, got {self.km_per_unit}")
        if self.min_density < 0.0 or self.min_relative_speed_km_s < 0.0:
            raise ValueError("Drag thresholds must be non-negative")

    def altitude_km(self, position_rel_primary: np.ndarray) -> float:
        """Altitude above the primary's surface, clamped at 0."""
        r_km = float(np.linalg.norm(position_rel_primary)) * self.km_per_unit
        return max(0.0, r_km - self.primary_radius_km)

    def atmosphere_velocity_km_s(self, position_km: np.ndarray) -> np.ndarray:
        """Rigid co-rotation velocity (-w*y, w*x, 0) at ``position_km``."""
        omega = self.rotation_rate_rad_s
        return np.array([-omega * position_km[1], omega * position_km[0], 0.0])

    def acceleration(
        self,
        velocity: np.ndarray,
        position_rel_primary: np.ndarray,
        mass: float,
        area_m2: float,
        drag_coefficient: float,
    ) -> np.ndarray:
        """Drag acceleration in unit/s², float64 shape (3,)."""
        if mass <= 0.0 or area_m2 <= 0.0 or drag_coefficient <= 0.0:
            return np.zeros(3)

        position_km = np.asarray(position_rel_primary, dtype=np.float64) * self.km_per_unit
        rho = self.density_model.density(self.altitude_km(position_rel_primary))
        if not rho >= self.min_density:
            return np.zeros(3)

        v_km_s = np.asarray(velocity, dtype=np.float64) * self.km_per_unit
        v_rel = v_km_s - self.atmosphere_velocity_km_s(position_km)
        speed = float(np.linalg.norm(v_rel))
        if speed < self.min_relative_speed_km_s or not math.isfinite(speed):
            return np.zeros(3)

        area_km2 = area_m2 * SimulationConstants.M2_TO_KM2
        coeff = -0.5 * drag_coefficient * area_km2 * rho * speed / mass
        return coeff * v_rel / self.km_per_unit
