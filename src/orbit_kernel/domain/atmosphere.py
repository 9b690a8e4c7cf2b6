# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Atmospheric density model.

Piecewise exponential atmosphere: each table segment decays from its lower
sample with a scale height derived from the two bracketing samples, so the
interpolant reproduces every sample exactly. Covers 0-1000 km; above the
table ceiling the atmosphere is vacuum.

Densities are in kg/km³, the unit the drag model works in.
"""
import functools
import logging
import math
from dataclasses import dataclass, field

from orbit_kernel.domain.constants import SimulationConstants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DensityTable:
    """Ordered (altitude, density) samples with derived per-segment scale heights.

    altitudes_km: strictly increasing sample altitudes (km)
    densities: strictly positive, non-increasing sample densities
    scale_heights_km: one entry per consecutive sample pair (derived)
    """
    altitudes_km: tuple[float, ...]
    densities: tuple[float, ...]
    scale_heights_km: tuple[float, ...] = field(init=False)

    def __post_init__(self) -> None:
        altitudes = tuple(float(h) for h in self.altitudes_km)
        densities = tuple(float(rho) for rho in self.densities)

        if len(altitudes) != len(densities):
            raise ValueError(
                f"Density table length mismatch: {len(altitudes)} altitudes, "
                f"{len(densities)} densities"
            )
        if len(altitudes) < 2:
            raise ValueError(
                f"Density table needs at least 2 samples, got {len(altitudes)}"
            )
        for i, rho in enumerate(densities):
            if not math.isfinite(rho) or rho <= 0.0:
                raise ValueError(
                    f"Density sample {i} must be finite and positive, got {rho}"
                )
        for i in range(len(altitudes) - 1):
            if not altitudes[i] < altitudes[i + 1]:
                raise ValueError(
                    f"Altitudes must be strictly increasing: "
                    f"{altitudes[i]} km at index {i}, {altitudes[i + 1]} km at {i + 1}"
                )
            if densities[i + 1] > densities[i]:
                raise ValueError(
                    f"Densities must be non-increasing: {densities[i]} at "
                    f"{altitudes[i]} km < {densities[i + 1]} at {altitudes[i + 1]} km"
                )

        scale_heights = []
        for i in range(len(altitudes) - 1):
            ratio = densities[i + 1] / densities[i]
            if ratio == 1.0:
                scale_heights.append(math.inf)
            else:
                scale_heights.append(
                    -(altitudes[i + 1] - altitudes[i]) / math.log(ratio)
                )

        object.__setattr__(self, "altitudes_km", altitudes)
        object.__setattr__(self, "densities", densities)
        object.__setattr__(self, "scale_heights_km", tuple(scale_heights))

    @property
    def floor_km(self) -> float:
        return self.altitudes_km[0]

    @property
    def ceiling_km(self) -> float:
        return self.altitudes_km[-1]


@dataclass(frozen=True)
class DensityModel:
    """Altitude → density lookup over an immutable DensityTable.

    Below ``low_altitude_threshold_km`` the density is multiplied by
    ``low_altitude_scale``. The default (threshold 0 km, scale 1.0)
    leaves the table untouched.
    """
    table: DensityTable
    low_altitude_threshold_km: float = 0.0
    low_altitude_scale: float = 1.0

    def __post_init__(self) -> None:
        if not math.isfinite(self.low_altitude_scale) or self.low_altitude_scale < 0.0:
            raise ValueError(
                f"low_altitude_scale must be finite and non-negative, "
                f"got {self.low_altitude_scale}"
            )

    def density(self, altitude_km: float) -> float:
        """Atmospheric density at the given altitude.

        Binary-searches the table for the altitude bracket, then
        interpolates: rho = rho_base * exp(-(h - h_base) / H)

        Args:
            altitude_km: Altitude above the primary's surface in km.

        Returns:
            Density in kg/km³. The first sample at or below the table
            floor, 0 at or above the ceiling or for a NaN altitude.
        """
        if math.isnan(altitude_km):
            return 0.0
        table = self.table
        altitudes = table.altitudes_km

        if altitude_km <= altitudes[0]:
            rho = table.densities[0]
        elif altitude_km >= altitudes[-1]:
            return 0.0
        else:
            lo, hi = 0, len(altitudes) - 1
            while lo < hi - 1:
                mid = (lo + hi) // 2
                if altitudes[mid] <= altitude_km:
                    lo = mid
                else:
                    hi = mid
            rho = table.densities[lo] * math.exp(
                -(altitude_km - altitudes[lo]) / table.scale_heights_km[lo]
            )

        if altitude_km < self.low_altitude_threshold_km:
            rho *= self.low_altitude_scale
        return rho


# Vallado 4th ed. Table 8-4 sample densities (kg/m³), 0-1000 km.
# Scale heights are derived from consecutive samples, not taken from the table.
_VALLADO_SAMPLES_KG_M3: tuple[tuple[float, float], ...] = (
    (0.0, 1.225),
    (25.0, 3.899e-02),
    (30.0, 1.774e-02),
    (40.0, 3.972e-03),
    (50.0, 1.057e-03),
    (60.0, 3.206e-04),
    (70.0, 8.770e-05),
    (80.0, 1.905e-05),
    (90.0, 3.396e-06),
    (100.0, 5.297e-07),
    (110.0, 9.661e-08),
    (120.0, 2.438e-08),
    (130.0, 8.484e-09),
    (140.0, 3.845e-09),
    (150.0, 2.070e-09),
    (180.0, 5.464e-10),
    (200.0, 2.789e-10),
    (250.0, 7.248e-11),
    (300.0, 2.418e-11),
    (350.0, 9.518e-12),
    (400.0, 3.725e-12),
    (450.0, 1.585e-12),
    (500.0, 6.967e-13),
    (600.0, 1.454e-13),
    (700.0, 3.614e-14),
    (800.0, 1.170e-14),
    (900.0, 5.245e-15),
    (1000.0, 3.019e-15),
)

STANDARD_DENSITY_TABLE: DensityTable = DensityTable(
    altitudes_km=tuple(h for h, _ in _VALLADO_SAMPLES_KG_M3),
    densities=tuple(
        rho * SimulationConstants.KG_M3_TO_KG_KM3 for _, rho in _VALLADO_SAMPLES_KG_M3
    ),
)


@functools.lru_cache(maxsize=None)
def default_density_model() -> DensityModel:
    """The canonical density model, built once and shared."""
    model = DensityModel(table=STANDARD_DENSITY_TABLE)
    logger.debug(
        "Built density model: %d samples, %.1f-%.1f km",
        len(STANDARD_DENSITY_TABLE.altitudes_km),
        STANDARD_DENSITY_TABLE.floor_km,
        STANDARD_DENSITY_TABLE.ceiling_km,
    )
    return model
