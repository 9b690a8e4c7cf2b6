# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Simulation unit system and physical constants.

One simulation length unit is 10 km. Masses are in kg and time in seconds,
so the gravitational constant is the SI value divided by (10^4 m)^3.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class _SimulationConstants:
    """Constants of the 10 km simulation unit system."""
    G: float = 6.67430e-23                 # unit³/(kg·s²)
    KM_PER_UNIT: float = 10.0              # km per simulation unit
    M2_TO_KM2: float = 1.0e-6              # m² → km²
    KG_M3_TO_KG_KM3: float = 1.0e9         # kg/m³ → kg/km³
    PRIMARY_RADIUS_KM: float = 6371.0      # km, mean radius of the primary
    PRIMARY_ROTATION_RATE: float = 7.2921159e-5  # rad/s, sidereal rate about +z
    PRIMARY_MASS: float = 5.972e24         # kg


SimulationConstants: _SimulationConstants = _SimulationConstants()
