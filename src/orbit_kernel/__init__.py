# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbit Kernel

Fixed-step Dormand-Prince propagation of a point-mass body under gravity
from fixed attractors, co-rotating atmospheric drag and constant thrust.
Includes the piecewise exponential density model, a single/double
precision boundary for host engines, multi-step trajectory prediction
with collision detection, and two-body orbital elements.
"""

from orbit_kernel.domain.constants import SimulationConstants
from orbit_kernel.domain.atmosphere import (
    DensityTable,
    DensityModel,
    STANDARD_DENSITY_TABLE,
    default_density_model,
)
from orbit_kernel.domain.gravity import (
    GravityConfig,
    gravitational_acceleration,
)
from orbit_kernel.domain.drag import DragEnvironment
from orbit_kernel.domain.bodies import Attractors, PropagatedState
from orbit_kernel.domain.config import KernelConfig, DEFAULT_CONFIG
from orbit_kernel.domain.forces import (
    ForceModel,
    PointMassGravity,
    AtmosphericDrag,
    ConstantThrust,
    thrust_impulse_from_frame,
)
from orbit_kernel.domain.dormand_prince import (
    DORMAND_PRINCE_A,
    DORMAND_PRINCE_B4,
    DORMAND_PRINCE_B5,
    DORMAND_PRINCE_C,
    dormand_prince_step,
    step,
)
from orbit_kernel.domain.numerical_propagation import (
    PredictionResult,
    rk4_step,
    detect_collision,
    predict_trajectory,
)
from orbit_kernel.domain.orbital_elements import (
    OrbitalElements,
    Apsides,
    compute_orbital_elements,
    compute_apsides,
    altitude_km,
)
from orbit_kernel.adapters.tle import state_from_tle
from orbit_kernel.adapters.precision import (
    SinglePrecisionBoundary,
    to_double,
    to_single,
)

__all__ = [
    "SimulationConstants",
    "DensityTable",
    "DensityModel",
    "STANDARD_DENSITY_TABLE",
    "default_density_model",
    "GravityConfig",
    "gravitational_acceleration",
    "DragEnvironment",
    "Attractors",
    "PropagatedState",
    "KernelConfig",
    "DEFAULT_CONFIG",
    "ForceModel",
    "PointMassGravity",
    "AtmosphericDrag",
    "ConstantThrust",
    "thrust_impulse_from_frame",
    "DORMAND_PRINCE_A",
    "DORMAND_PRINCE_B4",
    "DORMAND_PRINCE_B5",
    "DORMAND_PRINCE_C",
    "dormand_prince_step",
    "step",
    "PredictionResult",
    "rk4_step",
    "detect_collision",
    "predict_trajectory",
    "OrbitalElements",
    "Apsides",
    "compute_orbital_elements",
    "compute_apsides",
    "altitude_km",
    "SinglePrecisionBoundary",
    "to_double",
    "to_single",
    "state_from_tle",
]
