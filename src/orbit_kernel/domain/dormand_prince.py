# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Fixed-step Dormand-Prince 5(4) integrator.

Seven stage evaluations of gravity + thrust + drag combined with the
5th-order weights. The embedded 4th-order weights are kept for reference;
the step size is never adapted.
"""
from typing import Sequence

import numpy as np

from orbit_kernel.domain.bodies import Attractors, PropagatedState
from orbit_kernel.domain.config import DEFAULT_CONFIG, KernelConfig
from orbit_kernel.domain.forces import (
    AtmosphericDrag,
    ConstantThrust,
    ForceModel,
    PointMassGravity,
    total_acceleration,
)


# --- Dormand-Prince Butcher tableau (7 stages) ---

DORMAND_PRINCE_C: tuple[float, ...] = (
    0.0,
    1.0 / 5.0,
    3.0 / 10.0,
    4.0 / 5.0,
    8.0 / 9.0,
    1.0,
    1.0,
)

DORMAND_PRINCE_A: tuple[tuple[float, ...], ...] = (
    (),
    (1.0 / 5.0,),
    (3.0 / 40.0, 9.0 / 40.0),
    (44.0 / 45.0, -56.0 / 15.0, 32.0 / 9.0),
    (19372.0 / 6561.0, -25360.0 / 2187.0, 64448.0 / 6561.0, -212.0 / 729.0),
    (9017.0 / 3168.0, -355.0 / 33.0, 46732.0 / 5247.0, 49.0 / 176.0, -5103.0 / 18656.0),
    (35.0 / 384.0, 0.0, 500.0 / 1113.0, 125.0 / 192.0, -2187.0 / 6784.0, 11.0 / 84.0),
)

# 5th-order solution weights (same as last row of A)
DORMAND_PRINCE_B5: tuple[float, ...] = (
    35.0 / 384.0,
    0.0,
    500.0 / 1113.0,
    125.0 / 192.0,
    -2187.0 / 6784.0,
    11.0 / 84.0,
    0.0,
)

# Embedded 4th-order weights (unused: no error control)
DORMAND_PRINCE_B4: tuple[float, ...] = (
    5179.0 / 57600.0,
    0.0,
    7571.0 / 16695.0,
    393.0 / 640.0,
    -92097.0 / 339200.0,
    187.0 / 2100.0,
    1.0 / 40.0,
)

_STAGES = len(DORMAND_PRINCE_C)


def dormand_prince_step(
    state: PropagatedState,
    dt: float,
    force_models: Sequence[ForceModel],
) -> None:
    """Advance ``state`` by one fixed Dormand-Prince step, in place.

    The accelerations are autonomous, so the nodes C are not needed: each
    stage only depends on the intermediate (position, velocity).

    Args:
        state: Propagated body; position and velocity are overwritten.
        dt: Step size (seconds).
        force_models: Models summed at every stage.
    """
    pos = state.position
    vel = state.velocity

    kx = np.empty((_STAGES, 3))
    kv = np.empty((_STAGES, 3))

    kx[0] = vel
    kv[0] = total_acceleration(force_models, pos, vel)

    for i in range(1, _STAGES):
        a_row = np.asarray(DORMAND_PRINCE_A[i])
        pos_i = pos + dt * (a_row @ kx[:i])
        vel_i = vel + dt * (a_row @ kv[:i])
        kx[i] = vel_i
        kv[i] = total_acceleration(force_models, pos_i, vel_i)

    b = np.asarray(DORMAND_PRINCE_B5)
    pos += dt * (b @ kx)
    vel += dt * (b @ kv)


def build_force_models(
    state: PropagatedState,
    attractors: Attractors,
    thrust_impulse: np.ndarray,
    drag_coefficient: float,
    area_m2: float,
    config: KernelConfig = DEFAULT_CONFIG,
) -> list[ForceModel]:
    """Gravity + thrust, plus drag relative to the primary when one exists."""
    models: list[ForceModel] = [
        PointMassGravity(attractors, config.gravity),
        ConstantThrust(thrust_impulse, state.mass),
    ]
    primary = attractors.primary_position
    if primary is not None and area_m2 > 0.0 and drag_coefficient > 0.0:
        models.append(AtmosphericDrag(
            config.drag, primary, state.mass, area_m2, drag_coefficient,
        ))
    return models


def step(
    state: PropagatedState,
    dt: float,
    attractors: Attractors,
    thrust_impulse: np.ndarray | None = None,
    drag_coefficient: float = 0.0,
    area_m2: float = 0.0,
    *,
    config: KernelConfig = DEFAULT_CONFIG,
) -> None:
    """One fixed-size step under gravity, thrust and drag, in place.

    Bodies with mass at or below ``config.min_mass`` are left untouched.

    Args:
        state: Propagated body (position, velocity, mass); mutated.
        dt: Step size (seconds).
        attractors: Fixed attractors for this step; index 0 is the primary.
        thrust_impulse: Force integrated over the step (kg·unit/s).
        drag_coefficient: Cd (dimensionless).
        area_m2: Cross-sectional area (m²).
        config: Gravity guards, drag environment and mass threshold.
    """
    if state.mass <= config.min_mass:
        return
    if thrust_impulse is None:
        thrust_impulse = np.zeros(3)
    models = build_force_models(
        state, attractors, thrust_impulse, drag_coefficient, area_m2, config,
    )
    dormand_prince_step(state, dt, models)
