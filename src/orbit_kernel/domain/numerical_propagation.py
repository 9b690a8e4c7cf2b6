# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Multi-step trajectory prediction with collision detection.

Repeats the fixed-step kernel on a private copy of the propagated state,
holding the attractors fixed, and stops at the first surface contact.
Classical RK4 is available as a cheaper alternative to Dormand-Prince.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

import numpy as np

from orbit_kernel.domain.bodies import Attractors, PropagatedState
from orbit_kernel.domain.config import DEFAULT_CONFIG, KernelConfig
from orbit_kernel.domain.dormand_prince import build_force_models, dormand_prince_step
from orbit_kernel.domain.forces import ForceModel, total_acceleration

logger = logging.getLogger(__name__)


# --- Types ---

@dataclass(frozen=True)
class PredictionResult:
    """Sampled trajectory, including the initial state as sample 0."""
    times_s: tuple[float, ...]
    positions: tuple[tuple[float, float, float], ...]
    velocities: tuple[tuple[float, float, float], ...]
    collided_with: int | None = None

    @property
    def final_state(self) -> tuple[tuple[float, float, float], tuple[float, float, float]]:
        return self.positions[-1], self.velocities[-1]


# --- RK4 integrator ---

def rk4_step(
    state: PropagatedState,
    dt: float,
    force_models: Sequence[ForceModel],
) -> None:
    """Single 4th-order Runge-Kutta step, in place."""
    pos = state.position
    vel = state.velocity

    k1_x = vel
    k1_v = total_acceleration(force_models, pos, vel)

    k2_x = vel + 0.5 * dt * k1_v
    k2_v = total_acceleration(force_models, pos + 0.5 * dt * k1_x, k2_x)

    k3_x = vel + 0.5 * dt * k2_v
    k3_v = total_acceleration(force_models, pos + 0.5 * dt * k2_x, k3_x)

    k4_x = vel + dt * k3_v
    k4_v = total_acceleration(force_models, pos + dt * k3_x, k4_x)

    pos += (dt / 6.0) * (k1_x + 2.0 * k2_x + 2.0 * k3_x + k4_x)
    vel += (dt / 6.0) * (k1_v + 2.0 * k2_v + 2.0 * k3_v + k4_v)


_INTEGRATORS: dict[str, Callable[[PropagatedState, float, Sequence[ForceModel]], None]] = {
    "dopri5": dormand_prince_step,
    "rk4": rk4_step,
}

INTEGRATOR_NAMES: tuple[str, ...] = tuple(_INTEGRATORS)


# --- Collision detection ---

def detect_collision(
    position: np.ndarray,
    body_positions: np.ndarray,
    body_radii: Sequence[float],
    own_radius: float = 0.0,
) -> int | None:
    """Index of the first attractor whose surface ``position`` touches.

    A contact is a centre distance below ``own_radius + body_radius``.
    """
    if len(body_radii) == 0:
        return None
    d = np.asarray(body_positions, dtype=np.float64) - np.asarray(position, dtype=np.float64)
    distances = np.sqrt(np.einsum("ij,ij->i", d, d))
    hits = np.flatnonzero(distances < own_radius + np.asarray(body_radii, dtype=np.float64))
    return int(hits[0]) if hits.size else None


# --- Prediction ---

def _sample(state: PropagatedState) -> tuple[tuple[float, ...], tuple[float, ...]]:
    return tuple(state.position.tolist()), tuple(state.velocity.tolist())


def predict_trajectory(
    state: PropagatedState,
    attractors: Attractors,
    dt: float,
    steps: int,
    *,
    thrust_impulse: np.ndarray | None = None,
    drag_coefficient: float = 0.0,
    area_m2: float = 0.0,
    body_radii: Sequence[float] | None = None,
    own_radius: float = 0.0,
    integrator: str = "dopri5",
    config: KernelConfig = DEFAULT_CONFIG,
) -> PredictionResult:
    """Propagate a copy of ``state`` for up to ``steps`` fixed steps.

    Args:
        state: Initial propagated state (not modified).
        attractors: Fixed attractors, index 0 is the primary.
        dt: Step size (seconds).
        steps: Maximum number of steps.
        thrust_impulse: Impulse applied on every step.
        drag_coefficient: Cd (dimensionless).
        area_m2: Cross-sectional area (m²).
        body_radii: Attractor radii (units) for collision checks; None disables them.
        own_radius: Radius of the propagated body (units).
        integrator: "dopri5" or "rk4".
        config: Kernel configuration.

    Returns:
        PredictionResult with steps + 1 samples, fewer on collision.

    Raises:
        ValueError: If dt <= 0, steps < 0, the integrator is unknown or the
            radii do not match the attractors.
    """
    if dt <= 0.0:
        raise ValueError(f"dt must be positive, got {dt}")
    if steps < 0:
        raise ValueError(f"steps must be non-negative, got {steps}")
    try:
        step_fn = _INTEGRATORS[integrator]
    except KeyError:
        raise ValueError(
            f"Unknown integrator {integrator!r}, expected one of {', '.join(INTEGRATOR_NAMES)}"
        ) from None
    if body_radii is not None and len(body_radii) != len(attractors):
        raise ValueError(
            f"Radius count mismatch: {len(body_radii)} radii, {len(attractors)} attractors"
        )

    current = state.copy()
    pos, vel = _sample(current)
    times = [0.0]
    positions = [pos]
    velocities = [vel]

    if current.mass <= config.min_mass:
        return PredictionResult(tuple(times), tuple(positions), tuple(velocities))

    if thrust_impulse is None:
        thrust_impulse = np.zeros(3)
    models = build_force_models(
        current, attractors, thrust_impulse, drag_coefficient, area_m2, config,
    )

    collided_with = None
    for n in range(1, steps + 1):
        step_fn(current, dt, models)
        pos, vel = _sample(current)
        times.append(n * dt)
        positions.append(pos)
        velocities.append(vel)

        if body_radii is not None:
            collided_with = detect_collision(
                current.position, attractors.positions, body_radii, own_radius,
            )
            if collided_with is not None:
                logger.info(
                    "Collision with attractor %d after %d steps (t=%.1f s)",
                    collided_with, n, n * dt,
                )
                break

    return PredictionResult(
        times_s=tuple(times),
        positions=tuple(positions),
        velocities=tuple(velocities),
        collided_with=collided_with,
    )
