# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Composable force models for the integrators.

Each model returns an acceleration for a trial (position, velocity). The
integrators sum every model at every stage.
"""
from typing import Iterable, Protocol, runtime_checkable

import numpy as np

from orbit_kernel.domain.bodies import Attractors
from orbit_kernel.domain.drag import DragEnvironment
from orbit_kernel.domain.gravity import (
    DEFAULT_GRAVITY,
    GravityConfig,
    gravitational_acceleration,
)


@runtime_checkable
class ForceModel(Protocol):
    """Structural typing port for pluggable force models."""

    def acceleration(
        self,
        position: np.ndarray,
        velocity: np.ndarray,
    ) -> np.ndarray: ...


class PointMassGravity:
    """Inverse-square attraction toward every fixed attractor."""

    def __init__(self, attractors: Attractors, config: GravityConfig = DEFAULT_GRAVITY) -> None:
        self._attractors = attractors
        self._config = config

    def acceleration(self, position: np.ndarray, velocity: np.ndarray) -> np.ndarray:
        return gravitational_acceleration(
            position,
            self._attractors.positions,
            self._attractors.masses,
            self._config,
        )


class AtmosphericDrag:
    """Drag from the primary's co-rotating atmosphere."""

    def __init__(
        self,
        environment: DragEnvironment,
        primary_position: np.ndarray,
        mass: float,
        area_m2: float,
        drag_coefficient: float,
    ) -> None:
        self._environment = environment
        self._primary = np.asarray(primary_position, dtype=np.float64)
        self._mass = mass
        self._area_m2 = area_m2
        self._cd = drag_coefficient

    def acceleration(self, position: np.ndarray, velocity: np.ndarray) -> np.ndarray:
        return self._environment.acceleration(
            velocity,
            position - self._primary,
            self._mass,
            self._area_m2,
            self._cd,
        )


class ConstantThrust:
    """Thrust impulse spread over the step: a = impulse / m."""

    def __init__(self, impulse: np.ndarray, mass: float) -> None:
        self._acceleration = np.asarray(impulse, dtype=np.float64) / mass

    def acceleration(self, position: np.ndarray, velocity: np.ndarray) -> np.ndarray:
        return self._acceleration


def total_acceleration(
    force_models: Iterable[ForceModel],
    position: np.ndarray,
    velocity: np.ndarray,
) -> np.ndarray:
    """Sum of all model accelerations at (position, velocity)."""
    total = np.zeros(3)
    for model in force_models:
        total += model.acceleration(position, velocity)
    return total


def thrust_impulse_from_frame(
    position_rel_primary: np.ndarray,
    velocity: np.ndarray,
    prograde: float = 0.0,
    lateral: float = 0.0,
    radial: float = 0.0,
    duration: float = 1.0,
) -> np.ndarray:
    """Cartesian thrust impulse from magnitudes in the local orbit frame.

    Axes: prograde along v_hat, lateral along r_hat x v_hat, radial along
    r_hat (outward). Negative magnitudes thrust the opposite way
    (retrograde, radial-in). Each axis contributes magnitude * duration.

    Returns zeros when the velocity or the position relative to the primary
    vanishes, since the frame is undefined there.
    """
    r = np.asarray(position_rel_primary, dtype=np.float64)
    v = np.asarray(velocity, dtype=np.float64)
    r_mag = float(np.linalg.norm(r))
    v_mag = float(np.linalg.norm(v))
    if r_mag == 0.0 or v_mag == 0.0:
        return np.zeros(3)

    r_hat = r / r_mag
    v_hat = v / v_mag
    normal = np.cross(r_hat, v_hat)
    normal_mag = float(np.linalg.norm(normal))
    lateral_hat = normal / normal_mag if normal_mag > 0.0 else np.zeros(3)

    return duration * (prograde * v_hat + lateral * lateral_hat + radial * r_hat)
