# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Point-mass gravity from a set of fixed attractors.

Each attractor pulls with an inverse-square acceleration. Attractors closer
than the singularity floor are skipped and the per-attractor magnitude is
capped, so near-collisions cannot produce NaN/Inf or runaway accelerations.
"""
import math
from dataclasses import dataclass

import numpy as np

from orbit_kernel.domain.constants import SimulationConstants


@dataclass(frozen=True)
class GravityConfig:
    """Gravity constant and singularity guards (simulation units)."""
    gravitational_constant: float = SimulationConstants.G
    min_distance_sq: float = 1e-20
    max_force: float = 1e8

    def __post_init__(self) -> None:
        for name in ("gravitational_constant", "min_distance_sq", "max_force"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0.0:
                raise ValueError(f"{name} must be finite and positive, got {value}")


DEFAULT_GRAVITY = GravityConfig()


def gravitational_acceleration(
    position: np.ndarray,
    body_positions: np.ndarray,
    body_masses: np.ndarray,
    config: GravityConfig = DEFAULT_GRAVITY,
) -> np.ndarray:
    """Summed point-mass acceleration on ``position``.

    a = sum_i min(G * m_i / r_i², max_force) * d_i / r_i

    where d_i points from ``position`` to attractor i. Attractors with
    r_i² below ``config.min_distance_sq`` contribute nothing.

    Args:
        position: Propagated body position, shape (3,).
        body_positions: Attractor positions, shape (n, 3).
        body_masses: Attractor masses (kg), shape (n,).
        config: Gravity constant and guards.

    Returns:
        Acceleration (unit/s²), float64 shape (3,).
    """
    if len(body_masses) == 0:
        return np.zeros(3)

    d = np.asarray(body_positions, dtype=np.float64) - np.asarray(position, dtype=np.float64)
    r2 = np.einsum("ij,ij->i", d, d)
    active = r2 >= config.min_distance_sq
    if not np.any(active):
        return np.zeros(3)

    d = d[active]
    r2 = r2[active]
    masses = np.asarray(body_masses, dtype=np.float64)[active]

    force = np.minimum(config.gravitational_constant * masses / r2, config.max_force)
    f_r = force / np.sqrt(r2)
    return f_r @ d
