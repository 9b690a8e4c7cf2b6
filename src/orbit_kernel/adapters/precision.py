# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Single/double precision boundary for host engines.

Engines hand the kernel float32 vectors (attractor positions, masses,
thrust) and keep the propagated state in whatever precision they store.
Everything is widened to float64 on the way in, which is exact, and
narrowed on the way out with IEEE round-to-nearest-even. A finite value
that does not fit in float32 is rejected rather than turned into inf.
"""
import logging

import numpy as np

from orbit_kernel.domain.bodies import Attractors, PropagatedState
from orbit_kernel.domain.config import DEFAULT_CONFIG, KernelConfig
from orbit_kernel.domain.dormand_prince import step

logger = logging.getLogger(__name__)


def to_double(vector) -> np.ndarray:
    """Widen a 3-vector to float64 (exact for float32 input)."""
    vec = np.asarray(vector)
    if vec.shape != (3,):
        raise ValueError(f"Expected a 3-vector, got shape {vec.shape}")
    return vec.astype(np.float64)


def to_single(vector) -> np.ndarray:
    """Narrow a 3-vector to float32, rounding to nearest (ties to even).

    Raises:
        ValueError: If a finite component overflows float32.
    """
    vec = np.asarray(vector, dtype=np.float64)
    if vec.shape != (3,):
        raise ValueError(f"Expected a 3-vector, got shape {vec.shape}")
    with np.errstate(over="ignore"):
        narrowed = vec.astype(np.float32)
    overflow = np.isfinite(vec) & ~np.isfinite(narrowed)
    if np.any(overflow):
        raise ValueError(f"Vector {vec.tolist()} overflows single precision")
    return narrowed


def _write_back(target: np.ndarray, value: np.ndarray) -> None:
    if target.dtype == np.float32:
        target[...] = to_single(value)
    else:
        target[...] = value


class SinglePrecisionBoundary:
    """Runs one kernel step on engine-owned arrays.

    ``position`` and ``velocity`` are updated in place; if they are float32
    the double-precision result is rounded once, on write-back.
    """

    def __init__(self, config: KernelConfig = DEFAULT_CONFIG) -> None:
        self._config = config

    @property
    def max_bodies(self) -> int:
        return self._config.max_bodies

    def step(
        self,
        position: np.ndarray,
        velocity: np.ndarray,
        mass: float,
        bodies: np.ndarray,
        masses: np.ndarray,
        dt: float,
        thrust_impulse: np.ndarray,
        drag_coefficient: float = 0.0,
        area_m2: float = 0.0,
    ) -> None:
        """One Dormand-Prince step for an engine body.

        Args:
            position: Writable 3-vector (float32 or float64), updated in place.
            velocity: Writable 3-vector (float32 or float64), updated in place.
            mass: Body mass (kg); at or below the configured minimum, no-op.
            bodies: Attractor positions, shape (n, 3), n <= max_bodies.
            masses: Attractor masses, shape (n,).
            dt: Step size (seconds).
            thrust_impulse: Impulse over the step.
            drag_coefficient: Cd (dimensionless).
            area_m2: Cross-sectional area (m²).

        Raises:
            ValueError: If more than ``max_bodies`` attractors are supplied or
                the shapes are inconsistent.
        """
        n = len(masses)
        if n > self._config.max_bodies:
            raise ValueError(
                f"{n} attractors exceed the boundary capacity of {self._config.max_bodies}"
            )
        if float(mass) <= self._config.min_mass:
            return

        attractors = Attractors(
            positions=np.asarray(bodies).astype(np.float64),
            masses=np.asarray(masses).astype(np.float64),
        )
        state = PropagatedState(
            position=to_double(position),
            velocity=to_double(velocity),
            mass=float(mass),
        )
        step(
            state,
            float(dt),
            attractors,
            to_double(thrust_impulse),
            float(drag_coefficient),
            float(area_m2),
            config=self._config,
        )

        if not (np.all(np.isfinite(state.position)) and np.all(np.isfinite(state.velocity))):
            logger.warning(
                "Non-finite state after step: position=%s velocity=%s",
                state.position.tolist(), state.velocity.tolist(),
            )
        _write_back(position, state.position)
        _write_back(velocity, state.velocity)
