# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Body data passed into a propagation step.

Attractors are read-only input for one call; the propagated state is owned
by the caller and mutated in place by the integrators.
"""
from dataclasses import dataclass

import numpy as np


def _as_vector(value, name: str) -> np.ndarray:
    vec = np.array(value, dtype=np.float64)
    if vec.shape != (3,):
        raise ValueError(f"{name} must have shape (3,), got {vec.shape}")
    return vec


@dataclass(frozen=True, eq=False)
class Attractors:
    """Fixed attracting point masses for one step.

    positions: shape (n, 3), simulation units
    masses: shape (n,), kg

    The first attractor is the primary: drag is computed relative to it.
    """
    positions: np.ndarray
    masses: np.ndarray

    def __post_init__(self) -> None:
        positions = np.array(self.positions, dtype=np.float64)
        if positions.size == 0:
            positions = positions.reshape(0, 3)
        if positions.ndim != 2 or positions.shape[1] != 3:
            raise ValueError(
                f"Attractor positions must have shape (n, 3), got {positions.shape}"
            )
        masses = np.array(self.masses, dtype=np.float64).reshape(-1)
        if len(positions) != len(masses):
            raise ValueError(
                f"Attractor count mismatch: {len(positions)} positions, "
                f"{len(masses)} masses"
            )
        positions.flags.writeable = False
        masses.flags.writeable = False
        object.__setattr__(self, "positions", positions)
        object.__setattr__(self, "masses", masses)

    def __len__(self) -> int:
        return len(self.masses)

    @property
    def primary_position(self) -> np.ndarray | None:
        return self.positions[0] if len(self.masses) else None

    @classmethod
    def empty(cls) -> "Attractors":
        return cls(positions=np.zeros((0, 3)), masses=np.zeros(0))


@dataclass(eq=False)
class PropagatedState:
    """Position (units), velocity (units/s) and mass (kg) of the advanced body."""
    position: np.ndarray
    velocity: np.ndarray
    mass: float

    def __post_init__(self) -> None:
        self.position = _as_vector(self.position, "position")
        self.velocity = _as_vector(self.velocity, "velocity")
        self.mass = float(self.mass)

    def copy(self) -> "PropagatedState":
        return PropagatedState(self.position.copy(), self.velocity.copy(), self.mass)
