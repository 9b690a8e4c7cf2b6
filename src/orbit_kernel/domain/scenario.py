# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Scenario: everything a host loop needs to drive the kernel for a run.
"""
from dataclasses import dataclass, field

import numpy as np

from orbit_kernel.domain.bodies import Attractors, PropagatedState
from orbit_kernel.domain.config import DEFAULT_CONFIG, KernelConfig


@dataclass(frozen=True, eq=False)
class Scenario:
    """Initial conditions and run parameters for one propagated body."""
    attractors: Attractors
    body_names: tuple[str, ...]
    body_radii: tuple[float, ...]
    state: PropagatedState
    dt: float
    steps: int
    thrust_impulse: np.ndarray = field(default_factory=lambda: np.zeros(3))
    drag_coefficient: float = 0.0
    area_m2: float = 0.0
    own_radius: float = 0.0
    integrator: str = "dopri5"
    config: KernelConfig = DEFAULT_CONFIG

    def __post_init__(self) -> None:
        n = len(self.attractors)
        if len(self.body_names) != n or len(self.body_radii) != n:
            raise ValueError(
                f"Scenario has {n} attractors but {len(self.body_names)} names "
                f"and {len(self.body_radii)} radii"
            )
