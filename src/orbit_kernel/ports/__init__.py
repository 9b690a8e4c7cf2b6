# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for scenario input and trajectory output.

Adapters implement these; the domain never touches files.
"""
from typing import Protocol, runtime_checkable

from orbit_kernel.domain.numerical_propagation import PredictionResult
from orbit_kernel.domain.scenario import Scenario


@runtime_checkable
class ScenarioReader(Protocol):
    """Port for loading a propagation scenario."""

    def read_scenario(self, path: str) -> Scenario:
        """Load and validate a scenario from ``path``."""
        ...


@runtime_checkable
class TrajectoryExporter(Protocol):
    """Port for writing a predicted trajectory."""

    def export(self, result: PredictionResult, scenario: Scenario, path: str) -> int:
        """Write the trajectory to ``path``. Returns the number of samples written."""
        ...
