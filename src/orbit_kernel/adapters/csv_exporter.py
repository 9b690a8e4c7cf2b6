# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
CSV trajectory exporter.

One row per sample with position, velocity and altitude above the primary.
External dependencies (csv, file I/O) are confined to this adapter.
"""
import csv
import logging

from orbit_kernel.ports import TrajectoryExporter
from orbit_kernel.domain.numerical_propagation import PredictionResult
from orbit_kernel.domain.orbital_elements import altitude_km
from orbit_kernel.domain.scenario import Scenario

logger = logging.getLogger(__name__)


_HEADER = [
    'step', 'time_s', 'x', 'y', 'z', 'vx', 'vy', 'vz', 'altitude_km',
]


class CsvTrajectoryExporter(TrajectoryExporter):
    """Exports a predicted trajectory to CSV."""

    def export(
        self,
        result: PredictionResult,
        scenario: Scenario,
        path: str,
    ) -> int:
        primary = scenario.attractors.primary_position
        if primary is None:
            logger.warning("No primary body, altitude column left empty")
        drag = scenario.config.drag

        with open(path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(_HEADER)

            for i, (t, pos, vel) in enumerate(
                zip(result.times_s, result.positions, result.velocities)
            ):
                if primary is None:
                    alt = ''
                else:
                    alt = f'{altitude_km(pos, primary, drag.primary_radius_km, drag.km_per_unit):.3f}'
                writer.writerow([
                    i,
                    f'{t:.3f}',
                    f'{pos[0]:.9f}',
                    f'{pos[1]:.9f}',
                    f'{pos[2]:.9f}',
                    f'{vel[0]:.9f}',
                    f'{vel[1]:.9f}',
                    f'{vel[2]:.9f}',
                    alt,
                ])

        return len(result.positions)
