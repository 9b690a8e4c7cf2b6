# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line interface for scenario propagation.

Usage:
    # Propagate a scenario and print a summary
    orbit-kernel -i scenario.json

    # Write the trajectory to CSV, overriding step count and size
    orbit-kernel -i scenario.json -o track.csv --steps 5400 --dt 1.0

    # Use the RK4 integrator instead of Dormand-Prince
    orbit-kernel -i scenario.json --integrator rk4
"""
import argparse
import logging
import sys

from orbit_kernel.adapters.csv_exporter import CsvTrajectoryExporter
from orbit_kernel.adapters.json_scenario import JsonScenarioReader
from orbit_kernel.domain.numerical_propagation import (
    INTEGRATOR_NAMES,
    PredictionResult,
    predict_trajectory,
)
from orbit_kernel.domain.orbital_elements import altitude_km, compute_orbital_elements
from orbit_kernel.domain.scenario import Scenario


def run(
    input_path: str,
    steps: int | None = None,
    dt: float | None = None,
    integrator: str | None = None,
) -> tuple[Scenario, PredictionResult]:
    """
    Load a scenario and propagate it.

    Returns:
        (scenario, result): the loaded scenario and the predicted trajectory.
    """
    scenario = JsonScenarioReader().read_scenario(input_path)
    result = predict_trajectory(
        scenario.state,
        scenario.attractors,
        dt if dt is not None else scenario.dt,
        steps if steps is not None else scenario.steps,
        thrust_impulse=scenario.thrust_impulse,
        drag_coefficient=scenario.drag_coefficient,
        area_m2=scenario.area_m2,
        body_radii=scenario.body_radii,
        own_radius=scenario.own_radius,
        integrator=integrator or scenario.integrator,
        config=scenario.config,
    )
    return scenario, result


def _print_summary(scenario: Scenario, result: PredictionResult) -> None:
    samples = len(result.positions) - 1
    print(f"Propagated {samples} steps ({result.times_s[-1]:.1f} s)")

    primary = scenario.attractors.primary_position
    if primary is None:
        return

    pos, vel = result.final_state
    drag = scenario.config.drag
    alt = altitude_km(pos, primary, drag.primary_radius_km, drag.km_per_unit)
    print(f"  Final altitude: {alt:.3f} km above {scenario.body_names[0]}")

    mu = scenario.config.gravity.gravitational_constant * scenario.attractors.masses[0]
    rel_pos = [p - c for p, c in zip(pos, primary)]
    try:
        elements = compute_orbital_elements(rel_pos, vel, mu)
    except ValueError as e:
        print(f"  Orbital elements unavailable: {e}")
    else:
        if elements.is_bound:
            sma_km = elements.semi_major_axis * drag.km_per_unit
            print(f"  Semi-major axis: {sma_km:.3f} km")
            print(f"  Period: {elements.period_s / 60.0:.2f} min")
        else:
            print("  Orbit is unbound")
        print(f"  Eccentricity: {elements.eccentricity:.6f}")
        print(f"  Inclination: {elements.inclination_deg:.3f} deg, "
              f"RAAN: {elements.raan_deg:.3f} deg")

    if result.collided_with is not None:
        print(f"  Collided with {scenario.body_names[result.collided_with]}")


def main():
    parser = argparse.ArgumentParser(
        description="Propagate a body through a fixed-attractor scenario"
    )
    parser.add_argument(
        '--input', '-i', required=True,
        help="Path to scenario JSON"
    )
    parser.add_argument(
        '--output', '-o',
        help="Write the trajectory to this CSV file"
    )
    parser.add_argument(
        '--steps', type=int,
        help="Override the scenario step count"
    )
    parser.add_argument(
        '--dt', type=float,
        help="Override the scenario step size (seconds)"
    )
    parser.add_argument(
        '--integrator', choices=INTEGRATOR_NAMES,
        help="Override the scenario integrator"
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true', default=False,
        help="Enable debug logging"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        scenario, result = run(
            input_path=args.input,
            steps=args.steps,
            dt=args.dt,
            integrator=args.integrator,
        )
        _print_summary(scenario, result)

        if args.output:
            n = CsvTrajectoryExporter().export(result, scenario, args.output)
            print(f"Exported {n} samples to {args.output}")

    except FileNotFoundError:
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
