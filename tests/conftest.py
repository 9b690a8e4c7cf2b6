# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Shared scenario fixtures."""
import json
import math

import pytest

from orbit_kernel.domain.constants import SimulationConstants

_EARTH_MASS = SimulationConstants.PRIMARY_MASS
_EARTH_RADIUS = SimulationConstants.PRIMARY_RADIUS_KM / SimulationConstants.KM_PER_UNIT


def _circular_speed(r):
    return math.sqrt(SimulationConstants.G * _EARTH_MASS / r)


@pytest.fixture
def scenario_data():
    """Low orbit around Earth, 400 km altitude, no drag."""
    r = _EARTH_RADIUS + 40.0
    return {
        "bodies": [
            {"name": "Earth", "position": [0.0, 0.0, 0.0],
             "mass": _EARTH_MASS, "radius": _EARTH_RADIUS},
        ],
        "craft": {
            "position": [r, 0.0, 0.0],
            "velocity": [0.0, _circular_speed(r), 0.0],
            "mass": 1000.0,
            "radius": 0.001,
        },
        "dt": 10.0,
        "steps": 20,
    }


@pytest.fixture
def scenario_file(tmp_path, scenario_data):
    path = tmp_path / "scenario.json"
    path.write_text(json.dumps(scenario_data), encoding="utf-8")
    return path


@pytest.fixture
def iss_tle():
    """ISS (ZARYA) two-line element set, epoch 2008-09-20."""
    return (
        "1 25544U 98067A   08264.51782528 -.00002182  00000-0 -11606-4 0  2927",
        "2 25544  51.6416 247.4627 0006703 130.5360 325.0288 15.72125391563537",
    )
