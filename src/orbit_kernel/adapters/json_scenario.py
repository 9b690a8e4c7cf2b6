# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
JSON scenario reader.

Scenario layout::

    {
      "bodies": [{"name": "Earth", "position": [0, 0, 0],
                  "mass": 5.972e24, "radius": 637.1}],
      "craft": {"position": [677.1, 0, 0], "velocity": [0, 0.767, 0],
                "mass": 1000.0, "drag_coefficient": 2.2, "area_m2": 4.0,
                "radius": 0.001},
      "thrust_impulse": [0, 0, 0],
      "dt": 1.0,
      "steps": 5400,
      "integrator": "dopri5",
      "config": {"max_force": 1e8}
    }

Instead of ``position``/``velocity`` the craft may carry ``"tle": [line1,
line2]``; its state at the TLE epoch is placed relative to the first body.

Lengths are simulation units (10 km), masses kg, time seconds.
"""
import json
import logging
from typing import Any

import numpy as np

from orbit_kernel.adapters.tle import state_from_tle
from orbit_kernel.domain.bodies import Attractors, PropagatedState
from orbit_kernel.domain.config import KernelConfig, as_integer
from orbit_kernel.domain.scenario import Scenario
from orbit_kernel.ports import ScenarioReader

logger = logging.getLogger(__name__)


def _require(record: dict[str, Any], key: str, context: str) -> Any:
    try:
        return record[key]
    except KeyError:
        raise ValueError(f"Missing required key '{key}' in {context}") from None


def _mapping(value: Any, context: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"{context} must be an object, got {type(value).__name__}")
    return value


def _number(value: Any, context: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{context} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{context} must be a number, got {value!r}") from None


def _vector(value: Any, context: str) -> list[float]:
    if not isinstance(value, list) or len(value) != 3:
        raise ValueError(f"{context} must be a list of 3 numbers, got {value!r}")
    return [_number(x, context) for x in value]


def _craft_state(craft: dict[str, Any], primary: list[float] | None) -> PropagatedState:
    mass = _number(_require(craft, "mass", "craft"), "craft.mass")
    if "tle" not in craft:
        return PropagatedState(
            position=_vector(_require(craft, "position", "craft"), "craft.position"),
            velocity=_vector(_require(craft, "velocity", "craft"), "craft.velocity"),
            mass=mass,
        )

    if "position" in craft or "velocity" in craft:
        raise ValueError("craft takes either 'tle' or 'position'/'velocity', not both")
    tle = craft["tle"]
    if not isinstance(tle, list) or len(tle) != 2:
        raise ValueError(f"craft.tle must be a list of 2 lines, got {tle!r}")
    position, velocity = state_from_tle(tle[0], tle[1])
    if primary is not None:
        position = position + np.asarray(primary)
    else:
        logger.warning("TLE craft without a primary body; placed relative to the origin")
    return PropagatedState(position=position, velocity=velocity, mass=mass)


def parse_scenario(data: dict[str, Any]) -> Scenario:
    """Build a Scenario from decoded JSON.

    Raises:
        ValueError: On missing keys or malformed values.
    """
    bodies = data.get("bodies", [])
    if not isinstance(bodies, list):
        raise ValueError(f"bodies must be a list, got {type(bodies).__name__}")
    names = []
    positions = []
    masses = []
    radii = []
    for i, body in enumerate(bodies):
        context = f"bodies[{i}]"
        body = _mapping(body, context)
        names.append(str(body.get("name", f"body{i}")))
        positions.append(_vector(_require(body, "position", context), f"{context}.position"))
        masses.append(_number(_require(body, "mass", context), f"{context}.mass"))
        radii.append(_number(body.get("radius", 0.0), f"{context}.radius"))
    if not bodies:
        logger.warning("Scenario has no attractors; motion will be inertial")

    craft = _mapping(_require(data, "craft", "scenario"), "craft")
    state = _craft_state(craft, positions[0] if positions else None)

    config = KernelConfig.from_mapping(data.get("config", {}))

    return Scenario(
        attractors=Attractors(
            positions=np.array(positions, dtype=np.float64).reshape(-1, 3),
            masses=np.array(masses, dtype=np.float64),
        ),
        body_names=tuple(names),
        body_radii=tuple(radii),
        state=state,
        dt=_number(_require(data, "dt", "scenario"), "dt"),
        steps=as_integer(_require(data, "steps", "scenario"), "steps"),
        thrust_impulse=np.array(
            _vector(data.get("thrust_impulse", [0.0, 0.0, 0.0]), "thrust_impulse"),
            dtype=np.float64,
        ),
        drag_coefficient=_number(craft.get("drag_coefficient", 0.0), "craft.drag_coefficient"),
        area_m2=_number(craft.get("area_m2", 0.0), "craft.area_m2"),
        own_radius=_number(craft.get("radius", 0.0), "craft.radius"),
        integrator=str(data.get("integrator", "dopri5")),
        config=config,
    )


class JsonScenarioReader(ScenarioReader):
    """Reads scenarios from JSON files."""

    def read_scenario(self, path: str) -> Scenario:
        with open(path, encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Scenario root in {path} must be an object")
        return parse_scenario(data)
