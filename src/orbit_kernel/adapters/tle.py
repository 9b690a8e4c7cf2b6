# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Two-line element sets to an initial craft state.

The state is the SGP4 TEME position and velocity at the TLE epoch,
converted to simulation units. TEME is z-up, the same axis the drag
model's atmosphere rotates about.

External dependencies (sgp4) are confined to this adapter.
"""
import logging
import math

import numpy as np
from sgp4.api import Satrec

from orbit_kernel.domain.constants import SimulationConstants

logger = logging.getLogger(__name__)

TLE_LINE_LENGTH = 69

# Fixed columns of line 2: (field, start, end)
_LINE2_FIELDS = (
    ("inclination", 8, 16),
    ("RAAN", 17, 25),
    ("eccentricity", 26, 33),
    ("argument of perigee", 34, 42),
    ("mean anomaly", 43, 51),
    ("mean motion", 52, 63),
)


def _check_line(line, number: int) -> str:
    if not isinstance(line, str):
        raise ValueError(f"TLE line {number} must be a string, got {type(line).__name__}")
    line = line.rstrip()
    if len(line) < TLE_LINE_LENGTH:
        raise ValueError(
            f"TLE line {number} must be at least {TLE_LINE_LENGTH} characters, "
            f"got {len(line)}"
        )
    if line[0] != str(number):
        raise ValueError(f"TLE line {number} must start with '{number}', got {line[0]!r}")
    return line


def _parse_field(text: str, name: str, number: int) -> float:
    text = text.strip()
    try:
        value = float(text)
    except ValueError:
        raise ValueError(f"Non-numeric {name} {text!r} in TLE line {number}") from None
    if not math.isfinite(value):
        raise ValueError(f"Non-finite {name} {text!r} in TLE line {number}")
    return value


def _validate(line1: str, line2: str) -> None:
    _parse_field(line1[18:32], "epoch", 1)
    values = {}
    for name, start, end in _LINE2_FIELDS:
        text = line2[start:end]
        if name == "eccentricity":
            # Implied leading decimal point
            if not text.strip().isdigit():
                raise ValueError(f"Non-numeric eccentricity {text.strip()!r} in TLE line 2")
        else:
            values[name] = _parse_field(text, name, 2)
    if values["mean motion"] <= 0.0:
        raise ValueError(f"TLE mean motion must be positive, got {values['mean motion']}")


def state_from_tle(
    line1: str,
    line2: str,
    km_per_unit: float = SimulationConstants.KM_PER_UNIT,
) -> tuple[np.ndarray, np.ndarray]:
    """Position (units) and velocity (units/s) relative to Earth at the TLE epoch.

    Args:
        line1: TLE line 1 (epoch, drag terms).
        line2: TLE line 2 (mean orbital elements).
        km_per_unit: Simulation length unit in km.

    Raises:
        ValueError: If a line is short, mislabelled or has a non-numeric
            field, or SGP4 rejects the elements.
    """
    line1 = _check_line(line1, 1)
    line2 = _check_line(line2, 2)
    _validate(line1, line2)

    sat = Satrec.twoline2rv(line1, line2)
    error_code, position_km, velocity_km_s = sat.sgp4(sat.jdsatepoch, sat.jdsatepochF)
    if error_code != 0:
        raise ValueError(
            f"SGP4 error {error_code} for satellite {line2[2:7].strip()} at epoch"
        )

    logger.debug(
        "TLE %s at epoch: r=%.3f km, v=%.6f km/s",
        line2[2:7].strip(),
        float(np.linalg.norm(position_km)),
        float(np.linalg.norm(velocity_km_s)),
    )
    return (
        np.array(position_km, dtype=np.float64) / km_per_unit,
        np.array(velocity_km_s, dtype=np.float64) / km_per_unit,
    )
