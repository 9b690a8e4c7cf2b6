# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Two-body orbit shape from a Cartesian state.

Semi-major axis and eccentricity from the vis-viva energy and the
eccentricity vector, period, orientation of the orbit plane (inclination
and RAAN about +z), apsis positions along the eccentricity vector, and
altitude above the primary.
"""
import math
from dataclasses import dataclass

import numpy as np

# Eccentricities below this are reported as circular
CIRCULAR_ECCENTRICITY = 1e-8

# Orbits whose node vector is shorter than this (relative to |h|) are
# treated as equatorial: RAAN 0
EQUATORIAL_NODE_RATIO = 1e-12


@dataclass(frozen=True)
class OrbitalElements:
    """Osculating orbit about the primary.

    Angles are in degrees; RAAN is measured from +x toward +y and lies in
    [0, 360). Unbound orbits have infinite semi-major axis and period.
    """
    semi_major_axis: float
    eccentricity: float
    specific_energy: float
    is_bound: bool
    period_s: float
    inclination_deg: float
    raan_deg: float


@dataclass(frozen=True)
class Apsides:
    """Apsis positions relative to the primary; apoapsis is None if unbound."""
    periapsis: tuple[float, float, float]
    apoapsis: tuple[float, float, float] | None
    is_circular: bool


def _relative_state(position, velocity) -> tuple[np.ndarray, np.ndarray]:
    r = np.asarray(position, dtype=np.float64)
    v = np.asarray(velocity, dtype=np.float64)
    if float(np.linalg.norm(r)) <= 0.0:
        raise ValueError("Position coincides with the primary; orbit is undefined")
    if float(np.linalg.norm(np.cross(r, v))) <= 0.0:
        raise ValueError("Angular momentum is zero (radial or resting trajectory)")
    return r, v


def eccentricity_vector(position, velocity, mu: float) -> np.ndarray:
    """e = (v x h) / mu - r / |r|"""
    r, v = _relative_state(position, velocity)
    h = np.cross(r, v)
    return np.cross(v, h) / mu - r / float(np.linalg.norm(r))


def _plane_orientation(h: np.ndarray) -> tuple[float, float]:
    """Inclination and RAAN (degrees) of the plane with angular momentum h."""
    h_mag = float(np.linalg.norm(h))
    inclination = math.degrees(math.acos(max(-1.0, min(1.0, h[2] / h_mag))))

    # Ascending node: z_hat x h
    node = np.array([-h[1], h[0], 0.0])
    node_mag = float(np.linalg.norm(node))
    if node_mag < EQUATORIAL_NODE_RATIO * h_mag:
        return inclination, 0.0

    raan = math.degrees(math.acos(max(-1.0, min(1.0, node[0] / node_mag))))
    if node[1] < 0.0:
        raan = 360.0 - raan
    if raan >= 360.0:
        raan = 0.0
    return inclination, raan


def compute_orbital_elements(position, velocity, mu: float) -> OrbitalElements:
    """Shape, period and plane orientation of the orbit about the primary.

    Args:
        position: Position relative to the primary (units).
        velocity: Velocity relative to the primary (units/s).
        mu: Gravitational parameter G * M of the primary (units³/s²).

    Returns:
        OrbitalElements; unbound orbits have semi_major_axis = inf and
        period_s = inf.

    Raises:
        ValueError: If mu is not positive, the position is at the primary or
            the angular momentum vanishes.
    """
    if mu <= 0.0:
        raise ValueError(f"mu must be positive, got {mu}")
    r, v = _relative_state(position, velocity)

    r_mag = float(np.linalg.norm(r))
    energy = 0.5 * float(np.dot(v, v)) - mu / r_mag
    e = float(np.linalg.norm(eccentricity_vector(r, v, mu)))
    inclination, raan = _plane_orientation(np.cross(r, v))

    if energy >= 0.0:
        return OrbitalElements(
            semi_major_axis=math.inf,
            eccentricity=e,
            specific_energy=energy,
            is_bound=False,
            period_s=math.inf,
            inclination_deg=inclination,
            raan_deg=raan,
        )

    a = -mu / (2.0 * energy)
    return OrbitalElements(
        semi_major_axis=a,
        eccentricity=e,
        specific_energy=energy,
        is_bound=True,
        period_s=2.0 * math.pi * math.sqrt(a ** 3 / mu),
        inclination_deg=inclination,
        raan_deg=raan,
    )


def compute_apsides(position, velocity, mu: float) -> Apsides:
    """Periapsis and apoapsis positions relative to the primary.

    For circular orbits the eccentricity vector has no direction, so the
    current radial direction stands in for it.
    """
    elements = compute_orbital_elements(position, velocity, mu)
    r, v = _relative_state(position, velocity)
    e_vec = eccentricity_vector(r, v, mu)
    e = elements.eccentricity

    is_circular = e < CIRCULAR_ECCENTRICITY
    if is_circular:
        direction = r / float(np.linalg.norm(r))
    else:
        direction = e_vec / e

    h = float(np.linalg.norm(np.cross(r, v)))
    periapsis_distance = h * h / (mu * (1.0 + e))
    periapsis = tuple((direction * periapsis_distance).tolist())

    if not elements.is_bound:
        return Apsides(periapsis=periapsis, apoapsis=None, is_circular=False)

    apoapsis_distance = elements.semi_major_axis * (1.0 + e)
    apoapsis = tuple((-direction * apoapsis_distance).tolist())
    return Apsides(periapsis=periapsis, apoapsis=apoapsis, is_circular=is_circular)


def altitude_km(
    position,
    primary_position,
    primary_radius_km: float,
    km_per_unit: float,
) -> float:
    """Height above the primary's surface in km (negative below it)."""
    d = np.asarray(position, dtype=np.float64) - np.asarray(primary_position, dtype=np.float64)
    return float(np.linalg.norm(d)) * km_per_unit - primary_radius_km
