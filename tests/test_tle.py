# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for placing a craft from a two-line element set."""
import math

import numpy as np
import pytest

from orbit_kernel.adapters.tle import state_from_tle
from orbit_kernel.domain.constants import SimulationConstants
from orbit_kernel.domain.orbital_elements import compute_orbital_elements

# ISS (ZARYA), epoch 2008-09-20
ISS_LINE1 = "1 25544U 98067A   08264.51782528 -.00002182  00000-0 -11606-4 0  2927"
ISS_LINE2 = "2 25544  51.6416 247.4627 0006703 130.5360 325.0288 15.72125391563537"

_MU = SimulationConstants.G * SimulationConstants.PRIMARY_MASS


class TestIssState:

    def test_radius_in_low_earth_orbit(self):
        position, _ = state_from_tle(ISS_LINE1, ISS_LINE2)
        r_km = float(np.linalg.norm(position)) * SimulationConstants.KM_PER_UNIT
        assert 6700.0 < r_km < 6760.0

    def test_orbital_speed(self):
        _, velocity = state_from_tle(ISS_LINE1, ISS_LINE2)
        v_km_s = float(np.linalg.norm(velocity)) * SimulationConstants.KM_PER_UNIT
        assert 7.6 < v_km_s < 7.8

    def test_plane_matches_mean_elements(self):
        position, velocity = state_from_tle(ISS_LINE1, ISS_LINE2)
        el = compute_orbital_elements(position, velocity, _MU)
        assert el.is_bound
        assert el.inclination_deg == pytest.approx(51.6416, abs=0.1)
        assert el.raan_deg == pytest.approx(247.4627, abs=0.2)
        assert el.eccentricity < 0.005

    def test_period_matches_mean_motion(self):
        position, velocity = state_from_tle(ISS_LINE1, ISS_LINE2)
        el = compute_orbital_elements(position, velocity, _MU)
        mean_period_s = 86400.0 / 15.72125391
        assert el.period_s == pytest.approx(mean_period_s, rel=0.01)

    def test_custom_unit(self):
        position_km, _ = state_from_tle(ISS_LINE1, ISS_LINE2, km_per_unit=1.0)
        position, _ = state_from_tle(ISS_LINE1, ISS_LINE2)
        np.testing.assert_allclose(position_km, position * 10.0, rtol=1e-15)

    def test_trailing_newline_accepted(self):
        position, _ = state_from_tle(ISS_LINE1 + "\n", ISS_LINE2 + "\r\n")
        assert math.isfinite(float(np.linalg.norm(position)))


class TestMalformedTle:

    def test_short_line(self):
        with pytest.raises(ValueError, match="at least 69 characters"):
            state_from_tle(ISS_LINE1, ISS_LINE2[:60])

    def test_swapped_lines(self):
        with pytest.raises(ValueError, match="must start with '1'"):
            state_from_tle(ISS_LINE2, ISS_LINE1)

    def test_non_string_line(self):
        with pytest.raises(ValueError, match="must be a string"):
            state_from_tle(ISS_LINE1, None)

    def test_non_numeric_inclination(self):
        bad = ISS_LINE2[:9] + "51.64x6" + ISS_LINE2[16:]
        with pytest.raises(ValueError, match="inclination"):
            state_from_tle(ISS_LINE1, bad)

    def test_non_numeric_eccentricity(self):
        bad = ISS_LINE2[:26] + "00-6703" + ISS_LINE2[33:]
        with pytest.raises(ValueError, match="eccentricity"):
            state_from_tle(ISS_LINE1, bad)

    def test_non_numeric_epoch(self):
        bad = ISS_LINE1[:18] + "08264.5178abcd" + ISS_LINE1[32:]
        with pytest.raises(ValueError, match="epoch"):
            state_from_tle(bad, ISS_LINE2)

    def test_zero_mean_motion(self):
        bad = ISS_LINE2[:52] + " 0.00000000" + ISS_LINE2[63:]
        with pytest.raises(ValueError, match="mean motion"):
            state_from_tle(ISS_LINE1, bad)
