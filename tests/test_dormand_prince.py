# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the fixed-step Dormand-Prince kernel."""
import math

import numpy as np
import pytest

from orbit_kernel.domain.bodies import Attractors, PropagatedState
from orbit_kernel.domain.config import KernelConfig
from orbit_kernel.domain.constants import SimulationConstants
from orbit_kernel.domain.dormand_prince import (
    DORMAND_PRINCE_A,
    DORMAND_PRINCE_B4,
    DORMAND_PRINCE_B5,
    DORMAND_PRINCE_C,
    build_force_models,
    dormand_prince_step,
    step,
)
from orbit_kernel.domain.forces import ForceModel, PointMassGravity

_EARTH_MASS = SimulationConstants.PRIMARY_MASS
_MU = SimulationConstants.G * _EARTH_MASS


# --- Helpers ---

def _earth(at=(0.0, 0.0, 0.0)):
    return Attractors(positions=np.array([at]), masses=np.array([_EARTH_MASS]))


def _circular_state(r, mass=1000.0, offset=(0.0, 0.0, 0.0)):
    v = math.sqrt(_MU / r)
    off = np.asarray(offset, dtype=np.float64)
    return PropagatedState(
        position=np.array([r, 0.0, 0.0]) + off,
        velocity=np.array([0.0, v, 0.0]),
        mass=mass,
    )


def _period(r):
    return 2.0 * math.pi * math.sqrt(r**3 / _MU)


def _energy(state):
    r = float(np.linalg.norm(state.position))
    return 0.5 * float(np.dot(state.velocity, state.velocity)) - _MU / r


def _dp_with_substeps(state, h, attractors, substeps):
    s = state.copy()
    for _ in range(substeps):
        step(s, h / substeps, attractors)
    return s


# --- Butcher tableau ---

class TestTableau:

    def test_stage_count(self):
        assert len(DORMAND_PRINCE_A) == 7
        assert len(DORMAND_PRINCE_C) == 7
        assert len(DORMAND_PRINCE_B5) == 7
        assert len(DORMAND_PRINCE_B4) == 7

    def test_lower_triangular(self):
        for i, row in enumerate(DORMAND_PRINCE_A):
            assert len(row) == i

    def test_row_sums_match_nodes(self):
        for row, c in zip(DORMAND_PRINCE_A, DORMAND_PRINCE_C):
            assert sum(row) == pytest.approx(c, abs=1e-14)

    def test_b5_sum(self):
        assert abs(sum(DORMAND_PRINCE_B5) - 1.0) < 1e-14

    def test_b4_sum(self):
        assert abs(sum(DORMAND_PRINCE_B4) - 1.0) < 1e-14

    def test_last_row_is_fifth_order_weights(self):
        assert DORMAND_PRINCE_A[-1] == DORMAND_PRINCE_B5[:6]

    def test_canonical_values(self):
        assert DORMAND_PRINCE_A[4] == (
            19372.0 / 6561.0, -25360.0 / 2187.0, 64448.0 / 6561.0, -212.0 / 729.0,
        )
        assert DORMAND_PRINCE_B5[2] == 500.0 / 1113.0
        assert DORMAND_PRINCE_B4[6] == 1.0 / 40.0

    def test_fifth_order_conditions(self):
        # sum b_i c_i^k = 1 / (k + 1) for k = 0..4
        for k in range(5):
            total = sum(b * c**k for b, c in zip(DORMAND_PRINCE_B5, DORMAND_PRINCE_C))
            assert total == pytest.approx(1.0 / (k + 1), abs=1e-14)


# --- Free motion ---

class TestInertialMotion:

    def test_no_forces_is_straight_line(self):
        state = PropagatedState([1.0, 2.0, 3.0], [0.5, -0.25, 0.125], 10.0)
        step(state, 4.0, Attractors.empty())
        np.testing.assert_allclose(state.position, [3.0, 1.0, 3.5], rtol=1e-14)
        np.testing.assert_allclose(state.velocity, [0.5, -0.25, 0.125], rtol=1e-14)

    def test_drag_needs_a_primary(self):
        state = PropagatedState([1.0, 2.0, 3.0], [0.5, -0.25, 0.125], 10.0)
        step(state, 4.0, Attractors.empty(), drag_coefficient=2.2, area_m2=10.0)
        np.testing.assert_allclose(state.position, [3.0, 1.0, 3.5], rtol=1e-14)

    def test_constant_thrust_is_exact_quadratic(self):
        mass = 50.0
        impulse = np.array([5.0, 0.0, -10.0])
        accel = impulse / mass
        state = PropagatedState([0.0, 0.0, 0.0], [1.0, 0.0, 0.0], mass)
        dt = 2.0
        step(state, dt, Attractors.empty(), impulse)
        np.testing.assert_allclose(
            state.position, np.array([1.0, 0.0, 0.0]) * dt + 0.5 * accel * dt**2, rtol=1e-13,
        )
        np.testing.assert_allclose(
            state.velocity, np.array([1.0, 0.0, 0.0]) + accel * dt, rtol=1e-13,
        )


class TestMasslessGuard:

    def test_tiny_mass_is_noop(self):
        state = PropagatedState([700.0, 0.0, 0.0], [0.0, 0.75, 0.0], 1e-7)
        step(state, 10.0, _earth(), np.array([1.0, 1.0, 1.0]))
        np.testing.assert_array_equal(state.position, [700.0, 0.0, 0.0])
        np.testing.assert_array_equal(state.velocity, [0.0, 0.75, 0.0])

    def test_threshold_is_inclusive(self):
        state = PropagatedState([700.0, 0.0, 0.0], [0.0, 0.75, 0.0], 1e-6)
        step(state, 10.0, _earth())
        np.testing.assert_array_equal(state.position, [700.0, 0.0, 0.0])

    def test_configurable_threshold(self):
        state = PropagatedState([700.0, 0.0, 0.0], [0.0, 0.75, 0.0], 5.0)
        step(state, 10.0, _earth(), config=KernelConfig(min_mass=10.0))
        np.testing.assert_array_equal(state.position, [700.0, 0.0, 0.0])


# --- Two-body accuracy ---

class TestTwoBody:

    def test_orbit_closure(self):
        r = 700.0
        state = _circular_state(r)
        start = state.position.copy()
        n = 360
        dt = _period(r) / n
        earth = _earth()
        for _ in range(n):
            step(state, dt, earth)
        assert float(np.linalg.norm(state.position - start)) < 1e-6 * r

    def test_energy_conserved_over_orbit(self):
        r = 700.0
        state = _circular_state(r)
        e0 = _energy(state)
        n = 200
        dt = _period(r) / n
        earth = _earth()
        for _ in range(n):
            step(state, dt, earth)
        assert abs(_energy(state) - e0) / abs(e0) < 1e-9

    def test_fifth_order_local_error(self):
        """Doubling the step multiplies the one-step error by about 2^6."""
        r = 700.0
        earth = _earth()
        errors = []
        for h in (30.0, 60.0):
            state = _circular_state(r)
            reference = _dp_with_substeps(state, h, earth, 16)
            step(state, h, earth)
            errors.append(float(np.linalg.norm(state.position - reference.position)))
        ratio = errors[1] / errors[0]
        assert 48.0 < ratio < 82.0

    def test_matches_offset_primary(self):
        """Translating the primary and the body together changes nothing."""
        r = 660.0
        offset = (1234.5, -987.0, 55.0)
        here = _circular_state(r)
        there = _circular_state(r, offset=offset)
        step(here, 20.0, _earth(), drag_coefficient=2.2, area_m2=20.0)
        step(there, 20.0, _earth(offset), drag_coefficient=2.2, area_m2=20.0)
        np.testing.assert_allclose(there.position - np.array(offset), here.position, atol=1e-9)
        np.testing.assert_allclose(there.velocity, here.velocity, rtol=1e-9)


# --- Drag and thrust in the step ---

class TestPerturbations:

    def test_drag_slows_low_orbit(self):
        r = (SimulationConstants.PRIMARY_RADIUS_KM + 200.0) / SimulationConstants.KM_PER_UNIT
        free = _circular_state(r, mass=1.0)
        dragged = _circular_state(r, mass=1.0)
        earth = _earth()
        for _ in range(10):
            step(free, 10.0, earth)
            step(dragged, 10.0, earth, drag_coefficient=2.2, area_m2=10.0)
        assert _energy(dragged) < _energy(free)
        assert np.linalg.norm(dragged.velocity) < np.linalg.norm(free.velocity)

    def test_prograde_thrust_raises_energy(self):
        r = 700.0
        coasting = _circular_state(r)
        burning = _circular_state(r)
        earth = _earth()
        step(coasting, 10.0, earth)
        step(burning, 10.0, earth, np.array([0.0, 5.0, 0.0]))
        assert _energy(burning) > _energy(coasting)

    def test_mutates_in_place(self):
        state = _circular_state(700.0)
        pos_array = state.position
        vel_array = state.velocity
        step(state, 10.0, _earth())
        assert state.position is pos_array
        assert state.velocity is vel_array
        assert pos_array[1] > 0.0


class TestForceModels:

    def test_force_models_satisfy_protocol(self):
        state = _circular_state(700.0)
        models = build_force_models(state, _earth(), np.zeros(3), 2.2, 4.0)
        assert len(models) == 3
        for model in models:
            assert isinstance(model, ForceModel)

    def test_drag_omitted_without_area(self):
        state = _circular_state(700.0)
        models = build_force_models(state, _earth(), np.zeros(3), 2.2, 0.0)
        assert len(models) == 2

    def test_custom_force_models(self):
        state = _circular_state(700.0)
        reference = state.copy()
        dormand_prince_step(state, 15.0, [PointMassGravity(_earth())])
        step(reference, 15.0, _earth())
        np.testing.assert_allclose(state.position, reference.position, rtol=1e-15)
