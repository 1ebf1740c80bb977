"""
Tests for the RK4 integrator and the system derivative kernels.
"""

import numpy as np
import pytest

from attractors.integrator import Integrator, lorenz_derivative, three_body_derivative
from attractors.seeds import three_body_state


LORENZ_PARAMS = np.array([10.0, 8.0 / 3.0, 28.0])
THREE_BODY_PARAMS = np.array([1.0, 1.0, 1.0, 1.0])


@pytest.fixture(scope="module")
def lorenz():
    return Integrator(lorenz_derivative, 3)


@pytest.fixture(scope="module")
def three_body():
    return Integrator(three_body_derivative, 18)


class TestLorenzStep:
    """Single and batched Lorenz steps."""

    def test_reference_step(self, lorenz):
        """One step from (1, 1, 1) at dt = 0.01 matches the hand-computed RK4 value."""
        state = np.array([1.0, 1.0, 1.0])
        lorenz.step(state, 0.01, LORENZ_PARAMS)

        expected = np.array([1.012567191073611, 1.259917798945274, 0.984890971791605])
        np.testing.assert_allclose(state, expected, rtol=0, atol=1e-9)

    def test_zero_dt_is_identity(self, lorenz):
        """dt = 0 leaves the state unchanged."""
        state = np.array([-3.2, 7.5, 20.1])
        before = state.copy()
        lorenz.step(state, 0.0, LORENZ_PARAMS)
        np.testing.assert_array_equal(state, before)

    def test_step_is_in_place(self, lorenz):
        """step() mutates and returns the same array."""
        state = np.array([1.0, 2.0, 3.0])
        result = lorenz.step(state, 0.002, LORENZ_PARAMS)
        assert result is state

    def test_step_all_matches_individual_steps(self, lorenz):
        """Batched stepping equals stepping each row separately."""
        states = np.random.uniform(-25, 25, (4, 3))
        expected = states.copy()
        for row in expected[:3]:
            lorenz.step(row, 0.002, LORENZ_PARAMS)

        lorenz.step_all(states, 3, 0.002, LORENZ_PARAMS)

        np.testing.assert_allclose(states[:3], expected[:3], rtol=0, atol=1e-14)
        np.testing.assert_array_equal(states[3], expected[3])

    def test_nan_propagates(self, lorenz):
        """Divergent input is carried through, not rejected."""
        state = np.array([np.nan, 1.0, 1.0])
        lorenz.step(state, 0.002, LORENZ_PARAMS)
        assert np.isnan(state).any()


class TestThreeBodyStep:
    """Softened gravity on the figure-eight orbit."""

    def test_figure_eight_moves_and_stays_bounded(self, three_body):
        """Six steps at dt = 0.008 move every body but keep it near the origin."""
        state = three_body_state("figure_eight")
        start = state.copy()

        for _ in range(6):
            three_body.step(state, 0.008, THREE_BODY_PARAMS)

        positions = state.reshape(3, 6)[:, :3]
        moved = np.linalg.norm(positions - start.reshape(3, 6)[:, :3], axis=1)

        assert np.all(np.isfinite(state))
        assert np.all(moved > 0.0), "Every body should move"
        assert np.all(np.abs(positions) < 2.0), "Bodies should stay bounded"

    def test_equal_masses_conserve_momentum(self, three_body):
        """Pairwise forces cancel, so total velocity is unchanged."""
        state = three_body_state("figure_eight")
        before = state.reshape(3, 6)[:, 3:].sum(axis=0)

        for _ in range(50):
            three_body.step(state, 0.008, THREE_BODY_PARAMS)

        after = state.reshape(3, 6)[:, 3:].sum(axis=0)
        np.testing.assert_allclose(after, before, atol=1e-9)

    def test_derivative_position_is_velocity(self):
        """The position block of the derivative is the velocity block of the state."""
        state = three_body_state("lagrange_triangle")
        out = np.zeros(18)
        three_body_derivative(state, THREE_BODY_PARAMS, out)

        blocks_state = state.reshape(3, 6)
        blocks_out = out.reshape(3, 6)
        np.testing.assert_array_equal(blocks_out[:, :3], blocks_state[:, 3:])

    def test_zero_dt_is_identity(self, three_body):
        state = three_body_state("broucke_henon")
        before = state.copy()
        three_body.step(state, 0.0, THREE_BODY_PARAMS)
        np.testing.assert_array_equal(state, before)
