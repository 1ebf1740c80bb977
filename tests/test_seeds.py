"""
Tests for initial condition generators and system descriptions.
"""

import numpy as np
import pytest

from attractors.seeds import (
    LORENZ_SPREAD, THREE_BODY_CONFIGURATIONS, generate_lorenz, generate_three_body,
    three_body_state,
)
from attractors.systems import LORENZ, THREE_BODY, SystemKind, get_system


class TestLorenzSeeds:

    def test_range(self):
        """Seeds are uniform in [-25, 25]^3."""
        seeds = np.array([generate_lorenz() for _ in range(500)])
        assert seeds.shape == (500, 3)
        assert np.all(np.abs(seeds) <= LORENZ_SPREAD)
        assert seeds.std(axis=0).min() > 5.0, "Seeds should spread across the cube"


class TestThreeBodySeeds:

    def test_library(self):
        assert set(THREE_BODY_CONFIGURATIONS) == {
            "figure_eight", "lagrange_triangle", "broucke_henon",
            "figure_eight_variant", "linear", "triangle_rotating",
        }

    def test_state_layout(self):
        """Each body block is x, y, z, vx, vy, vz."""
        state = three_body_state("figure_eight")
        assert state.shape == (18,)
        np.testing.assert_array_equal(state[0:3], [-0.97000436, 0.24308753, 0.0])
        np.testing.assert_array_equal(state[3:6], [0.4662036850, 0.4323657300, 0.0])

    @pytest.mark.parametrize("name", sorted(THREE_BODY_CONFIGURATIONS))
    def test_perturbation_bounds(self, name):
        """Every component is scaled by a factor within +/-5%."""
        base = three_body_state(name)
        for _ in range(20):
            seed = generate_three_body(name)
            nonzero = base != 0
            ratio = seed[nonzero] / base[nonzero]
            assert np.all(ratio >= 0.95) and np.all(ratio <= 1.05)
            np.testing.assert_array_equal(seed[~nonzero], 0.0)

    def test_components_vary_independently(self):
        base = three_body_state("figure_eight")
        seed = generate_three_body("figure_eight")
        ratio = seed[base != 0] / base[base != 0]
        assert len(np.unique(np.round(ratio, 12))) > 1

    def test_random_configuration(self):
        seed = generate_three_body()
        assert seed.shape == (18,)
        assert np.all(np.isfinite(seed))


class TestSystems:

    def test_lookup(self):
        assert get_system("lorenz") is LORENZ
        assert get_system("three_body") is THREE_BODY
        assert get_system("ThreeBody") is THREE_BODY
        assert THREE_BODY.kind is SystemKind.THREE_BODY

    def test_unknown_system(self):
        with pytest.raises(ValueError):
            get_system("rossler")

    def test_three_body_positions(self):
        """Slot t * 3 + b holds body b of trajectory t."""
        states = np.arange(36, dtype=np.float64).reshape(2, 18)
        positions = THREE_BODY.positions(states, 2)

        assert positions.shape == (6, 3)
        np.testing.assert_array_equal(positions[0], [0, 1, 2])
        np.testing.assert_array_equal(positions[2], [12, 13, 14])
        np.testing.assert_array_equal(positions[4], [24, 25, 26])

    def test_lorenz_positions(self):
        states = np.random.uniform(size=(4, 3))
        np.testing.assert_array_equal(LORENZ.positions(states, 3), states[:3])
