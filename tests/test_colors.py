"""
Tests for static palettes and distance-based trail colors.
"""

import numpy as np
import pytest

from attractors.colors import (
    DEFAULT_PALETTE, ColorAssigner, interpolate, nearest_center_distances, normalize_distances,
)


PURPLE = (0.658, 0.376, 0.718)
BLUE = (0.110, 0.420, 0.627)


def make_assigner(slots=4, **kwargs):
    assigner = ColorAssigner(**kwargs)
    storage = np.zeros((slots, 3), dtype=np.float32)
    assigner.fill_static(storage)
    assigner.adopt_storage(storage)
    return assigner


class TestInterpolate:
    """Linear blend with clamped t."""

    def test_boundaries(self):
        np.testing.assert_allclose(interpolate(PURPLE, BLUE, 0.0), PURPLE)
        np.testing.assert_allclose(interpolate(PURPLE, BLUE, 1.0), BLUE)

    def test_clamped(self):
        np.testing.assert_allclose(interpolate(PURPLE, BLUE, -3.0), PURPLE)
        np.testing.assert_allclose(interpolate(PURPLE, BLUE, 7.0), BLUE)

    def test_midpoint_vectorised(self):
        result = interpolate((0, 0, 0), (1, 1, 1), np.array([0.25, 0.5]))
        np.testing.assert_allclose(result, [[0.25] * 3, [0.5] * 3])


class TestDistances:
    """Nearest-center distance and per-frame normalisation."""

    def test_nearest_center(self):
        centers = np.array([[-8.0, -8.0, 27.0], [8.0, 8.0, 27.0]])
        positions = np.array([[8.0, 8.0, 30.0], [-8.0, -4.0, 27.0]])
        np.testing.assert_allclose(nearest_center_distances(positions, centers), [3.0, 4.0])

    def test_all_equal_normalises_to_zero(self):
        np.testing.assert_array_equal(normalize_distances(np.full(5, 2.5)), 0.0)

    def test_min_max(self):
        np.testing.assert_allclose(normalize_distances(np.array([1.0, 3.0, 2.0])), [0.0, 1.0, 0.5])


class TestColorAssigner:
    """Mode switching and per-slot colors."""

    def test_palette_wraps(self):
        assigner = make_assigner(slots=15)
        colors = assigner.colors
        np.testing.assert_allclose(colors[13], DEFAULT_PALETTE[0])
        np.testing.assert_allclose(colors[14], DEFAULT_PALETTE[1])

    def test_custom_palette(self):
        assigner = make_assigner(slots=3)
        assigner.set_palette([(1, 0, 0), (0, 1, 0)])

        assert assigner.mode == "custom"
        np.testing.assert_allclose(assigner.colors, [(1, 0, 0), (0, 1, 0), (1, 0, 0)])

    def test_empty_palette_rejected(self):
        assigner = make_assigner()
        with pytest.raises(ValueError):
            assigner.set_palette([])

    def test_distance_clears_custom_palette(self):
        assigner = make_assigner()
        assigner.set_palette([(1, 0, 0)])
        assigner.enable_distance(PURPLE, BLUE)

        assert assigner.mode == "distance"
        assert assigner.custom_palette is None

    def test_palette_leaves_distance_mode(self):
        assigner = make_assigner()
        assigner.enable_distance(PURPLE, BLUE)
        assigner.set_palette([(1, 0, 0)])

        assert not assigner.distance_enabled
        assert assigner.mode == "custom"

    def test_disable_reverts_to_builtin(self):
        assigner = make_assigner(slots=2)
        assigner.enable_distance(PURPLE, BLUE)
        assigner.update(np.array([[0.0, 0.0, 0.0], [1.0, 1.0, 1.0]]))
        assigner.disable_distance()

        assert assigner.mode == "palette"
        np.testing.assert_allclose(assigner.colors, DEFAULT_PALETTE[:2])

    def test_distance_endpoints(self):
        """Nearest slot gets color A, farthest color B."""
        assigner = make_assigner(slots=3, centers=[(0.0, 0.0, 0.0)])
        assigner.enable_distance(PURPLE, BLUE)
        assigner.take_dirty()

        positions = np.array([[0.0, 0.0, 0.0], [10.0, 0.0, 0.0], [5.0, 0.0, 0.0]])
        assert assigner.update(positions)
        assert assigner.take_dirty()

        colors = assigner.colors
        np.testing.assert_allclose(colors[0], PURPLE, atol=1e-6)
        np.testing.assert_allclose(colors[1], BLUE, atol=1e-6)
        np.testing.assert_allclose(colors[2], interpolate(PURPLE, BLUE, 0.5), atol=1e-6)

    def test_equal_distances_give_color_a(self):
        assigner = make_assigner(slots=2, centers=[(0.0, 0.0, 0.0)])
        assigner.enable_distance(PURPLE, BLUE)
        assigner.update(np.array([[3.0, 0.0, 0.0], [0.0, -3.0, 0.0]]))
        np.testing.assert_allclose(assigner.colors, [PURPLE, PURPLE], atol=1e-6)

    def test_update_ignored_in_static_mode(self):
        assigner = make_assigner(slots=2)
        assert not assigner.update(np.ones((2, 3)))
        np.testing.assert_allclose(assigner.colors, DEFAULT_PALETTE[:2])

    def test_set_centers_validates(self):
        assigner = make_assigner()
        with pytest.raises(ValueError):
            assigner.set_centers([(1.0, 2.0)])
