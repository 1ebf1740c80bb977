"""
Tests for packed parameters, oscillation and step-rate counting.
"""

import math

import numpy as np
import pytest

from attractors.oscillator import Oscillation, ParameterOscillator, Parameters
from attractors.timing import StepRateCounter
from config import lorenz as lorenz_config
from config import threebody as threebody_config


LORENZ_LAYOUT = (("sigma", 1), ("beta", 1), ("rho", 1))
THREE_BODY_LAYOUT = (("G", 1), ("masses", 3))


class TestParameters:
    """Named access to the packed parameter array."""

    def test_packing_order(self):
        """Values land in kernel order."""
        params = Parameters(LORENZ_LAYOUT, {"sigma": 10.0, "beta": 2.5, "rho": 28.0})
        np.testing.assert_array_equal(params.packed, [10.0, 2.5, 28.0])

    def test_vector_parameter(self):
        """Vector parameters read back as views of the packed array."""
        params = Parameters(THREE_BODY_LAYOUT, {"G": 1.0, "masses": (1.0, 2.0, 3.0)})
        params["masses"][1] = 5.0

        assert params["G"] == 1.0
        np.testing.assert_array_equal(params.packed, [1.0, 1.0, 5.0, 3.0])

    def test_set_visible_in_packed(self):
        params = Parameters(LORENZ_LAYOUT, lorenz_config.PARAMS)
        params["rho"] = 99.0
        assert params.packed[2] == 99.0
        assert "rho" in params
        assert "step_size" not in params

    def test_as_dict(self):
        params = Parameters(THREE_BODY_LAYOUT, threebody_config.PARAMS)
        assert params.as_dict() == {"G": 1.0, "masses": (1.0, 1.0, 1.0)}


class TestOscillation:
    """base + amplitude * sin(frequency * t)."""

    def test_value_at_zero_is_base(self):
        osc = Oscillation(base=10.0, amplitude=2.0, frequency=0.001)
        assert osc.value_at(0.0) == pytest.approx(10.0)

    def test_formula(self):
        osc = Oscillation(base=28.0, amplitude=5.0, frequency=0.0012)
        t = 1234.0
        assert osc.value_at(t) == pytest.approx(28.0 + 5.0 * math.sin(0.0012 * t))

    def test_elementwise_vector(self):
        osc = Oscillation(base=(1.0, 1.0), amplitude=(0.2, 0.4), frequency=(0.002, 0.001))
        value = osc.value_at(500.0)
        assert value[0] == pytest.approx(1.0 + 0.2 * math.sin(1.0))
        assert value[1] == pytest.approx(1.0 + 0.4 * math.sin(0.5))


class TestParameterOscillator:
    """Driving live parameters from the clock."""

    def test_apply_uses_elapsed_milliseconds(self, clock):
        """Half a second after start, sigma = 10 + 2 sin(0.001 * 500)."""
        params = Parameters(LORENZ_LAYOUT, lorenz_config.PARAMS)
        oscillator = ParameterOscillator.from_config(lorenz_config.OSCILLATION, clock=clock)

        clock.advance(0.5)
        assert oscillator.apply(params)

        assert params["sigma"] == pytest.approx(10.0 + 2.0 * math.sin(0.5))
        assert params["rho"] == pytest.approx(28.0 + 5.0 * math.sin(0.6))

    def test_disabled_keeps_last_value(self, clock):
        """While disabled the parameters keep whatever was last written."""
        params = Parameters(LORENZ_LAYOUT, lorenz_config.PARAMS)
        oscillator = ParameterOscillator.from_config(lorenz_config.OSCILLATION, clock=clock)

        clock.advance(1.0)
        oscillator.apply(params)
        last = params.packed.copy()

        oscillator.enabled = False
        clock.advance(3.0)
        assert not oscillator.apply(params)
        np.testing.assert_array_equal(params.packed, last)

    def test_config_enabled_flag(self, clock):
        oscillator = ParameterOscillator.from_config(threebody_config.OSCILLATION, clock=clock)
        assert not oscillator.enabled
        assert set(oscillator.oscillations) == {"G", "masses"}


class TestStepRateCounter:
    """Per-second bucketing of step calls."""

    def test_rate_rolls_over_on_new_second(self, clock):
        clock.now = 100.2
        counter = StepRateCounter(clock)

        for _ in range(3):
            counter.tick()
        assert counter.rate == 0
        assert counter.accum == 3

        clock.now = 101.1
        assert counter.tick() == 3
        assert counter.accum == 1

    def test_skipped_seconds(self, clock):
        """Jumping several seconds still reports the last bucket."""
        clock.now = 10.0
        counter = StepRateCounter(clock)
        counter.tick()
        counter.tick()

        clock.now = 15.5
        assert counter.tick() == 2
