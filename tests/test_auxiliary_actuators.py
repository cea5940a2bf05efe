"""
Tests for light dimmer and laser toggle state.
"""
import pytest
import numpy as np
from rov_teleop.auxiliary_actuators import LightDimmer, ToggleLatch, LASER_OFF, LASER_ON


class TestLightDimmer:
    """Test light level accumulation."""

    @pytest.fixture
    def dimmer(self):
        """Create dimmer with the default (inverted) rate."""
        return LightDimmer(rate=-0.1)

    def test_default_initialization(self):
        """Test LightDimmer initializes dark."""
        dimmer = LightDimmer()
        assert dimmer.level == 0.0
        assert dimmer.rate == -0.1

    def test_invalid_initial_level(self):
        """Test that levels outside [0, 1] raise errors."""
        with pytest.raises(ValueError):
            LightDimmer(level=1.5)
        with pytest.raises(ValueError):
            LightDimmer(level=-0.1)

    def test_single_step(self, dimmer):
        """Test one step of brightening."""
        assert np.isclose(dimmer.update(-1.0), 0.1)
        assert np.isclose(dimmer.level, 0.1)

    def test_no_change_returns_none(self, dimmer):
        """Test centered axis reports nothing."""
        assert dimmer.update(0.0) is None
        assert dimmer.level == 0.0

    def test_dimming_below_zero(self, dimmer):
        """Test dimming at zero stays at zero and reports nothing."""
        assert dimmer.update(1.0) is None
        assert dimmer.level == 0.0

    def test_saturates_at_one(self, dimmer):
        """Test repeated brightening saturates exactly at 1."""
        changes = [dimmer.update(-1.0) for _ in range(50)]

        assert dimmer.level == 1.0
        assert max(c for c in changes if c is not None) == 1.0
        # Once saturated, no further updates are reported
        assert changes[-1] is None

    def test_saturates_at_zero(self):
        """Test repeated dimming saturates exactly at 0."""
        dimmer = LightDimmer(rate=-0.1, level=1.0)
        for _ in range(50):
            dimmer.update(1.0)
            assert 0.0 <= dimmer.level <= 1.0
        assert dimmer.level == 0.0

    def test_bounds_for_random_sequence(self, dimmer):
        """Test level never leaves [0, 1]."""
        rng = np.random.default_rng(1)
        for axis in rng.uniform(-1.0, 1.0, size=1000):
            dimmer.update(axis)
            assert 0.0 <= dimmer.level <= 1.0


class TestToggleLatch:
    """Test laser toggle edge detection."""

    @pytest.fixture
    def latch(self):
        """Create latch for testing."""
        return ToggleLatch()

    def test_initially_off(self, latch):
        """Test latch starts off."""
        assert latch.state == LASER_OFF == 0

    def test_invalid_state(self):
        """Test that unknown states raise errors."""
        with pytest.raises(ValueError):
            ToggleLatch(state=1)

    def test_press_toggles_on(self, latch):
        """Test a press switches the laser on."""
        assert latch.update(True) == LASER_ON == 255
        assert latch.state == LASER_ON

    def test_press_release_press(self, latch):
        """Test two separate presses toggle twice."""
        assert latch.update(1) == LASER_ON
        assert latch.update(0) is None
        assert latch.update(1) == LASER_OFF
        assert latch.state == LASER_OFF

    def test_held_button(self, latch):
        """Test a held button toggles exactly once."""
        results = [latch.update(True) for _ in range(10)]

        assert results[0] == LASER_ON
        assert all(r is None for r in results[1:])
        assert latch.state == LASER_ON

    def test_released_button(self, latch):
        """Test a released button never toggles."""
        for _ in range(5):
            assert latch.update(False) is None
        assert latch.state == LASER_OFF
