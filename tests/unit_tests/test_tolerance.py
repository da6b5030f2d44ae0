"""Tests for the isotope position tolerance model."""

import pytest

from alphadeiso.constants import ISOTOPE_DISTANCE
from alphadeiso.features import (
    expected_isotope_mz,
    matches_isotope_position,
    within_mz_tolerance,
    within_rt_tolerance,
)


class TestExpectedIsotopeMz:
    """Test expected isotope positions."""

    def test_first_isotope_charge_1(self):
        assert expected_isotope_mz(500.0, 1, 1, 1) == pytest.approx(500.0 + ISOTOPE_DISTANCE)

    def test_spacing_scales_with_charge(self):
        """Spacing is ISOTOPE_DISTANCE / charge."""
        for charge in (1, 2, 3, 4):
            step = expected_isotope_mz(800.0, 1, 1, charge) - 800.0
            assert step == pytest.approx(ISOTOPE_DISTANCE / charge)

    def test_lower_direction(self):
        assert expected_isotope_mz(500.0, -1, 2, 2) == pytest.approx(500.0 - ISOTOPE_DISTANCE)

    def test_nth_isotope(self):
        assert expected_isotope_mz(500.0, 1, 3, 1) == pytest.approx(500.0 + 3 * ISOTOPE_DISTANCE)


class TestToleranceChecks:
    """Test m/z and RT tolerance boundaries."""

    def test_mz_tolerance_is_inclusive(self):
        assert within_mz_tolerance(1.5, 1.0, 0.5)
        assert within_mz_tolerance(0.5, 1.0, 0.5)

    def test_mz_outside_tolerance(self):
        assert not within_mz_tolerance(1.5, 1.0, 0.25)

    def test_rt_tolerance_is_strict(self):
        """A peak exactly at the RT tolerance does not co-elute."""
        assert not within_rt_tolerance(10.5, 10.0, 0.5)
        assert within_rt_tolerance(10.25, 10.0, 0.5)

    def test_zero_rt_tolerance_matches_nothing(self):
        assert not within_rt_tolerance(10.0, 10.0, 0.0)

    def test_matches_isotope_position(self):
        expected = 500.0 + ISOTOPE_DISTANCE
        assert matches_isotope_position(501.0035, 10.05, expected, 10.0, 0.001, 0.1)

    def test_position_rejected_by_mz(self):
        expected = 500.0 + ISOTOPE_DISTANCE
        assert not matches_isotope_position(501.02, 10.0, expected, 10.0, 0.01, 0.1)

    def test_position_rejected_by_rt(self):
        expected = 500.0 + ISOTOPE_DISTANCE
        assert not matches_isotope_position(501.0033, 10.2, expected, 10.0, 0.01, 0.1)
