"""
Tests for breakup momentum and Blatt-Weisskopf barrier factors.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from pwa_kmatrix.core.constants import HBARC
from pwa_kmatrix.dynamics.barrier import (
    breakup_momentum,
    blatt_weisskopf,
    blatt_weisskopf_s,
    barrier_factor,
    barrier_matrix,
)
from pwa_kmatrix.kmatrix.resonances import RESONANCE_TABLES


class TestBreakupMomentum:
    """Test the two-body breakup momentum."""

    def test_massless_daughters(self):
        """For massless daughters q = m0/2."""
        assert_allclose(breakup_momentum(2.0, 0.0, 0.0), 1.0)

    def test_equal_masses(self):
        """For equal masses q = sqrt(m0²/4 - m²)."""
        m0, m = 1.0, 0.3
        assert_allclose(breakup_momentum(m0, m, m), np.sqrt(m0**2 / 4 - m**2), rtol=1e-14)

    def test_zero_at_threshold(self):
        """q vanishes exactly at threshold."""
        assert_allclose(breakup_momentum(1.0, 0.4, 0.6), 0.0, atol=1e-7)

    def test_below_threshold_is_real(self):
        """Below threshold the absolute value keeps q real and finite."""
        m0, m1, m2 = 0.5, 0.4, 0.6
        q = breakup_momentum(m0, m1, m2)

        kallen = m0**4 + m1**4 + m2**4 - 2 * (m0**2 * m1**2 + m0**2 * m2**2 + m1**2 * m2**2)
        assert kallen < 0
        assert np.isfinite(q)
        assert q > 0
        assert_allclose(q, np.sqrt(-kallen) / (2 * m0), rtol=1e-14)

    def test_array_evaluation(self):
        """Breakup momentum broadcasts over arrays."""
        m0 = np.array([1.0, 2.0, 3.0])
        q = breakup_momentum(m0, 0.0, 0.0)
        assert_allclose(q, m0 / 2)


class TestBlattWeisskopf:
    """Test the real barrier factor."""

    @pytest.mark.parametrize("m0", [0.1, 0.5, 1.0, 1.5, 3.0])
    def test_l0_is_one(self, m0):
        """L = 0 is identically 1."""
        assert blatt_weisskopf(m0, 0.13498, 0.54786, 0) == 1.0

    @pytest.mark.parametrize("l", [0, 1, 2, 3, 4])
    def test_finite_for_all_supported_l(self, l):
        """No supported L divides by zero for any s > 0, above or below threshold."""
        m0 = np.sqrt(np.linspace(1e-3, 10.0, 2001))
        with np.errstate(divide="raise", invalid="raise"):
            values = blatt_weisskopf(m0, 0.13498, 0.54786, l)
        assert np.all(np.isfinite(values))

    def test_l1_closed_form(self):
        """L = 1 matches sqrt(2z / (z + 1))."""
        m0, m1, m2 = 1.3, 0.13498, 0.54786
        q = breakup_momentum(m0, m1, m2)
        z = q**2 / HBARC**2
        assert_allclose(blatt_weisskopf(m0, m1, m2, 1), np.sqrt(2 * z / (z + 1)), rtol=1e-14)

    def test_l2_closed_form(self):
        """L = 2 matches sqrt(13z² / ((z - 3)² + 9z))."""
        m0, m1, m2 = 1.3, 0.13498, 0.54786
        q = breakup_momentum(m0, m1, m2)
        z = q**2 / HBARC**2
        expected = np.sqrt(13 * z**2 / ((z - 3)**2 + 9 * z))
        assert_allclose(blatt_weisskopf(m0, m1, m2, 2), expected, rtol=1e-14)

    def test_l4_closed_form(self):
        """L = 4 divides by the full (z² - 45z + 105)² + 25z(2z - 21)²."""
        m0, m1, m2 = 2.1, 0.13498, 0.54786
        q = breakup_momentum(m0, m1, m2)
        z = q**2 / HBARC**2
        denominator = (z**2 - 45 * z + 105) ** 2 + 25 * z * (2 * z - 21) ** 2
        expected = np.sqrt(12746 * z**4 / denominator)
        assert_allclose(blatt_weisskopf(m0, m1, m2, 4), expected, rtol=1e-12)
        assert expected <= np.sqrt(12746 * z**4 / (z**2 - 45 * z + 105) ** 2)

    @pytest.mark.parametrize("l", [1, 2, 3, 4])
    def test_high_momentum_limit(self, l):
        """Barrier factors grow with breakup momentum."""
        low = blatt_weisskopf(5.0, 0.1, 0.1, l)
        high = blatt_weisskopf(50.0, 0.1, 0.1, l)
        assert high >= low * 0.99

    @pytest.mark.parametrize("l", [5, -1, 10])
    def test_unsupported_l_raises(self, l):
        """Only L = 0..4 have closed forms."""
        with pytest.raises(ValueError):
            blatt_weisskopf(1.0, 0.13498, 0.13498, l)
        with pytest.raises(ValueError):
            blatt_weisskopf_s(1.0, 0.13498, 0.13498, l)


class TestBarrierFactor:
    """Test the pole-normalised complex barrier factor."""

    @pytest.mark.parametrize("l", [0, 1, 2, 3, 4])
    def test_unity_at_pole(self, l):
        """B(mr²)/B(mr²) is exactly 1."""
        mr = 1.31
        value = barrier_factor(mr * mr, 0.13498, 0.54786, mr, l)
        assert value == 1.0

    @pytest.mark.parametrize("name", sorted(RESONANCE_TABLES))
    def test_unity_at_every_pole_of_every_table(self, name):
        """Every channel/pole pair of every table is exactly 1 at its own pole."""
        params = RESONANCE_TABLES[name].parameters
        for mr in params.pole_masses:
            for m1, m2 in zip(params.m1s, params.m2s):
                assert barrier_factor(mr * mr, m1, m2, mr, params.l) == 1.0

    def test_l0_matrix_is_ones(self):
        """For L = 0 every entry of the barrier matrix is 1."""
        bf = barrier_matrix(
            0.8, np.array([0.13498, 0.49368]), np.array([0.54786, 0.49761]),
            np.array([0.95395, 1.26767]), 0,
        )
        assert bf.shape == (2, 2)
        assert_allclose(bf, np.ones((2, 2)))

    def test_matrix_shape_and_entries(self):
        """barrier_matrix[i, a] equals barrier_factor(s, m1_i, m2_i, mr_a)."""
        m1s = np.array([0.13498, 0.49368, 0.13498])
        m2s = np.array([0.54786, 0.49761, 0.95778])
        mrs = np.array([1.30080, 1.75351])
        s = 2.1
        bf = barrier_matrix(s, m1s, m2s, mrs, 2)

        assert bf.shape == (3, 2)
        for i in range(3):
            for a in range(2):
                assert_allclose(bf[i, a], barrier_factor(s, m1s[i], m2s[i], mrs[a], 2), rtol=1e-14)

    def test_below_threshold_is_defined(self):
        """Below threshold the complex barrier factor is finite."""
        with np.errstate(divide="raise", invalid="raise"):
            value = barrier_factor(0.3, 0.13498, 0.54786, 1.38552, 1)
        assert np.isfinite(value)
