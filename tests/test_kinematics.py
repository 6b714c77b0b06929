"""
Tests for four-momenta, events and datasets.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from pwa_kmatrix.kinematics.event import FourMomentum, Event, Dataset


class TestFourMomentum:
    """Test four-momentum arithmetic."""

    def test_at_rest(self):
        p = FourMomentum.at_rest(0.13498)
        assert_allclose(p.m, 0.13498)
        assert p.px == p.py == p.pz == 0.0

    def test_addition(self):
        p = FourMomentum(1.0, 0.1, 0.2, 0.3) + FourMomentum(2.0, -0.1, 0.0, 0.5)
        assert_allclose([p.e, p.px, p.py, p.pz], [3.0, 0.0, 0.2, 0.8])

    def test_invariant_mass(self):
        p = FourMomentum(5.0, 3.0, 0.0, 0.0)
        assert p.m2 == 16.0
        assert p.m == 4.0

    def test_spacelike_mass_is_negative(self):
        p = FourMomentum(1.0, 2.0, 0.0, 0.0)
        assert p.m < 0


class TestEvent:
    """Test per-event kinematics."""

    def test_resonance_m2_uses_first_two_daughters(self):
        event = Event(
            index=0,
            daughter_p4s=[
                FourMomentum(1.0, 0.0, 0.0, 0.5),
                FourMomentum(1.0, 0.0, 0.0, -0.5),
                FourMomentum(10.0, 3.0, 0.0, 0.0),
            ],
        )
        assert_allclose(event.resonance_m2(), 4.0)

    def test_invariant_under_boost(self):
        """s does not depend on the frame."""
        m1, m2, q = 0.13498, 0.54786, 0.3
        e1, e2 = np.sqrt(m1**2 + q**2), np.sqrt(m2**2 + q**2)
        rest = Event(0, [FourMomentum(e1, 0, 0, q), FourMomentum(e2, 0, 0, -q)])

        beta = 0.6
        gamma = 1 / np.sqrt(1 - beta**2)

        def boost(p):
            return FourMomentum(gamma * (p.e + beta * p.pz), p.px, p.py, gamma * (p.pz + beta * p.e))

        moving = Event(0, [boost(p) for p in rest.daughter_p4s])
        assert_allclose(moving.resonance_m2(), rest.resonance_m2(), rtol=1e-12)

    def test_too_few_daughters_raises(self):
        with pytest.raises(ValueError, match="need at least 2"):
            Event(index=4, daughter_p4s=[FourMomentum(1.0)]).resonance_m2()


class TestDataset:
    """Test dataset construction and indexing."""

    def test_dense_indices_required(self):
        events = [Event(0, [FourMomentum(1.0), FourMomentum(0.0)]),
                  Event(2, [FourMomentum(1.0), FourMomentum(0.0)])]
        with pytest.raises(ValueError, match="dense"):
            Dataset(events)

    def test_from_invariant_masses(self):
        s_values = [0.25, 1.0, 4.0]
        dataset = Dataset.from_invariant_masses(s_values)
        assert len(dataset) == 3
        assert [event.index for event in dataset] == [0, 1, 2]
        assert_allclose(dataset.resonance_m2(), s_values, rtol=1e-15)

    def test_negative_s_raises(self):
        with pytest.raises(ValueError):
            Dataset.from_invariant_masses([1.0, -0.5])

    def test_from_daughter_momenta(self):
        momenta = np.zeros((2, 3, 4))
        momenta[:, 0, 0] = [1.0, 2.0]
        momenta[:, 1, 0] = [1.0, 1.0]
        momenta[:, 2, 0] = 7.0
        dataset = Dataset.from_daughter_momenta(momenta, weights=[0.5, 2.0])

        assert len(dataset) == 2
        assert len(dataset[0].daughter_p4s) == 3
        assert_allclose(dataset.resonance_m2(), [4.0, 9.0])
        assert_allclose(dataset.weights, [0.5, 2.0])

    def test_default_weights(self):
        dataset = Dataset.from_daughter_momenta(np.ones((3, 2, 4)))
        assert_allclose(dataset.weights, np.ones(3))

    def test_bad_momentum_shape_raises(self):
        with pytest.raises(ValueError, match="shape"):
            Dataset.from_daughter_momenta(np.ones((3, 2, 3)))

    def test_weight_count_mismatch_raises(self):
        with pytest.raises(ValueError, match="weights"):
            Dataset.from_daughter_momenta(np.ones((3, 2, 4)), weights=[1.0])

    def test_getitem_and_iter(self, scan_dataset):
        assert scan_dataset[4].index == 4
        assert sum(1 for _ in scan_dataset) == len(scan_dataset)
