"""
Pytest configuration for the PWA K-matrix test suite.
"""

import pytest
import sys
from pathlib import Path

import numpy as np

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from pwa_kmatrix.core.parameters import KMatrixParameters
from pwa_kmatrix.kinematics.event import Dataset


def pytest_configure(config):
    """Called after command line options have been parsed."""
    # Add markers for test organization
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


@pytest.fixture
def isovector_scalar_parameters():
    """Isovector scalar (a0) tables, spelled out independently of the library tables."""
    return KMatrixParameters.from_masses(
        g=[[0.43215, 0.19000], [-0.28825, 0.43372]],
        c=[[0.0, 0.0], [0.0, 0.0]],
        m1s=[0.13498, 0.49368],
        m2s=[0.54786, 0.49761],
        pole_masses=[0.95395, 1.26767],
        l=0,
    )


@pytest.fixture
def random_s_values():
    """Reproducible s values spanning below, between and above the thresholds."""
    rng = np.random.default_rng(20240611)
    return rng.uniform(0.05, 4.0, size=25)


@pytest.fixture
def scan_dataset():
    """A small dataset with s values on both sides of the K Kbar threshold."""
    return Dataset.from_invariant_masses(
        [0.25, 0.64, 0.81, 0.9801, 1.0, 1.21, 1.69, 2.25, 3.24]
    )
