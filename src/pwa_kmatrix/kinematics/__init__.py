"""
Kinematics module: four-momenta, events and datasets.
"""

from pwa_kmatrix.kinematics.event import FourMomentum, Event, Dataset

__all__ = [
    "FourMomentum",
    "Event",
    "Dataset",
]
