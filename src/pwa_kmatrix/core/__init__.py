"""
Core module for the K-matrix engine.

Contains physical constants, runtime configuration loaded from
constants.json, and the parameter dataclasses that fix a K-matrix.
"""

from pwa_kmatrix.core.constants import (
    HBARC,
    N_WORKERS,
    CHUNK_SIZE,
    SUPPORTED_L,
    PION_NEUTRAL_MASS_GEV,
    KAON_CHARGED_MASS_GEV,
    KAON_NEUTRAL_MASS_GEV,
    ETA_MASS_GEV,
    ETA_PRIME_MASS_GEV,
    TWO_PION_MASS_GEV,
)
from pwa_kmatrix.core.parameters import (
    PhysicalChannel,
    AdlerZero,
    KMatrixParameters,
)

__all__ = [
    # Constants
    "HBARC",
    "N_WORKERS",
    "CHUNK_SIZE",
    "SUPPORTED_L",
    "PION_NEUTRAL_MASS_GEV",
    "KAON_CHARGED_MASS_GEV",
    "KAON_NEUTRAL_MASS_GEV",
    "ETA_MASS_GEV",
    "ETA_PRIME_MASS_GEV",
    "TWO_PION_MASS_GEV",
    # Parameters
    "PhysicalChannel",
    "AdlerZero",
    "KMatrixParameters",
]
