"""
Amplitude module: per-event cache and the fit-facing K-matrix amplitude.

- KMatrixAmplitude: precalculate / calculate / parameters for one family
- kmatrix_f0, kmatrix_f2, kmatrix_a0, kmatrix_a2, kmatrix_pi1: factories
- resonance_amplitude: factory by family name
- KMatrixCache: per-event arena of ikc_inv rows and P-vector constants
"""

from pwa_kmatrix.amplitude.cache import KMatrixCache
from pwa_kmatrix.amplitude.kmatrix_amplitude import (
    KMatrixAmplitude,
    betas_from_parameters,
    kmatrix_f0,
    kmatrix_f2,
    kmatrix_a0,
    kmatrix_a2,
    kmatrix_pi1,
    resonance_amplitude,
)

__all__ = [
    "KMatrixCache",
    "KMatrixAmplitude",
    "betas_from_parameters",
    "kmatrix_f0",
    "kmatrix_f2",
    "kmatrix_a0",
    "kmatrix_a2",
    "kmatrix_pi1",
    "resonance_amplitude",
]
