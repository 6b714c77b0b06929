"""
PWA K-matrix - Coupled-channel resonance amplitudes for partial-wave analysis

Computes the dynamical part of resonance amplitudes for two-body hadronic
final states with multichannel K-matrices dressed with Blatt-Weisskopf
barrier factors and a Chew-Mandelstam phase space.

TWO-STAGE EVALUATION:
=====================
Stage 1 (once per dataset): precalculate() caches, per event, the row of
    (I + K·C)⁻¹ and the P-vector constants. Both depend only on s.
Stage 2 (per fit evaluation): calculate() combines the cache with the
    complex production couplings. Two small dot products.

Main Interface:
    from pwa_kmatrix import Dataset, kmatrix_a0

    a0 = kmatrix_a0(channel=0)        # output on pi eta
    a0.precalculate(dataset)
    print(a0.parameters())            # ['a0_980 re', 'a0_980 im', ...]
    value = a0.calculate([1.0, 0.0, 0.0, 0.0], dataset[0])

Components:
- KMatrixEngine: the generic K-matrix math for fixed tables
- ResonanceTable / F0_TABLE ... PI1_TABLE: literal resonance tables
- KMatrixAmplitude: per-event cache and fit-facing operations
- Dataset, Event, FourMomentum: minimal kinematics store
"""

from pwa_kmatrix.core import (
    HBARC,
    PhysicalChannel,
    AdlerZero,
    KMatrixParameters,
)

from pwa_kmatrix.dynamics import (
    breakup_momentum,
    blatt_weisskopf,
    barrier_factor,
    chew_mandelstam,
)

from pwa_kmatrix.kmatrix import (
    KMatrixEngine,
    ResonanceTable,
    F0_TABLE,
    F2_TABLE,
    A0_TABLE,
    A2_TABLE,
    PI1_TABLE,
    RESONANCE_TABLES,
    get_resonance_table,
)

from pwa_kmatrix.kinematics import FourMomentum, Event, Dataset

from pwa_kmatrix.amplitude import (
    KMatrixAmplitude,
    KMatrixCache,
    kmatrix_f0,
    kmatrix_f2,
    kmatrix_a0,
    kmatrix_a2,
    kmatrix_pi1,
    resonance_amplitude,
)

__version__ = "0.1.0"

__all__ = [
    # Constants and parameters
    "HBARC",
    "PhysicalChannel",
    "AdlerZero",
    "KMatrixParameters",
    # Primitives
    "breakup_momentum",
    "blatt_weisskopf",
    "barrier_factor",
    "chew_mandelstam",
    # Engine and tables
    "KMatrixEngine",
    "ResonanceTable",
    "F0_TABLE",
    "F2_TABLE",
    "A0_TABLE",
    "A2_TABLE",
    "PI1_TABLE",
    "RESONANCE_TABLES",
    "get_resonance_table",
    # Kinematics
    "FourMomentum",
    "Event",
    "Dataset",
    # Amplitudes (MAIN INTERFACE)
    "KMatrixAmplitude",
    "KMatrixCache",
    "kmatrix_f0",
    "kmatrix_f2",
    "kmatrix_a0",
    "kmatrix_a2",
    "kmatrix_pi1",
    "resonance_amplitude",
]
