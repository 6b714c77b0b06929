"""
Dynamics module: barrier factors and two-body phase space.

Pure functions, vectorised over numpy arrays:
- breakup_momentum, blatt_weisskopf: real barrier factor of a decay m0 -> m1 m2
- blatt_weisskopf_s, barrier_factor, barrier_matrix: complex barrier factors
  at invariant mass squared s, normalised to the pole masses
- chi_plus, chi_minus, rho, chew_mandelstam, chew_mandelstam_matrix:
  analytic phase space valid above and below threshold
"""

from pwa_kmatrix.dynamics.barrier import (
    breakup_momentum,
    blatt_weisskopf,
    blatt_weisskopf_s,
    barrier_factor,
    barrier_matrix,
)
from pwa_kmatrix.dynamics.phase_space import (
    chi_plus,
    chi_minus,
    rho,
    chew_mandelstam,
    chew_mandelstam_matrix,
)

__all__ = [
    "breakup_momentum",
    "blatt_weisskopf",
    "blatt_weisskopf_s",
    "barrier_factor",
    "barrier_matrix",
    "chi_plus",
    "chi_minus",
    "rho",
    "chew_mandelstam",
    "chew_mandelstam_matrix",
]
