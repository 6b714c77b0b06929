"""
Breakup momentum and Blatt-Weisskopf centrifugal barrier factors.

Two flavours of the barrier factor are provided:

- blatt_weisskopf(m0, m1, m2, l): real, from the breakup momentum q of a
  parent of mass m0, with z = q² / (hbar c)².
- blatt_weisskopf_s(s, m1, m2, l): complex, evaluated at invariant mass
  squared s with z = rho(s)² · s / (2 (hbar c)²). This is the form the
  K-matrix uses; below threshold rho² < 0 and the factor continues into the
  complex plane.

Both share the closed forms for L = 0..4. Any other L raises ValueError.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Union

from pwa_kmatrix.core.constants import HBARC, SUPPORTED_L
from pwa_kmatrix.dynamics.phase_space import rho

ArrayLike = Union[float, NDArray[np.floating]]


def breakup_momentum(m0: ArrayLike, m1: ArrayLike, m2: ArrayLike) -> ArrayLike:
    """
    Momentum of either decay product in the rest frame of the parent.

        q = sqrt(|m0⁴ + m1⁴ + m2⁴ - 2(m0²m1² + m0²m2² + m1²m2²)|) / (2 m0)

    The absolute value is taken before the square root: below threshold
    (m0 < m1 + m2) this returns a real, finite number instead of failing.

    Args:
        m0: Parent mass (GeV).
        m1, m2: Decay-product masses (GeV).

    Returns:
        Breakup momentum (GeV).
    """
    m0_sq = m0 * m0
    m1_sq = m1 * m1
    m2_sq = m2 * m2
    kallen = (
        m0_sq * m0_sq + m1_sq * m1_sq + m2_sq * m2_sq
        - 2.0 * (m0_sq * m1_sq + m0_sq * m2_sq + m1_sq * m2_sq)
    )
    return np.sqrt(np.abs(kallen)) / (2.0 * m0)


def _barrier_from_z(z, l: int):
    """
    Closed-form Blatt-Weisskopf factor as a function of z (real or complex).

    The L = 4 denominator is the full (z² - 45z + 105)² + 25z(2z - 21)².
    Some published code divides by the first square only and adds the second
    term afterwards; those L = 4 values differ from these.
    """
    if l == 0:
        return np.ones_like(z)
    if l == 1:
        return np.sqrt((2.0 * z) / (z + 1.0))
    if l == 2:
        return np.sqrt((13.0 * z * z) / ((z - 3.0) * (z - 3.0) + 9.0 * z))
    if l == 3:
        return np.sqrt(
            (277.0 * z * z * z)
            / (z * (z - 15.0) * (z - 15.0) + 9.0 * (2.0 * z - 5.0) * (2.0 * z - 5.0))
        )
    if l == 4:
        z_sq = z * z
        return np.sqrt(
            (12746.0 * z_sq * z_sq)
            / ((z_sq - 45.0 * z + 105.0) * (z_sq - 45.0 * z + 105.0)
               + 25.0 * z * (2.0 * z - 21.0) * (2.0 * z - 21.0))
        )
    raise ValueError(f"L = {l} is not supported (expected one of {SUPPORTED_L})")


def blatt_weisskopf(
    m0: ArrayLike,
    m1: ArrayLike,
    m2: ArrayLike,
    l: int,
    hbarc: float = HBARC
) -> ArrayLike:
    """
    Real Blatt-Weisskopf barrier factor.

    Args:
        m0: Parent mass (GeV).
        m1, m2: Decay-product masses (GeV).
        l: Orbital angular momentum (0-4).
        hbarc: hbar*c in GeV·fm.

    Returns:
        Dimensionless barrier factor; identically 1 for L = 0.

    Raises:
        ValueError: If l is not in 0..4.
    """
    q = breakup_momentum(m0, m1, m2)
    z = (q * q) / (hbarc * hbarc)
    return _barrier_from_z(z, l)


def blatt_weisskopf_s(
    s: ArrayLike,
    m1: ArrayLike,
    m2: ArrayLike,
    l: int,
    hbarc: float = HBARC
) -> NDArray[np.complexfloating]:
    """
    Complex Blatt-Weisskopf barrier factor at invariant mass squared s.

    Uses z = rho(s)² · s / (2 (hbar c)²).

    Raises:
        ValueError: If l is not in 0..4.
    """
    r = rho(s, m1, m2)
    z = r * r * s / (2.0 * hbarc * hbarc)
    return _barrier_from_z(z, l)


def barrier_factor(
    s: ArrayLike,
    m1: ArrayLike,
    m2: ArrayLike,
    mr: ArrayLike,
    l: int,
    hbarc: float = HBARC
) -> NDArray[np.complexfloating]:
    """
    Barrier factor normalised to the pole: B(s) / B(mr²).

    Equal to 1 at s = mr² by construction.

    Args:
        s: Invariant mass squared (GeV²).
        m1, m2: Channel decay-product masses (GeV).
        mr: Pole mass (GeV).
        l: Orbital angular momentum (0-4).
        hbarc: hbar*c in GeV·fm.
    """
    numerator = blatt_weisskopf_s(s, m1, m2, l, hbarc)
    denominator = blatt_weisskopf_s(mr * mr, m1, m2, l, hbarc)
    # numpy divides through a reciprocal, so x / x can miss 1 by an ulp
    return np.where(numerator == denominator, 1.0 + 0.0j, numerator / denominator)


def barrier_matrix(
    s: float,
    m1s: NDArray[np.floating],
    m2s: NDArray[np.floating],
    mrs: NDArray[np.floating],
    l: int,
    hbarc: float = HBARC
) -> NDArray[np.complexfloating]:
    """
    C×R matrix of barrier_factor(s, m1_i, m2_i, mr_a, l).

    Args:
        s: Invariant mass squared (GeV²).
        m1s, m2s: Channel decay-product masses, length C.
        mrs: Pole masses, length R.
        l: Orbital angular momentum (0-4).
        hbarc: hbar*c in GeV·fm.

    Returns:
        Complex array of shape (C, R).
    """
    m1 = np.asarray(m1s, dtype=float)[:, np.newaxis]
    m2 = np.asarray(m2s, dtype=float)[:, np.newaxis]
    mr = np.asarray(mrs, dtype=float)[np.newaxis, :]
    return barrier_factor(s, m1, m2, mr, l, hbarc)
