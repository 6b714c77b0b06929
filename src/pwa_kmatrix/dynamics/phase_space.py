"""
Two-body phase space and the Chew-Mandelstam function.

All functions accept scalars or numpy arrays for s and the masses and
broadcast in the usual way. Below threshold the phase space is continued
analytically through the principal branch of the complex square root, so
no input s > 0 raises.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Union

ArrayLike = Union[float, NDArray[np.floating]]


def chi_plus(s: ArrayLike, m1: ArrayLike, m2: ArrayLike) -> ArrayLike:
    """
    chi_+ = 1 - (m1 + m2)² / s

    Vanishes at threshold, negative below it.
    """
    return 1.0 - ((m1 + m2) * (m1 + m2)) / s


def chi_minus(s: ArrayLike, m1: ArrayLike, m2: ArrayLike) -> ArrayLike:
    """
    chi_- = 1 - (m1 - m2)² / s

    Vanishes at the pseudo-threshold.
    """
    return 1.0 - ((m1 - m2) * (m1 - m2)) / s


def rho(s: ArrayLike, m1: ArrayLike, m2: ArrayLike) -> NDArray[np.complexfloating]:
    """
    Phase-space factor rho = sqrt(chi_+ chi_-).

    The product is promoted to complex (with +0 imaginary part) before the
    square root, so between pseudo-threshold and threshold rho is +i|rho|.
    """
    product = np.asarray(chi_plus(s, m1, m2) * chi_minus(s, m1, m2), dtype=complex)
    return np.sqrt(product)


def chew_mandelstam(s: ArrayLike, m1: ArrayLike, m2: ArrayLike) -> NDArray[np.complexfloating]:
    """
    Chew-Mandelstam function for one channel.

        C(s) = rho/pi · ln((chi_+ + rho) / (chi_+ - rho))
               + chi_+/pi · (m2 - m1)/(m1 + m2) · ln(m2/m1)

    Above threshold the log argument is a negative real number. Its
    imaginary part is pinned to -0 so the log picks up -i·pi and
    Im C(s) = -rho. Then I + K·C = I - i·K·rho and the amplitude is unitary
    (physical sheet).

    Args:
        s: Invariant mass squared (GeV²).
        m1, m2: Decay-product masses (GeV).

    Returns:
        Complex value(s) of the Chew-Mandelstam function.
    """
    cp = chi_plus(s, m1, m2)
    r = rho(s, m1, m2)
    ratio = (cp + r) / (cp - r)
    # Real arguments approach the cut from below: imaginary part -0
    ratio = np.where(ratio.imag == 0.0, np.conj(ratio.real + 0j), ratio)
    return (
        r / np.pi * np.log(ratio)
        + cp / np.pi * ((m2 - m1) / (m1 + m2)) * np.log(m2 / m1)
    )


def chew_mandelstam_matrix(
    s: float,
    m1s: NDArray[np.floating],
    m2s: NDArray[np.floating]
) -> NDArray[np.complexfloating]:
    """
    Diagonal C×C phase-space matrix with chew_mandelstam(s, m1_i, m2_i) on
    the diagonal.

    Args:
        s: Invariant mass squared (GeV²).
        m1s, m2s: Channel decay-product masses, length C.

    Returns:
        Complex array of shape (C, C).
    """
    return np.diag(chew_mandelstam(s, np.asarray(m1s), np.asarray(m2s)))
