"""
Generic coupled-channel K-matrix engine.

For C channels and R poles the production amplitude on channel i is

    F_i(s) = Σ_j [(I + K(s) C(s))⁻¹]_ij P_j(s)

with
    K_ij(s) = Σ_a B_ia(s) B_ja(s) (g_ia g_ja / (m_a² - s) + c_ij)   [× Adler factor]
    P_j(s)  = Σ_a β_a B_ja(s) g_ja / (m_a² - s)
    C(s)    = diag(Chew-Mandelstam_j(s))

where B is the pole-normalised Blatt-Weisskopf barrier matrix and β are the
complex production couplings (fit parameters).

KEY PRINCIPLE: precompute / evaluate split
    Everything except β depends on s alone. For a fixed dataset s per event
    never changes during a fit, so precompute() produces, once per event,
    the row of (I + KC)⁻¹ and the P-vector constants B_ja g_ja / (m_a² - s).
    A fit evaluation is then only calculate_k_matrix(): two small dot
    products against β.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Tuple
import scipy.linalg

from pwa_kmatrix.core.constants import HBARC
from pwa_kmatrix.core.parameters import KMatrixParameters
from pwa_kmatrix.dynamics.barrier import barrier_matrix
from pwa_kmatrix.dynamics.phase_space import chew_mandelstam_matrix


class KMatrixEngine:
    """
    K-matrix over fixed C-channel, R-pole tables.

    The tables are validated once by KMatrixParameters and never change
    afterwards, so an engine can be shared freely between workers.
    """

    def __init__(
        self,
        parameters: KMatrixParameters,
        hbarc: float = HBARC,
        verbose: bool = False
    ):
        """
        Initialize the engine.

        Args:
            parameters: Validated K-matrix tables.
            hbarc: hbar*c in GeV·fm used by the barrier factors.
            verbose: Print diagnostic information
        """
        self.parameters = parameters
        self.hbarc = hbarc
        self.verbose = verbose

        self.g = parameters.g
        self.c = parameters.c
        self.m1s = parameters.m1s
        self.m2s = parameters.m2s
        self.mrs = parameters.pole_masses
        self.mrs_sq = self.mrs * self.mrs
        self.l = parameters.l
        self.adler_zero = parameters.adler_zero

        self._identity = np.eye(self.n_channels, dtype=complex)
        self._symmetric = parameters.is_symmetric

        if self.verbose:
            print("=== KMatrixEngine Initialized ===")
            print(f"  channels: {self.n_channels}, poles: {self.n_poles}, L: {self.l}")
            print(f"  pole masses: {self.mrs.tolist()} GeV")
            if self.adler_zero is not None:
                print(f"  Adler zero: s_0={self.adler_zero.s_0}, s_norm={self.adler_zero.s_norm}")

    @property
    def n_channels(self) -> int:
        return self.parameters.n_channels

    @property
    def n_poles(self) -> int:
        return self.parameters.n_poles

    def _check_channel(self, channel: int):
        if not 0 <= channel < self.n_channels:
            raise IndexError(
                f"channel {channel} out of range for {self.n_channels}-channel K-matrix"
            )

    # -------------------------------------------------------------------------
    # s-dependent pieces
    # -------------------------------------------------------------------------

    def barrier_matrix(self, s: float) -> NDArray[np.complexfloating]:
        """C×R matrix of pole-normalised barrier factors B_ia(s)."""
        return barrier_matrix(s, self.m1s, self.m2s, self.mrs, self.l, self.hbarc)

    def phase_space_matrix(self, s: float) -> NDArray[np.complexfloating]:
        """Diagonal C×C Chew-Mandelstam phase-space matrix."""
        return chew_mandelstam_matrix(s, self.m1s, self.m2s)

    def _k_matrix(
        self,
        s: float,
        bf: NDArray[np.complexfloating]
    ) -> NDArray[np.complexfloating]:
        k_mat = np.zeros((self.n_channels, self.n_channels), dtype=complex)
        # Pole by pole so every K_ij sums its terms in the same order
        for a in range(self.n_poles):
            pole = np.outer(self.g[:, a], self.g[:, a]) / (self.mrs_sq[a] - s)
            k_mat += np.outer(bf[:, a], bf[:, a]) * (pole + self.c)
        if self.adler_zero is not None:
            k_mat *= self.adler_zero.factor(s)
        if self._symmetric:
            # Mirror the upper triangle; complex products need not commute bitwise
            k_mat = np.triu(k_mat) + np.triu(k_mat, 1).T
        return k_mat

    def k_matrix(self, s: float) -> NDArray[np.complexfloating]:
        """
        Barrier-dressed K-matrix at s.

            K_ij = Σ_a B_ia B_ja (g_ia g_ja / (m_a² - s) + c_ij)

        scaled by (s - s_0)/s_norm when an Adler zero is configured.
        Symmetric whenever c is.

        Returns:
            Complex array of shape (C, C).
        """
        return self._k_matrix(s, self.barrier_matrix(s))

    def _ikc_inv(
        self,
        s: float,
        channel: int,
        bf: NDArray[np.complexfloating]
    ) -> NDArray[np.complexfloating]:
        ikc = self._identity + self._k_matrix(s, bf) @ self.phase_space_matrix(s)
        unit = np.zeros(self.n_channels, dtype=complex)
        unit[channel] = 1.0
        # Row `channel` of ikc⁻¹ solves ikcᵀ x = e_channel
        try:
            return scipy.linalg.solve(ikc.T, unit, check_finite=False)
        except scipy.linalg.LinAlgError as e:
            raise RuntimeError(
                f"I + K·C is singular at s = {s} GeV² (channel {channel})"
            ) from e

    def ikc_inv(self, s: float, channel: int) -> NDArray[np.complexfloating]:
        """
        Row `channel` of (I + K(s)·C(s))⁻¹.

        Args:
            s: Invariant mass squared (GeV²).
            channel: Output channel index.

        Returns:
            Complex array of length C.

        Raises:
            IndexError: If channel is out of range.
            RuntimeError: If I + K·C is singular.
        """
        self._check_channel(channel)
        return self._ikc_inv(s, channel, self.barrier_matrix(s))

    def _pvector_constants(
        self,
        s: float,
        bf: NDArray[np.complexfloating]
    ) -> NDArray[np.complexfloating]:
        return bf * self.g / (self.mrs_sq - s)

    def pvector_constants(self, s: float) -> NDArray[np.complexfloating]:
        """C×R matrix of B_ia(s) g_ia / (m_a² - s)."""
        return self._pvector_constants(s, self.barrier_matrix(s))

    def precompute(
        self,
        s: float,
        channel: int
    ) -> Tuple[NDArray[np.complexfloating], NDArray[np.complexfloating]]:
        """
        Everything about one event that does not depend on the fit parameters.

        Args:
            s: Invariant mass squared of the event (GeV²).
            channel: Output channel index.

        Returns:
            (ikc_inv row of length C, P-vector constants of shape (C, R))
        """
        self._check_channel(channel)
        bf = self.barrier_matrix(s)
        return self._ikc_inv(s, channel, bf), self._pvector_constants(s, bf)

    # -------------------------------------------------------------------------
    # Parameter-dependent pieces
    # -------------------------------------------------------------------------

    @staticmethod
    def p_vector(
        betas: NDArray[np.complexfloating],
        pvector_constants: NDArray[np.complexfloating]
    ) -> NDArray[np.complexfloating]:
        """P_j = Σ_a β_a · pvector_constants[j, a]."""
        return (pvector_constants * betas[np.newaxis, :]).sum(axis=1)

    @staticmethod
    def calculate_k_matrix(
        betas: NDArray[np.complexfloating],
        ikc_inv_row: NDArray[np.complexfloating],
        pvector_constants: NDArray[np.complexfloating]
    ) -> complex:
        """
        Amplitude from a cached event: ikc_inv_row · P (no conjugation).

        Args:
            betas: R complex production couplings.
            ikc_inv_row: Cached row of (I + KC)⁻¹, length C.
            pvector_constants: Cached (C, R) P-vector constants.
        """
        p_vec = KMatrixEngine.p_vector(betas, pvector_constants)
        return complex((ikc_inv_row * p_vec).sum())

    def amplitude(self, s: float, betas, channel: int) -> complex:
        """
        Amplitude at a single s without going through a dataset.

        Useful for lineshape scans and reference values.
        """
        betas = np.asarray(betas, dtype=complex)
        if betas.shape != (self.n_poles,):
            raise ValueError(f"expected {self.n_poles} betas, got shape {betas.shape}")
        ikc_inv_row, pvector_constants = self.precompute(s, channel)
        return self.calculate_k_matrix(betas, ikc_inv_row, pvector_constants)

    def __repr__(self) -> str:
        return (
            f"KMatrixEngine(channels={self.n_channels}, poles={self.n_poles}, "
            f"L={self.l}, adler_zero={self.adler_zero is not None})"
        )
