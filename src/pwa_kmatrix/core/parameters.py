"""
Parameter dataclasses for configuring a K-matrix.

A K-matrix is fixed by its coupling table g, its background table c, the
two-body channels it decays into, the bare pole masses, the orbital angular
momentum L and an optional Adler zero. These are validated once here so the
engine never has to re-check dimensions per event.
"""

import warnings
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple
import numpy as np
from numpy.typing import NDArray

from pwa_kmatrix.core.constants import SUPPORTED_L


@dataclass(frozen=True)
class PhysicalChannel:
    """
    A two-body final state.

    Attributes:
        name: Label for the channel, e.g. "pi eta".
        m1: Mass of the first decay product (GeV).
        m2: Mass of the second decay product (GeV).
    """
    name: str
    m1: float
    m2: float

    def __post_init__(self):
        if self.m1 <= 0:
            raise ValueError(f"m1 must be positive, got {self.m1}")
        if self.m2 <= 0:
            raise ValueError(f"m2 must be positive, got {self.m2}")

    @property
    def threshold(self) -> float:
        """Two-particle threshold in s: (m1 + m2)²."""
        return (self.m1 + self.m2) ** 2


@dataclass(frozen=True)
class AdlerZero:
    """
    Adler zero correction (s - s_0) / s_norm applied to the K-matrix.

    Attributes:
        s_0: Position of the zero in s (GeV²).
        s_norm: Normalisation (GeV²).
    """
    s_0: float
    s_norm: float = 1.0

    def __post_init__(self):
        if self.s_norm == 0:
            raise ValueError("s_norm must be non-zero")

    def factor(self, s: float) -> float:
        return (s - self.s_0) / self.s_norm


@dataclass(eq=False)
class KMatrixParameters:
    """
    Fixed tables of a C-channel, R-pole K-matrix.

    Attributes:
        g: Coupling table, shape (C, R). g[i, a] couples pole a to channel i.
        c: Background table, shape (C, C). Expected symmetric.
        channels: The C decay channels.
        pole_masses: The R bare pole masses (GeV).
        l: Orbital angular momentum of every channel (0-4).
        adler_zero: Optional Adler zero.
    """

    g: NDArray[np.floating]
    c: NDArray[np.floating]
    channels: Tuple[PhysicalChannel, ...]
    pole_masses: NDArray[np.floating]
    l: int = 0
    adler_zero: Optional[AdlerZero] = None

    # Derived from channels
    m1s: NDArray[np.floating] = field(init=False, repr=False)
    m2s: NDArray[np.floating] = field(init=False, repr=False)

    def __post_init__(self):
        """Convert tables to arrays and validate dimensions."""
        self.g = np.array(self.g, dtype=float)
        self.c = np.array(self.c, dtype=float)
        self.channels = tuple(self.channels)
        self.pole_masses = np.array(self.pole_masses, dtype=float)
        self.m1s = np.array([ch.m1 for ch in self.channels], dtype=float)
        self.m2s = np.array([ch.m2 for ch in self.channels], dtype=float)
        self._validate()

    def _validate(self):
        """Validate table shapes and angular momentum."""
        n_channels = len(self.channels)
        n_poles = self.pole_masses.size
        if n_channels < 1:
            raise ValueError("At least one channel is required")
        if self.pole_masses.ndim != 1 or n_poles < 1:
            raise ValueError(
                f"pole_masses must be a non-empty 1D sequence, got shape {self.pole_masses.shape}"
            )
        if self.g.shape != (n_channels, n_poles):
            raise ValueError(
                f"g must have shape ({n_channels}, {n_poles}), got {self.g.shape}"
            )
        if self.c.shape != (n_channels, n_channels):
            raise ValueError(
                f"c must have shape ({n_channels}, {n_channels}), got {self.c.shape}"
            )
        if np.any(self.pole_masses <= 0):
            raise ValueError(f"pole masses must be positive, got {self.pole_masses}")
        if self.l not in SUPPORTED_L:
            raise ValueError(f"L = {self.l} is not supported (expected one of {SUPPORTED_L})")
        if not self.is_symmetric:
            warnings.warn("background table c is not symmetric; K(s) will not be symmetric")

    @property
    def n_channels(self) -> int:
        return len(self.channels)

    @property
    def n_poles(self) -> int:
        return self.pole_masses.size

    @property
    def is_symmetric(self) -> bool:
        """True if the background table is symmetric."""
        return bool(np.array_equal(self.c, self.c.T))

    @classmethod
    def from_masses(
        cls,
        g: Sequence[Sequence[float]],
        c: Sequence[Sequence[float]],
        m1s: Sequence[float],
        m2s: Sequence[float],
        pole_masses: Sequence[float],
        l: int = 0,
        adler_zero: Optional[AdlerZero] = None,
    ) -> "KMatrixParameters":
        """
        Build parameters from bare mass lists instead of named channels.

        Channels are labelled "channel 0", "channel 1", ...
        """
        if len(m1s) != len(m2s):
            raise ValueError(f"m1s and m2s differ in length: {len(m1s)} != {len(m2s)}")
        channels = tuple(
            PhysicalChannel(f"channel {i}", m1, m2)
            for i, (m1, m2) in enumerate(zip(m1s, m2s))
        )
        return cls(g=g, c=c, channels=channels, pole_masses=pole_masses, l=l, adler_zero=adler_zero)

    def __repr__(self) -> str:
        adler = "none" if self.adler_zero is None else (
            f"s_0={self.adler_zero.s_0}, s_norm={self.adler_zero.s_norm}"
        )
        return (
            f"KMatrixParameters(\n"
            f"  channels = {[ch.name for ch in self.channels]},\n"
            f"  pole_masses = {self.pole_masses.tolist()} GeV,\n"
            f"  L = {self.l},\n"
            f"  adler_zero = {adler}\n"
            f")"
        )
