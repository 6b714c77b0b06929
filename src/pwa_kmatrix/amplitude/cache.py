"""
Per-event cache of the s-dependent K-matrix pieces.

A plain pre-sized arena addressed by dense event index. Each precalculation
pass allocates a fresh cache and fills it; entries are never merged with a
previous dataset's.
"""

from dataclasses import dataclass
from typing import Tuple
import numpy as np
from numpy.typing import NDArray


@dataclass(eq=False)
class KMatrixCache:
    """
    Cached (ikc_inv row, P-vector constants) for every event of a dataset.

    Attributes:
        ikc_inv_rows: Complex array (N, C), row `channel` of (I + KC)⁻¹ per event.
        pvector_constants: Complex array (N, C, R) per event.
    """
    ikc_inv_rows: NDArray[np.complexfloating]
    pvector_constants: NDArray[np.complexfloating]

    def __post_init__(self):
        n_events = self.ikc_inv_rows.shape[0]
        if self.pvector_constants.shape[0] != n_events:
            raise ValueError(
                f"cache arrays disagree on event count: {n_events} != "
                f"{self.pvector_constants.shape[0]}"
            )
        if self.pvector_constants.shape[1] != self.ikc_inv_rows.shape[1]:
            raise ValueError(
                f"cache arrays disagree on channel count: {self.ikc_inv_rows.shape[1]} != "
                f"{self.pvector_constants.shape[1]}"
            )

    @classmethod
    def allocate(cls, n_events: int, n_channels: int, n_poles: int) -> "KMatrixCache":
        """Allocate an empty cache for n_events events."""
        return cls(
            ikc_inv_rows=np.zeros((n_events, n_channels), dtype=complex),
            pvector_constants=np.zeros((n_events, n_channels, n_poles), dtype=complex),
        )

    def __len__(self) -> int:
        return self.ikc_inv_rows.shape[0]

    def store(
        self,
        start: int,
        ikc_inv_rows: NDArray[np.complexfloating],
        pvector_constants: NDArray[np.complexfloating]
    ):
        """Write a contiguous block of entries beginning at event `start`."""
        stop = start + len(ikc_inv_rows)
        if start < 0 or stop > len(self):
            raise IndexError(f"block [{start}, {stop}) outside cache of {len(self)} events")
        self.ikc_inv_rows[start:stop] = ikc_inv_rows
        self.pvector_constants[start:stop] = pvector_constants

    def entry(
        self,
        index: int
    ) -> Tuple[NDArray[np.complexfloating], NDArray[np.complexfloating]]:
        """
        Cached pieces for one event.

        Raises:
            IndexError: If index is outside [0, len(cache)). Negative indices
                are rejected rather than wrapped.
        """
        if not 0 <= index < len(self):
            raise IndexError(f"event index {index} outside cache of {len(self)} events")
        return self.ikc_inv_rows[index], self.pvector_constants[index]
