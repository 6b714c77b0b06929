"""
Minimal event store consumed by the amplitudes.

An Event carries the four-momenta of its decay daughters (plus optional beam
and recoil momenta and a weight). The K-matrix only needs the invariant mass
squared of the first two daughters; anything richer (angles, polarisation)
belongs to the angular amplitudes that multiply it.

Events in a Dataset are densely indexed: event.index is its position. The
amplitudes use that index to address their per-event caches.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence
import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class FourMomentum:
    """Four-momentum (E, px, py, pz) in GeV."""
    e: float
    px: float = 0.0
    py: float = 0.0
    pz: float = 0.0

    def __add__(self, other: "FourMomentum") -> "FourMomentum":
        return FourMomentum(
            self.e + other.e,
            self.px + other.px,
            self.py + other.py,
            self.pz + other.pz,
        )

    @property
    def m2(self) -> float:
        """Invariant mass squared E² - |p|²."""
        return self.e * self.e - (self.px * self.px + self.py * self.py + self.pz * self.pz)

    @property
    def m(self) -> float:
        """Invariant mass; negative for spacelike vectors."""
        m2 = self.m2
        return float(np.sign(m2) * np.sqrt(abs(m2)))

    @classmethod
    def at_rest(cls, mass: float) -> "FourMomentum":
        return cls(mass)


@dataclass
class Event:
    """
    One reconstructed event.

    Attributes:
        index: Dense position of the event in its dataset.
        daughter_p4s: Four-momenta of the decay daughters, in declared order.
        weight: Event weight.
        beam_p4: Optional beam four-momentum.
        recoil_p4: Optional recoil four-momentum.
    """
    index: int
    daughter_p4s: List[FourMomentum] = field(default_factory=list)
    weight: float = 1.0
    beam_p4: Optional[FourMomentum] = None
    recoil_p4: Optional[FourMomentum] = None

    def resonance_p4(self) -> FourMomentum:
        """Four-momentum of the subsystem formed by the first two daughters."""
        if len(self.daughter_p4s) < 2:
            raise ValueError(
                f"event {self.index} has {len(self.daughter_p4s)} daughters, need at least 2"
            )
        return self.daughter_p4s[0] + self.daughter_p4s[1]

    def resonance_m2(self) -> float:
        """Invariant mass squared s of the first two daughters."""
        return self.resonance_p4().m2


class Dataset:
    """
    Ordered, densely indexed collection of events.
    """

    def __init__(self, events: Sequence[Event]):
        """
        Initialize the dataset.

        Args:
            events: Events with event.index equal to their position.
        """
        self.events: List[Event] = list(events)
        for position, event in enumerate(self.events):
            if event.index != position:
                raise ValueError(
                    f"event at position {position} has index {event.index}; "
                    f"dataset indices must be dense and ordered"
                )

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self.events)

    def __getitem__(self, index: int) -> Event:
        return self.events[index]

    def resonance_m2(self) -> NDArray[np.floating]:
        """Invariant mass squared of the first two daughters for every event."""
        return np.array([event.resonance_m2() for event in self.events], dtype=float)

    @property
    def weights(self) -> NDArray[np.floating]:
        return np.array([event.weight for event in self.events], dtype=float)

    @classmethod
    def from_daughter_momenta(
        cls,
        momenta: NDArray[np.floating],
        weights: Optional[Sequence[float]] = None
    ) -> "Dataset":
        """
        Build a dataset from an array of daughter four-momenta.

        Args:
            momenta: Array of shape (N, k, 4) holding (E, px, py, pz) for the
                k daughters of each of N events.
            weights: Optional N event weights.
        """
        momenta = np.asarray(momenta, dtype=float)
        if momenta.ndim != 3 or momenta.shape[2] != 4:
            raise ValueError(f"momenta must have shape (N, k, 4), got {momenta.shape}")
        if weights is None:
            weights = np.ones(momenta.shape[0])
        if len(weights) != momenta.shape[0]:
            raise ValueError(
                f"got {len(weights)} weights for {momenta.shape[0]} events"
            )
        events = [
            Event(
                index=i,
                daughter_p4s=[FourMomentum(*(float(x) for x in p4)) for p4 in daughters],
                weight=float(weights[i]),
            )
            for i, daughters in enumerate(momenta)
        ]
        return cls(events)

    @classmethod
    def from_invariant_masses(cls, s_values: Sequence[float]) -> "Dataset":
        """
        Build a dataset whose first two daughters have the given invariant
        mass squared: one daughter at rest carrying the full mass, one null.
        """
        events = []
        for i, s in enumerate(s_values):
            if s < 0:
                raise ValueError(f"s must be non-negative, got {s}")
            events.append(Event(
                index=i,
                daughter_p4s=[FourMomentum(float(np.sqrt(s))), FourMomentum(0.0)],
            ))
        return cls(events)

    def __repr__(self) -> str:
        return f"Dataset({len(self)} events)"
