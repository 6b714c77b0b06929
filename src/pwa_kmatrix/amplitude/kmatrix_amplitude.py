"""
K-matrix amplitude as seen by a fit framework.

KMatrixAmplitude binds one ResonanceTable and one output channel to the
three operations a fit driver needs:

    precalculate(dataset)          once per dataset: per-event s-dependent pieces
    calculate(parameters, event)   per fit evaluation: one complex number
    parameters()                   names of the 2R real fit parameters

Parameter contract:
    `parameters` is a flat sequence of reals whose first 2R entries are the
    production couplings as (re, im) pairs, in the order of parameters():
        [beta_0.re, beta_0.im, beta_1.re, beta_1.im, ...]
    Extra trailing entries are ignored; fewer than 2R raise ValueError.

Precalculation is a map over events with no cross-event state, so it is
split into chunks that run either in-process (one worker) or on a
multiprocessing pool. Every event goes through KMatrixEngine.precompute()
regardless of how it was scheduled, so the cache does not depend on the
worker count.
"""

from multiprocessing import Pool
from typing import List, Optional, Sequence, Tuple
import numpy as np
from numpy.typing import NDArray

from pwa_kmatrix.core.constants import HBARC, N_WORKERS, CHUNK_SIZE
from pwa_kmatrix.kinematics.event import Dataset, Event
from pwa_kmatrix.kmatrix.engine import KMatrixEngine
from pwa_kmatrix.kmatrix.resonances import (
    ResonanceTable,
    F0_TABLE,
    F2_TABLE,
    A0_TABLE,
    A2_TABLE,
    PI1_TABLE,
    get_resonance_table,
)
from pwa_kmatrix.amplitude.cache import KMatrixCache


def betas_from_parameters(parameters: Sequence[float], n_poles: int) -> NDArray[np.complexfloating]:
    """
    Production couplings from a flat parameter vector.

    Args:
        parameters: Flat reals; the first 2*n_poles are (re, im) pairs.
        n_poles: Number of poles R.

    Returns:
        Complex array of length n_poles.

    Raises:
        ValueError: If fewer than 2*n_poles parameters are given.
    """
    values = np.asarray(parameters, dtype=float)
    if values.ndim != 1:
        raise ValueError(f"parameters must be one-dimensional, got shape {values.shape}")
    if values.size < 2 * n_poles:
        raise ValueError(f"expected at least {2 * n_poles} parameters, got {values.size}")
    betas = np.empty(n_poles, dtype=complex)
    betas.real = values[0:2 * n_poles:2]
    betas.imag = values[1:2 * n_poles:2]
    return betas


def _precompute_chunk(
    engine: KMatrixEngine,
    channel: int,
    s_values: NDArray[np.floating]
) -> Tuple[NDArray[np.complexfloating], NDArray[np.complexfloating]]:
    """Run KMatrixEngine.precompute over a block of s values."""
    n_events = len(s_values)
    ikc_inv_rows = np.empty((n_events, engine.n_channels), dtype=complex)
    pvector_constants = np.empty((n_events, engine.n_channels, engine.n_poles), dtype=complex)
    for k, s in enumerate(s_values):
        ikc_inv_rows[k], pvector_constants[k] = engine.precompute(float(s), channel)
    return ikc_inv_rows, pvector_constants


# Engine and output channel of the current pool worker
_worker_state: Optional[Tuple[KMatrixEngine, int]] = None


def _init_precompute_worker(engine: KMatrixEngine, channel: int):
    global _worker_state
    _worker_state = (engine, channel)


def _precompute_worker(
    s_values: NDArray[np.floating]
) -> Tuple[NDArray[np.complexfloating], NDArray[np.complexfloating]]:
    """Pool worker: the engine arrives once through the initializer."""
    engine, channel = _worker_state
    return _precompute_chunk(engine, channel, s_values)


class KMatrixAmplitude:
    """
    One resonance family's K-matrix amplitude on a fixed output channel.
    """

    def __init__(
        self,
        table: ResonanceTable,
        channel: int,
        n_workers: Optional[int] = None,
        chunk_size: Optional[int] = None,
        hbarc: float = HBARC,
        verbose: bool = False
    ):
        """
        Initialize the amplitude.

        Args:
            table: Resonance family tables.
            channel: Output channel index (0 <= channel < C).
            n_workers: Processes used by precalculate (default from constants.json).
            chunk_size: Events per worker task (default from constants.json).
            hbarc: hbar*c in GeV·fm used by the barrier factors.
            verbose: Print diagnostic information
        """
        self.table = table
        self.engine = KMatrixEngine(table.parameters, hbarc=hbarc)
        if not 0 <= channel < self.engine.n_channels:
            raise ValueError(
                f"{table.name}: channel {channel} out of range "
                f"(has {self.engine.n_channels} channels)"
            )
        self.channel = channel
        self.n_workers = N_WORKERS if n_workers is None else n_workers
        self.chunk_size = CHUNK_SIZE if chunk_size is None else chunk_size
        if self.n_workers < 1:
            raise ValueError(f"n_workers must be at least 1, got {self.n_workers}")
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be at least 1, got {self.chunk_size}")
        self.verbose = verbose

        self._parameter_names = table.parameter_names()
        self._cache: Optional[KMatrixCache] = None

        if self.verbose:
            print(f"=== KMatrixAmplitude Initialized ({table.name}, {table.description}) ===")
            print(f"  output channel: {channel} ({table.parameters.channels[channel].name})")
            print(f"  parameters: {len(self._parameter_names)}")

    @property
    def name(self) -> str:
        return self.table.name

    @property
    def n_poles(self) -> int:
        return self.engine.n_poles

    @property
    def is_precalculated(self) -> bool:
        return self._cache is not None

    @property
    def cache(self) -> Optional[KMatrixCache]:
        return self._cache

    def parameters(self) -> List[str]:
        """Names of the 2R real fit parameters, in the order calculate() reads them."""
        return list(self._parameter_names)

    def precalculate(self, dataset: Dataset):
        """
        Compute and cache the s-dependent pieces for every event.

        Replaces any previous cache. If the pass fails, no cache is left
        behind, so calculate() cannot read entries of an older dataset.

        Raises:
            ValueError: If an event has fewer than two daughters.
            RuntimeError: If I + K·C is singular for some event.
        """
        self._cache = None
        s_values = dataset.resonance_m2()
        n_events = len(s_values)
        cache = KMatrixCache.allocate(n_events, self.engine.n_channels, self.engine.n_poles)

        starts = list(range(0, n_events, self.chunk_size))
        tasks = [s_values[start:start + self.chunk_size] for start in starts]
        n_processes = min(self.n_workers, len(tasks))
        if n_processes <= 1:
            results = [_precompute_chunk(self.engine, self.channel, task) for task in tasks]
        else:
            with Pool(processes=n_processes, initializer=_init_precompute_worker,
                      initargs=(self.engine, self.channel)) as pool:
                results = pool.map(_precompute_worker, tasks)

        for start, (ikc_inv_rows, pvector_constants) in zip(starts, results):
            cache.store(start, ikc_inv_rows, pvector_constants)
        self._cache = cache

        if self.verbose:
            print(f"=== {self.name}: precalculated {n_events} events ===")
            print(f"  chunks: {len(tasks)}, processes: {max(n_processes, 1)}")
            if n_events:
                print(f"  s range: [{s_values.min():.6f}, {s_values.max():.6f}] GeV^2")

    def _require_cache(self) -> KMatrixCache:
        if self._cache is None:
            raise RuntimeError(f"{self.name}: precalculate() must be called before calculate()")
        return self._cache

    def calculate(self, parameters: Sequence[float], event: Event) -> complex:
        """
        Amplitude for one event.

        Args:
            parameters: Flat reals, first 2R are (re, im) of the betas.
            event: Event from the last precalculated dataset.

        Raises:
            ValueError: If fewer than 2R parameters are given.
            RuntimeError: If precalculate() has not been run.
            IndexError: If event.index is outside the precalculated dataset.
        """
        cache = self._require_cache()
        betas = betas_from_parameters(parameters, self.n_poles)
        ikc_inv_row, pvector_constants = cache.entry(event.index)
        return KMatrixEngine.calculate_k_matrix(betas, ikc_inv_row, pvector_constants)

    def calculate_all(self, parameters: Sequence[float]) -> NDArray[np.complexfloating]:
        """
        Amplitude for every event of the last precalculated dataset.

        Returns:
            Complex array of length N, entry k equal to calculate(parameters, event k).
        """
        cache = self._require_cache()
        betas = betas_from_parameters(parameters, self.n_poles)
        p_vectors = (cache.pvector_constants * betas[np.newaxis, np.newaxis, :]).sum(axis=2)
        return (cache.ikc_inv_rows * p_vectors).sum(axis=1)

    def __repr__(self) -> str:
        state = f"{len(self._cache)} events" if self._cache is not None else "not precalculated"
        return f"KMatrixAmplitude({self.name}, channel={self.channel}, {state})"


def kmatrix_f0(channel: int, **kwargs) -> KMatrixAmplitude:
    """Isoscalar scalar K-matrix (f0_500, f0_980, f0_1370, f0_1500, f0_1710)."""
    return KMatrixAmplitude(F0_TABLE, channel, **kwargs)


def kmatrix_f2(channel: int, **kwargs) -> KMatrixAmplitude:
    """Isotensor tensor K-matrix (f2_1270, f2_1525, f2_1810, f2_1950)."""
    return KMatrixAmplitude(F2_TABLE, channel, **kwargs)


def kmatrix_a0(channel: int, **kwargs) -> KMatrixAmplitude:
    """Isovector scalar K-matrix (a0_980, a0_1450)."""
    return KMatrixAmplitude(A0_TABLE, channel, **kwargs)


def kmatrix_a2(channel: int, **kwargs) -> KMatrixAmplitude:
    """Isovector tensor K-matrix (a2_1320, a2_1700)."""
    return KMatrixAmplitude(A2_TABLE, channel, **kwargs)


def kmatrix_pi1(channel: int, **kwargs) -> KMatrixAmplitude:
    """Exotic pseudovector K-matrix (pi1_1600)."""
    return KMatrixAmplitude(PI1_TABLE, channel, **kwargs)


def resonance_amplitude(name: str, channel: int, **kwargs) -> KMatrixAmplitude:
    """K-matrix amplitude by family name ("f0", "f2", "a0", "a2", "pi1")."""
    return KMatrixAmplitude(get_resonance_table(name), channel, **kwargs)
