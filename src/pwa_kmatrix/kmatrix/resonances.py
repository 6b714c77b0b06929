"""
Literal K-matrix tables for the resonance families used in the fits.

Each table is the complete physical content of one resonance family:
coupling table g (channels × poles), background table c, decay channels,
bare pole masses, L and the optional Adler zero. The numbers come from
published coupled-channel K-matrix fits and are kept exactly as quoted,
in the same channel and pole order, so that fits reproduce reference
results.

Families:
    f0  isoscalar scalar     5 channels, 5 poles, L=0, Adler zero
    f2  isotensor tensor     4 channels, 4 poles, L=2
    a0  isovector scalar     2 channels, 2 poles, L=0
    a2  isovector tensor     3 channels, 2 poles, L=2
    pi1 exotic pseudovector  2 channels, 1 pole,  L=1

Usage:
    from pwa_kmatrix.amplitude import kmatrix_f0

    f0 = kmatrix_f0(channel=2)  # output on K Kbar
    f0.precalculate(dataset)
    value = f0.calculate(parameters, dataset[0])
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from pwa_kmatrix.core.constants import (
    PION_NEUTRAL_MASS_GEV as PI0,
    KAON_CHARGED_MASS_GEV as K_PLUS,
    KAON_NEUTRAL_MASS_GEV as K0,
    ETA_MASS_GEV as ETA,
    ETA_PRIME_MASS_GEV as ETA_PRIME,
    TWO_PION_MASS_GEV as TWO_PI,
)
from pwa_kmatrix.core.parameters import AdlerZero, KMatrixParameters, PhysicalChannel


@dataclass(frozen=True)
class ResonanceTable:
    """
    One resonance family's fixed K-matrix.

    Attributes:
        name: Short family name ("f0", "a2", ...).
        description: Human-readable family description.
        pole_names: Names of the R poles, in table order. Fit parameters are
            "<pole> re" and "<pole> im" for each.
        parameters: The K-matrix tables.
    """
    name: str
    description: str
    pole_names: Tuple[str, ...]
    parameters: KMatrixParameters

    def __post_init__(self):
        if len(self.pole_names) != self.parameters.n_poles:
            raise ValueError(
                f"{self.name}: {len(self.pole_names)} pole names for "
                f"{self.parameters.n_poles} poles"
            )

    def parameter_names(self) -> Tuple[str, ...]:
        """The 2R fit-parameter names in declared order."""
        names = []
        for pole in self.pole_names:
            names.append(f"{pole} re")
            names.append(f"{pole} im")
        return tuple(names)


# =============================================================================
# Isoscalar scalar: f0
# =============================================================================
# Channels: pi pi, 2pi 2pi, K Kbar, eta eta, eta eta'
F0_TABLE = ResonanceTable(
    name="f0",
    description="isoscalar scalar",
    pole_names=("f0_500", "f0_980", "f0_1370", "f0_1500", "f0_1710"),
    parameters=KMatrixParameters(
        g=[
            [ 0.74987, -0.01257, 0.02736, -0.15102,  0.36103],
            [ 0.06401,  0.00204, 0.77413,  0.50999,  0.13112],
            [-0.23417, -0.01032, 0.72283,  0.11934,  0.36792],
            [ 0.01570,  0.26700, 0.09214,  0.02742, -0.04025],
            [-0.14242,  0.22780, 0.15981,  0.16272, -0.17397],
        ],
        c=[
            [ 0.03728, 0.00000, -0.01398, -0.02203,  0.01397],
            [ 0.00000, 0.00000,  0.00000,  0.00000,  0.00000],
            [-0.01398, 0.00000,  0.02349,  0.03101, -0.04003],
            [-0.02203, 0.00000,  0.03101, -0.13769, -0.06722],
            [ 0.01397, 0.00000, -0.04003, -0.06722, -0.28401],
        ],
        channels=(
            PhysicalChannel("pi pi", PI0, PI0),
            PhysicalChannel("2pi 2pi", TWO_PI, TWO_PI),
            PhysicalChannel("K Kbar", K_PLUS, K0),
            PhysicalChannel("eta eta", ETA, ETA),
            PhysicalChannel("eta eta'", ETA, ETA_PRIME),
        ),
        pole_masses=[0.51461, 0.90630, 1.23089, 1.46104, 1.69611],
        l=0,
        adler_zero=AdlerZero(s_0=0.0091125, s_norm=1.0),
    ),
)

# =============================================================================
# Isotensor tensor: f2
# =============================================================================
# Channels: pi pi, 2pi 2pi, K Kbar, eta eta
F2_TABLE = ResonanceTable(
    name="f2",
    description="isotensor tensor",
    pole_names=("f2_1270", "f2_1525", "f2_1810", "f2_1950"),
    parameters=KMatrixParameters(
        g=[
            [ 0.40033, 0.01820, -0.06709, -0.49924],
            [ 0.15479, 0.17300,  0.22941,  0.19295],
            [-0.08900, 0.32393, -0.43133,  0.27975],
            [-0.00113, 0.15256,  0.23721, -0.03987],
        ],
        c=[
            [-0.04319, 0.00000,  0.00984,  0.01028],
            [ 0.00000, 0.00000,  0.00000,  0.00000],
            [ 0.00984, 0.00000, -0.07344,  0.05533],
            [ 0.01028, 0.00000,  0.05533, -0.05183],
        ],
        channels=(
            PhysicalChannel("pi pi", PI0, PI0),
            PhysicalChannel("2pi 2pi", TWO_PI, TWO_PI),
            PhysicalChannel("K Kbar", K_PLUS, K0),
            PhysicalChannel("eta eta", ETA, ETA),
        ),
        pole_masses=[1.15299, 1.48359, 1.72923, 1.96700],
        l=2,
    ),
)

# =============================================================================
# Isovector scalar: a0
# =============================================================================
# Channels: pi eta, K Kbar
A0_TABLE = ResonanceTable(
    name="a0",
    description="isovector scalar",
    pole_names=("a0_980", "a0_1450"),
    parameters=KMatrixParameters(
        g=[
            [ 0.43215, 0.19000],
            [-0.28825, 0.43372],
        ],
        c=[
            [0.00000, 0.00000],
            [0.00000, 0.00000],
        ],
        channels=(
            PhysicalChannel("pi eta", PI0, ETA),
            PhysicalChannel("K Kbar", K_PLUS, K0),
        ),
        pole_masses=[0.95395, 1.26767],
        l=0,
    ),
)

# =============================================================================
# Isovector tensor: a2
# =============================================================================
# Channels: pi eta, K Kbar, pi eta'
A2_TABLE = ResonanceTable(
    name="a2",
    description="isovector tensor",
    pole_names=("a2_1320", "a2_1700"),
    parameters=KMatrixParameters(
        g=[
            [ 0.30073, 0.68567],
            [ 0.21426, 0.12543],
            [-0.09162, 0.00184],
        ],
        c=[
            [-0.40184,  0.00033, -0.08707],
            [ 0.00033, -0.21416, -0.06193],
            [-0.08707, -0.06193, -0.17435],
        ],
        channels=(
            PhysicalChannel("pi eta", PI0, ETA),
            PhysicalChannel("K Kbar", K_PLUS, K0),
            PhysicalChannel("pi eta'", PI0, ETA_PRIME),
        ),
        pole_masses=[1.30080, 1.75351],
        l=2,
    ),
)

# =============================================================================
# Exotic pseudovector: pi1
# =============================================================================
# Channels: pi eta, pi eta'
PI1_TABLE = ResonanceTable(
    name="pi1",
    description="exotic pseudovector",
    pole_names=("pi1_1600",),
    parameters=KMatrixParameters(
        g=[
            [0.80564],
            [1.04595],
        ],
        c=[
            [1.05000,  0.15163],
            [0.15163, -0.24611],
        ],
        channels=(
            PhysicalChannel("pi eta", PI0, ETA),
            PhysicalChannel("pi eta'", PI0, ETA_PRIME),
        ),
        pole_masses=[1.38552],
        l=1,
    ),
)

RESONANCE_TABLES: Dict[str, ResonanceTable] = {
    table.name: table
    for table in (F0_TABLE, F2_TABLE, A0_TABLE, A2_TABLE, PI1_TABLE)
}


def get_resonance_table(name: str) -> ResonanceTable:
    """Look up a resonance table by family name ("f0", "f2", "a0", "a2", "pi1")."""
    try:
        return RESONANCE_TABLES[name]
    except KeyError:
        raise ValueError(
            f"Unknown resonance family: {name} (expected one of {sorted(RESONANCE_TABLES)})"
        ) from None
