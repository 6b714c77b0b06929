"""
K-matrix module: the generic engine and the literal resonance tables.

- KMatrixEngine: barrier matrix, K-matrix, phase space, (I + KC)⁻¹ row and
  P-vector for fixed C-channel, R-pole tables
- ResonanceTable and the five tables F0_TABLE, F2_TABLE, A0_TABLE,
  A2_TABLE, PI1_TABLE
"""

from pwa_kmatrix.kmatrix.engine import KMatrixEngine
from pwa_kmatrix.kmatrix.resonances import (
    ResonanceTable,
    F0_TABLE,
    F2_TABLE,
    A0_TABLE,
    A2_TABLE,
    PI1_TABLE,
    RESONANCE_TABLES,
    get_resonance_table,
)

__all__ = [
    "KMatrixEngine",
    "ResonanceTable",
    "F0_TABLE",
    "F2_TABLE",
    "A0_TABLE",
    "A2_TABLE",
    "PI1_TABLE",
    "RESONANCE_TABLES",
    "get_resonance_table",
]
