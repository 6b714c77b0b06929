"""
Physical constants and runtime configuration for the K-matrix engine.

Masses are PDG values in GeV, rounded the way the published K-matrix fits
quote them. Runtime settings (worker count, chunk size) are loaded
from constants.json if available, otherwise default values are used.
"""

import json
import warnings
from pathlib import Path
from typing import Dict, Any

# =============================================================================
# Load Runtime Constants from JSON
# =============================================================================

# Path to constants.json (same directory as this file)
_CONSTANTS_JSON_PATH = Path(__file__).parent / "constants.json"

# Default values (used if constants.json is missing)
_DEFAULT_CONSTANTS: Dict[str, Any] = {
    "n_workers": 1,  # Processes used by precalculation
    "chunk_size": 512,  # Events handed to a worker at once
}


def load_constants_from_json() -> Dict[str, Any]:
    """
    Load runtime constants from constants.json.

    If the file doesn't exist or is invalid, returns default values.

    Returns:
        Dictionary with constant names as keys and values.
    """
    if _CONSTANTS_JSON_PATH.exists():
        try:
            with open(_CONSTANTS_JSON_PATH, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
                # Merge with defaults to ensure all keys exist
                result = _DEFAULT_CONSTANTS.copy()
                result.update(loaded)
                if "hbarc" in loaded:
                    warnings.warn(
                        "constants.json sets 'hbarc', which is ignored; "
                        "barrier factors always use HBARC = 0.1973"
                    )
                return result
        except (json.JSONDecodeError, IOError) as e:
            warnings.warn(f"Failed to load constants.json: {e}. Using defaults.")
            return _DEFAULT_CONSTANTS.copy()
    else:
        return _DEFAULT_CONSTANTS.copy()


def save_constants_to_json(constants: Dict[str, Any]) -> None:
    """
    Save runtime constants to constants.json.

    Args:
        constants: Dictionary with constant names and values.
                   Should contain: n_workers, chunk_size
    """
    with open(_CONSTANTS_JSON_PATH, 'w', encoding='utf-8') as f:
        json.dump(constants, f, indent=4)


def get_constants_json_path() -> Path:
    """Return the path to the constants.json file."""
    return _CONSTANTS_JSON_PATH


# Load constants at module import time
_LOADED_CONSTANTS = load_constants_from_json()

# =============================================================================
# Barrier-Factor Scale
# =============================================================================
# hbar*c in GeV·fm. Blatt-Weisskopf factors are functions of
#     z = q² / (hbar c)²
# i.e. the breakup momentum measured against a 1 fm interaction radius.
# The published K-matrix tables were fitted with 0.1973, not the CODATA
# 0.19732698 value; it is fixed here and not read from constants.json.
HBARC: float = 0.1973

# =============================================================================
# Precalculation Defaults
# =============================================================================

# Number of worker processes used for a precalculation pass
N_WORKERS: int = _LOADED_CONSTANTS["n_workers"]

# Number of events per worker task
CHUNK_SIZE: int = _LOADED_CONSTANTS["chunk_size"]

# Angular momenta with a closed-form Blatt-Weisskopf factor
SUPPORTED_L = (0, 1, 2, 3, 4)

# =============================================================================
# Decay-Product Masses (GeV)
# =============================================================================

PION_NEUTRAL_MASS_GEV: float = 0.13498
KAON_CHARGED_MASS_GEV: float = 0.49368
KAON_NEUTRAL_MASS_GEV: float = 0.49761
ETA_MASS_GEV: float = 0.54786
ETA_PRIME_MASS_GEV: float = 0.95778

# Effective "2pi" mass used for the 4pi channel (two 2pi clusters)
TWO_PION_MASS_GEV: float = 0.26995
