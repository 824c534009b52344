"""Shared constants used across the model and construction layers."""

import numpy as np


def _frozen(*components: float) -> np.ndarray:
    vec = np.array(components, dtype=float)
    vec.setflags(write=False)
    return vec


UP: np.ndarray = _frozen(0.0, 1.0, 0.0)
"""Reference up vector; also the default pose direction."""

FORWARD: np.ndarray = _frozen(0.0, 0.0, 1.0)
"""Reference forward vector used to build rotation axes."""

DEGENERATE_TOLERANCE: float = 1e-3
"""Squared cross-product length below which an axis is degenerate."""

TRIGONAL_ANGLE: float = 120.0
"""Angle between trigonal-planar domains, and the umbrella twist."""

TETRAHEDRAL_ANGLE: float = 109.5
"""Angle between tetrahedral domains in degrees."""

MAX_BOND_ORDER: int = 3
"""Highest bond order a single edge can carry."""

ANGSTROM_TO_NM: float = 0.1
"""Default scale from tabulated angstroms to scene units."""

DEFAULT_BOND_LENGTH: float = 1.5
"""Bond length in angstroms for pairs missing from the table."""
