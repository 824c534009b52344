"""Shared test fixtures for gillespie."""

import numpy as np
import pytest

from gillespie.model import MolecularStructure


@pytest.fixture
def structure():
    """Return an empty structure using the default element table."""
    return MolecularStructure()


@pytest.fixture
def ethane_fragment(structure):
    """Return ``(structure, c1, c2, c3)``: a C-C-C chain bent at c1.

    c1 sits at the origin with single bonds to c2 along +x and to c3
    at 109.5 degrees in the xy-plane.
    """
    length = structure.ideal_bond_length("C", "C")
    angle = np.radians(109.5)
    c1 = structure.add_atom("C", [0.0, 0.0, 0.0])
    c2 = structure.add_atom("C", [length, 0.0, 0.0])
    c3 = structure.add_atom(
        "C", [length * np.cos(angle), length * np.sin(angle), 0.0],
    )
    structure.add_bond(c1, c2)
    structure.add_bond(c1, c3)
    return structure, c1, c2, c3
