"""Gillespie: VSEPR-guided placement for building molecules atom by atom.

Gillespie keeps a small molecular graph, ranks nearby atoms as bond
partners for a new atom, and snaps the new atom towards the ideal
electron-domain directions of its partners.

Example usage::

    from gillespie import BuildSession

    session = BuildSession(element="C")
    carbon = session.commit([0.0, 0.0, 0.0])
    session.element = "H"
    preview = session.preview([0.0, 0.1, 0.0])
    hydrogen = session.apply(preview)
"""

from gillespie.elements import (
    BOND_LENGTHS,
    DEFAULT_ELEMENT_SPEC,
    DEFAULT_ELEMENT_TABLE,
    ELEMENT_SPECS,
    ElementTable,
    bond_length,
    element_spec,
)
from gillespie.model import (
    Atom,
    Bond,
    Colour,
    ElementSpec,
    MolecularStructure,
    PlacementSettings,
    colour_to_hex,
    normalise_colour,
)
from gillespie.construction.candidates import (
    biased_distance,
    candidates_around,
    candidates_for,
    overlaps,
    sorted_by_distance,
)
from gillespie.construction.guidelines import (
    Guideline,
    calculate_guidelines,
    effective_steric_number,
    empty_bond_capacity,
    guideline_directions,
    hard_points,
)
from gillespie.construction.snapping import (
    blend_towards,
    snap_position,
    snap_strength,
)
from gillespie.construction.session import BuildSession, Preview
from gillespie.construction.settings_io import (
    SettingsSet,
    load_settings,
    save_settings,
)
from gillespie.display import (
    AtomMarker,
    BondMarker,
    GuidelineMarker,
    atom_markers,
    bond_markers,
    bond_order_offsets,
    guideline_markers,
    preview_markers,
)

__all__ = [
    "Atom",
    "AtomMarker",
    "BOND_LENGTHS",
    "Bond",
    "BondMarker",
    "BuildSession",
    "Colour",
    "DEFAULT_ELEMENT_SPEC",
    "DEFAULT_ELEMENT_TABLE",
    "ELEMENT_SPECS",
    "ElementSpec",
    "ElementTable",
    "Guideline",
    "GuidelineMarker",
    "MolecularStructure",
    "PlacementSettings",
    "Preview",
    "SettingsSet",
    "atom_markers",
    "biased_distance",
    "blend_towards",
    "bond_length",
    "bond_markers",
    "bond_order_offsets",
    "calculate_guidelines",
    "candidates_around",
    "candidates_for",
    "colour_to_hex",
    "effective_steric_number",
    "element_spec",
    "empty_bond_capacity",
    "guideline_directions",
    "guideline_markers",
    "hard_points",
    "load_settings",
    "normalise_colour",
    "overlaps",
    "preview_markers",
    "save_settings",
    "snap_position",
    "snap_strength",
    "sorted_by_distance",
]
