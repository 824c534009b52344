"""Core data model for gillespie: element specs, the molecular graph, and settings.

Everything is re-exported here so that ``from gillespie.model import
MolecularStructure`` works.
"""

from gillespie.model.colour import Colour, colour_to_hex, normalise_colour
from gillespie.model.element_spec import ElementSpec
from gillespie.model.settings import PlacementSettings
from gillespie.model.structure import Atom, Bond, MolecularStructure

__all__ = [
    "Atom",
    "Bond",
    "Colour",
    "ElementSpec",
    "MolecularStructure",
    "PlacementSettings",
    "colour_to_hex",
    "normalise_colour",
]
