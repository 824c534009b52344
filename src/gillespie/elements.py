"""Element attributes and ideal bond lengths.

Element colours follow the conventional CPK associations (red for
oxygen, blue for nitrogen, etc.).  Bond lengths are typical covalent
values in angstroms, tabulated per element pair and bond order.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from gillespie._constants import DEFAULT_BOND_LENGTH
from gillespie.model.element_spec import ElementSpec

logger = logging.getLogger(__name__)

#: Known elements, in the order a front-end picker cycles through them.
ELEMENT_SPECS: Mapping[str, ElementSpec] = MappingProxyType({
    spec.symbol: spec for spec in (
        ElementSpec("H",  "Hydrogen",   0xffffff, 1, 1, 0.110),
        ElementSpec("B",  "Boron",      0xffa500, 3, 3, 0.192),
        ElementSpec("C",  "Carbon",     0x252525, 4, 4, 0.170),
        ElementSpec("N",  "Nitrogen",   0x0000ff, 3, 4, 0.155),
        ElementSpec("O",  "Oxygen",     0xff0000, 2, 4, 0.152),
        ElementSpec("F",  "Fluorine",   0x00ff00, 1, 4, 0.147),
        ElementSpec("Cl", "Chlorine",   0x00ff00, 1, 4, 0.175),
        ElementSpec("S",  "Sulfur",     0xffff00, 2, 4, 0.180),
        ElementSpec("P",  "Phosphorus", 0xff8c00, 3, 4, 0.180),
    )
})

#: Spec returned for symbols missing from the table.
DEFAULT_ELEMENT_SPEC = ElementSpec("?", "Unknown", 0x888888, 4, 4, 0.15)


def _pair_key(elem_a: str, elem_b: str, order: int) -> tuple[str, str, int]:
    a, b = sorted((elem_a, elem_b))
    return (a, b, order)


# Ideal bond lengths in angstroms, keyed by (element, element, order).
# Pairs are sorted on load so either spelling of a pair is accepted.
_RAW_BOND_LENGTHS: dict[tuple[str, str, int], float] = {
    ("H", "B", 1): 1.2,
    ("H", "C", 1): 1.1,
    ("H", "Cl", 1): 1.3,
    ("H", "F", 1): 1.0,
    ("H", "N", 1): 1.0,
    ("H", "O", 1): 1.0,
    ("H", "P", 1): 1.4,
    ("H", "S", 1): 1.3,
    ("B", "B", 1): 2.0,
    ("B", "Cl", 1): 1.8,
    ("B", "C", 1): 1.6,
    ("B", "F", 1): 1.4,
    ("B", "N", 1): 1.5,
    ("B", "O", 1): 1.4,
    ("B", "P", 1): 1.9,
    ("B", "S", 1): 1.9,
    ("C", "C", 1): 1.5,
    ("C", "C", 2): 1.3,
    ("C", "C", 3): 1.2,
    ("C", "Cl", 1): 1.8,
    ("C", "F", 1): 1.4,
    ("C", "N", 1): 1.5,
    ("C", "N", 2): 1.3,
    ("C", "N", 3): 1.1,
    ("C", "O", 1): 1.4,
    ("C", "O", 2): 1.2,
    ("C", "P", 1): 1.8,
    ("C", "S", 1): 1.8,
    ("C", "S", 2): 1.6,
    ("Cl", "Cl", 1): 2.3,
    ("Cl", "N", 1): 1.7,
    ("Cl", "O", 1): 1.4,
    ("Cl", "P", 1): 2.0,
    ("F", "N", 1): 1.4,
    ("F", "P", 1): 1.5,
    ("F", "S", 1): 1.5,
    ("N", "N", 1): 1.4,
    ("N", "N", 2): 1.2,
    ("N", "O", 1): 1.4,
    ("N", "O", 2): 1.2,
    ("N", "P", 1): 1.7,
    ("N", "P", 2): 1.6,
    ("N", "S", 1): 1.7,
    ("N", "S", 2): 1.5,
    ("O", "O", 1): 1.5,
    ("O", "P", 1): 1.6,
    ("O", "P", 2): 1.5,
    ("O", "S", 1): 1.6,
    ("O", "S", 2): 1.4,
    ("P", "P", 1): 2.2,
    ("P", "P", 2): 2.0,
    ("P", "S", 2): 1.9,
    ("S", "S", 1): 2.0,
}

BOND_LENGTHS: Mapping[tuple[str, str, int], float] = MappingProxyType({
    _pair_key(a, b, order): length
    for (a, b, order), length in _RAW_BOND_LENGTHS.items()
})


@dataclass(frozen=True)
class ElementTable:
    """Immutable bundle of element specs and ideal bond lengths.

    One table is built at import time (:data:`DEFAULT_ELEMENT_TABLE`)
    and shared by reference.  Customised tables are derived with
    :meth:`with_elements`.

    Attributes:
        specs: Element specs keyed by symbol.
        bond_lengths: Ideal lengths in angstroms keyed by
            ``(symbol_a, symbol_b, order)`` with the pair sorted.
        default_spec: Spec returned for unknown symbols.
        default_length: Length returned for pairs with no entry.
    """

    specs: Mapping[str, ElementSpec] = field(
        default_factory=lambda: ELEMENT_SPECS
    )
    bond_lengths: Mapping[tuple[str, str, int], float] = field(
        default_factory=lambda: BOND_LENGTHS
    )
    default_spec: ElementSpec = DEFAULT_ELEMENT_SPEC
    default_length: float = DEFAULT_BOND_LENGTH

    @property
    def symbols(self) -> list[str]:
        """Known element symbols in table order."""
        return list(self.specs)

    def element_spec(self, symbol: str) -> ElementSpec:
        """Return the spec for *symbol*, or the default spec if unknown."""
        spec = self.specs.get(symbol)
        if spec is None:
            logger.debug("Unknown element %r; using default spec", symbol)
            return self.default_spec
        return spec

    def bond_length(self, elem_a: str, elem_b: str, order: int = 1) -> float:
        """Return the ideal bond length in angstroms.

        The lookup is symmetric in the two elements.  When no entry
        exists for the requested order, the pair's single-bond length
        ``s`` is softened to ``s - ln(order) / s``.  Pairs with no
        entry at all get :attr:`default_length`.  Orders below 1 are
        looked up as single bonds.

        Args:
            elem_a: First element symbol.
            elem_b: Second element symbol.
            order: Bond order.

        Returns:
            The ideal length in angstroms.
        """
        if order < 1:
            logger.debug("Bond order %r below 1; using single bond", order)
            order = 1
        exact = self.bond_lengths.get(_pair_key(elem_a, elem_b, order))
        if exact is not None:
            return exact
        single = self.bond_lengths.get(_pair_key(elem_a, elem_b, 1))
        if single is not None:
            logger.debug(
                "No %s-%s order-%d length; deriving from single bond",
                elem_a, elem_b, order,
            )
            return single - math.log(order) / single
        return self.default_length

    def with_elements(self, specs: Mapping[str, ElementSpec]) -> ElementTable:
        """Return a new table with *specs* added or replacing existing ones."""
        merged = dict(self.specs)
        merged.update(specs)
        return ElementTable(
            specs=MappingProxyType(merged),
            bond_lengths=self.bond_lengths,
            default_spec=self.default_spec,
            default_length=self.default_length,
        )


DEFAULT_ELEMENT_TABLE = ElementTable()


def element_spec(symbol: str) -> ElementSpec:
    """Return the default table's spec for *symbol*.

    Unknown symbols give :data:`DEFAULT_ELEMENT_SPEC` (valence 4,
    steric number 4) rather than an error.
    """
    return DEFAULT_ELEMENT_TABLE.element_spec(symbol)


def bond_length(elem_a: str, elem_b: str, order: int = 1) -> float:
    """Return the default table's ideal bond length in angstroms.

    See :meth:`ElementTable.bond_length`.
    """
    return DEFAULT_ELEMENT_TABLE.bond_length(elem_a, elem_b, order)
