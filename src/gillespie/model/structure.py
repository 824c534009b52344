from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from gillespie._constants import ANGSTROM_TO_NM, MAX_BOND_ORDER
from gillespie.geometry import VectorLike, as_vector
from gillespie.model.element_spec import ElementSpec

if TYPE_CHECKING:
    from collections.abc import Iterator

    from gillespie.elements import ElementTable

logger = logging.getLogger(__name__)

#: Display radius as a fraction of the van der Waals radius.
ATOM_SCALE_FACTOR: float = 0.7


@dataclass(eq=False)
class Atom:
    """An atom placed in a :class:`MolecularStructure`.

    Atoms are created only by :meth:`MolecularStructure.add_atom`.
    They compare by identity.  Bonds are not stored on the atom: every
    bond-derived property queries the owning structure, so values are
    always current.

    Attributes:
        element: Element symbol.
        position: Cartesian position, shape ``(3,)``, in scene units.
        index: Dense index within the owning structure.
        structure: The owning structure, or ``None`` once removed.
    """

    element: str
    position: np.ndarray
    index: int = 0
    structure: MolecularStructure | None = field(default=None, repr=False)

    @property
    def spec(self) -> ElementSpec:
        """Element spec from the owning structure's table."""
        if self.structure is not None:
            return self.structure.table.element_spec(self.element)
        from gillespie.elements import element_spec

        return element_spec(self.element)

    @property
    def valence(self) -> int:
        return self.spec.valence

    @property
    def steric_number(self) -> int:
        return self.spec.steric_number

    @property
    def colour(self) -> tuple[float, float, float]:
        return self.spec.colour

    @property
    def scale(self) -> float:
        """Display size derived from the van der Waals radius."""
        return ATOM_SCALE_FACTOR * self.spec.vdw_radius

    @property
    def bonds(self) -> list[Bond]:
        """Bonds this atom participates in, in structure order."""
        if self.structure is None:
            return []
        return self.structure.bonds_of(self)

    @property
    def total_bond_order(self) -> int:
        return sum(bond.order for bond in self.bonds)

    @property
    def bonded_atoms(self) -> list[Atom]:
        """Neighbours across each of this atom's bonds."""
        return [bond.other(self) for bond in self.bonds]

    @property
    def empty_bond_capacity(self) -> int:
        """Remaining bond order: ``max(0, valence - total_bond_order)``."""
        return max(0, self.valence - self.total_bond_order)


@dataclass(eq=False)
class Bond:
    """An edge between two atoms of the same structure.

    The pair is unordered: ``Bond(a, b)`` and ``Bond(b, a)`` describe
    the same edge, and a structure holds at most one bond per pair.

    Attributes:
        atom_a: First endpoint.
        atom_b: Second endpoint.
        order: Bond order, 1 (single) to 3 (triple).
        index: Dense index within the owning structure.
    """

    atom_a: Atom
    atom_b: Atom
    order: int = 1
    index: int = 0

    @property
    def atoms(self) -> tuple[Atom, Atom]:
        return (self.atom_a, self.atom_b)

    def involves(self, atom: Atom) -> bool:
        return self.atom_a is atom or self.atom_b is atom

    def matches(self, atom_1: Atom, atom_2: Atom) -> bool:
        """Check whether this bond joins *atom_1* and *atom_2*, in either order."""
        forward = self.atom_a is atom_1 and self.atom_b is atom_2
        reverse = self.atom_a is atom_2 and self.atom_b is atom_1
        return forward or reverse

    def other(self, atom: Atom) -> Atom:
        """Return the endpoint that is not *atom*.

        Raises:
            ValueError: If *atom* is not an endpoint of this bond.
        """
        if self.atom_a is atom:
            return self.atom_b
        if self.atom_b is atom:
            return self.atom_a
        raise ValueError(f"atom {atom.index} is not an endpoint of this bond")

    @property
    def length(self) -> float:
        return float(np.linalg.norm(self.atom_b.position - self.atom_a.position))

    def __repr__(self) -> str:
        return (
            f"Bond({self.atom_a.element}{self.atom_a.index}-"
            f"{self.atom_b.element}{self.atom_b.index}, "
            f"order={self.order}, index={self.index})"
        )


class MolecularStructure:
    """Atoms and bonds of the molecule being built.

    The structure is the only owner and the only mutator of its atom
    and bond lists.  Insertion order is preserved, and indices are
    reassigned densely whenever an atom is removed.  Every bond's
    endpoints are members of the current atom list.

    Args:
        table: Element table used for specs and bond lengths.
            Defaults to :data:`gillespie.elements.DEFAULT_ELEMENT_TABLE`.
        length_scale: Factor converting tabulated angstrom lengths to
            scene units.  Defaults to ``0.1`` (nanometres).
    """

    def __init__(
        self,
        table: ElementTable | None = None,
        length_scale: float = ANGSTROM_TO_NM,
    ) -> None:
        if table is None:
            from gillespie.elements import DEFAULT_ELEMENT_TABLE

            table = DEFAULT_ELEMENT_TABLE
        if length_scale <= 0:
            raise ValueError(
                f"length_scale must be positive, got {length_scale}"
            )
        self.table = table
        self.length_scale = length_scale
        self._atoms: list[Atom] = []
        self._bonds: list[Bond] = []

    def __repr__(self) -> str:
        return (
            f"MolecularStructure(atoms={len(self._atoms)}, "
            f"bonds={len(self._bonds)})"
        )

    def __len__(self) -> int:
        return len(self._atoms)

    def __iter__(self) -> Iterator[Atom]:
        return iter(self._atoms)

    def __contains__(self, atom: object) -> bool:
        return isinstance(atom, Atom) and atom.structure is self

    @property
    def atoms(self) -> tuple[Atom, ...]:
        """Read-only view of the atoms in insertion order."""
        return tuple(self._atoms)

    @property
    def bonds(self) -> tuple[Bond, ...]:
        """Read-only view of the bonds in insertion order."""
        return tuple(self._bonds)

    @property
    def positions(self) -> np.ndarray:
        """Atom positions as an ``(n_atoms, 3)`` array."""
        if not self._atoms:
            return np.zeros((0, 3))
        return np.array([atom.position for atom in self._atoms])

    def element_spec(self, symbol: str) -> ElementSpec:
        return self.table.element_spec(symbol)

    def ideal_bond_length(
        self,
        a: Atom | str,
        b: Atom | str,
        order: int = 1,
    ) -> float:
        """Ideal bond length in scene units.

        Args:
            a: Atom or element symbol.
            b: Atom or element symbol.
            order: Bond order.

        Returns:
            The tabulated length multiplied by :attr:`length_scale`.
        """
        elem_a = a.element if isinstance(a, Atom) else a
        elem_b = b.element if isinstance(b, Atom) else b
        return self.table.bond_length(elem_a, elem_b, order) * self.length_scale

    def add_atom(self, element: str, position: VectorLike) -> Atom:
        """Append a new atom and return it.

        Raises:
            ValueError: If *position* is not a 3-vector.
        """
        atom = Atom(
            element=element,
            position=as_vector(position),
            index=len(self._atoms),
            structure=self,
        )
        self._atoms.append(atom)
        return atom

    def find_bond(self, a: Atom, b: Atom) -> Bond | None:
        """Return the bond joining *a* and *b* in either order, if any."""
        for bond in self._bonds:
            if bond.matches(a, b):
                return bond
        return None

    def bonds_of(self, atom: Atom) -> list[Bond]:
        return [bond for bond in self._bonds if bond.involves(atom)]

    def add_bond(self, a: Atom, b: Atom, order: int = 1) -> Bond | None:
        """Bond *a* to *b*, or raise the order of an existing bond.

        If the pair is already bonded the existing bond's order goes up
        by one, to a maximum of 3; the bond is returned unchanged once
        at the maximum.  A new bond takes *order* clamped into 1-3.
        Bonding an atom to itself is ignored.

        Returns:
            The new or existing bond, or ``None`` for a self-bond.

        Raises:
            ValueError: If either atom does not belong to this structure.
        """
        for atom in (a, b):
            if atom not in self:
                raise ValueError(
                    f"atom {atom!r} does not belong to this structure"
                )
        if a is b:
            logger.debug("Ignoring self-bond on atom %d", a.index)
            return None

        existing = self.find_bond(a, b)
        if existing is not None:
            if existing.order < MAX_BOND_ORDER:
                existing.order += 1
            return existing

        clamped = min(max(int(order), 1), MAX_BOND_ORDER)
        if clamped != order:
            logger.debug("Clamped bond order %r to %d", order, clamped)
        bond = Bond(a, b, clamped, index=len(self._bonds))
        self._bonds.append(bond)
        return bond

    def remove_bond(self, bond: Bond) -> None:
        """Remove *bond*.  Indices are not reassigned."""
        for i, existing in enumerate(self._bonds):
            if existing is bond:
                del self._bonds[i]
                return

    def remove_atom(self, atom: Atom) -> None:
        """Remove *atom* and all its bonds, then reindex densely.

        Removing an atom that is not in the structure does nothing.
        """
        if atom not in self:
            logger.debug("Ignoring removal of foreign atom %r", atom)
            return
        for bond in self.bonds_of(atom):
            self.remove_bond(bond)
        self._atoms = [a for a in self._atoms if a is not atom]
        atom.structure = None
        self.reindex()

    def reindex(self) -> None:
        """Reassign atom and bond indices to ``0..n-1`` in list order."""
        for i, atom in enumerate(self._atoms):
            atom.index = i
        for i, bond in enumerate(self._bonds):
            bond.index = i
