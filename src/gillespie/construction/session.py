"""Interactive build session: preview a placement, then commit it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from gillespie.construction.candidates import candidates_for, sorted_by_distance
from gillespie.construction.guidelines import Guideline, calculate_guidelines
from gillespie.construction.snapping import blend_towards
from gillespie.geometry import VectorLike, as_vector, distance
from gillespie.model import Atom, MolecularStructure, PlacementSettings

logger = logging.getLogger(__name__)


@dataclass
class Preview:
    """A placement computed against the current structure, not yet applied.

    Attributes:
        element: Element symbol being placed.
        cursor: Raw cursor position the preview was computed from.
        position: Snapped position the atom would be placed at.
        candidates: Ranked bond partners, nearest first.
        guidelines: Guidelines around each candidate, in ranking order.
    """

    element: str
    cursor: np.ndarray
    position: np.ndarray
    candidates: list[Atom] = field(default_factory=list)
    guidelines: list[Guideline] = field(default_factory=list)

    @property
    def bond_partners(self) -> list[Atom]:
        """Candidates that still have capacity for a provisional bond."""
        return [atom for atom in self.candidates if atom.empty_bond_capacity > 0]


class BuildSession:
    """Single-writer front end over a :class:`MolecularStructure`.

    A session holds the element currently selected for placement and
    the placement settings.  :meth:`preview` is safe to call every
    frame: it never mutates the structure.  :meth:`commit` performs
    the placement.

    Args:
        structure: Structure to build into.  A new empty structure
            using ``settings.length_scale`` is created by default.
        element: Initially selected element symbol.
        settings: Placement tuning.  Defaults to
            :class:`PlacementSettings` defaults.
    """

    def __init__(
        self,
        structure: MolecularStructure | None = None,
        element: str = "C",
        settings: PlacementSettings | None = None,
    ) -> None:
        self.settings = PlacementSettings() if settings is None else settings
        if structure is None:
            structure = MolecularStructure(
                length_scale=self.settings.length_scale,
            )
        self.structure = structure
        self.element = element

    def cycle_element(self, step: int = 1) -> str:
        """Select the element *step* places along the table, wrapping round.

        An element missing from the table jumps to the first symbol
        (or the last, for a negative step).

        Returns:
            The newly selected symbol.
        """
        symbols = self.structure.table.symbols
        if self.element not in symbols:
            self.element = symbols[0] if step > 0 else symbols[-1]
        else:
            current = symbols.index(self.element)
            self.element = symbols[(current + step) % len(symbols)]
        return self.element

    def preview(self, cursor: VectorLike) -> Preview:
        """Compute where the selected element would land at *cursor*.

        The structure is read but never modified.
        """
        cursor = as_vector(cursor)
        candidates = candidates_for(
            self.element,
            cursor,
            self.structure.atoms,
            bias_factor=self.settings.bias_factor,
            full_bias=self.settings.full_bias,
        )
        if not candidates:
            return Preview(self.element, cursor, cursor.copy())
        guidelines = calculate_guidelines(
            candidates, self.element, cursor, self.structure,
        )
        position = blend_towards(cursor, guidelines, self.settings.snap_falloff)
        return Preview(self.element, cursor, position, candidates, guidelines)

    def apply(self, preview: Preview) -> Atom:
        """Add the previewed atom and bond it to its partners.

        Partners are bonded in ranking order while both the new atom
        and the partner have capacity left.

        Raises:
            ValueError: If a candidate has been removed from the
                structure since the preview was computed.  The
                structure is left untouched.
        """
        stale = [target for target in preview.candidates
                 if target not in self.structure]
        if stale:
            raise ValueError(
                f"preview is stale: {len(stale)} candidate(s) no longer "
                "in the structure"
            )
        atom = self.structure.add_atom(preview.element, preview.position)
        for target in preview.candidates:
            if atom.empty_bond_capacity <= 0:
                break
            if target.empty_bond_capacity <= 0:
                continue
            self.structure.add_bond(atom, target, 1)
        logger.debug(
            "Placed %s%d with %d bond(s)",
            atom.element, atom.index, len(atom.bonds),
        )
        return atom

    def commit(self, position: VectorLike) -> Atom:
        """Place the selected element at *position*, snapping and bonding.

        Candidate selection and guidelines see the structure as it was
        before the new atom is added.
        """
        return self.apply(self.preview(position))

    def atom_at(
        self,
        point: VectorLike,
        tolerance: float | None = None,
    ) -> Atom | None:
        """Return the atom under *point*, if any.

        Only the nearest atom is considered.  It is hit when *point*
        lies within *tolerance*, or within its display radius
        (``scale / 2``) when no tolerance is given.
        """
        atoms = self.structure.atoms
        order = sorted_by_distance(point, [atom.position for atom in atoms])
        if not order:
            return None
        nearest = atoms[order[0]]
        radius = nearest.scale / 2 if tolerance is None else tolerance
        if distance(nearest.position, as_vector(point)) <= radius:
            return nearest
        return None

    def remove_at(
        self,
        point: VectorLike,
        tolerance: float | None = None,
    ) -> Atom | None:
        """Remove the atom under *point* and return it, if any."""
        atom = self.atom_at(point, tolerance)
        if atom is not None:
            self.structure.remove_atom(atom)
        return atom
