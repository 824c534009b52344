"""Read-only display data for renderers: atoms, bonds, and guideline markers.

Nothing here draws anything.  A front end turns these markers into
spheres and cylinders in whatever graphics toolkit it uses.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from gillespie.construction.guidelines import Guideline
from gillespie.construction.session import Preview
from gillespie.geometry import normalise
from gillespie.model import MolecularStructure
from gillespie.model.structure import ATOM_SCALE_FACTOR

#: Bond cylinder radius relative to the larger endpoint's atom scale.
DEFAULT_BOND_SCALE: float = 0.15

#: Guideline marker radius relative to the core's bond radius.
GUIDELINE_SCALE: float = 0.8

#: Spacing between parallel cylinders of a multiple bond, in bond radii.
MULTI_BOND_SPACING: float = 2.5


@dataclass(frozen=True)
class AtomMarker:
    """Sphere for one atom."""

    index: int
    element: str
    position: np.ndarray
    colour: tuple[float, float, float]
    radius: float


@dataclass(frozen=True)
class BondMarker:
    """Cylinders for one bond, split at the midpoint into two halves.

    Attributes:
        index: Bond index in the structure.
        start: Position of the first atom.
        end: Position of the second atom.
        colour_start: Colour of the half touching the first atom.
        colour_end: Colour of the half touching the second atom.
        radius: Cylinder radius.
        offsets: One perpendicular offset per cylinder, shape
            ``(order, 3)``.
    """

    index: int
    start: np.ndarray
    end: np.ndarray
    colour_start: tuple[float, float, float]
    colour_end: tuple[float, float, float]
    radius: float
    offsets: np.ndarray

    @property
    def midpoint(self) -> np.ndarray:
        return (self.start + self.end) / 2


@dataclass(frozen=True)
class GuidelineMarker:
    """Sphere marking one guideline position.

    ``valid`` is ``False`` when the core atom has no bond capacity
    left; front ends typically tint such markers red.
    """

    position: np.ndarray
    radius: float
    valid: bool


def bond_order_offsets(
    order: int,
    direction: np.ndarray,
    bond_radius: float,
) -> np.ndarray:
    """Perpendicular offsets for the parallel cylinders of a bond.

    A single bond has one cylinder on the axis.  A double bond has two
    cylinders either side of the axis, and a triple bond three arranged
    at 120 degrees around it.

    Args:
        order: Bond order, 1-3.
        direction: Bond axis.  Need not be normalised.
        bond_radius: Cylinder radius.

    Returns:
        Array of shape ``(order, 3)``.
    """
    if order <= 1:
        return np.zeros((1, 3))
    axis = normalise(np.asarray(direction, dtype=float))
    ref = (
        np.array([1.0, 0.0, 0.0]) if abs(axis[0]) < 0.9
        else np.array([0.0, 1.0, 0.0])
    )
    perp = normalise(np.cross(axis, ref))
    spacing = bond_radius * MULTI_BOND_SPACING
    if order == 2:
        return np.array([perp * spacing, -perp * spacing])
    perp2 = normalise(np.cross(axis, perp))
    # Three points at 120 degrees on a circle of radius *spacing*.
    return np.array([
        perp * spacing,
        -perp * spacing / 2 + perp2 * spacing * 0.866,
        -perp * spacing / 2 - perp2 * spacing * 0.866,
    ])


def atom_markers(structure: MolecularStructure) -> list[AtomMarker]:
    """One :class:`AtomMarker` per atom, in structure order."""
    return [
        AtomMarker(
            index=atom.index,
            element=atom.element,
            position=atom.position.copy(),
            colour=atom.colour,
            radius=atom.scale / 2,
        )
        for atom in structure.atoms
    ]


def bond_markers(
    structure: MolecularStructure,
    bond_scale: float = DEFAULT_BOND_SCALE,
) -> list[BondMarker]:
    """One :class:`BondMarker` per bond, in structure order."""
    markers = []
    for bond in structure.bonds:
        a, b = bond.atoms
        radius = max(a.scale, b.scale) * bond_scale
        markers.append(BondMarker(
            index=bond.index,
            start=a.position.copy(),
            end=b.position.copy(),
            colour_start=a.colour,
            colour_end=b.colour,
            radius=radius,
            offsets=bond_order_offsets(
                bond.order, b.position - a.position, radius,
            ),
        ))
    return markers


def guideline_markers(
    guidelines: Iterable[Guideline],
    bond_scale: float = DEFAULT_BOND_SCALE,
) -> list[GuidelineMarker]:
    """Markers for every guideline position, tagged by core capacity."""
    markers = []
    for guideline in guidelines:
        valid = guideline.valid
        radius = guideline.core.scale * bond_scale * GUIDELINE_SCALE
        markers.extend(
            GuidelineMarker(position=pos.copy(), radius=radius, valid=valid)
            for pos in guideline.positions
        )
    return markers


def preview_markers(
    preview: Preview,
    structure: MolecularStructure,
    bond_scale: float = DEFAULT_BOND_SCALE,
) -> tuple[AtomMarker, list[BondMarker]]:
    """Ghost atom and provisional bonds for an uncommitted placement.

    Ghost markers carry index ``-1`` and are drawn entirely in the
    colour of the element being placed.

    Returns:
        ``(ghost_atom, provisional_bonds)``.
    """
    spec = structure.element_spec(preview.element)
    scale = ATOM_SCALE_FACTOR * spec.vdw_radius
    ghost = AtomMarker(
        index=-1,
        element=preview.element,
        position=preview.position.copy(),
        colour=spec.colour,
        radius=scale / 2,
    )
    bonds = [
        BondMarker(
            index=-1,
            start=preview.position.copy(),
            end=target.position.copy(),
            colour_start=spec.colour,
            colour_end=spec.colour,
            radius=max(scale, target.scale) * bond_scale,
            offsets=np.zeros((1, 3)),
        )
        for target in preview.bond_partners
    ]
    return ghost, bonds
