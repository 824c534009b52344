"""VSEPR guideline directions for the next bond around a core atom.

A core atom's existing bonds fix some directions ("hard points").  The
remaining electron domains are arranged according to the core's
effective steric number: 2 gives a linear, 3 a trigonal-planar and 4 a
tetrahedral arrangement.  When fewer than two hard points exist the
arrangement can still spin freely, and an optional *pose* point (for
example the cursor) picks the rotation.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

from gillespie._constants import FORWARD, TETRAHEDRAL_ANGLE, TRIGONAL_ANGLE, UP
from gillespie.geometry import (
    VectorLike,
    as_vector,
    normalise,
    perpendicular,
    rotate,
    rotation_axis,
)
from gillespie.model import Atom, MolecularStructure


@dataclass
class Guideline:
    """Ideal positions for a new bond around one core atom.

    Attributes:
        core: The atom the guideline belongs to.
        directions: Unit directions from the core, shape ``(n, 3)``.
        positions: Absolute positions at the ideal bond length for the
            element being placed, shape ``(n, 3)``.
    """

    core: Atom
    directions: np.ndarray
    positions: np.ndarray

    def __len__(self) -> int:
        return len(self.positions)

    @property
    def valid(self) -> bool:
        """Whether the core can still accept a bond."""
        return empty_bond_capacity(self.core) > 0

    def nearest(self, point: VectorLike) -> np.ndarray | None:
        """Return the guideline position closest to *point*, if any."""
        if len(self.positions) == 0:
            return None
        point = as_vector(point)
        dists = np.linalg.norm(self.positions - point, axis=1)
        return self.positions[int(np.argmin(dists))]


def empty_bond_capacity(atom: Atom) -> int:
    """Remaining bond order on *atom*: ``max(0, valence - total_bond_order)``."""
    return max(0, atom.valence - atom.total_bond_order)


def effective_steric_number(atom: Atom) -> int:
    """Steric number less the extra domains used by multiple bonds.

    A double bond occupies two electron domains but contributes only
    one hard point, so every bond order above one reduces the number
    of directions left to arrange.
    """
    bonds = atom.bonds
    extra_orders = sum(bond.order for bond in bonds) - len(bonds)
    return atom.steric_number - extra_orders


def hard_points(atom: Atom) -> np.ndarray:
    """Unit directions from *atom* to each bonded neighbour, shape ``(k, 3)``."""
    neighbours = atom.bonded_atoms
    if not neighbours:
        return np.zeros((0, 3))
    return np.array([
        normalise(other.position - atom.position) for other in neighbours
    ])


def _pose_direction(core_position: np.ndarray, pose: np.ndarray) -> np.ndarray:
    direction = normalise(pose - core_position)
    if not direction.any():
        return UP.copy()
    return direction


def _no_hard_points(
    core_position: np.ndarray,
    pose: np.ndarray,
    steric: int,
) -> list[np.ndarray]:
    primary = _pose_direction(core_position, pose)
    axis = rotation_axis(primary, FORWARD, references=(UP,))
    dirs = [primary]
    if steric == 2:
        dirs.append(-primary)
    elif steric == 3:
        dirs.append(rotate(primary, axis, TRIGONAL_ANGLE))
        dirs.append(rotate(primary, axis, -TRIGONAL_ANGLE))
    elif steric == 4:
        sp3 = rotate(primary, axis, TETRAHEDRAL_ANGLE)
        dirs.append(sp3)
        dirs.append(rotate(sp3, primary, -TRIGONAL_ANGLE))
        dirs.append(rotate(sp3, primary, TRIGONAL_ANGLE))
    return dirs


def _one_hard_point(
    core_position: np.ndarray,
    hard: np.ndarray,
    pose: np.ndarray,
    steric: int,
) -> list[np.ndarray]:
    ideal = _pose_direction(core_position, pose)
    axis = rotation_axis(ideal, hard, base=hard, references=(UP, FORWARD))
    if steric == 2:
        return [-hard]
    if steric == 3:
        return [
            rotate(hard, axis, TRIGONAL_ANGLE),
            rotate(hard, axis, -TRIGONAL_ANGLE),
        ]
    if steric == 4:
        # Mirrored umbrella: the occupied leg is the hard point.
        sp3 = rotate(hard, axis, -TETRAHEDRAL_ANGLE)
        return [
            sp3,
            rotate(sp3, hard, -TRIGONAL_ANGLE),
            rotate(sp3, hard, TRIGONAL_ANGLE),
        ]
    return []


def _two_hard_points(points: np.ndarray, steric: int) -> list[np.ndarray]:
    total = points[0] + points[1]
    opposite = normalise(-total)
    if not opposite.any():
        # Collinear legs: any direction perpendicular to them is free.
        opposite = perpendicular(points[0])
    if steric == 3:
        return [opposite]
    if steric == 4:
        inner = rotation_axis(opposite, points[0], references=(UP, FORWARD))
        outer = rotation_axis(opposite, inner)
        half = TETRAHEDRAL_ANGLE / 2
        return [
            rotate(opposite, outer, half),
            rotate(opposite, outer, -half),
        ]
    return []


def _three_hard_points(points: np.ndarray, steric: int) -> list[np.ndarray]:
    if steric != 4:
        return []
    opposite = normalise(-(points[0] + points[1] + points[2]))
    if not opposite.any():
        # Planar legs: the free domain sits on the plane normal.
        opposite = rotation_axis(points[0], points[1])
    return [opposite]


def guideline_directions(
    core_position: VectorLike,
    points: Sequence[VectorLike] | np.ndarray,
    steric: int,
    pose: VectorLike | None = None,
) -> np.ndarray:
    """Ideal unit directions for new bonds around a core atom.

    Args:
        core_position: Position of the core atom.
        points: Unit directions to already-bonded neighbours.
        steric: Effective steric number of the core.
        pose: Point used to choose the free rotation when fewer than
            two hard points exist.  Defaults to one unit above the
            core.

    Returns:
        Array of shape ``(n, 3)``.  With no hard points the first row
        points at *pose* and the total count equals the steric number
        for steric numbers 2-4.  With four or more hard points, or a
        steric number the hard-point count cannot accommodate, the
        array is empty.
    """
    core_position = as_vector(core_position)
    points = np.asarray(points, dtype=float).reshape(-1, 3)
    pose_vec = core_position + UP if pose is None else as_vector(pose)

    n_points = len(points)
    if n_points == 0:
        dirs = _no_hard_points(core_position, pose_vec, steric)
    elif n_points == 1:
        dirs = _one_hard_point(core_position, points[0], pose_vec, steric)
    elif n_points == 2:
        dirs = _two_hard_points(points, steric)
    elif n_points == 3:
        dirs = _three_hard_points(points, steric)
    else:
        dirs = []

    if not dirs:
        return np.zeros((0, 3))
    return np.array(dirs)


def calculate_guidelines(
    cores: Iterable[Atom],
    new_element: str,
    pose: VectorLike | None = None,
    structure: MolecularStructure | None = None,
) -> list[Guideline]:
    """Compute guidelines around each core for placing *new_element*.

    Args:
        cores: Atoms to compute guidelines around.
        new_element: Element symbol of the atom being placed; sets the
            ideal bond length.
        pose: Point used to choose the free rotation (see
            :func:`guideline_directions`).
        structure: Structure the cores must belong to.  Defaults to
            each core's own structure.

    Returns:
        One :class:`Guideline` per core, in input order.

    Raises:
        ValueError: If a core atom is not part of the structure.
    """
    results: list[Guideline] = []
    for core in cores:
        owner = core.structure if structure is None else structure
        if owner is None or core not in owner:
            raise ValueError(
                f"core atom {core!r} is not part of the structure"
            )
        directions = guideline_directions(
            core.position,
            hard_points(core),
            effective_steric_number(core),
            pose,
        )
        bond_len = owner.ideal_bond_length(core, new_element)
        positions = core.position + directions * bond_len
        results.append(Guideline(core, directions, positions))
    return results

