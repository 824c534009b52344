"""Bond-partner ranking for a point about to receive a new atom."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import numpy as np

from gillespie.geometry import VectorLike, as_vector, distance
from gillespie.model import Atom

#: Default catch-radius multiplier for atoms with spare capacity.
DEFAULT_BIAS_FACTOR: float = 1.5

#: Default ranking divisor for atoms with no spare capacity.
DEFAULT_FULL_BIAS: float = 0.5


def overlaps(
    existing: Atom,
    position: VectorLike,
    element: str,
    bias_factor: float = DEFAULT_BIAS_FACTOR,
) -> bool:
    """Check whether a new *element* atom at *position* is in bonding range.

    The catch radius is the ideal single-bond length between the two
    elements, scaled by *bias_factor*.  Atoms with no spare capacity
    use a multiplier of 1, so a full atom has to be approached more
    closely before it attracts a bond.

    Args:
        existing: Atom already in the structure.
        position: Candidate position of the new atom.
        element: Element symbol of the new atom.
        bias_factor: Catch-radius multiplier for atoms with capacity.

    Returns:
        ``True`` if the distance is strictly below the catch radius.
        Always ``False`` for an atom that has been removed from its
        structure.
    """
    if existing.structure is None:
        return False
    bias = 1.0 if existing.empty_bond_capacity == 0 else bias_factor
    ideal = existing.structure.ideal_bond_length(existing, element, 1)
    return distance(existing.position, as_vector(position)) < ideal * bias


def biased_distance(
    atom: Atom,
    point: VectorLike,
    full_bias: float = DEFAULT_FULL_BIAS,
) -> float:
    """Distance from *atom* to *point*, inflated for full atoms.

    Full atoms (no spare capacity) have their distance divided by
    *full_bias*, which pushes them towards the back of a ranking.
    """
    bias = full_bias if atom.empty_bond_capacity == 0 else 1.0
    return distance(atom.position, as_vector(point)) / bias


def _rank(
    point: np.ndarray,
    element: str,
    atoms: Iterable[Atom],
    limit: int,
    bias_factor: float,
    full_bias: float,
) -> list[Atom]:
    hits = [a for a in atoms if overlaps(a, point, element, bias_factor)]
    # Stable sort: ties keep structure order.
    hits.sort(key=lambda a: biased_distance(a, point, full_bias))
    return hits[:limit]


def candidates_for(
    element: str,
    position: VectorLike,
    atoms: Iterable[Atom],
    *,
    valence: int | None = None,
    bias_factor: float = DEFAULT_BIAS_FACTOR,
    full_bias: float = DEFAULT_FULL_BIAS,
) -> list[Atom]:
    """Rank existing atoms as bond partners for a new atom.

    Atoms within bonding range (see :func:`overlaps`) are sorted by
    :func:`biased_distance` and truncated to the new atom's valence,
    so no more partners are proposed than the new atom can hold.

    Args:
        element: Element symbol of the new atom.
        position: Position of the new atom.
        atoms: Existing atoms to consider.
        valence: Maximum number of partners.  Defaults to the valence
            of *element* in the candidates' structure table.
        bias_factor: Catch-radius multiplier for atoms with capacity.
        full_bias: Ranking divisor for full atoms.

    Returns:
        Ranked bond partners, nearest first.  Atoms removed from
        their structure are never proposed.
    """
    atoms = [a for a in atoms if a.structure is not None]
    if not atoms:
        return []
    if valence is None:
        valence = atoms[0].structure.element_spec(element).valence
    return _rank(
        as_vector(position), element, atoms, valence, bias_factor, full_bias,
    )


def candidates_around(
    atom: Atom,
    atoms: Iterable[Atom],
    *,
    bias_factor: float = DEFAULT_BIAS_FACTOR,
    full_bias: float = DEFAULT_FULL_BIAS,
) -> list[Atom]:
    """Rank bond partners for an atom that is already placed.

    Works like :func:`candidates_for` with *atom* itself excluded and
    the result truncated to *atom*'s valence.
    """
    others = [a for a in atoms if a is not atom]
    return _rank(
        atom.position, atom.element, others, atom.valence,
        bias_factor, full_bias,
    )


def sorted_by_distance(
    point: VectorLike,
    positions: Sequence[VectorLike] | np.ndarray,
) -> list[int]:
    """Indices of *positions* ordered by distance to *point*, nearest first."""
    if len(positions) == 0:
        return []
    point = as_vector(point)
    dists = np.linalg.norm(np.asarray(positions, dtype=float) - point, axis=1)
    return [int(i) for i in np.argsort(dists, kind="stable")]
