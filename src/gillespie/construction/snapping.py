"""Blend a raw placement towards the guidelines of nearby atoms."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from gillespie.construction.guidelines import Guideline, calculate_guidelines
from gillespie.geometry import VectorLike, as_vector
from gillespie.model import Atom

#: Default steepness of the snap strength falloff.
DEFAULT_SNAP_FALLOFF: float = 4.0


def snap_strength(dist: float, falloff: float = DEFAULT_SNAP_FALLOFF) -> float:
    """Blend weight ``1 / (1 + falloff * dist) ** 2``.

    Close to 1 for small distances and negligible for distances well
    above one scene unit.
    """
    return 1.0 / (1.0 + falloff * dist) ** 2


def blend_towards(
    target: VectorLike,
    guidelines: Sequence[Guideline],
    falloff: float = DEFAULT_SNAP_FALLOFF,
) -> np.ndarray:
    """Pull *target* towards each guideline in turn.

    For each guideline, in order, the position nearest the current
    working point is chosen and the working point moves towards it by
    :func:`snap_strength` of the gap.  Each step starts from the
    result of the previous one, so earlier guidelines pull harder.
    Guidelines without positions are skipped.

    Returns:
        The blended position.
    """
    working = as_vector(target)
    for guideline in guidelines:
        nearest = guideline.nearest(working)
        if nearest is None:
            continue
        diff = nearest - working
        dist = float(np.linalg.norm(diff))
        working = working + diff * snap_strength(dist, falloff)
    return working


def snap_position(
    element: str,
    target: VectorLike,
    candidates: Sequence[Atom],
    pose: VectorLike | None = None,
    falloff: float = DEFAULT_SNAP_FALLOFF,
) -> np.ndarray:
    """Snap a raw placement for *element* towards ideal bond positions.

    Args:
        element: Element symbol of the atom being placed.
        target: Raw placement, e.g. the cursor position.
        candidates: Ranked bond partners from
            :func:`~gillespie.construction.candidates.candidates_for`.
            Their order is the order the pulls are applied in.
        pose: Point that fixes the free guideline rotation.  Defaults
            to *target*.
        falloff: Snap strength falloff.

    Returns:
        The snapped position.  Equal to *target* when there are no
        candidates.
    """
    target = as_vector(target)
    if not candidates:
        return target
    pose = target if pose is None else pose
    guidelines = calculate_guidelines(candidates, element, pose)
    return blend_towards(target, guidelines, falloff)
