"""Vector helpers shared by the guideline and placement code.

All vectors are numpy arrays of shape ``(3,)``.  Rotations go through
:class:`scipy.spatial.transform.Rotation`, which stores them as unit
quaternions.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
from scipy.spatial.transform import Rotation

from gillespie._constants import DEGENERATE_TOLERANCE, FORWARD, UP

logger = logging.getLogger(__name__)

#: Anything :func:`as_vector` accepts as a 3D point or direction.
VectorLike = np.ndarray | Sequence[float]


def as_vector(value: VectorLike) -> np.ndarray:
    """Return *value* as a float array of shape ``(3,)``.

    Raises:
        ValueError: If *value* does not hold exactly three components.
    """
    vec = np.array(value, dtype=float)
    if vec.shape != (3,):
        raise ValueError(f"expected a 3-vector, got shape {vec.shape}")
    return vec


def normalise(vec: np.ndarray) -> np.ndarray:
    """Return the unit vector along *vec*, or zeros for a zero vector."""
    length = np.linalg.norm(vec)
    if length < 1e-12:
        return np.zeros(3)
    return vec / length


def distance(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean distance between two points."""
    return float(np.linalg.norm(np.asarray(a) - np.asarray(b)))


def rotate(vec: np.ndarray, axis: np.ndarray, angle_deg: float) -> np.ndarray:
    """Rotate *vec* about *axis* by *angle_deg* degrees and normalise.

    The rotation is right-handed: a positive angle turns
    counter-clockwise when looking down *axis* towards the origin.

    Args:
        vec: Vector to rotate.
        axis: Rotation axis.  Normalised internally.
        angle_deg: Rotation angle in degrees.

    Returns:
        The rotated unit vector.
    """
    rotvec = normalise(np.asarray(axis, dtype=float)) * np.radians(angle_deg)
    rotated = Rotation.from_rotvec(rotvec).apply(np.asarray(vec, dtype=float))
    return normalise(rotated)


def rotation_axis(
    a: np.ndarray,
    b: np.ndarray,
    *,
    base: np.ndarray | None = None,
    references: Sequence[np.ndarray] = (UP, FORWARD),
    tolerance: float = DEGENERATE_TOLERANCE,
) -> np.ndarray:
    """Return ``normalise(a x b)``, guarding against parallel inputs.

    When the cross product is too short to define an axis, *base*
    (defaults to *a*) is crossed with each of *references* in turn
    until one gives a usable axis.  The squared length of the raw cross
    product is compared against *tolerance*.

    Args:
        a: First vector.
        b: Second vector.
        base: Vector crossed with the fallback references.
        references: Fallback vectors to cross with *base*.
        tolerance: Minimum squared cross-product length.

    Returns:
        A unit vector.
    """
    cross = np.cross(a, b)
    if np.dot(cross, cross) >= tolerance:
        return normalise(cross)
    base = a if base is None else base
    for ref in references:
        cross = np.cross(base, ref)
        if np.dot(cross, cross) >= tolerance:
            logger.debug("Degenerate cross product; substituted %s", ref)
            return normalise(cross)
    # Only reachable when base is itself zero.
    logger.debug("Degenerate cross product with zero vector; using %s", UP)
    return UP.copy()


def perpendicular(vec: np.ndarray) -> np.ndarray:
    """Return a unit vector perpendicular to *vec*."""
    return rotation_axis(vec, UP, references=(FORWARD, np.array([1.0, 0.0, 0.0])))


def angle_between(a: np.ndarray, b: np.ndarray) -> float:
    """Angle between two vectors in degrees."""
    cos = np.dot(normalise(a), normalise(b))
    return float(np.degrees(np.arccos(np.clip(cos, -1.0, 1.0))))
