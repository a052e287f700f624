"""Vector helpers shared by the reach passes and the frame derivation.

All points are float64 numpy arrays of shape (3,).
"""

import logging
from typing import Optional

import numpy as np
import numpy.typing as npt

from .constants import EPSILON_FLOAT64
from .exceptions import DegenerateSegment

logger = logging.getLogger(__name__)


def as_point(value: npt.ArrayLike) -> np.ndarray:
    """Coerce a 3-vector-like value into a float64 array of shape (3,).

    Raises:
        ValueError: If the value does not have three finite components.
    """
    point = np.array(value, dtype=np.float64)
    if point.shape != (3,):
        raise ValueError(f"Expected a 3D point, got shape {point.shape}")
    if not np.all(np.isfinite(point)):
        raise ValueError(f"Point has non-finite components: {point}")
    return point


def distance(a: np.ndarray, b: np.ndarray) -> float:
    return float(np.linalg.norm(a - b))


def direction(
    origin: np.ndarray,
    toward: np.ndarray,
    fallback: Optional[np.ndarray] = None,
    index: int = -1,
) -> np.ndarray:
    """Unit vector pointing from `origin` to `toward`.

    Args:
        origin: Start point.
        toward: End point.
        fallback: Unit vector returned when both points coincide.
        index: Segment index reported if no fallback is available.

    Returns:
        Unit direction of shape (3,).

    Raises:
        DegenerateSegment: If the points coincide and no fallback is given.
    """
    delta = toward - origin
    norm = np.linalg.norm(delta)
    if norm < EPSILON_FLOAT64:
        if fallback is None:
            raise DegenerateSegment(index)
        logger.warning("Segment %d collapsed to a point, using fallback direction", index)
        return fallback.copy()
    return delta / norm


def angle_between(u: np.ndarray, v: np.ndarray) -> float:
    """Unsigned angle in [0, pi] between two non-zero vectors."""
    # atan2 stays accurate near 0 and pi where arccos of the dot product does not
    return float(np.arctan2(np.linalg.norm(np.cross(u, v)), np.dot(u, v)))


def lerp(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    return a + (b - a) * t
