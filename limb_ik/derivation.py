"""Quantities derived from joint positions: angles, velocities and frames."""

from typing import List

import numpy as np

from . import constants as consts
from .geometry import angle_between, direction
from .lie import SE3, SO3
from .state import ChainState

_SEGMENT_CORRECTION = SO3.from_z_radians(consts.SEGMENT_CORRECTION_ANGLE)


def recalculate_angles(state: ChainState) -> np.ndarray:
    """Recompute the bend angle at every joint.

    The current angles become prev_angles. Boundary joints are fixed at pi;
    an interior joint's angle is measured between the vectors pointing to
    its predecessor and to its successor.

    Args:
        state: Chain whose joints have reached their final position.

    Returns:
        New angles of shape (n,).
    """
    joints = state.joints
    angles = np.full(state.n_joints, consts.STRAIGHT_ANGLE)
    for j in range(1, state.n_joints - 1):
        to_prev = direction(joints[j], joints[j - 1], fallback=-state.rest_directions[j - 1], index=j - 1)
        to_next = direction(joints[j], joints[j + 1], fallback=state.rest_directions[j], index=j)
        angles[j] = angle_between(to_prev, to_next)

    state.prev_angles = state.angles
    state.angles = angles
    return angles


def derive_angular_velocities(state: ChainState, now: float) -> np.ndarray:
    """Finite-difference angular velocity of each previously tracked joint.

    Args:
        state: Chain whose angles were just recomputed.
        now: Current clock reading in [s].

    Returns:
        Velocities in [rad]/[s], empty if there is no previous angle set.
    """
    elapsed = max(now - state.last_update_time, consts.MIN_ELAPSED_TIME)
    state.last_update_time = now

    tracked = state.prev_angles.shape[0]
    if tracked == 0:
        state.angular_velocities = np.zeros(0)
    else:
        state.angular_velocities = (state.angles[:tracked] - state.prev_angles) / elapsed
    return state.angular_velocities


def segment_rotation(unit: np.ndarray) -> SO3:
    """Orientation of a segment whose local axis follows `unit`.

    The basis is (unit, unit x up, unit x (unit x up)). For a vertical
    segment the first cross product vanishes and the fallback axis is used
    instead of world up.
    """
    perp = np.cross(unit, consts.WORLD_UP)
    if np.linalg.norm(perp) < consts.EPSILON_FLOAT32:
        perp = np.cross(unit, consts.FALLBACK_AXIS)
    perp /= np.linalg.norm(perp)
    perp2 = np.cross(unit, perp)
    perp2 /= np.linalg.norm(perp2)
    return SO3.from_basis(unit, perp, perp2).multiply(_SEGMENT_CORRECTION)


def derive_segment_frames(state: ChainState) -> List[SE3]:
    """Place one transform at the midpoint of every segment.

    Returns:
        List of n-1 SE3 transforms, also stored on the state.
    """
    transforms = []
    for k in range(state.n_segments):
        a, b = state.joints[k + 1], state.joints[k]
        unit = direction(a, b, fallback=-state.rest_directions[k], index=k)
        transforms.append(
            SE3.from_rotation_and_translation(segment_rotation(unit), (a + b) / 2.0)
        )

    assert len(transforms) == state.n_segments
    state.segment_transforms = transforms
    return transforms
