"""Classify-and-correct dispatcher for one update tick.

The caller stores targets on the chain, then calls solve_chain once per tick
with the pose discrepancy it has measured. The chain is mutated in place.
"""

import logging
from typing import Callable, NamedTuple, Optional

import numpy as np

from . import constants as consts
from .derivation import derive_angular_velocities, derive_segment_frames, recalculate_angles
from .exceptions import InvalidIterations, MissingPreview, UnsupportedClassification
from .geometry import direction, lerp
from .modes import KinematicsMode, PoseDiscrepancy
from .reach import anchor_root, apply_targets, backward_reach, forward_reach
from .state import ChainState

logger = logging.getLogger(__name__)

_SUPPORTED = (PoseDiscrepancy.WITHIN_TOLERANCE, PoseDiscrepancy.MILD_DIVERGENCE)


class SolveTrace(NamedTuple):
    """Snapshot handed to the trace hook.

    Attributes:
        discrepancy: Classification being applied.
        iteration: Zero-based round index.
        joints: Copy of the joint positions at the end of the round.
        angles: Copy of the bend angles from the previous recomputation; a
            WITHIN_TOLERANCE solve only recomputes them after its final round.
        corrections: Per-joint corrective vectors, only for damped corrections.
    """

    discrepancy: PoseDiscrepancy
    iteration: int
    joints: np.ndarray
    angles: np.ndarray
    corrections: Optional[np.ndarray] = None


TraceHook = Callable[[SolveTrace], None]


def _check_iterations(iterations: int) -> None:
    if isinstance(iterations, bool) or not isinstance(iterations, (int, np.integer)):
        raise InvalidIterations(iterations)
    if iterations < 1:
        raise InvalidIterations(iterations)


def _reach_targets(
    state: ChainState,
    iterations: int,
    trace: Optional[TraceHook],
) -> None:
    for iteration in range(iterations):
        apply_targets(state)
        forward_reach(state)
        if state.ground_lock:
            anchor_root(state)
        backward_reach(state)
        if trace is not None:
            trace(
                SolveTrace(
                    discrepancy=PoseDiscrepancy.WITHIN_TOLERANCE,
                    iteration=iteration,
                    joints=state.joints.copy(),
                    angles=state.angles.copy(),
                )
            )


def _damp_toward_preview(
    state: ChainState,
    preview: ChainState,
    trace: Optional[TraceHook],
) -> None:
    if state.angles.shape[0] != state.n_joints:
        recalculate_angles(state)

    corrections = np.zeros_like(state.joints)
    for i in range(state.n_joints):
        residual = preview.joints[i] - state.joints[i]
        angle = state.angles[i]
        if np.linalg.norm(residual) >= consts.EPSILON_FLOAT64 and angle >= consts.EPSILON_FLOAT64:
            corrections[i] = direction(state.joints[i], preview.joints[i], index=i) / angle
        state.joints[i] = lerp(state.joints[i], preview.joints[i], consts.MILD_DIVERGENCE_BLEND)

    state.corrections = corrections
    if trace is not None:
        trace(
            SolveTrace(
                discrepancy=PoseDiscrepancy.MILD_DIVERGENCE,
                iteration=0,
                joints=state.joints.copy(),
                angles=state.angles.copy(),
                corrections=corrections.copy(),
            )
        )


def solve_chain(
    state: ChainState,
    iterations: int,
    discrepancy: PoseDiscrepancy,
    now: float,
    preview: Optional[ChainState] = None,
    trace: Optional[TraceHook] = None,
) -> KinematicsMode:
    """Correct a chain for one tick according to its pose discrepancy.

    WITHIN_TOLERANCE runs `iterations` rounds of: apply targets, forward
    pass, ground lock, backward pass. MILD_DIVERGENCE moves every joint half
    way toward the preview pose and records per-joint corrections without
    running reach passes. Both then recompute angles, angular velocities and
    segment frames, in that order.

    Args:
        state: Chain to correct, mutated in place.
        iterations: Number of reach rounds, at least 1.
        discrepancy: Measured pose discrepancy.
        now: Current clock reading in [s].
        preview: Reference pose for MILD_DIVERGENCE.
        trace: Optional hook called with a SolveTrace after each round.

    Returns:
        The kinematics mode that was applied.

    Raises:
        UnsupportedClassification: For SEVERE_DIVERGENCE and
            ENVIRONMENTAL_COMPENSATION. The chain is left untouched.
        InvalidIterations: If iterations is not a positive integer.
        MissingPreview: If MILD_DIVERGENCE is requested without a preview.
    """
    if discrepancy not in _SUPPORTED:
        raise UnsupportedClassification(discrepancy)
    _check_iterations(iterations)

    if discrepancy is PoseDiscrepancy.WITHIN_TOLERANCE:
        mode = KinematicsMode.INVERSE_KINEMATICS
        _reach_targets(state, iterations, trace)
    else:
        if preview is None:
            raise MissingPreview("Mild divergence correction")
        mode = KinematicsMode.FORWARD_KINEMATICS
        _damp_toward_preview(state, preview, trace)

    recalculate_angles(state)
    derive_angular_velocities(state, now)
    derive_segment_frames(state)

    logger.debug(
        "Solved %s with %d target(s); end effector at %s",
        discrepancy.name,
        len(state.targets),
        np.round(state.end_effector, 5),
    )
    return mode
