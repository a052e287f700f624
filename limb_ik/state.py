"""Mutable state of one articulated chain.

A ChainState holds no reference to another chain: the preview snapshot
lives beside it in KinematicChain, which keeps nesting to a single level.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np
import numpy.typing as npt

from .constants import EPSILON_FLOAT64
from .exceptions import DegenerateSegment, InvalidChain
from .heuristics import MotionHeuristics
from .lie import SE3

Target = Tuple[int, np.ndarray]


@dataclass
class ChainState:
    """Joint positions and every quantity derived from them.

    Attributes:
        joints: Joint positions of shape (n, 3), root first.
        lengths: Segment lengths of shape (n-1,); lengths[k] joins joints[k]
            and joints[k+1]. Fixed after construction.
        rest_directions: Unit direction of each segment at construction, of
            shape (n-1, 3). Substituted whenever a live segment collapses.
        angles: Bend angle per joint in radians; boundary joints are pi.
        prev_angles: Angle set from the previous recomputation.
        angular_velocities: (angles - prev_angles) / elapsed, in rad/s.
        corrections: Per-joint corrective vectors of the last damped
            correction, of shape (n, 3), or empty.
        segment_transforms: One SE3 per segment, placed at its midpoint.
        targets: (joint index, position) pairs applied on the next solve.
        heuristics: Host data carried through copies, never interpreted.
        ground_lock: Pin the root to the origin after each forward pass.
        last_update_time: Clock reading of the previous recomputation [s].
    """

    joints: np.ndarray
    lengths: np.ndarray
    rest_directions: np.ndarray
    angles: np.ndarray = field(default_factory=lambda: np.zeros(0))
    prev_angles: np.ndarray = field(default_factory=lambda: np.zeros(0))
    angular_velocities: np.ndarray = field(default_factory=lambda: np.zeros(0))
    corrections: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))
    segment_transforms: List[SE3] = field(default_factory=list)
    targets: List[Target] = field(default_factory=list)
    heuristics: MotionHeuristics = field(default_factory=MotionHeuristics)
    ground_lock: bool = True
    last_update_time: float = 0.0

    @classmethod
    def from_joints(
        cls,
        joints: npt.ArrayLike,
        heuristics: Optional[MotionHeuristics] = None,
        ground_lock: bool = True,
        now: float = 0.0,
    ) -> ChainState:
        """Build a state from initial joint positions, measuring segment lengths.

        Args:
            joints: Sequence of at least two 3D points, root first.
            heuristics: Optional host heuristics to carry along.
            ground_lock: Initial ground-lock flag.
            now: Clock reading used as the first update time.

        Returns:
            ChainState with lengths and rest directions filled in.

        Raises:
            InvalidChain: If fewer than two finite 3D points are supplied.
            DegenerateSegment: If two consecutive joints coincide.
        """
        try:
            points = np.array(joints, dtype=np.float64)
        except (TypeError, ValueError) as exc:
            raise InvalidChain(f"Joint positions are not numeric 3D points: {exc}") from exc

        if points.ndim != 2 or points.shape[1] != 3:
            raise InvalidChain(f"Expected joint positions of shape (n, 3), got {points.shape}")
        if points.shape[0] < 2:
            raise InvalidChain(
                f"A chain needs at least 2 joints to form a segment, got {points.shape[0]}"
            )
        if not np.all(np.isfinite(points)):
            raise InvalidChain("Joint positions contain non-finite values")

        deltas = np.diff(points, axis=0)
        lengths = np.linalg.norm(deltas, axis=1)
        for k, length in enumerate(lengths):
            if length < EPSILON_FLOAT64:
                raise DegenerateSegment(k, "Consecutive joints must not coincide.")

        return cls(
            joints=points,
            lengths=lengths,
            rest_directions=deltas / lengths[:, None],
            heuristics=heuristics.copy() if heuristics is not None else MotionHeuristics(),
            ground_lock=ground_lock,
            last_update_time=now,
        )

    @property
    def n_joints(self) -> int:
        return self.joints.shape[0]

    @property
    def n_segments(self) -> int:
        return self.lengths.shape[0]

    @property
    def end_effector(self) -> np.ndarray:
        return self.joints[-1]

    def segment_lengths(self) -> np.ndarray:
        """Measured distance between consecutive joints of shape (n-1,)."""
        return np.linalg.norm(np.diff(self.joints, axis=0), axis=1)

    def copy(self) -> ChainState:
        """Deep copy sharing no mutable data with this state."""
        return ChainState(
            joints=self.joints.copy(),
            lengths=self.lengths.copy(),
            rest_directions=self.rest_directions.copy(),
            angles=self.angles.copy(),
            prev_angles=self.prev_angles.copy(),
            angular_velocities=self.angular_velocities.copy(),
            corrections=self.corrections.copy(),
            segment_transforms=[transform.copy() for transform in self.segment_transforms],
            targets=[(index, position.copy()) for index, position in self.targets],
            heuristics=self.heuristics.copy(),
            ground_lock=self.ground_lock,
            last_update_time=self.last_update_time,
        )
