"""Kinematic chain with a committed preview and a restorable initial pose.

The KinematicChain class owns the live ChainState, an optional preview
snapshot used as a reference pose, and the initial snapshot used by reset.
Neither snapshot can hold a snapshot of its own.
"""

import logging
import time
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np
import numpy.typing as npt

from . import constants as consts
from .derivation import derive_angular_velocities, derive_segment_frames, recalculate_angles
from .exceptions import InvalidTarget, MissingPreview, NoSnapshot
from .geometry import as_point
from .heuristics import MotionHeuristics
from .lie import SE3
from .modes import KinematicsMode, Limb, PoseDiscrepancy
from .solve import TraceHook, solve_chain
from .state import ChainState, Target

logger = logging.getLogger(__name__)


class KinematicChain:
    """Articulated chain of rigid links driven toward joint targets.

    Key functionalities include:
    * Forward/backward reaching with fixed segment lengths.
    * Bend angles, angular velocities and segment frames after every solve.
    * A preview snapshot refreshed by commit, used as a reference pose.
    * Reset to the pose captured at construction.

    The chain is not thread-safe; a single caller must own it.

    Example:
        >>> chain = KinematicChain([[0, 0, 0], [1, 0, 0], [2, 0, 0]])
        >>> chain.set_targets([(2, [1.0, 1.0, 0.0])])
        >>> chain.solve(iterations=10)
        >>> chain.end_effector
    """

    def __init__(
        self,
        joints: npt.ArrayLike,
        heuristics: Optional[MotionHeuristics] = None,
        ground_lock: bool = True,
        clock: Callable[[], float] = time.perf_counter,
    ):
        """Constructor.

        Args:
            joints: Initial joint positions, at least two, root first.
            heuristics: Host heuristics carried with the chain.
            ground_lock: Pin the root to the origin after each forward pass.
            clock: Monotonic clock in [s] used for angular velocities.

        Raises:
            InvalidChain: If fewer than two valid joints are supplied.
            DegenerateSegment: If two consecutive joints coincide.
        """
        self._clock = clock
        self.state = ChainState.from_joints(
            joints, heuristics=heuristics, ground_lock=ground_lock, now=clock()
        )
        recalculate_angles(self.state)
        derive_angular_velocities(self.state, self._clock())
        derive_segment_frames(self.state)

        self._initial_state: Optional[ChainState] = self.state.copy()
        self.preview: Optional[ChainState] = self.state.copy()
        self.kinematics_mode = KinematicsMode.INVERSE_KINEMATICS

        logger.debug(
            "Created chain with %d joints, total length %.4f",
            self.state.n_joints,
            float(self.state.lengths.sum()),
        )

    # Snapshots

    def commit(self) -> "KinematicChain":
        """Replace the preview with a copy of the current pose.

        Returns:
            This chain, for chaining calls.
        """
        self.preview = self.state.copy()
        logger.debug("Committed preview at end effector %s", np.round(self.end_effector, 5))
        return self

    def reset(self) -> "KinematicChain":
        """Restore the pose captured at construction and refresh the preview.

        Returns:
            This chain, for chaining calls.

        Raises:
            NoSnapshot: If the chain has no initial snapshot.
        """
        if self._initial_state is None:
            raise NoSnapshot()

        self.state = self._initial_state.copy()
        self.state.last_update_time = self._clock()
        derive_segment_frames(self.state)
        self.preview = self.state.copy()
        self.kinematics_mode = KinematicsMode.INVERSE_KINEMATICS
        logger.debug("Reset chain to its initial pose")
        return self

    @property
    def has_preview(self) -> bool:
        return self.preview is not None

    def limb(self, which: Limb = Limb.ACTUAL) -> ChainState:
        """Get the live chain or its preview.

        Raises:
            MissingPreview: If the preview is requested but none exists.
        """
        if which is Limb.ACTUAL:
            return self.state
        if self.preview is None:
            raise MissingPreview("Selecting the preview limb")
        return self.preview

    # Targets

    def set_targets(
        self,
        targets: Sequence[Tuple[int, npt.ArrayLike]],
        limb: Limb = Limb.ACTUAL,
    ) -> None:
        """Replace the joint targets applied on the next solve.

        Args:
            targets: (joint index, position) pairs. Later pairs for the same
                joint win because they are applied in order.
            limb: Chain receiving the targets.

        Raises:
            InvalidTarget: If an index is out of range or a position is not a
                finite 3D point. Existing targets are kept in that case.
        """
        state = self.limb(limb)
        validated: List[Target] = []
        for index, position in targets:
            if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
                raise InvalidTarget(f"Joint index must be an integer, got {index!r}")
            if not 0 <= index < state.n_joints:
                raise InvalidTarget(
                    f"Joint index {index} out of range for a chain of {state.n_joints} joints"
                )
            try:
                point = as_point(position)
            except ValueError as exc:
                raise InvalidTarget(f"Invalid target for joint {index}: {exc}") from exc
            validated.append((int(index), point))
        state.targets = validated

    def clear_targets(self, limb: Limb = Limb.ACTUAL) -> None:
        self.limb(limb).targets = []

    # Solving

    def solve(
        self,
        iterations: int = consts.DEFAULT_ITERATIONS,
        discrepancy: PoseDiscrepancy = PoseDiscrepancy.WITHIN_TOLERANCE,
        limb: Limb = Limb.ACTUAL,
        trace: Optional[TraceHook] = None,
    ) -> "KinematicChain":
        """Run one update tick on the selected chain.

        Args:
            iterations: Number of reach rounds, at least 1.
            discrepancy: Measured pose discrepancy selecting the strategy.
            limb: Chain to solve. The preview has no reference pose of its
                own, so MILD_DIVERGENCE is only available on the live chain.
            trace: Optional hook called with a SolveTrace after each round.

        Returns:
            This chain, for chaining calls.

        Raises:
            UnsupportedClassification: If the discrepancy has no strategy.
            InvalidIterations: If iterations is not a positive integer.
            MissingPreview: If MILD_DIVERGENCE is requested without a preview.
        """
        state = self.limb(limb)
        reference = self.preview if limb is Limb.ACTUAL else None
        self.kinematics_mode = solve_chain(
            state,
            iterations,
            discrepancy,
            now=self._clock(),
            preview=reference,
            trace=trace,
        )
        return self

    def set_ground_lock(self, enabled: bool) -> None:
        """Toggle ground lock on the live chain and on its preview."""
        self.state.ground_lock = enabled
        if self.preview is not None:
            self.preview.ground_lock = enabled

    # Accessors

    @property
    def ground_lock(self) -> bool:
        return self.state.ground_lock

    @property
    def joints(self) -> np.ndarray:
        return self.state.joints

    @property
    def lengths(self) -> np.ndarray:
        return self.state.lengths

    @property
    def angles(self) -> np.ndarray:
        return self.state.angles

    @property
    def prev_angles(self) -> np.ndarray:
        return self.state.prev_angles

    @property
    def angular_velocities(self) -> np.ndarray:
        return self.state.angular_velocities

    @property
    def segment_transforms(self) -> List[SE3]:
        return self.state.segment_transforms

    @property
    def targets(self) -> List[Target]:
        return self.state.targets

    @property
    def heuristics(self) -> MotionHeuristics:
        return self.state.heuristics

    @property
    def end_effector(self) -> np.ndarray:
        return self.state.end_effector
