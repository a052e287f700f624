"""FABRIK kinematic chain solver.

Solves an articulated chain of fixed-length links toward joint targets with
forward and backward reaching passes, and derives bend angles, angular
velocities and per-segment frames. Uses NumPy for vector math and Pinocchio
for rotation conversions.
"""

from .chain import KinematicChain
from .constants import (
    DEFAULT_ITERATIONS,
    EPSILON_FLOAT32,
    EPSILON_FLOAT64,
    FALLBACK_AXIS,
    LENGTH_TOLERANCE,
    MIN_ELAPSED_TIME,
    MILD_DIVERGENCE_BLEND,
    SEGMENT_CORRECTION_ANGLE,
    WORLD_UP,
)
from .derivation import (
    derive_angular_velocities,
    derive_segment_frames,
    recalculate_angles,
    segment_rotation,
)
from .exceptions import (
    DegenerateSegment,
    IKError,
    InvalidChain,
    InvalidIterations,
    InvalidTarget,
    MissingPreview,
    NoSnapshot,
    UnsupportedClassification,
)
from .heuristics import MotionHeuristics
from .history import VelocityHistory
from .lie import SE3, SO3, MatrixLieGroup
from .modes import KinematicsMode, Limb, PoseDiscrepancy
from .reach import anchor_root, apply_targets, backward_reach, forward_reach
from .solve import SolveTrace, solve_chain
from .state import ChainState

__version__ = "0.1.0"

__all__ = [
    # Chain
    "ChainState",
    "KinematicChain",
    "MotionHeuristics",
    # Solver
    "SolveTrace",
    "solve_chain",
    "anchor_root",
    "apply_targets",
    "backward_reach",
    "forward_reach",
    # Derivation
    "derive_angular_velocities",
    "derive_segment_frames",
    "recalculate_angles",
    "segment_rotation",
    # Modes
    "KinematicsMode",
    "Limb",
    "PoseDiscrepancy",
    # Recording
    "VelocityHistory",
    # Lie groups
    "MatrixLieGroup",
    "SE3",
    "SO3",
    # Exceptions
    "DegenerateSegment",
    "IKError",
    "InvalidChain",
    "InvalidIterations",
    "InvalidTarget",
    "MissingPreview",
    "NoSnapshot",
    "UnsupportedClassification",
    # Constants
    "DEFAULT_ITERATIONS",
    "EPSILON_FLOAT32",
    "EPSILON_FLOAT64",
    "FALLBACK_AXIS",
    "LENGTH_TOLERANCE",
    "MIN_ELAPSED_TIME",
    "MILD_DIVERGENCE_BLEND",
    "SEGMENT_CORRECTION_ANGLE",
    "WORLD_UP",
]
