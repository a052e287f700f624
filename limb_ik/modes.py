"""Enumerations selecting how a chain is corrected and which chain is driven."""

from enum import Enum


class PoseDiscrepancy(Enum):
    """How far the current pose has drifted from the ideal.

    Only WITHIN_TOLERANCE and MILD_DIVERGENCE have a correction strategy;
    the other two are reserved and rejected by the solver.
    """

    WITHIN_TOLERANCE = "within_tolerance"
    MILD_DIVERGENCE = "mild_divergence"
    SEVERE_DIVERGENCE = "severe_divergence"
    ENVIRONMENTAL_COMPENSATION = "environmental_compensation"


class KinematicsMode(Enum):
    """Kinematics direction used by the last solve."""

    INVERSE_KINEMATICS = "inverse_kinematics"
    FORWARD_KINEMATICS = "forward_kinematics"


class Limb(Enum):
    """Which of the two chains of a KinematicChain an operation acts on."""

    ACTUAL = "actual"
    PREVIEW = "preview"
