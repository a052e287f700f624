"""Rotation and rigid-transform value types."""

from .base import MatrixLieGroup
from .se3 import SE3
from .so3 import SO3

__all__ = [
    "MatrixLieGroup",
    "SE3",
    "SO3",
]
