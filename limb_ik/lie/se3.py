"""SE(3): rigid transforms placing chain segments in the world."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .base import MatrixLieGroup
from .so3 import SO3


@dataclass(frozen=True)
class SE3(MatrixLieGroup):
    """Special Euclidean group for proper rigid transforms in 3D.

    Internal parameterization uses rotation (quaternion) + translation.
    """

    rotation: SO3
    translation: np.ndarray
    matrix_dim: int = 4
    parameters_dim: int = 7
    space_dim: int = 3

    def __repr__(self) -> str:
        rot = np.round(self.rotation.quat, 5)
        trans = np.round(self.translation, 5)
        return f"{self.__class__.__name__}(quat={rot}, xyz={trans})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SE3):
            return NotImplemented
        return self.rotation == other.rotation and np.allclose(self.translation, other.translation)

    def copy(self) -> SE3:
        return SE3(rotation=self.rotation.copy(), translation=self.translation.copy())

    def parameters(self) -> np.ndarray:
        """Return [quat_x, quat_y, quat_z, quat_w, x, y, z]."""
        return np.concatenate([self.rotation.quat, self.translation])

    @classmethod
    def identity(cls) -> SE3:
        return SE3(rotation=SO3.identity(), translation=np.zeros(3))

    @classmethod
    def from_rotation_and_translation(
        cls,
        rotation: SO3,
        translation: np.ndarray,
    ) -> SE3:
        """Create SE3 from rotation and translation.

        Args:
            rotation: SO3 rotation.
            translation: 3D translation vector.

        Returns:
            SE3 instance.
        """
        assert translation.shape == (3,)
        return SE3(rotation=rotation, translation=np.array(translation, dtype=np.float64))

    def as_matrix(self) -> np.ndarray:
        """Convert to 4x4 homogeneous transformation matrix."""
        matrix = np.eye(4)
        matrix[:3, :3] = self.rotation.as_matrix()
        matrix[:3, 3] = self.translation
        return matrix
