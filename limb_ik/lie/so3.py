"""SO(3): rotations used to orient chain segments."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pinocchio as pin

from ..constants import get_epsilon
from .base import MatrixLieGroup

_IDENTITY_QUAT = np.array([0.0, 0.0, 0.0, 1.0], dtype=np.float64)  # [x, y, z, w]


def _to_pin(quat: np.ndarray) -> pin.Quaternion:
    return pin.Quaternion(quat[3], quat[0], quat[1], quat[2])


@dataclass(frozen=True)
class SO3(MatrixLieGroup):
    """Special orthogonal group for 3D rotations.

    Internal parameterization is quaternion [x, y, z, w].
    """

    quat: np.ndarray  # [x, y, z, w]
    matrix_dim: int = 3
    parameters_dim: int = 4
    space_dim: int = 3

    def __repr__(self) -> str:
        quat = np.round(self.quat, 5)
        return f"{self.__class__.__name__}(quat={quat})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SO3):
            return NotImplemented
        # q and -q encode the same rotation
        return np.allclose(self.quat, other.quat) or np.allclose(self.quat, -other.quat)

    def parameters(self) -> np.ndarray:
        return self.quat

    def copy(self) -> SO3:
        return SO3(quat=self.quat.copy())

    @classmethod
    def identity(cls) -> SO3:
        return SO3(quat=_IDENTITY_QUAT.copy())

    @classmethod
    def from_matrix(cls, matrix: np.ndarray) -> SO3:
        """Create SO3 from rotation matrix.

        Args:
            matrix: 3x3 rotation matrix.

        Returns:
            SO3 instance.
        """
        assert matrix.shape == (3, 3)
        quat = pin.Quaternion(np.ascontiguousarray(matrix, dtype=np.float64)).coeffs()  # [x, y, z, w]
        return SO3(quat=np.array(quat, dtype=np.float64))

    @classmethod
    def from_basis(cls, x_axis: np.ndarray, y_axis: np.ndarray, z_axis: np.ndarray) -> SO3:
        """Create SO3 whose local axes map onto the given orthonormal world axes.

        Args:
            x_axis: World direction of the local X axis.
            y_axis: World direction of the local Y axis.
            z_axis: World direction of the local Z axis.

        Returns:
            SO3 instance.
        """
        return cls.from_matrix(np.column_stack([x_axis, y_axis, z_axis]))

    @classmethod
    def exp(cls, tangent: np.ndarray) -> SO3:
        """Exponential map from an axis-angle vector to SO(3).

        Args:
            tangent: 3D rotation vector (axis scaled by angle in radians).

        Returns:
            SO3 instance.
        """
        tangent = np.asarray(tangent, dtype=np.float64)
        assert tangent.shape == (3,)
        theta = np.linalg.norm(tangent)

        if theta < get_epsilon(tangent.dtype):
            return SO3.identity()

        axis = tangent / theta
        quat = np.zeros(4)
        quat[:3] = np.sin(theta / 2) * axis
        quat[3] = np.cos(theta / 2)

        return SO3(quat=quat)

    @classmethod
    def from_z_radians(cls, theta: float) -> SO3:
        """Rotation of theta radians about the Z axis."""
        return cls.exp(np.array([0.0, 0.0, theta]))

    def as_matrix(self) -> np.ndarray:
        """Convert to 3x3 rotation matrix."""
        return _to_pin(self.quat).toRotationMatrix()

    def apply(self, target: np.ndarray) -> np.ndarray:
        """Rotate a 3D point.

        Args:
            target: 3D point.

        Returns:
            Rotated point.
        """
        assert target.shape == (3,)
        return self.as_matrix() @ target

    def multiply(self, other: SO3) -> SO3:
        """Compose two rotations, applying `other` first."""
        result = (_to_pin(self.quat) * _to_pin(other.quat)).coeffs()  # [x, y, z, w]
        return SO3(quat=np.array(result, dtype=np.float64))
