"""Base class for matrix Lie groups."""

import abc

import numpy as np
from typing_extensions import Self


class MatrixLieGroup(abc.ABC):
    """Interface shared by the rotation and rigid-transform types.

    Attributes:
        matrix_dim: Dimension of square matrix output.
        parameters_dim: Dimension of underlying parameters.
        space_dim: Dimension of coordinates that can be transformed.
    """

    matrix_dim: int
    parameters_dim: int
    space_dim: int

    @classmethod
    @abc.abstractmethod
    def identity(cls) -> Self:
        """Returns identity element."""
        raise NotImplementedError

    @abc.abstractmethod
    def as_matrix(self) -> np.ndarray:
        """Get transformation as a matrix."""
        raise NotImplementedError

    @abc.abstractmethod
    def parameters(self) -> np.ndarray:
        """Get underlying representation."""
        raise NotImplementedError

    @abc.abstractmethod
    def copy(self) -> Self:
        """Create a copy of this element."""
        raise NotImplementedError

    def is_finite(self) -> bool:
        """Returns True if every parameter is finite."""
        return bool(np.all(np.isfinite(self.parameters())))
