from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence

import numpy as np

from .utils.decomposition import angles_from_matrix, matrix_from_angles
from .utils.errors import InvalidDimensionError
from .utils.layering import dimension_from_length, number_of_angles, to_flat, to_layered
from .utils.options import ConversionOptions


@dataclass(frozen=True, eq=False)
class AngleSet:
    """Generalized Euler angles of an ``N``-dimensional rotation.

    Holds a flat, read-only vector of ``N (N - 1) / 2`` angles in radians.
    The dimension ``N`` is derived from the length on demand.

    Instances are created through :meth:`from_flat`, :meth:`from_matrix` or
    :meth:`random` (or the constructor, which behaves like
    :meth:`from_flat`) and are never modified afterwards.

    Attributes:
        angles: Read-only 1-D float array of angles, layer by layer.
    """

    angles: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        """Validate the angle count and freeze a private copy of the data."""
        data = np.array(self.angles, dtype=float, copy=True)
        if data.ndim != 1:
            raise InvalidDimensionError(
                f"Angles must be a one-dimensional sequence, got shape {data.shape}."
            )
        dimension_from_length(data.shape[0])
        data.setflags(write=False)
        object.__setattr__(self, "angles", data)

    @classmethod
    def from_flat(cls, values: Sequence[float]) -> "AngleSet":
        """Wrap a flat vector of ``N (N - 1) / 2`` angles."""
        return cls(values)

    @classmethod
    def from_matrix(
        cls,
        matrix: np.ndarray,
        options: Optional[ConversionOptions] = None,
    ) -> "AngleSet":
        """Decompose a matrix with unit-norm columns into Euler angles.

        Raises:
            InvalidDimensionError: If ``matrix`` is not square.
            PreconditionViolationError: If a column does not have unit norm.
        """
        return cls(angles_from_matrix(matrix, options))

    @classmethod
    def random(
        cls,
        dimension: int,
        rng: Optional[np.random.Generator] = None,
    ) -> "AngleSet":
        """Draw random Euler angles for an ``N``-dimensional rotation.

        All angles but the last of every layer are uniform in
        ``[-pi/2, pi/2)``; the last angle of each layer is uniform in
        ``[-pi, pi)``.

        Args:
            dimension: Matrix dimension ``N >= 2``.
            rng: Source of uniform numbers. A fresh
                :func:`numpy.random.default_rng` is used when omitted.

        Raises:
            InvalidDimensionError: If ``dimension < 2``.
        """
        if dimension < 2:
            raise InvalidDimensionError(
                f"Dimension of a random rotation must be at least 2, got {dimension}."
            )
        rng = rng if rng is not None else np.random.default_rng()

        flat = (rng.random(number_of_angles(dimension)) - 0.5) * np.pi
        layered = [
            np.append(layer[:-1], (rng.random() - 0.5) * 2.0 * np.pi)
            for layer in to_layered(flat)
        ]
        return cls(to_flat(layered))

    @property
    def dimension(self) -> int:
        """Dimension ``N`` of the matrix these angles describe."""
        return dimension_from_length(self.angles.shape[0])

    @property
    def layers(self) -> List[np.ndarray]:
        """Angles grouped into ``N - 1`` layers of decreasing length."""
        return to_layered(self.angles)

    def to_matrix(self) -> np.ndarray:
        """Return the (N, N) orthonormal matrix described by these angles."""
        return matrix_from_angles(self.angles)

    def __len__(self) -> int:
        return self.angles.shape[0]

    def __iter__(self) -> Iterator[float]:
        return iter(self.angles.tolist())

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        return np.array(self.angles, dtype=dtype, copy=True)

    def __repr__(self) -> str:
        values = ", ".join(f"{theta:.4f}" for theta in self.angles)
        return f"AngleSet(dimension={self.dimension}, angles=[{values}])"


def to_matrix(angles: AngleSet) -> np.ndarray:
    """Return the orthonormal matrix described by ``angles``."""
    return angles.to_matrix()
