"""Reshaping between flat and layered Euler-angle vectors.

An ``n``-dimensional orthogonal matrix is described by ``n (n - 1) / 2``
angles. Stored flat they form a single vector; grouped by reduction step
they form ``n - 1`` *layers* of lengths ``n - 1, n - 2, ..., 1``::

    flat    = [a0, a1, a2, a3, a4, a5]          # n = 4
    layered = [[a0, a1, a2], [a3, a4], [a5]]

Both directions are pure index arithmetic and never touch the values.
"""

from __future__ import annotations

import math
from typing import List, Sequence

import numpy as np

from .errors import InvalidDimensionError


def number_of_angles(dimension: int) -> int:
    """Return ``n (n - 1) / 2``, the angle count of an ``n x n`` matrix.

    Raises:
        InvalidDimensionError: If ``dimension < 1``.
    """
    if dimension < 1:
        raise InvalidDimensionError(
            f"Matrix dimension must be at least 1, got {dimension}."
        )
    return dimension * (dimension - 1) // 2


def dimension_from_length(length: int) -> int:
    """Return the matrix dimension ``n`` implied by ``length`` angles.

    The number of layers ``m = n - 1`` solves ``length = m (m + 1) / 2``.

    Raises:
        InvalidDimensionError: If ``length`` is not a triangular number.
    """
    if length < 0:
        raise InvalidDimensionError(f"Angle count must be non-negative, got {length}.")

    layers = (math.isqrt(8 * length + 1) - 1) // 2
    if layers * (layers + 1) // 2 != length:
        raise InvalidDimensionError(
            f"{length} angles do not describe any orthogonal matrix; "
            "expected n (n - 1) / 2 for some integer n >= 1."
        )
    return layers + 1


def to_layered(flat: Sequence[float]) -> List[np.ndarray]:
    """Split a flat angle vector into layers of decreasing length.

    Args:
        flat: 1-D sequence of ``n (n - 1) / 2`` angles.

    Returns:
        List of ``n - 1`` new arrays with lengths ``n - 1, ..., 1``.
    """
    flat = np.asarray(flat, dtype=float)
    if flat.ndim != 1:
        raise InvalidDimensionError(
            f"Flat angle vector must be one-dimensional, got shape {flat.shape}."
        )

    dimension = dimension_from_length(flat.shape[0])

    layered: List[np.ndarray] = []
    head = 0
    for size in range(dimension - 1, 0, -1):
        layered.append(flat[head : head + size].copy())
        head += size
    return layered


def to_flat(layered: Sequence[Sequence[float]]) -> np.ndarray:
    """Concatenate layers back into one flat angle vector.

    Args:
        layered: Layers of lengths ``m, m - 1, ..., 1`` in that order.

    Returns:
        New 1-D float array of length ``m (m + 1) / 2``.

    Raises:
        InvalidDimensionError: If the layer lengths are not strictly
            decreasing by one down to 1.
    """
    chunks = [np.asarray(layer, dtype=float).ravel() for layer in layered]

    expected = len(chunks)
    for idx, chunk in enumerate(chunks):
        if chunk.shape[0] != expected - idx:
            raise InvalidDimensionError(
                f"Layer {idx} has {chunk.shape[0]} angles, expected {expected - idx}."
            )

    if not chunks:
        return np.zeros(0, dtype=float)
    return np.concatenate(chunks)
