"""Generalized Euler-angle decomposition of orthonormal matrices.

This module converts between an :math:`n \\times n` orthonormal matrix and a
flat vector of :math:`n (n - 1) / 2` real angles, generalising the classical
3D Euler angles to any dimension.

The matrix is reduced one dimension at a time. At every step the last column
of the working :math:`k \\times k` matrix is written in hyperspherical
coordinates (:func:`decompose_unit_vector`), the corresponding block rotation
:math:`A` is built (:func:`build_block`), and :math:`A^T` is applied from the
left so that the last row and column become trivial:

.. math::

    T = A_1 \\, \\hat A_2 \\cdots \\hat A_{n-1},

where :math:`\\hat A_i` is :math:`A_i` embedded into the top-left corner of
an :math:`n \\times n` identity.

The public API is:

* :func:`decompose_unit_vector` – hyperspherical angles of a unit column.
* :func:`build_block` – block rotation from a chain of angles.
* :func:`angles_from_matrix` – matrix to flat angles.
* :func:`matrix_from_angles` – flat angles to matrix.
* :func:`check_round_trip` – quick numerical sanity check.
* :func:`plot_layers` – visualize the layered angle structure.

All indices in this module are **zero-based**.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from .errors import InvalidDimensionError, PreconditionViolationError
from .layering import to_flat, to_layered
from .options import DEFAULT_OPTIONS, ConversionOptions

logger = logging.getLogger(__name__)

HALF_PI = np.pi / 2.0


def _is_degenerate(angle: float, atol: float) -> bool:
    return bool(abs(abs(angle) - HALF_PI) <= atol or abs(np.cos(angle)) <= atol)


def decompose_unit_vector(
    column: Sequence[float],
    options: Optional[ConversionOptions] = None,
) -> np.ndarray:
    """Write a unit vector as a chain of hyperspherical angles.

    The chain ``a`` of length ``k`` satisfies

    .. math::

        v_i = \\sin a_i \\prod_{j < i} \\cos a_j, \\qquad
        v_{k-1} = \\prod_{j < k-1} \\cos a_j,

    with ``a[k-1] = pi / 2`` by convention. The angle ``a[k-2]`` is recovered
    with ``arctan2`` from the raw last two entries so that it covers the full
    circle.

    If an intermediate angle reaches ``+-pi / 2`` the remaining components
    lie on a collapsed circle and cannot be resolved. The chain is returned
    as soon as that happens, with all later angles left at ``0``.

    Args:
        column: Last column of a ``k x k`` working matrix.
        options: Tolerances; :data:`DEFAULT_OPTIONS` when omitted.

    Returns:
        Array of ``k`` angles in radians.
    """
    options = options or DEFAULT_OPTIONS
    v = np.asarray(column, dtype=float).ravel()
    k = v.shape[0]
    if k < 1:
        raise InvalidDimensionError("Cannot decompose an empty vector.")

    angles = np.zeros(k, dtype=float)
    angles[-1] = HALF_PI

    cos_product = 1.0
    for j in range(k - 1):
        if j > 0:
            cos_product *= np.cos(angles[j - 1])
        angles[j] = np.arcsin(np.clip(v[j] / cos_product, -1.0, 1.0))

        if _is_degenerate(angles[j], options.degeneracy_atol):
            logger.debug(
                "Degenerate angle %.6f at position %d of %d; "
                "remaining angles left at zero.",
                angles[j],
                j,
                k,
            )
            return angles

    if k >= 2:
        angles[k - 2] = np.arctan2(v[k - 2], v[k - 1])
    return angles


def build_block(chain: Sequence[float]) -> np.ndarray:
    """Build the block rotation encoded by a chain of angles.

    For a chain ``a`` of length ``k`` the returned matrix ``M`` is

    * ``M[i, i] = cos(a_i)`` for ``i < k - 1``,
    * ``M[i, k-1] = sin(a_i) * prod(cos(a_j), j < i)`` (the last column is
      the unit vector described by ``a``),
    * ``M[i, c] = -sin(a_i) * sin(a_c) * prod(cos(a_l), c < l < i)`` for
      ``c < i`` and ``c < k - 1``,

    and zero elsewhere above the diagonal. These are the ``tan * cos``
    products of the textbook form written with ``sin`` so that the
    conventional last angle ``pi / 2`` stays finite.

    Args:
        chain: Angles in radians, normally ending with ``pi / 2``.

    Returns:
        (k, k) real array, orthonormal when the chain ends with ``pi / 2``.
    """
    a = np.asarray(chain, dtype=float).ravel()
    k = a.shape[0]
    if k < 1:
        raise InvalidDimensionError("Cannot build a block from an empty angle chain.")

    sin = np.sin(a)
    cos = np.cos(a)

    M = np.eye(k, dtype=float)
    for i in range(k - 1):
        M[i, i] = cos[i]
        M[i, k - 1] = sin[i] * np.prod(cos[:i])

    for i in range(1, k):
        for c in range(min(i, k - 1)):
            M[i, c] = -sin[i] * sin[c] * np.prod(cos[c + 1 : i])

    M[k - 1, k - 1] = sin[k - 1] * np.prod(cos[: k - 1])
    return M


def _validate_matrix(matrix: np.ndarray, options: ConversionOptions) -> None:
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise InvalidDimensionError(
            f"Input matrix must be square (N x N), got shape {matrix.shape}."
        )
    if matrix.shape[0] < 1:
        raise InvalidDimensionError("Input matrix must have at least one row.")

    norms = np.linalg.norm(matrix, axis=0)
    if not np.allclose(norms, 1.0, rtol=0.0, atol=options.norm_atol):
        worst = int(np.argmax(np.abs(norms - 1.0)))
        raise PreconditionViolationError(
            "Every column of the input matrix must have unit norm within "
            f"atol={options.norm_atol}; column {worst} has norm {norms[worst]:.6g}."
        )


def angles_from_matrix(
    matrix: np.ndarray,
    options: Optional[ConversionOptions] = None,
) -> np.ndarray:
    """Compute the flat Euler angles of an orthonormal matrix.

    Args:
        matrix: (N, N) real matrix whose columns have unit norm. It is not
            modified.
        options: Tolerances; :data:`DEFAULT_OPTIONS` when omitted.

    Returns:
        1-D array of ``N (N - 1) / 2`` angles, layer by layer.

    Raises:
        InvalidDimensionError: If ``matrix`` is not a non-empty square array.
        PreconditionViolationError: If any column norm differs from 1.

    Note:
        Only rotations are representable. For a matrix with determinant
        ``-1`` the sign ends up in the final 1x1 residue and is dropped.
    """
    options = options or DEFAULT_OPTIONS
    working = np.array(matrix, dtype=float, copy=True)
    _validate_matrix(working, options)

    layers = []
    for size in range(working.shape[0], 1, -1):
        chain = decompose_unit_vector(working[:, -1], options)
        block = build_block(chain)
        working = (block.T @ working)[: size - 1, : size - 1]
        # The trailing pi/2 is implied and not stored.
        layers.append(chain[:-1])

    if working[0, 0] < 0.0:
        logger.debug(
            "Reduction residue is %.6f; the input is not a proper rotation "
            "and its reflection is not represented.",
            working[0, 0],
        )

    return to_flat(layers)


def matrix_from_angles(angles: Sequence[float]) -> np.ndarray:
    """Rebuild the orthonormal matrix described by flat Euler angles.

    Args:
        angles: 1-D sequence of ``N (N - 1) / 2`` angles.

    Returns:
        (N, N) orthonormal NumPy array.
    """
    layers = to_layered(angles)
    N = len(layers) + 1

    U = np.eye(N, dtype=float)
    for layer in layers:
        chain = np.append(layer, HALF_PI)
        size = chain.shape[0]

        padded = np.eye(N, dtype=float)
        padded[:size, :size] = build_block(chain)
        U = U @ padded

    return U


def check_round_trip(
    matrix: np.ndarray,
    options: Optional[ConversionOptions] = None,
    verbose: bool = True,
) -> float:
    """Convert a matrix to angles and back, and report the error.

    A small helper for experiments and debugging.

    Args:
        matrix: Input matrix expected to be a rotation.
        options: Tolerances passed to :func:`angles_from_matrix`.
        verbose: If True, prints the reconstruction error.

    Returns:
        Frobenius norm of ``matrix - matrix_from_angles(angles_from_matrix(matrix))``.
    """
    rebuilt = matrix_from_angles(angles_from_matrix(matrix, options))
    err = float(np.linalg.norm(np.asarray(matrix, dtype=float) - rebuilt))

    if verbose:
        print(f"Round-trip error: {err:.3e}")

    return err


def plot_layers(angles: Sequence[float], ax=None, show: bool = True):
    """Visualize the layered structure of a set of Euler angles.

    Each layer is drawn as one horizontal row, longest first, with a marker
    per angle annotated by its value. The triangular shape mirrors the
    dimension reduction: row ``i`` acts on the leading ``N - i`` modes.

    Args:
        angles: Flat angle vector (or anything convertible to one, such as
            an :class:`~eulerangles.AngleSet`).
        ax: Optional matplotlib Axes to draw on. A new figure is created
            when omitted.
        show: Call :func:`matplotlib.pyplot.show` at the end.

    Returns:
        The matplotlib Axes that was drawn on.
    """
    flat = np.asarray(angles, dtype=float)
    if flat.size == 0:
        raise InvalidDimensionError("Cannot plot an empty set of angles.")

    layers = to_layered(flat)

    if ax is None:
        fig = plt.figure(figsize=(10, 5))
        ax = fig.add_subplot(1, 1, 1)

    for row, layer in enumerate(layers):
        y = len(layers) - row
        x = np.arange(layer.shape[0])
        ax.hlines(y, -0.5, layers[0].shape[0] - 0.5, ls="--", zorder=0, color="black")
        ax.plot(x, np.full_like(x, y, dtype=float), ls="", marker="o", markersize=8, color="tab:red")
        for col, theta in zip(x, layer):
            ax.text(col + 0.1, y + 0.15, s=f"$\\theta$ = {theta:.2f}", fontsize=8)

    ax.set_ylim(0.5, len(layers) + 0.5)
    ax.set_xlim(-0.5, layers[0].shape[0] + 0.5)
    ax.axis("off")
    plt.tight_layout()
    if show:
        plt.show()
    return ax
