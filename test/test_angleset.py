# test_angleset.py
import dataclasses

import numpy as np
import pytest
from scipy.stats import special_ortho_group

from eulerangles import (
    AngleSet,
    InvalidDimensionError,
    PreconditionViolationError,
    to_matrix,
)


def _assert_orthonormal(U, atol=1e-9):
    n = U.shape[0]
    np.testing.assert_allclose(np.linalg.norm(U, axis=0), np.ones(n), atol=atol)
    np.testing.assert_allclose(U.T @ U, np.eye(n), atol=atol)


# ---------------------------------------
# Construction and validation
# ---------------------------------------


def test_random_dimension_one_is_rejected():
    with pytest.raises(InvalidDimensionError):
        AngleSet.random(1)


def test_random_dimension_two_has_one_angle():
    angles = AngleSet.random(2, rng=np.random.default_rng(0))
    assert len(angles) == 1
    assert angles.dimension == 2


def test_from_flat_with_invalid_length_is_rejected():
    with pytest.raises(InvalidDimensionError):
        AngleSet.from_flat([0.1, 0.2])


def test_from_flat_rejects_nested_input():
    with pytest.raises(InvalidDimensionError):
        AngleSet.from_flat([[0.1, 0.2, 0.3]])


def test_empty_angle_set_is_one_dimensional():
    angles = AngleSet.from_flat([])
    assert angles.dimension == 1
    np.testing.assert_array_equal(to_matrix(angles), np.eye(1))


@pytest.mark.parametrize("n", range(2, 8))
def test_random_angles_respect_layer_ranges(n):
    """Inner angles stay in [-pi/2, pi/2), the last angle of each layer in [-pi, pi)."""
    angles = AngleSet.random(n, rng=np.random.default_rng(n))

    assert len(angles) == n * (n - 1) // 2
    assert angles.dimension == n
    for layer in angles.layers:
        assert np.all(np.abs(layer[:-1]) <= np.pi / 2)
        assert -np.pi <= layer[-1] < np.pi


def test_random_is_reproducible_with_seeded_rng():
    a = AngleSet.random(5, rng=np.random.default_rng(123))
    b = AngleSet.random(5, rng=np.random.default_rng(123))
    np.testing.assert_array_equal(a.angles, b.angles)


# ---------------------------------------
# Immutability
# ---------------------------------------


def test_angles_are_read_only():
    angles = AngleSet.from_flat([0.1, 0.2, 0.3])
    with pytest.raises(ValueError):
        angles.angles[0] = 1.0
    with pytest.raises(dataclasses.FrozenInstanceError):
        angles.angles = np.zeros(3)


def test_from_flat_copies_its_input():
    values = np.array([0.1, 0.2, 0.3])
    angles = AngleSet.from_flat(values)
    values[0] = 5.0
    assert angles.angles[0] == pytest.approx(0.1)


def test_layers_are_independent_of_the_angle_set():
    angles = AngleSet.from_flat([0.1, 0.2, 0.3])
    layers = angles.layers
    layers[0][0] = 9.0
    assert angles.angles[0] == pytest.approx(0.1)


# ---------------------------------------
# Conversions
# ---------------------------------------


@pytest.mark.parametrize("n", range(2, 9))
def test_to_matrix_is_orthonormal(n):
    angles = AngleSet.random(n, rng=np.random.default_rng(10 + n))
    U = to_matrix(angles)

    assert U.shape == (n, n)
    _assert_orthonormal(U)


@pytest.mark.parametrize("n", range(2, 9))
def test_angles_matrix_angles_round_trip(n):
    """Generic random angles are recovered exactly and the matrix is reproduced."""
    angles = AngleSet.random(n, rng=np.random.default_rng(20 + n))
    U = to_matrix(angles)

    recovered = AngleSet.from_matrix(U)

    np.testing.assert_allclose(to_matrix(recovered), U, atol=1e-9)
    np.testing.assert_allclose(recovered.angles, angles.angles, atol=1e-7)


def test_from_matrix_on_random_rotation():
    Q = special_ortho_group.rvs(6, random_state=np.random.default_rng(2024))

    angles = AngleSet.from_matrix(Q)

    assert angles.dimension == 6
    np.testing.assert_allclose(angles.to_matrix(), Q, atol=1e-9)


@pytest.mark.parametrize("n", [1, 2, 3, 5])
def test_identity_round_trip(n):
    angles = AngleSet.from_matrix(np.eye(n))

    np.testing.assert_array_equal(angles.angles, np.zeros(n * (n - 1) // 2))
    np.testing.assert_allclose(to_matrix(angles), np.eye(n), atol=1e-12)


def test_non_unit_column_is_rejected():
    M = np.eye(4)
    M[:, 2] *= 2.0
    with pytest.raises(PreconditionViolationError):
        AngleSet.from_matrix(M)


# ---------------------------------------
# Python protocol helpers
# ---------------------------------------


def test_iteration_and_array_conversion():
    angles = AngleSet.from_flat([0.5, -0.25, 1.0])

    assert list(angles) == [0.5, -0.25, 1.0]
    np.testing.assert_array_equal(np.asarray(angles), [0.5, -0.25, 1.0])


def test_repr_summarizes_dimension_and_values():
    rep = repr(AngleSet.from_flat([0.5, -0.25, 1.0]))
    assert "dimension=3" in rep
    assert "0.5000" in rep
