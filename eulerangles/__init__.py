"""
eulerangles: generalized Euler angles for n-dimensional rotation matrices.
"""

# Re-export the value type
from .angleset import AngleSet, to_matrix

# Re-export conversion utilities
from .utils import (
    ConversionOptions,
    DEFAULT_OPTIONS,
    EulerAnglesError,
    InvalidDimensionError,
    PreconditionViolationError,
    angles_from_matrix,
    build_block,
    check_round_trip,
    decompose_unit_vector,
    matrix_from_angles,
    plot_layers,
    to_flat,
    to_layered,
)

__all__ = [
    "AngleSet",
    "to_matrix",

    # Configuration
    "ConversionOptions",
    "DEFAULT_OPTIONS",

    # Errors
    "EulerAnglesError",
    "InvalidDimensionError",
    "PreconditionViolationError",

    # Conversions
    "angles_from_matrix",
    "build_block",
    "check_round_trip",
    "decompose_unit_vector",
    "matrix_from_angles",
    "plot_layers",
    "to_flat",
    "to_layered",
]
