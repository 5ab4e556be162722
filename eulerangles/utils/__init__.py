"""
Utility sub-package with the building blocks of the Euler-angle conversions.
"""

from .errors import (
    EulerAnglesError,
    InvalidDimensionError,
    PreconditionViolationError,
)

from .options import (
    ConversionOptions,
    DEFAULT_OPTIONS,
)

from .layering import (
    dimension_from_length,
    number_of_angles,
    to_flat,
    to_layered,
)

from .decomposition import (
    angles_from_matrix,
    build_block,
    check_round_trip,
    decompose_unit_vector,
    matrix_from_angles,
    plot_layers,
)

__all__ = [
    "EulerAnglesError",
    "InvalidDimensionError",
    "PreconditionViolationError",
    "ConversionOptions",
    "DEFAULT_OPTIONS",
    "dimension_from_length",
    "number_of_angles",
    "to_flat",
    "to_layered",
    "angles_from_matrix",
    "build_block",
    "check_round_trip",
    "decompose_unit_vector",
    "matrix_from_angles",
    "plot_layers",
]
