from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class ConversionOptions:
    """
    Numerical tolerances used by the matrix/angle conversions.

    Attributes:
        norm_atol: Absolute tolerance when checking that every column of an
            input matrix has unit Euclidean norm.
        degeneracy_atol: Absolute tolerance under which an angle is treated
            as ``pi / 2`` (or its cosine as zero) while decomposing a unit
            vector. Past that point the remaining angles cannot be resolved
            and are left at zero.
    """

    norm_atol: float = 1e-9
    degeneracy_atol: float = 1e-12

    def __post_init__(self) -> None:
        """Validate that all tolerances are finite and non-negative."""
        for name in ("norm_atol", "degeneracy_atol"):
            value = getattr(self, name)
            try:
                value = float(value)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"{name} must be a real number, got {value!r}") from exc
            if not math.isfinite(value) or value < 0.0:
                raise ValueError(f"{name} must be finite and non-negative, got {value}")
            object.__setattr__(self, name, value)


DEFAULT_OPTIONS = ConversionOptions()
