"""Utilities for validating volumes and iterating over their lines."""

from depthfield.utils._axis import apply_along_axis, gather_lines, scatter_lines
from depthfield.utils._validation import (
    allocate_field,
    allocation_guard,
    as_binary_volume,
    as_label_volume,
    validate_spacing,
    validate_volume_shape,
)

__all__ = [
    "apply_along_axis",
    "gather_lines",
    "scatter_lines",
    "allocate_field",
    "allocation_guard",
    "as_binary_volume",
    "as_label_volume",
    "validate_spacing",
    "validate_volume_shape",
]
