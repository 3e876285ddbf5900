"""Validation and conversion of volumes before a transform."""

from collections.abc import Iterator
from contextlib import contextmanager

import numpy as np

from depthfield.constants import BIG, MAX_DIAGONAL_FRACTION
from depthfield.errors import (
    AllocationError,
    InvalidGeometryError,
    UnsupportedVoxelTypeError,
)


@contextmanager
def allocation_guard(description: str) -> Iterator[None]:
    """Re-raise a MemoryError from the enclosed block as an AllocationError.

    Parameters
    ----------
    description : str
        What was being allocated. Used in the error message.
    """
    try:
        yield
    except AllocationError:
        raise
    except MemoryError as err:
        raise AllocationError(f"Could not allocate {description}") from err


def allocate_field(
    shape: tuple[int, ...], fill: float = 0.0, dtype=np.float64
) -> np.ndarray:
    """Allocate a distance field filled with a constant value.

    Parameters
    ----------
    shape : tuple[int, ...]
        Shape of the field.
    fill : float
        Value every voxel is initialized to. Default is 0.
    dtype : np.dtype
        Data type of the field. Default is float64.

    Returns
    -------
    np.ndarray
        The allocated field.

    Raises
    ------
    AllocationError
        If the field could not be allocated.
    """
    with allocation_guard(f"a field of shape {shape}"):
        return np.full(shape, fill, dtype=dtype)


def validate_volume_shape(shape: tuple[int, ...]) -> None:
    """Check that a volume of this shape can be transformed.

    The shape is given in array order (nz, ny, nx).

    Raises
    ------
    InvalidGeometryError
        If the volume is not 3D, or nx < 2, ny < 2 or nz < 1.
    """
    if len(shape) != 3:
        raise InvalidGeometryError(f"Volume must be 3D, got {len(shape)}D")

    nz, ny, nx = shape
    if nx < 2 or ny < 2 or nz < 1:
        raise InvalidGeometryError(
            f"Volume must have nx >= 2, ny >= 2 and nz >= 1, got shape {shape}"
        )


def validate_spacing(
    spacing: tuple[float, float, float], shape: tuple[int, int, int]
) -> tuple[float, float, float]:
    """Check the voxel spacing of a volume.

    Parameters
    ----------
    spacing : tuple[float, float, float]
        The physical voxel size along each array axis (dz, dy, dx).
    shape : tuple[int, int, int]
        The shape of the volume the spacing belongs to.

    Returns
    -------
    tuple[float, float, float]
        The spacing as a tuple of python floats.

    Raises
    ------
    InvalidGeometryError
        If the spacing does not have three finite, strictly positive values,
        or if the physical extent of the volume is too large for the
        foreground sentinel.
    """
    if len(spacing) != 3:
        raise InvalidGeometryError(f"spacing must have length 3, got {len(spacing)}")

    spacing = tuple(float(s) for s in spacing)
    if not all(np.isfinite(s) and s > 0 for s in spacing):
        raise InvalidGeometryError(
            f"spacing must be finite and strictly positive, got {spacing}"
        )

    # the padded lines are at most two voxels longer than the volume
    squared_diagonal = sum(((n + 2) * s) ** 2 for n, s in zip(shape, spacing))
    if squared_diagonal > BIG * MAX_DIAGONAL_FRACTION:
        raise InvalidGeometryError(
            f"The physical extent of a volume of shape {shape} with spacing "
            f"{spacing} is too large to compute distances for"
        )

    return spacing


def as_label_volume(image: np.ndarray) -> np.ndarray:
    """Convert an image to an integer label volume.

    Boolean and integer images are cast to int64. Floating point images are
    rounded to the nearest label by adding 0.5 and truncating.

    Parameters
    ----------
    image : np.ndarray
        The label or binary image.

    Returns
    -------
    np.ndarray
        C-contiguous int64 array with the same shape as image.

    Raises
    ------
    UnsupportedVoxelTypeError
        If the image is not boolean, integer or floating point, or holds
        unsigned labels that do not fit in int64.
    """
    image = np.asarray(image)
    kind = image.dtype.kind

    if kind == "u" and image.size and image.max() > np.uint64(np.iinfo(np.int64).max):
        raise UnsupportedVoxelTypeError(
            f"Labels of type {image.dtype} must be smaller than 2**63"
        )

    with allocation_guard("the label volume"):
        if kind in "biu":
            return np.ascontiguousarray(image, dtype=np.int64)
        elif kind == "f":
            return np.ascontiguousarray((image + 0.5).astype(np.int64))

    raise UnsupportedVoxelTypeError(
        f"Cannot use voxels of type {image.dtype} as region labels"
    )


def as_binary_volume(image: np.ndarray) -> np.ndarray:
    """Convert a single-byte image to a boolean volume.

    Raises
    ------
    UnsupportedVoxelTypeError
        If the voxels are not bool, uint8 or int8.
    """
    image = np.asarray(image)
    if image.dtype.kind not in "biu" or image.dtype.itemsize != 1:
        raise UnsupportedVoxelTypeError(
            f"Binary volumes must have one byte per voxel, got {image.dtype}"
        )

    with allocation_guard("the binary volume"):
        return image != 0
