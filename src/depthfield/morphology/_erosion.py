"""Estimate the depth of each voxel by repeated erosion."""

import logging

import numpy as np
from scipy.ndimage import binary_erosion, generate_binary_structure

from depthfield.utils import (
    allocate_field,
    allocation_guard,
    as_binary_volume,
    validate_volume_shape,
)

logger = logging.getLogger(__name__)


def erosion_depth(binary_image: np.ndarray) -> np.ndarray:
    """Count how many 6-connected erosions each foreground voxel survives.

    The depth of a foreground voxel is the number of erosions it survives
    plus one. Background voxels have depth 0. Voxels outside of the volume
    are treated as foreground, so objects are not eroded from the edges
    of the field of view. The depth is measured in voxel steps and does
    not depend on the voxel spacing.

    Parameters
    ----------
    binary_image : np.ndarray
        (nz, ny, nx) binary image with one byte per voxel
        (bool, uint8 or int8). Non-zero values are foreground.

    Returns
    -------
    np.ndarray
        (nz, ny, nx) float32 array of the erosion depth of each voxel.

    Raises
    ------
    InvalidGeometryError
        If the volume is degenerate.
    UnsupportedVoxelTypeError
        If the image does not have one byte per voxel.
    AllocationError
        If the depth image could not be allocated.
    """
    binary_image = np.asarray(binary_image)
    validate_volume_shape(binary_image.shape)
    foreground = as_binary_volume(binary_image)

    # face connected neighbors only
    structure = generate_binary_structure(rank=3, connectivity=1)

    depth = allocate_field(foreground.shape, dtype=np.float32)
    depth += foreground

    n_iterations = 0
    while foreground.any():
        with allocation_guard("the eroded volume"):
            eroded = binary_erosion(foreground, structure=structure, border_value=1)
        n_iterations += 1

        if np.array_equal(eroded, foreground):
            # only happens when every voxel is foreground
            logger.warning(
                "The foreground fills the whole volume and cannot be eroded"
            )
            break

        depth += eroded
        foreground = eroded

    logger.debug(f"Eroded the volume in {n_iterations} iterations")
    return depth
