"""Separable Euclidean distance transform of a multi-label volume."""

import logging

import numpy as np

from depthfield.constants import BIG, DEFAULT_SPACING, PASS_AXES
from depthfield.edt._segment import segmented_edt_lines, segmented_edt_lines_serial
from depthfield.utils import (
    allocate_field,
    allocation_guard,
    apply_along_axis,
    as_label_volume,
    validate_spacing,
    validate_volume_shape,
)

logger = logging.getLogger(__name__)


def multi_label_edt(
    label_image: np.ndarray,
    spacing: tuple[float, float, float] = DEFAULT_SPACING,
    edges_are_zero_for_nz: bool = True,
    do_sqrt: bool = True,
    parallel: bool = True,
) -> np.ndarray:
    """Compute the distance of each voxel to the nearest other region.

    All labels are processed in a single sweep. The 1D transform is applied
    along x, then y, then z, and along each line every run of equal labels
    is transformed on its own, so distances do not leak across a boundary
    between two regions.

    Parameters
    ----------
    label_image : np.ndarray
        (nz, ny, nx) image of integer region labels. 0 is background.
    spacing : tuple[float, float, float]
        The physical voxel size along each array axis (dz, dy, dx).
        Default is (1, 1, 1).
    edges_are_zero_for_nz : bool
        If True, the edges of the field of view are treated as background.
        If False, regions are treated as continuing past the edges.
        Default is True.
    do_sqrt : bool
        If True, return Euclidean distances. If False, return
        squared distances. Default is True.
    parallel : bool
        If True, the lines of each pass are processed by parallel numba
        threads. Set to False when the caller already runs in a thread
        pool. Default is True.

    Returns
    -------
    np.ndarray
        (nz, ny, nx) float32 array of distances. Background voxels are 0.

    Raises
    ------
    InvalidGeometryError
        If the volume is degenerate or the spacing is invalid.
    UnsupportedVoxelTypeError
        If the voxels cannot be used as labels.
    AllocationError
        If the distance field could not be allocated.
    """
    label_image = np.asarray(label_image)
    validate_volume_shape(label_image.shape)
    spacing = validate_spacing(spacing, label_image.shape)
    labels = as_label_volume(label_image)

    dist2 = allocate_field(labels.shape)
    with allocation_guard("the foreground of the label image"):
        dist2[labels > 0] = BIG

    lines_function = segmented_edt_lines if parallel else segmented_edt_lines_serial

    for axis in PASS_AXES:
        logger.debug(f"Transforming along axis {axis} (spacing {spacing[axis]})")
        apply_along_axis(
            lines_function,
            dist2,
            axis,
            spacing[axis],
            bool(edges_are_zero_for_nz),
            labels=labels,
        )

    if do_sqrt:
        np.sqrt(dist2, out=dist2)

    with allocation_guard("the output field"):
        return dist2.astype(np.float32)
