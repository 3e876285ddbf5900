"""Euclidean distance transform computed for one label at a time."""

import logging

import numpy as np
from numba import njit, prange
from scipy.ndimage import find_objects
from tqdm import tqdm

from depthfield.constants import BIG, DEFAULT_SPACING, PASS_AXES
from depthfield.edt._kernels import envelope_edt_1d
from depthfield.utils import (
    allocate_field,
    allocation_guard,
    apply_along_axis,
    as_label_volume,
    validate_spacing,
    validate_volume_shape,
)

logger = logging.getLogger(__name__)


@njit(parallel=True, cache=True)
def envelope_edt_lines(lines: np.ndarray, scale: float) -> None:
    """Apply envelope_edt_1d to every row of a 2D array of lines in parallel."""
    for line_index in prange(lines.shape[0]):
        envelope_edt_1d(lines[line_index], scale)


@njit(cache=True)
def envelope_edt_lines_serial(lines: np.ndarray, scale: float) -> None:
    """Apply envelope_edt_1d to every row of a 2D array of lines in order."""
    for line_index in range(lines.shape[0]):
        envelope_edt_1d(lines[line_index], scale)


def _squared_mask_edt(
    mask: np.ndarray,
    spacing: tuple[float, float, float],
    edges_are_zero_for_nz: bool,
    parallel: bool = True,
) -> np.ndarray:
    """Squared distance of each True voxel to the nearest False voxel.

    When edges_are_zero_for_nz is True the mask is padded with one
    background voxel on every face, which is cropped off again afterwards.
    """
    if edges_are_zero_for_nz:
        with allocation_guard("the padded mask"):
            mask = np.pad(mask, 1, mode="constant", constant_values=False)

    dist2 = allocate_field(mask.shape)
    with allocation_guard("the foreground of the mask"):
        dist2[mask] = BIG

    lines_function = envelope_edt_lines if parallel else envelope_edt_lines_serial
    for axis in PASS_AXES:
        apply_along_axis(lines_function, dist2, axis, spacing[axis])

    if edges_are_zero_for_nz:
        dist2 = dist2[1:-1, 1:-1, 1:-1]

    return dist2


def _expand_box(
    box: tuple[slice, ...], shape: tuple[int, ...]
) -> tuple[slice, ...]:
    """Grow a bounding box by one voxel on each side.

    The box is clipped to the volume, so every face of the grown box either
    lies on the edge of the volume or is outside the original box.
    """
    return tuple(
        slice(max(box_slice.start - 1, 0), min(box_slice.stop + 1, size))
        for box_slice, size in zip(box, shape)
    )


def binary_edt(
    mask: np.ndarray,
    spacing: tuple[float, float, float] = DEFAULT_SPACING,
    edges_are_zero_for_nz: bool = True,
    do_sqrt: bool = True,
    parallel: bool = True,
) -> np.ndarray:
    """Compute the distance of each foreground voxel to the background.

    Parameters
    ----------
    mask : np.ndarray
        (nz, ny, nx) binary image. Non-zero values are foreground.
    spacing : tuple[float, float, float]
        The physical voxel size along each array axis (dz, dy, dx).
        Default is (1, 1, 1).
    edges_are_zero_for_nz : bool
        If True, the edges of the field of view are treated as background.
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
    """
    mask = np.asarray(mask)
    validate_volume_shape(mask.shape)
    spacing = validate_spacing(spacing, mask.shape)

    with allocation_guard("the binary mask"):
        mask = mask != 0
    dist2 = _squared_mask_edt(mask, spacing, bool(edges_are_zero_for_nz), parallel)

    if do_sqrt:
        np.sqrt(dist2, out=dist2)

    with allocation_guard("the output field"):
        return dist2.astype(np.float32)


def per_label_edt(
    label_image: np.ndarray,
    spacing: tuple[float, float, float] = DEFAULT_SPACING,
    edges_are_zero_for_nz: bool = True,
    do_sqrt: bool = True,
    progress: bool = False,
    parallel: bool = True,
) -> np.ndarray:
    """Compute the distance of each voxel to the nearest other region.

    Each label is isolated into its own binary mask and transformed
    separately. Unlike multi_label_edt, the distance is measured to the
    nearest voxel with a different label anywhere in the volume, not only
    along paths that stay inside the region.

    Parameters
    ----------
    label_image : np.ndarray
        (nz, ny, nx) image of integer region labels. 0 is background.
    spacing : tuple[float, float, float]
        The physical voxel size along each array axis (dz, dy, dx).
        Default is (1, 1, 1).
    edges_are_zero_for_nz : bool
        If True, the edges of the field of view are treated as background.
        Default is True.
    do_sqrt : bool
        If True, return Euclidean distances. If False, return
        squared distances. Default is True.
    progress : bool
        If True, show a progress bar over the labels. Default is False.
    parallel : bool
        If True, the lines of each pass are processed by parallel numba
        threads. Set to False when the caller already runs in a thread
        pool. Default is True.

    Returns
    -------
    np.ndarray
        (nz, ny, nx) float32 array of distances. Background voxels are 0.
    """
    label_image = np.asarray(label_image)
    validate_volume_shape(label_image.shape)
    spacing = validate_spacing(spacing, label_image.shape)
    labels = as_label_volume(label_image)

    # bounding box of every positive label, indexed by label - 1
    with allocation_guard("the label bounding boxes"):
        bounding_boxes = find_objects(np.maximum(labels, 0))
    label_boxes = [
        (index + 1, box) for index, box in enumerate(bounding_boxes) if box is not None
    ]
    logger.info(f"Computing distance fields for {len(label_boxes)} labels")

    dist2 = allocate_field(labels.shape)
    for label_value, box in tqdm(
        label_boxes, desc="Processing labels", disable=not progress
    ):
        with allocation_guard(f"the distance field of label {label_value}"):
            # everything outside the grown box is farther away than its faces
            box = _expand_box(box, labels.shape)
            box_mask = labels[box] == label_value
            box_dist2 = _squared_mask_edt(
                box_mask, spacing, bool(edges_are_zero_for_nz), parallel
            )
            dist2[box][box_mask] = box_dist2[box_mask]

    if do_sqrt:
        np.sqrt(dist2, out=dist2)

    with allocation_guard("the output field"):
        return dist2.astype(np.float32)
