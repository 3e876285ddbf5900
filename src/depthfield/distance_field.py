"""
Functions for computing the depth of each voxel in a label volume.
"""

import logging
from typing import Literal

import dask.array as da
import numpy as np

from depthfield.constants import (
    DEFAULT_SPACING,
    METRIC_EDT,
    METRIC_EROSION,
    METRICS,
    STRATEGY_MULTI_LABEL,
)
from depthfield.edt import DistanceTransformStrategy, get_strategy
from depthfield.morphology import erosion_depth
from depthfield.errors import InvalidGeometryError
from depthfield.utils import validate_spacing, validate_volume_shape

logger = logging.getLogger(__name__)


def distance_field(
    image: np.ndarray,
    metric: Literal["edt", "erosion"] = METRIC_EDT,
    spacing: tuple[float, float, float] = DEFAULT_SPACING,
    edges_are_zero_for_nz: bool = True,
    do_sqrt: bool = True,
    strategy: str | DistanceTransformStrategy = STRATEGY_MULTI_LABEL,
) -> np.ndarray:
    """
    Compute the depth of each voxel in a label or binary volume.

    Parameters
    ----------
    image : np.ndarray
        (nz, ny, nx) image. For the "edt" metric, an image of integer
        region labels where 0 is background. For the "erosion" metric,
        a binary image with one byte per voxel.
    metric : Literal["edt", "erosion"]
        "edt" computes the exact Euclidean distance to the nearest other
        region. "erosion" counts the erosions each voxel survives.
        Default is "edt".
    spacing : tuple[float, float, float]
        The physical voxel size along each array axis (dz, dy, dx).
        Only used by the "edt" metric. Default is (1, 1, 1).
    edges_are_zero_for_nz : bool
        If True, the edges of the field of view are treated as background.
        Only used by the "edt" metric. Default is True.
    do_sqrt : bool
        If True, return Euclidean distances instead of squared distances.
        Only used by the "edt" metric. Default is True.
    strategy : str | DistanceTransformStrategy
        How labels are processed by the "edt" metric, either
        "multi_label", "per_label" or a strategy instance.
        Default is "multi_label".

    Returns
    -------
    np.ndarray
        (nz, ny, nx) float32 array with the depth of each voxel.
        Background voxels are 0.
    """
    if metric == METRIC_EDT:
        transform = get_strategy(strategy)
        logger.info(f"Computing the Euclidean distance field ({transform.name})")
        return transform(
            image,
            spacing=spacing,
            edges_are_zero_for_nz=edges_are_zero_for_nz,
            do_sqrt=do_sqrt,
        )
    elif metric == METRIC_EROSION:
        logger.info("Computing the erosion depth")
        return erosion_depth(image)
    else:
        raise ValueError(f"Unknown metric {metric!r}, expected one of {METRICS}")


def _transform_block(
    block: np.ndarray,
    transform: DistanceTransformStrategy,
    spacing: tuple[float, float, float],
    do_sqrt: bool,
) -> np.ndarray:
    """Transform one overlapping block, treating its faces as continuing.

    Blocks run on dask worker threads, so the lines of each pass are
    processed on the calling thread.
    """
    return transform(
        block,
        spacing=spacing,
        edges_are_zero_for_nz=False,
        do_sqrt=do_sqrt,
        parallel=False,
    )


def distance_field_lazy(
    image: da.Array,
    depth: int,
    spacing: tuple[float, float, float] = DEFAULT_SPACING,
    edges_are_zero_for_nz: bool = True,
    do_sqrt: bool = True,
    strategy: str | DistanceTransformStrategy = STRATEGY_MULTI_LABEL,
) -> da.Array:
    """
    Compute the Euclidean distance field of a chunked label volume.

    Each chunk is transformed together with an overlap of depth voxels
    from its neighbors. A distance is exact when the nearest voxel of
    another region lies within the overlapping block. Voxels with no other
    region inside their block are left at or above the sentinel distance
    sqrt(BIG), or BIG when do_sqrt is False. This happens for example in
    the middle of a region that is wider than a chunk plus twice the
    overlap.

    Parameters
    ----------
    image : da.Array
        (nz, ny, nx) image of integer region labels. 0 is background.
    depth : int
        Number of voxels each chunk overlaps with its neighbors.
        Must be at least 1.
    spacing : tuple[float, float, float]
        The physical voxel size along each array axis (dz, dy, dx).
        Default is (1, 1, 1).
    edges_are_zero_for_nz : bool
        If True, the edges of the field of view are treated as background.
        Default is True.
    do_sqrt : bool
        If True, return Euclidean distances instead of squared distances.
        Default is True.
    strategy : str | DistanceTransformStrategy
        How labels are processed, either "multi_label", "per_label"
        or a strategy instance. Default is "multi_label".

    Returns
    -------
    da.Array
        (nz, ny, nx) float32 array of distances.
    """
    if depth < 1:
        # a block one voxel wide would be too thin to transform
        raise InvalidGeometryError(f"Overlap depth must be at least 1, got {depth}")
    validate_volume_shape(image.shape)
    spacing = validate_spacing(spacing, image.shape)
    transform = get_strategy(strategy)

    # the field of view edges are made background by padding with zeros.
    # block faces are never background, internal faces border real data.
    boundary = 0 if edges_are_zero_for_nz else "none"

    return image.map_overlap(
        _transform_block,
        depth=depth,
        boundary=boundary,
        dtype=np.float32,
        meta=np.array((), dtype=np.float32),
        transform=transform,
        spacing=spacing,
        do_sqrt=do_sqrt,
    )
