"""Strategies for computing the distance field of a label volume."""

from abc import ABC, abstractmethod

import numpy as np

from depthfield.constants import (
    DEFAULT_SPACING,
    STRATEGIES,
    STRATEGY_MULTI_LABEL,
    STRATEGY_PER_LABEL,
)
from depthfield.edt._multi_label import multi_label_edt
from depthfield.edt._per_label import per_label_edt


class DistanceTransformStrategy(ABC):
    """Base class for the ways of transforming a multi-label volume."""

    name: str

    @abstractmethod
    def __call__(
        self,
        label_image: np.ndarray,
        spacing: tuple[float, float, float] = DEFAULT_SPACING,
        edges_are_zero_for_nz: bool = True,
        do_sqrt: bool = True,
        parallel: bool = True,
    ) -> np.ndarray:
        """Compute the distance of each voxel to the nearest other region.

        Parameters
        ----------
        label_image : np.ndarray
            (nz, ny, nx) image of integer region labels. 0 is background.
        spacing : tuple[float, float, float]
            The physical voxel size along each array axis (dz, dy, dx).
        edges_are_zero_for_nz : bool
            If True, the edges of the field of view are treated as background.
        do_sqrt : bool
            If True, return Euclidean distances instead of squared distances.
        parallel : bool
            If False, the lines of each pass are processed on the calling
            thread only.

        Returns
        -------
        np.ndarray
            (nz, ny, nx) float32 array of distances.
        """
        pass


class MultiLabelStrategy(DistanceTransformStrategy):
    """Transform all labels in one sweep, segmenting each line by label."""

    name = STRATEGY_MULTI_LABEL

    def __call__(
        self,
        label_image: np.ndarray,
        spacing: tuple[float, float, float] = DEFAULT_SPACING,
        edges_are_zero_for_nz: bool = True,
        do_sqrt: bool = True,
        parallel: bool = True,
    ) -> np.ndarray:
        """Compute the distance field with multi_label_edt."""
        return multi_label_edt(
            label_image,
            spacing=spacing,
            edges_are_zero_for_nz=edges_are_zero_for_nz,
            do_sqrt=do_sqrt,
            parallel=parallel,
        )


class PerLabelStrategy(DistanceTransformStrategy):
    """Isolate and transform each label separately.

    Parameters
    ----------
    progress : bool
        If True, show a progress bar over the labels. Default is False.
    """

    name = STRATEGY_PER_LABEL

    def __init__(self, progress: bool = False):
        self.progress = progress

    def __call__(
        self,
        label_image: np.ndarray,
        spacing: tuple[float, float, float] = DEFAULT_SPACING,
        edges_are_zero_for_nz: bool = True,
        do_sqrt: bool = True,
        parallel: bool = True,
    ) -> np.ndarray:
        """Compute the distance field with per_label_edt."""
        return per_label_edt(
            label_image,
            spacing=spacing,
            edges_are_zero_for_nz=edges_are_zero_for_nz,
            do_sqrt=do_sqrt,
            progress=self.progress,
            parallel=parallel,
        )


def get_strategy(
    strategy: str | DistanceTransformStrategy,
) -> DistanceTransformStrategy:
    """Get a distance transform strategy.

    Parameters
    ----------
    strategy : str | DistanceTransformStrategy
        Either the name of the strategy ("multi_label" or "per_label")
        or a strategy instance, which is returned unchanged.

    Returns
    -------
    DistanceTransformStrategy
        The strategy.
    """
    if isinstance(strategy, DistanceTransformStrategy):
        return strategy
    elif strategy == STRATEGY_MULTI_LABEL:
        return MultiLabelStrategy()
    elif strategy == STRATEGY_PER_LABEL:
        return PerLabelStrategy()
    else:
        raise ValueError(
            f"Unknown strategy {strategy!r}, expected one of {STRATEGIES}"
        )
