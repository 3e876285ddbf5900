"""Label aware 1D distance transform."""

import numpy as np
from numba import njit, prange

from depthfield.edt._kernels import squared_edt_1d


@njit(cache=True)
def segmented_edt_1d(
    labels: np.ndarray,
    dist2: np.ndarray,
    delta: float,
    edges_are_zero_for_nz: bool,
) -> None:
    """Transform each run of equal labels in a line separately.

    Distances never propagate across a label change. Instead, a zero
    distance seed is padded next to each run where it meets a different
    label. A run touching the start or end of the line is only padded at
    that end if edges_are_zero_for_nz is True. Runs with a label <= 0 are
    background and are not modified.

    Parameters
    ----------
    labels : np.ndarray
        (n,) array of integer region labels.
    dist2 : np.ndarray
        (n,) float array of the current squared distances.
        Modified in place.
    delta : float
        The physical distance between neighboring samples.
    edges_are_zero_for_nz : bool
        If True, the ends of the line are treated as background.
    """
    n = labels.shape[0]
    start = 0
    while start < n:
        label = labels[start]
        stop = start
        while stop + 1 < n and labels[stop + 1] == label:
            stop += 1

        if label > 0:
            pad_before = 1 if (start > 0 or edges_are_zero_for_nz) else 0
            pad_after = 1 if (stop < n - 1 or edges_are_zero_for_nz) else 0
            run_length = stop - start + 1

            padded = np.zeros(run_length + pad_before + pad_after, dtype=np.float64)
            padded[pad_before : pad_before + run_length] = dist2[start : stop + 1]
            transformed = squared_edt_1d(padded, delta)
            dist2[start : stop + 1] = transformed[pad_before : pad_before + run_length]

        start = stop + 1


@njit(parallel=True, cache=True)
def segmented_edt_lines(
    label_lines: np.ndarray,
    dist2_lines: np.ndarray,
    delta: float,
    edges_are_zero_for_nz: bool,
) -> None:
    """Apply segmented_edt_1d to every row of a 2D array of lines in parallel."""
    for line_index in prange(label_lines.shape[0]):
        segmented_edt_1d(
            label_lines[line_index],
            dist2_lines[line_index],
            delta,
            edges_are_zero_for_nz,
        )


@njit(cache=True)
def segmented_edt_lines_serial(
    label_lines: np.ndarray,
    dist2_lines: np.ndarray,
    delta: float,
    edges_are_zero_for_nz: bool,
) -> None:
    """Apply segmented_edt_1d to every row of a 2D array of lines in order."""
    for line_index in range(label_lines.shape[0]):
        segmented_edt_1d(
            label_lines[line_index],
            dist2_lines[line_index],
            delta,
            edges_are_zero_for_nz,
        )
