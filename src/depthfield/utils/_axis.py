"""Apply line functions along one axis of a volume."""

from collections.abc import Callable

import numpy as np

from depthfield.utils._validation import allocation_guard


def gather_lines(array: np.ndarray, axis: int) -> np.ndarray:
    """Collect all 1D lines along an axis into a contiguous 2D buffer.

    For the last (fastest varying) axis of a C-contiguous array the
    returned buffer is a view, so changes to it are made in place.
    For the other axes the lines are copied into a new buffer.

    Parameters
    ----------
    array : np.ndarray
        The array to take the lines from.
    axis : int
        The axis the lines run along.

    Returns
    -------
    np.ndarray
        (n_lines, array.shape[axis]) array where each row is one line.
    """
    moved = np.moveaxis(array, axis, -1)
    with allocation_guard(f"the lines along axis {axis}"):
        return np.ascontiguousarray(moved).reshape(-1, array.shape[axis])


def scatter_lines(lines: np.ndarray, array: np.ndarray, axis: int) -> None:
    """Write lines collected with gather_lines back into the array.

    Parameters
    ----------
    lines : np.ndarray
        (n_lines, array.shape[axis]) array of lines.
    array : np.ndarray
        The array to write into. Modified in place.
    axis : int
        The axis the lines run along.
    """
    target = np.moveaxis(array, axis, -1)
    if np.may_share_memory(lines, target):
        # the lines are a view of the array, nothing to copy
        return
    target[...] = lines.reshape(target.shape)


def apply_along_axis(
    lines_function: Callable[..., None],
    field: np.ndarray,
    axis: int,
    *args,
    labels: np.ndarray | None = None,
) -> None:
    """Apply a line function to every line of a field along one axis.

    The line function receives the lines as a contiguous 2D array and
    must modify them in place. When labels are given, the label lines are
    passed to the line function before the field lines.

    Parameters
    ----------
    lines_function : Callable[..., None]
        Function called as lines_function(field_lines, *args) or
        lines_function(label_lines, field_lines, *args).
    field : np.ndarray
        The field to transform. Modified in place.
    axis : int
        The axis to apply the line function along.
    *args
        Additional positional arguments passed to lines_function.
    labels : np.ndarray | None
        Label volume with the same shape as field. Default is None.
    """
    field_lines = gather_lines(field, axis)
    label_lines = None if labels is None else gather_lines(labels, axis)
    with allocation_guard(f"the scratch lines along axis {axis}"):
        if label_lines is None:
            lines_function(field_lines, *args)
        else:
            lines_function(label_lines, field_lines, *args)
    scatter_lines(field_lines, field, axis)
