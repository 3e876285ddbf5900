"""Lower envelope of parabolas kernels for 1D Euclidean distance transforms.

Both kernels implement the method of Felzenszwalb and Huttenlocher (2012).
The squared distance of each sample is the minimum over all samples p of
f[p] + (delta * (q - p))**2, which is found by building the lower envelope
of the parabolas rooted at each sample and then evaluating it.
"""

import numpy as np
from numba import njit


@njit(cache=True)
def _intersection(f: np.ndarray, p: int, q: int, delta: float) -> float:
    """Physical position where the parabolas rooted at p and q intersect."""
    p_position = p * delta
    q_position = q * delta
    return ((f[q] + q_position * q_position) - (f[p] + p_position * p_position)) / (
        2.0 * (q_position - p_position)
    )


@njit(cache=True)
def squared_edt_1d(f: np.ndarray, delta: float) -> np.ndarray:
    """Compute the squared Euclidean distance transform of a line.

    Parameters
    ----------
    f : np.ndarray
        (n,) array of squared distance seed values. Seeds are 0 and
        samples that still need a distance hold a large sentinel value.
    delta : float
        The physical distance between neighboring samples.
        Must be strictly positive.

    Returns
    -------
    np.ndarray
        (n,) float64 array of the transformed squared distances.
    """
    if delta <= 0:
        raise ValueError("delta must be strictly positive")

    n = f.shape[0]
    df = np.empty(n, dtype=np.float64)
    if n < 2:
        for q in range(n):
            df[q] = f[q]
        return df

    # v holds the vertices of the parabolas in the lower envelope and
    # z the positions where each of them starts to be the lowest
    v = np.zeros(n, dtype=np.int64)
    z = np.empty(n + 1, dtype=np.float64)
    k = 0
    z[0] = -np.inf
    z[1] = np.inf

    for q in range(1, n):
        s = _intersection(f, v[k], q, delta)
        while s <= z[k]:
            k -= 1
            s = _intersection(f, v[k], q, delta)
        k += 1
        v[k] = q
        z[k] = s
        z[k + 1] = np.inf

    k = 0
    for q in range(n):
        while z[k + 1] < q * delta:
            k += 1
        offset = delta * (q - v[k])
        df[q] = offset * offset + f[v[k]]

    return df


@njit(cache=True)
def _vertex_intersection(g: np.ndarray, p: int, q: int) -> float:
    """Index position where the parabolas rooted at p and q intersect."""
    return ((g[q] + q * q) - (g[p] + p * p)) / (2.0 * q - 2.0 * p)


@njit(cache=True)
def envelope_edt_1d(f: np.ndarray, scale: float) -> None:
    """Compute the squared Euclidean distance transform of a line in place.

    The envelope is built in voxel index units on f / scale**2 and the
    result is scaled back to physical units.

    Parameters
    ----------
    f : np.ndarray
        (n,) float array of squared distance seed values.
        Overwritten with the transformed squared distances.
    scale : float
        The physical distance between neighboring samples.
        Must be strictly positive.
    """
    if scale <= 0:
        raise ValueError("scale must be strictly positive")

    n = f.shape[0]
    if n < 2:
        return

    scale_squared = scale * scale
    g = f / scale_squared

    d = np.empty(n, dtype=np.float64)
    v = np.zeros(n, dtype=np.int64)
    z = np.empty(n + 1, dtype=np.float64)
    k = 0
    z[0] = -np.inf
    z[1] = np.inf

    for q in range(1, n):
        # remove parabolas that are no longer part of the lower envelope
        s = _vertex_intersection(g, v[k], q)
        while s <= z[k]:
            k -= 1
            s = _vertex_intersection(g, v[k], q)
        k += 1
        v[k] = q
        z[k] = s
        z[k + 1] = np.inf

    k = 0
    for q in range(n):
        while z[k + 1] < q:
            k += 1
        dx = (q - v[k]) * scale
        d[q] = dx * dx + g[v[k]] * scale_squared

    for q in range(n):
        f[q] = d[q]
