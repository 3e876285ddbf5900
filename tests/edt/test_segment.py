import numpy as np

from depthfield.constants import BIG
from depthfield.edt import segmented_edt_1d


def test_label_transition_without_edge_padding():
    """The distance is measured to the label transition, not the edges."""
    labels = np.array([1, 1, 2, 2])
    dist2 = np.full(4, BIG)

    segmented_edt_1d(labels, dist2, 1.0, False)

    np.testing.assert_allclose(dist2, [4, 1, 1, 4])


def test_label_transition_with_edge_padding():
    """With the edge policy on, the edges also act as background."""
    labels = np.array([1, 1, 2, 2])
    dist2 = np.full(4, BIG)

    segmented_edt_1d(labels, dist2, 1.0, True)

    np.testing.assert_allclose(dist2, [1, 1, 1, 1])


def test_background_is_untouched():
    """Background runs keep their values and act as seeds."""
    labels = np.array([0, 1, 1, 1, 0, 0, 5])
    dist2 = np.array([0, BIG, BIG, BIG, 0, 0, BIG])

    segmented_edt_1d(labels, dist2, 0.5, False)

    # the last voxel is a single voxel run at the end of the line
    np.testing.assert_allclose(dist2, [0, 0.25, 1, 0.25, 0, 0, 0.25])


def test_whole_line_single_label():
    """A line filled by one label has no seeds unless the edges are zero."""
    labels = np.ones(5, dtype=np.int64)

    dist2 = np.full(5, BIG)
    segmented_edt_1d(labels, dist2, 1.0, False)
    assert np.all(dist2 >= BIG)

    dist2 = np.full(5, BIG)
    segmented_edt_1d(labels, dist2, 1.0, True)
    np.testing.assert_allclose(dist2, [1, 4, 9, 4, 1])


def test_existing_distances_are_used():
    """Finite distances from a previous pass are combined with the run seeds."""
    labels = np.array([2, 2, 2, 2, 2])
    dist2 = np.array([BIG, BIG, BIG, 1.0, BIG])

    segmented_edt_1d(labels, dist2, 1.0, False)

    np.testing.assert_allclose(dist2, [10, 5, 2, 1, 2])
