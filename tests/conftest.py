"""Fixtures for testing with Pytest."""

import numpy as np
import pytest


@pytest.fixture
def box_volume():
    """Return a label volume with a single box that does not touch the edges."""
    volume = np.zeros((12, 14, 16), dtype=np.uint8)
    volume[3:9, 4:10, 5:12] = 1
    return volume


@pytest.fixture
def touching_boxes_volume():
    """Return a label volume with two boxes that touch along x."""
    volume = np.zeros((10, 10, 14), dtype=np.int32)
    volume[2:8, 2:8, 2:6] = 1
    volume[2:8, 2:8, 6:12] = 2
    return volume


@pytest.fixture
def edge_slab_volume():
    """Return a label volume with a slab spanning the full x extent."""
    volume = np.zeros((6, 8, 10), dtype=np.int16)
    volume[1:5, 1:7, :] = 3
    return volume


@pytest.fixture
def sphere_volume():
    """Return a binary volume with a sphere in the middle."""
    z, y, x = np.indices((15, 17, 19))
    sphere = (z - 7) ** 2 + (y - 8) ** 2 + (x - 9) ** 2 <= 25
    return sphere.astype(np.uint8)
