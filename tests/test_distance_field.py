"""
Tests for the depth metric dispatcher.
"""

import dask
import dask.array as da
import numpy as np
import pytest

from depthfield.constants import BIG
from depthfield.distance_field import distance_field, distance_field_lazy
from depthfield.edt import MultiLabelStrategy, multi_label_edt, per_label_edt
from depthfield.errors import InvalidGeometryError, UnsupportedVoxelTypeError
from depthfield.morphology import erosion_depth


def test_distance_field_edt(touching_boxes_volume):
    """The default metric is the multi-label Euclidean distance transform."""
    spacing = (1.0, 0.5, 2.0)

    np.testing.assert_array_equal(
        distance_field(touching_boxes_volume, spacing=spacing),
        multi_label_edt(touching_boxes_volume, spacing=spacing),
    )


def test_distance_field_per_label(touching_boxes_volume):
    """The strategy can be selected by name."""
    np.testing.assert_array_equal(
        distance_field(touching_boxes_volume, strategy="per_label", do_sqrt=False),
        per_label_edt(touching_boxes_volume, do_sqrt=False),
    )


def test_distance_field_custom_strategy(touching_boxes_volume):
    """Strategy instances are used as given."""

    class DoubledStrategy(MultiLabelStrategy):
        def __call__(self, label_image, **kwargs):
            return 2 * super().__call__(label_image, **kwargs)

    np.testing.assert_allclose(
        distance_field(touching_boxes_volume, strategy=DoubledStrategy()),
        2 * multi_label_edt(touching_boxes_volume),
    )


def test_distance_field_erosion():
    """The erosion metric ignores the distance options."""
    volume = np.zeros((9, 9, 9), dtype=np.uint8)
    volume[2:7, 2:7, 2:7] = 1

    np.testing.assert_array_equal(
        distance_field(volume, metric="erosion", spacing=(2.0, 2.0, 2.0)),
        erosion_depth(volume),
    )


def test_distance_field_erosion_requires_bytes():
    """Label images with wide voxels are rejected by the erosion metric."""
    with pytest.raises(UnsupportedVoxelTypeError):
        distance_field(np.ones((2, 3, 4), dtype=np.int32), metric="erosion")


def test_distance_field_unknown_metric(box_volume):
    """Unknown metrics are rejected."""
    with pytest.raises(ValueError, match="Unknown metric"):
        distance_field(box_volume, metric="manhattan")


@pytest.mark.parametrize("metric", ["edt", "erosion"])
@pytest.mark.parametrize("edges_are_zero_for_nz", [True, False])
@pytest.mark.parametrize("strategy", ["multi_label", "per_label"])
def test_distance_field_all_background(metric, edges_are_zero_for_nz, strategy):
    """A volume without foreground is zero for every metric and option."""
    volume = np.zeros((3, 4, 5), dtype=np.uint8)

    depth = distance_field(
        volume,
        metric=metric,
        edges_are_zero_for_nz=edges_are_zero_for_nz,
        strategy=strategy,
    )

    np.testing.assert_array_equal(depth, 0)


@pytest.mark.parametrize("strategy", ["multi_label", "per_label"])
def test_distance_field_lazy_matches_eager(box_volume, strategy):
    """Chunked distances equal the full volume when shorter than the depth."""
    spacing = (1.0, 1.0, 0.5)
    dask_image = da.from_array(box_volume, chunks=(6, 7, 8))

    for edges_are_zero_for_nz in (True, False):
        distances = distance_field_lazy(
            dask_image,
            depth=4,
            spacing=spacing,
            edges_are_zero_for_nz=edges_are_zero_for_nz,
            strategy=strategy,
        )

        assert isinstance(distances, da.Array)
        np.testing.assert_allclose(
            distances.compute(),
            distance_field(
                box_volume,
                spacing=spacing,
                edges_are_zero_for_nz=edges_are_zero_for_nz,
                strategy=strategy,
            ),
            rtol=1e-6,
        )


def test_distance_field_lazy_edges():
    """The field of view edges of a chunked volume act as background."""
    volume = np.ones((8, 8, 8), dtype=np.uint8)
    dask_image = da.from_array(volume, chunks=(4, 4, 4))

    distances = distance_field_lazy(
        dask_image, depth=4, edges_are_zero_for_nz=True, do_sqrt=False
    ).compute()

    np.testing.assert_allclose(
        distances, multi_label_edt(volume, do_sqrt=False), rtol=1e-6
    )
    assert distances.max() == 16


@pytest.mark.parametrize(
    "strategy,parallel_driver",
    [
        ("multi_label", "depthfield.edt._multi_label.segmented_edt_lines"),
        ("per_label", "depthfield.edt._per_label.envelope_edt_lines"),
    ],
)
def test_distance_field_lazy_threaded_scheduler(
    monkeypatch, touching_boxes_volume, strategy, parallel_driver
):
    """Blocks computed on dask worker threads do not start numba threads."""

    def _fail_parallel_driver(*args, **kwargs):
        raise AssertionError("parallel line driver called from a dask worker")

    expected = distance_field(touching_boxes_volume, strategy=strategy)
    monkeypatch.setattr(parallel_driver, _fail_parallel_driver)

    dask_image = da.from_array(touching_boxes_volume, chunks=5)
    with dask.config.set(scheduler="threads"):
        distances = distance_field_lazy(
            dask_image, depth=4, strategy=strategy
        ).compute()

    np.testing.assert_allclose(distances, expected, rtol=1e-6)


@pytest.mark.parametrize("do_sqrt", [True, False])
def test_distance_field_lazy_beyond_overlap(do_sqrt):
    """Voxels with no other region inside their block keep the sentinel."""
    volume = np.ones((4, 4, 40), dtype=np.int32)
    volume[..., 20:] = 2
    dask_image = da.from_array(volume, chunks=(4, 4, 10))

    distances = distance_field_lazy(
        dask_image, depth=2, edges_are_zero_for_nz=False, do_sqrt=do_sqrt
    ).compute()
    expected = distance_field(volume, edges_are_zero_for_nz=False, do_sqrt=do_sqrt)

    sentinel = np.sqrt(BIG) if do_sqrt else BIG
    assert np.all(distances[..., :10] >= 0.999 * sentinel)
    assert np.all(distances[..., 30:] >= 0.999 * sentinel)
    np.testing.assert_allclose(distances[..., 10:30], expected[..., 10:30], rtol=1e-6)


@pytest.mark.parametrize("depth", [0, -1])
def test_distance_field_lazy_invalid_depth(box_volume, depth):
    """The chunks must overlap by at least one voxel."""
    dask_image = da.from_array(box_volume, chunks=6)

    with pytest.raises(InvalidGeometryError, match="at least 1"):
        distance_field_lazy(dask_image, depth=depth)


def test_distance_field_lazy_thin_trailing_chunk():
    """A trailing chunk one voxel wide is transformed with its overlap."""
    # runs of two voxels along x, so every distance is at most 2
    volume = np.broadcast_to(np.arange(9) // 2 + 1, (6, 6, 9)).astype(np.int32)
    dask_image = da.from_array(volume, chunks=(6, 6, 4))

    distances = distance_field_lazy(
        dask_image, depth=1, edges_are_zero_for_nz=False
    ).compute()

    np.testing.assert_allclose(
        distances,
        distance_field(volume, edges_are_zero_for_nz=False),
        rtol=1e-6,
    )
