"""Exact Euclidean distance transforms of label volumes."""

from depthfield.edt._kernels import envelope_edt_1d, squared_edt_1d
from depthfield.edt._multi_label import multi_label_edt
from depthfield.edt._per_label import binary_edt, per_label_edt
from depthfield.edt._segment import segmented_edt_1d
from depthfield.edt._strategy import (
    DistanceTransformStrategy,
    MultiLabelStrategy,
    PerLabelStrategy,
    get_strategy,
)

__all__ = [
    "squared_edt_1d",
    "envelope_edt_1d",
    "segmented_edt_1d",
    "multi_label_edt",
    "per_label_edt",
    "binary_edt",
    "DistanceTransformStrategy",
    "MultiLabelStrategy",
    "PerLabelStrategy",
    "get_strategy",
]
