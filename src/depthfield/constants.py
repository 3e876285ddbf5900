"""Constants used for computing distance fields.

Generally, these are sentinel values and option names.
"""

# value given to foreground voxels before the transform.
# must be far larger than the squared physical diagonal of any volume.
BIG = 1e10

# the squared physical diagonal of a volume may be at most this
# fraction of BIG
MAX_DIAGONAL_FRACTION = 0.1

DEFAULT_SPACING = (1.0, 1.0, 1.0)

METRIC_EDT = "edt"
METRIC_EROSION = "erosion"
METRICS = (METRIC_EDT, METRIC_EROSION)

STRATEGY_MULTI_LABEL = "multi_label"
STRATEGY_PER_LABEL = "per_label"
STRATEGIES = (STRATEGY_MULTI_LABEL, STRATEGY_PER_LABEL)

# array axis of each pass, in the order the passes are applied (x, y, z)
PASS_AXES = (2, 1, 0)
