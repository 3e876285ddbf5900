"""Exceptions raised while computing distance fields."""


class DistanceFieldError(Exception):
    """Base class for all errors raised by depthfield."""


class InvalidGeometryError(DistanceFieldError, ValueError):
    """The volume dimensions or the voxel spacing cannot be processed."""


class UnsupportedVoxelTypeError(DistanceFieldError, TypeError):
    """The voxel data type is not handled by the selected metric."""


class AllocationError(DistanceFieldError, MemoryError):
    """A distance field or scratch buffer could not be allocated."""
