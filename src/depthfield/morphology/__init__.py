"""Morphological depth estimates of binary volumes."""

from depthfield.morphology._erosion import erosion_depth

__all__ = ["erosion_depth"]
