"""Kernel Density Estimation code.

This code implements a weighted Gaussian KDE used to turn a handful of
weighted sample points into a smooth intensity surface on a regular grid.
"""
from .kde import InvalidInput, Window, DensityGrid, WeightedKDE, \
    as_point_array, gaussian_kernel, evaluate, estimate
