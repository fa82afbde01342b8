"""Weighted kernel density estimation on a regular grid.

:Version: 0.1.0 of 2026/10/19
"""

import logging
from dataclasses import dataclass
import numpy as np
from sklearn.base import BaseEstimator
from sklearn.utils import check_array

LOGGER = logging.getLogger(__name__)


class InvalidInput(ValueError):
    """Raised when the estimator is called with an unusable configuration."""


@dataclass(frozen=True)
class Window:
    """An axis-aligned rectangle where a surface is evaluated.

    Parameters
    ----------
    x_min, x_max : float
        The longitude range, in degrees.

    y_min, y_max : float
        The latitude range, in degrees.

    """

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @property
    def width(self):
        return self.x_max - self.x_min

    @property
    def height(self):
        return self.y_max - self.y_min

    def validate(self):
        """Check that the window has a positive, finite extent on both axes."""
        bounds = np.array([self.x_min, self.x_max, self.y_min, self.y_max],
                          dtype=np.float64)
        if not np.all(np.isfinite(bounds)):
            raise InvalidInput(f"Window bounds must be finite: {self}")
        if not self.x_min < self.x_max:
            raise InvalidInput(
                f"Degenerate window along x: {self.x_min} >= {self.x_max}")
        if not self.y_min < self.y_max:
            raise InvalidInput(
                f"Degenerate window along y: {self.y_min} >= {self.y_max}")
        return self

    def contains(self, x, y):
        """Return True where (x, y) falls inside the window (edges included)."""
        x = np.asarray(x)
        y = np.asarray(y)
        return (x >= self.x_min) & (x <= self.x_max) & \
            (y >= self.y_min) & (y <= self.y_max)

    @classmethod
    def from_points(cls, points, margin=0.1):
        """Build the bounding box of a set of points, padded by a margin.

        Parameters
        ----------
        points : sequence of SamplePoint or array-like, shape (n, 3)
            The sample points; only the coordinates are used.

        margin : float, default to 0.1
            The absolute padding added on each side, in the same units as
            the coordinates.

        Returns
        -------
        Window
            The padded window, already validated.

        """
        if margin < 0:
            raise InvalidInput(f"The window margin must be non-negative: {margin}")
        data = as_point_array(points)
        return cls(float(np.min(data[:, 0]) - margin),
                   float(np.max(data[:, 0]) + margin),
                   float(np.min(data[:, 1]) - margin),
                   float(np.max(data[:, 1]) + margin)).validate()


@dataclass(frozen=True, eq=False)
class DensityGrid:
    """A surface sampled at the cell centres of a regular grid.

    Attributes
    ----------
    lon : array-like, shape (nx,)
        Longitudes of the cell centres.

    lat : array-like, shape (ny,)
        Latitudes of the cell centres.

    z : array-like, shape (ny, nx)
        The estimated intensity; `z[j, i]` is the value at `(lon[i], lat[j])`.

    window : Window
        The window covered by the grid.

    sigma : float
        The bandwidth used to build the surface.

    """

    lon: np.ndarray
    lat: np.ndarray
    z: np.ndarray
    window: Window
    sigma: float

    def __post_init__(self):
        for name in ('lon', 'lat', 'z'):
            value = np.array(getattr(self, name), dtype=np.float64)
            value.flags.writeable = False
            object.__setattr__(self, name, value)
        if self.z.shape != (len(self.lat), len(self.lon)):
            raise ValueError(
                f"Grid values have shape {self.z.shape}, expected "
                f"{(len(self.lat), len(self.lon))}")

    @property
    def shape(self):
        return self.z.shape

    @property
    def resolution(self):
        """The number of cells along the two axes, as (nx, ny)."""
        return len(self.lon), len(self.lat)

    @property
    def cell_size(self):
        """The size of a cell along the two axes, as (dx, dy)."""
        nx, ny = self.resolution
        return self.window.width / nx, self.window.height / ny

    def meshgrid(self):
        """Return the (X, Y) arrays of cell centres, each of shape (ny, nx)."""
        return np.meshgrid(self.lon, self.lat)

    def cell_centers(self):
        """Iterate over all cells, yielding (lon, lat, z) triples."""
        for j, y in enumerate(self.lat):
            for i, x in enumerate(self.lon):
                yield float(x), float(y), float(self.z[j, i])

    def argmax(self):
        """Return (lon, lat, z) of the cell with the largest value."""
        j, i = np.unravel_index(np.argmax(self.z), self.z.shape)
        return float(self.lon[i]), float(self.lat[j]), float(self.z[j, i])

    def value_at(self, lon, lat):
        """Return the value of the cell containing the location (lon, lat)."""
        if not self.window.contains(lon, lat):
            raise ValueError(f"Location ({lon}, {lat}) is outside the grid window")
        dx, dy = self.cell_size
        nx, ny = self.resolution
        i = min(int((lon - self.window.x_min) / dx), nx - 1)
        j = min(int((lat - self.window.y_min) / dy), ny - 1)
        return float(self.z[j, i])


def as_point_array(points):
    """Convert sample points into a float array of shape (n, 3).

    Each row is (longitude, latitude, weight). Objects with `longitude`,
    `latitude` and `weight` attributes are accepted as well as plain arrays.
    """
    if len(points) == 0:
        raise InvalidInput("At least one sample point is required")
    if hasattr(points[0], 'weight'):
        points = [(p.longitude, p.latitude, p.weight) for p in points]
    try:
        data = check_array(points, dtype=np.float64, ensure_min_samples=1)
    except ValueError as err:
        raise InvalidInput(f"Invalid sample points: {err}") from err
    if data.shape[1] != 3:
        raise InvalidInput(
            f"Sample points must be (lon, lat, weight) triples, got "
            f"{data.shape[1]} columns")
    return data


def _check_sigma(sigma):
    if not np.isfinite(sigma) or sigma <= 0:
        raise InvalidInput(f"The bandwidth must be strictly positive: {sigma}")
    return float(sigma)


def _check_resolution(resolution):
    try:
        nx, ny = resolution
    except (TypeError, ValueError) as err:
        raise InvalidInput(
            f"The resolution must be a pair (nx, ny): {resolution!r}") from err
    for n in (nx, ny):
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n <= 0:
            raise InvalidInput(
                f"The resolution must contain positive integers: {resolution!r}")
    return int(nx), int(ny)


def gaussian_kernel(dx, dy, sigma):
    """The isotropic 2D Gaussian kernel of standard deviation `sigma`.

    The kernel is normalised to unit integral over the plane, so that its
    peak value is 1 / (2 pi sigma^2).
    """
    s2 = sigma * sigma
    return np.exp(-(np.square(dx) + np.square(dy)) / (2.0 * s2)) / \
        (2.0 * np.pi * s2)


def evaluate(points, x, y, sigma):
    """Evaluate the weighted kernel superposition at arbitrary locations.

    Parameters
    ----------
    points : sequence of SamplePoint or array-like, shape (n, 3)
        The sample points, with their weights.

    x, y : array-like
        The coordinates where the surface is computed; they are broadcast
        against each other.

    sigma : float
        The kernel bandwidth, in the same units as the coordinates.

    Returns
    -------
    array-like
        The values sum_i w_i K(x - lon_i, y - lat_i), with the broadcast
        shape of `x` and `y`.

    """
    data = as_point_array(points)
    sigma = _check_sigma(sigma)
    if not np.all(np.isfinite(data)):
        raise InvalidInput("Sample points must have finite coordinates and weights")
    x, y = np.broadcast_arrays(np.asarray(x, dtype=np.float64),
                               np.asarray(y, dtype=np.float64))
    z = np.zeros(x.shape)
    # One point at a time: memory stays proportional to the grid
    for lon, lat, weight in data:
        z += weight * gaussian_kernel(x - lon, y - lat, sigma)
    return z


def estimate(points, window, sigma, resolution):
    """Estimate a weighted KDE surface on a regular grid.

    Parameters
    ----------
    points : sequence of SamplePoint or array-like, shape (n, 3)
        The sample points. Coincident points are allowed: their
        contributions simply add up.

    window : Window
        The region where the surface is evaluated.

    sigma : float
        The kernel bandwidth. Must be strictly positive.

    resolution : (int, int)
        The number of cells along x and y.

    Returns
    -------
    DensityGrid
        The surface evaluated at the cell centres. No normalisation is
        performed: the result is an intensity, not a probability density.

    Raises
    ------
    InvalidInput
        For an empty point set, a non-positive bandwidth, a degenerate
        window, or an invalid resolution.

    """
    data = as_point_array(points)
    sigma = _check_sigma(sigma)
    window.validate()
    nx, ny = _check_resolution(resolution)
    outside = ~window.contains(data[:, 0], data[:, 1])
    if np.any(outside):
        LOGGER.warning('%d sample point(s) lie outside the window %s',
                       np.count_nonzero(outside), window)
    lon = window.x_min + (np.arange(nx) + 0.5) * (window.width / nx)
    lat = window.y_min + (np.arange(ny) + 0.5) * (window.height / ny)
    LOGGER.debug('KDE of %d points on a %dx%d grid, sigma=%g',
                 len(data), nx, ny, sigma)
    z = evaluate(data, lon[np.newaxis, :], lat[:, np.newaxis], sigma)
    return DensityGrid(lon=lon, lat=lat, z=z, window=window, sigma=sigma)


class WeightedKDE(BaseEstimator):
    """Weighted Gaussian KDE with a fixed, user supplied bandwidth.

    Parameters
    ----------
    sigma : float, default to 0.015
        The standard deviation of the isotropic kernel, in degrees. No
        automatic bandwidth selection is ever performed.

    resolution : (int, int), default to (200, 200)
        The number of grid cells along the two axes.

    """

    def __init__(self, sigma=0.015, resolution=(200, 200)):
        self.sigma = sigma
        self.resolution = resolution

    def estimate(self, points, window):
        """Compute the surface of `points` over `window`; see `estimate`."""
        return estimate(points, window, self.sigma, self.resolution)

    def evaluate(self, points, x, y):
        """Compute the surface of `points` at arbitrary locations."""
        return evaluate(points, x, y, self.sigma)
