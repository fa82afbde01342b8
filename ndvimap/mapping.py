"""Mapping module, used to frame the sites and to export registered maps.

:Version: 0.1.0 of 2026/10/19
"""

import datetime
import logging
import numpy as np
import astropy.wcs
from astropy.io import fits
from astropy import table
from scipy import ndimage
from .kde import Window, as_point_array

LOGGER = logging.getLogger(__name__)


def guess_window(points, margin=0.1):
    """Perform an initial guess of the window given a set of sites.

    Parameters
    ----------
    points : sequence of SamplePoint or array-like, shape (n, 3)
        The sample points to frame.

    margin : float, optional, default to 0.1
        The absolute padding, in degrees, added around the bounding box of
        the points, so that the surface falls off before the edges.

    Returns
    -------
    Window
        The proposed window.

    """
    window = Window.from_points(points, margin=margin)
    LOGGER.debug('Window: lon %g to %g, lat %g to %g', window.x_min,
                 window.x_max, window.y_min, window.y_max)
    return window


def make_wcs(grid):
    """Build a linear WCS registered on the cell centres of a grid.

    Parameters
    ----------
    grid : DensityGrid
        The grid to register.

    Returns
    -------
    astropy.wcs.WCS
        A WCS where the (0-based) pixel (i, j) maps to (lon[i], lat[j]).

    """
    dx, dy = grid.cell_size
    w = astropy.wcs.WCS(naxis=2)
    w.wcs.crpix = [1, 1]
    w.wcs.crval = [grid.lon[0], grid.lat[0]]
    w.wcs.cdelt = [dx, dy]
    w.wcs.ctype = ['LON', 'LAT']
    w.wcs.cunit = ['deg', 'deg']
    w.pixel_shape = grid.resolution
    return w


def make_hdu(grid, points=None):
    """Convert a grid into a FITS image.

    Parameters
    ----------
    grid : DensityGrid
        The surface to export.

    points : sequence of SamplePoint or array-like, shape (n, 3), optional
        If provided, the sample points are recorded in the header, one
        `SITEn` card per point.

    Returns
    -------
    fits.PrimaryHDU
        A full HDU fits structure, which can be used directly to save a FITS
        file. The `data` attribute is the intensity surface, with shape
        (ny, nx).

    """
    hdu = fits.PrimaryHDU(np.array(grid.z), header=make_wcs(grid).to_header())
    hdu.header['BUNIT'] = ('NDVI deg^-2', 'weighted KDE intensity')
    hdu.header['SIGMA'] = (grid.sigma, '[deg] kernel bandwidth')
    if points is not None:
        data = as_point_array(points)
        hdu.header['NSITES'] = (len(data), 'number of sample points')
        for n, (lon, lat, weight) in enumerate(data, start=1):
            hdu.header[f'SITE{n}'] = (f'{lon:.6f} {lat:.6f} {weight:.6f}',
                                      'lon lat weight')
    hdu.header['CREATOR'] = 'ndvimap v0.1.0'
    hdu.header['DATE'] = datetime.datetime.now().isoformat()
    hdu.add_checksum()
    return hdu


def find_peaks(grid, size=3, threshold=0.0):
    """Find the local maxima of a surface.

    Parameters
    ----------
    grid : DensityGrid
        The surface to analyse.

    size : int, default to 3
        The side, in cells, of the neighbourhood used to define a maximum.

    threshold : float, default to 0.0
        Maxima with a value not larger than this are ignored; in particular,
        flat regions where the surface underflows to zero are never peaks.

    Returns
    -------
    Table
        A table with columns `lon`, `lat`, `z`, sorted by decreasing `z`.

    """
    z = grid.z
    local = ndimage.maximum_filter(z, size=size, mode='nearest')
    j, i = np.nonzero((z == local) & (z > threshold))
    order = np.argsort(-z[j, i], kind='stable')
    j, i = j[order], i[order]
    return table.Table([grid.lon[i], grid.lat[j], z[j, i]],
                       names=('lon', 'lat', 'z'))
