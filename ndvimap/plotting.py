"""Plotting of the sites and of the interpolated surfaces.

:Version: 0.1.0 of 2026/10/19
"""

from matplotlib import pyplot as plt
from matplotlib.colors import ListedColormap
from .kde import as_point_array

# Okabe & Ito (2008) palette, distinguishable with all common forms of
# colour blindness.
OKABE_ITO = ['#000000', '#0072B2', '#56B4E9', '#009E73', '#F0E442',
             '#E69F00', '#D55E00', '#CC79A7']
OKABE_ITO_CMAP = ListedColormap(OKABE_ITO[1:], name='okabe_ito')

POINT_CMAPS = ('viridis', 'RdYlGn')
SURFACE_CMAPS = (OKABE_ITO_CMAP, 'Spectral_r')


def plot_points(points, cmap='viridis', ax=None, labels=None, title=None,
                size=120, **kw):
    """Plot the sites as a scatter diagram coloured by their weight.

    Parameters
    ----------
    points : sequence of SamplePoint or array-like, shape (n, 3)
        The sites to plot.

    cmap : str or Colormap, default to 'viridis'
        The colour map used for the weights.

    ax : Axes, optional
        The axes to draw on; by default the current axes.

    labels : sequence of str, optional
        Names written next to each site.

    title : str, optional
        The axes title.

    size : float, default to 120
        The marker size.

    All further keyword parameters are passed to `scatter`.

    Returns
    -------
    PathCollection
        The scatter artist.

    """
    if ax is None:
        ax = plt.gca()
    data = as_point_array(points)
    sc = ax.scatter(data[:, 0], data[:, 1], c=data[:, 2], cmap=cmap, s=size,
                    edgecolors='k', **kw)
    if labels is not None:
        for (lon, lat, _), label in zip(data, labels):
            ax.annotate(label, (lon, lat), xytext=(6, 6),
                        textcoords='offset points', fontsize=8)
    ax.figure.colorbar(sc, ax=ax, label='mean NDVI')
    ax.set_xlabel('longitude [deg]')
    ax.set_ylabel('latitude [deg]')
    if title is not None:
        ax.set_title(title)
    return sc


def plot_surface(grid, cmap='Spectral_r', levels=None, ax=None, points=None,
                 title=None, **kw):
    """Plot a filled contour map of a KDE surface.

    Parameters
    ----------
    grid : DensityGrid
        The surface to plot.

    cmap : str or Colormap, default to 'Spectral_r'
        The colour map.

    levels : int or array-like, optional
        The contour levels. With a `ListedColormap` the default is one level
        per colour, so that each band has its own category.

    ax : Axes, optional
        The axes to draw on; by default the current axes.

    points : sequence of SamplePoint or array-like, shape (n, 3), optional
        If provided, the sites are overplotted as white markers.

    title : str, optional
        The axes title.

    All further keyword parameters are passed to `contourf`.

    Returns
    -------
    QuadContourSet
        The contour artist.

    """
    if ax is None:
        ax = plt.gca()
    if levels is None:
        levels = cmap.N if isinstance(cmap, ListedColormap) else 12
    lon, lat = grid.meshgrid()
    cs = ax.contourf(lon, lat, grid.z, levels=levels, cmap=cmap, **kw)
    if points is not None:
        data = as_point_array(points)
        ax.plot(data[:, 0], data[:, 1], 'w^', markeredgecolor='k')
    ax.figure.colorbar(cs, ax=ax, label='KDE intensity')
    ax.set_xlim(grid.window.x_min, grid.window.x_max)
    ax.set_ylim(grid.window.y_min, grid.window.y_max)
    ax.set_xlabel('longitude [deg]')
    ax.set_ylabel('latitude [deg]')
    if title is not None:
        ax.set_title(title)
    return cs


def plot_comparison(points, grid, labels=None, figsize=(12, 10)):
    """Compare the sites and their KDE surface under different colour maps.

    The figure has a 2x2 layout: the top row shows the sites with a
    continuous colour-blind safe map and with a diverging map; the bottom
    row shows the surface with a categorical colour-blind safe map and with
    a spectral map.

    Returns
    -------
    Figure
        The new figure; it is not shown nor saved.

    """
    fig, axes = plt.subplots(2, 2, figsize=figsize)
    plot_points(points, cmap=POINT_CMAPS[0], ax=axes[0, 0], labels=labels,
                title='Mean NDVI (viridis)')
    plot_points(points, cmap=POINT_CMAPS[1], ax=axes[0, 1], labels=labels,
                title='Mean NDVI (high/low)')
    plot_surface(grid, cmap=SURFACE_CMAPS[0], ax=axes[1, 0], points=points,
                 title='KDE surface (colour-blind safe)')
    plot_surface(grid, cmap=SURFACE_CMAPS[1], ax=axes[1, 1], points=points,
                 title='KDE surface (spectral)')
    for ax in axes[0]:
        ax.set_xlim(grid.window.x_min, grid.window.x_max)
        ax.set_ylim(grid.window.y_min, grid.window.y_max)
    fig.suptitle(f'NDVI around the volcanic site (sigma = {grid.sigma:g} deg)')
    fig.tight_layout()
    return fig
