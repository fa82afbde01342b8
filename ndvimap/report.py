"""The NDVI report: load, aggregate, interpolate, plot and narrate.

:Version: 0.1.0 of 2026/10/19

Typical use from the command line::

    ndvimap --config config.yaml --output ndvi.png --fits ndvi.fits
"""

import argparse
import logging
import sys
from dataclasses import dataclass, replace
import numpy as np
from astropy import table
from matplotlib.figure import Figure
from .config import load_config
from .kde import DensityGrid, InvalidInput, WeightedKDE
from .mapping import guess_window, make_hdu, find_peaks
from .plotting import plot_comparison
from .sites import SiteCatalogue

LOGGER = logging.getLogger(__name__)


@dataclass
class Report:
    catalogue: SiteCatalogue
    grid: DensityGrid
    peaks: table.Table
    figure: Figure
    narrative: str


def narrate(catalogue, grid, peaks=None):
    """Write a plain-text summary of the analysis.

    Parameters
    ----------
    catalogue : SiteCatalogue
        The per-site means.

    grid : DensityGrid
        The KDE surface built from the catalogue.

    peaks : Table, optional
        The local maxima of the surface, as returned by `find_peaks`.

    Returns
    -------
    str
        The narrative, one statement per line.

    """
    lines = []
    ranked = catalogue[np.argsort(-catalogue['ndvi'], kind='stable')]
    lines.append(f"Mean NDVI of {len(catalogue)} site(s), highest first:")
    for row in ranked:
        lines.append(f"  {row['site']}: {row['ndvi']:.3f} "
                     f"(+/- {row['ndvi_std']:.3f}, {row['n_obs']} obs) "
                     f"at ({row['lon']:.3f}, {row['lat']:.3f})")
    spread = ranked['ndvi'][0] - ranked['ndvi'][-1]
    if len(catalogue) > 1:
        lines.append(f"The NDVI spread between sites is {spread:.3f}.")
    lon, lat, z = grid.argmax()
    distances = np.hypot(catalogue['lon'] - lon, catalogue['lat'] - lat)
    nearest = catalogue[np.argmin(distances)]
    lines.append(
        f"The KDE surface (sigma = {grid.sigma:g} deg, "
        f"{grid.resolution[0]}x{grid.resolution[1]} cells) peaks at "
        f"({lon:.3f}, {lat:.3f}) with intensity {z:.4g}, "
        f"{np.min(distances):.4f} deg from {nearest['site']}.")
    if peaks is not None:
        lines.append(f"The surface has {len(peaks)} local maxima.")
    return '\n'.join(lines)


def run(config):
    """Run the full analysis described by a ReportConfig.

    Nothing is written to disk: see `main` for that.

    Returns
    -------
    Report
        All products of the analysis.

    """
    catalogue = SiteCatalogue.from_csv_files(
        config.sites, value_col=config.value_column, scale=config.scale)
    points = catalogue.to_points()
    window = guess_window(points, margin=config.margin)
    kde = WeightedKDE(sigma=config.sigma, resolution=config.resolution)
    grid = kde.estimate(points, window)
    LOGGER.info('KDE surface computed on a %dx%d grid', *grid.resolution)
    # Ignore the flat tails far from every site
    peaks = find_peaks(grid, threshold=1e-6 * np.max(np.abs(grid.z)))
    figure = plot_comparison(points, grid, labels=list(catalogue['site']))
    narrative = narrate(catalogue, grid, peaks)
    return Report(catalogue, grid, peaks, figure, narrative)


def _resolution(text):
    parts = text.lower().split('x')
    try:
        values = tuple(int(p) for p in parts)
    except ValueError as err:
        raise argparse.ArgumentTypeError(
            f"invalid resolution '{text}', expected N or NXxNY") from err
    if len(values) == 1:
        values = values * 2
    if len(values) != 2:
        raise argparse.ArgumentTypeError(
            f"invalid resolution '{text}', expected N or NXxNY")
    return values


def build_parser():
    parser = argparse.ArgumentParser(
        prog='ndvimap',
        description='Interpolate mean NDVI values of a few sites with a '
        'weighted Gaussian KDE and plot the results.')
    parser.add_argument('--config', help='YAML configuration file')
    parser.add_argument('--sigma', type=float,
                        help='kernel bandwidth in degrees')
    parser.add_argument('--resolution', type=_resolution,
                        help='grid size, as N or NXxNY')
    parser.add_argument('--margin', type=float,
                        help='window padding around the sites, in degrees')
    parser.add_argument('--output', help='output image file')
    parser.add_argument('--fits', help='also save the surface as FITS')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='more verbose logging (repeat for debug)')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    level = (logging.WARNING, logging.INFO, logging.DEBUG)[min(args.verbose, 2)]
    logging.basicConfig(level=level,
                        format='%(asctime)s %(name)s %(levelname)s: %(message)s')
    try:
        config = load_config(args.config)
        overrides = {name: getattr(args, name)
                     for name in ('sigma', 'resolution', 'margin', 'output',
                                  'fits')
                     if getattr(args, name) is not None}
        config = replace(config, **overrides)
        LOGGER.debug('Configuration: %s', config)
        report = run(config)
    except (InvalidInput, KeyError, ValueError, OSError) as err:
        LOGGER.error('%s', err)
        return 2
    report.figure.savefig(config.output, dpi=config.dpi)
    LOGGER.info('Figure saved to %s', config.output)
    if config.fits:
        make_hdu(report.grid, points=report.catalogue.to_points()).writeto(
            config.fits, overwrite=True)
        LOGGER.info('Surface saved to %s', config.fits)
    print(report.narrative)
    return 0


if __name__ == '__main__':
    sys.exit(main())
