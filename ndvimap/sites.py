"""Site catalogue handling code.

:Version: 0.1.0 of 2026/10/19
"""

import logging
from dataclasses import dataclass
import numpy as np
from astropy import table
from astropy.io import ascii

LOGGER = logging.getLogger(__name__)

# Raw vegetation indices are stored as integers scaled by this factor.
NDVI_SCALE = 10000


@dataclass(frozen=True)
class SamplePoint:
    """A site location with the weight used by the KDE (its mean NDVI)."""

    longitude: float
    latitude: float
    weight: float


class SiteCatalogue(table.Table):
    """A catalogue of sites (child of astropy Table), one row per site.

    Columns
    -------
    site : str
        The site name.

    lon, lat : float
        The site coordinates in degrees.

    ndvi : float
        The mean of the site observations, rescaled to physical NDVI units.

    ndvi_std : float
        The sample standard deviation of the rescaled observations (0 for a
        single observation).

    n_obs : int
        The number of valid observations averaged.

    """

    @classmethod
    def from_observations(cls, obs, value_col='NDVI', scale=NDVI_SCALE):
        """Aggregate repeated observations into a site catalogue.

        Parameters
        ----------
        obs : Table
            A table with at least the columns `site`, `lon`, `lat` and
            `value_col`, possibly with several rows per site.

        value_col : str, default to 'NDVI'
            The column with the raw index values.

        scale : float, default to NDVI_SCALE
            The raw values are divided by this factor.

        Returns
        -------
        SiteCatalogue
            The per-site means, in order of first appearance of each site.

        """
        for name in ('site', 'lon', 'lat', value_col):
            if name not in obs.colnames:
                raise KeyError(f"Missing column '{name}' in the observations")
        if len(obs) == 0:
            raise ValueError("No observations to aggregate")
        if scale == 0:
            raise ValueError("The rescaling factor cannot be zero")
        try:
            values = np.ma.asarray(obs[value_col]).astype(np.float64)
        except (TypeError, ValueError) as err:
            raise ValueError(
                f"Column '{value_col}' does not contain numeric values") from err
        values = np.ma.masked_invalid(values)
        good = ~np.ma.getmaskarray(values)
        if not np.all(good):
            LOGGER.warning('Dropping %d observation(s) with missing %s values',
                           np.count_nonzero(~good), value_col)
        names, first = np.unique(np.asarray(obs['site']), return_index=True)
        names = [str(name) for name in names[np.argsort(first)]]

        work = table.Table([np.asarray(obs['site'])[good],
                            np.asarray(obs['lon'], dtype=np.float64)[good],
                            np.asarray(obs['lat'], dtype=np.float64)[good],
                            values.data[good] / scale],
                           names=('site', 'lon', 'lat', 'ndvi'))
        groups = {}
        for group in work.group_by('site').groups:
            groups[str(group['site'][0])] = group
        rows = []
        for name in names:
            if name not in groups:
                raise ValueError(f"Site '{name}' has no valid observations")
            group = groups[name]
            n_obs = len(group)
            if np.ptp(group['lon']) > 0 or np.ptp(group['lat']) > 0:
                LOGGER.debug('Site %s has varying coordinates: using means',
                             name)
            rows.append((name, np.mean(group['lon']), np.mean(group['lat']),
                         np.mean(group['ndvi']),
                         np.std(group['ndvi'], ddof=1) if n_obs > 1 else 0.0,
                         n_obs))
        cat = cls(rows=rows,
                  names=('site', 'lon', 'lat', 'ndvi', 'ndvi_std', 'n_obs'),
                  dtype=('U64', 'f8', 'f8', 'f8', 'f8', 'i8'))
        cat.meta['value_col'] = value_col
        cat.meta['scale'] = scale
        out_of_range = np.abs(cat['ndvi']) > 1
        if np.any(out_of_range):
            LOGGER.warning('Mean NDVI outside [-1, 1] for %s: check the scale',
                           ', '.join(cat['site'][out_of_range]))
        for row in cat:
            LOGGER.info('Site %s: mean NDVI %.4f from %d observations',
                        row['site'], row['ndvi'], row['n_obs'])
        return cat

    @classmethod
    def from_csv_files(cls, sites, value_col='NDVI', scale=NDVI_SCALE):
        """Build a catalogue reading one delimited text file per site.

        Parameters
        ----------
        sites : sequence
            Objects with the attributes `name`, `path`, `lon`, `lat`; see
            `ndvimap.config.SiteConfig`.

        value_col : str, default to 'NDVI'
            The column with the raw index values in each file.

        scale : float, default to NDVI_SCALE
            The rescaling factor applied to the raw values.

        """
        if len(sites) == 0:
            raise ValueError("At least one site is required")
        parts = []
        for site in sites:
            LOGGER.debug('Reading %s from %s', site.name, site.path)
            data = ascii.read(site.path, format='csv')
            if value_col not in data.colnames:
                raise KeyError(
                    f"Column '{value_col}' not found in {site.path}; "
                    f"available columns: {', '.join(data.colnames)}")
            if len(data) == 0:
                raise ValueError(f"No observations in {site.path}")
            n_rows = len(data)
            parts.append(table.Table(
                [np.full(n_rows, site.name), np.full(n_rows, float(site.lon)),
                 np.full(n_rows, float(site.lat)), data[value_col]],
                names=('site', 'lon', 'lat', value_col)))
        obs = table.vstack(parts)
        LOGGER.info('Read %d observations for %d sites', len(obs), len(sites))
        return cls.from_observations(obs, value_col=value_col, scale=scale)

    def to_points(self):
        """Return the list of SamplePoint, weighted by the mean NDVI."""
        return [SamplePoint(float(row['lon']), float(row['lat']),
                            float(row['ndvi']))
                for row in self]
