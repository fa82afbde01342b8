"""Configuration of the NDVI mapping pipeline.

:Version: 0.1.0 of 2026/10/19
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
import yaml
from .sites import NDVI_SCALE


@dataclass
class SiteConfig:
    """A measurement site: its name, location, and observation file."""

    name: str
    path: str
    lon: float
    lat: float


def default_sites():
    return [
        SiteConfig('south_flank', 'data/south_flank.csv', -75.28, 48.50),
        SiteConfig('west_slope', 'data/west_slope.csv', -75.31, 48.85),
        SiteConfig('north_ridge', 'data/north_ridge.csv', -75.324, 48.92),
    ]


@dataclass
class ReportConfig:
    sites: list = field(default_factory=default_sites)
    value_column: str = 'NDVI'
    scale: float = NDVI_SCALE
    # Padding of the sites bounding box, in degrees
    margin: float = 0.1
    # Kernel bandwidth in degrees; never estimated from the data
    sigma: float = 0.015
    resolution: tuple = (200, 200)
    output: str = 'ndvi_comparison.png'
    fits: str = None
    dpi: int = 150


def _parse_site(entry, base):
    missing = [name for name in ('name', 'path', 'lon', 'lat')
               if name not in entry]
    if missing:
        raise ValueError(
            f"Site entry {entry!r} is missing: {', '.join(missing)}")
    path = Path(entry['path'])
    if not path.is_absolute():
        path = base / path
    return SiteConfig(str(entry['name']), str(path), float(entry['lon']),
                      float(entry['lat']))


def load_config(path=None):
    """Load a ReportConfig from a YAML file.

    Parameters
    ----------
    path : str or Path or None
        The YAML file. If None, the defaults of the reference analysis are
        returned. Relative site paths are resolved against the directory
        containing the file.

    Returns
    -------
    ReportConfig
        The configuration; keys missing from the file keep their defaults.

    """
    if path is None:
        return ReportConfig()
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration {path} must be a mapping")
    known = {fld.name for fld in fields(ReportConfig)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(
            f"Unknown configuration keys in {path}: {', '.join(sorted(unknown))}")
    kw = dict(data)
    if 'sites' in kw:
        kw['sites'] = [_parse_site(entry, path.parent) for entry in kw['sites']]
    if 'resolution' in kw:
        resolution = kw['resolution']
        if isinstance(resolution, int):
            resolution = (resolution, resolution)
        kw['resolution'] = tuple(resolution)
    for name in ('scale', 'margin', 'sigma'):
        if name in kw:
            kw[name] = float(kw[name])
    return ReportConfig(**kw)
