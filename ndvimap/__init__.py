"""The NDVIMAP package.

Weighted kernel density maps of vegetation-index measurements.

:Version: 0.1.0 of 2026/10/19
"""

from .kde import InvalidInput, Window, DensityGrid, WeightedKDE, estimate
from .sites import SamplePoint, SiteCatalogue, NDVI_SCALE
from .mapping import guess_window, make_wcs, make_hdu, find_peaks
from .config import SiteConfig, ReportConfig, load_config
from .report import Report, run, narrate
