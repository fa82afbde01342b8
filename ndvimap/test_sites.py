from types import SimpleNamespace
import numpy as np
import pytest
from astropy import table
from .sites import SamplePoint, SiteCatalogue, NDVI_SCALE


def write_site_csv(path, values):
    lines = ['date,NDVI,EVI']
    for n, value in enumerate(values):
        lines.append(f"2023-0{n % 9 + 1}-15,{value},1000")
    path.write_text('\n'.join(lines) + '\n')
    return path


def make_sites(tmp_path):
    return [
        SimpleNamespace(name='south', lon=-75.28, lat=48.50,
                        path=str(write_site_csv(tmp_path / 's.csv',
                                                [3800, 4200, 4000]))),
        SimpleNamespace(name='middle', lon=-75.31, lat=48.85,
                        path=str(write_site_csv(tmp_path / 'm.csv',
                                                [5400, 5600]))),
        SimpleNamespace(name='north', lon=-75.324, lat=48.92,
                        path=str(write_site_csv(tmp_path / 'n.csv',
                                                [6500]))),
    ]


def test_from_csv_files(tmp_path):
    cat = SiteCatalogue.from_csv_files(make_sites(tmp_path))
    assert isinstance(cat, SiteCatalogue)
    assert list(cat['site']) == ['south', 'middle', 'north']
    assert np.allclose(cat['ndvi'], [0.40, 0.55, 0.65])
    assert list(cat['n_obs']) == [3, 2, 1]
    assert np.allclose(cat['ndvi_std'],
                       [np.std([0.38, 0.42, 0.40], ddof=1),
                        np.std([0.54, 0.56], ddof=1), 0.0])
    assert cat.meta['scale'] == NDVI_SCALE
    assert cat.meta['value_col'] == 'NDVI'


def test_to_points(tmp_path):
    cat = SiteCatalogue.from_csv_files(make_sites(tmp_path))
    points = cat.to_points()
    assert points[2] == SamplePoint(-75.324, 48.92, pytest.approx(0.65))
    with pytest.raises(AttributeError):
        points[0].weight = 1.0


def test_other_value_column(tmp_path):
    cat = SiteCatalogue.from_csv_files(make_sites(tmp_path), value_col='EVI')
    assert np.allclose(cat['ndvi'], 0.1)


def test_missing_column(tmp_path):
    with pytest.raises(KeyError, match='NDWI'):
        SiteCatalogue.from_csv_files(make_sites(tmp_path), value_col='NDWI')
    with pytest.raises(ValueError):
        SiteCatalogue.from_csv_files([])


def test_missing_values_are_dropped(tmp_path, caplog):
    path = tmp_path / 'gaps.csv'
    path.write_text('date,NDVI\n2023-01-01,4000\n2023-02-01,\n'
                    '2023-03-01,5000\n')
    site = SimpleNamespace(name='gaps', lon=-75.3, lat=48.7, path=str(path))
    with caplog.at_level('WARNING'):
        cat = SiteCatalogue.from_csv_files([site])
    assert 'Dropping 1 observation' in caplog.text
    assert cat['n_obs'][0] == 2
    assert cat['ndvi'][0] == pytest.approx(0.45)


def test_from_observations():
    obs = table.Table({'site': ['a', 'b', 'a', 'b', 'c'],
                       'lon': [1.0, 2.0, 1.0, 2.0, 3.0],
                       'lat': [4.0, 5.0, 4.0, 5.0, 6.0],
                       'NDVI': [1000, 3000, 2000, np.nan, 5000]})
    cat = SiteCatalogue.from_observations(obs)
    assert list(cat['site']) == ['a', 'b', 'c']
    assert np.allclose(cat['ndvi'], [0.15, 0.3, 0.5])
    assert list(cat['n_obs']) == [2, 1, 1]
    cat = SiteCatalogue.from_observations(obs, scale=1)
    assert np.allclose(cat['ndvi'], [1500, 3000, 5000])


def test_site_without_observations():
    obs = table.Table({'site': ['a', 'b'], 'lon': [1.0, 2.0],
                       'lat': [4.0, 5.0], 'NDVI': [1000, np.nan]})
    with pytest.raises(ValueError, match="'b'"):
        SiteCatalogue.from_observations(obs)
    with pytest.raises(KeyError):
        SiteCatalogue.from_observations(obs, value_col='EVI')
    with pytest.raises(ValueError):
        SiteCatalogue.from_observations(obs, scale=0)


def test_non_numeric_values():
    obs = table.Table({'site': ['a'], 'lon': [1.0], 'lat': [4.0],
                       'NDVI': ['cloudy']})
    with pytest.raises(ValueError, match='numeric'):
        SiteCatalogue.from_observations(obs)


def test_out_of_range_warning(caplog):
    obs = table.Table({'site': ['a'], 'lon': [1.0], 'lat': [4.0],
                       'NDVI': [4000.0]})
    with caplog.at_level('WARNING'):
        SiteCatalogue.from_observations(obs, scale=1000)
    assert 'outside [-1, 1]' in caplog.text
