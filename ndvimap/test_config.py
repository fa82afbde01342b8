from pathlib import Path
import pytest
from .config import ReportConfig, SiteConfig, load_config


def test_defaults():
    config = load_config()
    assert config == ReportConfig()
    assert config.sigma == 0.015
    assert config.margin == 0.1
    assert config.scale == 10000
    assert config.resolution == (200, 200)
    assert [s.name for s in config.sites] == \
        ['south_flank', 'west_slope', 'north_ridge']
    # Defaults must not be shared between instances
    config.sites.append(SiteConfig('extra', 'x.csv', 0.0, 0.0))
    assert len(ReportConfig().sites) == 3


def test_load_yaml(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text(
        "sites:\n"
        "  - {name: a, path: data/a.csv, lon: -75.0, lat: 48.0}\n"
        "  - {name: b, path: /abs/b.csv, lon: -75.1, lat: 48.1}\n"
        "sigma: 0.02\n"
        "resolution: 50\n")
    config = load_config(path)
    assert config.sigma == 0.02
    assert config.resolution == (50, 50)
    assert config.margin == 0.1
    assert config.sites[0] == SiteConfig('a', str(tmp_path / 'data/a.csv'),
                                         -75.0, 48.0)
    assert Path(config.sites[1].path) == Path('/abs/b.csv')


def test_resolution_pair(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text("resolution: [120, 80]\n")
    assert load_config(path).resolution == (120, 80)


def test_empty_file(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text("")
    assert load_config(path) == ReportConfig()


def test_invalid_files(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text("bandwidth: 0.1\n")
    with pytest.raises(ValueError, match='bandwidth'):
        load_config(path)
    path.write_text("sites:\n  - {name: a, lon: 1.0}\n")
    with pytest.raises(ValueError, match='path, lat'):
        load_config(path)
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError):
        load_config(path)
