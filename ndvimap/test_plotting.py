import matplotlib
matplotlib.use('Agg')
import numpy as np
from matplotlib import pyplot as plt
from .kde import estimate
from .mapping import guess_window
from .plotting import plot_points, plot_surface, plot_comparison, \
    OKABE_ITO_CMAP

SITES = [(-75.28, 48.50, 0.40), (-75.31, 48.85, 0.55), (-75.324, 48.92, 0.65)]


def make_grid():
    return estimate(SITES, guess_window(SITES), 0.015, (50, 80))


def test_plot_points():
    fig, ax = plt.subplots()
    sc = plot_points(SITES, ax=ax, labels=['a', 'b', 'c'], title='sites')
    assert np.allclose(sc.get_array(), [0.40, 0.55, 0.65])
    assert sc.get_cmap().name == 'viridis'
    assert [t.get_text() for t in ax.texts] == ['a', 'b', 'c']
    assert ax.get_title() == 'sites'
    plt.close(fig)


def test_plot_surface_levels():
    grid = make_grid()
    fig, ax = plt.subplots()
    cs = plot_surface(grid, cmap=OKABE_ITO_CMAP, ax=ax)
    assert cs.get_cmap().name == 'okabe_ito'
    assert ax.get_xlim() == (grid.window.x_min, grid.window.x_max)
    plt.close(fig)
    fig, ax = plt.subplots()
    cs = plot_surface(grid, levels=[0, 100, 200, 300, 400, 500], ax=ax,
                      points=SITES)
    assert np.allclose(cs.levels, [0, 100, 200, 300, 400, 500])
    plt.close(fig)


def test_plot_comparison(tmp_path):
    grid = make_grid()
    fig = plot_comparison(SITES, grid, labels=['a', 'b', 'c'])
    # Four panels plus one colour bar each
    assert len(fig.axes) == 8
    cmaps = [ax.collections[0].get_cmap().name for ax in fig.axes[:2]]
    assert cmaps == ['viridis', 'RdYlGn']
    path = tmp_path / 'comparison.png'
    fig.savefig(path)
    assert path.stat().st_size > 0
    plt.close(fig)
