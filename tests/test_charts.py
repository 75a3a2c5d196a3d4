"""Tests for the chart renderers, drawn onto bare Figure objects."""

import numpy as np
import pytest
from matplotlib.colors import to_rgb
from matplotlib.figure import Figure

from pvalue_plotter.chart_histogram import render_pvalue_histogram
from pvalue_plotter.chart_overview import render_overview
from pvalue_plotter.chart_qq import render_uniform_qq
from pvalue_plotter.constants import PLOT_PALETTE
from pvalue_plotter.data_model import PValueSample, PValueCollection
from pvalue_plotter.diagnostics import diagnose


@pytest.fixture
def flat_sample():
    grid = (np.arange(4000) + 0.5) / 4000
    return PValueSample(key='flat', label='Flat', pvalues=grid)


def test_histogram_draws_one_bar_per_bin(flat_sample):
    fig = Figure()
    render_pvalue_histogram(fig, flat_sample, bins=20)
    (ax,) = fig.get_axes()
    assert len(ax.patches) == 20
    assert ax.get_xlim() == (0.0, 1.0)
    assert "Flat" in ax.get_title()


def test_histogram_highlights_bars_below_alpha(flat_sample):
    fig = Figure()
    render_pvalue_histogram(fig, flat_sample, bins=20, alpha=0.05)
    bars = fig.get_axes()[0].patches
    assert to_rgb(bars[0].get_facecolor()) == to_rgb(PLOT_PALETTE['bar_signif'])
    assert to_rgb(bars[1].get_facecolor()) == to_rgb(PLOT_PALETTE['bar'])


def test_histogram_null_level_line(flat_sample):
    fig = Figure()
    diagnosis = diagnose(flat_sample, 20)
    render_pvalue_histogram(fig, flat_sample, bins=20, diagnosis=diagnosis)
    ax = fig.get_axes()[0]
    expected = diagnosis.pi0 * flat_sample.n_tests / 20
    levels = [line.get_ydata()[0] for line in ax.get_lines()
              if line.get_linestyle() == '--']
    assert levels == [pytest.approx(expected)]
    assert any('Shape: Uniform' in t.get_text() for t in ax.texts)


def test_histogram_without_null_level(flat_sample):
    fig = Figure()
    render_pvalue_histogram(fig, flat_sample, show_pi0=False)
    ax = fig.get_axes()[0]
    assert not [l for l in ax.get_lines() if l.get_linestyle() == '--']


def test_histogram_placeholder_for_missing_sample():
    fig = Figure()
    render_pvalue_histogram(fig, None)
    assert fig.get_axes()[0].texts[0].get_text() == 'No p-values loaded'


def test_overview_draws_six_facets(scenarios):
    fig = Figure(figsize=(9, 5.5))
    render_overview(fig, scenarios, bins=20, for_export=True)
    axes = fig.get_axes()
    assert len(axes) == 6
    for ax, label in zip(axes, scenarios.labels):
        assert ax.get_title().startswith(label)
        assert len(ax.patches) == 20


def test_overview_hides_unused_facets(flat_sample):
    collection = PValueCollection(samples=[flat_sample] * 4)
    fig = Figure()
    render_overview(fig, collection)
    visible = [ax for ax in fig.get_axes() if ax.get_visible()]
    assert len(fig.get_axes()) == 6
    assert len(visible) == 4


def test_overview_of_empty_collection():
    fig = Figure()
    render_overview(fig, PValueCollection(samples=[]))
    assert fig.get_axes()[0].texts[0].get_text() == 'No p-values loaded'


def test_qq_thins_large_samples(scenarios):
    fig = Figure()
    render_uniform_qq(fig, scenarios.get('uniform'))
    ax = fig.get_axes()[0]
    (points,) = ax.collections
    offsets = points.get_offsets()
    assert len(offsets) == 2000
    assert np.all(np.diff(offsets[:, 1]) >= 0)


def test_qq_keeps_small_samples_whole():
    sample = PValueSample(key='few', label='Few', pvalues=[0.9, 0.1, 0.5])
    fig = Figure()
    render_uniform_qq(fig, sample)
    offsets = fig.get_axes()[0].collections[0].get_offsets()
    np.testing.assert_allclose(offsets[:, 1], [0.1, 0.5, 0.9])
