"""Tests for PNG and CSV export."""

import os

import numpy as np
from matplotlib.colors import to_hex
from matplotlib.figure import Figure

from pvalue_plotter.chart_histogram import render_pvalue_histogram
from pvalue_plotter.constants import DARK_COLORS
from pvalue_plotter.csv_parser import load_pvalue_csv
from pvalue_plotter.data_model import PValueSample, PValueCollection
from pvalue_plotter.export import (
    build_all_figures, export_all_charts, export_png, export_pvalues_csv,
    light_theme, safe_filename,
)


def _dark_histogram():
    sample = PValueSample(key='s', label='S', pvalues=np.linspace(0, 1, 500))
    fig = Figure(figsize=(4, 3))
    fig.set_facecolor(DARK_COLORS['bg_alt'])
    render_pvalue_histogram(fig, sample)
    fig.get_axes()[0].title.set_color(DARK_COLORS['fg'])
    return fig


def test_light_theme_is_undone_on_exit():
    fig = _dark_histogram()
    ax = fig.get_axes()[0]
    with light_theme(fig):
        assert to_hex(fig.get_facecolor()) == '#ffffff'
        assert to_hex(ax.title.get_color()) != DARK_COLORS['fg']
    assert to_hex(fig.get_facecolor()) == DARK_COLORS['bg_alt']
    assert to_hex(ax.title.get_color()) == DARK_COLORS['fg']


def test_export_png_writes_file_and_restores_size(tmp_path):
    fig = _dark_histogram()
    path = tmp_path / "hist.png"
    export_png(fig, str(path), dpi=50)
    assert path.stat().st_size > 0
    assert tuple(fig.get_size_inches()) == (4.0, 3.0)
    assert to_hex(fig.get_facecolor()) == DARK_COLORS['bg_alt']


def test_safe_filename():
    assert safe_filename("Anti-Conservative / run 1") == "Anti-Conservative___run_1"


def test_export_all_charts(tmp_path):
    figures = {"one chart": _dark_histogram(), "two": _dark_histogram()}
    out = tmp_path / "charts"
    paths = export_all_charts(figures, str(out), dpi=40)
    assert [os.path.basename(p) for p in paths] == ["one_chart.png", "two.png"]
    assert all(os.path.isfile(p) for p in paths)


def test_build_all_figures_covers_every_sample(scenarios):
    figures = build_all_figures(scenarios, bins=10)
    assert list(figures)[0] == "overview"
    assert len(figures) == 1 + 2 * len(scenarios)
    assert "sparse_histogram" in figures
    assert "weird_qq" in figures


def test_pvalue_csv_reloads_identically(tmp_path, scenarios):
    subset = PValueCollection(samples=[scenarios.get('uniform'), scenarios.get('sparse')])
    path = export_pvalues_csv(subset, str(tmp_path / "out" / "pvalues.csv"))
    reloaded = load_pvalue_csv(path)
    assert reloaded.labels == ['Uniform', 'Sparse']
    for original in subset:
        np.testing.assert_array_equal(
            reloaded.get(original.label).pvalues, original.pvalues
        )


def test_pvalue_csv_reloads_labels_with_delimiters(tmp_path):
    labels = ['Batch; run 2', 'Dose 1, high', 'tab\there']
    collection = PValueCollection(samples=[
        PValueSample(key=f"s{i}", label=label, pvalues=[0.1, 0.9])
        for i, label in enumerate(labels)
    ])
    path = export_pvalues_csv(collection, str(tmp_path / "pvalues.csv"))
    reloaded = load_pvalue_csv(path)
    assert reloaded.labels == labels
    for label in labels:
        np.testing.assert_array_equal(reloaded.get(label).pvalues, [0.1, 0.9])


def test_build_all_figures_keeps_samples_with_similar_labels(tmp_path):
    path = tmp_path / "genes.csv"
    path.write_text("label,p_value\nGene A,0.1\ngene_a,0.2\n", encoding='utf-8')
    figures = build_all_figures(load_pvalue_csv(str(path)), bins=10)
    assert list(figures) == [
        "overview", "gene_a_histogram", "gene_a_qq",
        "gene_a_2_histogram", "gene_a_2_qq",
    ]
