"""Tests for histogram diagnostics on distributions of known shape."""

import numpy as np
import pytest
from scipy import stats

from pvalue_plotter.data_model import PValueSample, Diagnosis
from pvalue_plotter.diagnostics import (
    SHAPE_ADVICE, SHAPE_LABELS, histogram_counts, relative_densities,
    ks_uniformity, estimate_pi0, classify_shape, diagnose,
)

M = 10000


def _grid(m, lo=0.0, hi=1.0):
    """Evenly spread values: a noise-free stand-in for a uniform sample."""
    return lo + (hi - lo) * (np.arange(m) + 0.5) / m


def test_histogram_counts_uses_fixed_edges():
    counts, edges = histogram_counts([0.0, 0.01, 0.5, 1.0], bins=10)
    assert len(edges) == 11
    assert edges[0] == 0.0 and edges[-1] == 1.0
    assert counts.sum() == 4
    assert counts[0] == 2
    assert counts[-1] == 1  # p == 1.0 lands in the closed last bin


def test_histogram_counts_rejects_zero_bins():
    with pytest.raises(ValueError):
        histogram_counts([0.5], bins=0)


def test_relative_densities_of_flat_sample_are_one():
    np.testing.assert_allclose(relative_densities(_grid(M), 20), 1.0)


def test_ks_uniformity_returns_floats():
    stat, p = ks_uniformity(_grid(M))
    assert isinstance(stat, float) and isinstance(p, float)
    assert p > 0.99


def test_pi0_of_all_null_is_one():
    assert estimate_pi0(_grid(M)) == pytest.approx(1.0)


def test_pi0_of_half_signal():
    p = np.concatenate([np.zeros(M // 2), _grid(M // 2)])
    assert estimate_pi0(p) == pytest.approx(0.5)


def test_pi0_is_capped_at_one():
    assert estimate_pi0(np.ones(100)) == 1.0


@pytest.mark.parametrize("lambda_", [-0.1, 1.0, 1.5])
def test_pi0_rejects_bad_lambda(lambda_):
    with pytest.raises(ValueError, match="lambda_"):
        estimate_pi0(_grid(100), lambda_)


def test_pi0_rejects_empty():
    with pytest.raises(ValueError):
        estimate_pi0([])


def test_classify_uniform():
    assert classify_shape(_grid(M)) == 'Uniform'


def test_classify_anti_conservative():
    p = np.concatenate([_grid(8000), _grid(2000, 0.0, 0.05)])
    assert classify_shape(p) == 'Anti-Conservative'


def test_classify_bimodal():
    p = np.concatenate([
        _grid(8000), _grid(1000, 0.0, 0.05), _grid(1000, 0.95, 1.0),
    ])
    assert classify_shape(p) == 'Bimodal'


def test_classify_conservative():
    # Beta(2, 1): density rises linearly towards 1
    p = np.sqrt(_grid(M))
    assert classify_shape(p) == 'Conservative'


def test_classify_sparse():
    p = np.repeat([0.1, 0.2, 0.4, 0.7, 1.0], 2000)
    assert classify_shape(p) == 'Sparse'


def test_classify_weird_hump_in_the_middle():
    p = stats.beta.ppf(_grid(M), 5, 5)
    assert classify_shape(p) == 'Weird'


def test_every_shape_has_advice():
    assert SHAPE_LABELS == [
        'Anti-Conservative', 'Uniform', 'Bimodal',
        'Conservative', 'Sparse', 'Weird',
    ]
    assert all(SHAPE_ADVICE[label] for label in SHAPE_LABELS)


def test_diagnose_assembles_all_fields():
    sample = PValueSample(key='flat', label='Flat', pvalues=_grid(M))
    result = diagnose(sample, bins=10)
    assert isinstance(result, Diagnosis)
    assert result.shape == 'Uniform'
    assert result.n_tests == M
    assert result.n_unique == M
    assert len(result.densities) == 10
    assert result.pi0 == pytest.approx(1.0)
    assert result.advice == SHAPE_ADVICE['Uniform']
    assert result.summary().startswith('Uniform:')
