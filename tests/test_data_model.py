"""Tests for the immutable p-value data model."""

import numpy as np
import pytest

from pvalue_plotter.data_model import PValueSample, PValueCollection


def test_sample_stores_read_only_copy():
    source = np.array([0.1, 0.5, 0.5])
    sample = PValueSample(key='s', label='S', pvalues=source)
    source[0] = 0.9
    assert sample.pvalues[0] == 0.1
    assert sample.n_tests == 3
    assert sample.n_unique == 2
    with pytest.raises(ValueError):
        sample.pvalues[0] = 0.2


def test_sample_accepts_lists():
    sample = PValueSample(key='s', label='S', pvalues=[0.0, 1.0])
    assert sample.pvalues.dtype == float


@pytest.mark.parametrize("values, message", [
    ([], "no p-values"),
    ([0.5, np.nan], "non-finite"),
    ([0.5, 1.2], "outside"),
    ([-0.01], "outside"),
])
def test_sample_rejects_invalid_values(values, message):
    with pytest.raises(ValueError, match=message):
        PValueSample(key='s', label='S', pvalues=values)


def test_collection_lookup_by_key_or_label():
    a = PValueSample(key='a_key', label='Alpha', pvalues=[0.1])
    b = PValueSample(key='b_key', label='Beta', pvalues=[0.2])
    collection = PValueCollection(samples=[a, b])
    assert collection.labels == ['Alpha', 'Beta']
    assert collection.get('b_key') is b
    assert collection.get('Alpha') is a
    assert collection.get('Gamma') is None
    assert len(collection) == 2
    assert list(collection) == [a, b]
