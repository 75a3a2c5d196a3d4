"""
Histogram diagnostics for the P-Value Histogram Plotter.

Reads the shape of a p-value histogram the way an analyst would by eye,
and reports two supporting numbers:

- a Kolmogorov-Smirnov test against Uniform(0, 1), since p-values from
  true null hypotheses are uniformly distributed;
- Storey's estimate of pi0, the share of hypotheses that are truly null,
  taken from the flat right-hand part of the histogram.

No p-value adjustment is performed here.  Once the histogram looks
well behaved, FDR control belongs to a dedicated tool (for example
Benjamini-Hochberg or Storey-Tibshirani q-values).
"""

import numpy as np
from scipy import stats

from .constants import (
    DEFAULT_BINS, DEFAULT_PI0_LAMBDA, KS_UNIFORM_ALPHA,
    PEAK_DENSITY_RATIO, FLAT_TOLERANCE,
)
from .data_model import PValueSample, Diagnosis


SHAPE_ADVICE = {
    'Anti-Conservative': (
        "Flat with a peak near 0: the expected picture when some "
        "hypotheses are non-null. Apply a false discovery rate "
        "procedure; the flat part estimates pi0."
    ),
    'Uniform': (
        "Flat: consistent with every hypothesis being null. Expect few "
        "or no discoveries after multiple-testing correction; check "
        "power before concluding there is no effect."
    ),
    'Bimodal': (
        "Peaks near 0 and near 1: typical of one-sided tests with "
        "effects in both directions. Use a two-sided test or analyse "
        "the two directions separately before applying FDR."
    ),
    'Conservative': (
        "P-values pile up near 1: the test is too cautious or its "
        "assumptions are violated (e.g. ignored pairing). Fix the test "
        "before applying any correction."
    ),
    'Sparse': (
        "Only a few distinct p-values: the test is discrete (tiny "
        "samples, exact rank tests). Histogram-based pi0 estimates are "
        "unreliable; use methods designed for discrete tests."
    ),
    'Weird': (
        "Bumps that fit none of the usual shapes: something is wrong "
        "with the test or the data. Inspect the inputs and the test's "
        "assumptions before interpreting any p-value."
    ),
}

SHAPE_LABELS = list(SHAPE_ADVICE)


def histogram_counts(pvalues, bins: int = DEFAULT_BINS):
    """Count p-values over fixed edges on [0, 1].

    Returns
    -------
    counts : numpy.ndarray of int
    edges : numpy.ndarray
        ``bins + 1`` edges from 0 to 1.  ``np.histogram`` closes the
        last bin, so ``p == 1.0`` is counted there.
    """
    if bins < 1:
        raise ValueError(f"bins must be at least 1, got {bins}")
    edges = np.linspace(0.0, 1.0, bins + 1)
    counts, _ = np.histogram(np.asarray(pvalues, dtype=float), bins=edges)
    return counts, edges


def relative_densities(pvalues, bins: int = DEFAULT_BINS) -> np.ndarray:
    """Per-bin count divided by the flat expectation ``m / bins``."""
    counts, _ = histogram_counts(pvalues, bins)
    m = counts.sum()
    if m == 0:
        return np.zeros(bins)
    return counts * bins / m


def ks_uniformity(pvalues):
    """KS test of *pvalues* against Uniform(0, 1).

    Returns ``(statistic, p_value)`` as plain floats.
    """
    result = stats.kstest(np.asarray(pvalues, dtype=float), 'uniform')
    return float(result.statistic), float(result.pvalue)


def estimate_pi0(pvalues, lambda_: float = DEFAULT_PI0_LAMBDA) -> float:
    """Storey's pi0 estimate, ``#{p > lambda} / (m * (1 - lambda))``.

    Capped at 1.  Beyond *lambda_* the histogram should contain only
    null p-values, whose density is flat at ``pi0 * m``.
    """
    if not 0.0 <= lambda_ < 1.0:
        raise ValueError(f"lambda_ must lie in [0, 1), got {lambda_}")
    p = np.asarray(pvalues, dtype=float)
    if p.size == 0:
        raise ValueError("Cannot estimate pi0 from an empty sample.")
    pi0 = np.count_nonzero(p > lambda_) / (p.size * (1.0 - lambda_))
    return float(min(pi0, 1.0))


def classify_shape(
    pvalues,
    bins: int = DEFAULT_BINS,
    alpha: float = KS_UNIFORM_ALPHA,
) -> str:
    """Name the histogram shape of *pvalues*.

    Checks run in a fixed order; the first match wins:

    1. Sparse: fewer distinct values than bins.
    2. Uniform: KS test against Uniform(0, 1) not rejected at *alpha*.
    3. Bimodal: both end bins well above the flat level.
    4. Anti-Conservative: first bin high, upper half of the histogram
       flat.
    5. Conservative: last bin high, first bin below the flat level.
    6. Weird: anything else.
    """
    p = np.asarray(pvalues, dtype=float)
    if np.unique(p).size < bins:
        return 'Sparse'

    _, ks_p = ks_uniformity(p)
    if ks_p >= alpha:
        return 'Uniform'

    density = relative_densities(p, bins)
    first, last = density[0], density[-1]

    if first >= PEAK_DENSITY_RATIO and last >= PEAK_DENSITY_RATIO:
        return 'Bimodal'

    if first >= PEAK_DENSITY_RATIO:
        upper = density[bins // 2:]
        level = upper.mean()
        if level > 0 and np.all(np.abs(upper - level) <= FLAT_TOLERANCE * level):
            return 'Anti-Conservative'

    if last >= PEAK_DENSITY_RATIO and first < 1.0:
        return 'Conservative'

    return 'Weird'


def diagnose(
    sample: PValueSample,
    bins: int = DEFAULT_BINS,
    lambda_: float = DEFAULT_PI0_LAMBDA,
) -> Diagnosis:
    """Assemble the full ``Diagnosis`` for *sample*."""
    shape = classify_shape(sample.pvalues, bins)
    ks_stat, ks_p = ks_uniformity(sample.pvalues)
    return Diagnosis(
        shape=shape,
        ks_statistic=ks_stat,
        ks_pvalue=ks_p,
        pi0=estimate_pi0(sample.pvalues, lambda_),
        n_tests=sample.n_tests,
        n_unique=sample.n_unique,
        densities=tuple(float(d) for d in relative_densities(sample.pvalues, bins)),
        advice=SHAPE_ADVICE[shape],
    )
