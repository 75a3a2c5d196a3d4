"""
Scenario simulator for the P-Value Histogram Plotter.

Produces the six illustrative p-value collections by running many
small two-sample tests through ``scipy.stats``.  Each scenario is a
different way the tests can be set up (or go wrong), and each leaves a
recognisable shape in the histogram:

=================  =====================================================
Anti-Conservative  Mostly nulls plus true effects: flat with a peak at 0
Uniform            Nothing but nulls: flat
Bimodal            One-sided test, effects in both directions
Conservative       Paired data analysed as unpaired: piles up near 1
Sparse             Exact rank test on tiny groups: few distinct values
Weird              t-test on tiny, heavily skewed samples
=================  =====================================================

All tests of a scenario are run in one vectorised call (``axis=1``).
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable

import numpy as np
from scipy import stats

from .constants import (
    DEFAULT_N_TESTS, DEFAULT_N_PER_GROUP, DEFAULT_NULL_FRACTION,
    DEFAULT_EFFECT_SIZE, DEFAULT_SEED,
    CONSERVATIVE_PAIR_CORRELATION, SPARSE_GROUP_SIZE,
    WEIRD_GROUP_SIZE, WEIRD_LOG_SIGMA,
)
from .data_model import PValueSample, PValueCollection


@dataclass(frozen=True)
class SimulationConfig:
    """Parameters shared by all scenarios.

    Parameters
    ----------
    n_tests : int
        Number of hypotheses (p-values) per scenario.
    n_per_group : int
        Observations in each of the two groups of a t-test.
    null_fraction : float
        Share of tests whose null hypothesis is true.
    effect_size : float
        Mean shift, in standard deviations, for non-null tests.
    seed : int
        Base seed; each scenario derives its own stream from it.
    """
    n_tests: int = DEFAULT_N_TESTS
    n_per_group: int = DEFAULT_N_PER_GROUP
    null_fraction: float = DEFAULT_NULL_FRACTION
    effect_size: float = DEFAULT_EFFECT_SIZE
    seed: int = DEFAULT_SEED

    def __post_init__(self):
        if self.n_tests < 1:
            raise ValueError(f"n_tests must be at least 1, got {self.n_tests}")
        if self.n_per_group < 2:
            raise ValueError(
                f"n_per_group must be at least 2, got {self.n_per_group}"
            )
        if not 0.0 <= self.null_fraction <= 1.0:
            raise ValueError(
                f"null_fraction must lie in [0, 1], got {self.null_fraction}"
            )
        if self.effect_size < 0:
            raise ValueError(
                f"effect_size must be non-negative, got {self.effect_size}"
            )

    @property
    def n_null(self) -> int:
        return int(round(self.n_tests * self.null_fraction))


# ── Helpers ──────────────────────────────────────────────────────────────

def _shifts(config: SimulationConfig, rng, *, split_sign: bool = False) -> np.ndarray:
    """Column vector of per-test mean shifts (zero for true nulls).

    With *split_sign*, half of the non-null tests shift downwards.
    Rows are shuffled so nulls and non-nulls are interleaved.
    """
    n_alt = config.n_tests - config.n_null
    shifts = np.zeros(config.n_tests)
    if n_alt:
        alt = np.full(n_alt, config.effect_size)
        if split_sign:
            alt[n_alt // 2:] *= -1.0
        shifts[config.n_null:] = alt
    rng.shuffle(shifts)
    return shifts[:, np.newaxis]


def _as_pvalues(result) -> np.ndarray:
    # scipy can return 1 + eps for two-sided exact tests
    return np.clip(np.asarray(result.pvalue, dtype=float), 0.0, 1.0)


# ── Scenarios ────────────────────────────────────────────────────────────

def simulate_anti_conservative(config: SimulationConfig, rng) -> np.ndarray:
    """Nulls plus true shifts, two-sided Welch t-test."""
    shape = (config.n_tests, config.n_per_group)
    x = rng.normal(0.0, 1.0, shape)
    y = rng.normal(0.0, 1.0, shape) + _shifts(config, rng)
    return _as_pvalues(stats.ttest_ind(x, y, axis=1, equal_var=False))


def simulate_uniform(config: SimulationConfig, rng) -> np.ndarray:
    """Every null hypothesis true, two-sided t-test."""
    shape = (config.n_tests, config.n_per_group)
    x = rng.normal(0.0, 1.0, shape)
    y = rng.normal(0.0, 1.0, shape)
    return _as_pvalues(stats.ttest_ind(x, y, axis=1, equal_var=False))


def simulate_bimodal(config: SimulationConfig, rng) -> np.ndarray:
    """One-sided test; half of the real effects point the other way.

    Effects in the tested direction pile up near 0, effects in the
    opposite direction pile up near 1.
    """
    shape = (config.n_tests, config.n_per_group)
    x = rng.normal(0.0, 1.0, shape)
    y = rng.normal(0.0, 1.0, shape) + _shifts(config, rng, split_sign=True)
    return _as_pvalues(
        stats.ttest_ind(y, x, axis=1, equal_var=False, alternative='greater')
    )


def simulate_conservative(config: SimulationConfig, rng) -> np.ndarray:
    """Positively correlated pairs analysed with an unpaired t-test.

    Ignoring the pairing overestimates the variance of the difference by
    a factor ``1 / (1 - rho)``, which shrinks every statistic towards 0.
    """
    rho = CONSERVATIVE_PAIR_CORRELATION
    shape = (config.n_tests, config.n_per_group)
    shared = rng.normal(0.0, 1.0, shape)
    x = np.sqrt(rho) * shared + np.sqrt(1.0 - rho) * rng.normal(0.0, 1.0, shape)
    y = np.sqrt(rho) * shared + np.sqrt(1.0 - rho) * rng.normal(0.0, 1.0, shape)
    return _as_pvalues(stats.ttest_ind(x, y, axis=1))


def simulate_sparse(config: SimulationConfig, rng) -> np.ndarray:
    """Exact Wilcoxon rank-sum test on groups of three.

    With three observations per group there are only 20 possible rank
    arrangements, so the test can produce just a handful of p-values.
    """
    shape = (config.n_tests, SPARSE_GROUP_SIZE)
    x = rng.normal(0.0, 1.0, shape)
    y = rng.normal(0.0, 1.0, shape) + _shifts(config, rng)
    return _as_pvalues(
        stats.mannwhitneyu(x, y, axis=1, alternative='two-sided', method='exact')
    )


def simulate_weird(config: SimulationConfig, rng) -> np.ndarray:
    """Welch t-test on tiny samples from a heavily skewed distribution."""
    shape = (config.n_tests, WEIRD_GROUP_SIZE)
    x = rng.lognormal(0.0, WEIRD_LOG_SIGMA, shape)
    log_shift = _shifts(config, rng) * WEIRD_LOG_SIGMA
    y = rng.lognormal(0.0, WEIRD_LOG_SIGMA, shape) * np.exp(log_shift)
    return _as_pvalues(stats.ttest_ind(x, y, axis=1, equal_var=False))


# ── Registry ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ScenarioSpec:
    key: str
    label: str
    simulate: Callable
    description: str


SCENARIOS = OrderedDict((spec.key, spec) for spec in (
    ScenarioSpec(
        'anti_conservative', 'Anti-Conservative', simulate_anti_conservative,
        "Two-sided Welch t-tests; a share of tests carry a real mean shift.",
    ),
    ScenarioSpec(
        'uniform', 'Uniform', simulate_uniform,
        "Two-sided t-tests where every null hypothesis is true.",
    ),
    ScenarioSpec(
        'bimodal', 'Bimodal', simulate_bimodal,
        "One-sided t-tests; half of the real effects go the untested way.",
    ),
    ScenarioSpec(
        'conservative', 'Conservative', simulate_conservative,
        "Correlated pairs analysed with an unpaired t-test (all null).",
    ),
    ScenarioSpec(
        'sparse', 'Sparse', simulate_sparse,
        "Exact Wilcoxon rank-sum tests on groups of three.",
    ),
    ScenarioSpec(
        'weird', 'Weird', simulate_weird,
        "Welch t-tests on three heavily skewed observations per group.",
    ),
))


def simulate_scenario(key: str, config: SimulationConfig = None) -> PValueSample:
    """Run one scenario and wrap its p-values in a ``PValueSample``.

    The random stream depends only on ``config.seed`` and the scenario's
    position in ``SCENARIOS``, so a scenario reproduces the same values
    whether it is run alone or as part of ``simulate_all``.

    Raises
    ------
    KeyError
        If *key* is not a registered scenario.
    """
    if config is None:
        config = SimulationConfig()
    if key not in SCENARIOS:
        raise KeyError(
            f"Unknown scenario '{key}'. "
            f"Available: {', '.join(SCENARIOS)}"
        )
    spec = SCENARIOS[key]
    index = list(SCENARIOS).index(key)
    rng = np.random.default_rng([config.seed, index])
    pvalues = spec.simulate(config, rng)
    return PValueSample(
        key=spec.key,
        label=spec.label,
        pvalues=pvalues,
        description=spec.description,
    )


def simulate_all(config: SimulationConfig = None) -> PValueCollection:
    """Run all six scenarios in display order."""
    if config is None:
        config = SimulationConfig()
    return PValueCollection(
        samples=[simulate_scenario(key, config) for key in SCENARIOS],
    )
