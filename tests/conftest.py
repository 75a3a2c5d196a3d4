"""
Shared test configuration.

Forces the non-interactive Agg backend before any test imports
matplotlib, and simulates the six scenarios once per session.
"""

import os

os.environ.setdefault("MPLBACKEND", "Agg")

import matplotlib  # noqa: E402
matplotlib.use("Agg")

import pytest  # noqa: E402

from pvalue_plotter.simulation import SimulationConfig, simulate_all  # noqa: E402


@pytest.fixture(scope="session")
def default_config():
    return SimulationConfig()


@pytest.fixture(scope="session")
def scenarios(default_config):
    """All six simulated scenarios at the default 10,000 tests each."""
    return simulate_all(default_config)
