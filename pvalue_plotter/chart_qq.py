"""
Uniform Q-Q plot for the P-Value Histogram Plotter.

Sorted p-values against the quantiles of Uniform(0, 1).  True nulls
follow the diagonal; real effects bend the low end below it, and a
conservative test bows the whole curve above it.
"""

import numpy as np
from matplotlib.figure import Figure

from .constants import PLOT_PALETTE
from .data_model import PValueSample

# Points drawn at most; larger samples are thinned evenly by rank.
_MAX_POINTS = 2000


def render_uniform_qq(
    fig: Figure,
    sample: PValueSample,
    *,
    for_export: bool = False,
) -> None:
    """Render a uniform Q-Q plot of *sample* on *fig*."""
    fig.clf()
    pal = PLOT_PALETTE
    ax = fig.add_subplot(111)

    if sample is None:
        ax.text(0.5, 0.5, 'No p-values loaded',
                transform=ax.transAxes, ha='center', va='center')
        return

    observed = np.sort(sample.pvalues)
    m = observed.size
    expected = (np.arange(1, m + 1) - 0.5) / m
    if m > _MAX_POINTS:
        idx = np.linspace(0, m - 1, _MAX_POINTS).round().astype(int)
        observed, expected = observed[idx], expected[idx]

    ax.plot([0.0, 1.0], [0.0, 1.0], color=pal['identity_line'],
            linewidth=1.0, linestyle='--', zorder=2, label='Uniform')
    ax.scatter(expected, observed, s=4, color=pal['qq_points'],
               edgecolors='none', zorder=3, label=sample.label)

    ax.set_xlim(0.0, 1.0)
    ax.set_ylim(0.0, 1.0)
    ax.set_aspect('equal')
    ax.set_xlabel("Uniform quantile", fontsize=8)
    ax.set_ylabel("Observed p-value", fontsize=8)
    ax.set_title(f"Uniform Q-Q — {sample.label}",
                 fontsize=10, fontweight='bold')
    ax.legend(loc='upper left', fontsize=6, framealpha=0.9)
    ax.grid(linewidth=0.4, alpha=0.5)

    fig.tight_layout(pad=1.5)
