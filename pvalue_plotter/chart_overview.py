"""
Faceted overview for the P-Value Histogram Plotter.

Small multiples of every sample in a collection on the same [0, 1]
bins, three per row.  With the six simulated scenarios this is the
side-by-side figure used to teach the shapes.
"""

import math

import numpy as np
from matplotlib.figure import Figure

from .constants import (
    PLOT_PALETTE, SHAPE_COLORS, DARK_COLORS, EXPORT_TEXT_COLOR,
    DEFAULT_BINS,
)
from .data_model import PValueCollection
from .diagnostics import classify_shape

_N_COLS = 3


def render_overview(
    fig: Figure,
    collection: PValueCollection,
    *,
    bins: int = DEFAULT_BINS,
    show_shape: bool = True,
    for_export: bool = False,
) -> None:
    """Render one small histogram per sample of *collection* on *fig*.

    Facet titles name the sample; with *show_shape* the detected shape
    is appended when it differs from the label.  Y axes are independent
    because sample sizes may differ between loaded files.
    """
    fig.clf()

    if collection is None or len(collection) == 0:
        ax = fig.add_subplot(111)
        ax.text(0.5, 0.5, 'No p-values loaded',
                transform=ax.transAxes, ha='center', va='center')
        return

    n = len(collection)
    n_cols = min(_N_COLS, n)
    n_rows = math.ceil(n / n_cols)
    axes = fig.subplots(n_rows, n_cols, squeeze=False).ravel()
    edges = np.linspace(0.0, 1.0, bins + 1)
    text_color = EXPORT_TEXT_COLOR if for_export else DARK_COLORS['fg']

    for ax, sample in zip(axes, collection):
        ax.hist(
            sample.pvalues, bins=edges,
            color=PLOT_PALETTE['bar'], edgecolor='white', linewidth=0.3,
            zorder=3,
        )
        title = sample.label
        title_color = SHAPE_COLORS.get(sample.label, text_color)
        if show_shape:
            shape = classify_shape(sample.pvalues, bins)
            if shape != sample.label:
                title = f"{sample.label} ({shape})"
            title_color = SHAPE_COLORS.get(shape, title_color)
        ax.set_title(title, fontsize=8, fontweight='bold', color=title_color)
        ax.set_xlim(0.0, 1.0)
        ax.set_xticks([0.0, 0.5, 1.0])
        ax.tick_params(labelsize=6)
        ax.grid(axis='y', linewidth=0.3, alpha=0.5)

    # Hide unused facets in the last row
    for ax in axes[n:]:
        ax.set_visible(False)

    for ax in axes[(n_rows - 1) * n_cols:n]:
        ax.set_xlabel("p-value", fontsize=7)
    for ax in axes[:n:n_cols]:
        ax.set_ylabel("Count", fontsize=7)

    fig.suptitle("Interpreting P-Value Histograms", fontsize=10,
                 fontweight='bold', color=text_color)
    fig.tight_layout(pad=1.0)
