"""
P-value histogram for the P-Value Histogram Plotter.

Draws one sample on fixed [0, 1] bins so histograms of different
samples are directly comparable.  Bars left of the significance level
are highlighted, and a dashed line marks the height the null p-values
alone would reach (``pi0 * m / bins``).  Whatever rises above that line
near 0 is the signal; whatever deviates elsewhere is a warning sign.
"""

import numpy as np
from matplotlib.figure import Figure

from .constants import (
    PLOT_PALETTE, DARK_COLORS, SHAPE_COLORS,
    EXPORT_TEXT_COLOR, EXPORT_BG_COLOR,
    DEFAULT_BINS, DEFAULT_ALPHA,
)
from .data_model import PValueSample, Diagnosis
from .diagnostics import diagnose


def _stats_text(diagnosis: Diagnosis) -> str:
    return (
        f"Tests: {diagnosis.n_tests:,}\n"
        f"Unique values: {diagnosis.n_unique:,}\n"
        f"KS vs uniform: p = {diagnosis.ks_pvalue:.3g}\n"
        f"pi0 estimate: {diagnosis.pi0:.3f}\n"
        f"Shape: {diagnosis.shape}"
    )


def render_pvalue_histogram(
    fig: Figure,
    sample: PValueSample,
    *,
    bins: int = DEFAULT_BINS,
    alpha: float = DEFAULT_ALPHA,
    show_pi0: bool = True,
    diagnosis: Diagnosis = None,
    for_export: bool = False,
) -> None:
    """Render the p-value histogram of *sample* on *fig*.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
        Figure to draw on (will be cleared).
    sample : PValueSample or None
        Values to plot.  ``None`` draws a placeholder message.
    bins : int
        Number of equal-width bins on [0, 1].
    alpha : float
        Significance level; bars wholly below it are highlighted.
    show_pi0 : bool
        Draw the estimated null level as a dashed line.
    diagnosis : Diagnosis or None
        Precomputed diagnosis; computed here when omitted.
    for_export : bool
        If ``True``, use light-theme colours.
    """
    fig.clf()
    pal = PLOT_PALETTE
    ax = fig.add_subplot(111)

    if sample is None:
        ax.text(0.5, 0.5, 'No p-values loaded',
                transform=ax.transAxes, ha='center', va='center')
        return

    if diagnosis is None:
        diagnosis = diagnose(sample, bins)

    edges = np.linspace(0.0, 1.0, bins + 1)
    counts, _, patches = ax.hist(
        sample.pvalues, bins=edges, edgecolor='white', linewidth=0.5,
        zorder=3, alpha=0.9,
    )
    for patch, right_edge in zip(patches, edges[1:]):
        is_signif = right_edge <= alpha + 1e-12
        patch.set_facecolor(pal['bar_signif'] if is_signif else pal['bar'])

    # ── Null level ───────────────────────────────────────────────────
    if show_pi0:
        null_level = diagnosis.pi0 * sample.n_tests / bins
        ax.axhline(
            null_level, color=pal['null_line'], linewidth=1.2,
            linestyle='--', zorder=4,
            label=f'Null level (pi0 = {diagnosis.pi0:.2f})',
        )

    ax.axvline(
        alpha, color=pal['alpha_line'], linewidth=1.0, linestyle=':',
        zorder=4, label=f'alpha = {alpha:g}',
    )

    text_color = EXPORT_TEXT_COLOR if for_export else DARK_COLORS['fg']
    box_color = EXPORT_BG_COLOR if for_export else DARK_COLORS['bg_widget']
    ax.text(
        0.98, 0.95, _stats_text(diagnosis),
        transform=ax.transAxes, ha='right', va='top',
        fontsize=6.5, family='monospace',
        color=text_color,
        bbox=dict(
            boxstyle='round,pad=0.4',
            facecolor=box_color,
            edgecolor=SHAPE_COLORS.get(diagnosis.shape, '#999999'),
            alpha=0.9,
        ),
        zorder=5,
    )

    # ── Labels ───────────────────────────────────────────────────────
    ax.set_xlim(0.0, 1.0)
    ax.set_ylim(0.0, max(counts.max(), 1.0) * 1.25)
    ax.set_xlabel("p-value", fontsize=8)
    ax.set_ylabel("Count", fontsize=8)
    ax.set_title(f"P-Value Histogram — {sample.label}",
                 fontsize=10, fontweight='bold')

    ax.legend(loc='upper left', fontsize=6, framealpha=0.9)
    ax.grid(axis='y', linewidth=0.4, alpha=0.5)

    fig.tight_layout(pad=1.5)
