"""
Export utilities for the P-Value Histogram Plotter.

PNG export switches a dark GUI figure to the white export theme, saves
it, and restores every colour and the figure size afterwards, even when
saving fails.  Also writes the p-values themselves as a long-form CSV
table (``label,p_value``) that ``csv_parser.load_pvalue_csv`` reads
back.
"""

import csv
import io
import os
from contextlib import contextmanager

from matplotlib.colors import to_hex
from matplotlib.figure import Figure

from .constants import (
    EXPORT_DPI, EXPORT_WIDTH_INCHES, CLIPBOARD_DPI,
    PLOT_STYLE_LIGHT, DARK_COLORS, DEFAULT_BINS, DEFAULT_ALPHA,
)
from .data_model import PValueCollection
from .chart_histogram import render_pvalue_histogram
from .chart_overview import render_overview
from .chart_qq import render_uniform_qq

# Dark-theme foreground colours that must turn dark on a white page
_DARK_FG = frozenset(
    to_hex(DARK_COLORS[k]) for k in ('fg', 'fg_dim', 'fg_bright')
)


def _is_dark_fg(color) -> bool:
    try:
        return to_hex(color) in _DARK_FG
    except ValueError:
        return False


def _tick_colors(axis) -> tuple:
    """``(mark_color, label_color)`` of the first major tick, or Nones."""
    ticks = axis.get_major_ticks()
    if not ticks:
        return None, None
    return ticks[0].tick1line.get_color(), ticks[0].label1.get_color()


def _figure_texts(fig: Figure) -> list:
    """Text artists whose colour the theme switch may change."""
    texts = list(fig.texts)
    if getattr(fig, '_suptitle', None) is not None:
        texts.append(fig._suptitle)
    for ax in fig.get_axes():
        texts.extend([ax.title, ax.xaxis.label, ax.yaxis.label])
        texts.extend(ax.texts)
        legend = ax.get_legend()
        if legend is not None:
            texts.extend(legend.get_texts())
    return texts


@contextmanager
def light_theme(fig: Figure):
    """Temporarily give *fig* the light export theme.

    Snapshots every colour the switch touches and puts it back on exit.
    """
    light = PLOT_STYLE_LIGHT
    texts = _figure_texts(fig)
    saved_texts = [(t, t.get_color()) for t in texts]
    saved_fig = fig.get_facecolor()
    saved_axes = []
    for ax in fig.get_axes():
        legend = ax.get_legend()
        frame = legend.get_frame() if legend is not None else None
        saved_axes.append((
            ax,
            ax.get_facecolor(),
            {name: sp.get_edgecolor() for name, sp in ax.spines.items()},
            [line.get_color() for line in ax.get_xgridlines() + ax.get_ygridlines()],
            {axis: _tick_colors(axis_obj) for axis, axis_obj in
             (('x', ax.xaxis), ('y', ax.yaxis))},
            (frame, frame.get_facecolor(), frame.get_edgecolor())
            if frame is not None else None,
        ))

    try:
        fig.set_facecolor(light['figure.facecolor'])
        for ax in fig.get_axes():
            ax.set_facecolor(light['axes.facecolor'])
            for spine in ax.spines.values():
                spine.set_edgecolor(light['axes.edgecolor'])
            ax.tick_params(axis='x', colors=light['xtick.color'])
            ax.tick_params(axis='y', colors=light['ytick.color'])
            for line in ax.get_xgridlines() + ax.get_ygridlines():
                line.set_color(light['grid.color'])
            legend = ax.get_legend()
            if legend is not None:
                legend.get_frame().set_facecolor(light['legend.facecolor'])
                legend.get_frame().set_edgecolor(light['legend.edgecolor'])
        for text in texts:
            if _is_dark_fg(text.get_color()):
                text.set_color(light['text.color'])
        yield fig
    finally:
        fig.set_facecolor(saved_fig)
        for ax, face, spines, grid, ticks, legend_state in saved_axes:
            ax.set_facecolor(face)
            for name, color in spines.items():
                ax.spines[name].set_edgecolor(color)
            for line, color in zip(ax.get_xgridlines() + ax.get_ygridlines(), grid):
                line.set_color(color)
            for axis, (mark, label) in ticks.items():
                if mark is not None:
                    ax.tick_params(axis=axis, color=mark, labelcolor=label)
            if legend_state is not None:
                frame, fc, ec = legend_state
                frame.set_facecolor(fc)
                frame.set_edgecolor(ec)
        for text, color in saved_texts:
            text.set_color(color)


def export_png(
    fig: Figure,
    filepath: str,
    *,
    dpi: int = EXPORT_DPI,
    width_inches: float = EXPORT_WIDTH_INCHES,
) -> None:
    """Export *fig* as a light-theme PNG at *width_inches*.

    Aspect ratio is preserved.  Size and theme are restored afterwards.
    """
    current_w, current_h = fig.get_size_inches()
    scale = width_inches / current_w if current_w > 0 else 1.0
    try:
        fig.set_size_inches(width_inches, current_h * scale)
        with light_theme(fig):
            fig.savefig(
                filepath,
                dpi=dpi,
                bbox_inches='tight',
                facecolor=fig.get_facecolor(),
                edgecolor='none',
                pad_inches=0.1,
            )
    finally:
        fig.set_size_inches(current_w, current_h)


def copy_to_clipboard(fig: Figure, dpi: int = CLIPBOARD_DPI) -> bool:
    """Copy *fig* to the system clipboard as a PNG image.

    Returns ``True`` on success, ``False`` if Qt or the clipboard is
    unavailable.
    """
    try:
        from PySide6.QtWidgets import QApplication
        from PySide6.QtGui import QImage
    except ImportError:
        return False

    buf = io.BytesIO()
    with light_theme(fig):
        fig.savefig(
            buf, format='png', dpi=dpi,
            bbox_inches='tight',
            facecolor=fig.get_facecolor(),
            edgecolor='none',
        )
    img = QImage()
    img.loadFromData(buf.getvalue())

    clipboard = QApplication.clipboard()
    if clipboard is None:
        return False
    clipboard.setImage(img)
    return True


def safe_filename(name: str) -> str:
    """Reduce *name* to letters, digits, ``-`` and ``_``."""
    return "".join(
        c if c.isalnum() or c in '-_ ' else '_'
        for c in name
    ).strip().replace(' ', '_')


def export_all_charts(
    figures: dict,
    output_dir: str,
    *,
    dpi: int = EXPORT_DPI,
    width_inches: float = EXPORT_WIDTH_INCHES,
) -> list:
    """Export ``{filename_stem: Figure}`` as PNGs into *output_dir*.

    Returns
    -------
    list of str
        Paths of exported files, in the order of *figures*.
    """
    os.makedirs(output_dir, exist_ok=True)
    paths = []
    for name, fig in figures.items():
        filepath = os.path.join(output_dir, f"{safe_filename(name)}.png")
        export_png(fig, filepath, dpi=dpi, width_inches=width_inches)
        paths.append(filepath)
    return paths


def build_all_figures(
    collection: PValueCollection,
    *,
    bins: int = DEFAULT_BINS,
    alpha: float = DEFAULT_ALPHA,
    show_pi0: bool = True,
) -> dict:
    """Render every chart of *collection* in the export theme.

    Returns ``{filename_stem: Figure}``: the overview, then a histogram
    and a Q-Q plot per sample.  Figures are created with
    ``matplotlib.figure.Figure`` directly, so no GUI backend is needed.
    """
    figures = {}

    fig_overview = Figure(figsize=(9, 5.5))
    render_overview(fig_overview, collection, bins=bins, for_export=True)
    figures["overview"] = fig_overview

    for sample in collection:
        fig_hist = Figure(figsize=(6, 4))
        render_pvalue_histogram(
            fig_hist, sample,
            bins=bins, alpha=alpha, show_pi0=show_pi0, for_export=True,
        )
        figures[f"{sample.key}_histogram"] = fig_hist

        fig_qq = Figure(figsize=(5, 5))
        render_uniform_qq(fig_qq, sample, for_export=True)
        figures[f"{sample.key}_qq"] = fig_qq

    return figures


def export_pvalues_csv(collection: PValueCollection, filepath: str) -> str:
    """Write *collection* as a long-form ``label,p_value`` CSV table.

    Labels are always quoted so a ``;`` or ``,`` inside one cannot be
    taken for a delimiter.  Floats are written at full ``repr``
    precision, so reloading them gives the same values.
    """
    parent = os.path.dirname(filepath)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(filepath, 'w', encoding='utf-8', newline='') as fh:
        writer = csv.writer(fh, quoting=csv.QUOTE_NONNUMERIC)
        writer.writerow(['label', 'p_value'])
        for sample in collection:
            for value in sample.pvalues:
                writer.writerow([sample.label, float(value)])
    return filepath
