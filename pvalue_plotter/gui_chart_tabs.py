"""
Chart tabs widget (right side) for the P-Value Histogram Plotter.

Three chart tabs (Overview, Histogram, Uniform Q-Q), each hosting a
matplotlib FigureCanvas with a navigation toolbar and export buttons,
plus a Diagnosis tab with the interpretation of the selected sample.
"""

import os

from PySide6.QtWidgets import (
    QTabWidget, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QFileDialog, QMessageBox, QPlainTextEdit,
)

import matplotlib
matplotlib.use('QtAgg')
from matplotlib.figure import Figure
from matplotlib.backends.backend_qtagg import (
    FigureCanvasQTAgg as FigureCanvas,
    NavigationToolbar2QT as NavigationToolbar,
)

from .constants import DARK_COLORS, PLOT_STYLE_DARK
from .theme import apply_plot_style
from .data_model import PValueCollection, PValueSample
from .diagnostics import diagnose
from .export import export_png, copy_to_clipboard, build_all_figures

from .chart_histogram import render_pvalue_histogram
from .chart_overview import render_overview
from .chart_qq import render_uniform_qq


class _ChartTab(QWidget):
    """Single chart tab with figure canvas, toolbar, and export buttons."""

    def __init__(self, figsize=(6, 4), parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(4)

        toolbar_row = QHBoxLayout()
        toolbar_row.setSpacing(4)

        self._fig = Figure(figsize=figsize)
        self._fig.set_facecolor(DARK_COLORS['bg_alt'])
        self._canvas = FigureCanvas(self._fig)
        self._toolbar = NavigationToolbar(self._canvas, self)

        toolbar_row.addWidget(self._toolbar)
        toolbar_row.addStretch()

        for text, slot in (("Copy to Clipboard", self._on_copy),
                           ("Export PNG...", self._on_export)):
            btn = QPushButton(text)
            btn.setFixedHeight(28)
            btn.setStyleSheet("font-size: 11px; padding: 2px 8px;")
            btn.clicked.connect(lambda *_, s=slot: s())
            toolbar_row.addWidget(btn)

        layout.addLayout(toolbar_row)
        layout.addWidget(self._canvas, 1)

    @property
    def fig(self) -> Figure:
        return self._fig

    def refresh(self):
        self._canvas.draw_idle()

    def _on_copy(self):
        if copy_to_clipboard(self._fig):
            self.window().statusBar().showMessage(
                "Chart copied to clipboard", 3000
            )
        else:
            QMessageBox.warning(self, "Copy Failed",
                                "Could not copy chart to clipboard.")

    def _on_export(self):
        path, _ = QFileDialog.getSaveFileName(
            self, "Export Chart as PNG",
            "", "PNG Files (*.png);;All Files (*)",
        )
        if not path:
            return
        if not path.lower().endswith('.png'):
            path += '.png'
        try:
            export_png(self._fig, path)
        except (OSError, ValueError) as exc:
            QMessageBox.critical(
                self, "Export Error", f"Failed to export: {exc}"
            )
            return
        self.window().statusBar().showMessage(
            f"Exported to {os.path.basename(path)}", 3000
        )


class ChartTabsWidget(QTabWidget):
    """Tabbed container for the charts and the diagnosis text."""

    def __init__(self, parent=None):
        super().__init__(parent)

        self._tab_overview = _ChartTab(figsize=(9, 5.5))
        self._tab_histogram = _ChartTab(figsize=(6, 4))
        self._tab_qq = _ChartTab(figsize=(5, 5))
        self._txt_diagnosis = QPlainTextEdit()
        self._txt_diagnosis.setReadOnly(True)

        self.addTab(self._tab_overview, "Overview")
        self.addTab(self._tab_histogram, "Histogram")
        self.addTab(self._tab_qq, "Uniform Q-Q")
        self.addTab(self._txt_diagnosis, "Diagnosis")

        apply_plot_style(PLOT_STYLE_DARK)

    def update_all_charts(
        self,
        collection: PValueCollection,
        config: dict,
        selected_sample: str = "",
    ):
        """Re-render every tab.

        Returns the ``Diagnosis`` of the displayed sample, or ``None``
        when *collection* is empty.
        """
        if not collection or len(collection) == 0:
            return None

        sample = collection.get(selected_sample) or collection.samples[0]
        bins = config.get('bins', 20)
        diagnosis = diagnose(sample, bins)

        apply_plot_style(PLOT_STYLE_DARK)

        render_overview(self._tab_overview.fig, collection, bins=bins)
        self._tab_overview.refresh()

        render_pvalue_histogram(
            self._tab_histogram.fig, sample,
            bins=bins,
            alpha=config.get('alpha', 0.05),
            show_pi0=config.get('show_pi0', True),
            diagnosis=diagnosis,
        )
        self._tab_histogram.refresh()

        render_uniform_qq(self._tab_qq.fig, sample)
        self._tab_qq.refresh()

        self._txt_diagnosis.setPlainText(_diagnosis_report(sample, diagnosis))
        return diagnosis

    def get_all_figures(self, collection: PValueCollection, config: dict) -> dict:
        """Light-theme figures for every sample, for batch export."""
        return build_all_figures(
            collection,
            bins=config.get('bins', 20),
            alpha=config.get('alpha', 0.05),
            show_pi0=config.get('show_pi0', True),
        )


def _diagnosis_report(sample: PValueSample, diagnosis) -> str:
    densities = ", ".join(f"{d:.2f}" for d in diagnosis.densities)
    return (
        f"{sample.label}\n"
        f"{'=' * len(sample.label)}\n\n"
        f"{sample.description}\n\n"
        f"Detected shape:   {diagnosis.shape}\n"
        f"Tests:            {diagnosis.n_tests:,}\n"
        f"Unique p-values:  {diagnosis.n_unique:,}\n"
        f"KS vs uniform:    D = {diagnosis.ks_statistic:.4f}, "
        f"p = {diagnosis.ks_pvalue:.3g}\n"
        f"pi0 estimate:     {diagnosis.pi0:.3f}\n\n"
        f"Bin density relative to uniform:\n  {densities}\n\n"
        f"{diagnosis.advice}\n"
    )
