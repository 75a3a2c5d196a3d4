"""
Main window for the P-Value Histogram Plotter.

Hosts the ConfigPanel (left) and ChartTabsWidget (right) in a
horizontal splitter, with a menu bar and status bar.  The six simulated
scenarios are generated on start-up so the window never opens empty.
"""

import os
import sys

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QSplitter, QScrollArea,
    QFileDialog, QMessageBox,
)
from PySide6.QtGui import QAction
from PySide6.QtCore import Qt

from . import APP_NAME, APP_VERSION
from .constants import PVALUES_CSV_NAME
from .export import export_all_charts, export_png, export_pvalues_csv
from .gui_config_panel import ConfigPanel
from .gui_chart_tabs import ChartTabsWidget


class PlotterMainWindow(QMainWindow):
    """Main window for the P-Value Histogram Plotter."""

    def __init__(self):
        super().__init__()
        self._collection = None

        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")
        self.setMinimumSize(1200, 800)

        self._setup_ui()
        self._setup_menu()
        self._connect_signals()

        self._config_panel.simulate()

    # ── UI setup ─────────────────────────────────────────────────────

    def _setup_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QVBoxLayout(central)
        main_layout.setContentsMargins(4, 4, 4, 4)

        splitter = QSplitter(Qt.Orientation.Horizontal)

        self._config_panel = ConfigPanel()
        scroll = QScrollArea()
        scroll.setWidget(self._config_panel)
        scroll.setWidgetResizable(True)
        scroll.setMinimumWidth(300)
        scroll.setMaximumWidth(460)

        self._chart_tabs = ChartTabsWidget()

        splitter.addWidget(scroll)
        splitter.addWidget(self._chart_tabs)
        splitter.setStretchFactor(0, 0)
        splitter.setStretchFactor(1, 1)
        splitter.setSizes([340, 860])

        main_layout.addWidget(splitter)

    def _setup_menu(self):
        menubar = self.menuBar()

        file_menu = menubar.addMenu("File")
        for text, slot in (
            ("Load P-Values...", self._config_panel.load_csv),
            ("Export Current Chart...", self._export_current),
            ("Export All Charts...", self._export_all),
            ("Save P-Values as CSV...", self._save_pvalues),
        ):
            action = QAction(text, self)
            action.triggered.connect(lambda *_, s=slot: s())
            file_menu.addAction(action)
        file_menu.addSeparator()
        act_exit = QAction("Exit", self)
        act_exit.triggered.connect(self.close)
        file_menu.addAction(act_exit)

        examples_menu = menubar.addMenu("Examples")
        act_simulate = QAction("Simulate Six Scenarios", self)
        act_simulate.triggered.connect(
            lambda *_: self._config_panel.simulate()
        )
        examples_menu.addAction(act_simulate)

        help_menu = menubar.addMenu("Help")
        act_about = QAction("About", self)
        act_about.triggered.connect(lambda *_: self._show_about())
        help_menu.addAction(act_about)

    def _connect_signals(self):
        self._config_panel.collection_loaded.connect(self._on_collection_loaded)
        self._config_panel.config_changed.connect(lambda: self._render())
        self._config_panel.export_all_button.clicked.connect(
            lambda *_: self._export_all()
        )
        self._config_panel.sample_combo.currentTextChanged.connect(
            lambda *_: self._render()
        )

    def load_pvalues(self, path: str):
        """Replace the simulated scenarios with p-values from *path*."""
        self._config_panel.load_csv(path)

    # ── Slots ────────────────────────────────────────────────────────

    def _on_collection_loaded(self, collection):
        self._collection = collection
        self._render()

    def _render(self):
        if self._collection is None:
            return
        config = self._config_panel.get_config()
        try:
            diagnosis = self._chart_tabs.update_all_charts(
                self._collection, config, config['selected_sample'],
            )
        except (ValueError, KeyError) as exc:
            print(f"[P-Value Plotter] Render warning: {exc}", file=sys.stderr)
            self.statusBar().showMessage("Chart generation failed")
            return
        if diagnosis is not None:
            self.statusBar().showMessage(diagnosis.summary())

    def _export_current(self):
        current_tab = self._chart_tabs.currentWidget()
        if current_tab is None or not hasattr(current_tab, 'fig'):
            QMessageBox.warning(
                self, "Nothing to Export",
                "The current tab does not show a chart.",
            )
            return
        path, _ = QFileDialog.getSaveFileName(
            self, "Export Chart as PNG",
            "", "PNG Files (*.png);;All Files (*)",
        )
        if not path:
            return
        if not path.lower().endswith('.png'):
            path += '.png'
        try:
            export_png(current_tab.fig, path)
        except (OSError, ValueError) as exc:
            QMessageBox.critical(self, "Export Error", f"Failed to export: {exc}")
            return
        self.statusBar().showMessage(f"Exported to {os.path.basename(path)}", 5000)

    def _export_all(self):
        """Export every chart plus the p-value table to a folder."""
        if self._collection is None:
            QMessageBox.warning(self, "No Data", "Simulate or load p-values first.")
            return
        folder = QFileDialog.getExistingDirectory(
            self, "Select Output Folder for All Charts"
        )
        if not folder:
            return

        self.statusBar().showMessage("Exporting all charts...")
        config = self._config_panel.get_config()
        try:
            figures = self._chart_tabs.get_all_figures(self._collection, config)
            paths = export_all_charts(figures, folder)
            paths.append(export_pvalues_csv(
                self._collection, os.path.join(folder, PVALUES_CSV_NAME)
            ))
        except (OSError, ValueError) as exc:
            QMessageBox.critical(
                self, "Export Error", f"Failed to export charts:\n\n{exc}"
            )
            return
        self.statusBar().showMessage(
            f"Exported {len(paths)} files to {os.path.basename(folder)}", 5000
        )
        QMessageBox.information(
            self, "Export Complete",
            f"Successfully exported {len(paths)} files to:\n\n{folder}",
        )

    def _save_pvalues(self):
        if self._collection is None:
            QMessageBox.warning(self, "No Data", "Simulate or load p-values first.")
            return
        path, _ = QFileDialog.getSaveFileName(
            self, "Save P-Values", PVALUES_CSV_NAME,
            "CSV Files (*.csv);;All Files (*)",
        )
        if not path:
            return
        try:
            export_pvalues_csv(self._collection, path)
        except OSError as exc:
            QMessageBox.critical(self, "Save Error", f"Failed to save: {exc}")
            return
        self.statusBar().showMessage(f"Saved {os.path.basename(path)}", 5000)

    def _show_about(self):
        QMessageBox.about(
            self,
            f"About {APP_NAME}",
            f"<h3>{APP_NAME} v{APP_VERSION}</h3>"
            f"<p>Simulates and diagnoses p-value histograms: "
            f"anti-conservative, uniform, bimodal, conservative, sparse "
            f"and weird shapes.</p>"
            f"<p>This tool does not adjust p-values. Once the histogram "
            f"looks well behaved, apply a false discovery rate method "
            f"such as Benjamini-Hochberg or Storey-Tibshirani q-values.</p>",
        )
