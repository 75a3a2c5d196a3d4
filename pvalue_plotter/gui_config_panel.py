"""
Configuration panel (left side) for the P-Value Histogram Plotter.

Simulation parameters, histogram options, CSV loading, sample
selection, and the Regenerate / Export buttons.
"""

import os

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QFormLayout, QGroupBox, QLabel,
    QPushButton, QComboBox, QCheckBox, QSpinBox, QDoubleSpinBox,
    QFileDialog, QMessageBox,
)
from PySide6.QtCore import Signal

from .constants import (
    DARK_COLORS, BIN_OPTIONS,
    DEFAULT_N_TESTS, DEFAULT_N_PER_GROUP, DEFAULT_NULL_FRACTION,
    DEFAULT_EFFECT_SIZE, DEFAULT_SEED, DEFAULT_BINS, DEFAULT_ALPHA,
)
from .csv_parser import load_pvalue_csv
from .data_model import PValueCollection
from .simulation import SimulationConfig, simulate_all


class ConfigPanel(QWidget):
    """Left-side panel holding the data source and plot options."""

    config_changed = Signal()
    collection_loaded = Signal(object)  # emits PValueCollection or None

    def __init__(self, parent=None):
        super().__init__(parent)
        self._collection = None
        self._setup_ui()
        self._connect_signals()

    # ── UI setup ─────────────────────────────────────────────────────

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)
        layout.setSpacing(8)

        # ── Group 1: Simulation ──────────────────────────────────────
        grp_sim = QGroupBox("Simulated Scenarios")
        sim_layout = QFormLayout(grp_sim)
        sim_layout.setSpacing(4)

        self._spn_tests = QSpinBox()
        self._spn_tests.setRange(100, 200000)
        self._spn_tests.setSingleStep(1000)
        self._spn_tests.setValue(DEFAULT_N_TESTS)
        sim_layout.addRow("Tests per scenario:", self._spn_tests)

        self._spn_group = QSpinBox()
        self._spn_group.setRange(2, 200)
        self._spn_group.setValue(DEFAULT_N_PER_GROUP)
        sim_layout.addRow("Samples per group:", self._spn_group)

        self._spn_null = QDoubleSpinBox()
        self._spn_null.setRange(0.0, 1.0)
        self._spn_null.setSingleStep(0.05)
        self._spn_null.setDecimals(2)
        self._spn_null.setValue(DEFAULT_NULL_FRACTION)
        self._spn_null.setToolTip("Share of tests whose null hypothesis is true")
        sim_layout.addRow("Null fraction:", self._spn_null)

        self._spn_effect = QDoubleSpinBox()
        self._spn_effect.setRange(0.0, 5.0)
        self._spn_effect.setSingleStep(0.1)
        self._spn_effect.setDecimals(2)
        self._spn_effect.setValue(DEFAULT_EFFECT_SIZE)
        self._spn_effect.setToolTip("Mean shift of non-null tests, in SD units")
        sim_layout.addRow("Effect size:", self._spn_effect)

        self._spn_seed = QSpinBox()
        self._spn_seed.setRange(0, 2 ** 31 - 1)
        self._spn_seed.setValue(DEFAULT_SEED)
        sim_layout.addRow("Seed:", self._spn_seed)

        self._btn_simulate = QPushButton("Simulate")
        sim_layout.addRow(self._btn_simulate)

        layout.addWidget(grp_sim)

        # ── Group 2: Load Data ───────────────────────────────────────
        grp_files = QGroupBox("Your P-Values")
        files_layout = QVBoxLayout(grp_files)
        files_layout.setSpacing(4)

        self._btn_load_csv = QPushButton("Load CSV...")
        self._btn_load_csv.setToolTip(
            "One column of p-values, or two columns 'label, p_value'"
        )
        files_layout.addWidget(self._btn_load_csv)

        self._lbl_status = QLabel("")
        self._lbl_status.setStyleSheet(
            f"color: {DARK_COLORS['fg_dim']}; font-size: 11px;"
        )
        self._lbl_status.setWordWrap(True)
        files_layout.addWidget(self._lbl_status)

        layout.addWidget(grp_files)

        # ── Group 3: Histogram ───────────────────────────────────────
        grp_hist = QGroupBox("Histogram")
        hist_layout = QFormLayout(grp_hist)
        hist_layout.setSpacing(4)

        self._cmb_bins = QComboBox()
        self._cmb_bins.addItems([str(b) for b in BIN_OPTIONS])
        self._cmb_bins.setCurrentText(str(DEFAULT_BINS))
        hist_layout.addRow("Bins:", self._cmb_bins)

        self._spn_alpha = QDoubleSpinBox()
        self._spn_alpha.setRange(0.001, 0.5)
        self._spn_alpha.setSingleStep(0.01)
        self._spn_alpha.setDecimals(3)
        self._spn_alpha.setValue(DEFAULT_ALPHA)
        hist_layout.addRow("alpha:", self._spn_alpha)

        self._chk_pi0 = QCheckBox("Show null level (pi0)")
        self._chk_pi0.setChecked(True)
        hist_layout.addRow(self._chk_pi0)

        layout.addWidget(grp_hist)

        # ── Group 4: Sample Selection ────────────────────────────────
        grp_sample = QGroupBox("Sample")
        sample_layout = QVBoxLayout(grp_sample)
        self._cmb_sample = QComboBox()
        self._cmb_sample.addItem("(simulate or load data first)")
        self._cmb_sample.setEnabled(False)
        sample_layout.addWidget(self._cmb_sample)
        layout.addWidget(grp_sample)

        # ── Actions ──────────────────────────────────────────────────
        c = DARK_COLORS
        self._btn_export_all = QPushButton("Export All Charts...")
        self._btn_export_all.setStyleSheet(
            f"QPushButton {{ background-color: {c['accent']}; "
            f"color: {c['bg']}; font-weight: bold; "
            f"font-size: 13px; padding: 8px; }}"
            f"QPushButton:hover {{ background-color: {c['accent_hover']}; }}"
            f"QPushButton:disabled {{ background-color: {c['bg']}; "
            f"color: {c['fg_dim']}; }}"
        )
        self._btn_export_all.setEnabled(False)
        layout.addWidget(self._btn_export_all)

        layout.addStretch()

    # ── Signal connections ───────────────────────────────────────────

    def _connect_signals(self):
        self._btn_simulate.clicked.connect(lambda *_: self.simulate())
        self._btn_load_csv.clicked.connect(lambda *_: self.load_csv())

        # Absorb each signal's argument; config_changed carries none.
        self._cmb_bins.currentIndexChanged.connect(
            lambda *_: self.config_changed.emit()
        )
        self._spn_alpha.valueChanged.connect(
            lambda *_: self.config_changed.emit()
        )
        self._chk_pi0.toggled.connect(
            lambda *_: self.config_changed.emit()
        )

    # ── Data sources ─────────────────────────────────────────────────

    def simulation_config(self) -> SimulationConfig:
        return SimulationConfig(
            n_tests=self._spn_tests.value(),
            n_per_group=self._spn_group.value(),
            null_fraction=self._spn_null.value(),
            effect_size=self._spn_effect.value(),
            seed=self._spn_seed.value(),
        )

    def simulate(self):
        """Run all six scenarios with the current parameters."""
        try:
            collection = simulate_all(self.simulation_config())
        except ValueError as exc:
            QMessageBox.critical(self, "Simulation Error", str(exc))
            return
        self._set_collection(
            collection,
            f"Simulated {len(collection)} scenarios, "
            f"{self._spn_tests.value():,} tests each",
        )

    def load_csv(self, path: str = None):
        """Load p-values from *path*, asking for a file when omitted."""
        if path is None:
            path, _ = QFileDialog.getOpenFileName(
                self, "Select P-Value File",
                "", "CSV Files (*.csv *.txt *.tsv);;All Files (*)",
            )
            if not path:
                return
        try:
            collection = load_pvalue_csv(path)
        except (ValueError, FileNotFoundError, OSError) as exc:
            self._lbl_status.setText(f"Error: {exc}")
            self._lbl_status.setStyleSheet(
                f"color: {DARK_COLORS['red']}; font-size: 11px;"
            )
            QMessageBox.critical(self, "Data Load Error", str(exc))
            return
        n_values = sum(s.n_tests for s in collection)
        self._set_collection(
            collection,
            f"Loaded {os.path.basename(path)}: {len(collection)} sample(s), "
            f"{n_values:,} p-values",
        )

    def _set_collection(self, collection: PValueCollection, status: str):
        self._collection = collection

        # Keep the selected sample if it still exists
        prev_text = self._cmb_sample.currentText()
        self._cmb_sample.blockSignals(True)
        self._cmb_sample.clear()
        self._cmb_sample.addItems(collection.labels)
        idx = self._cmb_sample.findText(prev_text)
        if idx >= 0:
            self._cmb_sample.setCurrentIndex(idx)
        self._cmb_sample.blockSignals(False)
        self._cmb_sample.setEnabled(True)

        self._lbl_status.setText(status)
        self._lbl_status.setStyleSheet(
            f"color: {DARK_COLORS['green']}; font-size: 11px;"
        )
        self._btn_export_all.setEnabled(True)
        self.collection_loaded.emit(collection)

    # ── Public API ───────────────────────────────────────────────────

    def get_config(self) -> dict:
        """Return current plot options as a dict for chart renderers."""
        return {
            'bins': int(self._cmb_bins.currentText()),
            'alpha': self._spn_alpha.value(),
            'show_pi0': self._chk_pi0.isChecked(),
            'selected_sample': self._cmb_sample.currentText(),
        }

    def get_collection(self) -> PValueCollection:
        """Return the current collection, or ``None``."""
        return self._collection

    @property
    def export_all_button(self) -> QPushButton:
        return self._btn_export_all

    @property
    def sample_combo(self) -> QComboBox:
        return self._cmb_sample
