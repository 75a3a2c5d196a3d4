"""
Entry point for the P-Value Histogram Plotter.

Usage:
    python -m pvalue_plotter                 # desktop GUI
    python -m pvalue_plotter --export DIR    # headless batch export
"""

import argparse
import os
import sys
import traceback


def _check_dependencies(gui: bool = True):
    """Verify required packages are installed."""
    required = ["numpy", "scipy", "matplotlib"]
    if gui:
        required.insert(0, "PySide6")
    missing = []
    for name in required:
        try:
            __import__(name)
        except ImportError:
            missing.append(name)

    if missing:
        print(
            f"Missing required packages: {', '.join(missing)}\n"
            f"Install with: pip install {' '.join(missing)}",
            file=sys.stderr,
        )
        sys.exit(1)


def _exception_hook(exc_type, exc_value, exc_tb):
    """Global exception handler to prevent silent crashes."""
    msg = ''.join(traceback.format_exception(exc_type, exc_value, exc_tb))
    print(f"Unhandled exception:\n{msg}", file=sys.stderr)

    try:
        from PySide6.QtWidgets import QMessageBox, QApplication
    except ImportError:
        return
    if QApplication.instance() is not None:
        QMessageBox.critical(
            None, "Unhandled Error",
            f"An unexpected error occurred:\n\n"
            f"{exc_type.__name__}: {exc_value}\n\n"
            f"See console for full traceback.",
        )


def _build_parser() -> argparse.ArgumentParser:
    from .constants import DEFAULT_SEED, DEFAULT_N_TESTS, DEFAULT_BINS

    parser = argparse.ArgumentParser(
        prog="pvalue_plotter",
        description="Simulate, plot and diagnose p-value histograms.",
    )
    parser.add_argument(
        "--export", metavar="DIR",
        help="write all charts and pvalues.csv to DIR without opening the GUI",
    )
    parser.add_argument(
        "--input", metavar="CSV",
        help="plot p-values from CSV instead of the simulated scenarios",
    )
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED)
    parser.add_argument("--n-tests", type=int, default=DEFAULT_N_TESTS)
    parser.add_argument("--bins", type=int, default=DEFAULT_BINS)
    return parser


def run_export(args) -> int:
    """Headless batch export.  Returns the process exit code."""
    import matplotlib
    matplotlib.use('Agg')

    from .constants import PVALUES_CSV_NAME
    from .csv_parser import load_pvalue_csv
    from .diagnostics import diagnose
    from .export import build_all_figures, export_all_charts, export_pvalues_csv
    from .simulation import SimulationConfig, simulate_all

    try:
        if args.input:
            collection = load_pvalue_csv(args.input)
        else:
            collection = simulate_all(
                SimulationConfig(n_tests=args.n_tests, seed=args.seed)
            )
        figures = build_all_figures(collection, bins=args.bins)
        paths = export_all_charts(figures, args.export)
        paths.append(export_pvalues_csv(
            collection, os.path.join(args.export, PVALUES_CSV_NAME)
        ))
    except (ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for sample in collection:
        print(f"{sample.label:<18} {diagnose(sample, args.bins).summary()}")
    print(f"Wrote {len(paths)} files to {args.export}")
    return 0


def main(argv=None):
    """Launch the GUI, or run a batch export when ``--export`` is given."""
    args = _build_parser().parse_args(argv)
    _check_dependencies(gui=args.export is None)

    sys.excepthook = _exception_hook

    if args.export:
        sys.exit(run_export(args))

    # Configure matplotlib backend before importing Qt widgets
    os.environ.setdefault("QT_API", "pyside6")
    import matplotlib
    matplotlib.use('QtAgg')

    from PySide6.QtWidgets import QApplication
    from PySide6.QtGui import QFont, QFontDatabase

    from .constants import FONT_FAMILIES
    from .theme import get_dark_stylesheet
    from .gui_main import PlotterMainWindow

    app = QApplication(sys.argv[:1])
    app.setStyle("Fusion")

    font = QFont()
    for family in FONT_FAMILIES:
        if QFontDatabase.hasFamily(family):
            font.setFamily(family)
            break
    font.setPointSize(10)
    app.setFont(font)
    app.setStyleSheet(get_dark_stylesheet())

    window = PlotterMainWindow()
    if args.input:
        window.load_pvalues(args.input)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
