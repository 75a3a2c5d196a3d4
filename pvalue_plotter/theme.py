"""
Theme and stylesheet for the P-Value Histogram Plotter.

Dark Catppuccin Qt stylesheet for the GUI, plus a helper to push one of
the matplotlib style dicts from ``constants`` into ``rcParams``.
"""

from .constants import DARK_COLORS


def _rules(c: dict) -> dict:
    """Selector → declarations for every widget type the GUI uses."""
    return {
        "QMainWindow, QWidget": (
            f"background-color: {c['bg']}; color: {c['fg']}; font-size: 13px;"
        ),
        "QTabWidget::pane": (
            f"border: 1px solid {c['border']}; background-color: {c['bg']};"
        ),
        "QTabBar::tab": (
            f"background-color: {c['bg_alt']}; color: {c['fg_dim']}; "
            f"padding: 8px 16px; margin-right: 2px; "
            f"border: 1px solid {c['border']}; border-bottom: none; "
            f"border-top-left-radius: 4px; border-top-right-radius: 4px;"
        ),
        "QTabBar::tab:selected": (
            f"background-color: {c['bg_widget']}; color: {c['accent']}; "
            f"border-bottom: 2px solid {c['accent']};"
        ),
        "QGroupBox": (
            f"border: 1px solid {c['border']}; border-radius: 6px; "
            f"margin-top: 12px; padding-top: 16px; font-weight: bold; "
            f"color: {c['accent']};"
        ),
        "QGroupBox::title": (
            "subcontrol-origin: margin; left: 12px; padding: 0 6px;"
        ),
        "QPushButton": (
            f"background-color: {c['bg_widget']}; color: {c['fg']}; "
            f"border: 1px solid {c['border']}; border-radius: 4px; "
            f"padding: 6px 16px; min-height: 24px;"
        ),
        "QPushButton:hover": (
            f"background-color: {c['selection']}; border-color: {c['accent']};"
        ),
        "QPushButton:disabled": (
            f"color: {c['fg_dim']}; background-color: {c['bg']};"
        ),
        "QLineEdit, QSpinBox, QDoubleSpinBox, QComboBox": (
            f"background-color: {c['bg_input']}; color: {c['fg']}; "
            f"border: 1px solid {c['border']}; border-radius: 4px; "
            f"padding: 4px 8px; min-height: 22px;"
        ),
        "QComboBox QAbstractItemView": (
            f"background-color: {c['bg_widget']}; color: {c['fg']}; "
            f"selection-background-color: {c['selection']};"
        ),
        "QPlainTextEdit": (
            f"background-color: {c['bg_input']}; color: {c['fg']}; "
            f"border: 1px solid {c['border']}; border-radius: 4px;"
        ),
        "QCheckBox": f"color: {c['fg']}; spacing: 8px;",
        "QStatusBar": (
            f"background-color: {c['bg_alt']}; color: {c['fg_dim']}; "
            f"border-top: 1px solid {c['border']};"
        ),
        "QMenuBar": f"background-color: {c['bg_alt']}; color: {c['fg']};",
        "QMenu": (
            f"background-color: {c['bg_widget']}; color: {c['fg']}; "
            f"border: 1px solid {c['border']};"
        ),
        "QMenu::item:selected, QMenuBar::item:selected": (
            f"background-color: {c['selection']};"
        ),
        "QToolTip": (
            f"background-color: {c['bg_widget']}; color: {c['fg']}; "
            f"border: 1px solid {c['accent']}; padding: 6px;"
        ),
        "QSplitter::handle": f"background-color: {c['border']};",
        "QLabel": f"color: {c['fg']};",
    }


def get_dark_stylesheet() -> str:
    """Generate the dark mode Qt stylesheet."""
    return "\n".join(
        f"{selector} {{ {body} }}"
        for selector, body in _rules(DARK_COLORS).items()
    )


def apply_plot_style(style_dict: dict) -> None:
    """Apply a style dictionary to matplotlib rcParams.

    Parameters
    ----------
    style_dict : dict
        One of ``PLOT_STYLE_DARK`` or ``PLOT_STYLE_LIGHT``.
    """
    import matplotlib as mpl
    mpl.rcParams.update(style_dict)
