"""
Constants for the P-Value Histogram Plotter.

Centralises colour palettes, font families, default simulation
parameters, shape-classification thresholds, and export settings.
"""

# ── Font family fallback chain ───────────────────────────────────────────
FONT_FAMILIES = [
    "Segoe UI", "DejaVu Sans", "Liberation Sans", "Noto Sans",
    "Ubuntu", "Helvetica", "Arial", "sans-serif",
]

# ── Dark Catppuccin-inspired GUI colour palette ──────────────────────────
DARK_COLORS = {
    'bg':           '#1e1e2e',
    'bg_alt':       '#252536',
    'bg_widget':    '#2a2a3c',
    'bg_input':     '#333348',
    'fg':           '#cdd6f4',
    'fg_dim':       '#9399b2',
    'fg_bright':    '#ffffff',
    'accent':       '#89b4fa',
    'accent_hover': '#74c7ec',
    'green':        '#a6e3a1',
    'red':          '#f38ba8',
    'border':       '#45475a',
    'selection':    '#45475a',
}

# ── Histogram plot palette ───────────────────────────────────────────────
PLOT_PALETTE = {
    'bar':            '#4472C4',   # p-values above alpha
    'bar_signif':     '#C00000',   # p-values below alpha
    'null_line':      '#333333',   # pi0 * m / bins reference level
    'alpha_line':     '#ED7D31',
    'identity_line':  '#7F7F7F',   # Q-Q reference
    'qq_points':      '#0033A1',
}

# Shape label → accent colour used for overview facet titles
SHAPE_COLORS = {
    'Anti-Conservative': '#70AD47',
    'Uniform':           '#4472C4',
    'Bimodal':           '#7030A0',
    'Conservative':      '#ED7D31',
    'Sparse':            '#BF8F00',
    'Weird':             '#C00000',
}

# ── Default simulation parameters ────────────────────────────────────────
DEFAULT_N_TESTS = 10000
DEFAULT_N_PER_GROUP = 10
DEFAULT_NULL_FRACTION = 0.8
DEFAULT_EFFECT_SIZE = 1.0
DEFAULT_SEED = 42

# Scenario-specific knobs
CONSERVATIVE_PAIR_CORRELATION = 0.8
SPARSE_GROUP_SIZE = 3
WEIRD_GROUP_SIZE = 3
WEIRD_LOG_SIGMA = 3.0

# ── Histogram / diagnostic defaults ──────────────────────────────────────
DEFAULT_BINS = 20
DEFAULT_ALPHA = 0.05
DEFAULT_PI0_LAMBDA = 0.5
BIN_OPTIONS = [10, 20, 40, 50, 100]

# Shape classification thresholds, expressed as bin density relative to
# the flat (uniform) expectation of m / bins.
KS_UNIFORM_ALPHA = 0.01
PEAK_DENSITY_RATIO = 1.5
FLAT_TOLERANCE = 0.30

# ── Export / light-theme text colours ────────────────────────────────────
EXPORT_TEXT_COLOR = '#333333'
EXPORT_BG_COLOR = '#ffffff'

# ── Export settings ──────────────────────────────────────────────────────
EXPORT_DPI = 600
EXPORT_WIDTH_INCHES = 6.0
CLIPBOARD_DPI = 150
PVALUES_CSV_NAME = "pvalues.csv"

# ── Matplotlib dark-theme style dict (GUI preview) ──────────────────────
PLOT_STYLE_DARK = {
    'figure.facecolor':  DARK_COLORS['bg_alt'],
    'axes.facecolor':    DARK_COLORS['bg_widget'],
    'axes.edgecolor':    DARK_COLORS['border'],
    'axes.labelcolor':   DARK_COLORS['fg'],
    'text.color':        DARK_COLORS['fg'],
    'xtick.color':       DARK_COLORS['fg_dim'],
    'ytick.color':       DARK_COLORS['fg_dim'],
    'xtick.labelsize':   7,
    'ytick.labelsize':   7,
    'axes.labelsize':    8,
    'axes.titlesize':    9,
    'legend.fontsize':   6.5,
    'grid.color':        DARK_COLORS['border'],
    'legend.facecolor':  DARK_COLORS['bg_widget'],
    'legend.edgecolor':  DARK_COLORS['border'],
}

# ── Matplotlib light-theme style dict (export) ──────────────────────────
PLOT_STYLE_LIGHT = {
    'figure.facecolor':  '#ffffff',
    'axes.facecolor':    '#ffffff',
    'axes.edgecolor':    '#333333',
    'axes.labelcolor':   '#1a1a2e',
    'text.color':        '#1a1a2e',
    'xtick.color':       '#333333',
    'ytick.color':       '#333333',
    'xtick.labelsize':   7,
    'ytick.labelsize':   7,
    'axes.labelsize':    8,
    'axes.titlesize':    9,
    'legend.fontsize':   6.5,
    'grid.color':        '#cccccc',
    'legend.facecolor':  '#ffffff',
    'legend.edgecolor':  '#999999',
}
