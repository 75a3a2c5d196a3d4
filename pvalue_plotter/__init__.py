"""
P-Value Histogram Plotter v1.0.0

Illustrative tool for reading the shape of a p-value histogram.
Simulates six textbook scenarios (anti-conservative, uniform, bimodal,
conservative, sparse, weird) by calling real two-sample tests, plots
their histograms, and diagnoses histograms of p-values loaded from CSV.

Charts export as 600 DPI PNG at 6-inch width for inclusion in articles
and reports.
"""

APP_NAME = "P-Value Histogram Plotter"
APP_VERSION = "1.0.0"
APP_DATE = "2026-10-18"
__version__ = APP_VERSION
