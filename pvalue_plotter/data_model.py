"""
Data model for the P-Value Histogram Plotter.

Immutable dataclasses for collections of p-values.  A sample is built
once (by ``simulation`` or ``csv_parser``) and never mutated; chart
renderers receive it read-only.

Every p-value is a finite float in [0, 1].  ``PValueSample`` enforces
this at construction so renderers and diagnostics need no guards of
their own.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Dict

import numpy as np


@dataclass(frozen=True, eq=False)
class PValueSample:
    """One collection of p-values plotted as a single histogram.

    Parameters
    ----------
    key : str
        Short machine name, e.g. ``"anti_conservative"``.
    label : str
        Display name, e.g. ``"Anti-Conservative"``.
    pvalues : numpy.ndarray
        1-D float array.  Stored as a read-only copy.
    description : str
        How the values were produced.
    source : str
        ``"simulated"`` or the path of the file the values came from.
    """
    key: str
    label: str
    pvalues: np.ndarray
    description: str = ""
    source: str = "simulated"

    def __post_init__(self):
        arr = np.array(self.pvalues, dtype=float).ravel()
        if arr.size == 0:
            raise ValueError(f"Sample '{self.label}' contains no p-values.")
        if not np.all(np.isfinite(arr)):
            raise ValueError(
                f"Sample '{self.label}' contains non-finite p-values."
            )
        if arr.min() < 0.0 or arr.max() > 1.0:
            raise ValueError(
                f"Sample '{self.label}' has p-values outside [0, 1] "
                f"(min {arr.min():.4g}, max {arr.max():.4g})."
            )
        arr.setflags(write=False)
        object.__setattr__(self, 'pvalues', arr)

    @property
    def n_tests(self) -> int:
        return int(self.pvalues.size)

    @property
    def n_unique(self) -> int:
        return int(np.unique(self.pvalues).size)


@dataclass(frozen=True)
class PValueCollection:
    """Ordered set of samples shown together (one overview figure).

    Parameters
    ----------
    samples : list of PValueSample
        In display order.
    source_files : dict
        Mapping of sample label to file path for loaded data; empty for
        simulated collections.
    """
    samples: List[PValueSample]
    source_files: Dict[str, str] = field(default_factory=dict)

    @property
    def labels(self) -> List[str]:
        return [s.label for s in self.samples]

    def get(self, name: str) -> Optional[PValueSample]:
        """Return the sample whose key or label is *name*, else ``None``."""
        for sample in self.samples:
            if name in (sample.key, sample.label):
                return sample
        return None

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self):
        return iter(self.samples)


@dataclass(frozen=True)
class Diagnosis:
    """Result of ``diagnostics.diagnose`` for one sample.

    Parameters
    ----------
    shape : str
        One of the six shape labels, e.g. ``"Bimodal"``.
    ks_statistic, ks_pvalue : float
        Kolmogorov-Smirnov test against Uniform(0, 1).
    pi0 : float
        Storey estimate of the fraction of true nulls, in [0, 1].
    n_tests, n_unique : int
        Number of p-values and of distinct p-values.
    densities : tuple of float
        Per-bin count divided by the flat expectation ``m / bins``.
    advice : str
        What the shape suggests doing next.
    """
    shape: str
    ks_statistic: float
    ks_pvalue: float
    pi0: float
    n_tests: int
    n_unique: int
    densities: tuple
    advice: str

    def summary(self) -> str:
        """One-line summary used by the status bar and batch export."""
        return (
            f"{self.shape}: m={self.n_tests}, unique={self.n_unique}, "
            f"KS p={self.ks_pvalue:.3g}, pi0={self.pi0:.3f}"
        )
