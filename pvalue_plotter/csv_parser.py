"""
CSV parser for the P-Value Histogram Plotter.

Loads p-values from a delimited text file into a ``PValueCollection``.
Two layouts are accepted:

- one column of p-values (a single sample named after the file);
- two columns ``label, p_value`` in long form, one sample per label,
  as written by ``export.export_pvalues_csv``.

Handles:

- Auto-detected delimiters (tab → semicolon → comma), ignoring quoted text
- European locale decimal-comma parsing
- UTF-8 BOM markers, blank lines and ``#`` comments
- An optional header row
"""

import csv
import math
import os
import re
import warnings
from collections import OrderedDict
from typing import List

from .data_model import PValueSample, PValueCollection


# ── Locale-safe float parsing ────────────────────────────────────────────

def _locale_float(text: str) -> float:
    """Parse a numeric string that may use comma as decimal separator.

    Handles ``"0.031"``, ``"0,031"`` and scientific notation such as
    ``"1.2e-05"``.  Raises ``ValueError`` for non-numeric or non-finite
    strings.
    """
    s = text.strip()
    if not s:
        raise ValueError("empty string")
    if ',' in s and '.' not in s:
        s = s.replace(',', '.')
    result = float(s)
    if not math.isfinite(result):
        raise ValueError(f"non-finite value: {text.strip()!r}")
    return result


# ── Delimiter auto-detection ─────────────────────────────────────────────

_QUOTED = re.compile(r'"[^"]*"')


def _detect_delimiter(sample_line: str) -> str:
    """Detect the field delimiter of one line.

    Priority: tab → semicolon → comma.  Semicolons come before commas
    because European files pair them with decimal commas.  Text inside
    double quotes is ignored, so a label like ``"Batch; run 2"`` does
    not decide the delimiter.
    """
    unquoted = _QUOTED.sub('', sample_line)
    if '\t' in unquoted:
        return '\t'
    if ';' in unquoted:
        return ';'
    return ','


def _smart_split_line(line: str) -> List[str]:
    """Split *line* on its detected delimiter, honouring quotes.

    A bare decimal comma (``"0,5"``) comes back as two fields;
    ``_merge_decimal_comma`` rejoins it.
    """
    delimiter = _detect_delimiter(line)
    rows = list(csv.reader([line], delimiter=delimiter))
    if rows:
        return [t.strip() for t in rows[0]]
    return []


def _read_lines(filepath: str) -> List[tuple]:
    """Return ``(line_number, text)`` for non-blank, non-comment lines."""
    lines = []
    with open(filepath, 'r', encoding='utf-8-sig') as fh:
        for line_no, line in enumerate(fh, start=1):
            stripped = line.rstrip('\n\r')
            if stripped.strip() == '' or stripped.strip().startswith('#'):
                continue
            lines.append((line_no, stripped))
    return lines


def _merge_decimal_comma(tokens: List[str], delimiter: str) -> List[str]:
    """Rejoin a decimal comma that a comma split tore apart.

    ``"0,031"`` comes back as ``['0', '031']`` and ``"1,5e-03"`` as
    ``['1', '5e-03']``.  Two comma-split tokens whose first part is an
    integer and whose rejoined form parses as a number are one value.
    """
    if delimiter != ',' or len(tokens) != 2:
        return tokens
    whole, frac = tokens
    if not whole.lstrip('+-').isdigit() or not frac[:1].isdigit() or '.' in frac:
        return tokens
    try:
        _locale_float(f"{whole}.{frac}")
    except ValueError:
        return tokens
    return [f"{whole}.{frac}"]


def _split_value_line(line: str) -> List[str]:
    return _merge_decimal_comma(_smart_split_line(line), _detect_delimiter(line))


def _unique_key(label: str, taken: set) -> str:
    """Machine key for *label*, suffixed ``_2``, ``_3`` ... if already used."""
    base = label.lower().replace(' ', '_')
    key, n = base, 1
    while key in taken:
        n += 1
        key = f"{base}_{n}"
    taken.add(key)
    return key


def _is_header(tokens: List[str]) -> bool:
    try:
        _locale_float(tokens[-1])
    except ValueError:
        return True
    return False


# ── Public loader ────────────────────────────────────────────────────────

def load_pvalue_csv(filepath: str) -> PValueCollection:
    """Load p-values from *filepath*.

    Returns
    -------
    PValueCollection
        One sample per label (long form) or a single sample.

    Raises
    ------
    FileNotFoundError
        If *filepath* does not exist.
    ValueError
        If a value lies outside [0, 1] or no usable value is found.
    """
    if not os.path.isfile(filepath):
        raise FileNotFoundError(f"P-value file not found: {filepath}")

    basename = os.path.basename(filepath)
    stem = os.path.splitext(basename)[0]
    lines = _read_lines(filepath)
    if not lines:
        raise ValueError(f"'{basename}' contains no data.")

    first_tokens = _split_value_line(lines[0][1])
    if first_tokens and _is_header(first_tokens):
        lines = lines[1:]

    groups = OrderedDict()
    bad_tokens: List[str] = []
    out_of_range: List[str] = []

    for line_no, raw_line in lines:
        tokens = _split_value_line(raw_line)
        if not tokens or not tokens[-1]:
            continue
        if len(tokens) > 2:
            warnings.warn(
                f"Line {line_no} in '{basename}' has {len(tokens)} columns, "
                f"expected 1 or 2 (label, p_value). Skipping.",
                stacklevel=2,
            )
            continue
        label = tokens[0] if len(tokens) >= 2 and tokens[0] else stem
        cell = tokens[-1]
        try:
            value = _locale_float(cell)
        except ValueError:
            bad_tokens.append(f"line {line_no}: '{cell}'")
            continue
        if not 0.0 <= value <= 1.0:
            out_of_range.append(f"line {line_no}: {value:g}")
            continue
        groups.setdefault(label, []).append(value)

    if out_of_range:
        detail = "; ".join(out_of_range[:10])
        if len(out_of_range) > 10:
            detail += f" ... and {len(out_of_range) - 10} more"
        raise ValueError(
            f"'{basename}' contains values outside [0, 1], which cannot "
            f"be p-values: {detail}"
        )

    if bad_tokens:
        detail = "; ".join(bad_tokens[:10])
        if len(bad_tokens) > 10:
            detail += f" ... and {len(bad_tokens) - 10} more"
        warnings.warn(
            f"Non-numeric values in '{basename}': {detail}. "
            f"These cells were skipped.",
            stacklevel=2,
        )

    if not groups:
        raise ValueError(f"No valid p-values found in '{basename}'.")

    taken = set()
    samples = [
        PValueSample(
            key=_unique_key(label, taken),
            label=label,
            pvalues=values,
            description=f"Loaded from {basename}",
            source=filepath,
        )
        for label, values in groups.items()
    ]
    return PValueCollection(
        samples=samples,
        source_files={s.label: filepath for s in samples},
    )
