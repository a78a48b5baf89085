"""Built-in sample data sets for the plotting screen.

Each sample is a list of JSON-style records ``{name, x?, y?, value?,
category?}`` matching one chart type:

- SAMPLE_VOLCANO_DATA: 100 genes, x = log2 fold change, y = -log10 p-value
- SAMPLE_EXPRESSION_DATA: control vs treated expression (bar chart)
- SAMPLE_GROWTH_DATA: optical density over time (line chart)
"""

from copy import deepcopy

import numpy as np

from ..core import ChartType

VOLCANO_SEED = 42
SIGNIFICANT_FOLD_CHANGE = 2.0
SIGNIFICANT_NEG_LOG10_P = 1.3


def make_volcano_sample(n_genes: int = 100, seed: int = VOLCANO_SEED) -> list[dict]:
    """Generate a volcano plot sample.

    Fold changes are uniform in [-5, 5) and p-values uniform in (0, 0.1),
    so the set skews towards significance. A gene is "Significant" when
    |log2FC| > 2 and -log10(p) > 1.3.

    Parameters
    ----------
    n_genes : int, default=100
        Number of genes
    seed : int
        RNG seed, so the sample is the same across sessions

    Returns
    -------
    list[dict]
        Records with name, x, y and category
    """
    rng = np.random.default_rng(seed)
    log2_fold_change = rng.random(n_genes) * 10 - 5
    p_value = np.maximum(rng.random(n_genes) * 0.1, np.finfo(float).tiny)
    neg_log10_p = -np.log10(p_value)

    points = []
    for i in range(n_genes):
        x = round(float(log2_fold_change[i]), 2)
        y = round(float(neg_log10_p[i]), 2)
        significant = abs(x) > SIGNIFICANT_FOLD_CHANGE and y > SIGNIFICANT_NEG_LOG10_P
        points.append({
            "name": f"Gene_{i}",
            "x": x,
            "y": y,
            "category": "Significant" if significant else "Not Significant",
        })
    return points


SAMPLE_VOLCANO_DATA: list[dict] = make_volcano_sample()

SAMPLE_EXPRESSION_DATA: list[dict] = [
    {"name": "Control 1", "value": 120, "category": "Control"},
    {"name": "Control 2", "value": 132, "category": "Control"},
    {"name": "Control 3", "value": 101, "category": "Control"},
    {"name": "Treated 1", "value": 450, "category": "Treated"},
    {"name": "Treated 2", "value": 480, "category": "Treated"},
    {"name": "Treated 3", "value": 430, "category": "Treated"},
]

SAMPLE_GROWTH_DATA: list[dict] = [
    {"name": "0h", "value": 0.1},
    {"name": "2h", "value": 0.15},
    {"name": "4h", "value": 0.3},
    {"name": "6h", "value": 0.8},
    {"name": "8h", "value": 1.5},
    {"name": "10h", "value": 2.1},
    {"name": "12h", "value": 2.3},
]

_SAMPLES = {
    ChartType.SCATTER: SAMPLE_VOLCANO_DATA,
    ChartType.BAR: SAMPLE_EXPRESSION_DATA,
    ChartType.LINE: SAMPLE_GROWTH_DATA,
}


def get_sample_data(chart_type: ChartType | str) -> list[dict]:
    """Get a copy of the built-in sample for a chart type."""
    return deepcopy(_SAMPLES[ChartType(chart_type)])
