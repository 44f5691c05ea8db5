"""
Pairwise correlation engine for numeric survey columns.

Correlations use the sum-based Pearson formula. Pairs where either column is
constant are reported with a coefficient of 0 rather than dropped.
"""

import itertools
import logging
from typing import Dict, List, Sequence

import numpy as np

from ..data_processing.models import CorrelationPair


def correlate(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Pearson correlation of two equally long sequences.

    Returns 0.0 when either sequence has zero variance.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)

    if len(x) != len(y):
        raise ValueError(f"Cannot correlate sequences of length {len(x)} and {len(y)}")

    n = len(x)
    if n == 0 or x.min() == x.max() or y.min() == y.max():
        return 0.0

    sum_x = x.sum()
    sum_y = y.sum()
    sum_xy = (x * y).sum()
    sum_x2 = (x * x).sum()
    sum_y2 = (y * y).sum()

    numerator = n * sum_xy - sum_x * sum_y
    variance_product = (n * sum_x2 - sum_x * sum_x) * (n * sum_y2 - sum_y * sum_y)

    if variance_product <= 0:
        return 0.0

    value = numerator / np.sqrt(variance_product)
    return float(np.clip(value, -1.0, 1.0))


class CorrelationEngine:
    """
    Correlation analysis across the numeric columns of a survey.

    Every unordered pair is reported once, ordered by header position. The
    work is O(k^2 * n) for k numeric columns, which is fine at survey scale.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def compute_correlations(self, columns: Dict[str, Sequence[float]]) -> List[CorrelationPair]:
        """
        Compute correlations between all pairs of numeric columns.

        Parameters
        ----------
        columns : dict
            Column name to numeric values, in header order

        Returns
        -------
        list of CorrelationPair
            One entry per unordered pair
        """
        names = list(columns)
        if len(names) < 2:
            self.logger.debug("Fewer than 2 numeric columns; no correlations computed")
            return []

        variable_pairs = list(itertools.combinations(names, 2))
        self.logger.info(f"Computing {len(variable_pairs)} correlations")

        results = []
        for var1, var2 in variable_pairs:
            value = correlate(columns[var1], columns[var2])
            if value == 0.0:
                self.logger.debug(f"Correlation between {var1} and {var2} is 0 (constant column)")
            results.append(CorrelationPair(columns=(var1, var2), value=value))

        return results
