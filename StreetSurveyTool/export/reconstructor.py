"""
Export of aggregated survey results back to delimited text.

The reconstruction is lossy. Categorical columns are expanded into
contiguous blocks that reproduce their stored counts exactly. Numeric columns
are replaced by a synthetic, monotonically stepping sequence that walks the
histogram's bin boundaries; it does not recover the original responses.
"""

import logging
import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Dict, List, Optional

from ..config import AnalyzerConfig
from ..data_processing.exceptions import InconsistentTotalsError
from ..data_processing.models import (
    AnalysisResult, CategoricalDistribution, Distribution, NumericDistribution
)


class InverseReconstructor:
    """
    Regenerate a representative table from an AnalysisResult.

    The number of output rows is the largest total over all columns, not the
    result's ``total_respondents``. Categorical columns whose own total is
    smaller produce empty cells once their categories are exhausted, unless
    ``require_consistent_totals`` is set, in which case mismatched totals are
    an error.
    """

    def __init__(self, config: Optional[AnalyzerConfig] = None):
        self.config = config or AnalyzerConfig()
        self.logger = logging.getLogger(__name__)

    def reconstruct(self, result: AnalysisResult) -> str:
        """
        Render ``result`` as delimited text.

        Parameters
        ----------
        result : AnalysisResult
            Result to export, computed locally or decoded from a published payload

        Returns
        -------
        str
            Header line followed by one line per reconstructed response
        """
        rows = self.reconstruct_rows(result)
        delimiter = self.config.delimiter
        return '\n'.join(delimiter.join(row) for row in rows)

    def reconstruct_rows(self, result: AnalysisResult) -> List[List[str]]:
        """Header row followed by reconstructed cell rows."""
        distributions = result.column_distributions
        if not distributions:
            return []

        totals = column_totals(result)
        if len(set(totals.values())) > 1:
            if self.config.require_consistent_totals:
                raise InconsistentTotalsError(totals)
            self.logger.warning(f"Column totals differ; padding shorter columns: {totals}")

        max_responses = max(totals.values())
        self.logger.info(
            f"Reconstructing {max_responses} rows for {len(distributions)} columns"
        )

        rows = [[name for name, _ in distributions]]
        for i in range(max_responses):
            rows.append([self.reconstruct_cell(dist, i, max_responses)
                         for _, dist in distributions])
        return rows

    def reconstruct_cell(self, distribution: Distribution, index: int, max_responses: int) -> str:
        """Value of one column at row ``index`` of the reconstructed table."""
        if isinstance(distribution, NumericDistribution):
            histogram = distribution.histogram
            rows_per_bin = max_responses / len(histogram.bins)
            value = distribution.minimum + histogram.bin_size * math.floor(index / rows_per_bin)
            return format_fixed(value, self.config.export_decimals)

        elif isinstance(distribution, CategoricalDistribution):
            cumulative = 0
            for category, count in distribution.counts:
                cumulative += count
                if index < cumulative:
                    return category
            return ''

        else:
            raise TypeError(f"Unsupported distribution: {type(distribution).__name__}")


def format_fixed(value: float, decimals: int) -> str:
    """
    Fixed-point text for ``value`` with ties rounded away from zero.

    Rounding works on the exact binary value of the float, so 0.25 becomes
    ``0.3`` and 1.25 becomes ``1.3``.
    """
    if value == 0:
        value = 0.0
    exact = Decimal(value)
    context = Context(prec=max(28, exact.adjusted() + decimals + 2))
    rounded = exact.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP, context=context)
    return f"{rounded:f}"


def column_total(distribution: Distribution) -> int:
    """Number of responses a distribution accounts for."""
    if isinstance(distribution, NumericDistribution):
        return sum(distribution.histogram.bins)
    elif isinstance(distribution, CategoricalDistribution):
        return sum(count for _, count in distribution.counts)
    else:
        raise TypeError(f"Unsupported distribution: {type(distribution).__name__}")


def column_totals(result: AnalysisResult) -> Dict[str, int]:
    return {name: column_total(dist) for name, dist in result.column_distributions}
