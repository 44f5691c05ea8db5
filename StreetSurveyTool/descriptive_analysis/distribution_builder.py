"""
Per-column distributions for survey data.

Numeric columns are summarized by average, median, range and an equal-width
histogram; boolean and categorical columns by a frequency table of their raw
values in first-seen order.
"""

import logging
from typing import Optional, Sequence

import numpy as np

from ..config import AnalyzerConfig
from ..data_processing.exceptions import EmptyColumnError
from ..data_processing.models import (
    CategoricalDistribution, ColumnType, Distribution, Histogram, NumericDistribution
)
from ..data_processing.type_inference import to_numbers


class DistributionBuilder:
    """
    Univariate summaries for survey columns, branching on column type.

    Features:
    - Average, median (lower-middle element for even counts), min and max
    - Fixed-width histograms with a guard for constant columns
    - Frequency tables that keep the raw values and their first-seen order
    """

    def __init__(self, config: Optional[AnalyzerConfig] = None):
        """
        Initialize the DistributionBuilder.

        Parameters
        ----------
        config : AnalyzerConfig, optional
            Supplies the histogram bin count. Defaults to ``AnalyzerConfig()``.
        """
        self.config = config or AnalyzerConfig()
        self.logger = logging.getLogger(__name__)

    def build(self,
              values: Sequence[str],
              column_type: ColumnType,
              column: str = '') -> Distribution:
        """
        Compute the distribution of one column.

        Parameters
        ----------
        values : sequence of str
            Raw cells of the column
        column_type : ColumnType
            Type assigned by the inferencer
        column : str, optional
            Column name, used in error messages

        Returns
        -------
        NumericDistribution or CategoricalDistribution
        """
        if len(values) == 0:
            raise EmptyColumnError(column)

        if column_type is ColumnType.NUMERIC:
            return self.numeric_distribution(to_numbers(values))
        elif column_type in (ColumnType.BOOLEAN, ColumnType.CATEGORICAL):
            return self.categorical_distribution(values, column_type)
        else:
            raise TypeError(f"Unsupported column type: {column_type!r}")

    def numeric_distribution(self, numbers: np.ndarray) -> NumericDistribution:
        """Summary statistics and histogram of numeric values."""
        numbers = np.asarray(numbers, dtype=float)
        ordered = np.sort(numbers)

        average = float(numbers.sum() / len(numbers))
        median = float(ordered[(len(ordered) - 1) // 2])

        return NumericDistribution(
            average=average,
            median=median,
            minimum=float(ordered[0]),
            maximum=float(ordered[-1]),
            histogram=self.histogram(numbers),
        )

    def histogram(self, numbers: np.ndarray) -> Histogram:
        """
        Equal-width histogram over ``[min, max]``.

        A constant column has a zero bin size, so every value goes into a
        single bin instead of dividing by zero.
        """
        numbers = np.asarray(numbers, dtype=float)
        n_bins = self.config.histogram_bins
        minimum = float(numbers.min())
        maximum = float(numbers.max())

        if maximum == minimum:
            return Histogram(bins=(len(numbers),), bin_size=0.0,
                             minimum=minimum, maximum=maximum)

        bin_size = (maximum - minimum) / n_bins
        indices = np.floor((numbers - minimum) / bin_size).astype(int)
        # The maximum itself (and rounding just below it) lands past the last bin
        indices = np.clip(indices, 0, n_bins - 1)
        counts = np.bincount(indices, minlength=n_bins)

        return Histogram(
            bins=tuple(int(count) for count in counts),
            bin_size=bin_size,
            minimum=minimum,
            maximum=maximum,
        )

    def categorical_distribution(self,
                                 values: Sequence[str],
                                 column_type: ColumnType) -> CategoricalDistribution:
        """Frequency of each raw value, in first-seen order."""
        frequency = {}
        for value in values:
            frequency[value] = frequency.get(value, 0) + 1

        return CategoricalDistribution.from_frequency(
            column_type, frequency, total=len(values)
        )
