"""
Column type inference for parsed survey tables.

Each column is classified from its complete set of raw values, using a strict
priority order: numeric, then boolean, then categorical. Because numeric
detection runs first, a column holding only ``0`` and ``1`` is numeric.
"""

import logging
from typing import Dict, Optional, Sequence

import numpy as np
import pandas as pd

from ..config import AnalyzerConfig
from .exceptions import EmptyColumnError
from .models import ColumnType, Grid


def to_numbers(values: Sequence[str]) -> np.ndarray:
    """
    Convert raw cells to floats.

    Cells that do not parse (including the empty string) become NaN.
    """
    series = pd.Series(list(values), dtype=object)
    return pd.to_numeric(series, errors='coerce').to_numpy(dtype=float)


class TypeInferencer:
    """
    Classify survey columns as numeric, boolean or categorical.

    Classification never fails: any column that is neither numeric nor
    boolean falls back to categorical.
    """

    def __init__(self, config: Optional[AnalyzerConfig] = None):
        self.config = config or AnalyzerConfig()
        self.logger = logging.getLogger(__name__)
        self._boolean_tokens = frozenset(self.config.boolean_tokens)

    def infer_types(self, grid: Grid) -> Dict[str, ColumnType]:
        """
        Infer the type of every column in header order.

        Duplicate header names resolve to their first occurrence.

        Returns
        -------
        dict
            Mapping of column name to ColumnType
        """
        column_types = {}
        for name in grid.unique_headers():
            column_types[name] = self.infer_column(grid.column(name), column=name)
            self.logger.debug(f"Column '{name}' classified as {column_types[name].value}")
        return column_types

    def infer_column(self, values: Sequence[str], column: str = '') -> ColumnType:
        """
        Classify one column from its raw values.

        Raises
        ------
        EmptyColumnError
            If ``values`` is empty
        """
        if len(values) == 0:
            raise EmptyColumnError(column)

        if self.is_numeric(values):
            return ColumnType.NUMERIC
        if self.is_boolean(values):
            return ColumnType.BOOLEAN
        return ColumnType.CATEGORICAL

    def is_numeric(self, values: Sequence[str]) -> bool:
        """True if every value parses as a finite number."""
        return bool(np.isfinite(to_numbers(values)).all())

    def is_boolean(self, values: Sequence[str]) -> bool:
        """True if every value is a boolean token, ignoring case."""
        return all(value.lower() in self._boolean_tokens for value in values)
