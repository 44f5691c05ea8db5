"""
Survey analysis pipeline.

``SurveyAnalyzer`` runs parse, type inference, per-column distributions and
numeric correlations, then assembles a single immutable ``AnalysisResult``.
It performs no I/O and keeps no state between calls.
"""

import logging
from typing import Optional

from .config import AnalyzerConfig
from .correlation_analysis import CorrelationEngine
from .data_processing import (
    AnalysisResult, ColumnType, CSVParser, Grid, SurveyMetadata, TypeInferencer, to_numbers
)
from .descriptive_analysis import DistributionBuilder


class SurveyAnalyzer:
    """
    Turn raw survey text into an AnalysisResult.

    A result is only assembled once every column has been typed and
    summarized; any failure propagates and no partial result is produced.
    """

    def __init__(self, config: Optional[AnalyzerConfig] = None):
        """
        Initialize the analyzer and its components.

        Parameters
        ----------
        config : AnalyzerConfig, optional
            Shared settings; defaults to ``AnalyzerConfig()``
        """
        self.config = config or AnalyzerConfig()
        self.logger = logging.getLogger(__name__)

        self.parser = CSVParser(self.config)
        self.type_inferencer = TypeInferencer(self.config)
        self.distribution_builder = DistributionBuilder(self.config)
        self.correlation_engine = CorrelationEngine()

    def analyze(self, text: str, metadata: Optional[SurveyMetadata] = None) -> AnalysisResult:
        """
        Parse and analyze delimited survey text.

        Parameters
        ----------
        text : str
            Raw table, header on the first non-blank line
        metadata : SurveyMetadata, optional
            Collection details attached to the result

        Returns
        -------
        AnalysisResult
        """
        grid = self.parser.parse(text)
        return self.analyze_grid(grid, metadata)

    def analyze_grid(self, grid: Grid, metadata: Optional[SurveyMetadata] = None) -> AnalysisResult:
        """Analyze an already parsed Grid."""
        self.logger.info(f"Analyzing {grid.n_rows} responses across {grid.n_columns} columns")

        column_types = self.type_inferencer.infer_types(grid)

        column_distributions = []
        numeric_columns = {}
        for name, column_type in column_types.items():
            values = grid.column(name)
            column_distributions.append(
                (name, self.distribution_builder.build(values, column_type, column=name))
            )
            if column_type is ColumnType.NUMERIC:
                numeric_columns[name] = to_numbers(values)

        correlations = self.correlation_engine.compute_correlations(numeric_columns)

        result = AnalysisResult(
            total_respondents=grid.n_rows,
            column_distributions=tuple(column_distributions),
            correlations=tuple(correlations),
            metadata=metadata,
        )

        self.logger.info(
            f"Analysis completed: {len(numeric_columns)} numeric of {len(column_types)} columns, "
            f"{len(correlations)} correlations"
        )

        return result
