"""
Error taxonomy for the survey analyzer.

All errors derive from ``SurveyAnalysisError``, itself a ``ValueError``, so
callers that already guard analysis calls with ``except ValueError`` keep
working.
"""

from typing import Dict, Optional


class SurveyAnalysisError(ValueError):
    """Base class for every error raised by the analyzer."""


class ParseError(SurveyAnalysisError):
    """Raised when the input text contains no usable header line."""


class RowShapeError(SurveyAnalysisError):
    """Raised when a data row's cell count differs from the header's."""

    def __init__(self,
                 row_index: int,
                 expected: int,
                 actual: int,
                 line_number: Optional[int] = None):
        self.row_index = row_index
        self.expected = expected
        self.actual = actual
        self.line_number = line_number

        location = f"Row {row_index}"
        if line_number is not None:
            location += f" (line {line_number})"

        super().__init__(
            f"{location} has {actual} cells, expected {expected}"
        )


class EmptyColumnError(SurveyAnalysisError):
    """Raised when a column has no values to classify."""

    def __init__(self, column: str):
        self.column = column
        super().__init__(f"Column '{column}' has no rows to analyze")


class InconsistentTotalsError(SurveyAnalysisError):
    """Raised on export when columns disagree on their response totals."""

    def __init__(self, totals: Dict[str, int]):
        self.totals = dict(totals)
        summary = ", ".join(f"{name}={total}" for name, total in self.totals.items())
        super().__init__(f"Column totals differ: {summary}")


class ResultFormatError(SurveyAnalysisError):
    """Raised when a serialized analysis result cannot be decoded."""
