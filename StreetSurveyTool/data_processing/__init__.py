"""Data processing module for survey analysis."""

from .data_loader import DataLoader
from .csv_parser import CSVParser
from .type_inference import TypeInferencer, to_numbers
from .exceptions import (
    SurveyAnalysisError,
    ParseError,
    RowShapeError,
    EmptyColumnError,
    InconsistentTotalsError,
    ResultFormatError
)
from .models import (
    ColumnType,
    Grid,
    Histogram,
    NumericDistribution,
    CategoricalDistribution,
    Distribution,
    CorrelationPair,
    SurveyMetadata,
    AnalysisResult,
    SurveyRecord
)

__all__ = [
    'DataLoader',
    'CSVParser',
    'TypeInferencer',
    'to_numbers',
    'SurveyAnalysisError',
    'ParseError',
    'RowShapeError',
    'EmptyColumnError',
    'InconsistentTotalsError',
    'ResultFormatError',
    'ColumnType',
    'Grid',
    'Histogram',
    'NumericDistribution',
    'CategoricalDistribution',
    'Distribution',
    'CorrelationPair',
    'SurveyMetadata',
    'AnalysisResult',
    'SurveyRecord'
]
