"""
Street Survey Tool

Turns street-survey response tables into per-column distributions and
pairwise correlations, and exports aggregated results back to CSV.

Version: 1.0.0
"""

__version__ = "1.0.0"

from .config import AnalyzerConfig
from .survey_analyzer import SurveyAnalyzer
from .street_survey_tool import StreetSurveyTool
from .export import InverseReconstructor
from .data_processing.exceptions import (
    SurveyAnalysisError,
    ParseError,
    RowShapeError,
    EmptyColumnError,
    InconsistentTotalsError,
    ResultFormatError
)
from .data_processing.models import (
    ColumnType,
    Grid,
    Histogram,
    NumericDistribution,
    CategoricalDistribution,
    CorrelationPair,
    SurveyMetadata,
    AnalysisResult,
    SurveyRecord
)

__all__ = [
    'AnalyzerConfig',
    'SurveyAnalyzer',
    'StreetSurveyTool',
    'InverseReconstructor',
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
    'CorrelationPair',
    'SurveyMetadata',
    'AnalysisResult',
    'SurveyRecord'
]
