"""Correlation analysis module for survey data."""

from .correlation_engine import CorrelationEngine, correlate

__all__ = [
    'CorrelationEngine',
    'correlate'
]
