"""Descriptive analysis module for survey data."""

from .distribution_builder import DistributionBuilder

__all__ = [
    'DistributionBuilder'
]
