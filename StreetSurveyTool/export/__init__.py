"""Export module for aggregated survey results."""

from .reconstructor import InverseReconstructor, column_total, column_totals

__all__ = [
    'InverseReconstructor',
    'column_total',
    'column_totals'
]
