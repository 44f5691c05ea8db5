"""
Core data models and structures for survey analysis.

This module defines the parsed table (``Grid``), the per-column distribution
types, correlation pairs and the assembled ``AnalysisResult``, together with
their conversion to and from the JSON-compatible form handed to publishing
and export collaborators.

All models are frozen dataclasses. Mappings are stored as ordered tuples of
pairs and exposed as fresh dictionaries, so a result can be shared freely
without risk of mutation.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import pandas as pd

from .exceptions import ResultFormatError


class ColumnType(Enum):
    """Semantic type inferred for a survey column."""
    NUMERIC = "numeric"
    BOOLEAN = "boolean"
    CATEGORICAL = "categorical"


@dataclass(frozen=True)
class Grid:
    """Header row plus a rectangular block of raw string cells."""
    headers: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...] = ()

    @property
    def n_rows(self) -> int:
        return len(self.rows)

    @property
    def n_columns(self) -> int:
        return len(self.headers)

    def column_index(self, name: str) -> int:
        """Index of the first column called ``name``."""
        try:
            return self.headers.index(name)
        except ValueError:
            raise KeyError(f"Column '{name}' not found") from None

    def column_at(self, index: int) -> List[str]:
        return [row[index] for row in self.rows]

    def column(self, name: str) -> List[str]:
        """Cell values of the first column called ``name``."""
        return self.column_at(self.column_index(name))

    def unique_headers(self) -> List[str]:
        """Header names in order, keeping only the first occurrence of each."""
        return list(dict.fromkeys(self.headers))

    def to_frame(self) -> pd.DataFrame:
        """Raw cells as a DataFrame of strings (duplicate headers preserved)."""
        return pd.DataFrame(list(self.rows), columns=list(self.headers), dtype=object)


@dataclass(frozen=True)
class Histogram:
    """Equal-width histogram of a numeric column."""
    bins: Tuple[int, ...]
    bin_size: float
    minimum: float
    maximum: float

    @property
    def total(self) -> int:
        return sum(self.bins)

    def bin_labels(self) -> List[str]:
        """Human readable ``start-end`` label for each bin."""
        labels = []
        for i in range(len(self.bins)):
            start = self.minimum + i * self.bin_size
            end = start + self.bin_size
            labels.append(f"{start:.1f}-{end:.1f}")
        return labels


@dataclass(frozen=True)
class NumericDistribution:
    """Summary statistics and histogram of a numeric column."""
    average: float
    median: float
    minimum: float
    maximum: float
    histogram: Histogram

    @property
    def column_type(self) -> ColumnType:
        return ColumnType.NUMERIC

    @property
    def total(self) -> int:
        return self.histogram.total


@dataclass(frozen=True)
class CategoricalDistribution:
    """Frequency table of a boolean or categorical column."""
    column_type: ColumnType
    counts: Tuple[Tuple[str, int], ...]
    total: int

    def __post_init__(self):
        if self.column_type is ColumnType.NUMERIC:
            raise ValueError("CategoricalDistribution cannot hold a numeric column")

    @classmethod
    def from_frequency(cls,
                       column_type: ColumnType,
                       frequency: Mapping[str, int],
                       total: Optional[int] = None) -> 'CategoricalDistribution':
        counts = tuple((str(value), int(count)) for value, count in frequency.items())
        if total is None:
            total = sum(count for _, count in counts)
        return cls(column_type=column_type, counts=counts, total=total)

    @property
    def frequency(self) -> Dict[str, int]:
        return dict(self.counts)

    @property
    def categories(self) -> List[str]:
        return [value for value, _ in self.counts]

    def get_mode(self) -> Optional[str]:
        """Most frequent value; ties go to the first one seen."""
        if not self.counts:
            return None
        return max(self.counts, key=lambda item: item[1])[0]


Distribution = Union[NumericDistribution, CategoricalDistribution]


@dataclass(frozen=True)
class CorrelationPair:
    """Pearson correlation between two numeric columns."""
    columns: Tuple[str, str]
    value: float

    def get_effect_size_category(self) -> str:
        """Categorize effect size according to Cohen's conventions."""
        abs_r = abs(self.value)
        if abs_r < 0.1:
            return "negligible"
        elif abs_r < 0.3:
            return "small"
        elif abs_r < 0.5:
            return "medium"
        else:
            return "large"


@dataclass(frozen=True)
class SurveyMetadata:
    """Where, when and by whom a street survey was collected."""
    location: Optional[str] = None
    interviewer: Optional[str] = None
    date: Optional[str] = None
    filename: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        return {
            key: value for key, value in (
                ('location', self.location),
                ('interviewer', self.interviewer),
                ('date', self.date),
                ('filename', self.filename),
            ) if value is not None
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> 'SurveyMetadata':
        if not isinstance(payload, Mapping):
            raise ResultFormatError("metadata must be an object")
        return cls(
            location=payload.get('location'),
            interviewer=payload.get('interviewer'),
            date=payload.get('date'),
            filename=payload.get('filename'),
        )


@dataclass(frozen=True)
class AnalysisResult:
    """
    Immutable outcome of analyzing one survey table.

    ``column_distributions`` keeps the header order; ``distributions`` exposes
    it as a mapping.
    """
    total_respondents: int
    column_distributions: Tuple[Tuple[str, Distribution], ...]
    correlations: Tuple[CorrelationPair, ...] = ()
    metadata: Optional[SurveyMetadata] = None

    @property
    def distributions(self) -> Dict[str, Distribution]:
        return dict(self.column_distributions)

    @property
    def column_names(self) -> List[str]:
        return [name for name, _ in self.column_distributions]

    def get_distribution(self, column: str) -> Distribution:
        for name, distribution in self.column_distributions:
            if name == column:
                return distribution
        raise KeyError(f"Column '{column}' not found in analysis result")

    def list_columns_by_type(self, column_type: ColumnType) -> List[str]:
        """List all columns of a specific type."""
        return [name for name, dist in self.column_distributions
                if dist.column_type == column_type]

    def with_metadata(self, metadata: Optional[SurveyMetadata]) -> 'AnalysisResult':
        """Copy of this result carrying ``metadata``."""
        return AnalysisResult(
            total_respondents=self.total_respondents,
            column_distributions=self.column_distributions,
            correlations=self.correlations,
            metadata=metadata,
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-compatible representation."""
        payload = {
            'totalRespondents': self.total_respondents,
            'distributions': {
                name: distribution_to_dict(dist)
                for name, dist in self.column_distributions
            },
            'correlations': [
                {'columns': list(pair.columns), 'value': pair.value}
                for pair in self.correlations
            ],
        }
        if self.metadata is not None:
            payload['metadata'] = self.metadata.to_dict()
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> 'AnalysisResult':
        """Decode a result produced by ``to_dict`` or published elsewhere."""
        if not isinstance(payload, Mapping):
            raise ResultFormatError("analysis result must be an object")

        distributions = payload.get('distributions')
        if not isinstance(distributions, Mapping):
            raise ResultFormatError("'distributions' must be an object")

        column_distributions = tuple(
            (str(name), distribution_from_dict(name, dist))
            for name, dist in distributions.items()
        )

        correlations = []
        for entry in payload.get('correlations') or []:
            try:
                first, second = entry['columns']
                value = _as_float(entry['value'], f"correlations.{first}.{second}")
                correlations.append(CorrelationPair(columns=(str(first), str(second)), value=value))
            except (KeyError, TypeError, ValueError) as e:
                raise ResultFormatError(f"Malformed correlation entry {entry!r}: {e}") from e

        total = payload.get('totalRespondents')
        if total is None:
            # Older payloads may omit the field; fall back to the largest column
            total = max((dist.total for _, dist in column_distributions), default=0)

        metadata = payload.get('metadata')

        return cls(
            total_respondents=_as_int(total, 'totalRespondents'),
            column_distributions=column_distributions,
            correlations=tuple(correlations),
            metadata=SurveyMetadata.from_dict(metadata) if metadata is not None else None,
        )


@dataclass(frozen=True)
class SurveyRecord:
    """Published envelope around an analysis result."""
    id: str
    data: AnalysisResult
    uploaded_by: Optional[str] = None
    filename: Optional[str] = None
    uploaded_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'data': self.data.to_dict(),
            'uploaded_by': self.uploaded_by,
            'filename': self.filename,
            'uploaded_at': self.uploaded_at,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> 'SurveyRecord':
        if not isinstance(payload, Mapping) or 'data' not in payload:
            raise ResultFormatError("survey record must be an object with a 'data' field")
        return cls(
            id=str(payload.get('id', '')),
            data=AnalysisResult.from_dict(payload['data']),
            uploaded_by=payload.get('uploaded_by'),
            filename=payload.get('filename'),
            uploaded_at=payload.get('uploaded_at'),
        )


def distribution_to_dict(distribution: Distribution) -> Dict[str, Any]:
    """Wire form of a single distribution, tagged by ``type``."""
    if isinstance(distribution, NumericDistribution):
        histogram = distribution.histogram
        return {
            'type': ColumnType.NUMERIC.value,
            'average': distribution.average,
            'median': distribution.median,
            'min': distribution.minimum,
            'max': distribution.maximum,
            'histogram': {
                'bins': list(histogram.bins),
                'binSize': histogram.bin_size,
                'min': histogram.minimum,
                'max': histogram.maximum,
            },
        }
    elif isinstance(distribution, CategoricalDistribution):
        return {
            'type': distribution.column_type.value,
            'frequency': distribution.frequency,
            'total': distribution.total,
        }
    else:
        raise TypeError(f"Unsupported distribution: {type(distribution).__name__}")


def distribution_from_dict(column: str, payload: Mapping[str, Any]) -> Distribution:
    """Decode one tagged distribution; unknown tags are rejected."""
    if not isinstance(payload, Mapping):
        raise ResultFormatError(f"Distribution for '{column}' must be an object")

    try:
        column_type = ColumnType(payload.get('type'))
    except ValueError:
        raise ResultFormatError(
            f"Unknown distribution type {payload.get('type')!r} for column '{column}'"
        ) from None

    try:
        if column_type is ColumnType.NUMERIC:
            histogram = payload['histogram']
            bins = tuple(_as_int(count, f"{column}.histogram.bins") for count in histogram['bins'])
            if not bins:
                raise ResultFormatError(f"Histogram for '{column}' has no bins")
            if any(count < 0 for count in bins):
                raise ResultFormatError(f"Histogram for '{column}' has negative counts")
            return NumericDistribution(
                average=_as_float(payload['average'], f"{column}.average"),
                median=_as_float(payload['median'], f"{column}.median"),
                minimum=_as_float(payload['min'], f"{column}.min"),
                maximum=_as_float(payload['max'], f"{column}.max"),
                histogram=Histogram(
                    bins=bins,
                    bin_size=_as_float(histogram['binSize'], f"{column}.histogram.binSize"),
                    minimum=_as_float(histogram.get('min', payload['min']), f"{column}.histogram.min"),
                    maximum=_as_float(histogram.get('max', payload['max']), f"{column}.histogram.max"),
                ),
            )

        frequency = payload['frequency']
        if not isinstance(frequency, Mapping):
            raise ResultFormatError(f"Frequency for '{column}' must be an object")
        counts = {
            str(value): _as_int(count, f"{column}.frequency")
            for value, count in frequency.items()
        }
        total = payload.get('total')
        return CategoricalDistribution.from_frequency(
            column_type,
            counts,
            total=_as_int(total, f"{column}.total") if total is not None else None,
        )

    except (AttributeError, KeyError, TypeError, ValueError) as e:
        if isinstance(e, ResultFormatError):
            raise
        raise ResultFormatError(f"Malformed distribution for '{column}': {e}") from e


def _as_int(value: Any, field_name: str) -> int:
    if (isinstance(value, bool) or not isinstance(value, (int, float))
            or not math.isfinite(value) or value != int(value)):
        raise ResultFormatError(f"'{field_name}' must be a whole number, got {value!r}")
    return int(value)


def _as_float(value: Any, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ResultFormatError(f"'{field_name}' must be a finite number, got {value!r}")
    return float(value)
