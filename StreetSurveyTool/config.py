"""
Analyzer configuration.

Every component receives an ``AnalyzerConfig`` explicitly; nothing in the
package keeps process-wide state.
"""

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Tuple, Union

logger = logging.getLogger(__name__)

DEFAULT_BOOLEAN_TOKENS = ('true', 'false', 'yes', 'no', '0', '1')


@dataclass(frozen=True)
class AnalyzerConfig:
    """
    Settings shared by the parser, analyzer and exporter.

    Parameters
    ----------
    histogram_bins : int, default 10
        Number of bins in numeric histograms
    delimiter : str, default ','
        Field separator. Cells are split naively; quoting is not supported
    boolean_tokens : tuple of str
        Values (compared case-insensitively) that make a column boolean
    strict_row_shape : bool, default True
        Raise ``RowShapeError`` on misshapen rows instead of repairing them
    export_decimals : int, default 1
        Decimal places for reconstructed numeric cells
    require_consistent_totals : bool, default False
        Raise ``InconsistentTotalsError`` on export when column totals differ
    """
    histogram_bins: int = 10
    delimiter: str = ','
    boolean_tokens: Tuple[str, ...] = DEFAULT_BOOLEAN_TOKENS
    strict_row_shape: bool = True
    export_decimals: int = 1
    require_consistent_totals: bool = False

    def __post_init__(self):
        if self.histogram_bins < 1:
            raise ValueError(f"histogram_bins must be at least 1, got {self.histogram_bins}")
        if not self.delimiter:
            raise ValueError("delimiter must be a non-empty string")
        if self.export_decimals < 0:
            raise ValueError(f"export_decimals must be non-negative, got {self.export_decimals}")

        # Normalized once so the inferencer can compare lower-cased cells
        object.__setattr__(
            self, 'boolean_tokens', tuple(token.lower() for token in self.boolean_tokens)
        )

    @classmethod
    def from_dict(cls, options: Dict[str, Any]) -> 'AnalyzerConfig':
        """Build a config from a plain mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}")

        kwargs = {key: value for key, value in options.items() if key in known}
        if 'boolean_tokens' in kwargs:
            kwargs['boolean_tokens'] = tuple(kwargs['boolean_tokens'])

        return cls(**kwargs)

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> 'AnalyzerConfig':
        """Load configuration from a JSON file."""
        with open(config_path, 'r', encoding='utf-8') as f:
            options = json.load(f)

        if not isinstance(options, dict):
            raise ValueError(f"Configuration in {config_path} must be a JSON object")

        return cls.from_dict(options)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'histogram_bins': self.histogram_bins,
            'delimiter': self.delimiter,
            'boolean_tokens': list(self.boolean_tokens),
            'strict_row_shape': self.strict_row_shape,
            'export_decimals': self.export_decimals,
            'require_consistent_totals': self.require_consistent_totals,
        }
