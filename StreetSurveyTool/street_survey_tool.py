"""
Main Street Survey Tool class.

This module provides the primary interface for analyzing uploaded street
survey tables: loading CSV files, running the analyzer, exporting results as
JSON or reconstructed CSV, and summarizing what was found.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .config import AnalyzerConfig
from .data_processing import (
    AnalysisResult, ColumnType, DataLoader, SurveyMetadata, SurveyRecord
)
from .export import InverseReconstructor
from .survey_analyzer import SurveyAnalyzer

SAMPLE_CSV = """bitcoin_knowledge,payment_method,age_group,location_type
8,bitcoin,25-34,urban
3,cash,35-44,rural
5,card,18-24,suburban"""


class StreetSurveyTool:
    """
    Street survey analysis tool.

    This is the outer interface around the analyzer. It owns the file I/O the
    analyzer deliberately avoids.

    Features:
    - CSV upload loading with encoding detection
    - Column type inference, distributions and correlations
    - JSON round trip of results and published survey records
    - CSV export reconstructed from aggregated distributions
    """

    def __init__(self,
                 config_path: Optional[str] = None,
                 config: Optional[AnalyzerConfig] = None,
                 log_level: str = 'INFO'):
        """
        Initialize the Street Survey Tool.

        Parameters
        ----------
        config_path : str, optional
            Path to a JSON configuration file
        config : AnalyzerConfig, optional
            Configuration object; takes precedence over ``config_path``
        log_level : str, default 'INFO'
            Logging level
        """
        logging.basicConfig(
            level=getattr(logging, log_level.upper()),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        self.logger = logging.getLogger(__name__)

        if config is None:
            config = self._load_config(config_path) if config_path else AnalyzerConfig()
        self.config = config

        self.data_loader = DataLoader()
        self.analyzer = SurveyAnalyzer(self.config)
        self.reconstructor = InverseReconstructor(self.config)

        self.logger.info("Street Survey Tool initialized successfully")

    def load_survey_file(self, file_path: Union[str, Path]) -> str:
        """
        Read an uploaded survey CSV.

        Parameters
        ----------
        file_path : str or Path
            Path to a ``.csv`` file

        Returns
        -------
        str
            File contents
        """
        file_path = Path(file_path)
        if file_path.suffix.lower() != '.csv':
            raise ValueError("Please upload a CSV file")

        try:
            return self.data_loader.load_text(file_path)
        except Exception as e:
            self.logger.error(f"Failed to load survey file: {e}")
            raise

    def analyze_text(self,
                     text: str,
                     metadata: Optional[SurveyMetadata] = None) -> AnalysisResult:
        """
        Analyze survey text already in memory.

        Parameters
        ----------
        text : str
            Delimited survey table
        metadata : SurveyMetadata, optional
            Collection details attached to the result

        Returns
        -------
        AnalysisResult
        """
        try:
            return self.analyzer.analyze(text, metadata)
        except Exception as e:
            self.logger.error(f"Survey analysis failed: {e}")
            raise

    def analyze_survey_file(self,
                            file_path: Union[str, Path],
                            metadata: Optional[SurveyMetadata] = None) -> AnalysisResult:
        """
        Load and analyze a survey CSV.

        When no metadata is given, the file name is recorded as metadata.
        """
        file_path = Path(file_path)
        self.logger.info(f"Analyzing survey file {file_path}")

        text = self.load_survey_file(file_path)
        if metadata is None:
            metadata = SurveyMetadata(filename=file_path.name)

        return self.analyze_text(text, metadata)

    def export_csv(self,
                   survey: Union[AnalysisResult, SurveyRecord],
                   output_path: Optional[Union[str, Path]] = None) -> str:
        """
        Reconstruct a CSV table from aggregated results.

        Parameters
        ----------
        survey : AnalysisResult or SurveyRecord
            Result to export
        output_path : str or Path, optional
            Path to save the CSV

        Returns
        -------
        str
            CSV content, or the path it was written to
        """
        result = survey.data if isinstance(survey, SurveyRecord) else survey

        try:
            csv_content = self.reconstructor.reconstruct(result)
        except Exception as e:
            self.logger.error(f"CSV export failed: {e}")
            raise

        if output_path:
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(csv_content)
            self.logger.info(f"CSV export saved to {output_path}")
            return str(output_path)

        return csv_content

    def export_filename(self, survey: Union[AnalysisResult, SurveyRecord]) -> str:
        """Download name for an exported survey."""
        if isinstance(survey, SurveyRecord):
            if survey.filename:
                return survey.filename
            survey = survey.data
        if survey.metadata and survey.metadata.filename:
            return survey.metadata.filename
        return 'survey_data.csv'

    def save_result(self, result: AnalysisResult, output_path: Union[str, Path]) -> str:
        """Write a result as JSON."""
        try:
            with open(output_path, 'w', encoding='utf-8') as f:
                json.dump(result.to_dict(), f, ensure_ascii=False, indent=2)
        except Exception as e:
            self.logger.error(f"Failed to save analysis result: {e}")
            raise

        self.logger.info(f"Analysis result saved to {output_path}")
        return str(output_path)

    def load_result(self, input_path: Union[str, Path]) -> AnalysisResult:
        """Read a result written by ``save_result`` or published elsewhere."""
        try:
            with open(input_path, 'r', encoding='utf-8') as f:
                payload = json.load(f)
            return AnalysisResult.from_dict(payload)
        except Exception as e:
            self.logger.error(f"Failed to load analysis result: {e}")
            raise

    def load_survey_record(self, input_path: Union[str, Path]) -> SurveyRecord:
        """Read a published survey record envelope."""
        try:
            with open(input_path, 'r', encoding='utf-8') as f:
                payload = json.load(f)
            return SurveyRecord.from_dict(payload)
        except Exception as e:
            self.logger.error(f"Failed to load survey record: {e}")
            raise

    def sample_csv(self, output_path: Optional[Union[str, Path]] = None) -> str:
        """Sample survey table showing the expected upload format."""
        if output_path:
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(SAMPLE_CSV)
            return str(output_path)
        return SAMPLE_CSV

    def get_analysis_summary(self, result: AnalysisResult) -> Dict[str, Any]:
        """
        Summarize an analysis result.

        Returns
        -------
        dict
            Counts per column type and the strongest correlation, if any
        """
        summary = {
            'total_respondents': result.total_respondents,
            'n_columns': len(result.column_distributions),
            'numeric_columns': result.list_columns_by_type(ColumnType.NUMERIC),
            'boolean_columns': result.list_columns_by_type(ColumnType.BOOLEAN),
            'categorical_columns': result.list_columns_by_type(ColumnType.CATEGORICAL),
            'n_correlations': len(result.correlations),
            'has_metadata': result.metadata is not None
        }

        if result.correlations:
            strongest = max(result.correlations, key=lambda pair: abs(pair.value))
            summary['strongest_correlation'] = {
                'columns': list(strongest.columns),
                'value': strongest.value,
                'effect_size': strongest.get_effect_size_category()
            }

        return summary

    def _load_config(self, config_path: str) -> AnalyzerConfig:
        """Load configuration from file."""
        try:
            config = AnalyzerConfig.from_file(config_path)
            self.logger.info(f"Configuration loaded from {config_path}")
            return config
        except (OSError, ValueError) as e:
            self.logger.warning(f"Failed to load configuration: {e}")
            return AnalyzerConfig()
