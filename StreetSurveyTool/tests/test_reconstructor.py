"""
Tests for CSV reconstruction from aggregated results.
"""

import unittest

from StreetSurveyTool.config import AnalyzerConfig
from StreetSurveyTool.data_processing.exceptions import InconsistentTotalsError
from StreetSurveyTool.data_processing.models import (
    AnalysisResult, CategoricalDistribution, ColumnType
)
from StreetSurveyTool.export.reconstructor import (
    InverseReconstructor, column_totals, format_fixed
)
from StreetSurveyTool.survey_analyzer import SurveyAnalyzer


def categorical_result(**columns) -> AnalysisResult:
    """Hand-assembled result with one categorical column per keyword."""
    distributions = tuple(
        (name, CategoricalDistribution.from_frequency(ColumnType.CATEGORICAL, frequency))
        for name, frequency in columns.items()
    )
    total = max(dist.total for _, dist in distributions)
    return AnalysisResult(total_respondents=total, column_distributions=distributions)


class TestInverseReconstructor(unittest.TestCase):
    """Test cases for InverseReconstructor."""

    def setUp(self):
        """Set up test fixtures."""
        self.analyzer = SurveyAnalyzer()
        self.reconstructor = InverseReconstructor()

    def test_boolean_scenario(self):
        """Test that categories are expanded in contiguous first-seen blocks."""
        result = self.analyzer.analyze("x\nyes\nno\nyes")

        csv_text = self.reconstructor.reconstruct(result)

        self.assertEqual(csv_text, "x\nyes\nyes\nno")

    def test_numeric_steps(self):
        """Test the synthesized numeric sequence."""
        result = self.analyzer.analyze("a,b\n1,2\n3,4\n5,6")

        rows = self.reconstructor.reconstruct_rows(result)

        self.assertEqual(rows[0], ['a', 'b'])
        self.assertEqual([row[0] for row in rows[1:]], ['1.0', '2.2', '3.4'])
        self.assertEqual([row[1] for row in rows[1:]], ['2.0', '3.2', '4.4'])

    def test_constant_numeric_column(self):
        """Test reconstruction of a zero-width histogram."""
        result = self.analyzer.analyze("score\n7\n7")

        self.assertEqual(self.reconstructor.reconstruct(result), "score\n7.0\n7.0")

    def test_categorical_counts_are_reproduced(self):
        """Test that exported categorical columns reanalyze to the same counts."""
        text = "place,answer\nurban,Sim\nrural,Não\nurban,Sim\nsuburban,Sim\nurban,Não"
        result = self.analyzer.analyze(text)

        reanalyzed = self.analyzer.analyze(self.reconstructor.reconstruct(result))

        for name in ('place', 'answer'):
            self.assertEqual(
                sorted(reanalyzed.distributions[name].frequency.items()),
                sorted(result.distributions[name].frequency.items())
            )

    def test_row_count_matches_largest_total(self):
        """Test that the largest column total drives the number of rows."""
        result = categorical_result(a={'x': 2, 'y': 1}, b={'z': 1})

        rows = self.reconstructor.reconstruct_rows(result)

        self.assertEqual(len(rows), 4)
        self.assertEqual([row[1] for row in rows[1:]], ['z', '', ''])
        self.assertEqual(column_totals(result), {'a': 3, 'b': 1})

    def test_strict_totals(self):
        """Test that mismatched totals can be rejected."""
        reconstructor = InverseReconstructor(AnalyzerConfig(require_consistent_totals=True))
        result = categorical_result(a={'x': 3}, b={'z': 1})

        with self.assertRaises(InconsistentTotalsError) as context:
            reconstructor.reconstruct(result)

        self.assertEqual(context.exception.totals, {'a': 3, 'b': 1})

    def test_empty_result(self):
        """Test a result with no columns."""
        result = AnalysisResult(total_respondents=0, column_distributions=())

        self.assertEqual(self.reconstructor.reconstruct(result), '')

    def test_published_payload(self):
        """Test export of a result decoded from its JSON form."""
        payload = {
            'totalRespondents': 27,
            'distributions': {
                'Turista ou local?': {
                    'type': 'categorical',
                    'frequency': {'Local': 23, 'Turista': 3, '': 1},
                    'total': 27
                },
                'Você tem Bitcoin?': {
                    'type': 'categorical',
                    'frequency': {'Não': 20, 'Sim': 7},
                    'total': 27
                }
            }
        }
        result = AnalysisResult.from_dict(payload)

        lines = self.reconstructor.reconstruct(result).split('\n')

        self.assertEqual(lines[0], 'Turista ou local?,Você tem Bitcoin?')
        self.assertEqual(len(lines), 28)
        self.assertEqual(lines[1], 'Local,Não')
        self.assertEqual(lines[24], 'Turista,Sim')
        self.assertEqual(lines[27], ',Sim')

    def test_export_decimals(self):
        """Test configured precision of numeric cells."""
        reconstructor = InverseReconstructor(AnalyzerConfig(export_decimals=2))
        result = self.analyzer.analyze("a\n1\n3\n5")

        rows = reconstructor.reconstruct_rows(result)

        self.assertEqual([row[0] for row in rows[1:]], ['1.00', '2.20', '3.40'])

    def test_ties_round_away_from_zero(self):
        """Test that bin boundaries on exact halves round up."""
        result = self.analyzer.analyze("a\n0\n2.5\n" + "1\n" * 8)

        rows = self.reconstructor.reconstruct_rows(result)

        self.assertEqual(result.distributions['a'].histogram.bin_size, 0.25)
        self.assertEqual(
            [row[0] for row in rows[1:]],
            ['0.0', '0.3', '0.5', '0.8', '1.0', '1.3', '1.5', '1.8', '2.0', '2.3']
        )

    def test_format_fixed(self):
        """Test fixed-point formatting of numeric cells."""
        self.assertEqual(format_fixed(1.25, 1), '1.3')
        self.assertEqual(format_fixed(-1.25, 1), '-1.3')
        self.assertEqual(format_fixed(2.675, 2), '2.67')
        self.assertEqual(format_fixed(-0.0, 1), '0.0')
        self.assertEqual(format_fixed(2.5, 0), '3')
        self.assertEqual(format_fixed(1e22, 1), '10000000000000000000000.0')


if __name__ == '__main__':
    unittest.main()
