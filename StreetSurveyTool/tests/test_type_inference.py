"""
Tests for column type inference.
"""

import unittest

from StreetSurveyTool.config import AnalyzerConfig
from StreetSurveyTool.data_processing.csv_parser import CSVParser
from StreetSurveyTool.data_processing.exceptions import EmptyColumnError
from StreetSurveyTool.data_processing.models import ColumnType
from StreetSurveyTool.data_processing.type_inference import TypeInferencer, to_numbers


class TestTypeInferencer(unittest.TestCase):
    """Test cases for TypeInferencer."""

    def setUp(self):
        """Set up test fixtures."""
        self.inferencer = TypeInferencer()

    def test_numeric_column(self):
        """Test detection of integer, decimal and signed values."""
        values = ['8', '3', '-2.5', '1e3', '0']
        self.assertEqual(self.inferencer.infer_column(values), ColumnType.NUMERIC)

    def test_zero_one_column_is_numeric(self):
        """Test that numeric detection wins over boolean for 0/1 columns."""
        self.assertEqual(self.inferencer.infer_column(['0', '1', '1']), ColumnType.NUMERIC)

    def test_boolean_column(self):
        """Test case-insensitive boolean detection."""
        values = ['Yes', 'no', 'TRUE', 'false', '1']
        self.assertEqual(self.inferencer.infer_column(values), ColumnType.BOOLEAN)

    def test_categorical_column(self):
        """Test fallback to categorical."""
        values = ['bitcoin', 'cash', 'card']
        self.assertEqual(self.inferencer.infer_column(values), ColumnType.CATEGORICAL)

    def test_empty_cell_breaks_numeric(self):
        """Test that a single empty cell prevents numeric classification."""
        self.assertEqual(self.inferencer.infer_column(['1', '', '3']), ColumnType.CATEGORICAL)
        self.assertEqual(self.inferencer.infer_column(['yes', '']), ColumnType.CATEGORICAL)

    def test_non_finite_values_are_not_numeric(self):
        """Test that NaN and infinity spellings are not numbers."""
        self.assertEqual(self.inferencer.infer_column(['1', 'nan']), ColumnType.CATEGORICAL)
        self.assertEqual(self.inferencer.infer_column(['inf', '2']), ColumnType.CATEGORICAL)

    def test_empty_column_raises(self):
        """Test error handling for a column without values."""
        with self.assertRaises(EmptyColumnError) as context:
            self.inferencer.infer_column([], column='age')

        self.assertEqual(context.exception.column, 'age')

    def test_infer_types_keeps_header_order(self):
        """Test inference over a whole grid."""
        grid = CSVParser().parse(
            "bitcoin_knowledge,payment_method,has_bitcoin\n"
            "8,bitcoin,yes\n"
            "3,cash,no\n"
        )

        column_types = self.inferencer.infer_types(grid)

        self.assertEqual(list(column_types), ['bitcoin_knowledge', 'payment_method', 'has_bitcoin'])
        self.assertEqual(column_types['bitcoin_knowledge'], ColumnType.NUMERIC)
        self.assertEqual(column_types['payment_method'], ColumnType.CATEGORICAL)
        self.assertEqual(column_types['has_bitcoin'], ColumnType.BOOLEAN)

    def test_custom_boolean_tokens(self):
        """Test configured boolean vocabulary."""
        inferencer = TypeInferencer(AnalyzerConfig(boolean_tokens=('Sim', 'Não')))

        self.assertEqual(inferencer.infer_column(['sim', 'NÃO']), ColumnType.BOOLEAN)
        self.assertEqual(inferencer.infer_column(['yes', 'no']), ColumnType.CATEGORICAL)

    def test_to_numbers(self):
        """Test raw cell conversion."""
        numbers = to_numbers(['1', '2.5', 'x'])

        self.assertEqual(numbers[0], 1.0)
        self.assertEqual(numbers[1], 2.5)
        self.assertTrue(numbers[2] != numbers[2])  # NaN


if __name__ == '__main__':
    unittest.main()
