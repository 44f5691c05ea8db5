"""
Delimited-text parser for uploaded survey tables.

The parser turns a raw text blob into a ``Grid``: the first non-blank line is
the header and every following non-blank line is a data row. Cells are split
naively on the configured delimiter and trimmed; quoted fields are not
supported.
"""

import logging
from typing import List, Optional

from ..config import AnalyzerConfig
from .exceptions import ParseError, RowShapeError
from .models import Grid


class CSVParser:
    """
    Split raw survey text into a header and a rectangular grid of cells.

    Blank lines (including a trailing newline) never produce rows. Rows whose
    cell count differs from the header raise ``RowShapeError`` unless the
    configuration asks for lenient parsing, in which case short rows are padded
    with empty cells and long rows are truncated.
    """

    def __init__(self, config: Optional[AnalyzerConfig] = None):
        self.config = config or AnalyzerConfig()
        self.logger = logging.getLogger(__name__)

    def parse(self, text: str) -> Grid:
        """
        Parse delimited text into a Grid.

        Parameters
        ----------
        text : str
            Raw file contents

        Returns
        -------
        Grid
            Header names and trimmed string cells

        Raises
        ------
        ParseError
            If the text contains no non-blank line
        RowShapeError
            If a row has the wrong number of cells (strict mode)
        """
        # Keep source line numbers so shape errors point at the file
        lines = [(number, line) for number, line in enumerate(text.splitlines(), start=1)
                 if line.strip()]

        if not lines:
            raise ParseError("No header line found: input contains no non-empty lines")

        _, header_line = lines[0]
        headers = tuple(self._split(header_line))

        duplicates = sorted({name for name in headers if headers.count(name) > 1})
        if duplicates:
            self.logger.warning(
                f"Duplicate column names {duplicates}; lookups use the first occurrence"
            )

        rows = []
        for row_index, (line_number, line) in enumerate(lines[1:]):
            cells = self._split(line)
            if len(cells) != len(headers):
                cells = self._fix_row_shape(cells, len(headers), row_index, line_number)
            rows.append(tuple(cells))

        self.logger.debug(f"Parsed {len(rows)} rows with {len(headers)} columns")

        return Grid(headers=headers, rows=tuple(rows))

    def _split(self, line: str) -> List[str]:
        return [cell.strip() for cell in line.split(self.config.delimiter)]

    def _fix_row_shape(self,
                       cells: List[str],
                       expected: int,
                       row_index: int,
                       line_number: int) -> List[str]:
        """Reject or repair a row whose cell count differs from the header."""
        if self.config.strict_row_shape:
            raise RowShapeError(row_index, expected, len(cells), line_number)

        self.logger.warning(
            f"Row {row_index} (line {line_number}) has {len(cells)} cells, "
            f"expected {expected}; {'padding' if len(cells) < expected else 'truncating'}"
        )

        if len(cells) < expected:
            return cells + [''] * (expected - len(cells))
        return cells[:expected]
