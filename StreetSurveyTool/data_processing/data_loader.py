"""
File loader for uploaded survey tables.

This module reads survey CSV files from disk as text, detecting the encoding
with chardet and falling back through common encodings when decoding fails.
It is the only place in the package that touches the filesystem for input;
the analyzer itself works on the returned text.
"""

import logging
from pathlib import Path
from typing import Union

import chardet


class DataLoader:
    """
    Text loader for survey CSV uploads.

    Supports:
    - CSV and plain-text files with encoding detection
    - Fallback decoding for files chardet cannot classify
    """

    SUPPORTED_EXTENSIONS = ('.csv', '.txt')
    FALLBACK_ENCODINGS = ('utf-8', 'latin-1', 'cp1252')

    def __init__(self, encoding: str = 'auto', sample_size: int = 10000):
        """
        Initialize the DataLoader.

        Parameters
        ----------
        encoding : str, default 'auto'
            Text encoding for file reading. 'auto' enables detection.
        sample_size : int, default 10000
            Number of bytes inspected when detecting the encoding
        """
        self.encoding = encoding
        self.sample_size = sample_size
        self.logger = logging.getLogger(__name__)

    def load_text(self, file_path: Union[str, Path]) -> str:
        """
        Read a survey file as text.

        Parameters
        ----------
        file_path : str or Path
            Path to the survey file

        Returns
        -------
        str
            Decoded file contents
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"Data file not found: {file_path}")

        extension = file_path.suffix.lower()
        if extension not in self.SUPPORTED_EXTENSIONS:
            raise ValueError(f"Unsupported file format: {extension}")

        raw = file_path.read_bytes()

        encoding = self.encoding
        if encoding == 'auto':
            encoding = self._detect_encoding(raw)

        self.logger.info(f"Loading survey text from {file_path} (encoding: {encoding})")

        try:
            text = raw.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            for fallback_encoding in self.FALLBACK_ENCODINGS:
                try:
                    text = raw.decode(fallback_encoding)
                    self.logger.warning(f"Used fallback encoding: {fallback_encoding}")
                    break
                except UnicodeDecodeError:
                    continue
            else:
                raise ValueError("Could not decode file with any supported encoding")

        # Strip a UTF-8 byte order mark so it does not end up in the first header
        return text.lstrip('\ufeff')

    def _detect_encoding(self, raw: bytes) -> str:
        """Detect file encoding using chardet."""
        result = chardet.detect(raw[:self.sample_size])
        return result['encoding'] or 'utf-8'
