"""Decoders that turn tabular files into header -> value rows."""

from pathlib import Path

from dispute_delta.exceptions import UnsupportedFormatError
from dispute_delta.ingestion.base import DecodedTable, TabularDecoder
from dispute_delta.ingestion.csv_decoder import CsvDecoder
from dispute_delta.ingestion.workbook import WorkbookDecoder

_DECODERS: tuple[TabularDecoder, ...] = (CsvDecoder(), WorkbookDecoder())


def get_decoder(file_path: Path) -> TabularDecoder:
    """Pick a decoder from the file extension."""
    suffix = file_path.suffix.lower()
    for decoder in _DECODERS:
        if suffix in decoder.suffixes:
            return decoder
    raise UnsupportedFormatError(file_path.name, suffix)


def decode_table(file_path: Path) -> DecodedTable:
    return get_decoder(file_path).decode(file_path)


__all__ = [
    "CsvDecoder",
    "DecodedTable",
    "TabularDecoder",
    "WorkbookDecoder",
    "decode_table",
    "get_decoder",
]
