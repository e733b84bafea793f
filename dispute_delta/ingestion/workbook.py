"""Excel workbook decoder (first worksheet only)."""

import logging
from pathlib import Path
from typing import Any

from openpyxl import load_workbook

from dispute_delta.exceptions import DecodeError
from dispute_delta.ingestion.base import DecodedTable, TabularDecoder
from dispute_delta.models.records import RawRow

logger = logging.getLogger(__name__)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class WorkbookDecoder(TabularDecoder):
    """Decodes .xlsx/.xlsm workbooks with openpyxl.

    Cell values come back as native types: numbers stay numbers and
    date-formatted cells come back as ``datetime``. The first non-empty row
    is the header row; empty cells become ``""``.
    """

    suffixes = (".xlsx", ".xlsm")

    def decode(self, file_path: Path) -> DecodedTable:
        if not file_path.exists():
            raise DecodeError(file_path.name, "file not found")

        try:
            workbook = load_workbook(file_path, read_only=True, data_only=True)
        except Exception as exc:
            raise DecodeError(file_path.name, f"could not open workbook: {exc}") from exc

        try:
            sheet = workbook.worksheets[0]
            if len(workbook.worksheets) > 1:
                logger.warning(
                    "%s has %d sheets; using '%s'",
                    file_path.name, len(workbook.worksheets), sheet.title,
                )

            headers: list[str] | None = None
            rows: list[RawRow] = []
            for values in sheet.iter_rows(values_only=True):
                if all(_is_blank(v) for v in values):
                    continue
                if headers is None:
                    headers = self._headers(values)
                    continue
                # read-only sheets may return short rows
                values = tuple(values) + (None,) * (len(headers) - len(values))
                rows.append(
                    {
                        header: ("" if value is None else value)
                        for header, value in zip(headers, values)
                        if header
                    }
                )
        finally:
            workbook.close()

        logger.info("Decoded %d rows from %s", len(rows), file_path.name)
        return DecodedTable(name=file_path.name, rows=rows)

    @staticmethod
    def _headers(values: tuple) -> list[str]:
        return ["" if v is None else str(v).strip() for v in values]
