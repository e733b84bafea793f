"""CSV decoder."""

import csv
import io
import logging
from pathlib import Path

from dispute_delta.exceptions import DecodeError
from dispute_delta.ingestion.base import DecodedTable, TabularDecoder
from dispute_delta.models.records import RawRow

logger = logging.getLogger(__name__)


class CsvDecoder(TabularDecoder):
    """Decodes comma-separated exports. Every cell is returned as text."""

    suffixes = (".csv", ".txt")

    def decode(self, file_path: Path) -> DecodedTable:
        if not file_path.exists():
            raise DecodeError(file_path.name, "file not found")

        try:
            text = file_path.read_text(encoding="utf-8-sig")  # Handle BOM
        except UnicodeDecodeError:
            logger.warning("%s is not valid UTF-8; falling back to latin-1", file_path.name)
            text = file_path.read_text(encoding="latin-1")

        try:
            reader = csv.DictReader(io.StringIO(text, newline=""))
            headers = [(h or "").strip() for h in (reader.fieldnames or [])]
            rows: list[RawRow] = []
            for record in reader:
                values = [record.get(name) for name in reader.fieldnames or []]
                if not any((v or "").strip() for v in values):
                    continue
                rows.append({h: (v if v is not None else "") for h, v in zip(headers, values)})
        except csv.Error as exc:
            raise DecodeError(file_path.name, str(exc)) from exc

        logger.info("Decoded %d rows from %s", len(rows), file_path.name)
        return DecodedTable(name=file_path.name, rows=rows)
