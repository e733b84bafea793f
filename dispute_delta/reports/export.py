"""CSV and Excel export of enriched anomalies."""

import csv
from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font

from dispute_delta.models.records import LedgerRecord

SHEET_TITLE = "New Cases"

EXPORT_COLUMNS: list[tuple[str, str]] = [
    ("cycle", "Cycle"),
    ("merchant", "Merchant"),
    ("due_date", "Due Date"),
    ("case_reference", "Case Reference"),
    ("reason_code", "Reason Code"),
    ("reason_category", "Reason Category"),
    ("transaction_date", "Transaction Date"),
    ("transaction_amount", "Transaction Amount"),
    ("post_date", "Post Date"),
    ("dispute_amount", "Dispute Amount"),
    ("card_last4", "Card Last 4"),
    ("capture_match", "Capture Match"),
    ("capture_reference", "Capture Reference"),
    ("booking_address", "Booking Address"),
    ("transaction_address", "Transaction Address"),
    ("booking_match", "Booking Match"),
    ("folder_number", "Folder Number"),
    ("travel_date", "Travel Date"),
    ("origin", "Origin"),
    ("destination", "Destination"),
    ("airline_code", "Airline Code"),
    ("invoice_date", "Invoice Date"),
    ("return_date", "Return Date"),
    ("email", "Email"),
]


def _export_row(record: LedgerRecord) -> list:
    data = record.model_dump(mode="json")
    return ["" if data[name] is None else data[name] for name, _ in EXPORT_COLUMNS]


def write_csv(anomalies: Sequence[LedgerRecord], path: Path) -> int:
    """Write one row per anomaly. Returns the number of rows written."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow([label for _, label in EXPORT_COLUMNS])
        for record in anomalies:
            writer.writerow(_export_row(record))
    return len(anomalies)


def write_xlsx(anomalies: Sequence[LedgerRecord], path: Path) -> int:
    """Write anomalies to a single-sheet workbook with a frozen, bold header row."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = SHEET_TITLE
    sheet.append([label for _, label in EXPORT_COLUMNS])
    for cell in sheet[1]:
        cell.font = Font(bold=True)
    sheet.freeze_panes = "A2"

    for record in anomalies:
        sheet.append(_export_row(record))

    path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(path)
    return len(anomalies)
