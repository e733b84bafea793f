"""Record normalization: decoded rows -> canonical ledger, capture and booking records."""

import logging
from collections.abc import Sequence

from dispute_delta.config import DEFAULT_DATE_FORMAT
from dispute_delta.models.enums import SourceKind
from dispute_delta.models.records import (
    NOT_AVAILABLE,
    BookingRecord,
    CaptureRecord,
    LedgerRecord,
    RawRow,
)
from dispute_delta.normalization.headers import (
    ALIASES_BY_SOURCE,
    HeaderMapper,
    HeaderMapping,
)
from dispute_delta.normalization.values import (
    clean_amount,
    last_four,
    last_four_digits,
    resolve_calendar_date,
    to_text,
)

logger = logging.getLogger(__name__)

_LEDGER_TEXT_FIELDS = ("cycle", "merchant", "case_reference", "reason_code", "reason_category")
_LEDGER_DATE_FIELDS = ("due_date", "transaction_date", "post_date")
_LEDGER_AMOUNT_FIELDS = ("transaction_amount", "dispute_amount")

_BOOKING_TEXT_FIELDS = ("folder_number", "origin", "destination", "airline_code", "email")
_BOOKING_DATE_FIELDS = ("travel_date", "invoice_date", "return_date")

CAPTURE_REQUIRED = ("amount", "last4")
BOOKING_REQUIRED = ("reference",)


class RecordNormalizer:
    """Applies header resolution and value cleaning to whole tables.

    The header mapping for each table comes from its first row only; the
    last mapping computed per source is kept in ``mappings`` for reporting.
    """

    def __init__(self, date_format: str = DEFAULT_DATE_FORMAT, mapper: HeaderMapper | None = None):
        self.date_format = date_format
        self.mapper = mapper or HeaderMapper()
        self.mappings: dict[SourceKind, HeaderMapping] = {}

    def resolve(self, source: SourceKind, rows: Sequence[RawRow]) -> HeaderMapping:
        """Resolve the header mapping for ``source`` from the first row."""
        sample = rows[0] if rows else {}
        mapping = self.mapper.resolve(sample, ALIASES_BY_SOURCE[source])
        self.mappings[source] = mapping
        return mapping

    def normalize_ledger(self, rows: Sequence[RawRow]) -> list[LedgerRecord]:
        """Normalize dispute ledger rows. Unresolved columns become "N/A" (or 0 for amounts)."""
        if not rows:
            return []
        mapping = self.resolve(SourceKind.LEDGER, rows)
        logger.debug("Ledger header mapping: %s", mapping.columns)

        records: list[LedgerRecord] = []
        for row in rows:
            values: dict = {"raw_data": dict(row)}
            for name in _LEDGER_TEXT_FIELDS:
                header = mapping.get(name)
                values[name] = to_text(row.get(header)) if header else NOT_AVAILABLE
            for name in _LEDGER_DATE_FIELDS:
                header = mapping.get(name)
                values[name] = (
                    resolve_calendar_date(row.get(header), self.date_format)
                    if header
                    else NOT_AVAILABLE
                )
            for name in _LEDGER_AMOUNT_FIELDS:
                header = mapping.get(name)
                values[name] = self._raw_amount(row.get(header)) if header else 0

            values["card_last4"] = self._card_last4(row, mapping.get("card_last4"))
            records.append(LedgerRecord(**values))
        return records

    def normalize_capture(self, rows: Sequence[RawRow]) -> list[CaptureRecord]:
        """Normalize payment-capture rows, dropping rows without an amount or a full last 4."""
        if not rows:
            return []
        mapping = self.resolve(SourceKind.CAPTURE, rows)
        missing = mapping.missing(CAPTURE_REQUIRED)
        if missing:
            logger.warning(
                "Could not find required capture columns (%s); skipping capture data",
                ", ".join(missing),
            )
            return []

        amount_header = mapping.get("amount")
        last4_header = mapping.get("last4")
        reference_header = mapping.get("reference")

        records: list[CaptureRecord] = []
        dropped = 0
        for row in rows:
            amount = clean_amount(row.get(amount_header))
            last4 = last_four_digits(row.get(last4_header))
            if amount == 0 or len(last4) != 4:
                dropped += 1
                continue
            records.append(
                CaptureRecord(
                    amount=amount,
                    last4=last4,
                    reference=to_text(row.get(reference_header)).strip() if reference_header else "",
                    booking_address=self._optional_text(row, mapping.get("booking_address")),
                    transaction_address=self._optional_text(row, mapping.get("transaction_address")),
                )
            )
        if dropped:
            logger.info("Dropped %d capture rows without a usable amount or card last 4", dropped)
        return records

    def normalize_booking(self, rows: Sequence[RawRow]) -> list[BookingRecord]:
        """Normalize booking rows. Rows with an empty reference are kept."""
        if not rows:
            return []
        mapping = self.resolve(SourceKind.BOOKING, rows)
        if mapping.missing(BOOKING_REQUIRED):
            logger.warning("Could not find required booking column: reference; skipping booking data")
            return []

        reference_header = mapping.get("reference")
        records: list[BookingRecord] = []
        for row in rows:
            values: dict = {"reference": to_text(row.get(reference_header)).strip()}
            for name in _BOOKING_TEXT_FIELDS:
                values[name] = self._optional_text(row, mapping.get(name))
            for name in _BOOKING_DATE_FIELDS:
                header = mapping.get(name)
                values[name] = resolve_calendar_date(row.get(header), self.date_format) if header else ""
            records.append(BookingRecord(**values))
        return records

    @staticmethod
    def _raw_amount(value: object) -> float | str:
        """Keep numbers as numbers and everything else as text; cleaning happens downstream."""
        if isinstance(value, bool):
            return str(value)
        if isinstance(value, (int, float)):
            return float(value)
        return to_text(value)

    @staticmethod
    def _card_last4(row: RawRow, header: str | None) -> str:
        """Last 4 characters of the card cell, or "N/A" when fewer than 4 are present."""
        if not header:
            return NOT_AVAILABLE
        card = last_four(row.get(header)).strip()
        return card if len(card) == 4 else NOT_AVAILABLE

    @staticmethod
    def _optional_text(row: RawRow, header: str | None) -> str:
        if not header:
            return ""
        return to_text(row.get(header) or "")
