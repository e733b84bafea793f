"""Canonical record models produced by normalization."""

from typing import Any

from pydantic import BaseModel, Field

from dispute_delta.models.enums import MatchStatus

RawRow = dict[str, Any]

NOT_AVAILABLE = "N/A"


class CaptureRecord(BaseModel):
    """A row from the payment-capture ledger."""

    amount: float
    last4: str
    reference: str = ""
    booking_address: str = ""
    transaction_address: str = ""


class BookingRecord(BaseModel):
    """A row from the booking/fulfilment ledger."""

    reference: str = ""
    folder_number: str = ""
    travel_date: str = ""
    origin: str = ""
    destination: str = ""
    airline_code: str = ""
    invoice_date: str = ""
    return_date: str = ""
    email: str = ""


class LedgerRecord(BaseModel):
    """A dispute/chargeback row after header resolution.

    ``transaction_amount`` and ``dispute_amount`` keep the raw cell value
    (number or formatted string); they are cleaned where they are used.
    Enrichment fields stay ``None`` until the matching stage reports MATCH.
    """

    cycle: str = NOT_AVAILABLE
    merchant: str = NOT_AVAILABLE
    due_date: str = NOT_AVAILABLE
    case_reference: str = NOT_AVAILABLE
    reason_code: str = NOT_AVAILABLE
    reason_category: str = NOT_AVAILABLE
    transaction_date: str = NOT_AVAILABLE
    transaction_amount: float | str = 0
    post_date: str = NOT_AVAILABLE
    dispute_amount: float | str = 0
    card_last4: str = NOT_AVAILABLE

    capture_match: MatchStatus = MatchStatus.NOT_APPLICABLE
    capture_reference: str | None = None
    booking_address: str | None = None
    transaction_address: str | None = None

    booking_match: MatchStatus = MatchStatus.NOT_APPLICABLE
    folder_number: str | None = None
    travel_date: str | None = None
    origin: str | None = None
    destination: str | None = None
    airline_code: str | None = None
    invoice_date: str | None = None
    return_date: str | None = None
    email: str | None = None

    # Decoded source row, for display only.
    raw_data: RawRow | None = Field(default=None, exclude=True, repr=False)

    @property
    def reference_key(self) -> str:
        return self.case_reference.strip()
