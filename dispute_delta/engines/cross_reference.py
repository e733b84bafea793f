"""Cross-reference engine: chain anomalies through the capture and booking ledgers.

Stage A links an anomaly to a capture record by card last 4 and amount.
Stage B links the capture reference found in Stage A to a booking record.

Both stages are greedy: candidates are scanned in the order given and the
first one that qualifies wins, even if a later one is a closer fit. Two
anomalies may therefore link to the same capture record.
"""

import logging
from collections.abc import Sequence

from dispute_delta.config import DEFAULT_AMOUNT_TOLERANCE
from dispute_delta.models.enums import MatchStatus
from dispute_delta.models.records import (
    NOT_AVAILABLE,
    BookingRecord,
    CaptureRecord,
    LedgerRecord,
)
from dispute_delta.normalization.values import clean_amount, clean_identifier

logger = logging.getLogger(__name__)


class CrossReferenceResolver:
    """Enriches anomaly records with capture and booking details."""

    def __init__(self, amount_tolerance: float = DEFAULT_AMOUNT_TOLERANCE):
        self.amount_tolerance = amount_tolerance

    def link_captures(
        self,
        anomalies: Sequence[LedgerRecord],
        captures: Sequence[CaptureRecord],
        columns_resolved: bool = False,
    ) -> list[LedgerRecord]:
        """Stage A: match each anomaly to at most one capture record.

        An empty ``captures`` makes every record NOT_APPLICABLE, unless
        ``columns_resolved`` says the capture table was readable and its rows
        were all filtered out; then eligible records are NO_MATCH.

        Returns new records; the inputs are left untouched.
        """
        if not captures and not columns_resolved:
            logger.info("No capture records; capture match not applicable")
            return [
                record.model_copy(update={"capture_match": MatchStatus.NOT_APPLICABLE})
                for record in anomalies
            ]

        linked = [self._link_capture(record, captures) for record in anomalies]
        logger.info(
            "Capture linkage: %d of %d anomalies matched",
            sum(1 for r in linked if r.capture_match == MatchStatus.MATCH),
            len(linked),
        )
        return linked

    def link_bookings(
        self, anomalies: Sequence[LedgerRecord], bookings: Sequence[BookingRecord]
    ) -> list[LedgerRecord]:
        """Stage B: follow each capture reference to at most one booking record.

        Only records whose Stage A result is MATCH with a non-empty reference
        are attempted; all others are NOT_APPLICABLE.
        """
        linked = [self._link_booking(record, bookings) for record in anomalies]
        logger.info(
            "Booking linkage: %d of %d anomalies matched",
            sum(1 for r in linked if r.booking_match == MatchStatus.MATCH),
            len(linked),
        )
        return linked

    def _link_capture(self, record: LedgerRecord, captures: Sequence[CaptureRecord]) -> LedgerRecord:
        amount = clean_amount(record.transaction_amount)
        last4 = str(record.card_last4).strip()

        if amount == 0 or len(last4) < 4 or last4 == NOT_AVAILABLE:
            return record.model_copy(update={"capture_match": MatchStatus.NOT_APPLICABLE})

        match = self.first_capture_match(amount, last4, captures)
        if match is None:
            return record.model_copy(update={"capture_match": MatchStatus.NO_MATCH})

        return record.model_copy(
            update={
                "capture_match": MatchStatus.MATCH,
                "capture_reference": match.reference,
                "booking_address": match.booking_address,
                "transaction_address": match.transaction_address,
            }
        )

    def first_capture_match(
        self, amount: float, last4: str, captures: Sequence[CaptureRecord]
    ) -> CaptureRecord | None:
        """First capture in list order with the same last 4 and an amount within tolerance.

        Deliberately not the nearest amount: list order alone breaks ties.
        """
        for capture in captures:
            if capture.last4 == last4 and abs(capture.amount - amount) < self.amount_tolerance:
                return capture
        return None

    def _link_booking(self, record: LedgerRecord, bookings: Sequence[BookingRecord]) -> LedgerRecord:
        if record.capture_match != MatchStatus.MATCH or not record.capture_reference:
            return record.model_copy(update={"booking_match": MatchStatus.NOT_APPLICABLE})
        if not bookings:
            return record.model_copy(update={"booking_match": MatchStatus.NOT_APPLICABLE})

        match = self.first_booking_match(record.capture_reference, bookings)
        if match is None:
            return record.model_copy(update={"booking_match": MatchStatus.NO_MATCH})

        return record.model_copy(
            update={
                "booking_match": MatchStatus.MATCH,
                "folder_number": match.folder_number,
                "travel_date": match.travel_date,
                "origin": match.origin,
                "destination": match.destination,
                "airline_code": match.airline_code,
                "invoice_date": match.invoice_date,
                "return_date": match.return_date,
                "email": match.email,
            }
        )

    @staticmethod
    def first_booking_match(reference: str, bookings: Sequence[BookingRecord]) -> BookingRecord | None:
        """First booking whose normalized reference equals ``reference`` normalized."""
        target = clean_identifier(reference)
        for booking in bookings:
            if clean_identifier(booking.reference) == target:
                return booking
        return None
