"""Comparison pipeline: normalize, diff, then cross-reference.

Runs the full flow for one baseline/updated pair:

1. Normalize both ledger snapshots
2. Find anomalies (records added in the updated snapshot)
3. Link anomalies to capture records, when capture data was supplied
4. Link captured references to bookings, when booking data was supplied
5. Summarize the anomalies
"""

import logging
from collections import Counter
from collections.abc import Sequence

from dispute_delta.config import DEFAULT_AMOUNT_TOLERANCE, DEFAULT_DATE_FORMAT
from dispute_delta.engines.cross_reference import CrossReferenceResolver
from dispute_delta.engines.delta import find_anomalies
from dispute_delta.models.enums import MatchStatus, SourceKind
from dispute_delta.models.records import LedgerRecord, RawRow
from dispute_delta.models.reports import DeltaReport, DeltaSummary
from dispute_delta.normalization.records import CAPTURE_REQUIRED, RecordNormalizer
from dispute_delta.normalization.values import clean_amount

logger = logging.getLogger(__name__)

BOOKING_WITHOUT_CAPTURE = "Booking data requires capture data to link records; booking data skipped"
CAPTURE_COLUMNS_MISSING = "No usable capture records; capture matching not applicable"
CAPTURE_ROWS_FILTERED = "Every capture row lacks an amount or a full card last 4; capture matching found nothing"


def summarize(anomalies: Sequence[LedgerRecord]) -> DeltaSummary:
    """Headline figures for a set of anomalies."""
    if not anomalies:
        return DeltaSummary()

    reasons = Counter(record.reason_code or "Unknown" for record in anomalies)
    # most_common keeps first-seen order among equal counts
    top_reason = reasons.most_common(1)[0][0]

    return DeltaSummary(
        anomaly_count=len(anomalies),
        total_exposure=round(sum(clean_amount(r.transaction_amount) for r in anomalies), 2),
        top_reason=top_reason,
        capture_matches=sum(1 for r in anomalies if r.capture_match == MatchStatus.MATCH),
        booking_matches=sum(1 for r in anomalies if r.booking_match == MatchStatus.MATCH),
    )


class DeltaPipeline:
    """Orchestrates normalization, delta detection and cross-referencing."""

    def __init__(
        self,
        amount_tolerance: float = DEFAULT_AMOUNT_TOLERANCE,
        date_format: str = DEFAULT_DATE_FORMAT,
    ):
        self.normalizer = RecordNormalizer(date_format=date_format)
        self.resolver = CrossReferenceResolver(amount_tolerance=amount_tolerance)

    def run(
        self,
        baseline_rows: Sequence[RawRow],
        updated_rows: Sequence[RawRow],
        capture_rows: Sequence[RawRow] | None = None,
        booking_rows: Sequence[RawRow] | None = None,
        baseline_name: str = "",
        updated_name: str = "",
        notices: Sequence[str] = (),
    ) -> DeltaReport:
        """Compare two ledger snapshots and enrich the anomalies.

        ``notices`` are caller warnings (such as an unreadable capture file)
        carried into the report ahead of the pipeline's own.
        """
        warnings: list[str] = list(notices)

        baseline = self.normalizer.normalize_ledger(baseline_rows)
        updated = self.normalizer.normalize_ledger(updated_rows)
        anomalies = find_anomalies(baseline, updated)
        logger.info(
            "Found %d anomalies (%d baseline records, %d updated records)",
            len(anomalies), len(baseline), len(updated),
        )

        if capture_rows is not None:
            captures = self.normalizer.normalize_capture(capture_rows)
            columns_resolved = bool(capture_rows) and not (
                self.normalizer.mappings[SourceKind.CAPTURE].missing(CAPTURE_REQUIRED)
            )
            if capture_rows and not captures:
                warnings.append(CAPTURE_ROWS_FILTERED if columns_resolved else CAPTURE_COLUMNS_MISSING)
            anomalies = self.resolver.link_captures(anomalies, captures, columns_resolved=columns_resolved)

            if booking_rows is not None:
                bookings = self.normalizer.normalize_booking(booking_rows)
                if booking_rows and not bookings:
                    warnings.append("No usable booking records; booking matching not applicable")
                anomalies = self.resolver.link_bookings(anomalies, bookings)
        elif booking_rows is not None:
            logger.warning(BOOKING_WITHOUT_CAPTURE)
            warnings.append(BOOKING_WITHOUT_CAPTURE)

        return DeltaReport(
            baseline_name=baseline_name,
            updated_name=updated_name,
            anomalies=anomalies,
            summary=summarize(anomalies),
            warnings=warnings,
        )
