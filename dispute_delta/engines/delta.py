"""Delta detection between two ledger snapshots."""

from collections.abc import Sequence

from dispute_delta.models.records import NOT_AVAILABLE, LedgerRecord


def find_anomalies(baseline: Sequence[LedgerRecord], updated: Sequence[LedgerRecord]) -> list[LedgerRecord]:
    """Return records of ``updated`` whose case reference is not in ``baseline``.

    Additions only: removals and field changes on known references are not
    reported. Records with an empty or "N/A" reference are skipped. Output
    keeps the order of ``updated``.
    """
    known = {record.reference_key for record in baseline}

    anomalies: list[LedgerRecord] = []
    for record in updated:
        ref = record.reference_key
        if not ref or ref == NOT_AVAILABLE:
            continue
        if ref not in known:
            anomalies.append(record)
    return anomalies
