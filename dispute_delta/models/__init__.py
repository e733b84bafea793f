"""Data models for Dispute Delta."""

from dispute_delta.models.enums import MatchStatus, SourceKind
from dispute_delta.models.records import (
    NOT_AVAILABLE,
    BookingRecord,
    CaptureRecord,
    LedgerRecord,
    RawRow,
)
from dispute_delta.models.reports import DeltaReport, DeltaSummary

__all__ = [
    "BookingRecord",
    "CaptureRecord",
    "DeltaReport",
    "DeltaSummary",
    "LedgerRecord",
    "MatchStatus",
    "NOT_AVAILABLE",
    "RawRow",
    "SourceKind",
]
