"""Enumerations for Dispute Delta."""

from enum import StrEnum


class MatchStatus(StrEnum):
    MATCH = "MATCH"
    NO_MATCH = "NO_MATCH"
    NOT_APPLICABLE = "N/A"


class SourceKind(StrEnum):
    LEDGER = "LEDGER"
    CAPTURE = "CAPTURE"
    BOOKING = "BOOKING"
