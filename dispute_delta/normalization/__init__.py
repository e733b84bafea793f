"""Normalization layer: header resolution, value cleaning and canonical records."""

from dispute_delta.normalization.headers import HeaderMapper, HeaderMapping
from dispute_delta.normalization.records import RecordNormalizer
from dispute_delta.normalization.values import (
    clean_amount,
    clean_identifier,
    resolve_calendar_date,
)

__all__ = [
    "HeaderMapper",
    "HeaderMapping",
    "RecordNormalizer",
    "clean_amount",
    "clean_identifier",
    "resolve_calendar_date",
]
