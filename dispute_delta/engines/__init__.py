"""Comparison engines."""

from dispute_delta.engines.cross_reference import CrossReferenceResolver
from dispute_delta.engines.delta import find_anomalies
from dispute_delta.engines.pipeline import DeltaPipeline, summarize

__all__ = [
    "CrossReferenceResolver",
    "DeltaPipeline",
    "find_anomalies",
    "summarize",
]
