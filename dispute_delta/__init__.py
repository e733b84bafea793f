"""Dispute Delta: chargeback ledger delta detection and cross-referencing."""

__version__ = "0.1.0"
