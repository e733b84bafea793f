"""Header resolution: map inconsistently named spreadsheet columns to canonical fields.

Each canonical field carries an ordered list of accepted aliases. A field is
resolved by running three tiers in order, each tier trying every alias
before the next tier is consulted:

1. exact, case-insensitive
2. normalized (lowercase, alphanumerics only)
3. substring of the normalized header (last resort, prone to false hits)

The mapping is computed once from a sample row and applied to the whole table.
"""

import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field

from dispute_delta.models.enums import SourceKind

_NON_ALNUM = re.compile(r"[^a-z0-9]")

LEDGER_ALIASES: dict[str, list[str]] = {
    "cycle": ["cycle", "cycle no", "bill cycle"],
    "merchant": ["merchant", "merchant name", "merchant descriptor"],
    "due_date": ["due date", "reply by", "response date", "date due"],
    "case_reference": ["case reference", "case ref", "caseid", "reference", "case no", "case number"],
    "reason_code": ["reason code", "reason", "code", "dispute reason"],
    "reason_category": ["reason category", "category", "reason desc", "description"],
    "transaction_date": ["transaction date", "trans date", "txn date", "date"],
    "transaction_amount": ["transaction amount", "trans amount", "txn amount", "amount"],
    "post_date": ["date post", "post date", "posting date", "process date"],
    "dispute_amount": ["dispute amount", "disputed amount", "claim amount", "chargeback amount", "cb amount"],
    "card_last4": ["card last 4", "last 4", "account number", "card number", "last four", "card no"],
}

CAPTURE_ALIASES: dict[str, list[str]] = {
    "amount": ["Amount(Inc. Surcharge)", "Amount (Inc. Surcharge)", "Amount"],
    "last4": ["last 4 digits", "last 4", "card last 4"],
    "reference": ["Reference", "Ref", "Transaction ID", "Txn Ref"],
    "booking_address": ["Booking Address", "Billing Address"],
    "transaction_address": ["Transaction Address", "Delivery Address"],
}

BOOKING_ALIASES: dict[str, list[str]] = {
    "reference": ["Inet Ref", "InetRef", "Inet Reference", "inet", "reference", "ref no", "ref"],
    "folder_number": ["Folder Number", "Folder No", "Folder", "folder", "file no"],
    "travel_date": ["Travel Date", "TravelDate", "Trav Date", "date of travel"],
    "origin": ["Origin", "Org", "From", "Departure", "Dep", "Sector"],
    "destination": ["Destination", "Dest", "To", "Arrival", "Arr"],
    "airline_code": ["Airline Code", "Airline", "Carrier", "Air"],
    "invoice_date": ["Invoice date", "Invoice Date", "Inv Date", "InvDate", "Bill Date", "Doc Date"],
    "return_date": ["Return Date", "Ret Date", "Return"],
    "email": ["Email ID", "Email", "Email Address", "Mail", "E-mail"],
}

ALIASES_BY_SOURCE: dict[SourceKind, dict[str, list[str]]] = {
    SourceKind.LEDGER: LEDGER_ALIASES,
    SourceKind.CAPTURE: CAPTURE_ALIASES,
    SourceKind.BOOKING: BOOKING_ALIASES,
}


def normalize_header(value: str) -> str:
    """Lowercase and drop everything but ``a-z0-9``."""
    return _NON_ALNUM.sub("", str(value).strip().lower())


def match_exact(header: str, alias: str) -> bool:
    return header.strip().lower() == alias.strip().lower()


def match_normalized(header: str, alias: str) -> bool:
    target = normalize_header(alias)
    return bool(target) and normalize_header(header) == target


def match_substring(header: str, alias: str) -> bool:
    target = normalize_header(alias)
    return bool(target) and target in normalize_header(header)


MatchTier = Callable[[str, str], bool]

RESOLUTION_TIERS: tuple[MatchTier, ...] = (match_exact, match_normalized, match_substring)


@dataclass
class HeaderMapping:
    """Resolved raw header per canonical field (``None`` when unresolved)."""

    columns: dict[str, str | None] = field(default_factory=dict)

    def get(self, canonical: str) -> str | None:
        return self.columns.get(canonical)

    def missing(self, required: Iterable[str] | None = None) -> list[str]:
        """Canonical fields that did not resolve, optionally limited to ``required``."""
        names = self.columns if required is None else required
        return [name for name in names if self.columns.get(name) is None]


class HeaderMapper:
    """Resolves canonical fields against the headers of a sample row."""

    def __init__(self, tiers: tuple[MatchTier, ...] = RESOLUTION_TIERS):
        self.tiers = tiers

    def resolve(
        self, sample: Mapping[str, object], aliases: Mapping[str, list[str]]
    ) -> HeaderMapping:
        headers = [str(key) for key in sample.keys()]
        return HeaderMapping(
            columns={
                canonical: self.find_header(headers, candidates)
                for canonical, candidates in aliases.items()
            }
        )

    def find_header(self, headers: list[str], aliases: list[str]) -> str | None:
        """Return the first header accepted by the earliest tier, or ``None``."""
        for tier in self.tiers:
            for alias in aliases:
                for header in headers:
                    if tier(header, alias):
                        return header
        return None
